"""FastAPI dependency implementations."""

from __future__ import annotations

from fastapi import Depends, HTTPException, Request

from tables_service.api.http.app_data import ApplicationDependencies
from tables_service.core.models.principal import Principal
from tables_service.core.services import DbSessionService, JwtVerificationService

_BEARER_CHALLENGE = {"WWW-Authenticate": "Bearer"}


def get_app_dependencies(request: Request) -> ApplicationDependencies:
    return request.app.state.app_dependencies


def get_database_service(request: Request) -> DbSessionService:
    """Get the database service instance."""
    return get_app_dependencies(request).database_service


def get_jwt_verify_service(request: Request) -> JwtVerificationService:
    """Get the JWT verification service instance."""
    return get_app_dependencies(request).jwt_verify_service


def extract_bearer_token(request: Request) -> str:
    auth_header = request.headers.get("Authorization")
    if not auth_header:
        raise HTTPException(
            status_code=401, detail="Missing Bearer token", headers=_BEARER_CHALLENGE
        )

    scheme, _, token = auth_header.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        raise HTTPException(
            status_code=401, detail="Malformed Authorization header", headers=_BEARER_CHALLENGE
        )
    return token.strip()


async def get_current_principal(
    request: Request,
    jwt_verify: JwtVerificationService = Depends(get_jwt_verify_service),
) -> Principal:
    """Authenticate the request using a Bearer token."""
    token = extract_bearer_token(request)
    try:
        principal = await jwt_verify.verify_jwt(token)
    except HTTPException as exc:
        if exc.status_code == 401:
            raise HTTPException(
                status_code=401, detail=exc.detail, headers=_BEARER_CHALLENGE
            ) from exc
        raise

    request.state.principal = principal
    return principal


def require_scope(required_scope: str):
    """Create a dependency that requires a specific scope for the authenticated principal."""

    async def dep(principal: Principal = Depends(get_current_principal)) -> None:
        if not principal.has_scope(required_scope):
            raise HTTPException(
                status_code=403, detail=f"Missing required scope: {required_scope}"
            )

    return dep


def require_role(required_role: str):
    """Create a dependency that requires a specific role for the authenticated principal."""

    async def dep(principal: Principal = Depends(get_current_principal)) -> None:
        if required_role not in principal.roles:
            raise HTTPException(
                status_code=403, detail=f"Missing required role: {required_role}"
            )

    return dep
