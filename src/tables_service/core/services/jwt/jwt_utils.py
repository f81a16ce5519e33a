import base64
import json
from dataclasses import dataclass
from typing import Any, Final

from fastapi import HTTPException

from tables_service.core.models.principal import Principal

# ---------------- tunables ----------------
MAX_JWT_CHARS: Final = 4096
MAX_SEGMENT_CHARS: Final = 4096
MAX_HEADER_BYTES: Final = 8 * 1024
MAX_PAYLOAD_BYTES: Final = 64 * 1024
_ALLOWED: Final = frozenset(
    "ABCDEFGHIJKLMNOPQRSTUVWXYZabcdefghijklmnopqrstuvwxyz0123456789-_."
)  # no '='


def _prefilter_compact_jwt(token: str) -> tuple[str, str, str]:
    if not token or len(token) > MAX_JWT_CHARS:
        raise HTTPException(status_code=401, detail="Invalid JWT size")
    if not set(token) <= _ALLOWED:
        raise HTTPException(status_code=401, detail="Invalid JWT characters")
    parts = token.split(".")
    if len(parts) != 3 or not all(parts):
        raise HTTPException(status_code=401, detail="Invalid JWT format")
    if any(len(part) > MAX_SEGMENT_CHARS for part in parts):
        raise HTTPException(status_code=401, detail="Invalid JWT segment size")
    h, p, s = parts
    return h, p, s


def _b64url_decode_unpadded(seg: str, what: str, max_bytes: int) -> bytes:
    pad = (-len(seg)) % 4
    try:
        raw = base64.urlsafe_b64decode((seg + "=" * pad).encode("ascii"))
    except ValueError as e:
        raise HTTPException(
            status_code=401, detail=f"Invalid base64url in {what}"
        ) from e
    if len(raw) > max_bytes:
        raise HTTPException(status_code=401, detail=f"{what} too large")
    return raw


def _decode_json_object(raw: bytes, what: str) -> dict[str, Any]:
    try:
        obj = json.loads(raw.decode("utf-8"))
    except UnicodeDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Non-UTF8 {what}") from e
    except json.JSONDecodeError as e:
        raise HTTPException(status_code=401, detail=f"Invalid JSON in {what}") from e
    if not isinstance(obj, dict):
        raise HTTPException(status_code=401, detail=f"{what} must be a JSON object")
    return obj


@dataclass(frozen=True)
class JwtPreview:
    header: dict[str, Any]
    claims: dict[str, Any]
    alg: str | None
    kid: str | None
    iss: str | None


def preview_jwt(token: str) -> JwtPreview:
    """Split and decode header+payload exactly once, without verifying anything."""
    h_seg, p_seg, _ = _prefilter_compact_jwt(token)
    h_raw = _b64url_decode_unpadded(h_seg, "JWT header", MAX_HEADER_BYTES)
    p_raw = _b64url_decode_unpadded(p_seg, "JWT payload", MAX_PAYLOAD_BYTES)
    header = _decode_json_object(h_raw, "JWT header")
    claims = _decode_json_object(p_raw, "JWT payload")
    iss = claims.get("iss")
    iss = iss.rstrip("/") if isinstance(iss, str) and iss else None

    return JwtPreview(
        header=header,
        claims=claims,
        alg=header.get("alg"),
        kid=header.get("kid"),
        iss=iss,
    )


def as_list(value: Any) -> list:
    if value is None:
        return []
    return [value] if isinstance(value, str) else list(value)


def extract_scopes(claims: dict[str, Any]) -> list[str]:
    """Extract scopes from 'scope', 'scp' or 'scopes', deduplicated in first-seen order."""
    scopes: list[str] = []

    def add_scope_items(items):
        for item in items:
            if item not in scopes:
                scopes.append(item)

    if "scope" in claims:
        add_scope_items(str(claims["scope"]).split())

    if "scp" in claims:
        value = claims["scp"]
        if isinstance(value, str):
            add_scope_items(value.split())
        elif isinstance(value, (list, tuple)):
            add_scope_items(value)

    if isinstance(claims.get("scopes"), (list, tuple)):
        add_scope_items(claims["scopes"])

    return scopes


def extract_roles(claims: dict[str, Any]) -> list[str]:
    """Extract roles from the common role claims and Keycloak's realm_access."""
    roles: list[str] = []

    for role_claim in ("role", "roles", "groups"):
        value = claims.get(role_claim)
        if isinstance(value, list):
            roles.extend(str(v) for v in value)
        elif isinstance(value, str):
            roles.extend(value.split())

    realm_access = claims.get("realm_access")
    if isinstance(realm_access, dict) and isinstance(realm_access.get("roles"), list):
        roles.extend(realm_access["roles"])

    return list(dict.fromkeys(roles))


def create_principal(claims: dict[str, Any]) -> Principal:
    """Build a Principal from verified JWT claims."""
    exp = claims.get("exp")
    return Principal(
        subject=str(claims["sub"]),
        issuer=str(claims.get("iss") or ""),
        audience=[str(a) for a in as_list(claims.get("aud"))],
        expires_at=int(exp) if exp is not None else None,
        scopes=extract_scopes(claims),
        roles=extract_roles(claims),
        email=claims.get("email"),
        claims=dict(claims),
    )
