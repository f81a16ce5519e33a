import time
from typing import Any

from authlib.common.security import generate_token
from authlib.jose import jwt

from tables_service.runtime.config.config_data import ConfigData


class JwtGeneratorService:
    """Mints tokens the verification service accepts as locally issued."""

    def __init__(self, config: ConfigData) -> None:
        self._jwt_config = config.jwt

    def generate_jwt(
        self,
        subject: str,
        claims: dict[str, Any] | None = None,
        expires_in_seconds: int = 3600,
        issuer: str | None = None,
        audience: str | list[str] | None = None,
        algorithm: str = "HS256",
        secret: str | None = None,
        kid: str | None = None,
    ) -> str:
        """Generate a signed JWT.

        Args:
            subject: Subject (sub) claim
            claims: Additional claims to include in the token
            expires_in_seconds: Token lifetime in seconds (default: 1 hour)
            issuer: Issuer (iss) claim, defaults to ``jwt.gen_issuer``
            audience: Audience (aud) claim, defaults to ``jwt.audiences``
            algorithm: Signing algorithm (default: HS256)
            secret: Signing key, defaults to ``jwt.signing_secret``
            kid: Optional Key ID for the JWT header

        Returns:
            Signed JWT token string

        Raises:
            ValueError: If no secret is available or the algorithm is not allowed
        """
        cfg = self._jwt_config
        secret = secret or cfg.signing_secret
        if not secret:
            raise ValueError("JWT signing secret not configured")
        if algorithm not in cfg.allowed_algorithms:
            raise ValueError(f"Algorithm {algorithm} not allowed")

        now = int(time.time())
        payload: dict[str, Any] = {
            "iss": issuer or cfg.gen_issuer,
            "sub": subject,
            "aud": audience or cfg.audiences,
            "iat": now,
            "nbf": now,
            "exp": now + expires_in_seconds,
            "jti": generate_token(16),
        }
        if claims:
            payload.update(claims)

        header: dict[str, Any] = {"alg": algorithm, "typ": "JWT"}
        if kid:
            header["kid"] = kid

        token = jwt.encode(header, payload, secret)
        return token.decode("utf-8") if isinstance(token, bytes) else token
