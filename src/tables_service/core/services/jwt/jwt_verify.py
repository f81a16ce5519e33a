"""JWT verification service."""

import time
from typing import Any

from authlib.jose import JoseError, JsonWebKey, jwt
from fastapi import HTTPException
from loguru import logger

from tables_service.core.models.principal import Principal
from tables_service.core.services.jwt.jwks import JwksService
from tables_service.core.services.jwt.jwt_utils import (
    as_list,
    create_principal,
    preview_jwt,
)
from tables_service.runtime.config.config_data import ConfigData, OIDCProviderConfig


class JwtVerificationService:
    """Verifies bearer tokens and turns them into a Principal.

    Tokens from an issuer listed under ``oidc.providers`` are checked against
    that issuer's JWKS. Anything else must be signed with the locally configured
    ``jwt.signing_secret`` and carry our own issuer.
    """

    def __init__(self, config: ConfigData, jwks_service: JwksService):
        self._jwt_config = config.jwt
        self._providers = {
            p.issuer.rstrip("/"): p for p in config.oidc.providers.values() if p.enabled
        }
        self._jwks_service = jwks_service

    def lookup_provider(self, issuer: str | None) -> OIDCProviderConfig | None:
        if not issuer:
            return None
        return self._providers.get(issuer.rstrip("/"))

    async def verify_jwt(self, token: str) -> Principal:
        cfg = self._jwt_config
        pv = preview_jwt(token)

        if pv.alg not in cfg.allowed_algorithms:
            raise HTTPException(status_code=401, detail="Disallowed JWT algorithm")
        if not pv.iss:
            raise HTTPException(status_code=401, detail="Missing iss claim")

        provider_cfg = self.lookup_provider(pv.iss)
        if provider_cfg is None:
            if pv.iss != cfg.gen_issuer:
                raise HTTPException(status_code=401, detail=f"Unknown issuer: {pv.iss}")
            if not cfg.signing_secret:
                raise HTTPException(status_code=500, detail="JWT signing secret not configured")
            verification_key: Any = cfg.signing_secret
            expected_issuers = [cfg.gen_issuer]
            aud_values = list(cfg.audiences)
        else:
            jwks = await self._jwks_service.fetch_jwks(provider_cfg)
            jwk_set = (
                {"keys": [k for k in jwks.get("keys", []) if k.get("kid") == pv.kid]}
                if pv.kid
                else jwks
            )
            if pv.kid and not jwk_set.get("keys"):
                raise HTTPException(status_code=401, detail=f"No JWK matches kid={pv.kid}")
            verification_key = JsonWebKey.import_key_set(jwk_set)
            # the lookup already matched the issuer modulo a trailing slash
            expected_issuers = [pv.claims["iss"]]
            aud_values = list(cfg.audiences) or as_list(provider_cfg.client_id)

        if not aud_values:
            raise HTTPException(status_code=401, detail="No expected audience configured")

        claims_options = {
            "iss": {"essential": True, "values": expected_issuers},
            "aud": {"essential": True, "values": aud_values},
            "exp": {"essential": True},
        }

        try:
            logger.debug(
                "Verifying JWT from issuer {} with expected audience {}",
                expected_issuers,
                aud_values,
            )
            claims = jwt.decode(token, verification_key, claims_options=claims_options)
            claims.validate(leeway=cfg.clock_skew)
        except (JoseError, ValueError) as exc:
            raise HTTPException(status_code=401, detail=f"JWT error: {exc}") from exc

        now = int(time.time())
        iat = claims.get("iat")
        if iat is not None and int(iat) > now + cfg.clock_skew:
            raise HTTPException(status_code=401, detail="Invalid iat with skew")

        if not claims.get("sub"):
            raise HTTPException(status_code=401, detail="Missing sub claim")

        return create_principal(dict(claims))
