from abc import ABC, abstractmethod
from typing import Any

import httpx
from cachetools import TTLCache
from fastapi import HTTPException
from loguru import logger

from tables_service.runtime.config.config_data import OIDCProviderConfig


class JWKSCache(ABC):
    @abstractmethod
    def get_jwks(self, jwks_url: str) -> dict[str, Any]:
        """
        Get the cached JWKS for ``jwks_url``.

        Returns:
            JWKS dictionary, or an empty dict on a cache miss
        """
        raise NotImplementedError

    @abstractmethod
    def set_jwks(self, jwks_url: str, jwks: dict[str, Any]) -> None:
        raise NotImplementedError

    @abstractmethod
    def clear_jwks_cache(self) -> None:
        raise NotImplementedError


class JWKSCacheInMemory(JWKSCache):
    def __init__(self, ttl_seconds: int = 3600, maxsize: int = 10) -> None:
        self._cache: TTLCache[str, dict[str, Any]] = TTLCache(maxsize=maxsize, ttl=ttl_seconds)

    def get_jwks(self, jwks_url: str) -> dict[str, Any]:
        return self._cache.get(jwks_url, {})

    def set_jwks(self, jwks_url: str, jwks: dict[str, Any]) -> None:
        self._cache[jwks_url] = jwks

    def clear_jwks_cache(self) -> None:
        self._cache.clear()


class JwksService:
    """Fetches and caches the signing keys published by external issuers."""

    def __init__(self, cache: JWKSCache, timeout: float = 5.0) -> None:
        self._cache = cache
        self._timeout = timeout

    async def fetch_jwks(self, issuer: OIDCProviderConfig) -> dict[str, Any]:
        jwks_url = issuer.jwks_uri

        if not jwks_url:
            raise HTTPException(
                status_code=401, detail="Issuer has no JWKS URI configured"
            )

        jwks = self._cache.get_jwks(jwks_url)
        if jwks:
            return jwks

        try:
            async with httpx.AsyncClient(timeout=self._timeout) as client:
                resp = await client.get(jwks_url)
                resp.raise_for_status()
                jwks = resp.json()
        except (httpx.HTTPError, ValueError) as exc:
            logger.bind(jwks_url=jwks_url).error("Failed to fetch JWKS: {}", exc)
            raise HTTPException(
                status_code=401, detail="Unable to obtain issuer signing keys"
            ) from exc

        self._cache.set_jwks(jwks_url, jwks)
        return jwks
