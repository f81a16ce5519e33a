"""Core services exports."""

from .database.db_session import DbSessionService
from .jwt.jwks import JWKSCache, JWKSCacheInMemory, JwksService
from .jwt.jwt_gen import JwtGeneratorService
from .jwt.jwt_verify import JwtVerificationService
from .table_service import TableService

__all__ = [
    # JWT Services
    "JWKSCache",
    "JWKSCacheInMemory",
    "JwksService",
    "JwtGeneratorService",
    "JwtVerificationService",
    # Database Service
    "DbSessionService",
    # Domain Services
    "TableService",
]
