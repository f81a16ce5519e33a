"""Pydantic models for parsing the config.yaml configuration file.

This module contains Pydantic models that correspond to the structure of config.yaml.
These models handle validation and type conversion of the YAML configuration data.
"""

from __future__ import annotations

import os
from typing import Literal

from loguru import logger
from pydantic import BaseModel, Field, computed_field


class CORSConfig(BaseModel):
    """CORS configuration for the application."""

    origins: list[str] = Field(
        default=["http://localhost:3000", "http://localhost:3001"]
    )
    allow_credentials: bool = True
    allow_methods: list[str] = Field(
        default=["GET", "POST", "PUT", "DELETE", "OPTIONS"]
    )
    allow_headers: list[str] = Field(default=["*"])


class OIDCProviderConfig(BaseModel):
    """External token issuer whose signing keys are published as a JWKS."""

    issuer: str = Field(description="OIDC issuer URL")
    jwks_uri: str = Field(description="JWKS endpoint for JWT validation")
    client_id: str | None = Field(
        default=None, description="Client ID, used as fallback audience"
    )
    enabled: bool = Field(default=True, description="Accept tokens from this issuer")


class OIDCConfig(BaseModel):
    """OIDC configuration model."""

    providers: dict[str, OIDCProviderConfig] = Field(
        default_factory=dict, description="OIDC provider configurations"
    )


class JWTConfig(BaseModel):
    """JWT validation configuration."""

    allowed_algorithms: list[str] = Field(
        default_factory=lambda: ["HS256", "RS256", "RS512", "ES256", "ES384"],
        description="JWT algorithms allowed for token validation",
    )
    gen_issuer: str = Field(
        default="tables-service", description="Issuer name to use when generating tokens"
    )
    audiences: list[str] = Field(
        default_factory=lambda: ["api://tables"],
        description="JWT audiences that this API accepts",
    )
    signing_secret: str | None = Field(
        default=None, description="Shared secret for locally issued tokens"
    )
    clock_skew: int = Field(default=60, description="Clock skew tolerance in seconds")
    jwks_cache_ttl: int = Field(default=3600, description="JWKS cache lifetime in seconds")


class SecurityConfig(BaseModel):
    """Authorization settings applied to the resource routes."""

    required_scope: str | None = Field(
        default=None,
        description="Scope every caller must carry; unset means any authenticated principal",
    )
    required_role: str | None = Field(
        default=None,
        description="Role every caller must carry; unset means any authenticated principal",
    )


class PaginationConfig(BaseModel):
    """Defaults used when normalizing list requests."""

    default_page: int = Field(default=0, ge=0)
    default_size: int = Field(default=20, ge=1)
    max_size: int | None = Field(
        default=None, ge=1, description="Upper bound on page size; unset means no cap"
    )


class LoggingConfig(BaseModel):
    """Logging configuration model."""

    level: str = Field(default="INFO", description="Logging level")
    format: Literal["json", "plain"] = Field(default="json", description="Log format")
    file: str | None = Field(default=None, description="Log file path")
    max_size_mb: int = Field(default=10, description="Maximum log file size in MB")
    backup_count: int = Field(
        default=5, description="Number of backup log files to keep"
    )


class DatabaseConfig(BaseModel):
    """Database configuration model."""

    url: str = Field(
        default="sqlite:///./tables.db",
        description="Database connection URL",
    )
    pool_size: int = Field(default=20, description="Connection pool size")
    max_overflow: int = Field(default=10, description="Maximum pool overflow")
    pool_timeout: int = Field(default=30, description="Pool timeout in seconds")
    pool_recycle: int = Field(default=1800, description="Pool recycle time in seconds")
    echo: bool = Field(default=False, description="Log emitted SQL")
    create_tables: bool = Field(
        default=True, description="Create missing tables on application startup"
    )
    password_env_var: str | None = Field(
        default=None,
        description="Environment variable name containing database password",
    )
    password_file: str | None = Field(
        default=None,
        description="Path to file containing database password",
    )

    @computed_field
    @property
    def password(self) -> str | None:
        """Resolve the password from a mounted secret file or an environment variable.

        Falls back to whatever password is embedded in ``url``.
        """
        if self.password_file:
            try:
                with open(self.password_file) as f:
                    return f.read().strip()
            except OSError as e:
                raise ValueError("Failed to read database password from file.") from e
        if self.password_env_var:
            password = os.getenv(self.password_env_var)
            if password is None:
                raise ValueError(f"Environment variable {self.password_env_var} not set")
            return password

        from sqlalchemy.engine import make_url

        return make_url(self.url).password

    @computed_field
    @property
    def connection_string(self) -> str:
        """Construct the database connection string with the resolved password."""
        from sqlalchemy.engine import make_url

        base_url = make_url(self.url)
        resolved = self.password
        if resolved and resolved != base_url.password:
            if base_url.password:
                logger.warning(
                    "Database password from secret source differs from the one in the URL. "
                    "Using the secret source."
                )
            base_url = base_url.set(password=resolved)
        return base_url.render_as_string(hide_password=False)

    @property
    def is_sqlite(self) -> bool:
        return self.url.startswith("sqlite")


class AppConfig(BaseModel):
    """Application configuration model."""

    environment: Literal["development", "production", "test"] = Field(
        default="development", description="Application environment"
    )
    host: str = Field(default="localhost", description="Application host")
    port: int = Field(default=8000, description="Application port")
    cors: CORSConfig = Field(
        default_factory=CORSConfig, description="CORS configuration"
    )

    @property
    def base_url(self) -> str:
        """Construct the base URL from host and port."""
        scheme = "https" if self.environment == "production" else "http"
        return f"{scheme}://{self.host}:{self.port}"


class ConfigData(BaseModel):
    """Root of the application configuration."""

    app: AppConfig = Field(default_factory=AppConfig)
    database: DatabaseConfig = Field(default_factory=DatabaseConfig)
    jwt: JWTConfig = Field(default_factory=JWTConfig)
    oidc: OIDCConfig = Field(default_factory=OIDCConfig)
    security: SecurityConfig = Field(default_factory=SecurityConfig)
    pagination: PaginationConfig = Field(default_factory=PaginationConfig)
    logging: LoggingConfig = Field(default_factory=LoggingConfig)
