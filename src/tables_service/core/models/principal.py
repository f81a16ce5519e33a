"""Authenticated identity attached to a request."""

from typing import Any

from pydantic import BaseModel, Field


class Principal(BaseModel):
    """Claims of a verified bearer token."""

    subject: str = Field(description="Subject (sub) claim")
    issuer: str = Field(description="Issuer (iss) claim")
    audience: list[str] = Field(default_factory=list)
    expires_at: int | None = Field(default=None, description="Expiry (exp) timestamp")
    scopes: list[str] = Field(default_factory=list)
    roles: list[str] = Field(default_factory=list)
    email: str | None = None
    claims: dict[str, Any] = Field(default_factory=dict, description="All verified claims")

    def has_scope(self, scope: str) -> bool:
        return scope in self.scopes
