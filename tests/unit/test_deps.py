"""Unit tests for the authentication dependencies."""

import pytest
from fastapi import HTTPException

from tables_service.api.http.deps import extract_bearer_token, require_role, require_scope
from tables_service.core.models.principal import Principal


def _principal(**kwargs) -> Principal:
    return Principal(subject="alice", issuer="tables-service", **kwargs)


class TestExtractBearerToken:
    def test_returns_token(self, request_factory):
        request = request_factory({"Authorization": "Bearer abc.def.ghi"})

        assert extract_bearer_token(request) == "abc.def.ghi"

    def test_scheme_is_case_insensitive(self, request_factory):
        request = request_factory({"Authorization": "bearer abc.def.ghi"})

        assert extract_bearer_token(request) == "abc.def.ghi"

    @pytest.mark.parametrize("header", [None, "Basic dXNlcjpwYXNz", "Bearer", "Bearer   "])
    def test_rejects_missing_or_malformed_header(self, request_factory, header):
        headers = {"Authorization": header} if header is not None else {}

        with pytest.raises(HTTPException) as exc_info:
            extract_bearer_token(request_factory(headers))

        assert exc_info.value.status_code == 401
        assert exc_info.value.headers == {"WWW-Authenticate": "Bearer"}


class TestAuthorizationChecks:
    async def test_require_scope_passes(self):
        check = require_scope("tables:write")

        await check(principal=_principal(scopes=["tables:write"]))

    async def test_require_scope_forbids(self):
        check = require_scope("tables:write")

        with pytest.raises(HTTPException) as exc_info:
            await check(principal=_principal(scopes=["tables:read"]))

        assert exc_info.value.status_code == 403

    async def test_require_role_forbids(self):
        check = require_role("admin")

        with pytest.raises(HTTPException) as exc_info:
            await check(principal=_principal(roles=["viewer"]))

        assert exc_info.value.status_code == 403
