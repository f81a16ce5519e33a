"""End-to-end tests of the /tables resource through the HTTP surface."""

import pytest
from fastapi.testclient import TestClient
from sqlmodel import Session

from tables_service.entities.table import TableEntity
from tables_service.runtime.config.config_data import SecurityConfig

pytestmark = pytest.mark.integration


def _seed(client: TestClient, headers: dict[str, str], count: int) -> None:
    for index in range(1, count + 1):
        response = client.post("/tables", json={"name": f"table-{index}"}, headers=headers)
        assert response.status_code == 201


class TestTableScenarios:
    def test_create_then_read(self, client: TestClient, auth_headers):
        created = client.post("/tables", json={"name": "alpha"}, headers=auth_headers)

        assert created.status_code == 201
        assert created.json() == {"id": 1, "name": "alpha"}

        found = client.get("/tables/1", headers=auth_headers)
        assert found.status_code == 200
        assert found.json() == {"id": 1, "name": "alpha"}

    def test_update(self, client: TestClient, auth_headers):
        client.post("/tables", json={"name": "alpha"}, headers=auth_headers)

        response = client.put("/tables/1", json={"name": "beta"}, headers=auth_headers)

        assert response.status_code == 200
        assert response.json() == {"id": 1, "name": "beta"}

    def test_missing_read(self, client: TestClient, auth_headers):
        response = client.get("/tables/999", headers=auth_headers)

        assert response.status_code == 404
        assert response.json() == {
            "status": 404,
            "title": "Not Found",
            "detail": "Table 999 not found",
        }

    def test_list_pagination(self, client: TestClient, auth_headers):
        _seed(client, auth_headers, 25)

        response = client.get("/tables?page=1&size=10", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert [table["id"] for table in body["content"]] == list(range(11, 21))
        assert body["page"] == 1
        assert body["size"] == 10
        assert body["totalElements"] == 25
        assert body["totalPages"] == 3

    def test_delete_twice(self, client: TestClient, auth_headers):
        client.post("/tables", json={"name": "alpha"}, headers=auth_headers)

        first = client.delete("/tables/1", headers=auth_headers)
        second = client.delete("/tables/1", headers=auth_headers)

        assert first.status_code == 200
        assert first.json() == 1
        assert second.status_code == 404

    def test_unauthenticated(self, client: TestClient):
        response = client.get("/tables")

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"
        assert response.json()["title"] == "Unauthorized"


class TestTableApi:
    def test_create_with_all_fields(self, client: TestClient, auth_headers):
        payload = {"id": 12, "name": "window", "description": "by the window", "capacity": 4}

        response = client.post("/tables", json=payload, headers=auth_headers)

        assert response.status_code == 201
        assert response.json() == payload

    def test_create_duplicate_identifier(self, client: TestClient, auth_headers):
        client.post("/tables", json={"id": 3, "name": "alpha"}, headers=auth_headers)

        response = client.post("/tables", json={"id": 3, "name": "beta"}, headers=auth_headers)

        assert response.status_code == 409
        assert response.json()["detail"] == "Table 3 already exists"

    def test_update_missing(self, client: TestClient, auth_headers):
        response = client.put("/tables/5", json={"name": "beta"}, headers=auth_headers)

        assert response.status_code == 404

    def test_update_ignores_body_identifier(self, client: TestClient, auth_headers):
        client.post("/tables", json={"name": "alpha"}, headers=auth_headers)

        response = client.put(
            "/tables/1", json={"id": 77, "name": "beta"}, headers=auth_headers
        )

        assert response.json() == {"id": 1, "name": "beta"}
        assert client.get("/tables/77", headers=auth_headers).status_code == 404

    @pytest.mark.parametrize(
        "payload",
        [{}, {"name": ""}, {"name": 5}, {"name": "alpha", "capacity": -1}],
    )
    def test_invalid_body(self, client: TestClient, auth_headers, payload):
        response = client.post("/tables", json=payload, headers=auth_headers)

        assert response.status_code == 400
        body = response.json()
        assert body["status"] == 400
        assert body["errors"]

    def test_non_integer_identifier(self, client: TestClient, auth_headers):
        response = client.get("/tables/abc", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "path.table_id"

    def test_list_clamps_out_of_range_paging(self, client: TestClient, auth_headers):
        _seed(client, auth_headers, 3)

        response = client.get("/tables?page=-1&size=0", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["page"] == 0
        assert body["size"] == 20
        assert len(body["content"]) == 3

    def test_list_empty(self, client: TestClient, auth_headers):
        response = client.get("/tables", headers=auth_headers)

        assert response.json() == {
            "content": [],
            "page": 0,
            "size": 20,
            "totalElements": 0,
            "totalPages": 0,
        }

    def test_invalid_token(self, client: TestClient):
        response = client.get("/tables", headers={"Authorization": "Bearer not.a.token"})

        assert response.status_code == 401
        assert response.headers["WWW-Authenticate"] == "Bearer"

    def test_expired_token(self, client: TestClient, token_factory):
        token = token_factory(expires_in_seconds=-3600)

        response = client.get("/tables", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 401


class TestIntegerBounds:
    @pytest.mark.parametrize("method", ["get", "delete"])
    def test_oversized_path_identifier(self, client: TestClient, auth_headers, method):
        response = client.request(method, f"/tables/{2**64}", headers=auth_headers)

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "path.table_id"

    def test_oversized_path_identifier_on_update(self, client: TestClient, auth_headers):
        response = client.put(f"/tables/{2**64}", json={"name": "beta"}, headers=auth_headers)

        assert response.status_code == 400

    def test_oversized_body_identifier(self, client: TestClient, auth_headers):
        response = client.post(
            "/tables", json={"id": 99999999999999999999, "name": "x"}, headers=auth_headers
        )

        assert response.status_code == 400
        assert response.json()["errors"][0]["field"] == "body.id"

    def test_largest_identifier_is_accepted(self, client: TestClient, auth_headers):
        response = client.post("/tables", json={"id": 2**63 - 1, "name": "x"}, headers=auth_headers)

        assert response.status_code == 201
        assert client.get(f"/tables/{2**63 - 1}", headers=auth_headers).status_code == 200

    def test_page_far_past_the_end_is_empty(self, client: TestClient, auth_headers):
        _seed(client, auth_headers, 2)

        response = client.get("/tables?page=999999999999999999&size=20", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["content"] == []
        assert body["totalElements"] == 2
        assert body["totalPages"] == 1

    def test_page_beyond_integer_range(self, client: TestClient, auth_headers):
        response = client.get(f"/tables?page={2**64}", headers=auth_headers)

        assert response.status_code == 400


class TestLargePages:
    def test_size_above_one_thousand_is_kept(
        self, client: TestClient, auth_headers, session: Session
    ):
        session.add_all(TableEntity(id=index, name=f"table-{index}") for index in range(1, 1101))
        session.commit()

        response = client.get("/tables?page=0&size=2000", headers=auth_headers)

        assert response.status_code == 200
        body = response.json()
        assert body["size"] == 2000
        assert body["totalElements"] == 1100
        assert body["totalPages"] == 1
        assert len(body["content"]) == 1100


class TestRequiredScope:
    @pytest.fixture
    def scoped_client(self, client_factory) -> TestClient:
        return client_factory(security=SecurityConfig(required_scope="tables:write"))

    def test_missing_scope_is_forbidden(self, scoped_client: TestClient, auth_headers):
        response = scoped_client.get("/tables", headers=auth_headers)

        assert response.status_code == 403
        assert response.json()["detail"] == "Missing required scope: tables:write"

    def test_scope_grants_access(self, scoped_client: TestClient, token_factory):
        token = token_factory(claims={"scope": "tables:read tables:write"})

        response = scoped_client.get("/tables", headers={"Authorization": f"Bearer {token}"})

        assert response.status_code == 200
