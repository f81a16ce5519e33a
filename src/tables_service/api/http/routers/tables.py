"""Table API router with CRUD operations."""

from typing import Annotated

from fastapi import APIRouter, Body, Depends, Path, Query, status

from tables_service.api.http.deps import get_current_principal, require_role, require_scope
from tables_service.core.pagination import Page, create_page_request
from tables_service.core.services import TableService
from tables_service.entities._base import SQL_INTEGER_MAX, SQL_INTEGER_MIN
from tables_service.entities.table import CreateTableRequest, Table, UpdateTableRequest
from tables_service.runtime.config.config_data import PaginationConfig, SecurityConfig

API_TAG = "Tables"

TableId = Annotated[
    int,
    Path(
        ge=SQL_INTEGER_MIN,
        le=SQL_INTEGER_MAX,
        description="Unique identifier of the table",
    ),
]


class TableApi:
    """CRUD endpoints for tables under ``/tables``.

    The service is handed in at construction; ``router`` carries the route table
    and is mounted by the application factory. Every route requires an
    authenticated principal, plus the configured scope or role when set.
    """

    def __init__(
        self,
        table_service: TableService,
        pagination: PaginationConfig | None = None,
        security: SecurityConfig | None = None,
    ) -> None:
        self._table_service = table_service
        self._pagination = pagination or PaginationConfig()

        security = security or SecurityConfig()
        dependencies = [Depends(get_current_principal)]
        if security.required_scope:
            dependencies.append(Depends(require_scope(security.required_scope)))
        if security.required_role:
            dependencies.append(Depends(require_role(security.required_role)))

        self.router = APIRouter(prefix="/tables", tags=[API_TAG], dependencies=dependencies)
        self.router.add_api_route(
            "",
            self.create_table,
            methods=["POST"],
            response_model=Table,
            response_model_exclude_none=True,
            status_code=status.HTTP_201_CREATED,
            summary="Create a new Table.",
        )
        self.router.add_api_route(
            "/{table_id}",
            self.update_table,
            methods=["PUT"],
            response_model=Table,
            response_model_exclude_none=True,
            summary="Update an existing Table.",
        )
        self.router.add_api_route(
            "/{table_id}",
            self.find_table,
            methods=["GET"],
            response_model=Table,
            response_model_exclude_none=True,
            summary="Find an existing Table.",
        )
        self.router.add_api_route(
            "",
            self.find_all_tables,
            methods=["GET"],
            response_model=Page[Table],
            response_model_exclude_none=True,
            summary="Find all Tables.",
        )
        self.router.add_api_route(
            "/{table_id}",
            self.delete_table,
            methods=["DELETE"],
            response_model=int,
            summary="Delete an existing Table.",
        )

    def create_table(self, payload: CreateTableRequest = Body(...)) -> Table:
        """Create a new table; the persisted view is returned with 201."""
        return self._table_service.create_table(payload)

    def update_table(
        self,
        table_id: TableId,
        payload: UpdateTableRequest = Body(...),
    ) -> Table:
        """Update an existing table. The id in the path wins over one in the body."""
        return self._table_service.update_table(table_id, payload)

    def find_table(self, table_id: TableId) -> Table:
        """Retrieve the details of an existing table."""
        return self._table_service.find_table(table_id)

    def find_all_tables(
        self,
        page: int | None = Query(
            default=None,
            ge=SQL_INTEGER_MIN,
            le=SQL_INTEGER_MAX,
            description="Zero-based page index",
        ),
        size: int | None = Query(
            default=None, ge=SQL_INTEGER_MIN, le=SQL_INTEGER_MAX, description="Page size"
        ),
    ) -> Page[Table]:
        """List tables one page at a time; out-of-range paging falls back to defaults."""
        page_request = create_page_request(page, size, self._pagination)
        return self._table_service.find_all_tables(page_request)

    def delete_table(self, table_id: TableId) -> int:
        """Delete an existing table and return its identifier."""
        return self._table_service.delete_table(table_id)
