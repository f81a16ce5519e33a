"""Table service: persistence operations behind the /tables resource."""

from loguru import logger
from sqlalchemy.exc import IntegrityError

from tables_service.core.errors import TableConflictError, TableNotFoundError
from tables_service.core.pagination import Page, PageRequest
from tables_service.core.services.database.db_session import DbSessionService
from tables_service.entities.table import (
    CreateTableRequest,
    Table,
    TableRepository,
    UpdateTableRequest,
)


class TableService:
    """CRUD operations for tables.

    Every call opens its own session; each mutation commits as a single
    transaction. Instances hold no per-request state and are shared across
    concurrent requests.
    """

    def __init__(self, database_service: DbSessionService) -> None:
        self._db = database_service

    def create_table(self, payload: CreateTableRequest) -> Table:
        try:
            with self._db.session_scope() as session:
                repository = TableRepository(session)
                table_id = payload.id if payload.id is not None else repository.next_id()
                if repository.exists(table_id):
                    raise TableConflictError(table_id)

                fields = payload.model_dump(exclude={"id"})
                created = repository.create(Table(id=table_id, **fields))
        except IntegrityError as exc:
            # A concurrent insert claimed the same identifier
            raise TableConflictError(table_id) from exc

        logger.info("Created table {}", created.id)
        return created

    def update_table(self, table_id: int, payload: UpdateTableRequest) -> Table:
        with self._db.session_scope() as session:
            updated = TableRepository(session).update(table_id, payload.changes())
            if updated is None:
                raise TableNotFoundError(table_id)

        logger.info("Updated table {}", table_id)
        return updated

    def find_table(self, table_id: int) -> Table:
        with self._db.session_scope() as session:
            table = TableRepository(session).get(table_id)
        if table is None:
            raise TableNotFoundError(table_id)
        return table

    def find_all_tables(self, page_request: PageRequest) -> Page[Table]:
        with self._db.session_scope() as session:
            repository = TableRepository(session)
            total = repository.count()
            items = repository.list_page(page_request.offset, page_request.size)
        return Page[Table].of(items, page_request, total)

    def delete_table(self, table_id: int) -> int:
        with self._db.session_scope() as session:
            if not TableRepository(session).delete(table_id):
                raise TableNotFoundError(table_id)

        logger.info("Deleted table {}", table_id)
        return table_id
