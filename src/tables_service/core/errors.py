"""Domain errors raised by services and translated to HTTP by the application."""

from http import HTTPStatus


class ServiceError(Exception):
    """Base class for errors that map onto an HTTP status."""

    status_code: int = HTTPStatus.INTERNAL_SERVER_ERROR

    def __init__(self, detail: str) -> None:
        super().__init__(detail)
        self.detail = detail

    @property
    def title(self) -> str:
        return HTTPStatus(self.status_code).phrase


class TableNotFoundError(ServiceError):
    status_code = HTTPStatus.NOT_FOUND

    def __init__(self, table_id: int) -> None:
        super().__init__(f"Table {table_id} not found")
        self.table_id = table_id


class TableConflictError(ServiceError):
    status_code = HTTPStatus.CONFLICT

    def __init__(self, table_id: int) -> None:
        super().__init__(f"Table {table_id} already exists")
        self.table_id = table_id


__all__ = ["ServiceError", "TableConflictError", "TableNotFoundError"]
