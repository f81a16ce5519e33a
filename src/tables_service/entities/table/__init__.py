"""Entity package: Table."""

from .entity import CreateTableRequest, Table, UpdateTableRequest
from .repository import TableRepository
from .table import TableEntity

__all__ = [
    "CreateTableRequest",
    "Table",
    "TableEntity",
    "TableRepository",
    "UpdateTableRequest",
]
