"""Persistence records and their resource views.

Each entity has its own package containing:
- entity.py: resource views and request payloads
- table.py: database persistence model
- repository.py: data access layer
"""

from .table import CreateTableRequest, Table, TableEntity, TableRepository, UpdateTableRequest

__all__ = [
    "CreateTableRequest",
    "Table",
    "TableEntity",
    "TableRepository",
    "UpdateTableRequest",
]
