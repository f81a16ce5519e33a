"""Table repository for data access operations."""

from typing import Any

from sqlalchemy import func
from sqlmodel import Session, select

from tables_service.entities._base import SQL_INTEGER_MAX

from .entity import Table
from .table import TableEntity


class TableRepository:
    """Data-access layer for tables.

    The repository never commits; the caller owns the transaction.
    """

    def __init__(self, session: Session) -> None:
        self._session = session

    def get(self, table_id: int) -> Table | None:
        row = self._session.get(TableEntity, table_id)
        if row is None:
            return None
        return Table.model_validate(row, from_attributes=True)

    def exists(self, table_id: int) -> bool:
        return self._session.get(TableEntity, table_id) is not None

    def next_id(self) -> int:
        """Identifier following the highest one currently stored."""
        highest = self._session.exec(select(func.max(TableEntity.id))).one()
        return (highest or 0) + 1

    def create(self, table: Table) -> Table:
        row = TableEntity(**table.model_dump())
        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Table.model_validate(row, from_attributes=True)

    def update(self, table_id: int, changes: dict[str, Any]) -> Table | None:
        row = self._session.get(TableEntity, table_id)
        if row is None:
            return None

        for field, value in changes.items():
            setattr(row, field, value)

        self._session.add(row)
        self._session.flush()
        self._session.refresh(row)
        return Table.model_validate(row, from_attributes=True)

    def delete(self, table_id: int) -> bool:
        row = self._session.get(TableEntity, table_id)
        if row is None:
            return False
        self._session.delete(row)
        self._session.flush()
        return True

    def count(self) -> int:
        return self._session.exec(select(func.count()).select_from(TableEntity)).one()

    def list_page(self, offset: int, limit: int) -> list[Table]:
        if offset > SQL_INTEGER_MAX:
            # Far past the last row; the offset cannot be bound as an SQL integer
            return []
        statement = (
            select(TableEntity).order_by(TableEntity.id).offset(offset).limit(limit)
        )
        rows = self._session.exec(statement).all()
        return [Table.model_validate(row, from_attributes=True) for row in rows]
