"""Table database model."""

from typing import Any

from sqlmodel import Field, SQLModel

from tables_service.entities._base import identity_hash, identity_repr, same_identity
from tables_service.entities.table.entity import DESCRIPTION_MAX_LENGTH, NAME_MAX_LENGTH


class TableEntity(SQLModel, table=True):
    """Database persistence model for tables.

    The primary key is never generated by the database; the service assigns it
    before the row is added to a session.
    """

    __tablename__ = "tables"

    id: int | None = Field(
        default=None,
        primary_key=True,
        nullable=False,
        sa_column_kwargs={"autoincrement": False},
    )
    name: str = Field(max_length=NAME_MAX_LENGTH, nullable=False)
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    capacity: int | None = None

    def __eq__(self, other: Any) -> bool:
        return same_identity(self, other)

    def __hash__(self) -> int:
        return identity_hash(self)

    def __repr__(self) -> str:
        return identity_repr(self)

    __str__ = __repr__
