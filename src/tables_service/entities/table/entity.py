"""Entity: Table."""

from pydantic import BaseModel, ConfigDict, Field

from tables_service.entities._base import SQL_INTEGER_MAX

NAME_MAX_LENGTH = 255
DESCRIPTION_MAX_LENGTH = 1024


class Table(BaseModel):
    """Resource view of a table as returned over HTTP.

    This is a 1:1 projection of a ``TableEntity`` row.
    """

    model_config = ConfigDict(from_attributes=True)

    id: int = Field(description="Unique identifier of the table")
    name: str = Field(description="Name")
    description: str | None = Field(default=None, description="Free-form description")
    capacity: int | None = Field(default=None, description="Number of seats")


class CreateTableRequest(BaseModel):
    """Payload accepted when creating a table.

    ``id`` may be supplied by the caller; when omitted the service assigns the
    next free identifier.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: int | None = Field(
        default=None, ge=1, le=SQL_INTEGER_MAX, description="Externally assigned identifier"
    )
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="Name")
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    capacity: int | None = Field(default=None, ge=1, le=SQL_INTEGER_MAX)


class UpdateTableRequest(BaseModel):
    """Payload accepted when updating a table.

    The identifier in the request path is authoritative; an ``id`` carried in
    the body is accepted and ignored.
    """

    model_config = ConfigDict(str_strip_whitespace=True)

    id: int | None = Field(default=None, description="Ignored; the path id wins")
    name: str = Field(min_length=1, max_length=NAME_MAX_LENGTH, description="Name")
    description: str | None = Field(default=None, max_length=DESCRIPTION_MAX_LENGTH)
    capacity: int | None = Field(default=None, ge=1, le=SQL_INTEGER_MAX)

    def changes(self) -> dict:
        """Writable fields present in the payload, keyed by column name."""
        return self.model_dump(exclude_unset=True, exclude={"id"})
