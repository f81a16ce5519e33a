"""Identity contract shared by persistence records.

Records carry an externally assigned primary key: nothing here generates
identifiers, the application sets ``id`` before the record is persisted.
Equality, hashing and textual rendering of a record derive from that
identifier alone, via the helpers below.
"""

from collections.abc import Hashable
from typing import Any, Protocol, TypeVar, runtime_checkable

ID = TypeVar("ID", bound=Hashable, covariant=True)

# Range of a signed 64-bit SQL INTEGER column or bind parameter
SQL_INTEGER_MAX = 2**63 - 1
SQL_INTEGER_MIN = -(2**63)


@runtime_checkable
class HasIdentifier(Protocol[ID]):
    """Anything exposing a primary key of type ``ID`` (``None`` while transient)."""

    @property
    def id(self) -> ID | None: ...


def same_identity(left: HasIdentifier[Any], right: Any) -> bool:
    """True when both records are of the same type and share a non-null identifier."""
    if left is right:
        return True
    if type(left) is not type(right):
        return False
    return left.id is not None and left.id == right.id


def identity_hash(entity: HasIdentifier[Any]) -> int:
    """Hash from the identifier; transient records fall back to object identity."""
    if entity.id is None:
        return object.__hash__(entity)
    return hash((type(entity).__name__, entity.id))


def identity_repr(entity: HasIdentifier[Any]) -> str:
    return f"{type(entity).__name__}(id={entity.id!r})"
