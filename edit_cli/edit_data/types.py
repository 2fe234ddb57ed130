"""Data structures shared across edit-data modules."""

from __future__ import annotations

from dataclasses import dataclass, field
from collections.abc import Mapping, Sequence
from typing import Any

GET_REFERENCED_TABLES_METHOD = "edit/getReferencedTables"


@dataclass(frozen=True, slots=True)
class ReferencedTableInfo:
    """One foreign-key relationship from the table under edit to another table.

    ``source_columns[i]`` pairs with ``referenced_columns[i]``; order matters
    for composite keys.
    """

    schema_name: str
    table_name: str
    fully_qualified_name: str
    foreign_key_name: str
    source_columns: tuple[str, ...] = ()
    referenced_columns: tuple[str, ...] = ()

    def __post_init__(self) -> None:
        if len(self.source_columns) != len(self.referenced_columns):
            raise ValueError(
                f"Foreign key '{self.foreign_key_name}' maps {len(self.source_columns)} source "
                f"column(s) to {len(self.referenced_columns)} referenced column(s)."
            )

    @property
    def column_pairs(self) -> tuple[tuple[str, str], ...]:
        return tuple(zip(self.source_columns, self.referenced_columns))

    def to_wire(self) -> dict[str, Any]:
        return {
            "schemaName": self.schema_name,
            "tableName": self.table_name,
            "fullyQualifiedName": self.fully_qualified_name,
            "foreignKeyName": self.foreign_key_name,
            "sourceColumns": list(self.source_columns),
            "referencedColumns": list(self.referenced_columns),
        }


@dataclass(frozen=True, slots=True)
class EditColumnMetadata:
    """Editing metadata for a single column of the table under edit."""

    name: str
    ordinal: int
    escaped_name: str | None = None
    is_key: bool = False
    is_calculated: bool = False
    is_identity: bool = False

    @property
    def is_editable(self) -> bool:
        return not (self.is_calculated or self.is_identity)


@dataclass(frozen=True, slots=True)
class EditTableMetadata:
    """Table metadata produced during session setup.

    ``referenced_tables`` stays ``None`` when the producer never populated it;
    callers of the resolver never see that distinction.
    """

    escaped_multipart_name: str
    columns: tuple[EditColumnMetadata, ...] = ()
    is_memory_optimized: bool = False
    referenced_tables: Sequence[ReferencedTableInfo] | None = None

    @property
    def key_columns(self) -> tuple[EditColumnMetadata, ...]:
        return tuple(column for column in self.columns if column.is_key)


@dataclass(frozen=True, slots=True)
class SessionOperationParams:
    """Parameters common to every request addressed to an edit session."""

    owner_uri: str | None

    @classmethod
    def from_wire(cls, payload: Mapping[str, Any] | None) -> SessionOperationParams:
        if not isinstance(payload, Mapping):
            return cls(owner_uri=None)
        return cls(owner_uri=payload.get("ownerUri"))


@dataclass(frozen=True, slots=True)
class GetReferencedTablesParams(SessionOperationParams):
    """Parameters for ``edit/getReferencedTables``."""


@dataclass(frozen=True, slots=True)
class GetReferencedTablesResult:
    """Tables referenced by foreign keys on the table under edit."""

    referenced_tables: tuple[ReferencedTableInfo, ...] = field(default_factory=tuple)

    def to_wire(self) -> dict[str, Any]:
        return {"referencedTables": [info.to_wire() for info in self.referenced_tables]}
