"""Load edit sessions from a YAML snapshot file.

A snapshot stands in for the session setup that normally happens when a
table is opened for editing: each entry registers one session and, when a
``metadata`` block is present, initializes it with that table metadata.
Entries without ``metadata`` are registered uninitialized.
"""

from __future__ import annotations

from collections.abc import Mapping, Sequence
from pathlib import Path
from typing import Any

import yaml

from edit_cli.shared.exceptions import SnapshotError

from .registry import SessionRegistry
from .session import EditSession
from .types import EditColumnMetadata, EditTableMetadata, ReferencedTableInfo

SNAPSHOT_VERSION = 1


def load_sessions(path: str | Path, registry: SessionRegistry) -> list[EditSession]:
    """Parse ``path`` and register every session it describes."""

    snapshot_path = Path(path).expanduser()
    if not snapshot_path.exists():
        raise SnapshotError(f"Session snapshot not found: {snapshot_path}")
    try:
        data = yaml.safe_load(snapshot_path.read_text(encoding="utf-8")) or {}
    except yaml.YAMLError as exc:
        raise SnapshotError(f"Session snapshot {snapshot_path} is not valid YAML: {exc}") from exc

    sessions = parse_sessions(data)
    for session in sessions:
        registry.register(session)
    return sessions


def parse_sessions(data: Any) -> list[EditSession]:
    if not isinstance(data, Mapping):
        raise SnapshotError("Session snapshot must define a mapping root object.")
    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported session snapshot version {version}; expected version={SNAPSHOT_VERSION}.")

    entries = data.get("sessions") or []
    if not _is_list(entries):
        raise SnapshotError("'sessions' must be a list of session entries.")

    sessions: list[EditSession] = []
    seen: set[str] = set()
    for entry in entries:
        session = _parse_session(entry)
        if session.owner_uri in seen:
            raise SnapshotError(f"Duplicate session for owner URI '{session.owner_uri}'.")
        seen.add(session.owner_uri)
        sessions.append(session)
    return sessions


def _parse_session(entry: Any) -> EditSession:
    if not isinstance(entry, Mapping):
        raise SnapshotError("Each session entry must be a mapping of properties.")
    owner_uri = entry.get("owner_uri")
    if not isinstance(owner_uri, str) or not owner_uri:
        raise SnapshotError("Session entry requires a non-empty 'owner_uri'.")

    session = EditSession(owner_uri=owner_uri)
    metadata = entry.get("metadata")
    if metadata is not None:
        session.initialize(_parse_metadata(owner_uri, metadata))
    return session


def _parse_metadata(owner_uri: str, raw: Any) -> EditTableMetadata:
    if not isinstance(raw, Mapping):
        raise SnapshotError(f"Metadata for session '{owner_uri}' must be a mapping.")

    columns_raw = raw.get("columns")
    if columns_raw is None:
        columns_raw = []
    if not _is_list(columns_raw):
        raise SnapshotError(f"'columns' for session '{owner_uri}' must be a list.")
    columns = tuple(
        _parse_column(owner_uri, ordinal, column) for ordinal, column in enumerate(columns_raw)
    )

    referenced_raw = raw.get("referenced_tables")
    referenced_tables: tuple[ReferencedTableInfo, ...] | None = None
    if referenced_raw is not None:
        if not _is_list(referenced_raw):
            raise SnapshotError(f"'referenced_tables' for session '{owner_uri}' must be a list.")
        referenced_tables = tuple(_parse_referenced_table(owner_uri, item) for item in referenced_raw)

    escaped_name = raw.get("escaped_multipart_name")
    if escaped_name is not None:
        escaped_name = _require_str(owner_uri, "escaped_multipart_name", escaped_name)
    memory_optimized = _require_flag(owner_uri, "is_memory_optimized", raw.get("is_memory_optimized", False))
    return EditTableMetadata(
        escaped_multipart_name=escaped_name or "",
        columns=columns,
        is_memory_optimized=memory_optimized,
        referenced_tables=referenced_tables,
    )


def _parse_column(owner_uri: str, ordinal: int, raw: Any) -> EditColumnMetadata:
    if isinstance(raw, str):
        return EditColumnMetadata(name=raw, ordinal=ordinal)
    if not isinstance(raw, Mapping) or "name" not in raw:
        raise SnapshotError(f"Column entries for session '{owner_uri}' need a 'name'.")
    escaped_name = raw.get("escaped_name")
    return EditColumnMetadata(
        name=_require_str(owner_uri, "name", raw["name"]),
        ordinal=ordinal,
        escaped_name=None if escaped_name is None else _require_str(owner_uri, "escaped_name", escaped_name),
        is_key=_require_flag(owner_uri, "is_key", raw.get("is_key", False)),
        is_calculated=_require_flag(owner_uri, "is_calculated", raw.get("is_calculated", False)),
        is_identity=_require_flag(owner_uri, "is_identity", raw.get("is_identity", False)),
    )


def _parse_referenced_table(owner_uri: str, raw: Any) -> ReferencedTableInfo:
    if not isinstance(raw, Mapping):
        raise SnapshotError(f"Referenced table entries for session '{owner_uri}' must be mappings.")
    try:
        schema_name = _require_str(owner_uri, "schema_name", raw["schema_name"])
        table_name = _require_str(owner_uri, "table_name", raw["table_name"])
        foreign_key_name = _require_str(owner_uri, "foreign_key_name", raw["foreign_key_name"])
    except KeyError as exc:
        raise SnapshotError(f"Referenced table for session '{owner_uri}' missing field: {exc}") from exc

    # The producer owns the display name; schema.table is used only when it is absent.
    fully_qualified_name = raw.get("fully_qualified_name")
    if fully_qualified_name is None:
        fully_qualified_name = f"{schema_name}.{table_name}"
    try:
        return ReferencedTableInfo(
            schema_name=schema_name,
            table_name=table_name,
            fully_qualified_name=_require_str(owner_uri, "fully_qualified_name", fully_qualified_name),
            foreign_key_name=foreign_key_name,
            source_columns=_column_list(owner_uri, "source_columns", raw.get("source_columns")),
            referenced_columns=_column_list(owner_uri, "referenced_columns", raw.get("referenced_columns")),
        )
    except ValueError as exc:
        raise SnapshotError(f"Session '{owner_uri}': {exc}") from exc


def _column_list(owner_uri: str, field_name: str, raw: Any) -> tuple[str, ...]:
    if raw is None:
        return ()
    if isinstance(raw, str):
        return (raw,)
    if not _is_list(raw):
        raise SnapshotError(f"'{field_name}' for session '{owner_uri}' must be a list of column names.")
    return tuple(_require_str(owner_uri, field_name, name) for name in raw)


def _is_list(value: Any) -> bool:
    return isinstance(value, Sequence) and not isinstance(value, (str, bytes))


def _require_str(owner_uri: str, field_name: str, value: Any) -> str:
    if not isinstance(value, str):
        raise SnapshotError(
            f"'{field_name}' for session '{owner_uri}' must be a string, got {value!r}."
        )
    return value


def _require_flag(owner_uri: str, field_name: str, value: Any) -> bool:
    if not isinstance(value, bool):
        raise SnapshotError(
            f"'{field_name}' for session '{owner_uri}' must be true or false, got {value!r}."
        )
    return value
