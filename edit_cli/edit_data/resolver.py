"""Resolution of referenced-table metadata from a validated session."""

from __future__ import annotations

from .session import EditSession
from .types import ReferencedTableInfo


def resolve_referenced_tables(session: EditSession) -> tuple[ReferencedTableInfo, ...]:
    """Return the session's referenced tables in stored order.

    Missing metadata and an unset collection both resolve to an empty tuple.
    """
    metadata = session.table_metadata
    if metadata is None or metadata.referenced_tables is None:
        return ()
    return tuple(metadata.referenced_tables)
