"""Output rendering helpers for edit-data."""

from __future__ import annotations

import json
import sys
from typing import Sequence

from rich import box
from rich.console import Console
from rich.table import Table

from edit_cli.shared.logging import Logger

from .channel import ResponseError
from .session import EditSession
from .types import GetReferencedTablesResult


def render_referenced_tables(
    result: GetReferencedTablesResult,
    *,
    output_format: str,
    logger: Logger,
    stream=None,
) -> None:
    """Render a referenced-tables result to the desired format."""
    output_stream = stream or sys.stdout
    fmt = (output_format or "table").lower()

    if fmt == "json":
        json.dump(result.to_wire(), output_stream, indent=2)
        output_stream.write("\n")
        return
    if fmt != "table":  # pragma: no cover - Click validation should prevent this
        raise ValueError(f"Unsupported output format '{output_format}'.")

    if not result.referenced_tables:
        logger.info("No referenced tables.")
        return

    console = Console(file=output_stream, highlight=False, force_terminal=False)
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Referenced table", style="bold")
    table.add_column("Foreign key")
    table.add_column("Columns")
    for info in result.referenced_tables:
        pairs = ", ".join(f"{source} -> {target}" for source, target in info.column_pairs)
        table.add_row(info.fully_qualified_name, info.foreign_key_name, pairs)
    console.print(table)


def render_sessions(
    sessions: Sequence[EditSession],
    *,
    output_format: str,
    logger: Logger,
    stream=None,
) -> None:
    """Render the registered sessions and their lifecycle state."""
    output_stream = stream or sys.stdout
    fmt = (output_format or "table").lower()

    if fmt == "json":
        payload = [
            {
                "ownerUri": session.owner_uri,
                "state": session.state.value,
                "table": session.table_metadata.escaped_multipart_name if session.table_metadata else None,
                "editableColumns": _editable_columns(session),
            }
            for session in sessions
        ]
        json.dump(payload, output_stream, indent=2)
        output_stream.write("\n")
        return

    if not sessions:
        logger.info("No edit sessions registered.")
        return

    console = Console(file=output_stream, highlight=False, force_terminal=False)
    table = Table(box=box.SIMPLE, show_header=True, header_style="bold")
    table.add_column("Owner URI", style="bold")
    table.add_column("State")
    table.add_column("Table")
    table.add_column("Editable columns")
    for session in sessions:
        metadata = session.table_metadata
        editable = _editable_columns(session)
        table.add_row(
            session.owner_uri,
            session.state.value,
            metadata.escaped_multipart_name if metadata else "",
            ", ".join(editable) if editable is not None else "",
        )
    console.print(table)


def format_error(error: ResponseError) -> str:
    return f"{error.message} (code {error.code})"


def _editable_columns(session: EditSession) -> list[str] | None:
    if session.table_metadata is None:
        return None
    return [column.name for column in session.table_metadata.columns if column.is_editable]
