from __future__ import annotations

import io
import json

from edit_cli.edit_data.channel import ResponseError
from edit_cli.edit_data.render import format_error, render_referenced_tables, render_sessions
from edit_cli.edit_data.session import EditSession
from edit_cli.edit_data.types import EditTableMetadata, GetReferencedTablesResult
from edit_cli.shared.logging import get_logger


def test_render_json_payload(make_fk) -> None:
    result = GetReferencedTablesResult(
        referenced_tables=(make_fk("dbo", "Products", "FK_Orders_Products", ["ProductId"], ["Id"]),)
    )
    stream = io.StringIO()

    render_referenced_tables(result, output_format="json", logger=get_logger(), stream=stream)

    payload = json.loads(stream.getvalue())
    assert payload["referencedTables"][0]["foreignKeyName"] == "FK_Orders_Products"


def test_render_table_lists_column_pairs(make_fk) -> None:
    result = GetReferencedTablesResult(
        referenced_tables=(
            make_fk("sales", "Details", "FK_Composite", ["OrderId", "LineNo"], ["Id", "Line"]),
        )
    )
    stream = io.StringIO()

    render_referenced_tables(result, output_format="table", logger=get_logger(), stream=stream)

    output = stream.getvalue()
    assert "sales.Details" in output
    assert "FK_Composite" in output
    assert "OrderId -> Id, LineNo -> Line" in output


def test_render_empty_table_logs_to_stderr(capfd) -> None:
    stream = io.StringIO()

    render_referenced_tables(GetReferencedTablesResult(), output_format="table", logger=get_logger(), stream=stream)

    captured = capfd.readouterr()
    assert stream.getvalue() == ""
    assert "No referenced tables." in captured.err


def test_render_sessions_json() -> None:
    ready = EditSession(owner_uri="file:///orders.sql")
    ready.initialize(EditTableMetadata(escaped_multipart_name="[dbo].[Orders]"))
    pending = EditSession(owner_uri="file:///pending.sql")
    stream = io.StringIO()

    render_sessions([ready, pending], output_format="json", logger=get_logger(), stream=stream)

    assert json.loads(stream.getvalue()) == [
        {
            "ownerUri": "file:///orders.sql",
            "state": "initialized",
            "table": "[dbo].[Orders]",
            "editableColumns": [],
        },
        {
            "ownerUri": "file:///pending.sql",
            "state": "uninitialized",
            "table": None,
            "editableColumns": None,
        },
    ]


def test_format_error_includes_code() -> None:
    assert format_error(ResponseError(message="No edit session", code=1002)) == "No edit session (code 1002)"
