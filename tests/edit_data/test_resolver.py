from __future__ import annotations

from collections.abc import Callable

from edit_cli.edit_data.resolver import resolve_referenced_tables
from edit_cli.edit_data.session import EditSession


def test_resolve_preserves_length_and_order(session_factory: Callable[..., EditSession], make_fk) -> None:
    tables = [
        make_fk("dbo", "Products", "FK_Orders_Products", ["ProductId"], ["Id"]),
        make_fk("dbo", "Customers", "FK_Orders_Customers", ["CustomerId"], ["Id"]),
        make_fk("dbo", "Products", "FK_Orders_Products_Alt", ["AltProductId"], ["Id"]),
    ]
    session = session_factory(tables)

    resolved = resolve_referenced_tables(session)

    assert len(resolved) == len(tables)
    assert [info.foreign_key_name for info in resolved] == [
        "FK_Orders_Products",
        "FK_Orders_Customers",
        "FK_Orders_Products_Alt",
    ]


def test_resolve_null_collection_is_empty(session_factory: Callable[..., EditSession]) -> None:
    session = session_factory(None)

    assert resolve_referenced_tables(session) == ()
    assert resolve_referenced_tables(session) == ()


def test_resolve_empty_collection_is_empty(session_factory: Callable[..., EditSession]) -> None:
    session = session_factory([])

    assert resolve_referenced_tables(session) == ()


def test_resolve_does_not_mutate_metadata(session_factory: Callable[..., EditSession], make_fk) -> None:
    tables = (make_fk("dbo", "Products", "FK_Orders_Products", ["ProductId"], ["Id"]),)
    session = session_factory(tables)
    before = session.table_metadata

    resolve_referenced_tables(session)

    assert session.table_metadata is before
    assert session.table_metadata.referenced_tables == tables
