"""Shared pytest fixtures for edit-data tests."""

from __future__ import annotations

from collections.abc import Callable, Sequence

import pytest

from edit_cli.edit_data.channel import CollectingResponseChannel
from edit_cli.edit_data.handler import EditDataHandler
from edit_cli.edit_data.registry import SessionRegistry
from edit_cli.edit_data.session import EditSession
from edit_cli.edit_data.types import EditColumnMetadata, EditTableMetadata, ReferencedTableInfo
from edit_cli.shared.logging import get_logger

TEST_OWNER_URI = "test://referenced-tables"


def _fk(
    schema: str,
    table: str,
    name: str,
    source: Sequence[str],
    referenced: Sequence[str],
) -> ReferencedTableInfo:
    return ReferencedTableInfo(
        schema_name=schema,
        table_name=table,
        fully_qualified_name=f"{schema}.{table}",
        foreign_key_name=name,
        source_columns=tuple(source),
        referenced_columns=tuple(referenced),
    )


@pytest.fixture()
def registry() -> SessionRegistry:
    return SessionRegistry()


@pytest.fixture()
def handler(registry: SessionRegistry) -> EditDataHandler:
    return EditDataHandler(registry=registry, logger=get_logger(verbose=False))


@pytest.fixture()
def channel() -> CollectingResponseChannel:
    return CollectingResponseChannel()


@pytest.fixture()
def session_factory(
    registry: SessionRegistry,
) -> Callable[..., EditSession]:
    """Register a session initialized with the given referenced tables."""

    def _factory(
        referenced_tables: Sequence[ReferencedTableInfo] | None,
        owner_uri: str = TEST_OWNER_URI,
    ) -> EditSession:
        metadata = EditTableMetadata(
            escaped_multipart_name="[dbo].[Orders]",
            columns=(
                EditColumnMetadata(name="Id", ordinal=0, is_key=True),
                EditColumnMetadata(name="ProductId", ordinal=1),
                EditColumnMetadata(name="CustomerId", ordinal=2),
            ),
            referenced_tables=None if referenced_tables is None else tuple(referenced_tables),
        )
        session = EditSession(owner_uri=owner_uri)
        session.initialize(metadata)
        registry.register(session)
        return session

    return _factory


@pytest.fixture()
def make_fk() -> Callable[..., ReferencedTableInfo]:
    return _fk
