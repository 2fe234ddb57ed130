from __future__ import annotations

import pytest

from edit_cli.edit_data.types import (
    EditColumnMetadata,
    EditTableMetadata,
    GetReferencedTablesParams,
    GetReferencedTablesResult,
    ReferencedTableInfo,
)


def test_referenced_table_rejects_mismatched_column_counts() -> None:
    with pytest.raises(ValueError):
        ReferencedTableInfo(
            schema_name="dbo",
            table_name="Products",
            fully_qualified_name="dbo.Products",
            foreign_key_name="FK_Broken",
            source_columns=("ProductId", "VariantId"),
            referenced_columns=("Id",),
        )


def test_fully_qualified_name_is_not_rederived() -> None:
    info = ReferencedTableInfo(
        schema_name="dbo",
        table_name="Products",
        fully_qualified_name="[dbo].[Products]",
        foreign_key_name="FK_Orders_Products",
        source_columns=("ProductId",),
        referenced_columns=("Id",),
    )

    assert info.to_wire()["fullyQualifiedName"] == "[dbo].[Products]"


def test_result_wire_shape_uses_camel_case_keys() -> None:
    info = ReferencedTableInfo(
        schema_name="sales",
        table_name="OrderDetails",
        fully_qualified_name="sales.OrderDetails",
        foreign_key_name="FK_Complex_Composite",
        source_columns=("OrderId", "ProductId"),
        referenced_columns=("Id", "ProdId"),
    )

    payload = GetReferencedTablesResult(referenced_tables=(info,)).to_wire()

    assert payload == {
        "referencedTables": [
            {
                "schemaName": "sales",
                "tableName": "OrderDetails",
                "fullyQualifiedName": "sales.OrderDetails",
                "foreignKeyName": "FK_Complex_Composite",
                "sourceColumns": ["OrderId", "ProductId"],
                "referencedColumns": ["Id", "ProdId"],
            }
        ]
    }


def test_empty_result_still_carries_referenced_tables_key() -> None:
    assert GetReferencedTablesResult().to_wire() == {"referencedTables": []}


@pytest.mark.parametrize(
    "payload, expected",
    [
        ({"ownerUri": "file:///orders.sql"}, "file:///orders.sql"),
        ({}, None),
        (None, None),
        (["file:///orders.sql"], None),
    ],
)
def test_params_from_wire(payload, expected) -> None:
    params = GetReferencedTablesParams.from_wire(payload)

    assert isinstance(params, GetReferencedTablesParams)
    assert params.owner_uri == expected


def test_key_columns_filters_on_is_key() -> None:
    metadata = EditTableMetadata(
        escaped_multipart_name="[dbo].[Orders]",
        columns=(
            EditColumnMetadata(name="Id", ordinal=0, is_key=True, is_identity=True),
            EditColumnMetadata(name="Total", ordinal=1, is_calculated=True),
            EditColumnMetadata(name="Note", ordinal=2),
        ),
    )

    assert [column.name for column in metadata.key_columns] == ["Id"]
    assert [column.is_editable for column in metadata.columns] == [False, False, True]
