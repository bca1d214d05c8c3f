import pytest
from pydantic import ValidationError as PydanticValidationError

from models.table import ColumnDescriptor, TableMetadata, UIHint
from models.table_config import TableConfiguration, TableConfigurationRequest


def _col(name, **kw):
    return ColumnDescriptor(name=name, type="INTEGER", ui=UIHint(widget="number", label=name.title()), **kw)


def test_table_metadata_lookup():
    meta = TableMetadata(
        table="students",
        label="Students",
        primary_key="id",
        columns=[_col("id", is_primary_key=True), _col("age")],
    )
    assert meta.column_names == ["id", "age"]
    assert meta.column("age").name == "age"
    assert meta.column("missing") is None
    assert meta.relations == []


def test_ui_hint_rejects_unknown_widget():
    with pytest.raises(PydanticValidationError):
        UIHint(widget="slider", label="Volume")


def test_table_configuration_dump_hides_deleted_at():
    config = TableConfiguration(id=1, table_name="students", searchable_columns=["name"])
    dumped = config.model_dump()
    assert "deleted_at" not in dumped
    assert dumped["searchable_columns"] == ["name"]


def test_configuration_request_fields_are_optional():
    req = TableConfigurationRequest(table_name="students")
    assert req.unique_constraints is None
    assert req.column_order is None
