import pytest

from core.errors import ValidationError
from core.table_config import parse_array, serialize_array


def test_parse_array_is_tolerant():
    assert parse_array(["a", "b"]) == ["a", "b"]
    assert parse_array('["a", "b"]') == ["a", "b"]
    assert parse_array("null") is None
    assert parse_array("") is None
    assert parse_array(None) is None


def test_serialize_array():
    assert serialize_array(["name"]) == '["name"]'
    assert serialize_array(None) is None


def test_save_and_get_configuration(config_store):
    config_store.save_configuration(
        "students",
        column_order=["id", "name"],
        unique_constraints=["reg_no"],
        searchable_columns=["name", "department"],
    )
    config = config_store.get_configuration("students")
    assert config.table_name == "students"
    assert config.column_order == ["id", "name"]
    assert config.unique_constraints == ["reg_no"]
    assert config.searchable_columns == ["name", "department"]
    assert config.sortable_columns is None
    assert config.filterable_columns is None


def test_get_configuration_missing(config_store):
    assert config_store.get_configuration("students") is None


def test_save_is_an_upsert(config_store):
    config_store.save_configuration("students", unique_constraints=["reg_no"])
    config_store.save_configuration("students", sortable_columns=["name"])
    config = config_store.get_configuration("students")
    assert config.unique_constraints is None
    assert config.sortable_columns == ["name"]
    assert config_store.list_configured_tables() == ["students"]


def test_save_requires_table_name(config_store):
    with pytest.raises(ValidationError):
        config_store.save_configuration(None, column_order=["id"])
    with pytest.raises(ValidationError):
        config_store.save_configuration("")


def test_list_configured_tables_is_sorted(config_store):
    config_store.save_configuration("students")
    config_store.save_configuration("codes")
    config_store.save_configuration("notes")
    assert config_store.list_configured_tables() == ["codes", "notes", "students"]


def test_soft_delete_hides_configuration(config_store, engine):
    config_store.save_configuration("students", unique_constraints=["reg_no"])
    config_store.delete_configuration("students")

    assert config_store.get_configuration("students") is None
    assert config_store.list_configured_tables() == []

    # The row is still there, only marked deleted
    t = config_store.table
    with engine.connect() as conn:
        row = conn.execute(t.select().where(t.c.table_name == "students")).mappings().first()
    assert row["deleted_at"] is not None


def test_delete_missing_configuration_is_noop(config_store):
    config_store.delete_configuration("never_configured")
    assert config_store.list_configured_tables() == []


def test_save_after_delete_restores_configuration(config_store):
    config_store.save_configuration("students", searchable_columns=["name"])
    config_store.delete_configuration("students")
    config_store.save_configuration("students", searchable_columns=["reg_no"])
    assert config_store.get_configuration("students").searchable_columns == ["reg_no"]
