from __future__ import annotations

import pytest

from kintone_sync.config.errors import ConfigurationError
from kintone_sync.domain.coercion import build_coercion_rules
from kintone_sync.domain.mapping import RecordMappingError, build_record
from kintone_sync.domain.types import FieldValue
from tests.support.entities import make_mapping


def test_build_record_maps_every_pair_with_coercion() -> None:
    mapping = make_mapping()
    row = {"Id": "42", "LiveDate": "2024-02-29", "IsClec": "yes", "Name": "Acme", "Extra": "x"}

    record = build_record(row, mapping)

    assert record == {
        "Id": FieldValue("42"),
        "LiveDate_field": FieldValue("2024-02-29"),
        "IsClec_field": FieldValue("Yes"),
        "Name_field": FieldValue("Acme"),
    }


def test_build_record_keeps_nulled_fields() -> None:
    mapping = make_mapping()
    row = {"Id": "7", "LiveDate": "2024-02-30", "IsClec": "maybe", "Name": None}

    record = build_record(row, mapping)

    assert set(record) == set(mapping.destination_fields)
    assert record["LiveDate_field"].to_payload() == {"value": None}
    assert record["IsClec_field"].value is None
    assert record["Name_field"].value is None


def test_build_record_raises_for_missing_column() -> None:
    mapping = make_mapping()

    with pytest.raises(RecordMappingError, match="LiveDate"):
        build_record({"Id": "1", "IsClec": "yes", "Name": "Acme"}, mapping)


def test_explicit_rules_override_mapping_rules() -> None:
    mapping = make_mapping(coercion_rules=build_coercion_rules(date_fields=["Name"]))
    row = {"Id": "1", "LiveDate": "nope", "IsClec": "yes", "Name": "Acme"}

    from_mapping = build_record(row, mapping)
    from_argument = build_record(row, mapping, rules={})

    assert from_mapping["Name_field"].value is None
    assert from_mapping["LiveDate_field"].value == "nope"
    assert from_mapping["IsClec_field"].value == "yes"
    assert from_argument["Name_field"].value == "Acme"


def test_entity_mapping_rejects_mismatched_field_lists() -> None:
    with pytest.raises(ConfigurationError, match="4 source columns to 3 destination"):
        make_mapping(destination_fields=("Id", "a", "b"))


def test_entity_mapping_rejects_duplicate_destinations() -> None:
    with pytest.raises(ConfigurationError, match="several columns to: a"):
        make_mapping(source_columns=("Id", "x", "y"), destination_fields=("Id", "a", "a"))


def test_entity_mapping_rejects_blank_token() -> None:
    with pytest.raises(ConfigurationError, match="api_token"):
        make_mapping(api_token="  ")


def test_entity_mapping_repr_hides_token() -> None:
    assert "token-101" not in repr(make_mapping())
