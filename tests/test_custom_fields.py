import json

import pytest

from epicpoints.errors import DecodeError
from epicpoints.normalizers.custom_fields import extract_custom_fields

from conftest import make_body


def test_numbers_and_strings_are_extracted():
    body = make_body(customfield_10021=3, customfield_10025="EPIC-1", customfield_1=2.5)
    found = extract_custom_fields(body)
    assert found == {"customfield_10021": 3.0, "customfield_10025": "EPIC-1", "customfield_1": 2.5}
    assert isinstance(found["customfield_10021"], float)


@pytest.mark.parametrize("value", [None, True, False, {"value": "x"}, [1, 2]])
def test_other_value_types_are_skipped(value):
    body = make_body(customfield_10099=value)
    assert "customfield_10099" not in extract_custom_fields(body)


def test_static_and_unprefixed_keys_are_ignored():
    body = make_body(summary="title", timeestimate=3600)
    found = extract_custom_fields(body)
    assert "summary" not in found
    assert "timeestimate" not in found
    assert "description" not in found


def test_only_direct_children_are_inspected():
    body = make_body(customfield_1={"customfield_2": 5})
    assert extract_custom_fields(body) == {}


def test_custom_prefix_and_path():
    body = json.dumps({"fields": {"cf_points": 4, "customfield_1": 1}})
    assert extract_custom_fields(body, path=("fields",), prefix="cf_") == {"cf_points": 4.0}


def test_missing_path_yields_empty_map():
    assert extract_custom_fields(b'{"issue": {"key": "PROJ-1"}}') == {}
    assert extract_custom_fields(b"[]") == {}


def test_non_object_at_path_is_a_decode_error():
    with pytest.raises(DecodeError):
        extract_custom_fields(b'{"issue": {"fields": [1, 2]}}')


def test_invalid_json_is_a_decode_error():
    with pytest.raises(DecodeError):
        extract_custom_fields(b'{"issue": ')


@pytest.mark.parametrize(
    "raw_number",
    ["NaN", "Infinity", "1e400", "1" + "0" * 400],
)
def test_number_outside_float_range_is_a_decode_error(raw_number):
    body = '{"issue": {"fields": {"customfield_10021": %s}}}' % raw_number
    with pytest.raises(DecodeError):
        extract_custom_fields(body)


def test_input_is_left_untouched():
    body = make_body(customfield_10021=3)
    copy = bytes(body)
    extract_custom_fields(body)
    assert body == copy
