import pytest

from data_inspector.json_converter import convert_json


def test_formatted_double_quoted():
    result = convert_json('{"a": 1}')
    assert result.error is None
    assert result.output == '"{\n  \\"a\\": 1\n}"'


def test_compact_single_quoted():
    result = convert_json('{ "a" : [1, 2] }', is_formatted=False, outer_delimiter="'")
    assert result.output == "'{\"a\":[1,2]}'"


def test_invalid_input_reports_all_errors():
    result = convert_json('{"a":1,}')
    assert result.output == ''
    assert "Remove trailing commas before closing brackets" in result.error
    assert result.error.startswith("JSON parsing error:")


def test_blank_input():
    result = convert_json("  ")
    assert result.output == ''
    assert result.error is None


def test_unknown_delimiter():
    with pytest.raises(ValueError):
        convert_json('{}', outer_delimiter='`')


def test_unicode_is_kept():
    assert convert_json('"日本"', is_formatted=False).output == '"\\"日本\\""'
