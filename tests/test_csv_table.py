from data_inspector.csv_table import (
    ParsedTable,
    detect_csv_headers,
    detect_csv_headers_in_text,
    parse_csv,
    parse_csv_line,
    table_to_csv,
)
from data_inspector.validation import validate_csv


def test_parse_line_quoted_delimiters():
    assert parse_csv_line('a, "b,c" ,d') == ['a', 'b,c', 'd']


def test_parse_line_escaped_quotes():
    assert parse_csv_line('"He said ""Hi"""') == ['He said "Hi"']


def test_parse_line_empty_fields():
    assert parse_csv_line('a,,') == ['a', '', '']


def test_parse_with_header_row():
    table = parse_csv("Name,Age\nAda,36\nBob,40")
    assert table.headers == ['Name', 'Age']
    assert table.rows == [['Ada', '36'], ['Bob', '40']]
    assert table.total_rows == 2
    assert table.has_headers is True


def test_parse_without_header_row_generates_names():
    table = parse_csv("Name,Age\nAda,36\nBob,40", has_headers=False)
    assert table.headers == ['Column 1', 'Column 2']
    assert table.total_rows == 3
    assert table.has_headers is False


def test_parse_crlf_and_blank_lines():
    table = parse_csv("a,b\r\n\r\n1,2\r\n  \r\n3,4\r\n")
    assert table.rows == [['1', '2'], ['3', '4']]
    assert table.total_rows == len(table.rows)


def test_parse_empty_input():
    assert parse_csv("  \n ") == ParsedTable()


def test_ragged_rows_are_kept():
    table = parse_csv("a,b\n1\n1,2,3", has_headers=False)
    assert table.headers == ['Column 1', 'Column 2', 'Column 3']
    assert table.rows == [['a', 'b'], ['1'], ['1', '2', '3']]
    assert table.column_count == 3


def test_header_detector_is_pluggable():
    table = parse_csv("name,city\nx,y", header_detector=detect_csv_headers)
    assert table.has_headers is False
    assert table.total_rows == 2

    table = parse_csv("name,age\nx,3", header_detector=detect_csv_headers)
    assert table.has_headers is True
    assert table.total_rows == 1


def test_explicit_flag_overrides_detector():
    table = parse_csv("name,age\nx,3", has_headers=False, header_detector=detect_csv_headers)
    assert table.has_headers is False


def test_detect_headers_rule():
    assert detect_csv_headers([['Name', 'Age'], ['Ada', '36']]) is True
    assert detect_csv_headers([['Name', 'Age']]) is False
    assert detect_csv_headers([['1', '2'], ['3', '4']]) is False
    assert detect_csv_headers([['a', 'b'], ['c', 'd']]) is False
    assert detect_csv_headers_in_text("x,y\n\n1,2") is True


def test_parse_then_validate_well_formed():
    for n in (0, 1, 7, 250):
        content = "id,name,score\n" + "\n".join(f"{i},row{i},{i * 2}" for i in range(n))
        table = parse_csv(content)
        assert table.total_rows == n
        assert validate_csv(content).is_valid


def test_table_to_csv_quotes_fields():
    table = parse_csv('name,note\nAda,"a, b"\nBob,"say ""hi"""')
    assert table_to_csv(table) == 'name,note\nAda,"a, b"\nBob,"say ""hi"""\n'


def test_table_to_csv_without_headers():
    table = parse_csv("1,2\n3,4", has_headers=False)
    assert table_to_csv(table) == "1,2\n3,4\n"
