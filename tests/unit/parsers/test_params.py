"""Unit tests for the key-value parameter scanner."""

import logging

import pytest

from logsparser.exceptions import MalformedQuoteError, ParseError

pytestmark = pytest.mark.unit


@pytest.fixture
def scanner():
    """Create a key-value scanner."""
    from logsparser.parsers.params import KeyValueScanner

    return KeyValueScanner()


class TestStrictScan:
    """Tests for strict key-value scanning."""

    def test_multiple_properties(self, scanner):
        """Test empty, string and numeric values in one list."""
        data = 'aa= bb= cc="xx" dd=123'
        result = scanner.scan(data)
        assert result.properties == {"aa": "", "bb": "", "cc": "xx", "dd": 123}
        assert result.chars == len(data)

    def test_string_key(self, scanner):
        result = scanner.scan('"aa"="xx"')
        assert result.properties == {"aa": "xx"}

    def test_primitive_values(self, scanner):
        result = scanner.scan("a=true b=null c=123 d=123.5")
        assert result.properties == {"a": True, "b": None, "c": 123, "d": 123.5}

    def test_empty_value_at_end(self, scanner):
        result = scanner.scan("aa=")
        assert result.properties == {"aa": ""}
        assert result.chars == 3

    def test_complex_json_value(self, scanner):
        result = scanner.scan('aa={ "a": 1, "b": ["x", "y", 123.5, null], "c": true, "d": {}, "e": [] }')
        assert result.properties["aa"] == {
            "a": 1,
            "b": ["x", "y", 123.5, None],
            "c": True,
            "d": {},
            "e": [],
        }

    def test_serialized_json_value(self, scanner):
        """Test a string holding JSON is decoded once more."""
        result = scanner.scan('"namespaces"="{\\"exclude\\":[],\\"include\\":[]}"')
        assert result.properties == {"namespaces": {"exclude": [], "include": []}}

    def test_serialized_number_value(self, scanner):
        assert scanner.scan('cc="123"').properties == {"cc": 123}

    def test_value_whose_beginning_looks_like_json(self, scanner):
        """Test a value is only JSON if the JSON covers all of it."""
        data = 'item=1f22647-f3b5-4735-9996-765101b98e2d logSource="internal/delete/delete_item_action_handler.go:116"'
        result = scanner.scan(data)
        assert result.properties == {
            "item": "1f22647-f3b5-4735-9996-765101b98e2d",
            "logSource": "internal/delete/delete_item_action_handler.go:116",
        }
        assert result.chars == len(data)

    def test_deeply_nested_value_stays_text(self, scanner):
        """Test a value nested too deeply falls back to a literal."""
        value = "[" * 5000 + "]" * 5000
        data = f"a={value} b=1"

        result = scanner.scan(data)

        assert result.properties == {"a": value, "b": 1}
        assert result.chars == len(data)

    def test_deeply_nested_serialized_value_stays_text(self, scanner):
        value = "[" * 100000 + "]" * 100000
        result = scanner.scan(f'a="{value}"')
        assert result.properties == {"a": value}

    def test_zero_leading_number_stays_text(self, scanner):
        assert scanner.scan("name=021891576552").properties == {"name": "021891576552"}

    def test_unit_suffixed_value(self, scanner):
        """Test a number followed by a multi-byte unit stays text."""
        result = scanner.scan("db_storage=2.018µs")
        assert result.properties == {"db_storage": "2.018µs"}
        assert result.chars == 18
        assert result.nbytes == 19

    def test_trailing_spaces_are_consumed(self, scanner):
        data = 'foo="bar"  '
        assert scanner.scan(data).chars == len(data)

    def test_duplicate_key_last_wins(self, scanner):
        assert scanner.scan("a=1 a=2").properties == {"a": 2}

    def test_key_without_delimiter(self, scanner):
        """Test text that is not a parameter list scans nothing."""
        result = scanner.scan("plain words")
        assert result.properties == {}
        assert result.chars == 0
        assert result.nbytes == 0

    def test_clean_stop_discards_earlier_pairs(self, scanner):
        result = scanner.scan("a=1 trailing words")
        assert result.properties == {}
        assert result.chars == 0

    def test_multi_word_key_is_rejected(self, scanner):
        result = scanner.scan('time="2024-11-20T15:17:37Z" BSL name=default')
        assert result.chars == 0

    def test_malformed_key(self, scanner):
        """Test a malformed key is a parse error carrying the scanner error."""
        with pytest.raises(ParseError) as exc_info:
            scanner.scan('"unterminated=1')

        error = exc_info.value
        assert error.code == "MALFORMED_QUOTE"
        assert error.message.startswith("Failed to parse key at position 0: ")
        assert isinstance(error.cause, MalformedQuoteError)

    def test_error_position_includes_offset(self, scanner):
        with pytest.raises(ParseError, match="position 14"):
            scanner.scan('x=1 "bad', offset=10)


class TestLenientScan:
    """Tests for lenient key-value scanning."""

    def test_keys_that_contain_spaces(self, scanner):
        """Test multi-word keys are accepted."""
        data = 'time="2024-11-20T15:17:37Z" level=info msg="Maintenance repo complete" BSL name=default'
        result = scanner.scan(data, lenient=True)
        assert result.properties == {
            "time": "2024-11-20T15:17:37Z",
            "level": "info",
            "msg": "Maintenance repo complete",
            "BSL name": "default",
        }
        assert result.chars == len(data)

    def test_keys_that_contain_dots(self, scanner):
        result = scanner.scan('error="oh no" error.file="/go/manager.go:240"', lenient=True)
        assert result.properties == {"error": "oh no", "error.file": "/go/manager.go:240"}

    def test_key_with_characters_outside_sentence(self, scanner):
        """Test keys like a,b fall back to a literal."""
        assert scanner.scan("a,b=1", lenient=True).properties == {"a,b": 1}

    def test_json_line_is_not_a_parameter_list(self, scanner):
        result = scanner.scan('{"url":"a=b"}', lenient=True)
        assert result.chars == 0

    def test_quoted_key_error(self, scanner):
        with pytest.raises(ParseError, match="position 4"):
            scanner.scan('a=1 "bad=2', lenient=True)


class TestScannerTracing:
    """Tests for debug tracing of scan stops."""

    def test_traces_when_debug(self, caplog):
        from logsparser.parsers.params import KeyValueScanner

        with caplog.at_level(logging.DEBUG, logger="logsparser.parsers.params"):
            KeyValueScanner(debug=True).scan("plain words")

        assert "Failed to scan delimiter at position 5" in caplog.text

    def test_silent_without_debug(self, scanner, caplog):
        with caplog.at_level(logging.DEBUG, logger="logsparser.parsers.params"):
            scanner.scan("plain words")

        assert caplog.records == []
