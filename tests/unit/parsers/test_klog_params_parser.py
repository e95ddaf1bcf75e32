"""Unit tests for the Go klog parameters parser."""

import pytest

pytestmark = pytest.mark.unit


@pytest.fixture
def params_parser():
    """Create a klog parameters parser instance."""
    from logsparser.parsers.formats.klog_params import GoKlogParamsParser

    return GoKlogParamsParser()


class TestGoKlogParamsParser:
    """Tests for GoKlogParamsParser."""

    def test_parser_name(self, params_parser):
        assert params_parser.name == "go_klog_params"

    def test_property_with_literal_key(self, params_parser, make_message):
        message = make_message('aa="xx"')

        outcome = params_parser.parse(message)

        assert outcome.accepted is True
        assert outcome.error is None
        assert message.properties == {"aa": "xx"}
        assert message.unparsed_remainder == ""

    def test_keys_that_contain_spaces(self, params_parser, make_message):
        """Test multi-word keys from producers that emit them."""
        message = make_message(
            'time="2024-11-20T15:17:37Z" level=info msg="Maintenance repo complete" BSL name=default'
        )

        outcome = params_parser.parse(message)

        assert outcome.accepted is True
        assert message.properties["BSL name"] == "default"
        assert message.unparsed_remainder == ""

    def test_merges_into_existing_properties(self, params_parser, make_message):
        """Test parsed keys overwrite existing ones and others are kept."""
        message = make_message("code=9999 extra=1")
        message.properties.update({"code": "0123", "source_line": 123})

        params_parser.parse(message)

        assert message.properties == {"code": 9999, "source_line": 123, "extra": 1}

    def test_nothing_to_parse(self, params_parser, make_message):
        """Test text without parameters is declined untouched."""
        message = make_message("plain text here")

        outcome = params_parser.parse(message)

        assert outcome.accepted is False
        assert outcome.error is None
        assert message.unparsed_remainder == "plain text here"
        assert message.properties == {}

    def test_empty_remainder(self, params_parser, make_message):
        message = make_message("")
        assert params_parser.parse(message).accepted is False

    def test_malformed_key(self, params_parser, make_message):
        """Test a scan error is reported without changing the message."""
        message = make_message('a=1 "bad=2')

        outcome = params_parser.parse(message)

        assert outcome.accepted is True
        assert outcome.error is not None
        assert outcome.error.code == "MALFORMED_QUOTE"
        assert message.properties == {}
        assert message.unparsed_remainder == 'a=1 "bad=2'

    def test_after_klog_prefix(self, params_parser, make_message, klog_line):
        """Test the remainder left by the prefix parser is fully consumed."""
        from logsparser.parsers.formats.klog_prefix import GoKlogPrefixParser

        message = make_message(klog_line('"oh no" a="x" b="y"'))
        GoKlogPrefixParser().parse(message)

        outcome = params_parser.parse(message)

        assert outcome.accepted is True
        assert message.properties["a"] == "x"
        assert message.properties["b"] == "y"
        assert message.unparsed_remainder == ""
