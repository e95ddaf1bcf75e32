"""Key-value parameter scanner.

Consumes klog parameter lists such as::

    count=2 object="container-registry-enforce" target={"name":"foo"}

Values may be JSON documents, JSON strings (which are decoded once more
if their content is itself JSON) or bare literals.
"""

import logging
from typing import NamedTuple

from logsparser.exceptions import ParseError, ScanError
from logsparser.message import JSONValue
from logsparser.parsers.scanner import (
    Scanned,
    byte_length,
    decode_json,
    scan_and_parse_json_string_or_literal,
    scan_and_parse_json_string_or_unquoted_sentence,
    scan_json_value,
    scan_literal,
)

logger = logging.getLogger(__name__)


class ScannedParams(NamedTuple):
    """Properties scanned from a parameter list."""

    properties: dict[str, JSONValue]
    chars: int
    nbytes: int


NOTHING_SCANNED = ScannedParams({}, 0, 0)


class KeyValueScanner:
    """Scans ``key=value`` sequences.

    In strict mode keys are bare literals or JSON strings. In lenient mode
    bare keys may be multi-word sentences (``BSL name=default``), for
    producers that emit keys containing spaces.
    """

    def __init__(self, debug: bool = False):
        self.debug = debug

    def scan(self, data: str, lenient: bool = False, offset: int = 0) -> ScannedParams:
        """Scan all key-value pairs in ``data``.

        A key that is empty or not followed by ``=`` means ``data`` is not
        a parameter list: nothing is consumed and no error is raised.

        Args:
            data: Text to scan
            lenient: Allow unquoted multi-word keys
            offset: Position of ``data`` within the payload, for messages

        Returns:
            ScannedParams with the properties and consumed size

        Raises:
            ParseError: A key is a malformed JSON string
        """
        properties: dict[str, JSONValue] = {}
        pos = 0

        while pos < len(data):
            try:
                key = self._scan_key(data[pos:], lenient)
            except ScanError as e:
                raise ParseError.wrap(f"Failed to parse key at position {offset + pos}", e) from e
            if not key.text:
                self._trace(f"Failed to scan key at position {offset + pos}")
                return NOTHING_SCANNED
            pos += key.chars

            if not data.startswith("=", pos):
                self._trace(f"Failed to scan delimiter at position {offset + pos}")
                return NOTHING_SCANNED
            pos += 1

            value, value_size = self._scan_value(data[pos:])
            pos += value_size

            properties[key.text] = value
            while data.startswith(" ", pos):
                pos += 1

        return ScannedParams(properties, pos, byte_length(data[:pos]))

    def _scan_key(self, data: str, lenient: bool) -> Scanned:
        if not lenient:
            return scan_and_parse_json_string_or_literal(data)

        key = scan_and_parse_json_string_or_unquoted_sentence(data)
        if key.text and not data.startswith("=", key.chars) and not data.startswith('"'):
            # Sentence stopped on a character a strict literal allows
            return scan_literal(data)
        return key

    def _scan_value(self, data: str) -> tuple[JSONValue, int]:
        if not data or data[0] == " ":
            return "", 0

        # Value may be a serialized JSON document. Only take it if it ends
        # where the value ends, otherwise "1f22647-..." would scan as 1.
        try:
            scanned = scan_json_value(data)
        except ScanError:
            scanned = None

        if scanned is not None and self._ends_value(data, scanned.chars):
            try:
                value = decode_json(scanned.text)
            except ValueError:
                pass
            else:
                if isinstance(value, str):
                    value = self._decode_nested(value)
                return value, scanned.chars

        literal = scan_literal(data)
        return literal.text, literal.chars

    @staticmethod
    def _ends_value(data: str, chars: int) -> bool:
        return chars >= len(data) or data[chars].isspace()

    @staticmethod
    def _decode_nested(value: str) -> JSONValue:
        """Decode a string value whose content is itself JSON."""
        try:
            return decode_json(value)
        except ValueError:
            return value

    def _trace(self, message: str) -> None:
        if self.debug:
            logger.debug(message)
