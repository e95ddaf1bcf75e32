"""Scanner primitives for the mixed text/JSON grammar of klog payloads.

Every scanner looks at the start of ``data`` and returns a ``Scanned``
tuple: the consumed (or decoded) text plus how much input was consumed,
counted both in characters and in UTF-8 bytes. Callers slice by
characters; byte counts are reported for consumers that index encoded
buffers.

Scanners raise ScanError subclasses on malformed input. The JSON scanner
only delimits values inside a larger line; it is not a validating JSON
parser.

More info about klog:
https://kubernetes.io/docs/concepts/cluster-administration/system-logs/
https://github.com/kubernetes/klog/tree/main/textlogger
"""

import json
import re
from typing import NamedTuple

from logsparser.exceptions import (
    InvalidPrimitiveError,
    MalformedBraceError,
    MalformedBracketError,
    MalformedEscapeError,
    MalformedQuoteError,
)

LITERAL_RE = re.compile(r"[^=\s]*")
UNQUOTED_SENTENCE_RE = re.compile(r"[\w\-./: ]*")
STRING_STOP_RE = re.compile(r'[\\"]')
WHITESPACE_RE = re.compile(r"\s*")

# No leading zeros: "021891576552" stays a string.
JSON_PRIMITIVE_RE = re.compile(r"true|false|null|[1-9][0-9.]*")

# Arrays and objects nested deeper than this are rejected as malformed.
MAX_JSON_DEPTH = 200


class Scanned(NamedTuple):
    """Result of a scanner primitive."""

    text: str
    chars: int
    nbytes: int


def byte_length(text: str) -> int:
    """Number of bytes ``text`` occupies when UTF-8 encoded."""
    return len(text.encode("utf-8", errors="surrogatepass"))


def _scanned(data: str, chars: int, text: str | None = None) -> Scanned:
    consumed = data[:chars]
    return Scanned(consumed if text is None else text, chars, byte_length(consumed))


def _skip_whitespace(data: str, pos: int) -> int:
    return WHITESPACE_RE.match(data, pos).end()


def decode_json(text: str) -> object:
    """Decode a JSON document, rejecting NaN and Infinity.

    Raises:
        ValueError: If ``text`` is not valid JSON or is nested too deeply
            to decode.
    """
    try:
        return json.loads(text, strict=False, parse_constant=_reject_constant)
    except RecursionError as e:
        raise ValueError("JSON document nested too deeply") from e


def _reject_constant(name: str) -> object:
    raise ValueError(f"Invalid JSON constant: {name}")


# -----------------------------
# Text scanners
# -----------------------------


def scan_literal(data: str) -> Scanned:
    """Scan up to the next ``=``, whitespace or end of input.

    The terminator is neither included in the text nor counted.
    """
    chars = LITERAL_RE.match(data).end()
    return _scanned(data, chars)


def scan_unquoted_sentence(data: str) -> Scanned:
    """Scan a run of letters, digits, spaces and ``_-./:``."""
    chars = UNQUOTED_SENTENCE_RE.match(data).end()
    return _scanned(data, chars)


def scan_json_string(data: str) -> Scanned:
    """Scan a double-quoted JSON string.

    The returned text is the raw source, quotes and escape sequences
    included, so it can be handed to a JSON decoder as-is.

    Raises:
        MalformedQuoteError: No opening quote, or input ends before the
            closing quote.
        MalformedEscapeError: Input ends right after a backslash.
    """
    if not data.startswith('"'):
        raise MalformedQuoteError("Invalid JSON string encountered: missing opening quote")

    pos = 1
    while True:
        match = STRING_STOP_RE.search(data, pos)
        if match is None:
            raise MalformedQuoteError()

        pos = match.end()
        if match.group() == '"':
            return _scanned(data, pos)

        # Backslash: the escaped character is taken as-is
        if pos >= len(data):
            raise MalformedEscapeError()
        pos += 1
        if pos >= len(data):
            raise MalformedQuoteError()


def _decode_json_string(data: str) -> Scanned:
    scanned = scan_json_string(data)
    try:
        decoded = decode_json(scanned.text)
    except ValueError as e:
        raise MalformedEscapeError(f"Invalid escape sequence encountered in JSON string: {e}") from e
    return scanned._replace(text=decoded)


def scan_and_parse_json_string_or_literal(data: str) -> Scanned:
    """Scan a quoted JSON string (returned decoded) or a bare literal."""
    if data.startswith('"'):
        return _decode_json_string(data)
    return scan_literal(data)


def scan_and_parse_json_string_or_unquoted_sentence(data: str) -> Scanned:
    """Scan a quoted JSON string (returned decoded) or an unquoted sentence."""
    if data.startswith('"'):
        return _decode_json_string(data)
    return scan_unquoted_sentence(data)


# -----------------------------
# JSON value scanners
# -----------------------------


def scan_json_value(data: str, depth: int = 0) -> Scanned:
    """Scan one JSON value and return its source text.

    Args:
        data: Text starting with the value
        depth: Number of arrays and objects enclosing the value

    Raises:
        ScanError: A subclass describing what is malformed, including
            nesting deeper than MAX_JSON_DEPTH.
    """
    if data.startswith("["):
        return _scan_json_array(data, depth + 1)
    if data.startswith("{"):
        return _scan_json_object(data, depth + 1)
    return _scan_json_primitive(data)


def _scan_json_array(data: str, depth: int) -> Scanned:
    if depth > MAX_JSON_DEPTH:
        raise MalformedBracketError(
            f"Invalid JSON array encountered: nested deeper than {MAX_JSON_DEPTH}"
        )
    pos = _skip_whitespace(data, 1)

    while True:
        if data.startswith("]", pos):
            return _scanned(data, pos + 1)
        if pos >= len(data):
            raise MalformedBracketError()

        element = scan_json_value(data[pos:], depth)
        pos = _skip_separator(data, pos + element.chars)


def _scan_json_object(data: str, depth: int) -> Scanned:
    if depth > MAX_JSON_DEPTH:
        raise MalformedBraceError(
            f"Invalid JSON object encountered: nested deeper than {MAX_JSON_DEPTH}"
        )
    pos = _skip_whitespace(data, 1)

    while True:
        if data.startswith("}", pos):
            return _scanned(data, pos + 1)
        if pos >= len(data):
            raise MalformedBraceError()

        key = scan_json_string(data[pos:])
        pos = _skip_whitespace(data, pos + key.chars)
        if not data.startswith(":", pos):
            raise MalformedBraceError(
                f"Invalid JSON object encountered: no delimiter after key {key.text}"
            )
        pos = _skip_whitespace(data, pos + 1)

        value = scan_json_value(data[pos:], depth)
        pos = _skip_separator(data, pos + value.chars)


def _skip_separator(data: str, pos: int) -> int:
    pos = _skip_whitespace(data, pos)
    if data.startswith(",", pos):
        pos += 1
    return _skip_whitespace(data, pos)


def _scan_json_primitive(data: str) -> Scanned:
    match = JSON_PRIMITIVE_RE.match(data)
    if match:
        return _scanned(data, match.end())
    if data.startswith('"'):
        return scan_json_string(data)
    raise InvalidPrimitiveError()
