"""Go klog prefix parser.

Parses the metadata, header and display message part of a klog line::

    I0123 12:34:56.789012   12345 file.go:67] controller "Event occurred" foo="bar"
    ^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^^
                                  only this part, up to foo="bar"

The key-value parameters are left in the remainder for GoKlogParamsParser.
The two are split because several klog variants share the prefix.

More info about klog:
https://kubernetes.io/docs/concepts/cluster-administration/system-logs/
https://github.com/kubernetes/klog/tree/main/textlogger
"""

import logging
import re
from dataclasses import dataclass

from logsparser.exceptions import ParseError, ScanError
from logsparser.message import (
    LEVEL_DEBUG,
    LEVEL_ERROR,
    LEVEL_INFO,
    LEVEL_WARN,
    StructuredMessage,
)
from logsparser.parsers.base import BaseParser, ParseOutcome, ParserMetadata
from logsparser.parsers.params import KeyValueScanner
from logsparser.parsers.registry import register_parser
from logsparser.parsers.scanner import scan_and_parse_json_string_or_literal, scan_literal

logger = logging.getLogger(__name__)

KLOG_PREFIX_RE = re.compile(
    r"""
    ^
    (?P<level>[A-Z])
    (?P<code>[0-9]{4})
    \x20
    (?P<time>[0-9]{2}:[0-9]{2}:[0-9]{2}\.[0-9]+)
    \x20+
    [0-9]+                          # pid
    \x20
    (?P<source_file>\S+\.go)
    :
    (?P<source_line>[0-9]+)
    \]\x20*
    (?P<payload>.*)
    \Z
    """,
    re.VERBOSE | re.DOTALL,
)

LEVELS = {
    "E": LEVEL_ERROR,
    "W": LEVEL_WARN,
    "I": LEVEL_INFO,
    "D": LEVEL_DEBUG,
}


@dataclass
class KlogPayload:
    """Structured decomposition of a klog payload."""

    header: str | None
    display_message: str | None
    params: str


@register_parser
class GoKlogPrefixParser(BaseParser):
    """Parser for the fixed-width klog metadata prefix."""

    def __init__(self, debug: bool = False):
        super().__init__(debug=debug)
        self._params_scanner = KeyValueScanner(debug=debug)

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="go_klog_prefix",
            display_name="Go klog prefix",
            description="Kubernetes klog metadata, header and display message",
            priority=300,
        )

    def parse(self, message: StructuredMessage) -> ParseOutcome:
        match = KLOG_PREFIX_RE.match(message.unparsed_remainder)
        if not match:
            return ParseOutcome.declined()

        payload = match.group("payload")
        try:
            structured = self._parse_structured_payload(payload)
        except ParseError as e:
            return ParseOutcome.failed(e)

        level = match.group("level")
        message.level = LEVELS.get(level, level)
        message.time = match.group("time")
        message.properties["code"] = match.group("code")
        message.properties["source_file"] = match.group("source_file")
        message.properties["source_line"] = int(match.group("source_line"))

        if structured is None:
            message.display_message = payload
            message.clear_remainder()
            return ParseOutcome.ok()

        if structured.header:
            message.properties["header"] = structured.header
        if structured.display_message:
            message.display_message = structured.display_message
        message.shrink_remainder(structured.params)

        return ParseOutcome.ok()

    def _parse_structured_payload(self, payload: str) -> KlogPayload | None:
        """Split a payload into header, display message and parameters.

        A token directly followed by ``=`` is the key of a parameter, never
        a header or display message.

        Returns:
            KlogPayload, or None when the parameter part does not look like
            a well-formed parameter list

        Raises:
            ParseError: The display message is a malformed JSON string
        """
        pos = 0

        # Scan optional header
        header = ""
        if not payload.startswith('"'):
            header, header_size, _ = scan_literal(payload)
            if header:
                if payload.startswith("=", header_size):
                    header = ""
                else:
                    pos = self._skip_spaces(payload, header_size)

        # Scan optional display message
        try:
            display_message, display_message_size, _ = scan_and_parse_json_string_or_literal(
                payload[pos:]
            )
        except ScanError as e:
            raise ParseError.wrap("Error parsing display message", e) from e
        if display_message:
            if payload.startswith("=", pos + display_message_size):
                display_message = ""
            else:
                pos = self._skip_spaces(payload, pos + display_message_size)

        params = payload[pos:]
        if params and not self._looks_like_params(params, pos):
            return None

        return KlogPayload(
            header=header or None,
            display_message=display_message or None,
            params=params,
        )

    def _looks_like_params(self, params: str, offset: int) -> bool:
        try:
            scanned = self._params_scanner.scan(params, lenient=False, offset=offset)
        except ParseError as e:
            if self.debug:
                logger.debug(f"Treating payload as unstructured: {e}")
            return False
        return scanned.chars > 0

    @staticmethod
    def _skip_spaces(data: str, pos: int) -> int:
        while data.startswith(" ", pos):
            pos += 1
        return pos
