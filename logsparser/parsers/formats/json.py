"""Generic JSON log parser.

Parses lines that are a single JSON object, merging its top-level fields
into the message properties.
"""

import logging

from logsparser.message import StructuredMessage
from logsparser.parsers.base import BaseParser, ParseOutcome, ParserMetadata
from logsparser.parsers.registry import register_parser
from logsparser.parsers.scanner import decode_json

logger = logging.getLogger(__name__)


@register_parser
class GenericJSONParser(BaseParser):
    """Parser for JSON log lines.

    Failing to decode is never an error: it only means the line is not
    JSON, so another parser (or the raw fallback) handles it.
    """

    @classmethod
    def get_metadata(cls) -> ParserMetadata:
        return ParserMetadata(
            name="json",
            display_name="JSON",
            description="Generic JSON log line parser",
            priority=100,
        )

    def parse(self, message: StructuredMessage) -> ParseOutcome:
        try:
            record = decode_json(message.unparsed_remainder)
        except ValueError as e:
            if self.debug:
                logger.debug(f"Not a JSON line: {e}")
            return ParseOutcome.declined()

        if not isinstance(record, dict):
            return ParseOutcome.declined()

        message.merge_properties(record)
        message.clear_remainder()
        return ParseOutcome.ok()
