"""Parse and post-processing pipelines.

Pipeline:
  raw line
    → StructuredMessage
      → structural parsers, in order
        → leftover text adopted as display message
          → post-processors
            → ready for a formatter

Errors from one stage never stop the next stage, and nothing from one
line affects another.
"""

import logging
from collections.abc import Iterable, Iterator

from logsparser.exceptions import ParseError
from logsparser.message import StructuredMessage
from logsparser.parsers.base import BaseParser
from logsparser.processors.runner import ProcessorRunner

logger = logging.getLogger(__name__)


class ParsePipeline:
    """Runs structural parsers in order against one shared message."""

    def __init__(self, parsers: list[BaseParser], report_errors: bool = True):
        self.parsers = parsers
        self.report_errors = report_errors

    def run(self, message: StructuredMessage) -> list[ParseError]:
        """Run every parser against the message.

        Args:
            message: Message to mutate in place

        Returns:
            Errors reported by parsers, in stage order
        """
        errors = []
        for parser in self.parsers:
            outcome = parser.parse(message)
            if outcome.error is not None:
                errors.append(outcome.error)
                if self.report_errors:
                    logger.warning(f"Parse error: {outcome.error.message}")

        # No text is dropped: whatever is left becomes the display message
        if message.display_message is None and message.unparsed_remainder:
            message.display_message = message.unparsed_remainder
            message.clear_remainder()

        return errors


class LogsParser:
    """Turns log lines into processed StructuredMessages."""

    def __init__(self, pipeline: ParsePipeline, runner: ProcessorRunner):
        self.pipeline = pipeline
        self.runner = runner

    def parse(self, raw: str) -> StructuredMessage:
        """Create a message for a line and run the parse pipeline on it."""
        message = StructuredMessage.from_line(raw)
        self.pipeline.run(message)
        return message

    def postprocess(self, message: StructuredMessage) -> StructuredMessage:
        self.runner.run(message)
        return message

    def process_line(self, line: str) -> StructuredMessage:
        """Parse and post-process a single line."""
        return self.postprocess(self.parse(line))

    def process_lines(self, lines: Iterable[str]) -> Iterator[StructuredMessage]:
        """Process lines in order, skipping empty ones.

        Args:
            lines: Lines as read from a file or stream, separators included

        Yields:
            One processed message per non-empty line
        """
        for line in lines:
            line = line.strip()
            if not line:
                continue
            yield self.process_line(line)
