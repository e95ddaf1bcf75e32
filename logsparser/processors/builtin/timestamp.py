"""Timestamp post-processor.

Promotes an epoch or ISO-8601 time property into ``message.timestamp``.
"""

import logging
import re
from datetime import UTC, datetime

from logsparser.message import JSONValue, StructuredMessage
from logsparser.processors.base import BaseProcessor

logger = logging.getLogger(__name__)

NUMERIC_RE = re.compile(r"[0-9]+(\.[0-9]+)?")
ISO8601_RE = re.compile(
    r"[0-9]{4}-[0-9]{2}-[0-9]{2}T[0-9]{2}:[0-9]{2}:[0-9]{2}(\.[0-9]+)?(Z|[+-][0-9]{2}:[0-9]{2})"
)

# Property keys checked in order, and whether each accepts ISO-8601 text.
TIMESTAMP_KEYS = [
    ("ts", False),
    ("time", True),
]


class TimestampProcessor(BaseProcessor):
    """Parse ``ts`` (epoch seconds) or ``time`` into the message timestamp."""

    @property
    def name(self) -> str:
        return "timestamp"

    @property
    def description(self) -> str:
        return "Promote epoch or ISO-8601 time properties to the timestamp"

    @property
    def priority(self) -> int:
        return 10

    def process(self, message: StructuredMessage) -> bool:
        for key, allow_iso in TIMESTAMP_KEYS:
            if key not in message.properties:
                continue
            timestamp = self._parse(message.properties[key], allow_iso)
            if timestamp is not None:
                message.timestamp = timestamp
                del message.properties[key]
                return True
        return False

    def _parse(self, value: JSONValue, allow_iso: bool) -> datetime | None:
        if isinstance(value, bool):
            return None
        if isinstance(value, (int, float)):
            return self._from_epoch(value)
        if not isinstance(value, str):
            return None

        if NUMERIC_RE.fullmatch(value):
            return self._from_epoch(float(value))
        if allow_iso and ISO8601_RE.fullmatch(value):
            try:
                return datetime.fromisoformat(value.replace("Z", "+00:00"))
            except ValueError as e:
                logger.debug(f"Unparseable ISO-8601 timestamp {value!r}: {e}")
        return None

    @staticmethod
    def _from_epoch(value: float) -> datetime | None:
        try:
            return datetime.fromtimestamp(value, tz=UTC)
        except (OverflowError, OSError, ValueError) as e:
            logger.debug(f"Epoch value out of range {value!r}: {e}")
            return None
