"""The structured message threaded through the parse pipeline.

One StructuredMessage is created per input line. Parsers consume its
``unparsed_remainder`` and fill in the other fields; post-processors then
promote raw properties into the canonical fields.
"""

from dataclasses import dataclass, field
from datetime import datetime
from typing import Any, Union

# Closed set of values a property can hold.
JSONValue = Union[
    None,
    bool,
    int,
    float,
    str,
    list["JSONValue"],
    dict[str, "JSONValue"],
]

LEVEL_ERROR = "error"
LEVEL_WARN = "warn"
LEVEL_INFO = "info"
LEVEL_DEBUG = "debug"


@dataclass
class StructuredMessage:
    """Normalized record for one log line.

    Fields:
        raw: Original line text. Cannot be reassigned.
        unparsed_remainder: Suffix of the payload no parser has consumed
            yet. Only ever shrinks; empty string when nothing is left.
        timestamp: Canonical instant, set by post-processing only.
        time: Raw time-of-day text such as ``12:34:56.789``.
        level: Canonical severity or a passthrough raw value.
        display_message: Human-readable payload.
        properties: Remaining key/value pairs, in insertion order.
    """

    raw: str
    unparsed_remainder: str = ""
    timestamp: datetime | None = None
    time: str | None = None
    level: str | None = None
    display_message: str | None = None
    properties: dict[str, JSONValue] = field(default_factory=dict)

    def __setattr__(self, name: str, value: Any) -> None:
        if name == "raw" and "raw" in self.__dict__:
            raise AttributeError("raw cannot be modified once set")
        super().__setattr__(name, value)

    @classmethod
    def from_line(cls, line: str) -> "StructuredMessage":
        """Create the initial message for a line."""
        return cls(raw=line, unparsed_remainder=line, properties={})

    def shrink_remainder(self, rest: str) -> None:
        """Replace the remainder with one of its own suffixes."""
        if not self.unparsed_remainder.endswith(rest):
            raise ValueError("unparsed remainder can only shrink")
        self.unparsed_remainder = rest

    def clear_remainder(self) -> None:
        self.unparsed_remainder = ""

    def merge_properties(self, properties: dict[str, JSONValue]) -> None:
        """Merge parsed properties. Existing keys are overwritten."""
        self.properties.update(properties)

    def to_dict(self) -> dict[str, Any]:
        """Flat view consumed by output formatters."""
        result: dict[str, Any] = {}
        if self.timestamp:
            result["@timestamp"] = self.timestamp.isoformat()
        elif self.time:
            result["@time"] = self.time
        if self.level:
            result["@level"] = self.level
        if self.display_message is not None:
            result["@message"] = self.display_message
        result.update(self.properties)
        return result
