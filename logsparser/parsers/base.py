"""Base parser interface and data structures.

Defines the abstract interface that all structural parsers must
implement. A parser looks at ``message.unparsed_remainder``, consumes
what it recognises and mutates the message in place.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass

from logsparser.exceptions import ParseError
from logsparser.message import StructuredMessage


@dataclass
class ParserMetadata:
    """Metadata describing a parser."""

    name: str
    display_name: str
    description: str
    priority: int = 50  # Higher = runs earlier in the pipeline


@dataclass
class ParseOutcome:
    """Result of running one parser against a message.

    Attributes:
        accepted: Whether the parser recognised the message. A parser that
            declines leaves the message untouched.
        error: Set when the parser accepted the message but found it
            malformed. Such errors should be reported to the user.
    """

    accepted: bool
    error: ParseError | None = None

    @classmethod
    def declined(cls) -> "ParseOutcome":
        return cls(accepted=False)

    @classmethod
    def ok(cls) -> "ParseOutcome":
        return cls(accepted=True)

    @classmethod
    def failed(cls, error: ParseError) -> "ParseOutcome":
        return cls(accepted=True, error=error)


class BaseParser(ABC):
    """Abstract base class for structural parsers.

    Subclasses implement the classmethod get_metadata() returning
    ParserMetadata, and parse().
    """

    _metadata: ParserMetadata | None = None

    def __init__(self, debug: bool = False):
        self.debug = debug

    @classmethod
    def get_metadata(cls) -> ParserMetadata | None:
        """Return parser metadata. Override in subclasses."""
        return None

    def _get_metadata(self) -> ParserMetadata | None:
        """Get cached metadata instance."""
        if self._metadata is None:
            self._metadata = self.__class__.get_metadata()
        return self._metadata

    @property
    def name(self) -> str:
        """Unique identifier for this parser."""
        meta = self._get_metadata()
        if meta:
            return meta.name
        return self.__class__.__name__.lower().replace("parser", "")

    @property
    def description(self) -> str:
        """Human-readable description of what this parser handles."""
        meta = self._get_metadata()
        if meta:
            return meta.description
        return ""

    @property
    def priority(self) -> int:
        meta = self._get_metadata()
        if meta:
            return meta.priority
        return 50

    @abstractmethod
    def parse(self, message: StructuredMessage) -> ParseOutcome:
        """Try to consume part of ``message.unparsed_remainder``.

        Args:
            message: Message to mutate in place

        Returns:
            ParseOutcome telling whether the message was accepted and
            whether it was malformed
        """
        ...
