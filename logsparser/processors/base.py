"""Base post-processor interface.

Post-processors run after parsing and promote raw properties into the
canonical fields of a StructuredMessage.
"""

from abc import ABC, abstractmethod

from logsparser.message import StructuredMessage


class BaseProcessor(ABC):
    """Abstract base class for post-processors.

    Subclasses must implement:
    - name: Unique processor identifier
    - process(): The processing logic

    Processing must be idempotent: running a processor twice on the same
    message changes nothing the second time.
    """

    @property
    @abstractmethod
    def name(self) -> str:
        """Unique identifier for this processor."""
        ...

    @property
    def description(self) -> str:
        """Human-readable description."""
        return ""

    @property
    def enabled(self) -> bool:
        """Whether this processor is enabled."""
        return True

    @property
    def priority(self) -> int:
        """Priority for execution order (lower = higher priority)."""
        return 100

    @abstractmethod
    def process(self, message: StructuredMessage) -> bool:
        """Canonicalize the message in place.

        Args:
            message: Parsed message

        Returns:
            True if the message was changed
        """
        ...
