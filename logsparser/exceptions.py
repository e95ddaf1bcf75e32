"""Standardized exceptions for logsparser.

Scanner primitives raise ScanError subclasses. Parsers catch them and
report a ParseError in their outcome instead of raising, so a malformed
line never aborts processing of the rest of the input.
"""

# =============================================================================
# Base
# =============================================================================


class LogsParserException(Exception):
    """Base exception for logsparser errors."""

    def __init__(
        self,
        message: str,
        code: str = "INTERNAL_ERROR",
    ):
        self.message = message
        self.code = code
        super().__init__(message)


class ParseError(LogsParserException):
    """A parser accepted a line but found it malformed."""

    def __init__(
        self,
        message: str,
        code: str = "PARSE_ERROR",
        cause: "ScanError | None" = None,
    ):
        self.cause = cause
        super().__init__(message=message, code=code)

    @classmethod
    def wrap(cls, context: str, error: "ScanError") -> "ParseError":
        """Wrap a scanner error with the context it occurred in."""
        return cls(f"{context}: {error.message}", code=error.code, cause=error)


# =============================================================================
# Scanner errors
# =============================================================================


class ScanError(ParseError):
    """Syntax error found by a scanner primitive."""

    default_message = "Invalid input encountered"
    default_code = "SCAN_ERROR"

    def __init__(self, message: str | None = None):
        super().__init__(
            message=message or self.default_message,
            code=self.default_code,
        )


class MalformedEscapeError(ScanError):
    """Input ended in the middle of an escape sequence."""

    default_message = "Invalid escape sequence encountered in JSON string"
    default_code = "MALFORMED_ESCAPE"


class MalformedQuoteError(ScanError):
    """A JSON string is missing its opening or closing quote."""

    default_message = "Invalid JSON string encountered: missing closing quote"
    default_code = "MALFORMED_QUOTE"


class MalformedBracketError(ScanError):
    """A JSON array is missing a bracket."""

    default_message = "Invalid JSON array encountered: no closing bracket"
    default_code = "MALFORMED_BRACKET"


class MalformedBraceError(ScanError):
    """A JSON object is missing a brace or a key delimiter."""

    default_message = "Invalid JSON object encountered: no closing brace"
    default_code = "MALFORMED_BRACE"


class InvalidPrimitiveError(ScanError):
    """Input is not a JSON primitive this scanner recognises."""

    default_message = "Invalid JSON primitive encountered"
    default_code = "INVALID_PRIMITIVE"
