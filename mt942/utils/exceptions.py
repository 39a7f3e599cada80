"""Exception hierarchy for MT942 statement parsing."""

from typing import Optional


class MT942Error(Exception):
    """Base exception for all MT942 parsing errors."""
    pass


class MalformedEnvelope(MT942Error):
    """Raised when blocks 1, 2 and 4 cannot be located in a message."""
    pass


class MalformedLine(MT942Error):
    """Raised when a body line cannot be attributed to a tagged field."""

    def __init__(self, message: str, line_number: Optional[int] = None) -> None:
        super().__init__(message)
        self.line_number = line_number


class FieldGrammarMismatch(MT942Error):
    """Raised when a field's text does not satisfy its required groups.

    The assembler treats this as recoverable: the error is recorded against
    the statement and decoding continues with the next line.
    """

    def __init__(self, tag: str, text: str, reason: str) -> None:
        super().__init__(f"Field :{tag}: does not match its grammar: {reason}")
        self.tag = tag
        self.text = text
        self.reason = reason


class UnknownTag(MT942Error):
    """Tag code without a registered decoder."""

    def __init__(self, tag: str) -> None:
        super().__init__(f"Unsupported field tag :{tag}:")
        self.tag = tag


class OrphanInformation(MT942Error):
    """Raised when an information line precedes every statement line."""

    def __init__(self, information: str) -> None:
        super().__init__(
            f"Information line has no preceding statement line: {information!r}"
        )
        self.information = information


class ValidationError(MT942Error):
    """Custom exception for validation errors."""
    pass


class ExcelConversionError(MT942Error):
    """Custom exception for Excel conversion errors."""
    pass
