"""Shared utilities: logging, validation and exceptions."""

from mt942.utils.exceptions import (
    ExcelConversionError,
    FieldGrammarMismatch,
    MalformedEnvelope,
    MalformedLine,
    MT942Error,
    OrphanInformation,
    UnknownTag,
    ValidationError,
)
