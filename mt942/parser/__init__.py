"""MT942 message decoding pipeline."""

from mt942.parser.assembler import StatementAssembler
from mt942.parser.envelope import split
from mt942.parser.fields import FieldDecoder, decode, normalize_amount
from mt942.parser.lines import reconstruct
from mt942.parser.models import (
    DateTimeIndication,
    DecodedField,
    EntrySummary,
    Envelope,
    FloorLimit,
    LogicalLine,
    Statement,
    StatementLine,
    StatementSequence,
)
from mt942.parser.statement_parser import Parser, parse

__all__ = [
    "DateTimeIndication",
    "DecodedField",
    "EntrySummary",
    "Envelope",
    "FieldDecoder",
    "FloorLimit",
    "LogicalLine",
    "Parser",
    "Statement",
    "StatementAssembler",
    "StatementLine",
    "StatementSequence",
    "decode",
    "normalize_amount",
    "parse",
    "reconstruct",
    "split",
]
