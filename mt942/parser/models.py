"""Data classes for decoded MT942 envelopes, fields and statements."""

from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal, InvalidOperation
from typing import Any, Dict, List, Optional


@dataclass(frozen=True)
class Envelope:
    """Blocks 1, 2 and 4 of a SWIFT FIN message."""
    block1: str
    block2: str
    block4_body: str


@dataclass(frozen=True)
class LogicalLine:
    """
    One tagged field of block 4 with its continuation lines re-joined.

    - tag: field code without colons, e.g. "61" or "28C"
    - text: field content; continuation lines are joined with "\\n"
    - line_number: physical body line (1-based) the field starts on
    """
    tag: str
    text: str
    line_number: int = 0


@dataclass
class StatementSequence:
    """Field 28C."""
    statement_number: str
    sequence_number: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "statement_number": self.statement_number,
            "sequence_number": self.sequence_number,
        }


@dataclass
class FloorLimit:
    """Field 34F, the debit or credit floor limit indicator."""
    currency: str
    amount: str
    type: Optional[str] = None

    @property
    def is_credit(self) -> bool:
        return self.type == "C"

    def to_dict(self) -> Dict[str, Any]:
        return {
            "currency": self.currency,
            "type": self.type,
            "amount": self.amount,
        }


@dataclass
class DateTimeIndication:
    """Field 13D. `offset` is the raw "+HHMM" / "-HHMM" suffix."""
    timestamp: int
    iso_date: str
    offset: str

    def to_dict(self) -> Dict[str, Any]:
        return {
            "timestamp": self.timestamp,
            "iso_date": self.iso_date,
            "offset": self.offset,
        }


@dataclass
class EntrySummary:
    """Fields 90D and 90C: number and sum of debit or credit entries."""
    currency: str
    amount: str
    entries: Optional[str] = None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "entries": self.entries,
            "currency": self.currency,
            "amount": self.amount,
        }


@dataclass
class StatementLine:
    """A decoded :61: statement line and the :86: lines that describe it."""
    sequence: int = 0
    value_date: Optional[date] = None
    entry_month: Optional[str] = None
    entry_day: Optional[str] = None
    indicator: Optional[str] = None
    funds_code: Optional[str] = None
    amount: Optional[str] = None
    transaction_code: Optional[str] = None
    customer_ref: Optional[str] = None
    institution_ref: Optional[str] = None
    details: Optional[str] = None
    information: List[str] = field(default_factory=list)

    @property
    def entry_date(self) -> Optional[date]:
        """Entry date with its year taken from the value date.

        Entries booked across a year end (value date in January, entry date
        in December or the reverse) are moved into the adjacent year.
        """
        if self.value_date is None or not self.entry_month or not self.entry_day:
            return None

        year = self.value_date.year
        month = int(self.entry_month)
        if month - self.value_date.month > 6:
            year -= 1
        elif self.value_date.month - month > 6:
            year += 1

        try:
            return date(year, month, int(self.entry_day))
        except ValueError:
            return None

    @property
    def amount_decimal(self) -> Optional[Decimal]:
        if self.amount is None:
            return None
        try:
            return Decimal(self.amount)
        except InvalidOperation:
            return None

    def to_dict(self) -> Dict[str, Any]:
        return {
            "sequence": self.sequence,
            "value_date": self.value_date.isoformat() if self.value_date else None,
            "entry_month": self.entry_month,
            "entry_day": self.entry_day,
            "indicator": self.indicator,
            "funds_code": self.funds_code,
            "amount": self.amount,
            "transaction_code": self.transaction_code,
            "customer_ref": self.customer_ref,
            "institution_ref": self.institution_ref,
            "details": self.details,
            "information": list(self.information),
        }


@dataclass(frozen=True)
class DecodedField:
    """Result of decoding one logical line: the output key and its value."""
    tag: str
    key: str
    value: Any


def _serialize(value: Any) -> Any:
    if hasattr(value, "to_dict"):
        return value.to_dict()
    if isinstance(value, list):
        return [_serialize(item) for item in value]
    return value


@dataclass
class Statement:
    """Assembled MT942 message."""
    block1: str = ""
    block2: str = ""
    fields: Dict[str, Any] = field(default_factory=dict)
    lines: List[StatementLine] = field(default_factory=list)
    errors: List[Exception] = field(default_factory=list)

    def to_dict(self) -> Dict[str, Any]:
        """Plain representation with exactly block1, block2 and block4."""
        block4 = {key: _serialize(value) for key, value in self.fields.items()}
        block4["lines"] = [line.to_dict() for line in self.lines]

        return {
            "block1": self.block1,
            "block2": self.block2,
            "block4": block4,
        }
