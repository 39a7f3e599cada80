"""Per-tag field grammars for MT942 block 4.

SWIFT MT character codes used in the grammar comments:

    n = numeric, a = uppercase letter, c = uppercase alphanumeric,
    d = decimal with "," separator, x = SWIFT character set,
    ! = fixed length, [] = optional

Each grammar is a small left-to-right scanner so that optional groups that
do not match come out as None and required groups that do not match raise
FieldGrammarMismatch.
"""

import string
from datetime import datetime, timedelta, timezone, date
from typing import Callable, Dict, Optional, Tuple, Any

from mt942.parser.models import (
    DateTimeIndication,
    DecodedField,
    EntrySummary,
    FloorLimit,
    StatementLine,
    StatementSequence,
)
from mt942.utils.exceptions import FieldGrammarMismatch
from mt942.utils.logger import get_logger

DIGITS = string.digits
ALPHA = string.ascii_uppercase
ALNUM = string.digits + string.ascii_letters
UPPER_ALNUM = string.digits + string.ascii_uppercase
AMOUNT_CHARS = string.digits + ","
SWIFT_X = string.ascii_letters + string.digits + "/-?:().,'+ "

# :86: is 6*65x
INFORMATION_LINE_LENGTH = 65
INFORMATION_MAX_LINES = 6


def normalize_amount(amount: Optional[str]) -> Optional[str]:
    """Replace the SWIFT decimal comma with a dot.

    String substitution only, so no precision is lost and the operation is
    idempotent.
    """
    if amount is None:
        return None
    return amount.replace(",", ".")


class FieldScanner:
    """Cursor over a field's text for fixed-width SWIFT grammars."""

    def __init__(self, text: str) -> None:
        self.text = text
        self.pos = 0

    @property
    def at_end(self) -> bool:
        return self.pos >= len(self.text)

    def peek(self, length: int = 1) -> str:
        return self.text[self.pos:self.pos + length]

    def take(self, charset: str, min_len: int = 1, max_len: Optional[int] = None) -> Optional[str]:
        """Consume the longest run of `charset` characters, up to `max_len`.

        Returns None without moving the cursor when the run is shorter than
        `min_len`.
        """
        limit = len(self.text)
        if max_len is not None:
            limit = min(limit, self.pos + max_len)

        end = self.pos
        while end < limit and self.text[end] in charset:
            end += 1

        if end - self.pos < min_len or end == self.pos:
            return None

        value = self.text[self.pos:end]
        self.pos = end
        return value

    def take_exact(self, charset: str, length: int) -> Optional[str]:
        return self.take(charset, length, length)

    def take_sequence(self, *charsets: str) -> Optional[str]:
        """Consume one character per charset, all or nothing."""
        chunk = self.peek(len(charsets))
        if len(chunk) != len(charsets):
            return None
        if not all(char in charset for char, charset in zip(chunk, charsets)):
            return None
        self.pos += len(chunk)
        return chunk

    def take_literal(self, literal: str) -> bool:
        if self.text.startswith(literal, self.pos):
            self.pos += len(literal)
            return True
        return False

    def rest(self) -> str:
        value = self.text[self.pos:]
        self.pos = len(self.text)
        return value


class FieldDecoder:
    """Decodes the text of a tagged field into its typed value."""

    def __init__(self, apply_time_offset: bool = False) -> None:
        """Initialize field decoder.

        Args:
            apply_time_offset: Interpret :13D: times in their own UTC offset
                rather than in local time.
        """
        self.logger = get_logger(__name__)
        self.apply_time_offset = apply_time_offset

        self._decoders: Dict[str, Callable[[str], Tuple[str, Any]]] = {
            "20": self.decode_reference,
            "21": self.decode_related_reference,
            "25": self.decode_account_number,
            "28C": self.decode_statement_sequence,
            "34F": self.decode_floor_limit,
            "13D": self.decode_date_time,
            "61": self.decode_statement_line,
            "86": self.decode_information,
            "90D": self.decode_debits,
            "90C": self.decode_credits,
        }

    @property
    def supported_tags(self):
        return sorted(self._decoders)

    def decode(self, tag: str, text: str) -> Optional[DecodedField]:
        """Decode one field.

        Args:
            tag: Field tag without colons.
            text: Field content.

        Returns:
            DecodedField, or None for tags without a grammar.

        Raises:
            FieldGrammarMismatch: If a required group of the grammar fails.
        """
        decoder = self._decoders.get(tag)
        if decoder is None:
            self.logger.debug(f"Skipping unsupported field :{tag}:")
            return None

        key, value = decoder(text)
        return DecodedField(tag=tag, key=key, value=value)

    # Transaction Reference Number | 16x
    def decode_reference(self, text: str) -> Tuple[str, str]:
        return "reference", self._alphanumeric("20", text, 16)

    # Related Reference | 16x
    def decode_related_reference(self, text: str) -> Tuple[str, str]:
        return "related_reference", self._alphanumeric("21", text, 16)

    # Account Identification | 35x
    def decode_account_number(self, text: str) -> Tuple[str, str]:
        return "account_number", self._alphanumeric("25", text, 35)

    # Statement Number / Sequence Number | 5n[/5n]
    def decode_statement_sequence(self, text: str) -> Tuple[str, StatementSequence]:
        scanner = FieldScanner(text)

        statement_number = scanner.take(DIGITS, 1, 5)
        if statement_number is None:
            raise FieldGrammarMismatch("28C", text, "statement number must be 1-5 digits")

        sequence_number = None
        if scanner.take_literal("/"):
            sequence_number = scanner.take(DIGITS, 1, 5)

        return "statement_sequence", StatementSequence(
            statement_number=statement_number,
            sequence_number=sequence_number,
        )

    # Floor Limit Indicator | 3!a[1!a]15d
    def decode_floor_limit(self, text: str) -> Tuple[str, FloorLimit]:
        scanner = FieldScanner(text)

        currency = scanner.take_exact(ALPHA, 3)
        if currency is None:
            raise FieldGrammarMismatch("34F", text, "currency must be 3 letters")

        limit_type = scanner.take_exact(ALPHA, 1)
        amount = scanner.take(AMOUNT_CHARS, 1, 15)
        if amount is None:
            raise FieldGrammarMismatch("34F", text, "amount is missing")

        floor = FloorLimit(currency=currency, type=limit_type, amount=normalize_amount(amount))
        key = "credit_floor" if floor.is_credit else "debit_floor"
        return key, floor

    # Date/Time Indication | 6!n4!n1!x4!n
    def decode_date_time(self, text: str) -> Tuple[str, DateTimeIndication]:
        scanner = FieldScanner(text)

        day_part = scanner.take_exact(DIGITS, 6)
        time_part = scanner.take_exact(DIGITS, 4)
        sign = scanner.take_exact("+-", 1)
        offset = scanner.take_exact(DIGITS, 4)
        if None in (day_part, time_part, sign, offset):
            raise FieldGrammarMismatch("13D", text, "expected YYMMDDHHMM+HHMM")

        try:
            moment = datetime(
                2000 + int(day_part[0:2]),
                int(day_part[2:4]),
                int(day_part[4:6]),
                int(time_part[0:2]),
                int(time_part[2:4]),
            )
        except ValueError as e:
            raise FieldGrammarMismatch("13D", text, str(e))

        if self.apply_time_offset:
            delta = timedelta(hours=int(offset[0:2]), minutes=int(offset[2:4]))
            try:
                tz = timezone(delta if sign == "+" else -delta)
            except ValueError as e:
                raise FieldGrammarMismatch("13D", text, f"invalid UTC offset: {e}")
            moment = moment.replace(tzinfo=tz)
        else:
            moment = moment.astimezone()

        return "date_time", DateTimeIndication(
            timestamp=int(moment.timestamp()),
            iso_date=moment.isoformat(),
            offset=sign + offset,
        )

    # Statement Line | 6!n[4!n]2a[1!a]15d1!a3!c16x[//16x]
    #                  [34x]
    def decode_statement_line(self, text: str) -> Tuple[str, StatementLine]:
        first, _, supplementary = text.partition("\n")
        scanner = FieldScanner(first)

        value_date = scanner.take_exact(DIGITS, 6)
        if value_date is None:
            raise FieldGrammarMismatch("61", text, "value date must be YYMMDD")

        try:
            parsed_value_date = date(
                2000 + int(value_date[0:2]), int(value_date[2:4]), int(value_date[4:6])
            )
        except ValueError as e:
            raise FieldGrammarMismatch("61", text, f"invalid value date: {e}")

        entry_date = scanner.take_exact(DIGITS, 4)

        # Reversals carry a two letter mark (RC, RD)
        if scanner.peek(2) in ("RC", "RD"):
            indicator = scanner.take_exact(ALPHA, 2)
        else:
            indicator = scanner.take_exact(ALPHA, 1)
        if indicator is None:
            raise FieldGrammarMismatch("61", text, "debit/credit mark is missing")

        funds_code = scanner.take_exact(ALPHA, 1)
        amount = scanner.take(AMOUNT_CHARS, 1, 15)
        if amount is None:
            raise FieldGrammarMismatch("61", text, "amount is missing")

        transaction_code = scanner.take_sequence(ALPHA, UPPER_ALNUM, UPPER_ALNUM, UPPER_ALNUM)

        customer_ref, separator, institution_ref = scanner.rest().partition("//")
        details = supplementary.split("\n")[0]

        return "lines", StatementLine(
            value_date=parsed_value_date,
            entry_month=entry_date[0:2] if entry_date else None,
            entry_day=entry_date[2:4] if entry_date else None,
            indicator=indicator,
            funds_code=funds_code,
            amount=normalize_amount(amount),
            transaction_code=transaction_code,
            customer_ref=self._truncate("customer reference", customer_ref, 16),
            institution_ref=self._truncate("institution reference", institution_ref, 16) if separator else None,
            details=self._truncate("details", details, 34),
        )

    # Information to Account Owner | 6*65x
    def decode_information(self, text: str) -> Tuple[str, str]:
        lines = []
        for line in text.split("\n")[:INFORMATION_MAX_LINES]:
            scanner = FieldScanner(line)
            # Keep the first valid run even when the line opens with other characters
            while not scanner.at_end and scanner.peek() not in SWIFT_X:
                scanner.pos += 1
            if scanner.pos:
                self.logger.debug(f"Skipped {scanner.pos} leading characters in :86: line {line!r}")

            matched = scanner.take(SWIFT_X, 1, INFORMATION_LINE_LENGTH)
            if matched is not None:
                lines.append(matched)

        if not lines:
            raise FieldGrammarMismatch("86", text, "no SWIFT characters found")

        return "information", "\n".join(lines)

    # Number and Sum of Debit Entries | 5n3!a15d
    def decode_debits(self, text: str) -> Tuple[str, EntrySummary]:
        return "debits", self._entry_summary("90D", text)

    # Number and Sum of Credit Entries | 5n3!a15d
    def decode_credits(self, text: str) -> Tuple[str, EntrySummary]:
        return "credits", self._entry_summary("90C", text)

    def _alphanumeric(self, tag: str, text: str, max_len: int) -> str:
        value = FieldScanner(text).take(ALNUM, 1, max_len)
        if value is None:
            raise FieldGrammarMismatch(tag, text, "expected alphanumeric characters")
        return value

    def _truncate(self, name: str, value: str, max_len: int) -> Optional[str]:
        if len(value) > max_len:
            self.logger.debug(f"Truncated :61: {name} {value!r} to {max_len} characters")
        return value[:max_len] or None

    def _entry_summary(self, tag: str, text: str) -> EntrySummary:
        scanner = FieldScanner(text)

        entries = scanner.take(DIGITS, 1, 5)
        currency = scanner.take_exact(ALPHA, 3)
        if currency is None:
            raise FieldGrammarMismatch(tag, text, "currency must be 3 letters")

        amount = scanner.take(AMOUNT_CHARS, 1, 15)
        if amount is None:
            raise FieldGrammarMismatch(tag, text, "amount is missing")

        return EntrySummary(entries=entries, currency=currency, amount=normalize_amount(amount))


def decode(tag: str, text: str) -> Optional[DecodedField]:
    """Decode one field with default settings."""
    return FieldDecoder().decode(tag, text)
