"""Assemble decoded fields into one Statement record."""

from typing import Dict, Iterable, List, Optional

from mt942.config.settings import ORPHAN_POLICIES
from mt942.parser.fields import FieldDecoder
from mt942.parser.models import LogicalLine, Statement, StatementLine
from mt942.utils.exceptions import FieldGrammarMismatch, OrphanInformation
from mt942.utils.logger import get_logger


class StatementAssembler:
    """Merges logical lines into a Statement, linking :86: lines to :61: lines.

    :86: lines carry no identifier of their own. They belong to the most
    recent :61: line, tracked with a sequence counter that lives only for
    the duration of one assemble() call.
    """

    def __init__(
        self,
        decoder: Optional[FieldDecoder] = None,
        orphan_information: str = "notes"
    ) -> None:
        """Initialize statement assembler.

        Args:
            decoder: Field decoder to use; a default one is created if None.
            orphan_information: What to do with :86: lines seen before any
                :61: line: "notes", "drop" or "error".
        """
        if orphan_information not in ORPHAN_POLICIES:
            raise ValueError(
                f"Unknown orphan information policy '{orphan_information}'. "
                f"Expected one of: {', '.join(ORPHAN_POLICIES)}"
            )

        self.logger = get_logger(__name__)
        self.decoder = decoder or FieldDecoder()
        self.orphan_information = orphan_information

    def assemble(
        self,
        lines: Iterable[LogicalLine],
        block1: str = "",
        block2: str = "",
    ) -> Statement:
        """Decode logical lines in order and merge them into a Statement.

        Args:
            lines: Logical lines in body order.
            block1: Basic header of the message.
            block2: Application header of the message.

        Returns:
            Assembled Statement.

        Raises:
            OrphanInformation: If an orphan :86: line is found and the
                policy is "error".
        """
        statement = Statement(block1=block1, block2=block2)
        information_lines: Dict[int, List[str]] = {}
        sequence = 0

        for line in lines:
            if line.tag == "61":
                # Increment before decoding so following :86: lines see it
                sequence += 1

            try:
                decoded = self.decoder.decode(line.tag, line.text)
            except FieldGrammarMismatch as e:
                self.logger.warning(f"Line {line.line_number}: {str(e)}")
                statement.errors.append(e)
                if line.tag == "61":
                    statement.lines.append(StatementLine(sequence=sequence))
                continue

            if decoded is None:
                continue

            if line.tag == "61":
                decoded.value.sequence = sequence
                statement.lines.append(decoded.value)
            elif line.tag == "86":
                information_lines.setdefault(sequence, []).append(decoded.value)
            else:
                if decoded.key in statement.fields:
                    self.logger.warning(
                        f"Line {line.line_number}: field '{decoded.key}' repeated, "
                        f"keeping the last value"
                    )
                statement.fields[decoded.key] = decoded.value

        self._attach_information(statement, information_lines)

        self.logger.debug(
            f"Assembled {len(statement.lines)} statement lines, "
            f"{len(statement.fields)} fields, {len(statement.errors)} errors"
        )
        return statement

    def _attach_information(
        self,
        statement: Statement,
        information_lines: Dict[int, List[str]]
    ) -> None:
        """Move pending information values onto their statement lines."""
        by_sequence = {line.sequence: line for line in statement.lines}

        for sequence, values in information_lines.items():
            target = by_sequence.get(sequence)
            if target is not None:
                target.information.extend(values)
                continue

            for value in values:
                self._handle_orphan(statement, value)

    def _handle_orphan(self, statement: Statement, information: str) -> None:
        if self.orphan_information == "error":
            raise OrphanInformation(information)

        if self.orphan_information == "drop":
            self.logger.warning(f"Dropping information line without statement line: {information!r}")
            return

        self.logger.info("Keeping information line without statement line as a note")
        statement.fields.setdefault("notes", []).append(information)
