"""Parser facade: raw MT942 message in, statement record out."""

from typing import Any, Dict, Optional

from mt942.config.settings import Settings
from mt942.parser.assembler import StatementAssembler
from mt942.parser.envelope import split
from mt942.parser.fields import FieldDecoder
from mt942.parser.lines import reconstruct
from mt942.parser.models import Statement
from mt942.utils.logger import get_logger


class Parser:
    """Parses one MT942 message.

    Example:
        >>> Parser(document).process_statement()["block4"]["reference"]
    """

    def __init__(self, document: str, settings: Optional[Settings] = None) -> None:
        """Initialize parser.

        Args:
            document: Raw MT942 message text.
            settings: Optional settings; module defaults are used if None.
        """
        self.logger = get_logger(__name__)
        self.document = document
        self.settings = settings or Settings()

    def parse(self) -> Statement:
        """Run the full pipeline and return the typed statement.

        Raises:
            MalformedEnvelope: If blocks 1, 2 and 4 cannot be found.
            MalformedLine: If the body cannot be split into tagged fields.
            OrphanInformation: Only with the "error" orphan policy.
        """
        envelope = split(self.document)
        lines = reconstruct(envelope.block4_body)
        self.logger.debug(f"Reconstructed {len(lines)} logical lines")

        # A fresh assembler per call keeps the sequence counter call-local
        assembler = StatementAssembler(
            decoder=FieldDecoder(apply_time_offset=self.settings.apply_time_offset),
            orphan_information=self.settings.orphan_information,
        )
        statement = assembler.assemble(lines, block1=envelope.block1, block2=envelope.block2)

        if statement.errors:
            self.logger.warning(
                f"Parsed statement with {len(statement.errors)} field errors"
            )
        return statement

    def process_statement(self) -> Dict[str, Any]:
        """Parse the message into a plain dict with block1, block2 and block4."""
        return self.parse().to_dict()


def parse(document: str, settings: Optional[Settings] = None) -> Statement:
    """Parse an MT942 message into a Statement."""
    return Parser(document, settings).parse()
