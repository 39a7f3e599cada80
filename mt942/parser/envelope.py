"""Envelope splitting: locate blocks 1, 2 and 4 of a SWIFT FIN message."""

import re

from mt942.parser.models import Envelope
from mt942.utils.exceptions import MalformedEnvelope

# Block 3 (user header) is optional and skipped without validation. Block 4
# ends at the first line holding a lone "-" that closes the block.
ENVELOPE_PATTERN = re.compile(
    r"\{1:(?P<block1>[0-9A-Z]+)\}"
    r"\{2:(?P<block2>[0-9A-Z]+)\}"
    r"(?:\{3:(?:\{[^{}]*\})*\})?"
    r"\{4:(?P<body>.*?)\r?\n[ \t]*-[ \t]*\}",
    re.DOTALL,
)


def split(document: str) -> Envelope:
    """Split a raw MT942 message into its envelope blocks.

    Args:
        document: Raw message text.

    Returns:
        Envelope with block 1, block 2 and the untouched block 4 body.

    Raises:
        MalformedEnvelope: If the block structure is not found.
    """
    if not isinstance(document, str):
        raise MalformedEnvelope(
            f"Expected message text, got {type(document).__name__}"
        )

    match = ENVELOPE_PATTERN.search(document)
    if match is None:
        raise MalformedEnvelope(
            "Message does not contain a {1:...}{2:...}{4:...-} block structure"
        )

    return Envelope(
        block1=match.group("block1"),
        block2=match.group("block2"),
        block4_body=match.group("body"),
    )
