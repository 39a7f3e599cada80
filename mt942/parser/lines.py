"""Reassemble block 4 body lines into tagged logical lines."""

import re
from typing import List

from mt942.parser.models import LogicalLine
from mt942.utils.exceptions import MalformedLine

RE_TAG = re.compile(r"^:(?P<tag>[0-9A-Z]+):(?P<text>.*)$")


def reconstruct(body: str) -> List[LogicalLine]:
    """
    Join physically wrapped body lines onto the tagged line they continue.

    A line starting with ":" opens a new field. Every other line belongs to
    the field above it and is appended with a "\\n" so the field grammars
    can still see the physical line boundaries (the :61: supplementary
    details and the multi-line :86: text rely on them).
    """
    lines: List[LogicalLine] = []
    tag = None
    parts: List[str] = []
    start = 0

    for line_number, raw in enumerate(body.strip().splitlines(), start=1):
        line = raw.strip()
        if not line:
            continue

        if not line.startswith(":"):
            if tag is None:
                raise MalformedLine(
                    f"Line {line_number} does not start with a field tag: {line!r}",
                    line_number=line_number,
                )
            parts.append(line)
            continue

        m = RE_TAG.match(line)
        if m is None:
            raise MalformedLine(
                f"Line {line_number} has no :<tag>: prefix: {line!r}",
                line_number=line_number,
            )

        if tag is not None:
            lines.append(LogicalLine(tag=tag, text="\n".join(parts), line_number=start))

        tag = m.group("tag")
        parts = [m.group("text")]
        start = line_number

    if tag is not None:
        lines.append(LogicalLine(tag=tag, text="\n".join(parts), line_number=start))

    return lines
