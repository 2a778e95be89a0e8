# orbit_map/core/orbits/ingest.py
"""
INGEST MODULE - Get orbit relationships out of raw map lines

Purpose:
    1. Read the map file (or uploaded bytes) in one go
    2. Split it into lines, whatever the line endings are
    3. Turn each "AAA)BBB" line into a Relationship record

Data Flow:
    file/upload → read_map_file() / decode_map() → parse_lines() → relationships
"""

import logging
import re
from pathlib import Path
from typing import Iterable, List, Union

from orbit_map.core.errors import InputReadError, MalformedLineError
from orbit_map.core.schemas import Relationship

logger = logging.getLogger(__name__)

SEPARATOR = ")"

# Only \n, \r\n and \r end a line; str.splitlines() would also split on
# \x0b, \x0c, \x1c-\x1e, \x85, \u2028 and \u2029, which are valid in identifiers
LINE_BREAK = re.compile(r"\r\n|\r|\n")


# ============================================================================
# STEP 1: READ RAW LINES FROM SOURCE
# ============================================================================


def split_lines(text: str) -> List[str]:
    """Split text on standard line endings, ignoring a final terminator."""
    lines = LINE_BREAK.split(text)
    if lines[-1] == "":
        lines.pop()
    return lines


def decode_map(content: bytes) -> List[str]:
    """
    Decode uploaded map content and split it into lines.

    Handles:
        - UTF-8 encoding (the normal case)
        - "\\n", "\\r\\n" and "\\r" line endings

    Example:
        b"COM)B\\r\\nB)C\\r\\n" → ["COM)B", "B)C"]
    """
    try:
        text = content.decode("utf-8")
    except UnicodeDecodeError:
        # Fallback for maps saved by old editors
        text = content.decode("latin-1")

    return split_lines(text)


def read_map_file(path: Union[str, Path]) -> List[str]:
    """
    Read the whole map file before anything is parsed.

    Raises:
        InputReadError: the file is missing, unreadable or not valid UTF-8
    """
    path = Path(path)
    try:
        text = path.read_text(encoding="utf-8")
    except (OSError, UnicodeDecodeError) as e:
        raise InputReadError(str(path), str(e)) from e

    lines = split_lines(text)
    logger.info(f"Read {len(lines)} lines from {path}")
    return lines


# ============================================================================
# STEP 2: PARSE LINES INTO RELATIONSHIPS
# ============================================================================


def parse_line(line: str) -> Relationship:
    """
    Decode one orbital relationship.

    "AAA)BBB" means BBB is in orbit around AAA. Identifiers are kept verbatim,
    no trimming or case folding.

    Raises:
        MalformedLineError: no separator, more than one, or an empty side

    Example:
        "COM)B" → Relationship(parent="COM", name="B")
    """
    line = line.rstrip("\r\n")
    if line.count(SEPARATOR) != 1:
        raise MalformedLineError(line)

    parent, _, name = line.partition(SEPARATOR)
    if not parent or not name:
        raise MalformedLineError(line)

    return Relationship(parent=parent, name=name)


def parse_lines(lines: Iterable[str]) -> List[Relationship]:
    """
    Parse every line of a map, keeping the source order.

    Blank and whitespace-only lines are skipped, so trailing newlines or
    padding at the end of a file do not count as records.
    Errors are re-raised with the 1-based line number attached.
    """
    relationships: List[Relationship] = []
    for line_number, line in enumerate(lines, start=1):
        line = line.rstrip("\r\n")
        if not line.strip():
            continue
        try:
            relationships.append(parse_line(line))
        except MalformedLineError:
            raise MalformedLineError(line, line_number) from None

    logger.debug(f"Parsed {len(relationships)} relationships")
    return relationships
