"""Locate the named sections of a task document."""

from __future__ import annotations

from typing import Dict, List, Sequence, Tuple

from .errors import SectionMalformed, SectionNotFound
from .models import SECTIONS

SEPARATOR = "---"


def header_for(section: str) -> str:
    return f"### {section}"


_HEADERS = {header_for(name): name for name in SECTIONS}


def section_range(lines: Sequence[str], section: str) -> Tuple[int, int]:
    """Return ``(header_index, separator_index)`` for ``section``.

    The body is ``lines[header_index + 1:separator_index]``. Raises
    SectionNotFound when the header line is absent and SectionMalformed when
    no separator closes the section before the end of the document or before
    another section header starts.
    """
    if section not in SECTIONS:
        raise SectionNotFound(f"Unknown section: {section!r}")

    header = header_for(section)
    try:
        start = list(lines).index(header)
    except ValueError:
        raise SectionNotFound(f"Section header {header!r} not found") from None

    for index in range(start + 1, len(lines)):
        line = lines[index]
        if line == SEPARATOR:
            return start, index
        if line in _HEADERS:
            raise SectionMalformed(
                f"Section {section} runs into {line!r} at line {index + 1} without a {SEPARATOR!r} separator"
            )

    raise SectionMalformed(f"Section {section} is not closed by a {SEPARATOR!r} separator")


def section_bodies(lines: Sequence[str]) -> Dict[str, List[str]]:
    """Return the body lines of every section, keyed by section name."""
    bodies: Dict[str, List[str]] = {}
    for name in SECTIONS:
        start, end = section_range(lines, name)
        bodies[name] = list(lines[start + 1:end])
    return bodies


def outside_lines(lines: Sequence[str]) -> List[Tuple[int, str]]:
    """Return ``(index, line)`` pairs that fall outside every section."""
    covered = set()
    for name in SECTIONS:
        start, end = section_range(lines, name)
        covered.update(range(start, end + 1))
    return [(index, line) for index, line in enumerate(lines) if index not in covered]
