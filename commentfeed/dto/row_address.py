from __future__ import annotations
from dataclasses import dataclass

from commentfeed.enum.section_id import SectionId


@dataclass(frozen=True, slots=True, order=True)
class RowAddress:
    """(section, row) position in the display list."""

    section: SectionId
    row: int
