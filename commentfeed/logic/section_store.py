"""
===============================================================================
SectionStore – ordered, section-partitioned rows of the comment feed
-------------------------------------------------------------------------------
Purpose:
    Hold the rows of the display list, addressable by (section, row index).
    Every section is an independent ordered list; there is no cross-section
    ordering.

Ownership:
    Owned by exactly one CommentsDataSource. Readers get tuple snapshots via
    rows_in() and never mutate rows directly.

Threading:
    None. Single writer; callers serialize all calls.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Dict, List, Tuple

from commentfeed.dto.row import Row
from commentfeed.enum.section_id import SectionId
from commentfeed.exceptions.errors import RowIndexError

logger = logging.getLogger(__name__)


class SectionStore:
    """In-memory rows per SectionId."""

    def __init__(self) -> None:
        self._sections: Dict[SectionId, List[Row]] = {s: [] for s in SectionId}

    # ------------------------------------------------------------------ #
    # Mutation
    # ------------------------------------------------------------------ #
    def clear_all(self) -> None:
        for rows in self._sections.values():
            rows.clear()

    def clear_section(self, section: SectionId) -> None:
        self._sections[section].clear()

    def append(self, section: SectionId, row: Row) -> int:
        """Add `row` at the end of `section` and return its index."""
        rows = self._sections[section]
        rows.append(row)
        return len(rows) - 1

    def insert_at(self, section: SectionId, index: int, row: Row) -> int:
        """
        Insert `row` before `index`, shifting later rows up by one.

        Raises
        ------
        RowIndexError
            If index is outside 0..count (inclusive); nothing is inserted.
        """
        rows = self._sections[section]
        if not 0 <= index <= len(rows):
            raise RowIndexError(section, index, len(rows))
        rows.insert(index, row)
        return index

    def replace_at(self, section: SectionId, index: int, row: Row) -> None:
        """
        Overwrite the row at an existing index.

        Raises
        ------
        RowIndexError
            If the index does not exist; the store is left untouched.
        """
        rows = self._sections[section]
        if not 0 <= index < len(rows):
            logger.error(f"replace_at rejected: section={section.name} index={index} count={len(rows)}")
            raise RowIndexError(section, index, len(rows))
        rows[index] = row

    # ------------------------------------------------------------------ #
    # Read access
    # ------------------------------------------------------------------ #
    def rows_in(self, section: SectionId) -> Tuple[Row, ...]:
        return tuple(self._sections[section])

    def row_at(self, section: SectionId, index: int) -> Row:
        rows = self._sections[section]
        if not 0 <= index < len(rows):
            raise RowIndexError(section, index, len(rows))
        return rows[index]

    def count(self, section: SectionId) -> int:
        return len(self._sections[section])

    @property
    def number_of_sections(self) -> int:
        return len(self._sections)

    def is_empty(self) -> bool:
        return not any(self._sections.values())
