"""
===============================================================================
Row Sink Protocol – contract of the list container the feed drives
-------------------------------------------------------------------------------
Purpose:
    Describe the minimal indexed operations a list container (table view,
    Treeview, web list) must support so CommentsFeedController can keep it
    in step with the CommentsDataSource.

Index contract:
    - insert() receives 0 or the current count (append).
    - replace() receives an index that already exists.
    - clear() empties one section.
===============================================================================
"""
from __future__ import annotations

from typing import Dict, List, Protocol, Tuple

from commentfeed.dto.row import RowPayload
from commentfeed.enum.representation_kind import RepresentationKind
from commentfeed.enum.section_id import SectionId
from commentfeed.exceptions.errors import SinkContractError


class RowSink(Protocol):
    """
    Indexed list container.

    Methods
    -------
    count(section) -> int
    insert(section, index, kind, payload) -> None
    replace(section, index, kind, payload) -> None
    clear(section) -> None
    """

    def count(self, section: SectionId) -> int:
        ...

    def insert(self, section: SectionId, index: int, kind: RepresentationKind, payload: RowPayload) -> None:
        ...

    def replace(self, section: SectionId, index: int, kind: RepresentationKind, payload: RowPayload) -> None:
        ...

    def clear(self, section: SectionId) -> None:
        ...


class InMemoryRowSink:
    """
    RowSink that keeps (kind, payload) tuples in lists and enforces the
    index contract. Used headless and in tests.
    """

    def __init__(self) -> None:
        self._rows: Dict[SectionId, List[Tuple[RepresentationKind, RowPayload]]] = {s: [] for s in SectionId}
        self.calls: List[Tuple[str, SectionId, int | None]] = []

    def count(self, section: SectionId) -> int:
        return len(self._rows[section])

    def insert(self, section: SectionId, index: int, kind: RepresentationKind, payload: RowPayload) -> None:
        rows = self._rows[section]
        if index not in (0, len(rows)):
            raise SinkContractError(f"insert at {index} in {section.name}: only 0 or {len(rows)} allowed")
        rows.insert(index, (kind, payload))
        self.calls.append(("insert", section, index))

    def replace(self, section: SectionId, index: int, kind: RepresentationKind, payload: RowPayload) -> None:
        rows = self._rows[section]
        if not 0 <= index < len(rows):
            raise SinkContractError(f"replace at stale index {index} in {section.name} ({len(rows)} rows)")
        rows[index] = (kind, payload)
        self.calls.append(("replace", section, index))

    def clear(self, section: SectionId) -> None:
        self._rows[section].clear()
        self.calls.append(("clear", section, None))

    def rows(self, section: SectionId) -> List[Tuple[RepresentationKind, RowPayload]]:
        return list(self._rows[section])

    def kinds(self, section: SectionId) -> List[RepresentationKind]:
        return [kind for kind, _ in self._rows[section]]
