"""RowUpdate DTO - one mutation of the display list, as sent to the sink."""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum
from typing import Optional

from commentfeed.dto.row import Row, RowPayload
from commentfeed.enum.representation_kind import RepresentationKind
from commentfeed.enum.section_id import SectionId


class RowChange(str, Enum):
    INSERTED = "inserted"
    REPLACED = "replaced"
    CLEARED = "cleared"


@dataclass(frozen=True, slots=True)
class RowUpdate:
    """
    Immutable description of a single store mutation.

    CLEARED updates address a whole section and carry no index, kind or
    payload.
    """

    change: RowChange
    section: SectionId
    index: Optional[int] = None
    kind: Optional[RepresentationKind] = None
    payload: RowPayload = None

    @staticmethod
    def inserted(section: SectionId, index: int, row: Row) -> "RowUpdate":
        return RowUpdate(RowChange.INSERTED, section, index, row.kind, row.payload)

    @staticmethod
    def replaced(section: SectionId, index: int, row: Row) -> "RowUpdate":
        return RowUpdate(RowChange.REPLACED, section, index, row.kind, row.payload)

    @staticmethod
    def cleared(section: SectionId) -> "RowUpdate":
        return RowUpdate(RowChange.CLEARED, section)
