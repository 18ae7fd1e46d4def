"""Sections of the comment feed list."""
from __future__ import annotations

from enum import IntEnum


class SectionId(IntEnum):
    """
    Mutually exclusive partitions of the display list.

    The integer value is the section index the list container uses.
    """

    COMMENTS = 0
    EMPTY = 1
    ERROR = 2
