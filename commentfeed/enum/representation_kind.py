"""commentfeed/enum/representation_kind.py
======================================

Visual representation chosen for a row. The rendering sink maps each kind to
its own cell/view; the feed never renders anything itself.
"""
from __future__ import annotations

from enum import Enum


class RepresentationKind(str, Enum):
    """Row representation kinds."""

    COMMENT_VIEW = "comment"
    POST_FAILED_VIEW = "post_failed"
    REMOVED_VIEW = "removed"
    EMPTY_VIEW = "empty"
    ERROR_VIEW = "error"

    @property
    def carries_comment(self) -> bool:
        """True for kinds whose payload embeds a comment."""
        return self in (
            RepresentationKind.COMMENT_VIEW,
            RepresentationKind.POST_FAILED_VIEW,
            RepresentationKind.REMOVED_VIEW,
        )
