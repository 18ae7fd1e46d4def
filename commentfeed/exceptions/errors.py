"""Comment feed exceptions.

Contract violations raised here are programming errors in the calling system
and are not meant to be recovered from. A comment that is not found while
replacing is not an error; it is inserted as new.
"""
from __future__ import annotations


class CommentFeedError(Exception):
    """Base exception for the comment feed feature."""


class InvalidStateError(CommentFeedError):
    """Raised when a comment reaches the feed in a state it cannot display."""


class RowIndexError(CommentFeedError, IndexError):
    """Raised when a row address does not exist in its section."""

    def __init__(self, section, index: int, count: int) -> None:
        super().__init__(f"Row {index} out of bounds for section {section.name} ({count} rows)")
        self.section = section
        self.index = index
        self.count = count


class RowPayloadError(CommentFeedError, TypeError):
    """Raised when a row payload does not match its representation kind."""


class SinkContractError(CommentFeedError):
    """Raised by a rendering sink when it is handed an index it cannot accept."""
