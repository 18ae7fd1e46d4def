"""Row DTO for the section store.

A row is a tagged variant: the representation kind decides the payload shape.

    COMMENT_VIEW       -> CommentViewPayload(comment, context)
    POST_FAILED_VIEW   -> Comment
    REMOVED_VIEW       -> Comment
    EMPTY_VIEW         -> None
    ERROR_VIEW         -> None
"""

from __future__ import annotations
from dataclasses import dataclass
from typing import Optional, Union

from commentfeed.enum.representation_kind import RepresentationKind
from commentfeed.exceptions.errors import RowPayloadError
from commentfeed.models.comment import Comment
from commentfeed.models.feed_context import FeedContext


@dataclass(frozen=True, slots=True)
class CommentViewPayload:
    """Payload of a regular comment row."""

    comment: Comment
    context: FeedContext


RowPayload = Union[CommentViewPayload, Comment, None]


@dataclass(frozen=True, slots=True)
class Row:
    """
    One entry of the display list.

    Use the factory methods; the constructor validates that the payload
    fits the kind and raises RowPayloadError otherwise.
    """

    kind: RepresentationKind
    payload: RowPayload = None

    def __post_init__(self) -> None:
        expected = _PAYLOAD_TYPES[self.kind]
        if expected is None:
            ok = self.payload is None
        else:
            ok = isinstance(self.payload, expected)
        if not ok:
            raise RowPayloadError(
                f"{self.kind.name} row cannot carry {type(self.payload).__name__} payload"
            )

    # ------------------------------------------------------------------ #
    # Factories
    # ------------------------------------------------------------------ #
    @staticmethod
    def comment_view(comment: Comment, context: FeedContext) -> "Row":
        return Row(RepresentationKind.COMMENT_VIEW, CommentViewPayload(comment, context))

    @staticmethod
    def post_failed(comment: Comment) -> "Row":
        return Row(RepresentationKind.POST_FAILED_VIEW, comment)

    @staticmethod
    def removed(comment: Comment) -> "Row":
        return Row(RepresentationKind.REMOVED_VIEW, comment)

    @staticmethod
    def empty() -> "Row":
        return Row(RepresentationKind.EMPTY_VIEW)

    @staticmethod
    def error() -> "Row":
        return Row(RepresentationKind.ERROR_VIEW)

    # ------------------------------------------------------------------ #
    @property
    def comment(self) -> Optional[Comment]:
        """The embedded comment, whichever payload shape holds it."""
        if isinstance(self.payload, CommentViewPayload):
            return self.payload.comment
        if isinstance(self.payload, Comment):
            return self.payload
        return None


_PAYLOAD_TYPES = {
    RepresentationKind.COMMENT_VIEW: CommentViewPayload,
    RepresentationKind.POST_FAILED_VIEW: Comment,
    RepresentationKind.REMOVED_VIEW: Comment,
    RepresentationKind.EMPTY_VIEW: None,
    RepresentationKind.ERROR_VIEW: None,
}
