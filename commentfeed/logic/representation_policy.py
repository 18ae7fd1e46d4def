"""Status -> representation mapping for comment rows.

Pure functions; evaluated on every load/upsert and never cached.

    is_deleted  status                    representation
    ----------  ------------------------  ----------------
    True        any                       REMOVED_VIEW
    False       FAILED, RETRYING          POST_FAILED_VIEW
    False       SUCCESS, RETRY_SUCCESS    COMMENT_VIEW
    False       UNKNOWN                   InvalidStateError
"""

from __future__ import annotations
import logging

from commentfeed.dto.row import Row
from commentfeed.enum.comment_status import CommentStatus
from commentfeed.enum.representation_kind import RepresentationKind
from commentfeed.exceptions.errors import InvalidStateError
from commentfeed.models.comment import Comment
from commentfeed.models.feed_context import FeedContext

logger = logging.getLogger(__name__)


def resolve_representation(comment: Comment) -> RepresentationKind:
    """
    Pick the representation for `comment`.

    Raises:
        InvalidStateError: status is UNKNOWN (or not a CommentStatus at all)
            on a comment that is not deleted.
    """
    # Soft delete wins over any status
    if comment.is_deleted:
        return RepresentationKind.REMOVED_VIEW

    status = comment.status
    if status is CommentStatus.FAILED or status is CommentStatus.RETRYING:
        return RepresentationKind.POST_FAILED_VIEW
    if status is CommentStatus.SUCCESS or status is CommentStatus.RETRY_SUCCESS:
        return RepresentationKind.COMMENT_VIEW
    if status is CommentStatus.UNKNOWN:
        logger.error(f"Comment {comment.id} reached the feed with status UNKNOWN")
        raise InvalidStateError(
            f"Comment {comment.id!r} has no status set and cannot be added to the feed."
        )

    logger.error(f"Comment {comment.id} has unmapped status {status!r}")
    raise InvalidStateError(f"Comment {comment.id!r} has unmapped status {status!r}.")


def build_row(comment: Comment, context: FeedContext) -> Row:
    """Build the row for `comment`; raises like resolve_representation."""
    kind = resolve_representation(comment)
    if kind is RepresentationKind.COMMENT_VIEW:
        return Row.comment_view(comment, context)
    if kind is RepresentationKind.POST_FAILED_VIEW:
        return Row.post_failed(comment)
    return Row.removed(comment)


def is_failed_post(comment: Comment) -> bool:
    """True for the two statuses rendered as a failed post (telemetry only)."""
    return (not comment.is_deleted) and comment.status in (CommentStatus.FAILED, CommentStatus.RETRYING)
