from __future__ import annotations
from dataclasses import dataclass
from datetime import datetime
from typing import Optional

from .ids import CommentId
from commentfeed.enum.comment_status import CommentStatus


@dataclass(frozen=True, slots=True)
class Comment:
    """
    A comment as reported by the server. Read-only for the feed.

    Fields
    ------
    id : CommentId
        Stable across retries and edits.
    status : CommentStatus
        Posting lifecycle status.
    is_deleted : bool
        Soft-delete flag; independent of `status`.
    parent_id : CommentId | None
        Set for replies in a thread.
    """
    id: CommentId
    status: CommentStatus = CommentStatus.SUCCESS
    is_deleted: bool = False
    body: str = ""
    author_name: str = ""
    parent_id: Optional[CommentId] = None
    created_at: Optional[datetime] = None
    replies_count: int = 0
