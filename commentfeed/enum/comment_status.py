"""commentfeed/enum/comment_status.py
=================================

Server-reported lifecycle status of a comment.

The status is an input to the feed; retry scheduling happens upstream and is
only visible here as RETRYING / RETRY_SUCCESS.
"""
from __future__ import annotations

from enum import Enum


class CommentStatus(str, Enum):
    """Lifecycle status of a posted comment."""

    UNKNOWN = "unknown"
    FAILED = "failed"
    RETRYING = "retrying"
    SUCCESS = "success"
    RETRY_SUCCESS = "retrySuccess"
