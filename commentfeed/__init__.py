"""
Comment feed feature package initializer.

Factory functions the host can call to build a data source and its
controller without knowing the internals. Both read the [Feed] section of
the configuration unless a ConfigService is passed in.
"""

from __future__ import annotations

from typing import Optional

from core.config.config_service import ConfigService, get_config_service

from .adapters.row_sink import RowSink
from .controllers.comments_feed_controller import CommentsFeedController
from .logic.reconciliation_engine import CommentsDataSource
from .models.feed_context import FeedContext


def create_data_source(config: Optional[ConfigService] = None) -> CommentsDataSource:
    """
    Build a CommentsDataSource with its own empty SectionStore.

    Args:
        config (ConfigService, optional): Configuration to read [Feed] from.

    Returns:
        CommentsDataSource: Ready to load comments.
    """
    cfg = config or get_config_service()
    return CommentsDataSource(strict_contracts=cfg.feed.strict_contracts)


def create_feed_controller(
    view: RowSink,
    context: FeedContext,
    config: Optional[ConfigService] = None,
) -> CommentsFeedController:
    """Build a data source and wire it to `view`."""
    return CommentsFeedController(view, create_data_source(config), context)
