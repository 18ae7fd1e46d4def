"""
===============================================================================
Comments Feed Controller – keeps a list container in step with the feed
-------------------------------------------------------------------------------
Purpose:
    - Thin controller between the embedding UI and CommentsDataSource.
      No reconciliation rules here; it delegates and forwards.

Contract to the View (RowSink):
    - view.insert / view.replace / view.clear, driven by RowUpdate events.

Inputs:
    - data_source: CommentsDataSource owning the rows.
    - context: FeedContext passed to every comment row.
===============================================================================
"""
from __future__ import annotations

import logging
from typing import Iterable, List, Optional, Tuple

from commentfeed.adapters.row_sink import RowSink
from commentfeed.dto.row_address import RowAddress
from commentfeed.dto.row_update import RowChange, RowUpdate
from commentfeed.enum.section_id import SectionId
from commentfeed.logic.reconciliation_engine import CommentsDataSource
from commentfeed.models.comment import Comment
from commentfeed.models.feed_context import FeedContext
from commentfeed.models.ids import CommentId

logger = logging.getLogger(__name__)


class CommentsFeedController:
    """
    UI-facing controller for one comment feed.

    Responsibilities:
        - Forward every data source mutation to the view.
        - Offer the feed use cases (load, error, empty, posted, updated).
        - Route taps: error rows carry no comment.
    """

    def __init__(self, view: RowSink, data_source: CommentsDataSource, context: FeedContext) -> None:
        self._view = view
        self._ds = data_source
        self._context = context
        self._ds.subscribe(self._on_row_update)

    @property
    def context(self) -> FeedContext:
        return self._context

    def dispose(self) -> None:
        """Stop forwarding updates. Idempotent."""
        self._ds.unsubscribe(self._on_row_update)

    # ------------------------------------------------------------------ #
    # Event forwarding
    # ------------------------------------------------------------------ #
    def _on_row_update(self, update: RowUpdate) -> None:
        if update.change is RowChange.CLEARED:
            self._view.clear(update.section)
        elif update.change is RowChange.INSERTED:
            self._view.insert(update.section, update.index, update.kind, update.payload)
        elif update.change is RowChange.REPLACED:
            self._view.replace(update.section, update.index, update.kind, update.payload)

    # ------------------------------------------------------------------ #
    # Use cases
    # ------------------------------------------------------------------ #
    def show_comments(
        self,
        comments: Iterable[Comment],
        *,
        refresh: bool = False,
        show_empty_when_none: bool = True,
    ) -> List[RowAddress]:
        """
        Render a server response.

        Parameters
        ----------
        refresh : bool
            Drop the current comment rows first (pull-to-refresh). Otherwise
            the batch is appended (next page).
        show_empty_when_none : bool
            Show the "no comments" row if the feed ends up without comments.
        """
        comments = list(comments)
        self._ds.validate_batch(comments, self._context)
        if self._ds.count(SectionId.ERROR):
            self._ds.clear_section(SectionId.ERROR)
        if refresh:
            self._ds.clear_section(SectionId.COMMENTS)
        addresses = self._ds.load(comments, self._context, show_error_state=False)
        if show_empty_when_none and self._ds.count(SectionId.COMMENTS) == 0:
            addresses.append(self._ds.show_empty_state())
        logger.info(f"Feed {self._context.project_id}: {len(addresses)} rows loaded")
        return addresses

    def show_error(self) -> RowAddress:
        """The upstream fetch failed: replace the whole list with the error row."""
        logger.info(f"Feed {self._context.project_id}: showing error state")
        return self._ds.load([], self._context, show_error_state=True)[0]

    def show_empty(self) -> RowAddress:
        return self._ds.show_empty_state()

    def comment_posted(self, comment: Comment) -> Tuple[int, bool]:
        """A comment was posted or its post status changed."""
        return self._ds.upsert(comment, self._context, match_id=comment.id)

    def comment_updated(self, comment: Comment, *, previous_id: Optional[CommentId] = None) -> Tuple[int, bool]:
        """
        Replace the row of an existing comment.

        `previous_id` addresses the row when the server assigned a new id
        (e.g. a locally created comment confirmed by the backend). If the new
        id already sits on another row, both rows keep it; a warning is
        logged and the caller decides whether to reload.
        """
        match_id = previous_id or comment.id
        if match_id != comment.id:
            existing = self._ds.index_of(comment.id)
            if existing is not None:
                logger.warning(
                    f"Comment id {comment.id} already shown at row {existing}; "
                    f"replacing {match_id} duplicates it"
                )
        return self._ds.replace(comment, self._context, match_id)

    def comment_for_tap(self, address: RowAddress) -> Optional[Comment]:
        """Comment a tap/retry gesture applies to; None on error and empty rows."""
        if self._ds.is_error_section(address):
            return None
        return self._ds.comment_at(address.section, address.row)
