"""
===============================================================================
CommentsDataSource – reconciles comment records with the display list
-------------------------------------------------------------------------------
Purpose:
    Decide which rows of the comment feed change when a batch of comments is
    loaded or a single comment is posted/retried/edited, and apply those
    changes to the owned SectionStore.

Policies:
    - load(): error mode wipes everything and shows one ERROR row; otherwise
      the EMPTY row is always cleared and comments are appended in order.
      No duplicate search on this path (full refresh of a de-duplicated
      server response).
    - upsert(): with a match id, replace the row holding that comment id in
      place, or prepend as new when no row holds it. Without a match id,
      append.

Outputs:
    - Return values give the affected indices to the caller.
    - Every mutation is also published as a RowUpdate to subscribers.

Limits:
    - The match-id lookup is a linear scan of the COMMENTS section.

Threading:
    None. The caller funnels all events through one serialized call path.
===============================================================================
"""
from __future__ import annotations

import logging
from collections import Counter
from typing import Callable, Iterable, List, Optional, Tuple, Union

from commentfeed.dto.row import Row
from commentfeed.dto.row_address import RowAddress
from commentfeed.dto.row_update import RowUpdate
from commentfeed.enum.section_id import SectionId
from commentfeed.exceptions.errors import InvalidStateError
from commentfeed.logic.representation_policy import build_row, is_failed_post
from commentfeed.logic.section_store import SectionStore
from commentfeed.models.comment import Comment
from commentfeed.models.feed_context import FeedContext
from commentfeed.models.ids import CommentId

logger = logging.getLogger(__name__)

RowUpdateListener = Callable[[RowUpdate], None]


class CommentsDataSource:
    """
    Owner of the comment feed rows.

    Parameters
    ----------
    store : SectionStore | None
        Backing store; a fresh one is created when omitted.
    strict_contracts : bool
        Reject batch loads that contain one comment id twice instead of
        logging a warning and appending them as given.
    """

    def __init__(self, *, store: Optional[SectionStore] = None, strict_contracts: bool = False) -> None:
        self._store = store if store is not None else SectionStore()
        self._strict = strict_contracts
        self._listeners: List[RowUpdateListener] = []

    # ------------------------------------------------------------------ #
    # Subscribers
    # ------------------------------------------------------------------ #
    def subscribe(self, listener: RowUpdateListener) -> None:
        if listener not in self._listeners:
            self._listeners.append(listener)

    def unsubscribe(self, listener: RowUpdateListener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def _publish(self, *updates: RowUpdate) -> None:
        """
        Send updates to every listener, in order.

        Called only after the store mutation is complete; a listener
        exception propagates to the caller with the store already consistent.
        """
        for update in updates:
            for listener in list(self._listeners):
                listener(update)

    # ------------------------------------------------------------------ #
    # Batch load
    # ------------------------------------------------------------------ #
    def load(
        self,
        comments: Iterable[Comment],
        context: FeedContext,
        show_error_state: bool = False,
    ) -> List[RowAddress]:
        """
        Reconcile a full batch of comments.

        Returns
        -------
        list[RowAddress]
            Addresses of the rows that were added.

        Raises
        ------
        InvalidStateError
            A comment has no displayable status, or (strict mode) the batch
            repeats a comment id. The store is left untouched.

        Subscribers are notified once the whole batch is stored. An exception
        raised by a subscriber propagates, but the store already holds the
        complete batch.
        """
        if show_error_state:
            return [self._replace_all_with(SectionId.ERROR, Row.error())]

        batch = list(comments)
        # Resolve everything first so a bad comment cannot leave half a batch behind
        rows = self._prepare_batch(batch, context)

        # Stale "no comments" row must never sit next to incoming data
        self._store.clear_section(SectionId.EMPTY)
        pending = [RowUpdate.cleared(SectionId.EMPTY)]
        addresses = []
        for row in rows:
            index = self._store.append(SectionId.COMMENTS, row)
            pending.append(RowUpdate.inserted(SectionId.COMMENTS, index, row))
            addresses.append(RowAddress(SectionId.COMMENTS, index))

        failed = sum(1 for c in batch if is_failed_post(c))
        logger.debug(f"Load: appended={len(addresses)} failed_posts={failed}")
        self._publish(*pending)
        return addresses

    def validate_batch(self, comments: Iterable[Comment], context: FeedContext) -> None:
        """Raise InvalidStateError exactly where load() would, without touching the store."""
        self._prepare_batch(list(comments), context)

    def _prepare_batch(self, batch: List[Comment], context: FeedContext) -> List[Row]:
        rows = [build_row(comment, context) for comment in batch]
        self._check_duplicates(batch)
        return rows

    def _check_duplicates(self, batch: List[Comment]) -> None:
        dupes = sorted((cid for cid, n in Counter(c.id for c in batch).items() if n > 1), key=str)
        if not dupes:
            return
        if self._strict:
            logger.error(f"Load rejected, duplicate comment ids: {dupes}")
            raise InvalidStateError(f"Batch contains duplicate comment ids: {dupes}")
        logger.warning(f"Load batch contains duplicate comment ids {dupes}; appended as given")

    # ------------------------------------------------------------------ #
    # Single comment
    # ------------------------------------------------------------------ #
    def upsert(
        self,
        comment: Comment,
        context: FeedContext,
        match_id: Optional[CommentId] = None,
    ) -> Tuple[int, bool]:
        """
        Insert or replace one comment row in the COMMENTS section.

        Returns
        -------
        (index, was_inserted)
            Row index touched and whether a new row was created.

        Raises
        ------
        InvalidStateError
            Comment status is UNKNOWN; no row is touched.
        """
        row = build_row(comment, context)
        section = SectionId.COMMENTS

        if match_id is None:
            index = self._store.append(section, row)
            self._publish(RowUpdate.inserted(section, index, row))
            return index, True

        index = self.index_of(match_id)
        if index is not None:
            self._store.replace_at(section, index, row)
            self._publish(RowUpdate.replaced(section, index, row))
            logger.debug(f"Upsert: replaced id={match_id} at {index} as {row.kind.name}")
            return index, False

        # Not found means new: newest first
        self._store.insert_at(section, 0, row)
        self._publish(RowUpdate.inserted(section, 0, row))
        logger.debug(f"Upsert: prepended id={comment.id} as {row.kind.name}")
        return 0, True

    def replace(self, comment: Comment, context: FeedContext, comment_id: CommentId) -> Tuple[int, bool]:
        """Replace the row holding `comment_id`, or prepend when it is new."""
        return self.upsert(comment, context, match_id=comment_id)

    def show_empty_state(self) -> RowAddress:
        """Wipe the list and show the single "no comments" row."""
        return self._replace_all_with(SectionId.EMPTY, Row.empty())

    def _replace_all_with(self, section: SectionId, row: Row) -> RowAddress:
        self._store.clear_all()
        index = self._store.append(section, row)
        logger.debug(f"List replaced by single {row.kind.name} row")
        self._publish(*(RowUpdate.cleared(s) for s in SectionId), RowUpdate.inserted(section, index, row))
        return RowAddress(section, index)

    # ------------------------------------------------------------------ #
    # Clearing
    # ------------------------------------------------------------------ #
    def clear_all(self) -> None:
        self._store.clear_all()
        self._publish(*(RowUpdate.cleared(section) for section in SectionId))

    def clear_section(self, section: SectionId) -> None:
        self._store.clear_section(section)
        self._publish(RowUpdate.cleared(section))

    # ------------------------------------------------------------------ #
    # Queries
    # ------------------------------------------------------------------ #
    def index_of(self, comment_id: CommentId) -> Optional[int]:
        """Index of the COMMENTS row holding `comment_id`, if any."""
        # TODO: keep an id -> index side table if feeds grow to thousands of rows
        for index, row in enumerate(self._store.rows_in(SectionId.COMMENTS)):
            if row.kind.carries_comment and row.comment.id == comment_id:
                return index
        return None

    def comment_at(self, section: SectionId, index: int) -> Optional[Comment]:
        """Comment behind a row, or None for EMPTY/ERROR rows."""
        return self._store.row_at(section, index).comment

    @staticmethod
    def is_error_section(address: Union[SectionId, RowAddress]) -> bool:
        section = address.section if isinstance(address, RowAddress) else address
        return section is SectionId.ERROR

    def row_at(self, section: SectionId, index: int) -> Row:
        return self._store.row_at(section, index)

    def rows_in(self, section: SectionId) -> Tuple[Row, ...]:
        return self._store.rows_in(section)

    def count(self, section: SectionId) -> int:
        return self._store.count(section)

    @property
    def number_of_sections(self) -> int:
        return self._store.number_of_sections
