"""
commentfeed/tests/test_reconciliation_engine.py

Load / upsert reconciliation rules of CommentsDataSource.
"""

from __future__ import annotations

import unittest

from commentfeed.dto.row import Row
from commentfeed.dto.row_address import RowAddress
from commentfeed.dto.row_update import RowChange, RowUpdate
from commentfeed.enum.comment_status import CommentStatus
from commentfeed.enum.representation_kind import RepresentationKind
from commentfeed.enum.section_id import SectionId
from commentfeed.exceptions.errors import InvalidStateError
from commentfeed.logic.reconciliation_engine import CommentsDataSource
from commentfeed.models.comment import Comment
from commentfeed.models.feed_context import FeedContext
from commentfeed.models.ids import CommentId, ProjectId

CTX = FeedContext(project_id=ProjectId("p1"), project_name="Robot Kit")


def _c(cid: str, status: CommentStatus = CommentStatus.SUCCESS, deleted: bool = False) -> Comment:
    return Comment(id=CommentId(cid), status=status, is_deleted=deleted, body=f"body {cid}")


class _Base(unittest.TestCase):
    def setUp(self) -> None:
        self.ds = CommentsDataSource()
        self.updates: list[RowUpdate] = []
        self.ds.subscribe(self.updates.append)

    def ids(self) -> list[str]:
        return [row.comment.id for row in self.ds.rows_in(SectionId.COMMENTS)]

    def snapshot(self):
        return {s: self.ds.rows_in(s) for s in SectionId}


class TestLoad(_Base):
    def test_batch_appends_in_input_order(self) -> None:
        addresses = self.ds.load([_c("c1"), _c("c2"), _c("c3")], CTX)
        self.assertEqual(self.ids(), ["c1", "c2", "c3"])
        self.assertEqual(addresses, [RowAddress(SectionId.COMMENTS, i) for i in range(3)])

    def test_second_batch_appends_after_first(self) -> None:
        self.ds.load([_c("c1")], CTX)
        self.ds.load([_c("c2")], CTX)
        self.assertEqual(self.ids(), ["c1", "c2"])

    def test_batch_does_not_deduplicate(self) -> None:
        self.ds.load([_c("c1"), _c("c1", CommentStatus.FAILED)], CTX)
        self.assertEqual(self.ids(), ["c1", "c1"])

    def test_strict_mode_rejects_duplicates_without_mutation(self) -> None:
        ds = CommentsDataSource(strict_contracts=True)
        ds.load([_c("a")], CTX)
        with self.assertRaises(InvalidStateError):
            ds.load([_c("b"), _c("b")], CTX)
        self.assertEqual([r.comment.id for r in ds.rows_in(SectionId.COMMENTS)], ["a"])

    def test_empty_section_cleared_even_for_empty_batch(self) -> None:
        self.ds.show_empty_state()
        self.assertEqual(self.ds.count(SectionId.EMPTY), 1)
        self.assertEqual(self.ds.load([], CTX), [])
        self.assertEqual(self.ds.count(SectionId.EMPTY), 0)

    def test_error_mode_is_exclusive(self) -> None:
        self.ds.load([_c("c1"), _c("c2")], CTX)
        self.ds.show_empty_state()
        self.ds.load([_c("c1")], CTX)
        addresses = self.ds.load([_c("x"), _c("y", CommentStatus.UNKNOWN)], CTX, show_error_state=True)
        self.assertEqual(addresses, [RowAddress(SectionId.ERROR, 0)])
        self.assertEqual(self.ds.count(SectionId.COMMENTS), 0)
        self.assertEqual(self.ds.count(SectionId.EMPTY), 0)
        self.assertEqual(self.ds.rows_in(SectionId.ERROR), (Row.error(),))

    def test_error_mode_twice_keeps_single_row(self) -> None:
        self.ds.load([], CTX, show_error_state=True)
        self.ds.load([], CTX, show_error_state=True)
        self.assertEqual(self.ds.count(SectionId.ERROR), 1)

    def test_unknown_status_fails_whole_batch(self) -> None:
        self.ds.load([_c("a")], CTX)
        self.ds.show_empty_state()
        before = self.snapshot()
        self.updates.clear()
        with self.assertRaises(InvalidStateError):
            self.ds.load([_c("b"), _c("c", CommentStatus.UNKNOWN)], CTX)
        self.assertEqual(self.snapshot(), before)
        self.assertEqual(self.updates, [])

    def test_representations_follow_status(self) -> None:
        self.ds.load(
            [
                _c("ok"),
                _c("failed", CommentStatus.FAILED),
                _c("retrying", CommentStatus.RETRYING),
                _c("retried", CommentStatus.RETRY_SUCCESS),
                _c("gone", CommentStatus.FAILED, deleted=True),
            ],
            CTX,
        )
        kinds = [row.kind for row in self.ds.rows_in(SectionId.COMMENTS)]
        self.assertEqual(
            kinds,
            [
                RepresentationKind.COMMENT_VIEW,
                RepresentationKind.POST_FAILED_VIEW,
                RepresentationKind.POST_FAILED_VIEW,
                RepresentationKind.COMMENT_VIEW,
                RepresentationKind.REMOVED_VIEW,
            ],
        )


class TestUpsert(_Base):
    def test_match_replaces_in_place(self) -> None:
        self.ds.load([_c("a"), _c("b"), _c("c")], CTX)
        index, inserted = self.ds.upsert(_c("b", CommentStatus.RETRYING), CTX, match_id=CommentId("b"))
        self.assertEqual((index, inserted), (1, False))
        self.assertEqual(self.ids(), ["a", "b", "c"])
        self.assertEqual(self.ds.row_at(SectionId.COMMENTS, 1).kind, RepresentationKind.POST_FAILED_VIEW)

    def test_match_found_in_any_representation(self) -> None:
        self.ds.load([_c("a", CommentStatus.FAILED), _c("b", deleted=True)], CTX)
        self.assertEqual(self.ds.upsert(_c("a", CommentStatus.RETRY_SUCCESS), CTX, CommentId("a")), (0, False))
        self.assertEqual(self.ds.upsert(_c("b"), CTX, CommentId("b")), (1, False))
        self.assertEqual(self.ds.count(SectionId.COMMENTS), 2)

    def test_no_match_prepends(self) -> None:
        self.ds.load([_c("a"), _c("b")], CTX)
        self.assertEqual(self.ds.upsert(_c("new"), CTX, match_id=CommentId("new")), (0, True))
        self.assertEqual(self.ids(), ["new", "a", "b"])

    def test_no_match_id_appends(self) -> None:
        self.ds.load([_c("a")], CTX)
        self.assertEqual(self.ds.upsert(_c("a"), CTX), (1, True))
        self.assertEqual(self.ids(), ["a", "a"])

    def test_retry_scenario(self) -> None:
        self.ds.load([_c("A")], CTX)
        self.assertEqual(self.ds.upsert(_c("B"), CTX), (1, True))
        self.assertEqual(self.ids(), ["A", "B"])

        index, inserted = self.ds.upsert(_c("A", CommentStatus.RETRYING), CTX, match_id=CommentId("A"))
        self.assertEqual((index, inserted), (0, False))
        self.assertEqual(self.ids(), ["A", "B"])
        self.assertEqual(self.ds.comment_at(SectionId.COMMENTS, 0).status, CommentStatus.RETRYING)

    def test_replace_matches_previous_id(self) -> None:
        self.ds.load([_c("tmp-1", CommentStatus.RETRYING)], CTX)
        self.assertEqual(self.ds.replace(_c("srv-9"), CTX, CommentId("tmp-1")), (0, False))
        self.assertEqual(self.ids(), ["srv-9"])

    def test_unknown_status_touches_nothing(self) -> None:
        self.ds.load([_c("a")], CTX)
        before = self.snapshot()
        self.updates.clear()
        for match in (None, CommentId("a"), CommentId("zzz")):
            with self.assertRaises(InvalidStateError):
                self.ds.upsert(_c("a", CommentStatus.UNKNOWN), CTX, match_id=match)
        self.assertEqual(self.snapshot(), before)
        self.assertEqual(self.updates, [])

    def test_deleted_unknown_is_still_removed_view(self) -> None:
        self.ds.upsert(_c("a", CommentStatus.UNKNOWN, deleted=True), CTX, CommentId("a"))
        self.assertEqual(self.ds.row_at(SectionId.COMMENTS, 0).kind, RepresentationKind.REMOVED_VIEW)


class TestQueriesAndEvents(_Base):
    def test_comment_at_unwraps_payloads(self) -> None:
        self.ds.load([_c("a"), _c("b", CommentStatus.FAILED)], CTX)
        self.assertEqual(self.ds.comment_at(SectionId.COMMENTS, 0).id, "a")
        self.assertEqual(self.ds.comment_at(SectionId.COMMENTS, 1).id, "b")
        self.ds.load([], CTX, show_error_state=True)
        self.assertIsNone(self.ds.comment_at(SectionId.ERROR, 0))
        self.ds.show_empty_state()
        self.assertIsNone(self.ds.comment_at(SectionId.EMPTY, 0))

    def test_is_error_section(self) -> None:
        self.assertTrue(CommentsDataSource.is_error_section(SectionId.ERROR))
        self.assertTrue(self.ds.is_error_section(RowAddress(SectionId.ERROR, 0)))
        self.assertFalse(self.ds.is_error_section(SectionId.COMMENTS))
        self.assertFalse(self.ds.is_error_section(RowAddress(SectionId.EMPTY, 0)))

    def test_index_of(self) -> None:
        self.ds.load([_c("a"), _c("b")], CTX)
        self.assertEqual(self.ds.index_of(CommentId("b")), 1)
        self.assertIsNone(self.ds.index_of(CommentId("nope")))

    def test_events_describe_every_mutation(self) -> None:
        self.ds.load([_c("a")], CTX)
        self.ds.upsert(_c("a", CommentStatus.FAILED), CTX, CommentId("a"))
        self.ds.upsert(_c("b"), CTX, CommentId("b"))
        changes = [(u.change, u.section, u.index) for u in self.updates]
        self.assertEqual(
            changes,
            [
                (RowChange.CLEARED, SectionId.EMPTY, None),
                (RowChange.INSERTED, SectionId.COMMENTS, 0),
                (RowChange.REPLACED, SectionId.COMMENTS, 0),
                (RowChange.INSERTED, SectionId.COMMENTS, 0),
            ],
        )
        self.assertEqual(self.updates[2].kind, RepresentationKind.POST_FAILED_VIEW)

    def test_failing_subscriber_sees_complete_batch(self) -> None:
        seen: list[RowUpdate] = []

        def _flaky(update: RowUpdate) -> None:
            seen.append(update)
            if len(seen) == 3:
                raise RuntimeError("view went away")

        self.ds.subscribe(_flaky)
        with self.assertRaises(RuntimeError):
            self.ds.load([_c("a"), _c("b"), _c("c")], CTX)
        self.assertEqual(self.ids(), ["a", "b", "c"])
        # events raised so far describe the stored rows, in order
        self.assertEqual([(u.change, u.index) for u in seen[1:]], [(RowChange.INSERTED, 0), (RowChange.INSERTED, 1)])

    def test_failing_subscriber_on_error_state(self) -> None:
        self.ds.load([_c("a")], CTX)

        def _boom(update: RowUpdate) -> None:
            raise RuntimeError("view went away")

        self.ds.subscribe(_boom)
        with self.assertRaises(RuntimeError):
            self.ds.load([], CTX, show_error_state=True)
        self.assertEqual(self.ds.count(SectionId.COMMENTS), 0)
        self.assertEqual(self.ds.rows_in(SectionId.ERROR), (Row.error(),))

    def test_duplicate_ids_of_mixed_types_reported(self) -> None:
        batch = [Comment(id=3), Comment(id=3), _c("x"), _c("x")]
        with self.assertLogs("commentfeed.logic.reconciliation_engine", level="WARNING") as logs:
            self.ds.load(batch, CTX)
        self.assertIn("[3, 'x']", logs.output[0])
        self.assertEqual(self.ds.count(SectionId.COMMENTS), 4)

    def test_unsubscribe_stops_events(self) -> None:
        self.ds.unsubscribe(self.updates.append)
        self.updates.clear()
        self.ds.load([_c("a")], CTX)
        self.assertEqual(self.updates, [])


if __name__ == "__main__":
    unittest.main()
