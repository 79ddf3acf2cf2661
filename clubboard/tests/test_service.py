import unittest
from unittest.mock import patch

from clubboard.db import InMemoryClubStore
from clubboard.errors import DuplicateSubmissionError, StoreUnavailableError
from clubboard.service import (
    BatchResult,
    ClubEntry,
    Submitter,
    count_clubs,
    list_clubs,
    submit_club,
    submit_clubs,
    trim_text,
)


class SubmissionServiceTests(unittest.TestCase):
    def setUp(self):
        self.store = InMemoryClubStore()
        self.submitter = Submitter(
            name="Ada Lovelace",
            email="ada@example.com",
            school_email="ada.lovelace1234@g.gcpsk12.org",
        )

    def test_count_starts_at_zero(self):
        self.assertEqual(count_clubs(self.store), 0)

    def test_submit_new_club_increments_count(self):
        submit_club(self.store, ClubEntry("Chess Club", "Weekly games"), self.submitter)
        self.assertEqual(count_clubs(self.store), 1)

        record = list_clubs(self.store)[0]
        self.assertEqual(record.club_name, "Chess Club")
        self.assertEqual(record.description, "Weekly games")
        self.assertTrue(record.approved)
        self.assertFalse(record.featured)
        self.assertIsNotNone(record.submission_id)

    def test_submit_same_name_twice_raises_duplicate(self):
        submit_club(self.store, ClubEntry("Chess Club"), self.submitter)
        with self.assertRaises(DuplicateSubmissionError) as ctx:
            submit_club(self.store, ClubEntry("Chess Club"), self.submitter)
        self.assertEqual(
            str(ctx.exception), 'The club "Chess Club" has already been submitted.'
        )
        self.assertEqual(ctx.exception.club_name, "Chess Club")
        self.assertEqual(count_clubs(self.store), 1)

    def test_description_defaults_to_empty_string(self):
        submit_club(self.store, ClubEntry("Film Club"), self.submitter)
        self.assertEqual(list_clubs(self.store)[0].description, "")

    def test_whitespace_is_trimmed_before_check_and_storage(self):
        submit_club(
            self.store,
            ClubEntry("  Robotics Club  ", "  Build robots  "),
            Submitter(
                name="  Ada  ",
                email=" ada@example.com ",
                school_email=" ada1@g.gcpsk12.org ",
            ),
        )
        record = list_clubs(self.store)[0]
        self.assertEqual(record.club_name, "Robotics Club")
        self.assertEqual(record.description, "Build robots")
        self.assertEqual(record.submitter_name, "Ada")
        self.assertEqual(record.submitter_email, "ada@example.com")
        self.assertEqual(record.submitter_school_email, "ada1@g.gcpsk12.org")

        with self.assertRaises(DuplicateSubmissionError):
            submit_club(self.store, ClubEntry("Robotics Club"), self.submitter)

    def test_byte_order_mark_is_trimmed_like_whitespace(self):
        submit_club(self.store, ClubEntry("\ufeffChess Club \ufeff"), self.submitter)
        self.assertEqual(list_clubs(self.store)[0].club_name, "Chess Club")
        with self.assertRaises(DuplicateSubmissionError):
            submit_club(self.store, ClubEntry("Chess Club"), self.submitter)

    def test_trim_text(self):
        self.assertEqual(trim_text("\ufeff  Robotics Club \n"), "Robotics Club")
        self.assertEqual(trim_text("Robotics  Club"), "Robotics  Club")
        self.assertEqual(trim_text(" \ufeff "), "")

    def test_name_comparison_is_case_sensitive(self):
        result = submit_clubs(
            self.store,
            [ClubEntry("Chess Club"), ClubEntry("chess club")],
            self.submitter,
        )
        self.assertEqual(result.submitted, ["Chess Club", "chess club"])
        self.assertEqual(result.errors, [])
        self.assertEqual(count_clubs(self.store), 2)

    def test_batch_catches_duplicate_within_same_batch(self):
        result = submit_clubs(
            self.store,
            [ClubEntry("Art Club"), ClubEntry("Art Club")],
            self.submitter,
        )
        self.assertTrue(result.success)
        self.assertEqual(result.submitted, ["Art Club"])
        self.assertEqual(result.total_submitted, 1)
        self.assertEqual(len(result.errors), 1)
        self.assertIn("Art Club", result.errors[0])
        self.assertIn("already been submitted", result.errors[0])

    def test_batch_of_only_duplicates_is_not_successful(self):
        submit_club(self.store, ClubEntry("Art Club"), self.submitter)
        submit_club(self.store, ClubEntry("Chess Club"), self.submitter)

        clubs = [ClubEntry("Art Club"), ClubEntry(" Chess Club ")]
        result = submit_clubs(self.store, clubs, self.submitter)
        self.assertFalse(result.success)
        self.assertEqual(result.submitted, [])
        self.assertEqual(len(result.errors), len(clubs))
        self.assertEqual(count_clubs(self.store), 2)

    def test_batch_count_grows_by_accepted_items_only(self):
        submit_club(self.store, ClubEntry("Debate Club"), self.submitter)
        before = count_clubs(self.store)

        result = submit_clubs(
            self.store,
            [ClubEntry("Debate Club"), ClubEntry("Math Club"), ClubEntry("Band")],
            self.submitter,
        )
        self.assertEqual(result.total_submitted, 2)
        self.assertEqual(count_clubs(self.store), before + 2)

    def test_batch_preserves_input_order(self):
        result = submit_clubs(
            self.store,
            [ClubEntry("B"), ClubEntry("A"), ClubEntry("B"), ClubEntry("C")],
            self.submitter,
        )
        self.assertEqual(result.submitted, ["B", "A", "C"])
        self.assertEqual(result.errors, ['The club "B" has already been submitted.'])

    def test_batch_with_no_entries(self):
        result = submit_clubs(self.store, [], self.submitter)
        self.assertFalse(result.success)
        self.assertEqual(
            result.as_dict(),
            {"success": False, "submitted": [], "errors": [], "totalSubmitted": 0},
        )

    def test_batch_records_item_failure_and_continues(self):
        original_insert = self.store.insert

        def flaky_insert(record):
            if record.club_name == "Glee Club":
                raise RuntimeError("write rejected")
            return original_insert(record)

        with patch.object(self.store, "insert", side_effect=flaky_insert):
            result = submit_clubs(
                self.store,
                [ClubEntry("Glee Club"), ClubEntry("Drama Club")],
                self.submitter,
            )

        self.assertTrue(result.success)
        self.assertEqual(result.submitted, ["Drama Club"])
        self.assertEqual(result.errors, ['Failed to submit "Glee Club": write rejected'])

    def test_batch_propagates_store_unavailable(self):
        with patch.object(
            self.store, "find_by_name", side_effect=StoreUnavailableError("down")
        ):
            with self.assertRaises(StoreUnavailableError):
                submit_clubs(self.store, [ClubEntry("Art Club")], self.submitter)

    def test_submit_club_propagates_store_errors_unchanged(self):
        with patch.object(self.store, "insert", side_effect=RuntimeError("boom")):
            with self.assertRaises(RuntimeError):
                submit_club(self.store, ClubEntry("Art Club"), self.submitter)

    def test_conflict_detected_on_insert_is_reported_as_duplicate(self):
        # Another caller inserted the same club between the check and the insert.
        submit_club(self.store, ClubEntry("Art Club"), self.submitter)
        with patch.object(self.store, "find_by_name", return_value=None):
            with self.assertRaises(DuplicateSubmissionError) as ctx:
                submit_club(self.store, ClubEntry(" Art Club"), self.submitter)
            result = submit_clubs(self.store, [ClubEntry("Art Club")], self.submitter)
        self.assertEqual(ctx.exception.club_name, " Art Club")
        self.assertEqual(result.errors, ['The club "Art Club" has already been submitted.'])
        self.assertEqual(count_clubs(self.store), 1)

    def test_list_returns_most_recent_first(self):
        for name in ["First", "Second", "Third"]:
            submit_club(self.store, ClubEntry(name), self.submitter)
        names = [record.club_name for record in list_clubs(self.store)]
        self.assertEqual(names, ["Third", "Second", "First"])

    def test_list_is_a_snapshot(self):
        submit_club(self.store, ClubEntry("First"), self.submitter)
        snapshot = list_clubs(self.store)
        submit_club(self.store, ClubEntry("Second"), self.submitter)
        self.assertEqual(len(snapshot), 1)

    def test_batch_result_success_tracks_submitted(self):
        result = BatchResult(errors=["x"])
        self.assertFalse(result.success)
        result.submitted.append("Art Club")
        self.assertTrue(result.success)
        self.assertEqual(result.as_dict()["totalSubmitted"], 1)


if __name__ == "__main__":
    unittest.main()
