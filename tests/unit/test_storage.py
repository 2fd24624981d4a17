"""
Unit tests for the storage layer.

Tests:
- Table secondary indexes
- MemoryQuizStore queries
- JsonQuizStore persistence, validation and failure handling
"""

import asyncio
import json
import tempfile
import threading
import unittest
from pathlib import Path

from adaptive_quiz.errors import StorageError
from adaptive_quiz.models.question import Question
from adaptive_quiz.models.quiz_session import QuizSession
from adaptive_quiz.storage import JsonQuizStore, MemoryQuizStore, Table


def _q(qid, subject="Math", difficulty="easy"):
    return Question(
        id=qid,
        subject=subject,
        difficulty=difficulty,
        text=f"{qid}?",
        options={"A": "yes", "B": "no"},
        correct_answer="A",
    )


def _session_with_attempt(subject="Math", started_at="2026-03-01T10:00:00+00:00"):
    session = QuizSession(subject=subject, started_at=started_at)
    session.total_questions = 1
    session.score = 1
    attempt = session.record_attempt(_q("q1", subject), "A", True)
    return session, attempt


class TestTable(unittest.TestCase):
    """Test the indexed table primitive."""

    def setUp(self):
        self.table = Table("questions", indexes={"by_subject": "subject"})

    def test_index_lookup(self):
        self.table.put({"id": "1", "subject": "Math"})
        self.table.put({"id": "2", "subject": "Science"})
        self.table.put({"id": "3", "subject": "Math"})
        ids = [r["id"] for r in self.table.get_all_by_index("by_subject", "Math")]
        self.assertEqual(ids, ["1", "3"])

    def test_replace_moves_index_entry(self):
        self.table.put({"id": "1", "subject": "Math"})
        self.table.put({"id": "1", "subject": "Science"})
        self.assertEqual(self.table.get_all_by_index("by_subject", "Math"), [])
        self.assertEqual(len(self.table.get_all_by_index("by_subject", "Science")), 1)
        self.assertEqual(len(self.table), 1)

    def test_delete(self):
        self.table.put({"id": "1", "subject": "Math"})
        self.assertTrue(self.table.delete("1"))
        self.assertFalse(self.table.delete("1"))
        self.assertEqual(self.table.get_all_by_index("by_subject", "Math"), [])

    def test_records_are_copied(self):
        record = {"id": "1", "subject": "Math"}
        self.table.put(record)
        record["subject"] = "Changed"
        self.assertEqual(self.table.get("1")["subject"], "Math")

    def test_missing_key_or_index(self):
        with self.assertRaises(KeyError):
            self.table.put({"subject": "Math"})
        with self.assertRaises(KeyError):
            self.table.get_all_by_index("by_nothing", "x")


class TestMemoryQuizStore(unittest.IsolatedAsyncioTestCase):
    """Test the in-memory store."""

    async def asyncSetUp(self):
        self.store = MemoryQuizStore()

    async def test_questions_by_subject(self):
        await self.store.add_question(_q("m1", "Math"))
        await self.store.add_question(_q("s1", "Science"))
        math = await self.store.load_questions_by_subject("Math")
        self.assertEqual([q.id for q in math], ["m1"])
        self.assertEqual(await self.store.count_questions(), 2)

    async def test_attempts_by_session(self):
        session, attempt = _session_with_attempt()
        await self.store.save_attempt(attempt)
        self.assertEqual(await self.store.load_attempts_by_session(session.id), [attempt])
        self.assertEqual(await self.store.load_attempts_by_session("other"), [])
        self.assertEqual(await self.store.load_all_attempts(), [attempt])

    async def test_sessions_ordered_by_start_time(self):
        early, _ = _session_with_attempt(started_at="2026-01-01T00:00:00+00:00")
        late, _ = _session_with_attempt(started_at="2026-02-01T00:00:00+00:00")
        await self.store.save_session(early)
        await self.store.save_session(late)
        newest = await self.store.load_sessions()
        oldest = await self.store.load_sessions(newest_first=False)
        self.assertEqual([s.id for s in newest], [late.id, early.id])
        self.assertEqual([s.id for s in oldest], [early.id, late.id])

    async def test_delete_question(self):
        await self.store.add_question(_q("m1"))
        self.assertTrue(await self.store.delete_question("m1"))
        self.assertFalse(await self.store.delete_question("m1"))


class TestJsonQuizStore(unittest.IsolatedAsyncioTestCase):
    """Test the JSON-file store."""

    async def asyncSetUp(self):
        self._tmp = tempfile.TemporaryDirectory()
        self.data_dir = Path(self._tmp.name) / "quiz"
        self.store = JsonQuizStore(self.data_dir)

    async def asyncTearDown(self):
        self._tmp.cleanup()

    async def test_round_trip_through_files(self):
        session, attempt = _session_with_attempt()
        session.ended_at = "2026-03-01T10:05:00+00:00"
        await self.store.add_question(_q("m1"))
        await self.store.save_attempt(attempt)
        await self.store.save_session(session)

        reopened = JsonQuizStore(self.data_dir)
        self.assertEqual([q.id for q in await reopened.load_questions_by_subject("Math")], ["m1"])
        self.assertEqual(await reopened.load_all_attempts(), [attempt])
        sessions = await reopened.load_sessions()
        self.assertEqual(sessions[0].id, session.id)
        self.assertEqual(sessions[0].history, [attempt])

    async def test_files_are_json_lists(self):
        await self.store.add_question(_q("m1"))
        with open(self.data_dir / "questions.json", encoding="utf-8") as f:
            data = json.load(f)
        self.assertEqual(data[0]["id"], "m1")
        self.assertFalse((self.data_dir / "attempts.json").exists())

    async def test_invalid_record_rejected(self):
        bad = Question(
            id="bad",
            subject="Math",
            difficulty="legendary",
            text="?",
            options={"A": "yes", "B": "no"},
            correct_answer="A",
        )
        with self.assertRaises(StorageError) as cm:
            await self.store.add_question(bad)
        self.assertIn("difficulty", str(cm.exception))
        self.assertEqual(await self.store.count_questions(), 0)

    async def test_corrupt_file_raises_storage_error(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "attempts.json").write_text("{not json", encoding="utf-8")
        with self.assertRaises(StorageError):
            await self.store.load_all_attempts()

    async def test_record_missing_field_raises_storage_error(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "questions.json").write_text(
            json.dumps([{"id": "q1", "subject": "Math", "difficulty": "easy"}]), encoding="utf-8"
        )
        with self.assertRaises(StorageError) as cm:
            await self.store.load_questions_by_subject("Math")
        self.assertIn("text", str(cm.exception))

    async def test_record_missing_key_raises_storage_error(self):
        self.data_dir.mkdir(parents=True)
        (self.data_dir / "attempts.json").write_text(
            json.dumps([{"question_id": "q1"}]), encoding="utf-8"
        )
        with self.assertRaises(StorageError) as cm:
            await self.store.load_all_attempts()
        self.assertIn("attempts.json", str(cm.exception))

    async def test_rolled_back_record_not_flushed_by_later_write(self):
        gate = threading.Event()

        class SlowFailingStore(JsonQuizStore):
            def _write_table(self, table, records):
                if any(r["id"] == "lost" for r in records):
                    gate.wait(timeout=5)
                    raise StorageError("disk full")
                super()._write_table(table, records)

        store = SlowFailingStore(self.data_dir)
        await store.count_questions()

        first = asyncio.create_task(store.add_question(_q("lost")))
        await asyncio.sleep(0.05)
        second = asyncio.create_task(store.add_question(_q("kept")))
        await asyncio.sleep(0.05)
        gate.set()
        results = await asyncio.gather(first, second, return_exceptions=True)

        self.assertIsInstance(results[0], StorageError)
        self.assertIsNone(results[1])
        with open(self.data_dir / "questions.json", encoding="utf-8") as f:
            self.assertEqual([r["id"] for r in json.load(f)], ["kept"])
        self.assertEqual([q.id for q in await store.load_all_questions()], ["kept"])

    async def test_failed_write_rolls_back(self):
        class BrokenStore(JsonQuizStore):
            def _write_table(self, table, records):
                raise StorageError("disk full")

        store = BrokenStore(self.data_dir)
        with self.assertRaises(StorageError):
            await store.add_question(_q("m1"))
        self.assertEqual(await store.count_questions(), 0)

    async def test_validation_can_be_disabled(self):
        store = JsonQuizStore(self.data_dir, validate=False)
        odd = Question(
            id="odd",
            subject="Math",
            difficulty="legendary",
            text="?",
            options={"A": "yes"},
            correct_answer="A",
        )
        await store.add_question(odd)
        self.assertEqual(await store.count_questions(), 1)


if __name__ == "__main__":
    unittest.main()
