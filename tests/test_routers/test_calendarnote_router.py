import unittest
from datetime import datetime
from types import SimpleNamespace as Obj
from unittest.mock import patch
from fastapi.testclient import TestClient

from main import app
from core.database import get_db


class CalendarNoteRouterTests(unittest.TestCase):
    def setUp(self):
        class FakeDB:
            def rollback(self): pass
        def _fake_db():
            yield FakeDB()

        app.dependency_overrides[get_db] = _fake_db
        self.client = TestClient(app)

    def tearDown(self):
        app.dependency_overrides.pop(get_db, None)

    @patch("calendarnote.router.service.get_notes")
    def test_list_notes_by_period_prefix(self, mock_get):
        mock_get.return_value = [Obj(id="n1", period="2026-03", notes="<p>March</p>", updated_at=None)]
        resp = self.client.get("/api/calendar-notes?period=2026-03")
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()[0]["period"], "2026-03")
        _, kwargs = mock_get.call_args
        self.assertEqual(kwargs.get("period_prefix"), "2026-03")

    @patch("calendarnote.router.service.get_note")
    def test_get_note_404(self, mock_get):
        mock_get.return_value = None
        resp = self.client.get("/api/calendar-notes/2026-03-09")
        self.assertEqual(resp.status_code, 404)

    @patch("calendarnote.router.service.upsert_note")
    def test_put_note(self, mock_upsert):
        mock_upsert.return_value = Obj(id="n1", period="2026-03-09", notes="<b>hi</b>",
                                       updated_at=datetime(2026, 3, 9, 8, 0))
        resp = self.client.put("/api/calendar-notes/2026-03-09", json={"notes": "<b>hi</b>"})
        self.assertEqual(resp.status_code, 200, resp.text)
        self.assertEqual(resp.json()["notes"], "<b>hi</b>")
        self.assertEqual(mock_upsert.call_args[0][1], "2026-03-09")

    @patch("calendarnote.router.service.delete_note")
    def test_delete_note(self, mock_delete):
        mock_delete.return_value = True
        resp = self.client.delete("/api/calendar-notes/2026-03")
        self.assertEqual(resp.json(), {"message": "Note deleted"})

    @patch("calendarnote.router.service.add_comment")
    def test_post_comment(self, mock_add):
        mock_add.return_value = Obj(id="c1", period="2026-03", author="Admin", author_id="u1",
                                    avatar_url=None, content="Nice", created_at=datetime(2026, 3, 1))
        resp = self.client.post("/api/calendar-notes/2026-03/comments",
                                json={"author": "Admin", "authorId": "u1", "content": "Nice"})
        self.assertEqual(resp.status_code, 201, resp.text)
        self.assertEqual(resp.json()["authorId"], "u1")

    def test_post_comment_empty_content_422(self):
        resp = self.client.post("/api/calendar-notes/2026-03/comments",
                                json={"author": "Admin", "authorId": "u1", "content": ""})
        self.assertEqual(resp.status_code, 422)

    @patch("calendarnote.router.service.delete_comment")
    @patch("calendarnote.router.service.delete_note")
    def test_delete_comment_route_is_not_a_period(self, mock_delete_note, mock_delete_comment):
        mock_delete_comment.return_value = False
        resp = self.client.delete("/api/calendar-notes/comments/c9")
        self.assertEqual(resp.status_code, 404)
        self.assertEqual(resp.json()["detail"], "Comment not found")
        mock_delete_note.assert_not_called()


if __name__ == "__main__":
    unittest.main()
