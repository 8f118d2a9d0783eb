"""Tests for the game blueprint routes."""

from __future__ import annotations

import json
import unittest
from unittest.mock import patch

from tests.conftest import ITEMS_10, SAMPLE_LAYOUT, make_app
from tests.mock_utils import MockSessionStore

MOCK_USER_ID = "user1"
AUTH = {"Authorization": "Bearer test-token"}
GAME_ID = "route01"


class GameRoutesTestCase(unittest.TestCase):
    """Test case for the game blueprint."""

    def setUp(self) -> None:
        """Set up a test client over an in-memory store."""
        self.store = MockSessionStore()
        self.app = make_app(self.store)
        self.client = self.app.test_client()
        self.app_context = self.app.app_context()
        self.app_context.push()

        patcher = patch("firebase_admin.auth.verify_id_token")
        self.mock_verify = patcher.start()
        self.addCleanup(patcher.stop)
        self.mock_verify.return_value = {"uid": MOCK_USER_ID}

    def tearDown(self) -> None:
        """Tear down the test client."""
        self.app_context.pop()

    def test_create_game(self) -> None:
        response = self.client.post(
            "/games/", json={"items": "\n".join(ITEMS_10)}, headers=AUTH
        )
        self.assertEqual(response.status_code, 201)
        body = response.get_json()
        self.assertEqual(len(body["layout"]), 24)
        doc = self.store.docs[self.store.game_path(body["id"])]
        self.assertEqual(doc["creatorId"], MOCK_USER_ID)

    def test_create_game_form_post(self) -> None:
        response = self.client.post(
            "/games/", data={"items": "\n".join(ITEMS_10)}, headers=AUTH
        )
        self.assertEqual(response.status_code, 201)

    def test_create_game_bad_count(self) -> None:
        response = self.client.post(
            "/games/", json={"items": "one\ntwo"}, headers=AUTH
        )
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["kind"], "validation")
        self.assertEqual(self.store.docs, {})

    def test_create_game_missing_items(self) -> None:
        response = self.client.post("/games/", json={}, headers=AUTH)
        self.assertEqual(response.status_code, 400)

    def test_identity_required(self) -> None:
        response = self.client.post("/games/", json={"items": "\n".join(ITEMS_10)})
        self.assertEqual(response.status_code, 401)
        self.assertEqual(response.get_json()["kind"], "identity")
        self.mock_verify.assert_not_called()

    def test_rejected_token(self) -> None:
        self.mock_verify.side_effect = ValueError("bad")
        response = self.client.get(f"/games/{GAME_ID}", headers=AUTH)
        self.assertEqual(response.status_code, 401)

    def test_view_missing_game(self) -> None:
        response = self.client.get("/games/unknown", headers=AUTH)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(response.get_json()["kind"], "not_found")

    def test_join_toggle_rename_flow(self) -> None:
        self.store.put_game(GAME_ID, SAMPLE_LAYOUT)

        response = self.client.post(f"/games/{GAME_ID}/join", headers=AUTH)
        self.assertEqual(response.status_code, 200)
        self.assertTrue(response.get_json()["created"])
        response = self.client.post(f"/games/{GAME_ID}/join", headers=AUTH)
        self.assertFalse(response.get_json()["created"])

        response = self.client.post(f"/games/{GAME_ID}/cells/3/toggle", headers=AUTH)
        self.assertEqual(response.get_json(), {"checkedIndices": [3]})
        response = self.client.post(f"/games/{GAME_ID}/cells/8/toggle", headers=AUTH)
        self.assertEqual(response.get_json(), {"checkedIndices": [3]})

        response = self.client.post(
            f"/games/{GAME_ID}/name", json={"name": "Zoe"}, headers=AUTH
        )
        self.assertEqual(response.get_json(), {"name": "Zoe"})

        response = self.client.get(f"/games/{GAME_ID}", headers=AUTH)
        body = response.get_json()
        self.assertEqual(body["game"]["participantCount"], 1)
        self.assertEqual(body["participants"][0]["name"], "Zoe")
        self.assertEqual(body["participants"][0]["checkedIndices"], [3])

    def test_join_missing_game(self) -> None:
        response = self.client.post("/games/nothing/join", headers=AUTH)
        self.assertEqual(response.status_code, 404)
        self.assertEqual(self.store.count("merge"), 0)

    def test_rename_blank(self) -> None:
        self.store.put_game(GAME_ID, SAMPLE_LAYOUT)
        self.client.post(f"/games/{GAME_ID}/join", headers=AUTH)
        response = self.client.post(
            f"/games/{GAME_ID}/name", json={"name": "   "}, headers=AUTH
        )
        self.assertEqual(response.status_code, 400)

    def test_store_error_is_banner(self) -> None:
        self.store.put_game(GAME_ID, SAMPLE_LAYOUT)
        self.store.failing.add("read")
        response = self.client.get(f"/games/{GAME_ID}", headers=AUTH)
        self.assertEqual(response.status_code, 503)
        self.assertEqual(response.get_json()["kind"], "store")

    def test_recent_games(self) -> None:
        self.store.put_game("old", SAMPLE_LAYOUT)
        self.store.put_game("new", SAMPLE_LAYOUT, participantCount=2)
        response = self.client.get("/games/")
        games = response.get_json()["games"]
        self.assertEqual([g["id"] for g in games], ["new", "old"])
        self.assertEqual(games[0]["participantCount"], 2)

    def test_invite_text(self) -> None:
        response = self.client.get(f"/games/{GAME_ID}/invite")
        self.assertEqual(
            response.get_json()["text"], f"Join my Bingo! Game ID: {GAME_ID}"
        )

    def test_game_stream(self) -> None:
        self.store.put_game(GAME_ID, SAMPLE_LAYOUT)
        response = self.client.get(f"/games/{GAME_ID}/stream", headers=AUTH)
        self.assertEqual(response.mimetype, "text/event-stream")

        frames = []
        chunks = iter(response.response)
        for _ in range(10):
            chunk = next(chunks)
            if isinstance(chunk, bytes):
                chunk = chunk.decode()
            if chunk.startswith(":"):
                break
            data_line = chunk.strip().splitlines()[-1]
            frames.append(json.loads(data_line[len("data: ") :]))
        response.close()

        self.assertEqual(frames[0]["status"], "loading")
        self.assertEqual(frames[-1]["status"], "ready")
        self.assertEqual(frames[-1]["me"]["userId"], MOCK_USER_ID)
        self.assertEqual(self.store.open_subscriptions, 0)

    def read_frames(self, response) -> list[tuple[str, dict]]:
        """Collect ``(event, data)`` pairs until the stream ends."""
        frames = []
        for chunk in response.response:
            if isinstance(chunk, bytes):
                chunk = chunk.decode()
            if chunk.startswith(":"):
                continue
            lines = chunk.strip().splitlines()
            event = lines[0][len("event: ") :]
            frames.append((event, json.loads(lines[-1][len("data: ") :])))
        response.close()
        return frames

    def test_game_stream_reports_store_error(self) -> None:
        self.store.put_game(GAME_ID, SAMPLE_LAYOUT)
        self.store.failing.add("increment")
        response = self.client.get(f"/games/{GAME_ID}/stream", headers=AUTH)

        frames = self.read_frames(response)

        self.assertEqual(frames[0][0], "state")
        self.assertEqual(frames[0][1]["status"], "loading")
        event, data = frames[-1]
        self.assertEqual(event, "error")
        self.assertEqual(data["kind"], "store")
        self.assertTrue(data["error"])
        self.assertEqual(self.store.open_subscriptions, 0)

    def test_recent_stream_reports_store_error(self) -> None:
        self.store.failing.add("subscribe_query")
        response = self.client.get("/games/recent/stream")

        frames = self.read_frames(response)

        self.assertEqual(len(frames), 1)
        self.assertEqual(frames[0][0], "error")
        self.assertEqual(frames[0][1]["kind"], "store")

    def test_create_game_non_text_items(self) -> None:
        response = self.client.post("/games/", json={"items": 12}, headers=AUTH)
        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["kind"], "validation")
        self.assertEqual(self.store.docs, {})

    def test_rename_non_text_name(self) -> None:
        self.store.put_game(GAME_ID, SAMPLE_LAYOUT)
        self.client.post(f"/games/{GAME_ID}/join", headers=AUTH)
        original = self.store.docs[
            self.store.participant_path(GAME_ID, MOCK_USER_ID)
        ]["name"]

        response = self.client.post(
            f"/games/{GAME_ID}/name", json={"name": 5}, headers=AUTH
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.get_json()["kind"], "validation")
        self.assertEqual(
            self.store.docs[self.store.participant_path(GAME_ID, MOCK_USER_ID)]["name"],
            original,
        )


if __name__ == "__main__":
    unittest.main()
