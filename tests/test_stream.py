"""Tests for the streaming WebSocket protocol."""
import asyncio
import threading
from typing import Sequence

from fastapi.testclient import TestClient

from src.game.models import QA, OracleStep
from src.server.app import create_app
from src.server.config import ServerConfig, StreamConfig
from tests.conftest import ScriptedOracle, guess_after


class HeldOracle(ScriptedOracle):
    """Holds each call until ``release`` is set from the test thread."""

    def __init__(self) -> None:
        super().__init__()
        self.release = threading.Event()
        self.entered = threading.Event()

    async def next_step(self, history: Sequence[QA], remaining: int) -> OracleStep:
        self.entered.set()
        while not self.release.is_set():
            await asyncio.sleep(0.01)
        return await super().next_step(history, remaining)


def _start(ws) -> dict:
    ws.send_json({"type": "start"})
    event = ws.receive_json()
    assert event["type"] == "question"
    return event


class TestStreamTurns:
    def test_start_sends_question(self, client):
        with client.websocket_connect("/ws") as ws:
            event = _start(ws)
        assert event["question"] == "Question 1?"
        assert event["session_id"]

    def test_answer_sends_next_question(self, client):
        with client.websocket_connect("/ws") as ws:
            session_id = _start(ws)["session_id"]
            ws.send_json({"type": "answer", "session_id": session_id, "answer": "no"})
            event = ws.receive_json()
        assert event == {"type": "question", "session_id": session_id, "question": "Question 2?"}

    def test_guess_and_get_guess(self, server_config):
        app = create_app(server_config, oracle=guess_after(1, "a kettle"))
        with TestClient(app) as client, client.websocket_connect("/ws") as ws:
            session_id = _start(ws)["session_id"]
            ws.send_json({"type": "answer", "session_id": session_id, "answer": "yes"})
            assert ws.receive_json() == {"type": "guess", "session_id": session_id, "guess": "a kettle"}

            ws.send_json({"type": "get_guess", "session_id": session_id})
            assert ws.receive_json()["guess"] == "a kettle"

            ws.send_json({"type": "answer", "session_id": session_id, "answer": "yes"})
            error = ws.receive_json()
        assert error["type"] == "error"
        assert error["code"] == "NO_PENDING_QUESTION"
        assert error["session_id"] == session_id

    def test_budget_exhaustion_sends_end(self, tmp_path):
        config = ServerConfig(db_path=tmp_path / "test.db", question_budget=1)
        with TestClient(create_app(config, oracle=ScriptedOracle())) as client:
            with client.websocket_connect("/ws") as ws:
                session_id = _start(ws)["session_id"]
                ws.send_json({"type": "answer", "session_id": session_id, "answer": "maybe"})
                event = ws.receive_json()
        assert event == {"type": "end", "session_id": session_id, "done": True}

    def test_end_acknowledges(self, client):
        with client.websocket_connect("/ws") as ws:
            session_id = _start(ws)["session_id"]
            ws.send_json({"type": "end", "session_id": session_id, "outcome": "ai_won"})
            event = ws.receive_json()
        assert event == {"type": "end", "session_id": session_id, "ended": True}

    def test_answer_after_end_sends_done(self, client):
        with client.websocket_connect("/ws") as ws:
            session_id = _start(ws)["session_id"]
            ws.send_json({"type": "end", "session_id": session_id, "outcome": "user_won"})
            assert ws.receive_json()["ended"] is True
            ws.send_json({"type": "answer", "session_id": session_id, "answer": "yes"})
            event = ws.receive_json()
        assert event == {"type": "end", "session_id": session_id, "done": True}

    def test_dropped_connection_keeps_inflight_answer(self, server_config):
        oracle = HeldOracle()
        oracle.release.set()
        with TestClient(create_app(server_config, oracle=oracle)) as client:
            session_id = client.post("/start", json={}).json()["session_id"]
            oracle.release.clear()
            oracle.entered.clear()

            with client.websocket_connect("/ws") as ws:
                ws.send_json({"type": "answer", "session_id": session_id, "answer": "yes"})
                assert oracle.entered.wait(timeout=5)
            oracle.release.set()

            snapshot = client.get(f"/sessions/{session_id}").json()

        assert snapshot["question"] == "Question 2?"
        assert snapshot["questions_asked"] == 1
        assert len(oracle.calls) == 2

    def test_one_connection_drives_several_sessions(self, client):
        with client.websocket_connect("/ws") as ws:
            first = _start(ws)["session_id"]
            second = _start(ws)["session_id"]
            ws.send_json({"type": "answer", "session_id": first, "answer": "yes"})
            event = ws.receive_json()
        assert first != second
        assert event["session_id"] == first

    def test_session_shared_with_http(self, client):
        session_id = client.post("/start", json={}).json()["session_id"]
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "answer", "session_id": session_id, "answer": "unknown"})
            event = ws.receive_json()
        assert event["type"] == "question"
        guess = client.get("/guess", params={"session_id": session_id})
        assert guess.status_code == 200


class TestStreamErrors:
    def test_invalid_json(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_text("{not json")
            event = ws.receive_json()
        assert event["type"] == "error"
        assert event["code"] == "INVALID_JSON"

    def test_unknown_type_keeps_connection_open(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "dance"})
            event = ws.receive_json()
            assert event["code"] == "UNKNOWN_MESSAGE_TYPE"
            assert _start(ws)["question"] == "Question 1?"

    def test_non_object_message(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json(["start"])
            assert ws.receive_json()["code"] == "UNKNOWN_MESSAGE_TYPE"

    def test_unknown_session(self, client):
        with client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "answer", "session_id": "missing", "answer": "yes"})
            event = ws.receive_json()
        assert event["code"] == "SESSION_NOT_FOUND"
        assert event["session_id"] == "missing"

    def test_invalid_answer(self, client):
        with client.websocket_connect("/ws") as ws:
            session_id = _start(ws)["session_id"]
            ws.send_json({"type": "answer", "session_id": session_id, "answer": "kinda"})
            event = ws.receive_json()
        assert event["code"] == "INVALID_FORMAT"
        assert event["details"]["fields"][0]["field"] == "answer"

    def test_unexpected_failure_reported_on_socket(self, server_config):
        app = create_app(server_config, oracle=ScriptedOracle([RuntimeError("boom")]))
        with TestClient(app) as client, client.websocket_connect("/ws") as ws:
            ws.send_json({"type": "start"})
            event = ws.receive_json()
            assert event["code"] == "INTERNAL_ERROR"
            assert _start(ws)["question"] == "Question 1?"


class TestStreamDisabled:
    def test_endpoint_not_mounted(self, tmp_path):
        config = ServerConfig(db_path=tmp_path / "test.db", stream=StreamConfig(enabled=False))
        app = create_app(config, oracle=ScriptedOracle())
        assert "/ws" not in [route.path for route in app.routes]

