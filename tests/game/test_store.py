"""Tests for the in-memory session store."""
import asyncio

import pytest

from src.game import QUESTION_BUDGET, SessionState, SessionStore


class TestSessionStore:
    def test_create_assigns_unique_ids(self):
        store = SessionStore()
        ids = {store.create().id for _ in range(50)}
        assert len(ids) == 50
        assert len(store) == 50

    def test_new_session_is_awaiting_first_turn(self):
        session = SessionStore(question_budget=5).create()
        assert session.state == SessionState.AWAITING_TURN
        assert session.budget == 5
        assert session.history == []
        assert session.current_guess is None
        assert session.done is False

    def test_default_budget(self):
        assert SessionStore().question_budget == QUESTION_BUDGET == 20

    def test_get_unknown_returns_none(self):
        store = SessionStore()
        assert store.get("missing") is None
        assert "missing" not in store

    def test_get_returns_created_session(self):
        store = SessionStore()
        session = store.create()
        assert store.get(session.id) is session
        assert session.id in store

    def test_each_session_has_its_own_lock(self):
        store = SessionStore()
        a, b = store.create(), store.create()
        assert isinstance(store.lock(a.id), asyncio.Lock)
        assert store.lock(a.id) is store.lock(a.id)
        assert store.lock(a.id) is not store.lock(b.id)

    def test_lock_for_unknown_session_raises(self):
        with pytest.raises(KeyError):
            SessionStore().lock("missing")

    def test_budget_must_be_positive(self):
        with pytest.raises(ValueError):
            SessionStore(question_budget=0)
