"""Pytest fixtures for game and server tests."""
import asyncio
from pathlib import Path
from typing import Sequence, Union

import pytest
from fastapi.testclient import TestClient

from src.game.models import QA, Guess, OracleStep, Question
from src.server.app import create_app
from src.server.config import ServerConfig, ToolsConfig


class ScriptedOracle:
    """Replays a fixed list of steps, then asks numbered questions.

    An exception in the script is raised instead of returned. Every call
    is recorded as ``(history, remaining)``.
    """

    def __init__(self, steps: Sequence[Union[OracleStep, Exception]] = ()) -> None:
        self._steps = list(steps)
        self.calls: list[tuple[tuple[QA, ...], int]] = []

    async def next_step(self, history: Sequence[QA], remaining: int) -> OracleStep:
        self.calls.append((tuple(history), remaining))
        if self._steps:
            step = self._steps.pop(0)
            if isinstance(step, Exception):
                raise step
            return step
        return Question(f"Question {len(history) + 1}?")


class GatedOracle(ScriptedOracle):
    """Blocks every call until ``release`` is set, tracking overlap."""

    def __init__(self, steps: Sequence[Union[OracleStep, Exception]] = ()) -> None:
        super().__init__(steps)
        self.release = asyncio.Event()
        self.entered = asyncio.Event()
        self.active = 0
        self.max_active = 0

    async def next_step(self, history: Sequence[QA], remaining: int) -> OracleStep:
        self.active += 1
        self.max_active = max(self.max_active, self.active)
        self.entered.set()
        try:
            await self.release.wait()
            return await super().next_step(history, remaining)
        finally:
            self.active -= 1


def guess_after(questions: int, guess: str = "a cat") -> ScriptedOracle:
    """Oracle that asks ``questions`` questions and then guesses."""
    steps: list[OracleStep] = [Question(f"Question {i}?") for i in range(1, questions + 1)]
    steps.append(Guess(guess))
    return ScriptedOracle(steps)


@pytest.fixture
def oracle() -> ScriptedOracle:
    return ScriptedOracle()


@pytest.fixture
def server_config(tmp_path: Path) -> ServerConfig:
    return ServerConfig(db_path=tmp_path / "test.db", tools=ToolsConfig(auth_token=""))


@pytest.fixture
def client(server_config: ServerConfig, oracle: ScriptedOracle) -> TestClient:
    app = create_app(server_config, oracle=oracle)
    with TestClient(app) as c:
        yield c
