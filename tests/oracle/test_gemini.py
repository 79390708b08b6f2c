"""Tests for the Gemini oracle over a mocked transport."""
import json

import httpx
import pytest

from src.game.models import QA, Answer, Guess, Question
from src.oracle import GeminiOracle, OracleUnavailableError


def _reply(text: str) -> dict:
    return {"candidates": [{"content": {"parts": [{"text": text}]}}]}


def _oracle(handler, **kwargs) -> GeminiOracle:
    return GeminiOracle(api_key="test-key", transport=httpx.MockTransport(handler), **kwargs)


class TestGeminiOracle:
    @pytest.mark.asyncio
    async def test_returns_question(self):
        seen = {}

        def handler(request: httpx.Request) -> httpx.Response:
            seen["url"] = str(request.url)
            seen["key"] = request.headers.get("x-goog-api-key")
            seen["body"] = json.loads(request.content)
            return httpx.Response(200, json=_reply("QUESTION: Is it an animal?"))

        step = await _oracle(handler).next_step([QA("Is it alive?", Answer.YES)], 19)

        assert step == Question("Is it an animal?")
        assert "models/gemini-1.5-flash:generateContent" in seen["url"]
        assert seen["key"] == "test-key"
        assert "test-key" not in seen["url"]
        prompt = seen["body"]["contents"][0]["parts"][0]["text"]
        assert "Is it alive?" in prompt
        assert "Questions remaining: 19." in prompt

    @pytest.mark.asyncio
    async def test_returns_guess(self):
        oracle = _oracle(lambda request: httpx.Response(200, json=_reply("FINAL_GUESS: a lamp")))
        assert await oracle.next_step([], 1) == Guess("a lamp")

    @pytest.mark.asyncio
    async def test_hints_are_added_to_prompt(self):
        seen = {}

        async def hints():
            return ["a harmonica"]

        def handler(request: httpx.Request) -> httpx.Response:
            seen["body"] = request.content.decode()
            return httpx.Response(200, json=_reply("QUESTION: Is it loud?"))

        await _oracle(handler, hints=hints).next_step([], 20)

        assert "a harmonica" in seen["body"]

    @pytest.mark.asyncio
    async def test_missing_key_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise AssertionError("no request expected")

        oracle = GeminiOracle(api_key="", transport=httpx.MockTransport(handler))
        with pytest.raises(OracleUnavailableError):
            await oracle.next_step([], 20)

    @pytest.mark.asyncio
    async def test_error_status_is_unavailable(self):
        oracle = _oracle(lambda request: httpx.Response(429, json={"error": "quota"}))
        with pytest.raises(OracleUnavailableError, match="429"):
            await oracle.next_step([], 20)

    @pytest.mark.asyncio
    async def test_timeout_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ReadTimeout("slow", request=request)

        with pytest.raises(OracleUnavailableError, match="timed out"):
            await _oracle(handler).next_step([], 20)

    @pytest.mark.asyncio
    async def test_connection_error_is_unavailable(self):
        def handler(request: httpx.Request) -> httpx.Response:
            raise httpx.ConnectError("refused", request=request)

        with pytest.raises(OracleUnavailableError):
            await _oracle(handler).next_step([], 20)

    @pytest.mark.asyncio
    async def test_unexpected_payload_is_unavailable(self):
        oracle = _oracle(lambda request: httpx.Response(200, json={"candidates": []}))
        with pytest.raises(OracleUnavailableError):
            await oracle.next_step([], 20)

    @pytest.mark.asyncio
    async def test_unparseable_text_is_unavailable(self):
        oracle = _oracle(lambda request: httpx.Response(200, json=_reply("Hmm, tough one.")))
        with pytest.raises(OracleUnavailableError):
            await oracle.next_step([], 20)
