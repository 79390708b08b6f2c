"""Oracle backed by the Gemini generateContent REST API."""
import logging
from typing import Awaitable, Callable, Optional, Sequence

import httpx

from src.game.models import QA, OracleStep
from src.oracle.base import OracleUnavailableError
from src.oracle.prompts import build_prompt, parse_reply

logger = logging.getLogger(__name__)

GEMINI_API_BASE = "https://generativelanguage.googleapis.com/v1beta"
DEFAULT_MODEL = "gemini-1.5-flash"

HintsProvider = Callable[[], Awaitable[Sequence[str]]]


class GeminiOracle:
    """Asks a Gemini model for the next question or a final guess.

    Every failure mode (no key, network error, timeout, error status,
    unexpected payload, unparseable text) surfaces as
    ``OracleUnavailableError`` so the caller can fall back.
    """

    def __init__(
        self,
        api_key: str,
        model: str = DEFAULT_MODEL,
        timeout: float = 15.0,
        hints: Optional[HintsProvider] = None,
        base_url: str = GEMINI_API_BASE,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ) -> None:
        self._api_key = api_key
        self._model = model
        self._timeout = timeout
        self._hints = hints
        self._base_url = base_url.rstrip("/")
        self._transport = transport

    @property
    def model(self) -> str:
        return self._model

    async def next_step(self, history: Sequence[QA], remaining: int) -> OracleStep:
        if not self._api_key:
            raise OracleUnavailableError("GEMINI_API_KEY is not configured")
        hints = await self._hints() if self._hints is not None else ()
        prompt = build_prompt(history, remaining, hints)
        text = await self._generate(prompt)
        return parse_reply(text)

    async def _generate(self, prompt: str) -> str:
        url = f"{self._base_url}/models/{self._model}:generateContent"
        body = {"contents": [{"role": "user", "parts": [{"text": prompt}]}]}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout, transport=self._transport,
            ) as client:
                response = await client.post(url, headers={"x-goog-api-key": self._api_key}, json=body)
        except httpx.TimeoutException as exc:
            raise OracleUnavailableError(f"Gemini request timed out: {exc}") from exc
        except httpx.HTTPError as exc:
            raise OracleUnavailableError(f"Gemini request failed: {exc}") from exc

        if response.status_code >= 400:
            raise OracleUnavailableError(f"Gemini returned {response.status_code}")
        try:
            payload = response.json()
            parts = payload["candidates"][0]["content"]["parts"]
            text = "".join(part.get("text", "") for part in parts).strip()
        except (ValueError, KeyError, IndexError, TypeError, AttributeError) as exc:
            raise OracleUnavailableError(f"Unexpected Gemini payload: {exc}") from exc
        logger.debug("Gemini reply: %s", text)
        return text
