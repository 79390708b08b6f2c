"""Async HTTP client for the game server."""

from typing import Any

import httpx

from .exceptions import GameClientError


class GameClient:
    """Client for the synchronous game API. Must be used as async context manager."""

    def __init__(self, base_url: str, timeout: float = 30.0,
                 transport: httpx.AsyncBaseTransport | None = None) -> None:
        self._base_url = base_url.rstrip("/")
        self._timeout = timeout
        self._transport = transport
        self._client: httpx.AsyncClient | None = None

    @property
    def base_url(self) -> str:
        return self._base_url

    async def __aenter__(self) -> "GameClient":
        self._client = httpx.AsyncClient(base_url=self._base_url, timeout=httpx.Timeout(self._timeout),
                                         transport=self._transport)
        return self

    async def __aexit__(self, *args: Any) -> None:
        if self._client:
            await self._client.aclose()
            self._client = None

    async def start(self) -> dict[str, Any]:
        """Start a session. Returns the first turn."""
        return await self._request("POST", "/start", json={})

    async def answer(self, session_id: str, answer: str) -> dict[str, Any]:
        """Answer the pending question. Returns the next turn."""
        return await self._request("POST", "/answer", json={"session_id": session_id, "answer": answer})

    async def get_guess(self, session_id: str) -> str | None:
        data = await self._request("GET", "/guess", params={"session_id": session_id})
        return data.get("guess")

    async def end(self, session_id: str, outcome: str, actual_answer: str | None = None) -> dict[str, Any]:
        body: dict[str, Any] = {"session_id": session_id, "outcome": outcome}
        if actual_answer:
            body["actual_answer"] = actual_answer
        return await self._request("POST", "/end", json=body)

    async def _request(self, method: str, path: str, json: dict | None = None,
                       params: dict | None = None) -> dict[str, Any]:
        if not self._client:
            raise GameClientError("Client not initialized")
        try:
            resp = await self._client.request(method, path, json=json, params=params)
        except httpx.TimeoutException as e:
            raise GameClientError(f"Request to {path} timed out: {e}") from e
        except httpx.RequestError as e:
            raise GameClientError(f"Request to {path} failed: {e}") from e
        try:
            data = resp.json() if resp.content else {}
        except ValueError:
            data = {}
        if resp.status_code >= 400:
            error = data.get("error", {}) if isinstance(data, dict) else {}
            raise GameClientError(error.get("message") or f"Server returned {resp.status_code}",
                                  status_code=resp.status_code, code=error.get("code"))
        return data
