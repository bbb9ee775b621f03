"""REST transport to the controller — results instead of exceptions."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Protocol, Union

import httpx

from edgeform import __version__
from edgeform.client.session import SessionState

logger = logging.getLogger(__name__)

GENERIC_ERROR = "Request failed. Please try again later."
LOGIN_ERROR = "Login Failed Try again Later"


@dataclass(frozen=True)
class Ok:
    """A successful exchange carrying the decoded response body."""

    value: Any


@dataclass(frozen=True)
class Err:
    """A failed exchange.

    ``message`` is the server-provided text when there is one, otherwise a
    generic fallback. ``status`` is None for network-level failures.
    """

    message: str
    status: int | None = None
    payload: Any = None


Result = Union[Ok, Err]


class Transport(Protocol):
    """What the form editor needs from the REST layer."""

    async def fetch_resource(self, path: str) -> Result: ...

    async def create_resource(self, path: str, model: dict[str, Any]) -> Result: ...

    async def update_resource(self, path: str, model: dict[str, Any]) -> Result: ...


class HttpTransport:
    """Transport over ``httpx.AsyncClient`` with bearer-token auth."""

    def __init__(
        self,
        base_url: str,
        session: SessionState | None = None,
        timeout: float = 10.0,
        client: httpx.AsyncClient | None = None,
    ) -> None:
        self.base_url = base_url.rstrip("/")
        self.session = session or SessionState()
        self._client = client or httpx.AsyncClient(timeout=timeout)

    async def close(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> HttpTransport:
        return self

    async def __aexit__(self, exc_type: object, exc_val: object, exc_tb: object) -> None:
        await self.close()

    async def fetch_resource(self, path: str) -> Result:
        return await self._request("GET", path)

    async def create_resource(self, path: str, model: dict[str, Any]) -> Result:
        return await self._request("POST", path, model)

    async def update_resource(self, path: str, model: dict[str, Any]) -> Result:
        return await self._request("PATCH", path, model)

    async def login(self, username: str, password: str) -> Result:
        """Exchange credentials for a token and store it in the session.

        Returns Ok(token) on success.
        """
        result = await self._request(
            "POST",
            "/auth",
            {"username": username, "password": password},
            fallback=LOGIN_ERROR,
        )
        if isinstance(result, Err):
            return result

        token = result.value.get("token") if isinstance(result.value, dict) else None
        if not token:
            return Err(LOGIN_ERROR)
        self.session.set_token(token)
        return Ok(token)

    def _headers(self) -> dict[str, str]:
        headers = {
            "Accept": "application/json",
            "User-Agent": f"edgeform/{__version__}",
        }
        if self.session.is_authenticated:
            headers["Authorization"] = f"Bearer {self.session.token}"
        return headers

    async def _request(
        self,
        method: str,
        path: str,
        body: dict[str, Any] | None = None,
        fallback: str = GENERIC_ERROR,
    ) -> Result:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = await self._client.request(
                method,
                url,
                json=body,
                headers=self._headers(),
            )
        except httpx.HTTPError as exc:
            logger.warning("%s %s failed: %s", method, url, exc)
            return Err(fallback)

        if response.is_success:
            return Ok(_decode(response))

        payload = _decode(response)
        message = _error_text(payload) or fallback
        logger.warning("%s %s returned %d: %s", method, url, response.status_code, message)
        return Err(message, status=response.status_code, payload=payload)


def _decode(response: httpx.Response) -> Any:
    if not response.content:
        return None
    try:
        return response.json()
    except ValueError:
        return response.text


def _error_text(payload: Any) -> str:
    """Pull a readable message out of an error body of any shape."""
    if isinstance(payload, str):
        return payload.strip()
    if isinstance(payload, dict):
        for key in ("message", "error", "detail"):
            value = payload.get(key)
            if isinstance(value, str) and value.strip():
                return value.strip()
            if isinstance(value, dict):
                return _error_text(value)
    return ""
