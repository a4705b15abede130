"""Remote dialog engine client over HTTP."""

import os
from typing import Any, Protocol

import httpx

from ..logging_config import get_logger
from ..models import EngineInput, EngineOutput

logger = get_logger(__name__)


class EngineError(Exception):
    """Engine round trip failed; no answer is available."""


class EngineTransportError(EngineError):
    """Network failure, timeout or non-2xx status from the engine."""


class EngineResponseError(EngineError):
    """Engine replied, but the body is not a usable answer."""


class IEngineClient(Protocol):
    """Abstraction for the remote dialog engine."""

    async def send_input(
        self, session_id: str | None, engine_input: EngineInput
    ) -> EngineOutput:
        """Send one input within a session (None starts a new one)."""
        ...


class EngineClient:
    """Teneo-style engine client: form-encoded input, JSON answer, cookie session."""

    def __init__(
        self,
        engine_url: str | None = None,
        timeout: float = 10.0,
        connect_retries: int = 1,
        client: httpx.AsyncClient | None = None,
    ):
        self._engine_url = engine_url or os.getenv("TENEO_ENGINE_URL")
        if not self._engine_url:
            raise ValueError("TENEO_ENGINE_URL environment variable not set")

        self._timeout = timeout
        self._connect_retries = max(0, connect_retries)
        self._owns_client = client is None
        self._client = client or httpx.AsyncClient(timeout=timeout)

    @property
    def engine_url(self) -> str:
        return self._engine_url

    async def close(self) -> None:
        if self._owns_client:
            await self._client.aclose()

    async def send_input(
        self, session_id: str | None, engine_input: EngineInput
    ) -> EngineOutput:
        """Send user input to the engine and parse its answer."""
        data = {
            "userinput": engine_input.text,
            "viewtype": "tieapi",
            **engine_input.to_params(),
        }
        headers = {}
        if session_id:
            headers["Cookie"] = f"JSESSIONID={session_id}"

        response = await self._post(data, headers)

        try:
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            raise EngineTransportError(
                f"Engine returned HTTP {response.status_code}"
            ) from e

        try:
            payload = response.json()
        except ValueError as e:
            raise EngineResponseError("Engine response is not valid JSON") from e

        return _parse_output(payload)

    async def _post(self, data: dict[str, str], headers: dict[str, str]) -> httpx.Response:
        # Only connect failures are retried: the engine never saw the input
        attempt = 0
        while True:
            try:
                return await self._client.post(
                    self._engine_url,
                    data=data,
                    headers=headers,
                    timeout=self._timeout,
                )
            except (httpx.ConnectError, httpx.ConnectTimeout) as e:
                if attempt < self._connect_retries:
                    attempt += 1
                    logger.warning(
                        f"Engine connect failed ({e}), retry {attempt}/{self._connect_retries}"
                    )
                    continue
                raise EngineTransportError(f"Cannot connect to engine: {e}") from e
            except httpx.HTTPError as e:
                raise EngineTransportError(f"Engine request failed: {e}") from e


def _parse_output(payload: Any) -> EngineOutput:
    """Validate the engine JSON body and map it to EngineOutput."""
    if not isinstance(payload, dict):
        raise EngineResponseError("Engine response is not a JSON object")

    status = payload.get("status")
    if status not in (None, 0, "0"):
        raise EngineResponseError(
            f"Engine reported status {status}: {payload.get('message', '')}"
        )

    session_id = payload.get("sessionId")
    if not isinstance(session_id, str) or not session_id:
        raise EngineResponseError("Engine response has no sessionId")

    output = payload.get("output")
    if not isinstance(output, dict):
        raise EngineResponseError("Engine response has no output")

    text = output.get("text")
    if text is not None and not isinstance(text, str):
        raise EngineResponseError("Engine output text is not a string")

    parameters = output.get("parameters") or {}
    if not isinstance(parameters, dict):
        raise EngineResponseError("Engine output parameters are not an object")

    return EngineOutput(
        session_id=session_id,
        text=text or "",
        parameters=parameters,
        emotion=output.get("emotion") or None,
        link=output.get("link") or None,
    )
