"""Shared plumbing for provider HTTP adapters.

An adapter performs exactly one upstream call with one API key and returns
the assistant text. It never retries, rotates keys or tracks health; any
failure is raised and left to the rotator to classify.
"""

from __future__ import annotations

import json
import logging
import time
from collections.abc import Awaitable, Callable, Sequence
from typing import Any

import httpx

from rotation_proxy.core.exceptions import ProviderCallError
from rotation_proxy.core.settings import ChatMessage, LlmSettings

logger = logging.getLogger(__name__)

DEFAULT_TEMPERATURE = 0.7
DEFAULT_TOP_P = 0.9
DEFAULT_MAX_TOKENS = 2048
DEFAULT_SITE_URL = "http://localhost:3000"
DEFAULT_SITE_NAME = "LLM Rotation Server"

ProviderAdapter = Callable[[str, LlmSettings, Sequence[ChatMessage]], Awaitable[str]]


def _error_body(response: httpx.Response) -> str:
    try:
        return json.dumps(response.json())
    except ValueError:
        return json.dumps({"message": response.reason_phrase or response.text})


class HttpProviderAdapter:
    """Base class for adapters that talk JSON over HTTPS.

    Subclasses implement ``__call__`` and use ``_post_json`` for the wire
    call. The httpx client is shared across adapters so connections are
    pooled; the adapter itself holds no per-key state.
    """

    name = "provider"

    def __init__(self, client: httpx.AsyncClient) -> None:
        self.client = client

    async def __call__(
        self, api_key: str, settings: LlmSettings, messages: Sequence[ChatMessage]
    ) -> str:
        raise NotImplementedError

    async def _post_json(
        self,
        url: str,
        *,
        headers: dict[str, str],
        payload: dict[str, Any],
    ) -> Any:
        """POST a JSON payload and return the decoded JSON response.

        Raises:
            ProviderCallError: If the upstream answers with a non-2xx status
                or a body that is not JSON.
        """
        start_time = time.time()
        logger.debug(f"📤 {self.name.upper()} REQUEST | Model: {payload.get('model', 'unknown')}")

        response = await self.client.post(url, headers=headers, json=payload)

        duration_ms = (time.time() - start_time) * 1000
        logger.debug(
            f"📥 {self.name.upper()} RESPONSE | Status: {response.status_code} | "
            f"Duration: {duration_ms:.0f}ms"
        )

        if response.is_error:
            raise ProviderCallError(
                f"API request failed: {response.status_code} {_error_body(response)}",
                status_code=response.status_code,
            )
        try:
            return response.json()
        except ValueError as e:
            raise ProviderCallError(f"{self.name} returned a non-JSON response: {e}") from e

    def _unexpected(self, data: Any) -> ProviderCallError:
        snippet = json.dumps(data)[:200] if data is not None else "null"
        return ProviderCallError(f"Unexpected response format from {self.name}: {snippet}")
