from __future__ import annotations

import logging
from typing import Any

import httpx

from doc_chat.errors import ConfigurationError, MalformedResponseError, ProviderHttpError

from .base import ChatCompletionRequest
from .providers import resolve_endpoint

logger = logging.getLogger(__name__)


class ChatCompletionClient:
    """
    Non-streaming ChatCompletions client for OpenAI-compatible providers via raw HTTP.

    One POST per call, a fresh `httpx.AsyncClient` each time, no retries.
    `timeout_s=None` leaves the request unbounded; pass a number to cap it.
    """

    def __init__(
        self,
        *,
        timeout_s: float | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self.timeout_s = timeout_s
        self.transport = transport

    async def complete(self, request: ChatCompletionRequest) -> str:
        if not request.credential:
            raise ConfigurationError(f"Missing API Key for provider: {request.provider}")
        endpoint = resolve_endpoint(request.provider)
        provider = endpoint.provider.value

        payload = {
            "model": request.model,
            "messages": [m.to_wire() for m in request.messages],
            "temperature": request.temperature,
        }
        logger.debug(
            "POST %s model=%s messages=%d", endpoint.completions_url, request.model, len(request.messages)
        )
        async with httpx.AsyncClient(timeout=self.timeout_s, transport=self.transport) as client:
            # Streamed so the status is known before the body is read.
            async with client.stream(
                "POST",
                endpoint.completions_url,
                json=payload,
                headers=endpoint.headers(request.credential),
            ) as r:
                if not r.is_success:
                    raise ProviderHttpError(provider, r.status_code, r.reason_phrase, await _read_body(r))
                await r.aread()
                try:
                    data = r.json()
                except ValueError as exc:
                    raise MalformedResponseError(provider, "body is not JSON") from exc

        return _extract_content(data, provider)


async def _read_body(response: httpx.Response) -> str:
    # Best effort: a failing body read must not hide the HTTP error itself.
    try:
        await response.aread()
        return response.text
    except (httpx.HTTPError, httpx.StreamError, ValueError) as exc:
        logger.debug("could not read error body: %s", exc)
        return ""


def _extract_content(data: Any, provider: str) -> str:
    # OpenAI returns: choices[0].message.content
    choices = data.get("choices") if isinstance(data, dict) else None
    if not isinstance(choices, list) or not choices:
        raise MalformedResponseError(provider, "missing choices")
    first = choices[0]
    msg = first.get("message") if isinstance(first, dict) else None
    if not isinstance(msg, dict):
        raise MalformedResponseError(provider, "missing message")
    content = msg.get("content")
    if not isinstance(content, str) or not content:
        raise MalformedResponseError(provider, "empty content")
    return content
