from __future__ import annotations

from .base import ChatCompletionRequest


class MockCompletionClient:
    """Deterministic mock backend: useful to exercise a chat session without a provider."""

    def __init__(self) -> None:
        self.requests: list[ChatCompletionRequest] = []

    async def complete(self, request: ChatCompletionRequest) -> str:
        self.requests.append(request)
        last_user = next((m.content for m in reversed(request.messages) if m.role == "user"), "")
        return f"(mock {request.provider}/{request.model}) You said:\n{last_user}"
