from __future__ import annotations

from dataclasses import dataclass, field
from typing import Protocol

from .providers import Provider

ROLES = ("system", "user", "assistant")

DEFAULT_TEMPERATURE = 0.2


@dataclass(frozen=True)
class ChatMessage:
    role: str  # "system" | "user" | "assistant"
    content: str

    def __post_init__(self) -> None:
        if self.role not in ROLES:
            raise ValueError(f"Unknown chat role {self.role!r}, expected one of {ROLES}")

    def to_wire(self) -> dict[str, str]:
        return {"role": self.role, "content": self.content}


@dataclass(frozen=True)
class ChatCompletionRequest:
    provider: Provider | str
    credential: str
    model: str
    messages: list[ChatMessage] = field(default_factory=list)
    temperature: float = DEFAULT_TEMPERATURE


class CompletionClient(Protocol):
    async def complete(self, request: ChatCompletionRequest) -> str:
        """Return the assistant reply text for the request."""
        raise NotImplementedError
