from __future__ import annotations

from pydantic import BaseModel, field_validator

from doc_chat.llm import Provider


class ChatRequest(BaseModel):
    """Payload coming from a chat front end."""

    session_id: str
    provider: Provider
    model: str
    user_text: str

    @field_validator("model")
    @classmethod
    def validate_model(cls, v: str) -> str:
        if not v.strip():
            raise ValueError("model must not be empty")
        return v

    @field_validator("user_text")
    @classmethod
    def validate_user_text(cls, v: str) -> str:
        # Chat panes ignore sends of whitespace-only input.
        v = v.strip()
        if not v:
            raise ValueError("user_text must not be blank")
        return v


class ChatResult(BaseModel):
    assistant_text: str
