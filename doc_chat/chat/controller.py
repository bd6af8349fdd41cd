from __future__ import annotations

import logging
from typing import Protocol

from doc_chat.errors import SessionBusyError
from doc_chat.llm import (
    DEFAULT_TEMPERATURE,
    ChatCompletionRequest,
    ChatMessage,
    CompletionClient,
    Provider,
    ProviderEntry,
    list_providers,
)
from doc_chat.schema import ChatRequest, ChatResult

from .context import ContextSource, NullContextSource
from .prompts import DEFAULT_SYSTEM_PROMPT, compose_user_content
from .store import SessionState, SessionStore, session_state

logger = logging.getLogger(__name__)


class CredentialSource(Protocol):
    def resolve_credential(self, provider: Provider | str) -> str:
        """Return the API key for provider or raise ConfigurationError."""
        raise NotImplementedError


class ChatController:
    """
    Runs one chat turn at a time per session.

    Flow of `handle_send`:
    - resolve the credential
    - prime an empty session with the system prompt
    - fold the selected context, if any, into the user text
    - append the user turn, call the provider with the whole transcript
    - append the assistant reply

    A failed provider call leaves the user turn in place so the history shows
    what was asked. A second send to a session whose previous send is still
    outstanding is rejected with SessionBusyError.
    """

    def __init__(
        self,
        *,
        store: SessionStore,
        client: CompletionClient,
        credentials: CredentialSource,
        context: ContextSource | None = None,
        system_prompt: str = DEFAULT_SYSTEM_PROMPT,
        temperature: float = DEFAULT_TEMPERATURE,
    ) -> None:
        self.store = store
        self.client = client
        self.credentials = credentials
        self.context = context or NullContextSource()
        self.system_prompt = system_prompt
        self.temperature = temperature
        self._in_flight: set[str] = set()

    def get_available_models(self) -> tuple[ProviderEntry, ...]:
        return list_providers()

    def reset(self, session_id: str) -> None:
        self.store.reset_session(session_id)

    def is_busy(self, session_id: str) -> bool:
        return session_id in self._in_flight

    async def handle(self, req: ChatRequest) -> ChatResult:
        text = await self.handle_send(req.session_id, req.provider, req.model, req.user_text)
        return ChatResult(assistant_text=text)

    async def handle_send(self, session_id: str, provider: Provider | str, model: str, user_text: str) -> str:
        if session_id in self._in_flight:
            raise SessionBusyError(session_id)
        self._in_flight.add(session_id)
        try:
            return await self._send(session_id, provider, model, user_text)
        finally:
            self._in_flight.discard(session_id)

    async def _send(self, session_id: str, provider: Provider | str, model: str, user_text: str) -> str:
        credential = self.credentials.resolve_credential(provider)

        # Priming keys off the explicit EMPTY state, so a reset session is primed again.
        session = self.store.get_session(session_id)
        if session_state(session) is SessionState.EMPTY:
            self.store.append_message(session_id, ChatMessage("system", self.system_prompt))

        selected = await self.context.fetch_selected_context()
        content = compose_user_content(user_text, selected)
        self.store.append_message(session_id, ChatMessage("user", content))

        messages = self.store.get_session(session_id)
        logger.debug(
            "send session=%s provider=%s model=%s messages=%d context=%s",
            session_id,
            provider,
            model,
            len(messages),
            bool(selected),
        )
        assistant_text = await self.client.complete(
            ChatCompletionRequest(
                provider=provider,
                credential=credential,
                model=model,
                messages=list(messages),
                temperature=self.temperature,
            )
        )

        self.store.append_message(session_id, ChatMessage("assistant", assistant_text))
        logger.info("reply session=%s provider=%s model=%s chars=%d", session_id, provider, model, len(assistant_text))
        return assistant_text
