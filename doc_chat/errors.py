from __future__ import annotations


class ChatError(Exception):
    """Base class for every error raised by doc_chat."""


class ConfigurationError(ChatError):
    """A credential or setting required for the call is missing or unusable."""


class UnsupportedProviderError(ConfigurationError):
    def __init__(self, provider: object) -> None:
        super().__init__(f"Unsupported AI provider: {provider}")
        self.provider = provider


class ProviderHttpError(ChatError):
    """The provider answered with a non-2xx status."""

    def __init__(self, provider: str, status_code: int, status_text: str, body: str = "") -> None:
        super().__init__(f"Chat completion failed ({provider}) {status_code} {status_text}\n{body}")
        self.provider = provider
        self.status_code = status_code
        self.status_text = status_text
        self.body = body


class MalformedResponseError(ChatError):
    """The provider answered 2xx but the payload carries no assistant text."""

    def __init__(self, provider: str, detail: str = "") -> None:
        msg = f"Invalid chat completion response from {provider}"
        if detail:
            msg = f"{msg}: {detail}"
        super().__init__(msg)
        self.provider = provider
        self.detail = detail


class SessionBusyError(ChatError):
    def __init__(self, session_id: str) -> None:
        super().__init__(f"A message is already being sent for session {session_id!r}")
        self.session_id = session_id
