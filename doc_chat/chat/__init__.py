from .context import CallableContextSource, ContextSource, NullContextSource, StaticContextSource
from .controller import ChatController, CredentialSource
from .prompts import CONTEXT_LABEL, DEFAULT_SYSTEM_PROMPT, QUESTION_LABEL, compose_user_content
from .store import SessionState, SessionStore, session_state

__all__ = [
    "CONTEXT_LABEL",
    "DEFAULT_SYSTEM_PROMPT",
    "QUESTION_LABEL",
    "CallableContextSource",
    "ChatController",
    "ContextSource",
    "CredentialSource",
    "NullContextSource",
    "SessionState",
    "SessionStore",
    "StaticContextSource",
    "compose_user_content",
    "session_state",
]
