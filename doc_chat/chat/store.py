from __future__ import annotations

from enum import Enum

from doc_chat.llm import ChatMessage


class SessionState(str, Enum):
    EMPTY = "empty"
    PRIMED = "primed"  # only the system prompt so far
    USER_PENDING = "user_pending"  # last turn is the user's; a reply is outstanding or failed
    ANSWERED = "answered"


def session_state(messages: list[ChatMessage]) -> SessionState:
    if not messages:
        return SessionState.EMPTY
    last = messages[-1].role
    if last == "system":
        return SessionState.PRIMED
    if last == "user":
        return SessionState.USER_PENDING
    return SessionState.ANSWERED


class SessionStore:
    """
    In-memory chat transcripts keyed by session id.

    Ids are opaque and case-sensitive. `get_session` hands out the live list;
    callers mutate it only through `append_message`. Nothing here validates
    role ordering, that is the controller's job.
    """

    def __init__(self) -> None:
        self._sessions: dict[str, list[ChatMessage]] = {}

    def get_session(self, session_id: str) -> list[ChatMessage]:
        session = self._sessions.get(session_id)
        if session is None:
            session = []
            self._sessions[session_id] = session
        return session

    def append_message(self, session_id: str, message: ChatMessage) -> None:
        self.get_session(session_id).append(message)

    def reset_session(self, session_id: str) -> None:
        self._sessions.pop(session_id, None)

    def session_ids(self) -> list[str]:
        return list(self._sessions)
