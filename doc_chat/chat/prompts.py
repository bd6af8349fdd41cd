from __future__ import annotations

DEFAULT_SYSTEM_PROMPT = (
    "You are a research assistant embedded in a reference manager. "
    "Answer questions about the user's papers and documents clearly and concisely. "
    "When selected document text is provided, ground your answer in that text, "
    "quote it where useful, and say so plainly if the text does not contain the answer. "
    "Do not invent citations."
)

CONTEXT_LABEL = "Selected PDF text:"
QUESTION_LABEL = "User questions:"


def compose_user_content(user_text: str, context: str) -> str:
    if not context:
        return user_text
    return f"{CONTEXT_LABEL}\n{context}\n\n{QUESTION_LABEL}\n{user_text}"
