"""
Sources of the optional context folded into a user turn.

A context source never raises: anything that goes wrong while reading the
selection is reported as empty context.
"""

from __future__ import annotations

import inspect
import logging
from typing import Awaitable, Callable, Protocol, Union

logger = logging.getLogger(__name__)

ContextFn = Callable[[], Union[str, None, Awaitable[Union[str, None]]]]


class ContextSource(Protocol):
    async def fetch_selected_context(self) -> str:
        """Return the current selection text, or "" when there is none."""
        raise NotImplementedError


class NullContextSource:
    async def fetch_selected_context(self) -> str:
        return ""


class StaticContextSource:
    def __init__(self, text: str = "") -> None:
        self.text = text

    async def fetch_selected_context(self) -> str:
        return self.text.strip()


class CallableContextSource:
    """Adapt a sync or async callable (e.g. a viewer's selection reader)."""

    def __init__(self, fn: ContextFn) -> None:
        self.fn = fn

    async def fetch_selected_context(self) -> str:
        try:
            text = self.fn()
            if inspect.isawaitable(text):
                text = await text
        except Exception as exc:
            logger.warning("selected context unavailable: %s", exc)
            return ""
        return (text or "").strip()
