from .chat import ChatRequest, ChatResult

__all__ = ["ChatRequest", "ChatResult"]
