from .base import DEFAULT_TEMPERATURE, ChatCompletionRequest, ChatMessage, CompletionClient
from .catalog import ModelOption, ProviderEntry, default_model, get_provider_entry, list_providers
from .client import ChatCompletionClient
from .mock import MockCompletionClient
from .providers import Provider, parse_provider, resolve_endpoint

__all__ = [
    "DEFAULT_TEMPERATURE",
    "ChatCompletionClient",
    "ChatCompletionRequest",
    "ChatMessage",
    "CompletionClient",
    "MockCompletionClient",
    "ModelOption",
    "Provider",
    "ProviderEntry",
    "default_model",
    "get_provider_entry",
    "list_providers",
    "parse_provider",
    "resolve_endpoint",
]
