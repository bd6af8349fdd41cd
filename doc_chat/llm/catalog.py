"""
Hardcoded model catalog shown in the provider/model pickers.

Routing never reads from here; the client resolves endpoints on its own.
"""

from __future__ import annotations

from dataclasses import dataclass

from doc_chat.errors import UnsupportedProviderError

from .providers import Provider, parse_provider


@dataclass(frozen=True)
class ModelOption:
    label: str  # shown in UI
    value: str  # provider-specific model id passed to the API


@dataclass(frozen=True)
class ProviderEntry:
    provider: Provider
    label: str
    models: tuple[ModelOption, ...]


_CATALOG: tuple[ProviderEntry, ...] = (
    ProviderEntry(
        provider=Provider.OPENAI,
        label="OpenAI",
        models=(
            ModelOption("GPT-4o mini", "gpt-4o-mini"),
            ModelOption("GPT-4o", "gpt-4o"),
        ),
    ),
    ProviderEntry(
        provider=Provider.OPENROUTER,
        label="OpenRouter",
        models=(
            ModelOption("Claude 3.5 Sonnet", "anthropic/claude-3.5-sonnet"),
            ModelOption("Claude 3 Haiku", "anthropic/claude-3-haiku"),
        ),
    ),
)


def list_providers() -> tuple[ProviderEntry, ...]:
    return _CATALOG


def get_provider_entry(provider: Provider | str) -> ProviderEntry:
    p = parse_provider(provider)
    for entry in _CATALOG:
        if entry.provider is p:
            return entry
    raise UnsupportedProviderError(provider)


def default_model(provider: Provider | str) -> str:
    return get_provider_entry(provider).models[0].value
