"""
Provider variants for OpenAI-compatible chat completion endpoints.

Each variant owns its fixed base URL and its header policy. Adding a provider
means adding a `Provider` member, an endpoint variant and a registry entry.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum

from doc_chat.errors import UnsupportedProviderError


class Provider(str, Enum):
    OPENAI = "openai"
    OPENROUTER = "openrouter"

    def __str__(self) -> str:
        return self.value


@dataclass(frozen=True)
class ProviderEndpoint:
    provider: Provider
    base_url: str

    @property
    def completions_url(self) -> str:
        return f"{self.base_url.rstrip('/')}/chat/completions"

    def headers(self, credential: str) -> dict[str, str]:
        return {
            "Authorization": f"Bearer {credential}",
            "Content-Type": "application/json",
        }


@dataclass(frozen=True)
class OpenRouterEndpoint(ProviderEndpoint):
    referer: str = "https://github.com/System-and-Software-Engineering/Claudtero"
    title: str = "Claudtero - Zotero AI Assistant"

    def headers(self, credential: str) -> dict[str, str]:
        # Attribution only; OpenRouter shows the app name in its dashboards.
        headers = super().headers(credential)
        headers["HTTP-Referer"] = self.referer
        headers["X-Title"] = self.title
        return headers


ENDPOINTS: dict[Provider, ProviderEndpoint] = {
    Provider.OPENAI: ProviderEndpoint(Provider.OPENAI, "https://api.openai.com/v1"),
    Provider.OPENROUTER: OpenRouterEndpoint(Provider.OPENROUTER, "https://openrouter.ai/api/v1"),
}


def parse_provider(value: Provider | str) -> Provider:
    if isinstance(value, Provider):
        return value
    try:
        return Provider(value)
    except ValueError as exc:
        raise UnsupportedProviderError(value) from exc


def resolve_endpoint(provider: Provider | str) -> ProviderEndpoint:
    return ENDPOINTS[parse_provider(provider)]
