# src/core/ai/providers.py
"""AI provider entries and their construction from settings.

Each provider is an OpenAI-compatible backend reached through litellm.
A ProviderEntry holds everything needed to call it: the litellm route,
base URL, credential, default headers and default model.
"""

import logging
from collections.abc import Callable
from dataclasses import dataclass, field
from enum import Enum
from typing import TYPE_CHECKING
from urllib.parse import urlparse

if TYPE_CHECKING:
    from src.config import Settings

logger = logging.getLogger(__name__)

DEFAULT_OLLAMA_BASE_URL = "http://localhost:11434/v1"
DEFAULT_OLLAMA_MODEL = "llama3"
OPENROUTER_BASE_URL = "https://openrouter.ai/api/v1"
OPENROUTER_HEADERS = {
    "HTTP-Referer": "https://github.com/stream-companion/stream-companion",
    "X-Title": "Stream Companion Bot",
}


class AiProvider(str, Enum):
    """Closed set of supported completion backends."""

    OLLAMA = "ollama"
    OPENROUTER = "openrouter"
    OPENAI = "openai"


# Ollama's entry is overridden by OLLAMA_MODEL when set.
DEFAULT_MODELS: dict[AiProvider, str] = {
    AiProvider.OLLAMA: DEFAULT_OLLAMA_MODEL,
    AiProvider.OPENROUTER: "anthropic/claude-3-haiku",
    AiProvider.OPENAI: "gpt-4o-mini",
}


@dataclass(frozen=True)
class ProviderEntry:
    """A configured completion backend.

    Attributes:
        provider: Provider kind.
        route: litellm provider route prepended to the model name.
        default_model: Model used when no override is given.
        api_key: Credential sent to the backend.
        api_base: Base URL, or None for the route's default endpoint.
        headers: Extra headers sent with every request.
    """

    provider: AiProvider
    route: str
    default_model: str
    api_key: str
    api_base: str | None = None
    headers: dict[str, str] = field(default_factory=dict)

    def model_id(self, model: str) -> str:
        """Full litellm model identifier for a model name."""
        return f"{self.route}/{model}"


def _validate_base_url(url: str) -> str:
    parsed = urlparse(url)
    if parsed.scheme not in ("http", "https") or not parsed.netloc:
        raise ValueError(f"Invalid base URL: {url!r}")
    return url


def _build_ollama(settings: "Settings") -> ProviderEntry | None:
    base_url = settings.ollama_base_url or DEFAULT_OLLAMA_BASE_URL
    # Ollama speaks the OpenAI API on /v1 and ignores the key.
    return ProviderEntry(
        provider=AiProvider.OLLAMA,
        route="openai",
        default_model=settings.ollama_model or DEFAULT_OLLAMA_MODEL,
        api_key="ollama",
        api_base=_validate_base_url(base_url),
    )


def _build_openrouter(settings: "Settings") -> ProviderEntry | None:
    if not settings.openrouter_api_key:
        return None
    return ProviderEntry(
        provider=AiProvider.OPENROUTER,
        route="openrouter",
        default_model=DEFAULT_MODELS[AiProvider.OPENROUTER],
        api_key=settings.openrouter_api_key,
        api_base=OPENROUTER_BASE_URL,
        headers=dict(OPENROUTER_HEADERS),
    )


def _build_openai(settings: "Settings") -> ProviderEntry | None:
    if not settings.openai_api_key:
        return None
    return ProviderEntry(
        provider=AiProvider.OPENAI,
        route="openai",
        default_model=DEFAULT_MODELS[AiProvider.OPENAI],
        api_key=settings.openai_api_key,
    )


_BUILDERS: dict[AiProvider, Callable[["Settings"], ProviderEntry | None]] = {
    AiProvider.OLLAMA: _build_ollama,
    AiProvider.OPENROUTER: _build_openrouter,
    AiProvider.OPENAI: _build_openai,
}


def build_provider_entries(settings: "Settings") -> dict[AiProvider, ProviderEntry]:
    """Build an entry for every provider that can be configured.

    Ollama is always attempted. The others need their API key. A failure
    while building one provider is logged and does not affect the rest.

    Args:
        settings: Application settings.

    Returns:
        Mapping of provider kind to its entry, only for configured providers.
    """
    entries: dict[AiProvider, ProviderEntry] = {}
    for provider, builder in _BUILDERS.items():
        try:
            entry = builder(settings)
        except Exception as e:
            logger.warning("Failed to initialize %s provider: %s", provider.value, e)
            continue
        if entry is not None:
            entries[provider] = entry
    return entries
