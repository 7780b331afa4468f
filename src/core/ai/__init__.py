"""AI completion providers behind one call signature.

This module provides:
- AiProvider: Closed set of completion backends
- ProviderEntry: A configured backend and its default model
- build_provider_entries: Builds entries from settings
- AiService: Single-shot completions over the configured entries
"""

from src.core.ai.providers import AiProvider, ProviderEntry, build_provider_entries
from src.core.ai.service import PROVIDER_UNAVAILABLE_MESSAGE, AiService

__all__ = [
    "AiProvider",
    "ProviderEntry",
    "build_provider_entries",
    "AiService",
    "PROVIDER_UNAVAILABLE_MESSAGE",
]
