# src/core/ai/service.py
"""Single-shot chat completions across configured providers."""

import logging

from litellm import acompletion

from src.core.ai.providers import AiProvider, ProviderEntry

logger = logging.getLogger(__name__)

PROVIDER_UNAVAILABLE_MESSAGE = "Erro: Provedor de IA não disponível."
TEMPERATURE = 0.7
MAX_TOKENS = 300


class AiService:
    """Uniform completion call over the configured provider entries.

    Callers can tell "not configured" from "request failed": the first
    returns PROVIDER_UNAVAILABLE_MESSAGE, the second returns None.

    Example:
        >>> service = AiService(build_provider_entries(settings))
        >>> await service.complete("Be brief.", "Hello?", provider="openai")
    """

    def __init__(self, entries: dict[AiProvider, ProviderEntry]) -> None:
        self._entries = dict(entries)
        logger.info(
            "AI service initialized with providers: %s",
            ", ".join(p.value for p in self._entries) or "none",
        )

    @property
    def providers(self) -> list[AiProvider]:
        return list(self._entries)

    def get_entry(self, provider: AiProvider | str) -> ProviderEntry | None:
        try:
            return self._entries.get(AiProvider(provider))
        except ValueError:
            return None

    async def complete(
        self,
        system_prompt: str,
        user_message: str,
        provider: AiProvider | str = AiProvider.OLLAMA,
        model_override: str | None = None,
    ) -> str | None:
        """Request one completion with a system and a user message.

        Args:
            system_prompt: System message content.
            user_message: User message content.
            provider: Provider kind or its name.
            model_override: Model to use instead of the provider default.

        Returns:
            The first choice's text, None if the provider returned no content
            or the request failed, or PROVIDER_UNAVAILABLE_MESSAGE if the
            provider is not configured.
        """
        entry = self.get_entry(provider)
        provider_name = provider.value if isinstance(provider, AiProvider) else provider

        if entry is None:
            logger.error(
                "Provider '%s' is not configured or available.", provider_name
            )
            return PROVIDER_UNAVAILABLE_MESSAGE

        model = model_override or entry.default_model

        try:
            response = await acompletion(
                model=entry.model_id(model),
                messages=[
                    {"role": "system", "content": system_prompt},
                    {"role": "user", "content": user_message},
                ],
                temperature=TEMPERATURE,
                max_tokens=MAX_TOKENS,
                api_key=entry.api_key,
                api_base=entry.api_base,
                extra_headers=entry.headers or None,
            )
        except Exception as e:
            logger.error("[%s] AI request failed: %s", provider_name, e)
            return None

        if not response.choices:
            return None
        return response.choices[0].message.content or None
