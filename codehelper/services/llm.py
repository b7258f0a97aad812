"""
LLM provider clients.

A provider exposes one chat-completion call. Providers are created once at
application start through create_llm_provider() and closed at shutdown.

Supports:
- openai: OpenAI chat completions (AsyncOpenAI)
- mock: deterministic offline replies for development without an API key
"""
import logging
from typing import Dict, Optional, Type

from openai import AsyncOpenAI, OpenAIError

from codehelper.core.config import Settings
from codehelper.core.errors import LLMProviderError

logger = logging.getLogger(__name__)


class LLMProvider:
    """Base class for chat-completion providers."""

    name = "base"

    async def complete(
        self,
        messages: list[dict],
        *,
        max_tokens: int = 1000,
        temperature: float = 0.7,
    ) -> str:
        """Return the generated text for messages ([{role, content}])."""
        raise NotImplementedError

    async def aclose(self) -> None:
        return None


class OpenAIProvider(LLMProvider):
    name = "openai"

    def __init__(self, api_key: Optional[str], model: str, timeout: float = 60.0):
        self.model = model
        self._client = AsyncOpenAI(api_key=api_key, timeout=timeout)

    async def complete(self, messages, *, max_tokens=1000, temperature=0.7) -> str:
        try:
            completion = await self._client.chat.completions.create(
                model=self.model,
                messages=messages,
                max_tokens=max_tokens,
                temperature=temperature,
            )
        except OpenAIError as e:
            logger.error("OpenAI API error: %s", e)
            raise LLMProviderError("Failed to generate response") from e

        if not completion.choices:
            return ""
        return completion.choices[0].message.content or ""

    async def aclose(self) -> None:
        await self._client.close()


class MockLLMProvider(LLMProvider):
    """Offline provider: echoes a short canned answer."""

    name = "mock"

    async def complete(self, messages, *, max_tokens=1000, temperature=0.7) -> str:
        last = messages[-1]["content"] if messages else ""
        if last.startswith("Categorize this programming question"):
            return "General Programming"
        if last.startswith("Create a title for this programming question"):
            return "Programming Question"
        return f"(mock) You asked: {last[:200]}"


_PROVIDERS: Dict[str, Type[LLMProvider]] = {
    "openai": OpenAIProvider,
    "mock": MockLLMProvider,
}


def create_llm_provider(settings: Settings) -> LLMProvider:
    """Create the provider selected by settings.llm_provider."""
    provider_type = settings.llm_provider
    if provider_type not in _PROVIDERS:
        available = ", ".join(_PROVIDERS)
        raise ValueError(f"Unknown LLM provider: {provider_type}. Available providers: {available}")

    if provider_type == "openai":
        if not settings.openai_api_key:
            logger.warning("OPENAI_API_KEY is not set; falling back to the mock provider")
            return MockLLMProvider()
        return OpenAIProvider(
            api_key=settings.openai_api_key,
            model=settings.openai_model,
            timeout=settings.openai_timeout,
        )
    return _PROVIDERS[provider_type]()
