"""Abstract LLM provider interface."""

from abc import ABC, abstractmethod
from typing import Optional
from pydantic import BaseModel
from ..config import Config
from ..errors import ConfigurationError


class LLMResponse(BaseModel):
    """Response from an LLM provider."""

    content: str
    model: str
    tokens_used: Optional[int] = None


class LLMProvider(ABC):
    """Abstract base class for LLM providers."""

    model_name: str = "unknown"

    @abstractmethod
    def generate(self, prompt: str, system: Optional[str] = None) -> LLMResponse:
        """Generate a response from the LLM.

        Implementations make exactly one attempt and raise
        ``ModelInvocationError`` on any failure.

        Args:
            prompt: The user prompt
            system: Optional system prompt

        Returns:
            LLMResponse containing the generated text
        """
        pass


def create_llm_provider(config: Config) -> LLMProvider:
    """Create the configured provider, failing before any network call.

    Raises:
        ConfigurationError: If no API key is configured
    """
    from .litellm_provider import LiteLLMProvider

    if not config.api_key:
        raise ConfigurationError(
            "No model API key configured. Set GEMINI_API_KEY (or LLM_API_KEY) in your "
            "environment or .env file."
        )

    return LiteLLMProvider(
        model_name=config.model_name,
        api_key=config.api_key,
        base_url=config.api_base_url,
        timeout=config.timeout,
    )
