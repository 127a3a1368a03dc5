"""LLM provider abstraction layer."""

from .provider import LLMProvider, LLMResponse, create_llm_provider
from .litellm_provider import LiteLLMProvider

__all__ = [
    "LLMProvider",
    "LLMResponse",
    "LiteLLMProvider",
    "create_llm_provider",
]
