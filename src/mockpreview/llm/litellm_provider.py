"""LiteLLM provider for multi-provider LLM support."""

import logging
from typing import Optional
import litellm
from ..errors import ModelInvocationError
from .provider import LLMProvider, LLMResponse

logger = logging.getLogger(__name__)


class LiteLLMProvider(LLMProvider):
    """Single-attempt LLM client using LiteLLM.

    Rate limiting is the caller's job (see ``BatchAnalyzer``), so the
    underlying client never retries.
    """

    def __init__(
        self,
        model_name: str,
        api_key: Optional[str] = None,
        base_url: Optional[str] = None,
        timeout: int = 60,
        max_output_tokens: Optional[int] = None,
    ):
        self.model_name = model_name
        self.api_key = api_key
        self.base_url = base_url
        self.timeout = timeout
        self.max_output_tokens = max_output_tokens

    def generate(self, prompt: str, system: Optional[str] = None) -> LLMResponse:
        """Generate response using LiteLLM.

        Args:
            prompt: User prompt
            system: Optional system prompt

        Returns:
            LLMResponse with generated content

        Raises:
            ModelInvocationError: If the call fails for any reason
        """
        messages = []
        if system:
            messages.append({"role": "system", "content": system})
        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": self.model_name,
            "messages": messages,
            "max_retries": 0,
            "timeout": self.timeout,
        }

        if self.api_key:
            kwargs["api_key"] = self.api_key
        if self.base_url:
            kwargs["api_base"] = self.base_url
        if self.max_output_tokens:
            kwargs["max_tokens"] = self.max_output_tokens

        logger.debug("Calling %s (%d prompt chars)", self.model_name, len(prompt))

        try:
            response = litellm.completion(**kwargs)
            content = response.choices[0].message.content or ""
            usage = getattr(response, "usage", None)
        except litellm.AuthenticationError as e:
            provider = self._detect_provider(self.model_name)
            raise ModelInvocationError(
                f"{provider} authentication failed. "
                f"Check the API key for {self.model_name}"
            ) from e
        except litellm.RateLimitError as e:
            raise ModelInvocationError(f"Rate limit exceeded for {self.model_name}") from e
        except litellm.Timeout as e:
            raise ModelInvocationError(
                f"{self.model_name} did not answer within {self.timeout}s"
            ) from e
        except Exception as e:
            raise ModelInvocationError(f"LLM generation failed: {str(e)}") from e

        return LLMResponse(
            content=content,
            model=self.model_name,
            tokens_used=getattr(usage, "total_tokens", None),
        )

    def _detect_provider(self, model_name: str) -> str:
        """Detect provider from model name for error messages."""
        name = model_name.split("/", 1)[-1] if model_name.startswith("gemini/") else model_name
        if name.startswith("gpt-") or name.startswith("o1"):
            return "OpenAI"
        elif name.startswith("claude"):
            return "Anthropic"
        elif name.startswith("gemini"):
            return "Google"
        elif name.startswith("ollama"):
            return "Ollama"
        else:
            return "LLM Provider"
