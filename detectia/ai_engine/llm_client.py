"""
LLM Client Module
=================

Abstraction layer for LLM API interactions.

Supports:
- Google Gemini API (default)
- OpenAI API (GPT-4o family)
- Anthropic API (Claude)
- Custom/local endpoints (compatible with OpenAI API format)

Design Decisions:
-----------------
1. Uses a common interface regardless of provider
2. One request per call: no retries, no backoff, no caching
3. JSON mode is requested natively where the provider supports it
4. Provider SDKs are imported lazily so only the selected one is needed
"""

from typing import Optional
from dataclasses import dataclass

from ..config import LLMConfig


@dataclass
class LLMResponse:
    """Container for LLM response data.

    Attributes:
        content: The text content of the response
        model: Model that generated the response
        prompt_tokens: Number of tokens in the prompt
        completion_tokens: Number of tokens in the completion
        total_tokens: Total tokens used
        finish_reason: Why the generation stopped
    """
    content: str
    model: str = ""
    prompt_tokens: int = 0
    completion_tokens: int = 0
    total_tokens: int = 0
    finish_reason: str = ""


class LLMClient:
    """Provider-neutral client for a single completion call.

    Usage:
        client = LLMClient(config)

        response = client.complete(
            prompt="Analyze this text...",
            system_prompt="You are an academic integrity analyst.",
            json_mode=True
        )
        print(response.content)
    """

    def __init__(self, config: LLMConfig):
        """Initialize the LLM client.

        Args:
            config: LLMConfig object with API settings
        """
        self.config = config
        self._client = None

        if config.enabled and config.api_key:
            self._initialize_client()

    def _initialize_client(self) -> None:
        """Initialize the appropriate client based on provider."""
        if self.config.provider == "gemini":
            try:
                from google import genai
            except ImportError:
                raise ImportError("google-genai library required. Install with: pip install google-genai")
            self._client = genai.Client(api_key=self.config.api_key)

        elif self.config.provider == "openai":
            try:
                import openai
            except ImportError:
                raise ImportError("openai library required. Install with: pip install openai")

            if self.config.api_base:
                self._client = openai.OpenAI(
                    api_key=self.config.api_key,
                    base_url=self.config.api_base
                )
            else:
                self._client = openai.OpenAI(api_key=self.config.api_key)

        elif self.config.provider == "anthropic":
            try:
                import anthropic
            except ImportError:
                raise ImportError("anthropic library required. Install with: pip install anthropic")
            self._client = anthropic.Anthropic(api_key=self.config.api_key)

        else:
            raise ValueError(f"Unsupported LLM provider: {self.config.provider}")

    @property
    def is_available(self) -> bool:
        """Check if the LLM client is properly configured."""
        return self.config.enabled and self._client is not None

    def complete(
        self,
        prompt: str,
        system_prompt: Optional[str] = None,
        temperature: Optional[float] = None,
        max_tokens: Optional[int] = None,
        json_mode: bool = False
    ) -> LLMResponse:
        """Send a completion request to the LLM.

        Args:
            prompt: The user prompt/query
            system_prompt: Optional system prompt for context
            temperature: Override default temperature
            max_tokens: Override default max tokens
            json_mode: Request JSON-formatted response

        Returns:
            LLMResponse object with the completion

        Raises:
            RuntimeError: If the client is not available or the API call fails
        """
        if not self.is_available:
            raise RuntimeError("LLM client not available. Check configuration and API key.")

        temperature = self.config.temperature if temperature is None else temperature
        max_tokens = max_tokens or self.config.max_tokens

        if self.config.provider == "gemini":
            return self._complete_gemini(prompt, system_prompt, temperature, max_tokens, json_mode)
        elif self.config.provider == "anthropic":
            return self._complete_anthropic(prompt, system_prompt, temperature, max_tokens)
        else:
            return self._complete_openai(prompt, system_prompt, temperature, max_tokens, json_mode)

    def _complete_gemini(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: int,
        json_mode: bool
    ) -> LLMResponse:
        """Gemini-specific completion."""
        from google.genai import types as genai_types

        config_kwargs = {
            "temperature": temperature,
            "max_output_tokens": max_tokens,
        }
        if system_prompt:
            config_kwargs["system_instruction"] = system_prompt
        if json_mode:
            config_kwargs["response_mime_type"] = "application/json"

        try:
            response = self._client.models.generate_content(
                model=self.config.model,
                contents=prompt,
                config=genai_types.GenerateContentConfig(**config_kwargs)
            )
        except Exception as e:
            raise RuntimeError(f"Gemini API error: {e}") from e

        usage = getattr(response, "usage_metadata", None)
        candidates = getattr(response, "candidates", None) or []
        finish_reason = getattr(candidates[0], "finish_reason", "") if candidates else ""

        return LLMResponse(
            content=response.text or "",
            model=self.config.model,
            prompt_tokens=(getattr(usage, "prompt_token_count", 0) or 0) if usage else 0,
            completion_tokens=(getattr(usage, "candidates_token_count", 0) or 0) if usage else 0,
            total_tokens=(getattr(usage, "total_token_count", 0) or 0) if usage else 0,
            finish_reason=str(finish_reason or "")
        )

    def _complete_openai(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: int,
        json_mode: bool
    ) -> LLMResponse:
        """OpenAI-specific completion."""
        messages = []

        if system_prompt:
            messages.append({"role": "system", "content": system_prompt})

        messages.append({"role": "user", "content": prompt})

        kwargs = {
            "model": self.config.model,
            "messages": messages,
            "temperature": temperature,
            "max_tokens": max_tokens,
        }

        if json_mode:
            kwargs["response_format"] = {"type": "json_object"}

        try:
            response = self._client.chat.completions.create(**kwargs)
        except Exception as e:
            raise RuntimeError(f"OpenAI API error: {e}") from e

        return LLMResponse(
            content=response.choices[0].message.content or "",
            model=response.model,
            prompt_tokens=response.usage.prompt_tokens if response.usage else 0,
            completion_tokens=response.usage.completion_tokens if response.usage else 0,
            total_tokens=response.usage.total_tokens if response.usage else 0,
            finish_reason=response.choices[0].finish_reason or ""
        )

    def _complete_anthropic(
        self,
        prompt: str,
        system_prompt: Optional[str],
        temperature: float,
        max_tokens: int
    ) -> LLMResponse:
        """Anthropic-specific completion."""
        kwargs = {
            "model": self.config.model,
            "max_tokens": max_tokens,
            "temperature": temperature,
            "messages": [{"role": "user", "content": prompt}]
        }

        if system_prompt:
            kwargs["system"] = system_prompt

        try:
            response = self._client.messages.create(**kwargs)
        except Exception as e:
            raise RuntimeError(f"Anthropic API error: {e}") from e

        content = ""
        for block in response.content:
            if hasattr(block, 'text'):
                content += block.text

        return LLMResponse(
            content=content,
            model=response.model,
            prompt_tokens=response.usage.input_tokens if response.usage else 0,
            completion_tokens=response.usage.output_tokens if response.usage else 0,
            total_tokens=(response.usage.input_tokens + response.usage.output_tokens) if response.usage else 0,
            finish_reason=response.stop_reason or ""
        )
