"""
detectIA Configuration Module
=============================

Centralized configuration management for the detectIA analyzer.
Supports environment variables for sensitive data (API keys).

Design Decision:
- Configuration is a dataclass that is passed to the analyzer and controller
- The provider/key pair decides whether the application is usable at all
- Environment lookups happen once, when the configuration is built
"""

import os
from dataclasses import dataclass, field
from typing import Optional


SUPPORTED_PROVIDERS = ("gemini", "openai", "anthropic")
SUPPORTED_LANGUAGES = ("en", "es")

DEFAULT_MODELS = {
    "gemini": "gemini-2.5-flash",
    "openai": "gpt-4o-mini",
    "anthropic": "claude-3-5-sonnet-latest",
}

# Provider specific variables are checked first, then the generic API_KEY
API_KEY_ENV_VARS = {
    "gemini": ("GEMINI_API_KEY", "GOOGLE_API_KEY"),
    "openai": ("OPENAI_API_KEY",),
    "anthropic": ("ANTHROPIC_API_KEY",),
}
GENERIC_API_KEY_ENV_VAR = "API_KEY"


class ConfigurationError(Exception):
    """Raised when the analyzer is used without the credentials it needs."""


@dataclass
class LLMConfig:
    """Configuration for the remote analysis model.

    Attributes:
        enabled: Whether remote analysis is allowed at all
        provider: LLM provider (gemini, openai, anthropic)
        model: Specific model to use (defaults per provider)
        api_key: API key (loaded from environment if not provided)
        api_base: Custom OpenAI-compatible endpoint
        temperature: LLM temperature for response variability
        max_tokens: Maximum tokens in LLM response
    """
    enabled: bool = True
    provider: Optional[str] = None
    model: Optional[str] = None
    api_key: Optional[str] = None
    api_base: Optional[str] = None
    temperature: float = 0.2
    max_tokens: int = 8192

    def __post_init__(self):
        """Fill provider, model, API key and base URL from the environment."""
        if self.provider is None:
            self.provider = os.environ.get("DETECTIA_PROVIDER", "gemini")
        self.provider = self.provider.strip().lower()

        if self.model is None:
            self.model = os.environ.get("DETECTIA_MODEL") or DEFAULT_MODELS.get(self.provider, "")

        if self.api_key is None:
            self.api_key = _api_key_from_env(self.provider)

        if self.api_base is None:
            self.api_base = os.environ.get("LLM_API_BASE")

    @property
    def api_key_env_vars(self) -> tuple:
        """Environment variables consulted for this provider's key."""
        return API_KEY_ENV_VARS.get(self.provider, ()) + (GENERIC_API_KEY_ENV_VAR,)


def _api_key_from_env(provider: str) -> Optional[str]:
    for name in API_KEY_ENV_VARS.get(provider, ()) + (GENERIC_API_KEY_ENV_VAR,):
        value = os.environ.get(name)
        if value and value.strip():
            return value.strip()
    return None


@dataclass
class DetectorConfig:
    """Main configuration container for detectIA.

    Usage:
        config = DetectorConfig()  # Uses environment + defaults
        config = DetectorConfig(llm=LLMConfig(provider="openai"), language="es")
    """
    llm: LLMConfig = field(default_factory=LLMConfig)

    # Language for user-facing messages and for the model's free text
    language: Optional[str] = None

    verbose: bool = True

    def __post_init__(self):
        if self.language is None:
            self.language = os.environ.get("DETECTIA_LANGUAGE", "en")
        self.language = self.language.strip().lower()
        if self.language not in SUPPORTED_LANGUAGES:
            raise ValueError(
                f"Unsupported language '{self.language}'. "
                f"Expected one of: {', '.join(SUPPORTED_LANGUAGES)}"
            )

    @classmethod
    def from_dict(cls, config_dict: dict) -> "DetectorConfig":
        """Create configuration from a dictionary.

        Useful for CLI flags or GUI inputs.
        """
        return cls(
            llm=LLMConfig(**config_dict.get("llm", {})),
            language=config_dict.get("language"),
            verbose=config_dict.get("verbose", True)
        )

    def to_dict(self) -> dict:
        """Convert configuration to dictionary, with the API key masked."""
        from dataclasses import asdict
        data = asdict(self)
        if data["llm"].get("api_key"):
            data["llm"]["api_key"] = "***"
        return data


# Default global configuration instance
_default_config: Optional[DetectorConfig] = None


def get_config() -> DetectorConfig:
    """Get the global configuration instance."""
    global _default_config
    if _default_config is None:
        _default_config = DetectorConfig()
    return _default_config


def set_config(config: Optional[DetectorConfig]) -> None:
    """Set (or reset, with None) the global configuration instance."""
    global _default_config
    _default_config = config
