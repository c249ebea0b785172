"""
Interaction Controller Module
=============================

Owns the state behind the analyzer page.

States:
- Unconfigured: the configuration check failed at mount; nothing else is reachable
- Idle: configured and waiting, holding at most one of a result or an error
- Loading: one analysis is in flight and every trigger is disabled

Design Decisions:
-----------------
1. The configuration check runs once, at mount, and its outcome is recorded
   as a ConfigurationStatus rather than re-checked on every trigger
2. analyze() is a blocking call from the controller's point of view; the
   GUI decides how to keep the page responsive around it
3. The rendering layer only ever sees a frozen ViewState snapshot
4. Failure detail goes to the log function, never to the user
"""

from dataclasses import dataclass
from enum import Enum
from typing import Callable, Optional

from ..config import ConfigurationError, DetectorConfig, get_config
from ..ai_engine.analyzer import TextAnalyzer
from ..model.schemas import AnalysisResult


MESSAGES = {
    "en": {
        "validation": "Please enter text to analyze.",
        "failure": "An error occurred while analyzing the text. Please try again.",
        "config_title": "Configuration Error",
        "config_body": "The application could not find the API key needed to reach the analysis service.",
        "config_action": "Set the {env_var} environment variable to your API key and restart the application.",
    },
    "es": {
        "validation": "Por favor, introduce texto para analizar.",
        "failure": "Ocurrió un error al analizar el texto. Por favor, inténtalo de nuevo.",
        "config_title": "Error de Configuración",
        "config_body": "La aplicación no pudo encontrar la clave de API necesaria para el servicio de análisis.",
        "config_action": "Define la variable de entorno {env_var} con tu clave de API y reinicia la aplicación.",
    },
}


class ConfigurationStatus(Enum):
    """Outcome of the one-time configuration check."""
    CONFIGURED = "configured"
    UNCONFIGURED = "unconfigured"


@dataclass(frozen=True)
class ViewState:
    """Everything the rendering layer needs to draw the page.

    Attributes:
        configured: Whether the mount-time configuration check passed
        input_text: Current contents of the text box
        loading: Whether an analysis is in flight
        result: Result of the last successful analysis, if any
        error: User-facing message for the last failed attempt, if any
    """
    configured: bool
    input_text: str = ""
    loading: bool = False
    result: Optional[AnalysisResult] = None
    error: Optional[str] = None

    @property
    def can_submit(self) -> bool:
        return self.configured and not self.loading and bool(self.input_text.strip())

    @property
    def can_clear(self) -> bool:
        has_content = bool(self.input_text) or self.result is not None or self.error is not None
        return self.configured and not self.loading and has_content

    @property
    def character_count(self) -> int:
        return len(self.input_text)


class InteractionController:
    """Drives the analyzer page through mount, submit and clear.

    Usage:
        controller = InteractionController.from_config(get_config())

        if controller.mount() is ConfigurationStatus.CONFIGURED:
            controller.set_input(text)
            state = controller.submit()
            if state.result:
                render(state.result)
    """

    def __init__(
        self,
        client: Optional[TextAnalyzer] = None,
        language: str = "en",
        log_func: Optional[Callable[[str], None]] = print
    ):
        """Initialize the controller.

        Args:
            client: Analysis client exposing is_configured() and analyze(text)
            language: Language of user-facing messages (en, es)
            log_func: Receives diagnostic lines; None silences them
        """
        if language not in MESSAGES:
            raise ValueError(f"Unsupported language: {language}")

        self.client = client or TextAnalyzer()
        self.language = language
        self.messages = MESSAGES[language]
        self._log_func = log_func

        self._status: Optional[ConfigurationStatus] = None
        self._input_text = ""
        self._loading = False
        self._result: Optional[AnalysisResult] = None
        self._error: Optional[str] = None

    @classmethod
    def from_config(
        cls,
        config: Optional[DetectorConfig] = None,
        log_func: Optional[Callable[[str], None]] = print
    ) -> "InteractionController":
        """Build a controller and its analyzer from a DetectorConfig."""
        config = config or get_config()
        return cls(
            client=TextAnalyzer(config.llm, language=config.language),
            language=config.language,
            log_func=log_func
        )

    def log(self, message: str) -> None:
        if self._log_func:
            self._log_func(message)

    @property
    def status(self) -> Optional[ConfigurationStatus]:
        """Recorded configuration outcome, or None before mount."""
        return self._status

    @property
    def state(self) -> ViewState:
        """Snapshot of the current state for rendering."""
        return ViewState(
            configured=self._status is ConfigurationStatus.CONFIGURED,
            input_text=self._input_text,
            loading=self._loading,
            result=self._result,
            error=self._error
        )

    def mount(self) -> ConfigurationStatus:
        """Run the configuration check once and record the outcome."""
        if self._status is not None:
            return self._status

        if self.client.is_configured():
            self._status = ConfigurationStatus.CONFIGURED
        else:
            self._status = ConfigurationStatus.UNCONFIGURED
            self.log("[!] Analysis service is not configured; the form is disabled")

        return self._status

    def set_input(self, text: str) -> ViewState:
        """Update the text box contents. Ignored while loading."""
        self._require_configured()
        if not self._loading:
            self._input_text = text or ""
        return self.state

    def submit(self) -> ViewState:
        """Analyze the current input.

        Empty or whitespace-only input sets the validation message and never
        reaches the client. Otherwise exactly one analyze() call is made and
        the controller always leaves the loading state afterwards.
        """
        self._require_configured()

        if self._loading:
            return self.state

        text = self._input_text
        if not text.strip():
            self._result = None
            self._error = self.messages["validation"]
            return self.state

        self._result = None
        self._error = None
        self._loading = True
        self.log(f"[*] Analyzing {len(text)} characters...")

        try:
            result = self.client.analyze(text)
        except Exception as e:
            self._result = None
            self._error = self.messages["failure"]
            self.log(f"[!] Analysis error: {e}")
            if e.__cause__ is not None:
                self.log(f"    Caused by: {e.__cause__!r}")
        else:
            self._result = result
            self._error = None
            self.log(
                f"[+] Analysis complete: {result.probability:.0f}% "
                f"{result.verdict} ({result.confidence.value})"
            )
        finally:
            self._loading = False

        return self.state

    def clear(self) -> ViewState:
        """Reset input, result and error. Ignored while loading."""
        self._require_configured()
        if not self._loading:
            self._input_text = ""
            self._result = None
            self._error = None
        return self.state

    def configuration_help(self) -> dict:
        """Title, body and remediation text for the configuration error view."""
        env_vars = getattr(getattr(self.client, "config", None), "api_key_env_vars", ("API_KEY",))
        return {
            "title": self.messages["config_title"],
            "body": self.messages["config_body"],
            "action": self.messages["config_action"].format(env_var=env_vars[0]),
        }

    def _require_configured(self) -> None:
        if self._status is None:
            raise RuntimeError("Controller not mounted. Call mount() first.")
        if self._status is ConfigurationStatus.UNCONFIGURED:
            raise ConfigurationError("Analysis service is not configured")
