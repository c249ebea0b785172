"""
Text Analyzer Module
====================

The analysis client: one remote call per text, one structured verdict back.

This module:
- Reports whether the remote service can be reached with the current config
- Builds the detection prompt around the user's text
- Sends exactly one request to the LLM
- Extracts and validates the JSON verdict into an AnalysisResult

Design Decisions:
-----------------
1. Two operations only: is_configured() and analyze(text)
2. Every failure collapses into AnalysisFailure; the cause stays chained
   for diagnostics but callers never branch on it
3. No fallback verdict: a failed analysis is a failure, never a guess
4. Prompt templates live on the class for maintainability
"""

import json
import re
from typing import Optional

from .llm_client import LLMClient
from ..config import LLMConfig, SUPPORTED_PROVIDERS, get_config
from ..model.schemas import AnalysisResult


class AnalysisFailure(RuntimeError):
    """Raised when a text could not be analyzed, whatever the reason."""


LANGUAGE_NAMES = {
    "en": "English",
    "es": "Spanish",
}


class TextAnalyzer:
    """Sends academic text to the remote model and validates its verdict.

    Usage:
        analyzer = TextAnalyzer(llm_config)

        if analyzer.is_configured():
            result = analyzer.analyze("Paste the paragraph here...")
            print(result.probability, result.verdict)
    """

    SYSTEM_PROMPT = """You are an expert forensic linguist specialised in detecting AI-generated academic writing.
You evaluate texts with a fixed multi-module framework and report a calibrated probability.

Detection modules (always report all of them, in this order):
1. Lexical Patterns - vocabulary diversity, overused AI phrasing, generic connectors
2. Syntactic Uniformity - sentence length variance (burstiness), repetitive structures
3. Discourse Coherence - paragraph transitions, formulaic openings and conclusions
4. Academic Style - hedging, register consistency, depth of argumentation
5. Citation and Specificity - concrete data, references, verifiable details
6. Predictability - how expected each sentence is given the previous ones

False-positive safeguards (evaluate each one and say whether it applies):
- Non-native author writing in a formal register
- Highly technical or templated genre (abstracts, methods sections)
- Heavy human editing or proofreading tools
- Text too short for a reliable estimate

Guidelines:
- Quote exact excerpts from the text as evidence
- Contributions and corrections are signed percentages such as "+25%" or "-5%"
- The final probability must follow from the contributions and corrections
- Never claim certainty; this is a probabilistic assessment

Always respond with valid JSON only."""

    RESPONSE_SHAPE = """{
    "mainResult": {
        "probability": <number 0-100>,
        "verdict": "<short label, e.g. PROBABLE AI, PROBABLE HUMAN, MIXED>",
        "confidence": "<LOW | MEDIUM | HIGH>"
    },
    "justification": "<3-4 sentence summary of the verdict>",
    "moduleTable": [
        {"module": "<module name>", "score": <number 0-100>, "contribution": "<signed %>", "finding": "<one line>"}
    ],
    "moduleDetails": [
        {"module": "<module name>", "score": <number 0-100>, "contribution": "<signed %>", "analysis": "<detailed analysis>"}
    ],
    "topEvidences": [
        {"quote": "<exact excerpt>", "indicator": "<what it indicates>", "impact": "<signed %>"}
    ],
    "falsePositives": [
        {"factor": "<safeguard name>", "applied": "<Yes | No>", "correction": "<signed %>"}
    ],
    "finalCalculation": "<how the contributions and corrections add up to the probability>",
    "recommendation": "<advice for the reviewer>"
}"""

    def __init__(self, config: Optional[LLMConfig] = None, language: str = "en"):
        """Initialize the analyzer.

        Args:
            config: LLM configuration (uses defaults if None)
            language: Language for the model's free-text fields
        """
        self.config = config or LLMConfig()
        self.language = language
        self._client: Optional[LLMClient] = None

    def is_configured(self) -> bool:
        """Check whether the remote service can be used.

        Pure check on configuration only: no client is built and no request
        is sent.
        """
        return bool(
            self.config.enabled
            and self.config.provider in SUPPORTED_PROVIDERS
            and self.config.api_key
        )

    def analyze(self, text: str) -> AnalysisResult:
        """Score a text for AI authorship.

        Args:
            text: Non-empty text to analyze

        Returns:
            Validated AnalysisResult

        Raises:
            AnalysisFailure: On empty input, missing configuration, transport
                or provider errors, and unparsable or mis-shaped responses
        """
        if not text or not text.strip():
            raise AnalysisFailure("No text to analyze")

        if not self.is_configured():
            raise AnalysisFailure("Analysis service is not configured")

        try:
            response = self._get_client().complete(
                prompt=self.build_prompt(text),
                system_prompt=self.SYSTEM_PROMPT,
                json_mode=True
            )
        except Exception as e:
            raise AnalysisFailure(f"Analysis request failed: {e}") from e

        return self.parse_response(response.content)

    def build_prompt(self, text: str) -> str:
        """Build the user prompt for one text."""
        language_name = LANGUAGE_NAMES.get(self.language, "English")
        return f"""Analyze the following academic text and estimate the probability that it was generated by an AI.

Write every free-text field (verdict, justification, findings, analyses, indicators,
final calculation, recommendation) in {language_name}. Keep the confidence values
exactly as LOW, MEDIUM or HIGH.

TEXT TO ANALYZE:
\"\"\"
{text}
\"\"\"

Respond with JSON in exactly this shape:
{self.RESPONSE_SHAPE}"""

    def parse_response(self, content: Optional[str]) -> AnalysisResult:
        """Parse the model response into an AnalysisResult.

        Handles bare JSON, markdown code blocks and JSON wrapped in prose.

        Raises:
            AnalysisFailure: If no valid AnalysisResult can be extracted
        """
        if not content or not content.strip():
            raise AnalysisFailure("Empty response from analysis service")

        data = _extract_json(content)
        if data is None:
            raise AnalysisFailure("Analysis service returned a response that is not JSON")

        try:
            return AnalysisResult.from_dict(data)
        except (ValueError, TypeError, OverflowError) as e:
            raise AnalysisFailure(f"Malformed analysis result: {e}") from e

    def _get_client(self) -> LLMClient:
        if self._client is None:
            self._client = LLMClient(self.config)
        return self._client


def _extract_json(content: str):
    """Try direct parse, then a fenced block, then the outermost braces."""
    try:
        return json.loads(content)
    except (ValueError, RecursionError):
        pass

    json_match = re.search(r'```(?:json)?\s*([\s\S]*?)```', content)
    if json_match:
        try:
            return json.loads(json_match.group(1))
        except (ValueError, RecursionError):
            pass

    json_match = re.search(r'\{[\s\S]*\}', content)
    if json_match:
        try:
            return json.loads(json_match.group())
        except (ValueError, RecursionError):
            pass

    return None


def get_analyzer() -> TextAnalyzer:
    """Build an analyzer from the global configuration."""
    config = get_config()
    return TextAnalyzer(config.llm, language=config.language)


def is_configured() -> bool:
    """Check whether the default analyzer can reach the remote service."""
    return get_analyzer().is_configured()


def analyze(text: str) -> AnalysisResult:
    """Analyze a text with the default analyzer."""
    return get_analyzer().analyze(text)
