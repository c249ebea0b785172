"""
Pytest fixtures for detectIA tests. No test touches the network.
"""

from __future__ import annotations

import copy

import pytest

from detectia.config import set_config


ENV_VARS = (
    "DETECTIA_PROVIDER",
    "DETECTIA_MODEL",
    "DETECTIA_LANGUAGE",
    "GEMINI_API_KEY",
    "GOOGLE_API_KEY",
    "OPENAI_API_KEY",
    "ANTHROPIC_API_KEY",
    "API_KEY",
    "LLM_API_BASE",
)

SAMPLE_PAYLOAD = {
    "mainResult": {"probability": 82, "verdict": "PROBABLE AI", "confidence": "HIGH"},
    "justification": "Uniform sentence lengths and generic connectors dominate the text.",
    "moduleTable": [
        {"module": "Lexical Patterns", "score": 85, "contribution": "+25%", "finding": "Generic academic connectors."},
        {"module": "Syntactic Uniformity", "score": 78, "contribution": "+20%", "finding": "Low burstiness."},
    ],
    "moduleDetails": [
        {"module": "Lexical Patterns", "score": 85, "contribution": "+25%", "analysis": "Frequent use of 'moreover'."},
        {"module": "Syntactic Uniformity", "score": 78, "contribution": "+20%", "analysis": "Sentences of 18-22 words."},
    ],
    "topEvidences": [
        {"quote": "It is important to note that", "indicator": "Formulaic hedge", "impact": "+10%"},
    ],
    "falsePositives": [
        {"factor": "Non-native author", "applied": "No", "correction": "0%"},
        {"factor": "Technical genre", "applied": "Sí", "correction": "-5%"},
    ],
    "finalCalculation": "50% base + 25% + 20% - 5% = 82% (rounded)",
    "recommendation": "Ask the author for drafts and sources.",
}


@pytest.fixture(autouse=True)
def clean_environment(monkeypatch):
    """Remove provider variables and reset the global configuration."""
    for name in ENV_VARS:
        monkeypatch.delenv(name, raising=False)
    set_config(None)
    yield
    set_config(None)


@pytest.fixture
def sample_payload():
    """Fresh copy of a valid provider payload."""
    return copy.deepcopy(SAMPLE_PAYLOAD)
