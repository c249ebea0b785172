"""
detectIA AI Engine Module
=========================

LLM integration for authorship analysis.

Components:
- llm_client.py: Abstraction layer for LLM API calls
- analyzer.py: Builds the prompt and validates the structured verdict

Design Philosophy:
- One outbound request per analysis
- Supports multiple LLM providers (Gemini, OpenAI, Anthropic)
- Every failure is reported as a single AnalysisFailure
"""

from .llm_client import LLMClient, LLMResponse
from .analyzer import TextAnalyzer, AnalysisFailure, is_configured, analyze
