"""
detectIA - AI Authorship Detector for Academic Text
===================================================

Paste academic text, send it to a generative-AI model for scoring, and
display the structured verdict it returns.

Architecture Overview:
----------------------
- model/: AnalysisResult and its component records
- ai_engine/: LLM client and the text analyzer (prompt, parsing, validation)
- gui_integration/: Interaction controller consumed by the Streamlit page
- reporting/: Text, Markdown and table formatting of a result

Design Decisions:
-----------------
1. All scoring is done by the remote model; this package validates and shows it
2. All data models use Python dataclasses for type safety and clarity
3. The provider is chosen by configuration (Gemini, OpenAI or Anthropic)
4. The page is unusable, by design, until an API key is configured
"""

__version__ = "1.0.0"
__author__ = "detectIA Team"

from .config import DetectorConfig
