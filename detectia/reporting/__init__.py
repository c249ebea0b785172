"""
detectIA Reporting Module
=========================

Display formatting for analysis results.

Components:
- report_builder.py: Text/Markdown reports and pandas tables
"""

from .report_builder import (
    generate_text_report,
    generate_markdown_report,
    generate_json_report,
    module_table_frame,
    evidence_frame,
    false_positive_frame,
    probability_band,
    verdict_card_html
)
