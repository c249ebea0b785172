"""
Report Builder Module
=====================

Formats an AnalysisResult for display.

The report contains:
- Headline probability, verdict and confidence
- Module summary table and per-module analysis
- Top evidences and false-positive corrections
- Final calculation and recommendation

Design Decisions:
-----------------
1. Nothing here talks to the network or the filesystem
2. Tables are pandas DataFrames so the GUI can hand them to st.dataframe
3. The text report is shared by the CLI and the GUI download button
"""

import html
import json

import pandas as pd

from ..model.schemas import AnalysisResult


# Probability bands, highest first: (lower bound, label, colour)
PROBABILITY_BANDS = [
    (70, "High", "#dc2626"),
    (40, "Medium", "#ca8a04"),
    (0, "Low", "#16a34a"),
]


def probability_band(probability: float) -> tuple[str, str]:
    """Map a probability (0-100) to a band label and colour."""
    for lower, label, color in PROBABILITY_BANDS:
        if probability >= lower:
            return label, color
    return PROBABILITY_BANDS[-1][1], PROBABILITY_BANDS[-1][2]


def module_table_frame(result: AnalysisResult) -> pd.DataFrame:
    """Module summary rows as a DataFrame."""
    return pd.DataFrame(
        [
            {
                'Module': row.module,
                'Score': row.score,
                'Contribution': row.contribution,
                'Finding': row.finding
            }
            for row in result.module_table
        ],
        columns=['Module', 'Score', 'Contribution', 'Finding']
    )


def evidence_frame(result: AnalysisResult) -> pd.DataFrame:
    """Top evidences as a DataFrame."""
    return pd.DataFrame(
        [
            {'Quote': e.quote, 'Indicator': e.indicator, 'Impact': e.impact}
            for e in result.top_evidences
        ],
        columns=['Quote', 'Indicator', 'Impact']
    )


def false_positive_frame(result: AnalysisResult) -> pd.DataFrame:
    """False-positive safeguards as a DataFrame."""
    return pd.DataFrame(
        [
            {
                'Factor': fp.factor,
                'Applied': "Yes" if fp.applied else "No",
                'Correction': fp.correction
            }
            for fp in result.false_positives
        ],
        columns=['Factor', 'Applied', 'Correction']
    )


def generate_json_report(result: AnalysisResult) -> str:
    """Serialize the result in its camelCase wire shape."""
    return json.dumps(result.to_dict(), indent=2, ensure_ascii=False)


def generate_text_report(result: AnalysisResult) -> str:
    """Generate a text-based report.

    Args:
        result: AnalysisResult to format

    Returns:
        Formatted text report
    """
    band, _ = probability_band(result.probability)

    lines = [
        "=" * 60,
        "detectIA - AI Authorship Analysis Report",
        "=" * 60,
        "",
        "RESULT",
        "-" * 40,
        f"AI Probability: {result.probability:.0f}% ({band})",
        f"Verdict: {result.verdict}",
        f"Confidence: {result.confidence.value}",
        "",
        "JUSTIFICATION",
        "-" * 40,
        result.justification,
    ]

    if result.module_table:
        lines.extend([
            "",
            "MODULES",
            "-" * 40,
        ])
        for row in result.module_table:
            lines.append(f"  {row.module:<28} {row.score:>5.0f}  {row.contribution:>6}  {row.finding}")

    if result.module_details:
        lines.extend([
            "",
            "MODULE ANALYSIS",
            "-" * 40,
        ])
        for detail in result.module_details:
            lines.extend([
                f"",
                f"{detail.module} (score {detail.score:.0f}, {detail.contribution})",
            ])
            for line in detail.analysis.split('\n'):
                lines.append(f"   {line}")

    if result.top_evidences:
        lines.extend([
            "",
            "TOP EVIDENCE",
            "-" * 40,
        ])
        for i, evidence in enumerate(result.top_evidences, 1):
            lines.append(f"#{i} [{evidence.impact}] {evidence.indicator}")
            lines.append(f"   \"{evidence.quote}\"")

    if result.false_positives:
        lines.extend([
            "",
            "FALSE-POSITIVE CHECKS",
            "-" * 40,
        ])
        for fp in result.false_positives:
            applied = "applied" if fp.applied else "not applied"
            lines.append(f"  • {fp.factor}: {applied} ({fp.correction})")

    lines.extend([
        "",
        "FINAL CALCULATION",
        "-" * 40,
        result.final_calculation,
        "",
        "RECOMMENDATION",
        "-" * 40,
        result.recommendation,
        "",
        "=" * 60,
        "End of Report",
        "=" * 60,
    ])

    return "\n".join(lines)


def generate_markdown_report(result: AnalysisResult) -> str:
    """Generate a Markdown report, used for the GUI download button."""
    lines = [
        "# AI Authorship Analysis",
        "",
        f"**AI Probability:** {result.probability:.0f}%  ",
        f"**Verdict:** {result.verdict}  ",
        f"**Confidence:** {result.confidence.value}",
        "",
        "## Justification",
        "",
        result.justification,
        "",
    ]

    if result.module_table:
        lines.extend([
            "## Modules",
            "",
            "| Module | Score | Contribution | Finding |",
            "|---|---|---|---|",
        ])
        for row in result.module_table:
            lines.append(f"| {row.module} | {row.score:.0f} | {row.contribution} | {_cell(row.finding)} |")
        lines.append("")

    for detail in result.module_details:
        lines.extend([
            f"### {detail.module} ({detail.score:.0f}, {detail.contribution})",
            "",
            detail.analysis,
            "",
        ])

    if result.top_evidences:
        lines.extend(["## Top Evidence", ""])
        for evidence in result.top_evidences:
            lines.append(f"- > {evidence.quote}  ")
            lines.append(f"  {evidence.indicator} ({evidence.impact})")
        lines.append("")

    if result.false_positives:
        lines.extend([
            "## False-Positive Checks",
            "",
            "| Factor | Applied | Correction |",
            "|---|---|---|",
        ])
        for fp in result.false_positives:
            lines.append(f"| {_cell(fp.factor)} | {'Yes' if fp.applied else 'No'} | {fp.correction} |")
        lines.append("")

    lines.extend([
        "## Final Calculation",
        "",
        result.final_calculation,
        "",
        "## Recommendation",
        "",
        result.recommendation,
        "",
    ])

    return "\n".join(lines)


def _cell(text: str) -> str:
    return text.replace("|", "\\|").replace("\n", " ")


CONFIDENCE_COLORS = {
    "LOW": "#9ca3af",
    "MEDIUM": "#ca8a04",
    "HIGH": "#2563eb",
}


def verdict_card_html(result: AnalysisResult) -> str:
    """Headline card for the GUI. Model text is escaped before embedding."""
    _, band_color = probability_band(result.probability)
    confidence_color = CONFIDENCE_COLORS.get(result.confidence.value, "#6b7280")

    return f'''
    <div style="border-left: 4px solid {band_color}; padding: 0.75rem 1rem; margin-bottom: 1.5rem; background: #f9fafb;">
        <span class="section-label">AI Probability</span>
        <div style="color: {band_color}; font-weight: 700; font-size: 2.5rem;">{result.probability:.0f}%</div>
        <div style="font-weight: 600; font-size: 1.1rem;">{html.escape(result.verdict)}</div>
        <div style="color: {confidence_color}; font-size: 0.875rem;">Confidence: {result.confidence.value}</div>
    </div>
    '''
