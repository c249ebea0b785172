"""
Tests for AnalysisResult validation and coercion (model.schemas).
"""

from __future__ import annotations

import pytest

from detectia.model.schemas import AnalysisResult, Confidence


def test_from_dict_builds_full_result(sample_payload):
    result = AnalysisResult.from_dict(sample_payload)

    assert result.probability == 82.0
    assert result.verdict == "PROBABLE AI"
    assert result.confidence is Confidence.HIGH
    assert [m.module for m in result.module_table] == ["Lexical Patterns", "Syntactic Uniformity"]
    assert result.module_details[1].analysis == "Sentences of 18-22 words."
    assert result.top_evidences[0].impact == "+10%"
    assert result.false_positives[0].applied is False
    assert result.false_positives[1].applied is True
    assert result.recommendation == "Ask the author for drafts and sources."


def test_to_dict_restores_wire_shape(sample_payload):
    data = AnalysisResult.from_dict(sample_payload).to_dict()

    assert set(data) == set(sample_payload)
    assert data["mainResult"] == {"probability": 82.0, "verdict": "PROBABLE AI", "confidence": "HIGH"}
    assert data["falsePositives"][1] == {"factor": "Technical genre", "applied": True, "correction": "-5%"}


@pytest.mark.parametrize("label,expected", [
    ("low", Confidence.LOW),
    (" Medium ", Confidence.MEDIUM),
    ("BAJA", Confidence.LOW),
    ("MEDIA", Confidence.MEDIUM),
    ("Alta", Confidence.HIGH),
])
def test_confidence_accepts_english_and_spanish_labels(label, expected):
    assert Confidence.from_string(label) is expected


def test_confidence_rejects_unknown_label():
    with pytest.raises(ValueError):
        Confidence.from_string("CERTAIN")


def test_numeric_strings_and_bare_percentages_are_coerced(sample_payload):
    sample_payload["mainResult"]["probability"] = "82%"
    sample_payload["moduleTable"][0]["score"] = "85"
    sample_payload["moduleTable"][0]["contribution"] = 25
    sample_payload["falsePositives"][1]["correction"] = -5

    result = AnalysisResult.from_dict(sample_payload)

    assert result.probability == 82.0
    assert result.module_table[0].score == 85.0
    assert result.module_table[0].contribution == "+25%"
    assert result.false_positives[1].correction == "-5%"


@pytest.mark.parametrize("probability", [-1, 100.5, "lots"])
def test_probability_out_of_range_or_not_numeric_is_rejected(sample_payload, probability):
    sample_payload["mainResult"]["probability"] = probability
    with pytest.raises(ValueError):
        AnalysisResult.from_dict(sample_payload)


def test_boolean_probability_is_rejected(sample_payload):
    sample_payload["mainResult"]["probability"] = True
    with pytest.raises(ValueError):
        AnalysisResult.from_dict(sample_payload)


@pytest.mark.parametrize("key", [
    "mainResult", "justification", "moduleTable", "moduleDetails",
    "topEvidences", "falsePositives", "finalCalculation", "recommendation",
])
def test_missing_top_level_key_is_rejected(sample_payload, key):
    del sample_payload[key]
    with pytest.raises(ValueError, match=key):
        AnalysisResult.from_dict(sample_payload)


def test_list_field_must_hold_objects(sample_payload):
    sample_payload["topEvidences"] = ["just a quote"]
    with pytest.raises(ValueError, match=r"topEvidences\[0\]"):
        AnalysisResult.from_dict(sample_payload)


def test_list_field_must_be_a_list(sample_payload):
    sample_payload["moduleTable"] = {"module": "Lexical Patterns"}
    with pytest.raises(ValueError, match="moduleTable"):
        AnalysisResult.from_dict(sample_payload)


def test_applied_flag_must_be_yes_or_no(sample_payload):
    sample_payload["falsePositives"][0]["applied"] = "maybe"
    with pytest.raises(ValueError, match="applied"):
        AnalysisResult.from_dict(sample_payload)


def test_root_must_be_an_object():
    with pytest.raises(ValueError):
        AnalysisResult.from_dict(["not", "an", "object"])


def test_module_details_are_independent_of_table(sample_payload):
    sample_payload["moduleDetails"] = list(reversed(sample_payload["moduleDetails"]))
    sample_payload["moduleDetails"].append(
        {"module": "Predictability", "score": 60, "contribution": "+5%", "analysis": "Expected phrasing."}
    )

    result = AnalysisResult.from_dict(sample_payload)

    assert len(result.module_table) == 2
    assert len(result.module_details) == 3
    assert result.module_detail_for("lexical patterns").analysis == "Frequent use of 'moreover'."
    assert result.module_detail_for("Citation and Specificity") is None


def test_empty_sequences_are_valid(sample_payload):
    for key in ("moduleTable", "moduleDetails", "topEvidences", "falsePositives"):
        sample_payload[key] = []

    result = AnalysisResult.from_dict(sample_payload)

    assert result.module_table == ()
    assert result.false_positives == ()


@pytest.mark.parametrize("score", ["nan", "NaN", "inf", "-Infinity", float("nan"), float("inf"), 10 ** 400])
def test_non_finite_scores_are_rejected(sample_payload, score):
    sample_payload["moduleTable"][0]["score"] = score

    with pytest.raises(ValueError, match=r"moduleTable\[0\]\.score"):
        AnalysisResult.from_dict(sample_payload)


def test_non_finite_probability_is_rejected(sample_payload):
    sample_payload["mainResult"]["probability"] = "nan"

    with pytest.raises(ValueError, match="mainResult.probability"):
        AnalysisResult.from_dict(sample_payload)


@pytest.mark.parametrize("contribution", [float("inf"), float("-inf"), float("nan")])
def test_non_finite_numeric_contribution_is_rejected(sample_payload, contribution):
    sample_payload["moduleDetails"][0]["contribution"] = contribution

    with pytest.raises(ValueError, match=r"moduleDetails\[0\]\.contribution"):
        AnalysisResult.from_dict(sample_payload)
