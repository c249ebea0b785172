"""
detectIA Data Schemas
=====================

Typed dataclasses for the structured verdict returned by the remote model.

Design Decisions:
-----------------
1. The remote service answers in camelCase JSON; the dataclasses use
   snake_case attributes and convert at the boundary (from_dict / to_dict)
2. Validation is strict on shape and lenient on representation: a score sent
   as "82" or "82%" is accepted, a missing key or a list that is not a list
   of objects is not
3. Confidence is an enum so the GUI can colour it without string matching
4. AnalysisResult is a value; nothing here is mutated after construction

Schema Hierarchy:
- AnalysisResult
  - MainResult
  - ModuleResult (moduleTable rows)
  - ModuleDetail (moduleDetails entries)
  - Evidence (topEvidences)
  - FalsePositive (falsePositives)
"""

import math
from dataclasses import dataclass, field
from enum import Enum
from typing import Any, Optional


class Confidence(Enum):
    """Confidence level the model attaches to its verdict."""
    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @classmethod
    def from_string(cls, s: Any) -> "Confidence":
        """Convert a label to Confidence, handling the Spanish labels too."""
        if isinstance(s, Confidence):
            return s
        if not isinstance(s, str):
            raise ValueError(f"confidence must be a string, got {type(s).__name__}")

        normalized = s.strip().upper()

        for level in cls:
            if level.value == normalized:
                return level

        aliases = {
            "BAJA": cls.LOW,
            "BAJO": cls.LOW,
            "MEDIA": cls.MEDIUM,
            "MEDIO": cls.MEDIUM,
            "ALTA": cls.HIGH,
            "ALTO": cls.HIGH,
        }

        if normalized in aliases:
            return aliases[normalized]

        raise ValueError(f"unknown confidence level: {s!r}")


_APPLIED_TRUE = {"sí", "si", "yes", "y", "true", "applied", "aplicado"}
_APPLIED_FALSE = {"no", "n", "false", "not applied", "no aplicado"}


def _require(data: dict, key: str, where: str) -> Any:
    if not isinstance(data, dict):
        raise ValueError(f"{where} must be an object, got {type(data).__name__}")
    if key not in data:
        raise ValueError(f"{where} is missing '{key}'")
    return data[key]


def _as_text(value: Any, where: str) -> str:
    if value is None:
        raise ValueError(f"{where} must not be null")
    if isinstance(value, (dict, list)):
        raise ValueError(f"{where} must be text, got {type(value).__name__}")
    return str(value).strip()


def _as_number(value: Any, where: str) -> float:
    # bool is an int subclass; "true" is never a score
    if isinstance(value, bool):
        raise ValueError(f"{where} must be a number, got bool")
    number = None
    if isinstance(value, (int, float)):
        try:
            number = float(value)
        except OverflowError:
            pass
    elif isinstance(value, str):
        cleaned = value.strip().rstrip("%").strip()
        try:
            number = float(cleaned)
        except ValueError:
            pass
    if number is None or not math.isfinite(number):
        raise ValueError(f"{where} must be a finite number, got {value!r}")
    return number


def _as_percentage(value: Any, where: str) -> str:
    """Keep signed percentage strings as sent; format bare numbers as '+25%'."""
    if isinstance(value, bool):
        raise ValueError(f"{where} must be a percentage, got bool")
    if isinstance(value, (int, float)):
        number = _as_number(value, where)
        if number.is_integer():
            number = int(number)
        return f"{number:+}%"
    return _as_text(value, where)


def _as_applied(value: Any, where: str) -> bool:
    if isinstance(value, bool):
        return value
    if isinstance(value, str):
        normalized = value.strip().lower()
        if normalized in _APPLIED_TRUE:
            return True
        if normalized in _APPLIED_FALSE:
            return False
    raise ValueError(f"{where} must be a yes/no flag, got {value!r}")


def _as_list(value: Any, where: str) -> list:
    if not isinstance(value, list):
        raise ValueError(f"{where} must be a list, got {type(value).__name__}")
    return value


@dataclass(frozen=True)
class MainResult:
    """Headline verdict.

    Attributes:
        probability: Likelihood (0-100) that the text was AI-generated
        verdict: Short label, e.g. "PROBABLE AI"
        confidence: Model confidence in the verdict
    """
    probability: float
    verdict: str
    confidence: Confidence

    @classmethod
    def from_dict(cls, data: dict) -> "MainResult":
        probability = _as_number(_require(data, "probability", "mainResult"), "mainResult.probability")
        if not 0 <= probability <= 100:
            raise ValueError(f"mainResult.probability out of range [0, 100]: {probability}")
        return cls(
            probability=probability,
            verdict=_as_text(_require(data, "verdict", "mainResult"), "mainResult.verdict"),
            confidence=Confidence.from_string(_require(data, "confidence", "mainResult"))
        )

    def to_dict(self) -> dict:
        return {
            "probability": self.probability,
            "verdict": self.verdict,
            "confidence": self.confidence.value,
        }


@dataclass(frozen=True)
class ModuleResult:
    """One row of the module summary table."""
    module: str
    score: float
    contribution: str
    finding: str

    @classmethod
    def from_dict(cls, data: dict, where: str = "moduleTable") -> "ModuleResult":
        return cls(
            module=_as_text(_require(data, "module", where), f"{where}.module"),
            score=_as_number(_require(data, "score", where), f"{where}.score"),
            contribution=_as_percentage(_require(data, "contribution", where), f"{where}.contribution"),
            finding=_as_text(_require(data, "finding", where), f"{where}.finding")
        )

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "score": self.score,
            "contribution": self.contribution,
            "finding": self.finding,
        }


@dataclass(frozen=True)
class ModuleDetail:
    """Long-form analysis for one detection module."""
    module: str
    score: float
    contribution: str
    analysis: str

    @classmethod
    def from_dict(cls, data: dict, where: str = "moduleDetails") -> "ModuleDetail":
        return cls(
            module=_as_text(_require(data, "module", where), f"{where}.module"),
            score=_as_number(_require(data, "score", where), f"{where}.score"),
            contribution=_as_percentage(_require(data, "contribution", where), f"{where}.contribution"),
            analysis=_as_text(_require(data, "analysis", where), f"{where}.analysis")
        )

    def to_dict(self) -> dict:
        return {
            "module": self.module,
            "score": self.score,
            "contribution": self.contribution,
            "analysis": self.analysis,
        }


@dataclass(frozen=True)
class Evidence:
    """A quoted excerpt that pushed the probability up or down."""
    quote: str
    indicator: str
    impact: str

    @classmethod
    def from_dict(cls, data: dict, where: str = "topEvidences") -> "Evidence":
        return cls(
            quote=_as_text(_require(data, "quote", where), f"{where}.quote"),
            indicator=_as_text(_require(data, "indicator", where), f"{where}.indicator"),
            impact=_as_percentage(_require(data, "impact", where), f"{where}.impact")
        )

    def to_dict(self) -> dict:
        return {"quote": self.quote, "indicator": self.indicator, "impact": self.impact}


@dataclass(frozen=True)
class FalsePositive:
    """A false-positive safeguard and the correction it applied, if any."""
    factor: str
    applied: bool
    correction: str

    @classmethod
    def from_dict(cls, data: dict, where: str = "falsePositives") -> "FalsePositive":
        return cls(
            factor=_as_text(_require(data, "factor", where), f"{where}.factor"),
            applied=_as_applied(_require(data, "applied", where), f"{where}.applied"),
            correction=_as_percentage(_require(data, "correction", where), f"{where}.correction")
        )

    def to_dict(self) -> dict:
        return {"factor": self.factor, "applied": self.applied, "correction": self.correction}


@dataclass(frozen=True)
class AnalysisResult:
    """Complete structured verdict for one analyzed text.

    This is the only object the controller hands to the presentation layer.

    Attributes:
        main_result: Headline probability, verdict and confidence
        justification: Summary of why the verdict was reached
        module_table: Per-module scores with one-line findings
        module_details: Per-module long-form analysis
        top_evidences: Quoted excerpts with their impact
        false_positives: False-positive safeguards and corrections
        final_calculation: How the contributions combine
        recommendation: Advice for the reader of the report

    Design Decision:
        module_table and module_details usually describe the same modules in
        the same order, but the remote model does not guarantee it, so they
        are kept as independent sequences.
    """
    main_result: MainResult
    justification: str
    module_table: tuple = field(default_factory=tuple)  # of ModuleResult
    module_details: tuple = field(default_factory=tuple)  # of ModuleDetail
    top_evidences: tuple = field(default_factory=tuple)  # of Evidence
    false_positives: tuple = field(default_factory=tuple)  # of FalsePositive
    final_calculation: str = ""
    recommendation: str = ""

    @classmethod
    def from_dict(cls, data: dict) -> "AnalysisResult":
        """Validate and coerce the provider payload.

        Raises:
            ValueError: If the payload does not have the AnalysisResult shape
        """
        if not isinstance(data, dict):
            raise ValueError(f"analysis result must be an object, got {type(data).__name__}")

        return cls(
            main_result=MainResult.from_dict(_require(data, "mainResult", "result")),
            justification=_as_text(_require(data, "justification", "result"), "justification"),
            module_table=tuple(
                ModuleResult.from_dict(row, f"moduleTable[{i}]")
                for i, row in enumerate(_as_list(_require(data, "moduleTable", "result"), "moduleTable"))
            ),
            module_details=tuple(
                ModuleDetail.from_dict(row, f"moduleDetails[{i}]")
                for i, row in enumerate(_as_list(_require(data, "moduleDetails", "result"), "moduleDetails"))
            ),
            top_evidences=tuple(
                Evidence.from_dict(row, f"topEvidences[{i}]")
                for i, row in enumerate(_as_list(_require(data, "topEvidences", "result"), "topEvidences"))
            ),
            false_positives=tuple(
                FalsePositive.from_dict(row, f"falsePositives[{i}]")
                for i, row in enumerate(_as_list(_require(data, "falsePositives", "result"), "falsePositives"))
            ),
            final_calculation=_as_text(_require(data, "finalCalculation", "result"), "finalCalculation"),
            recommendation=_as_text(_require(data, "recommendation", "result"), "recommendation")
        )

    def to_dict(self) -> dict:
        """Convert to the camelCase dictionary shape used on the wire."""
        return {
            "mainResult": self.main_result.to_dict(),
            "justification": self.justification,
            "moduleTable": [m.to_dict() for m in self.module_table],
            "moduleDetails": [m.to_dict() for m in self.module_details],
            "topEvidences": [e.to_dict() for e in self.top_evidences],
            "falsePositives": [f.to_dict() for f in self.false_positives],
            "finalCalculation": self.final_calculation,
            "recommendation": self.recommendation,
        }

    @property
    def probability(self) -> float:
        return self.main_result.probability

    @property
    def verdict(self) -> str:
        return self.main_result.verdict

    @property
    def confidence(self) -> Confidence:
        return self.main_result.confidence

    def module_detail_for(self, module: str) -> Optional[ModuleDetail]:
        """Find the detail entry for a module name (case-insensitive)."""
        wanted = module.strip().lower()
        for detail in self.module_details:
            if detail.module.strip().lower() == wanted:
                return detail
        return None
