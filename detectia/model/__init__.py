"""
detectIA Model Module
=====================

Contains the data model for the verdict returned by the analysis service.

Key Components:
- schemas.py: Typed dataclasses for AnalysisResult and its records
"""

from .schemas import (
    Confidence,
    MainResult,
    ModuleResult,
    ModuleDetail,
    Evidence,
    FalsePositive,
    AnalysisResult
)
