"""EquiSplit Core - Marital property division calculations."""

__version__ = "0.1.0"

from .calculator import PropertyDivisionCalculator, classify_and_divide
from .confidence import ConfidenceInputs, estimate_confidence
from .equity_scorer import evaluate_equity_factors, score_equity_factors
from .models import (
    Asset,
    Debt,
    EquitableDistributionFactors,
    FinancialAccount,
    Jurisdiction,
    PennsylvaniaFactors,
    PersonalInfo,
    PropertyDivision,
)

__all__ = [
    "PropertyDivisionCalculator",
    "classify_and_divide",
    "score_equity_factors",
    "evaluate_equity_factors",
    "estimate_confidence",
    "ConfidenceInputs",
    "Asset",
    "Debt",
    "EquitableDistributionFactors",
    "FinancialAccount",
    "Jurisdiction",
    "PennsylvaniaFactors",
    "PersonalInfo",
    "PropertyDivision",
]
