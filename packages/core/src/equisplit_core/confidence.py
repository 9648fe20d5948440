"""Confidence estimation for property division results.

Confidence is a completeness signal: how much verifiable financial detail
was supplied. It is not a statistical interval and has no failure mode,
only degraded output.
"""

from typing import Optional, Union

import structlog
from pydantic import BaseModel, Field

from .models import (
    HARD_TO_VALUE_ASSET_TYPES,
    Asset,
    Debt,
    EquitableDistributionFactors,
    FinancialAccount,
    PersonalInfo,
)
from .validation import coerce_model

logger = structlog.get_logger()

# Ceiling when no financial records or only zero incomes were supplied
SPARSE_DATA_CAP = 0.45
HARD_TO_VALUE_PENALTY = 0.05


class ConfidenceInputs(BaseModel):
    """Data supplied for one calculation, as seen by the estimator."""

    model_config = {"frozen": True}

    assets: list[Asset] = Field(default_factory=list)
    debts: list[Debt] = Field(default_factory=list)
    financial_accounts: list[FinancialAccount] = Field(default_factory=list)
    personal_info: Optional[PersonalInfo] = None
    equity_factors: Optional[EquitableDistributionFactors] = None

    @property
    def has_financial_records(self) -> bool:
        return bool(self.assets or self.debts or self.financial_accounts)


def _hard_to_value_types(inputs: ConfidenceInputs) -> set:
    found = {asset.type for asset in inputs.assets}
    found.update(account.account_type for account in inputs.financial_accounts)
    return found & HARD_TO_VALUE_ASSET_TYPES


def estimate_confidence(inputs: Union[ConfidenceInputs, dict]) -> float:
    """
    Calculate confidence level based on data completeness.

    Args:
        inputs: Records supplied for the calculation (model or plain dict)

    Returns:
        Confidence in [0, 1], rounded to two decimal places
    """
    inputs = coerce_model(ConfidenceInputs, inputs, field="inputs")
    score = 0.0
    max_score = 0.0

    # Financial records
    max_score += 30
    if inputs.assets:
        score += 30
    max_score += 20
    if inputs.debts:
        score += 20
    max_score += 10
    if inputs.financial_accounts:
        score += 10

    # Marriage timeline
    info = inputs.personal_info
    max_score += 10
    if info is not None and info.marriage_date is not None:
        score += 10
    max_score += 5
    if info is not None and info.separation_date is not None:
        score += 5

    # Income only counts when factors were supplied
    factors = inputs.equity_factors
    if factors is not None:
        max_score += 25
        if factors.has_reported_income:
            score += 25

    confidence = score / max_score

    if not inputs.has_financial_records:
        confidence = min(confidence, SPARSE_DATA_CAP)
    if factors is not None and factors.reported_zero_income:
        confidence = min(confidence, SPARSE_DATA_CAP)

    hard_types = _hard_to_value_types(inputs)
    confidence -= HARD_TO_VALUE_PENALTY * len(hard_types)

    confidence = round(min(max(confidence, 0.0), 1.0), 2)
    logger.debug(
        "confidence_estimated",
        confidence=confidence,
        hard_to_value=sorted(t.value for t in hard_types),
    )
    return confidence
