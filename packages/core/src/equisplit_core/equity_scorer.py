"""Equity factor scoring for equitable distribution jurisdictions.

The score is spouse 1's share of the net marital estate. It starts from an
equal split (0.5) and applies a fixed list of independent rules, each adding
a signed delta (positive favors spouse 1). Deltas are summed as Decimals, so
the order of the rules does not affect the result, and the sum is clamped to
[0.3, 0.7] once at the end.

Rule set:
- General factors: marriage duration, age gap, income and earning-capacity
  disparity, health, custody, domestic violence, wasting of assets
- Pennsylvania secondary factors (23 Pa.C.S. 3502), applied only when the
  factor bundle carries a Pennsylvania extension
- Expense-of-sale centering nudge
"""

from dataclasses import dataclass
from decimal import Decimal
from typing import Callable, Optional, Union

import structlog

from .validation import coerce_model
from .models import (
    CustodyArrangement,
    EquitableDistributionFactors,
    EquityScore,
    FactorAdjustment,
    HealthStatus,
    PennsylvaniaFactors,
)

logger = structlog.get_logger()


# =============================================================================
# CONSTANTS
# =============================================================================

BASELINE = Decimal("0.5")
MIN_SCORE = Decimal("0.3")
MAX_SCORE = Decimal("0.7")

SHORT_MARRIAGE_YEARS = Decimal("5")
LONG_MARRIAGE_YEARS = Decimal("20")
AGE_GAP_YEARS = 10

INCOME_RATIO_LOW = Decimal("0.3")
INCOME_RATIO_HIGH = Decimal("0.7")
CAPACITY_RATIO_LOW = Decimal("0.4")
CAPACITY_RATIO_HIGH = Decimal("0.6")

ESTATE_DISPARITY_MULTIPLE = Decimal("2")
CENTERING_NUDGE = Decimal("0.01")

# Rule outcome: (delta, description) or None when the rule does not fire
RuleOutcome = Optional[tuple[Decimal, str]]


@dataclass(frozen=True)
class FactorRule:
    """A named, independent score adjustment."""
    name: str
    adjust: Callable[[EquitableDistributionFactors], RuleOutcome]


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

def _ratio(first: Optional[Decimal], second: Optional[Decimal]) -> Optional[Decimal]:
    """first / (first + second); None when either is absent or both are zero."""
    if first is None or second is None:
        return None
    total = first + second
    if total <= 0:
        return None
    return first / total


def _one_sided(
    spouse1: object,
    spouse2: object,
    spouse1_delta: str,
    what: str,
) -> RuleOutcome:
    """Fire when exactly one spouse has the circumstance.

    ``spouse1_delta`` applies when only spouse 1 has it; the opposite sign
    applies when only spouse 2 has it.
    """
    has1, has2 = bool(spouse1), bool(spouse2)
    if has1 == has2:
        return None
    delta = Decimal(spouse1_delta)
    if has1:
        return delta, f"Only spouse 1 {what}"
    return -delta, f"Only spouse 2 {what}"


def _pa(factors: EquitableDistributionFactors) -> Optional[PennsylvaniaFactors]:
    ext = factors.jurisdiction_factors
    if isinstance(ext, PennsylvaniaFactors):
        return ext
    return None


# =============================================================================
# GENERAL FACTORS
# =============================================================================

def _marriage_duration(f: EquitableDistributionFactors) -> RuleOutcome:
    if f.marriage_duration is None:
        return None
    if f.marriage_duration < SHORT_MARRIAGE_YEARS:
        return Decimal("-0.05"), f"Short marriage ({f.marriage_duration} years)"
    if f.marriage_duration > LONG_MARRIAGE_YEARS:
        return Decimal("0.05"), f"Long marriage ({f.marriage_duration} years)"
    return None


def _age_gap(f: EquitableDistributionFactors) -> RuleOutcome:
    if f.age_spouse1 is None or f.age_spouse2 is None:
        return None
    gap = f.age_spouse1 - f.age_spouse2
    if abs(gap) <= AGE_GAP_YEARS:
        return None
    if gap > 0:
        return Decimal("-0.03"), f"Spouse 1 is {gap} years older"
    return Decimal("0.03"), f"Spouse 2 is {-gap} years older"


def _income_disparity(f: EquitableDistributionFactors) -> RuleOutcome:
    ratio = _ratio(f.income_spouse1, f.income_spouse2)
    if ratio is None:
        return None
    if ratio < INCOME_RATIO_LOW:
        return Decimal("0.10"), "Spouse 1 earns significantly less"
    if ratio > INCOME_RATIO_HIGH:
        return Decimal("-0.10"), "Spouse 1 earns significantly more"
    return None


def _earning_capacity(f: EquitableDistributionFactors) -> RuleOutcome:
    ratio = _ratio(f.earn_capacity_spouse1, f.earn_capacity_spouse2)
    if ratio is None:
        return None
    if ratio < CAPACITY_RATIO_LOW:
        return Decimal("0.05"), "Spouse 1 has lower earning capacity"
    if ratio > CAPACITY_RATIO_HIGH:
        return Decimal("-0.05"), "Spouse 1 has higher earning capacity"
    return None


def _health(f: EquitableDistributionFactors) -> RuleOutcome:
    return _one_sided(
        f.health_spouse1 is HealthStatus.POOR,
        f.health_spouse2 is HealthStatus.POOR,
        "0.05",
        "is in poor health",
    )


def _custody(f: EquitableDistributionFactors) -> RuleOutcome:
    if f.custody_arrangement is CustodyArrangement.SOLE_1:
        return Decimal("0.08"), "Sole custody to spouse 1"
    if f.custody_arrangement is CustodyArrangement.SOLE_2:
        return Decimal("-0.08"), "Sole custody to spouse 2"
    return None


def _domestic_violence(f: EquitableDistributionFactors) -> RuleOutcome:
    if f.domestic_violence:
        return Decimal("0.10"), "Domestic violence reported"
    return None


def _wasting_of_assets(f: EquitableDistributionFactors) -> RuleOutcome:
    if f.wasting_of_assets:
        return Decimal("0.05"), "Wasting of marital assets reported"
    return None


# =============================================================================
# PENNSYLVANIA FACTORS (23 Pa.C.S. 3502)
# =============================================================================

def _pa_prior_marriage(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    return _one_sided(
        pa.prior_marriage_spouse1, pa.prior_marriage_spouse2,
        "0.01", "has a prior marriage",
    )


def _pa_education_contribution(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    # Both contributing cancels out
    delta = Decimal("0")
    if pa.contribution_to_education_spouse1:
        delta += Decimal("0.02")
    if pa.contribution_to_education_spouse2:
        delta -= Decimal("0.02")
    if delta == 0:
        return None
    who = "1" if delta > 0 else "2"
    return delta, f"Spouse {who} contributed to the other's education or training"


def _pa_future_acquisitions(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    return _one_sided(
        pa.opportunity_future_acquisitions_spouse1,
        pa.opportunity_future_acquisitions_spouse2,
        "-0.01", "has opportunity for future acquisitions",
    )


def _pa_needs(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    return _one_sided(pa.needs_spouse1, pa.needs_spouse2, "0.02", "has documented needs")


def _pa_economic_circumstances(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    return _one_sided(
        pa.economic_circumstances_spouse1,
        pa.economic_circumstances_spouse2,
        "0.02", "has adverse economic circumstances at divorce",
    )


def _pa_separate_estate(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    estate1 = pa.estate_spouse1 or Decimal("0")
    estate2 = pa.estate_spouse2 or Decimal("0")
    if estate1 > 0 and estate2 > 0:
        if estate1 > estate2 * ESTATE_DISPARITY_MULTIPLE:
            return Decimal("-0.02"), "Spouse 1's separate estate exceeds twice spouse 2's"
        if estate2 > estate1 * ESTATE_DISPARITY_MULTIPLE:
            return Decimal("0.02"), "Spouse 2's separate estate exceeds twice spouse 1's"
        return None
    return _one_sided(estate1 > 0, estate2 > 0, "-0.01", "has a separate estate")


def _pa_station(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    return _one_sided(pa.station_spouse1, pa.station_spouse2, "0.01", "has a documented station")


def _pa_other_income(f: EquitableDistributionFactors) -> RuleOutcome:
    pa = _pa(f)
    if pa is None:
        return None
    return _one_sided(
        pa.other_income_sources_spouse1,
        pa.other_income_sources_spouse2,
        "-0.01", "has other sources of income",
    )


# Order only affects the itemised listing, never the score.
RULES: tuple[FactorRule, ...] = (
    FactorRule("marriage_duration", _marriage_duration),
    FactorRule("age_gap", _age_gap),
    FactorRule("income_disparity", _income_disparity),
    FactorRule("earning_capacity", _earning_capacity),
    FactorRule("health", _health),
    FactorRule("custody", _custody),
    FactorRule("domestic_violence", _domestic_violence),
    FactorRule("wasting_of_assets", _wasting_of_assets),
    FactorRule("pa_prior_marriage", _pa_prior_marriage),
    FactorRule("pa_education_contribution", _pa_education_contribution),
    FactorRule("pa_future_acquisitions", _pa_future_acquisitions),
    FactorRule("pa_needs", _pa_needs),
    FactorRule("pa_economic_circumstances", _pa_economic_circumstances),
    FactorRule("pa_separate_estate", _pa_separate_estate),
    FactorRule("pa_station", _pa_station),
    FactorRule("pa_other_income", _pa_other_income),
)


def _centering_nudge(
    factors: EquitableDistributionFactors, deviation: Decimal
) -> RuleOutcome:
    """Move a skewed score 0.01 toward an equal split when sale costs are reported.

    Never crosses 0.5 and never fires on an unskewed score.
    """
    pa = _pa(factors)
    if pa is None or not pa.expense_of_sale_assets or deviation == 0:
        return None
    step = min(CENTERING_NUDGE, abs(deviation))
    delta = -step if deviation > 0 else step
    return delta, f"Expense of sale ({pa.expense_of_sale_assets}) moves the split toward equal"


# =============================================================================
# PUBLIC API
# =============================================================================

def _coerce_factors(
    factors: Union[EquitableDistributionFactors, dict]
) -> EquitableDistributionFactors:
    if isinstance(factors, EquitableDistributionFactors):
        return factors
    return coerce_model(EquitableDistributionFactors, factors, field="equity_factors")


def evaluate_equity_factors(
    factors: Union[EquitableDistributionFactors, dict]
) -> EquityScore:
    """
    Score a factor bundle with the itemised adjustments.

    Args:
        factors: Factor bundle (model or plain dict)

    Returns:
        EquityScore with the raw and clamped score and each adjustment that fired

    Raises:
        ValidationError: If a dict bundle does not validate
    """
    factors = _coerce_factors(factors)
    adjustments: list[FactorAdjustment] = []

    for rule in RULES:
        outcome = rule.adjust(factors)
        if outcome is None:
            continue
        delta, description = outcome
        adjustments.append(
            FactorAdjustment(factor=rule.name, delta=delta, description=description)
        )

    deviation = sum((a.delta for a in adjustments), Decimal("0"))
    nudge = _centering_nudge(factors, deviation)
    if nudge is not None:
        delta, description = nudge
        adjustments.append(
            FactorAdjustment(factor="pa_expense_of_sale", delta=delta, description=description)
        )
        deviation += delta

    raw_score = BASELINE + deviation
    score = min(max(raw_score, MIN_SCORE), MAX_SCORE)

    for adjustment in adjustments:
        logger.info(
            "equity_factor_applied",
            factor=adjustment.factor,
            delta=str(adjustment.delta),
            description=adjustment.description,
        )
    if score != raw_score:
        logger.info("equity_score_clamped", raw_score=str(raw_score), score=str(score))

    return EquityScore(
        baseline=BASELINE,
        raw_score=raw_score,
        score=score,
        adjustments=adjustments,
    )


def score_equity_factors(factors: Union[EquitableDistributionFactors, dict]) -> float:
    """
    Compute spouse 1's share of the net marital estate.

    Returns:
        Split ratio in [0.3, 0.7]; 0.5 for a neutral bundle
    """
    return evaluate_equity_factors(factors).spouse1_share
