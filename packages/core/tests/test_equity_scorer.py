"""Tests for the equity factor scorer."""

from decimal import Decimal

import pytest

from equisplit_core import evaluate_equity_factors, score_equity_factors
from equisplit_core.exceptions import ValidationError
from equisplit_core.models import (
    CustodyArrangement,
    EquitableDistributionFactors,
    HealthStatus,
    PennsylvaniaFactors,
)


def with_changes(factors: EquitableDistributionFactors, **changes) -> EquitableDistributionFactors:
    return factors.model_copy(update=changes)


def with_pa(factors: EquitableDistributionFactors, **pa_fields) -> EquitableDistributionFactors:
    return factors.model_copy(
        update={"jurisdiction_factors": PennsylvaniaFactors(**pa_fields)}
    )


class TestNeutralScore:
    """A bundle without disparities yields an equal split."""

    def test_neutral_factors(self, neutral_factors):
        assert score_equity_factors(neutral_factors) == 0.5

    def test_empty_bundle_is_neutral(self):
        """Absent numeric fields do not fire any rule."""
        assert score_equity_factors(EquitableDistributionFactors()) == 0.5

    def test_empty_pennsylvania_extension_is_neutral(self, neutral_factors):
        assert score_equity_factors(with_pa(neutral_factors)) == 0.5

    def test_zero_incomes_do_not_divide_by_zero(self, neutral_factors):
        factors = with_changes(
            neutral_factors,
            income_spouse1=Decimal("0"),
            income_spouse2=Decimal("0"),
            earn_capacity_spouse1=Decimal("0"),
            earn_capacity_spouse2=Decimal("0"),
        )
        assert score_equity_factors(factors) == 0.5

    def test_accepts_plain_dict(self):
        assert score_equity_factors({"marriage_duration": 3}) == 0.45


class TestGeneralFactors:
    """Primary factor adjustments."""

    @pytest.mark.parametrize(
        "changes,expected",
        [
            ({"marriage_duration": Decimal("3")}, 0.45),
            ({"marriage_duration": Decimal("22")}, 0.55),
            ({"marriage_duration": Decimal("5")}, 0.5),
            ({"marriage_duration": Decimal("20")}, 0.5),
            ({"age_spouse1": 55, "age_spouse2": 40}, 0.47),
            ({"age_spouse1": 40, "age_spouse2": 55}, 0.53),
            ({"age_spouse1": 50, "age_spouse2": 40}, 0.5),
            ({"income_spouse1": Decimal("20000"), "income_spouse2": Decimal("80000")}, 0.6),
            ({"income_spouse1": Decimal("80000"), "income_spouse2": Decimal("20000")}, 0.4),
            ({"earn_capacity_spouse1": Decimal("30000"), "earn_capacity_spouse2": Decimal("70001")}, 0.55),
            ({"earn_capacity_spouse1": Decimal("70001"), "earn_capacity_spouse2": Decimal("30000")}, 0.45),
            ({"health_spouse1": HealthStatus.POOR}, 0.55),
            ({"health_spouse2": HealthStatus.POOR}, 0.45),
            ({"health_spouse1": HealthStatus.POOR, "health_spouse2": HealthStatus.POOR}, 0.5),
            ({"custody_arrangement": CustodyArrangement.SOLE_1}, 0.58),
            ({"custody_arrangement": CustodyArrangement.SOLE_2}, 0.42),
            ({"custody_arrangement": CustodyArrangement.JOINT}, 0.5),
            ({"domestic_violence": True}, 0.6),
            ({"wasting_of_assets": True}, 0.55),
        ],
    )
    def test_single_factor(self, neutral_factors, changes, expected):
        assert score_equity_factors(with_changes(neutral_factors, **changes)) == expected

    def test_informational_fields_do_not_score(self, neutral_factors):
        factors = with_changes(
            neutral_factors,
            tax_consequences=True,
            contribution_to_marriage="Stayed home with the children",
        )
        assert score_equity_factors(factors) == 0.5


class TestPennsylvaniaFactors:
    """Secondary adjustments from the Pennsylvania extension."""

    @pytest.mark.parametrize(
        "pa_fields,expected",
        [
            ({"prior_marriage_spouse1": True}, 0.51),
            ({"prior_marriage_spouse2": True}, 0.49),
            ({"prior_marriage_spouse1": True, "prior_marriage_spouse2": True}, 0.5),
            ({"contribution_to_education_spouse1": True}, 0.52),
            ({"contribution_to_education_spouse2": True}, 0.48),
            ({"opportunity_future_acquisitions_spouse1": "Has good prospects"}, 0.49),
            ({"opportunity_future_acquisitions_spouse2": "Has good prospects"}, 0.51),
            ({"needs_spouse1": "Significant medical needs"}, 0.52),
            ({"needs_spouse2": "Significant medical needs"}, 0.48),
            ({"economic_circumstances_spouse1": "Lost job recently"}, 0.52),
            ({"economic_circumstances_spouse2": "Lost job recently"}, 0.48),
            ({"estate_spouse1": Decimal("100000"), "estate_spouse2": Decimal("40000")}, 0.48),
            ({"estate_spouse1": Decimal("40000"), "estate_spouse2": Decimal("100000")}, 0.52),
            ({"estate_spouse1": Decimal("60000"), "estate_spouse2": Decimal("40000")}, 0.5),
            ({"estate_spouse1": Decimal("50000")}, 0.49),
            ({"estate_spouse2": Decimal("50000")}, 0.51),
            ({"station_spouse1": "Details about station"}, 0.51),
            ({"station_spouse2": "Details about station"}, 0.49),
            ({"other_income_sources_spouse1": "Has other income"}, 0.49),
            ({"other_income_sources_spouse2": "Has other income"}, 0.51),
        ],
    )
    def test_single_factor(self, neutral_factors, pa_fields, expected):
        assert score_equity_factors(with_pa(neutral_factors, **pa_fields)) == expected

    def test_blank_text_is_ignored(self, neutral_factors):
        factors = with_pa(neutral_factors, needs_spouse1="   ")
        assert score_equity_factors(factors) == 0.5

    def test_adjustments_sum(self, neutral_factors):
        """Spouse 1 prior marriage (+0.01) and spouse 2 needs (-0.02)."""
        factors = with_pa(
            neutral_factors,
            prior_marriage_spouse1=True,
            needs_spouse2="Significant needs",
        )
        assert score_equity_factors(factors) == 0.49

    def test_pennsylvania_fields_require_extension(self, neutral_factors):
        """Without the extension, only general rules apply."""
        assert neutral_factors.jurisdiction_factors is None
        assert score_equity_factors(neutral_factors) == 0.5


class TestCenteringNudge:
    """Expense of sale moves a skewed score toward an equal split."""

    def test_nudges_high_score_down(self, neutral_factors):
        factors = with_pa(
            with_changes(
                neutral_factors,
                income_spouse1=Decimal("20000"),
                income_spouse2=Decimal("80000"),
            ),
            expense_of_sale_assets=Decimal("10000"),
        )
        assert score_equity_factors(factors) == 0.59

    def test_nudges_low_score_up(self, neutral_factors):
        factors = with_pa(
            with_changes(
                neutral_factors,
                income_spouse1=Decimal("80000"),
                income_spouse2=Decimal("20000"),
            ),
            expense_of_sale_assets=Decimal("10000"),
        )
        assert score_equity_factors(factors) == 0.41

    def test_no_nudge_when_centered(self, neutral_factors):
        factors = with_pa(neutral_factors, expense_of_sale_assets=Decimal("10000"))
        result = evaluate_equity_factors(factors)

        assert result.spouse1_share == 0.5
        assert result.adjustments == []

    def test_no_nudge_when_expense_is_zero(self, neutral_factors):
        factors = with_pa(
            with_changes(neutral_factors, marriage_duration=Decimal("3")),
            expense_of_sale_assets=Decimal("0"),
        )
        assert score_equity_factors(factors) == 0.45

    def test_nudge_never_crosses_center(self, neutral_factors):
        """A deviation no larger than the nudge lands exactly on 0.5."""
        factors = with_pa(
            neutral_factors,
            prior_marriage_spouse1=True,
            station_spouse1="Executive",
            other_income_sources_spouse1="Rental income",
            expense_of_sale_assets=Decimal("5000"),
        )
        # +0.01 +0.01 -0.01 = +0.01, nudge -0.01
        assert score_equity_factors(factors) == 0.5

    def test_nudge_applies_to_net_deviation(self, neutral_factors):
        """The nudge follows the net deviation, not individual factors."""
        factors = with_pa(
            with_changes(neutral_factors, domestic_violence=True),
            needs_spouse2="Medical",
            economic_circumstances_spouse2="Unemployed",
            contribution_to_education_spouse2=True,
            prior_marriage_spouse2=True,
            station_spouse2="Retired",
            expense_of_sale_assets=Decimal("5000"),
        )
        # +0.10 -0.02 -0.02 -0.02 -0.01 -0.01 = +0.02, nudge -0.01
        assert score_equity_factors(factors) == 0.51


class TestClamping:
    """The score is clamped once, after all adjustments."""

    def test_clamps_to_maximum(self, neutral_factors):
        factors = with_pa(
            with_changes(
                neutral_factors,
                marriage_duration=Decimal("25"),
                income_spouse1=Decimal("10000"),
                income_spouse2=Decimal("100000"),
                health_spouse1=HealthStatus.POOR,
                custody_arrangement=CustodyArrangement.SOLE_1,
                domestic_violence=True,
                wasting_of_assets=True,
            ),
            contribution_to_education_spouse1=True,
            needs_spouse1="Many needs",
        )
        result = evaluate_equity_factors(factors)

        assert result.spouse1_share == 0.7
        assert result.raw_score == Decimal("0.97")
        assert result.clamped

    def test_clamps_to_minimum(self, neutral_factors):
        factors = with_pa(
            with_changes(
                neutral_factors,
                age_spouse1=60,
                age_spouse2=40,
                income_spouse1=Decimal("100000"),
                income_spouse2=Decimal("10000"),
                health_spouse2=HealthStatus.POOR,
                custody_arrangement=CustodyArrangement.SOLE_2,
            ),
            contribution_to_education_spouse2=True,
            needs_spouse2="Many needs",
        )
        result = evaluate_equity_factors(factors)

        assert result.spouse1_share == 0.3
        assert result.raw_score == Decimal("0.20")
        assert result.clamped

    def test_single_clamp_keeps_offsetting_factors(self, neutral_factors):
        """Clamping per step would lose the later negative adjustment."""
        factors = with_changes(
            neutral_factors,
            marriage_duration=Decimal("25"),
            custody_arrangement=CustodyArrangement.SOLE_1,
            domestic_violence=True,
            wasting_of_assets=True,
            income_spouse1=Decimal("90000"),
            income_spouse2=Decimal("10000"),
        )
        # +0.05 +0.08 +0.10 +0.05 -0.10 = +0.18
        assert score_equity_factors(factors) == 0.68

    @pytest.mark.parametrize("duration", ["0", "3", "10", "25", "60"])
    @pytest.mark.parametrize("custody", list(CustodyArrangement))
    @pytest.mark.parametrize("violence", [True, False])
    def test_score_always_in_range(self, neutral_factors, duration, custody, violence):
        factors = with_changes(
            neutral_factors,
            marriage_duration=Decimal(duration),
            custody_arrangement=custody,
            domestic_violence=violence,
            wasting_of_assets=violence,
        )
        assert 0.3 <= score_equity_factors(factors) <= 0.7


class TestEvaluateEquityFactors:
    """Itemised scoring results."""

    def test_adjustments_are_itemised(self, neutral_factors):
        factors = with_changes(
            neutral_factors,
            marriage_duration=Decimal("3"),
            domestic_violence=True,
        )
        result = evaluate_equity_factors(factors)

        assert [a.factor for a in result.adjustments] == [
            "marriage_duration",
            "domestic_violence",
        ]
        assert [a.delta for a in result.adjustments] == [Decimal("-0.05"), Decimal("0.10")]
        assert result.score == Decimal("0.55")
        assert not result.clamped

    def test_shares_sum_to_one(self, neutral_factors):
        result = evaluate_equity_factors(with_changes(neutral_factors, wasting_of_assets=True))
        assert result.spouse1_share + result.spouse2_share == pytest.approx(1.0, abs=1e-9)

    def test_invalid_dict_raises_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            evaluate_equity_factors({"income_spouse1": "-5"})

        assert exc_info.value.field == "equity_factors.income_spouse1"

    def test_custody_shared_alias(self):
        factors = EquitableDistributionFactors(custody_arrangement="shared")
        assert factors.custody_arrangement is CustodyArrangement.JOINT
