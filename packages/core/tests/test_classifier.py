"""Tests for marital vs. separate property classification."""

from datetime import date
from decimal import Decimal

import pytest

from equisplit_core.classifier import PropertyClassifier, classify_items
from equisplit_core.models import (
    Asset,
    Debt,
    PersonalInfo,
    ReasoningKind,
    Spouse,
)


def make_asset(**fields) -> Asset:
    fields.setdefault("id", "a1")
    fields.setdefault("current_value", Decimal("1000"))
    return Asset(**fields)


class TestClassificationRules:
    """The three classification outcomes."""

    def test_not_separate_is_community(self, pa_info):
        item = PropertyClassifier(pa_info).classify(make_asset())

        assert item.kind is ReasoningKind.COMMUNITY_RULE_APPLIED
        assert item.is_community
        assert item.owner is None

    def test_malformed_flag_is_community(self, pa_info):
        item = PropertyClassifier(pa_info).classify(make_asset(is_separate_property="perhaps"))
        assert item.kind is ReasoningKind.COMMUNITY_RULE_APPLIED

    def test_separate_with_owner(self, pa_info):
        item = PropertyClassifier(pa_info).classify(
            make_asset(is_separate_property=True, owned_by="spouse2")
        )

        assert item.kind is ReasoningKind.SEPARATE_PROPERTY
        assert item.owner is Spouse.SPOUSE2
        assert item.warnings == ()

    @pytest.mark.parametrize("code", ["AZ", "CA", "ID", "WA"])
    def test_qcp_in_qcp_state(self, code):
        info = PersonalInfo(jurisdiction=code)
        item = PropertyClassifier(info).classify(
            make_asset(
                is_separate_property=True,
                is_quasi_community_property=True,
                owned_by="spouse1",
            )
        )

        assert item.kind is ReasoningKind.QCP_APPLIED
        assert item.is_community
        assert "QCP rules applied" in item.reasoning(0.5).render()

    @pytest.mark.parametrize("code", ["LA", "TX", "PA", "NY"])
    def test_qcp_flag_ignored_elsewhere(self, code):
        info = PersonalInfo(jurisdiction=code)
        item = PropertyClassifier(info).classify(
            make_asset(
                is_separate_property=True,
                is_quasi_community_property=True,
                owned_by="spouse1",
            )
        )

        assert item.kind is ReasoningKind.SEPARATE_PROPERTY
        assert item.owner is Spouse.SPOUSE1
        assert any("quasi-community" in w for w in item.warnings)

    def test_debts_classified_like_assets(self, ca_info):
        debt = Debt(
            id="loan",
            current_balance=Decimal("8000"),
            is_separate_property=True,
            owned_by="spouse2",
        )
        item = PropertyClassifier(ca_info).classify(debt)

        assert item.is_debt
        assert item.value == Decimal("8000")
        assert item.reasoning().render().startswith("Separate debt of Spouse 2")


class TestDefaultOwner:
    """Separate items without a sole owner."""

    @pytest.mark.parametrize("owned_by", [None, "joint", "the bank"])
    def test_defaults_to_spouse1(self, pa_info, owned_by):
        item = PropertyClassifier(pa_info).classify(
            make_asset(is_separate_property=True, owned_by=owned_by)
        )

        assert item.owner is Spouse.SPOUSE1
        assert any("assigned to Spouse 1 by default" in w for w in item.warnings)

    def test_default_is_configurable(self, pa_info):
        item = PropertyClassifier(pa_info, default_separate_owner=Spouse.SPOUSE2).classify(
            make_asset(is_separate_property=True)
        )

        assert item.owner is Spouse.SPOUSE2
        assert item.reasoning().render().startswith("Separate property of Spouse 2")


class TestReviewWarnings:
    """Inconsistent dates are flagged, never rejected."""

    def test_marital_item_before_marriage(self, pa_info):
        item = PropertyClassifier(pa_info).classify(
            make_asset(acquisition_date=date(2010, 5, 1))
        )

        assert item.kind is ReasoningKind.COMMUNITY_RULE_APPLIED
        assert len(item.warnings) == 1
        assert "predates the marriage" in item.warnings[0]

    def test_marital_item_after_separation(self, pa_info):
        item = PropertyClassifier(pa_info).classify(
            make_asset(acquisition_date=date(2024, 6, 1))
        )
        assert "postdates the separation" in item.warnings[0]

    def test_item_during_marriage(self, pa_info):
        item = PropertyClassifier(pa_info).classify(
            make_asset(acquisition_date=date(2018, 6, 1))
        )
        assert item.warnings == ()

    def test_separate_item_dates_not_checked(self, pa_info):
        item = PropertyClassifier(pa_info).classify(
            make_asset(
                is_separate_property=True,
                owned_by="spouse1",
                acquisition_date=date(2010, 5, 1),
            )
        )
        assert item.warnings == ()


class TestClassifyItems:
    """Batch classification."""

    def test_preserves_order_and_inputs(self, ca_info, house, car, mortgage):
        items = [house, car, mortgage]
        classified = classify_items(ca_info, items)

        assert [c.item for c in classified] == items
        assert [c.is_debt for c in classified] == [False, False, True]

    def test_titled_to(self, ca_info, house, car):
        house_item, car_item = classify_items(ca_info, [house, car])

        assert house_item.titled_to is None
        assert car_item.titled_to is Spouse.SPOUSE2
