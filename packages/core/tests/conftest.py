"""Shared fixtures for equisplit-core tests."""

from datetime import date
from decimal import Decimal

import pytest

from equisplit_core.config import EquiSplitSettings
from equisplit_core.models import (
    Asset,
    AssetType,
    Debt,
    DebtType,
    EquitableDistributionFactors,
    HealthStatus,
    PersonalInfo,
)


@pytest.fixture
def settings() -> EquiSplitSettings:
    """Default settings, independent of the environment and any .env file."""
    return EquiSplitSettings(_env_file=None, env="test")


@pytest.fixture
def neutral_factors() -> EquitableDistributionFactors:
    """Factor bundle with no disparity of any kind."""
    return EquitableDistributionFactors(
        marriage_duration=Decimal("10"),
        age_spouse1=40,
        age_spouse2=40,
        health_spouse1=HealthStatus.GOOD,
        health_spouse2=HealthStatus.GOOD,
        income_spouse1=Decimal("50000"),
        income_spouse2=Decimal("50000"),
        earn_capacity_spouse1=Decimal("50000"),
        earn_capacity_spouse2=Decimal("50000"),
        contribution_to_marriage="Equal contributions",
    )


@pytest.fixture
def pa_info() -> PersonalInfo:
    return PersonalInfo(
        jurisdiction="PA",
        marriage_date=date(2014, 1, 1),
        separation_date=date(2024, 1, 1),
        spouse1_name="John",
        spouse2_name="Jane",
    )


@pytest.fixture
def ca_info() -> PersonalInfo:
    return PersonalInfo(
        jurisdiction="CA",
        marriage_date=date(2010, 6, 15),
        separation_date=date(2023, 6, 15),
    )


@pytest.fixture
def house() -> Asset:
    return Asset(
        id="house",
        description="Family home",
        type=AssetType.REAL_ESTATE,
        current_value=Decimal("500000"),
        acquisition_date=date(2015, 3, 1),
        owned_by="joint",
    )


@pytest.fixture
def car() -> Asset:
    return Asset(
        id="car",
        description="Sedan",
        type=AssetType.VEHICLE,
        current_value=Decimal("30000"),
        acquisition_date=date(2019, 8, 1),
        owned_by="spouse2",
    )


@pytest.fixture
def mortgage() -> Debt:
    return Debt(
        id="mortgage",
        description="Home mortgage",
        type=DebtType.MORTGAGE,
        creditor_name="First Bank",
        current_balance=Decimal("200000"),
        acquisition_date=date(2015, 3, 1),
        owned_by="joint",
    )
