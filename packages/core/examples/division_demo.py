#!/usr/bin/env python3
"""
Property Division Demonstration

This script demonstrates the complete division workflow:
1. Create case data models
2. Divide the same estate under community property (California)
   and equitable distribution (Pennsylvania) rules
3. Print the itemised allocation and audit trail

Run: python packages/core/examples/division_demo.py
"""

from datetime import date
from decimal import Decimal

from equisplit_core import (
    Asset,
    Debt,
    EquitableDistributionFactors,
    FinancialAccount,
    Jurisdiction,
    PennsylvaniaFactors,
    PersonalInfo,
    PropertyDivision,
    classify_and_divide,
)
from equisplit_core.config import get_settings
from equisplit_core.logging_config import configure_logging
from equisplit_core.models import AssetType, CustodyArrangement, DebtType


def create_sample_estate() -> tuple[list[Asset], list[Debt], list[FinancialAccount]]:
    """Create a sample marital estate with realistic data."""
    assets = [
        Asset(
            id="home",
            description="Family home",
            type=AssetType.REAL_ESTATE,
            current_value=Decimal("520000"),
            acquisition_date=date(2013, 4, 1),
            owned_by="spouse1",
        ),
        Asset(
            id="car",
            description="2021 SUV",
            type=AssetType.VEHICLE,
            current_value=Decimal("28000"),
            acquisition_date=date(2021, 2, 10),
            owned_by="spouse2",
        ),
        Asset(
            id="inheritance",
            description="Inherited bonds",
            type=AssetType.INHERITANCE,
            current_value=Decimal("75000"),
            is_separate_property=True,
            owned_by="spouse2",
        ),
        Asset(
            id="pension",
            description="Pension earned in New York",
            type=AssetType.RETIREMENT_ACCOUNT,
            current_value=Decimal("64000"),
            is_separate_property=True,
            is_quasi_community_property=True,
            owned_by="spouse1",
        ),
    ]
    debts = [
        Debt(
            id="mortgage",
            description="Home mortgage",
            type=DebtType.MORTGAGE,
            creditor_name="First National",
            current_balance=Decimal("310000"),
            acquisition_date=date(2013, 4, 1),
            owned_by="joint",
        ),
        Debt(
            id="student-loan",
            description="Graduate school loan",
            type=DebtType.STUDENT_LOAN,
            current_balance=Decimal("18000"),
            is_separate_property=True,
            owned_by="spouse1",
        ),
    ]
    accounts = [
        FinancialAccount(
            id="checking",
            institution_name="Harbor Bank",
            account_number_last_four="4410",
            balance=Decimal("15250.50"),
            owned_by="joint",
        ),
    ]
    return assets, debts, accounts


def create_sample_factors() -> EquitableDistributionFactors:
    """Factors for a long marriage where spouse 1 earns less and has custody."""
    return EquitableDistributionFactors(
        age_spouse1=49,
        age_spouse2=52,
        income_spouse1=Decimal("38000"),
        income_spouse2=Decimal("121000"),
        earn_capacity_spouse1=Decimal("45000"),
        earn_capacity_spouse2=Decimal("125000"),
        custody_arrangement=CustodyArrangement.SOLE_1,
        jurisdiction_factors=PennsylvaniaFactors(
            contribution_to_education_spouse1=True,
            expense_of_sale_assets=Decimal("31200"),
        ),
    )


def print_division(title: str, result: PropertyDivision) -> None:
    print(title)
    print(f"  - Distribution Type: {result.distribution_type.value}")
    print(f"  - Split: {result.spouse1_share:.0%} / {result.spouse2_share:.0%}")
    for adjustment in result.equity_adjustments:
        print(f"      {adjustment.delta:+} {adjustment.description}")
    print(f"  - Marital Assets: ${result.total_marital_assets:,.2f}")
    print(f"  - Marital Debts: ${result.total_marital_debts:,.2f}")
    print(f"  - Separate Assets: ${result.total_separate_assets:,.2f}")
    print()
    for division in result.asset_divisions:
        print(
            f"    {division.description:<32} ${division.spouse1_share:>12,.2f} "
            f"${division.spouse2_share:>12,.2f}  {division.reasoning}"
        )
    for division in result.debt_divisions:
        print(
            f"    {division.description:<32} ${division.spouse1_share:>12,.2f} "
            f"${division.spouse2_share:>12,.2f}  {division.reasoning}"
        )
    print()
    if result.equalization_payment is not None:
        summary = result.summary
        print(
            f"  - Equalization: {summary.payment_from.label} pays "
            f"{summary.payment_to.label} ${result.equalization_payment:,.2f}"
        )
    print(f"  - Net to Spouse 1: ${result.summary.total_net_awarded_spouse1:,.2f}")
    print(f"  - Net to Spouse 2: ${result.summary.total_net_awarded_spouse2:,.2f}")
    print(f"  - Confidence Level: {result.confidence_level:.0%}")
    for warning in result.warnings:
        print(f"  ! {warning}")
    print()


def main():
    """Run the property division demonstration."""
    settings = get_settings()
    configure_logging("WARNING", json_output=settings.log_json)

    print("=" * 70)
    print("EQUISPLIT CORE - Property Division Demo")
    print("=" * 70)
    print()

    # Step 1: Create sample data
    print("Step 1: Creating sample estate...")
    assets, debts, accounts = create_sample_estate()
    factors = create_sample_factors()
    print(f"  - Assets: {len(assets)}, Debts: {len(debts)}, Accounts: {len(accounts)}")
    print()

    # Step 2: Community property
    california = PersonalInfo(
        jurisdiction="CA",
        marriage_date=date(2001, 9, 8),
        separation_date=date(2024, 3, 1),
    )
    result = classify_and_divide(
        california, assets, debts, factors,
        financial_accounts=accounts, settings=settings,
    )
    print_division("Step 2: California (community property)", result)

    # Step 3: Equitable distribution
    pennsylvania = california.model_copy(update={"jurisdiction": Jurisdiction.PA})
    result = classify_and_divide(
        pennsylvania, assets, debts, factors,
        financial_accounts=accounts, settings=settings,
    )
    print_division("Step 3: Pennsylvania (equitable distribution)", result)

    print("Audit trail:")
    for entry in result.audit_log:
        print(f"  {entry.step:<36} {entry.output_value}")

    print()
    print("=" * 70)
    print("Demo complete!")
    print("=" * 70)


if __name__ == "__main__":
    main()
