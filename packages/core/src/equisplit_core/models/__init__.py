"""Data models for equisplit-core.

This package provides the structures exchanged with the engine:
- Caller inputs: personal info, assets, debts, financial accounts (property.py)
- Equitable distribution factor bundles (factors.py)
- Division results, reasoning tags and audit entries (division.py)
"""

from equisplit_core.models.property import (
    # Enumerations
    Jurisdiction,
    PropertyRegime,
    Spouse,
    Ownership,
    AssetType,
    DebtType,
    HARD_TO_VALUE_ASSET_TYPES,
    MAX_AMOUNT,
    # Helper functions
    coerce_flag,
    coerce_ownership,
    quantize_cents,
    # Inputs
    PersonalInfo,
    Asset,
    Debt,
    FinancialAccount,
)

from equisplit_core.models.factors import (
    HealthStatus,
    CustodyArrangement,
    PennsylvaniaFactors,
    JurisdictionFactors,
    EquitableDistributionFactors,
)

from equisplit_core.models.division import (
    ReasoningKind,
    Reasoning,
    AssetDivision,
    DebtDivision,
    FactorAdjustment,
    EquityScore,
    AuditEntry,
    DivisionSummary,
    PropertyDivision,
)

__all__ = [
    # Enumerations
    "Jurisdiction",
    "PropertyRegime",
    "Spouse",
    "Ownership",
    "AssetType",
    "DebtType",
    "HARD_TO_VALUE_ASSET_TYPES",
    "HealthStatus",
    "CustodyArrangement",
    # Helper functions
    "MAX_AMOUNT",
    "coerce_flag",
    "coerce_ownership",
    "quantize_cents",
    # Inputs
    "PersonalInfo",
    "Asset",
    "Debt",
    "FinancialAccount",
    "PennsylvaniaFactors",
    "JurisdictionFactors",
    "EquitableDistributionFactors",
    # Results
    "ReasoningKind",
    "Reasoning",
    "AssetDivision",
    "DebtDivision",
    "FactorAdjustment",
    "EquityScore",
    "AuditEntry",
    "DivisionSummary",
    "PropertyDivision",
]
