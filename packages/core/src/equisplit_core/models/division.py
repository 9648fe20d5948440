"""Result models for property division.

Every divided line item carries a structured ``Reasoning`` tag. The text
rendered from it is read by downstream summarisation, which matches on the
phrases "Community property", "Community debt", "QCP rules applied",
"Separate property of Spouse N" and "Separate debt of Spouse N". Those
phrases are produced in one place, ``Reasoning.render``.
"""

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, computed_field, model_validator

from .property import Jurisdiction, PropertyRegime, Spouse


# =============================================================================
# REASONING
# =============================================================================

class ReasoningKind(str, Enum):
    """Closed set of classification outcomes."""
    COMMUNITY_RULE_APPLIED = "community_rule_applied"
    QCP_APPLIED = "qcp_applied"
    SEPARATE_PROPERTY = "separate_property"


ItemKind = Literal["asset", "debt"]


def _percent(ratio: float) -> int:
    return int((Decimal(str(ratio)) * 100).to_integral_value())


class Reasoning(BaseModel):
    """Why an item was divided the way it was."""

    model_config = {"frozen": True}

    kind: ReasoningKind
    item_kind: ItemKind = "asset"
    owner: Optional[Spouse] = Field(
        default=None, description="Owner of a separate item"
    )
    spouse1_ratio: Optional[float] = Field(
        default=None, ge=0, le=1, description="Ratio applied to a community item"
    )

    @property
    def is_community(self) -> bool:
        """Community and quasi-community items are both divided."""
        return self.kind is not ReasoningKind.SEPARATE_PROPERTY

    def render(self) -> str:
        """Render the reasoning text for display and keyword matching."""
        if self.kind is ReasoningKind.SEPARATE_PROPERTY:
            owner = (self.owner or Spouse.SPOUSE1).label
            if self.item_kind == "debt":
                return f"Separate debt of {owner} — assigned in full"
            return f"Separate property of {owner} — retained in full"

        ratio = 0.5 if self.spouse1_ratio is None else self.spouse1_ratio
        p1 = _percent(ratio)
        split = f"({p1}%/{100 - p1}%)"
        if self.kind is ReasoningKind.QCP_APPLIED:
            if self.item_kind == "debt":
                return f"Community debt (quasi-community) — QCP rules applied, divided per state rule {split}"
            return f"Quasi-community property — QCP rules applied, divided as community property {split}"
        if self.item_kind == "debt":
            return f"Community debt — divided per state rule {split}"
        return f"Community property — divided per state rule {split}"


# =============================================================================
# LINE ITEM DIVISIONS
# =============================================================================

class AssetDivision(BaseModel):
    """Allocation of a single asset between the spouses."""

    model_config = {"frozen": True}

    asset_id: str
    description: str
    total_value: Decimal
    spouse1_share: Decimal = Field(description="Dollar amount awarded to spouse 1")
    spouse2_share: Decimal = Field(description="Dollar amount awarded to spouse 2")
    classification: Reasoning

    @computed_field
    @property
    def reasoning(self) -> str:
        """Rendered classification reasoning."""
        return self.classification.render()

    @model_validator(mode="after")
    def shares_sum_to_total(self) -> "AssetDivision":
        """Shares must add back to the item's value."""
        if self.spouse1_share + self.spouse2_share != self.total_value:
            raise ValueError("spouse shares must sum to total_value")
        return self

    def share_of(self, spouse: Spouse) -> Decimal:
        return self.spouse1_share if spouse is Spouse.SPOUSE1 else self.spouse2_share


class DebtDivision(BaseModel):
    """Allocation of responsibility for a single debt."""

    model_config = {"frozen": True}

    debt_id: str
    description: str
    total_balance: Decimal
    spouse1_share: Decimal = Field(description="Dollar amount owed by spouse 1")
    spouse2_share: Decimal = Field(description="Dollar amount owed by spouse 2")
    classification: Reasoning

    @computed_field
    @property
    def reasoning(self) -> str:
        """Rendered classification reasoning."""
        return self.classification.render()

    @model_validator(mode="after")
    def shares_sum_to_total(self) -> "DebtDivision":
        """Shares must add back to the balance."""
        if self.spouse1_share + self.spouse2_share != self.total_balance:
            raise ValueError("spouse shares must sum to total_balance")
        return self

    def share_of(self, spouse: Spouse) -> Decimal:
        return self.spouse1_share if spouse is Spouse.SPOUSE1 else self.spouse2_share


# =============================================================================
# SCORING AND AUDIT
# =============================================================================

class FactorAdjustment(BaseModel):
    """One equity factor that moved the split ratio."""

    model_config = {"frozen": True}

    factor: str
    delta: Decimal
    description: str


class EquityScore(BaseModel):
    """Itemised result of the equity factor scorer."""

    model_config = {"frozen": True}

    baseline: Decimal = Decimal("0.5")
    raw_score: Decimal = Field(description="Score before clamping")
    score: Decimal = Field(ge=Decimal("0.3"), le=Decimal("0.7"))
    adjustments: list[FactorAdjustment] = Field(default_factory=list)

    @property
    def clamped(self) -> bool:
        return self.raw_score != self.score

    @property
    def spouse1_share(self) -> float:
        return float(self.score)

    @property
    def spouse2_share(self) -> float:
        return float(Decimal("1") - self.score)


class AuditEntry(BaseModel):
    """Audit log entry for calculation transparency."""

    model_config = {"frozen": True}

    step: str
    input_value: str
    output_value: str
    source: str
    notes: Optional[str] = None


# =============================================================================
# DIVISION RESULT
# =============================================================================

class DivisionSummary(BaseModel):
    """Estate totals carried through the allocator."""

    model_config = {"frozen": True}

    total_community_assets: Decimal
    total_community_debts: Decimal
    net_community_estate: Decimal
    spouse1_share_of_net_community: Decimal
    spouse2_share_of_net_community: Decimal
    spouse1_net_separate_estate: Decimal
    spouse2_net_separate_estate: Decimal
    total_net_awarded_spouse1: Decimal = Field(
        description="Net award to spouse 1 after any equalization payment"
    )
    total_net_awarded_spouse2: Decimal = Field(
        description="Net award to spouse 2 after any equalization payment"
    )
    equalization_payment: Optional[Decimal] = None
    payment_from: Optional[Spouse] = None
    payment_to: Optional[Spouse] = None


class PropertyDivision(BaseModel):
    """Complete property division result."""

    model_config = {"frozen": True}

    jurisdiction: Jurisdiction
    distribution_type: PropertyRegime

    # Items each spouse holds an interest in
    spouse1_assets: list[AssetDivision] = Field(default_factory=list)
    spouse2_assets: list[AssetDivision] = Field(default_factory=list)
    spouse1_debts: list[DebtDivision] = Field(default_factory=list)
    spouse2_debts: list[DebtDivision] = Field(default_factory=list)

    # Every item, in input order
    asset_divisions: list[AssetDivision] = Field(default_factory=list)
    debt_divisions: list[DebtDivision] = Field(default_factory=list)

    # Net dollar totals each spouse actually holds, before equalization
    total_spouse1_value: Decimal
    total_spouse2_value: Decimal

    # Target ratio of the net marital estate
    spouse1_share: float = Field(ge=0, le=1)
    spouse2_share: float = Field(ge=0, le=1)

    total_marital_assets: Decimal
    total_marital_debts: Decimal
    total_separate_assets: Decimal
    total_separate_debts: Decimal

    equalization_payment: Optional[Decimal] = None
    payment_from: Optional[Spouse] = None

    summary: DivisionSummary
    equity_adjustments: list[FactorAdjustment] = Field(default_factory=list)

    confidence_level: float = Field(ge=0, le=1)
    audit_log: list[AuditEntry] = Field(default_factory=list)
    warnings: list[str] = Field(default_factory=list)
    methodology_version: str

    @property
    def net_marital_estate(self) -> Decimal:
        return self.total_marital_assets - self.total_marital_debts
