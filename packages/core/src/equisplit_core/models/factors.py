"""Equitable distribution factor models.

The factor bundle is split into a base record that every equitable
jurisdiction uses and an optional jurisdiction-tagged extension carrying the
statutory extras of one state. Pennsylvania (23 Pa.C.S. 3502) is currently
the only extension.

Numeric fields are optional. An absent value is neutral: the rule that
would read it does not fire, so the scorer never divides by a missing
number.
"""

from decimal import Decimal
from enum import Enum
from typing import Literal, Optional

from pydantic import BaseModel, Field, field_validator


class HealthStatus(str, Enum):
    """Self-reported health of a spouse."""
    EXCELLENT = "excellent"
    GOOD = "good"
    FAIR = "fair"
    POOR = "poor"


class CustodyArrangement(str, Enum):
    """Custody of the children of the marriage."""
    SOLE_1 = "sole_1"
    SOLE_2 = "sole_2"
    JOINT = "joint"
    NONE = "none"


class PennsylvaniaFactors(BaseModel):
    """Pennsylvania-specific equitable distribution factors.

    Text fields describe a circumstance; only whether one spouse has it and
    the other does not matters to the score.
    """

    model_config = {"frozen": True}

    jurisdiction: Literal["PA"] = "PA"

    prior_marriage_spouse1: bool = False
    prior_marriage_spouse2: bool = False
    # Spouse N contributed to the OTHER spouse's education or training
    contribution_to_education_spouse1: bool = False
    contribution_to_education_spouse2: bool = False
    opportunity_future_acquisitions_spouse1: Optional[str] = None
    opportunity_future_acquisitions_spouse2: Optional[str] = None
    needs_spouse1: Optional[str] = None
    needs_spouse2: Optional[str] = None
    economic_circumstances_spouse1: Optional[str] = None
    economic_circumstances_spouse2: Optional[str] = None
    station_spouse1: Optional[str] = None
    station_spouse2: Optional[str] = None
    other_income_sources_spouse1: Optional[str] = None
    other_income_sources_spouse2: Optional[str] = None
    estate_spouse1: Optional[Decimal] = Field(
        default=None, ge=0, description="Value of spouse 1's separate estate"
    )
    estate_spouse2: Optional[Decimal] = Field(
        default=None, ge=0, description="Value of spouse 2's separate estate"
    )
    expense_of_sale_assets: Optional[Decimal] = Field(
        default=None, ge=0, description="Estimated cost of selling marital assets"
    )

    @field_validator(
        "opportunity_future_acquisitions_spouse1",
        "opportunity_future_acquisitions_spouse2",
        "needs_spouse1",
        "needs_spouse2",
        "economic_circumstances_spouse1",
        "economic_circumstances_spouse2",
        "station_spouse1",
        "station_spouse2",
        "other_income_sources_spouse1",
        "other_income_sources_spouse2",
    )
    @classmethod
    def blank_text_is_absent(cls, v: Optional[str]) -> Optional[str]:
        """Treat whitespace-only descriptions as not provided."""
        if v is None:
            return None
        v = v.strip()
        return v or None


# Union of all jurisdiction extensions, keyed by their ``jurisdiction`` tag.
# Add new states here as additional members.
JurisdictionFactors = PennsylvaniaFactors


class EquitableDistributionFactors(BaseModel):
    """Relationship and economic factors for equitable distribution."""

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "marriage_duration": "10",
                    "age_spouse1": 40,
                    "age_spouse2": 40,
                    "health_spouse1": "good",
                    "health_spouse2": "good",
                    "income_spouse1": "50000",
                    "income_spouse2": "50000",
                    "earn_capacity_spouse1": "50000",
                    "earn_capacity_spouse2": "50000",
                    "custody_arrangement": "none",
                    "domestic_violence": False,
                    "wasting_of_assets": False,
                }
            ]
        },
    }

    marriage_duration: Optional[Decimal] = Field(
        default=None, ge=0, description="Length of the marriage in years"
    )
    age_spouse1: Optional[int] = Field(default=None, ge=0, le=130)
    age_spouse2: Optional[int] = Field(default=None, ge=0, le=130)
    health_spouse1: HealthStatus = HealthStatus.GOOD
    health_spouse2: HealthStatus = HealthStatus.GOOD
    income_spouse1: Optional[Decimal] = Field(default=None, ge=0, description="Annual income")
    income_spouse2: Optional[Decimal] = Field(default=None, ge=0, description="Annual income")
    earn_capacity_spouse1: Optional[Decimal] = Field(default=None, ge=0)
    earn_capacity_spouse2: Optional[Decimal] = Field(default=None, ge=0)
    custody_arrangement: CustodyArrangement = CustodyArrangement.NONE
    domestic_violence: bool = False
    wasting_of_assets: bool = False

    # Informational only, not scored
    tax_consequences: bool = False
    contribution_to_marriage: Optional[str] = None

    jurisdiction_factors: Optional[JurisdictionFactors] = Field(
        default=None,
        description="Extra statutory factors of the governing jurisdiction",
    )

    @field_validator("custody_arrangement", mode="before")
    @classmethod
    def default_custody(cls, v):
        """A missing custody arrangement means no custody factor."""
        if v is None:
            return CustodyArrangement.NONE
        if v == "shared":
            return CustodyArrangement.JOINT
        return v

    @property
    def reported_zero_income(self) -> bool:
        """True when both incomes were reported and both are zero."""
        return (
            self.income_spouse1 is not None
            and self.income_spouse2 is not None
            and self.income_spouse1 == 0
            and self.income_spouse2 == 0
        )

    @property
    def has_reported_income(self) -> bool:
        """True when at least one spouse reported a non-zero income."""
        return bool(self.income_spouse1) or bool(self.income_spouse2)
