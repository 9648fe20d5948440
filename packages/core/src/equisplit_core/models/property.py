"""Input data models for property division.

This module implements the caller-supplied records the engine works on:
- Jurisdiction and property regime enumerations
- Personal/marriage information
- Assets, debts and financial accounts

Input models are immutable. The engine never mutates them; it produces
separate division records (see ``models.division``).
"""

from datetime import date
from decimal import Decimal, InvalidOperation, ROUND_HALF_UP
from enum import Enum
from typing import Any, Optional

from pydantic import BaseModel, Field, field_validator


# =============================================================================
# ENUMERATIONS
# =============================================================================

class Jurisdiction(str, Enum):
    """U.S. state and District of Columbia codes."""
    AL = "AL"
    AK = "AK"
    AZ = "AZ"
    AR = "AR"
    CA = "CA"
    CO = "CO"
    CT = "CT"
    DE = "DE"
    FL = "FL"
    GA = "GA"
    HI = "HI"
    ID = "ID"
    IL = "IL"
    IN = "IN"
    IA = "IA"
    KS = "KS"
    KY = "KY"
    LA = "LA"
    ME = "ME"
    MD = "MD"
    MA = "MA"
    MI = "MI"
    MN = "MN"
    MS = "MS"
    MO = "MO"
    MT = "MT"
    NE = "NE"
    NV = "NV"
    NH = "NH"
    NJ = "NJ"
    NM = "NM"
    NY = "NY"
    NC = "NC"
    ND = "ND"
    OH = "OH"
    OK = "OK"
    OR = "OR"
    PA = "PA"
    RI = "RI"
    SC = "SC"
    SD = "SD"
    TN = "TN"
    TX = "TX"
    UT = "UT"
    VT = "VT"
    VA = "VA"
    WA = "WA"
    WV = "WV"
    WI = "WI"
    WY = "WY"
    DC = "DC"


class PropertyRegime(str, Enum):
    """Marital property regime of a jurisdiction."""
    COMMUNITY = "community"
    EQUITABLE = "equitable"


class Spouse(str, Enum):
    """One of the two parties."""
    SPOUSE1 = "spouse1"
    SPOUSE2 = "spouse2"

    @property
    def label(self) -> str:
        """Display label used in reasoning text ("Spouse 1")."""
        return "Spouse 1" if self is Spouse.SPOUSE1 else "Spouse 2"

    @property
    def other(self) -> "Spouse":
        return Spouse.SPOUSE2 if self is Spouse.SPOUSE1 else Spouse.SPOUSE1


class Ownership(str, Enum):
    """Title/ownership of an item as reported by the caller."""
    JOINT = "joint"
    SPOUSE1 = "spouse1"
    SPOUSE2 = "spouse2"

    @property
    def spouse(self) -> Optional[Spouse]:
        """The single owning spouse, or None for joint ownership."""
        if self is Ownership.SPOUSE1:
            return Spouse.SPOUSE1
        if self is Ownership.SPOUSE2:
            return Spouse.SPOUSE2
        return None


class AssetType(str, Enum):
    """Types of marital or separate assets."""
    REAL_ESTATE = "real_estate"
    VEHICLE = "vehicle"
    BANK_ACCOUNT = "bank_account"
    INVESTMENT_ACCOUNT = "investment_account"
    RETIREMENT_ACCOUNT = "retirement_account"
    BUSINESS_INTEREST = "business_interest"
    PERSONAL_PROPERTY = "personal_property"
    CRYPTOCURRENCY = "cryptocurrency"
    INSURANCE = "insurance"
    INHERITANCE = "inheritance"
    OTHER = "other"


class DebtType(str, Enum):
    """Types of debts and liabilities."""
    MORTGAGE = "mortgage"
    VEHICLE_LOAN = "vehicle_loan"
    CREDIT_CARD = "credit_card"
    STUDENT_LOAN = "student_loan"
    BUSINESS_DEBT = "business_debt"
    PERSONAL_LOAN = "personal_loan"
    MEDICAL = "medical"
    TAX = "tax"
    OTHER = "other"


CENT = Decimal("0.01")

# Largest accepted amount; keeps every cent-rounded sum within decimal precision
MAX_AMOUNT = Decimal("1000000000000000")

# Asset types whose value is an estimate rather than a statement balance
HARD_TO_VALUE_ASSET_TYPES = frozenset({
    AssetType.BUSINESS_INTEREST,
    AssetType.CRYPTOCURRENCY,
})


# =============================================================================
# HELPER FUNCTIONS
# =============================================================================

_TRUTHY = {"true", "yes", "y", "1"}


def coerce_flag(value: Any) -> bool:
    """Coerce a loosely-typed flag to bool.

    Anything that is not clearly "true" is False, so an absent or malformed
    separate-property flag classifies the item as marital.
    """
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return value == 1
    if isinstance(value, str):
        return value.strip().lower() in _TRUTHY
    return False


def quantize_cents(value: Optional[Decimal]) -> Optional[Decimal]:
    """Round a money amount to cents, half-up."""
    if value is None:
        return None
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def coerce_ownership(value: Any) -> Optional[Ownership]:
    """Coerce an ``owned_by`` value, dropping anything unrecognised."""
    if isinstance(value, Ownership):
        return value
    if isinstance(value, str):
        try:
            return Ownership(value.strip().lower())
        except ValueError:
            return None
    return None


# =============================================================================
# PERSONAL INFORMATION
# =============================================================================

class PersonalInfo(BaseModel):
    """Marriage and jurisdiction details for one calculation."""

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "jurisdiction": "PA",
                    "marriage_date": "2014-01-01",
                    "separation_date": "2024-01-01",
                    "spouse1_name": "John",
                    "spouse2_name": "Jane",
                }
            ]
        },
    }

    jurisdiction: Jurisdiction = Field(
        description="State (or DC) whose property law governs the division"
    )
    marriage_date: Optional[date] = Field(default=None, description="Date of marriage")
    separation_date: Optional[date] = Field(
        default=None,
        description="Date of separation; must not precede the marriage date",
    )
    spouse1_name: Optional[str] = None
    spouse2_name: Optional[str] = None
    has_prenup: bool = False

    @field_validator("jurisdiction", mode="before")
    @classmethod
    def normalize_jurisdiction(cls, v):
        """Accept lower-case or padded state codes."""
        if isinstance(v, str):
            return v.strip().upper()
        return v

    @field_validator("separation_date")
    @classmethod
    def separation_after_marriage(cls, v, info):
        """Validate that separation_date is not before marriage_date."""
        marriage = info.data.get("marriage_date")
        if v is not None and marriage is not None and v < marriage:
            raise ValueError("separation_date must be on or after marriage_date")
        return v

    @property
    def marriage_duration_years(self) -> Optional[Decimal]:
        """Years between marriage and separation, when both dates are known."""
        if self.marriage_date is None or self.separation_date is None:
            return None
        days = (self.separation_date - self.marriage_date).days
        return (Decimal(days) / Decimal("365.25")).quantize(Decimal("0.01"))


# =============================================================================
# ASSETS AND DEBTS
# =============================================================================

class _DivisibleItem(BaseModel):
    """Fields shared by assets, debts and financial accounts."""

    model_config = {"frozen": True}

    id: str = Field(description="Caller-assigned identifier")
    description: str = Field(default="", description="Human-readable description")
    acquisition_date: Optional[date] = Field(
        default=None,
        description="Date the item was acquired or the debt incurred",
    )
    is_separate_property: bool = Field(
        default=False,
        description="Caller's claim that the item is separate (non-marital)",
    )
    owned_by: Optional[Ownership] = Field(
        default=None,
        description="Title holder: joint, spouse1 or spouse2",
    )
    is_quasi_community_property: bool = Field(
        default=False,
        description="Acquired while domiciled outside a community-property state",
    )
    notes: Optional[str] = None

    @field_validator("is_separate_property", "is_quasi_community_property", mode="before")
    @classmethod
    def coerce_flags(cls, v):
        """Malformed flags fall back to False (marital)."""
        return coerce_flag(v)

    @field_validator("owned_by", mode="before")
    @classmethod
    def coerce_owner(cls, v):
        """Unrecognised owners are treated as unspecified."""
        return coerce_ownership(v)


class Asset(_DivisibleItem):
    """An asset to be classified and divided."""

    model_config = {
        "frozen": True,
        "json_schema_extra": {
            "examples": [
                {
                    "id": "house-1",
                    "description": "Family home",
                    "type": "real_estate",
                    "current_value": "500000.00",
                    "is_separate_property": False,
                    "owned_by": "joint",
                }
            ]
        },
    }

    type: AssetType = AssetType.OTHER
    current_value: Decimal = Field(ge=0, le=MAX_AMOUNT, description="Current fair market value")
    acquisition_value: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)

    @field_validator("current_value", "acquisition_value")
    @classmethod
    def round_to_cents(cls, v):
        return quantize_cents(v)


class Debt(_DivisibleItem):
    """A debt to be classified and divided.

    Balances are magnitudes owed; a negative balance is coerced to its
    absolute value.
    """

    type: DebtType = DebtType.OTHER
    creditor_name: Optional[str] = None
    current_balance: Decimal = Field(ge=0, le=MAX_AMOUNT, description="Current balance owed")
    original_amount: Optional[Decimal] = Field(default=None, ge=0, le=MAX_AMOUNT)

    @field_validator("current_balance", mode="before")
    @classmethod
    def coerce_balance_magnitude(cls, v):
        """Coerce negative balances to their magnitude."""
        if isinstance(v, str):
            try:
                v = Decimal(v.strip())
            except InvalidOperation:
                return v
        if isinstance(v, Decimal) and not v.is_finite():
            # Rejected by the field's finite-number check
            return v
        if isinstance(v, (int, float, Decimal)) and not isinstance(v, bool):
            return abs(v)
        return v

    @field_validator("current_balance", "original_amount")
    @classmethod
    def round_to_cents(cls, v):
        return quantize_cents(v)


class FinancialAccount(_DivisibleItem):
    """A bank, investment or retirement account record."""

    institution_name: str = ""
    account_type: AssetType = AssetType.BANK_ACCOUNT
    account_number_last_four: Optional[str] = None
    balance: Decimal = Field(ge=0, le=MAX_AMOUNT, description="Current account balance")

    @field_validator("balance")
    @classmethod
    def round_to_cents(cls, v):
        return quantize_cents(v)

    def to_asset(self) -> Asset:
        """Represent this account as a divisible asset."""
        description = self.description or " ".join(
            part for part in (self.institution_name, self._type_label()) if part
        )
        if self.account_number_last_four:
            description = f"{description} ****{self.account_number_last_four}"
        return Asset(
            id=self.id,
            description=description,
            type=self.account_type,
            current_value=self.balance,
            acquisition_date=self.acquisition_date,
            is_separate_property=self.is_separate_property,
            owned_by=self.owned_by,
            is_quasi_community_property=self.is_quasi_community_property,
            notes=self.notes,
        )

    def _type_label(self) -> str:
        return self.account_type.value.replace("_", " ")
