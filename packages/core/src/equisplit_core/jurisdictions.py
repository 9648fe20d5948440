"""Marital property rules for the 50 U.S. states and the District of Columbia.

This module contains the static registry the engine consults to decide how
property is divided in a jurisdiction:
- Property regime (community property or equitable distribution)
- Quasi-community property (QCP) recognition
- Statutory equitable distribution factors, where enumerated
- Informational special rules

Sources:
- Community property states: IRS Publication 555
- Pennsylvania factors: 23 Pa.C.S. § 3502(a)

The registry is read-only module data and safe to share between threads.
"""

from dataclasses import dataclass
from typing import Union

from .exceptions import UnknownJurisdictionError
from .models import Jurisdiction, PropertyRegime


# =============================================================================
# VERSION TRACKING
# =============================================================================

METHODOLOGY_VERSION = "equisplit-core-1.0"


def get_methodology_version() -> str:
    """Return current methodology version."""
    return METHODOLOGY_VERSION


@dataclass(frozen=True)
class JurisdictionInfo:
    """Property law summary for one jurisdiction."""
    code: Jurisdiction
    name: str
    regime: PropertyRegime
    supports_qcp: bool = False
    statutory_factors: tuple[str, ...] = ()
    special_rules: tuple[str, ...] = ()

    @property
    def is_community_property(self) -> bool:
        return self.regime is PropertyRegime.COMMUNITY


# =============================================================================
# COMMUNITY PROPERTY JURISDICTIONS
# =============================================================================

COMMUNITY_PROPERTY_STATES = frozenset({
    Jurisdiction.AZ,
    Jurisdiction.CA,
    Jurisdiction.ID,
    Jurisdiction.LA,
    Jurisdiction.NV,
    Jurisdiction.NM,
    Jurisdiction.TX,
    Jurisdiction.WA,
    Jurisdiction.WI,
})

# Louisiana is community property but its civil-law separate property rules
# have no quasi-community counterpart.
QCP_STATES = frozenset({
    Jurisdiction.AZ,
    Jurisdiction.CA,
    Jurisdiction.ID,
    Jurisdiction.WA,
})


# =============================================================================
# STATUTORY FACTORS
# =============================================================================

PENNSYLVANIA_FACTORS = (
    "Length of the marriage",
    "Prior marriage of either party",
    "Age, health, station, amount and sources of income",
    "Vocational skills, employability, estate, liabilities and needs",
    "Contribution by one party to education, training or increased earning power",
    "Opportunity for future acquisitions of capital assets and income",
    "Sources of income including medical, retirement, insurance or other benefits",
    "Contribution or dissipation of assets",
    "Value of property set apart to each party",
    "Standard of living established during marriage",
    "Economic circumstances at time of divorce",
    "Tax ramifications",
    "Expense of sale",
)


# =============================================================================
# REGISTRY
# =============================================================================

_NAMES = {
    Jurisdiction.AL: "Alabama",
    Jurisdiction.AK: "Alaska",
    Jurisdiction.AZ: "Arizona",
    Jurisdiction.AR: "Arkansas",
    Jurisdiction.CA: "California",
    Jurisdiction.CO: "Colorado",
    Jurisdiction.CT: "Connecticut",
    Jurisdiction.DE: "Delaware",
    Jurisdiction.FL: "Florida",
    Jurisdiction.GA: "Georgia",
    Jurisdiction.HI: "Hawaii",
    Jurisdiction.ID: "Idaho",
    Jurisdiction.IL: "Illinois",
    Jurisdiction.IN: "Indiana",
    Jurisdiction.IA: "Iowa",
    Jurisdiction.KS: "Kansas",
    Jurisdiction.KY: "Kentucky",
    Jurisdiction.LA: "Louisiana",
    Jurisdiction.ME: "Maine",
    Jurisdiction.MD: "Maryland",
    Jurisdiction.MA: "Massachusetts",
    Jurisdiction.MI: "Michigan",
    Jurisdiction.MN: "Minnesota",
    Jurisdiction.MS: "Mississippi",
    Jurisdiction.MO: "Missouri",
    Jurisdiction.MT: "Montana",
    Jurisdiction.NE: "Nebraska",
    Jurisdiction.NV: "Nevada",
    Jurisdiction.NH: "New Hampshire",
    Jurisdiction.NJ: "New Jersey",
    Jurisdiction.NM: "New Mexico",
    Jurisdiction.NY: "New York",
    Jurisdiction.NC: "North Carolina",
    Jurisdiction.ND: "North Dakota",
    Jurisdiction.OH: "Ohio",
    Jurisdiction.OK: "Oklahoma",
    Jurisdiction.OR: "Oregon",
    Jurisdiction.PA: "Pennsylvania",
    Jurisdiction.RI: "Rhode Island",
    Jurisdiction.SC: "South Carolina",
    Jurisdiction.SD: "South Dakota",
    Jurisdiction.TN: "Tennessee",
    Jurisdiction.TX: "Texas",
    Jurisdiction.UT: "Utah",
    Jurisdiction.VT: "Vermont",
    Jurisdiction.VA: "Virginia",
    Jurisdiction.WA: "Washington",
    Jurisdiction.WV: "West Virginia",
    Jurisdiction.WI: "Wisconsin",
    Jurisdiction.WY: "Wyoming",
    Jurisdiction.DC: "District of Columbia",
}

_SPECIAL_RULES = {
    Jurisdiction.AZ: ("Quasi-community property rules apply to out-of-state assets",),
    Jurisdiction.CA: (
        "Income from separate property remains separate",
        "Putative spouse doctrine applies",
        "Strict 50/50 division unless agreement",
    ),
    Jurisdiction.ID: ("Community property with right of survivorship available",),
    Jurisdiction.LA: (
        "Civil law system with unique property concepts",
        "Separate property includes gifts and inheritances",
    ),
    Jurisdiction.NV: ("Allows for unequal division in cases of economic fault",),
    Jurisdiction.NM: ("Judicial discretion allowed for unequal division",),
    Jurisdiction.TX: (
        "Income from separate property is community property",
        "Inception of title rule for reimbursement claims",
    ),
    Jurisdiction.WA: ("Allows for unequal division based on economic misconduct",),
    Jurisdiction.WI: ("Marital Property Act with deferred community property system",),
}

_STATUTORY_FACTORS = {
    Jurisdiction.PA: PENNSYLVANIA_FACTORS,
}


def _build_registry() -> dict[Jurisdiction, JurisdictionInfo]:
    registry = {}
    for code in Jurisdiction:
        registry[code] = JurisdictionInfo(
            code=code,
            name=_NAMES[code],
            regime=(
                PropertyRegime.COMMUNITY
                if code in COMMUNITY_PROPERTY_STATES
                else PropertyRegime.EQUITABLE
            ),
            supports_qcp=code in QCP_STATES,
            statutory_factors=_STATUTORY_FACTORS.get(code, ()),
            special_rules=_SPECIAL_RULES.get(code, ()),
        )
    return registry


JURISDICTIONS: dict[Jurisdiction, JurisdictionInfo] = _build_registry()


# =============================================================================
# LOOKUPS
# =============================================================================

def resolve_jurisdiction(code: Union[Jurisdiction, str]) -> Jurisdiction:
    """Normalize a jurisdiction code.

    Args:
        code: Jurisdiction enum member or two-letter code (any case)

    Returns:
        The matching Jurisdiction

    Raises:
        UnknownJurisdictionError: If the code is not a state or DC
    """
    if isinstance(code, Jurisdiction):
        return code
    if isinstance(code, str):
        try:
            return Jurisdiction(code.strip().upper())
        except ValueError:
            pass
    raise UnknownJurisdictionError(code)


def get_jurisdiction_info(code: Union[Jurisdiction, str]) -> JurisdictionInfo:
    """Get the registry entry for a jurisdiction."""
    return JURISDICTIONS[resolve_jurisdiction(code)]


def regime_of(code: Union[Jurisdiction, str]) -> PropertyRegime:
    """Get the property regime (community or equitable) of a jurisdiction."""
    return get_jurisdiction_info(code).regime


def supports_qcp(code: Union[Jurisdiction, str]) -> bool:
    """Whether the jurisdiction recognizes quasi-community property."""
    return get_jurisdiction_info(code).supports_qcp


def is_community_property_state(code: Union[Jurisdiction, str]) -> bool:
    return get_jurisdiction_info(code).is_community_property


def get_jurisdiction_name(code: Union[Jurisdiction, str]) -> str:
    return get_jurisdiction_info(code).name


def get_statutory_factors(code: Union[Jurisdiction, str]) -> tuple[str, ...]:
    """Get the enumerated equitable distribution factors (informational).

    Returns:
        Ordered statutory factors, empty when the statute does not enumerate
        them in the registry
    """
    return get_jurisdiction_info(code).statutory_factors


def get_jurisdictions_by_regime(regime: PropertyRegime) -> list[Jurisdiction]:
    """List the jurisdictions following a property regime, in enum order."""
    return [code for code, info in JURISDICTIONS.items() if info.regime is regime]
