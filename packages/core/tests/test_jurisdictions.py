"""Tests for the jurisdiction registry."""

import pytest

from equisplit_core.exceptions import UnknownJurisdictionError, ValidationError
from equisplit_core.jurisdictions import (
    JURISDICTIONS,
    METHODOLOGY_VERSION,
    PENNSYLVANIA_FACTORS,
    get_jurisdiction_info,
    get_jurisdiction_name,
    get_jurisdictions_by_regime,
    get_methodology_version,
    get_statutory_factors,
    is_community_property_state,
    regime_of,
    resolve_jurisdiction,
    supports_qcp,
)
from equisplit_core.models import Jurisdiction, PropertyRegime

COMMUNITY = ["AZ", "CA", "ID", "LA", "NV", "NM", "TX", "WA", "WI"]
QCP = ["AZ", "CA", "ID", "WA"]


class TestRegistry:
    """Registry contents."""

    def test_covers_states_and_dc(self):
        assert len(JURISDICTIONS) == 51
        assert set(JURISDICTIONS) == set(Jurisdiction)

    def test_community_property_states(self):
        assert get_jurisdictions_by_regime(PropertyRegime.COMMUNITY) == [
            Jurisdiction(code) for code in COMMUNITY
        ]

    def test_equitable_states(self):
        equitable = get_jurisdictions_by_regime(PropertyRegime.EQUITABLE)
        assert len(equitable) == 42
        assert Jurisdiction.PA in equitable
        assert Jurisdiction.NY in equitable
        assert Jurisdiction.DC in equitable

    @pytest.mark.parametrize("code", [j.value for j in Jurisdiction])
    def test_qcp_only_in_listed_states(self, code):
        assert supports_qcp(code) is (code in QCP)

    def test_louisiana_excluded_from_qcp(self):
        """Louisiana is community property without QCP recognition."""
        assert regime_of("LA") is PropertyRegime.COMMUNITY
        assert supports_qcp("LA") is False

    def test_qcp_states_are_community_states(self):
        for code in QCP:
            assert is_community_property_state(code)

    def test_methodology_version(self):
        assert get_methodology_version() == METHODOLOGY_VERSION


class TestLookups:
    """Lookup functions."""

    def test_regime_of(self):
        assert regime_of(Jurisdiction.CA) is PropertyRegime.COMMUNITY
        assert regime_of(Jurisdiction.PA) is PropertyRegime.EQUITABLE

    def test_string_codes_are_case_insensitive(self):
        assert resolve_jurisdiction(" tx ") is Jurisdiction.TX
        assert regime_of("tx") is PropertyRegime.COMMUNITY

    def test_names(self):
        assert get_jurisdiction_name("PA") == "Pennsylvania"
        assert get_jurisdiction_name("DC") == "District of Columbia"

    def test_pennsylvania_statutory_factors(self):
        factors = get_statutory_factors("PA")
        assert factors == PENNSYLVANIA_FACTORS
        assert len(factors) == 13
        assert factors[0] == "Length of the marriage"
        assert factors[-1] == "Expense of sale"

    def test_no_statutory_factors_elsewhere(self):
        assert get_statutory_factors("NY") == ()

    def test_special_rules(self):
        info = get_jurisdiction_info("CA")
        assert "Strict 50/50 division unless agreement" in info.special_rules
        assert get_jurisdiction_info("PA").special_rules == ()

    @pytest.mark.parametrize("code", ["PR", "XX", "", "Pennsylvania", None, 42])
    def test_unknown_code_rejected(self, code):
        with pytest.raises(UnknownJurisdictionError) as exc_info:
            get_jurisdiction_info(code)

        assert exc_info.value.code == code
        assert exc_info.value.field == "jurisdiction"
        assert isinstance(exc_info.value, ValidationError)
