"""
Tests for the Indiana finance domain pack.

LIT eligibility follows population (3,501 threshold); everything else is
the statewide baseline until tenant overrides replace it.
"""

from decimal import Decimal

import pytest

from civic_kernel.domain.jurisdiction import EntityClass, TenantIdentity
from civic_kernel.domain.tenant import EnabledModule
from civic_packs.indiana.finance.config import FireServiceModel, IndianaFinanceConfig
from civic_packs.indiana.finance.lit import (
    LIT_ADOPTION_REQUIREMENTS,
    LIT_POPULATION_THRESHOLD,
    can_levy_own_lit,
    lit_summary,
    max_rate_for,
)
from civic_packs.indiana.finance.pack import IndianaFinancePack, build_finance_config
from tests.conftest import make_tenant


class TestLitEligibility:
    @pytest.mark.parametrize(
        "population, expected",
        [
            (None, False),
            (0, False),
            (2350, False),
            (3500, False),
            (3501, True),
            (5000, True),
        ],
    )
    def test_threshold(self, population, expected):
        assert can_levy_own_lit(population) is expected

    def test_threshold_constant(self):
        assert LIT_POPULATION_THRESHOLD == 3501

    def test_summary_small_town(self, small_town):
        summary = lit_summary(small_town)

        assert summary.can_levy_own_lit is False
        assert summary.uses_county_lit is True
        assert summary.population == 2350
        assert "must use county LIT" in summary.explanation
        assert "2,350" in summary.explanation
        assert "3,501" in summary.explanation

    def test_summary_large_town(self, large_town):
        summary = lit_summary(large_town)

        assert summary.can_levy_own_lit is True
        assert "may levy its own" in summary.explanation

    def test_rate_reference_data(self):
        assert max_rate_for("public-safety") == Decimal("0.0025")
        assert max_rate_for("unknown") is None
        assert {r.id for r in LIT_ADOPTION_REQUIREMENTS} == {
            "LIT_ADOPTION_DEADLINE",
            "LIT_DLGF_CERTIFICATION",
        }


class TestDeriveDefaults:
    def test_small_town_uses_county_lit(self, small_town):
        defaults = IndianaFinancePack().derive_defaults(small_town)

        assert defaults["can_levy_own_lit"] is False
        assert defaults["uses_county_lit"] is True
        assert defaults["fire_model"] is FireServiceModel.DEPARTMENT
        assert defaults["has_utility_funds"] is False
        assert defaults["fiscal_year_type"] == "calendar"
        assert defaults["requires_gateway_filing"] is True
        assert defaults["budget_cycle"] == "annual"
        assert defaults["audit_threshold"] == Decimal("250000")

    def test_large_town_levies_own_lit(self, large_town):
        defaults = IndianaFinancePack().derive_defaults(large_town)

        assert defaults["can_levy_own_lit"] is True
        assert defaults["uses_county_lit"] is False

    def test_missing_population_degrades_to_baseline(self):
        identity = TenantIdentity("x", "Unknown", "IN", EntityClass.CITY)
        defaults = IndianaFinancePack().derive_defaults(identity)
        assert defaults["can_levy_own_lit"] is False

    def test_pure(self, small_town):
        pack = IndianaFinancePack()
        assert pack.derive_defaults(small_town) == pack.derive_defaults(small_town)

    def test_defaults_build_valid_config(self, small_town):
        config = IndianaFinanceConfig.from_mapping(
            IndianaFinancePack().derive_defaults(small_town)
        )
        assert config.extensions == {}


class TestFinanceConfig:
    def test_string_enum_coerced(self):
        config = IndianaFinanceConfig(fire_model="CONTRACT", fire_contract_unit_id="anderson")
        assert config.fire_model is FireServiceModel.CONTRACT

    def test_amount_coerced(self):
        assert IndianaFinanceConfig(audit_threshold="300000").audit_threshold == Decimal("300000")

    @pytest.mark.parametrize(
        "kwargs, message",
        [
            ({"fiscal_year_type": "lunar"}, "fiscal_year_type"),
            ({"budget_cycle": "monthly"}, "budget_cycle"),
            ({"audit_threshold": Decimal("-1")}, "audit_threshold"),
            ({"audit_threshold": "lots"}, "audit_threshold"),
        ],
    )
    def test_invalid_values_rejected(self, kwargs, message):
        with pytest.raises(ValueError, match=message):
            IndianaFinanceConfig(**kwargs)

    def test_unknown_fire_model_rejected(self):
        with pytest.raises(ValueError):
            IndianaFinanceConfig(fire_model="AIRSHIP")

    def test_lit_conflict_logged(self, captured_logs):
        IndianaFinanceConfig(can_levy_own_lit=True, uses_county_lit=True)
        assert any(
            r["message"] == "finance_config_lit_conflict" and r["level"] == "WARNING"
            for r in captured_logs()
        )

    def test_territory_without_id_logged(self, captured_logs):
        IndianaFinanceConfig(fire_model=FireServiceModel.TERRITORY)
        assert any(r["message"] == "finance_config_territory_unassigned" for r in captured_logs())


class TestBuildFinanceConfig:
    def test_overrides_applied(self, small_town):
        config = build_finance_config(
            small_town, {"fire_model": "TERRITORY", "fire_territory_id": "madison-fpt"}
        )

        assert config.fire_model is FireServiceModel.TERRITORY
        assert config.fire_territory_id == "madison-fpt"
        assert config.uses_county_lit is True

    def test_no_overrides(self, large_town):
        assert build_finance_config(large_town).can_levy_own_lit is True


class TestLapelScenario:
    """Lapel (pop. 2,350) joins a fire territory and runs a water utility."""

    def test_resolved_config(self, resolver, small_town):
        tenant = make_tenant(
            small_town,
            EnabledModule(
                "finance",
                config={"fire_model": "TERRITORY", "has_utility_funds": True},
            ),
        )

        config = resolver.resolve_config(tenant, small_town, "finance")

        assert config.can_levy_own_lit is False
        assert config.uses_county_lit is True
        assert config.fire_model is FireServiceModel.TERRITORY
        assert config.has_utility_funds is True
        assert config.requires_gateway_filing is True
        assert config.fiscal_year_type == "calendar"
