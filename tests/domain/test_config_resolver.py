"""
Tests for ConfigResolver.

Resolution is gated (pack present AND module entry enabled), merges
tenant overrides shallowly over pack defaults, and returns the pack's
typed config when it declares one.
"""

from decimal import Decimal

import pytest

from civic_kernel.domain.jurisdiction import EntityClass, TenantIdentity
from civic_kernel.domain.packs import BaseDomainPack, BaseLegacyPack, SourceKind
from civic_kernel.domain.registry import JurisdictionRegistry
from civic_kernel.domain.resolver import ConfigResolver, ResolutionStatus
from civic_kernel.domain.tenant import EnabledModule, TenantConfig
from civic_packs.indiana.finance.config import FireServiceModel, IndianaFinanceConfig
from civic_packs.indiana.records import IndianaRecordsConfig
from civic_packs.indiana.township import IndianaTownshipConfig
from tests.conftest import make_tenant


class NestedDefaultsPack(BaseDomainPack):
    state = "OH"
    domain = "parks"

    def derive_defaults(self, identity):
        return {"hours": {"open": 6, "close": 22}, "fees": True}


class StaticMappingPack(BaseLegacyPack):
    state = "OH"
    domain = "cemetery"

    def applies_to(self, profile):
        return True


@pytest.fixture
def ohio_registry() -> JurisdictionRegistry:
    registry = JurisdictionRegistry()
    registry.register_domain_pack(NestedDefaultsPack())
    registry.register_legacy_pack(StaticMappingPack(config={"plots": 120, "perpetual_care": True}))
    return registry


@pytest.fixture
def ohio_village() -> TenantIdentity:
    return TenantIdentity("village-oh", "Village", "OH", EntityClass.TOWN, population=900)


class TestResolveConfig:
    def test_finance_resolves_typed_config(self, resolver, finance_tenant, small_town):
        config = resolver.resolve_config(finance_tenant, small_town, "finance")

        assert isinstance(config, IndianaFinanceConfig)
        assert config.can_levy_own_lit is False
        assert config.uses_county_lit is True
        assert config.fire_model is FireServiceModel.DEPARTMENT
        assert config.audit_threshold == Decimal("250000")

    def test_overrides_replace_defaults(self, resolver, small_town):
        tenant = make_tenant(
            small_town,
            EnabledModule(
                "finance",
                config={"fire_model": "TERRITORY", "has_utility_funds": True},
            ),
        )

        config = resolver.resolve_config(tenant, small_town, "finance")

        assert config.fire_model is FireServiceModel.TERRITORY
        assert config.has_utility_funds is True
        # untouched defaults survive
        assert config.can_levy_own_lit is False

    def test_unknown_override_keys_kept_as_extensions(self, resolver, small_town):
        tenant = make_tenant(
            small_town,
            EnabledModule("finance", config={"clerk_treasurer": "J. Smith"}),
        )

        config = resolver.resolve_config(tenant, small_town, "finance")

        assert config.extensions == {"clerk_treasurer": "J. Smith"}
        assert config.get("clerk_treasurer") == "J. Smith"
        assert config.to_mapping()["clerk_treasurer"] == "J. Smith"

    def test_legacy_pack_resolves_typed_config(self, resolver, finance_tenant, small_town):
        config = resolver.resolve_config(finance_tenant, small_town, "records")

        assert isinstance(config, IndianaRecordsConfig)
        assert config.schedule_for("meeting-minutes").is_permanent

    def test_township_for_non_township_is_disabled_baseline(self, resolver, small_town):
        tenant = make_tenant(small_town, EnabledModule("township"))

        config = resolver.resolve_config(tenant, small_town, "township")

        assert isinstance(config, IndianaTownshipConfig)
        assert config.enabled is False
        assert config.enabled_modules == ()

    def test_untyped_pack_returns_dict(self, ohio_registry, ohio_village):
        tenant = make_tenant(ohio_village, EnabledModule("parks"), EnabledModule("cemetery"))
        resolver = ConfigResolver(ohio_registry)

        assert resolver.resolve_config(tenant, ohio_village, "parks") == {
            "hours": {"open": 6, "close": 22},
            "fees": True,
        }
        assert resolver.resolve_config(tenant, ohio_village, "cemetery") == {
            "plots": 120,
            "perpetual_care": True,
        }

    def test_nested_override_replaces_wholesale(self, ohio_registry, ohio_village):
        tenant = make_tenant(
            ohio_village, EnabledModule("parks", config={"hours": {"open": 8}})
        )

        config = ConfigResolver(ohio_registry).resolve_config(tenant, ohio_village, "parks")

        assert config["hours"] == {"open": 8}
        assert config["fees"] is True

    def test_resolution_is_idempotent(self, resolver, finance_tenant, small_town):
        first = resolver.resolve_config(finance_tenant, small_town, "finance")
        second = resolver.resolve_config(finance_tenant, small_town, "finance")
        assert first == second

    @pytest.mark.parametrize(
        "overrides",
        [
            {"budget_cycle": "quarterly"},
            {"audit_threshold": "lots"},
            {"fire_model": "contract"},
        ],
    )
    def test_invalid_override_value_is_unavailable(self, resolver, small_town, overrides):
        tenant = make_tenant(small_town, EnabledModule("finance", config=overrides))

        assert resolver.resolve_config(tenant, small_town, "finance") is None
        status = resolver.check_availability(tenant, small_town, "finance")
        assert status is ResolutionStatus.INVALID_OVERRIDE
        assert status.is_actionable
        assert not resolver.is_domain_available(tenant, small_town, "finance")
        assert resolver.list_available_domains(tenant, small_town) == []

    def test_invalid_override_logged_without_trace(self, resolver, small_town, captured_logs):
        tenant = make_tenant(
            small_town, EnabledModule("finance", config={"budget_cycle": "quarterly"})
        )
        resolver.resolve_config(tenant, small_town, "finance")

        records = captured_logs()
        invalid = [r for r in records if r["message"] == "config_invalid"]
        assert invalid[-1]["level"] == "WARNING"
        assert invalid[-1]["status"] == "invalid_override"
        assert "budget_cycle" in invalid[-1]["error"]
        assert not any(r["message"] == "CIVIC_CONFIG_TRACE" for r in records)


class TestGating:
    def test_module_not_configured(self, resolver, small_town):
        tenant = make_tenant(small_town, EnabledModule("records"))

        assert resolver.resolve_config(tenant, small_town, "finance") is None
        assert (
            resolver.check_availability(tenant, small_town, "finance")
            is ResolutionStatus.MODULE_NOT_CONFIGURED
        )

    def test_module_disabled(self, resolver, small_town):
        tenant = make_tenant(small_town, EnabledModule("finance", enabled=False))

        assert resolver.resolve_config(tenant, small_town, "finance") is None
        status = resolver.check_availability(tenant, small_town, "finance")
        assert status is ResolutionStatus.MODULE_DISABLED
        assert status.is_actionable

    def test_domain_unsupported(self, resolver, small_town):
        tenant = make_tenant(small_town, EnabledModule("parks"))

        assert resolver.resolve_config(tenant, small_town, "parks") is None
        status = resolver.check_availability(tenant, small_town, "parks")
        assert status is ResolutionStatus.DOMAIN_UNSUPPORTED
        assert not status.is_actionable

    def test_jurisdiction_unsupported(self, resolver):
        identity = TenantIdentity("x", "Elsewhere", "ZZ", EntityClass.CITY)
        tenant = make_tenant(identity, EnabledModule("finance"))

        assert resolver.resolve_config(tenant, identity, "finance") is None
        assert (
            resolver.check_availability(tenant, identity, "finance")
            is ResolutionStatus.JURISDICTION_UNSUPPORTED
        )

    def test_unavailable_logged_at_debug(self, resolver, small_town, captured_logs):
        tenant = make_tenant(small_town, EnabledModule("finance", enabled=False))
        resolver.resolve_config(tenant, small_town, "finance")

        records = [r for r in captured_logs() if r["message"] == "config_unavailable"]
        assert records[-1]["level"] == "DEBUG"
        assert records[-1]["status"] == "module_disabled"

    def test_availability_matches_resolution(self, resolver, small_town):
        tenant = make_tenant(
            small_town,
            EnabledModule("finance"),
            EnabledModule("records", enabled=False),
            EnabledModule("parks"),
        )
        for domain in ("finance", "records", "parks", "township"):
            available = resolver.is_domain_available(tenant, small_town, domain)
            resolved = resolver.resolve_config(tenant, small_town, domain)
            assert available == (resolved is not None), domain

    def test_list_available_domains_in_tenant_order(self, resolver, small_town):
        tenant = make_tenant(
            small_town,
            EnabledModule("records"),
            EnabledModule("parks"),
            EnabledModule("finance"),
            EnabledModule("township", enabled=False),
            EnabledModule("records"),
        )

        assert resolver.list_available_domains(tenant, small_town) == ["records", "finance"]

    def test_first_module_entry_governs(self, resolver, small_town):
        tenant = make_tenant(
            small_town,
            EnabledModule("finance", enabled=False),
            EnabledModule("finance"),
        )
        assert resolver.resolve_config(tenant, small_town, "finance") is None


class TestResolveWithMetadata:
    def test_singleton_source_reported(self, resolver, finance_tenant, small_town):
        result = resolver.resolve_config_with_metadata(finance_tenant, small_town, "finance")

        assert result.enabled is True
        assert result.jurisdiction == "IN"
        assert result.domain == "finance"
        assert result.source_kind is SourceKind.SINGLETON
        assert isinstance(result.config, IndianaFinanceConfig)

    def test_predicate_list_source_reported(self, resolver, finance_tenant, small_town):
        result = resolver.resolve_config_with_metadata(finance_tenant, small_town, "records")
        assert result.source_kind is SourceKind.PREDICATE_LIST

    def test_unavailable_is_none(self, resolver, small_town):
        tenant = TenantConfig(tenant_id=small_town.tenant_id, jurisdiction="IN")
        assert resolver.resolve_config_with_metadata(tenant, small_town, "finance") is None


class TestConfigTrace:
    def test_trace_logged_on_resolution(self, resolver, small_town, captured_logs):
        tenant = make_tenant(
            small_town,
            EnabledModule("finance", config={"has_utility_funds": True, "fire_model": "NONE"}),
        )
        resolver.resolve_config(tenant, small_town, "finance")

        traces = [r for r in captured_logs() if r["message"] == "CIVIC_CONFIG_TRACE"]
        assert len(traces) == 1
        trace = traces[0]
        assert trace["level"] == "INFO"
        assert trace["trace_type"] == "CIVIC_CONFIG_TRACE"
        assert trace["tenant_id"] == "lapel-in"
        assert trace["jurisdiction"] == "IN"
        assert trace["domain"] == "finance"
        assert trace["source_kind"] == "singleton"
        assert trace["pack"] == "IndianaFinancePack"
        assert trace["override_keys"] == ["fire_model", "has_utility_funds"]

    def test_no_trace_when_unavailable(self, resolver, small_town, captured_logs):
        tenant = make_tenant(small_town)
        resolver.resolve_config(tenant, small_town, "finance")

        assert not [r for r in captured_logs() if r["message"] == "CIVIC_CONFIG_TRACE"]
