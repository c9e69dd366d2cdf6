"""
Indiana finance domain pack.

Derives finance defaults from a tenant's identity: LIT eligibility from
population, the statewide fire model default, and the Indiana budget and
reporting baseline.
"""

from __future__ import annotations

from collections.abc import Mapping
from decimal import Decimal
from typing import Any

from civic_kernel.domain.jurisdiction import TenantIdentity
from civic_kernel.domain.packs import BaseDomainPack, merge_overrides
from civic_kernel.logging_config import get_logger
from civic_packs.indiana.finance.config import FireServiceModel, IndianaFinanceConfig
from civic_packs.indiana.finance.lit import can_levy_own_lit

logger = get_logger("packs.indiana.finance")


class IndianaFinancePack(BaseDomainPack):
    state = "IN"
    domain = "finance"
    config_type = IndianaFinanceConfig

    def derive_defaults(self, identity: TenantIdentity) -> dict[str, Any]:
        own_lit = can_levy_own_lit(identity.population)
        logger.debug(
            "finance_defaults_derived",
            extra={
                "tenant_id": identity.tenant_id,
                "population": identity.population,
                "can_levy_own_lit": own_lit,
            },
        )
        return {
            "domain": "finance",
            "enabled": True,
            "can_levy_own_lit": own_lit,
            "uses_county_lit": not own_lit,
            "fire_model": FireServiceModel.DEPARTMENT,
            "has_utility_funds": False,
            "fiscal_year_type": "calendar",
            "requires_gateway_filing": True,
            "budget_cycle": "annual",
            "audit_threshold": Decimal("250000"),
        }


def build_finance_config(
    identity: TenantIdentity,
    overrides: Mapping[str, Any] | None = None,
) -> IndianaFinanceConfig:
    """Pack defaults for ``identity`` with ``overrides`` applied on top."""
    defaults = IndianaFinancePack().derive_defaults(identity)
    return IndianaFinanceConfig.from_mapping(merge_overrides(defaults, overrides))
