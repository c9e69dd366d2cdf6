"""
Indiana township domain pack.

Only TOWNSHIP tenants receive the statutory township defaults; every
other entity class gets a disabled baseline with no township modules.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from civic_kernel.domain.jurisdiction import EntityClass, TenantIdentity
from civic_kernel.domain.packs import BaseDomainPack, merge_overrides
from civic_packs.indiana.township.config import (
    TOWNSHIP_MODULES,
    IndianaTownshipConfig,
    TownshipFireModel,
)

STATUTORY_DUTIES: tuple[str, ...] = (
    "Provide township assistance (poor relief) per IC 12-20",
    "Serve as fence viewer per IC 32-26",
    "Enforce weed control per IC 15-16-8",
    "Maintain township cemeteries per IC 23-14-68",
    "Provide fire protection services",
    "Post trustee and clerk bonds per IC 5-4-1",
    "Conduct open board meetings per IC 5-14-1.5",
    "Respond to public records requests per IC 5-14-3",
    "Maintain SBOA-compliant financial records",
)


def is_township(identity: TenantIdentity) -> bool:
    return identity.entity_class is EntityClass.TOWNSHIP


class IndianaTownshipPack(BaseDomainPack):
    state = "IN"
    domain = "township"
    config_type = IndianaTownshipConfig

    def derive_defaults(self, identity: TenantIdentity) -> dict[str, Any]:
        if not is_township(identity):
            return {"domain": "township", "enabled": False, "enabled_modules": ()}

        return {
            "domain": "township",
            "enabled": True,
            "assistance_enabled": True,
            "assistance_investigation_days": 3,
            "assistance_cases_confidential": True,
            "fire_model": TownshipFireModel.CONTRACT,
            "cemetery_enabled": True,
            "fence_viewer_enabled": True,
            "fence_viewer_appeal_days": 10,
            "weed_control_enabled": True,
            "weed_control_notice_days": 10,
            "insurance_bonds_enabled": True,
            "trustee_bond_required": True,
            "clerk_bond_required": True,
            "policies_enabled": True,
            "trustee_is_fiscal_officer": True,
            "board_approves_claims": True,
            "board_member_count": 3,
            "enabled_modules": TOWNSHIP_MODULES,
        }


def build_township_config(
    identity: TenantIdentity,
    overrides: Mapping[str, Any] | None = None,
) -> IndianaTownshipConfig:
    defaults = IndianaTownshipPack().derive_defaults(identity)
    return IndianaTownshipConfig.from_mapping(merge_overrides(defaults, overrides))


def township_modules_for(
    identity: TenantIdentity,
    disabled: tuple[str, ...] = (),
) -> list[str]:
    """Township modules a tenant should run, minus any explicitly disabled."""
    if not is_township(identity):
        return []
    return [module for module in TOWNSHIP_MODULES if module not in disabled]


@dataclass(frozen=True)
class TownshipDutiesSummary:
    is_township: bool
    statutory_duties: tuple[str, ...]
    explanation: str


def township_duties_summary(identity: TenantIdentity) -> TownshipDutiesSummary:
    if not is_township(identity):
        return TownshipDutiesSummary(
            is_township=False,
            statutory_duties=(),
            explanation=f"{identity.display_name} is not a township.",
        )
    return TownshipDutiesSummary(
        is_township=True,
        statutory_duties=STATUTORY_DUTIES,
        explanation=(
            f"{identity.display_name} is an Indiana township with the following "
            f"statutory duties and powers."
        ),
    )
