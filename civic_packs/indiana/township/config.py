"""
Indiana Township Configuration Schema.

Statutory duties of an Indiana civil township: township assistance
(IC 12-20), fence viewing (IC 32-26), weed control, cemeteries, bonds
(IC 5-4-1) and the trustee/board governance model.
"""

from dataclasses import dataclass
from enum import Enum

from civic_kernel.domain.packs import DomainConfig


class TownshipFireModel(str, Enum):
    CONTRACT = "CONTRACT"  # contract with external provider
    TERRITORY = "TERRITORY"  # member of fire protection territory
    DEPARTMENT = "DEPARTMENT"  # township operates its own department (rare)
    MUTUAL_AID = "MUTUAL_AID"


TOWNSHIP_MODULES: tuple[str, ...] = (
    "township-assistance",
    "fire-contracts",
    "cemeteries",
    "insurance-bonds",
    "fence-viewer",
    "weed-control",
    "policies",
)


@dataclass(frozen=True)
class IndianaTownshipConfig(DomainConfig):
    """Township settings. Defaults follow Indiana statute and common practice."""

    domain: str = "township"

    # Assistance (IC 12-20)
    assistance_enabled: bool = True
    assistance_investigation_days: int = 3  # 72 hours per IC 12-20-6-8.5
    assistance_cases_confidential: bool = True

    # Fire service
    fire_model: TownshipFireModel = TownshipFireModel.CONTRACT
    fire_territory_id: str | None = None
    fire_contract_provider: str | None = None

    # Cemetery
    cemetery_enabled: bool = True
    cemetery_count: int | None = None

    # Fence viewer (IC 32-26-9-7)
    fence_viewer_enabled: bool = True
    fence_viewer_appeal_days: int = 10

    # Weed control
    weed_control_enabled: bool = True
    weed_control_notice_days: int = 10

    # Insurance and bonds (IC 5-4-1)
    insurance_bonds_enabled: bool = True
    trustee_bond_required: bool = True
    clerk_bond_required: bool = True

    policies_enabled: bool = True

    # Governance
    trustee_is_fiscal_officer: bool = True
    board_approves_claims: bool = True
    board_member_count: int = 3

    enabled_modules: tuple[str, ...] = TOWNSHIP_MODULES

    def __post_init__(self):
        if not isinstance(self.fire_model, TownshipFireModel):
            object.__setattr__(self, "fire_model", TownshipFireModel(self.fire_model))
        if not isinstance(self.enabled_modules, tuple):
            object.__setattr__(self, "enabled_modules", tuple(self.enabled_modules))

        unknown = set(self.enabled_modules) - set(TOWNSHIP_MODULES)
        if unknown:
            raise ValueError(
                f"enabled_modules must be drawn from {TOWNSHIP_MODULES}, "
                f"got unknown {sorted(unknown)}"
            )

        if self.assistance_investigation_days < 0:
            raise ValueError("assistance_investigation_days cannot be negative")
        if self.fence_viewer_appeal_days < 0:
            raise ValueError("fence_viewer_appeal_days cannot be negative")
        if self.weed_control_notice_days < 0:
            raise ValueError("weed_control_notice_days cannot be negative")
        if self.board_member_count < 1:
            raise ValueError("board_member_count must be at least 1")
