"""
Indiana Finance Configuration Schema.

Typed settings the finance domain reads for Indiana tenants. Defaults are
the statewide baseline; ``IndianaFinancePack`` refines them from the
tenant's identity and tenant overrides replace them key by key.
"""

from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum

from civic_kernel.domain.packs import DomainConfig
from civic_kernel.logging_config import get_logger

logger = get_logger("packs.indiana.finance.config")

VALID_FISCAL_YEAR_TYPES = {"calendar", "fiscal-july"}
VALID_BUDGET_CYCLES = {"annual", "biennial"}


class FireServiceModel(str, Enum):
    """How a unit delivers fire protection."""

    DEPARTMENT = "DEPARTMENT"  # unit operates its own department
    TERRITORY = "TERRITORY"  # member of a fire protection territory
    CONTRACT = "CONTRACT"  # contracts with another unit
    VOLUNTEER = "VOLUNTEER"
    NONE = "NONE"


@dataclass(frozen=True)
class IndianaFinanceConfig(DomainConfig):
    """
    Finance settings for an Indiana unit.

    Override at instantiation or through tenant settings:

        config = IndianaFinanceConfig.from_mapping(
            {**pack.derive_defaults(identity), "fire_model": "TERRITORY"}
        )
    """

    domain: str = "finance"

    # Local Income Tax (IC 6-3.6)
    can_levy_own_lit: bool = False
    uses_county_lit: bool = True

    # Fire service
    fire_model: FireServiceModel = FireServiceModel.DEPARTMENT
    fire_territory_id: str | None = None
    fire_contract_unit_id: str | None = None

    # Funds
    has_utility_funds: bool = False
    custom_funds_enabled: bool = False

    # Budget and reporting
    fiscal_year_type: str = "calendar"  # "calendar", "fiscal-july"
    requires_gateway_filing: bool = True
    budget_cycle: str = "annual"  # "annual", "biennial"
    audit_threshold: Decimal = Decimal("250000")

    def __post_init__(self):
        if not isinstance(self.fire_model, FireServiceModel):
            object.__setattr__(self, "fire_model", FireServiceModel(self.fire_model))
        if not isinstance(self.audit_threshold, Decimal):
            try:
                threshold = Decimal(str(self.audit_threshold))
            except InvalidOperation:
                raise ValueError(
                    f"audit_threshold must be a decimal amount, got {self.audit_threshold!r}"
                ) from None
            object.__setattr__(self, "audit_threshold", threshold)

        if self.fiscal_year_type not in VALID_FISCAL_YEAR_TYPES:
            raise ValueError(
                f"fiscal_year_type must be one of {VALID_FISCAL_YEAR_TYPES}, "
                f"got '{self.fiscal_year_type}'"
            )

        if self.budget_cycle not in VALID_BUDGET_CYCLES:
            raise ValueError(
                f"budget_cycle must be one of {VALID_BUDGET_CYCLES}, "
                f"got '{self.budget_cycle}'"
            )

        if self.audit_threshold < 0:
            raise ValueError("audit_threshold cannot be negative")

        if self.can_levy_own_lit and self.uses_county_lit:
            logger.warning(
                "finance_config_lit_conflict",
                extra={"can_levy_own_lit": True, "uses_county_lit": True},
            )

        if self.fire_model is FireServiceModel.TERRITORY and not self.fire_territory_id:
            logger.info("finance_config_territory_unassigned")
        if self.fire_model is FireServiceModel.CONTRACT and not self.fire_contract_unit_id:
            logger.info("finance_config_contract_unit_unassigned")
