"""
Indiana utilities legacy pack.

Applies only to Indiana units operating a municipal utility, marked by
the ``utilityOperator`` authority tag on the jurisdiction profile.
"""

from __future__ import annotations

from civic_kernel.domain.jurisdiction import JurisdictionProfile
from civic_kernel.domain.packs import BaseLegacyPack
from civic_packs.indiana.utilities.config import (
    DisconnectionRules,
    IndianaUtilitiesConfig,
    RateSettingRequirement,
    UtilityType,
)

UTILITY_OPERATOR_TAG = "utilityOperator"


class IndianaUtilitiesPack(BaseLegacyPack):
    state = "IN"
    domain = "utilities"
    version = "1.0.0"

    config: IndianaUtilitiesConfig

    def __init__(self, config: IndianaUtilitiesConfig | None = None):
        super().__init__(config if config is not None else IndianaUtilitiesConfig())

    def applies_to(self, profile: JurisdictionProfile) -> bool:
        return profile.state == self.state and UTILITY_OPERATOR_TAG in profile.authority_tags

    def get_utility_types(self) -> tuple[UtilityType, ...]:
        return self.config.utility_types

    def get_rate_setting_requirements(self, utility_type: str) -> RateSettingRequirement | None:
        return self.config.rate_setting_requirements.get(utility_type)

    def get_disconnection_rules(self) -> DisconnectionRules:
        return self.config.disconnection_rules

    def is_iurc_jurisdiction(self, utility_type: str) -> bool:
        """Utility types without a rate-setting entry are treated as locally regulated."""
        requirement = self.get_rate_setting_requirements(utility_type)
        return requirement.iurc_jurisdiction if requirement else False
