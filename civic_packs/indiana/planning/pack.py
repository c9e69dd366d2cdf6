"""
Indiana planning legacy pack.

Applies only to Indiana units holding zoning authority, marked by the
``zoningAuthority`` authority tag on the jurisdiction profile.
"""

from __future__ import annotations

from civic_kernel.domain.jurisdiction import JurisdictionProfile
from civic_kernel.domain.packs import BaseLegacyPack
from civic_packs.indiana.planning.config import (
    IndianaPlanningConfig,
    PlanningCaseType,
    PlanningNoticeRequirement,
    VarianceCriterion,
    VarianceType,
)

ZONING_AUTHORITY_TAG = "zoningAuthority"


class IndianaPlanningPack(BaseLegacyPack):
    state = "IN"
    domain = "planning"
    version = "1.0.0"

    config: IndianaPlanningConfig

    def __init__(self, config: IndianaPlanningConfig | None = None):
        super().__init__(config if config is not None else IndianaPlanningConfig())

    def applies_to(self, profile: JurisdictionProfile) -> bool:
        return profile.state == self.state and ZONING_AUTHORITY_TAG in profile.authority_tags

    def get_case_types(self) -> tuple[PlanningCaseType, ...]:
        return self.config.case_types

    def get_variance_criteria(
        self, variance_type: VarianceType | str
    ) -> tuple[VarianceCriterion, ...]:
        if VarianceType(variance_type) is VarianceType.USE:
            return self.config.use_variance_criteria
        return self.config.development_variance_criteria

    def get_notice_requirements(self, case_type: str) -> PlanningNoticeRequirement | None:
        """None for case types that carry no statutory notice (e.g. secondary plats)."""
        return self.config.notice_requirements.get(case_type)
