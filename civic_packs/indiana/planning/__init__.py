"""Indiana planning domain: zoning and subdivision procedure (legacy pack)."""

from civic_packs.indiana.planning.config import (
    AppealDeadline,
    DecidingBody,
    IndianaPlanningConfig,
    PlanningCaseType,
    PlanningNoticeRequirement,
    VarianceCriterion,
    VarianceType,
)
from civic_packs.indiana.planning.pack import ZONING_AUTHORITY_TAG, IndianaPlanningPack

__all__ = [
    "ZONING_AUTHORITY_TAG",
    "AppealDeadline",
    "DecidingBody",
    "IndianaPlanningConfig",
    "IndianaPlanningPack",
    "PlanningCaseType",
    "PlanningNoticeRequirement",
    "VarianceCriterion",
    "VarianceType",
]
