"""
Indiana Planning Configuration Schema.

Zoning and subdivision procedure under the 600 Series (IC 36-7-4): case
types, variance criteria, notice requirements and appeal deadlines.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from civic_kernel.domain.packs import DomainConfig


class DecidingBody(str, Enum):
    BZA = "BZA"
    PLAN_COMMISSION = "PlanCommission"
    LEGISLATIVE_BODY = "LegislativeBody"


class VarianceType(str, Enum):
    USE = "use"
    DEVELOPMENT_STANDARDS = "development-standards"


@dataclass(frozen=True)
class PlanningCaseType:
    code: str
    name: str
    description: str
    deciding_body: DecidingBody
    requires_public_hearing: bool
    citation_code: str | None = None

    def __post_init__(self):
        if not isinstance(self.deciding_body, DecidingBody):
            object.__setattr__(self, "deciding_body", DecidingBody(self.deciding_body))


@dataclass(frozen=True)
class VarianceCriterion:
    id: str
    description: str
    citation_code: str | None = None


@dataclass(frozen=True)
class PlanningNoticeRequirement:
    mailed_notice_days: int
    published_notice_days: int | None = None
    mailing_radius_feet: int | None = None
    sign_posting_required: bool = False
    citation_code: str | None = None


@dataclass(frozen=True)
class AppealDeadline:
    from_decision: str
    to_body: str
    deadline_days: int
    citation_code: str | None = None


DEFAULT_CASE_TYPES: tuple[PlanningCaseType, ...] = (
    PlanningCaseType(
        code="USE_VARIANCE",
        name="Use Variance",
        description="Variance to allow a use not permitted in the zoning district.",
        deciding_body=DecidingBody.BZA,
        requires_public_hearing=True,
        citation_code="IC 36-7-4-918.4",
    ),
    PlanningCaseType(
        code="DEV_STANDARDS_VARIANCE",
        name="Development Standards Variance",
        description="Variance from setback, height, lot coverage, or other development standards.",
        deciding_body=DecidingBody.BZA,
        requires_public_hearing=True,
        citation_code="IC 36-7-4-918.5",
    ),
    PlanningCaseType(
        code="SPECIAL_EXCEPTION",
        name="Special Exception",
        description="Special exception/conditional use for uses requiring specific approval.",
        deciding_body=DecidingBody.BZA,
        requires_public_hearing=True,
        citation_code="IC 36-7-4-918.2",
    ),
    PlanningCaseType(
        code="REZONE",
        name="Rezone / Map Amendment",
        description="Change of zoning classification for a parcel.",
        deciding_body=DecidingBody.LEGISLATIVE_BODY,
        requires_public_hearing=True,
        citation_code="IC 36-7-4-602",
    ),
    PlanningCaseType(
        code="PRIMARY_PLAT",
        name="Primary Plat",
        description="Primary subdivision plat approval.",
        deciding_body=DecidingBody.PLAN_COMMISSION,
        requires_public_hearing=True,
    ),
    PlanningCaseType(
        code="SECONDARY_PLAT",
        name="Secondary Plat",
        description="Secondary (final) subdivision plat approval.",
        deciding_body=DecidingBody.PLAN_COMMISSION,
        requires_public_hearing=False,
    ),
)

DEFAULT_USE_VARIANCE_CRITERIA: tuple[VarianceCriterion, ...] = (
    VarianceCriterion(
        "practical-difficulty",
        "Approval will not be injurious to the public health, safety, morals, "
        "and general welfare.",
    ),
    VarianceCriterion(
        "use-consistent",
        "The use and value of adjacent property will not be affected substantially.",
    ),
    VarianceCriterion(
        "strict-application",
        "Strict application of the terms of the zoning ordinance will result in "
        "practical difficulties.",
    ),
)

DEFAULT_DEVELOPMENT_VARIANCE_CRITERIA: tuple[VarianceCriterion, ...] = (
    VarianceCriterion(
        "not-injurious",
        "Approval will not be injurious to the public health, safety, morals, "
        "and general welfare.",
    ),
    VarianceCriterion(
        "not-affect-adjacent",
        "The use and value of adjacent property will not be affected substantially.",
    ),
    VarianceCriterion(
        "practical-difficulty",
        "Strict application would result in practical difficulties in the use of "
        "the property.",
    ),
)

DEFAULT_NOTICE_REQUIREMENTS: Mapping[str, PlanningNoticeRequirement] = {
    "USE_VARIANCE": PlanningNoticeRequirement(
        mailed_notice_days=10,
        mailing_radius_feet=300,
        sign_posting_required=True,
        citation_code="IC 36-7-4-920",
    ),
    "DEV_STANDARDS_VARIANCE": PlanningNoticeRequirement(
        mailed_notice_days=10,
        mailing_radius_feet=300,
        sign_posting_required=True,
    ),
    "REZONE": PlanningNoticeRequirement(
        mailed_notice_days=10,
        published_notice_days=10,
        mailing_radius_feet=300,
        sign_posting_required=True,
        citation_code="IC 36-7-4-604",
    ),
    "PRIMARY_PLAT": PlanningNoticeRequirement(mailed_notice_days=10, mailing_radius_feet=300),
}

DEFAULT_APPEAL_DEADLINES: tuple[AppealDeadline, ...] = (
    AppealDeadline("BZA", "Circuit Court", 30, citation_code="IC 36-7-4-1003"),
    AppealDeadline("PlanCommission", "Circuit Court", 30),
)


def _coerce(value: Any, cls: type) -> Any:
    return cls(**value) if isinstance(value, Mapping) else value


@dataclass(frozen=True)
class IndianaPlanningConfig(DomainConfig):
    domain: str = "planning"
    case_types: tuple[PlanningCaseType, ...] = DEFAULT_CASE_TYPES
    use_variance_criteria: tuple[VarianceCriterion, ...] = DEFAULT_USE_VARIANCE_CRITERIA
    development_variance_criteria: tuple[VarianceCriterion, ...] = (
        DEFAULT_DEVELOPMENT_VARIANCE_CRITERIA
    )
    notice_requirements: Mapping[str, PlanningNoticeRequirement] | None = None
    appeal_deadlines: tuple[AppealDeadline, ...] = DEFAULT_APPEAL_DEADLINES

    def __post_init__(self):
        object.__setattr__(
            self, "case_types", tuple(_coerce(c, PlanningCaseType) for c in self.case_types)
        )
        for name in ("use_variance_criteria", "development_variance_criteria"):
            object.__setattr__(
                self, name, tuple(_coerce(c, VarianceCriterion) for c in getattr(self, name))
            )
        notices = (
            DEFAULT_NOTICE_REQUIREMENTS
            if self.notice_requirements is None
            else self.notice_requirements
        )
        object.__setattr__(
            self,
            "notice_requirements",
            {code: _coerce(n, PlanningNoticeRequirement) for code, n in notices.items()},
        )
        object.__setattr__(
            self,
            "appeal_deadlines",
            tuple(_coerce(a, AppealDeadline) for a in self.appeal_deadlines),
        )

        codes = [c.code for c in self.case_types]
        if len(codes) != len(set(codes)):
            raise ValueError("case_types must have unique codes")
        unknown = set(self.notice_requirements) - set(codes)
        if unknown:
            raise ValueError(f"notice requirements for unknown case types: {sorted(unknown)}")
