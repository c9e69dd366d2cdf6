"""
Indiana Meetings Configuration Schema.

Open Door Law settings (IC 5-14-1.5): notice periods, posting, minutes
and the executive session topics a governing body may meet on.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from enum import Enum
from typing import Any

from civic_kernel.domain.packs import DomainConfig

GOVERNING_BODY_TYPES = {
    "COUNCIL",
    "BOARD",
    "COMMISSION",
    "BZA",
    "PLAN_COMMISSION",
    "REDEVELOPMENT",
    "PARKS_BOARD",
    "UTILITY_BOARD",
}
NOTICE_CHANNELS = {"website", "physicalPosting", "newspaper", "email", "socialMedia"}
POSTING_LOCATION_TYPES = {"physical", "electronic"}


class MeetingType(str, Enum):
    REGULAR = "regular"
    SPECIAL = "special"
    EMERGENCY = "emergency"


class QuorumMinimum(str, Enum):
    MAJORITY = "majority"
    TWO_THIRDS = "two-thirds"
    SPECIFIC = "specific"


@dataclass(frozen=True)
class PostingLocation:
    id: str
    name: str
    location_type: str = "physical"
    is_primary: bool = False

    def __post_init__(self):
        if self.location_type not in POSTING_LOCATION_TYPES:
            raise ValueError(
                f"location_type must be one of {POSTING_LOCATION_TYPES}, "
                f"got '{self.location_type}'"
            )


@dataclass(frozen=True)
class ExecutiveSessionTopic:
    code: str
    description: str
    citation_code: str | None = None


@dataclass(frozen=True)
class MinutesRequirements:
    requires_memoranda: bool = True
    retention_years: int = 10
    must_record_votes: bool = True
    must_record_absences: bool = True


@dataclass(frozen=True)
class QuorumRules:
    minimum_for_quorum: QuorumMinimum = QuorumMinimum.MAJORITY
    specific_number: int | None = None
    counts_absentees: bool = False

    def __post_init__(self):
        if not isinstance(self.minimum_for_quorum, QuorumMinimum):
            object.__setattr__(
                self, "minimum_for_quorum", QuorumMinimum(self.minimum_for_quorum)
            )
        if self.minimum_for_quorum is QuorumMinimum.SPECIFIC and not self.specific_number:
            raise ValueError("specific_number is required for a 'specific' quorum")


@dataclass(frozen=True)
class NoticeRequirement:
    """What the Open Door Law asks before one kind of meeting."""

    meeting_type: MeetingType
    notice_hours: int
    excludes_weekends: bool
    excludes_holidays: bool
    posting_locations: tuple[PostingLocation, ...]
    requires_emergency_justification: bool = False


DEFAULT_POSTING_LOCATIONS: tuple[PostingLocation, ...] = (
    PostingLocation(
        id="municipal-building",
        name="Municipal Building Bulletin Board",
        location_type="physical",
        is_primary=True,
    ),
)

DEFAULT_EXEC_SESSION_TOPICS: tuple[ExecutiveSessionTopic, ...] = (
    ExecutiveSessionTopic(
        code="PERSONNEL",
        description="Job performance evaluation of individual employees.",
        citation_code="IC 5-14-1.5-6.1(b)(6)",
    ),
    ExecutiveSessionTopic(
        code="LITIGATION",
        description="Strategy discussion on initiating or pending litigation.",
        citation_code="IC 5-14-1.5-6.1(b)(2)(B)",
    ),
    ExecutiveSessionTopic(
        code="NEGOTIATIONS",
        description="Strategy for collective bargaining or labor negotiations.",
        citation_code="IC 5-14-1.5-6.1(b)(4)",
    ),
    ExecutiveSessionTopic(
        code="REAL_ESTATE",
        description="Purchase or lease of real property before a public offering.",
        citation_code="IC 5-14-1.5-6.1(b)(2)(D)",
    ),
    ExecutiveSessionTopic(
        code="SECURITY",
        description="Records classified as confidential by state or federal statute.",
        citation_code="IC 5-14-1.5-6.1(b)(7)",
    ),
)


def _coerce(value: Any, cls: type) -> Any:
    return cls(**value) if isinstance(value, Mapping) else value


@dataclass(frozen=True)
class IndianaMeetingsConfig(DomainConfig):
    domain: str = "meetings"

    # Notice periods in hours (IC 5-14-1.5-5)
    regular_meeting_notice_hours: int = 48
    special_meeting_notice_hours: int = 48
    emergency_meeting_notice_hours: int = 0

    # Meeting patterns
    default_regular_meeting_day: str | None = None
    default_regular_meeting_time: str | None = None
    supports_remote_participation: bool = False

    governing_body_types: tuple[str, ...] = ("COUNCIL", "BOARD")
    requires_agenda_posting: bool = True
    requires_minutes: bool = True

    # Posting
    notice_channels: tuple[str, ...] = ("website", "physicalPosting")
    default_posting_locations: tuple[PostingLocation, ...] = DEFAULT_POSTING_LOCATIONS
    electronic_posting_enabled: bool = True

    # Retention
    minutes_retention_years: int = 10
    recording_retention_days: int = 90
    minutes_requirements: MinutesRequirements = MinutesRequirements()

    allowed_exec_session_topics: tuple[ExecutiveSessionTopic, ...] = DEFAULT_EXEC_SESSION_TOPICS
    quorum_rules: QuorumRules = QuorumRules()

    def __post_init__(self):
        object.__setattr__(self, "governing_body_types", tuple(self.governing_body_types))
        object.__setattr__(self, "notice_channels", tuple(self.notice_channels))
        object.__setattr__(
            self,
            "default_posting_locations",
            tuple(_coerce(p, PostingLocation) for p in self.default_posting_locations),
        )
        object.__setattr__(
            self,
            "allowed_exec_session_topics",
            tuple(_coerce(t, ExecutiveSessionTopic) for t in self.allowed_exec_session_topics),
        )
        object.__setattr__(
            self, "minutes_requirements", _coerce(self.minutes_requirements, MinutesRequirements)
        )
        object.__setattr__(self, "quorum_rules", _coerce(self.quorum_rules, QuorumRules))

        for name in (
            "regular_meeting_notice_hours",
            "special_meeting_notice_hours",
            "emergency_meeting_notice_hours",
            "minutes_retention_years",
            "recording_retention_days",
        ):
            if getattr(self, name) < 0:
                raise ValueError(f"{name} cannot be negative")

        unknown_bodies = set(self.governing_body_types) - GOVERNING_BODY_TYPES
        if unknown_bodies:
            raise ValueError(f"unknown governing body types: {sorted(unknown_bodies)}")
        unknown_channels = set(self.notice_channels) - NOTICE_CHANNELS
        if unknown_channels:
            raise ValueError(f"unknown notice channels: {sorted(unknown_channels)}")

    def notice_hours_for(self, meeting_type: MeetingType) -> int:
        return {
            MeetingType.REGULAR: self.regular_meeting_notice_hours,
            MeetingType.SPECIAL: self.special_meeting_notice_hours,
            MeetingType.EMERGENCY: self.emergency_meeting_notice_hours,
        }[meeting_type]
