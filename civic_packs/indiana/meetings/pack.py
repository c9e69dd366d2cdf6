"""
Indiana meetings packs.

``IndianaMeetingsPack`` is the static Open Door Law configuration, kept
as a legacy pack for callers that look packs up by jurisdiction profile.
``IndianaMeetingsDomainPack`` derives the same configuration per tenant
and is what the resolver uses, since a domain pack takes precedence over
legacy packs for the same key.
"""

from __future__ import annotations

from typing import Any

from civic_kernel.domain.jurisdiction import EntityClass, JurisdictionProfile, TenantIdentity
from civic_kernel.domain.packs import BaseDomainPack, BaseLegacyPack
from civic_packs.indiana.meetings.config import (
    ExecutiveSessionTopic,
    IndianaMeetingsConfig,
    MeetingType,
    NoticeRequirement,
)

# Bodies each class of unit typically convenes.
GOVERNING_BODIES_BY_ENTITY_CLASS: dict[EntityClass, tuple[str, ...]] = {
    EntityClass.TOWN: ("COUNCIL", "BOARD"),
    EntityClass.CITY: ("COUNCIL", "BOARD", "COMMISSION"),
    EntityClass.TOWNSHIP: ("BOARD",),
    EntityClass.COUNTY: ("COUNCIL", "COMMISSION"),
    EntityClass.SPECIAL_DISTRICT: ("BOARD",),
}


def notice_requirement(
    config: IndianaMeetingsConfig,
    meeting_type: MeetingType | str,
) -> NoticeRequirement:
    """
    Notice an Indiana governing body must give before a meeting.

    Regular and special meetings count notice hours excluding weekends
    and legal holidays (IC 5-14-1.5-5(a)); emergency meetings do not,
    but need a stated emergency.
    """
    meeting_type = MeetingType(meeting_type)
    emergency = meeting_type is MeetingType.EMERGENCY
    return NoticeRequirement(
        meeting_type=meeting_type,
        notice_hours=config.notice_hours_for(meeting_type),
        excludes_weekends=not emergency,
        excludes_holidays=not emergency,
        posting_locations=config.default_posting_locations,
        requires_emergency_justification=emergency,
    )


class IndianaMeetingsPack(BaseLegacyPack):
    state = "IN"
    domain = "meetings"
    version = "1.0.0"

    config: IndianaMeetingsConfig

    def __init__(self, config: IndianaMeetingsConfig | None = None):
        super().__init__(config if config is not None else IndianaMeetingsConfig())

    def applies_to(self, profile: JurisdictionProfile) -> bool:
        return profile.state == self.state

    def get_notice_requirements(self, meeting_type: MeetingType | str) -> NoticeRequirement:
        return notice_requirement(self.config, meeting_type)

    def get_executive_session_topics(self) -> tuple[ExecutiveSessionTopic, ...]:
        return self.config.allowed_exec_session_topics


class IndianaMeetingsDomainPack(BaseDomainPack):
    state = "IN"
    domain = "meetings"
    config_type = IndianaMeetingsConfig

    def derive_defaults(self, identity: TenantIdentity) -> dict[str, Any]:
        defaults = IndianaMeetingsConfig().to_mapping()
        defaults["governing_body_types"] = GOVERNING_BODIES_BY_ENTITY_CLASS.get(
            identity.entity_class, ("BOARD",)
        )
        return defaults
