"""Indiana meetings domain: Open Door Law (legacy pack and domain pack)."""

from civic_packs.indiana.meetings.config import (
    ExecutiveSessionTopic,
    IndianaMeetingsConfig,
    MeetingType,
    NoticeRequirement,
    PostingLocation,
    QuorumMinimum,
    QuorumRules,
)
from civic_packs.indiana.meetings.pack import (
    IndianaMeetingsDomainPack,
    IndianaMeetingsPack,
    notice_requirement,
)

__all__ = [
    "ExecutiveSessionTopic",
    "IndianaMeetingsConfig",
    "IndianaMeetingsDomainPack",
    "IndianaMeetingsPack",
    "MeetingType",
    "NoticeRequirement",
    "PostingLocation",
    "QuorumMinimum",
    "QuorumRules",
    "notice_requirement",
]
