"""Indiana records domain: retention schedules (legacy pack)."""

from civic_packs.indiana.records.config import (
    ArchivesContact,
    IndianaRecordsConfig,
    RetentionSchedule,
)
from civic_packs.indiana.records.pack import IndianaRecordsPack

__all__ = [
    "ArchivesContact",
    "IndianaRecordsConfig",
    "IndianaRecordsPack",
    "RetentionSchedule",
]
