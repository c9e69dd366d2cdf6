"""
Indiana records legacy pack.

A static retention configuration that applies to every Indiana
jurisdiction profile.
"""

from __future__ import annotations

from civic_kernel.domain.jurisdiction import JurisdictionProfile
from civic_kernel.domain.packs import BaseLegacyPack
from civic_packs.indiana.records.config import IndianaRecordsConfig, RetentionSchedule


class IndianaRecordsPack(BaseLegacyPack):
    state = "IN"
    domain = "records"
    version = "1.0.0"

    config: IndianaRecordsConfig

    def __init__(self, config: IndianaRecordsConfig | None = None):
        super().__init__(config if config is not None else IndianaRecordsConfig())

    def applies_to(self, profile: JurisdictionProfile) -> bool:
        return profile.state == self.state

    def get_retention_schedule(self, record_type: str) -> RetentionSchedule | None:
        return self.config.schedule_for(record_type)

    def requires_commission_approval(self, record_type: str) -> bool:
        """Unknown record types require approval before destruction."""
        schedule = self.get_retention_schedule(record_type)
        return schedule.requires_commission_approval if schedule else True
