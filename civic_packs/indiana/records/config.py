"""
Indiana Records Configuration Schema.

Records retention per IC 5-15 and the Indiana Archives and Records
Administration (IARA) schedules.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from typing import Any

from civic_kernel.domain.packs import DomainConfig

VALID_RETENTION_TRIGGERS = {"creation", "close", "superseded", "fiscal-year-end"}


@dataclass(frozen=True)
class RetentionSchedule:
    """Retention period for one record type. ``retention_years`` None means permanent."""

    record_type: str
    description: str
    retention_years: int | None
    retention_trigger: str
    requires_commission_approval: bool
    citation_code: str | None = None
    notes: str | None = None

    def __post_init__(self):
        if not self.record_type:
            raise ValueError("record_type cannot be empty")
        if self.retention_trigger not in VALID_RETENTION_TRIGGERS:
            raise ValueError(
                f"retention_trigger must be one of {VALID_RETENTION_TRIGGERS}, "
                f"got '{self.retention_trigger}'"
            )
        if self.retention_years is not None and self.retention_years < 0:
            raise ValueError("retention_years cannot be negative")

    @property
    def is_permanent(self) -> bool:
        return self.retention_years is None

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> "RetentionSchedule":
        years = values.get("retention_years")
        return cls(
            record_type=values["record_type"],
            description=values.get("description", ""),
            retention_years=None if years in (None, "permanent") else int(years),
            retention_trigger=values.get("retention_trigger", "creation"),
            requires_commission_approval=bool(
                values.get("requires_commission_approval", True)
            ),
            citation_code=values.get("citation_code"),
            notes=values.get("notes"),
        )


@dataclass(frozen=True)
class ArchivesContact:
    name: str
    phone: str | None = None
    email: str | None = None
    url: str | None = None


DEFAULT_RETENTION_SCHEDULES: tuple[RetentionSchedule, ...] = (
    RetentionSchedule(
        record_type="meeting-minutes",
        description="Official minutes of governing body meetings.",
        retention_years=None,
        retention_trigger="creation",
        requires_commission_approval=False,
        notes="Permanent retention required.",
    ),
    RetentionSchedule(
        record_type="ordinances",
        description="Adopted ordinances and resolutions.",
        retention_years=None,
        retention_trigger="creation",
        requires_commission_approval=False,
    ),
    RetentionSchedule(
        record_type="financial-records",
        description="General ledgers, journals, and annual reports.",
        retention_years=10,
        retention_trigger="fiscal-year-end",
        requires_commission_approval=True,
        citation_code="IC 5-15-6",
    ),
    RetentionSchedule(
        record_type="payroll-records",
        description="Payroll registers, timesheets, and related records.",
        retention_years=7,
        retention_trigger="fiscal-year-end",
        requires_commission_approval=True,
    ),
    RetentionSchedule(
        record_type="personnel-files",
        description="Employee personnel files.",
        retention_years=7,
        retention_trigger="close",  # after separation
        requires_commission_approval=True,
    ),
    RetentionSchedule(
        record_type="contracts",
        description="Executed contracts and agreements.",
        retention_years=10,
        retention_trigger="close",  # after expiration
        requires_commission_approval=True,
    ),
    RetentionSchedule(
        record_type="apra-requests",
        description="Public records requests and responses.",
        retention_years=3,
        retention_trigger="close",
        requires_commission_approval=True,
    ),
    RetentionSchedule(
        record_type="correspondence-general",
        description="General correspondence not related to specific programs.",
        retention_years=3,
        retention_trigger="creation",
        requires_commission_approval=True,
    ),
)

IARA_CONTACT = ArchivesContact(
    name="Indiana Archives and Records Administration",
    url="https://www.in.gov/iara/",
    email="arc@iara.in.gov",
)


@dataclass(frozen=True)
class IndianaRecordsConfig(DomainConfig):
    domain: str = "records"
    retention_schedules: tuple[RetentionSchedule, ...] = DEFAULT_RETENTION_SCHEDULES
    archives_contact: ArchivesContact | None = IARA_CONTACT
    commission_schedule: str | None = None

    def __post_init__(self):
        schedules = tuple(
            s if isinstance(s, RetentionSchedule) else RetentionSchedule.from_mapping(s)
            for s in self.retention_schedules
        )
        object.__setattr__(self, "retention_schedules", schedules)

        if isinstance(self.archives_contact, Mapping):
            object.__setattr__(
                self, "archives_contact", ArchivesContact(**self.archives_contact)
            )

        record_types = [s.record_type for s in schedules]
        if len(record_types) != len(set(record_types)):
            raise ValueError("retention_schedules must have unique record types")

    def schedule_for(self, record_type: str) -> RetentionSchedule | None:
        for schedule in self.retention_schedules:
            if schedule.record_type == record_type:
                return schedule
        return None
