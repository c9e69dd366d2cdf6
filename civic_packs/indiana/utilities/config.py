"""
Indiana Utilities Configuration Schema.

Municipally owned utilities (IC 8-1.5): utility types and their funds,
rate-setting procedure, disconnection protections and billing limits.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from civic_kernel.domain.packs import DomainConfig


class ApprovalBody(str, Enum):
    COUNCIL = "council"
    IURC = "iurc"  # Indiana Utility Regulatory Commission
    UTILITY_BOARD = "utility-board"


@dataclass(frozen=True)
class UtilityType:
    code: str
    name: str
    description: str
    fund_code: str | None = None
    citation_code: str | None = None


@dataclass(frozen=True)
class RateSettingRequirement:
    utility_type: str
    iurc_jurisdiction: bool
    requires_public_hearing: bool
    notice_days: int
    approval_body: ApprovalBody
    citation_code: str | None = None

    def __post_init__(self):
        if not isinstance(self.approval_body, ApprovalBody):
            object.__setattr__(self, "approval_body", ApprovalBody(self.approval_body))
        if self.notice_days < 0:
            raise ValueError("notice_days cannot be negative")


@dataclass(frozen=True)
class WinterMoratorium:
    enabled: bool
    start_month: int
    end_month: int
    temperature_threshold: int | None = None
    notes: str | None = None

    def __post_init__(self):
        for month in (self.start_month, self.end_month):
            if not 1 <= month <= 12:
                raise ValueError(f"moratorium month {month} out of range")

    def covers_month(self, month: int) -> bool:
        """True when ``month`` falls inside the moratorium; the window may wrap the year."""
        if not self.enabled:
            return False
        if self.start_month <= self.end_month:
            return self.start_month <= month <= self.end_month
        return month >= self.start_month or month <= self.end_month


@dataclass(frozen=True)
class MedicalCertificateRules:
    allows_delay: bool = True
    delay_days: int = 30
    max_extensions: int = 2


@dataclass(frozen=True)
class DisconnectionRules:
    minimum_notice_days: int
    winter_moratorium: WinterMoratorium | None = None
    medical_certificate_rules: MedicalCertificateRules | None = None
    reconnection_fee: Decimal | None = None
    citation_code: str | None = None

    def __post_init__(self):
        if isinstance(self.winter_moratorium, Mapping):
            object.__setattr__(
                self, "winter_moratorium", WinterMoratorium(**self.winter_moratorium)
            )
        if isinstance(self.medical_certificate_rules, Mapping):
            object.__setattr__(
                self,
                "medical_certificate_rules",
                MedicalCertificateRules(**self.medical_certificate_rules),
            )
        if self.reconnection_fee is not None and not isinstance(self.reconnection_fee, Decimal):
            try:
                fee = Decimal(str(self.reconnection_fee))
            except InvalidOperation:
                raise ValueError(
                    f"reconnection_fee must be a decimal amount, got {self.reconnection_fee!r}"
                ) from None
            object.__setattr__(self, "reconnection_fee", fee)
        if self.minimum_notice_days < 0:
            raise ValueError("minimum_notice_days cannot be negative")


@dataclass(frozen=True)
class BillingRequirements:
    bill_due_minimum_days: int = 21
    late_fee_max_percent: int = 10
    deposit_max_months: int = 2


DEFAULT_UTILITY_TYPES: tuple[UtilityType, ...] = (
    UtilityType(
        code="water",
        name="Water Utility",
        description="Municipal water supply and distribution.",
        fund_code="601",
        citation_code="IC 8-1.5-3",
    ),
    UtilityType(
        code="sewer",
        name="Sewer Utility",
        description="Municipal wastewater collection and treatment.",
        fund_code="602",
        citation_code="IC 8-1.5-3",
    ),
    UtilityType(
        code="stormwater",
        name="Stormwater Utility",
        description="Stormwater management and drainage.",
        fund_code="603",
        citation_code="IC 8-1.5-5",
    ),
    UtilityType(
        code="electric",
        name="Electric Utility",
        description="Municipal electric generation and distribution.",
        fund_code="610",
    ),
    UtilityType(
        code="gas",
        name="Gas Utility",
        description="Municipal natural gas distribution.",
        fund_code="620",
    ),
)

DEFAULT_RATE_SETTING: Mapping[str, RateSettingRequirement] = {
    # municipal water, sewer and stormwater rates are set locally
    "water": RateSettingRequirement(
        "water", False, True, 10, ApprovalBody.COUNCIL, citation_code="IC 8-1.5-3-8"
    ),
    "sewer": RateSettingRequirement(
        "sewer", False, True, 10, ApprovalBody.COUNCIL, citation_code="IC 8-1.5-3-8"
    ),
    "stormwater": RateSettingRequirement(
        "stormwater", False, True, 10, ApprovalBody.COUNCIL, citation_code="IC 8-1.5-5"
    ),
    "electric": RateSettingRequirement("electric", True, True, 30, ApprovalBody.IURC),
}

DEFAULT_DISCONNECTION_RULES = DisconnectionRules(
    minimum_notice_days=14,
    winter_moratorium=WinterMoratorium(
        enabled=True,
        start_month=12,
        end_month=3,
        temperature_threshold=32,
        notes="Disconnection restricted when temperature is below 32°F.",
    ),
    medical_certificate_rules=MedicalCertificateRules(),
    reconnection_fee=Decimal("25.00"),
    citation_code="IC 8-1-2-121",
)


def _coerce(value: Any, cls: type) -> Any:
    return cls(**value) if isinstance(value, Mapping) else value


@dataclass(frozen=True)
class IndianaUtilitiesConfig(DomainConfig):
    domain: str = "utilities"
    utility_types: tuple[UtilityType, ...] = DEFAULT_UTILITY_TYPES
    rate_setting_requirements: Mapping[str, RateSettingRequirement] | None = None
    disconnection_rules: DisconnectionRules = DEFAULT_DISCONNECTION_RULES
    billing_requirements: BillingRequirements = BillingRequirements()

    def __post_init__(self):
        object.__setattr__(
            self, "utility_types", tuple(_coerce(u, UtilityType) for u in self.utility_types)
        )
        requirements = (
            DEFAULT_RATE_SETTING
            if self.rate_setting_requirements is None
            else self.rate_setting_requirements
        )
        object.__setattr__(
            self,
            "rate_setting_requirements",
            {code: _coerce(r, RateSettingRequirement) for code, r in requirements.items()},
        )
        object.__setattr__(
            self, "disconnection_rules", _coerce(self.disconnection_rules, DisconnectionRules)
        )
        object.__setattr__(
            self, "billing_requirements", _coerce(self.billing_requirements, BillingRequirements)
        )

        codes = [u.code for u in self.utility_types]
        if len(codes) != len(set(codes)):
            raise ValueError("utility_types must have unique codes")
        unknown = set(self.rate_setting_requirements) - set(codes)
        if unknown:
            raise ValueError(f"rate setting for unknown utility types: {sorted(unknown)}")

    def utility_type(self, code: str) -> UtilityType | None:
        for utility in self.utility_types:
            if utility.code == code:
                return utility
        return None
