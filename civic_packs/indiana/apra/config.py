"""
Indiana APRA Configuration Schema.

Access to Public Records Act (IC 5-14-3): response deadlines, copy fees,
delivery methods, exemptions from disclosure and denial reasons.
"""

from collections.abc import Mapping
from dataclasses import dataclass
from decimal import Decimal, InvalidOperation
from enum import Enum
from typing import Any

from civic_kernel.domain.packs import DomainConfig

DELIVERY_METHODS = {"email", "postal", "inPerson", "portal"}


class ExemptionCategory(str, Enum):
    CONFIDENTIAL = "confidential"  # IC 5-14-3-4(a): may not be disclosed
    DISCRETIONARY = "discretionary"  # IC 5-14-3-4(b): agency may withhold


@dataclass(frozen=True)
class ApraExemption:
    code: str
    category: ExemptionCategory
    description: str
    citation_code: str | None = None
    notes: str | None = None

    def __post_init__(self):
        if not isinstance(self.category, ExemptionCategory):
            object.__setattr__(self, "category", ExemptionCategory(self.category))


@dataclass(frozen=True)
class DenialReason:
    code: str
    description: str
    citation_code: str | None = None


@dataclass(frozen=True)
class PacContact:
    name: str
    phone: str | None = None
    email: str | None = None
    url: str | None = None


DEFAULT_APRA_EXEMPTIONS: tuple[ApraExemption, ...] = (
    ApraExemption(
        code="CONFIDENTIAL_STATUTE",
        category=ExemptionCategory.CONFIDENTIAL,
        description="Records declared confidential by state statute, rule, or federal law.",
        citation_code="IC 5-14-3-4(a)",
    ),
    ApraExemption(
        code="INVESTIGATORY",
        category=ExemptionCategory.DISCRETIONARY,
        description="Investigatory records of a law enforcement agency.",
        citation_code="IC 5-14-3-4(b)(1)",
    ),
    ApraExemption(
        code="DELIBERATIVE",
        category=ExemptionCategory.DISCRETIONARY,
        description="Intra-agency or interagency advisory communications.",
        citation_code="IC 5-14-3-4(b)(6)",
    ),
    ApraExemption(
        code="PERSONNEL_FILE",
        category=ExemptionCategory.DISCRETIONARY,
        description="Personnel files except name, compensation, job title, etc.",
        citation_code="IC 5-14-3-4(b)(8)",
    ),
    ApraExemption(
        code="ATTORNEY_CLIENT",
        category=ExemptionCategory.CONFIDENTIAL,
        description="Attorney-client privileged communications.",
        citation_code="IC 5-14-3-4(a)(4)",
    ),
    ApraExemption(
        code="WORK_PRODUCT",
        category=ExemptionCategory.CONFIDENTIAL,
        description="Attorney work product.",
        citation_code="IC 5-14-3-4(a)(5)",
    ),
    ApraExemption(
        code="SOCIAL_SECURITY",
        category=ExemptionCategory.CONFIDENTIAL,
        description="Social Security numbers.",
        citation_code="IC 5-14-3-4(a)(12)",
    ),
)

DEFAULT_DENIAL_REASONS: tuple[DenialReason, ...] = (
    DenialReason("NO_RECORDS_EXIST", "No records responsive to the request exist."),
    DenialReason(
        "EXEMPT_CONFIDENTIAL",
        "Records are exempt as confidential under IC 5-14-3-4(a).",
    ),
    DenialReason(
        "EXEMPT_DISCRETIONARY",
        "Records are exempt under IC 5-14-3-4(b) and agency elects to withhold.",
    ),
    DenialReason(
        "LACKS_PARTICULARITY",
        "Request does not reasonably describe the records sought.",
    ),
    DenialReason(
        "UNREASONABLE_BURDEN",
        "Request would create an unreasonable burden on the agency.",
    ),
)

PAC_CONTACT = PacContact(
    name="Indiana Public Access Counselor",
    url="https://www.in.gov/pac/",
    email="pac@oag.in.gov",
)


def _amount(name: str, value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    try:
        return Decimal(str(value))
    except InvalidOperation:
        raise ValueError(f"{name} must be a decimal amount, got {value!r}") from None


@dataclass(frozen=True)
class IndianaApraConfig(DomainConfig):
    domain: str = "apra"

    # Deadlines (IC 5-14-3-9(a))
    standard_response_days: int = 7
    extension_response_days: int = 14
    business_days_only: bool = True

    # Fees (IC 5-14-3-8)
    allow_copy_fees: bool = True
    default_per_page_fee: Decimal = Decimal("0.10")
    certification_fee: Decimal = Decimal("5.00")
    allow_electronic_copy_fees: bool = False
    max_search_time_without_charge_minutes: int = 30
    fee_schedule_notes: str | None = (
        "Fees may be waived if furnishing information is in the public interest. "
        "Electronic records may be provided at cost of media."
    )

    # Delivery
    allowed_delivery_methods: tuple[str, ...] = ("email", "postal", "inPerson")
    allow_inspection_only_requests: bool = True

    # Exemptions and redaction
    requires_reasonable_particularity: bool = True
    requires_redaction_log: bool = True
    mask_sensitive_fields_by_default: bool = True
    exemptions: tuple[ApraExemption, ...] = DEFAULT_APRA_EXEMPTIONS
    denial_reasons: tuple[DenialReason, ...] = DEFAULT_DENIAL_REASONS

    # Request log
    log_requests: bool = True
    request_log_retention_years: int = 3

    pac_contact: PacContact | None = PAC_CONTACT

    def __post_init__(self):
        object.__setattr__(
            self, "default_per_page_fee", _amount("default_per_page_fee", self.default_per_page_fee)
        )
        object.__setattr__(
            self, "certification_fee", _amount("certification_fee", self.certification_fee)
        )
        object.__setattr__(
            self, "allowed_delivery_methods", tuple(self.allowed_delivery_methods)
        )
        object.__setattr__(
            self,
            "exemptions",
            tuple(e if isinstance(e, ApraExemption) else ApraExemption(**e) for e in self.exemptions),
        )
        object.__setattr__(
            self,
            "denial_reasons",
            tuple(
                r if isinstance(r, DenialReason) else DenialReason(**r)
                for r in self.denial_reasons
            ),
        )
        if isinstance(self.pac_contact, Mapping):
            object.__setattr__(self, "pac_contact", PacContact(**self.pac_contact))

        if self.standard_response_days < 0 or self.extension_response_days < 0:
            raise ValueError("response days cannot be negative")
        if self.default_per_page_fee < 0 or self.certification_fee < 0:
            raise ValueError("fees cannot be negative")

        unknown = set(self.allowed_delivery_methods) - DELIVERY_METHODS
        if unknown:
            raise ValueError(f"unknown delivery methods: {sorted(unknown)}")

        codes = [e.code for e in self.exemptions]
        if len(codes) != len(set(codes)):
            raise ValueError("exemptions must have unique codes")

    def exemption(self, code: str) -> ApraExemption | None:
        for exemption in self.exemptions:
            if exemption.code == code:
                return exemption
        return None
