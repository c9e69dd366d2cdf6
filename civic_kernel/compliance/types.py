"""
Compliance types -- Rules, evaluation snapshots, violations and legal references.

Responsibility:
    Value objects shared by the rule engine, the rule builders and the
    jurisdiction packs that ship rules.

Architecture position:
    Kernel > Compliance -- pure data, zero I/O.

Invariants enforced:
    - All value objects are frozen.
    - Monetary amounts are ``Decimal`` -- NEVER float.
    - ``Violation.detected_at`` is the context's evaluation date, so the
      same snapshot always yields equal violations.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import Decimal
from enum import Enum
from typing import Any

from civic_kernel.domain.jurisdiction import JurisdictionProfile, LocalGovKind

# ---------------------------------------------------------------------------
# Enumerations
# ---------------------------------------------------------------------------


class RuleCategory(str, Enum):
    APPROPRIATION = "APPROPRIATION"
    LEVY = "LEVY"
    SURPLUS = "SURPLUS"
    TRANSFER = "TRANSFER"
    PUBLICATION = "PUBLICATION"
    MEETING_NOTICE = "MEETING_NOTICE"
    DEBT = "DEBT"
    INVESTMENT = "INVESTMENT"
    PROCUREMENT = "PROCUREMENT"
    PAYROLL = "PAYROLL"
    REPORTING = "REPORTING"
    AUDIT = "AUDIT"


class RuleSeverity(str, Enum):
    """Violation severity. ``rank`` orders CRITICAL first."""

    INFO = "INFO"
    WARNING = "WARNING"
    ERROR = "ERROR"
    CRITICAL = "CRITICAL"

    @property
    def rank(self) -> int:
        return _SEVERITY_RANK[self]


_SEVERITY_RANK = {
    RuleSeverity.CRITICAL: 0,
    RuleSeverity.ERROR: 1,
    RuleSeverity.WARNING: 2,
    RuleSeverity.INFO: 3,
}


class EntityType(str, Enum):
    FUND = "FUND"
    ACCOUNT = "ACCOUNT"
    TRANSACTION = "TRANSACTION"
    BUDGET_LINE = "BUDGET_LINE"
    OVERALL = "OVERALL"


class CitationSource(str, Enum):
    INDIANA_CODE = "INDIANA_CODE"
    IAC = "IAC"
    SBOA_BULLETIN = "SBOA_BULLETIN"
    DLGF_MEMO = "DLGF_MEMO"
    ATTORNEY_GENERAL = "ATTORNEY_GENERAL"
    CASE_LAW = "CASE_LAW"
    OTHER = "OTHER"


class FundType(str, Enum):
    GOVERNMENTAL = "GOVERNMENTAL"
    PROPRIETARY = "PROPRIETARY"
    FIDUCIARY = "FIDUCIARY"


class BudgetLineType(str, Enum):
    REVENUE = "REVENUE"
    APPROPRIATION = "APPROPRIATION"
    TRANSFER = "TRANSFER"


class TransactionType(str, Enum):
    RECEIPT = "RECEIPT"
    DISBURSEMENT = "DISBURSEMENT"
    TRANSFER = "TRANSFER"
    ADJUSTMENT = "ADJUSTMENT"


class TransactionStatus(str, Enum):
    PENDING = "PENDING"
    POSTED = "POSTED"
    VOID = "VOID"


# ---------------------------------------------------------------------------
# Legal references
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class LegalCitation:
    """A statute, regulation or bulletin a rule rests on."""

    code: str  # e.g., "IC 6-1.1-18-4"
    title: str
    description: str
    source: CitationSource = CitationSource.INDIANA_CODE
    url: str | None = None
    year: int | None = None
    keywords: tuple[str, ...] = ()


@dataclass(frozen=True)
class LegalOpinion:
    """Plain-English guidance tied to one or more citations."""

    id: str
    title: str
    summary: str
    category: RuleCategory
    citations: tuple[LegalCitation, ...] = ()
    keywords: tuple[str, ...] = ()
    jurisdiction: str | None = None
    authority: str | None = None
    issued_date: date | None = None
    is_current: bool = True
    url: str | None = None

    def matches(self, query: str) -> bool:
        """Case-insensitive substring match over the searchable fields."""
        needle = query.lower()
        if needle in self.title.lower() or needle in self.summary.lower():
            return True
        if any(needle in keyword.lower() for keyword in self.keywords):
            return True
        return any(
            needle in citation.code.lower() or needle in citation.title.lower()
            for citation in self.citations
        )


# ---------------------------------------------------------------------------
# Evaluation snapshot
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Fund:
    id: str
    code: str
    name: str
    fund_type: FundType = FundType.GOVERNMENTAL
    is_restricted: bool = False
    current_balance: Decimal | None = None


@dataclass(frozen=True)
class BudgetLine:
    id: str
    fund_id: str
    fiscal_year: int
    line_type: BudgetLineType
    amount: Decimal


@dataclass(frozen=True)
class Transaction:
    id: str
    fund_id: str
    transaction_type: TransactionType
    amount: Decimal
    transaction_date: date
    status: TransactionStatus = TransactionStatus.POSTED
    target_fund_id: str | None = None
    description: str = ""

    @property
    def is_void(self) -> bool:
        return self.status is TransactionStatus.VOID


@dataclass(frozen=True)
class RuleEvaluationContext:
    """
    Read-only data snapshot a rule set is evaluated against.

    ``funds``/``budget_lines``/``transactions`` are None when the caller
    did not supply them; rules that need them then report nothing.
    """

    tenant_id: str
    fiscal_year: int
    evaluation_date: date
    jurisdiction: JurisdictionProfile | None = None
    funds: tuple[Fund, ...] | None = None
    budget_lines: tuple[BudgetLine, ...] | None = None
    transactions: tuple[Transaction, ...] | None = None
    additional_data: Mapping[str, Any] = field(default_factory=dict)


# ---------------------------------------------------------------------------
# Rules and violations
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class Violation:
    """One finding produced by one rule."""

    rule_id: str
    rule_name: str
    category: RuleCategory
    severity: RuleSeverity
    message: str
    detected_at: date
    entity_type: EntityType | None = None
    entity_id: str | None = None
    entity_description: str | None = None
    actual_value: Decimal | None = None
    expected_value: Decimal | None = None
    citation: LegalCitation | None = None
    legal_opinion_id: str | None = None
    correction_guidance: str | None = None
    details: Mapping[str, Any] = field(default_factory=dict)


RuleCondition = Callable[[RuleEvaluationContext], list[Violation]]


@dataclass(frozen=True)
class ExecutableRule:
    """
    A compliance rule: descriptive fields plus the function that checks it.

    ``condition`` must be deterministic and must not mutate the context.
    Applicability filters (``state``, ``jurisdiction_types``, dates,
    ``is_active``) are applied by the engine before ``condition`` runs.
    """

    id: str
    name: str
    description: str
    category: RuleCategory
    severity: RuleSeverity
    message_template: str
    condition: RuleCondition = field(repr=False, compare=False)
    citation: LegalCitation | None = None
    additional_citations: tuple[LegalCitation, ...] = ()
    legal_opinion_id: str | None = None
    correction_guidance: str | None = None
    state: str | None = None
    jurisdiction_types: tuple[LocalGovKind, ...] | None = None
    effective_date: date | None = None
    sunset_date: date | None = None
    is_active: bool = True
    tags: tuple[str, ...] = ()

    def evaluate(self, context: RuleEvaluationContext) -> list[Violation]:
        return list(self.condition(context))

    def applies_to(self, context: RuleEvaluationContext) -> bool:
        if not self.is_active:
            return False

        profile = context.jurisdiction
        if profile is not None:
            if self.state and self.state != profile.state:
                return False
            if (
                self.jurisdiction_types is not None
                and profile.kind not in self.jurisdiction_types
            ):
                return False

        if self.effective_date and context.evaluation_date < self.effective_date:
            return False
        if self.sunset_date and context.evaluation_date > self.sunset_date:
            return False
        return True


# ---------------------------------------------------------------------------
# Engine results
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class SeveritySummary:
    critical: int = 0
    errors: int = 0
    warnings: int = 0
    info: int = 0

    @classmethod
    def of(cls, violations: list[Violation]) -> SeveritySummary:
        counts = {severity: 0 for severity in RuleSeverity}
        for violation in violations:
            counts[violation.severity] += 1
        return cls(
            critical=counts[RuleSeverity.CRITICAL],
            errors=counts[RuleSeverity.ERROR],
            warnings=counts[RuleSeverity.WARNING],
            info=counts[RuleSeverity.INFO],
        )


@dataclass(frozen=True)
class RuleValidationResult:
    """Outcome of ``RuleEngine.validate``."""

    tenant_id: str
    fiscal_year: int
    evaluated_on: date
    rules_checked: int
    violations: tuple[Violation, ...]
    summary: SeveritySummary
    by_category: Mapping[RuleCategory, int]

    @property
    def passed(self) -> bool:
        """No CRITICAL or ERROR findings."""
        return self.summary.critical == 0 and self.summary.errors == 0

    @property
    def can_file(self) -> bool:
        """No CRITICAL findings; warnings and errors do not block filing."""
        return self.summary.critical == 0

    @property
    def rules_passed(self) -> int:
        failed = {violation.rule_id for violation in self.violations}
        return self.rules_checked - len(failed)


@dataclass(frozen=True)
class ExplainedViolation:
    """A violation with its rule, legal context and suggested next steps."""

    violation: Violation
    rule: ExecutableRule | None
    citation: LegalCitation | None
    legal_opinion: LegalOpinion | None
    plain_english_explanation: str
    correction_steps: tuple[str, ...] = ()
