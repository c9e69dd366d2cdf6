"""Helpers jurisdiction packs use to declare rules, citations and opinions."""

from __future__ import annotations

from collections.abc import Iterable, Mapping
from datetime import date
from decimal import ROUND_HALF_UP, Decimal
from typing import Any

from civic_kernel.compliance.types import (
    CitationSource,
    EntityType,
    ExecutableRule,
    LegalCitation,
    LegalOpinion,
    RuleCategory,
    RuleCondition,
    RuleEvaluationContext,
    RuleSeverity,
    Violation,
)
from civic_kernel.domain.jurisdiction import LocalGovKind
from civic_kernel.exceptions import RuleDefinitionError

_CENT = Decimal("0.01")


def format_amount(amount: Decimal | int | None) -> str:
    """Render a money amount as ``$1,234.56`` (negative as ``-$1,234.56``)."""
    if amount is None:
        return "$0.00"
    value = Decimal(amount).quantize(_CENT, rounding=ROUND_HALF_UP)
    sign = "-" if value < 0 else ""
    return f"{sign}${abs(value):,.2f}"


def render_message(template: str, **values: Any) -> str:
    """
    Fill ``{name}`` placeholders in a rule's message template.

    Decimal values are rendered with ``format_amount``. Unknown placeholders
    are left as-is so a template typo never hides a violation.
    """
    rendered = template
    for key, value in values.items():
        text = format_amount(value) if isinstance(value, Decimal) else str(value)
        rendered = rendered.replace("{" + key + "}", text)
    return rendered


def create_citation(
    code: str,
    title: str,
    description: str,
    source: CitationSource = CitationSource.INDIANA_CODE,
    *,
    url: str | None = None,
    year: int | None = None,
    keywords: Iterable[str] = (),
) -> LegalCitation:
    return LegalCitation(
        code=code,
        title=title,
        description=description,
        source=source,
        url=url,
        year=year,
        keywords=tuple(keywords),
    )


def create_legal_opinion(
    opinion_id: str,
    title: str,
    summary: str,
    category: RuleCategory,
    citations: Iterable[LegalCitation],
    keywords: Iterable[str],
    *,
    jurisdiction: str | None = None,
    authority: str | None = None,
    issued_date: date | None = None,
    is_current: bool = True,
    url: str | None = None,
) -> LegalOpinion:
    return LegalOpinion(
        id=opinion_id,
        title=title,
        summary=summary,
        category=category,
        citations=tuple(citations),
        keywords=tuple(keywords),
        jurisdiction=jurisdiction,
        authority=authority,
        issued_date=issued_date,
        is_current=is_current,
        url=url,
    )


def create_rule(
    *,
    rule_id: str,
    name: str,
    description: str,
    category: RuleCategory,
    severity: RuleSeverity,
    message_template: str,
    condition: RuleCondition,
    citation: LegalCitation | None = None,
    additional_citations: Iterable[LegalCitation] = (),
    legal_opinion_id: str | None = None,
    correction_guidance: str | None = None,
    state: str | None = None,
    jurisdiction_types: Iterable[LocalGovKind] | None = None,
    effective_date: date | None = None,
    sunset_date: date | None = None,
    is_active: bool = True,
    tags: Iterable[str] = (),
) -> ExecutableRule:
    """
    Declare an executable rule.

    Raises:
        RuleDefinitionError: empty id, or a sunset date before the
            effective date.
    """
    if not rule_id:
        raise RuleDefinitionError("Rule id must not be empty")
    if effective_date and sunset_date and sunset_date < effective_date:
        raise RuleDefinitionError(
            f"Rule {rule_id} sunsets ({sunset_date}) before it takes effect "
            f"({effective_date})"
        )
    return ExecutableRule(
        id=rule_id,
        name=name,
        description=description,
        category=category,
        severity=severity,
        message_template=message_template,
        condition=condition,
        citation=citation,
        additional_citations=tuple(additional_citations),
        legal_opinion_id=legal_opinion_id,
        correction_guidance=correction_guidance,
        state=state,
        jurisdiction_types=(
            tuple(jurisdiction_types) if jurisdiction_types is not None else None
        ),
        effective_date=effective_date,
        sunset_date=sunset_date,
        is_active=is_active,
        tags=tuple(tags),
    )


def create_violation(
    rule: ExecutableRule,
    context: RuleEvaluationContext,
    *,
    message: str,
    entity_type: EntityType | None = None,
    entity_id: str | None = None,
    entity_description: str | None = None,
    actual_value: Decimal | None = None,
    expected_value: Decimal | None = None,
    details: Mapping[str, Any] | None = None,
    severity: RuleSeverity | None = None,
    citation: LegalCitation | None = None,
    correction_guidance: str | None = None,
) -> Violation:
    """A violation pre-filled from ``rule``, dated to the evaluation date."""
    return Violation(
        rule_id=rule.id,
        rule_name=rule.name,
        category=rule.category,
        severity=severity or rule.severity,
        message=message,
        detected_at=context.evaluation_date,
        entity_type=entity_type,
        entity_id=entity_id,
        entity_description=entity_description,
        actual_value=actual_value,
        expected_value=expected_value,
        citation=citation or rule.citation,
        legal_opinion_id=rule.legal_opinion_id,
        correction_guidance=correction_guidance or rule.correction_guidance,
        details=dict(details or {}),
    )
