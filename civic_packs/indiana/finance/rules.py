"""
Indiana finance compliance rules.

Responsibility:
    Declares the Indiana finance rule set: appropriation control, levy
    growth, excess balance, restricted transfers, AFR filing and negative
    balances, each backed by an Indiana Code citation.

Invariants enforced:
    - Every rule returns no violations when the snapshot lacks the data it
      needs (funds, budget lines, transactions, or levy data).
    - VOID transactions never count toward disbursements or transfers.
    - Amounts are summed as ``Decimal``.
"""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date
from decimal import Decimal
from typing import Any

from civic_kernel.compliance import (
    BudgetLine,
    BudgetLineType,
    EntityType,
    ExecutableRule,
    FundType,
    RuleCategory,
    RuleEvaluationContext,
    RuleSeverity,
    Transaction,
    TransactionType,
    Violation,
    create_rule,
    create_violation,
    render_message,
)
from civic_packs.indiana.finance import citations

ZERO = Decimal("0")


def _appropriated(budget_lines: Iterable[BudgetLine], fund_id: str) -> Decimal:
    return sum(
        (
            line.amount
            for line in budget_lines
            if line.fund_id == fund_id and line.line_type is BudgetLineType.APPROPRIATION
        ),
        ZERO,
    )


def _disbursed(
    transactions: Iterable[Transaction],
    fund_id: str,
    year: int | None = None,
) -> Decimal:
    return sum(
        (
            t.amount
            for t in transactions
            if t.fund_id == fund_id
            and t.transaction_type is TransactionType.DISBURSEMENT
            and not t.is_void
            and (year is None or t.transaction_date.year == year)
        ),
        ZERO,
    )


def _amount(value: Any) -> Decimal:
    if isinstance(value, Decimal):
        return value
    return Decimal(str(value))


# ---------------------------------------------------------------------------
# Appropriations
# ---------------------------------------------------------------------------


def _check_appropriations(context: RuleEvaluationContext) -> list[Violation]:
    if context.funds is None or context.budget_lines is None or context.transactions is None:
        return []

    rule = APPROPRIATION_EXCEEDED
    violations = []
    for fund in context.funds:
        appropriations = _appropriated(context.budget_lines, fund.id)
        disbursements = _disbursed(context.transactions, fund.id)

        if disbursements > appropriations and appropriations > 0:
            overage = disbursements - appropriations
            violations.append(
                create_violation(
                    rule,
                    context,
                    message=render_message(
                        rule.message_template,
                        fund_code=fund.code,
                        fund_name=fund.name,
                        actual=disbursements,
                        limit=appropriations,
                    ),
                    entity_type=EntityType.FUND,
                    entity_id=fund.id,
                    entity_description=f"{fund.code} - {fund.name}",
                    actual_value=disbursements,
                    expected_value=appropriations,
                    details={
                        "fund_code": fund.code,
                        "fund_name": fund.name,
                        "disbursements": disbursements,
                        "appropriations": appropriations,
                        "overage_amount": overage,
                        "overage_percent": overage / appropriations * 100,
                    },
                )
            )
    return violations


APPROPRIATION_EXCEEDED = create_rule(
    rule_id="IN-APPROP-001",
    name="Expenditures Cannot Exceed Appropriations",
    description="Disbursements in any fund may not exceed the appropriated amount",
    category=RuleCategory.APPROPRIATION,
    severity=RuleSeverity.ERROR,
    citation=citations.APPROPRIATION_LIMIT,
    additional_citations=[citations.ADDITIONAL_APPROPRIATION],
    legal_opinion_id="IN-APPROP-001",
    message_template=(
        "Fund {fund_code} ({fund_name}) expenditures of {actual} exceed "
        "appropriation of {limit}"
    ),
    correction_guidance="Request an additional appropriation or reduce expenditures",
    state="IN",
    condition=_check_appropriations,
    tags=["budget"],
)


# ---------------------------------------------------------------------------
# Levy
# ---------------------------------------------------------------------------


def _check_levy_growth(context: RuleEvaluationContext) -> list[Violation]:
    levy_data = context.additional_data.get("levy_data") or {}
    proposed = levy_data.get("proposed_levy")
    prior = levy_data.get("prior_year_levy")
    quotient = levy_data.get("growth_quotient")
    # Zero or missing inputs mean the levy worksheet is incomplete.
    if not proposed or not prior or not quotient:
        return []

    rule = LEVY_GROWTH_LIMIT
    proposed, prior, quotient = _amount(proposed), _amount(prior), _amount(quotient)
    max_levy = prior * quotient
    if proposed <= max_levy:
        return []

    return [
        create_violation(
            rule,
            context,
            message=render_message(
                rule.message_template, proposed=proposed, maximum=max_levy
            ),
            entity_type=EntityType.OVERALL,
            actual_value=proposed,
            expected_value=max_levy,
            details={
                "proposed_levy": proposed,
                "prior_year_levy": prior,
                "growth_quotient": quotient,
                "max_levy": max_levy,
                "excess_amount": proposed - max_levy,
            },
        )
    ]


LEVY_GROWTH_LIMIT = create_rule(
    rule_id="IN-LEVY-001",
    name="Levy Growth Limitation",
    description="Property tax levy may not exceed prior year levy times growth quotient",
    category=RuleCategory.LEVY,
    severity=RuleSeverity.ERROR,
    citation=citations.MAX_LEVY_GROWTH,
    additional_citations=[citations.LEVY_LIMITS],
    legal_opinion_id="IN-LEVY-001",
    message_template="Proposed levy of {proposed} exceeds maximum allowable levy of {maximum}",
    correction_guidance="Reduce the proposed levy or file an excess levy appeal with DLGF",
    state="IN",
    condition=_check_levy_growth,
    tags=["levy"],
)


# ---------------------------------------------------------------------------
# Surplus
# ---------------------------------------------------------------------------


def _check_excess_balance(context: RuleEvaluationContext) -> list[Violation]:
    if context.funds is None or context.transactions is None:
        return []

    rule = EXCESS_FUND_BALANCE
    violations = []
    for fund in context.funds:
        if not fund.current_balance or fund.fund_type is not FundType.GOVERNMENTAL:
            continue

        annual_expenses = _disbursed(context.transactions, fund.id, context.fiscal_year)
        threshold = annual_expenses * 2

        if fund.current_balance > threshold and threshold > 0:
            violations.append(
                create_violation(
                    rule,
                    context,
                    message=render_message(
                        rule.message_template,
                        fund_code=fund.code,
                        fund_name=fund.name,
                        balance=fund.current_balance,
                        threshold=threshold,
                    ),
                    entity_type=EntityType.FUND,
                    entity_id=fund.id,
                    entity_description=f"{fund.code} - {fund.name}",
                    actual_value=fund.current_balance,
                    expected_value=threshold,
                    details={
                        "fund_code": fund.code,
                        "fund_name": fund.name,
                        "current_balance": fund.current_balance,
                        "annual_expenses": annual_expenses,
                        "threshold": threshold,
                        "excess_amount": fund.current_balance - threshold,
                    },
                )
            )
    return violations


EXCESS_FUND_BALANCE = create_rule(
    rule_id="IN-SURPLUS-001",
    name="Excessive Fund Balance Warning",
    description="Fund balance exceeding two years of expenditures may indicate over-taxation",
    category=RuleCategory.SURPLUS,
    severity=RuleSeverity.WARNING,
    citation=citations.EXCESS_LEVY_SURPLUS,
    message_template=(
        "Fund {fund_code} ({fund_name}) balance of {balance} exceeds recommended "
        "maximum of {threshold} (2x annual expenditures)"
    ),
    correction_guidance="Consider reducing the levy or transferring excess to appropriate funds",
    state="IN",
    condition=_check_excess_balance,
)


# ---------------------------------------------------------------------------
# Transfers
# ---------------------------------------------------------------------------


def _check_restricted_transfers(context: RuleEvaluationContext) -> list[Violation]:
    if context.funds is None or context.transactions is None:
        return []

    rule = RESTRICTED_FUND_TRANSFER
    funds_by_id = {fund.id: fund for fund in context.funds}
    violations = []
    for transfer in context.transactions:
        if transfer.transaction_type is not TransactionType.TRANSFER or transfer.is_void:
            continue
        source = funds_by_id.get(transfer.fund_id)
        if source is None or not source.is_restricted:
            continue

        violations.append(
            create_violation(
                rule,
                context,
                message=render_message(
                    rule.message_template,
                    amount=transfer.amount,
                    fund_code=source.code,
                    fund_name=source.name,
                ),
                entity_type=EntityType.TRANSACTION,
                entity_id=transfer.id,
                entity_description=f"Transfer from {source.code}",
                actual_value=transfer.amount,
                details={
                    "transaction_id": transfer.id,
                    "fund_code": source.code,
                    "fund_name": source.name,
                    "amount": transfer.amount,
                    "date": transfer.transaction_date,
                    "target_fund_id": transfer.target_fund_id,
                },
            )
        )
    return violations


RESTRICTED_FUND_TRANSFER = create_rule(
    rule_id="IN-TRANSFER-001",
    name="Restricted Fund Transfer Check",
    description="Transfers from restricted funds must be specifically authorized",
    category=RuleCategory.TRANSFER,
    severity=RuleSeverity.ERROR,
    citation=citations.FUND_TRANSFER,
    legal_opinion_id="IN-TRANSFER-001",
    message_template=(
        "Transfer of {amount} from restricted fund {fund_code} ({fund_name}) "
        "requires specific statutory authority"
    ),
    correction_guidance="Verify statutory authority for the transfer or reverse it",
    state="IN",
    condition=_check_restricted_transfers,
)


# ---------------------------------------------------------------------------
# Reporting
# ---------------------------------------------------------------------------


def afr_due_date(fiscal_year: int) -> date:
    """AFR is due 60 days after a calendar year end, taken as February 28."""
    return date(fiscal_year + 1, 2, 28)


def _check_afr_deadline(context: RuleEvaluationContext) -> list[Violation]:
    due = afr_due_date(context.fiscal_year)
    if context.evaluation_date <= due or context.additional_data.get("afr_filed"):
        return []

    rule = AFR_FILING_DEADLINE
    return [
        create_violation(
            rule,
            context,
            message=render_message(
                rule.message_template,
                year=context.fiscal_year,
                due_date=due.isoformat(),
            ),
            entity_type=EntityType.OVERALL,
            details={
                "fiscal_year": context.fiscal_year,
                "due_date": due,
                "evaluation_date": context.evaluation_date,
            },
        )
    ]


AFR_FILING_DEADLINE = create_rule(
    rule_id="IN-REPORT-001",
    name="AFR Filing Deadline",
    description="Annual Financial Report must be filed within 60 days of year end",
    category=RuleCategory.REPORTING,
    severity=RuleSeverity.WARNING,
    citation=citations.AFR_REQUIREMENT,
    additional_citations=[citations.GATEWAY_FILING],
    legal_opinion_id="IN-REPORT-001",
    message_template=(
        "AFR for fiscal year {year} was due by {due_date} and may not have been filed"
    ),
    correction_guidance="File AFR through Indiana Gateway before the deadline",
    state="IN",
    condition=_check_afr_deadline,
)


# ---------------------------------------------------------------------------
# Balances
# ---------------------------------------------------------------------------


def _check_negative_balances(context: RuleEvaluationContext) -> list[Violation]:
    if context.funds is None:
        return []

    rule = NEGATIVE_FUND_BALANCE
    violations = []
    for fund in context.funds:
        if fund.current_balance is None or fund.current_balance >= 0:
            continue
        violations.append(
            create_violation(
                rule,
                context,
                message=render_message(
                    rule.message_template,
                    fund_code=fund.code,
                    fund_name=fund.name,
                    balance=fund.current_balance,
                ),
                entity_type=EntityType.FUND,
                entity_id=fund.id,
                entity_description=f"{fund.code} - {fund.name}",
                actual_value=fund.current_balance,
                expected_value=ZERO,
                details={
                    "fund_code": fund.code,
                    "fund_name": fund.name,
                    "current_balance": fund.current_balance,
                },
            )
        )
    return violations


NEGATIVE_FUND_BALANCE = create_rule(
    rule_id="IN-BAL-001",
    name="Negative Fund Balance",
    description="Fund balance should not be negative",
    category=RuleCategory.APPROPRIATION,
    severity=RuleSeverity.CRITICAL,
    citation=citations.APPROPRIATION_LIMIT,
    message_template="Fund {fund_code} ({fund_name}) has a negative balance of {balance}",
    correction_guidance="Transfer funds from another source or reduce expenditures immediately",
    state="IN",
    condition=_check_negative_balances,
)


FINANCE_RULES: tuple[ExecutableRule, ...] = (
    APPROPRIATION_EXCEEDED,
    LEVY_GROWTH_LIMIT,
    EXCESS_FUND_BALANCE,
    RESTRICTED_FUND_TRANSFER,
    AFR_FILING_DEADLINE,
    NEGATIVE_FUND_BALANCE,
)
