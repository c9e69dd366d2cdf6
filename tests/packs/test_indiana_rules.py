"""
Tests for the Indiana finance compliance rules.

Each rule is exercised against a small fiscal-year snapshot; missing
snapshot data always yields no violations.
"""

from datetime import date
from decimal import Decimal

import pytest

from civic_kernel.compliance import (
    BudgetLine,
    BudgetLineType,
    EntityType,
    Fund,
    FundType,
    RuleCategory,
    RuleEvaluationContext,
    RuleSeverity,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from civic_kernel.domain.jurisdiction import (
    EntityClass,
    JurisdictionProfile,
    LocalGovKind,
    TenantIdentity,
)
from civic_packs import rule_engine_for
from civic_packs.indiana import create_rule_engine
from civic_packs.indiana.finance.opinions import LEGAL_OPINIONS
from civic_packs.indiana.finance.rules import (
    AFR_FILING_DEADLINE,
    APPROPRIATION_EXCEEDED,
    EXCESS_FUND_BALANCE,
    FINANCE_RULES,
    LEVY_GROWTH_LIMIT,
    NEGATIVE_FUND_BALANCE,
    RESTRICTED_FUND_TRANSFER,
    afr_due_date,
)

GENERAL = Fund(id="f101", code="101", name="General")


def _appropriation(fund_id: str, amount: str, line_id: str = "b1") -> BudgetLine:
    return BudgetLine(
        id=line_id,
        fund_id=fund_id,
        fiscal_year=2024,
        line_type=BudgetLineType.APPROPRIATION,
        amount=Decimal(amount),
    )


def _disbursement(fund_id: str, amount: str, txn_id: str = "t1",
                  status: TransactionStatus = TransactionStatus.POSTED,
                  on: date = date(2024, 5, 1)) -> Transaction:
    return Transaction(
        id=txn_id,
        fund_id=fund_id,
        transaction_type=TransactionType.DISBURSEMENT,
        amount=Decimal(amount),
        transaction_date=on,
        status=status,
    )


def _context(evaluation_date: date = date(2024, 12, 31), **kwargs) -> RuleEvaluationContext:
    return RuleEvaluationContext(
        tenant_id="lapel-in",
        fiscal_year=2024,
        evaluation_date=evaluation_date,
        **kwargs,
    )


class TestRuleSet:
    def test_rule_order(self):
        assert [rule.id for rule in FINANCE_RULES] == [
            "IN-APPROP-001",
            "IN-LEVY-001",
            "IN-SURPLUS-001",
            "IN-TRANSFER-001",
            "IN-REPORT-001",
            "IN-BAL-001",
        ]

    def test_every_rule_cited_and_scoped_to_indiana(self):
        for rule in FINANCE_RULES:
            assert rule.citation is not None, rule.id
            assert rule.state == "IN", rule.id

    def test_referenced_opinions_exist(self):
        engine = create_rule_engine()
        for rule in FINANCE_RULES:
            if rule.legal_opinion_id:
                assert engine.get_legal_opinion(rule.legal_opinion_id) is not None

    def test_opinion_ids(self):
        assert [o.id for o in LEGAL_OPINIONS] == [
            "IN-LEVY-001",
            "IN-LEVY-002",
            "IN-APPROP-001",
            "IN-PUB-001",
            "IN-MEET-001",
            "IN-TRANSFER-001",
            "IN-REPORT-001",
        ]

    def test_rule_engine_for_indiana(self):
        engine = rule_engine_for("IN")
        assert len(engine) == len(FINANCE_RULES)
        assert rule_engine_for("ZZ") is None

    def test_search_opinions(self):
        engine = create_rule_engine()
        assert [o.id for o in engine.search_legal_opinions("circuit breaker")] == ["IN-LEVY-002"]


class TestAppropriationExceeded:
    def test_overage_reported(self):
        context = _context(
            funds=(GENERAL,),
            budget_lines=(_appropriation("f101", "10000"),),
            transactions=(_disbursement("f101", "12000"),),
        )

        (violation,) = APPROPRIATION_EXCEEDED.evaluate(context)

        assert violation.rule_id == "IN-APPROP-001"
        assert violation.severity is RuleSeverity.ERROR
        assert violation.entity_type is EntityType.FUND
        assert violation.entity_id == "f101"
        assert violation.actual_value == Decimal("12000")
        assert violation.expected_value == Decimal("10000")
        assert violation.details["overage_amount"] == Decimal("2000")
        assert violation.details["overage_percent"] == Decimal("20")
        assert violation.message == (
            "Fund 101 (General) expenditures of $12,000.00 exceed appropriation "
            "of $10,000.00"
        )
        assert violation.citation.code == "IC 6-1.1-18-4"

    def test_within_appropriation(self):
        context = _context(
            funds=(GENERAL,),
            budget_lines=(_appropriation("f101", "10000"),),
            transactions=(_disbursement("f101", "10000"),),
        )
        assert APPROPRIATION_EXCEEDED.evaluate(context) == []

    def test_void_disbursements_excluded(self):
        context = _context(
            funds=(GENERAL,),
            budget_lines=(_appropriation("f101", "10000"),),
            transactions=(
                _disbursement("f101", "9000", "t1"),
                _disbursement("f101", "5000", "t2", status=TransactionStatus.VOID),
            ),
        )
        assert APPROPRIATION_EXCEEDED.evaluate(context) == []

    def test_unappropriated_fund_skipped(self):
        context = _context(
            funds=(GENERAL,),
            budget_lines=(),
            transactions=(_disbursement("f101", "100"),),
        )
        assert APPROPRIATION_EXCEEDED.evaluate(context) == []

    def test_appropriations_summed_per_fund(self):
        context = _context(
            funds=(GENERAL,),
            budget_lines=(
                _appropriation("f101", "6000", "b1"),
                _appropriation("f101", "6000", "b2"),
                _appropriation("f999", "50000", "b3"),
            ),
            transactions=(_disbursement("f101", "12500"),),
        )
        (violation,) = APPROPRIATION_EXCEEDED.evaluate(context)
        assert violation.details["overage_amount"] == Decimal("500")

    @pytest.mark.parametrize("missing", ["funds", "budget_lines", "transactions"])
    def test_missing_data_reports_nothing(self, missing):
        data = {
            "funds": (GENERAL,),
            "budget_lines": (_appropriation("f101", "10000"),),
            "transactions": (_disbursement("f101", "12000"),),
        }
        data[missing] = None
        assert APPROPRIATION_EXCEEDED.evaluate(_context(**data)) == []


class TestLevyGrowth:
    def _levy(self, proposed, prior="100000", quotient="1.04"):
        return _context(
            additional_data={
                "levy_data": {
                    "proposed_levy": proposed,
                    "prior_year_levy": prior,
                    "growth_quotient": quotient,
                }
            }
        )

    def test_excess_levy_reported(self):
        (violation,) = LEVY_GROWTH_LIMIT.evaluate(self._levy("110000"))

        assert violation.expected_value == Decimal("104000.00")
        assert violation.details["excess_amount"] == Decimal("6000.00")
        assert violation.entity_type is EntityType.OVERALL
        assert "$110,000.00" in violation.message
        assert "$104,000.00" in violation.message

    def test_levy_at_maximum_passes(self):
        assert LEVY_GROWTH_LIMIT.evaluate(self._levy("104000")) == []

    def test_numeric_inputs_accepted(self):
        assert len(LEVY_GROWTH_LIMIT.evaluate(self._levy(110000, 100000, 1.04))) == 1

    def test_missing_levy_data(self):
        assert LEVY_GROWTH_LIMIT.evaluate(_context()) == []
        assert LEVY_GROWTH_LIMIT.evaluate(self._levy("110000", quotient=None)) == []
        assert LEVY_GROWTH_LIMIT.evaluate(self._levy("110000", prior=0)) == []


class TestExcessFundBalance:
    def test_balance_over_twice_expenses(self):
        fund = Fund(id="f101", code="101", name="General", current_balance=Decimal("25000"))
        context = _context(
            funds=(fund,),
            transactions=(
                _disbursement("f101", "10000", "t1"),
                _disbursement("f101", "4000", "t2", on=date(2023, 6, 1)),
            ),
        )

        (violation,) = EXCESS_FUND_BALANCE.evaluate(context)

        assert violation.severity is RuleSeverity.WARNING
        assert violation.expected_value == Decimal("20000")
        assert violation.details["excess_amount"] == Decimal("5000")
        assert violation.legal_opinion_id is None

    def test_non_governmental_fund_skipped(self):
        utility = Fund(
            id="f601",
            code="601",
            name="Water Utility",
            fund_type=FundType.PROPRIETARY,
            current_balance=Decimal("999999"),
        )
        context = _context(funds=(utility,), transactions=(_disbursement("f601", "10"),))
        assert EXCESS_FUND_BALANCE.evaluate(context) == []

    def test_no_expenses_no_threshold(self):
        fund = Fund(id="f101", code="101", name="General", current_balance=Decimal("25000"))
        assert EXCESS_FUND_BALANCE.evaluate(_context(funds=(fund,), transactions=())) == []


class TestRestrictedTransfer:
    def test_transfer_from_restricted_fund(self):
        restricted = Fund(id="f201", code="201", name="MVH", is_restricted=True)
        transfer = Transaction(
            id="x1",
            fund_id="f201",
            transaction_type=TransactionType.TRANSFER,
            amount=Decimal("1500"),
            transaction_date=date(2024, 3, 1),
            target_fund_id="f101",
        )

        (violation,) = RESTRICTED_FUND_TRANSFER.evaluate(
            _context(funds=(restricted, GENERAL), transactions=(transfer,))
        )

        assert violation.entity_type is EntityType.TRANSACTION
        assert violation.entity_id == "x1"
        assert violation.details["target_fund_id"] == "f101"
        assert violation.message == (
            "Transfer of $1,500.00 from restricted fund 201 (MVH) requires specific "
            "statutory authority"
        )

    def test_unrestricted_and_void_transfers_ignored(self):
        restricted = Fund(id="f201", code="201", name="MVH", is_restricted=True)
        transfers = (
            Transaction("x1", "f101", TransactionType.TRANSFER, Decimal("10"), date(2024, 3, 1)),
            Transaction(
                "x2", "f201", TransactionType.TRANSFER, Decimal("10"), date(2024, 3, 1),
                status=TransactionStatus.VOID,
            ),
        )
        context = _context(funds=(restricted, GENERAL), transactions=transfers)
        assert RESTRICTED_FUND_TRANSFER.evaluate(context) == []


class TestAfrDeadline:
    def test_due_date(self):
        assert afr_due_date(2024) == date(2025, 2, 28)

    def test_late_afr_reported(self):
        (violation,) = AFR_FILING_DEADLINE.evaluate(_context(evaluation_date=date(2025, 3, 1)))

        assert violation.severity is RuleSeverity.WARNING
        assert violation.category is RuleCategory.REPORTING
        assert violation.message == (
            "AFR for fiscal year 2024 was due by 2025-02-28 and may not have been filed"
        )

    def test_before_deadline(self):
        assert AFR_FILING_DEADLINE.evaluate(_context(evaluation_date=date(2025, 2, 28))) == []

    def test_filed_afr_not_reported(self):
        context = _context(evaluation_date=date(2025, 6, 1), additional_data={"afr_filed": True})
        assert AFR_FILING_DEADLINE.evaluate(context) == []


class TestNegativeFundBalance:
    def test_negative_balance_is_critical(self):
        fund = Fund(id="f101", code="101", name="General", current_balance=Decimal("-500"))

        (violation,) = NEGATIVE_FUND_BALANCE.evaluate(_context(funds=(fund,)))

        assert violation.severity is RuleSeverity.CRITICAL
        assert violation.category is RuleCategory.APPROPRIATION
        assert violation.actual_value == Decimal("-500")
        assert violation.expected_value == Decimal("0")
        assert violation.message == "Fund 101 (General) has a negative balance of -$500.00"

    def test_zero_and_unknown_balances_pass(self):
        funds = (
            Fund(id="a", code="a", name="A", current_balance=Decimal("0")),
            Fund(id="b", code="b", name="B"),
        )
        assert NEGATIVE_FUND_BALANCE.evaluate(_context(funds=funds)) == []


class TestIndianaEngine:
    def test_full_snapshot(self):
        profile = JurisdictionProfile.from_identity(
            TenantIdentity("lapel-in", "Town of Lapel", "IN", EntityClass.TOWN)
        )
        overdrawn = Fund(id="f102", code="102", name="Parks", current_balance=Decimal("-500"))
        context = _context(
            evaluation_date=date(2025, 3, 15),
            jurisdiction=profile,
            funds=(GENERAL, overdrawn),
            budget_lines=(_appropriation("f101", "10000"),),
            transactions=(_disbursement("f101", "12000"),),
        )
        engine = create_rule_engine()

        result = engine.validate(context)

        assert [v.rule_id for v in result.violations] == [
            "IN-APPROP-001",
            "IN-REPORT-001",
            "IN-BAL-001",
        ]
        assert result.passed is False
        assert result.can_file is False
        assert result.rules_checked == 6
        assert result.rules_passed == 3

        sorted_ids = [v.rule_id for v in engine.evaluate(context, sort_by_severity=True)]
        assert sorted_ids == ["IN-BAL-001", "IN-APPROP-001", "IN-REPORT-001"]

    def test_other_state_profile_skips_indiana_rules(self):
        profile = JurisdictionProfile(
            tenant_id="x", state="OH", kind=LocalGovKind.TOWN, name="Elsewhere"
        )
        result = create_rule_engine().validate(_context(jurisdiction=profile))
        assert result.rules_checked == 0

    def test_explain_appropriation_violation(self):
        context = _context(
            funds=(GENERAL,),
            budget_lines=(_appropriation("f101", "10000"),),
            transactions=(_disbursement("f101", "12000"),),
        )
        engine = create_rule_engine()
        (violation,) = engine.evaluate(context)

        explained = engine.explain_violation(violation)

        assert explained.legal_opinion.id == "IN-APPROP-001"
        assert "This is required by Appropriation Limitations (IC 6-1.1-18-4)." in (
            explained.plain_english_explanation
        )
        assert explained.correction_steps[0] == (
            "Request an additional appropriation or reduce expenditures"
        )
        assert len(explained.correction_steps) == 4
