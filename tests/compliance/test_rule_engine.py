"""
Tests for RuleEngine.

Rules run in registration order against a read-only snapshot; a failing
rule is logged and skipped; results summarize by severity and category.
"""

from datetime import date

import pytest

from civic_kernel.compliance import (
    RuleCategory,
    RuleEngine,
    RuleEvaluationContext,
    RuleSeverity,
    build_engine,
    create_citation,
    create_legal_opinion,
    create_rule,
    create_violation,
)
from civic_kernel.domain.jurisdiction import JurisdictionProfile, LocalGovKind
from civic_kernel.exceptions import DuplicateRuleError

CITATION = create_citation("IC 1-2-3", "Test Statute", "A statute used in tests")

OPINION = create_legal_opinion(
    "OP-1",
    "Spending Limits Explained",
    "Units may not spend beyond appropriations.",
    RuleCategory.APPROPRIATION,
    [CITATION],
    ["appropriation", "spending"],
    jurisdiction="IN",
)


def _rule(rule_id, severity=RuleSeverity.ERROR, category=RuleCategory.APPROPRIATION,
          messages=("found",), **kwargs):
    """A rule reporting one violation per message."""
    declared = {}

    def condition(context):
        return [
            create_violation(declared["rule"], context, message=message)
            for message in messages
        ]

    declared["rule"] = create_rule(
        rule_id=rule_id,
        name=f"Rule {rule_id}",
        description="test rule",
        category=category,
        severity=severity,
        message_template="{message}",
        condition=condition,
        **kwargs,
    )
    return declared["rule"]


def _raising_rule(rule_id):
    def condition(context):
        raise ZeroDivisionError("bad data")

    return create_rule(
        rule_id=rule_id,
        name="Broken",
        description="always raises",
        category=RuleCategory.AUDIT,
        severity=RuleSeverity.ERROR,
        message_template="",
        condition=condition,
    )


def _context(evaluation_date=date(2024, 6, 30), profile=None) -> RuleEvaluationContext:
    return RuleEvaluationContext(
        tenant_id="lapel-in",
        fiscal_year=2024,
        evaluation_date=evaluation_date,
        jurisdiction=profile,
    )


def _profile(state="IN", kind=LocalGovKind.TOWN) -> JurisdictionProfile:
    return JurisdictionProfile(tenant_id="lapel-in", state=state, kind=kind, name="Lapel")


class TestEvaluate:
    def test_violations_in_registration_order(self):
        engine = build_engine([
            _rule("R-B", messages=("b1", "b2")),
            _rule("R-A", messages=("a1",)),
        ])

        violations = engine.evaluate(_context())

        assert [v.message for v in violations] == ["b1", "b2", "a1"]

    def test_empty_engine_finds_nothing(self):
        assert build_engine().evaluate(_context()) == []

    def test_raising_rule_is_isolated(self, captured_logs):
        engine = build_engine([
            _rule("R-1", messages=("one",)),
            _raising_rule("R-BROKEN"),
            _rule("R-2", messages=("two",)),
        ])

        violations = engine.evaluate(_context())

        assert [v.rule_id for v in violations] == ["R-1", "R-2"]
        failures = [r for r in captured_logs() if r["message"] == "rule_evaluation_failed"]
        assert len(failures) == 1
        assert failures[0]["level"] == "WARNING"
        assert failures[0]["rule_id"] == "R-BROKEN"
        assert failures[0]["error_type"] == "ZeroDivisionError"

    def test_sort_by_severity_is_stable(self):
        engine = build_engine([
            _rule("R-W1", severity=RuleSeverity.WARNING, messages=("w1",)),
            _rule("R-C", severity=RuleSeverity.CRITICAL, messages=("c",)),
            _rule("R-I", severity=RuleSeverity.INFO, messages=("i",)),
            _rule("R-W2", severity=RuleSeverity.WARNING, messages=("w2",)),
            _rule("R-E", severity=RuleSeverity.ERROR, messages=("e",)),
        ])

        violations = engine.evaluate(_context(), sort_by_severity=True)

        assert [v.message for v in violations] == ["c", "e", "w1", "w2", "i"]

    def test_detected_at_is_evaluation_date(self):
        engine = build_engine([_rule("R-1")])
        (violation,) = engine.evaluate(_context(evaluation_date=date(2025, 3, 1)))
        assert violation.detected_at == date(2025, 3, 1)

    def test_evaluation_is_deterministic(self):
        engine = build_engine([_rule("R-1", messages=("x", "y")), _rule("R-2")])
        assert engine.evaluate(_context()) == engine.evaluate(_context())


class TestApplicability:
    def test_inactive_rule_skipped(self):
        engine = build_engine([_rule("R-OFF", is_active=False)])
        assert engine.evaluate(_context()) == []

    def test_state_filter(self):
        engine = build_engine([_rule("R-IN", state="IN")])

        assert len(engine.evaluate(_context(profile=_profile("IN")))) == 1
        assert engine.evaluate(_context(profile=_profile("OH"))) == []

    def test_jurisdiction_type_filter(self):
        engine = build_engine([_rule("R-TWP", jurisdiction_types=[LocalGovKind.TOWNSHIP])])

        assert engine.evaluate(_context(profile=_profile(kind=LocalGovKind.TOWN))) == []
        assert len(engine.evaluate(_context(profile=_profile(kind=LocalGovKind.TOWNSHIP)))) == 1

    def test_filters_skipped_without_profile(self):
        engine = build_engine([
            _rule("R-IN", state="IN", jurisdiction_types=[LocalGovKind.CITY])
        ])
        assert len(engine.evaluate(_context())) == 1

    def test_effective_and_sunset_dates(self):
        engine = build_engine([
            _rule("R-DATED", effective_date=date(2024, 1, 1), sunset_date=date(2024, 12, 31))
        ])

        assert engine.evaluate(_context(date(2023, 12, 31))) == []
        assert len(engine.evaluate(_context(date(2024, 1, 1)))) == 1
        assert len(engine.evaluate(_context(date(2024, 12, 31)))) == 1
        assert engine.evaluate(_context(date(2025, 1, 1))) == []


class TestValidate:
    def test_summary_and_flags(self):
        engine = build_engine([
            _rule("R-C", severity=RuleSeverity.CRITICAL),
            _rule("R-E", severity=RuleSeverity.ERROR, messages=("e1", "e2")),
            _rule("R-W", severity=RuleSeverity.WARNING, category=RuleCategory.REPORTING),
            _rule("R-OK", messages=()),
        ])

        result = engine.validate(_context())

        assert result.rules_checked == 4
        assert result.rules_passed == 1
        assert result.summary.critical == 1
        assert result.summary.errors == 2
        assert result.summary.warnings == 1
        assert result.summary.info == 0
        assert result.passed is False
        assert result.can_file is False
        assert result.by_category[RuleCategory.APPROPRIATION] == 3
        assert result.by_category[RuleCategory.REPORTING] == 1
        assert result.by_category[RuleCategory.LEVY] == 0
        assert result.tenant_id == "lapel-in"
        assert result.evaluated_on == date(2024, 6, 30)

    def test_warnings_only_pass(self):
        engine = build_engine([_rule("R-W", severity=RuleSeverity.WARNING)])
        result = engine.validate(_context())

        assert result.passed is True
        assert result.can_file is True

    def test_errors_without_critical_can_file(self):
        result = build_engine([_rule("R-E")]).validate(_context())

        assert result.passed is False
        assert result.can_file is True

    def test_category_filter(self):
        engine = build_engine([
            _rule("R-A"),
            _rule("R-L", category=RuleCategory.LEVY),
        ])

        result = engine.validate(_context(), category=RuleCategory.LEVY)

        assert result.rules_checked == 1
        assert [v.rule_id for v in result.violations] == ["R-L"]

    def test_validation_logged(self, captured_logs):
        build_engine([_rule("R-E")]).validate(_context())

        records = [r for r in captured_logs() if r["message"] == "rules_validated"]
        assert records[-1]["rules_checked"] == 1
        assert records[-1]["violation_count"] == 1
        assert records[-1]["passed"] is False


class TestConstruction:
    def test_duplicate_rule_id_rejected(self):
        with pytest.raises(DuplicateRuleError) as exc_info:
            build_engine([_rule("R-1"), _rule("R-1")])
        assert exc_info.value.rule_id == "R-1"

    def test_combine_preserves_order(self):
        first = build_engine([_rule("R-1"), _rule("R-2")])
        second = build_engine([_rule("R-3")], [OPINION])

        combined = RuleEngine.combine(first, second)

        assert [r.id for r in combined.get_rules()] == ["R-1", "R-2", "R-3"]
        assert combined.get_legal_opinion("OP-1") is OPINION
        assert len(combined) == 3

    def test_combine_rejects_overlap(self):
        with pytest.raises(DuplicateRuleError):
            RuleEngine.combine(build_engine([_rule("R-1")]), build_engine([_rule("R-1")]))

    def test_lookups(self):
        levy = _rule("R-L", category=RuleCategory.LEVY)
        engine = build_engine([_rule("R-A"), levy])

        assert engine.get_rule("R-L") is levy
        assert engine.get_rule("R-MISSING") is None
        assert engine.get_rules_by_category(RuleCategory.LEVY) == [levy]
        assert repr(engine) == "RuleEngine(rules=2, opinions=0)"


class TestLegalOpinions:
    def test_search_is_case_insensitive(self):
        engine = build_engine([], [OPINION])

        assert engine.search_legal_opinions("SPENDING") == [OPINION]
        assert engine.search_legal_opinions("ic 1-2-3") == [OPINION]
        assert engine.search_legal_opinions("zoning") == []

    def test_unknown_opinion_is_none(self):
        assert build_engine().get_legal_opinion("OP-404") is None


class TestExplainViolation:
    def test_full_explanation(self):
        rule = _rule(
            "R-APPROP",
            category=RuleCategory.APPROPRIATION,
            citation=CITATION,
            legal_opinion_id="OP-1",
            correction_guidance="Request an additional appropriation",
            messages=("Fund over budget",),
        )
        engine = build_engine([rule], [OPINION])
        (violation,) = engine.evaluate(_context())

        explained = engine.explain_violation(violation)

        assert explained.rule is rule
        assert explained.citation is CITATION
        assert explained.legal_opinion is OPINION
        assert explained.plain_english_explanation == (
            "Fund over budget\n\n"
            "Units may not spend beyond appropriations.\n\n"
            "This is required by Test Statute (IC 1-2-3)."
        )
        assert explained.correction_steps[0] == "Request an additional appropriation"
        assert "Review the appropriation amounts in the budget" in explained.correction_steps

    def test_category_without_generic_guidance(self):
        rule = _rule("R-DEBT", category=RuleCategory.DEBT, messages=("debt",))
        engine = build_engine([rule])
        (violation,) = engine.evaluate(_context())

        explained = engine.explain_violation(violation)

        assert explained.plain_english_explanation == "debt"
        assert explained.correction_steps == ()

    def test_unknown_rule_uses_message_only(self):
        foreign = _rule("R-FOREIGN", messages=("from elsewhere",))
        (violation,) = build_engine([foreign]).evaluate(_context())

        explained = build_engine().explain_violation(violation)

        assert explained.rule is None
        assert explained.legal_opinion is None
        assert explained.plain_english_explanation == "from elsewhere"
        assert explained.correction_steps == ()
