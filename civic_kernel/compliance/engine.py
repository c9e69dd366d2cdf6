"""
RuleEngine -- Evaluates a registered rule set against a data snapshot.

Responsibility:
    Runs every applicable rule once against a ``RuleEvaluationContext``,
    collects the violations, summarizes them, and explains individual
    violations with their legal context.

Architecture position:
    Kernel > Compliance -- pure evaluation, zero I/O. Jurisdiction packs
    supply the rules and opinions; the engine knows no jurisdiction.

Invariants enforced:
    - RULE_ISOLATION -- rules never see each other's output; a rule that
      raises is logged and contributes nothing, the rest still run.
    - DETERMINISTIC_ORDER -- violations are concatenated in rule
      registration order, preserving each rule's own order. Severity
      sorting is stable and only applied on request.

Failure modes:
    - ``DuplicateRuleError`` at construction when two rules share an id.
    - Evaluation itself never raises for rule failures.
"""

from __future__ import annotations

from collections.abc import Iterable
from types import MappingProxyType

from civic_kernel.compliance.types import (
    ExecutableRule,
    ExplainedViolation,
    LegalOpinion,
    RuleCategory,
    RuleEvaluationContext,
    RuleValidationResult,
    SeveritySummary,
    Violation,
)
from civic_kernel.exceptions import DuplicateRuleError
from civic_kernel.logging_config import get_logger

logger = get_logger("compliance.engine")


# Generic next steps appended after rule-specific guidance.
_CATEGORY_GUIDANCE: dict[RuleCategory, tuple[str, ...]] = {
    RuleCategory.APPROPRIATION: (
        "Review the appropriation amounts in the budget",
        "Consider requesting an additional appropriation if needed",
        "Ensure all expenditures have proper authorization",
    ),
    RuleCategory.LEVY: (
        "Review the levy calculation worksheet",
        "Verify compliance with growth quotient limits",
        "Check circuit breaker impact calculations",
    ),
    RuleCategory.SURPLUS: (
        "Review fund balance calculations",
        "Consider transfers to reduce excess surplus",
        "Document reasons for surplus if retention is justified",
    ),
    RuleCategory.TRANSFER: (
        "Verify transfer is between compatible funds",
        "Ensure proper authorization was obtained",
        "Document the purpose of the transfer",
    ),
    RuleCategory.PUBLICATION: (
        "Verify publication dates and content requirements",
        "Ensure publication was in a qualified newspaper",
        "Retain proof of publication for audit",
    ),
    RuleCategory.MEETING_NOTICE: (
        "Verify notice was posted within required timeframe",
        "Ensure notice includes all required elements",
        "Document posting locations and dates",
    ),
}


class RuleEngine:
    """
    An immutable rule set plus the legal opinions its rules reference.

    Build with ``build_engine``; merge engines with ``RuleEngine.combine``.
    """

    def __init__(
        self,
        rules: Iterable[ExecutableRule] = (),
        legal_opinions: Iterable[LegalOpinion] = (),
    ):
        rules = tuple(rules)
        seen: set[str] = set()
        for rule in rules:
            if rule.id in seen:
                raise DuplicateRuleError(rule.id)
            seen.add(rule.id)

        self._rules: tuple[ExecutableRule, ...] = rules
        self._rules_by_id = MappingProxyType({rule.id: rule for rule in rules})
        self._opinions = MappingProxyType(
            {opinion.id: opinion for opinion in legal_opinions}
        )

    @classmethod
    def combine(cls, *engines: RuleEngine) -> RuleEngine:
        """One engine holding every rule and opinion, in argument order."""
        rules: list[ExecutableRule] = []
        opinions: list[LegalOpinion] = []
        for engine in engines:
            rules.extend(engine.get_rules())
            opinions.extend(engine._opinions.values())
        return cls(rules, opinions)

    def __len__(self) -> int:
        return len(self._rules)

    def __repr__(self) -> str:
        return f"RuleEngine(rules={len(self._rules)}, opinions={len(self._opinions)})"

    # =========================================================================
    # Evaluation
    # =========================================================================

    def evaluate(
        self,
        context: RuleEvaluationContext,
        *,
        sort_by_severity: bool = False,
    ) -> list[Violation]:
        """Evaluate every applicable rule and return all violations."""
        violations = self._run(self._applicable(context), context)
        if sort_by_severity:
            violations.sort(key=lambda v: v.severity.rank)
        return violations

    def validate(
        self,
        context: RuleEvaluationContext,
        category: RuleCategory | None = None,
    ) -> RuleValidationResult:
        """Evaluate (optionally one category) and summarize the outcome."""
        rules = self._applicable(context)
        if category is not None:
            rules = [rule for rule in rules if rule.category is category]

        violations = self._run(rules, context)

        by_category = {cat: 0 for cat in RuleCategory}
        for violation in violations:
            by_category[violation.category] += 1

        result = RuleValidationResult(
            tenant_id=context.tenant_id,
            fiscal_year=context.fiscal_year,
            evaluated_on=context.evaluation_date,
            rules_checked=len(rules),
            violations=tuple(violations),
            summary=SeveritySummary.of(violations),
            by_category=MappingProxyType(by_category),
        )
        logger.info(
            "rules_validated",
            extra={
                "tenant_id": context.tenant_id,
                "fiscal_year": context.fiscal_year,
                "rules_checked": result.rules_checked,
                "violation_count": len(violations),
                "passed": result.passed,
                "can_file": result.can_file,
            },
        )
        return result

    def _applicable(self, context: RuleEvaluationContext) -> list[ExecutableRule]:
        return [rule for rule in self._rules if rule.applies_to(context)]

    def _run(
        self,
        rules: list[ExecutableRule],
        context: RuleEvaluationContext,
    ) -> list[Violation]:
        violations: list[Violation] = []
        failed: list[str] = []
        for rule in rules:
            try:
                found = rule.evaluate(context)
            except Exception as e:
                failed.append(rule.id)
                logger.warning(
                    "rule_evaluation_failed",
                    extra={
                        "rule_id": rule.id,
                        "tenant_id": context.tenant_id,
                        "error": str(e),
                        "error_type": type(e).__name__,
                    },
                )
                continue
            violations.extend(found)

        logger.debug(
            "rules_evaluated",
            extra={
                "tenant_id": context.tenant_id,
                "rules_run": len(rules),
                "rules_failed": failed,
                "violation_count": len(violations),
            },
        )
        return violations

    # =========================================================================
    # Lookup
    # =========================================================================

    def get_rules(self) -> list[ExecutableRule]:
        return list(self._rules)

    def get_rule(self, rule_id: str) -> ExecutableRule | None:
        return self._rules_by_id.get(rule_id)

    def get_rules_by_category(self, category: RuleCategory) -> list[ExecutableRule]:
        return [rule for rule in self._rules if rule.category is category]

    def get_legal_opinion(self, opinion_id: str) -> LegalOpinion | None:
        return self._opinions.get(opinion_id)

    def search_legal_opinions(self, query: str) -> list[LegalOpinion]:
        return [opinion for opinion in self._opinions.values() if opinion.matches(query)]

    # =========================================================================
    # Explanation
    # =========================================================================

    def explain_violation(self, violation: Violation) -> ExplainedViolation:
        """
        Attach the rule, citation, opinion and correction steps to a violation.

        A violation from a rule this engine does not hold is explained with
        its own message and no steps.
        """
        rule = self._rules_by_id.get(violation.rule_id)
        if rule is None:
            return ExplainedViolation(
                violation=violation,
                rule=None,
                citation=violation.citation,
                legal_opinion=None,
                plain_english_explanation=violation.message,
            )

        opinion_id = violation.legal_opinion_id or rule.legal_opinion_id
        opinion = self._opinions.get(opinion_id) if opinion_id else None

        parts = [violation.message]
        if opinion is not None:
            parts.append(opinion.summary)
        if rule.citation is not None:
            parts.append(
                f"This is required by {rule.citation.title} ({rule.citation.code})."
            )

        steps: list[str] = []
        guidance = violation.correction_guidance or rule.correction_guidance
        if guidance:
            steps.append(guidance)
        steps.extend(_CATEGORY_GUIDANCE.get(violation.category, ()))

        return ExplainedViolation(
            violation=violation,
            rule=rule,
            citation=violation.citation or rule.citation,
            legal_opinion=opinion,
            plain_english_explanation="\n\n".join(parts),
            correction_steps=tuple(steps),
        )


def build_engine(
    rules: Iterable[ExecutableRule] = (),
    legal_opinions: Iterable[LegalOpinion] = (),
) -> RuleEngine:
    """Pure constructor for a rule engine."""
    return RuleEngine(rules, legal_opinions)
