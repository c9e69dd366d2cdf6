"""
Compliance rule engine.

Jurisdiction packs declare rules with the builders and hand them to
``build_engine``; callers evaluate a ``RuleEvaluationContext`` snapshot
and receive ``Violation`` records carrying legal citations.
"""

from civic_kernel.compliance.builders import (
    create_citation,
    create_legal_opinion,
    create_rule,
    create_violation,
    format_amount,
    render_message,
)
from civic_kernel.compliance.engine import RuleEngine, build_engine
from civic_kernel.compliance.types import (
    BudgetLine,
    BudgetLineType,
    CitationSource,
    EntityType,
    ExecutableRule,
    ExplainedViolation,
    Fund,
    FundType,
    LegalCitation,
    LegalOpinion,
    RuleCategory,
    RuleEvaluationContext,
    RuleSeverity,
    RuleValidationResult,
    SeveritySummary,
    Transaction,
    TransactionStatus,
    TransactionType,
    Violation,
)

__all__ = [
    "BudgetLine",
    "BudgetLineType",
    "CitationSource",
    "EntityType",
    "ExecutableRule",
    "ExplainedViolation",
    "Fund",
    "FundType",
    "LegalCitation",
    "LegalOpinion",
    "RuleCategory",
    "RuleEngine",
    "RuleEvaluationContext",
    "RuleSeverity",
    "RuleValidationResult",
    "SeveritySummary",
    "Transaction",
    "TransactionStatus",
    "TransactionType",
    "Violation",
    "build_engine",
    "create_citation",
    "create_legal_opinion",
    "create_rule",
    "create_violation",
    "format_amount",
    "render_message",
]
