"""
civic_config -- YAML inputs and bootstrap validation.

Responsibility:
    Reads jurisdiction metadata, tenant settings and evaluation snapshots
    from YAML, and validates jurisdiction modules before they are
    registered.

Architecture position:
    Configuration -- sits above ``civic_kernel`` and below
    ``civic_packs``. The kernel MUST NEVER import from ``civic_config``.

Failure modes:
    - ``ConfigLoadError`` -- a YAML document is missing, malformed, or
      lacks required keys.
"""

from civic_config.loader import (
    load_evaluation_context,
    load_jurisdiction_metadata,
    load_tenant_settings,
    parse_evaluation_context,
    parse_jurisdiction_metadata,
    parse_tenant_settings,
)
from civic_config.validator import (
    ConfigValidationResult,
    validate_jurisdiction_module,
    validate_rule_engine,
)

__all__ = [
    "ConfigValidationResult",
    "load_evaluation_context",
    "load_jurisdiction_metadata",
    "load_tenant_settings",
    "parse_evaluation_context",
    "parse_jurisdiction_metadata",
    "parse_tenant_settings",
    "validate_jurisdiction_module",
    "validate_rule_engine",
]
