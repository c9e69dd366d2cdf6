"""
Civic Packs.

Jurisdiction modules contributing metadata, configuration packs and
compliance rules to the kernel registries. Each module exposes
``METADATA``, ``DOMAIN_PACKS``, ``LEGACY_PACKS``, ``register(registry)``
and ``create_rule_engine()``.

Modules:
- Indiana: finance (domain pack + rules), township (domain pack),
  meetings and apra (domain pack + legacy pack), records, planning and
  utilities (legacy packs)
"""

from __future__ import annotations

from types import ModuleType

from civic_config.validator import validate_jurisdiction_module
from civic_kernel.compliance import RuleEngine
from civic_kernel.domain.registry import DuplicatePolicy, JurisdictionRegistry
from civic_kernel.exceptions import JurisdictionModuleError
from civic_kernel.logging_config import get_logger
from civic_packs import indiana

# Registration order. Later modules may replace earlier domain packs for
# the same (jurisdiction, domain) key.
JURISDICTION_MODULES: tuple[ModuleType, ...] = (
    indiana,
)

__all__ = [
    "JURISDICTION_MODULES",
    "indiana",
    "register_all_jurisdictions",
    "rule_engine_for",
]


def register_all_jurisdictions(
    registry: JurisdictionRegistry | None = None,
    *,
    strict: bool = False,
) -> JurisdictionRegistry:
    """
    Validate and register every jurisdiction module, in declared order.

    Call this explicitly at startup or in test fixtures. Nothing is
    registered at import time.

    Args:
        registry: Registry to populate; a new one is created when None.
        strict: Raise ``JurisdictionModuleError`` on an invalid module
            (otherwise the module is skipped and logged). A registry
            created here uses ``DuplicatePolicy.ERROR`` in strict mode.
    """
    logger = get_logger("packs")

    if registry is None:
        policy = DuplicatePolicy.ERROR if strict else DuplicatePolicy.REPLACE
        registry = JurisdictionRegistry(duplicate_policy=policy)

    for module in JURISDICTION_MODULES:
        result = validate_jurisdiction_module(module)
        for warning in result.warnings:
            logger.warning(
                "jurisdiction_module_warning",
                extra={"jurisdiction_module": module.__name__, "warning": warning},
            )
        if not result.is_valid:
            if strict:
                raise JurisdictionModuleError(module.__name__, result.errors)
            logger.error(
                "jurisdiction_module_skipped",
                extra={"jurisdiction_module": module.__name__, "errors": result.errors},
            )
            continue
        module.register(registry)

    logger.info(
        "all_jurisdictions_registered",
        extra={"jurisdictions": [m.code for m in registry.list_jurisdictions()]},
    )
    return registry


def rule_engine_for(jurisdiction_code: str) -> RuleEngine | None:
    """Rule engine of the module registering ``jurisdiction_code``, if any."""
    engines = [
        module.create_rule_engine()
        for module in JURISDICTION_MODULES
        if module.METADATA.code == jurisdiction_code
        and hasattr(module, "create_rule_engine")
    ]
    if not engines:
        return None
    return RuleEngine.combine(*engines)
