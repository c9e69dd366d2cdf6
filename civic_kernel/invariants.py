"""
Kernel Invariants Contract.

These invariants are structural law for the registry, resolver and rule
engine. No jurisdiction pack or tenant override may change them.

This module exists solely to declare these invariants explicitly. The
enforcement is distributed across JurisdictionRegistry, ConfigResolver
and RuleEngine.
"""

from enum import Enum, unique


@unique
class KernelInvariant(str, Enum):
    """Non-configurable invariants enforced by the kernel."""

    SINGLETON_DOMAIN_PACK = "singleton_domain_pack"
    """At most one domain pack per (jurisdiction, domain). Enforced by
    JurisdictionRegistry.register_domain_pack."""

    ORDERED_LEGACY_PACKS = "ordered_legacy_packs"
    """Legacy packs accumulate per (jurisdiction, domain) and are matched
    strictly in registration order."""

    GATED_RESOLUTION = "gated_resolution"
    """A configuration resolves only when a pack exists AND the tenant's
    module entry is present and enabled. Availability checks share the
    same gate."""

    SHALLOW_OVERRIDE_MERGE = "shallow_override_merge"
    """Tenant overrides replace top-level keys of the pack defaults; they
    are never merged recursively."""

    RULE_ISOLATION = "rule_isolation"
    """A rule sees only the evaluation context, never another rule's
    output, and its failure never aborts other rules."""

    DETERMINISTIC_ORDER = "deterministic_order"
    """Violations are reported in rule registration order, then in each
    rule's own order."""


# All invariants as a frozenset for programmatic checks.
ALL_KERNEL_INVARIANTS: frozenset[KernelInvariant] = frozenset(KernelInvariant)

# The kernel package may not import from these packages.
# This is enforced by tests/architecture/test_kernel_boundary.py.
FORBIDDEN_KERNEL_IMPORTS: tuple[str, ...] = (
    "civic_config",
    "civic_packs",
)
