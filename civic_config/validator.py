"""
Jurisdiction Module Validator (``civic_config.validator``).

Responsibility
--------------
Validates a jurisdiction module at bootstrap, before any of its packs
reach the registry: metadata sanity, pack shape, pack/jurisdiction
agreement, and the integrity of the rule set the module ships.

Architecture position
---------------------
**Config layer** -- bootstrap-time validation. Called by
``civic_packs.register_all_jurisdictions``. The registry itself never
validates packs.

Invariants enforced
-------------------
* Every pack declares the module's jurisdiction code and a domain.
* At most one domain pack per domain within a module.
* Domain packs satisfy ``DomainPack``; legacy packs satisfy ``LegacyPack``.
* Rule ids are unique and every referenced legal opinion exists.

Failure modes
-------------
* Validation errors (``ConfigValidationResult.errors``)  -> the module
  MUST NOT be registered.
* Validation warnings (``ConfigValidationResult.warnings``)  -> the module
  may be registered but should be reviewed.
"""

from __future__ import annotations

import calendar
from collections import Counter
from dataclasses import dataclass, field
from typing import Any
from zoneinfo import ZoneInfo, ZoneInfoNotFoundError

from civic_kernel.compliance.engine import RuleEngine
from civic_kernel.domain.jurisdiction import JurisdictionMetadata
from civic_kernel.domain.packs import DomainConfig, DomainPack, LegacyPack


@dataclass
class ConfigValidationResult:
    """
    Result of jurisdiction module validation.

    Contract
    --------
    * ``is_valid`` returns ``True`` only when ``errors`` is empty.
    * Warnings do not block registration but should be reviewed.
    """

    errors: list[str] = field(default_factory=list)
    warnings: list[str] = field(default_factory=list)

    @property
    def is_valid(self) -> bool:
        return len(self.errors) == 0

    def add_error(self, msg: str) -> None:
        self.errors.append(msg)

    def add_warning(self, msg: str) -> None:
        self.warnings.append(msg)


def validate_jurisdiction_module(module: Any) -> ConfigValidationResult:
    """
    Validate a jurisdiction module.

    A jurisdiction module exposes ``METADATA`` (``JurisdictionMetadata``),
    ``DOMAIN_PACKS`` and ``LEGACY_PACKS`` (sequences of pack instances), a
    ``register(registry)`` callable and, optionally, ``create_rule_engine()``.
    """
    result = ConfigValidationResult()

    metadata = getattr(module, "METADATA", None)
    if not isinstance(metadata, JurisdictionMetadata):
        result.add_error("Module does not expose METADATA as JurisdictionMetadata")
        return result

    if not callable(getattr(module, "register", None)):
        result.add_error(f"{metadata.code}: module has no callable register(registry)")

    _validate_metadata(metadata, result)
    domain_pack_types = _validate_domain_packs(
        metadata.code, getattr(module, "DOMAIN_PACKS", ()), result
    )
    _validate_legacy_packs(
        metadata.code, getattr(module, "LEGACY_PACKS", ()), domain_pack_types, result
    )

    factory = getattr(module, "create_rule_engine", None)
    if factory is not None:
        validate_rule_engine(metadata.code, factory(), result)

    return result


def validate_rule_engine(
    code: str,
    engine: RuleEngine,
    result: ConfigValidationResult | None = None,
) -> ConfigValidationResult:
    """Check rule jurisdiction, citations and opinion references."""
    result = result if result is not None else ConfigValidationResult()

    for rule in engine.get_rules():
        if rule.state is not None and rule.state != code:
            result.add_error(
                f"{code}: rule {rule.id} declares state {rule.state!r}"
            )
        if rule.citation is None:
            result.add_warning(f"{code}: rule {rule.id} has no legal citation")
        if rule.legal_opinion_id and engine.get_legal_opinion(rule.legal_opinion_id) is None:
            result.add_error(
                f"{code}: rule {rule.id} references unknown legal opinion "
                f"{rule.legal_opinion_id!r}"
            )
    return result


def _validate_metadata(metadata: JurisdictionMetadata, result: ConfigValidationResult) -> None:
    code = metadata.code
    if not code:
        result.add_error("Jurisdiction code must not be empty")

    try:
        ZoneInfo(metadata.timezone)
    except (ZoneInfoNotFoundError, ValueError):
        result.add_warning(f"{code}: timezone {metadata.timezone!r} is not a known IANA zone")

    fy = metadata.fiscal_year_start
    if not 1 <= fy.month <= 12:
        result.add_error(f"{code}: fiscal year start month {fy.month} out of range")
    elif not 1 <= fy.day <= calendar.monthrange(2001, fy.month)[1]:
        result.add_error(f"{code}: fiscal year start day {fy.day} out of range")

    agency_counts = Counter(a.code for a in metadata.oversight_agencies)
    for agency, count in agency_counts.items():
        if count > 1:
            result.add_error(f"{code}: oversight agency {agency} declared {count} times")

    form_counts = Counter(k.form_id for k in metadata.supported_gov_kinds)
    for form_id, count in form_counts.items():
        if count > 1:
            result.add_error(f"{code}: form id {form_id} declared {count} times")

    if not metadata.supported_gov_kinds:
        result.add_warning(f"{code}: no supported local government kinds declared")


def _validate_domain_packs(
    code: str,
    packs: Any,
    result: ConfigValidationResult,
) -> dict[str, Any]:
    domains: Counter[str] = Counter()
    config_types: dict[str, Any] = {}
    for pack in packs:
        name = type(pack).__name__
        if not isinstance(pack, DomainPack):
            result.add_error(f"{code}: {name} is not a domain pack")
            continue
        if pack.state != code:
            result.add_error(f"{code}: domain pack {name} declares state {pack.state!r}")
        if not pack.domain:
            result.add_error(f"{code}: domain pack {name} declares no domain")
        config_type = getattr(pack, "config_type", None)
        if config_type is not None and not (
            isinstance(config_type, type) and issubclass(config_type, DomainConfig)
        ):
            result.add_error(f"{code}: domain pack {name} config_type is not a DomainConfig")
        domains[pack.domain] += 1
        config_types[pack.domain] = config_type

    for domain, count in domains.items():
        if count > 1:
            result.add_error(f"{code}: {count} domain packs declared for domain {domain!r}")
    return config_types


def _validate_legacy_packs(
    code: str,
    packs: Any,
    domain_pack_types: dict[str, Any],
    result: ConfigValidationResult,
) -> None:
    for pack in packs:
        name = type(pack).__name__
        if not isinstance(pack, LegacyPack):
            result.add_error(f"{code}: {name} is not a legacy pack")
            continue
        if pack.state != code:
            result.add_error(f"{code}: legacy pack {name} declares state {pack.state!r}")
        if not pack.domain:
            result.add_error(f"{code}: legacy pack {name} declares no domain")
        if pack.domain in domain_pack_types and not _is_compatibility_pack(
            pack, domain_pack_types[pack.domain]
        ):
            result.add_warning(
                f"{code}: legacy pack {name} is shadowed by the {pack.domain!r} domain pack"
            )


def _is_compatibility_pack(pack: Any, config_type: Any) -> bool:
    """A legacy pack carrying the domain pack's own config type is registered on purpose."""
    return isinstance(config_type, type) and isinstance(getattr(pack, "config", None), config_type)
