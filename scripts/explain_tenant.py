#!/usr/bin/env python3
"""
Explain what a tenant gets: domain availability, resolved configuration,
and (optionally) compliance violations for a data snapshot.

Usage:
    python3 scripts/explain_tenant.py <tenant.yaml>
    python3 scripts/explain_tenant.py <tenant.yaml> --domain finance
    python3 scripts/explain_tenant.py <tenant.yaml> --snapshot <snapshot.yaml>
    python3 scripts/explain_tenant.py <tenant.yaml> --json

Examples:
    # Every domain the tenant's jurisdiction supports
    python3 scripts/explain_tenant.py tenants/lapel.yaml

    # Validate a fiscal-year snapshot against the jurisdiction's rules
    python3 scripts/explain_tenant.py tenants/lapel.yaml --snapshot fy2024.yaml
"""

import argparse
import json
import logging
import sys
from dataclasses import asdict, is_dataclass
from datetime import date
from decimal import Decimal
from enum import Enum
from pathlib import Path

ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(ROOT))

W = 80


# =============================================================================
# Formatting helpers
# =============================================================================


def banner(title: str) -> None:
    print()
    print("=" * W)
    print(f"  {title}")
    print("=" * W)


def section(title: str) -> None:
    print()
    print(f"--- {title} ---")
    print()


def field(name: str, value, indent: int = 4) -> None:
    print(f"{' ' * indent}{name}: {value}")


def _jsonable(obj):
    if isinstance(obj, Decimal):
        return str(obj)
    if isinstance(obj, Enum):
        return obj.value
    if isinstance(obj, date):
        return obj.isoformat()
    if is_dataclass(obj) and not isinstance(obj, type):
        return asdict(obj)
    if isinstance(obj, (set, frozenset, tuple)):
        return list(obj)
    if hasattr(obj, "items"):
        return dict(obj.items())
    return str(obj)


def _config_mapping(config) -> dict:
    from civic_kernel.domain.packs import config_as_mapping

    return config_as_mapping(config)


# =============================================================================
# Report building
# =============================================================================


def build_report(tenant, identity, registry, domains, context=None, engine=None) -> dict:
    from civic_kernel.domain.resolver import ConfigResolver

    resolver = ConfigResolver(registry)
    report = {
        "tenant_id": identity.tenant_id,
        "display_name": identity.display_name,
        "jurisdiction": identity.jurisdiction,
        "entity_class": identity.entity_class.value,
        "jurisdiction_supported": registry.is_jurisdiction_supported(identity.jurisdiction),
        "domains": [],
        "violations": None,
    }

    for domain in domains:
        status = resolver.check_availability(tenant, identity, domain)
        entry = {"domain": domain, "status": status.value, "config": None}
        if status.is_available:
            result = resolver.resolve_config_with_metadata(tenant, identity, domain)
            entry["source_kind"] = result.source_kind.value
            entry["config"] = _config_mapping(result.config)
        report["domains"].append(entry)

    if context is not None and engine is not None:
        validation = engine.validate(context)
        report["validation"] = {
            "rules_checked": validation.rules_checked,
            "passed": validation.passed,
            "can_file": validation.can_file,
            "summary": asdict(validation.summary),
        }
        report["violations"] = [
            {
                "rule_id": v.rule_id,
                "severity": v.severity.value,
                "message": v.message,
                "citation": v.citation.code if v.citation else None,
                "correction_steps": list(engine.explain_violation(v).correction_steps),
            }
            for v in engine.evaluate(context, sort_by_severity=True)
        ]
    return report


def print_report(report: dict) -> None:
    banner(f"TENANT {report['tenant_id']} ({report['display_name']})")
    field("jurisdiction", report["jurisdiction"])
    field("entity_class", report["entity_class"])
    field("jurisdiction_supported", report["jurisdiction_supported"])

    section(f"DOMAINS ({len(report['domains'])})")
    for entry in report["domains"]:
        print(f"  {entry['domain']:<16} {entry['status']}")
        if entry["config"] is None:
            continue
        field("source", entry["source_kind"], indent=6)
        for key in sorted(entry["config"]):
            value = entry["config"][key]
            if isinstance(value, (tuple, list)) and len(value) > 3:
                value = f"[{len(value)} items]"
            field(key, _jsonable(value) if isinstance(value, Enum) else value, indent=6)
        print()

    if report["violations"] is None:
        return

    validation = report["validation"]
    section(f"VIOLATIONS ({len(report['violations'])})")
    field("rules_checked", validation["rules_checked"])
    field("passed", validation["passed"])
    field("can_file", validation["can_file"])
    print()
    for v in report["violations"]:
        print(f"  [{v['severity']}] {v['rule_id']}: {v['message']}")
        if v["citation"]:
            field("citation", v["citation"], indent=6)
        for step in v["correction_steps"]:
            print(f"        - {step}")
        print()


# =============================================================================
# Main
# =============================================================================


def main() -> int:
    parser = argparse.ArgumentParser(
        description="Explain domain availability, configuration and compliance for a tenant.",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog=(
            "examples:\n"
            "  python3 scripts/explain_tenant.py tenant.yaml\n"
            "  python3 scripts/explain_tenant.py tenant.yaml --domain finance\n"
            "  python3 scripts/explain_tenant.py tenant.yaml --snapshot fy2024.yaml --json\n"
        ),
    )
    parser.add_argument("tenant", type=Path, help="Tenant settings YAML")
    parser.add_argument(
        "--domain", action="append", default=None,
        help="Domain to explain (repeatable; default: every known domain)",
    )
    parser.add_argument(
        "--snapshot", type=Path, default=None,
        help="Evaluation snapshot YAML to validate against the jurisdiction's rules",
    )
    parser.add_argument(
        "--json", action="store_true",
        help="Output JSON instead of formatted text",
    )
    parser.add_argument(
        "--verbose", action="store_true",
        help="Emit structured kernel logs to stderr",
    )

    args = parser.parse_args()

    from civic_config.loader import load_evaluation_context, load_tenant_settings
    from civic_kernel.domain.jurisdiction import JurisdictionProfile
    from civic_kernel.exceptions import CivicKernelError
    from civic_kernel.logging_config import configure_logging
    from civic_packs import register_all_jurisdictions, rule_engine_for

    if args.verbose:
        configure_logging(level=logging.DEBUG)
    else:
        logging.disable(logging.CRITICAL)

    try:
        tenant, identity = load_tenant_settings(args.tenant)
        registry = register_all_jurisdictions()

        domains = args.domain or sorted(
            set(registry.list_domains_for(identity.jurisdiction))
            | {m.module_id for m in tenant.enabled_modules}
        )

        context = engine = None
        if args.snapshot is not None:
            metadata = registry.get_jurisdiction(identity.jurisdiction)
            profile = JurisdictionProfile.from_identity(identity)
            if metadata is not None:
                profile = JurisdictionProfile.from_identity(
                    identity, form_id=metadata.form_id_for(profile.kind)
                )
            context = load_evaluation_context(
                args.snapshot, tenant_id=identity.tenant_id, jurisdiction=profile
            )
            engine = rule_engine_for(identity.jurisdiction)
            if engine is None:
                print(
                    f"  WARNING: no rules registered for {identity.jurisdiction}",
                    file=sys.stderr,
                )
    except CivicKernelError as exc:
        print(f"  ERROR [{exc.code}]: {exc}", file=sys.stderr)
        return 1

    report = build_report(tenant, identity, registry, domains, context, engine)

    if args.json:
        print(json.dumps(report, indent=2, default=_jsonable))
    else:
        print_report(report)
    return 0


if __name__ == "__main__":
    sys.exit(main())
