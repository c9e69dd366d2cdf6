"""
Configuration Loader (``civic_config.loader``).

Responsibility
--------------
Loads YAML documents and parses them into the kernel's frozen value
objects: jurisdiction metadata shipped with each jurisdiction module,
tenant settings as exported by tenant administration, and evaluation
snapshots used by the operator CLI.

Architecture position
---------------------
**Config layer** -- I/O at the edge. Depends on ``civic_kernel`` value
types; the kernel never imports this module.

Invariants enforced
-------------------
* Documents are read with ``yaml.safe_load`` only.
* Every parsed object is a frozen dataclass from ``civic_kernel``.
* Money fields are parsed to ``Decimal`` from their string form, NEVER
  through float.

Failure modes
-------------
* ``parse_*`` functions let ``KeyError``/``ValueError`` propagate for
  missing required keys or bad values.
* ``load_*`` functions wrap missing files, malformed YAML and parse
  errors in ``ConfigLoadError`` naming the file.
"""

from __future__ import annotations

from collections.abc import Callable
from datetime import date
from decimal import Decimal, InvalidOperation
from pathlib import Path
from typing import Any, TypeVar

import yaml

from civic_kernel.compliance.types import (
    BudgetLine,
    BudgetLineType,
    Fund,
    FundType,
    RuleEvaluationContext,
    Transaction,
    TransactionStatus,
    TransactionType,
)
from civic_kernel.domain.jurisdiction import (
    EntityClass,
    FiscalYearStart,
    JurisdictionMetadata,
    JurisdictionProfile,
    LocalGovKind,
    OversightAgency,
    SupportedGovKind,
    TenantIdentity,
)
from civic_kernel.domain.tenant import EnabledModule, TenantConfig
from civic_kernel.exceptions import ConfigLoadError
from civic_kernel.logging_config import get_logger

logger = get_logger("config.loader")

T = TypeVar("T")


def load_yaml_file(path: Path) -> dict[str, Any]:
    """
    Load a single YAML file and return its contents as a dict.

    Raises:
        FileNotFoundError: if the file does not exist.
        yaml.YAMLError: if the file contains invalid YAML.
        ValueError: if the document is not a mapping.
    """
    with open(path) as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        raise ValueError(f"Expected a mapping at the top of {path}, got {type(data).__name__}")
    return data


def parse_date(value: Any) -> date:
    if isinstance(value, date):
        return value
    if isinstance(value, str):
        return date.fromisoformat(value)
    raise ValueError(f"Cannot parse date from {value!r}")


def parse_amount(value: Any) -> Decimal:
    """Decimal from a YAML scalar; floats go through ``str`` first."""
    if isinstance(value, bool):
        raise ValueError(f"Cannot parse amount from {value!r}")
    if isinstance(value, (int, Decimal)):
        return Decimal(value)
    if isinstance(value, (float, str)):
        try:
            return Decimal(str(value))
        except InvalidOperation:
            raise ValueError(f"Cannot parse amount from {value!r}") from None
    raise ValueError(f"Cannot parse amount from {value!r}")


# ---------------------------------------------------------------------------
# Jurisdiction metadata
# ---------------------------------------------------------------------------


def parse_jurisdiction_metadata(data: dict[str, Any]) -> JurisdictionMetadata:
    """
    Parse ``JurisdictionMetadata`` from a dict.

    Required keys: ``code``, ``name``, ``timezone``.
    """
    fy = data.get("fiscal_year_start") or {}
    return JurisdictionMetadata(
        code=data["code"],
        name=data["name"],
        timezone=data["timezone"],
        fiscal_year_start=FiscalYearStart(
            month=int(fy.get("month", 1)),
            day=int(fy.get("day", 1)),
        ),
        oversight_agencies=tuple(
            OversightAgency(
                code=a["code"],
                name=a["name"],
                url=a.get("url"),
                contact_email=a.get("contact_email"),
            )
            for a in data.get("oversight_agencies", [])
        ),
        supported_gov_kinds=tuple(
            SupportedGovKind(
                kind=LocalGovKind(k["kind"]),
                form_id=k["form_id"],
                display_name=k["display_name"],
                description=k.get("description"),
            )
            for k in data.get("supported_gov_kinds", [])
        ),
    )


def load_jurisdiction_metadata(path: Path | str) -> JurisdictionMetadata:
    return _load(Path(path), parse_jurisdiction_metadata)


# ---------------------------------------------------------------------------
# Tenant settings
# ---------------------------------------------------------------------------


def parse_tenant_identity(data: dict[str, Any]) -> TenantIdentity:
    population = data.get("population")
    return TenantIdentity(
        tenant_id=data["id"],
        display_name=data.get("display_name", data["id"]),
        jurisdiction=data["jurisdiction"],
        entity_class=EntityClass(str(data["entity_class"]).upper()),
        population=int(population) if population is not None else None,
        county_name=data.get("county_name"),
        authority_tags=tuple(data.get("authority_tags") or ()),
    )


def parse_enabled_module(data: dict[str, Any] | str) -> EnabledModule:
    """A module entry; a bare string means enabled with no overrides."""
    if isinstance(data, str):
        return EnabledModule(module_id=data)
    config = data.get("config")
    if config is not None and not isinstance(config, dict):
        raise ValueError(f"Module {data['id']!r}: config must be a mapping")
    enabled = data.get("enabled", True)
    if not isinstance(enabled, bool):
        raise ValueError(f"Module {data['id']!r}: enabled must be true or false, got {enabled!r}")
    return EnabledModule(
        module_id=data["id"],
        enabled=enabled,
        config=config,
    )


def parse_tenant_settings(data: dict[str, Any]) -> tuple[TenantConfig, TenantIdentity]:
    """
    Parse a tenant settings document.

    Shape::

        tenant: {id, display_name, jurisdiction, entity_class, population,
                 county_name, authority_tags}
        modules: [{id, enabled, config}, ...]
        metadata: {...}
    """
    identity = parse_tenant_identity(data["tenant"])
    tenant = TenantConfig(
        tenant_id=identity.tenant_id,
        jurisdiction=identity.jurisdiction,
        enabled_modules=tuple(
            parse_enabled_module(m) for m in data.get("modules", [])
        ),
        metadata=dict(data.get("metadata") or {}),
    )
    return tenant, identity


def load_tenant_settings(path: Path | str) -> tuple[TenantConfig, TenantIdentity]:
    return _load(Path(path), parse_tenant_settings)


# ---------------------------------------------------------------------------
# Evaluation snapshots
# ---------------------------------------------------------------------------


def parse_fund(data: dict[str, Any]) -> Fund:
    balance = data.get("current_balance")
    return Fund(
        id=str(data["id"]),
        code=str(data.get("code", data["id"])),
        name=data.get("name", str(data["id"])),
        fund_type=FundType(data.get("fund_type", FundType.GOVERNMENTAL.value)),
        is_restricted=bool(data.get("is_restricted", False)),
        current_balance=parse_amount(balance) if balance is not None else None,
    )


def parse_budget_line(data: dict[str, Any], fiscal_year: int) -> BudgetLine:
    return BudgetLine(
        id=str(data["id"]),
        fund_id=str(data["fund_id"]),
        fiscal_year=int(data.get("fiscal_year", fiscal_year)),
        line_type=BudgetLineType(data["line_type"]),
        amount=parse_amount(data["amount"]),
    )


def parse_transaction(data: dict[str, Any]) -> Transaction:
    target = data.get("target_fund_id")
    return Transaction(
        id=str(data["id"]),
        fund_id=str(data["fund_id"]),
        transaction_type=TransactionType(data["transaction_type"]),
        amount=parse_amount(data["amount"]),
        transaction_date=parse_date(data["transaction_date"]),
        status=TransactionStatus(data.get("status", TransactionStatus.POSTED.value)),
        target_fund_id=str(target) if target is not None else None,
        description=data.get("description", ""),
    )


def parse_evaluation_context(
    data: dict[str, Any],
    *,
    tenant_id: str | None = None,
    jurisdiction: JurisdictionProfile | None = None,
) -> RuleEvaluationContext:
    """
    Parse a data snapshot for rule evaluation.

    ``funds``/``budget_lines``/``transactions`` stay None when the key is
    absent, so rules depending on them report nothing.
    """
    fiscal_year = int(data["fiscal_year"])

    funds = data.get("funds")
    budget_lines = data.get("budget_lines")
    transactions = data.get("transactions")

    return RuleEvaluationContext(
        tenant_id=tenant_id or data["tenant_id"],
        fiscal_year=fiscal_year,
        evaluation_date=parse_date(data["evaluation_date"]),
        jurisdiction=jurisdiction,
        funds=tuple(parse_fund(f) for f in funds) if funds is not None else None,
        budget_lines=(
            tuple(parse_budget_line(b, fiscal_year) for b in budget_lines)
            if budget_lines is not None
            else None
        ),
        transactions=(
            tuple(parse_transaction(t) for t in transactions)
            if transactions is not None
            else None
        ),
        additional_data=dict(data.get("additional_data") or {}),
    )


def load_evaluation_context(
    path: Path | str,
    *,
    tenant_id: str | None = None,
    jurisdiction: JurisdictionProfile | None = None,
) -> RuleEvaluationContext:
    return _load(
        Path(path),
        lambda data: parse_evaluation_context(
            data, tenant_id=tenant_id, jurisdiction=jurisdiction
        ),
    )


# ---------------------------------------------------------------------------
# Internals
# ---------------------------------------------------------------------------


def _load(path: Path, parse: Callable[[dict[str, Any]], T]) -> T:
    try:
        result = parse(load_yaml_file(path))
    except FileNotFoundError as e:
        raise ConfigLoadError(str(path), "file not found") from e
    except yaml.YAMLError as e:
        raise ConfigLoadError(str(path), f"invalid YAML: {e}") from e
    except KeyError as e:
        raise ConfigLoadError(str(path), f"missing required key {e}") from e
    except (TypeError, ValueError) as e:
        raise ConfigLoadError(str(path), str(e)) from e

    logger.debug("config_file_loaded", extra={"path": str(path)})
    return result
