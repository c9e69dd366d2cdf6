"""
ConfigResolver -- Tenant configuration resolution for one domain.

Responsibility:
    Produces a tenant's effective configuration for a domain from the
    jurisdiction pack's defaults plus the tenant's stored overrides, or
    reports that the domain is unavailable.

Architecture position:
    Kernel > Domain -- pure functions over an already-populated
    ``JurisdictionRegistry``; zero I/O.

Invariants enforced:
    - GATED_RESOLUTION -- a config resolves only when the registry yields a
      source AND the tenant's module entry exists and is enabled.
      ``is_domain_available``/``list_available_domains``/``check_availability``
      share the same gate as ``resolve_config``.
    - SHALLOW_OVERRIDE_MERGE -- overrides replace top-level keys; nested
      values are replaced wholesale.

Failure modes:
    - Unavailability returns ``None``; it never raises.
    - A ``config_type`` rejecting an override value also returns ``None``
      and reports ``INVALID_OVERRIDE``; the typed config is built inside
      the gate so availability checks agree with resolution.

Audit relevance:
    Every successful resolution emits a ``CIVIC_CONFIG_TRACE`` log entry
    naming the tenant, jurisdiction, domain, config source and the
    override keys applied.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import Enum
from typing import Any

from civic_kernel.domain.jurisdiction import JurisdictionProfile, TenantIdentity
from civic_kernel.domain.packs import ConfigSource, SourceKind, merge_overrides
from civic_kernel.domain.registry import JurisdictionRegistry
from civic_kernel.domain.tenant import EnabledModule, TenantConfig
from civic_kernel.logging_config import get_logger

logger = get_logger("domain.resolver")


class ResolutionStatus(str, Enum):
    """Why a domain is or is not available to a tenant."""

    AVAILABLE = "available"
    JURISDICTION_UNSUPPORTED = "jurisdiction_unsupported"
    DOMAIN_UNSUPPORTED = "domain_unsupported"
    MODULE_NOT_CONFIGURED = "module_not_configured"
    MODULE_DISABLED = "module_disabled"
    INVALID_OVERRIDE = "invalid_override"

    @property
    def is_available(self) -> bool:
        return self is ResolutionStatus.AVAILABLE

    @property
    def is_actionable(self) -> bool:
        """True when the tenant administrator can change the outcome."""
        return self in (
            ResolutionStatus.MODULE_NOT_CONFIGURED,
            ResolutionStatus.MODULE_DISABLED,
            ResolutionStatus.INVALID_OVERRIDE,
        )


@dataclass(frozen=True)
class DomainConfigResult:
    """Resolved configuration plus how it was resolved (diagnostics only)."""

    config: Any
    enabled: bool
    jurisdiction: str
    domain: str
    source_kind: SourceKind


@dataclass(frozen=True)
class _Gate:
    status: ResolutionStatus
    source: ConfigSource | None = None
    entry: EnabledModule | None = None
    config: Any = None
    error: str | None = None


class ConfigResolver:
    """
    Resolves domain configuration for tenants.

    Contract:
        ``resolve_config`` returns the same structure for the same inputs
        (idempotent) and never raises for unavailability.

    Non-goals:
        - Does NOT cache results; packs are pure so recomputing is exact.
        - Does NOT persist anything.
    """

    def __init__(self, registry: JurisdictionRegistry):
        self._registry = registry

    @property
    def registry(self) -> JurisdictionRegistry:
        return self._registry

    # =========================================================================
    # Gate
    # =========================================================================

    def _gate(
        self,
        tenant: TenantConfig,
        identity: TenantIdentity,
        domain: str,
    ) -> _Gate:
        profile = self._profile_for(identity)
        source = self._registry.resolve_source(identity.jurisdiction, domain, profile)

        if source is None:
            if not self._registry.is_jurisdiction_supported(identity.jurisdiction):
                return _Gate(ResolutionStatus.JURISDICTION_UNSUPPORTED)
            return _Gate(ResolutionStatus.DOMAIN_UNSUPPORTED)

        entry = tenant.module_entry(domain)
        if entry is None:
            return _Gate(ResolutionStatus.MODULE_NOT_CONFIGURED, source=source)
        if not entry.enabled:
            return _Gate(ResolutionStatus.MODULE_DISABLED, source=source, entry=entry)

        merged = merge_overrides(source.defaults_for(identity), entry.overrides)
        config_type = source.config_type
        if config_type is None:
            return _Gate(ResolutionStatus.AVAILABLE, source=source, entry=entry, config=merged)
        try:
            config = config_type.from_mapping(merged)
        except (ValueError, TypeError, ArithmeticError) as exc:
            return _Gate(
                ResolutionStatus.INVALID_OVERRIDE, source=source, entry=entry, error=str(exc)
            )
        return _Gate(ResolutionStatus.AVAILABLE, source=source, entry=entry, config=config)

    def _profile_for(self, identity: TenantIdentity) -> JurisdictionProfile:
        metadata = self._registry.get_jurisdiction(identity.jurisdiction)
        profile = JurisdictionProfile.from_identity(identity)
        if metadata is None:
            return profile
        return JurisdictionProfile.from_identity(
            identity, form_id=metadata.form_id_for(profile.kind)
        )

    # =========================================================================
    # Resolution
    # =========================================================================

    def resolve_config(
        self,
        tenant: TenantConfig,
        identity: TenantIdentity,
        domain: str,
    ) -> Any | None:
        """
        Resolve ``domain`` configuration for a tenant.

        Steps:
            1. Registry source for (identity.jurisdiction, domain), else None.
            2. Tenant module entry must exist and be enabled, else None.
            3. Defaults from the source (domain pack derive function or the
               matching legacy pack's static config).
            4. Shallow merge of the tenant's override map.
            5. Typed config when the source declares a ``config_type``,
               otherwise a plain dict. A typed config rejecting the merged
               values yields None with status ``INVALID_OVERRIDE``.
        """
        gate = self._gate(tenant, identity, domain)
        if gate.status is ResolutionStatus.INVALID_OVERRIDE:
            logger.warning(
                "config_invalid",
                extra={
                    "tenant_id": identity.tenant_id,
                    "jurisdiction": identity.jurisdiction,
                    "domain": domain,
                    "status": gate.status.value,
                    "error": gate.error,
                },
            )
            return None
        if not gate.status.is_available:
            logger.debug(
                "config_unavailable",
                extra={
                    "tenant_id": identity.tenant_id,
                    "jurisdiction": identity.jurisdiction,
                    "domain": domain,
                    "status": gate.status.value,
                },
            )
            return None

        assert gate.source is not None and gate.entry is not None
        logger.info(
            "CIVIC_CONFIG_TRACE",
            extra={
                "trace_type": "CIVIC_CONFIG_TRACE",
                "tenant_id": identity.tenant_id,
                "jurisdiction": identity.jurisdiction,
                "domain": domain,
                "source_kind": gate.source.kind.value,
                "pack": type(gate.source.pack).__name__,
                "override_keys": sorted(gate.entry.overrides),
            },
        )
        return gate.config

    def resolve_config_with_metadata(
        self,
        tenant: TenantConfig,
        identity: TenantIdentity,
        domain: str,
    ) -> DomainConfigResult | None:
        """Same as ``resolve_config`` but reports how it was resolved."""
        config = self.resolve_config(tenant, identity, domain)
        if config is None:
            return None

        source = self._registry.resolve_source(
            identity.jurisdiction, domain, self._profile_for(identity)
        )
        assert source is not None
        return DomainConfigResult(
            config=config,
            enabled=tenant.is_module_enabled(domain),
            jurisdiction=identity.jurisdiction,
            domain=domain,
            source_kind=source.kind,
        )

    # =========================================================================
    # Availability views (same gate as resolve_config)
    # =========================================================================

    def check_availability(
        self,
        tenant: TenantConfig,
        identity: TenantIdentity,
        domain: str,
    ) -> ResolutionStatus:
        return self._gate(tenant, identity, domain).status

    def is_domain_available(
        self,
        tenant: TenantConfig,
        identity: TenantIdentity,
        domain: str,
    ) -> bool:
        return self.check_availability(tenant, identity, domain).is_available

    def list_available_domains(
        self,
        tenant: TenantConfig,
        identity: TenantIdentity,
    ) -> list[str]:
        """Domains the tenant has enabled that also resolve, in tenant order."""
        available: list[str] = []
        for entry in tenant.enabled_modules:
            if entry.module_id in available:
                continue
            if self.is_domain_available(tenant, identity, entry.module_id):
                available.append(entry.module_id)
        return available
