"""
Pure domain layer.

Jurisdiction metadata, tenant settings, configuration packs, the registry
that holds them and the resolver that merges pack defaults with tenant
overrides. No I/O, no clock, no imports from civic_config or civic_packs.
"""

from civic_kernel.domain.jurisdiction import (
    EntityClass,
    FiscalYearStart,
    JurisdictionMetadata,
    JurisdictionProfile,
    LocalGovKind,
    OversightAgency,
    SupportedGovKind,
    TenantIdentity,
    entity_class_for_kind,
    kind_for_entity_class,
)
from civic_kernel.domain.packs import (
    BaseDomainPack,
    BaseLegacyPack,
    ConfigSource,
    DomainConfig,
    DomainPack,
    LegacyPack,
    PredicateListSource,
    SingletonSource,
    SourceKind,
    config_as_mapping,
    merge_overrides,
)
from civic_kernel.domain.registry import DuplicatePolicy, JurisdictionRegistry
from civic_kernel.domain.resolver import (
    ConfigResolver,
    DomainConfigResult,
    ResolutionStatus,
)
from civic_kernel.domain.tenant import EnabledModule, TenantConfig

__all__ = [
    # Jurisdiction
    "EntityClass",
    "FiscalYearStart",
    "JurisdictionMetadata",
    "JurisdictionProfile",
    "LocalGovKind",
    "OversightAgency",
    "SupportedGovKind",
    "TenantIdentity",
    "entity_class_for_kind",
    "kind_for_entity_class",
    # Packs
    "BaseDomainPack",
    "BaseLegacyPack",
    "ConfigSource",
    "DomainConfig",
    "DomainPack",
    "LegacyPack",
    "PredicateListSource",
    "SingletonSource",
    "SourceKind",
    "config_as_mapping",
    "merge_overrides",
    # Registry / resolver
    "ConfigResolver",
    "DomainConfigResult",
    "DuplicatePolicy",
    "JurisdictionRegistry",
    "ResolutionStatus",
    # Tenant
    "EnabledModule",
    "TenantConfig",
]
