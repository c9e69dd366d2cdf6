"""
Jurisdiction -- Metadata and tenant identity value objects.

Responsibility:
    Declares the nouns the registry and resolver work with: jurisdiction
    metadata registered at bootstrap, the identity of a tenant asking for
    configuration, and the jurisdiction profile legacy packs match on.

Architecture position:
    Kernel > Domain -- pure data, zero I/O.

Invariants enforced:
    - All value objects are frozen after construction.
    - Entity classes and local-government kinds convert both ways; unknown
      values map to OTHER instead of raising.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from enum import Enum


class EntityClass(str, Enum):
    """Class of local-government unit a tenant represents."""

    TOWN = "TOWN"
    CITY = "CITY"
    TOWNSHIP = "TOWNSHIP"
    COUNTY = "COUNTY"
    SPECIAL_DISTRICT = "SPECIAL_DISTRICT"
    OTHER = "OTHER"

    @property
    def label(self) -> str:
        return self.value.replace("_", " ").title()


class LocalGovKind(str, Enum):
    """Kind of unit as used in jurisdiction profiles and metadata."""

    TOWN = "town"
    CITY = "city"
    TOWNSHIP = "township"
    COUNTY = "county"
    SPECIAL_DISTRICT = "special_district"
    OTHER = "other"


_KIND_BY_ENTITY_CLASS: dict[EntityClass, LocalGovKind] = {
    EntityClass.TOWN: LocalGovKind.TOWN,
    EntityClass.CITY: LocalGovKind.CITY,
    EntityClass.TOWNSHIP: LocalGovKind.TOWNSHIP,
    EntityClass.COUNTY: LocalGovKind.COUNTY,
    EntityClass.SPECIAL_DISTRICT: LocalGovKind.SPECIAL_DISTRICT,
    EntityClass.OTHER: LocalGovKind.OTHER,
}

_ENTITY_CLASS_BY_KIND: dict[LocalGovKind, EntityClass] = {
    kind: entity_class for entity_class, kind in _KIND_BY_ENTITY_CLASS.items()
}


def kind_for_entity_class(entity_class: EntityClass) -> LocalGovKind:
    return _KIND_BY_ENTITY_CLASS.get(entity_class, LocalGovKind.OTHER)


def entity_class_for_kind(kind: LocalGovKind) -> EntityClass:
    return _ENTITY_CLASS_BY_KIND.get(kind, EntityClass.OTHER)


# ---------------------------------------------------------------------------
# Jurisdiction metadata
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class FiscalYearStart:
    month: int = 1
    day: int = 1


@dataclass(frozen=True)
class OversightAgency:
    """State oversight agency (e.g., Indiana SBOA, DLGF)."""

    code: str
    name: str
    url: str | None = None
    contact_email: str | None = None


@dataclass(frozen=True)
class SupportedGovKind:
    """A kind of local government a jurisdiction supports."""

    kind: LocalGovKind
    form_id: str  # e.g., "IN_TOWN"
    display_name: str
    description: str | None = None


@dataclass(frozen=True)
class JurisdictionMetadata:
    """Static description of one jurisdiction, registered once at bootstrap."""

    code: str  # e.g., "IN"
    name: str
    timezone: str
    fiscal_year_start: FiscalYearStart = field(default_factory=FiscalYearStart)
    oversight_agencies: tuple[OversightAgency, ...] = ()
    supported_gov_kinds: tuple[SupportedGovKind, ...] = ()

    def get_agency(self, code: str) -> OversightAgency | None:
        for agency in self.oversight_agencies:
            if agency.code == code:
                return agency
        return None

    def supports_kind(self, kind: LocalGovKind) -> bool:
        return any(k.kind == kind for k in self.supported_gov_kinds)

    def form_id_for(self, kind: LocalGovKind) -> str | None:
        for supported in self.supported_gov_kinds:
            if supported.kind == kind:
                return supported.form_id
        return None


# ---------------------------------------------------------------------------
# Tenant identity and profile
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class TenantIdentity:
    """Who is asking for configuration. Supplied per request, never stored."""

    tenant_id: str
    display_name: str
    jurisdiction: str  # state code, e.g. "IN"
    entity_class: EntityClass
    population: int | None = None
    county_name: str | None = None
    authority_tags: tuple[str, ...] = ()  # e.g. "zoningAuthority", "utilityOperator"


@dataclass(frozen=True)
class JurisdictionProfile:
    """Profile of a tenant's jurisdiction, matched by legacy pack predicates."""

    tenant_id: str
    state: str
    kind: LocalGovKind
    name: str
    population: int | None = None
    county_name: str | None = None
    form_id: str | None = None
    authority_tags: tuple[str, ...] = ()

    @classmethod
    def from_identity(
        cls,
        identity: TenantIdentity,
        *,
        form_id: str | None = None,
        authority_tags: tuple[str, ...] | None = None,
    ) -> JurisdictionProfile:
        """``authority_tags`` defaults to the tags the identity carries."""
        return cls(
            tenant_id=identity.tenant_id,
            state=identity.jurisdiction,
            kind=kind_for_entity_class(identity.entity_class),
            name=identity.display_name,
            population=identity.population,
            county_name=identity.county_name,
            form_id=form_id,
            authority_tags=(
                identity.authority_tags if authority_tags is None else authority_tags
            ),
        )

    @property
    def entity_class(self) -> EntityClass:
        return entity_class_for_kind(self.kind)
