"""
Packs -- Configuration providers contributed by jurisdiction modules.

Two pack shapes coexist in the registry:

* Legacy packs carry a static ``config`` object and an ``applies_to``
  predicate. Several may be registered per (jurisdiction, domain); the
  first one whose predicate matches wins.
* Domain packs derive a partial configuration from a tenant identity.
  Exactly one exists per (jurisdiction, domain).

The resolver never inspects these shapes directly. It asks the registry
for a ``ConfigSource`` (``SingletonSource`` or ``PredicateListSource``)
and reads defaults through it.

Configuration objects are ``DomainConfig`` subclasses: typed fields plus
an ``extensions`` map that carries keys the typed schema does not know.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Mapping
from dataclasses import dataclass, field, fields, is_dataclass
from enum import Enum
from typing import Any, ClassVar, Protocol, Self, runtime_checkable

from civic_kernel.domain.jurisdiction import JurisdictionProfile, TenantIdentity

# ---------------------------------------------------------------------------
# Typed configuration core + extension map
# ---------------------------------------------------------------------------


@dataclass(frozen=True)
class DomainConfig:
    """
    Base configuration shared by every domain.

    Contract:
        ``from_mapping`` routes keys naming a dataclass field to that
        field and every other key to ``extensions``. ``to_mapping``
        flattens both back into one dict, so a round trip is lossless.
    """

    domain: str = ""
    enabled: bool = True
    notes: str | None = None
    extensions: Mapping[str, Any] = field(default_factory=dict)

    @classmethod
    def field_names(cls) -> frozenset[str]:
        return frozenset(f.name for f in fields(cls) if f.name != "extensions")

    @classmethod
    def from_mapping(cls, values: Mapping[str, Any]) -> Self:
        known = cls.field_names()
        typed = {k: v for k, v in values.items() if k in known}
        extra = {k: v for k, v in values.items() if k not in known}
        return cls(**typed, extensions=extra)

    def to_mapping(self) -> dict[str, Any]:
        values = {name: getattr(self, name) for name in self.field_names()}
        values.update(self.extensions)
        return values

    def get(self, key: str, default: Any = None) -> Any:
        if key in self.field_names():
            return getattr(self, key)
        return self.extensions.get(key, default)


def config_as_mapping(config: Any) -> dict[str, Any]:
    """Shallow, top-level view of a pack's static config object."""
    if config is None:
        return {}
    if isinstance(config, DomainConfig):
        return config.to_mapping()
    if isinstance(config, Mapping):
        return dict(config)
    if is_dataclass(config) and not isinstance(config, type):
        return {f.name: getattr(config, f.name) for f in fields(config)}
    return dict(vars(config))


def merge_overrides(
    defaults: Mapping[str, Any],
    overrides: Mapping[str, Any] | None,
) -> dict[str, Any]:
    """Shallow merge: every override key replaces the default wholesale."""
    merged = dict(defaults)
    if overrides:
        merged.update(overrides)
    return merged


# ---------------------------------------------------------------------------
# Pack protocols
# ---------------------------------------------------------------------------


@runtime_checkable
class LegacyPack(Protocol):
    """Static configuration plus a jurisdiction predicate."""

    state: str
    domain: str
    version: str
    config: Any

    def applies_to(self, profile: JurisdictionProfile) -> bool:
        ...


@runtime_checkable
class DomainPack(Protocol):
    """Derives default configuration from a tenant identity."""

    state: str
    domain: str

    def derive_defaults(self, identity: TenantIdentity) -> Mapping[str, Any]:
        ...


class BaseDomainPack(ABC):
    """
    Convenience base for domain packs.

    ``derive_defaults`` must be pure and total: optional identity fields
    that are missing degrade to baseline values instead of raising.
    """

    state: ClassVar[str]
    domain: ClassVar[str]
    config_type: ClassVar[type[DomainConfig] | None] = None

    @abstractmethod
    def derive_defaults(self, identity: TenantIdentity) -> dict[str, Any]:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.state}:{self.domain})"


class BaseLegacyPack(ABC):
    """Convenience base for legacy packs holding a static config object."""

    state: ClassVar[str]
    domain: ClassVar[str]
    version: ClassVar[str] = "1.0.0"

    def __init__(self, config: Any):
        self.config = config

    @abstractmethod
    def applies_to(self, profile: JurisdictionProfile) -> bool:
        pass

    def __repr__(self) -> str:
        return f"{type(self).__name__}({self.state}:{self.domain} v{self.version})"


# ---------------------------------------------------------------------------
# Config sources (tagged variant consumed by the resolver)
# ---------------------------------------------------------------------------


class SourceKind(str, Enum):
    SINGLETON = "singleton"
    PREDICATE_LIST = "predicate_list"


@dataclass(frozen=True)
class SingletonSource:
    """Configuration comes from the domain pack's derive function."""

    pack: Any

    kind: ClassVar[SourceKind] = SourceKind.SINGLETON

    @property
    def config_type(self) -> type[DomainConfig] | None:
        return getattr(self.pack, "config_type", None)

    def defaults_for(self, identity: TenantIdentity) -> dict[str, Any]:
        return dict(self.pack.derive_defaults(identity))


@dataclass(frozen=True)
class PredicateListSource:
    """Configuration comes from the first legacy pack whose predicate matched."""

    pack: Any
    candidates: tuple[Any, ...] = ()

    kind: ClassVar[SourceKind] = SourceKind.PREDICATE_LIST

    @property
    def config_type(self) -> type[DomainConfig] | None:
        config = getattr(self.pack, "config", None)
        if isinstance(config, DomainConfig):
            return type(config)
        return None

    def defaults_for(self, identity: TenantIdentity) -> dict[str, Any]:
        return config_as_mapping(getattr(self.pack, "config", None))


ConfigSource = SingletonSource | PredicateListSource
