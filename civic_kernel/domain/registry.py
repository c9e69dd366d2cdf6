"""
JurisdictionRegistry -- Jurisdiction metadata and pack lookup.

Responsibility:
    Holds jurisdiction metadata and both pack shapes keyed by
    ``(jurisdiction_code, domain)``, and answers lookups for the resolver,
    bootstrap code and diagnostics.

Architecture position:
    Kernel > Domain -- in-memory registry, zero I/O.

Invariants enforced:
    - SINGLETON_DOMAIN_PACK -- one domain pack per key; a later
      registration replaces the earlier one (or raises under
      ``DuplicatePolicy.ERROR``).
    - ORDERED_LEGACY_PACKS -- legacy packs accumulate per key and are
      matched in registration order, with no priority scoring.
    - Both shapes live in the same per-key slot; writing one never
      touches the other.

Failure modes:
    - Lookups never raise; absence is returned as ``None`` or ``[]``.
    - Registration never raises under the default policy.
    - ``DuplicateDomainPackError`` under ``DuplicatePolicy.ERROR``.

Concurrency:
    Writes are serialized by a re-entrant lock. Reads take the same lock
    only long enough to copy the slot they need, so packs registered
    after bootstrap (hot reload) are never observed half-written.
"""

from __future__ import annotations

import threading
from dataclasses import dataclass, field
from enum import Enum
from typing import Any

from civic_kernel.domain.jurisdiction import JurisdictionMetadata, JurisdictionProfile
from civic_kernel.domain.packs import ConfigSource, PredicateListSource, SingletonSource
from civic_kernel.exceptions import DuplicateDomainPackError
from civic_kernel.logging_config import get_logger

logger = get_logger("domain.registry")


class DuplicatePolicy(str, Enum):
    """What to do when a second domain pack arrives for the same key."""

    REPLACE = "replace"  # last registration wins, logged as a warning
    ERROR = "error"


@dataclass
class _PackSlot:
    """Both pack shapes registered for one (jurisdiction, domain) key."""

    legacy: list[Any] = field(default_factory=list)
    domain_pack: Any | None = None

    def is_empty(self) -> bool:
        return not self.legacy and self.domain_pack is None


def _pack_name(pack: Any) -> str:
    return type(pack).__name__


class JurisdictionRegistry:
    """
    Registry for jurisdiction metadata and configuration packs.

    Contract:
        Every lookup is a total function. Registration accepts pack
        objects as-is; validating them is the bootstrap's job.
    """

    def __init__(self, *, duplicate_policy: DuplicatePolicy = DuplicatePolicy.REPLACE):
        self._duplicate_policy = duplicate_policy
        self._jurisdictions: dict[str, JurisdictionMetadata] = {}
        self._slots: dict[tuple[str, str], _PackSlot] = {}
        self._lock = threading.RLock()

    @property
    def duplicate_policy(self) -> DuplicatePolicy:
        return self._duplicate_policy

    # =========================================================================
    # Jurisdictions
    # =========================================================================

    def register_jurisdiction(self, metadata: JurisdictionMetadata) -> None:
        """Upsert jurisdiction metadata keyed by code."""
        with self._lock:
            replaced = metadata.code in self._jurisdictions
            self._jurisdictions[metadata.code] = metadata
        logger.debug(
            "jurisdiction_registered",
            extra={"jurisdiction": metadata.code, "replaced": replaced},
        )

    def get_jurisdiction(self, code: str) -> JurisdictionMetadata | None:
        with self._lock:
            return self._jurisdictions.get(code)

    def list_jurisdictions(self) -> list[JurisdictionMetadata]:
        with self._lock:
            return list(self._jurisdictions.values())

    def is_jurisdiction_supported(self, code: str) -> bool:
        with self._lock:
            return code in self._jurisdictions

    # =========================================================================
    # Legacy packs (predicate matched, many per key)
    # =========================================================================

    def register_legacy_pack(self, pack: Any) -> None:
        """Append a legacy pack; call order is the later tie-break order."""
        key = (pack.state, pack.domain)
        with self._lock:
            slot = self._slots.setdefault(key, _PackSlot())
            slot.legacy.append(pack)
            position = len(slot.legacy)
        logger.debug(
            "legacy_pack_registered",
            extra={
                "jurisdiction": pack.state,
                "domain": pack.domain,
                "pack": _pack_name(pack),
                "position": position,
            },
        )

    def get_legacy_packs_for(self, state: str, domain: str) -> list[Any]:
        with self._lock:
            slot = self._slots.get((state, domain))
            return list(slot.legacy) if slot else []

    def get_applicable_pack(
        self, domain: str, profile: JurisdictionProfile
    ) -> Any | None:
        """First legacy pack, in registration order, whose predicate is true."""
        for pack in self.get_legacy_packs_for(profile.state, domain):
            if self._applies(pack, profile):
                return pack
        return None

    @staticmethod
    def _applies(pack: Any, profile: JurisdictionProfile) -> bool:
        try:
            return bool(pack.applies_to(profile))
        except Exception as e:
            logger.warning(
                "legacy_pack_predicate_error",
                extra={
                    "jurisdiction": profile.state,
                    "domain": getattr(pack, "domain", None),
                    "pack": _pack_name(pack),
                    "error": str(e),
                },
            )
            return False

    # =========================================================================
    # Domain packs (singleton per key)
    # =========================================================================

    def register_domain_pack(self, pack: Any) -> None:
        """Upsert the domain pack for its (state, domain) key."""
        key = (pack.state, pack.domain)
        with self._lock:
            slot = self._slots.setdefault(key, _PackSlot())
            existing = slot.domain_pack
            if existing is not None and existing is not pack:
                if self._duplicate_policy is DuplicatePolicy.ERROR:
                    raise DuplicateDomainPackError(
                        pack.state, pack.domain, _pack_name(existing), _pack_name(pack)
                    )
                logger.warning(
                    "domain_pack_replaced",
                    extra={
                        "jurisdiction": pack.state,
                        "domain": pack.domain,
                        "previous_pack": _pack_name(existing),
                        "pack": _pack_name(pack),
                    },
                )
            slot.domain_pack = pack
        logger.debug(
            "domain_pack_registered",
            extra={
                "jurisdiction": pack.state,
                "domain": pack.domain,
                "pack": _pack_name(pack),
            },
        )

    def get_domain_pack(self, state: str, domain: str) -> Any | None:
        with self._lock:
            slot = self._slots.get((state, domain))
            return slot.domain_pack if slot else None

    def get_domain_packs_for(self, state: str) -> list[Any]:
        with self._lock:
            return [
                slot.domain_pack
                for (code, _), slot in sorted(self._slots.items())
                if code == state and slot.domain_pack is not None
            ]

    # =========================================================================
    # Combined queries
    # =========================================================================

    def is_domain_supported(self, state: str, domain: str) -> bool:
        with self._lock:
            slot = self._slots.get((state, domain))
            return slot is not None and not slot.is_empty()

    def list_domains_for(self, state: str) -> list[str]:
        """Union of domains with either pack shape for ``state``."""
        with self._lock:
            return sorted(
                domain
                for (code, domain), slot in self._slots.items()
                if code == state and not slot.is_empty()
            )

    def resolve_source(
        self,
        state: str,
        domain: str,
        profile: JurisdictionProfile | None = None,
    ) -> ConfigSource | None:
        """
        The single lookup the resolver uses.

        A domain pack wins when one is registered. Otherwise the first
        legacy pack whose predicate matches ``profile`` is used. Returns
        None when neither yields a source.
        """
        with self._lock:
            slot = self._slots.get((state, domain))
            if slot is None:
                return None
            domain_pack = slot.domain_pack
            candidates = tuple(slot.legacy)

        if domain_pack is not None:
            return SingletonSource(pack=domain_pack)

        if profile is None:
            return None
        for pack in candidates:
            if self._applies(pack, profile):
                return PredicateListSource(pack=pack, candidates=candidates)
        return None

    def clear(self) -> None:
        """Remove every registration. For testing only."""
        with self._lock:
            self._jurisdictions.clear()
            self._slots.clear()
