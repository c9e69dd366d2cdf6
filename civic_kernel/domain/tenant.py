"""
Tenant configuration as stored by tenant administration.

The kernel only reads these objects; it never writes them back.
"""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from typing import Any


@dataclass(frozen=True)
class EnabledModule:
    """One domain module entry in a tenant's settings."""

    module_id: str  # e.g., "finance", "records"
    enabled: bool = True
    config: Mapping[str, Any] | None = None

    @property
    def overrides(self) -> Mapping[str, Any]:
        return self.config or {}


@dataclass(frozen=True)
class TenantConfig:
    """A tenant's stored settings: which modules it runs and their overrides."""

    tenant_id: str
    jurisdiction: str
    enabled_modules: tuple[EnabledModule, ...] = ()
    metadata: Mapping[str, Any] = field(default_factory=dict)

    def module_entry(self, domain: str) -> EnabledModule | None:
        """First module entry for ``domain``, or None when the tenant omits it."""
        for entry in self.enabled_modules:
            if entry.module_id == domain:
                return entry
        return None

    def is_module_enabled(self, domain: str) -> bool:
        entry = self.module_entry(domain)
        return entry is not None and entry.enabled
