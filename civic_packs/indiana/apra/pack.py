"""
Indiana APRA packs.

``IndianaApraPack`` is the static public records configuration, kept as a
legacy pack for profile-based lookups. ``IndianaApraDomainPack`` is the
one the resolver uses; APRA binds every public agency the same way, so
its defaults do not vary with the tenant.
"""

from __future__ import annotations

from typing import Any

from civic_kernel.domain.jurisdiction import JurisdictionProfile, TenantIdentity
from civic_kernel.domain.packs import BaseDomainPack, BaseLegacyPack
from civic_packs.indiana.apra.config import ApraExemption, DenialReason, IndianaApraConfig


class IndianaApraPack(BaseLegacyPack):
    state = "IN"
    domain = "apra"
    version = "1.0.0"

    config: IndianaApraConfig

    def __init__(self, config: IndianaApraConfig | None = None):
        super().__init__(config if config is not None else IndianaApraConfig())

    def applies_to(self, profile: JurisdictionProfile) -> bool:
        return profile.state == self.state

    def get_response_deadline(self) -> int:
        """Days to respond to a written request (business days by default)."""
        return self.config.standard_response_days

    def get_exemptions(self) -> tuple[ApraExemption, ...]:
        return self.config.exemptions

    def get_exemption(self, code: str) -> ApraExemption | None:
        return self.config.exemption(code)

    def get_denial_reasons(self) -> tuple[DenialReason, ...]:
        return self.config.denial_reasons


class IndianaApraDomainPack(BaseDomainPack):
    state = "IN"
    domain = "apra"
    config_type = IndianaApraConfig

    def derive_defaults(self, identity: TenantIdentity) -> dict[str, Any]:
        return IndianaApraConfig().to_mapping()
