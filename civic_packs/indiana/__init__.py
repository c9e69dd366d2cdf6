"""
Indiana jurisdiction module.

Exposes the Indiana metadata, its packs and its compliance rule set.
Nothing is registered at import time; ``register(registry)`` is called
by ``civic_packs.register_all_jurisdictions``.
"""

from pathlib import Path

from civic_config.loader import load_jurisdiction_metadata
from civic_kernel.compliance import RuleEngine, build_engine
from civic_kernel.domain.registry import JurisdictionRegistry
from civic_kernel.logging_config import get_logger
from civic_packs.indiana.apra import IndianaApraDomainPack, IndianaApraPack
from civic_packs.indiana.finance.opinions import LEGAL_OPINIONS
from civic_packs.indiana.finance.pack import IndianaFinancePack
from civic_packs.indiana.finance.rules import FINANCE_RULES
from civic_packs.indiana.meetings import IndianaMeetingsDomainPack, IndianaMeetingsPack
from civic_packs.indiana.planning import IndianaPlanningPack
from civic_packs.indiana.records import IndianaRecordsPack
from civic_packs.indiana.township import IndianaTownshipPack
from civic_packs.indiana.utilities import IndianaUtilitiesPack

logger = get_logger("packs.indiana")

METADATA = load_jurisdiction_metadata(Path(__file__).parent / "jurisdiction.yaml")

DOMAIN_PACKS = (
    IndianaFinancePack(),
    IndianaTownshipPack(),
    IndianaMeetingsDomainPack(),
    IndianaApraDomainPack(),
)

# Meetings and APRA also ship domain packs, which take precedence when
# resolving; their legacy packs serve profile-based lookups.
LEGACY_PACKS = (
    IndianaRecordsPack(),
    IndianaMeetingsPack(),
    IndianaApraPack(),
    IndianaPlanningPack(),
    IndianaUtilitiesPack(),
)


def register(registry: JurisdictionRegistry) -> None:
    """Register Indiana metadata and every Indiana pack."""
    registry.register_jurisdiction(METADATA)
    for pack in LEGACY_PACKS:
        registry.register_legacy_pack(pack)
    for pack in DOMAIN_PACKS:
        registry.register_domain_pack(pack)

    logger.info(
        "jurisdiction_module_registered",
        extra={
            "jurisdiction": METADATA.code,
            "domain_packs": [p.domain for p in DOMAIN_PACKS],
            "legacy_packs": [p.domain for p in LEGACY_PACKS],
        },
    )


def create_rule_engine() -> RuleEngine:
    """Rule engine holding the Indiana finance rules and legal opinions."""
    return build_engine(FINANCE_RULES, LEGAL_OPINIONS)
