"""Indiana APRA domain: public records access (legacy pack and domain pack)."""

from civic_packs.indiana.apra.config import (
    ApraExemption,
    DenialReason,
    ExemptionCategory,
    IndianaApraConfig,
    PacContact,
)
from civic_packs.indiana.apra.pack import IndianaApraDomainPack, IndianaApraPack

__all__ = [
    "ApraExemption",
    "DenialReason",
    "ExemptionCategory",
    "IndianaApraConfig",
    "IndianaApraDomainPack",
    "IndianaApraPack",
    "PacContact",
]
