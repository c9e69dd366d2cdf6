"""Indiana utilities domain: municipally owned utilities (legacy pack)."""

from civic_packs.indiana.utilities.config import (
    ApprovalBody,
    BillingRequirements,
    DisconnectionRules,
    IndianaUtilitiesConfig,
    MedicalCertificateRules,
    RateSettingRequirement,
    UtilityType,
    WinterMoratorium,
)
from civic_packs.indiana.utilities.pack import UTILITY_OPERATOR_TAG, IndianaUtilitiesPack

__all__ = [
    "UTILITY_OPERATOR_TAG",
    "ApprovalBody",
    "BillingRequirements",
    "DisconnectionRules",
    "IndianaUtilitiesConfig",
    "IndianaUtilitiesPack",
    "MedicalCertificateRules",
    "RateSettingRequirement",
    "UtilityType",
    "WinterMoratorium",
]
