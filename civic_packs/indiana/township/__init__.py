"""Indiana township domain: statutory township defaults."""

from civic_packs.indiana.township.config import (
    TOWNSHIP_MODULES,
    IndianaTownshipConfig,
    TownshipFireModel,
)
from civic_packs.indiana.township.pack import (
    IndianaTownshipPack,
    build_township_config,
    is_township,
    township_duties_summary,
    township_modules_for,
)

__all__ = [
    "TOWNSHIP_MODULES",
    "IndianaTownshipConfig",
    "IndianaTownshipPack",
    "TownshipFireModel",
    "build_township_config",
    "is_township",
    "township_duties_summary",
    "township_modules_for",
]
