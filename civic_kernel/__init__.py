"""
Civic Kernel - jurisdiction-aware configuration and compliance core.

Provides:
- A registry of jurisdictions and the configuration packs registered for
  each (jurisdiction, domain) pair
- A resolver that merges pack defaults with tenant overrides
- A rule engine that evaluates compliance rules against a data snapshot
  and reports violations with legal citations
"""

__version__ = "0.1.0"
