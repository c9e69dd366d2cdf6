"""
Pytest fixtures for the civic kernel test suite.

Logging is configured once per session at DEBUG so tests can assert on
structured log records. Jurisdiction modules are registered explicitly
per test through the ``registry`` fixture; nothing registers on import.
"""

import json
import logging
from io import StringIO

import pytest

from civic_kernel.domain.jurisdiction import EntityClass, TenantIdentity
from civic_kernel.domain.registry import JurisdictionRegistry
from civic_kernel.domain.resolver import ConfigResolver
from civic_kernel.domain.tenant import EnabledModule, TenantConfig
from civic_kernel.logging_config import (
    LogContext,
    StructuredFormatter,
    configure_logging,
    reset_logging,
)
from civic_packs import register_all_jurisdictions

# ---------------------------------------------------------------------------
# Logging fixtures
# ---------------------------------------------------------------------------


@pytest.fixture(autouse=True, scope="session")
def _configure_test_logging():
    """Configure structured logging for the test suite."""
    reset_logging()
    configure_logging(level=logging.DEBUG)
    yield
    reset_logging()


@pytest.fixture(autouse=True)
def _clear_log_context():
    """Clear LogContext between tests to prevent cross-test contamination."""
    LogContext.clear()
    yield
    LogContext.clear()


@pytest.fixture
def captured_logs():
    """
    Capture civic_kernel logs as parsed JSON dicts.

    Usage::

        def test_something(captured_logs, resolver):
            resolver.resolve_config(...)
            logs = captured_logs()
            assert any(r["message"] == "CIVIC_CONFIG_TRACE" for r in logs)
    """
    stream = StringIO()
    handler = logging.StreamHandler(stream)
    handler.setFormatter(StructuredFormatter())
    root = logging.getLogger("civic_kernel")
    previous_level = root.level
    root.setLevel(logging.DEBUG)
    root.addHandler(handler)

    def _get_records() -> list[dict]:
        lines = stream.getvalue().strip().split("\n")
        return [json.loads(line) for line in lines if line]

    yield _get_records

    root.removeHandler(handler)
    root.setLevel(previous_level)


# ---------------------------------------------------------------------------
# Registry fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def registry() -> JurisdictionRegistry:
    """A registry populated with every jurisdiction module."""
    return register_all_jurisdictions(strict=True)


@pytest.fixture
def empty_registry() -> JurisdictionRegistry:
    return JurisdictionRegistry()


@pytest.fixture
def resolver(registry) -> ConfigResolver:
    return ConfigResolver(registry)


# ---------------------------------------------------------------------------
# Tenant fixtures
# ---------------------------------------------------------------------------


@pytest.fixture
def small_town() -> TenantIdentity:
    """Lapel, a town below the LIT population threshold."""
    return TenantIdentity(
        tenant_id="lapel-in",
        display_name="Town of Lapel",
        jurisdiction="IN",
        entity_class=EntityClass.TOWN,
        population=2350,
        county_name="Madison",
    )


@pytest.fixture
def large_town() -> TenantIdentity:
    return TenantIdentity(
        tenant_id="pendleton-in",
        display_name="Town of Pendleton",
        jurisdiction="IN",
        entity_class=EntityClass.TOWN,
        population=5000,
        county_name="Madison",
    )


@pytest.fixture
def township() -> TenantIdentity:
    return TenantIdentity(
        tenant_id="stony-creek-twp",
        display_name="Stony Creek Township",
        jurisdiction="IN",
        entity_class=EntityClass.TOWNSHIP,
        population=4200,
        county_name="Madison",
    )


def make_tenant(identity: TenantIdentity, *modules: EnabledModule) -> TenantConfig:
    return TenantConfig(
        tenant_id=identity.tenant_id,
        jurisdiction=identity.jurisdiction,
        enabled_modules=tuple(modules),
    )


@pytest.fixture
def finance_tenant(small_town) -> TenantConfig:
    """Lapel with finance and records enabled and no overrides."""
    return make_tenant(
        small_town,
        EnabledModule("finance"),
        EnabledModule("records"),
    )
