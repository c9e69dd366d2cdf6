"""
Typed Exception Hierarchy for the Civic Kernel.

===============================================================================
WHERE EXCEPTIONS ARE (AND ARE NOT) USED
===============================================================================

Absence is not an error in this kernel. A jurisdiction without a pack, a
tenant module that is disabled, or a rule that finds no data all return an
explicit empty value (``None`` or ``[]``). Exceptions are reserved for
programming and bootstrap mistakes that must stop the process:

    CivicKernelError (base)
    |
    +-- RegistrationError
    |   +-- DuplicateDomainPackError
    |   +-- JurisdictionModuleError
    |
    +-- RuleDefinitionError
    |   +-- DuplicateRuleError
    |
    +-- ConfigurationError
        +-- ConfigLoadError

===============================================================================
ERROR CODES - QUICK REFERENCE
===============================================================================

Category        | Code                         | When Raised
----------------|------------------------------|----------------------------------------
Registration    | DUPLICATE_DOMAIN_PACK        | Second domain pack for a key (strict)
                | INVALID_JURISDICTION_MODULE  | Bootstrap validation failed
----------------|------------------------------|----------------------------------------
Rules           | DUPLICATE_RULE               | Two rules share an id in one engine
----------------|------------------------------|----------------------------------------
Configuration   | CONFIG_LOAD_FAILED           | YAML document missing required keys

===============================================================================
HANDLING PATTERN
===============================================================================

    try:
        registry = register_all_jurisdictions(strict=True)
    except JurisdictionModuleError as e:
        log.error("bootstrap_failed", extra={"code": e.code, "errors": e.errors})
        raise
"""


class CivicKernelError(Exception):
    """
    Base exception for all civic kernel errors.

    All subclasses carry a ``code`` class attribute for machine-readable
    error identification.
    """

    code: str = "CIVIC_KERNEL_ERROR"


# Registration exceptions


class RegistrationError(CivicKernelError):
    """Base exception for registry write failures."""

    code: str = "REGISTRATION_ERROR"


class DuplicateDomainPackError(RegistrationError):
    """A domain pack is already registered for this (jurisdiction, domain)."""

    code: str = "DUPLICATE_DOMAIN_PACK"

    def __init__(self, jurisdiction: str, domain: str, existing: str, incoming: str):
        self.jurisdiction = jurisdiction
        self.domain = domain
        self.existing = existing
        self.incoming = incoming
        super().__init__(
            f"Domain pack already registered for {jurisdiction}:{domain} "
            f"({existing}); refusing to replace with {incoming}"
        )


class JurisdictionModuleError(RegistrationError):
    """A jurisdiction module failed bootstrap validation."""

    code: str = "INVALID_JURISDICTION_MODULE"

    def __init__(self, module_name: str, errors: list[str]):
        self.module_name = module_name
        self.errors = list(errors)
        super().__init__(
            f"Jurisdiction module {module_name} failed validation:\n"
            + "\n".join(f"  - {e}" for e in self.errors)
        )


# Rule exceptions


class RuleDefinitionError(CivicKernelError):
    """Base exception for malformed rule sets."""

    code: str = "RULE_DEFINITION_ERROR"


class DuplicateRuleError(RuleDefinitionError):
    """Two rules with the same id were given to one engine."""

    code: str = "DUPLICATE_RULE"

    def __init__(self, rule_id: str):
        self.rule_id = rule_id
        super().__init__(f"Rule id registered more than once: {rule_id}")


# Configuration exceptions


class ConfigurationError(CivicKernelError):
    """Base exception for configuration documents."""

    code: str = "CONFIGURATION_ERROR"


class ConfigLoadError(ConfigurationError):
    """A configuration document could not be parsed into its schema."""

    code: str = "CONFIG_LOAD_FAILED"

    def __init__(self, source: str, reason: str):
        self.source = source
        self.reason = reason
        super().__init__(f"Could not load configuration from {source}: {reason}")
