"""
Indiana Local Income Tax (LIT) rules under IC 6-3.6.

Population decides whether a unit may levy its own LIT or receives county
LIT distributions. Rate limits and adoption requirements are reference
data for budgeting tools.
"""

from dataclasses import dataclass
from decimal import Decimal

from civic_kernel.compliance import LegalCitation, create_citation
from civic_kernel.domain.jurisdiction import TenantIdentity

# Units with fewer residents use county LIT distributions.
LIT_POPULATION_THRESHOLD = 3501


@dataclass(frozen=True)
class LitRateLimit:
    lit_type: str
    max_rate: Decimal
    citation: LegalCitation


@dataclass(frozen=True)
class LitAdoptionRequirement:
    id: str
    description: str
    deadline_description: str
    citation: LegalCitation


@dataclass(frozen=True)
class LitSummary:
    """LIT standing of one tenant, for setup wizards and operator output."""

    can_levy_own_lit: bool
    uses_county_lit: bool
    population: int
    threshold: int
    explanation: str


LIT_RATE_LIMITS: tuple[LitRateLimit, ...] = (
    LitRateLimit(
        lit_type="expenditure",
        max_rate=Decimal("0.0295"),
        citation=create_citation(
            "IC 6-3.6-6-2.5", "Local Income Tax", "Maximum combined LIT rate cap."
        ),
    ),
    LitRateLimit(
        lit_type="property-tax-relief",
        max_rate=Decimal("0.0125"),
        citation=create_citation("IC 6-3.6-5", "Property Tax Relief LIT", ""),
    ),
    LitRateLimit(
        lit_type="public-safety",
        max_rate=Decimal("0.0025"),
        citation=create_citation("IC 6-3.6-6", "Public Safety LIT", ""),
    ),
    LitRateLimit(
        lit_type="economic-development",
        max_rate=Decimal("0.0050"),
        citation=create_citation("IC 6-3.6-6", "Economic Development LIT", ""),
    ),
)

LIT_ADOPTION_REQUIREMENTS: tuple[LitAdoptionRequirement, ...] = (
    LitAdoptionRequirement(
        id="LIT_ADOPTION_DEADLINE",
        description=(
            "County council must adopt LIT ordinance by November 1 to take "
            "effect the following year."
        ),
        deadline_description="November 1 of the year prior to effect",
        citation=create_citation("IC 6-3.6-3-3", "LIT Adoption", ""),
    ),
    LitAdoptionRequirement(
        id="LIT_DLGF_CERTIFICATION",
        description="DLGF must certify LIT distributions to each adopting unit.",
        deadline_description="Per DLGF schedule",
        citation=create_citation("IC 6-3.6-9", "LIT Distribution", ""),
    ),
)


def can_levy_own_lit(population: int | None) -> bool:
    """Missing population counts as zero."""
    return (population or 0) >= LIT_POPULATION_THRESHOLD


def max_rate_for(lit_type: str) -> Decimal | None:
    for limit in LIT_RATE_LIMITS:
        if limit.lit_type == lit_type:
            return limit.max_rate
    return None


def lit_summary(identity: TenantIdentity) -> LitSummary:
    population = identity.population or 0
    own = can_levy_own_lit(population)
    if own:
        explanation = (
            f"{identity.display_name} (pop. {population:,}) may levy its own "
            f"Local Income Tax."
        )
    else:
        explanation = (
            f"{identity.display_name} (pop. {population:,}) must use county LIT "
            f"distributions (population below {LIT_POPULATION_THRESHOLD:,} threshold)."
        )
    return LitSummary(
        can_levy_own_lit=own,
        uses_county_lit=not own,
        population=population,
        threshold=LIT_POPULATION_THRESHOLD,
        explanation=explanation,
    )
