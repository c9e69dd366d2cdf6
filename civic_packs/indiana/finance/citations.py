"""Indiana Code citations referenced by the finance rules and opinions."""

from civic_kernel.compliance import LegalCitation, create_citation

_IGA = "http://iga.in.gov/legislative/laws/2023/ic/titles"

# Levy and property tax
CIRCUIT_BREAKER = create_citation(
    "IC 6-1.1-20.6",
    "Property Tax Cap (Circuit Breaker)",
    "Limits property taxes to 1% for homesteads, 2% for other residential/"
    "agricultural, 3% for other property",
    year=2008,
    url=f"{_IGA}/006#6-1.1-20.6",
)

LEVY_LIMITS = create_citation(
    "IC 6-1.1-18.5",
    "Levy Limitations",
    "Property tax levy limitations and growth quotient calculations",
    year=1973,
    url=f"{_IGA}/006#6-1.1-18.5",
)

MAX_LEVY_GROWTH = create_citation(
    "IC 6-1.1-18.5-3",
    "Maximum Levy Growth",
    "Levy may not exceed prior year levy times the assessed value growth quotient",
    year=1973,
)

# Budget process
BUDGET_ADOPTION = create_citation(
    "IC 6-1.1-17",
    "Budget Adoption Procedures",
    "Requirements for adopting annual budgets, tax levies, and tax rates",
)

BUDGET_HEARING = create_citation(
    "IC 6-1.1-17-3",
    "Budget Hearing Requirements",
    "Public hearing must be held before budget adoption",
)

ADDITIONAL_APPROPRIATION = create_citation(
    "IC 6-1.1-18-5",
    "Additional Appropriations",
    "Procedure for additional appropriations after budget adoption",
)

APPROPRIATION_LIMIT = create_citation(
    "IC 6-1.1-18-4",
    "Appropriation Limitations",
    "Expenditures may not exceed appropriations",
)

# Publication
PUBLICATION_GENERAL = create_citation(
    "IC 5-3-1",
    "Publication Requirements",
    "General requirements for legal publications and notices",
    url=f"{_IGA}/005#5-3-1",
)

BUDGET_PUBLICATION = create_citation(
    "IC 6-1.1-17-3.5",
    "Budget Notice Publication",
    "Budget notice must be published at least 10 days before hearing",
)

# Transfers and surplus
FUND_TRANSFER = create_citation(
    "IC 36-1-8-4",
    "Interfund Transfers",
    "Requirements for transfers between funds",
)

EXCESS_LEVY_SURPLUS = create_citation(
    "IC 6-1.1-18.5-17",
    "Excess Levy Appeals and Surplus",
    "Handling of excess levy collections and surplus funds",
)

# Reporting
AFR_REQUIREMENT = create_citation(
    "IC 5-11-1-4",
    "Annual Financial Report",
    "Requirement to file annual financial report with SBOA",
)

GATEWAY_FILING = create_citation(
    "IC 5-14-3.8",
    "Gateway Electronic Filing",
    "Requirement to file reports through Indiana Gateway",
)

# Debt
DEBT_LIMIT = create_citation(
    "IC 36-1-15",
    "Debt Service Fund Requirements",
    "Requirements for debt service funds and payments",
)

BOND_ISSUANCE = create_citation(
    "IC 36-4-6",
    "Municipal Bond Issuance",
    "Procedures for issuing bonds",
)

# Meetings
OPEN_DOOR_LAW = create_citation(
    "IC 5-14-1.5",
    "Open Door Law",
    "Requirements for public meetings and notices",
    url=f"{_IGA}/005#5-14-1.5",
)

MEETING_NOTICE = create_citation(
    "IC 5-14-1.5-5",
    "Meeting Notice Requirements",
    "Notice must be posted 48 hours before meeting",
)

ALL_CITATIONS: dict[str, LegalCitation] = {
    "CIRCUIT_BREAKER": CIRCUIT_BREAKER,
    "LEVY_LIMITS": LEVY_LIMITS,
    "MAX_LEVY_GROWTH": MAX_LEVY_GROWTH,
    "BUDGET_ADOPTION": BUDGET_ADOPTION,
    "BUDGET_HEARING": BUDGET_HEARING,
    "ADDITIONAL_APPROPRIATION": ADDITIONAL_APPROPRIATION,
    "APPROPRIATION_LIMIT": APPROPRIATION_LIMIT,
    "PUBLICATION_GENERAL": PUBLICATION_GENERAL,
    "BUDGET_PUBLICATION": BUDGET_PUBLICATION,
    "FUND_TRANSFER": FUND_TRANSFER,
    "EXCESS_LEVY_SURPLUS": EXCESS_LEVY_SURPLUS,
    "AFR_REQUIREMENT": AFR_REQUIREMENT,
    "GATEWAY_FILING": GATEWAY_FILING,
    "DEBT_LIMIT": DEBT_LIMIT,
    "BOND_ISSUANCE": BOND_ISSUANCE,
    "OPEN_DOOR_LAW": OPEN_DOOR_LAW,
    "MEETING_NOTICE": MEETING_NOTICE,
}
