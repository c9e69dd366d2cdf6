"""Plain-English legal opinions attached to Indiana finance violations."""

from datetime import date

from civic_kernel.compliance import LegalOpinion, RuleCategory, create_legal_opinion
from civic_packs.indiana.finance import citations

LEGAL_OPINIONS: tuple[LegalOpinion, ...] = (
    create_legal_opinion(
        "IN-LEVY-001",
        "Understanding Indiana Property Tax Levy Limits",
        "Indiana property tax levies are subject to strict growth limitations under "
        "IC 6-1.1-18.5. The maximum levy is calculated by multiplying the prior year's "
        "maximum permissible levy by the assessed value growth quotient (AVGQ). The AVGQ "
        "is determined by DLGF and reflects growth in the tax base. Units may not exceed "
        "this calculated maximum without an excess levy appeal. Violations may result in "
        "DLGF adjustments to the certified levy.",
        RuleCategory.LEVY,
        [citations.LEVY_LIMITS, citations.MAX_LEVY_GROWTH],
        ["levy", "property tax", "growth quotient", "AVGQ", "DLGF"],
        jurisdiction="IN",
        authority="DLGF/SBOA",
        issued_date=date(2020, 1, 1),
    ),
    create_legal_opinion(
        "IN-LEVY-002",
        "Circuit Breaker Tax Credit Impact",
        "The circuit breaker (IC 6-1.1-20.6) caps property taxes at 1% for homesteads, "
        "2% for other residential and agricultural property, and 3% for all other "
        "property. When a taxpayer's bill exceeds these percentages of gross assessed "
        "value, a credit is applied. This credit reduces revenue to local units. Units "
        "must project circuit breaker losses when budgeting and may need to reduce "
        "appropriations or find alternative revenue sources.",
        RuleCategory.LEVY,
        [citations.CIRCUIT_BREAKER],
        ["circuit breaker", "tax cap", "homestead", "property tax credit"],
        jurisdiction="IN",
        authority="DLGF",
        issued_date=date(2008, 1, 1),
    ),
    create_legal_opinion(
        "IN-APPROP-001",
        "Appropriation Limits and Additional Appropriations",
        "Indiana law prohibits expenditures in excess of appropriations "
        "(IC 6-1.1-18-4). If a unit needs to spend more than appropriated, it must "
        "follow the additional appropriation process under IC 6-1.1-18-5. This requires "
        "publication of notice, a public hearing, and approval by the fiscal body. The "
        "additional appropriation must identify the source of funds. Spending without "
        "appropriation authority is a serious compliance violation that may trigger "
        "SBOA audit findings.",
        RuleCategory.APPROPRIATION,
        [citations.APPROPRIATION_LIMIT, citations.ADDITIONAL_APPROPRIATION],
        ["appropriation", "additional appropriation", "spending limit", "over-expenditure"],
        jurisdiction="IN",
        authority="SBOA",
        issued_date=date(2019, 1, 1),
    ),
    create_legal_opinion(
        "IN-PUB-001",
        "Budget Publication Requirements",
        "Before holding a public hearing on the proposed budget, the unit must publish "
        "notice in accordance with IC 6-1.1-17-3.5. The notice must be published at "
        "least 10 days before the hearing date in a newspaper of general circulation. "
        "The notice must include the proposed budget amounts, proposed tax levies, "
        "proposed tax rates, and the time, date, and place of the public hearing. "
        "Failure to properly publish may invalidate the budget adoption.",
        RuleCategory.PUBLICATION,
        [citations.BUDGET_PUBLICATION, citations.PUBLICATION_GENERAL],
        ["publication", "budget notice", "newspaper", "public hearing"],
        jurisdiction="IN",
        authority="DLGF",
    ),
    create_legal_opinion(
        "IN-MEET-001",
        "Open Door Law Meeting Notice Requirements",
        "Under Indiana's Open Door Law (IC 5-14-1.5), public meetings require at least "
        "48 hours advance notice. The notice must include the date, time, and place of "
        "the meeting. Notice must be posted at the principal office of the governing "
        "body and delivered to news media that have requested notice. Special meetings "
        "have different requirements. Budget adoption meetings and public hearings must "
        "comply with these requirements in addition to any specific budget notice "
        "requirements.",
        RuleCategory.MEETING_NOTICE,
        [citations.OPEN_DOOR_LAW, citations.MEETING_NOTICE],
        ["open door", "meeting notice", "48 hours", "public meeting"],
        jurisdiction="IN",
        authority="Public Access Counselor",
    ),
    create_legal_opinion(
        "IN-TRANSFER-001",
        "Interfund Transfer Requirements",
        "Transfers between funds are governed by IC 36-1-8-4. Not all transfers are "
        "permitted; some funds have restrictions on transfers in or out. General Fund "
        "transfers to other funds require fiscal body approval. Transfers from "
        "restricted funds (like cumulative funds or utility funds) are generally "
        "prohibited except as specifically allowed by statute. Documentation of "
        "transfer purpose and authorization is required for audit.",
        RuleCategory.TRANSFER,
        [citations.FUND_TRANSFER],
        ["transfer", "interfund", "fund transfer", "restricted funds"],
        jurisdiction="IN",
        authority="SBOA",
    ),
    create_legal_opinion(
        "IN-REPORT-001",
        "Annual Financial Report (AFR) Filing Requirements",
        "All local governmental units must file an Annual Financial Report with SBOA "
        "within 60 days after the close of the fiscal year (IC 5-11-1-4). The report "
        "must be filed through Indiana Gateway. Late filing may result in withholding "
        "of state distributions and potential audit referral. The AFR must include all "
        "funds, all receipts and disbursements, and must balance according to SBOA "
        "standards.",
        RuleCategory.REPORTING,
        [citations.AFR_REQUIREMENT, citations.GATEWAY_FILING],
        ["AFR", "annual financial report", "Gateway", "SBOA", "filing deadline"],
        jurisdiction="IN",
        authority="SBOA",
    ),
)
