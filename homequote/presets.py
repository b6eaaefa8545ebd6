DISCLAIMER = (
    "This is an illustration only and not a commitment to lend. "
    "Actual rates, payments, and costs may vary. Florida closing costs are estimates "
    "(intangible tax, documentary stamps and title premiums per current schedules); "
    "the Loan Estimate issued at application prevails."
)

LOAN_TYPES = ("Conventional", "FHA", "VA", "DSCR")

CREDIT_BANDS = (
    "760+",
    "740-759",
    "720-739",
    "700-719",
    "680-699",
    "660-679",
    "640-659",
    "620-639",
    "Below 620",
)

# Statutory minimum down payment (% of price) by loan type.
MIN_DOWN_BY_LOAN = {"Conventional": 3.0, "FHA": 3.5, "VA": 0.0, "DSCR": 20.0}

# Static note rates used when no live or custom rate is supplied.
RATE_BY_LOAN = {"Conventional": 7.5, "FHA": 7.2, "VA": 6.9, "DSCR": 8.5}

MAX_CLTV = 105.0
MAX_LTV_BY_LOAN = {"Conventional": 97.0, "FHA": 96.5, "VA": 100.0}
DEFAULT_MAX_LTV = 97.0

# Conventional MI annual % by LTV band (checked top-down, LTV strictly above the
# floor) and credit score threshold (score >= threshold). The last column is
# the catch-all for scores below 640.
CONV_MI_SCORE_THRESHOLDS = (760, 740, 720, 700, 680, 660, 640, 0)
CONV_MI_GRID = {
    95: (0.58, 0.70, 0.87, 0.99, 1.21, 1.54, 1.65, 1.86),
    90: (0.46, 0.55, 0.68, 0.77, 0.93, 1.18, 1.32, 1.50),
    85: (0.31, 0.37, 0.47, 0.54, 0.67, 0.87, 1.02, 1.19),
    80: (0.21, 0.25, 0.32, 0.37, 0.46, 0.62, 0.75, 0.88),
}

FHA_TABLES = {"ufmip_pct": 1.75, "annual_high_ltv": 0.55, "annual_low_ltv": 0.50, "high_ltv_above": 95.0}

# VA funding fee % by usage and down payment tier: (minimum down %, fee %)
# pairs checked from the highest tier down.
VA_FUNDING_FEE = {
    "firstUse": ((10.0, 1.25), (5.0, 1.50), (0.0, 2.15)),
    "subsequentUse": ((5.0, 1.50), (0.0, 3.30)),
    "exempt": ((0.0, 0.0),),
}

# Flat financed-fee multipliers used only when projecting the loan during DPA
# CLTV correction. VA uses a single approximation instead of the tiered table.
APPROX_FEE_MULTIPLIER = {"FHA": 1.0175, "VA": 1.023}

FL_TAX_RATES = {
    "lenders_title_base": 575.0,
    "lenders_title_base_limit": 100000.0,
    "lenders_title_per_thousand": 5.0,
    "intangible": 0.002,
    "note_stamps": 0.0035,
    "deed_stamps": 0.007,
    "deed_stamps_miami_dade": 0.006,
}
BUYER_PAYS_OWNERS_TITLE_COUNTIES = ("Miami-Dade", "Broward")

PREPAID_TAX_MONTHS = 3
PREPAID_INSURANCE_MONTHS = 15
PREPAID_INTEREST_DAYS = 15

FLORIDA_COUNTIES = (
    "Alachua", "Baker", "Bay", "Bradford", "Brevard", "Broward", "Calhoun",
    "Charlotte", "Citrus", "Clay", "Collier", "Columbia", "DeSoto", "Dixie",
    "Duval", "Escambia", "Flagler", "Franklin", "Gadsden", "Gilchrist",
    "Glades", "Gulf", "Hamilton", "Hardee", "Hendry", "Hernando", "Highlands",
    "Hillsborough", "Holmes", "Indian River", "Jackson", "Jefferson",
    "Lafayette", "Lake", "Lee", "Leon", "Levy", "Liberty", "Madison",
    "Manatee", "Marion", "Martin", "Miami-Dade", "Monroe", "Nassau",
    "Okaloosa", "Okeechobee", "Orange", "Osceola", "Palm Beach", "Pasco",
    "Pinellas", "Polk", "Putnam", "Santa Rosa", "Sarasota", "Seminole",
    "St. Johns", "St. Lucie", "Sumter", "Suwannee", "Taylor", "Union",
    "Volusia", "Wakulla", "Walton", "Washington",
)
