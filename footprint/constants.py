"""
constants.py – Shared labels, field aliases, thresholds and suggestion texts.
"""

# ── Input field aliases (first non-empty value wins) ──────────
ACTIVITY_FIELDS = ("Activity", "activity")
QUANTITY_FIELDS = ("Quantity", "quantity", "Qty")
UNIT_FIELDS = ("Unit", "unit")

# Unit shown for a category when neither the rows nor the matched factor
# declare one.
PLACEHOLDER_UNIT = "unit"

# ── Report rounding ───────────────────────────────────────────
TOTAL_DECIMALS = 2
DISPLAY_DECIMALS = 2

# ── Magnitude tiers (kg CO₂e), evaluated high → low ───────────
SEVERE_EMISSIONS_THRESHOLD = 500_000
HIGH_EMISSIONS_THRESHOLD = 100_000
MODERATE_EMISSIONS_THRESHOLD = 20_000

MSG_SEVERE = (
    "Very high emissions detected. Consider immediate energy efficiency "
    "measures, renewables, and professional energy audit."
)
MSG_HIGH = (
    "High emissions. Review fuel mix, optimize boiler efficiency, and explore "
    "solar rooftop + heat recovery."
)
MSG_MODERATE = (
    "Moderate emissions. Implement operational improvements, reduce idle "
    "running, and plan for renewable adoption."
)
MSG_LOW = (
    "Low emissions for this dataset. Continue with monitoring, and consider "
    "circularity improvements."
)

# ── Top-contributor follow-ups ────────────────────────────────
MSG_TOP_CONTRIBUTOR = (
    "Top contributor: {name} ({emission} kg CO₂e). "
    "Consider targeted measures for {name}."
)

ELECTRICITY_KEYWORDS = ("electric",)
FUEL_KEYWORDS = ("diesel", "fuel")
WASTE_KEYWORDS = ("waste",)

MSG_ELECTRICITY = (
    "Electricity is top source: consider installing solar PV, replacing "
    "motors with energy-efficient ones, and load management."
)
MSG_FUEL = (
    "Boiler/fuel emissions are high: consider fuel switching to natural "
    "gas/biomass or improve combustion efficiency."
)
MSG_WASTE = (
    "High waste emissions: implement waste reduction, material reuse, or "
    "partner with recycling firms."
)

# ── Derived views ─────────────────────────────────────────────
EMISSIONS_NODE_LABEL = "Emissions (kg CO₂e)"

# ── Output file names ─────────────────────────────────────────
OUT_REPORT = "report.json"

# ── Upload handling ───────────────────────────────────────────
ALLOWED_EXTENSIONS = {".csv", ".txt"}
