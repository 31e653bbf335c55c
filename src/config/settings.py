# src/config/settings.py

import os

from src.config.env import APP_ENV, ENV_DEV

# Development / production settings for the hashrate heating audit
# Dev-only catalogue selector: "heating" (heater SKUs) or "presets" (small units)
DEV_EQUIPMENT_SET = os.getenv("DEV_EQUIPMENT_SET", "heating").lower()

# --- Calibration (existing buildings) ---

# Months below this many heating degree days are treated as shoulder months
DEFAULT_HDD_THRESHOLD = 100.0
# Smallest HDD value we are willing to divide by
MIN_HDD_DENOMINATOR = 1.0
MIN_CALIBRATION_MONTHS = 3
# Tukey fences need at least this many points to be meaningful
MIN_OUTLIER_SAMPLE = 4
OUTLIER_IQR_MULTIPLIER = 1.5
DEFAULT_CALIBRATION_METHOD = "median"  # or "mean"
DEFAULT_AFUE = 0.85

# --- Envelope model (new buildings) ---

DEFAULT_CEILING_HEIGHT_FT = 9.0
BASEMENT_WALL_HEIGHT_FT = 8.0
WINDOW_TO_WALL_RATIO = 0.15
DEFAULT_EXTERIOR_DOORS = 2
DOOR_AREA_SQFT = 20.0
DOOR_R_VALUE = 3.0  # typical insulated door
BASEMENT_FLOOR_R_VALUE = 5.0  # ground contact
MIN_BASEMENT_WALL_R_VALUE = 5.0
MIN_CRAWLSPACE_FLOOR_R_VALUE = 11.0
DEFAULT_SLAB_INSULATION = "r10_horizontal"

# Any single loss pathway above this share of the total is flagged
DOMINANT_LOSS_PCT = 40.0

# HLC per sq ft quality bands (BTU/h/sqft/°F), upper bounds
HLC_PER_SQFT_BANDS = (
    (0.05, "excellent"),  # Passive House level
    (0.10, "good"),  # well-insulated new construction
    (0.15, "average"),  # code minimum
    (0.25, "poor"),  # older construction
)
HLC_PER_SQFT_WORST_BAND = "very_poor"

# --- Sizing ---

# Reject configurations needing more than this many units of one model
MAX_UNITS_PER_MODEL = 10
DEFAULT_TARGET_INDOOR_TEMP_F = 70.0
DEFAULT_OPTIMIZATION = "cost_per_th"

# --- Economics / market fallbacks ---

DEFAULT_POOL_FEE_FRACTION = 0.02
DEFAULT_BTC_PRICE_USD = 90000.0
# Roughly $45/PH/day
DEFAULT_HASHPRICE_USD_PER_TH_DAY = 0.045
DEFAULT_ELECTRICITY_RATE_USD_PER_KWH = 0.15
DEFAULT_NETWORK_DIFFICULTY = 150_000_000_000_000

# Hard-coded post-2024 halving subsidy
BLOCK_SUBSIDY_BTC = 3.125
BLOCKS_PER_DAY = 144
SECONDS_PER_BLOCK = 600.0

# Heat cost unit conversions used by COPe reporting
KWH_PER_MMBTU = 293.07
KWH_PER_THERM_REPORTING = 29.307

# COPe status thresholds on the revenue ratio R
COPE_SUBSIDIZED_MIN_R = 0.5

# --- Solar mining ---

SOLAR_EXCESS_HOURS_PER_DAY = 6.0
SOLAR_MINER_TARGET_FRACTION = 0.6  # miner power as a share of array size
SOLAR_MINE_ADVANTAGE_PCT = 0.20
SOLAR_GRID_ADVANTAGE_PCT = 0.10

# --- UI defaults ---

# Dev-only sample data so the page renders something useful locally
DEV_DEFAULT_BILLS_THERMS = [180, 160, 140, 80, 20, 0, 0, 0, 10, 60, 130, 170]
DEV_DEFAULT_HDD = [900, 800, 700, 400, 100, 0, 0, 0, 50, 300, 650, 850]
DEV_DEFAULT_DESIGN_TEMP_F = 5.0
DEV_DEFAULT_FLOOR_AREA_SQFT = 2000.0
DEV_DEFAULT_ELECTRICITY_RATE_USD_PER_KWH = 0.12
DEV_DEFAULT_GAS_PRICE_USD_PER_THERM = 1.40

# Cache TTL for recomputed audits in the UI (pure functions, keyed on inputs)
AUDIT_CACHE_TTL_S = 60 * 60 if APP_ENV == ENV_DEV else 10 * 60
