"""
totalite/config.py
==================
TotaLite Battery Calculator — Calibration Constants and Input Domains

All values are raw engineering constants taken from the TotaLite controlled
power test campaign and from the calculator's input form.

Rules:
    - No calculations or derived quantities here.
    - Power in Watts [W], time in seconds [s], energy in watt-hours [Wh],
      charge in ampere-hours [Ah], voltage in Volts [V].
    - The regression and derating values are empirical and must be kept
      bit-for-bit; they are not re-derivable from first principles.
"""


# ---------------------------------------------------------------------------
# Power model — measured baseline loads
# ---------------------------------------------------------------------------

IDLE_POWER_W: float = 0.066
"""Baseline power drawn between measurements (W)."""

TILT_SENSOR_COLD_W: float = 0.071
"""Additional tilt sensor heating load below 10 °C (W).

Added to the peak measurement power, never multiplied.
"""


# ---------------------------------------------------------------------------
# Power model — 3-cycle peak power regression
# ---------------------------------------------------------------------------

# P_peak = SLOPE_3_CYCLES · LED% + INTERCEPT_3_CYCLES
SLOPE_3_CYCLES: float = 0.00233         # W per LED percent
INTERCEPT_3_CYCLES: float = 0.3367      # W


# ---------------------------------------------------------------------------
# Power model — derating / overhead factors (dimensionless)
# ---------------------------------------------------------------------------

SINGLE_CYCLE_POWER_FACTOR: float = 0.54
"""Peak power ratio of a 1-cycle measurement relative to a 3-cycle one."""

HIGH_VOLTAGE_POWER_FACTOR: float = 1.12
"""Regulator overhead when supplied from a 24 V battery."""

POOR_LTE_POWER_FACTOR: float = 1.15
"""Transmit power increase needed to hold a poor LTE link."""


# ---------------------------------------------------------------------------
# Measurement timing
# ---------------------------------------------------------------------------

# T_meas = MEASUREMENT_BASE_DURATION_S + (100 − LED%) · MEASUREMENT_DURATION_PER_PERCENT_S
MEASUREMENT_BASE_DURATION_S: float = 380.0
MEASUREMENT_DURATION_PER_PERCENT_S: float = 0.22

SINGLE_CYCLE_DURATION_FACTOR: float = 0.95
"""Measurement window ratio of a 1-cycle measurement relative to a 3-cycle one."""


# ---------------------------------------------------------------------------
# Capacity model
# ---------------------------------------------------------------------------

SAFETY_MARGIN: float = 1.3
"""Multiplier on raw deployment energy covering battery ageing and reserve."""

HOURS_PER_DAY: int = 24
SECONDS_PER_HOUR: int = 3600

BATTERY_SIZE_STEP_AH: float = 10.0
"""Granularity of off-the-shelf battery sizes used for the recommendation (Ah)."""


# ---------------------------------------------------------------------------
# Input domains
# ---------------------------------------------------------------------------

LED_POWER_MIN_PERCENT: int = 5
LED_POWER_MAX_PERCENT: int = 100
LED_POWER_STEP_PERCENT: int = 5

INTEGRATION_CYCLE_OPTIONS: tuple[int, ...] = (1, 3)

MEASUREMENT_INTERVAL_OPTIONS_S: tuple[int, ...] = (
    300,      # 5 minutes
    900,      # 15 minutes
    1800,     # 30 minutes
    3600,     # 1 hour
    7200,     # 2 hours
    14400,    # 4 hours
    21600,    # 6 hours
    43200,    # 12 hours
    86400,    # 24 hours
)

DEPLOYMENT_DAYS_MIN: int = 1
DEPLOYMENT_DAYS_MAX: int = 365

SUPPLY_VOLTAGE_OPTIONS_V: tuple[int, ...] = (12, 24)

TEMPERATURE_CONDITIONS: tuple[str, ...] = ("normal", "cold")
LTE_CONDITIONS: tuple[str, ...] = ("good", "poor")


# ---------------------------------------------------------------------------
# Defaults (initial state of the calculator form)
# ---------------------------------------------------------------------------

DEFAULT_LED_POWER_PERCENT: int = 50
DEFAULT_INTEGRATION_CYCLES: int = 3
DEFAULT_MEASUREMENT_INTERVAL_S: int = 900
DEFAULT_DEPLOYMENT_DAYS: int = 30
DEFAULT_SUPPLY_VOLTAGE_V: int = 12
DEFAULT_TEMPERATURE_CONDITION: str = "normal"
DEFAULT_LTE_CONDITION: str = "good"


# ---------------------------------------------------------------------------
# Output
# ---------------------------------------------------------------------------

PLOT_OUTPUT_FILE: str = "battery_requirements.png"
