"""
totalite/power_model.py
=======================
TotaLite Battery Calculator — Average Power Model

Converts a device configuration into the average continuous power drawn over
one measurement cycle.

Model (one cycle of length T_int):
    P_peak   = SLOPE · LED% + INTERCEPT            (3-cycle regression)
               × 0.54  if 1 integration cycle
               × 1.12  if 24 V supply
               + 0.071 if cold (tilt sensor heating)
               × 1.15  if poor LTE
    T_meas   = 380 + (100 − LED%) · 0.22           (× 0.95 if 1 cycle)
    T_idle   = max(0, T_int − T_meas)
    P_avg    = P_peak · T_meas / T_int  +  P_idle · T_idle / T_int

Rules:
    - Every function is a pure, deterministic mapping with no I/O.
    - No input validation here; see :mod:`totalite.validation`.
    - The order of the peak power adjustments is significant and preserved.
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Literal

from totalite.config import (
    IDLE_POWER_W,
    TILT_SENSOR_COLD_W,
    SLOPE_3_CYCLES,
    INTERCEPT_3_CYCLES,
    SINGLE_CYCLE_POWER_FACTOR,
    HIGH_VOLTAGE_POWER_FACTOR,
    POOR_LTE_POWER_FACTOR,
    MEASUREMENT_BASE_DURATION_S,
    MEASUREMENT_DURATION_PER_PERCENT_S,
    SINGLE_CYCLE_DURATION_FACTOR,
    DEFAULT_LED_POWER_PERCENT,
    DEFAULT_INTEGRATION_CYCLES,
    DEFAULT_MEASUREMENT_INTERVAL_S,
    DEFAULT_DEPLOYMENT_DAYS,
    DEFAULT_SUPPLY_VOLTAGE_V,
    DEFAULT_TEMPERATURE_CONDITION,
    DEFAULT_LTE_CONDITION,
)


TemperatureCondition = Literal["normal", "cold"]
LteCondition = Literal["good", "poor"]


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class DeviceConfiguration:
    """Operating parameters of a TotaLite deployment.

    Built fresh by the caller for every calculation. Defaults match the
    initial state of the calculator form.

    Attributes:
        led_power_percent:       LED illumination intensity [% of max], 5–100.
        integration_cycles:      Sensor integration cycles per measurement, 1 or 3.
        measurement_interval_s:  Time between measurements [s].
        deployment_days:         Deployment duration [days], 1–365.
        supply_voltage_v:        Battery supply voltage [V], 12 or 24.
        temperature_condition:   "normal" (10–40 °C) or "cold" (< 10 °C).
        lte_condition:           "good" or "poor" LTE coverage.
    """
    led_power_percent:      float = DEFAULT_LED_POWER_PERCENT
    integration_cycles:     int = DEFAULT_INTEGRATION_CYCLES
    measurement_interval_s: float = DEFAULT_MEASUREMENT_INTERVAL_S
    deployment_days:        int = DEFAULT_DEPLOYMENT_DAYS
    supply_voltage_v:       float = DEFAULT_SUPPLY_VOLTAGE_V
    temperature_condition:  TemperatureCondition = DEFAULT_TEMPERATURE_CONDITION
    lte_condition:          LteCondition = DEFAULT_LTE_CONDITION


@dataclass(frozen=True)
class PowerResult:
    """Power characteristics of one measurement cycle.

    The following identity holds:

        active_power_contrib_w + idle_power_contrib_w == avg_power_w

    Attributes:
        base_power_w:            Peak power during a measurement [W].
        measurement_duration_s:  Length of the active measurement window [s].
        idle_time_s:             Idle time in the rest of the interval [s].
        active_power_contrib_w:  Time-weighted share of the active window [W].
        idle_power_contrib_w:    Time-weighted share of the idle period [W].
        avg_power_w:             Average continuous power draw [W].
    """
    base_power_w:           float
    measurement_duration_s: float
    idle_time_s:            float
    active_power_contrib_w: float
    idle_power_contrib_w:   float
    avg_power_w:            float

    @property
    def active_share(self) -> float:
        """Fraction of the average power drawn during measurements [0.0–1.0]."""
        return self.active_power_contrib_w / self.avg_power_w

    @property
    def idle_share(self) -> float:
        """Fraction of the average power drawn while idle [0.0–1.0]."""
        return self.idle_power_contrib_w / self.avg_power_w


# ---------------------------------------------------------------------------
# Peak measurement power
# ---------------------------------------------------------------------------

def compute_base_power(
    led_power_percent: float,
    integration_cycles: int,
    supply_voltage_v: float,
    temperature_condition: TemperatureCondition,
    lte_condition: LteCondition,
) -> float:
    """Compute the peak power drawn while a measurement is running.

    Adjustments are applied in a fixed order; moving the additive cold term
    after the LTE factor changes the result.

        P = SLOPE · LED% + INTERCEPT
        P = P · 0.54     (1 cycle)
        P = P · 1.12     (24 V)
        P = P + 0.071    (cold)
        P = P · 1.15     (poor LTE)

    Args:
        led_power_percent:     LED intensity [%].
        integration_cycles:    1 or 3. Anything other than 1 uses the 3-cycle fit.
        supply_voltage_v:      Supply voltage [V].
        temperature_condition: "normal" or "cold".
        lte_condition:         "good" or "poor".

    Returns:
        Peak measurement power [W].

    Example:
        >>> round(compute_base_power(50, 3, 12, "normal", "good"), 6)
        0.4532
    """
    base_power_w: float = SLOPE_3_CYCLES * led_power_percent + INTERCEPT_3_CYCLES

    if integration_cycles == 1:
        base_power_w = base_power_w * SINGLE_CYCLE_POWER_FACTOR

    if supply_voltage_v == 24:
        base_power_w = base_power_w * HIGH_VOLTAGE_POWER_FACTOR

    if temperature_condition == "cold":
        base_power_w += TILT_SENSOR_COLD_W

    if lte_condition == "poor":
        base_power_w = base_power_w * POOR_LTE_POWER_FACTOR

    return base_power_w


# ---------------------------------------------------------------------------
# Measurement timing
# ---------------------------------------------------------------------------

def compute_measurement_duration(led_power_percent: float, integration_cycles: int) -> float:
    """Compute the length of one measurement window.

    Lower LED power needs a longer exposure:

        T_meas = 380 + (100 − LED%) · 0.22      [× 0.95 for 1 cycle]

    Returns:
        Measurement duration [s].

    Example:
        >>> round(compute_measurement_duration(50, 3), 6)
        391.0
    """
    duration_s: float = (
        MEASUREMENT_BASE_DURATION_S
        + (100 - led_power_percent) * MEASUREMENT_DURATION_PER_PERCENT_S
    )
    if integration_cycles == 1:
        duration_s = duration_s * SINGLE_CYCLE_DURATION_FACTOR
    return duration_s


def compute_idle_time(measurement_interval_s: float, measurement_duration_s: float) -> float:
    """Idle time left in the interval after the measurement [s].

    Clamped at zero when the measurement outlasts its interval; the excess
    is dropped rather than reported.
    """
    return max(0.0, measurement_interval_s - measurement_duration_s)


# ---------------------------------------------------------------------------
# Average power
# ---------------------------------------------------------------------------

def compute_power(config: DeviceConfiguration) -> PowerResult:
    """Compute the time-weighted average power of one measurement cycle.

    Equations:
        P_active = P_peak · T_meas / T_int
        P_idle   = IDLE_POWER · T_idle / T_int
        P_avg    = P_active + P_idle

    Args:
        config: Device configuration. Assumed valid; out-of-domain values
                give unspecified results.

    Returns:
        :class:`PowerResult` for the configuration.

    Example:
        >>> result = compute_power(DeviceConfiguration())
        >>> round(result.avg_power_w, 6)
        0.234217
    """
    base_power_w = compute_base_power(
        config.led_power_percent,
        config.integration_cycles,
        config.supply_voltage_v,
        config.temperature_condition,
        config.lte_condition,
    )
    duration_s = compute_measurement_duration(
        config.led_power_percent,
        config.integration_cycles,
    )
    interval_s = config.measurement_interval_s
    idle_time_s = compute_idle_time(interval_s, duration_s)

    active_w: float = (base_power_w * duration_s) / interval_s
    idle_w: float = (IDLE_POWER_W * idle_time_s) / interval_s

    return PowerResult(
        base_power_w=base_power_w,
        measurement_duration_s=duration_s,
        idle_time_s=idle_time_s,
        active_power_contrib_w=active_w,
        idle_power_contrib_w=idle_w,
        avg_power_w=active_w + idle_w,
    )
