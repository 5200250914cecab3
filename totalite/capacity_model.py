"""
totalite/capacity_model.py
==========================
TotaLite Battery Calculator — Deployment Energy and Battery Capacity

Turns the average power of one measurement cycle into the battery capacity
needed for a whole deployment.

Equations:
    E_total    = P_avg · days · 24                     [Wh]
    E_required = E_total · SAFETY_MARGIN               [Wh]
    C_required = E_required / V_supply                 [Ah]
    N_meas     = days · 86400 / T_int                  (real-valued)
    E_meas     = P_avg · T_int / 3600                  [Wh]

Rules:
    - Pure functions only; no validation, no I/O.
    - Measurement counts are not rounded. Rounding is a display concern.
"""

from __future__ import annotations

import math
from dataclasses import dataclass

from totalite.config import (
    SAFETY_MARGIN,
    HOURS_PER_DAY,
    SECONDS_PER_HOUR,
    BATTERY_SIZE_STEP_AH,
)
from totalite.power_model import DeviceConfiguration, PowerResult


# ---------------------------------------------------------------------------
# Data containers
# ---------------------------------------------------------------------------

@dataclass(frozen=True)
class CapacityResult:
    """Energy budget and battery requirement for one deployment.

    The following identities hold:

        required_capacity_wh == total_energy_wh · SAFETY_MARGIN
        required_capacity_ah == required_capacity_wh / supply_voltage_v

    Attributes:
        total_energy_wh:            Energy consumed over the deployment [Wh].
        required_capacity_wh:       Energy capacity including margin [Wh].
        required_capacity_ah:       Charge capacity at the supply voltage [Ah].
        total_measurements:         Expected number of measurements (may be fractional).
        energy_per_measurement_wh:  Energy per measurement cycle [Wh].
        recommended_battery_ah:     Required capacity rounded up to the next
                                    standard battery size [Ah].
    """
    total_energy_wh:           float
    required_capacity_wh:      float
    required_capacity_ah:      float
    total_measurements:        float
    energy_per_measurement_wh: float
    recommended_battery_ah:    float


# ---------------------------------------------------------------------------
# Battery size recommendation
# ---------------------------------------------------------------------------

def compute_recommended_battery_ah(
    required_capacity_ah: float,
    step_ah: float = BATTERY_SIZE_STEP_AH,
) -> float:
    """Round a required capacity up to the next off-the-shelf battery size.

    Equation:
        C_rec = ⌈C_required / step⌉ · step

    Example:
        >>> compute_recommended_battery_ah(1.15)
        10.0
        >>> compute_recommended_battery_ah(20.0)
        20.0
    """
    return math.ceil(required_capacity_ah / step_ah) * step_ah


# ---------------------------------------------------------------------------
# Capacity model
# ---------------------------------------------------------------------------

def compute_capacity(power: PowerResult, config: DeviceConfiguration) -> CapacityResult:
    """Compute deployment energy and required battery capacity.

    Args:
        power:  Output of :func:`totalite.power_model.compute_power` for ``config``.
        config: Device configuration supplying deployment days, supply
                voltage and measurement interval.

    Returns:
        :class:`CapacityResult` for the deployment.

    Example:
        >>> from totalite.power_model import compute_power
        >>> cfg = DeviceConfiguration(deployment_days=30)
        >>> result = compute_capacity(compute_power(cfg), cfg)
        >>> result.total_measurements
        2880.0
    """
    avg_power_w = power.avg_power_w

    hours_in_deployment = config.deployment_days * HOURS_PER_DAY
    total_energy_wh: float = avg_power_w * hours_in_deployment
    required_capacity_wh: float = total_energy_wh * SAFETY_MARGIN
    required_capacity_ah: float = required_capacity_wh / config.supply_voltage_v

    total_measurements: float = (
        config.deployment_days * HOURS_PER_DAY * SECONDS_PER_HOUR
    ) / config.measurement_interval_s
    energy_per_measurement_wh: float = (
        avg_power_w * config.measurement_interval_s
    ) / SECONDS_PER_HOUR

    return CapacityResult(
        total_energy_wh=total_energy_wh,
        required_capacity_wh=required_capacity_wh,
        required_capacity_ah=required_capacity_ah,
        total_measurements=total_measurements,
        energy_per_measurement_wh=energy_per_measurement_wh,
        recommended_battery_ah=compute_recommended_battery_ah(required_capacity_ah),
    )
