"""
totalite/validation.py
======================
TotaLite Battery Calculator — Input Domain Guards

The power and capacity models assume every input is inside its domain and
perform no checks of their own. Callers that accept free-form input (the
CLI, JSON files) pass the configuration through :func:`validate_configuration`
first.
"""

from __future__ import annotations

from totalite.config import (
    LED_POWER_MIN_PERCENT,
    LED_POWER_MAX_PERCENT,
    LED_POWER_STEP_PERCENT,
    INTEGRATION_CYCLE_OPTIONS,
    MEASUREMENT_INTERVAL_OPTIONS_S,
    DEPLOYMENT_DAYS_MIN,
    DEPLOYMENT_DAYS_MAX,
    SUPPLY_VOLTAGE_OPTIONS_V,
    TEMPERATURE_CONDITIONS,
    LTE_CONDITIONS,
)
from totalite.power_model import DeviceConfiguration


def validate_configuration(config: DeviceConfiguration) -> DeviceConfiguration:
    """Check that every field of ``config`` lies in its input domain.

    Integration cycles other than 1 or 3 are rejected; the power model has
    no formula for them.

    Args:
        config: Configuration to check.

    Returns:
        ``config`` unchanged, so the call can be chained.

    Raises:
        ValueError: On the first field found outside its domain.
    """
    led = config.led_power_percent
    if not (LED_POWER_MIN_PERCENT <= led <= LED_POWER_MAX_PERCENT):
        raise ValueError(
            f"LED power must be in [{LED_POWER_MIN_PERCENT}, {LED_POWER_MAX_PERCENT}] %; "
            f"received led_power_percent={led!r}"
        )
    if led % LED_POWER_STEP_PERCENT != 0:
        raise ValueError(
            f"LED power must be a multiple of {LED_POWER_STEP_PERCENT} %; "
            f"received led_power_percent={led!r}"
        )

    if config.integration_cycles not in INTEGRATION_CYCLE_OPTIONS:
        raise ValueError(
            f"Integration cycles must be one of {INTEGRATION_CYCLE_OPTIONS}; "
            f"received integration_cycles={config.integration_cycles!r}"
        )

    if config.measurement_interval_s not in MEASUREMENT_INTERVAL_OPTIONS_S:
        raise ValueError(
            f"Measurement interval must be one of {MEASUREMENT_INTERVAL_OPTIONS_S} s; "
            f"received measurement_interval_s={config.measurement_interval_s!r}"
        )

    days = config.deployment_days
    if isinstance(days, bool) or not isinstance(days, int):
        raise ValueError(
            f"Deployment duration must be a whole number of days; "
            f"received deployment_days={days!r}"
        )
    if not (DEPLOYMENT_DAYS_MIN <= days <= DEPLOYMENT_DAYS_MAX):
        raise ValueError(
            f"Deployment duration must be in [{DEPLOYMENT_DAYS_MIN}, {DEPLOYMENT_DAYS_MAX}] days; "
            f"received deployment_days={days!r}"
        )

    if config.supply_voltage_v not in SUPPLY_VOLTAGE_OPTIONS_V:
        raise ValueError(
            f"Supply voltage must be one of {SUPPLY_VOLTAGE_OPTIONS_V} V; "
            f"received supply_voltage_v={config.supply_voltage_v!r}"
        )

    if config.temperature_condition not in TEMPERATURE_CONDITIONS:
        raise ValueError(
            f"Temperature condition must be one of {TEMPERATURE_CONDITIONS}; "
            f"received temperature_condition={config.temperature_condition!r}"
        )

    if config.lte_condition not in LTE_CONDITIONS:
        raise ValueError(
            f"LTE condition must be one of {LTE_CONDITIONS}; "
            f"received lte_condition={config.lte_condition!r}"
        )

    return config
