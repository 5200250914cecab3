"""
tests/test_power_calculations.py
================================
TotaLite Battery Calculator — Unit Tests for the Power Model

Reference scenario (form defaults):
    LED 50 %, 3 cycles, 900 s interval, 12 V, normal temperature, good LTE

    P_peak   = 0.00233 · 50 + 0.3367          = 0.4532 W
    T_meas   = 380 + (100 − 50) · 0.22        = 391 s
    T_idle   = 900 − 391                      = 509 s
    P_active = 0.4532 · 391 / 900             ≈ 0.196890 W
    P_idle   = 0.066 · 509 / 900              ≈ 0.037327 W
    P_avg                                     ≈ 0.234217 W

All floating-point comparisons use pytest.approx().
"""

import dataclasses

import pytest

from totalite.config import (
    IDLE_POWER_W,
    TILT_SENSOR_COLD_W,
    MEASUREMENT_INTERVAL_OPTIONS_S,
)
from totalite.power_model import (
    DeviceConfiguration,
    compute_base_power,
    compute_measurement_duration,
    compute_idle_time,
    compute_power,
)


LED_LEVELS = list(range(5, 105, 5))


# ---------------------------------------------------------------------------
# Fixtures
# ---------------------------------------------------------------------------

@pytest.fixture
def reference_config():
    """Form defaults: 50 %, 3 cycles, 900 s, 30 days, 12 V, normal, good."""
    return DeviceConfiguration()


@pytest.fixture
def reference_power(reference_config):
    return compute_power(reference_config)


def _base(led=50, cycles=3, voltage=12, temperature="normal", lte="good"):
    return compute_base_power(led, cycles, voltage, temperature, lte)


# ---------------------------------------------------------------------------
# Reference scenario
# ---------------------------------------------------------------------------

class TestReferenceScenario:
    """Default configuration worked by hand."""

    def test_base_power(self, reference_power):
        assert reference_power.base_power_w == pytest.approx(0.4532, rel=1e-12)

    def test_measurement_duration(self, reference_power):
        assert reference_power.measurement_duration_s == pytest.approx(391.0, rel=1e-12)

    def test_idle_time(self, reference_power):
        assert reference_power.idle_time_s == pytest.approx(509.0, rel=1e-12)

    def test_active_contribution(self, reference_power):
        assert reference_power.active_power_contrib_w == pytest.approx(0.4532 * 391 / 900, rel=1e-12)

    def test_idle_contribution(self, reference_power):
        assert reference_power.idle_power_contrib_w == pytest.approx(0.066 * 509 / 900, rel=1e-12)

    def test_average_power(self, reference_power):
        assert reference_power.avg_power_w == pytest.approx(0.234217, abs=1e-6), (
            f"Expected P_avg ≈ 0.234217 W, got {reference_power.avg_power_w:.6f} W"
        )

    def test_shares_sum_to_one(self, reference_power):
        assert reference_power.active_share + reference_power.idle_share == pytest.approx(1.0)
        assert reference_power.active_share == pytest.approx(0.196890 / 0.234217, rel=1e-4)


# ---------------------------------------------------------------------------
# Average power identity
# ---------------------------------------------------------------------------

class TestAveragePowerIdentity:
    """P_avg = P_active + P_idle for every configuration."""

    @pytest.mark.parametrize("interval_s", MEASUREMENT_INTERVAL_OPTIONS_S)
    @pytest.mark.parametrize("cycles", [1, 3])
    @pytest.mark.parametrize("temperature,lte", [
        ("normal", "good"), ("cold", "good"), ("normal", "poor"), ("cold", "poor"),
    ])
    def test_average_is_sum_of_contributions(self, interval_s, cycles, temperature, lte):
        result = compute_power(DeviceConfiguration(
            led_power_percent=35,
            integration_cycles=cycles,
            measurement_interval_s=interval_s,
            supply_voltage_v=24,
            temperature_condition=temperature,
            lte_condition=lte,
        ))
        assert result.avg_power_w == result.active_power_contrib_w + result.idle_power_contrib_w

    def test_average_is_time_weighted(self):
        """Active and idle windows weighted by their share of the interval."""
        result = compute_power(DeviceConfiguration(measurement_interval_s=3600))
        weighted = (
            result.base_power_w * result.measurement_duration_s
            + IDLE_POWER_W * result.idle_time_s
        ) / 3600
        assert result.avg_power_w == pytest.approx(weighted, rel=1e-12)
        assert result.measurement_duration_s + result.idle_time_s == pytest.approx(3600)


# ---------------------------------------------------------------------------
# Peak power adjustments
# ---------------------------------------------------------------------------

class TestBasePower:
    """Regression fit followed by ordered cycle/voltage/cold/LTE adjustments."""

    def test_regression_fit(self):
        assert _base(led=100) == pytest.approx(0.00233 * 100 + 0.3367, rel=1e-12)

    def test_increases_with_led_power(self):
        values = [_base(led=led) for led in LED_LEVELS]
        assert all(b > a for a, b in zip(values, values[1:]))

    def test_single_cycle_derating(self):
        assert _base(cycles=1) == pytest.approx(_base(cycles=3) * 0.54, rel=1e-12)

    def test_24v_overhead(self):
        assert _base(voltage=24) == pytest.approx(_base(voltage=12) * 1.12, rel=1e-12)

    def test_cold_adds_tilt_sensor_heating(self):
        assert _base(temperature="cold") - _base() == pytest.approx(TILT_SENSOR_COLD_W, rel=1e-9)

    def test_cold_is_additive_after_voltage_scaling(self):
        assert _base(voltage=24, temperature="cold") == pytest.approx(
            _base(voltage=24) + 0.071, rel=1e-12
        )

    def test_poor_lte_applied_after_cold(self):
        """(P + 0.071) · 1.15, not P · 1.15 + 0.071."""
        expected = (_base() + 0.071) * 1.15
        assert _base(temperature="cold", lte="poor") == pytest.approx(expected, rel=1e-12)
        assert _base(temperature="cold", lte="poor") != pytest.approx(_base() * 1.15 + 0.071)

    def test_all_adjustments_in_order(self):
        expected = ((0.00233 * 20 + 0.3367) * 0.54 * 1.12 + 0.071) * 1.15
        assert _base(led=20, cycles=1, voltage=24, temperature="cold", lte="poor") == (
            pytest.approx(expected, rel=1e-12)
        )


# ---------------------------------------------------------------------------
# Measurement timing
# ---------------------------------------------------------------------------

class TestMeasurementTiming:
    """T_meas = 380 + (100 − LED%) · 0.22, T_idle = max(0, T_int − T_meas)."""

    def test_full_led_power_duration(self):
        assert compute_measurement_duration(100, 3) == pytest.approx(380.0)

    def test_decreases_with_led_power(self):
        values = [compute_measurement_duration(led, 3) for led in LED_LEVELS]
        assert all(b < a for a, b in zip(values, values[1:]))

    def test_single_cycle_shortens_window(self):
        assert compute_measurement_duration(50, 1) == pytest.approx(391.0 * 0.95, rel=1e-12)

    def test_idle_time_clamped_at_zero(self):
        assert compute_idle_time(60, 391.0) == 0

    def test_clamped_idle_time_is_float(self):
        result = compute_power(DeviceConfiguration(measurement_interval_s=300))
        assert isinstance(result.idle_time_s, float)
        assert isinstance(compute_idle_time(60, 391.0), float)

    def test_idle_time_zero_for_shortest_interval(self):
        """A 391 s measurement does not fit in a 300 s interval."""
        result = compute_power(DeviceConfiguration(measurement_interval_s=300))
        assert result.idle_time_s == 0
        assert result.idle_power_contrib_w == 0
        assert result.avg_power_w == pytest.approx(result.base_power_w * 391 / 300, rel=1e-12)

    @pytest.mark.parametrize("interval_s", [1, 120, *MEASUREMENT_INTERVAL_OPTIONS_S])
    @pytest.mark.parametrize("cycles", [1, 3])
    def test_idle_time_never_negative(self, interval_s, cycles):
        for led in LED_LEVELS:
            result = compute_power(DeviceConfiguration(
                led_power_percent=led,
                integration_cycles=cycles,
                measurement_interval_s=interval_s,
            ))
            assert result.idle_time_s >= 0
            assert result.idle_power_contrib_w >= 0


# ---------------------------------------------------------------------------
# Integration cycles
# ---------------------------------------------------------------------------

class TestIntegrationCycles:
    """Switching from 3 cycles to 1 lowers both peak power and duration."""

    def test_single_cycle_scales_base_and_duration(self, reference_config, reference_power):
        single = compute_power(dataclasses.replace(reference_config, integration_cycles=1))
        assert single.base_power_w == pytest.approx(reference_power.base_power_w * 0.54, rel=1e-12)
        assert single.measurement_duration_s == pytest.approx(
            reference_power.measurement_duration_s * 0.95, rel=1e-12
        )

    @pytest.mark.parametrize("interval_s", MEASUREMENT_INTERVAL_OPTIONS_S)
    @pytest.mark.parametrize("temperature,lte", [("normal", "good"), ("cold", "poor")])
    def test_single_cycle_lowers_average_power(self, interval_s, temperature, lte):
        for led in LED_LEVELS:
            config = DeviceConfiguration(
                led_power_percent=led,
                measurement_interval_s=interval_s,
                temperature_condition=temperature,
                lte_condition=lte,
            )
            three = compute_power(config)
            one = compute_power(dataclasses.replace(config, integration_cycles=1))
            assert one.avg_power_w < three.avg_power_w


# ---------------------------------------------------------------------------
# Purity
# ---------------------------------------------------------------------------

class TestPurity:

    def test_repeated_calls_identical(self, reference_config):
        assert compute_power(reference_config) == compute_power(reference_config)

    def test_configuration_is_immutable(self, reference_config):
        with pytest.raises(dataclasses.FrozenInstanceError):
            reference_config.led_power_percent = 80
