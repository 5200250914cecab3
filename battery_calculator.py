"""
battery_calculator.py
=====================
TotaLite Battery Calculator — Command-Line Runner

Connects the TotaLite modules in calculation order:

Execution sequence:
    1. Build the device configuration      (CLI flags, optional JSON file)
    2. Validate the configuration          (validation.validate_configuration)
    3. Compute average power               (power_model.compute_power)
    4. Compute battery capacity            (capacity_model.compute_capacity)
    5. Print the battery requirements report, or the raw results as JSON
    6. Optionally plot power breakdown and capacity vs deployment duration

Usage:
    python battery_calculator.py --led-power 50 --interval 900 --days 30
    python battery_calculator.py --input site.json --voltage 24 --plot
"""

from __future__ import annotations

import argparse
import dataclasses
import json
import logging
import sys
from pathlib import Path
from typing import Any

import matplotlib.pyplot as plt

from totalite.config import (
    IDLE_POWER_W,
    SAFETY_MARGIN,
    INTEGRATION_CYCLE_OPTIONS,
    MEASUREMENT_INTERVAL_OPTIONS_S,
    SUPPLY_VOLTAGE_OPTIONS_V,
    TEMPERATURE_CONDITIONS,
    LTE_CONDITIONS,
    DEPLOYMENT_DAYS_MIN,
    DEPLOYMENT_DAYS_MAX,
    PLOT_OUTPUT_FILE,
)
from totalite.power_model import DeviceConfiguration, PowerResult, compute_power
from totalite.capacity_model import CapacityResult, compute_capacity
from totalite.validation import validate_configuration
from totalite.presentation import (
    distance_guide,
    format_interval,
    format_duration,
    format_percent,
)


logger = logging.getLogger(__name__)

_CONFIG_FIELDS: tuple[str, ...] = tuple(
    f.name for f in dataclasses.fields(DeviceConfiguration)
)


# ---------------------------------------------------------------------------
# Step 1–2: Configuration
# ---------------------------------------------------------------------------

def load_config_file(path: str) -> dict[str, Any]:
    """Read configuration overrides from a JSON object file.

    Raises:
        OSError:              If the file cannot be read.
        json.JSONDecodeError: If the file is not valid JSON.
        ValueError:           If the JSON is not an object or has unknown keys.
    """
    data = json.loads(Path(path).read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"Configuration file must hold a JSON object; received {type(data).__name__}")
    unknown = sorted(set(data) - set(_CONFIG_FIELDS))
    if unknown:
        raise ValueError(f"Unknown configuration keys in {path}: {', '.join(unknown)}")
    return data


def build_configuration(args: argparse.Namespace) -> DeviceConfiguration:
    """Merge defaults, the optional JSON file and CLI flags, then validate.

    CLI flags take precedence over file values, which take precedence over
    the built-in defaults.
    """
    values: dict[str, Any] = load_config_file(args.input) if args.input else {}

    overrides = {
        "led_power_percent":      args.led_power,
        "integration_cycles":     args.cycles,
        "measurement_interval_s": args.interval,
        "deployment_days":        args.days,
        "supply_voltage_v":       args.voltage,
        "temperature_condition":  args.temperature,
        "lte_condition":          args.lte,
    }
    values.update({k: v for k, v in overrides.items() if v is not None})

    config = validate_configuration(DeviceConfiguration(**values))
    logger.debug("Resolved configuration: %s", config)
    return config


# ---------------------------------------------------------------------------
# Step 3–4: Calculation
# ---------------------------------------------------------------------------

def run_calculation(config: DeviceConfiguration) -> tuple[PowerResult, CapacityResult]:
    """Run the power model followed by the capacity model."""
    power = compute_power(config)
    if power.idle_time_s == 0:
        logger.warning(
            "Measurement window (%.1f s) fills the %s s interval; idle time clamped to zero",
            power.measurement_duration_s,
            config.measurement_interval_s,
        )
    capacity = compute_capacity(power, config)
    logger.debug("Average power %.6f W, required capacity %.3f Ah",
                 power.avg_power_w, capacity.required_capacity_ah)
    return power, capacity


# ---------------------------------------------------------------------------
# Step 5: Console report
# ---------------------------------------------------------------------------

def print_report(config: DeviceConfiguration, power: PowerResult, capacity: CapacityResult) -> None:
    """Print the battery requirements report to stdout."""

    sep = "─" * 60

    print(f"\n{'═' * 60}")
    print("  TOTALITE BATTERY CALCULATOR — BATTERY REQUIREMENTS")
    print(f"{'═' * 60}")

    # --- Configuration ---
    print(f"\n{sep}")
    print("  CONFIGURATION")
    print(sep)
    print(f"    LED power                   :  {config.led_power_percent:g} %  "
          f"({distance_guide(config.led_power_percent)})")
    print(f"    Integration cycles          :  {config.integration_cycles}")
    print(f"    Measurement interval        :  {format_interval(config.measurement_interval_s)}")
    print(f"    Supply voltage              :  {config.supply_voltage_v:g} V DC")
    print(f"    Deployment duration         :  {config.deployment_days} days")
    print(f"    Temperature                 :  {config.temperature_condition}")
    print(f"    LTE coverage                :  {config.lte_condition}")

    # --- Requirements ---
    print(f"\n{sep}")
    print("  BATTERY REQUIREMENTS")
    print(sep)
    print(f"    Required capacity           :  {capacity.required_capacity_ah:7.1f} Ah  "
          f"at {config.supply_voltage_v:g} V")
    print(f"    Energy required             :  {capacity.required_capacity_wh:7.0f} Wh  "
          f"(with {SAFETY_MARGIN - 1:.0%} safety margin)")
    print(f"    Average power draw          :  {power.avg_power_w:7.3f} W")

    # --- Power breakdown ---
    print(f"\n{sep}")
    print("  POWER BREAKDOWN")
    print(sep)
    print(f"    Peak during measurement     :  {power.base_power_w:7.3f} W")
    print(f"    Idle power                  :  {IDLE_POWER_W:7.3f} W")
    print(f"    Measurement duration        :  {format_duration(power.measurement_duration_s)}")
    print(f"    Idle duration               :  {format_duration(power.idle_time_s)}")
    print(f"    Active contribution         :  {format_percent(power.active_share)}")
    print(f"    Idle contribution           :  {format_percent(power.idle_share)}")

    # --- Deployment summary ---
    print(f"\n{sep}")
    print("  DEPLOYMENT SUMMARY")
    print(sep)
    print(f"    Total measurements          :  {capacity.total_measurements:,.0f}")
    print(f"    Energy per measurement      :  {capacity.energy_per_measurement_wh:.4f} Wh")
    print(f"    Total energy (no margin)    :  {capacity.total_energy_wh:7.1f} Wh")
    print(f"    Safety margin applied       :  {SAFETY_MARGIN - 1:.0%}")

    # --- Recommendation ---
    print(f"\n{sep}")
    print("  RECOMMENDED BATTERY")
    print(sep)
    print(f"    At least {capacity.required_capacity_ah:.1f} Ah at {config.supply_voltage_v:g} V "
          f"({capacity.required_capacity_wh:.0f} Wh total)")
    print(f"    Suggested rating            :  {capacity.recommended_battery_ah:g} Ah or higher")
    print(f"{'═' * 60}\n")


def results_as_dict(
    config: DeviceConfiguration,
    power: PowerResult,
    capacity: CapacityResult,
) -> dict[str, dict[str, Any]]:
    """Collect the configuration and both result records for JSON output."""
    return {
        "configuration": dataclasses.asdict(config),
        "power": dataclasses.asdict(power),
        "capacity": dataclasses.asdict(capacity),
    }


# ---------------------------------------------------------------------------
# Step 6: Plots
# ---------------------------------------------------------------------------

def plot_results(
    config: DeviceConfiguration,
    power: PowerResult,
    capacity: CapacityResult,
    output_file: str = PLOT_OUTPUT_FILE,
    show: bool = True,
) -> None:
    """Render and save the power breakdown and capacity-vs-duration plots."""

    days = list(range(DEPLOYMENT_DAYS_MIN, DEPLOYMENT_DAYS_MAX + 1))
    required_ah = [
        compute_capacity(power, dataclasses.replace(config, deployment_days=d)).required_capacity_ah
        for d in days
    ]

    fig, (ax1, ax2) = plt.subplots(1, 2, figsize=(12, 5))
    fig.suptitle(
        "TotaLite — Battery Requirements\n"
        f"LED {config.led_power_percent:g} %  |  {config.integration_cycles} cycle(s)  |  "
        f"every {format_interval(config.measurement_interval_s)}  |  "
        f"{config.supply_voltage_v:g} V  |  {config.temperature_condition} / LTE {config.lte_condition}",
        fontsize=12, fontweight="bold",
    )

    # ── Power breakdown ──────────────────────────────────────────────────
    labels = ["Active", "Idle"]
    values = [power.active_power_contrib_w, power.idle_power_contrib_w]
    bars = ax1.bar(labels, values, color=["#2196F3", "#9E9E9E"])
    for bar, share in zip(bars, (power.active_share, power.idle_share)):
        ax1.annotate(format_percent(share),
                     (bar.get_x() + bar.get_width() / 2, bar.get_height()),
                     ha="center", va="bottom", fontsize=9)
    ax1.axhline(power.avg_power_w, color="#F44336", linewidth=1.2, linestyle="--",
                label=f"Average ({power.avg_power_w:.3f} W)")

    ax1.set_ylabel("Average Power Contribution [W]", fontsize=11)
    ax1.set_title("Power Breakdown per Cycle", fontsize=10, loc="left")
    ax1.legend(fontsize=9, loc="upper right")
    ax1.grid(True, axis="y", linestyle="--", alpha=0.5)

    # ── Capacity vs deployment duration ──────────────────────────────────
    ax2.plot(days, required_ah, color="#4CAF50", linewidth=2,
             label=f"Required capacity (incl. {SAFETY_MARGIN - 1:.0%} margin)")
    ax2.axvline(config.deployment_days, color="#FF9800", linewidth=1.2, linestyle="-.",
                label=f"Deployment ({config.deployment_days} days)")
    ax2.axhline(capacity.recommended_battery_ah, color="#9C27B0", linewidth=1.0, linestyle=":",
                label=f"Recommended battery ({capacity.recommended_battery_ah:g} Ah)")

    ax2.set_xlabel("Deployment Duration [days]", fontsize=11)
    ax2.set_ylabel(f"Capacity at {config.supply_voltage_v:g} V [Ah]", fontsize=11)
    ax2.set_title("Required Capacity vs Deployment Duration", fontsize=10, loc="left")
    ax2.set_xlim(0, DEPLOYMENT_DAYS_MAX)
    ax2.set_ylim(bottom=0)
    ax2.legend(fontsize=9, loc="upper left")
    ax2.grid(True, linestyle="--", alpha=0.5)

    plt.tight_layout()
    plt.savefig(output_file, dpi=150, bbox_inches="tight")
    print(f"  [plot] Saved → {output_file}")
    if show:
        plt.show()
    plt.close(fig)


# ---------------------------------------------------------------------------
# Entry point
# ---------------------------------------------------------------------------

def build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the calculator CLI."""
    parser = argparse.ArgumentParser(
        description="Compute the battery capacity a TotaLite deployment needs."
    )
    parser.add_argument("--led-power", type=float, metavar="PERCENT",
                        help="LED power in percent of maximum (5-100, step 5).")
    parser.add_argument("--cycles", type=int, choices=INTEGRATION_CYCLE_OPTIONS,
                        help="Integration cycles per measurement.")
    parser.add_argument("--interval", type=int, choices=MEASUREMENT_INTERVAL_OPTIONS_S,
                        metavar="SECONDS",
                        help="Measurement interval in seconds "
                             f"({', '.join(str(s) for s in MEASUREMENT_INTERVAL_OPTIONS_S)}).")
    parser.add_argument("--days", type=int,
                        help=f"Deployment duration in days ({DEPLOYMENT_DAYS_MIN}-{DEPLOYMENT_DAYS_MAX}).")
    parser.add_argument("--voltage", type=int, choices=SUPPLY_VOLTAGE_OPTIONS_V,
                        help="Supply voltage in volts.")
    parser.add_argument("--temperature", choices=TEMPERATURE_CONDITIONS,
                        help="Temperature condition; 'cold' adds tilt sensor heating.")
    parser.add_argument("--lte", choices=LTE_CONDITIONS,
                        help="LTE coverage; 'poor' increases transmit power.")
    parser.add_argument("--input", "-i", metavar="PATH",
                        help="JSON file with configuration fields. CLI flags override it.")
    parser.add_argument("--json", action="store_true",
                        help="Print configuration and results as JSON instead of the report.")
    parser.add_argument("--plot", action="store_true",
                        help="Render the power breakdown and capacity plots.")
    parser.add_argument("--plot-file", default=PLOT_OUTPUT_FILE, metavar="PATH",
                        help=f"Where to save the plot (default {PLOT_OUTPUT_FILE}).")
    parser.add_argument("--no-show", action="store_true",
                        help="Save the plot without opening a window.")
    parser.add_argument("--verbose", "-v", action="store_true",
                        help="Enable debug logging.")
    return parser


def main(argv: list[str] | None = None) -> int:
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
        stream=sys.stderr,
    )

    try:
        config = build_configuration(args)
    except (OSError, json.JSONDecodeError, TypeError, ValueError) as e:
        print(f"Input error: {e}", file=sys.stderr)
        return 2

    power, capacity = run_calculation(config)

    if args.json:
        print(json.dumps(results_as_dict(config, power, capacity), indent=2))
    else:
        print_report(config, power, capacity)

    if args.plot:
        plot_results(config, power, capacity, output_file=args.plot_file, show=not args.no_show)

    return 0


if __name__ == "__main__":
    raise SystemExit(main())
