"""
totalite/presentation.py
========================
TotaLite Battery Calculator — Display Helpers

Pure lookups and string formatting used by the report. None of these feed
back into the power or capacity models.
"""

from __future__ import annotations

import math


def distance_guide(led_power_percent: float) -> str:
    """Typical target distance reachable at a given LED power.

    Example:
        >>> distance_guide(50)
        '35-60m targets'
    """
    if led_power_percent <= 10:
        return "≤10m targets"
    if led_power_percent <= 25:
        return "10-35m targets"
    if led_power_percent <= 50:
        return "35-60m targets"
    return "60-100m targets"


def format_interval(seconds: float) -> str:
    """Render a measurement interval in minutes, hours or days.

    Example:
        >>> format_interval(900)
        '15 minutes'
        >>> format_interval(86400)
        '1 days'
    """
    if seconds < 3600:
        return f"{_trim(seconds / 60)} minutes"
    if seconds < 86400:
        return f"{_trim(seconds / 3600)} hours"
    return f"{_trim(seconds / 86400)} days"


def format_duration(seconds: float) -> str:
    """Render a duration as whole minutes and seconds rounded half up, e.g. ``'6m 31s'``."""
    minutes = math.floor(seconds / 60)
    secs = math.floor(seconds % 60 + 0.5)
    return f"{minutes}m {secs}s"


def format_percent(fraction: float) -> str:
    """Render a fraction as a percentage with one decimal, e.g. ``'84.1%'``."""
    return f"{fraction * 100:.1f}%"


def _trim(value: float) -> str:
    # 15.0 -> "15", 0.5 -> "0.5"
    return f"{value:g}"
