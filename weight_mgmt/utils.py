"""Utility functions for weight-mgmt.

BMI arithmetic, simulation-time conversions and a timing helper.
Simulation time is measured in days (float) from an arbitrary epoch.
"""

from __future__ import annotations

import time
from contextlib import contextmanager
from typing import Generator


DAYS_PER_YEAR = 365.0
DAYS_PER_MONTH = DAYS_PER_YEAR / 12.0   # 12 months is exactly one year


def years_to_days(years: float) -> float:
    """Convert a duration in years to simulation days."""
    return years * DAYS_PER_YEAR


def months_to_days(months: float) -> float:
    """Convert a duration in months to simulation days."""
    return months * DAYS_PER_YEAR / 12.0


def calculate_bmi(height_cm: float, weight_kg: float) -> float:
    """BMI (kg/m²) from height (cm) and weight (kg).

    Raises:
        ValueError: If height is not positive.
    """
    if height_cm <= 0:
        raise ValueError(f"height must be positive, got {height_cm}")
    height_m = height_cm / 100.0
    return weight_kg / (height_m * height_m)


def weight_for_height_and_bmi(height_cm: float, bmi: float) -> float:
    """Weight (kg) that yields `bmi` at `height_cm`."""
    height_m = height_cm / 100.0
    return bmi * height_m * height_m


@contextmanager
def timer(label: str = "") -> Generator[None, None, None]:
    """Simple context-manager timer. Prints elapsed time on exit."""
    start = time.perf_counter()
    yield
    elapsed = time.perf_counter() - start
    if label:
        print(f"[{label}] {elapsed:.3f}s")
    else:
        print(f"Elapsed: {elapsed:.3f}s")
