"""Core data types for weight-mgmt.

This module is the SINGLE SOURCE OF TRUTH for:
  - VitalSign, ChartType, Regime, EpisodePath enumerations
  - Gender codes accepted by the growth charts
  - Age and time constants shared by the regime predicates and the stepper
  - TrajectoryPoint, the element type of a growth trajectory

All modules import these types from here.
"""

from dataclasses import dataclass
from enum import Enum, IntEnum


# ═══════════════════════════════════════════════════════════════════════
# ENUMERATIONS
# ═══════════════════════════════════════════════════════════════════════

class VitalSign(Enum):
    """Vital signs read and written by the weight-management module."""
    WEIGHT = "weight"                        # kg
    HEIGHT = "height"                        # cm
    BMI = "bmi"                              # kg/m²
    HEIGHT_PERCENTILE = "height_percentile"  # fraction in (0, 1)


class ChartType(Enum):
    """Growth charts available from the chart service."""
    BMI = "bmi"
    HEIGHT = "height"


class Regime(IntEnum):
    """Time regimes of an active episode.

    Derived once per step from elapsed time since the episode start and the
    long-term success flag:
      FIRST_YEAR            elapsed < 1 year
      YEARS_TWO_TO_FIVE     1 year ≤ elapsed < 5 years
      LONG_TERM_MAINTAINED  elapsed ≥ 5 years, long-term success
      LONG_TERM_REVERTED    elapsed ≥ 5 years, no long-term success
    """
    FIRST_YEAR = 0
    YEARS_TWO_TO_FIVE = 1
    LONG_TERM_MAINTAINED = 2
    LONG_TERM_REVERTED = 3


class EpisodePath(IntEnum):
    """Numeric model an episode runs on, fixed by age at the episode start."""
    PEDIATRIC = 0   # BMI-percentile trajectory (start age < 20)
    ADULT = 1       # weight fraction (start age ≥ 20)


MALE = "M"
FEMALE = "F"
GENDERS = (MALE, FEMALE)


# ═══════════════════════════════════════════════════════════════════════
# AGE AND TIME CONSTANTS
# ═══════════════════════════════════════════════════════════════════════

ADULT_AGE = 20                   # years; pediatric/adult model boundary
EXCLUDED_ONSET_AGE = 19          # no bridge between the two models at this age
PEDIATRIC_CHART_MIN_AGE = 2      # years; BMI-for-age charts start at 24 months

TWO_YEARS_IN_MONTHS = 24
TWENTY_YEARS_IN_MONTHS = 240
TRAJECTORY_STEP_MONTHS = 12      # spacing of appended trajectory points

MANAGEMENT_YEARS = 5             # loss year + four regression/maintenance years
REGRESSION_YEARS = 4             # adult regression window (years 2–5)
PEDIATRIC_REGRESSION_YEARS = 5   # percentile regression window
LOSS_AND_REGRESSION_YEARS = 7    # transition regression ends at start age + 7


# ═══════════════════════════════════════════════════════════════════════
# DATA TRANSFER OBJECTS
# ═══════════════════════════════════════════════════════════════════════

@dataclass(frozen=True)
class TrajectoryPoint:
    """One BMI observation on a growth trajectory."""
    age_in_months: int
    time: float          # simulation day
    bmi: float
