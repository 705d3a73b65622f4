"""Regime boundaries of an active weight-management episode.

Intervals are half-open on elapsed time since the episode start:

    [0, 1y)   FIRST_YEAR
    [1y, 5y)  YEARS_TWO_TO_FIVE
    [5y, ∞)   LONG_TERM_MAINTAINED | LONG_TERM_REVERTED (by long_term_success)

The step function derives the regime once per tick and dispatches on it.
"""

from __future__ import annotations

from weight_mgmt.episode import WeightManagementEpisode
from weight_mgmt.types import MANAGEMENT_YEARS, Regime
from weight_mgmt.utils import years_to_days


ONE_YEAR = years_to_days(1)
FIVE_YEARS = years_to_days(MANAGEMENT_YEARS)


def elapsed_days(start_time: float, time: float) -> float:
    """Days since the episode start.

    Raises:
        ValueError: If `time` precedes the start.
    """
    elapsed = time - start_time
    if elapsed < 0:
        raise ValueError(
            f"time {time} precedes episode start {start_time}; "
            f"ticks must be monotonically increasing"
        )
    return elapsed


def first_year_of_management(start_time: float, time: float) -> bool:
    return elapsed_days(start_time, time) < ONE_YEAR


def first_five_years_of_management(start_time: float, time: float) -> bool:
    return elapsed_days(start_time, time) < FIVE_YEARS


def classify_regime(episode: WeightManagementEpisode, time: float) -> Regime:
    """Regime that applies to `episode` at `time`."""
    if first_year_of_management(episode.start_time, time):
        return Regime.FIRST_YEAR
    if first_five_years_of_management(episode.start_time, time):
        return Regime.YEARS_TWO_TO_FIVE
    if episode.long_term_success:
        return Regime.LONG_TERM_MAINTAINED
    return Regime.LONG_TERM_REVERTED
