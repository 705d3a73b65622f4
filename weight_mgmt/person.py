"""Individuals as seen by the weight-management module.

A Person owns its vital signs, its random stream, its growth trajectory and
at most one active weight-management episode. Nothing here is shared between
individuals, so cohorts can be stepped one person at a time in any order as
long as each person's own ticks arrive in increasing time.
"""

from __future__ import annotations

import math
from typing import Any, Dict, Optional

import numpy as np

from weight_mgmt.episode import ACTIVE_WEIGHT_MANAGEMENT, WeightManagementEpisode
from weight_mgmt.trajectory import GrowthTrajectory
from weight_mgmt.types import GENDERS, VitalSign
from weight_mgmt.utils import DAYS_PER_YEAR


class Person:
    """One synthetic individual.

    Args:
        person_id: Index within the cohort (also names its RNG stream).
        birth_time: Simulation day of birth.
        gender: 'M' or 'F'.
        rng: The individual's own random stream.
        growth_trajectory: BMI trajectory, required for pediatric episodes.
        target_weight_loss: Optional fixed adult loss fraction overriding
            the configured range.
        death_time: Simulation day of death (None = alive throughout).
    """

    def __init__(
        self,
        person_id: int,
        birth_time: float,
        gender: str,
        rng: np.random.Generator,
        growth_trajectory: Optional[GrowthTrajectory] = None,
        target_weight_loss: Optional[float] = None,
        death_time: Optional[float] = None,
    ):
        if gender not in GENDERS:
            raise ValueError(f"gender must be one of {GENDERS}, got '{gender}'")
        self.person_id = person_id
        self.birth_time = float(birth_time)
        self.gender = gender
        self.rng = rng
        self.growth_trajectory = growth_trajectory
        self.target_weight_loss = target_weight_loss
        self.death_time = death_time
        self.episode: Optional[WeightManagementEpisode] = None
        self._vitals: Dict[VitalSign, float] = {}

    def __repr__(self) -> str:
        return (
            f"Person(id={self.person_id}, gender={self.gender}, "
            f"birth_time={self.birth_time}, active={self.episode is not None})"
        )

    # ── life and age ─────────────────────────────────────────────────

    def alive(self, time: float) -> bool:
        return self.death_time is None or time < self.death_time

    def age_in_decimal_years(self, time: float) -> float:
        return (time - self.birth_time) / DAYS_PER_YEAR

    def age_in_years(self, time: float) -> int:
        return int(math.floor(self.age_in_decimal_years(time)))

    def age_in_months(self, time: float) -> int:
        # Scale before dividing so whole years land on exact multiples of 12
        return int(math.floor((time - self.birth_time) * 12.0 / DAYS_PER_YEAR))

    # ── randomness ───────────────────────────────────────────────────

    def random(self, low: Optional[float] = None, high: Optional[float] = None) -> float:
        """One draw from the individual's stream: [0, 1) or [low, high)."""
        if low is None and high is None:
            return float(self.rng.random())
        if low is None or high is None:
            raise ValueError("random() takes both bounds or neither")
        return float(self.rng.uniform(low, high))

    # ── vital signs ──────────────────────────────────────────────────

    def get_vital_sign(self, kind: VitalSign, time: float) -> float:
        """Current value of a vital sign.

        Raises:
            KeyError: If the vital sign has never been set.
        """
        try:
            return self._vitals[kind]
        except KeyError:
            raise KeyError(
                f"person {self.person_id} has no {kind.value} at t={time}"
            ) from None

    def set_vital_sign(self, kind: VitalSign, value: float) -> None:
        self._vitals[kind] = float(value)

    # ── episode ──────────────────────────────────────────────────────

    @property
    def episode_active(self) -> bool:
        return self.episode is not None

    def attributes(self) -> Dict[str, Any]:
        """Episode state in attribute-bag form for host engines."""
        if self.episode is None:
            return {ACTIVE_WEIGHT_MANAGEMENT: False}
        return self.episode.to_attributes()
