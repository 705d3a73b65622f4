"""Cohort driver — steps a synthetic cohort through weight management.

Tick loop (every `tick_days` for `n_years`):
  1. Lifecycle stand-in: minors' growth trajectories are extended a year
     ahead when due and their height, weight and BMI are read off it
  2. Weight-management step for every living individual
  3. Record cohort metrics (and per-person series if a recorder is given)

The lifecycle stand-in is small: adults keep whatever weight
the weight-management module leaves them with, and minors drift upward in
BMI percentile by a fixed amount per year.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Dict, List, Optional

import numpy as np

from weight_mgmt.config import CohortSection, SimulationConfig, default_config
from weight_mgmt.growth_chart import GrowthChart, load_charts
from weight_mgmt.person import Person
from weight_mgmt.rng import create_rng_hierarchy, get_person_rng
from weight_mgmt.snapshots import EpisodeRecorder
from weight_mgmt.trajectory import GrowthTrajectory
from weight_mgmt.types import (
    ADULT_AGE,
    FEMALE,
    MALE,
    TRAJECTORY_STEP_MONTHS,
    TWENTY_YEARS_IN_MONTHS,
    ChartType,
    VitalSign,
)
from weight_mgmt.utils import (
    calculate_bmi,
    months_to_days,
    weight_for_height_and_bmi,
    years_to_days,
)
from weight_mgmt.weight_loss import WeightManagementModule

logger = logging.getLogger(__name__)

MAX_TRAJECTORY_PERCENTILE = 0.995


# ═══════════════════════════════════════════════════════════════════════
# COHORT INITIALIZATION
# ═══════════════════════════════════════════════════════════════════════

def make_person(
    person_id: int,
    age_years: float,
    gender: str,
    height_percentile: float,
    time: float,
    rng: np.random.Generator,
    charts: Dict[ChartType, GrowthChart],
    bmi: Optional[float] = None,
    bmi_percentile: Optional[float] = None,
) -> Person:
    """Build one individual at `time`.

    Minors are placed on the BMI chart by `bmi_percentile` and get a growth
    trajectory seeded with one point at `time`; adults take `bmi` directly.
    """
    birth_time = time - years_to_days(age_years)
    person = Person(person_id, birth_time, gender, rng)
    age_in_months = person.age_in_months(time)
    height = charts[ChartType.HEIGHT].lookup(
        min(age_in_months, TWENTY_YEARS_IN_MONTHS), gender, height_percentile
    )

    if person.age_in_years(time) < ADULT_AGE:
        if bmi_percentile is None:
            raise ValueError(f"person {person_id} is a minor and needs bmi_percentile")
        trajectory = GrowthTrajectory(charts[ChartType.BMI])
        trajectory.add_point_from_percentile(age_in_months, time, bmi_percentile, gender)
        person.growth_trajectory = trajectory
        bmi = trajectory.tail().bmi
    elif bmi is None:
        raise ValueError(f"person {person_id} is an adult and needs bmi")

    person.set_vital_sign(VitalSign.HEIGHT_PERCENTILE, height_percentile)
    person.set_vital_sign(VitalSign.HEIGHT, height)
    person.set_vital_sign(VitalSign.BMI, bmi)
    person.set_vital_sign(VitalSign.WEIGHT, weight_for_height_and_bmi(height, bmi))
    return person


def initialize_cohort(
    cohort: CohortSection,
    rngs: Dict[str, np.random.Generator],
    charts: Dict[ChartType, GrowthChart],
    time: float = 0.0,
) -> List[Person]:
    """Draw a synthetic cohort from the 'cohort' stream.

    Each individual receives its own 'person_{i}' stream for episode draws.
    """
    draw = rngs['cohort']
    persons = []
    for i in range(cohort.n_individuals):
        age = float(draw.uniform(*cohort.age_range))
        gender = MALE if draw.random() < cohort.male_fraction else FEMALE
        height_percentile = float(draw.uniform(*cohort.height_percentile_range))
        bmi = float(draw.uniform(*cohort.adult_bmi_range))
        bmi_percentile = float(draw.uniform(*cohort.pediatric_percentile_range))
        persons.append(make_person(
            i, age, gender, height_percentile, time,
            get_person_rng(rngs, i), charts,
            bmi=bmi, bmi_percentile=bmi_percentile,
        ))
    return persons


# ═══════════════════════════════════════════════════════════════════════
# LIFECYCLE STAND-IN
# ═══════════════════════════════════════════════════════════════════════

def update_pediatric_vitals(
    person: Person,
    time: float,
    charts: Dict[ChartType, GrowthChart],
    percentile_drift: float = 0.0,
) -> None:
    """Keep a minor's trajectory a year ahead and read vitals off it.

    No-op for adults and for individuals without a trajectory.
    """
    trajectory = person.growth_trajectory
    if trajectory is None or person.age_in_years(time) >= ADULT_AGE:
        return

    bmi_chart = charts[ChartType.BMI]
    tail = trajectory.tail()
    if tail.time <= time and tail.age_in_months < TWENTY_YEARS_IN_MONTHS:
        months_ahead = min(TRAJECTORY_STEP_MONTHS,
                           TWENTY_YEARS_IN_MONTHS - tail.age_in_months)
        percentile = min(
            bmi_chart.percentile_for(tail.age_in_months, person.gender, tail.bmi)
            + percentile_drift,
            MAX_TRAJECTORY_PERCENTILE,
        )
        trajectory.add_point_from_percentile(
            tail.age_in_months + months_ahead,
            tail.time + months_to_days(months_ahead),
            percentile,
            person.gender,
        )

    bmi = trajectory.bmi_at(time)
    height = charts[ChartType.HEIGHT].lookup(
        min(person.age_in_months(time), TWENTY_YEARS_IN_MONTHS),
        person.gender,
        person.get_vital_sign(VitalSign.HEIGHT_PERCENTILE, time),
    )
    person.set_vital_sign(VitalSign.HEIGHT, height)
    person.set_vital_sign(VitalSign.BMI, bmi)
    person.set_vital_sign(VitalSign.WEIGHT, weight_for_height_and_bmi(height, bmi))


# ═══════════════════════════════════════════════════════════════════════
# RESULTS
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class CohortSimResult:
    """Results from a cohort simulation."""
    n_ticks: int = 0
    n_individuals: int = 0
    # Per-tick timeseries (length = n_ticks)
    times: Optional[np.ndarray] = None
    n_active: Optional[np.ndarray] = None
    n_active_adherent: Optional[np.ndarray] = None
    n_active_pediatric: Optional[np.ndarray] = None
    mean_adult_bmi: Optional[np.ndarray] = None

    # Summary
    episodes_started: int = 0
    episodes_stopped: int = 0
    n_adherent_starts: int = 0
    n_long_term_success: int = 0
    final_active: int = 0


# ═══════════════════════════════════════════════════════════════════════
# COHORT SIMULATION
# ═══════════════════════════════════════════════════════════════════════

def run_cohort_simulation(
    config: Optional[SimulationConfig] = None,
    charts: Optional[Dict[ChartType, GrowthChart]] = None,
    recorder: Optional[EpisodeRecorder] = None,
    persons: Optional[List[Person]] = None,
) -> CohortSimResult:
    """Step a cohort through weight management.

    Args:
        config: Simulation configuration; uses default if None.
        charts: Shared growth charts; loaded if None.
        recorder: Optional per-person series recorder.
        persons: Pre-built cohort; drawn from config.cohort if None.

    Returns:
        CohortSimResult with per-tick counts and episode totals.
    """
    if config is None:
        config = default_config()
    if charts is None:
        charts = load_charts()

    sim = config.simulation
    if persons is None:
        rngs = create_rng_hierarchy(sim.seed, config.cohort.n_individuals)
        persons = initialize_cohort(config.cohort, rngs, charts, time=sim.start_time)

    module = WeightManagementModule(config.weight_loss, charts)
    drift = config.cohort.pediatric_percentile_drift
    n_ticks = int(years_to_days(sim.n_years) // sim.tick_days) + 1

    result = CohortSimResult(n_ticks=n_ticks, n_individuals=len(persons))
    result.times = sim.start_time + np.arange(n_ticks, dtype=np.float64) * sim.tick_days
    result.n_active = np.zeros(n_ticks, dtype=np.int32)
    result.n_active_adherent = np.zeros(n_ticks, dtype=np.int32)
    result.n_active_pediatric = np.zeros(n_ticks, dtype=np.int32)
    result.mean_adult_bmi = np.full(n_ticks, np.nan, dtype=np.float64)

    logger.info(
        "running %d individuals for %d ticks (%.1f days each, seed=%d)",
        len(persons), n_ticks, sim.tick_days, sim.seed,
    )

    for tick, time in enumerate(result.times):
        time = float(time)
        adult_bmis = []
        for person in persons:
            if not person.alive(time):
                continue
            update_pediatric_vitals(person, time, charts, drift)

            was_active = person.episode_active
            module.step(person, time)
            if person.episode_active and not was_active:
                result.episodes_started += 1
                if person.episode.adherence:
                    result.n_adherent_starts += 1
                if person.episode.long_term_success:
                    result.n_long_term_success += 1
            elif was_active and not person.episode_active:
                result.episodes_stopped += 1

            episode = person.episode
            if episode is not None:
                result.n_active[tick] += 1
                result.n_active_adherent[tick] += int(episode.adherence)
                result.n_active_pediatric[tick] += int(episode.is_pediatric)
            if person.age_in_years(time) >= ADULT_AGE:
                adult_bmis.append(calculate_bmi(
                    person.get_vital_sign(VitalSign.HEIGHT, time),
                    person.get_vital_sign(VitalSign.WEIGHT, time),
                ))
        if adult_bmis:
            result.mean_adult_bmi[tick] = float(np.mean(adult_bmis))
        if recorder is not None:
            recorder.capture(tick, time, persons)

    result.final_active = int(result.n_active[-1]) if n_ticks else 0
    logger.info(
        "finished: %d episodes started, %d stopped, %d active at end",
        result.episodes_started, result.episodes_stopped, result.final_active,
    )
    return result
