"""Weight-management module — per-tick episode state machine.

Individuals who cross a weight threshold may begin managing their weight.
An episode draws adherence, a loss target and a long-term outcome once, then
evolves through four regimes keyed on elapsed time (see regimes.py):

  FIRST_YEAR
    adult      adherent: linear loss to pre_weight × (1 − loss_fraction)
               non-adherent: weight held where it is
    pediatric  adherent: growth trajectory pulled down by the percentile target
               non-adherent: untouched
  YEARS_TWO_TO_FIVE (adherent only)
    success    minors keep their BMI percentile; adults hold
    failure    minors regress in percentile; pediatric starters who have
               turned 20 switch to weight-based transition regression; adult
               starters regress linearly back to pre_weight
  LONG_TERM_MAINTAINED
    minors keep their BMI percentile until 20, then nothing
  LONG_TERM_REVERTED
    the episode is cleared (once); the individual may start again later

Adults (≥ 20 at the start) are modeled on weight directly. Minors are modeled
on the BMI growth trajectory, which the host's lifecycle turns into weight.
The model chosen at the start holds for the whole episode.

Onset is never allowed at age 19: there is no bridge between the percentile
and weight-fraction representations that close to the boundary.

Each step computes everything it needs before mutating the individual, so a
failed growth-chart lookup leaves vital signs, episode and trajectory as they
were.
"""

from __future__ import annotations

import logging
from typing import Dict, Optional

from weight_mgmt.config import WeightLossSection
from weight_mgmt.episode import EpisodeStateError, WeightManagementEpisode
from weight_mgmt.growth_chart import GrowthChart, load_charts
from weight_mgmt.person import Person
from weight_mgmt.regimes import ONE_YEAR, classify_regime, elapsed_days
from weight_mgmt.trajectory import GrowthTrajectory
from weight_mgmt.types import (
    ADULT_AGE,
    EXCLUDED_ONSET_AGE,
    LOSS_AND_REGRESSION_YEARS,
    PEDIATRIC_CHART_MIN_AGE,
    PEDIATRIC_REGRESSION_YEARS,
    REGRESSION_YEARS,
    TRAJECTORY_STEP_MONTHS,
    TWENTY_YEARS_IN_MONTHS,
    TWO_YEARS_IN_MONTHS,
    ChartType,
    EpisodePath,
    Regime,
    VitalSign,
)
from weight_mgmt.utils import (
    calculate_bmi,
    months_to_days,
    weight_for_height_and_bmi,
    years_to_days,
)

logger = logging.getLogger(__name__)


class WeightManagementModule:
    """Steps weight-management episodes for individuals.

    Args:
        config: Onset/adherence/outcome parameters (defaults if None).
        charts: Shared growth charts (loaded if None).
    """

    name = "Weight Loss"

    def __init__(
        self,
        config: Optional[WeightLossSection] = None,
        charts: Optional[Dict[ChartType, GrowthChart]] = None,
    ):
        self.config = config if config is not None else WeightLossSection()
        self.charts = charts if charts is not None else load_charts()

    @property
    def bmi_chart(self) -> GrowthChart:
        return self.charts[ChartType.BMI]

    @property
    def height_chart(self) -> GrowthChart:
        return self.charts[ChartType.HEIGHT]

    # ═══════════════════════════════════════════════════════════════════
    # STEP
    # ═══════════════════════════════════════════════════════════════════

    def step(self, person: Person, time: float) -> bool:
        """Advance one individual by one tick.

        Returns:
            True only if the individual is dead at `time`; the module never
            finishes for a living individual.
        """
        if not person.alive(time):
            return True

        episode = person.episode
        if episode is None:
            if self.should_start(person, time):
                self.start_episode(person, time)
            return False

        regime = classify_regime(episode, time)
        if regime == Regime.FIRST_YEAR:
            self.manage_first_year(person, time)
        elif regime == Regime.YEARS_TWO_TO_FIVE:
            self.manage_years_two_to_five(person, time)
        elif regime == Regime.LONG_TERM_MAINTAINED:
            self.manage_long_term(person, time)
        else:
            self.complete_adult_regression(person, time)
            self.stop_episode(person)
        return False

    # ═══════════════════════════════════════════════════════════════════
    # ONSET
    # ═══════════════════════════════════════════════════════════════════

    def meets_thresholds(self, person: Person, time: float) -> bool:
        """Whether the individual is heavy enough to consider management.

        With the default settings:
          - under 5: never
          - 19: never
          - 5 to 18: BMI at or over the 95th BMI-for-age percentile
          - 20 and over: BMI of 30 or over
        """
        cfg = self.config
        age = person.age_in_years(time)
        if age == EXCLUDED_ONSET_AGE or age < cfg.min_age:
            return False
        bmi = person.get_vital_sign(VitalSign.BMI, time)
        if age >= ADULT_AGE:
            return bmi >= cfg.start_bmi
        if age < PEDIATRIC_CHART_MIN_AGE:
            return False
        bmi_at_percentile = self.bmi_chart.lookup(
            person.age_in_months(time), person.gender, cfg.start_percentile
        )
        return bmi >= bmi_at_percentile

    def should_start(self, person: Person, time: float) -> bool:
        """Threshold check plus one onset draw. No memory between ticks."""
        if self.meets_thresholds(person, time):
            return person.random() <= self.config.start_prob
        return False

    # ═══════════════════════════════════════════════════════════════════
    # START / STOP
    # ═══════════════════════════════════════════════════════════════════

    def start_episode(self, person: Person, time: float) -> WeightManagementEpisode:
        """Begin an episode: draw adherence, target and long-term outcome.

        Draw order on the individual's stream: adherence, then (adherent
        only) the loss target, then the long-term outcome.
        """
        cfg = self.config
        start_weight = person.get_vital_sign(VitalSign.WEIGHT, time)
        path = (EpisodePath.ADULT if person.age_in_years(time) >= ADULT_AGE
                else EpisodePath.PEDIATRIC)

        adherent = person.random() <= cfg.adherence
        loss_fraction = None
        percentile_change = None
        long_term_success = False
        if adherent:
            if path == EpisodePath.ADULT:
                min_loss, max_loss = cfg.min_loss, cfg.max_loss
                if person.target_weight_loss is not None:
                    min_loss = max_loss = float(person.target_weight_loss)
                loss_fraction = person.random(min_loss, max_loss)
            else:
                percentile_change = person.random() * cfg.max_ped_percentile_change
            long_term_success = person.random() <= cfg.maintenance_prob

        episode = WeightManagementEpisode(
            start_time=time,
            pre_management_weight=start_weight,
            path=path,
            adherence=adherent,
            long_term_success=long_term_success,
            loss_fraction=loss_fraction,
            bmi_percentile_change=percentile_change,
        )
        person.episode = episode
        logger.debug(
            "person %s started %s weight management at t=%.1f "
            "(adherent=%s, long_term_success=%s)",
            person.person_id, path.name, time, adherent, long_term_success,
        )
        return episode

    def stop_episode(self, person: Person) -> None:
        """Drop every episode attribute at once. Safe to repeat."""
        if person.episode is not None:
            logger.debug(
                "person %s stopped weight management (started t=%.1f)",
                person.person_id, person.episode.start_time,
            )
        person.episode = None

    # ═══════════════════════════════════════════════════════════════════
    # REGIME HANDLERS
    # ═══════════════════════════════════════════════════════════════════

    def manage_first_year(self, person: Person, time: float) -> None:
        """Loss year, adherent and non-adherent alike."""
        episode = self._episode(person)
        if episode.is_pediatric:
            # Weight stays with the lifecycle; only the trajectory is shaped.
            if episode.adherence:
                self.adjust_trajectory_for_success(person, time)
            return

        if episode.adherence:
            weight = self.adult_weight_loss(person, time)
        else:
            weight = person.get_vital_sign(VitalSign.WEIGHT, time)
        height = person.get_vital_sign(VitalSign.HEIGHT, time)
        bmi = calculate_bmi(height, weight)
        person.set_vital_sign(VitalSign.WEIGHT, weight)
        person.set_vital_sign(VitalSign.BMI, bmi)

    def manage_years_two_to_five(self, person: Person, time: float) -> None:
        """Maintenance or regression, for adherent episodes only."""
        episode = self._episode(person)
        if not episode.adherence:
            return

        age = person.age_in_years(time)
        if episode.long_term_success:
            if age < ADULT_AGE:
                self.maintain_bmi_percentile(person, time)
            return

        if age < ADULT_AGE:
            self.pediatric_regression(person, time)
            return

        if episode.is_pediatric:
            height_percentile = person.get_vital_sign(VitalSign.HEIGHT_PERCENTILE, time)
            height = self.height_chart.lookup(
                TWENTY_YEARS_IN_MONTHS, person.gender, height_percentile
            )
            weight = self.transition_regression(person, time)
        else:
            height = person.get_vital_sign(VitalSign.HEIGHT, time)
            weight = self.adult_regression(person, time)
        bmi = calculate_bmi(height, weight)
        person.set_vital_sign(VitalSign.HEIGHT, height)
        person.set_vital_sign(VitalSign.WEIGHT, weight)
        person.set_vital_sign(VitalSign.BMI, bmi)

    def manage_long_term(self, person: Person, time: float) -> None:
        """Successful episodes after year five: minors keep their percentile."""
        if person.age_in_years(time) < ADULT_AGE:
            self.maintain_bmi_percentile(person, time)

    def complete_adult_regression(self, person: Person, time: float) -> None:
        """Land an adult regression on its endpoint before the episode closes.

        The regression window ends exactly at year five, where weight is back
        to the pre-management value; ticks rarely fall on that instant.
        """
        episode = self._episode(person)
        if not episode.adherence or episode.is_pediatric:
            return
        weight = episode.pre_management_weight
        height = person.get_vital_sign(VitalSign.HEIGHT, time)
        bmi = calculate_bmi(height, weight)
        person.set_vital_sign(VitalSign.WEIGHT, weight)
        person.set_vital_sign(VitalSign.BMI, bmi)

    # ═══════════════════════════════════════════════════════════════════
    # ADULT WEIGHT MODELS
    # ═══════════════════════════════════════════════════════════════════

    def adult_weight_loss(self, person: Person, time: float) -> float:
        """Linear loss from the start weight to the target over year one."""
        episode = self._episode(person)
        year_fraction = elapsed_days(episode.start_time, time) / ONE_YEAR
        start_weight = episode.pre_management_weight
        loss = episode.require_loss_fraction()
        return start_weight - (start_weight * loss * year_fraction)

    def adult_regression(self, person: Person, time: float) -> float:
        """Linear regain from the year-one minimum back to the start weight.

        The window runs from one to five years after the start.
        """
        episode = self._episode(person)
        window_fraction = (
            (elapsed_days(episode.start_time, time) - ONE_YEAR)
            / years_to_days(REGRESSION_YEARS)
        )
        start_weight = episode.pre_management_weight
        loss = episode.require_loss_fraction()
        min_weight = start_weight - (start_weight * loss)
        return start_weight - ((start_weight - min_weight) * (1.0 - window_fraction))

    # ═══════════════════════════════════════════════════════════════════
    # PEDIATRIC TRAJECTORY MODELS
    # ═══════════════════════════════════════════════════════════════════

    def start_percentile(self, person: Person) -> float:
        """BMI-for-age percentile at the episode start, from the trajectory."""
        episode = self._episode(person)
        trajectory = self._trajectory(person)
        bmi_at_start = trajectory.bmi_at(episode.start_time)
        return self.bmi_chart.percentile_for(
            person.age_in_months(episode.start_time), person.gender, bmi_at_start
        )

    def adjust_trajectory_for_success(self, person: Person, time: float) -> None:
        """Pull the trajectory down by the episode's percentile change.

        Appends one point 12 months after the current tail (fewer if that
        would pass 240 months, with the change scaled to match), so the
        natural growth already in the trajectory carries the weight effect.
        Once the tail is at or below the start percentile nothing more is
        appended.
        """
        episode = self._episode(person)
        trajectory = self._trajectory(person)
        percentile_change = episode.require_percentile_change()
        start_percentile = self.start_percentile(person)

        tail = trajectory.tail()
        tail_percentile = self.bmi_chart.percentile_for(
            tail.age_in_months, person.gender, tail.bmi
        )
        if tail_percentile <= start_percentile:
            return

        target_percentile = tail_percentile - percentile_change
        months_ahead = TRAJECTORY_STEP_MONTHS
        if tail.age_in_months + months_ahead > TWENTY_YEARS_IN_MONTHS:
            months_ahead = TWENTY_YEARS_IN_MONTHS - tail.age_in_months
            target_percentile = (
                tail_percentile
                - percentile_change * months_ahead / TRAJECTORY_STEP_MONTHS
            )
        if months_ahead <= 0:
            return

        next_age = tail.age_in_months + months_ahead
        target_bmi = self.bmi_chart.lookup(next_age, person.gender, target_percentile)
        trajectory.add_point(next_age, tail.time + months_to_days(months_ahead), target_bmi)

    def maintain_bmi_percentile(self, person: Person, time: float) -> None:
        """Extend the trajectory at the tail's percentile, up to 240 months.

        Weight still rises with age and height, but the percentile holds.
        Only runs when the tail has not already moved past the current age.
        """
        trajectory = self._trajectory(person)
        age_in_months = person.age_in_months(time)
        tail = trajectory.tail()
        if age_in_months >= TWENTY_YEARS_IN_MONTHS or tail.age_in_months > age_in_months:
            return

        months_ahead = min(TRAJECTORY_STEP_MONTHS,
                           TWENTY_YEARS_IN_MONTHS - tail.age_in_months)
        if months_ahead <= 0:
            return
        percentile = self.bmi_chart.percentile_for(
            tail.age_in_months, person.gender, tail.bmi
        )
        next_age = tail.age_in_months + months_ahead
        next_bmi = self.bmi_chart.lookup(next_age, person.gender, percentile)
        trajectory.add_point(next_age, tail.time + months_to_days(months_ahead), next_bmi)

    def pediatric_regression(self, person: Person, time: float) -> None:
        """Let the percentile climb back toward where it was before the episode.

        One point per year: a point is appended only when the tail is less
        than a year ahead of `time`. The percentile recovers linearly over a
        five-year window counted from the two-year mark.
        """
        episode = self._episode(person)
        trajectory = self._trajectory(person)
        tail = trajectory.tail()
        if time + ONE_YEAR <= tail.time:
            return
        if tail.age_in_months >= TWENTY_YEARS_IN_MONTHS:
            return

        percentile_change = episode.require_percentile_change()
        original_percentile = self.start_percentile(person)
        start_age_in_months = person.age_in_months(episode.start_time)

        next_age = min(tail.age_in_months + TRAJECTORY_STEP_MONTHS,
                       TWENTY_YEARS_IN_MONTHS)
        next_time = tail.time + ONE_YEAR
        # whole years, truncated
        years_of_regression = int(
            (next_age - start_age_in_months - TWO_YEARS_IN_MONTHS) / 12
        )
        next_percentile = original_percentile - percentile_change * (
            1.0 - years_of_regression / PEDIATRIC_REGRESSION_YEARS
        )
        trajectory.add_point_from_percentile(
            next_age, next_time, next_percentile, person.gender
        )

    def transition_regression(self, person: Person, time: float) -> float:
        """Weight for a pediatric starter regressing after turning 20.

        Interpolates from the weight implied by the trajectory tail at age 20
        toward the weight implied by the pre-episode percentile at age 20,
        over ages 20 to (start age + 7), on decimal age.
        """
        episode = self._episode(person)
        trajectory = self._trajectory(person)
        original_percentile = self.start_percentile(person)
        start_age_in_months = person.age_in_months(episode.start_time)

        bmi_for_percentile_at_twenty = self.bmi_chart.lookup(
            TWENTY_YEARS_IN_MONTHS, person.gender, original_percentile
        )
        height = self.height_chart.lookup(
            TWENTY_YEARS_IN_MONTHS, person.gender,
            person.get_vital_sign(VitalSign.HEIGHT_PERCENTILE, time),
        )
        target_weight = weight_for_height_and_bmi(height, bmi_for_percentile_at_twenty)
        weight_at_twenty = weight_for_height_and_bmi(height, trajectory.tail().bmi)

        regression_end_age = start_age_in_months // 12 + LOSS_AND_REGRESSION_YEARS
        span = regression_end_age - ADULT_AGE
        if span <= 0:
            raise EpisodeStateError(
                f"transition regression needs a start age above "
                f"{ADULT_AGE - LOSS_AND_REGRESSION_YEARS}, episode started at "
                f"{start_age_in_months} months"
            )
        fraction = (person.age_in_decimal_years(time) - ADULT_AGE) / span
        return weight_at_twenty + (fraction * (target_weight - weight_at_twenty))

    # ═══════════════════════════════════════════════════════════════════
    # HELPERS
    # ═══════════════════════════════════════════════════════════════════

    @staticmethod
    def _episode(person: Person) -> WeightManagementEpisode:
        if person.episode is None:
            raise EpisodeStateError(
                f"person {person.person_id} has no active weight-management episode"
            )
        return person.episode

    @staticmethod
    def _trajectory(person: Person) -> GrowthTrajectory:
        if person.growth_trajectory is None:
            raise EpisodeStateError(
                f"person {person.person_id} has a pediatric episode "
                f"but no growth trajectory"
            )
        return person.growth_trajectory
