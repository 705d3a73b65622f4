"""Tests for weight_mgmt.weight_loss — onset, episode lifecycle and regimes.

Random draws are scripted where a test depends on specific outcomes; the
seeded-stream tests use real numpy Generators.
"""

import math

import numpy as np
import pytest

from weight_mgmt.config import WeightLossSection
from weight_mgmt.episode import (
    ACTIVE_WEIGHT_MANAGEMENT,
    EPISODE_ATTRIBUTES,
    WEIGHT_LOSS_BMI_PERCENTILE_CHANGE,
    WEIGHT_LOSS_PERCENTAGE,
    EpisodeStateError,
    WeightManagementEpisode,
)
from weight_mgmt.growth_chart import load_charts
from weight_mgmt.person import Person
from weight_mgmt.trajectory import GrowthTrajectory
from weight_mgmt.types import (
    FEMALE,
    MALE,
    ChartType,
    EpisodePath,
    TrajectoryPoint,
    VitalSign,
)
from weight_mgmt.utils import calculate_bmi, weight_for_height_and_bmi, years_to_days
from weight_mgmt.weight_loss import WeightManagementModule


CHARTS = load_charts()
BMI_CHART = CHARTS[ChartType.BMI]
HEIGHT_CHART = CHARTS[ChartType.HEIGHT]
YEAR = 365.0


# ═══════════════════════════════════════════════════════════════════════
# HELPERS
# ═══════════════════════════════════════════════════════════════════════

class ScriptedRng:
    """Stand-in Generator returning pre-set uniform draws in order."""

    def __init__(self, draws):
        self.draws = list(draws)

    def random(self):
        return self.draws.pop(0)

    def uniform(self, low, high):
        return low + (high - low) * self.draws.pop(0)


def _module(**overrides):
    return WeightManagementModule(WeightLossSection(**overrides), CHARTS)


def _adult(age=25.0, weight=100.0, bmi=31.0, draws=(), **kwargs):
    """Adult at t=0 whose height makes `weight` and `bmi` consistent."""
    person = Person(0, -years_to_days(age), MALE, ScriptedRng(draws), **kwargs)
    height = 100.0 * math.sqrt(weight / bmi)
    person.set_vital_sign(VitalSign.HEIGHT_PERCENTILE, 0.5)
    person.set_vital_sign(VitalSign.HEIGHT, height)
    person.set_vital_sign(VitalSign.WEIGHT, weight)
    person.set_vital_sign(VitalSign.BMI, bmi)
    return person


def _child(age, percentiles, draws=(), gender=MALE, height_percentile=0.5):
    """Minor of whole-year `age` at t=0, with one trajectory point per year.

    percentiles[k] places the point at (age*12 + 12k months, t = 365k).
    """
    person = Person(0, -years_to_days(age), gender, ScriptedRng(draws))
    start_months = age * 12
    trajectory = GrowthTrajectory(BMI_CHART)
    for k, pct in enumerate(percentiles):
        trajectory.add_point_from_percentile(start_months + 12 * k, k * YEAR, pct, gender)
    person.growth_trajectory = trajectory

    bmi = trajectory.points[0].bmi
    height = HEIGHT_CHART.lookup(start_months, gender, height_percentile)
    person.set_vital_sign(VitalSign.HEIGHT_PERCENTILE, height_percentile)
    person.set_vital_sign(VitalSign.HEIGHT, height)
    person.set_vital_sign(VitalSign.BMI, bmi)
    person.set_vital_sign(VitalSign.WEIGHT, weight_for_height_and_bmi(height, bmi))
    return person


def _pediatric_episode(start_time=0.0, adherence=True, success=False,
                       change=0.05, pre_weight=40.0):
    return WeightManagementEpisode(
        start_time=start_time,
        pre_management_weight=pre_weight,
        path=EpisodePath.PEDIATRIC,
        adherence=adherence,
        long_term_success=success,
        bmi_percentile_change=change if adherence else None,
    )


def _adult_episode(start_time=0.0, adherence=True, success=False,
                   loss=0.08, pre_weight=100.0):
    return WeightManagementEpisode(
        start_time=start_time,
        pre_management_weight=pre_weight,
        path=EpisodePath.ADULT,
        adherence=adherence,
        long_term_success=success,
        loss_fraction=loss if adherence else None,
    )


# ═══════════════════════════════════════════════════════════════════════
# ONSET
# ═══════════════════════════════════════════════════════════════════════

class TestMeetsThresholds:
    def test_adult_at_threshold(self):
        assert _module().meets_thresholds(_adult(bmi=30.0), 0.0)

    def test_adult_below_threshold(self):
        assert not _module().meets_thresholds(_adult(bmi=29.9), 0.0)

    def test_nineteen_never_qualifies(self):
        person = _adult(age=19.5, bmi=45.0)
        assert not _module().meets_thresholds(person, 0.0)

    def test_below_min_age_never_qualifies(self):
        person = _child(4, [0.999])
        assert not _module().meets_thresholds(person, 0.0)

    def test_child_above_95th_percentile(self):
        person = _child(8, [0.96])
        assert _module().meets_thresholds(person, 0.0)

    def test_child_below_95th_percentile(self):
        person = _child(8, [0.94])
        assert not _module().meets_thresholds(person, 0.0)

    def test_child_uses_own_gender_chart(self):
        girl = _child(12, [0.96], gender=FEMALE)
        assert _module().meets_thresholds(girl, 0.0)
        bmi_95 = BMI_CHART.lookup(144, FEMALE, 0.95)
        girl.set_vital_sign(VitalSign.BMI, bmi_95 * 0.999)
        assert not _module().meets_thresholds(girl, 0.0)

    def test_lower_min_age_reaches_chart_start(self):
        person = _child(3, [0.97])
        assert not _module().meets_thresholds(person, 0.0)
        assert _module(min_age=2).meets_thresholds(person, 0.0)

    def test_under_two_never_qualifies(self):
        person = Person(0, -years_to_days(1.5), MALE, ScriptedRng([]))
        person.set_vital_sign(VitalSign.BMI, 30.0)
        assert not _module(min_age=0).meets_thresholds(person, 0.0)


class TestShouldStart:
    def test_draw_at_probability_starts(self):
        person = _adult(draws=[0.493])
        assert _module().should_start(person, 0.0)

    def test_draw_above_probability_does_not_start(self):
        person = _adult(draws=[0.4931])
        assert not _module().should_start(person, 0.0)

    def test_no_draw_when_thresholds_unmet(self):
        person = _adult(bmi=25.0, draws=[])
        assert not _module().should_start(person, 0.0)

    def test_no_memory_between_ticks(self):
        person = _adult(draws=[0.9, 0.9, 0.1])
        module = _module()
        assert not module.should_start(person, 0.0)
        assert not module.should_start(person, 30.0)
        assert module.should_start(person, 60.0)


# ═══════════════════════════════════════════════════════════════════════
# EPISODE INITIALIZATION
# ═══════════════════════════════════════════════════════════════════════

class TestStartEpisode:
    def test_adherent_adult(self):
        person = _adult(draws=[0.5, 0.5, 0.1])
        episode = _module().start_episode(person, 0.0)
        assert person.episode is episode
        assert episode.path == EpisodePath.ADULT
        assert episode.adherence
        assert episode.loss_fraction == pytest.approx(0.085)
        assert episode.bmi_percentile_change is None
        assert episode.long_term_success
        assert episode.pre_management_weight == 100.0
        assert episode.start_time == 0.0

    def test_adherent_child(self):
        person = _child(8, [0.96], draws=[0.5, 0.5, 0.3])
        episode = _module().start_episode(person, 0.0)
        assert episode.path == EpisodePath.PEDIATRIC
        assert episode.bmi_percentile_change == pytest.approx(0.05)
        assert episode.loss_fraction is None
        assert not episode.long_term_success

    def test_non_adherent_draws_once(self):
        rng = ScriptedRng([0.7, 0.0, 0.0])
        person = _adult()
        person.rng = rng
        episode = _module().start_episode(person, 0.0)
        assert not episode.adherence
        assert not episode.long_term_success
        assert episode.loss_fraction is None
        assert episode.bmi_percentile_change is None
        assert len(rng.draws) == 2

    def test_target_weight_loss_override(self):
        person = _adult(draws=[0.1, 0.99, 0.9], target_weight_loss=0.08)
        episode = _module().start_episode(person, 0.0)
        assert episode.loss_fraction == pytest.approx(0.08)

    def test_attributes_carry_only_populated_target(self):
        adult = _adult(draws=[0.5, 0.5, 0.5])
        _module().start_episode(adult, 0.0)
        attrs = adult.attributes()
        assert attrs[ACTIVE_WEIGHT_MANAGEMENT] is True
        assert WEIGHT_LOSS_PERCENTAGE in attrs
        assert WEIGHT_LOSS_BMI_PERCENTILE_CHANGE not in attrs

    def test_seeded_streams_reproduce(self):
        episodes = []
        for _ in range(2):
            person = _adult()
            person.rng = np.random.default_rng(7)
            episodes.append(_module().start_episode(person, 0.0))
        assert episodes[0] == episodes[1]

    def test_draw_frequencies(self):
        rng = np.random.default_rng(12345)
        module = _module()
        n = 4000
        adherent = 0
        success = 0
        losses = []
        for _ in range(n):
            person = _adult()
            person.rng = rng
            episode = module.start_episode(person, 0.0)
            if episode.adherence:
                adherent += 1
                success += int(episode.long_term_success)
                losses.append(episode.loss_fraction)
        assert adherent / n == pytest.approx(0.605, abs=0.04)
        assert success / adherent == pytest.approx(0.2, abs=0.04)
        assert min(losses) >= 0.07
        assert max(losses) < 0.10


# ═══════════════════════════════════════════════════════════════════════
# ADULT PATH
# ═══════════════════════════════════════════════════════════════════════

class TestAdultWeightModels:
    def test_loss_endpoints(self):
        person = _adult()
        person.episode = _adult_episode(loss=0.08)
        module = _module()
        assert module.adult_weight_loss(person, 0.0) == pytest.approx(100.0)
        assert module.adult_weight_loss(person, YEAR) == pytest.approx(92.0)

    def test_regression_endpoints(self):
        person = _adult()
        person.episode = _adult_episode(loss=0.08)
        module = _module()
        assert module.adult_regression(person, YEAR) == pytest.approx(92.0)
        assert module.adult_regression(person, 5 * YEAR) == pytest.approx(100.0)

    def test_loss_is_linear(self):
        person = _adult()
        person.episode = _adult_episode(loss=0.10, pre_weight=120.0)
        module = _module()
        assert module.adult_weight_loss(person, 0.25 * YEAR) == pytest.approx(117.0)


class TestAdultEndToEnd:
    def test_adherent_loss_then_regression(self):
        # onset, adherent, fixed 8% target, no long-term success
        person = _adult(draws=[0.0, 0.1, 0.5, 0.9], target_weight_loss=0.08)
        module = _module()

        module.step(person, 0.0)
        assert person.episode_active
        assert person.get_vital_sign(VitalSign.WEIGHT, 0.0) == pytest.approx(100.0)

        module.step(person, 0.5 * YEAR)
        assert person.get_vital_sign(VitalSign.WEIGHT, 0.5 * YEAR) == pytest.approx(96.0)

        module.step(person, YEAR)
        assert person.get_vital_sign(VitalSign.WEIGHT, YEAR) == pytest.approx(92.0)

        module.step(person, 3 * YEAR)
        assert person.get_vital_sign(VitalSign.WEIGHT, 3 * YEAR) == pytest.approx(96.0)

        module.step(person, 5 * YEAR)
        assert person.get_vital_sign(VitalSign.WEIGHT, 5 * YEAR) == pytest.approx(100.0)
        assert not person.episode_active

    def test_bmi_follows_weight(self):
        person = _adult(draws=[0.0, 0.1, 0.5, 0.9], target_weight_loss=0.08)
        module = _module()
        module.step(person, 0.0)
        module.step(person, YEAR)
        height = person.get_vital_sign(VitalSign.HEIGHT, YEAR)
        assert person.get_vital_sign(VitalSign.BMI, YEAR) == pytest.approx(
            calculate_bmi(height, 92.0)
        )

    def test_non_adherent_weight_held(self):
        person = _adult(draws=[0.0, 0.9])
        module = _module()
        for t in (0.0, 0.5 * YEAR, 2 * YEAR, 4.9 * YEAR):
            module.step(person, t)
            assert person.get_vital_sign(VitalSign.WEIGHT, t) == 100.0
        module.step(person, 5 * YEAR)
        assert not person.episode_active
        assert person.get_vital_sign(VitalSign.WEIGHT, 5 * YEAR) == 100.0

    def test_long_term_success_holds_weight(self):
        person = _adult(draws=[0.0, 0.1, 0.5, 0.1], target_weight_loss=0.08)
        module = _module()
        module.step(person, 0.0)
        module.step(person, YEAR - 1.0)
        held = person.get_vital_sign(VitalSign.WEIGHT, YEAR - 1.0)
        assert held == pytest.approx(100.0 - 8.0 * (YEAR - 1.0) / YEAR)

        for t in (YEAR, 3 * YEAR, 5 * YEAR, 10 * YEAR):
            module.step(person, t)
            assert person.get_vital_sign(VitalSign.WEIGHT, t) == held
        assert person.episode_active
        assert person.episode.long_term_success

    def test_restart_after_termination(self):
        person = _adult(draws=[0.0, 0.9, 0.2, 0.9])
        module = _module()
        module.step(person, 0.0)
        module.step(person, 5 * YEAR)
        assert not person.episode_active

        module.step(person, 5 * YEAR + 30.0)
        assert person.episode_active
        assert person.episode.start_time == 5 * YEAR + 30.0


# ═══════════════════════════════════════════════════════════════════════
# TERMINATION
# ═══════════════════════════════════════════════════════════════════════

class TestTermination:
    def test_clears_every_attribute(self):
        person = _adult(draws=[0.0, 0.1, 0.5, 0.9])
        module = _module()
        module.step(person, 0.0)
        module.step(person, 5 * YEAR)
        attrs = person.attributes()
        assert attrs == {ACTIVE_WEIGHT_MANAGEMENT: False}
        assert not any(key in attrs for key in EPISODE_ATTRIBUTES)

    def test_stop_is_idempotent(self):
        person = _adult()
        person.episode = _adult_episode()
        module = _module()
        module.stop_episode(person)
        module.stop_episode(person)
        assert person.episode is None

    def test_dead_person_finishes(self):
        person = _adult(draws=[], death_time=100.0)
        module = _module()
        assert not module.step(_adult(bmi=25.0), 50.0)
        assert module.step(person, 100.0)
        assert not person.episode_active


# ═══════════════════════════════════════════════════════════════════════
# PEDIATRIC PATH
# ═══════════════════════════════════════════════════════════════════════

class TestAdjustTrajectoryForSuccess:
    def test_appends_then_stops(self):
        # onset, adherent, change 0.05, no long-term success
        person = _child(8, [0.96, 0.97], draws=[0.0, 0.1, 0.5, 0.9])
        module = _module()
        weight = person.get_vital_sign(VitalSign.WEIGHT, 0.0)

        module.step(person, 0.0)
        assert person.episode.bmi_percentile_change == pytest.approx(0.05)
        module.step(person, 30.0)

        trajectory = person.growth_trajectory
        assert len(trajectory) == 3
        tail = trajectory.tail()
        tail_pct = BMI_CHART.percentile_for(108, MALE, trajectory.points[1].bmi)
        assert tail.age_in_months == 120
        assert tail.time == pytest.approx(2 * YEAR)
        assert tail.bmi == pytest.approx(BMI_CHART.lookup(120, MALE, tail_pct - 0.05))

        module.step(person, 60.0)
        module.step(person, 90.0)
        assert len(trajectory) == 3
        assert person.get_vital_sign(VitalSign.WEIGHT, 90.0) == weight

    def test_clipped_at_twenty(self):
        person = _child(18, [0.96])
        person.growth_trajectory.add_point_from_percentile(234, 547.5, 0.98, MALE)
        person.episode = _pediatric_episode(change=0.06)
        module = _module()

        module.adjust_trajectory_for_success(person, 30.0)
        tail = person.growth_trajectory.tail()
        pct_234 = BMI_CHART.percentile_for(234, MALE, person.growth_trajectory.points[1].bmi)
        assert tail.age_in_months == 240
        assert tail.time == pytest.approx(547.5 + 182.5)
        assert tail.bmi == pytest.approx(BMI_CHART.lookup(240, MALE, pct_234 - 0.03))

    def test_tail_at_twenty_is_left_alone(self):
        person = _child(18, [0.96])
        person.growth_trajectory.add_point_from_percentile(240, 730.0, 0.98, MALE)
        person.episode = _pediatric_episode(change=0.05)
        _module().adjust_trajectory_for_success(person, 30.0)
        assert len(person.growth_trajectory) == 2

    def test_non_adherent_child_untouched(self):
        person = _child(8, [0.96], draws=[0.0, 0.9])
        module = _module()
        weight = person.get_vital_sign(VitalSign.WEIGHT, 0.0)
        times = list(np.arange(0.0, 5 * YEAR, 30.0)) + [5 * YEAR]
        for t in times:
            module.step(person, float(t))
            if t < 5 * YEAR:
                assert person.episode_active
        assert not person.episode_active
        assert len(person.growth_trajectory) == 1
        assert person.get_vital_sign(VitalSign.WEIGHT, 5 * YEAR) == weight


class TestMaintainBmiPercentile:
    def test_extends_at_tail_percentile(self):
        person = _child(10, [0.90])
        person.episode = _pediatric_episode(start_time=-YEAR, success=True)
        module = _module()

        module.step(person, 0.0)
        trajectory = person.growth_trajectory
        assert len(trajectory) == 2
        pct = BMI_CHART.percentile_for(120, MALE, trajectory.points[0].bmi)
        assert trajectory.tail().age_in_months == 132
        assert trajectory.tail().time == pytest.approx(YEAR)
        assert trajectory.tail().bmi == pytest.approx(BMI_CHART.lookup(132, MALE, pct))

        # tail is now ahead of the current age
        module.step(person, 30.0)
        assert len(trajectory) == 2

    def test_long_term_maintained_minor(self):
        person = _child(12, [0.92])
        person.episode = _pediatric_episode(start_time=-6 * YEAR, success=True)
        _module().step(person, 0.0)
        assert len(person.growth_trajectory) == 2
        assert person.episode_active

    def test_clipped_at_twenty(self):
        person = _child(18, [0.90])
        person.growth_trajectory.add_point_from_percentile(234, 547.5, 0.90, MALE)
        person.birth_time = -(234 / 12.0) * YEAR
        _module().maintain_bmi_percentile(person, 0.0)
        tail = person.growth_trajectory.tail()
        assert tail.age_in_months == 240
        assert tail.time == pytest.approx(547.5 + 182.5)

    def test_adult_no_op(self):
        person = _child(19, [0.90, 0.91])
        person.episode = _pediatric_episode(start_time=-6 * YEAR, success=True)
        _module().step(person, 1.5 * YEAR)
        assert len(person.growth_trajectory) == 2
        assert person.episode_active


class TestPediatricRegression:
    def test_appends_one_point_per_year(self):
        person = _child(10, [0.97, 0.92, 0.93])
        person.episode = _pediatric_episode(change=0.05)
        module = _module()

        module.step(person, 2 * YEAR)
        trajectory = person.growth_trajectory
        assert len(trajectory) == 4
        original = BMI_CHART.percentile_for(120, MALE, trajectory.points[0].bmi)
        tail = trajectory.tail()
        assert tail.age_in_months == 156
        assert tail.time == pytest.approx(3 * YEAR)
        # one whole year of regression out of five
        assert tail.bmi == pytest.approx(
            BMI_CHART.lookup(156, MALE, original - 0.05 * (1 - 1 / 5))
        )

        # repeated tick at the same instant: tail is a full year ahead
        module.step(person, 2 * YEAR)
        assert len(trajectory) == 4

        # tail less than a year ahead: next yearly point, two years regressed
        module.step(person, 2 * YEAR + 30.0)
        assert len(trajectory) == 5
        tail = trajectory.tail()
        assert tail.age_in_months == 168
        assert tail.time == pytest.approx(4 * YEAR)
        assert tail.bmi == pytest.approx(
            BMI_CHART.lookup(168, MALE, original - 0.05 * (1 - 2 / 5))
        )

        module.step(person, 2 * YEAR + 60.0)
        assert len(trajectory) == 5

    def test_successful_episode_does_not_regress(self):
        person = _child(10, [0.97, 0.92, 0.93])
        person.episode = _pediatric_episode(change=0.05, success=True)
        _module().step(person, 2 * YEAR)
        # maintenance only: tail (144 mo) is not behind the current age (144 mo)
        tail = person.growth_trajectory.tail()
        assert tail.age_in_months == 156
        pct = BMI_CHART.percentile_for(144, MALE, person.growth_trajectory.points[2].bmi)
        assert tail.bmi == pytest.approx(BMI_CHART.lookup(156, MALE, pct))


class TestTransitionRegression:
    def test_weight_between_trajectory_and_original(self):
        person = _child(17, [0.97, 0.93, 0.94, 0.95])
        person.episode = _pediatric_episode(change=0.04)
        module = _module()
        t = 3.5 * YEAR   # age 20.5

        module.step(person, t)

        points = person.growth_trajectory.points
        original = BMI_CHART.percentile_for(204, MALE, points[0].bmi)
        height = HEIGHT_CHART.lookup(240, MALE, 0.5)
        target = weight_for_height_and_bmi(height, BMI_CHART.lookup(240, MALE, original))
        at_twenty = weight_for_height_and_bmi(height, points[-1].bmi)
        # regression runs from 20 to 17 + 7 = 24
        expected = at_twenty + 0.125 * (target - at_twenty)

        assert person.get_vital_sign(VitalSign.HEIGHT, t) == pytest.approx(179.1)
        assert person.get_vital_sign(VitalSign.WEIGHT, t) == pytest.approx(expected)
        assert person.get_vital_sign(VitalSign.BMI, t) == pytest.approx(
            calculate_bmi(height, expected)
        )
        assert len(person.growth_trajectory) == 4

    def test_start_age_too_young_raises(self):
        person = _child(13, [0.97])
        person.episode = _pediatric_episode(change=0.04)
        with pytest.raises(EpisodeStateError):
            _module().transition_regression(person, 7 * YEAR)


# ═══════════════════════════════════════════════════════════════════════
# ERROR PROPAGATION
# ═══════════════════════════════════════════════════════════════════════

class TestErrorsLeaveStateUntouched:
    def test_missing_height_percentile(self):
        person = _child(17, [0.97, 0.93, 0.94, 0.95])
        person.episode = _pediatric_episode(change=0.04)
        del person._vitals[VitalSign.HEIGHT_PERCENTILE]
        weight = person.get_vital_sign(VitalSign.WEIGHT, 0.0)
        height = person.get_vital_sign(VitalSign.HEIGHT, 0.0)
        episode = person.episode

        with pytest.raises(KeyError):
            _module().step(person, 3.5 * YEAR)
        assert person.get_vital_sign(VitalSign.WEIGHT, 0.0) == weight
        assert person.get_vital_sign(VitalSign.HEIGHT, 0.0) == height
        assert person.episode is episode

    def test_chart_lookup_failure(self):
        person = _child(10, [0.97, 0.92, 0.93])
        # start precedes the first trajectory point
        person.episode = _pediatric_episode(start_time=-10.0, change=0.05)
        episode = person.episode
        with pytest.raises(ValueError):
            _module().step(person, 2 * YEAR)
        assert len(person.growth_trajectory) == 3
        assert person.episode is episode

    def test_pediatric_episode_without_trajectory(self):
        person = _child(8, [0.96])
        person.growth_trajectory = None
        person.episode = _pediatric_episode()
        with pytest.raises(EpisodeStateError):
            _module().step(person, 30.0)
        assert person.episode_active

    def test_adherent_adult_without_loss_fraction(self):
        person = _adult()
        person.episode = WeightManagementEpisode(
            start_time=0.0, pre_management_weight=100.0, path=EpisodePath.ADULT,
            adherence=True, long_term_success=False,
        )
        with pytest.raises(EpisodeStateError):
            _module().step(person, 30.0)
        assert person.get_vital_sign(VitalSign.WEIGHT, 30.0) == 100.0

    def test_unset_vital_sign(self):
        person = Person(0, -years_to_days(30), MALE, ScriptedRng([]))
        with pytest.raises(KeyError):
            _module().step(person, 0.0)


class TestEpisodeInvariants:
    def test_both_targets_rejected(self):
        with pytest.raises(EpisodeStateError):
            WeightManagementEpisode(
                start_time=0.0, pre_management_weight=80.0, path=EpisodePath.ADULT,
                adherence=True, long_term_success=False,
                loss_fraction=0.08, bmi_percentile_change=0.05,
            )

    def test_success_requires_adherence(self):
        with pytest.raises(EpisodeStateError):
            WeightManagementEpisode(
                start_time=0.0, pre_management_weight=80.0, path=EpisodePath.ADULT,
                adherence=False, long_term_success=True,
            )

    def test_trajectory_points_view(self):
        trajectory = GrowthTrajectory(BMI_CHART, [TrajectoryPoint(100, 0.0, 18.0)])
        assert trajectory.points == (TrajectoryPoint(100, 0.0, 18.0),)
