"""Pediatric growth trajectory — an append-only BMI series indexed by age.

The trajectory is the individual's clinical growth record: points are only
ever appended, each strictly later in both age and simulation time than the
current tail. Other modules may append between ticks but never within one.
"""

from __future__ import annotations

from typing import List, Optional, Sequence, Tuple

from weight_mgmt.growth_chart import GrowthChart
from weight_mgmt.types import TrajectoryPoint


class GrowthTrajectory:
    """Ordered BMI observations `(age_in_months, time, bmi)`.

    Args:
        bmi_chart: BMI-for-age chart used by add_point_from_percentile().
        points: Optional initial points (validated in order).
    """

    def __init__(
        self,
        bmi_chart: GrowthChart,
        points: Optional[Sequence[TrajectoryPoint]] = None,
    ):
        self.bmi_chart = bmi_chart
        self._points: List[TrajectoryPoint] = []
        for p in points or ():
            self.add_point(p.age_in_months, p.time, p.bmi)

    def __len__(self) -> int:
        return len(self._points)

    @property
    def points(self) -> Tuple[TrajectoryPoint, ...]:
        """Read-only view of the record."""
        return tuple(self._points)

    def tail(self) -> TrajectoryPoint:
        """Most recent point.

        Raises:
            IndexError: If the trajectory is empty.
        """
        if not self._points:
            raise IndexError("growth trajectory is empty")
        return self._points[-1]

    def add_point(self, age_in_months: int, time: float, bmi: float) -> TrajectoryPoint:
        """Append a point after the tail.

        Raises:
            ValueError: If age or time does not strictly increase, or bmi ≤ 0.
        """
        if bmi <= 0:
            raise ValueError(f"bmi must be positive, got {bmi}")
        if self._points:
            tail = self._points[-1]
            if age_in_months <= tail.age_in_months or time <= tail.time:
                raise ValueError(
                    f"trajectory points must strictly increase: tail is "
                    f"({tail.age_in_months} mo, t={tail.time}), "
                    f"got ({age_in_months} mo, t={time})"
                )
        point = TrajectoryPoint(int(age_in_months), float(time), float(bmi))
        self._points.append(point)
        return point

    def add_point_from_percentile(
        self,
        age_in_months: int,
        time: float,
        percentile: float,
        gender: str,
    ) -> TrajectoryPoint:
        """Append the BMI at `percentile` for the given age and gender."""
        bmi = self.bmi_chart.lookup(age_in_months, gender, percentile)
        return self.add_point(age_in_months, time, bmi)

    def bmi_at(self, time: float) -> float:
        """BMI at `time`, linearly interpolated between neighbouring points.

        After the tail the tail BMI is returned.

        Raises:
            ValueError: If the trajectory is empty or starts after `time`.
        """
        if not self._points:
            raise ValueError("growth trajectory is empty")
        first = self._points[0]
        if time < first.time:
            raise ValueError(
                f"time {time} precedes the first trajectory point (t={first.time})"
            )
        for prev, nxt in zip(self._points, self._points[1:]):
            if prev.time <= time <= nxt.time:
                frac = (time - prev.time) / (nxt.time - prev.time)
                return prev.bmi + frac * (nxt.bmi - prev.bmi)
        return self._points[-1].bmi
