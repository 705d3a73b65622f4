"""Optional individual-level episode recording.

Records (time, weight, bmi, active, regime) for selected individuals at
configurable tick intervals, for plotting loss and regression curves.

Usage:
    recorder = EpisodeRecorder(
        enabled=True,
        interval_ticks=1,
        persons=[0, 1, 2],
    )

    # In simulation loop:
    recorder.capture(tick, time, persons)

    # After simulation:
    recorder.save("episodes.npz")
"""

from __future__ import annotations

from dataclasses import dataclass, field
from pathlib import Path
from typing import Dict, Iterable, List, Optional

import numpy as np

from weight_mgmt.person import Person
from weight_mgmt.regimes import classify_regime
from weight_mgmt.types import VitalSign


INACTIVE_REGIME = -1


@dataclass
class PersonSeries:
    """Per-tick series for one individual."""
    person_id: int
    time: List[float] = field(default_factory=list)
    weight: List[float] = field(default_factory=list)
    bmi: List[float] = field(default_factory=list)
    active: List[bool] = field(default_factory=list)
    regime: List[int] = field(default_factory=list)

    def as_arrays(self) -> Dict[str, np.ndarray]:
        return {
            'time': np.asarray(self.time, dtype=np.float64),
            'weight': np.asarray(self.weight, dtype=np.float64),
            'bmi': np.asarray(self.bmi, dtype=np.float64),
            'active': np.asarray(self.active, dtype=np.bool_),
            'regime': np.asarray(self.regime, dtype=np.int8),
        }


class EpisodeRecorder:
    """Records per-individual weight/BMI series and episode regimes.

    When enabled=False, all methods are no-ops (zero overhead).
    """

    def __init__(
        self,
        enabled: bool = False,
        interval_ticks: int = 1,
        persons: Optional[Iterable[int]] = None,
    ):
        """
        Args:
            enabled: Master switch. False = no-ops everywhere.
            interval_ticks: Capture every N ticks.
            persons: Person ids to capture (None = all).
        """
        self.enabled = enabled
        self.interval_ticks = interval_ticks
        self.person_filter = set(persons) if persons is not None else None
        self.series: Dict[int, PersonSeries] = {}

    def should_capture(self, tick: int) -> bool:
        if not self.enabled:
            return False
        return (tick % self.interval_ticks) == 0

    def capture_person(self, time: float, person: Person) -> None:
        """Append one individual's current state."""
        if not self.enabled:
            return
        if self.person_filter is not None and person.person_id not in self.person_filter:
            return
        series = self.series.setdefault(person.person_id, PersonSeries(person.person_id))
        episode = person.episode
        series.time.append(time)
        series.weight.append(person.get_vital_sign(VitalSign.WEIGHT, time))
        series.bmi.append(person.get_vital_sign(VitalSign.BMI, time))
        series.active.append(episode is not None)
        series.regime.append(
            int(classify_regime(episode, time)) if episode is not None else INACTIVE_REGIME
        )

    def capture(self, tick: int, time: float, persons: Iterable[Person]) -> None:
        """Capture every (filtered) individual if this tick is due."""
        if not self.should_capture(tick):
            return
        for person in persons:
            self.capture_person(time, person)

    def get_series(self, person_id: int) -> Optional[PersonSeries]:
        return self.series.get(person_id)

    def save(self, path: str) -> None:
        """Save all series to a compressed npz file.

        Format: arrays named p{id}_{field}, plus 'meta_person_ids'.
        """
        if not self.series:
            return

        arrays = {}
        for pid, series in sorted(self.series.items()):
            for name, values in series.as_arrays().items():
                arrays[f"p{pid}_{name}"] = values
        arrays['meta_person_ids'] = np.array(sorted(self.series), dtype=np.int32)

        Path(path).parent.mkdir(parents=True, exist_ok=True)
        np.savez_compressed(path, **arrays)

    @classmethod
    def load(cls, path: str) -> 'EpisodeRecorder':
        """Load series from an npz file."""
        data = np.load(path)
        recorder = cls(enabled=False)  # Don't capture, just hold data
        for pid in data['meta_person_ids']:
            pid = int(pid)
            prefix = f"p{pid}"
            recorder.series[pid] = PersonSeries(
                person_id=pid,
                time=data[f"{prefix}_time"].tolist(),
                weight=data[f"{prefix}_weight"].tolist(),
                bmi=data[f"{prefix}_bmi"].tolist(),
                active=data[f"{prefix}_active"].tolist(),
                regime=data[f"{prefix}_regime"].tolist(),
            )
        return recorder
