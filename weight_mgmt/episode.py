"""Weight-management episode state.

An individual is either inactive (no episode) or carries exactly one
WeightManagementEpisode. The episode is created whole by the start step and
dropped whole by the stop step, so "inactive" never coexists with stale
episode attributes.

Invariants:
  - `path` is fixed by age at `start_time` and never changes
  - adherent ADULT episodes carry `loss_fraction`; adherent PEDIATRIC
    episodes carry `bmi_percentile_change`; never both
  - non-adherent episodes carry neither and have long_term_success=False
"""

from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Optional

from weight_mgmt.types import EpisodePath


# Attribute-bag keys used when exporting an episode to a host engine.
ACTIVE_WEIGHT_MANAGEMENT = "active_weight_management"
PRE_MANAGEMENT_WEIGHT = "pre_management_weight"
WEIGHT_MANAGEMENT_START = "weight_management_start"
WEIGHT_LOSS_PERCENTAGE = "weight_loss_percentage"
WEIGHT_LOSS_BMI_PERCENTILE_CHANGE = "weight_loss_bmi_percentile_change"
LONG_TERM_WEIGHT_LOSS = "long_term_weight_loss"
WEIGHT_LOSS_ADHERENCE = "weight_loss_adherence"

EPISODE_ATTRIBUTES = (
    PRE_MANAGEMENT_WEIGHT,
    WEIGHT_MANAGEMENT_START,
    WEIGHT_LOSS_PERCENTAGE,
    WEIGHT_LOSS_BMI_PERCENTILE_CHANGE,
    LONG_TERM_WEIGHT_LOSS,
    WEIGHT_LOSS_ADHERENCE,
)


class EpisodeStateError(RuntimeError):
    """An active episode is missing state the current regime needs."""


@dataclass(frozen=True)
class WeightManagementEpisode:
    """State of one active weight-management episode."""
    start_time: float
    pre_management_weight: float
    path: EpisodePath
    adherence: bool
    long_term_success: bool
    loss_fraction: Optional[float] = None
    bmi_percentile_change: Optional[float] = None

    def __post_init__(self):
        if self.loss_fraction is not None and self.bmi_percentile_change is not None:
            raise EpisodeStateError(
                "episode carries both loss_fraction and bmi_percentile_change"
            )
        if self.long_term_success and not self.adherence:
            raise EpisodeStateError("long-term success requires adherence")

    @property
    def is_pediatric(self) -> bool:
        return self.path == EpisodePath.PEDIATRIC

    def require_loss_fraction(self) -> float:
        if self.loss_fraction is None:
            raise EpisodeStateError(
                f"active {self.path.name} episode started at t={self.start_time} "
                f"has no loss_fraction"
            )
        return self.loss_fraction

    def require_percentile_change(self) -> float:
        if self.bmi_percentile_change is None:
            raise EpisodeStateError(
                f"active {self.path.name} episode started at t={self.start_time} "
                f"has no bmi_percentile_change"
            )
        return self.bmi_percentile_change

    def to_attributes(self) -> Dict[str, Any]:
        """Attribute-bag view; only populated targets are included."""
        attrs: Dict[str, Any] = {
            ACTIVE_WEIGHT_MANAGEMENT: True,
            PRE_MANAGEMENT_WEIGHT: self.pre_management_weight,
            WEIGHT_MANAGEMENT_START: self.start_time,
            WEIGHT_LOSS_ADHERENCE: self.adherence,
            LONG_TERM_WEIGHT_LOSS: self.long_term_success,
        }
        if self.loss_fraction is not None:
            attrs[WEIGHT_LOSS_PERCENTAGE] = self.loss_fraction
        if self.bmi_percentile_change is not None:
            attrs[WEIGHT_LOSS_BMI_PERCENTILE_CHANGE] = self.bmi_percentile_change
        return attrs
