"""Configuration system for weight-mgmt.

Hierarchical YAML configuration with deep-merge support:
  base.yaml → scenario override → sweep overrides

Sections map 1:1 to YAML top-level keys. Unknown keys are ignored so older
scenario files keep loading after parameters are retired.
"""

from __future__ import annotations

import warnings
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, Dict, Optional, Tuple, Union

import yaml


# ═══════════════════════════════════════════════════════════════════════
# CONFIGURATION DATACLASSES
# ═══════════════════════════════════════════════════════════════════════

@dataclass
class SimulationSection:
    """Simulation timing and control."""
    seed: int = 42
    n_years: int = 10
    tick_days: float = 30.0      # Spacing between steps (days)
    start_time: float = 0.0      # Simulation day of the first tick


@dataclass
class WeightLossSection:
    """Weight-management onset, adherence and outcome parameters."""
    min_age: int = 5                          # Youngest age (years) that can start
    start_prob: float = 0.493                 # P(start | thresholds met), per tick
    adherence: float = 0.605                  # P(follows plan)
    start_bmi: float = 30.0                   # Adult onset threshold (kg/m²)
    start_percentile: float = 0.95            # Pediatric onset BMI-for-age percentile
    min_loss: float = 0.07                    # Adult target loss, lower bound (fraction)
    max_loss: float = 0.10                    # Adult target loss, upper bound (fraction)
    maintenance_prob: float = 0.2             # P(long-term success | adherent)
    max_ped_percentile_change: float = 0.10   # Pediatric target percentile drop, upper bound


@dataclass
class CohortSection:
    """Synthetic cohort used by the cohort driver."""
    n_individuals: int = 200
    age_range: Tuple[float, float] = (5.0, 60.0)           # years at start
    adult_bmi_range: Tuple[float, float] = (24.0, 40.0)    # kg/m²
    pediatric_percentile_range: Tuple[float, float] = (0.60, 0.995)
    height_percentile_range: Tuple[float, float] = (0.10, 0.90)
    male_fraction: float = 0.5
    pediatric_percentile_drift: float = 0.01   # Yearly BMI-percentile creep of minors


@dataclass
class OutputSection:
    """Output control."""
    directory: str = "results/"
    record_trajectories: bool = False
    record_interval_ticks: int = 1


@dataclass
class SimulationConfig:
    """Complete simulation configuration.

    Load from YAML via `load_config()`. Sections map 1:1 to YAML top-level keys.
    """
    simulation: SimulationSection = field(default_factory=SimulationSection)
    weight_loss: WeightLossSection = field(default_factory=WeightLossSection)
    cohort: CohortSection = field(default_factory=CohortSection)
    output: OutputSection = field(default_factory=OutputSection)


# ═══════════════════════════════════════════════════════════════════════
# YAML LOADING & MERGING
# ═══════════════════════════════════════════════════════════════════════

def deep_merge(base: Dict, override: Dict) -> Dict:
    """Recursively merge override into base. Modifies base in place.

    - Dict values are merged recursively
    - Non-dict values are replaced
    - Keys in override but not base are added

    Returns:
        The merged base dictionary.
    """
    for key, value in override.items():
        if (
            key in base
            and isinstance(base[key], dict)
            and isinstance(value, dict)
        ):
            deep_merge(base[key], value)
        else:
            base[key] = value
    return base


def _dict_to_section(section_cls, data: Dict) -> Any:
    """Convert a dict to a dataclass, ignoring unknown keys."""
    import dataclasses
    valid_fields = {f.name for f in dataclasses.fields(section_cls)}
    filtered = {k: v for k, v in data.items() if k in valid_fields}
    return section_cls(**filtered)


_RANGE_FIELDS = (
    'age_range',
    'adult_bmi_range',
    'pediatric_percentile_range',
    'height_percentile_range',
)


def _yaml_to_config(data: Dict) -> SimulationConfig:
    """Convert a merged YAML dict to a SimulationConfig."""
    sections = {}
    section_map = {
        'simulation': SimulationSection,
        'weight_loss': WeightLossSection,
        'cohort': CohortSection,
        'output': OutputSection,
    }
    for key, cls in section_map.items():
        if key in data and isinstance(data[key], dict):
            section_data = dict(data[key])  # don't mutate original
            if key == 'cohort':
                for name in _RANGE_FIELDS:
                    if isinstance(section_data.get(name), list):
                        section_data[name] = tuple(section_data[name])
            sections[key] = _dict_to_section(cls, section_data)
        else:
            sections[key] = cls()
    return SimulationConfig(**sections)


def _check_probability(name: str, value: float) -> None:
    if not (0.0 <= value <= 1.0):
        raise ValueError(f"{name} must be in [0, 1], got {value}")


def _check_range(name: str, bounds: Tuple[float, float]) -> None:
    if len(bounds) != 2 or bounds[0] > bounds[1]:
        raise ValueError(f"{name} must be (min, max) with min <= max, got {bounds}")


def validate_config(config: SimulationConfig) -> None:
    """Validate configuration constraints. Raises ValueError on failure.

    Checks:
      - Probabilities lie in [0, 1]
      - Loss bounds are ordered fractions below 1
      - Percentiles lie strictly inside (0, 1)
      - Tick spacing and horizon are positive
      - Cohort ranges are ordered
    """
    wl = config.weight_loss
    for name in ('start_prob', 'adherence', 'maintenance_prob'):
        _check_probability(f"weight_loss.{name}", getattr(wl, name))

    if not (0.0 < wl.start_percentile < 1.0):
        raise ValueError(
            f"weight_loss.start_percentile must be in (0, 1), got {wl.start_percentile}"
        )
    if wl.min_loss < 0 or wl.max_loss >= 1.0:
        raise ValueError(
            f"weight_loss loss bounds must satisfy 0 <= min_loss and max_loss < 1, "
            f"got [{wl.min_loss}, {wl.max_loss}]"
        )
    if wl.min_loss > wl.max_loss:
        raise ValueError(
            f"weight_loss.min_loss ({wl.min_loss}) must be <= "
            f"max_loss ({wl.max_loss})"
        )
    if not (0.0 <= wl.max_ped_percentile_change < 1.0):
        raise ValueError(
            f"weight_loss.max_ped_percentile_change must be in [0, 1), "
            f"got {wl.max_ped_percentile_change}"
        )
    if wl.start_bmi <= 0:
        raise ValueError("weight_loss.start_bmi must be positive")
    if wl.min_age < 0:
        raise ValueError("weight_loss.min_age must be non-negative")
    if wl.min_age >= 20:
        warnings.warn(
            f"weight_loss.min_age={wl.min_age} leaves the pediatric "
            f"percentile path unreachable.",
            UserWarning,
            stacklevel=2,
        )

    sim = config.simulation
    if sim.seed < 0:
        raise ValueError("simulation.seed must be non-negative")
    if sim.tick_days <= 0:
        raise ValueError(f"simulation.tick_days must be positive, got {sim.tick_days}")
    if sim.n_years < 1:
        raise ValueError(f"simulation.n_years must be >= 1, got {sim.n_years}")

    co = config.cohort
    if co.n_individuals < 0:
        raise ValueError("cohort.n_individuals must be non-negative")
    _check_probability("cohort.male_fraction", co.male_fraction)
    for name in _RANGE_FIELDS:
        _check_range(f"cohort.{name}", getattr(co, name))
    if co.age_range[0] < 2:
        raise ValueError(
            f"cohort.age_range must start at 2 years or later (BMI-for-age "
            f"charts begin at 24 months), got {co.age_range}"
        )
    if not (0.0 <= co.pediatric_percentile_drift < 1.0):
        raise ValueError(
            f"cohort.pediatric_percentile_drift must be in [0, 1), "
            f"got {co.pediatric_percentile_drift}"
        )
    for name in ('pediatric_percentile_range', 'height_percentile_range'):
        lo, hi = getattr(co, name)
        if lo <= 0.0 or hi >= 1.0:
            raise ValueError(f"cohort.{name} must lie inside (0, 1), got {(lo, hi)}")

    if config.output.record_interval_ticks < 1:
        raise ValueError("output.record_interval_ticks must be >= 1")


def load_config(
    base_path: Union[str, Path],
    scenario_path: Optional[Union[str, Path]] = None,
    sweep_overrides: Optional[Dict] = None,
) -> SimulationConfig:
    """Load and merge hierarchical YAML configuration.

    Merge order: base → scenario → sweep overrides.
    Each layer overrides only the fields it specifies.

    Args:
        base_path: Path to base configuration YAML.
        scenario_path: Optional scenario override YAML.
        sweep_overrides: Optional dict of parameter sweep overrides.

    Returns:
        Validated SimulationConfig.

    Raises:
        FileNotFoundError: If base_path doesn't exist.
        ValueError: If validation fails.
    """
    base_path = Path(base_path)
    if not base_path.exists():
        raise FileNotFoundError(f"Config file not found: {base_path}")

    with open(base_path) as f:
        config_dict = yaml.safe_load(f) or {}

    if scenario_path is not None:
        scenario_path = Path(scenario_path)
        if scenario_path.exists():
            with open(scenario_path) as f:
                scenario = yaml.safe_load(f) or {}
            deep_merge(config_dict, scenario)

    if sweep_overrides is not None:
        deep_merge(config_dict, sweep_overrides)

    config = _yaml_to_config(config_dict)
    validate_config(config)
    return config


def default_config() -> SimulationConfig:
    """Return a SimulationConfig with all default values."""
    config = SimulationConfig()
    validate_config(config)
    return config
