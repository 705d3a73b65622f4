"""Weight-management visualizations.

Every function:
  - Accepts a CohortSimResult or an EpisodeRecorder as input
  - Returns a matplotlib Figure
  - Has an optional ``save_path`` parameter (saves PNG when given)
  - Uses the shared dark theme from ``weight_mgmt.viz.style``

matplotlib backend is forced to Agg (no display) on import.
"""

from __future__ import annotations

import matplotlib
matplotlib.use('Agg')

from typing import Iterable, Optional, TYPE_CHECKING

import matplotlib.pyplot as plt
import numpy as np

from weight_mgmt.types import EpisodePath
from weight_mgmt.utils import DAYS_PER_YEAR
from weight_mgmt.viz.style import (
    ACCENT_COLORS,
    PATH_COLORS,
    REGIME_COLORS,
    TEXT_COLOR,
    dark_figure,
    legend_kwargs,
    save_figure,
)

if TYPE_CHECKING:
    from weight_mgmt.model import CohortSimResult
    from weight_mgmt.snapshots import EpisodeRecorder


# ═══════════════════════════════════════════════════════════════════════
# 1. INDIVIDUAL WEIGHT SERIES
# ═══════════════════════════════════════════════════════════════════════

def plot_person_series(
    recorder: 'EpisodeRecorder',
    person_ids: Optional[Iterable[int]] = None,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Weight over time per individual, colored by episode regime.

    Inactive ticks are drawn as the plain line; active ticks are overlaid
    with markers in the regime's color.

    Args:
        recorder: EpisodeRecorder holding captured series.
        person_ids: Individuals to draw (default: all recorded).
        save_path: Optional path to save the figure.

    Returns:
        matplotlib Figure.
    """
    if person_ids is None:
        person_ids = sorted(recorder.series)
    fig, ax = dark_figure()

    labelled = set()
    for i, pid in enumerate(person_ids):
        series = recorder.get_series(pid)
        if series is None:
            continue
        arrays = series.as_arrays()
        if len(arrays['time']) == 0:
            continue
        years = (arrays['time'] - arrays['time'][0]) / DAYS_PER_YEAR
        ax.plot(years, arrays['weight'], color=ACCENT_COLORS[i % len(ACCENT_COLORS)],
                linewidth=1.2, alpha=0.6)
        for regime, color in REGIME_COLORS.items():
            mask = arrays['regime'] == int(regime)
            if not np.any(mask):
                continue
            label = None
            if regime not in labelled:
                label = regime.name.replace('_', ' ').title()
                labelled.add(regime)
            ax.scatter(years[mask], arrays['weight'][mask], color=color, s=8,
                       zorder=3, label=label)

    ax.set_xlabel('Years since first tick', fontsize=12)
    ax.set_ylabel('Weight (kg)', fontsize=12)
    ax.set_title('Weight Under Management', fontsize=14, fontweight='bold')
    if labelled:
        ax.legend(**legend_kwargs())

    if save_path:
        save_figure(fig, save_path)
    return fig


# ═══════════════════════════════════════════════════════════════════════
# 2. ACTIVE EPISODES
# ═══════════════════════════════════════════════════════════════════════

def plot_active_episodes(
    result: 'CohortSimResult',
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Active episodes per tick, split into adherent and non-adherent.

    Args:
        result: CohortSimResult with per-tick counts.
        save_path: Optional path to save the figure.

    Returns:
        matplotlib Figure.
    """
    years = (result.times - result.times[0]) / DAYS_PER_YEAR
    adherent = result.n_active_adherent
    non_adherent = result.n_active - result.n_active_adherent
    fig, ax = dark_figure()

    ax.stackplot(years, adherent, non_adherent,
                 colors=[ACCENT_COLORS[1], ACCENT_COLORS[2]], alpha=0.8,
                 labels=['Adherent', 'Non-adherent'])
    ax.plot(years, result.n_active_pediatric, color=PATH_COLORS[EpisodePath.PEDIATRIC],
            linewidth=2, linestyle='--', label='Pediatric path')

    ax.set_xlabel('Year', fontsize=12)
    ax.set_ylabel('Active episodes', fontsize=12)
    ax.set_title(f'Weight Management in a Cohort of {result.n_individuals}',
                 fontsize=14, fontweight='bold')
    ax.legend(loc='upper left', **legend_kwargs())
    ax.set_xlim(0, years[-1] if len(years) > 1 else 1)
    ax.set_ylim(bottom=0)

    if save_path:
        save_figure(fig, save_path)
    return fig


# ═══════════════════════════════════════════════════════════════════════
# 3. MEAN ADULT BMI
# ═══════════════════════════════════════════════════════════════════════

def plot_mean_adult_bmi(
    result: 'CohortSimResult',
    obesity_threshold: float = 30.0,
    save_path: Optional[str] = None,
) -> plt.Figure:
    """Cohort mean BMI of individuals aged 20 and over, per tick.

    Args:
        result: CohortSimResult with mean_adult_bmi.
        obesity_threshold: BMI drawn as a dashed reference line.
        save_path: Optional path to save the figure.

    Returns:
        matplotlib Figure.
    """
    years = (result.times - result.times[0]) / DAYS_PER_YEAR
    fig, ax = dark_figure()

    ax.plot(years, result.mean_adult_bmi, color=PATH_COLORS[EpisodePath.ADULT],
            linewidth=2.5, label='Mean adult BMI')
    ax.axhline(obesity_threshold, color=TEXT_COLOR, linestyle='--',
               linewidth=1, alpha=0.5, label=f'BMI {obesity_threshold:g}')

    ax.set_xlabel('Year', fontsize=12)
    ax.set_ylabel('BMI (kg/m²)', fontsize=12)
    ax.set_title('Mean Adult BMI', fontsize=14, fontweight='bold')
    ax.legend(**legend_kwargs())

    if save_path:
        save_figure(fig, save_path)
    return fig
