"""weight-mgmt visualization library.

Modules:
  - style: Dark theme colours and helpers
  - episodes: Individual weight series and cohort episode counts
"""

from weight_mgmt.viz.style import (  # noqa: F401
    ACCENT_COLORS,
    DARK_BG,
    DARK_PANEL,
    GRID_COLOR,
    PATH_COLORS,
    REGIME_COLORS,
    TEXT_COLOR,
    apply_dark_theme,
    dark_figure,
    save_figure,
)

from weight_mgmt.viz.episodes import (  # noqa: F401
    plot_active_episodes,
    plot_mean_adult_bmi,
    plot_person_series,
)
