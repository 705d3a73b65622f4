"""Growth charts — LMS-based BMI-for-age and height-for-age lookups.

The LMS method expresses a growth measure at a given age as:
  - L: Box-Cox power
  - M: median
  - S: coefficient of variation

  z = ((value/M)^L − 1) / (L × S)      (L ≠ 0)
  z = ln(value/M) / S                  (L = 0)
  percentile = Φ(z)

Percentiles are fractions in (0, 1) throughout this package.

Tables hold CDC 2000 sample points for 24–240 months. Between tabulated ages
the L, M and S parameters are interpolated linearly. Ages outside the table
raise ValueError; they are never clamped to the nearest tabulated age.

Charts are read-only and shared by every individual; load them once with
`load_charts()` and inject them where needed.
"""

from __future__ import annotations

import math
from typing import Dict, Mapping, Tuple

import numpy as np
from scipy.stats import norm

from weight_mgmt.types import FEMALE, MALE, ChartType


LMS = Tuple[float, float, float]

# ═══════════════════════════════════════════════════════════════════════
# LMS TABLES (age_months → (L, M, S))
# ═══════════════════════════════════════════════════════════════════════

BMI_FOR_AGE_MALE: Dict[int, LMS] = {
    24: (-0.7766, 16.42, 0.0861),
    36: (-1.2236, 15.79, 0.0823),
    48: (-1.4997, 15.48, 0.0839),
    60: (-1.6315, 15.34, 0.0885),
    72: (-1.6623, 15.32, 0.0950),
    84: (-1.6293, 15.44, 0.1024),
    96: (-1.5635, 15.72, 0.1102),
    108: (-1.4867, 16.15, 0.1178),
    120: (-1.4143, 16.72, 0.1250),
    132: (-1.3563, 17.44, 0.1311),
    144: (-1.3159, 18.30, 0.1360),
    156: (-1.2932, 19.27, 0.1394),
    168: (-1.2865, 20.29, 0.1413),
    180: (-1.2926, 21.29, 0.1417),
    192: (-1.3074, 22.21, 0.1407),
    204: (-1.3268, 23.02, 0.1388),
    216: (-1.3467, 23.69, 0.1364),
    228: (-1.3651, 24.22, 0.1339),
    240: (-1.3815, 24.63, 0.1317),
}

BMI_FOR_AGE_FEMALE: Dict[int, LMS] = {
    24: (-0.6075, 16.13, 0.0917),
    36: (-0.9803, 15.58, 0.0890),
    48: (-1.1963, 15.29, 0.0903),
    60: (-1.2959, 15.17, 0.0942),
    72: (-1.3224, 15.17, 0.0997),
    84: (-1.3064, 15.32, 0.1063),
    96: (-1.2716, 15.59, 0.1132),
    108: (-1.2353, 16.00, 0.1200),
    120: (-1.2062, 16.53, 0.1264),
    132: (-1.1882, 17.20, 0.1319),
    144: (-1.1814, 18.00, 0.1361),
    156: (-1.1839, 18.88, 0.1389),
    168: (-1.1929, 19.79, 0.1401),
    180: (-1.2053, 20.66, 0.1399),
    192: (-1.2183, 21.43, 0.1388),
    204: (-1.2301, 22.07, 0.1373),
    216: (-1.2399, 22.56, 0.1358),
    228: (-1.2475, 22.93, 0.1346),
    240: (-1.2531, 23.20, 0.1338),
}

HEIGHT_FOR_AGE_MALE: Dict[int, LMS] = {
    24: (-0.0554, 87.78, 0.0363),
    36: (0.1957, 96.10, 0.0393),
    48: (0.2708, 102.9, 0.0417),
    60: (0.2204, 109.2, 0.0432),
    72: (0.1080, 115.1, 0.0445),
    84: (-0.0168, 120.8, 0.0457),
    96: (-0.1368, 126.2, 0.0468),
    108: (-0.2427, 131.5, 0.0479),
    120: (-0.3254, 136.8, 0.0490),
    132: (-0.3816, 142.4, 0.0500),
    144: (-0.4097, 148.7, 0.0505),
    156: (-0.4134, 155.5, 0.0502),
    168: (-0.3994, 162.2, 0.0489),
    180: (-0.3757, 168.1, 0.0465),
    192: (-0.3502, 172.7, 0.0437),
    204: (-0.3295, 175.8, 0.0412),
    216: (-0.3173, 177.6, 0.0396),
    228: (-0.3134, 178.6, 0.0386),
    240: (-0.3155, 179.1, 0.0382),
}

HEIGHT_FOR_AGE_FEMALE: Dict[int, LMS] = {
    24: (-0.2046, 86.40, 0.0362),
    36: (0.0047, 94.86, 0.0399),
    48: (0.0884, 101.8, 0.0428),
    60: (0.0696, 108.4, 0.0449),
    72: (-0.0049, 114.6, 0.0467),
    84: (-0.0919, 120.6, 0.0484),
    96: (-0.1759, 126.4, 0.0502),
    108: (-0.2483, 132.0, 0.0519),
    120: (-0.3033, 137.5, 0.0537),
    132: (-0.3380, 143.3, 0.0553),
    144: (-0.3547, 149.4, 0.0560),
    156: (-0.3600, 155.0, 0.0556),
    168: (-0.3607, 159.5, 0.0540),
    180: (-0.3608, 162.5, 0.0518),
    192: (-0.3616, 164.2, 0.0498),
    204: (-0.3632, 165.0, 0.0484),
    216: (-0.3655, 165.4, 0.0477),
    228: (-0.3684, 165.6, 0.0474),
    240: (-0.3718, 165.7, 0.0473),
}


# ═══════════════════════════════════════════════════════════════════════
# LMS TRANSFORMS
# ═══════════════════════════════════════════════════════════════════════

def z_from_lms(value: float, L: float, M: float, S: float) -> float:
    """Z-score of `value` under LMS parameters."""
    if abs(L) < 1e-10:
        return math.log(value / M) / S
    return (math.pow(value / M, L) - 1.0) / (L * S)


def value_from_lms(z: float, L: float, M: float, S: float) -> float:
    """Measurement at z-score `z` under LMS parameters."""
    if abs(L) < 1e-10:
        return M * math.exp(z * S)
    base = 1.0 + L * S * z
    if base <= 0:
        raise ValueError(
            f"z-score {z:.3f} is outside the LMS support (L={L}, S={S})"
        )
    return M * math.pow(base, 1.0 / L)


class GrowthChart:
    """One chart type (BMI or height) for both genders.

    Args:
        chart_type: Which measure this chart describes.
        tables: Mapping gender → {age_months: (L, M, S)}.
    """

    def __init__(self, chart_type: ChartType, tables: Mapping[str, Mapping[int, LMS]]):
        self.chart_type = chart_type
        self._ages: Dict[str, np.ndarray] = {}
        self._lms: Dict[str, np.ndarray] = {}
        for gender, table in tables.items():
            ages = sorted(table)
            self._ages[gender] = np.array(ages, dtype=np.float64)
            self._lms[gender] = np.array([table[a] for a in ages], dtype=np.float64)

    @property
    def min_age_months(self) -> int:
        return int(min(a[0] for a in self._ages.values()))

    @property
    def max_age_months(self) -> int:
        return int(max(a[-1] for a in self._ages.values()))

    def lms(self, age_months: float, gender: str) -> LMS:
        """Interpolated (L, M, S) at `age_months`.

        Raises:
            ValueError: If gender is unknown or age is outside the chart.
        """
        if gender not in self._ages:
            raise ValueError(
                f"No {self.chart_type.value} chart for gender '{gender}'"
            )
        ages = self._ages[gender]
        if age_months < ages[0] or age_months > ages[-1]:
            raise ValueError(
                f"{self.chart_type.value} chart covers {ages[0]:.0f}–{ages[-1]:.0f} "
                f"months, got {age_months}"
            )
        params = self._lms[gender]
        return (
            float(np.interp(age_months, ages, params[:, 0])),
            float(np.interp(age_months, ages, params[:, 1])),
            float(np.interp(age_months, ages, params[:, 2])),
        )

    def lookup(self, age_months: float, gender: str, percentile: float) -> float:
        """Measurement at `percentile` (fraction) for age and gender."""
        if not (0.0 < percentile < 1.0):
            raise ValueError(f"percentile must be in (0, 1), got {percentile}")
        L, M, S = self.lms(age_months, gender)
        return value_from_lms(float(norm.ppf(percentile)), L, M, S)

    def percentile_for(self, age_months: float, gender: str, value: float) -> float:
        """Percentile (fraction) of `value` for age and gender."""
        if value <= 0:
            raise ValueError(
                f"{self.chart_type.value} value must be positive, got {value}"
            )
        L, M, S = self.lms(age_months, gender)
        return float(norm.cdf(z_from_lms(value, L, M, S)))


def load_charts() -> Dict[ChartType, GrowthChart]:
    """Build the process-wide chart set."""
    return {
        ChartType.BMI: GrowthChart(
            ChartType.BMI,
            {MALE: BMI_FOR_AGE_MALE, FEMALE: BMI_FOR_AGE_FEMALE},
        ),
        ChartType.HEIGHT: GrowthChart(
            ChartType.HEIGHT,
            {MALE: HEIGHT_FOR_AGE_MALE, FEMALE: HEIGHT_FOR_AGE_FEMALE},
        ),
    }
