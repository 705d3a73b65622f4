"""weight-mgmt: individual-level weight-management episodes for synthetic populations.

A per-individual, tick-driven stochastic model of weight management:
  - Onset when BMI crosses an adult threshold or a pediatric BMI-for-age percentile
  - Adherence, target loss and long-term maintenance drawn once per episode
  - Adult weight-fraction trajectories (linear loss, linear regression)
  - Pediatric BMI-percentile trajectories shaped on a growth trajectory
  - Smooth hand-off from percentile to weight modeling at age 20

Every individual owns its random stream, so a cohort replays bit-exactly
from its master seed.
"""

__version__ = "0.1.0"
