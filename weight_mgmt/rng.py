"""Seeded RNG factory for reproducible cohorts.

Uses NumPy's SeedSequence → PCG64 hierarchy to guarantee:
  - Statistical independence between per-individual streams
  - Bit-exact replay with the same master seed
  - Adding/removing individuals doesn't affect other individuals' streams

Every Person draws only from its own stream, so its episode history depends
on nothing but the master seed, its index, and the order of its own ticks.
"""

from __future__ import annotations

from typing import Dict

import numpy as np


N_SHARED_STREAMS = 2   # 'global', 'cohort'


def create_rng_hierarchy(
    master_seed: int,
    n_individuals: int,
) -> Dict[str, np.random.Generator]:
    """Create independent RNG streams for each individual + shared operations.

    Streams created:
      - 'global':  Global operations
      - 'cohort':  Cohort construction (ages, genders, baseline BMI)
      - 'person_0' .. 'person_{n-1}': Per-individual episode draws

    Args:
        master_seed: Master RNG seed (non-negative integer).
        n_individuals: Number of individuals in the cohort.

    Returns:
        Dictionary mapping stream names to numpy Generator instances.

    Example:
        >>> rngs = create_rng_hierarchy(42, n_individuals=100)
        >>> rngs['person_7'].random()  # reproducible
    """
    ss = np.random.SeedSequence(master_seed)
    child_seeds = ss.spawn(n_individuals + N_SHARED_STREAMS)

    rngs: Dict[str, np.random.Generator] = {
        'global': np.random.Generator(np.random.PCG64(child_seeds[0])),
        'cohort': np.random.Generator(np.random.PCG64(child_seeds[1])),
    }
    for i in range(n_individuals):
        rngs[f'person_{i}'] = np.random.Generator(
            np.random.PCG64(child_seeds[N_SHARED_STREAMS + i])
        )

    return rngs


def get_person_rng(
    rngs: Dict[str, np.random.Generator],
    person_id: int,
) -> np.random.Generator:
    """Get the RNG stream for a specific individual.

    Raises:
        KeyError: If person_id doesn't have a stream.
    """
    key = f'person_{person_id}'
    if key not in rngs:
        n_people = sum(1 for k in rngs if k.startswith('person_'))
        raise KeyError(
            f"No RNG stream for person {person_id}. "
            f"Hierarchy holds {n_people} individual streams"
        )
    return rngs[key]


def rng_state_snapshot(
    rngs: Dict[str, np.random.Generator],
) -> Dict[str, dict]:
    """Capture full RNG state for checkpointing.

    Returns a dict of {name: state_dict} that can be serialized (e.g. via pickle)
    and restored to resume a simulation exactly.
    """
    return {name: rng.bit_generator.state for name, rng in rngs.items()}


def restore_rng_state(
    rngs: Dict[str, np.random.Generator],
    states: Dict[str, dict],
) -> None:
    """Restore RNG state from a checkpoint snapshot.

    Raises:
        KeyError: If a stream in states doesn't exist in rngs.
    """
    for name, state in states.items():
        if name not in rngs:
            raise KeyError(f"Cannot restore RNG state for unknown stream '{name}'")
        rngs[name].bit_generator.state = state
