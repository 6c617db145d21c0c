"""
Random number generation utilities.

All sampling code takes an explicit ``numpy.random.Generator`` so that runs
can be reproduced from a seed. These helpers build those generators.
"""

from typing import Optional

import numpy as np


def make_rng(seed: Optional[int] = None) -> np.random.Generator:
    """
    Create a random generator.

    Args:
        seed: Integer seed, or None for fresh OS entropy

    Returns:
        numpy Generator instance
    """
    return np.random.default_rng(seed)


def derive_rng(base_seed: Optional[int], index: int) -> np.random.Generator:
    """
    Create the generator for one item of a batch.

    The stream for item ``index`` depends only on ``base_seed`` and ``index``,
    so results do not change with the order in which workers pick up items.

    Args:
        base_seed: Batch seed, or None for fresh OS entropy
        index: Position of the item in the batch

    Returns:
        numpy Generator instance
    """
    sequence = np.random.SeedSequence(entropy=base_seed, spawn_key=(index,))
    return np.random.default_rng(sequence)
