"""Random sources for the sampled steps of the pipeline.

Improvement cases and the spending sample are the only non-deterministic
outputs. Each gets its own generator spawned from a single seed, so a seeded
run yields the same artifacts whether aggregators run sequentially or in a
thread pool.
"""

from __future__ import annotations

from typing import Dict, Iterable, Optional

import numpy as np
import pandas as pd


def spawn_rngs(seed: Optional[int], names: Iterable[str]) -> Dict[str, np.random.Generator]:
    names = list(names)
    children = np.random.SeedSequence(seed).spawn(len(names))
    return {name: np.random.default_rng(child) for name, child in zip(names, children)}


def sample_rows(df: pd.DataFrame, n: int, rng: np.random.Generator) -> pd.DataFrame:
    """Up to ``n`` rows in random order (every row, shuffled, when ``n`` >= len)."""
    if df.empty or n <= 0:
        return df.iloc[0:0]
    return df.sample(n=min(n, len(df)), random_state=rng)


def cap_rows(df: pd.DataFrame, cap: Optional[int], rng: np.random.Generator) -> pd.DataFrame:
    """Random subset of exactly ``cap`` rows when the frame is larger; falsy ``cap`` disables."""
    if not cap or len(df) <= cap:
        return df
    return df.sample(n=cap, random_state=rng)
