from __future__ import annotations

import math
import random

import numpy as np


class DeterministicRng:
    def __init__(self, seed: int):
        self._seed = seed
        self._random = random.Random(seed)
        self._array_random = np.random.default_rng(seed)

    @property
    def seed(self) -> int:
        return self._seed

    def reset(self) -> None:
        self._random.seed(self._seed)
        self._array_random = np.random.default_rng(self._seed)

    def next_float(self) -> float:
        return self._random.random()

    def next_range(self, low: float, high: float) -> float:
        return self._random.uniform(low, high)

    def next_angle(self) -> float:
        return self._random.uniform(0.0, 2.0 * math.pi)

    def uniform_array(self, low: float, high: float, size: int) -> np.ndarray:
        return self._array_random.uniform(low, high, size)

    def float_array(self, size: int) -> np.ndarray:
        return self._array_random.random(size)
