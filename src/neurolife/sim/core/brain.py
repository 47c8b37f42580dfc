"""
Feed-forward genome carried by every agent.

One hidden layer, tanh on both layers, weights kept as flat arrays so that the
weight from source neuron ``j`` to target neuron ``i`` sits at
``j * target_count + i``.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import Any, Dict, Sequence

import numpy as np

from .config import HIDDEN_NEURONS, INPUT_NEURONS, MUTATION_NUDGE, OUTPUT_NEURONS
from .rng import DeterministicRng

logger = logging.getLogger(__name__)


class InputShapeMismatch(ValueError):
    def __init__(self, expected: int, received: int):
        super().__init__(f"Expected {expected} inputs, got {received}")
        self.expected = expected
        self.received = received


def _frozen_array(values: Any) -> np.ndarray:
    # Backed by immutable bytes: neither the array nor its base can be made writable again.
    data = np.array(values, dtype=np.float64).reshape(-1).tobytes()
    return np.frombuffer(data, dtype=np.float64)


@dataclass(frozen=True, eq=False)
class NeuralNetwork:
    input_size: int
    hidden_size: int
    output_size: int
    input_hidden: np.ndarray
    hidden_output: np.ndarray
    hidden_bias: np.ndarray
    output_bias: np.ndarray

    def __post_init__(self) -> None:
        for name in ("input_hidden", "hidden_output", "hidden_bias", "output_bias"):
            object.__setattr__(self, name, _frozen_array(getattr(self, name)))
        expected = {
            "input_hidden": self.input_size * self.hidden_size,
            "hidden_output": self.hidden_size * self.output_size,
            "hidden_bias": self.hidden_size,
            "output_bias": self.output_size,
        }
        for name, size in expected.items():
            actual = getattr(self, name).size
            if actual != size:
                raise ValueError(f"{name} has {actual} values, expected {size}")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, NeuralNetwork):
            return NotImplemented
        return (
            self.shape == other.shape
            and np.array_equal(self.input_hidden, other.input_hidden)
            and np.array_equal(self.hidden_output, other.hidden_output)
            and np.array_equal(self.hidden_bias, other.hidden_bias)
            and np.array_equal(self.output_bias, other.output_bias)
        )

    __hash__ = object.__hash__

    @property
    def shape(self) -> tuple[int, int, int]:
        return (self.input_size, self.hidden_size, self.output_size)

    @property
    def parameter_count(self) -> int:
        return (
            self.input_hidden.size + self.hidden_output.size + self.hidden_bias.size + self.output_bias.size
        )


def create_brain(
    rng: DeterministicRng,
    input_size: int = INPUT_NEURONS,
    hidden_size: int = HIDDEN_NEURONS,
    output_size: int = OUTPUT_NEURONS,
) -> NeuralNetwork:
    """Draw every weight and bias independently from U[-1, 1]."""
    return NeuralNetwork(
        input_size=input_size,
        hidden_size=hidden_size,
        output_size=output_size,
        input_hidden=rng.uniform_array(-1.0, 1.0, input_size * hidden_size),
        hidden_output=rng.uniform_array(-1.0, 1.0, hidden_size * output_size),
        hidden_bias=rng.uniform_array(-1.0, 1.0, hidden_size),
        output_bias=rng.uniform_array(-1.0, 1.0, output_size),
    )


def _mutate_values(values: np.ndarray, rate: float, rng: DeterministicRng) -> np.ndarray:
    mask = rng.float_array(values.size) < rate
    nudges = rng.uniform_array(-MUTATION_NUDGE, MUTATION_NUDGE, values.size)
    return np.where(mask, values + nudges, values)


def mutate_brain(brain: NeuralNetwork, rate: float, rng: DeterministicRng) -> NeuralNetwork:
    """
    Copy a genome, nudging each value with probability ``rate``.

    Args:
        brain: Parent genome, left untouched
        rate: Per-value mutation probability
        rng: Random source for the mask and the nudges

    Returns:
        New genome with the parent's shape
    """
    return NeuralNetwork(
        input_size=brain.input_size,
        hidden_size=brain.hidden_size,
        output_size=brain.output_size,
        input_hidden=_mutate_values(brain.input_hidden, rate, rng),
        hidden_output=_mutate_values(brain.hidden_output, rate, rng),
        hidden_bias=_mutate_values(brain.hidden_bias, rate, rng),
        output_bias=_mutate_values(brain.output_bias, rate, rng),
    )


def forward(brain: NeuralNetwork, inputs: Sequence[float]) -> np.ndarray:
    """
    Forward pass through the network.

    Raises:
        InputShapeMismatch: if ``inputs`` does not match ``brain.input_size``
    """
    x = np.asarray(inputs, dtype=np.float64).reshape(-1)
    if x.size != brain.input_size:
        raise InputShapeMismatch(brain.input_size, x.size)

    w1 = brain.input_hidden.reshape(brain.input_size, brain.hidden_size)
    w2 = brain.hidden_output.reshape(brain.hidden_size, brain.output_size)

    hidden = np.tanh(brain.hidden_bias + np.dot(x, w1))
    return np.tanh(brain.output_bias + np.dot(hidden, w2))


def predict(brain: NeuralNetwork, inputs: Sequence[float]) -> np.ndarray:
    try:
        return forward(brain, inputs)
    except InputShapeMismatch as exc:
        logger.warning("Skipping inference: %s", exc)
        return np.zeros(brain.output_size, dtype=np.float64)


def genome_stats(brain: NeuralNetwork) -> Dict[str, Any]:
    weights = np.concatenate(
        [brain.input_hidden, brain.hidden_output, brain.hidden_bias, brain.output_bias]
    )
    return {
        "inputs": brain.input_size,
        "hidden": brain.hidden_size,
        "outputs": brain.output_size,
        "parameters": int(weights.size),
        "avg_weight": float(brain.input_hidden.mean()) if brain.input_hidden.size else 0.0,
        "bias_trend": float(brain.hidden_bias.sum()),
        "weight_mean": float(weights.mean()) if weights.size else 0.0,
        "weight_std": float(weights.std()) if weights.size else 0.0,
        "weight_min": float(weights.min()) if weights.size else 0.0,
        "weight_max": float(weights.max()) if weights.size else 0.0,
    }
