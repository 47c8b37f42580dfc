from __future__ import annotations

from dataclasses import dataclass, fields
from pathlib import Path

import yaml

WORLD_WIDTH = 800.0
WORLD_HEIGHT = 600.0

INPUT_NEURONS = 6
HIDDEN_NEURONS = 8
OUTPUT_NEURONS = 2

FOUNDER_ENERGY = 100.0
FOOD_ENERGY = 30.0
INITIAL_FOOD = 20
MAX_FOOD = 50
EAT_RADIUS = 15.0
REPRODUCTION_THRESHOLD = 150.0
BIRTH_COST = 60.0
MAX_AGE = 2000
MIN_POPULATION = 5

TURN_SCALE = 0.2
MOVE_COST_PER_SPEED = 0.1
ENERGY_INPUT_SCALE = 200.0
FITNESS_ENERGY_WEIGHT = 0.1
MUTATION_NUDGE = 0.2

DEFAULT_COLOR = "#10b981"


@dataclass
class SimulationConfig:
    initial_population: int = 40
    food_spawn_rate: float = 0.08
    mutation_rate: float = 0.1
    energy_decay: float = 0.3
    sensor_range: float = 80.0
    speed_multiplier: float = 2.0
    seed: int = 42

    @staticmethod
    def from_yaml(path: Path) -> "SimulationConfig":
        data = yaml.safe_load(Path(path).read_text())
        return load_config(data or {})


_FIELD_NAMES = {f.name for f in fields(SimulationConfig)}

# Accept the camelCase names used by the browser build's parameter panel.
_ALIASES = {
    "initialPopulation": "initial_population",
    "foodSpawnRate": "food_spawn_rate",
    "mutationRate": "mutation_rate",
    "energyDecay": "energy_decay",
    "sensorRange": "sensor_range",
    "speedMultiplier": "speed_multiplier",
}


def load_config(raw: dict) -> SimulationConfig:
    values = {}
    for key, value in raw.items():
        name = _ALIASES.get(key, key)
        if name in _FIELD_NAMES:
            values[name] = value
    return SimulationConfig(**values)
