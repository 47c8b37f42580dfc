from __future__ import annotations

from dataclasses import dataclass
from typing import Optional

from ..core.agent import Agent


@dataclass(slots=True)
class SimulationStats:
    generation: int = 1
    population: int = 0
    max_fitness: float = 0.0
    avg_energy: float = 0.0
    best_agent: Optional[Agent] = None
