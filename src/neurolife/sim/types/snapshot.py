from __future__ import annotations

from dataclasses import dataclass
from typing import Any, Dict, Tuple

from ..core.agent import Agent, Food


@dataclass(frozen=True, slots=True)
class WorldState:
    agents: Tuple[Agent, ...]
    food: Tuple[Food, ...]


@dataclass(frozen=True, slots=True)
class AgentSummary:
    id: int
    generation: int
    age: int
    energy: float
    fitness: float
    color: str
    genome: Dict[str, Any]

    def as_dict(self) -> Dict[str, Any]:
        return {
            "id": self.id,
            "generation": self.generation,
            "age": self.age,
            "energy": round(self.energy, 1),
            "fitness": round(self.fitness, 2),
            "color": self.color,
            "genome": dict(self.genome),
        }
