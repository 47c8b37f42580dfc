from __future__ import annotations

from dataclasses import dataclass, field, replace

from pygame.math import Vector2

from .brain import NeuralNetwork
from .config import DEFAULT_COLOR, FOOD_ENERGY, FOUNDER_ENERGY


@dataclass(slots=True)
class Agent:
    id: int
    position: Vector2
    genome: NeuralNetwork
    velocity: Vector2 = field(default_factory=Vector2)
    heading: float = 0.0
    energy: float = FOUNDER_ENERGY
    age: int = 0
    fitness: float = 0.0
    generation: int = 1
    alive: bool = True
    color: str = DEFAULT_COLOR


@dataclass(slots=True)
class Food:
    id: int
    position: Vector2
    energy_value: float = FOOD_ENERGY


def copy_agent(agent: Agent) -> Agent:
    # Genomes are read-only, so the copy may share one.
    return replace(agent, position=Vector2(agent.position), velocity=Vector2(agent.velocity))


def copy_food(food: Food) -> Food:
    return replace(food, position=Vector2(food.position))
