from __future__ import annotations

import math
from typing import TYPE_CHECKING, Optional, Sequence

from pygame.math import Vector2

from ..core.agent import Agent, Food
from ..core.config import (
    BIRTH_COST,
    EAT_RADIUS,
    FITNESS_ENERGY_WEIGHT,
    MAX_AGE,
    MOVE_COST_PER_SPEED,
    REPRODUCTION_THRESHOLD,
    TURN_SCALE,
    WORLD_HEIGHT,
    WORLD_WIDTH,
)
from ..utils.math2d import _finite_or, _wrap_position

if TYPE_CHECKING:
    from ..core.world import World


def actuate(world: World, agent: Agent, outputs: Sequence[float]) -> float:
    # Non-finite actuation parks the agent and leaves its heading untouched.
    speed = max(0.0, _finite_or(max(0.0, float(outputs[0])) * world._config.speed_multiplier, 0.0))
    turn = _finite_or(float(outputs[1]) * TURN_SCALE, 0.0)

    agent.heading += turn
    agent.velocity.x = math.cos(agent.heading) * speed
    agent.velocity.y = math.sin(agent.heading) * speed
    agent.position += agent.velocity
    _wrap_position(agent.position, WORLD_WIDTH, WORLD_HEIGHT)
    return speed


def metabolize(world: World, agent: Agent, speed: float) -> None:
    agent.energy -= world._config.energy_decay + speed * MOVE_COST_PER_SPEED
    agent.age += 1
    agent.fitness = agent.age + agent.energy * FITNESS_ENERGY_WEIGHT


def feed(world: World, agent: Agent, food: Optional[Food], food_dist: float) -> bool:
    if food is None or food_dist >= EAT_RADIUS:
        return False
    agent.energy += food.energy_value
    world._food.remove(food)
    return True


def reproduce(world: World, agent: Agent) -> Optional[Agent]:
    if agent.energy <= REPRODUCTION_THRESHOLD:
        return None
    agent.energy -= BIRTH_COST
    offspring = world.create_agent(agent, position=Vector2(agent.position))
    world._agents.append(offspring)
    return offspring


def check_death(world: World, agent: Agent) -> Optional[Agent]:
    if agent.energy > 0 and agent.age <= MAX_AGE:
        return None
    agent.alive = False
    # Seed the replacement from the tracked best genome when there is one.
    replacement = world.create_agent(world._stats.best_agent)
    world._agents.append(replacement)
    return replacement
