from __future__ import annotations

import math
from typing import TYPE_CHECKING, Iterable, List, Optional, Tuple, TypeVar

from pygame.math import Vector2

from ..core.agent import Agent, Food
from ..core.config import ENERGY_INPUT_SCALE
from ..utils.math2d import _bearing, _normalized_distance

if TYPE_CHECKING:
    from ..core.world import World

_T = TypeVar("_T", Agent, Food)


def find_nearest(position: Vector2, targets: Iterable[_T]) -> Tuple[Optional[_T], float]:
    nearest = None
    min_dist_sq = math.inf
    px = position.x
    py = position.y
    for target in targets:
        dx = target.position.x - px
        dy = target.position.y - py
        dist_sq = dx * dx + dy * dy
        if dist_sq < min_dist_sq:
            min_dist_sq = dist_sq
            nearest = target
    if nearest is None:
        return None, math.inf
    return nearest, math.sqrt(min_dist_sq)


def _other_living(agents: Iterable[Agent], agent: Agent) -> Iterable[Agent]:
    for other in agents:
        if other is not agent and other.alive:
            yield other


def sense(world: World, agent: Agent) -> Tuple[List[float], Optional[Food], float]:
    sensor_range = world._config.sensor_range
    nearest_food, food_dist = find_nearest(agent.position, world._food)
    nearest_agent, agent_dist = find_nearest(agent.position, _other_living(world._agents, agent))

    inputs = [
        1.0,
        _normalized_distance(food_dist, sensor_range) if nearest_food is not None else 1.0,
        _bearing(agent.position, nearest_food.position, agent.heading) if nearest_food is not None else 0.0,
        agent.energy / ENERGY_INPUT_SCALE,
        _normalized_distance(agent_dist, sensor_range) if nearest_agent is not None else 1.0,
        world._rng.next_float(),
    ]
    return inputs, nearest_food, food_dist
