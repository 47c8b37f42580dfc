from __future__ import annotations

import logging
import math
from typing import List, Optional

from pygame.math import Vector2

from .agent import Agent, Food, copy_agent, copy_food
from .brain import create_brain, mutate_brain, predict
from .config import (
    DEFAULT_COLOR,
    FOOD_ENERGY,
    FOUNDER_ENERGY,
    INITIAL_FOOD,
    MAX_FOOD,
    MIN_POPULATION,
    WORLD_HEIGHT,
    WORLD_WIDTH,
    SimulationConfig,
)
from .rng import DeterministicRng
from ..systems import lifecycle, metrics as metrics_system, sensing
from ..systems.analysis import summarize_agent
from ..types.metrics import SimulationStats
from ..types.snapshot import AgentSummary, WorldState

logger = logging.getLogger(__name__)


class World:
    def __init__(self, config: SimulationConfig, rng: DeterministicRng | None = None):
        self._config = config
        self._rng = rng if rng is not None else DeterministicRng(config.seed)
        self._agents: List[Agent] = []
        self._food: List[Food] = []
        self._stats = SimulationStats()
        self._next_id = 0
        self._frame_count = 0
        self._bootstrap()

    @property
    def config(self) -> SimulationConfig:
        return self._config

    # Live collections for the engine and its systems; outside readers use world_state().
    @property
    def agents(self) -> List[Agent]:
        return self._agents

    @property
    def food(self) -> List[Food]:
        return self._food

    @property
    def frame_count(self) -> int:
        return self._frame_count

    def reset(self) -> None:
        self._agents.clear()
        self._food.clear()
        self._rng.reset()
        self._stats = SimulationStats()
        self._next_id = 0
        self._frame_count = 0
        self._bootstrap()

    def update_config(self, config: SimulationConfig) -> None:
        self._config = config

    def create_agent(self, parent: Optional[Agent] = None, position: Optional[Vector2] = None) -> Agent:
        if position is None:
            position = self._random_position()
        if parent is not None:
            genome = mutate_brain(parent.genome, self._config.mutation_rate, self._rng)
            generation = parent.generation + 1
            color = parent.color
        else:
            genome = create_brain(self._rng)
            generation = 1
            color = DEFAULT_COLOR
        agent = Agent(
            id=self._allocate_id(),
            position=position,
            genome=genome,
            heading=self._rng.next_angle(),
            energy=FOUNDER_ENERGY,
            generation=generation,
            color=color,
        )
        return agent

    def spawn_food(self) -> Food:
        food = Food(id=self._allocate_id(), position=self._random_position(), energy_value=FOOD_ENERGY)
        self._food.append(food)
        return food

    def step(self) -> SimulationStats:
        self._frame_count += 1
        config = self._config

        if self._rng.next_float() < config.food_spawn_rate:
            self.spawn_food()
        if len(self._food) > MAX_FOOD:
            del self._food[MAX_FOOD:]

        max_fitness = 0.0
        tick_best: Agent | None = None
        births = 0
        deaths = 0

        for agent in list(self._agents):
            if not agent.alive:
                continue

            inputs, nearest_food, food_dist = sensing.sense(self, agent)
            outputs = predict(agent.genome, inputs)
            speed = lifecycle.actuate(self, agent, outputs)
            lifecycle.metabolize(self, agent, speed)

            if agent.fitness > max_fitness:
                max_fitness = agent.fitness
                tick_best = copy_agent(agent)

            lifecycle.feed(self, agent, nearest_food, food_dist)
            if lifecycle.reproduce(self, agent) is not None:
                births += 1
            if lifecycle.check_death(self, agent) is not None:
                deaths += 1

        self._agents[:] = [agent for agent in self._agents if agent.alive]

        if len(self._agents) < MIN_POPULATION:
            logger.info(
                "Population fell to %d at frame %d, injecting %d founders",
                len(self._agents),
                self._frame_count,
                MIN_POPULATION,
            )
            for _ in range(MIN_POPULATION):
                self._agents.append(self.create_agent())

        self._stats = metrics_system.create_stats(self._stats, self._agents, max_fitness, tick_best)
        logger.debug(
            "frame=%d population=%d food=%d births=%d deaths=%d max_fitness=%.2f",
            self._frame_count,
            self._stats.population,
            len(self._food),
            births,
            deaths,
            max_fitness,
        )
        return metrics_system.copy_stats(self._stats)

    def world_state(self) -> WorldState:
        return WorldState(
            agents=tuple(copy_agent(agent) for agent in self._agents),
            food=tuple(copy_food(food) for food in self._food),
        )

    def stats(self) -> SimulationStats:
        return metrics_system.copy_stats(self._stats)

    def summarize_agent(self, agent_id: int) -> AgentSummary | None:
        for agent in self._agents:
            if agent.id == agent_id:
                return summarize_agent(agent)
        return None

    def summarize_best(self) -> AgentSummary | None:
        best = self._stats.best_agent
        if best is None:
            return None
        return summarize_agent(best)

    def _bootstrap(self) -> None:
        for _ in range(_founder_count(self._config.initial_population)):
            self._agents.append(self.create_agent())
        for _ in range(INITIAL_FOOD):
            self.spawn_food()
        self._stats.population = len(self._agents)
        if self._agents:
            self._stats.avg_energy = sum(agent.energy for agent in self._agents) / len(self._agents)

    def _random_position(self) -> Vector2:
        return Vector2(
            self._rng.next_range(0.0, WORLD_WIDTH),
            self._rng.next_range(0.0, WORLD_HEIGHT),
        )

    def _allocate_id(self) -> int:
        new_id = self._next_id
        self._next_id += 1
        return new_id


def _founder_count(value: float) -> int:
    # NaN, infinite or negative sizes start empty; the population floor restocks on the first tick.
    value = float(value)
    if not math.isfinite(value) or value <= 0:
        return 0
    return int(value)
