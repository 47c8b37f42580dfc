from __future__ import annotations

from typing import List, Optional

from ..core.agent import Agent, copy_agent
from ..types.metrics import SimulationStats


def create_stats(
    previous: SimulationStats,
    agents: List[Agent],
    max_fitness: float,
    tick_best: Optional[Agent],
) -> SimulationStats:
    # tick_best is a snapshot taken when the agent was selected, before it fed, bred or died.
    population = len(agents)
    avg_energy = sum(agent.energy for agent in agents) / population if population > 0 else 0.0

    best_agent = previous.best_agent
    if tick_best is not None and (best_agent is None or tick_best.fitness > best_agent.fitness):
        best_agent = tick_best

    return SimulationStats(
        # Lineage depth is tracked per agent; the aggregate counter is not advanced.
        generation=previous.generation,
        population=population,
        max_fitness=max_fitness,
        avg_energy=avg_energy,
        best_agent=best_agent,
    )


def copy_stats(stats: SimulationStats) -> SimulationStats:
    return SimulationStats(
        generation=stats.generation,
        population=stats.population,
        max_fitness=stats.max_fitness,
        avg_energy=stats.avg_energy,
        best_agent=copy_agent(stats.best_agent) if stats.best_agent is not None else None,
    )
