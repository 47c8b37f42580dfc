from __future__ import annotations

import argparse
import csv
import json
import logging
import math
from pathlib import Path
from typing import Optional

from ..sim.core.config import SimulationConfig
from ..sim.core.world import World
from ..sim.systems.analysis import format_log_line
from ..sim.types.metrics import SimulationStats

logger = logging.getLogger(__name__)

_HEADER = [
    "tick",
    "population",
    "food",
    "max_fitness",
    "avg_energy",
    "best_fitness",
    "best_generation",
    "max_generation",
]


def _format_row(world: World, stats: SimulationStats, tick: int) -> list[object]:
    state = world.world_state()
    best = stats.best_agent
    max_generation = max((agent.generation for agent in state.agents), default=0)
    return [
        tick,
        stats.population,
        len(state.food),
        f"{stats.max_fitness:.4f}",
        f"{stats.avg_energy:.4f}",
        f"{best.fitness:.4f}" if best is not None else "",
        best.generation if best is not None else "",
        max_generation,
    ]


def _percentile(sorted_values: list[float], percentile: float) -> float:
    if not sorted_values:
        return 0.0
    if len(sorted_values) == 1:
        return float(sorted_values[0])
    pos = (len(sorted_values) - 1) * percentile
    low = int(math.floor(pos))
    high = int(math.ceil(pos))
    if low == high:
        return float(sorted_values[low])
    weight = pos - low
    return float(sorted_values[low] + (sorted_values[high] - sorted_values[low]) * weight)


def _summary_stats(values: list[float]) -> dict[str, float]:
    if not values:
        return {"min": 0.0, "max": 0.0, "avg": 0.0, "p50": 0.0, "p90": 0.0}
    sorted_values = sorted(values)
    return {
        "min": float(sorted_values[0]),
        "max": float(sorted_values[-1]),
        "avg": float(sum(values) / len(values)),
        "p50": _percentile(sorted_values, 0.50),
        "p90": _percentile(sorted_values, 0.90),
    }


def _load_config(config_path: Optional[Path], seed: Optional[int]) -> SimulationConfig:
    config = SimulationConfig.from_yaml(config_path) if config_path else SimulationConfig()
    if seed is not None:
        config.seed = seed
    return config


def run_headless(
    steps: int,
    seed: Optional[int] = None,
    log_path: Optional[Path] = None,
    config_path: Optional[Path] = None,
    summary_path: Optional[Path] = None,
    summary_window: int = 500,
    report_every: int = 0,
) -> World:
    if steps < 0:
        raise ValueError(f"steps must be non-negative, got {steps}")
    config = _load_config(config_path, seed)
    world = World(config)
    logger.info(
        "Starting run: steps=%d seed=%d population=%s", steps, config.seed, config.initial_population
    )

    writer = None
    csv_file = None
    if log_path:
        csv_file = Path(log_path).open("w", newline="")
        writer = csv.writer(csv_file)
        writer.writerow(_HEADER)

    population_series: list[float] = []
    fitness_series: list[float] = []
    energy_series: list[float] = []

    try:
        for tick in range(steps):
            stats = world.step()
            population_series.append(float(stats.population))
            fitness_series.append(stats.max_fitness)
            energy_series.append(stats.avg_energy)

            if writer:
                writer.writerow(_format_row(world, stats, tick))

            if report_every > 0 and (tick + 1) % report_every == 0:
                logger.info(
                    "tick=%d population=%d max_fitness=%.1f avg_energy=%.1fJ",
                    tick + 1,
                    stats.population,
                    stats.max_fitness,
                    stats.avg_energy,
                )
                best = world.summarize_best()
                if best is not None:
                    logger.info("best %s", format_log_line(best))
    finally:
        if csv_file:
            csv_file.close()

    if summary_path:
        window = max(1, int(summary_window))
        tail_slice = slice(max(0, len(population_series) - window), len(population_series))
        best = world.summarize_best()
        summary = {
            "steps": steps,
            "seed": config.seed,
            "config": {
                "initial_population": config.initial_population,
                "food_spawn_rate": config.food_spawn_rate,
                "mutation_rate": config.mutation_rate,
                "energy_decay": config.energy_decay,
                "sensor_range": config.sensor_range,
                "speed_multiplier": config.speed_multiplier,
            },
            "population": _summary_stats(population_series),
            "max_fitness": _summary_stats(fitness_series),
            "avg_energy": _summary_stats(energy_series),
            "tail_window": {
                "window": window,
                "population": _summary_stats(population_series[tail_slice]),
                "max_fitness": _summary_stats(fitness_series[tail_slice]),
                "avg_energy": _summary_stats(energy_series[tail_slice]),
            },
            "best_agent": best.as_dict() if best is not None else None,
        }
        Path(summary_path).write_text(json.dumps(summary, indent=2))

    return world


def main() -> None:
    parser = argparse.ArgumentParser(description="Headless neurolife simulation")
    parser.add_argument("--steps", type=int, default=3000)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--config", type=Path, default=None, help="YAML file with simulation parameters")
    parser.add_argument("--log", type=Path, default=None, help="CSV file to write per-tick stats")
    parser.add_argument(
        "--summary",
        type=Path,
        default=None,
        help="Optional JSON file to write summary stats for the run.",
    )
    parser.add_argument(
        "--summary-window",
        type=int,
        default=500,
        help="Tail window size (ticks) for summary stats.",
    )
    parser.add_argument(
        "--report-every",
        type=int,
        default=0,
        help="Log a dashboard line every N ticks (0 disables).",
    )
    parser.add_argument(
        "--log-level",
        default="INFO",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
    )
    args = parser.parse_args()
    logging.basicConfig(level=args.log_level, format="> %(asctime)s %(name)s %(levelname)s %(message)s")
    run_headless(
        args.steps,
        args.seed,
        args.log,
        config_path=args.config,
        summary_path=args.summary,
        summary_window=args.summary_window,
        report_every=args.report_every,
    )


if __name__ == "__main__":
    main()
