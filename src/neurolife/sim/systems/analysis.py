from __future__ import annotations

from ..core.agent import Agent
from ..core.brain import genome_stats
from ..types.snapshot import AgentSummary


def summarize_agent(agent: Agent) -> AgentSummary:
    return AgentSummary(
        id=agent.id,
        generation=agent.generation,
        age=agent.age,
        energy=agent.energy,
        fitness=agent.fitness,
        color=agent.color,
        genome=genome_stats(agent.genome),
    )


def format_log_line(summary: AgentSummary) -> str:
    genome = summary.genome
    return (
        f"AGENT_{summary.id} gen={summary.generation} age={summary.age} "
        f"energy={summary.energy:.1f} net={genome['inputs']}-{genome['hidden']}-{genome['outputs']} "
        f"avg_w={genome['avg_weight']:+.3f} bias_trend={genome['bias_trend']:+.3f}"
    )
