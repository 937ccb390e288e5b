"""
Bots Module - Autoplay policies.

Policies drive a TurnController without a human, for simulation
summaries and engine fuzzing.
"""

from .policy import (
    Policy,
    Decision,
    DecisionType,
    RandomPolicy,
    GreedyPolicy,
    EpisodeResult,
    apply_decision,
    run_episode,
)

POLICIES = {
    "random": RandomPolicy,
    "greedy": GreedyPolicy,
}

__all__ = [
    "Policy",
    "Decision",
    "DecisionType",
    "RandomPolicy",
    "GreedyPolicy",
    "EpisodeResult",
    "apply_decision",
    "run_episode",
    "POLICIES",
]
