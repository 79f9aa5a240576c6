from ratopoly.agents.base import Agent
from ratopoly.agents.heuristic import HeuristicAgent
from ratopoly.agents.policy import Decision, apply_decision, decide_action, describe_role
from ratopoly.agents.random import RandomAgent

__all__ = [
    "Agent",
    "Decision",
    "HeuristicAgent",
    "RandomAgent",
    "apply_decision",
    "decide_action",
    "describe_role",
]
