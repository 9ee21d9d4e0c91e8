"""Built-in agents."""

from splituno.agents.heuristic_agent import HeuristicAgent
from splituno.agents.human_agent import HumanAgent
from splituno.agents.llm_agent import LLMAgent

__all__ = ["HeuristicAgent", "HumanAgent", "LLMAgent"]
