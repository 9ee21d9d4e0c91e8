"""Agent protocol - interface that heuristic, LLM and human agents implement."""

from typing import Any, Optional, Protocol

from splituno.engine import ActionPlay, DecisionRequest, PlayerView


class AgentProtocol(Protocol):
    """Interface for Split UNO-playing agents."""

    @property
    def name(self) -> str:
        """Display name for the agent."""
        ...

    def choose_number(self, player_view: PlayerView, player_id: str) -> int:
        """Pick the number card (0-9) to reveal this round."""
        ...

    def choose_action(
        self,
        player_view: PlayerView,
        player_id: str,
    ) -> Optional[ActionPlay]:
        """Pick an action card to play after winning a round, or None to pass."""
        ...

    def decide(self, player_view: PlayerView, request: DecisionRequest) -> Any:
        """Answer a decision request.

        Args:
            player_view: Public game information for the deciding player.
            request: The pending request; ``request.player_id`` is this agent.

        Returns:
            One of ``request.options`` (True/False for yes/no requests).
        """
        ...
