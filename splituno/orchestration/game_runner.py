"""Single game runner."""

from __future__ import annotations

import logging
from dataclasses import dataclass
from typing import TYPE_CHECKING, Optional, Union

from splituno.config import GameConfig
from splituno.engine import (
    ActionOutcome,
    Arbiter,
    DecisionRequest,
    InvalidIntent,
    RoundOutcome,
)

if TYPE_CHECKING:
    from splituno.agent.protocol import AgentProtocol

logger = logging.getLogger(__name__)

MAX_DECISIONS_PER_INTENT = 200


@dataclass
class GameResult:
    """Result of a completed game."""

    winner: Optional[str]
    num_rounds: int
    player_ids: tuple[str, ...]
    history_size: int


class GameRunner:
    """Runs a single Split UNO game to completion.

    Each round every non-blocked player bids through its agent; a sole
    round winner may then play one action card.
    """

    def __init__(
        self,
        agents: dict[str, "AgentProtocol"],
        config: Optional[GameConfig] = None,
        max_rounds: int = 500,
    ):
        self._agents = agents
        self._config = config or GameConfig()
        self._max_rounds = max_rounds
        self.arbiter: Optional[Arbiter] = None

    def run(self) -> GameResult:
        """Run the game and return the result."""
        player_ids = list(self._agents.keys())
        arbiter = Arbiter.new_game(player_ids, self._config)
        self.arbiter = arbiter
        state = arbiter.state

        while not state.game_over and state.round_number < self._max_rounds:
            plays = {
                p.player_id: self._agents[p.player_id].choose_number(
                    arbiter.view(p.player_id), p.player_id
                )
                for p in state.players
                if not p.blocked
            }
            outcome = self._drive(arbiter, arbiter.submit_number_round(plays))
            if state.game_over or len(outcome.winners) != 1:
                continue

            actor = outcome.winners[0]
            play = self._agents[actor].choose_action(arbiter.view(actor), actor)
            if play is None:
                continue
            try:
                self._drive(arbiter, arbiter.submit_action(actor, play))
            except InvalidIntent as e:
                logger.warning("Rejected action from %s: %s", actor, e)

        return GameResult(
            winner=state.winner,
            num_rounds=state.round_number,
            player_ids=tuple(player_ids),
            history_size=len(state.history),
        )

    def _drive(
        self,
        arbiter: Arbiter,
        result: Union[RoundOutcome, ActionOutcome, DecisionRequest],
    ) -> Union[RoundOutcome, ActionOutcome]:
        """Route decision requests to the deciding agent until an outcome arrives."""
        for _ in range(MAX_DECISIONS_PER_INTENT):
            if not isinstance(result, DecisionRequest):
                return result
            agent = self._agents[result.player_id]
            answer = agent.decide(arbiter.view(result.player_id), result)
            result = arbiter.resolve_decision(result.request_id, answer)
        raise RuntimeError(f"No outcome after {MAX_DECISIONS_PER_INTENT} decisions")
