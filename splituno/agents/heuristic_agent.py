"""Heuristic agent - a rule-of-thumb opponent that needs no API key."""

import random
from typing import Any, List, Optional

from splituno.engine import (
    ActionKind,
    ActionPlay,
    Color,
    DecisionKind,
    DecisionRequest,
    PlayerView,
    make_action,
)
from splituno.engine.card import NUMBER_VALUES
from splituno.engine.decisions import BONUS_DRAW_ACTION, BONUS_OPPONENTS_DRAW, TRUTH_PENALTY_FIVE

# Action deck makeup, used to guess what a counted hand holds.
ACTION_DECK_MIX = (
    [ActionKind.BLOCK] * 8
    + [ActionKind.REVERSE] * 8
    + [ActionKind.DRAW_TWO] * 8
    + [ActionKind.COLOR_CHANGE] * 4
    + [ActionKind.DRAW_FOUR] * 4
    + [ActionKind.TRUTH] * 2
    + [ActionKind.DARE] * 2
)

CRITICAL_COUNT = 4  # opponent this close to winning gets punished
PENALTY_SEVEN_BELOW = 5
HOARD_LIMIT = 3


class HeuristicAgent:
    """Plays high, punishes a leader, and always fights back.

    Split UNO hands are counts only, so the faces the agent "holds" are
    sampled from a seeded RNG each time it has to look at its hand.
    """

    def __init__(self, name: str = "heuristic", seed: Optional[int] = None):
        self._name = name
        self._rng = random.Random(seed)

    @property
    def name(self) -> str:
        return self._name

    def _sample_numbers(self, count: int) -> List[int]:
        return [self._rng.choice(NUMBER_VALUES) for _ in range(min(count, 10))]

    def _sample_actions(self, count: int) -> List[ActionKind]:
        return [self._rng.choice(ACTION_DECK_MIX) for _ in range(count)]

    @staticmethod
    def _leader(view: PlayerView, options: Optional[List[str]] = None) -> str:
        """Opponent with the fewest number cards."""
        candidates = options or [pid for pid in view.number_counts if pid != view.player_id]
        return min(candidates, key=lambda pid: view.number_counts[pid])

    def choose_number(self, player_view: PlayerView, player_id: str) -> int:
        hand = self._sample_numbers(max(1, player_view.my_number_count))
        opponent_low = min(
            count for pid, count in player_view.number_counts.items() if pid != player_id
        )
        if 7 in hand and opponent_low < PENALTY_SEVEN_BELOW:
            return 7
        return max(hand)

    def choose_action(self, player_view: PlayerView, player_id: str) -> Optional[ActionPlay]:
        if player_view.my_action_count == 0:
            return None

        hand = self._sample_actions(player_view.my_action_count)
        target = self._leader(player_view)
        critical = player_view.number_counts[target] <= CRITICAL_COUNT

        best: Optional[ActionKind] = None
        if critical:
            for kind in (ActionKind.DRAW_FOUR, ActionKind.DRAW_TWO, ActionKind.BLOCK):
                if kind in hand:
                    best = kind
                    break
        if best is None and len(hand) > HOARD_LIMIT:
            best = self._rng.choice(hand)
        if best is None:
            return None

        color = self._rng.choice(list(Color)) if best == ActionKind.COLOR_CHANGE else None
        return make_action(best, target=target, color=color)

    def decide(self, player_view: PlayerView, request: DecisionRequest) -> Any:
        if request.kind == DecisionKind.CHOOSE_PLAYER:
            if request.topic == "steal":
                return max(request.options, key=lambda pid: player_view.number_counts[pid])
            return self._leader(player_view, request.options)

        if request.kind == DecisionKind.YES_NO:
            if request.topic == "challenge":
                # The last card in hand cannot be spent on a challenge.
                return player_view.my_number_count + player_view.my_action_count > 1
            return True

        if request.kind == DecisionKind.CHOOSE_CARD:
            if ActionKind.DRAW_FOUR in request.options:
                return ActionKind.DRAW_FOUR
            return request.options[0]

        if request.topic == "bonus":
            others = [c for pid, c in player_view.number_counts.items() if pid != player_view.player_id]
            if min(others) <= CRITICAL_COUNT:
                return BONUS_OPPONENTS_DRAW
            return BONUS_DRAW_ACTION
        if request.topic == "truth_penalty":
            return TRUTH_PENALTY_FIVE
        return self._rng.choice(request.options)
