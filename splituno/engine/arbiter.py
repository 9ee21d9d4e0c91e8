"""The Arbiter: owns one match and drives its resolution steps."""

import dataclasses
import logging
from typing import Any, Dict, List, Mapping, Optional, Union

from splituno.config import GameConfig
from splituno.engine.actions import ACTION_HANDLERS, ActionOutcome, ActionPlay, resolve_action
from splituno.engine.card import Color, NUMBER_VALUES
from splituno.engine.decisions import DecisionRequest
from splituno.engine.errors import InvalidIntent
from splituno.engine.game_state import GameState, PlayerView
from splituno.engine.rules import Resolution, RoundOutcome, init_game, resolve_number_round

logger = logging.getLogger(__name__)

Outcome = Union[RoundOutcome, ActionOutcome]


class Arbiter:
    """Single-match rules arbiter.

    Intents go in through ``submit_number_round`` and ``submit_action``.
    Either returns the finished outcome, or a DecisionRequest when the
    engine needs an answer; answer it with ``resolve_decision`` until an
    outcome comes back. Only one intent is in flight at a time.
    """

    def __init__(self, state: GameState, config: Optional[GameConfig] = None):
        self._state = state
        self._config = config or GameConfig()
        self._resolution: Optional[Resolution[Outcome]] = None
        self._pending: Optional[DecisionRequest] = None
        self._request_seq = 0

    @classmethod
    def new_game(cls, player_ids: List[str], config: Optional[GameConfig] = None) -> "Arbiter":
        config = config or GameConfig()
        return cls(init_game(player_ids, config), config)

    @property
    def state(self) -> GameState:
        return self._state

    @property
    def config(self) -> GameConfig:
        return self._config

    @property
    def pending(self) -> Optional[DecisionRequest]:
        """The decision the engine is waiting on, if any."""
        return self._pending

    def view(self, player_id: str) -> PlayerView:
        self._require_player(player_id, "player")
        return PlayerView.from_state(self._state, player_id)

    # Intents

    def submit_number_round(
        self,
        plays: Mapping[str, int],
        targets: Optional[Mapping[str, str]] = None,
    ) -> Union[RoundOutcome, DecisionRequest]:
        """Start a number round with one declared value per non-blocked player.

        ``targets`` optionally names, for players who played 0 or 7, the
        opponent their effect hits. Missing ones are asked for.
        """
        self._require_idle()
        targets = dict(targets or {})
        checked: Dict[str, int] = {}

        for pid, value in plays.items():
            self._require_player(pid, "player")
            if self._state.player(pid).blocked:
                raise InvalidIntent(f"{pid} is blocked and sits out this round")
            if isinstance(value, bool) or not isinstance(value, int) or value not in NUMBER_VALUES:
                raise InvalidIntent(f"{pid} declared {value!r}; number cards are 0-9")
            checked[pid] = value

        missing = [p.player_id for p in self._state.players
                   if not p.blocked and p.player_id not in checked]
        if missing:
            raise InvalidIntent(f"Missing plays for: {', '.join(missing)}")

        for pid, target in targets.items():
            if pid not in checked:
                raise InvalidIntent(f"{pid} is not playing this round")
            self._require_target(pid, target)

        logger.debug("Number round %d: %s", self._state.round_number + 1, checked)
        return self._start(resolve_number_round(self._state, checked, targets, self._config))

    def submit_action(self, actor: str, play: ActionPlay) -> Union[ActionOutcome, DecisionRequest]:
        """Play one action card for ``actor``."""
        self._require_idle()
        self._require_player(actor, "actor")
        if type(play) not in ACTION_HANDLERS:
            raise InvalidIntent(f"Unknown action: {play!r}")
        if play.target is not None:
            self._require_target(actor, play.target)
        color = getattr(play, "color", None)
        if color is not None and not isinstance(color, Color):
            try:
                play = dataclasses.replace(play, color=Color(color))
            except ValueError:
                raise InvalidIntent(f"Unknown color: {color!r}") from None

        logger.debug("%s plays %s", actor, play)
        return self._start(resolve_action(self._state, actor, play))

    def resolve_decision(self, request_id: str, answer: Any) -> Union[Outcome, DecisionRequest]:
        """Answer the pending decision and continue the suspended resolution."""
        if self._pending is None:
            raise InvalidIntent("No decision is pending")
        if request_id != self._pending.request_id:
            raise InvalidIntent(
                f"Decision {request_id!r} is not pending (waiting on {self._pending.request_id})"
            )
        value = self._pending.normalize(answer)
        logger.debug("%s answered %s with %r", self._pending.player_id, request_id, value)
        return self._advance(value)

    # Manual corrections

    def adjust(self, player_id: str, number_count: Optional[int] = None,
               action_count: Optional[int] = None) -> None:
        """Overwrite a player's counts. Negative values clamp to zero."""
        self._require_idle(allow_game_over=True)
        self._require_player(player_id, "player")
        self._state.set_counts(player_id, number_count, action_count)

    def reset_streaks(self) -> None:
        self._require_idle(allow_game_over=True)
        for p in self._state.players:
            self._state.set_streak(p.player_id, 0, "manual adjustment")

    def end_game(self) -> None:
        """Stop the match without a winner."""
        self._require_idle()
        self._state.declare_winner(None, "ended by the arbiter")

    # Internals

    def _start(self, resolution: Resolution[Outcome]) -> Union[Outcome, DecisionRequest]:
        self._resolution = resolution
        return self._advance(None)

    def _advance(self, answer: Any) -> Union[Outcome, DecisionRequest]:
        if self._resolution is None:
            raise RuntimeError("No resolution in progress")
        try:
            request = self._resolution.send(answer)
        except StopIteration as stop:
            self._resolution = None
            self._pending = None
            outcome = stop.value
            if outcome.game_over:
                logger.info("Game over, winner: %s", outcome.winner)
            return outcome
        self._request_seq += 1
        self._pending = dataclasses.replace(request, request_id=f"d{self._request_seq}")
        return self._pending

    def _require_idle(self, allow_game_over: bool = False) -> None:
        if self._pending is not None:
            raise InvalidIntent(
                f"Decision {self._pending.request_id} must be resolved first"
            )
        if self._state.game_over and not allow_game_over:
            raise InvalidIntent("The game is over")

    def _require_player(self, player_id: Any, role: str) -> None:
        if not isinstance(player_id, str) or not self._state.has_player(player_id):
            raise InvalidIntent(f"Unknown {role}: {player_id!r}")

    def _require_target(self, actor: str, target: Any) -> None:
        self._require_player(target, "target")
        if target == actor:
            raise InvalidIntent(f"{actor} cannot target themselves")
