"""Split UNO rules: setup, number rounds, streak bonuses and the win check.

Every resolution step is a generator. It yields a DecisionRequest whenever
it needs an answer from outside and is resumed with that answer via
``send``; its return value is the outcome. The Arbiter drives them.
"""

from dataclasses import dataclass, field
from typing import Any, Callable, Dict, Generator, List, Optional, TypeVar

from splituno.config import MAX_PLAYERS, MIN_PLAYERS, GameConfig
from splituno.engine.card import DRAW_AMOUNTS, PENALTY_VALUE, STEAL_VALUE, ActionKind
from splituno.engine.decisions import (
    BONUS_DRAW_ACTION,
    BONUS_OPPONENTS_DRAW,
    DecisionRequest,
    choose_card,
    choose_option,
    choose_player,
    yes_no,
)
from splituno.engine.deck import create_deck
from splituno.engine.game_state import GameState, Mutation, Player

T = TypeVar("T")
Resolution = Generator[DecisionRequest, Any, T]


@dataclass
class RoundOutcome:
    """Result of one number round."""

    round_number: int
    plays: Dict[str, int]
    skipped: tuple[str, ...]  # blocked players who sat out
    winners: tuple[str, ...]  # more than one on a tie
    penalized: tuple[str, ...]  # players who took a penalty draw
    mutations: List[Mutation] = field(default_factory=list)
    game_over: bool = False
    winner: Optional[str] = None

    @property
    def tie(self) -> bool:
        return len(self.winners) > 1


def init_game(
    player_ids: List[str],
    config: Optional[GameConfig] = None,
) -> GameState:
    """Create initial game state: 20 number cards each, no action cards."""
    config = config or GameConfig()
    if not MIN_PLAYERS <= len(player_ids) <= MAX_PLAYERS:
        raise ValueError(
            f"Split UNO needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(player_ids)}"
        )
    if len(set(player_ids)) != len(player_ids):
        raise ValueError(f"Player ids must be unique: {player_ids}")
    if any(not pid for pid in player_ids):
        raise ValueError("Player ids cannot be empty")

    deck = create_deck(
        len(player_ids),
        hand_size=config.hand_size,
        number_deck_size=config.number_deck_size,
        action_deck_size=config.action_deck_size,
    )
    players = [Player(player_id=pid, number_count=config.hand_size) for pid in player_ids]
    return GameState(players=players, deck=deck)


def nominate_target(
    state: GameState,
    player_id: str,
    prompt: str,
    preset: Optional[str] = None,
    topic: str = "target",
    eligible: Optional[Callable[[Player], bool]] = None,
) -> Resolution[Optional[str]]:
    """Ask ``player_id`` to pick an opponent, unless the pick is already known.

    ``eligible`` narrows the opponents on offer. Returns None when no
    opponent qualifies.
    """
    if preset is not None:
        return preset
    options = [
        p.player_id for p in state.opponents(player_id)
        if eligible is None or eligible(p)
    ]
    if not options:
        return None
    if len(options) == 1:
        return options[0]
    target = yield choose_player(player_id, prompt, options, topic)
    return target


def resolve_number_round(
    state: GameState,
    plays: Dict[str, int],
    targets: Dict[str, str],
    config: GameConfig,
) -> Resolution[RoundOutcome]:
    """Resolve one simultaneous bid. ``plays`` has already been validated."""
    start = len(state.history)
    state.round_number += 1

    # Block lasts exactly one round, whatever happens in it.
    skipped = tuple(p.player_id for p in state.players if p.blocked)
    for pid in skipped:
        state.set_blocked(pid, False, "sat out the round")

    participants = [pid for pid in state.player_ids if pid in plays]
    if not participants:
        return RoundOutcome(
            round_number=state.round_number,
            plays={},
            skipped=skipped,
            winners=(),
            penalized=(),
            mutations=state.history[start:],
        )

    best = -1
    leaders: List[str] = []
    for pid in participants:
        value = plays[pid]
        if value > best:
            best = value
            leaders = [pid]
        elif value == best:
            leaders.append(pid)

    penalized: List[str] = []

    for pid in participants:
        if plays[pid] != STEAL_VALUE:
            continue
        victim = yield from nominate_target(
            state, pid, f"{pid} played 0: whose number card do you take?",
            targets.get(pid), topic="steal",
            eligible=lambda p: p.number_count > 0,
        )
        if victim is None:
            continue
        state.transfer_number(victim, pid, f"{pid} played 0 and took a card from {victim}")

    for pid in participants:
        if plays[pid] != PENALTY_VALUE:
            continue
        victim = yield from nominate_target(
            state, pid, f"{pid} played 7: who takes the penalty?",
            targets.get(pid), topic="penalty_seven",
        )
        reason = f"penalty 7 from {pid}"
        state.draw_number(victim, 2, reason)
        state.draw_action(victim, 1, reason)
        penalized.append(victim)

    if len(leaders) == 1:
        winner = leaders[0]
        state.shed_number(winner, 1, f"won the round with {best}")
        state.set_streak(winner, state.player(winner).consecutive_wins + 1, "won the round")
        for pid in participants:
            if pid == winner:
                continue
            state.set_streak(pid, 0, "lost the round")
            state.draw_number(pid, 1, f"lost the round to {winner}")
            penalized.append(pid)
    else:
        for pid in leaders:
            state.shed_number(pid, 1, f"tied the round with {best}")
        # Streaks reset on a tie and everyone who played draws one.
        for pid in participants:
            state.set_streak(pid, 0, "tied round")
            state.draw_number(pid, 1, "tied round")
            penalized.append(pid)

    yield from evaluate_bonuses(state, config)
    yield from evaluate_wins(state)

    return RoundOutcome(
        round_number=state.round_number,
        plays={pid: plays[pid] for pid in participants},
        skipped=skipped,
        winners=tuple(leaders),
        penalized=tuple(penalized),
        mutations=state.history[start:],
        game_over=state.game_over,
        winner=state.winner,
    )


def evaluate_bonuses(state: GameState, config: GameConfig) -> Resolution[None]:
    """Offer the streak reward to every player on a winning streak."""
    for p in state.players:
        if p.consecutive_wins < config.bonus_streak:
            continue
        choice = yield choose_option(
            p.player_id,
            f"{p.player_id} won {p.consecutive_wins} rounds in a row: "
            "draw 1 action card, or every opponent draws 2 number cards?",
            [BONUS_DRAW_ACTION, BONUS_OPPONENTS_DRAW],
            topic="bonus",
        )
        if choice == BONUS_DRAW_ACTION:
            state.draw_action(p.player_id, 1, "streak bonus")
        else:
            for opp in state.opponents(p.player_id):
                state.draw_number(opp.player_id, 2, f"streak bonus for {p.player_id}")
        state.set_streak(p.player_id, 0, "streak bonus claimed")


def evaluate_wins(state: GameState) -> Resolution[Optional[str]]:
    """Run the challenge phase for each player out of number cards, in order.

    Stops at the first player whose win goes unchallenged.
    """
    for p in state.players:
        if state.game_over:
            break
        if p.number_count == 0:
            yield from _challenge_phase(state, p.player_id)
    return state.winner


def _challenge_phase(state: GameState, player_id: str) -> Resolution[None]:
    # One challenge per pass; an empty number deck can leave the player at 0.
    player = state.player(player_id)
    while player.number_count == 0:
        challenger = yield from _find_challenger(state, player_id)
        if challenger is None:
            state.declare_winner(player_id, "out of number cards, unchallenged")
            return

        card = yield choose_card(
            challenger,
            f"Which card do you challenge {player_id} with?",
            [ActionKind.DRAW_TWO, ActionKind.DRAW_FOUR],
            topic="challenge_card",
        )
        holder = state.player(challenger)
        if holder.number_count + holder.action_count <= 1:
            # The last card in hand cannot be spent on a challenge. The void
            # challenge still stops this check; no win is declared this pass.
            state.draw_number(challenger, 1, "tried to challenge with their only card")
            return

        amount = DRAW_AMOUNTS[card]
        state.shed_action(challenger, 1, f"challenged {player_id}")
        state.draw_number(player_id, amount, f"challenged by {challenger}")


def _find_challenger(state: GameState, player_id: str) -> Resolution[Optional[str]]:
    """Ask each opponent holding action cards, in order, whether they challenge."""
    for opp in state.opponents(player_id):
        if opp.action_count == 0:
            continue
        wants = yield yes_no(
            opp.player_id,
            f"{player_id} is out of number cards. Challenge with a +2 or +4?",
            topic="challenge",
        )
        if wants:
            return opp.player_id
    return None
