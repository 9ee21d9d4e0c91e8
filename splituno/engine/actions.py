"""Action cards: one dataclass per kind, one handler per dataclass."""

from dataclasses import dataclass, field
from typing import Callable, Dict, List, Optional, Union

from splituno.engine.card import DRAW_AMOUNTS, ActionKind, Color, parse_action_kind, parse_color
from splituno.engine.decisions import (
    TRUTH_PENALTY_FIVE,
    TRUTH_PENALTY_SPLIT,
    choose_card,
    choose_option,
    yes_no,
)
from splituno.engine.game_state import GameState, Mutation
from splituno.engine.rules import Resolution, evaluate_wins, nominate_target


@dataclass
class Block:
    """Target sits out the next number round unless they block back."""

    target: Optional[str] = None
    kind = ActionKind.BLOCK


@dataclass
class Reverse:
    """Actor and target exchange their entire hands."""

    target: Optional[str] = None
    kind = ActionKind.REVERSE


@dataclass
class ColorChange:
    """Everyone sheds a number card. The color is recorded, not enforced."""

    target: Optional[str] = None
    color: Optional[Color] = None
    kind = ActionKind.COLOR_CHANGE


@dataclass
class DrawTwo:
    target: Optional[str] = None
    kind = ActionKind.DRAW_TWO


@dataclass
class DrawFour:
    target: Optional[str] = None
    kind = ActionKind.DRAW_FOUR


@dataclass
class Truth:
    """Target answers a question or the actor picks their penalty."""

    target: Optional[str] = None
    kind = ActionKind.TRUTH


@dataclass
class Dare:
    """Refusing a dare forfeits the game to the actor."""

    target: Optional[str] = None
    kind = ActionKind.DARE


ActionPlay = Union[Block, Reverse, ColorChange, DrawTwo, DrawFour, Truth, Dare]


@dataclass
class ActionOutcome:
    """Result of one action card."""

    actor: str
    kind: ActionKind
    target: Optional[str]
    mutations: List[Mutation] = field(default_factory=list)
    game_over: bool = False
    winner: Optional[str] = None


def make_action(
    kind: Union[ActionKind, str],
    target: Optional[str] = None,
    color: Optional[Union[Color, str]] = None,
) -> ActionPlay:
    """Build an action play from its kind (enum or name such as "+2")."""
    if not isinstance(kind, ActionKind):
        kind = parse_action_kind(kind)
    if color is not None and not isinstance(color, Color):
        color = parse_color(color)
    if kind == ActionKind.COLOR_CHANGE:
        return ColorChange(target=target, color=color)
    return _PLAY_TYPES[kind](target=target)


def _resolve_block(state: GameState, actor: str, play: Block) -> Resolution[str]:
    target = yield from nominate_target(state, actor, "Who do you block?", play.target, "block_target")
    countered = False
    if state.player(target).action_count > 0:
        countered = yield yes_no(target, f"{actor} blocks you. Block back?", "block_counter")
    if countered:
        for pid in (actor, target):
            state.shed_number(pid, 1, "blocks cancelled out")
            state.shed_action(pid, 1, "blocks cancelled out")
    else:
        state.set_blocked(target, True, f"blocked by {actor}")
        state.shed_action(actor, 1, "played block")
    return target


def _resolve_reverse(state: GameState, actor: str, play: Reverse) -> Resolution[str]:
    target = yield from nominate_target(
        state, actor, "Whose hand do you swap with?", play.target, "reverse_target"
    )
    # The reverse card leaves the actor's hand before the hands change owners.
    state.shed_action(actor, 1, "played reverse")
    state.swap_hands(actor, target, f"reverse between {actor} and {target}")
    return target


def _resolve_color_change(state: GameState, actor: str, play: ColorChange) -> Resolution[str]:
    color = play.color
    if color is None:
        color = yield choose_option(actor, "Which color must be played next?", list(Color), "color")
    target = yield from nominate_target(
        state, actor, "Who must play that color?", play.target, "color_target"
    )
    for p in state.players:
        state.shed_number(p.player_id, 1, f"color change by {actor}")
    state.shed_action(actor, 1, "played color change")
    state.chosen_color = color
    state.color_target = target
    return target


def _resolve_draw(state: GameState, actor: str, play: Union[DrawTwo, DrawFour]) -> Resolution[str]:
    amount = DRAW_AMOUNTS[play.kind]
    target = yield from nominate_target(
        state, actor, f"Who draws {amount}?", play.target, "draw_target"
    )

    counter: Optional[ActionKind] = None
    if state.player(target).action_count > 0:
        if (yield yes_no(target, f"{actor} plays +{amount} on you. Counter with a +2 or +4?", "draw_counter")):
            counter = yield choose_card(
                target, "Which card do you counter with?",
                [ActionKind.DRAW_TWO, ActionKind.DRAW_FOUR],
                "draw_counter_card",
            )

    if counter is None:
        state.draw_number(target, amount, f"+{amount} from {actor}")
        state.shed_action(actor, 1, f"played +{amount}")
        return target

    counter_amount = DRAW_AMOUNTS[counter]
    state.shed_action(actor, 1, f"played +{amount}")
    state.shed_action(target, 1, f"countered with +{counter_amount}")
    if counter_amount == amount:
        state.draw_number(actor, 1, "equal draw cards")
        state.draw_number(target, 1, "equal draw cards")
    else:
        # Lower card loses the exchange: 1 for the loss plus the gap.
        loser = actor if amount < counter_amount else target
        state.draw_number(
            loser, 1 + abs(amount - counter_amount),
            f"+{min(amount, counter_amount)} lost to +{max(amount, counter_amount)}",
        )
    return target


def _resolve_truth(state: GameState, actor: str, play: Truth) -> Resolution[str]:
    target = yield from nominate_target(state, actor, "Who must tell the truth?", play.target, "truth_target")
    answered = yield yes_no(target, f"{actor} asks you a truth. Do you answer?", "truth_answer")
    if not answered:
        penalty = yield choose_option(
            actor,
            f"{target} refused: take 2 action cards while {target} draws 2, "
            f"or {target} draws 5?",
            [TRUTH_PENALTY_SPLIT, TRUTH_PENALTY_FIVE],
            "truth_penalty",
        )
        if penalty == TRUTH_PENALTY_SPLIT:
            state.draw_action(actor, 2, f"{target} refused a truth")
            state.draw_number(target, 2, "refused a truth")
        else:
            state.draw_number(target, 5, "refused a truth")
    state.shed_action(actor, 1, "played truth")
    state.shed_number(actor, 1, "played truth")
    return target


def _resolve_dare(state: GameState, actor: str, play: Dare) -> Resolution[str]:
    target = yield from nominate_target(state, actor, "Who do you dare?", play.target, "dare_target")
    accepted = yield yes_no(target, f"{actor} dares you. Do you accept?", "dare_accept")
    if not accepted:
        state.declare_winner(actor, f"{target} refused a dare")
        return target
    state.shed_action(actor, 1, "played dare")
    state.shed_number(actor, 1, "played dare")
    return target


ACTION_HANDLERS: Dict[type, Callable[..., Resolution[str]]] = {
    Block: _resolve_block,
    Reverse: _resolve_reverse,
    ColorChange: _resolve_color_change,
    DrawTwo: _resolve_draw,
    DrawFour: _resolve_draw,
    Truth: _resolve_truth,
    Dare: _resolve_dare,
}

_PLAY_TYPES = {cls.kind: cls for cls in ACTION_HANDLERS}


def resolve_action(state: GameState, actor: str, play: ActionPlay) -> Resolution[ActionOutcome]:
    """Resolve one action card, then check whether anyone is out of number cards."""
    start = len(state.history)
    handler = ACTION_HANDLERS[type(play)]
    target = yield from handler(state, actor, play)
    if not state.game_over:
        yield from evaluate_wins(state)
    return ActionOutcome(
        actor=actor,
        kind=play.kind,
        target=target,
        mutations=state.history[start:],
        game_over=state.game_over,
        winner=state.winner,
    )
