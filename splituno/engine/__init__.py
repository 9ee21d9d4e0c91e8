"""Rules engine for Split UNO."""

from splituno.engine.actions import (
    ActionOutcome,
    ActionPlay,
    Block,
    ColorChange,
    Dare,
    DrawFour,
    DrawTwo,
    Reverse,
    Truth,
    make_action,
)
from splituno.engine.arbiter import Arbiter
from splituno.engine.card import ActionKind, Color, parse_action_kind, parse_color
from splituno.engine.decisions import DecisionKind, DecisionRequest
from splituno.engine.deck import Deck, create_deck
from splituno.engine.errors import InvalidIntent
from splituno.engine.game_state import GameState, Mutation, Player, PlayerView
from splituno.engine.rules import RoundOutcome, init_game

__all__ = [
    "ActionKind",
    "ActionOutcome",
    "ActionPlay",
    "Arbiter",
    "Block",
    "Color",
    "ColorChange",
    "Dare",
    "DecisionKind",
    "DecisionRequest",
    "Deck",
    "DrawFour",
    "DrawTwo",
    "GameState",
    "InvalidIntent",
    "Mutation",
    "Player",
    "PlayerView",
    "Reverse",
    "RoundOutcome",
    "Truth",
    "create_deck",
    "init_game",
    "make_action",
    "parse_action_kind",
    "parse_color",
]
