"""Card kinds and colors for Split UNO."""

from enum import Enum

from splituno.engine.errors import InvalidIntent


class Color(str, Enum):
    """Card colors. Only recorded for display, never enforced."""

    RED = "red"
    BLUE = "blue"
    GREEN = "green"
    YELLOW = "yellow"


class ActionKind(str, Enum):
    """The closed set of action cards."""

    BLOCK = "block"
    REVERSE = "reverse"
    COLOR_CHANGE = "color_change"
    DRAW_TWO = "draw_two"
    DRAW_FOUR = "draw_four"
    TRUTH = "truth"
    DARE = "dare"


NUMBER_VALUES = tuple(range(10))

STEAL_VALUE = 0
PENALTY_VALUE = 7

DRAW_AMOUNTS = {
    ActionKind.DRAW_TWO: 2,
    ActionKind.DRAW_FOUR: 4,
}

# Names accepted from the arbiter's table talk, on top of the enum values.
ACTION_ALIASES = {
    "BLOCK": ActionKind.BLOCK,
    "SKIP": ActionKind.BLOCK,
    "REVERSE": ActionKind.REVERSE,
    "COLOR": ActionKind.COLOR_CHANGE,
    "WILD": ActionKind.COLOR_CHANGE,
    "+2": ActionKind.DRAW_TWO,
    "+4": ActionKind.DRAW_FOUR,
    "TRUTH": ActionKind.TRUTH,
    "DARE": ActionKind.DARE,
}

COLOR_ALIASES = {
    "R": Color.RED,
    "B": Color.BLUE,
    "G": Color.GREEN,
    "Y": Color.YELLOW,
}


def parse_action_kind(raw: str) -> ActionKind:
    """Parse an action name such as "+2", "skip" or "draw_two"."""
    text = raw.strip()
    if text.upper() in ACTION_ALIASES:
        return ACTION_ALIASES[text.upper()]
    try:
        return ActionKind(text.lower())
    except ValueError:
        raise InvalidIntent(f"Unknown action card: {raw!r}") from None


def parse_color(raw: str) -> Color:
    """Parse a color name or its initial (R/Y/G/B)."""
    text = raw.strip()
    if text.upper() in COLOR_ALIASES:
        return COLOR_ALIASES[text.upper()]
    try:
        return Color(text.lower())
    except ValueError:
        raise InvalidIntent(f"Unknown color: {raw!r}") from None
