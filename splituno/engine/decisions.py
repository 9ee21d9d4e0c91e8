"""Decision requests: questions the engine asks its caller mid-resolution."""

from dataclasses import dataclass, field
from enum import Enum
from typing import Any, List, Optional

from splituno.engine.errors import InvalidIntent


class DecisionKind(str, Enum):
    """Answer domains a decision request can have."""

    CHOOSE_PLAYER = "choose_player"
    YES_NO = "yes_no"
    CHOOSE_CARD = "choose_card"
    CHOOSE_OPTION = "choose_option"


# choose_option answers
BONUS_DRAW_ACTION = "draw_action"
BONUS_OPPONENTS_DRAW = "opponents_draw"
TRUTH_PENALTY_SPLIT = "actor_takes_actions"
TRUTH_PENALTY_FIVE = "target_draws_five"

_YES = ("y", "yes", "true", "1")
_NO = ("n", "no", "false", "0")


@dataclass(frozen=True)
class DecisionRequest:
    """A typed question with an enumerated answer domain.

    ``player_id`` is the player whose decision it is. The arbiter fills
    in ``request_id`` when the request is handed to the caller.
    """

    kind: DecisionKind
    player_id: str
    prompt: str
    options: List[Any] = field(default_factory=list)
    excluded_player: Optional[str] = None
    topic: str = ""  # what is being decided, e.g. "steal", "challenge"
    request_id: str = ""

    def normalize(self, answer: Any) -> Any:
        """Return the option matching ``answer`` or raise InvalidIntent."""
        if self.kind == DecisionKind.YES_NO:
            if isinstance(answer, bool):
                return answer
            if isinstance(answer, str):
                text = answer.strip().lower()
                if text in _YES:
                    return True
                if text in _NO:
                    return False
            raise InvalidIntent(f"Expected yes/no for {self.request_id}, got {answer!r}")

        for option in self.options:
            if answer == option:
                return option
        raise InvalidIntent(
            f"{answer!r} is not an option for {self.request_id} "
            f"(options: {', '.join(str(o) for o in self.options)})"
        )


def choose_player(player_id: str, prompt: str, options: List[str], topic: str = "") -> DecisionRequest:
    return DecisionRequest(
        kind=DecisionKind.CHOOSE_PLAYER,
        player_id=player_id,
        prompt=prompt,
        options=list(options),
        excluded_player=player_id,
        topic=topic,
    )


def yes_no(player_id: str, prompt: str, topic: str = "") -> DecisionRequest:
    return DecisionRequest(
        kind=DecisionKind.YES_NO,
        player_id=player_id,
        prompt=prompt,
        options=[True, False],
        topic=topic,
    )


def choose_card(player_id: str, prompt: str, options: List[Any], topic: str = "") -> DecisionRequest:
    return DecisionRequest(
        kind=DecisionKind.CHOOSE_CARD,
        player_id=player_id,
        prompt=prompt,
        options=list(options),
        topic=topic,
    )


def choose_option(player_id: str, prompt: str, options: List[Any], topic: str = "") -> DecisionRequest:
    return DecisionRequest(
        kind=DecisionKind.CHOOSE_OPTION,
        player_id=player_id,
        prompt=prompt,
        options=list(options),
        topic=topic,
    )
