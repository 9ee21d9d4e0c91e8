"""Game configuration, optionally read from the environment."""

import os
from dataclasses import dataclass

from dotenv import load_dotenv

NUMBER_DECK_SIZE = 108
ACTION_DECK_SIZE = 32
HAND_SIZE = 20

MIN_PLAYERS = 2
MAX_PLAYERS = 6


def _env_int(name: str, default: int) -> int:
    raw = os.environ.get(name)
    if raw is None or raw.strip() == "":
        return default
    try:
        return int(raw)
    except ValueError:
        raise ValueError(f"{name} must be an integer, got {raw!r}") from None


@dataclass(frozen=True)
class GameConfig:
    """Setup parameters for a match."""

    hand_size: int = HAND_SIZE
    number_deck_size: int = NUMBER_DECK_SIZE
    action_deck_size: int = ACTION_DECK_SIZE
    bonus_streak: int = 2

    def __post_init__(self) -> None:
        if self.hand_size < 1:
            raise ValueError(f"hand_size must be positive, got {self.hand_size}")
        if self.number_deck_size < 0 or self.action_deck_size < 0:
            raise ValueError("Deck sizes cannot be negative")
        if self.bonus_streak < 1:
            raise ValueError(f"bonus_streak must be positive, got {self.bonus_streak}")

    @classmethod
    def from_env(cls) -> "GameConfig":
        """Build a config from SPLITUNO_* variables (and a .env file, if any)."""
        load_dotenv()
        return cls(
            hand_size=_env_int("SPLITUNO_HAND_SIZE", HAND_SIZE),
            number_deck_size=_env_int("SPLITUNO_NUMBER_DECK", NUMBER_DECK_SIZE),
            action_deck_size=_env_int("SPLITUNO_ACTION_DECK", ACTION_DECK_SIZE),
            bonus_streak=_env_int("SPLITUNO_BONUS_STREAK", 2),
        )
