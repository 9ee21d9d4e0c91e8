"""Game orchestration."""

from splituno.orchestration.game_runner import GameResult, GameRunner
from splituno.orchestration.tournament import run_tournament

__all__ = ["GameResult", "GameRunner", "run_tournament"]
