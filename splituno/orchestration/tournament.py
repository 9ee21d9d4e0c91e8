"""Tournament - run many games and aggregate results."""

from collections import defaultdict
from typing import Any, Optional

from splituno.config import GameConfig
from splituno.orchestration.game_runner import GameRunner


def run_tournament(
    agents: dict[str, Any],
    num_games: int = 100,
    config: Optional[GameConfig] = None,
    max_rounds: int = 500,
) -> dict[str, int]:
    """Run a tournament: the same agents play ``num_games`` matches.

    Seating order alternates between games. Games that hit the round
    limit without a winner count for nobody.

    Returns:
        Dict mapping player_id to number of wins.
    """
    player_ids = list(agents.keys())
    wins: dict[str, int] = defaultdict(int)

    for g in range(num_games):
        order = player_ids if g % 2 == 0 else list(reversed(player_ids))
        ordered_agents = {pid: agents[pid] for pid in order}
        runner = GameRunner(ordered_agents, config=config, max_rounds=max_rounds)
        result = runner.run()
        if result.winner:
            wins[result.winner] += 1

    return dict(wins)
