"""Simulate a game with heuristic agents and print the mutation log."""

from splituno.agents.heuristic_agent import HeuristicAgent
from splituno.orchestration.game_runner import GameRunner


def main():
    agents = {
        "p1": HeuristicAgent("Bot1", seed=1),
        "p2": HeuristicAgent("Bot2", seed=2),
        "p3": HeuristicAgent("Bot3", seed=3),
        "p4": HeuristicAgent("Bot4", seed=4),
    }

    runner = GameRunner(agents)
    result = runner.run()

    for mutation in runner.arbiter.state.history:
        print(f"> {mutation}")

    print(f"Game finished! Winner: {result.winner}")
    print(f"Rounds: {result.num_rounds}")


if __name__ == "__main__":
    main()
