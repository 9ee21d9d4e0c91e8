"""CLI entry point."""

from __future__ import annotations

import logging
from typing import Any, Optional, Union

import typer
from dotenv import load_dotenv

# Load environment variables from .env file
load_dotenv()

app = typer.Typer(help="Split UNO arbiter with heuristic, LLM and human agents")

MENU = """
--- NEW ROUND ---
  1. Play Number Card Round
  2. Play Action Card
  3. Display Game State
  4. Manual Adjustment
  5. End Game"""


def _setup_logging(verbose: bool) -> None:
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


def _parse_agents(
    agent_specs: str,
    llm_provider: str,
    llm_model: str,
    seed: Optional[int],
) -> dict[str, "AgentProtocol"]:
    from splituno.agent.protocol import AgentProtocol
    from splituno.agents.heuristic_agent import HeuristicAgent
    from splituno.agents.human_agent import HumanAgent
    from splituno.agents.llm_agent import LLMAgent

    parts = [s.strip().lower() for s in agent_specs.split(",") if s.strip()]
    agents: dict[str, AgentProtocol] = {}
    for i, part in enumerate(parts):
        pid = f"player_{i}"
        if ":" in part:
            kind, model = part.split(":", 1)
        else:
            kind, model = part, llm_model

        if kind == "llm":
            agents[pid] = LLMAgent(provider=llm_provider, model=model)
        elif kind == "human":
            agents[pid] = HumanAgent(name=f"Human_{i}")
        elif kind == "heuristic":
            agents[pid] = HeuristicAgent(
                name=f"Heuristic_{i}", seed=None if seed is None else seed + i
            )
        else:
            raise typer.BadParameter(
                f"Unknown agent type: {kind}. Use 'heuristic', 'llm' or 'human'."
            )
    return agents


def _render_state(arbiter: "Arbiter") -> None:
    state = arbiter.state
    typer.echo("\n" + "=" * 60)
    typer.echo("           SPLIT UNO - GAME STATE")
    typer.echo("=" * 60)
    for p in state.players:
        flag = " [BLOCKED]" if p.blocked else ""
        typer.echo(
            f"{p.player_id}: {p.number_count} Number Cards | {p.action_count} Action Cards"
            f" | streak {p.consecutive_wins}{flag}"
        )
    typer.echo(
        f"\nDeck Remaining: Numbers={state.deck.number_remaining}"
        f" | Actions={state.deck.action_remaining}"
    )
    if state.chosen_color is not None:
        typer.echo(f"Color called: {state.chosen_color.value} for {state.color_target}")
    typer.echo("=" * 60)


def _prompt_int(text: str, low: int, high: int) -> int:
    while True:
        value = typer.prompt(text, type=int)
        if low <= value <= high:
            return value
        typer.echo(f"Enter a number from {low} to {high}.")


def _ask(request: "DecisionRequest") -> Any:
    from splituno.engine import DecisionKind

    if request.kind == DecisionKind.YES_NO:
        return typer.confirm(f"[{request.player_id}] {request.prompt}")
    typer.echo(f"[{request.player_id}] {request.prompt}")
    for i, option in enumerate(request.options):
        typer.echo(f"  {i}: {getattr(option, 'value', option)}")
    idx = _prompt_int("Choice", 0, len(request.options) - 1)
    return request.options[idx]


def _drive(arbiter: "Arbiter", result: Union["DecisionRequest", Any]) -> Any:
    """Prompt for every decision the engine asks for, then print what changed."""
    from splituno.engine import DecisionRequest, InvalidIntent

    while isinstance(result, DecisionRequest):
        try:
            result = arbiter.resolve_decision(result.request_id, _ask(result))
        except InvalidIntent as e:
            typer.echo(f"Invalid: {e}")
    for mutation in result.mutations:
        typer.echo(f">>> {mutation}")
    return result


def _number_round(arbiter: "Arbiter") -> None:
    plays = {}
    for p in arbiter.state.players:
        if p.blocked:
            typer.echo(f">>> {p.player_id} is BLOCKED and sits out this round.")
            continue
        plays[p.player_id] = _prompt_int(f"Enter {p.player_id}'s card (0-9)", 0, 9)
    _drive(arbiter, arbiter.submit_number_round(plays))


def _action_card(arbiter: "Arbiter") -> None:
    from splituno.engine import make_action

    actor = typer.prompt("Which player is playing an action card?")
    kind = typer.prompt("Enter action card type (BLOCK/REVERSE/COLOR/+2/+4/TRUTH/DARE)")
    _drive(arbiter, arbiter.submit_action(actor, make_action(kind)))


def _manual_adjustment(arbiter: "Arbiter") -> None:
    typer.echo("\n--- Manual Adjustment ---")
    typer.echo("1. Set Number Cards\n2. Set Action Cards\n3. Reset Consecutive Wins")
    choice = _prompt_int("Choice", 1, 3)
    if choice == 3:
        arbiter.reset_streaks()
        typer.echo(">>> Consecutive wins reset.")
        return
    pid = typer.prompt("Player")
    value = typer.prompt("New count", type=int)
    if choice == 1:
        arbiter.adjust(pid, number_count=value)
    else:
        arbiter.adjust(pid, action_count=value)


@app.command()
def arbiter(
    players: str = typer.Option("A,B", "--players", "-p", help="Comma-separated player names (2-6)"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Track a table game of Split UNO from the terminal."""
    from splituno.config import GameConfig
    from splituno.engine import Arbiter, InvalidIntent

    _setup_logging(verbose)
    player_ids = [s.strip() for s in players.split(",") if s.strip()]
    try:
        game = Arbiter.new_game(player_ids, GameConfig.from_env())
    except ValueError as e:
        raise typer.BadParameter(str(e)) from e

    typer.echo(f"\nInitializing game with {game.config.hand_size} cards each...")
    _render_state(game)

    handlers = {1: _number_round, 2: _action_card, 4: _manual_adjustment}
    while not game.state.game_over:
        typer.echo(MENU)
        choice = typer.prompt("Choice", type=int)
        if choice == 3:
            _render_state(game)
            continue
        if choice == 5:
            game.end_game()
            typer.echo("\n>>> Game ended by arbiter.")
            break
        if choice not in handlers:
            typer.echo("Invalid choice. Try again.")
            continue
        try:
            handlers[choice](game)
        except InvalidIntent as e:
            typer.echo(f"Invalid: {e}")
            continue
        if not game.state.game_over and choice in (1, 2):
            _render_state(game)

    typer.echo("\nFinal Game State:")
    _render_state(game)
    if game.state.winner:
        typer.echo(f"\nWINNER: {game.state.winner}\n")


@app.command()
def simulate(
    agents: str = typer.Option(
        "heuristic,heuristic",
        "--agents",
        "-a",
        help="Comma-separated: heuristic, llm, human, or llm:model_name",
    ),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name (e.g. openai/gpt-4o-mini, meta-llama/llama-3-8b-instruct)",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
    verbose: bool = typer.Option(False, "--verbose", "-v", help="Debug logging"),
) -> None:
    """Run a single Split UNO game between agents."""
    from splituno.config import GameConfig
    from splituno.orchestration.game_runner import GameRunner

    _setup_logging(verbose)
    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    runner = GameRunner(agent_map, config=GameConfig.from_env())
    result = runner.run()
    typer.echo(f"Winner: {result.winner or 'None (round limit)'}")
    typer.echo(f"Rounds: {result.num_rounds}")


@app.command()
def tournament(
    agents: str = typer.Option(
        "heuristic,heuristic",
        "--agents",
        "-a",
        help="Comma-separated agent types or llm:model_name",
    ),
    games: int = typer.Option(100, "--games", "-g", help="Number of games"),
    llm_provider: str = typer.Option(
        "openrouter",
        "--llm-provider",
        "-p",
        help="LLM provider: openrouter, groq, ollama or huggingface",
    ),
    llm_model: str = typer.Option(
        "openai/gpt-4o-mini",
        "--llm-model",
        "-m",
        help="Model name",
    ),
    seed: Optional[int] = typer.Option(None, "--seed", "-s", help="Random seed"),
) -> None:
    """Run a tournament."""
    from splituno.config import GameConfig
    from splituno.orchestration.tournament import run_tournament

    agent_map = _parse_agents(agents, llm_provider, llm_model, seed)
    wins = run_tournament(agent_map, num_games=games, config=GameConfig.from_env())
    typer.echo("Tournament results:")
    for pid, w in sorted(wins.items(), key=lambda x: -x[1]):
        typer.echo(f"  {pid}: {w} wins")


if __name__ == "__main__":
    app()
