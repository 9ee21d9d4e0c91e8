"""Human agent - reads plays and decisions from terminal."""

from typing import Any, Optional

from splituno.engine import (
    ActionPlay,
    DecisionKind,
    DecisionRequest,
    InvalidIntent,
    PlayerView,
    make_action,
)


def _show_view(player_view: PlayerView) -> None:
    print(f"\n--- {player_view.player_id} ---")
    print(f"Your hand: {player_view.my_number_count} number | {player_view.my_action_count} action")
    for pid, count in player_view.number_counts.items():
        if pid != player_view.player_id:
            flag = " [BLOCKED]" if player_view.blocked[pid] else ""
            print(f"  {pid}: {count} number | {player_view.action_counts[pid]} action{flag}")


class HumanAgent:
    """Agent that prompts the human for input via terminal."""

    def __init__(self, name: str = "human"):
        self._name = name

    @property
    def name(self) -> str:
        return self._name

    def choose_number(self, player_view: PlayerView, player_id: str) -> int:
        _show_view(player_view)
        while True:
            try:
                value = int(input("Number card to reveal (0-9): ").strip())
                if 0 <= value <= 9:
                    return value
            except (ValueError, EOFError):
                pass
            print("Invalid. Try again.")

    def choose_action(self, player_view: PlayerView, player_id: str) -> Optional[ActionPlay]:
        if player_view.my_action_count == 0:
            return None
        while True:
            try:
                raw = input("Action card (BLOCK/REVERSE/COLOR/+2/+4/TRUTH/DARE, empty to pass): ").strip()
            except EOFError:
                return None
            if not raw:
                return None
            try:
                return make_action(raw)
            except InvalidIntent as e:
                print(f"{e}. Try again.")

    def decide(self, player_view: PlayerView, request: DecisionRequest) -> Any:
        print(f"\n[{request.player_id}] {request.prompt}")
        if request.kind == DecisionKind.YES_NO:
            while True:
                try:
                    return request.normalize(input("(Y/N): "))
                except (InvalidIntent, EOFError):
                    print("Invalid. Try again.")

        for i, option in enumerate(request.options):
            print(f"  {i}: {getattr(option, 'value', option)}")
        while True:
            try:
                idx = int(input("Enter number: ").strip())
                if 0 <= idx < len(request.options):
                    return request.options[idx]
            except (ValueError, EOFError):
                pass
            print("Invalid. Try again.")
