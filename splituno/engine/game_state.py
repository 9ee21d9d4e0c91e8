"""Game state for Split UNO."""

from dataclasses import asdict, dataclass, field
from typing import Dict, List, Optional

from splituno.engine.card import Color
from splituno.engine.deck import Deck


@dataclass(frozen=True)
class Mutation:
    """One applied change, for the caller to render."""

    player_id: Optional[str]
    field: str  # "number_count", "action_count", "blocked", "winner", ...
    delta: int
    reason: str

    def __str__(self) -> str:
        who = self.player_id or "game"
        sign = "+" if self.delta >= 0 else ""
        return f"{who}: {self.field} {sign}{self.delta} ({self.reason})"


@dataclass
class Player:
    """Per-player counters. Counts never go below zero."""

    player_id: str
    number_count: int = 0
    action_count: int = 0
    consecutive_wins: int = 0
    blocked: bool = False

    def change_number(self, delta: int) -> int:
        """Apply ``delta`` to the number count; return the delta actually applied."""
        new_count = max(0, self.number_count + delta)
        applied = new_count - self.number_count
        self.number_count = new_count
        return applied

    def change_action(self, delta: int) -> int:
        """Apply ``delta`` to the action count; return the delta actually applied."""
        new_count = max(0, self.action_count + delta)
        applied = new_count - self.action_count
        self.action_count = new_count
        return applied


@dataclass
class GameState:
    """Mutable Split UNO match: the players, the piles and the outcome."""

    players: List[Player]
    deck: Deck
    game_over: bool = False
    winner: Optional[str] = None
    round_number: int = 0
    chosen_color: Optional[Color] = None  # display only
    color_target: Optional[str] = None
    history: List[Mutation] = field(default_factory=list)

    @property
    def player_ids(self) -> tuple[str, ...]:
        return tuple(p.player_id for p in self.players)

    def has_player(self, player_id: str) -> bool:
        return any(p.player_id == player_id for p in self.players)

    def player(self, player_id: str) -> Player:
        for p in self.players:
            if p.player_id == player_id:
                return p
        raise KeyError(player_id)

    def opponents(self, player_id: str) -> List[Player]:
        return [p for p in self.players if p.player_id != player_id]

    def record(self, player_id: Optional[str], field_name: str, delta: int, reason: str) -> None:
        self.history.append(Mutation(player_id, field_name, delta, reason))

    # Ledger operations. Each one clamps and logs what actually happened.

    def shed_number(self, player_id: str, n: int, reason: str) -> int:
        applied = self.player(player_id).change_number(-n)
        if applied:
            self.record(player_id, "number_count", applied, reason)
        return -applied

    def shed_action(self, player_id: str, n: int, reason: str) -> int:
        applied = self.player(player_id).change_action(-n)
        if applied:
            self.record(player_id, "action_count", applied, reason)
        return -applied

    def draw_number(self, player_id: str, n: int, reason: str) -> int:
        drawn = self.deck.draw_number(n)
        if drawn:
            self.player(player_id).change_number(drawn)
            self.record(player_id, "number_count", drawn, reason)
        if drawn < n:
            self.record(player_id, "number_shortfall", n - drawn, "number deck exhausted")
        return drawn

    def draw_action(self, player_id: str, n: int, reason: str) -> int:
        drawn = self.deck.draw_action(n)
        if drawn:
            self.player(player_id).change_action(drawn)
            self.record(player_id, "action_count", drawn, reason)
        if drawn < n:
            self.record(player_id, "action_shortfall", n - drawn, "action deck exhausted")
        return drawn

    def transfer_number(self, from_id: str, to_id: str, reason: str) -> int:
        """Move one number card between hands. Nothing moves from an empty hand."""
        moved = self.shed_number(from_id, 1, reason)
        if moved:
            self.player(to_id).change_number(moved)
            self.record(to_id, "number_count", moved, reason)
        return moved

    def swap_hands(self, a_id: str, b_id: str, reason: str) -> None:
        a, b = self.player(a_id), self.player(b_id)
        number_diff = b.number_count - a.number_count
        action_diff = b.action_count - a.action_count
        a.number_count, b.number_count = b.number_count, a.number_count
        a.action_count, b.action_count = b.action_count, a.action_count
        for pid, sign in ((a_id, 1), (b_id, -1)):
            if number_diff:
                self.record(pid, "number_count", sign * number_diff, reason)
            if action_diff:
                self.record(pid, "action_count", sign * action_diff, reason)

    def set_counts(self, player_id: str, number_count: Optional[int] = None,
                   action_count: Optional[int] = None, reason: str = "manual adjustment") -> None:
        p = self.player(player_id)
        if number_count is not None:
            applied = p.change_number(max(0, number_count) - p.number_count)
            if applied:
                self.record(player_id, "number_count", applied, reason)
        if action_count is not None:
            applied = p.change_action(max(0, action_count) - p.action_count)
            if applied:
                self.record(player_id, "action_count", applied, reason)

    def set_streak(self, player_id: str, value: int, reason: str) -> None:
        p = self.player(player_id)
        if p.consecutive_wins != value:
            self.record(player_id, "consecutive_wins", value - p.consecutive_wins, reason)
            p.consecutive_wins = value

    def set_blocked(self, player_id: str, blocked: bool, reason: str) -> None:
        p = self.player(player_id)
        if p.blocked != blocked:
            p.blocked = blocked
            self.record(player_id, "blocked", 1 if blocked else -1, reason)

    def declare_winner(self, player_id: Optional[str], reason: str) -> None:
        self.game_over = True
        self.winner = player_id
        self.record(player_id, "winner", 1 if player_id else 0, reason)

    def to_dict(self) -> dict:
        """Full state as plain data: the deck pools and the player list."""
        return {
            "deck": asdict(self.deck),
            "players": [asdict(p) for p in self.players],
            "game_over": self.game_over,
            "winner": self.winner,
            "round_number": self.round_number,
            "chosen_color": self.chosen_color.value if self.chosen_color else None,
            "color_target": self.color_target,
        }


@dataclass
class PlayerView:
    """Public game information as seen by one player.

    Split UNO hands are tracked by count only, so every count is public.
    """

    player_id: str
    my_number_count: int
    my_action_count: int
    consecutive_wins: int
    number_counts: Dict[str, int]  # player_id -> count, including own
    action_counts: Dict[str, int]
    blocked: Dict[str, bool]
    number_remaining: int
    action_remaining: int
    round_number: int
    chosen_color: Optional[Color]
    color_target: Optional[str]
    history: List[str]  # Recent mutations

    @classmethod
    def from_state(cls, state: GameState, player_id: str) -> "PlayerView":
        me = state.player(player_id)
        return cls(
            player_id=player_id,
            my_number_count=me.number_count,
            my_action_count=me.action_count,
            consecutive_wins=me.consecutive_wins,
            number_counts={p.player_id: p.number_count for p in state.players},
            action_counts={p.player_id: p.action_count for p in state.players},
            blocked={p.player_id: p.blocked for p in state.players},
            number_remaining=state.deck.number_remaining,
            action_remaining=state.deck.action_remaining,
            round_number=state.round_number,
            chosen_color=state.chosen_color,
            color_target=state.color_target,
            history=[str(m) for m in state.history[-10:]],  # Last 10 mutations
        )
