"""Tests for the arbiter's intent and decision protocol."""

import pytest
from splituno.config import GameConfig
from splituno.engine import (
    Arbiter,
    Block,
    DecisionKind,
    DecisionRequest,
    Deck,
    GameState,
    InvalidIntent,
    Player,
    RoundOutcome,
)
from splituno.engine.decisions import choose_player, yes_no


def make_arbiter(n_players: int = 3, count: int = 10) -> Arbiter:
    players = [Player(pid, number_count=count) for pid in "ABCDEF"[:n_players]]
    return Arbiter(GameState(players=players, deck=Deck(50, 20)))


def test_new_game() -> None:
    arbiter = Arbiter.new_game(["x", "y"], GameConfig(hand_size=3))
    assert arbiter.config.hand_size == 3
    assert arbiter.state.player("y").number_count == 3
    assert arbiter.pending is None


def test_new_game_rejects_single_player() -> None:
    with pytest.raises(ValueError):
        Arbiter.new_game(["solo"])


class TestPendingDecision:
    def start(self) -> tuple:
        arbiter = make_arbiter()
        request = arbiter.submit_number_round({"A": 0, "B": 5, "C": 3})
        assert isinstance(request, DecisionRequest)
        return arbiter, request

    def test_pending_is_exposed(self) -> None:
        arbiter, request = self.start()
        assert arbiter.pending is request
        assert request.request_id == "d1"

    def test_new_intents_are_rejected(self) -> None:
        arbiter, _ = self.start()
        with pytest.raises(InvalidIntent):
            arbiter.submit_number_round({"A": 1, "B": 2, "C": 3})
        with pytest.raises(InvalidIntent):
            arbiter.submit_action("B", Block(target="C"))
        with pytest.raises(InvalidIntent):
            arbiter.adjust("A", number_count=3)
        with pytest.raises(InvalidIntent):
            arbiter.end_game()
        assert arbiter.state.player("A").number_count == 10

    def test_wrong_request_id(self) -> None:
        arbiter, request = self.start()
        with pytest.raises(InvalidIntent):
            arbiter.resolve_decision("d99", "B")
        assert arbiter.pending is request

    @pytest.mark.parametrize("answer", ["A", "Z", None, 1])
    def test_answer_outside_options_keeps_request_open(self, answer) -> None:
        arbiter, request = self.start()
        with pytest.raises(InvalidIntent):
            arbiter.resolve_decision(request.request_id, answer)
        assert arbiter.pending is request
        outcome = arbiter.resolve_decision(request.request_id, "B")
        assert isinstance(outcome, RoundOutcome)
        assert arbiter.pending is None

    def test_nothing_pending(self) -> None:
        arbiter, request = self.start()
        arbiter.resolve_decision(request.request_id, "C")
        with pytest.raises(InvalidIntent):
            arbiter.resolve_decision(request.request_id, "C")


def test_request_ids_keep_counting() -> None:
    arbiter = make_arbiter()
    first = arbiter.submit_number_round({"A": 0, "B": 5, "C": 3})
    arbiter.resolve_decision(first.request_id, "B")
    second = arbiter.submit_number_round({"A": 1, "B": 7, "C": 3})
    assert second.request_id == "d2"
    assert second.player_id == "B"
    assert second.topic == "penalty_seven"


def test_yes_no_normalization() -> None:
    request = yes_no("A", "Challenge?")
    assert request.normalize(True) is True
    assert request.normalize(" Yes ") is True
    assert request.normalize("n") is False
    with pytest.raises(InvalidIntent):
        request.normalize("maybe")
    with pytest.raises(InvalidIntent):
        request.normalize(None)


def test_choose_player_excludes_the_chooser() -> None:
    request = choose_player("A", "Target?", ["B", "C"])
    assert request.kind == DecisionKind.CHOOSE_PLAYER
    assert request.excluded_player == "A"
    assert request.normalize("C") == "C"
    with pytest.raises(InvalidIntent):
        request.normalize("A")


def test_adjust_clamps_and_logs() -> None:
    arbiter = make_arbiter()
    arbiter.adjust("A", number_count=-5, action_count=2)
    a = arbiter.state.player("A")
    assert (a.number_count, a.action_count) == (0, 2)
    assert [(m.field, m.delta, m.reason) for m in arbiter.state.history] == [
        ("number_count", -10, "manual adjustment"),
        ("action_count", 2, "manual adjustment"),
    ]
    # A manual correction does not trigger the win check.
    assert not arbiter.state.game_over


def test_adjust_unknown_player() -> None:
    arbiter = make_arbiter()
    with pytest.raises(InvalidIntent):
        arbiter.adjust("Z", number_count=1)


def test_reset_streaks() -> None:
    arbiter = make_arbiter()
    arbiter.state.player("B").consecutive_wins = 1
    arbiter.reset_streaks()
    assert all(p.consecutive_wins == 0 for p in arbiter.state.players)


def test_end_game() -> None:
    arbiter = make_arbiter()
    arbiter.end_game()
    assert arbiter.state.game_over
    assert arbiter.state.winner is None
    with pytest.raises(InvalidIntent):
        arbiter.submit_number_round({"A": 1, "B": 2, "C": 3})
    with pytest.raises(InvalidIntent):
        arbiter.end_game()
    # Corrections stay possible after the game.
    arbiter.adjust("A", number_count=4)
    assert arbiter.state.player("A").number_count == 4


def test_view_unknown_player() -> None:
    arbiter = make_arbiter()
    with pytest.raises(InvalidIntent):
        arbiter.view("Z")


def test_target_for_non_playing_player_is_rejected() -> None:
    arbiter = make_arbiter()
    arbiter.state.player("C").blocked = True
    with pytest.raises(InvalidIntent):
        arbiter.submit_number_round({"A": 1, "B": 2}, targets={"C": "A"})
    with pytest.raises(InvalidIntent):
        arbiter.submit_number_round({"A": 7, "B": 2}, targets={"A": "Z"})
    assert arbiter.state.round_number == 0


def test_advancing_without_a_resolution_is_an_error() -> None:
    arbiter = make_arbiter()
    with pytest.raises(RuntimeError):
        arbiter._advance(None)
