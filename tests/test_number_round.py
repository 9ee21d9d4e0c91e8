"""Tests for number round resolution."""

import pytest
from splituno.engine import (
    Arbiter,
    DecisionKind,
    DecisionRequest,
    Deck,
    GameState,
    InvalidIntent,
    Player,
    RoundOutcome,
)


def make_arbiter(counts: dict, number_remaining: int = 50, action_remaining: int = 20) -> Arbiter:
    """counts: player_id -> (number_count, action_count)"""
    players = [Player(pid, number_count=n, action_count=a) for pid, (n, a) in counts.items()]
    return Arbiter(GameState(players=players, deck=Deck(number_remaining, action_remaining)))


def test_single_winner_sheds_and_loser_draws() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    outcome = arbiter.submit_number_round({"A": 8, "B": 3})

    assert isinstance(outcome, RoundOutcome)
    assert outcome.winners == ("A",)
    assert outcome.penalized == ("B",)
    assert not outcome.tie
    a, b = arbiter.state.player("A"), arbiter.state.player("B")
    assert (a.number_count, a.consecutive_wins) == (9, 1)
    assert (b.number_count, b.consecutive_wins) == (11, 0)
    assert arbiter.state.deck.number_remaining == 49
    assert arbiter.state.round_number == 1


def test_loss_resets_streak() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    arbiter.state.player("A").consecutive_wins = 1
    arbiter.submit_number_round({"A": 2, "B": 6})
    assert arbiter.state.player("A").consecutive_wins == 0
    assert arbiter.state.player("B").consecutive_wins == 1


def test_tie_is_net_zero_and_blocked_player_untouched() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0), "C": (10, 0)})
    arbiter.state.player("C").blocked = True
    arbiter.state.player("A").consecutive_wins = 1

    outcome = arbiter.submit_number_round({"A": 9, "B": 9})

    assert outcome.tie
    assert outcome.winners == ("A", "B")
    assert outcome.skipped == ("C",)
    assert arbiter.state.player("A").number_count == 10
    assert arbiter.state.player("B").number_count == 10
    assert arbiter.state.player("A").consecutive_wins == 0
    c = arbiter.state.player("C")
    assert c.number_count == 10
    assert not c.blocked
    assert arbiter.state.deck.number_remaining == 48


def test_tie_makes_every_participant_draw() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0), "C": (10, 0)})
    arbiter.submit_number_round({"A": 9, "B": 9, "C": 2})
    assert arbiter.state.player("A").number_count == 10
    assert arbiter.state.player("B").number_count == 10
    assert arbiter.state.player("C").number_count == 11
    assert arbiter.state.deck.number_remaining == 47


def test_zero_steals_from_the_only_opponent() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    outcome = arbiter.submit_number_round({"A": 0, "B": 5})

    # A: +1 stolen, +1 lost round. B: -1 stolen, -1 won round.
    assert arbiter.state.player("A").number_count == 12
    assert arbiter.state.player("B").number_count == 8
    steal = [m for m in outcome.mutations if "played 0" in m.reason]
    assert sum(m.delta for m in steal) == 0
    assert len(steal) == 2


def test_zero_against_empty_hand_moves_nothing() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (0, 0)})
    outcome = arbiter.submit_number_round({"A": 0, "B": 5})
    assert not [m for m in outcome.mutations if "played 0" in m.reason]
    assert arbiter.state.player("A").number_count == 11
    # B won the round with an empty hand and nobody can challenge.
    assert outcome.game_over
    assert outcome.winner == "B"


def test_zero_asks_for_a_target_with_several_opponents() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0), "C": (10, 0)})
    request = arbiter.submit_number_round({"A": 0, "B": 5, "C": 3})

    assert isinstance(request, DecisionRequest)
    assert request.kind == DecisionKind.CHOOSE_PLAYER
    assert request.player_id == "A"
    assert request.options == ["B", "C"]
    assert request.excluded_player == "A"
    assert request.topic == "steal"

    outcome = arbiter.resolve_decision(request.request_id, "C")
    assert isinstance(outcome, RoundOutcome)
    assert outcome.winners == ("B",)
    assert arbiter.state.player("A").number_count == 12
    assert arbiter.state.player("B").number_count == 9
    assert arbiter.state.player("C").number_count == 10


def test_targets_can_be_given_up_front() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0), "C": (10, 0)})
    outcome = arbiter.submit_number_round({"A": 7, "B": 5, "C": 3}, targets={"A": "C"})
    assert isinstance(outcome, RoundOutcome)
    c = arbiter.state.player("C")
    assert (c.number_count, c.action_count) == (13, 1)
    assert outcome.penalized == ("C", "B", "C")


def test_penalty_seven_on_nearly_empty_deck() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)}, number_remaining=1, action_remaining=0)
    outcome = arbiter.submit_number_round({"A": 7, "B": 3})

    b = arbiter.state.player("B")
    assert b.number_count == 11
    assert b.action_count == 0
    assert arbiter.state.deck.number_remaining == 0
    assert arbiter.state.deck.action_remaining == 0
    shortfalls = {m.field for m in outcome.mutations if m.field.endswith("shortfall")}
    assert shortfalls == {"number_shortfall", "action_shortfall"}


def test_penalty_seven_hits_the_round_winner_too() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    arbiter.submit_number_round({"A": 7, "B": 9})
    b = arbiter.state.player("B")
    assert (b.number_count, b.action_count) == (11, 1)
    assert arbiter.state.player("A").number_count == 11


def test_steals_resolve_before_penalty_sevens() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0), "C": (0, 0)})
    arbiter.submit_number_round({"A": 0, "B": 7, "C": 9}, targets={"A": "C", "B": "C"})

    # C was empty when A stole, then took the 7 penalty and won the round.
    assert arbiter.state.player("A").number_count == 11
    assert arbiter.state.player("B").number_count == 11
    c = arbiter.state.player("C")
    assert (c.number_count, c.action_count) == (1, 1)
    assert not arbiter.state.game_over


def test_all_blocked_round_changes_nothing_but_the_flags() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    for p in arbiter.state.players:
        p.blocked = True
    outcome = arbiter.submit_number_round({})
    assert outcome.winners == ()
    assert outcome.skipped == ("A", "B")
    assert all(not p.blocked for p in arbiter.state.players)
    assert [p.number_count for p in arbiter.state.players] == [10, 10]
    assert arbiter.state.deck.number_remaining == 50


def test_lone_participant_wins_the_blocked_round() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    arbiter.state.player("B").blocked = True
    outcome = arbiter.submit_number_round({"A": 1})
    assert outcome.winners == ("A",)
    assert arbiter.state.player("A").number_count == 9
    assert arbiter.state.player("B").number_count == 10
    assert not arbiter.state.player("B").blocked


def test_blocked_player_cannot_play() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    arbiter.state.player("B").blocked = True
    with pytest.raises(InvalidIntent):
        arbiter.submit_number_round({"A": 1, "B": 4})
    assert arbiter.state.player("B").blocked
    assert arbiter.state.history == []


@pytest.mark.parametrize("plays", [
    {"A": 10, "B": 3},
    {"A": -1, "B": 3},
    {"A": "5", "B": 3},
    {"A": True, "B": 3},
    {"A": 5},
    {"A": 5, "B": 3, "Z": 1},
])
def test_invalid_plays_are_rejected_without_side_effects(plays) -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    with pytest.raises(InvalidIntent):
        arbiter.submit_number_round(plays)
    assert arbiter.state.history == []
    assert arbiter.state.round_number == 0
    assert arbiter.state.deck.number_remaining == 50


def test_self_target_is_rejected() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0)})
    with pytest.raises(InvalidIntent):
        arbiter.submit_number_round({"A": 7, "B": 3}, targets={"A": "A"})
    assert arbiter.state.history == []


def test_number_cards_are_conserved_apart_from_shedding() -> None:
    arbiter = make_arbiter({"A": (10, 0), "B": (10, 0), "C": (10, 0)})

    def total() -> int:
        return sum(p.number_count for p in arbiter.state.players) + arbiter.state.deck.number_remaining

    before = total()
    arbiter.submit_number_round({"A": 0, "B": 4, "C": 8}, targets={"A": "B"})
    # Only the round winner's shed card leaves play.
    assert total() == before - 1
    assert all(p.number_count >= 0 and p.action_count >= 0 for p in arbiter.state.players)


def test_steal_only_offers_opponents_holding_number_cards() -> None:
    arbiter = make_arbiter({"A": (5, 0), "B": (0, 0), "C": (5, 0), "D": (5, 0)})
    request = arbiter.submit_number_round({"A": 0, "B": 3, "C": 1, "D": 2})

    assert isinstance(request, DecisionRequest)
    assert request.topic == "steal"
    assert request.options == ["C", "D"]


def test_steal_picks_the_only_opponent_with_cards() -> None:
    arbiter = make_arbiter({"A": (5, 0), "B": (0, 0), "C": (5, 0)})
    outcome = arbiter.submit_number_round({"A": 0, "B": 3, "C": 1})

    assert isinstance(outcome, RoundOutcome)
    # C loses one to the steal and draws one for losing the round.
    assert arbiter.state.player("C").number_count == 5
    assert arbiter.state.player("A").number_count == 7
    assert outcome.winner == "B"
