"""Counter-only draw piles."""

from dataclasses import dataclass

from splituno.config import ACTION_DECK_SIZE, HAND_SIZE, NUMBER_DECK_SIZE


@dataclass
class Deck:
    """The two draw piles, tracked by count only.

    Draws never fail: a request larger than what is left is satisfied
    with whatever remains, and an empty pile yields 0.
    """

    number_remaining: int = NUMBER_DECK_SIZE
    action_remaining: int = ACTION_DECK_SIZE

    def __post_init__(self) -> None:
        self.number_remaining = max(0, self.number_remaining)
        self.action_remaining = max(0, self.action_remaining)

    def draw_number(self, n: int) -> int:
        """Take up to ``n`` number cards; return how many were taken."""
        drawn = min(max(0, n), self.number_remaining)
        self.number_remaining -= drawn
        return drawn

    def draw_action(self, n: int) -> int:
        """Take up to ``n`` action cards; return how many were taken."""
        drawn = min(max(0, n), self.action_remaining)
        self.action_remaining -= drawn
        return drawn

    @property
    def number_exhausted(self) -> bool:
        return self.number_remaining == 0

    @property
    def action_exhausted(self) -> bool:
        return self.action_remaining == 0


def create_deck(num_players: int, hand_size: int = HAND_SIZE,
                number_deck_size: int = NUMBER_DECK_SIZE,
                action_deck_size: int = ACTION_DECK_SIZE) -> Deck:
    """Create the piles left over after dealing ``hand_size`` number cards each.

    - Number deck: 108 cards, minus the deal (68 remain for two players)
    - Action deck: 32 cards, none dealt
    """
    dealt = hand_size * num_players
    return Deck(
        number_remaining=max(0, number_deck_size - dealt),
        action_remaining=action_deck_size,
    )
