"""Cards - 52-card deck: single-card draws and full Fisher-Yates shuffles."""
from dataclasses import dataclass

from config.game_schema import CardDrawParams
from fairplay.games.base import BaseGameMapper
from fairplay.games.shuffle import fisher_yates, shuffle_draws

SUITS = ["♠", "♥", "♣", "♦"]
RANKS = ["2", "3", "4", "5", "6", "7", "8", "9", "10", "J", "Q", "K", "A"]
DECK_SIZE = len(SUITS) * len(RANKS)


@dataclass(frozen=True)
class Card:
    rank: str
    suit: str

    @property
    def value(self) -> int:
        """Rank value 2..14, Ace high."""
        return RANKS.index(self.rank) + 2

    @property
    def index(self) -> int:
        return SUITS.index(self.suit) * len(RANKS) + RANKS.index(self.rank)

    def __str__(self):
        return f"{self.rank}{self.suit}"


def card_from_index(index: int) -> Card:
    """0..51 → card; suit = index // 13, rank = index % 13."""
    return Card(rank=RANKS[index % len(RANKS)], suit=SUITS[index // len(RANKS)])


def card_from_float(r: float) -> Card:
    return card_from_index(int(r * DECK_SIZE))


def fresh_deck() -> list[Card]:
    return [card_from_index(i) for i in range(DECK_SIZE)]


def shuffled_deck(stream) -> list[Card]:
    return fisher_yates(fresh_deck(), stream)


class CardDrawMapper(BaseGameMapper):
    """Deal the top `count` cards of a provably shuffled deck (no payout)."""
    game_type = "cards"
    display_name = "Card Draw"
    params_model = CardDrawParams
    stakeable = False

    def max_draws(self, params) -> int:
        return shuffle_draws(DECK_SIZE)

    def resolve(self, params, stream):
        deck = shuffled_deck(stream)
        return self._outcome(
            stream,
            {"cards": [str(c) for c in deck[:params.count]],
             "deck": [c.index for c in deck]},
            0.0,
        )

    def theoretical_rtp(self, params) -> float:
        return 0.0
