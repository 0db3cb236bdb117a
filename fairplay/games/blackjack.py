"""Blackjack - one shuffled deck per round, dealer stands on 17.

The deck is shuffled once from the round's draws and dealt from the top:
two cards to the player, then two to the dealer. Multipliers are total
return on the wager: 2.5 for a natural, 2 for a win, 1 for a push.
"""
import random
from functools import lru_cache

from config.game_schema import BlackjackParams
from fairplay.errors import RoundStateError
from fairplay.games.base import BaseGameMapper
from fairplay.games.cards import DECK_SIZE, shuffled_deck
from fairplay.games.shuffle import shuffle_draws
from fairplay.rng import SequenceStream

DEALER_STANDS_ON = 17
NATURAL_MULTIPLIER = 2.5
WIN_MULTIPLIER = 2.0
PUSH_MULTIPLIER = 1.0
RTP_ESTIMATE_DEALS = 10_000

_MULTIPLIERS = {
    "blackjack": NATURAL_MULTIPLIER,
    "win": WIN_MULTIPLIER,
    "push": PUSH_MULTIPLIER,
}


def card_points(card) -> int:
    if card.rank == "A":
        return 11
    if card.rank in ("J", "Q", "K"):
        return 10
    return int(card.rank)


def hand_score(cards) -> int:
    """Best total; each Ace drops from 11 to 1 while the hand is over 21."""
    score = sum(card_points(c) for c in cards)
    aces = sum(1 for c in cards if c.rank == "A")
    while score > 21 and aces:
        score -= 10
        aces -= 1
    return score


class BlackjackRound:
    """A live Blackjack hand. `result` is set once the hand is settled."""

    def __init__(self, deck):
        self.deck = list(deck)
        self._dealt = 0
        self.player = [self._deal(), self._deal()]
        self.dealer = [self._deal(), self._deal()]
        self.doubled = False
        self.result = None
        if hand_score(self.player) == 21:
            self.result = "push" if hand_score(self.dealer) == 21 else "blackjack"

    def _deal(self):
        card = self.deck[self._dealt]
        self._dealt += 1
        return card

    @property
    def finished(self) -> bool:
        return self.result is not None

    @property
    def can_double(self) -> bool:
        return not self.finished and len(self.player) == 2

    @property
    def multiplier(self) -> float:
        return _MULTIPLIERS.get(self.result, 0.0)

    def _check_open(self):
        if self.finished:
            raise RoundStateError("Blackjack round already settled")

    def hit(self) -> int:
        """Draw one card. Returns the new score; over 21 busts the hand."""
        self._check_open()
        self.player.append(self._deal())
        score = hand_score(self.player)
        if score > 21:
            self.result = "bust"
        return score

    def stand(self) -> str:
        self._check_open()
        while hand_score(self.dealer) < DEALER_STANDS_ON:
            self.dealer.append(self._deal())
        player, dealer = hand_score(self.player), hand_score(self.dealer)
        if dealer > 21 or player > dealer:
            self.result = "win"
        elif player == dealer:
            self.result = "push"
        else:
            self.result = "lose"
        return self.result

    def double(self) -> str:
        """Draw exactly one card, then stand unless it busts.

        The second wager is the caller's to collect; the multiplier stays
        relative to the total wager.
        """
        if not self.can_double:
            self._check_open()
            raise RoundStateError("Double is only allowed on the first two cards")
        self.doubled = True
        if self.hit() > 21:
            return self.result
        return self.stand()

    def cashout(self):
        raise RoundStateError("Blackjack settles on stand, double or bust")

    def state(self) -> dict:
        return {
            "player": [str(c) for c in self.player],
            "dealer": [str(c) for c in self.dealer] if self.finished else [str(self.dealer[0])],
            "player_score": hand_score(self.player),
            "dealer_score": hand_score(self.dealer) if self.finished else None,
            "doubled": self.doubled,
            "result": self.result,
            "multiplier": self.multiplier,
        }


class BlackjackMapper(BaseGameMapper):
    game_type = "blackjack"
    display_name = "Blackjack"
    params_model = BlackjackParams

    def max_draws(self, params) -> int:
        return shuffle_draws(DECK_SIZE)

    def start(self, params, stream) -> BlackjackRound:
        return BlackjackRound(shuffled_deck(stream))

    def resolve(self, params, stream):
        """Auto-play: hit below `stand_on`, then stand."""
        live = self.start(params, stream)
        while not live.finished and hand_score(live.player) < params.stand_on:
            live.hit()
        if not live.finished:
            live.stand()
        return self._outcome(stream, live.state(), live.multiplier)

    def theoretical_rtp(self, params) -> float:
        """Estimated from a fixed set of seeded deals; no closed form here."""
        return estimated_rtp(params.stand_on)


@lru_cache(maxsize=None)
def estimated_rtp(stand_on: int, deals: int = RTP_ESTIMATE_DEALS, seed: int = 0) -> float:
    rng = random.Random(seed)
    mapper = BlackjackMapper()
    params = BlackjackParams(stand_on=stand_on)
    total = 0.0
    for _ in range(deals):
        total += mapper.resolve(params, SequenceStream(source=rng.random)).multiplier
    return total / deals
