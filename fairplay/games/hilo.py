"""Hi-Lo - guess whether the next card ranks higher, lower or the same.

Cards are drawn with replacement, one index per card under the round's
nonce: index 0 is the starting card, index k the k-th guess. A correct
guess multiplies the running multiplier by e / P(guess).
"""
from config.game_schema import HiLoGuess, HiLoParams
from fairplay.errors import RoundStateError
from fairplay.games.base import BaseGameMapper
from fairplay.games.cards import card_from_float
from fairplay.payout import hilo_multipliers, hilo_probabilities


def guess_wins(guess: HiLoGuess, current: int, nxt: int) -> bool:
    if guess == HiLoGuess.HIGHER:
        return nxt > current
    if guess == HiLoGuess.LOWER:
        return nxt < current
    return nxt == current


class HiLoRound:
    """A live Hi-Lo round."""

    def __init__(self, stream, edge: float):
        self.stream = stream
        self.edge = edge
        self.cards = [card_from_float(stream.next())]
        self.multiplier = 1.0
        self.busted = False
        self.cashed_out = False

    @property
    def current(self):
        return self.cards[-1]

    @property
    def finished(self) -> bool:
        return self.busted or self.cashed_out

    def odds(self) -> dict:
        """Probability and step multiplier for each guess on the current card."""
        probs = hilo_probabilities(self.current.value)
        mults = hilo_multipliers(self.current.value, self.edge)
        return {g: {"probability": probs[g], "multiplier": mults[g]} for g in probs}

    def guess(self, guess) -> bool:
        if self.finished:
            raise RoundStateError("Hi-Lo round already settled")
        guess = HiLoGuess(guess)
        step = hilo_multipliers(self.current.value, self.edge)[guess.value]
        nxt = card_from_float(self.stream.next())
        won = guess_wins(guess, self.current.value, nxt.value)
        self.cards.append(nxt)
        if won:
            self.multiplier *= step
        else:
            self.multiplier = 0.0
            self.busted = True
        return won

    def cashout(self) -> float:
        if self.busted:
            raise RoundStateError("Cannot cash out a busted round")
        if len(self.cards) < 2:
            raise RoundStateError("Make at least one guess before cashing out")
        self.cashed_out = True
        return self.multiplier

    def state(self) -> dict:
        return {
            "cards": [str(c) for c in self.cards],
            "multiplier": self.multiplier,
            "busted": self.busted,
            "cashed_out": self.cashed_out,
        }


class HiLoMapper(BaseGameMapper):
    game_type = "hilo"
    display_name = "Hi-Lo"
    params_model = HiLoParams

    def max_draws(self, params) -> int:
        return len(params.guesses) + 1

    def start(self, params, stream) -> HiLoRound:
        return HiLoRound(stream, self.parse(params).edge)

    def resolve(self, params, stream):
        """Auto-play the guess chain, cashing out if every guess lands."""
        live = self.start(params, stream)
        for g in params.guesses:
            if not live.guess(g):
                break
        mult = live.multiplier
        if not live.busted:
            live.cashout()
        return self._outcome(stream, live.state(), mult)

    def theoretical_rtp(self, params) -> float:
        """Expected return of the first guess, averaged over starting ranks."""
        g = params.guesses[0].value
        total = 0.0
        for value in range(2, 15):
            p = hilo_probabilities(value)[g]
            total += (1 / 13) * p * hilo_multipliers(value, params.edge)[g]
        return total
