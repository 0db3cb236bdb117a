"""Slots - three weighted reels; three of a kind or a cherry pair pays."""
from functools import lru_cache
from itertools import product

from config.game_schema import SlotsParams
from fairplay.games.base import BaseGameMapper
from fairplay.games.weighted import weighted_pick, weighted_probabilities

# (symbol, weight, three-of-a-kind payout) before edge scaling
SLOT_SYMBOLS = [
    ("CHERRY", 40, 5),
    ("LEMON", 30, 10),
    ("BELL", 20, 20),
    ("STAR", 15, 50),
    ("DIAMOND", 10, 100),
    ("SEVEN", 5, 500),
]
CHERRY_PAIR_PAYOUT = 2


def _raw_payout(reels: tuple) -> float:
    if reels[0] == reels[1] == reels[2]:
        return SLOT_SYMBOLS[reels[0]][2]
    if sum(1 for r in reels if SLOT_SYMBOLS[r][0] == "CHERRY") >= 2:
        return CHERRY_PAIR_PAYOUT
    return 0


@lru_cache(maxsize=None)
def slots_scale(edge: float, reels: int = 3) -> float:
    """Factor applied to every raw payout so the machine returns `edge`."""
    probs = weighted_probabilities([s[1] for s in SLOT_SYMBOLS])
    rtp = 0.0
    for combo in product(range(len(SLOT_SYMBOLS)), repeat=reels):
        p = 1.0
        for c in combo:
            p *= probs[c]
        rtp += p * _raw_payout(combo)
    return edge / rtp


def slots_multiplier(reels: tuple, edge: float) -> float:
    return round(_raw_payout(tuple(reels)) * slots_scale(edge), 4)


class SlotsMapper(BaseGameMapper):
    game_type = "slots"
    display_name = "Slots"
    params_model = SlotsParams

    def max_draws(self, params) -> int:
        return params.reels

    def resolve(self, params, stream):
        weights = [s[1] for s in SLOT_SYMBOLS]
        reels = tuple(weighted_pick(stream.next(), weights) for _ in range(params.reels))
        return self._outcome(
            stream,
            {"reels": [SLOT_SYMBOLS[r][0] for r in reels]},
            slots_multiplier(reels, params.edge),
        )

    def theoretical_rtp(self, params) -> float:
        probs = weighted_probabilities([s[1] for s in SLOT_SYMBOLS])
        total = 0.0
        for combo in product(range(len(SLOT_SYMBOLS)), repeat=params.reels):
            p = 1.0
            for c in combo:
                p *= probs[c]
            total += p * slots_multiplier(combo, params.edge)
        return total
