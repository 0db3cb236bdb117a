"""Keno - 10 unique numbers from 1-40 by rejection sampling.

Each candidate is floor(r × 40) + 1 from a fresh draw; duplicates are
discarded and never reused. Sampling stops at 10 distinct values or at
the draw ceiling, which raises ExhaustedSampleSpace.
"""
import logging

from config.game_schema import KenoParams
from config.settings import FairPlayConfig
from fairplay.errors import ExhaustedSampleSpace
from fairplay.games.base import BaseGameMapper
from fairplay.payout import keno_hit_probability

logger = logging.getLogger("fairplay.games")

KENO_POOL = 40
KENO_DRAWN = 10

# risk → picks → multiplier by number of hits (index = hits)
KENO_PAYTABLES = {
    "classic": {
        1: [0, 3.96],
        2: [0, 1.9, 4.5],
        3: [0, 1, 3.1, 10.4],
        4: [0, 0.8, 1.8, 5, 22.5],
        5: [0, 0.25, 1.4, 4.1, 16.5, 36],
        6: [0, 0, 1, 3.68, 7, 16.5, 40],
        7: [0, 0, 0.47, 3, 4.5, 14, 31, 60],
        8: [0, 0, 0, 2.2, 4, 13, 22, 55, 70],
        9: [0, 0, 0, 1.55, 3, 8, 15, 44, 60, 85],
        10: [0, 0, 0, 1.4, 2.25, 4.5, 8, 17, 50, 80, 100],
    },
    "low": {
        1: [0.7, 1.85],
        2: [0, 2, 3.8],
        3: [0, 1.1, 1.38, 26],
        4: [0, 0, 2.2, 7.9, 90],
        5: [0, 0, 1.5, 4.2, 13, 300],
        6: [0, 0, 1.1, 2, 6.2, 100, 700],
        7: [0, 0, 1.1, 1.6, 3.5, 15, 225, 700],
        8: [0, 0, 1.1, 1.5, 2, 5.5, 39, 100, 800],
        9: [0, 0, 1.1, 1.3, 1.7, 2.5, 7.5, 50, 250, 1000],
        10: [0, 0, 1.1, 1.2, 1.3, 1.8, 3.5, 13, 50, 250, 1000],
    },
    "medium": {
        1: [0.4, 2.75],
        2: [0, 1.8, 5.1],
        3: [0, 0, 2.8, 50],
        4: [0, 0, 1.7, 10, 100],
        5: [0, 0, 1.4, 4, 14, 390],
        6: [0, 0, 0, 3, 9, 180, 710],
        7: [0, 0, 0, 2, 7, 30, 400, 800],
        8: [0, 0, 0, 2, 4, 11, 67, 400, 900],
        9: [0, 0, 0, 2, 2.5, 5, 15, 100, 500, 1000],
        10: [0, 0, 0, 1.6, 2, 4, 7, 26, 100, 500, 1000],
    },
    "high": {
        1: [0, 3.96],
        2: [0, 0, 17.1],
        3: [0, 0, 0, 81.5],
        4: [0, 0, 0, 10, 259],
        5: [0, 0, 0, 4.5, 48, 450],
        6: [0, 0, 0, 0, 11, 350, 710],
        7: [0, 0, 0, 0, 7, 90, 400, 800],
        8: [0, 0, 0, 0, 5, 20, 270, 600, 900],
        9: [0, 0, 0, 0, 4, 11, 56, 500, 800, 1000],
        10: [0, 0, 0, 0, 3.5, 8, 13, 63, 500, 800, 1000],
    },
}


def unique_draw(stream, count: int = KENO_DRAWN, pool: int = KENO_POOL,
                max_draws: int = None) -> list[int]:
    """`count` distinct integers in [1, pool], in draw order."""
    max_draws = max_draws or FairPlayConfig.KENO_MAX_DRAWS
    result: list[int] = []
    seen = set()
    draws = 0
    while len(result) < count:
        if draws >= max_draws:
            logger.error("keno sampling exhausted: %d draws, %d unique", draws, len(result))
            raise ExhaustedSampleSpace(draws, len(result), count)
        n = int(stream.next() * pool) + 1
        draws += 1
        if n not in seen:
            seen.add(n)
            result.append(n)
    return result


def keno_payout(picks: int, hits: int, risk: str) -> float:
    table = KENO_PAYTABLES[risk][picks]
    return table[hits] if hits < len(table) else 0.0


class KenoMapper(BaseGameMapper):
    game_type = "keno"
    display_name = "Keno"
    params_model = KenoParams

    def max_draws(self, params) -> int:
        return FairPlayConfig.KENO_MAX_DRAWS

    def resolve(self, params, stream):
        drawn = unique_draw(stream)
        hits = sorted(set(params.picks) & set(drawn))
        mult = keno_payout(len(params.picks), len(hits), params.risk.value)
        return self._outcome(
            stream,
            {"drawn": drawn, "picks": sorted(params.picks), "hits": hits,
             "risk": params.risk.value},
            mult,
        )

    def theoretical_rtp(self, params) -> float:
        picks = len(params.picks)
        table = KENO_PAYTABLES[params.risk.value][picks]
        return sum(keno_hit_probability(picks, h, KENO_POOL, KENO_DRAWN) * m
                   for h, m in enumerate(table))
