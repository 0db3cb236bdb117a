"""Plinko - binomial path over `rows` pegs into rows+1 buckets."""
import math
from functools import lru_cache

from config.game_schema import PlinkoParams
from fairplay.games.base import BaseGameMapper
from fairplay.payout import binomial_probabilities, expected_return, scale_table

# Payout shapes by row count and risk, edge-scaled at lookup time.
# Rows without a listed shape interpolate from the nearest wider table.
PLINKO_SHAPES = {
    8: {
        "low":    [5.6, 2.1, 1.1, 1.0, 0.5, 1.0, 1.1, 2.1, 5.6],
        "medium": [13, 3, 1.3, 0.7, 0.4, 0.7, 1.3, 3, 13],
        "high":   [29, 4, 1.5, 0.3, 0.2, 0.3, 1.5, 4, 29],
    },
    12: {
        "low":    [10, 3, 1.6, 1.4, 1.1, 1.0, 0.5, 1.0, 1.1, 1.4, 1.6, 3, 10],
        "medium": [33, 11, 4, 2, 1.1, 0.6, 0.3, 0.6, 1.1, 2, 4, 11, 33],
        "high":   [170, 24, 8.1, 2, 0.7, 0.2, 0.2, 0.2, 0.7, 2, 8.1, 24, 170],
    },
    16: {
        "low":    [16, 9, 2, 1.4, 1.4, 1.2, 1.1, 1.0, 0.5, 1.0, 1.1, 1.2, 1.4, 1.4, 2, 9, 16],
        "medium": [110, 41, 10, 5, 3, 1.5, 1, 0.5, 0.3, 0.5, 1, 1.5, 3, 5, 10, 41, 110],
        "high":   [1000, 130, 26, 9, 4, 2, 0.2, 0.2, 0.2, 0.2, 0.2, 2, 4, 9, 26, 130, 1000],
    },
}


def _resample_shape(shape: list[float], buckets: int) -> list[float]:
    """Stretch a symmetric shape onto `buckets` slots (log-linear)."""
    src = len(shape) - 1
    out = []
    for k in range(buckets):
        x = k * src / (buckets - 1)
        lo = int(math.floor(x))
        hi = min(lo + 1, src)
        t = x - lo
        a, b = math.log(max(shape[lo], 0.01)), math.log(max(shape[hi], 0.01))
        out.append(math.exp(a + (b - a) * t))
    # keep the table mirror-symmetric
    return [(out[k] + out[-1 - k]) / 2 for k in range(buckets)]


@lru_cache(maxsize=None)
def plinko_table(rows: int, risk: str, edge: float) -> tuple:
    """Per-bucket multipliers for `rows` and `risk`, scaled to RTP `edge`."""
    if rows in PLINKO_SHAPES:
        shape = PLINKO_SHAPES[rows][risk]
    else:
        wider = min(r for r in PLINKO_SHAPES if r > rows)
        shape = _resample_shape(PLINKO_SHAPES[wider][risk], rows + 1)
    return tuple(scale_table(shape, binomial_probabilities(rows), edge))


def plinko_path(floats: list[float]) -> list[int]:
    """+1 (right) when r > 0.5, otherwise -1 (left)."""
    return [1 if r > 0.5 else -1 for r in floats]


def plinko_bucket(path: list[int]) -> int:
    return sum(1 for step in path if step > 0)


class PlinkoMapper(BaseGameMapper):
    game_type = "plinko"
    display_name = "Plinko"
    params_model = PlinkoParams

    def max_draws(self, params) -> int:
        return params.rows

    def table(self, params) -> tuple:
        return plinko_table(params.rows, params.risk.value, params.edge)

    def resolve(self, params, stream):
        path = plinko_path(stream.take(params.rows))
        bucket = plinko_bucket(path)
        mult = self.table(params)[bucket]
        return self._outcome(
            stream,
            {"path": path, "bucket": bucket, "rows": params.rows, "risk": params.risk.value},
            mult,
        )

    def theoretical_rtp(self, params) -> float:
        return expected_return(zip(binomial_probabilities(params.rows), self.table(params)))
