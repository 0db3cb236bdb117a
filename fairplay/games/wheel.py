"""Wheel - weighted segments, multipliers scaled to the configured edge."""
from functools import lru_cache

from config.game_schema import WheelParams
from fairplay.games.base import BaseGameMapper
from fairplay.games.weighted import weighted_pick, weighted_probabilities
from fairplay.payout import expected_return, scale_table

# risk → [(base multiplier, weight)]
WHEEL_SEGMENTS = {
    "low": [(0.0, 2), (1.2, 7), (1.5, 1)],
    "medium": [(0.0, 10), (1.5, 5), (1.7, 1), (2.0, 2), (3.0, 1), (4.0, 1)],
    "high": [(0.0, 29), (29.7, 1)],
}


@lru_cache(maxsize=None)
def wheel_table(risk: str, edge: float) -> tuple:
    """((multiplier, weight), ...) for a risk tier at RTP `edge`."""
    base = WHEEL_SEGMENTS[risk]
    weights = [w for _, w in base]
    mults = scale_table([m for m, _ in base], weighted_probabilities(weights), edge)
    return tuple(zip(mults, weights))


class WheelMapper(BaseGameMapper):
    game_type = "wheel"
    display_name = "Wheel"
    params_model = WheelParams

    def max_draws(self, params) -> int:
        return 1

    def resolve(self, params, stream):
        table = wheel_table(params.risk.value, params.edge)
        idx = weighted_pick(stream.next(), [w for _, w in table])
        return self._outcome(stream, {"segment": idx, "risk": params.risk.value}, table[idx][0])

    def theoretical_rtp(self, params) -> float:
        table = wheel_table(params.risk.value, params.edge)
        probs = weighted_probabilities([w for _, w in table])
        return expected_return(zip(probs, [m for m, _ in table]))
