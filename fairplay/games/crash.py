"""Crash / Limbo - inverse-CDF crash point m = e / (1 - r), clamped to [1, cap].

P(m >= x) = e / x, so any cash-out target x returns e in expectation.
The edge lives entirely in the formula; there is no separate instant-bust
roll on top of it.
"""
from config.game_schema import CrashParams, LimboParams
from fairplay.games.base import BaseGameMapper


def crash_point(r: float, edge: float = 0.99, max_multiplier: float = 1_000_000.0) -> float:
    """Crash multiplier for a draw r in [0, 1)."""
    if r >= 1.0:
        return max_multiplier
    m = edge / (1.0 - r)
    return min(max(m, 1.0), max_multiplier)


def display_multiplier(m: float) -> float:
    """Two-decimal value shown to players (never above the true point)."""
    return int(m * 100 + 1e-9) / 100


def crash_win_probability(cashout: float, edge: float, max_multiplier: float) -> float:
    if cashout > max_multiplier:
        return 0.0
    return min(1.0, edge / cashout)


class CrashMapper(BaseGameMapper):
    game_type = "crash"
    display_name = "Crash"
    params_model = CrashParams

    def max_draws(self, params) -> int:
        return 1

    def resolve(self, params, stream):
        point = crash_point(stream.next(), params.edge, params.max_multiplier)
        won = point >= params.cashout
        return self._outcome(
            stream,
            {"crash_point": point, "display": display_multiplier(point),
             "cashout": params.cashout, "won": won},
            params.cashout if won else 0.0,
        )

    def theoretical_rtp(self, params) -> float:
        return crash_win_probability(params.cashout, params.edge, params.max_multiplier) * params.cashout


class LimboMapper(CrashMapper):
    game_type = "limbo"
    display_name = "Limbo"
    params_model = LimboParams
