"""European roulette - 37 pockets, pocket = floor(r × 37)."""
from config.game_schema import RouletteParams
from fairplay.games.base import BaseGameMapper

POCKETS = 37
RED = frozenset({1, 3, 5, 7, 9, 12, 14, 16, 18, 19, 21, 23, 25, 27, 30, 32, 34, 36})

# label → (winning pockets, total-return multiplier)
OUTSIDE_BETS = {
    "red": (RED, 2),
    "black": (frozenset(range(1, 37)) - RED, 2),
    "even": (frozenset(n for n in range(1, 37) if n % 2 == 0), 2),
    "odd": (frozenset(n for n in range(1, 37) if n % 2 == 1), 2),
    "1-18": (frozenset(range(1, 19)), 2),
    "19-36": (frozenset(range(19, 37)), 2),
    "1st 12": (frozenset(range(1, 13)), 3),
    "2nd 12": (frozenset(range(13, 25)), 3),
    "3rd 12": (frozenset(range(25, 37)), 3),
}
STRAIGHT_UP = 36


def bet_layout(bet: str) -> tuple:
    """(pockets, multiplier) for an outside bet or a straight-up number."""
    if bet in OUTSIDE_BETS:
        return OUTSIDE_BETS[bet]
    if bet.isdigit() and 0 <= int(bet) < POCKETS:
        return frozenset({int(bet)}), STRAIGHT_UP
    raise ValueError(f"Unknown roulette bet: {bet!r}")


def pocket_color(pocket: int) -> str:
    if pocket == 0:
        return "green"
    return "red" if pocket in RED else "black"


class RouletteMapper(BaseGameMapper):
    game_type = "roulette"
    display_name = "Roulette"
    params_model = RouletteParams

    def max_draws(self, params) -> int:
        return 1

    def resolve(self, params, stream):
        pockets, mult = bet_layout(params.bet)
        pocket = int(stream.next() * POCKETS)
        won = pocket in pockets
        return self._outcome(
            stream,
            {"pocket": pocket, "color": pocket_color(pocket), "bet": params.bet},
            mult if won else 0.0,
        )

    def theoretical_rtp(self, params) -> float:
        pockets, mult = bet_layout(params.bet)
        return len(pockets) / POCKETS * mult
