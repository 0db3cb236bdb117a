"""Dice - uniform roll in [0, 100) against an over/under target."""
from config.game_schema import DiceParams
from fairplay.games.base import BaseGameMapper
from fairplay.payout import dice_multiplier, dice_win_probability


def dice_roll(r: float) -> float:
    return r * 100.0


def dice_outcome(r: float, target: float, roll_over: bool = True) -> dict:
    roll = dice_roll(r)
    won = roll > target if roll_over else roll < target
    return {
        "result": {"roll": roll, "target": target, "roll_over": roll_over, "won": won},
        "multiplier": dice_multiplier(target, roll_over) if won else 0.0,
    }


class DiceMapper(BaseGameMapper):
    game_type = "dice"
    display_name = "Dice"
    params_model = DiceParams

    def max_draws(self, params) -> int:
        return 1

    def resolve(self, params, stream):
        out = dice_outcome(stream.next(), params.target, params.roll_over)
        return self._outcome(stream, out["result"], out["multiplier"])

    def theoretical_rtp(self, params) -> float:
        p = dice_win_probability(params.target, params.roll_over)
        return p * dice_multiplier(params.target, params.roll_over)
