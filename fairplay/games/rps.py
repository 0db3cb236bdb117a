"""Rock-paper-scissors - house move floor(r × 3); ties push."""
from config.game_schema import RPSMove, RPSParams
from fairplay.games.base import BaseGameMapper
from fairplay.payout import rps_win_multiplier

OUTCOMES = {0: "tie", 1: "win", 2: "lose"}


def rps_result(player: int, house: int) -> str:
    return OUTCOMES[(player - house + 3) % 3]


class RPSMapper(BaseGameMapper):
    game_type = "rps"
    display_name = "Rock Paper Scissors"
    params_model = RPSParams

    def max_draws(self, params) -> int:
        return 1

    def resolve(self, params, stream):
        house = int(stream.next() * 3)
        result = rps_result(int(params.move), house)
        mult = {"tie": 1.0, "win": rps_win_multiplier(params.edge), "lose": 0.0}[result]
        return self._outcome(
            stream,
            {"player": RPSMove(params.move).name.lower(),
             "house": RPSMove(house).name.lower(), "result": result},
            mult,
        )

    def theoretical_rtp(self, params) -> float:
        return (1.0 + rps_win_multiplier(params.edge)) / 3
