"""Mines - Fisher-Yates board, combinatorial cash-out multiplier."""
import logging

from config.game_schema import MinesParams
from fairplay.errors import RoundStateError
from fairplay.games.base import BaseGameMapper
from fairplay.games.shuffle import permutation, shuffle_draws
from fairplay.payout import mines_multiplier, mines_survival_probability

logger = logging.getLogger("fairplay.games")


def mine_positions(grid_size: int, mine_count: int, stream) -> list[int]:
    """Shuffle the board cells; the first `mine_count` cells hold mines."""
    return sorted(permutation(grid_size, stream)[:mine_count])


class MinesRound:
    """A live Mines round: board fixed up front, cells revealed one by one."""

    def __init__(self, params: MinesParams, mines: list[int]):
        self.params = params
        self.mines = frozenset(mines)
        self.revealed: list[int] = []
        self.busted = False
        self.cashed_out = False

    @property
    def finished(self) -> bool:
        return self.busted or self.cashed_out

    @property
    def safe_reveals(self) -> int:
        return len(self.revealed) - (1 if self.busted else 0)

    @property
    def multiplier(self) -> float:
        if self.busted:
            return 0.0
        return mines_multiplier(self.params.grid_size, self.params.mine_count,
                                self.safe_reveals, self.params.edge)

    def reveal(self, cell: int) -> bool:
        """Reveal a cell. Returns True when safe; a mine ends the round."""
        if self.finished:
            raise RoundStateError("Mines round already settled")
        if not 0 <= cell < self.params.grid_size:
            raise ValueError(f"Cell {cell} outside board of {self.params.grid_size}")
        if cell in self.revealed:
            raise ValueError(f"Cell {cell} already revealed")
        self.revealed.append(cell)
        if cell in self.mines:
            self.busted = True
            logger.debug("mines: cell %d busted after %d safe reveals", cell, self.safe_reveals)
            return False
        if self.safe_reveals == self.params.grid_size - self.params.mine_count:
            self.cashed_out = True
        return True

    def cashout(self) -> float:
        if self.busted:
            raise RoundStateError("Cannot cash out a busted round")
        if not self.revealed:
            raise RoundStateError("Reveal at least one cell before cashing out")
        self.cashed_out = True
        return self.multiplier

    def state(self) -> dict:
        return {
            "revealed": list(self.revealed),
            "busted": self.busted,
            "cashed_out": self.cashed_out,
            "multiplier": self.multiplier,
            "mines": sorted(self.mines) if self.finished else None,
        }


class MinesMapper(BaseGameMapper):
    game_type = "mines"
    display_name = "Mines"
    params_model = MinesParams

    def max_draws(self, params) -> int:
        return shuffle_draws(params.grid_size)

    def start(self, params, stream) -> MinesRound:
        params = self.parse(params)
        return MinesRound(params, mine_positions(params.grid_size, params.mine_count, stream))

    def resolve(self, params, stream):
        """Auto-play: reveal the lowest `reveals` cells, then cash out."""
        live = self.start(params, stream)
        for cell in range(params.grid_size):
            if len(live.revealed) >= params.reveals or live.finished:
                break
            live.reveal(cell)
        mult = live.multiplier
        if not live.finished:
            live.cashout()
        return self._outcome(stream, {**live.state(), "mines": sorted(live.mines)}, mult)

    def theoretical_rtp(self, params) -> float:
        p = mines_survival_probability(params.grid_size, params.mine_count, params.reveals)
        return p * mines_multiplier(params.grid_size, params.mine_count, params.reveals, params.edge)
