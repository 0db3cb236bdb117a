"""
FairPlay Engine - Game Parameter Schema

One parameter model per game variant. The variant set is closed: every
game the engine can resolve is a member of `GameType`, and each member
carries exactly one parameter model (see `PARAMS_BY_GAME`).

Usage:
    from config.game_schema import GameType, DiceParams, params_for
    params = DiceParams(target=50.0)
    params = params_for("mines", mine_count=3)
    json_str = params.model_dump_json(indent=2)
"""

from __future__ import annotations
from enum import Enum
from typing import Optional
from pydantic import BaseModel, Field, model_validator

from config.settings import FairPlayConfig


# ═══════════════════════════════════════════════════════════════
# Enums
# ═══════════════════════════════════════════════════════════════

class GameType(str, Enum):
    DICE = "dice"
    CRASH = "crash"
    LIMBO = "limbo"
    MINES = "mines"
    PLINKO = "plinko"
    KENO = "keno"
    WHEEL = "wheel"
    SLOTS = "slots"
    HILO = "hilo"
    RPS = "rps"
    ROULETTE = "roulette"
    CARDS = "cards"
    BLACKJACK = "blackjack"


class PlinkoRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class KenoRisk(str, Enum):
    CLASSIC = "classic"
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class WheelRisk(str, Enum):
    LOW = "low"
    MEDIUM = "medium"
    HIGH = "high"


class HiLoGuess(str, Enum):
    HIGHER = "higher"
    LOWER = "lower"
    SAME = "same"


class RPSMove(int, Enum):
    ROCK = 0
    PAPER = 1
    SCISSORS = 2


# ═══════════════════════════════════════════════════════════════
# Per-Game Parameters
# ═══════════════════════════════════════════════════════════════

class DiceParams(BaseModel):
    """Dice - roll 0-100, win over (or under) the target"""
    target: float = Field(default=50.0, ge=1.0, le=98.0)
    roll_over: bool = True


class CrashParams(BaseModel):
    """Crash - player cashes out at `cashout` before the crash point"""
    cashout: float = Field(default=2.0, ge=1.01)
    edge: float = Field(default_factory=lambda: FairPlayConfig.EDGE_CRASH, gt=0, lt=1)
    max_multiplier: float = Field(default_factory=lambda: FairPlayConfig.CRASH_MAX_MULTIPLIER, gt=1)


class LimboParams(CrashParams):
    """Limbo - same crash point, revealed instantly against a target"""


class MinesParams(BaseModel):
    """Mines - 5x5 board, reveal gems, avoid mines"""
    grid_size: int = Field(default=25, ge=4, le=64)
    mine_count: int = Field(default=3, ge=1)
    reveals: int = Field(default=1, ge=1)          # auto-play: cells revealed before cash out
    edge: float = Field(default_factory=lambda: FairPlayConfig.EDGE_MINES, gt=0, lt=1)

    @model_validator(mode="after")
    def _check_board(self):
        if self.mine_count >= self.grid_size:
            raise ValueError("mine_count must leave at least one safe cell")
        if self.reveals > self.grid_size - self.mine_count:
            raise ValueError("reveals cannot exceed the number of safe cells")
        return self


class PlinkoParams(BaseModel):
    """Plinko - ball drops through `rows` pegs into rows+1 buckets"""
    rows: int = Field(default=16, ge=8, le=16)
    risk: PlinkoRisk = PlinkoRisk.MEDIUM
    edge: float = Field(default_factory=lambda: FairPlayConfig.EDGE_PLINKO, gt=0, lt=1)


class KenoParams(BaseModel):
    """Keno - pick up to 10 of 40, house draws 10"""
    picks: list[int] = Field(default_factory=lambda: [1, 2, 3, 4, 5], min_length=1, max_length=10)
    risk: KenoRisk = KenoRisk.CLASSIC

    @model_validator(mode="after")
    def _check_picks(self):
        if len(set(self.picks)) != len(self.picks):
            raise ValueError("keno picks must be unique")
        if any(p < 1 or p > 40 for p in self.picks):
            raise ValueError("keno picks must be within 1-40")
        return self


class WheelParams(BaseModel):
    """Wheel - weighted segments, one spin"""
    risk: WheelRisk = WheelRisk.MEDIUM
    edge: float = Field(default_factory=lambda: FairPlayConfig.EDGE_WHEEL, gt=0, lt=1)


class SlotsParams(BaseModel):
    """Slots - three weighted reels"""
    reels: int = Field(default=3, ge=3, le=3)
    edge: float = Field(default_factory=lambda: FairPlayConfig.EDGE_SLOTS, gt=0, lt=1)


class HiLoParams(BaseModel):
    """Hi-Lo - chain of guesses against the current card"""
    guesses: list[HiLoGuess] = Field(default_factory=lambda: [HiLoGuess.HIGHER])
    edge: float = Field(default_factory=lambda: FairPlayConfig.EDGE_HILO, gt=0, lt=1)


class RPSParams(BaseModel):
    """Rock-paper-scissors against the house"""
    move: RPSMove = RPSMove.ROCK
    edge: float = Field(default_factory=lambda: FairPlayConfig.EDGE_RPS, gt=0, lt=1)


class RouletteParams(BaseModel):
    """European roulette - bet labels map to pocket sets"""
    bet: str = "red"


class CardDrawParams(BaseModel):
    """Card draw - deal `count` cards off a shuffled 52-card deck"""
    count: int = Field(default=5, ge=1, le=52)


class BlackjackParams(BaseModel):
    """Blackjack - auto-play hits below `stand_on`, then stands"""
    stand_on: int = Field(default=17, ge=12, le=21)


PARAMS_BY_GAME: dict[GameType, type[BaseModel]] = {
    GameType.DICE: DiceParams,
    GameType.CRASH: CrashParams,
    GameType.LIMBO: LimboParams,
    GameType.MINES: MinesParams,
    GameType.PLINKO: PlinkoParams,
    GameType.KENO: KenoParams,
    GameType.WHEEL: WheelParams,
    GameType.SLOTS: SlotsParams,
    GameType.HILO: HiLoParams,
    GameType.RPS: RPSParams,
    GameType.ROULETTE: RouletteParams,
    GameType.CARDS: CardDrawParams,
    GameType.BLACKJACK: BlackjackParams,
}


def params_for(game_type: str, **overrides) -> BaseModel:
    """Build the validated parameter model for a game type."""
    return PARAMS_BY_GAME[GameType(game_type)](**overrides)


# ═══════════════════════════════════════════════════════════════
# Autobet
# ═══════════════════════════════════════════════════════════════

class AutobetSettings(BaseModel):
    """Autobet stop conditions and stake progression. 0 disables a limit."""
    stake_base: float = Field(gt=0)
    on_win_pct: float = Field(default=0.0, gt=-100.0)
    on_loss_pct: float = Field(default=0.0, gt=-100.0)
    rounds_target: int = Field(default=0, ge=0)
    profit_target: float = Field(default=0.0, ge=0)
    loss_limit: float = Field(default=0.0, ge=0)


class AutobetSnapshot(BaseModel):
    """Read-only view of a running (or finished) autobet session."""
    model_config = {"frozen": True}

    state: str
    stake_base: float
    stake_current: float
    on_win_pct: float
    on_loss_pct: float
    rounds_target: int
    rounds_done: int
    profit_target: float
    loss_limit: float
    cumulative_profit: float
    running: bool
    stop_reason: Optional[str] = None
