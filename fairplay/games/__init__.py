"""
FairPlay Engine - Outcome Mappers

One mapper per game variant. Each turns a round's uniform draws into a
game result and a payout multiplier, and reports its theoretical RTP.

Usage:
    from fairplay.games import get_mapper
    mapper = get_mapper("dice")
    outcome = mapper.resolve_floats({"target": 50}, [0.73])
    outcome.multiplier      # 1.98
"""

from config.game_schema import GameType
from fairplay.errors import UnknownGame
from fairplay.games.base import BaseGameMapper, Outcome
from fairplay.games.blackjack import BlackjackMapper
from fairplay.games.cards import CardDrawMapper
from fairplay.games.crash import CrashMapper, LimboMapper
from fairplay.games.dice import DiceMapper
from fairplay.games.hilo import HiLoMapper
from fairplay.games.keno import KenoMapper
from fairplay.games.mines import MinesMapper
from fairplay.games.plinko import PlinkoMapper
from fairplay.games.roulette import RouletteMapper
from fairplay.games.rps import RPSMapper
from fairplay.games.slots import SlotsMapper
from fairplay.games.wheel import WheelMapper

GAME_MAPPERS = {
    GameType.DICE: DiceMapper,
    GameType.CRASH: CrashMapper,
    GameType.LIMBO: LimboMapper,
    GameType.MINES: MinesMapper,
    GameType.PLINKO: PlinkoMapper,
    GameType.KENO: KenoMapper,
    GameType.WHEEL: WheelMapper,
    GameType.SLOTS: SlotsMapper,
    GameType.HILO: HiLoMapper,
    GameType.RPS: RPSMapper,
    GameType.ROULETTE: RouletteMapper,
    GameType.CARDS: CardDrawMapper,
    GameType.BLACKJACK: BlackjackMapper,
}

GAME_TYPES = [g.value for g in GAME_MAPPERS]

# Games that can be played as a live, multi-step round
MULTI_STEP_GAMES = {GameType.MINES, GameType.HILO, GameType.BLACKJACK}


def get_mapper(game_type) -> BaseGameMapper:
    """Get the outcome mapper for a game type."""
    try:
        key = GameType(str(getattr(game_type, "value", game_type)).lower())
    except ValueError:
        raise UnknownGame(f"Unknown game type: {game_type}. Available: {GAME_TYPES}") from None
    return GAME_MAPPERS[key]()


__all__ = [
    "BaseGameMapper", "Outcome", "GAME_MAPPERS", "GAME_TYPES",
    "MULTI_STEP_GAMES", "get_mapper",
]
