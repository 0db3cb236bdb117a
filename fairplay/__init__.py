"""
FairPlay Engine

Commit-reveal seeds, an HMAC-SHA256 float stream, per-game outcome
mappers and an autobet controller.

Usage:
    from fairplay import SeedManager, GameTable, Wallet
    table = GameTable(SeedManager.create("my-seed"), Wallet(100))
    record = table.play("crash", {"cashout": 2.0}, stake=1.0)
"""

from fairplay.autobet import AutobetController, AutobetState
from fairplay.errors import (
    ExhaustedSampleSpace, FairPlayError, InsufficientBalance,
    InvalidSeedInput, RoundStateError, UnknownGame,
)
from fairplay.games import GAME_TYPES, get_mapper
from fairplay.rng import rng_float, rng_floats
from fairplay.seeds import SeedHistoryEntry, SeedManager, SeedPair, commitment_hash
from fairplay.table import GameTable, RoundRecord
from fairplay.wallet import Wallet

__version__ = "1.0.0"

__all__ = [
    "AutobetController", "AutobetState",
    "ExhaustedSampleSpace", "FairPlayError", "InsufficientBalance",
    "InvalidSeedInput", "RoundStateError", "UnknownGame",
    "GAME_TYPES", "get_mapper", "rng_float", "rng_floats",
    "SeedHistoryEntry", "SeedManager", "SeedPair", "commitment_hash",
    "GameTable", "RoundRecord", "Wallet",
]
