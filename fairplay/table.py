"""
FairPlay Engine - Game Table

Plays rounds for one player: stake check, debit, one nonce per round,
draw, map, credit. The seed manager and wallet are passed in; the table
holds no global state.

Usage:
    from fairplay.table import GameTable
    table = GameTable(SeedManager.create(), Wallet(100))
    record = table.play("dice", {"target": 50}, stake=1.0)

    live = table.start("mines", {"mine_count": 3}, stake=1.0)
    live.round.reveal(7)
    record = live.cashout()
"""

from __future__ import annotations

import logging
import time
from dataclasses import dataclass, field

from fairplay.errors import InsufficientBalance, RoundStateError
from fairplay.games import MULTI_STEP_GAMES, get_mapper
from fairplay.games.base import Outcome
from fairplay.rng import DrawStream, digest
from fairplay.seeds import SeedManager
from fairplay.wallet import Wallet

logger = logging.getLogger("fairplay.table")


@dataclass(frozen=True)
class RoundRecord:
    """Settled round with everything needed to verify it later."""
    game_type: str
    nonce: int
    public_seed: str
    commitment: str
    digest: str
    floats: tuple
    result: dict
    multiplier: float
    stake: float
    payout: float
    timestamp: float = field(default_factory=time.time)

    @property
    def won(self) -> bool:
        """A push (payout equal to the stake) counts as a win."""
        return self.payout >= self.stake and self.payout > 0

    @property
    def profit(self) -> float:
        return self.payout - self.stake

    def verification_data(self) -> dict:
        return {
            "game_type": self.game_type,
            "nonce": self.nonce,
            "public_seed": self.public_seed,
            "commitment": self.commitment,
            "digest": self.digest,
            "floats": list(self.floats),
            "result": self.result,
            "multiplier": self.multiplier,
            "verification_steps": [
                "1. After rotation: SHA-256(secret_seed) == commitment",
                "2. For index i: HMAC-SHA256(secret_seed, public_seed:nonce:i)",
                "3. Float i = int(first 8 hex chars, 16) / 2^32",
                "4. Apply the game mapper to the floats in index order",
            ],
        }


class LiveRound:
    """A multi-step round in progress. Settles exactly once."""

    def __init__(self, table: "GameTable", game_type: str, params, stake: float,
                 pair, nonce: int, stream: DrawStream, round_obj):
        self._table = table
        self.game_type = game_type
        self.params = params
        self.stake = stake
        self.pair = pair
        self.nonce = nonce
        self.stream = stream
        self.round = round_obj
        self.record = None

    def cashout(self) -> RoundRecord:
        self.round.cashout()
        return self.settle()

    def double(self) -> RoundRecord:
        """Blackjack double: debit a second stake, draw one card, stand."""
        if not getattr(self.round, "can_double", False):
            raise RoundStateError(f"Double is not available in this {self.game_type} round")
        self._table.wallet.debit(self.stake)
        self.stake *= 2
        self.round.double()
        return self.settle()

    def settle(self) -> RoundRecord:
        """Credit the payout once the round has finished (bust or cash out)."""
        if self.record is not None:
            return self.record
        if not self.round.finished:
            raise RoundStateError("Round still in progress")
        outcome = Outcome(
            game_type=self.game_type,
            result=self.round.state(),
            multiplier=self.round.multiplier,
            draws_used=self.stream.used,
            floats=tuple(self.stream.drawn),
        )
        self.record = self._table._settle(self.game_type, self.pair, self.nonce, self.stake, outcome)
        return self.record


class GameTable:

    def __init__(self, seeds: SeedManager, wallet: Wallet):
        self.seeds = seeds
        self.wallet = wallet
        self.rounds: list[RoundRecord] = []

    def _open(self, stake: float):
        if not self.wallet.can_afford(stake):
            raise InsufficientBalance(stake, self.wallet.balance)
        self.wallet.debit(stake)
        nonce = self.seeds.next_nonce()
        pair = self.seeds.pair
        return nonce, pair, DrawStream(pair.secret_seed, pair.public_seed, nonce)

    def play(self, game_type: str, params=None, stake: float = 1.0) -> RoundRecord:
        """Play one complete round. Raises InsufficientBalance before any draw.

        Multi-step games are auto-played. If mapping fails the stake is
        refunded; the nonce stays consumed.
        """
        mapper = get_mapper(game_type)
        if not mapper.stakeable:
            raise ValueError(f"{mapper.game_type} has no payout and cannot be staked")
        params = mapper.parse(params)
        nonce, pair, stream = self._open(stake)
        try:
            outcome = mapper.resolve(params, stream)
        except Exception:
            self.wallet.credit(stake)
            logger.warning("%s nonce=%d failed to resolve, stake %.2f refunded",
                           mapper.game_type, nonce, stake)
            raise
        return self._settle(mapper.game_type, pair, nonce, stake, outcome)

    def start(self, game_type: str, params=None, stake: float = 1.0) -> LiveRound:
        """Open a multi-step round (mines, hi-lo, blackjack)."""
        mapper = get_mapper(game_type)
        if mapper.game_type not in {g.value for g in MULTI_STEP_GAMES}:
            raise ValueError(f"{mapper.game_type} is not a multi-step game")
        params = mapper.parse(params)
        nonce, pair, stream = self._open(stake)
        return LiveRound(self, mapper.game_type, params, stake, pair, nonce, stream,
                         mapper.start(params, stream))

    def _settle(self, game_type: str, pair, nonce: int, stake: float,
                outcome: Outcome) -> RoundRecord:
        payout = round(stake * outcome.multiplier, 8)
        if payout > 0:
            self.wallet.credit(payout)
        record = RoundRecord(
            game_type=game_type,
            nonce=nonce,
            public_seed=pair.public_seed,
            commitment=pair.commitment,
            digest=digest(pair.secret_seed, pair.public_seed, nonce, 0),
            floats=outcome.floats,
            result=outcome.result,
            multiplier=outcome.multiplier,
            stake=stake,
            payout=payout,
        )
        self.rounds.append(record)
        logger.debug("%s nonce=%d stake=%.2f mult=%.4f payout=%.2f",
                     game_type, nonce, stake, outcome.multiplier, payout)
        return record
