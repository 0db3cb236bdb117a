"""
FairPlay Engine - Seed Management (commit-reveal)

A player session owns one active SeedPair. The secret seed stays hidden
while active; only its SHA-256 commitment is published. Rotating retires
the pair into history, which reveals the secret so every past round can
be re-derived and checked against the commitment shown at the time.

Usage:
    from fairplay.seeds import SeedManager

    seeds = SeedManager.create(public_seed="lucky-7")
    print(seeds.active_commitment)          # share with the player
    nonce = seeds.next_nonce()              # one per economic round
    entry = seeds.rotate()                  # reveals the retired secret
    assert commitment_hash(entry.secret_seed) == entry.commitment
"""

from __future__ import annotations

import hashlib
import logging
import os
import time
from dataclasses import dataclass, field, replace
from typing import Optional

from config.settings import FairPlayConfig
from fairplay.errors import InvalidSeedInput

logger = logging.getLogger("fairplay.seeds")


def generate_secret_seed(n_bytes: int = None) -> str:
    """Cryptographically strong secret seed as hex (32 bytes by default)."""
    n_bytes = max(32, n_bytes or FairPlayConfig.SEED_BYTES)
    return os.urandom(n_bytes).hex()


def generate_public_seed(n_bytes: int = None) -> str:
    """Random client seed for players who do not pick their own."""
    return os.urandom(n_bytes or FairPlayConfig.CLIENT_SEED_BYTES).hex()


def commitment_hash(secret_seed: str) -> str:
    """SHA-256 of the secret seed, published before the seed is used."""
    return hashlib.sha256(secret_seed.encode()).hexdigest()


def verify_commitment(secret_seed: str, expected_hash: str) -> bool:
    """Player-side check once a secret has been revealed."""
    return commitment_hash(secret_seed) == expected_hash.lower()


def _check_public_seed(public_seed: str) -> str:
    if public_seed is None or not str(public_seed).strip():
        raise InvalidSeedInput("Public seed must be a non-empty string")
    return str(public_seed)


@dataclass(frozen=True)
class SeedPair:
    """Active seed pair. Immutable; nonce changes produce a new value."""
    secret_seed: str
    public_seed: str
    nonce: int = 0

    @property
    def commitment(self) -> str:
        return commitment_hash(self.secret_seed)

    def public_view(self) -> dict:
        """What the player is allowed to see while the pair is active."""
        return {
            "commitment": self.commitment,
            "public_seed": self.public_seed,
            "nonce": self.nonce,
        }


@dataclass(frozen=True)
class SeedHistoryEntry:
    """A retired seed pair with its secret revealed."""
    secret_seed: str
    public_seed: str
    nonce_reached: int
    commitment: str
    timestamp: float = field(default_factory=time.time)

    def verify(self) -> bool:
        return verify_commitment(self.secret_seed, self.commitment)

    def to_dict(self) -> dict:
        return {
            "secret_seed": self.secret_seed,
            "public_seed": self.public_seed,
            "nonce_reached": self.nonce_reached,
            "commitment": self.commitment,
            "timestamp": self.timestamp,
        }


class SeedManager:
    """Owns the active SeedPair and the retired-pair history for one player.

    There is no module-level instance: each session creates its own and
    passes it explicitly to whatever resolves rounds.
    """

    def __init__(self, pair: SeedPair):
        self._pair = pair
        self._history: list[SeedHistoryEntry] = []

    @classmethod
    def create(cls, public_seed: Optional[str] = None) -> "SeedManager":
        """Fresh manager with a new secret and nonce 0."""
        if public_seed is not None:
            public_seed = _check_public_seed(public_seed)
        pair = SeedPair(
            secret_seed=generate_secret_seed(),
            public_seed=public_seed or generate_public_seed(),
        )
        logger.info("Seed pair created (commitment %s…)", pair.commitment[:16])
        return cls(pair)

    # ── Read access ───────────────────────────────────────────

    @property
    def pair(self) -> SeedPair:
        return self._pair

    @property
    def nonce(self) -> int:
        return self._pair.nonce

    @property
    def public_seed(self) -> str:
        return self._pair.public_seed

    @property
    def active_commitment(self) -> str:
        return self._pair.commitment

    @property
    def history(self) -> tuple:
        return tuple(self._history)

    def snapshot(self) -> dict:
        return {**self._pair.public_view(), "rotations": len(self._history)}

    # ── Mutation ──────────────────────────────────────────────

    def next_nonce(self) -> int:
        """Return the nonce for the round about to be played and advance it."""
        nonce = self._pair.nonce
        self._pair = replace(self._pair, nonce=nonce + 1)
        return nonce

    def set_public_seed(self, public_seed: str) -> SeedPair:
        """Replace the public seed and reset the nonce. The secret is kept."""
        public_seed = _check_public_seed(public_seed)
        self._pair = replace(self._pair, public_seed=public_seed, nonce=0)
        logger.info("Public seed changed, nonce reset")
        return self._pair

    def rotate(self, new_public_seed: Optional[str] = None) -> SeedHistoryEntry:
        """Retire the active pair into history and start a new one.

        The new pair keeps `new_public_seed` when given, otherwise a fresh
        random public seed is generated.
        """
        if new_public_seed is not None:
            new_public_seed = _check_public_seed(new_public_seed)
        old = self._pair
        entry = SeedHistoryEntry(
            secret_seed=old.secret_seed,
            public_seed=old.public_seed,
            nonce_reached=old.nonce,
            commitment=old.commitment,
        )
        self._history.append(entry)
        self._pair = SeedPair(
            secret_seed=generate_secret_seed(),
            public_seed=new_public_seed or generate_public_seed(),
        )
        logger.info("Seed rotated after %d rounds; new commitment %s…",
                    entry.nonce_reached, self._pair.commitment[:16])
        return entry
