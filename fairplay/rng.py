"""
FairPlay Engine - Provably Fair RNG

Deterministic mapping from (secret_seed, public_seed, nonce, index) to a
uniform float in [0, 1):

    message = f"{public_seed}:{nonce}:{index}"
    digest  = HMAC-SHA256(key=secret_seed, msg=message)
    r       = int(digest[:8], 16) / 2**32

`index` separates the draws inside one round (a deck shuffle needs 51,
a plinko drop needs one per row). `floats()` never advances the nonce;
advancing it once per economic round is the caller's job
(see `SeedManager.next_nonce`).

Usage:
    from fairplay.rng import rng_float, rng_floats
    r = rng_float(secret, "my-client-seed", nonce=0)
    path = rng_floats(secret, "my-client-seed", nonce=1, count=16)
"""

from __future__ import annotations

import hashlib
import hmac
import logging

logger = logging.getLogger("fairplay.rng")

TWO_POW_32 = 0x100000000


def round_message(public_seed: str, nonce: int, index: int = 0) -> str:
    """Message authenticated for a single draw."""
    return f"{public_seed}:{nonce}:{index}"


def digest(secret_seed: str, public_seed: str, nonce: int, index: int = 0) -> str:
    """HMAC-SHA256(secret_seed, public_seed:nonce:index) as hex."""
    return hmac.new(
        secret_seed.encode(),
        round_message(public_seed, nonce, index).encode(),
        hashlib.sha256,
    ).hexdigest()


def digest_to_float(hex_digest: str) -> float:
    """First 4 bytes, big-endian, scaled into [0, 1)."""
    return int(hex_digest[:8], 16) / TWO_POW_32


def rng_float(secret_seed: str, public_seed: str, nonce: int, index: int = 0) -> float:
    """Uniform float in [0, 1) for one draw."""
    return digest_to_float(digest(secret_seed, public_seed, nonce, index))


def rng_floats(secret_seed: str, public_seed: str, nonce: int, count: int,
               start: int = 0) -> list[float]:
    """`count` independent draws for indices start..start+count-1 of one nonce."""
    floats = [rng_float(secret_seed, public_seed, nonce, i)
              for i in range(start, start + count)]
    logger.debug("drew %d floats at nonce=%d (index %d..%d)",
                 count, nonce, start, start + count - 1)
    return floats


def rng_ints(secret_seed: str, public_seed: str, nonce: int, count: int,
             modulus: int) -> list[int]:
    """`count` integers in [0, modulus) via floor(r * modulus)."""
    return [int(r * modulus) for r in rng_floats(secret_seed, public_seed, nonce, count)]


class DrawStream:
    """Sequential reader over the index space of one (seed pair, nonce).

    Mappers pull floats from a stream instead of indexing by hand, so a
    round always consumes indices 0, 1, 2, ... in order and the number of
    draws used is recorded for the audit trail.
    """

    def __init__(self, secret_seed: str, public_seed: str, nonce: int, start: int = 0):
        self.secret_seed = secret_seed
        self.public_seed = public_seed
        self.nonce = nonce
        self.index = start
        self.drawn: list[float] = []

    def next(self) -> float:
        r = rng_float(self.secret_seed, self.public_seed, self.nonce, self.index)
        self.index += 1
        self.drawn.append(r)
        return r

    def take(self, count: int) -> list[float]:
        return [self.next() for _ in range(count)]

    @property
    def used(self) -> int:
        return len(self.drawn)

    def first_digest(self) -> str:
        """Digest of index 0 - the round's headline hash for audits."""
        return digest(self.secret_seed, self.public_seed, self.nonce, 0)


class SequenceStream:
    """Stream over a fixed list of floats, for mapping pre-drawn values.

    Used by tests and by Monte-Carlo simulation, where floats come from a
    seeded PRNG instead of HMAC draws.
    """

    def __init__(self, floats=None, source=None):
        self._floats = list(floats or [])
        self._source = source
        self._pos = 0
        self.drawn: list[float] = []

    def next(self) -> float:
        if self._pos < len(self._floats):
            r = self._floats[self._pos]
        elif self._source is not None:
            r = self._source()
        else:
            raise IndexError("sequence stream exhausted")
        self._pos += 1
        self.drawn.append(r)
        return r

    def take(self, count: int) -> list[float]:
        return [self.next() for _ in range(count)]

    @property
    def used(self) -> int:
        return len(self.drawn)
