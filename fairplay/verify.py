"""
FairPlay Engine - Player-side verification

Once a seed pair is retired its secret is public. These helpers let a
player (or an auditor) recompute any round from the revealed values.
"""

from __future__ import annotations

from fairplay.games import get_mapper
from fairplay.rng import DrawStream, rng_float
from fairplay.seeds import SeedHistoryEntry, verify_commitment


def verify_round(entry: SeedHistoryEntry, nonce: int, index: int = 0,
                 expected: float = None) -> bool:
    """Check a revealed pair reproduces the float seen at (nonce, index)."""
    if not verify_commitment(entry.secret_seed, entry.commitment):
        return False
    if not 0 <= nonce < entry.nonce_reached:
        return False
    if expected is None:
        return True
    return rng_float(entry.secret_seed, entry.public_seed, nonce, index) == expected


def replay_round(secret_seed: str, public_seed: str, nonce: int,
                 game_type: str, params=None):
    """Recompute the Outcome of an auto-resolved round."""
    return get_mapper(game_type).resolve_seeded(params, secret_seed, public_seed, nonce)


def verify_record(entry: SeedHistoryEntry, record, params=None) -> bool:
    """Check a settled RoundRecord against the revealed seed pair.

    Compares every float the round consumed, then (for auto-resolved
    games) the full result.
    """
    if entry.commitment != record.commitment or entry.public_seed != record.public_seed:
        return False
    if not verify_commitment(entry.secret_seed, entry.commitment):
        return False
    stream = DrawStream(entry.secret_seed, entry.public_seed, record.nonce)
    if list(stream.take(len(record.floats))) != list(record.floats):
        return False
    if params is not None:
        outcome = replay_round(entry.secret_seed, entry.public_seed, record.nonce,
                               record.game_type, params)
        return outcome.multiplier == record.multiplier
    return True
