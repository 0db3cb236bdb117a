#!/usr/bin/env python3
"""
FairPlay Engine - RNG, Seed & Verification Test Suite

Run: python tests.py
     python tests.py -v              # verbose
     python tests.py TestSeedManager # run specific class

Test categories:
  TestRNG           - HMAC float derivation, determinism, index space
  TestSeedManager   - commit-reveal lifecycle, nonce rules, history
  TestVerification  - replaying settled rounds from revealed seeds
"""

import hashlib
import hmac
import sys
import unittest
from dataclasses import replace
from pathlib import Path

# ── Ensure project root is on sys.path ──
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from fairplay.errors import InvalidSeedInput
from fairplay.rng import (
    DrawStream, digest, digest_to_float, rng_float, rng_floats, rng_ints, round_message,
)
from fairplay.seeds import SeedManager, commitment_hash, verify_commitment
from fairplay.table import GameTable
from fairplay.verify import replay_round, verify_record, verify_round
from fairplay.wallet import Wallet

SECRET = "a" * 64
PUBLIC = "player-seed"


# ============================================================
# RNG
# ============================================================

class TestRNG(unittest.TestCase):

    def test_float_matches_hmac_definition(self):
        """float = first 4 digest bytes (big-endian) / 2^32."""
        mac = hmac.new(SECRET.encode(), f"{PUBLIC}:7:3".encode(), hashlib.sha256).digest()
        expected = int.from_bytes(mac[:4], "big") / 2 ** 32
        self.assertEqual(rng_float(SECRET, PUBLIC, 7, 3), expected)

    def test_deterministic(self):
        a = rng_float(SECRET, PUBLIC, 42, 0)
        for _ in range(5):
            self.assertEqual(rng_float(SECRET, PUBLIC, 42, 0), a)

    def test_range(self):
        for nonce in range(500):
            r = rng_float(SECRET, PUBLIC, nonce)
            self.assertGreaterEqual(r, 0.0)
            self.assertLess(r, 1.0)

    def test_digest_to_float_bounds(self):
        self.assertEqual(digest_to_float("00000000" + "0" * 56), 0.0)
        top = digest_to_float("ffffffff" + "0" * 56)
        self.assertLess(top, 1.0)
        self.assertEqual(top, (2 ** 32 - 1) / 2 ** 32)

    def test_inputs_change_output(self):
        base = rng_float(SECRET, PUBLIC, 0, 0)
        self.assertNotEqual(base, rng_float(SECRET, PUBLIC, 1, 0))
        self.assertNotEqual(base, rng_float(SECRET, PUBLIC, 0, 1))
        self.assertNotEqual(base, rng_float(SECRET, "other", 0, 0))
        self.assertNotEqual(base, rng_float("b" * 64, PUBLIC, 0, 0))

    def test_floats_is_indexed_float(self):
        floats = rng_floats(SECRET, PUBLIC, 5, 8)
        self.assertEqual(len(floats), 8)
        self.assertEqual(floats, [rng_float(SECRET, PUBLIC, 5, i) for i in range(8)])

    def test_floats_do_not_advance_nonce(self):
        """Two calls at the same nonce return the same draws."""
        self.assertEqual(rng_floats(SECRET, PUBLIC, 9, 4), rng_floats(SECRET, PUBLIC, 9, 4))

    def test_ints_modulus(self):
        for v in rng_ints(SECRET, PUBLIC, 0, 200, 52):
            self.assertTrue(0 <= v < 52)

    def test_message_format(self):
        self.assertEqual(round_message("abc", 3, 2), "abc:3:2")

    def test_draw_stream_walks_indices(self):
        stream = DrawStream(SECRET, PUBLIC, 3)
        drawn = stream.take(4)
        self.assertEqual(drawn, rng_floats(SECRET, PUBLIC, 3, 4))
        self.assertEqual(stream.used, 4)
        self.assertEqual(stream.first_digest(), digest(SECRET, PUBLIC, 3, 0))


# ============================================================
# Seed Manager
# ============================================================

class TestSeedManager(unittest.TestCase):

    def test_create_defaults(self):
        seeds = SeedManager.create()
        self.assertEqual(seeds.nonce, 0)
        self.assertEqual(len(seeds.pair.secret_seed), 64)     # 32 bytes hex
        int(seeds.pair.secret_seed, 16)
        self.assertTrue(seeds.public_seed)
        self.assertEqual(seeds.history, ())

    def test_create_with_public_seed(self):
        seeds = SeedManager.create("lucky-7")
        self.assertEqual(seeds.public_seed, "lucky-7")

    def test_secrets_are_unique(self):
        self.assertNotEqual(SeedManager.create().pair.secret_seed,
                            SeedManager.create().pair.secret_seed)

    def test_commitment_is_sha256(self):
        seeds = SeedManager.create()
        expected = hashlib.sha256(seeds.pair.secret_seed.encode()).hexdigest()
        self.assertEqual(seeds.active_commitment, expected)
        self.assertEqual(len(expected), 64)

    def test_commitment_avalanche(self):
        """One changed character gives an unrelated hash."""
        a = commitment_hash("0" * 64)
        b = commitment_hash("0" * 63 + "1")
        differing = sum(1 for x, y in zip(a, b) if x != y)
        self.assertGreater(differing, 40)

    def test_next_nonce_advances_by_one(self):
        seeds = SeedManager.create()
        self.assertEqual([seeds.next_nonce() for _ in range(3)], [0, 1, 2])
        self.assertEqual(seeds.nonce, 3)

    def test_set_public_seed_resets_nonce_keeps_secret(self):
        seeds = SeedManager.create("first")
        secret = seeds.pair.secret_seed
        seeds.next_nonce()
        seeds.next_nonce()
        seeds.set_public_seed("second")
        self.assertEqual(seeds.nonce, 0)
        self.assertEqual(seeds.public_seed, "second")
        self.assertEqual(seeds.pair.secret_seed, secret)
        self.assertEqual(seeds.history, ())

    def test_empty_public_seed_rejected(self):
        seeds = SeedManager.create()
        for bad in ("", "   "):
            with self.assertRaises(InvalidSeedInput):
                seeds.set_public_seed(bad)
        with self.assertRaises(InvalidSeedInput):
            SeedManager.create("")
        with self.assertRaises(InvalidSeedInput):
            seeds.rotate("")

    def test_rotate_reveals_and_resets(self):
        seeds = SeedManager.create("keep-me")
        old_secret = seeds.pair.secret_seed
        shown = seeds.active_commitment
        for _ in range(5):
            seeds.next_nonce()

        entry = seeds.rotate()
        self.assertEqual(entry.secret_seed, old_secret)
        self.assertEqual(entry.public_seed, "keep-me")
        self.assertEqual(entry.nonce_reached, 5)
        self.assertEqual(entry.commitment, shown)
        self.assertTrue(entry.verify())
        self.assertEqual(len(seeds.history), 1)

        self.assertNotEqual(seeds.pair.secret_seed, old_secret)
        self.assertEqual(seeds.nonce, 0)

    def test_commitment_stable_across_rotation(self):
        seeds = SeedManager.create()
        before = commitment_hash(seeds.pair.secret_seed)
        entry = seeds.rotate()
        self.assertEqual(commitment_hash(entry.secret_seed), before)

    def test_rotate_with_new_public_seed(self):
        seeds = SeedManager.create("a")
        seeds.rotate("b")
        self.assertEqual(seeds.public_seed, "b")

    def test_history_is_immutable(self):
        seeds = SeedManager.create()
        seeds.rotate()
        history = seeds.history
        self.assertIsInstance(history, tuple)
        with self.assertRaises(Exception):
            history[0].secret_seed = "tampered"

    def test_snapshot_hides_secret(self):
        seeds = SeedManager.create()
        snap = seeds.snapshot()
        self.assertNotIn(seeds.pair.secret_seed, str(snap))
        self.assertEqual(snap["commitment"], seeds.active_commitment)


# ============================================================
# Verification
# ============================================================

class TestVerification(unittest.TestCase):

    def setUp(self):
        self.seeds = SeedManager.create("verify-me")
        self.table = GameTable(self.seeds, Wallet(1000))

    def test_commitment_check(self):
        secret = self.seeds.pair.secret_seed
        self.assertTrue(verify_commitment(secret, self.seeds.active_commitment))
        self.assertFalse(verify_commitment(secret + "0", self.seeds.active_commitment))

    def test_verify_played_rounds(self):
        records = [self.table.play("dice", {"target": 50}, stake=1.0) for _ in range(5)]
        records.append(self.table.play("plinko", {"rows": 8}, stake=1.0))
        entry = self.seeds.rotate()

        for rec in records[:5]:
            self.assertTrue(verify_record(entry, rec, {"target": 50}))
            self.assertTrue(verify_round(entry, rec.nonce, 0, rec.floats[0]))
        self.assertTrue(verify_record(entry, records[5], {"rows": 8}))

    def test_tampered_record_fails(self):
        rec = self.table.play("dice", {"target": 50}, stake=1.0)
        entry = self.seeds.rotate()
        forged = replace(rec, floats=(0.999,))
        self.assertFalse(verify_record(entry, forged))
        forged_mult = replace(rec, multiplier=rec.multiplier + 1)
        self.assertFalse(verify_record(entry, forged_mult, {"target": 50}))

    def test_verify_round_rejects_unplayed_nonce(self):
        self.table.play("dice", {"target": 50}, stake=1.0)
        entry = self.seeds.rotate()
        self.assertFalse(verify_round(entry, nonce=5))

    def test_replay_matches_live(self):
        rec = self.table.play("keno", {"picks": [1, 2, 3], "risk": "high"}, stake=1.0)
        entry = self.seeds.rotate()
        outcome = replay_round(entry.secret_seed, entry.public_seed, rec.nonce,
                               "keno", {"picks": [1, 2, 3], "risk": "high"})
        self.assertEqual(outcome.result, rec.result)
        self.assertEqual(outcome.multiplier, rec.multiplier)

    def test_replay_blackjack_auto_play(self):
        rec = self.table.play("blackjack", {"stand_on": 16}, stake=1.0)
        entry = self.seeds.rotate()
        outcome = replay_round(entry.secret_seed, entry.public_seed, rec.nonce,
                               "blackjack", {"stand_on": 16})
        self.assertEqual(outcome.result, rec.result)
        self.assertEqual(outcome.floats, rec.floats)
        self.assertTrue(verify_record(entry, rec, {"stand_on": 16}))


if __name__ == "__main__":
    unittest.main()
