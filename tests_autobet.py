#!/usr/bin/env python3
"""
FairPlay Engine - Table, Wallet & Autobet Test Suite

Run: python tests_autobet.py
     python tests_autobet.py -v

Test categories:
  TestWallet      - debit / credit rules
  TestGameTable   - stake check, one nonce per round, refunds, live rounds
  TestAutobet     - stake progression and stop conditions
"""

import sys
import unittest
from pathlib import Path
from unittest import mock

# ── Ensure project root is on sys.path ──
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from pydantic import ValidationError

from config.game_schema import AutobetSettings
from config.settings import FairPlayConfig
from fairplay.autobet import AutobetController, AutobetState, adjust_stake
from fairplay.errors import ExhaustedSampleSpace, InsufficientBalance, RoundStateError
from fairplay.games import get_mapper
from fairplay.payout import mines_multiplier
from fairplay.seeds import SeedManager
from fairplay.table import GameTable, RoundRecord
from fairplay.wallet import Wallet


def _table(balance=100.0):
    return GameTable(SeedManager.create("table-suite"), Wallet(balance))


# ============================================================
# Wallet
# ============================================================

class TestWallet(unittest.TestCase):

    def test_debit_credit(self):
        w = Wallet(10)
        w.debit(4)
        w.credit(1.5)
        self.assertAlmostEqual(w.balance, 7.5)

    def test_overdraft(self):
        w = Wallet(5)
        with self.assertRaises(InsufficientBalance) as ctx:
            w.debit(6)
        self.assertEqual(ctx.exception.stake, 6)
        self.assertEqual(w.balance, 5)

    def test_invalid_amounts(self):
        w = Wallet(5)
        with self.assertRaises(ValueError):
            w.debit(0)
        with self.assertRaises(ValueError):
            w.credit(-1)


# ============================================================
# Game table
# ============================================================

class TestGameTable(unittest.TestCase):

    def test_play_settles(self):
        table = _table()
        rec = table.play("dice", {"target": 50}, stake=2.0)
        self.assertEqual(rec.nonce, 0)
        self.assertEqual(rec.payout, round(2.0 * rec.multiplier, 8))
        self.assertAlmostEqual(table.wallet.balance, 100.0 - 2.0 + rec.payout)
        self.assertEqual(rec.commitment, table.seeds.active_commitment)
        self.assertEqual(len(rec.floats), 1)

    def test_one_nonce_per_round(self):
        table = _table()
        table.play("plinko", {"rows": 16}, stake=1.0)
        table.play("keno", {"picks": [3, 7]}, stake=1.0)
        rec = table.play("dice", {}, stake=1.0)
        self.assertEqual(rec.nonce, 2)
        self.assertEqual(table.seeds.nonce, 3)
        self.assertEqual([r.nonce for r in table.rounds], [0, 1, 2])

    def test_insufficient_balance_before_draw(self):
        table = _table(0.5)
        with self.assertRaises(InsufficientBalance):
            table.play("dice", {"target": 50}, stake=1.0)
        self.assertEqual(table.seeds.nonce, 0)
        self.assertEqual(table.wallet.balance, 0.5)
        self.assertEqual(table.rounds, [])

    def test_failed_resolve_refunds_stake(self):
        table = _table(10.0)
        with mock.patch.object(FairPlayConfig, "KENO_MAX_DRAWS", 5):
            with self.assertRaises(ExhaustedSampleSpace):
                table.play("keno", {}, stake=2.0)
        self.assertEqual(table.wallet.balance, 10.0)
        self.assertEqual(table.rounds, [])
        self.assertEqual(table.seeds.nonce, 1)      # nonce stays consumed

    def test_cards_cannot_be_staked(self):
        table = _table()
        with self.assertRaises(ValueError):
            table.play("cards", {"count": 5}, stake=1.0)
        self.assertEqual(table.wallet.balance, 100.0)
        self.assertEqual(table.seeds.nonce, 0)

    def test_push_counts_as_won(self):
        common = dict(game_type="rps", nonce=0, public_seed="p", commitment="c",
                      digest="d", floats=(0.1,), result={})
        self.assertTrue(RoundRecord(multiplier=1.0, stake=10.0, payout=10.0, **common).won)
        self.assertTrue(RoundRecord(multiplier=1.94, stake=10.0, payout=19.4, **common).won)
        self.assertFalse(RoundRecord(multiplier=0.5, stake=10.0, payout=5.0, **common).won)
        self.assertFalse(RoundRecord(multiplier=0.0, stake=10.0, payout=0.0, **common).won)

    def test_mines_live_round(self):
        table = _table()
        live = table.start("mines", {"mine_count": 1}, stake=1.0)
        safe = next(c for c in range(25) if c not in live.round.mines)
        self.assertTrue(live.round.reveal(safe))
        rec = live.cashout()
        self.assertAlmostEqual(rec.payout, mines_multiplier(25, 1, 1, 0.97))
        self.assertAlmostEqual(table.wallet.balance, 99.0 + rec.payout)
        self.assertEqual(rec.result["mines"], sorted(live.round.mines))
        self.assertIs(live.settle(), rec)       # settles once

    def test_mines_bust_settles_zero(self):
        table = _table()
        live = table.start("mines", {"mine_count": 3}, stake=1.0)
        mine = min(live.round.mines)
        self.assertFalse(live.round.reveal(mine))
        rec = live.settle()
        self.assertEqual(rec.payout, 0.0)
        self.assertAlmostEqual(table.wallet.balance, 99.0)

    def test_settle_in_progress_rejected(self):
        live = _table().start("mines", {}, stake=1.0)
        with self.assertRaises(RoundStateError):
            live.settle()

    def test_hilo_live_round(self):
        table = _table()
        live = table.start("hilo", {}, stake=1.0)
        if live.round.guess("same"):
            rec = live.cashout()
        else:
            rec = live.settle()
        self.assertEqual(rec.payout, round(live.round.multiplier, 8))
        self.assertEqual(len(rec.floats), 2)

    def _open_blackjack(self, table, stake=1.0):
        """Skip dealt naturals so the hand can still be played."""
        live = table.start("blackjack", {}, stake=stake)
        while live.round.finished:
            live.settle()
            live = table.start("blackjack", {}, stake=stake)
        return live

    def test_blackjack_live_round(self):
        table = _table()
        live = self._open_blackjack(table)
        live.round.stand()
        rec = live.settle()
        self.assertIn(rec.result["result"], ("win", "push", "lose"))
        self.assertEqual(rec.payout, round(live.round.multiplier, 8))
        self.assertEqual(len(rec.floats), 51)

    def test_blackjack_double_takes_second_stake(self):
        table = _table()
        live = self._open_blackjack(table, stake=2.0)
        before = table.wallet.balance
        rec = live.double()
        self.assertEqual(rec.stake, 4.0)
        self.assertTrue(rec.result["doubled"])
        self.assertEqual(len(live.round.player), 3)
        self.assertAlmostEqual(table.wallet.balance, before - 2.0 + rec.payout)
        self.assertAlmostEqual(rec.payout, 4.0 * live.round.multiplier)

    def test_blackjack_double_needs_balance(self):
        table = _table(2.5)
        live = self._open_blackjack(table, stake=1.0)
        table.wallet.debit(table.wallet.balance - 0.5)
        with self.assertRaises(InsufficientBalance):
            live.double()
        self.assertEqual(live.stake, 1.0)
        self.assertFalse(live.round.finished)

    def test_double_outside_blackjack_rejected(self):
        live = _table().start("hilo", {}, stake=1.0)
        with self.assertRaises(RoundStateError):
            live.double()

    def test_start_rejects_single_step_games(self):
        with self.assertRaises(ValueError):
            _table().start("dice", {}, stake=1.0)

    def test_rotation_mid_session(self):
        table = _table()
        before = table.play("dice", {}, stake=1.0)
        table.seeds.rotate()
        after = table.play("dice", {}, stake=1.0)
        self.assertEqual(after.nonce, 0)
        self.assertNotEqual(before.commitment, after.commitment)


# ============================================================
# Autobet
# ============================================================

class TestAutobet(unittest.TestCase):

    def _drive(self, ctl, results, balance=1000.0):
        """Feed scripted (won, payout) results. Returns the stakes asked for."""
        stakes = []
        script = iter(results)
        while ctl.running:
            stake = ctl.begin_round(balance)
            if stake is None:
                break
            stakes.append(stake)
            won, payout = next(script)
            ctl.report_round(won, payout)
        return stakes

    def test_profit_target_exact(self):
        """Stake 10, profit target 50: L then 6 W at 2x stops at round 7."""
        ctl = AutobetController()
        ctl.start(AutobetSettings(stake_base=10, profit_target=50))
        script = [(False, 0.0)] + [(True, 20.0)] * 10
        stakes = self._drive(ctl, script)
        self.assertEqual(len(stakes), 7)
        self.assertEqual(ctl.rounds_done, 7)
        self.assertAlmostEqual(ctl.cumulative_profit, 50.0)
        self.assertEqual(ctl.state, AutobetState.STOPPED_BY_LIMIT)

    def test_martingale(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 10, "on_loss_pct": 100, "rounds_target": 4})
        stakes = self._drive(ctl, [(False, 0.0)] * 4)
        self.assertEqual(stakes, [10, 20, 40, 80])
        self.assertEqual(ctl.state, AutobetState.STOPPED_BY_LIMIT)

    def test_tie_keeps_martingale_stake(self):
        """An RPS tie returns the stake; the on-loss doubling must not fire."""
        rps = get_mapper("rps")
        ctl = AutobetController()
        ctl.start({"stake_base": 10, "on_loss_pct": 100, "rounds_target": 3})

        def play_round(stake):
            stakes.append(stake)
            outcome = rps.resolve_floats({"move": 0}, [0.1])     # rock against rock
            self.assertEqual(outcome.result["result"], "tie")
            return outcome.won, stake * outcome.multiplier

        stakes = []
        ctl.run(play_round, lambda: 1000.0)
        self.assertEqual(stakes, [10, 10, 10])
        self.assertAlmostEqual(ctl.cumulative_profit, 0.0)

    def test_stake_shrunk_to_zero_stops_session(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 10, "on_loss_pct": -99.99})
        snap = ctl.run(lambda stake: (False, 0.0), lambda: 1000.0, max_rounds=500)
        self.assertFalse(snap.running)
        self.assertEqual(snap.state, AutobetState.STOPPED_BY_BALANCE.value)
        self.assertEqual(ctl.stop_reason, "stake reduced to zero")
        self.assertLess(snap.rounds_done, 500)

    def test_win_adjustment(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 8, "on_win_pct": -50, "rounds_target": 3})
        stakes = self._drive(ctl, [(True, 16.0), (True, 8.0), (True, 4.0)])
        self.assertEqual(stakes, [8, 4, 2])

    def test_rounds_target(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 1, "rounds_target": 5})
        self.assertEqual(len(self._drive(ctl, [(False, 0.0)] * 10)), 5)

    def test_loss_limit(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 10, "loss_limit": 25})
        stakes = self._drive(ctl, [(False, 0.0)] * 10)
        self.assertEqual(len(stakes), 3)
        self.assertAlmostEqual(ctl.cumulative_profit, -30.0)
        self.assertEqual(ctl.stop_reason, "loss limit reached")

    def test_balance_stop_before_round(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 10})
        self.assertIsNone(ctl.begin_round(5.0))
        self.assertEqual(ctl.state, AutobetState.STOPPED_BY_BALANCE)
        self.assertEqual(ctl.rounds_done, 0)

    def test_user_stop_counts_in_flight_round(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 10})
        self.assertEqual(ctl.begin_round(100.0), 10)
        ctl.stop()
        self.assertFalse(ctl.report_round(True, 20.0))
        self.assertEqual(ctl.rounds_done, 1)
        self.assertAlmostEqual(ctl.cumulative_profit, 10.0)
        self.assertEqual(ctl.state, AutobetState.STOPPED_BY_USER)
        self.assertIsNone(ctl.begin_round(100.0))

    def test_one_round_in_flight(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 1})
        ctl.begin_round(10.0)
        with self.assertRaises(RuntimeError):
            ctl.begin_round(10.0)

    def test_start_twice_rejected(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 1})
        with self.assertRaises(RuntimeError):
            ctl.start({"stake_base": 1})

    def test_settings_validation(self):
        with self.assertRaises(ValidationError):
            AutobetSettings(stake_base=0)
        with self.assertRaises(ValidationError):
            AutobetSettings(stake_base=1, on_loss_pct=-150)
        with self.assertRaises(ValidationError):
            AutobetSettings(stake_base=1, on_loss_pct=-100)
        with self.assertRaises(ValidationError):
            AutobetSettings(stake_base=1, on_win_pct=-100)

    def test_adjust_stake(self):
        self.assertEqual(adjust_stake(10, 0), 10)
        self.assertAlmostEqual(adjust_stake(10, 100), 20)
        self.assertAlmostEqual(adjust_stake(10, -50), 5)

    def test_snapshot_is_read_only(self):
        ctl = AutobetController()
        snap = ctl.start({"stake_base": 5, "rounds_target": 2})
        self.assertTrue(snap.running)
        self.assertEqual(snap.state, "running")
        with self.assertRaises(ValidationError):
            snap.rounds_done = 99

    def test_run_against_table(self):
        table = _table(1000.0)
        ctl = AutobetController()
        ctl.start({"stake_base": 1, "rounds_target": 10})
        seen = []

        def play_round(stake):
            rec = table.play("dice", {"target": 50}, stake=stake)
            return rec.won, rec.payout

        snap = ctl.run(play_round, lambda: table.wallet.balance, on_round=seen.append)
        self.assertEqual(snap.rounds_done, 10)
        self.assertEqual(len(seen), 10)
        self.assertEqual(len(table.rounds), 10)
        self.assertAlmostEqual(table.wallet.balance, 1000.0 + snap.cumulative_profit)

    def test_run_stops_on_insufficient_balance(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 1})

        def play_round(stake):
            raise InsufficientBalance(stake, 0.0)

        snap = ctl.run(play_round, lambda: 100.0)
        self.assertEqual(snap.state, AutobetState.STOPPED_BY_BALANCE.value)
        self.assertEqual(snap.rounds_done, 0)

    def test_run_max_rounds_keeps_running(self):
        ctl = AutobetController()
        ctl.start({"stake_base": 1})
        snap = ctl.run(lambda stake: (False, 0.0), lambda: 100.0, max_rounds=3)
        self.assertEqual(snap.rounds_done, 3)
        self.assertTrue(snap.running)


if __name__ == "__main__":
    unittest.main()
