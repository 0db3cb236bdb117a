#!/usr/bin/env python3
"""
FairPlay Engine - Outcome Mapper Test Suite

Run: python tests_games.py
     python tests_games.py -v
     python tests_games.py TestKeno

Test categories:
  TestPayoutMath   - closed-form multipliers and probabilities
  TestDice / TestCrash / TestShuffle / TestMines / TestPlinko / TestKeno
  TestWeighted / TestWheelSlots / TestCards / TestHiLo / TestBlackjack
  TestRPS / TestRoulette
  TestRegistry     - every game resolves, RTPs stay under 1
  TestSimulation   - Monte-Carlo agrees with theory
"""

import math
import random
import sys
import unittest
from itertools import permutations
from pathlib import Path

# ── Ensure project root is on sys.path ──
PROJECT_ROOT = Path(__file__).parent
sys.path.insert(0, str(PROJECT_ROOT))

from pydantic import ValidationError

from config.game_schema import (
    DiceParams, KenoParams, MinesParams, PlinkoParams, params_for,
)
from config.settings import FairPlayConfig
from fairplay.errors import ExhaustedSampleSpace, RoundStateError, UnknownGame
from fairplay.games import GAME_TYPES, get_mapper
from fairplay.games.blackjack import BlackjackRound, estimated_rtp, hand_score
from fairplay.games.cards import Card, CardDrawMapper, card_from_float, fresh_deck
from fairplay.games.crash import crash_point, display_multiplier
from fairplay.games.hilo import HiLoRound
from fairplay.games.keno import KENO_PAYTABLES, unique_draw
from fairplay.games.mines import MinesRound, mine_positions
from fairplay.games.plinko import plinko_bucket, plinko_path, plinko_table
from fairplay.games.shuffle import permutation
from fairplay.games.weighted import weighted_pick
from fairplay.payout import (
    binomial_probabilities, dice_multiplier, keno_hit_probability,
    mines_multiplier, mines_survival_probability, rps_win_multiplier,
)
from fairplay.rng import DrawStream, SequenceStream, rng_float
from fairplay.simulate import simulate

SECRET = "5eed" * 16
PUBLIC = "games-suite"


# ============================================================
# Payout math
# ============================================================

class TestPayoutMath(unittest.TestCase):

    def test_dice_multiplier(self):
        self.assertEqual(dice_multiplier(50), 1.98)
        self.assertAlmostEqual(dice_multiplier(90), 9.9)
        self.assertAlmostEqual(dice_multiplier(25, roll_over=False), 3.96)

    def test_mines_first_pick(self):
        self.assertAlmostEqual(mines_survival_probability(25, 24, 1), 1 / 25)
        self.assertAlmostEqual(mines_multiplier(25, 3, 1, 0.97), 0.97 * 25 / 22)
        self.assertEqual(mines_multiplier(25, 3, 0, 0.97), 1.0)

    def test_mines_multiplier_grows(self):
        mults = [mines_multiplier(25, 5, k, 0.97) for k in range(1, 21)]
        self.assertEqual(mults, sorted(mults))

    def test_binomial_sums_to_one(self):
        for rows in (8, 12, 16):
            self.assertAlmostEqual(sum(binomial_probabilities(rows)), 1.0)

    def test_keno_hypergeometric_sums_to_one(self):
        for picks in range(1, 11):
            total = sum(keno_hit_probability(picks, h) for h in range(picks + 1))
            self.assertAlmostEqual(total, 1.0)

    def test_rps_win_multiplier(self):
        self.assertAlmostEqual(rps_win_multiplier(0.99), 1.97)


# ============================================================
# Dice
# ============================================================

class TestDice(unittest.TestCase):

    def test_win_rate_over_50(self):
        """100k HMAC draws at target 50: win rate 0.50 ± 0.01, fixed 1.98x."""
        mapper = get_mapper("dice")
        params = DiceParams(target=50)
        wins = 0
        for nonce in range(100_000):
            out = mapper.resolve_floats(params, [rng_float(SECRET, PUBLIC, nonce)])
            if out.multiplier > 0:
                wins += 1
                self.assertEqual(out.multiplier, 1.98)
        self.assertAlmostEqual(wins / 100_000, 0.5, delta=0.01)

    def test_boundary_roll(self):
        mapper = get_mapper("dice")
        self.assertEqual(mapper.resolve_floats({"target": 50}, [0.5]).multiplier, 0.0)
        self.assertEqual(mapper.resolve_floats({"target": 50, "roll_over": False},
                                               [0.25]).multiplier, 1.98)

    def test_target_validation(self):
        with self.assertRaises(ValidationError):
            DiceParams(target=99)
        with self.assertRaises(ValidationError):
            DiceParams(target=0.5)


# ============================================================
# Crash / Limbo
# ============================================================

class TestCrash(unittest.TestCase):

    def test_zero_draw_clamps_to_one(self):
        self.assertEqual(crash_point(0.0), 1.0)

    def test_midpoint(self):
        self.assertAlmostEqual(crash_point(0.5), 1.98)

    def test_top_draw_capped(self):
        top = (2 ** 32 - 1) / 2 ** 32
        self.assertEqual(crash_point(top, 0.99, 1_000_000.0), 1_000_000.0)
        self.assertEqual(crash_point(top, 0.99, 500.0), 500.0)

    def test_never_below_one(self):
        for i in range(1000):
            self.assertGreaterEqual(crash_point(i / 1000), 1.0)

    def test_display_truncates(self):
        self.assertEqual(display_multiplier(1.987), 1.98)
        self.assertEqual(display_multiplier(2.0), 2.0)

    def test_cashout(self):
        mapper = get_mapper("crash")
        self.assertEqual(mapper.resolve_floats({"cashout": 2.0}, [0.5]).multiplier, 0.0)
        self.assertEqual(mapper.resolve_floats({"cashout": 2.0}, [0.6]).multiplier, 2.0)

    def test_rtp_independent_of_cashout(self):
        mapper = get_mapper("limbo")
        for target in (1.5, 2.0, 10.0, 1000.0):
            self.assertAlmostEqual(mapper.theoretical_rtp(mapper.parse({"cashout": target})), 0.99)


# ============================================================
# Fisher-Yates
# ============================================================

class TestShuffle(unittest.TestCase):

    def test_uniform_over_permutations(self):
        """N=4: each of the 24 orderings shows up about 1/24 of the time."""
        rng = random.Random(7)
        counts = {p: 0 for p in permutations(range(4))}
        trials = 24_000
        for _ in range(trials):
            counts[tuple(permutation(4, SequenceStream(source=rng.random)))] += 1
        self.assertEqual(len(counts), 24)
        for n in counts.values():
            self.assertAlmostEqual(n, trials / 24, delta=150)

    def test_consumes_n_minus_one(self):
        stream = SequenceStream(source=random.Random(1).random)
        deck = permutation(52, stream)
        self.assertEqual(stream.used, 51)
        self.assertEqual(sorted(deck), list(range(52)))

        single = SequenceStream()
        self.assertEqual(permutation(1, single), [0])
        self.assertEqual(single.used, 0)

    def test_known_swaps(self):
        self.assertEqual(permutation(4, SequenceStream([0.0, 0.0, 0.0])), [1, 2, 3, 0])
        self.assertEqual(permutation(4, SequenceStream([0.999] * 3)), [0, 1, 2, 3])


# ============================================================
# Mines
# ============================================================

class TestMines(unittest.TestCase):

    def test_board_validation(self):
        with self.assertRaises(ValidationError):
            MinesParams(mine_count=25)
        with self.assertRaises(ValidationError):
            MinesParams(mine_count=3, reveals=23)

    def test_mine_positions(self):
        self.assertEqual(mine_positions(25, 3, SequenceStream([0.999] * 24)), [0, 1, 2])
        self.assertEqual(mine_positions(25, 3, SequenceStream([0.0] * 24)), [1, 2, 3])

    def test_positions_unique(self):
        stream = DrawStream(SECRET, PUBLIC, 3)
        mines = mine_positions(25, 10, stream)
        self.assertEqual(len(set(mines)), 10)
        self.assertTrue(all(0 <= m < 25 for m in mines))

    def test_reveal_and_bust(self):
        live = MinesRound(MinesParams(mine_count=3), [0, 1, 2])
        self.assertTrue(live.reveal(5))
        self.assertAlmostEqual(live.multiplier, 0.97 * 25 / 22)
        with self.assertRaises(ValueError):
            live.reveal(5)
        self.assertFalse(live.reveal(0))
        self.assertTrue(live.busted)
        self.assertEqual(live.multiplier, 0.0)
        with self.assertRaises(RoundStateError):
            live.reveal(6)
        with self.assertRaises(RoundStateError):
            live.cashout()

    def test_cashout_needs_a_reveal(self):
        live = MinesRound(MinesParams(mine_count=3), [0, 1, 2])
        with self.assertRaises(RoundStateError):
            live.cashout()

    def test_clearing_board_cashes_out(self):
        live = MinesRound(MinesParams(grid_size=4, mine_count=3), [0, 1, 2])
        self.assertTrue(live.reveal(3))
        self.assertTrue(live.cashed_out)
        self.assertAlmostEqual(live.multiplier, 0.97 * 4)

    def test_auto_resolve(self):
        mapper = get_mapper("mines")
        bust = mapper.resolve_floats({"mine_count": 3}, [0.999] * 24)
        self.assertEqual(bust.multiplier, 0.0)
        self.assertTrue(bust.result["busted"])
        win = mapper.resolve_floats({"mine_count": 3}, [0.0] * 24)
        self.assertAlmostEqual(win.multiplier, 0.97 * 25 / 22)
        self.assertEqual(win.draws_used, 24)

    def test_theoretical_rtp_is_edge(self):
        mapper = get_mapper("mines")
        for reveals in (1, 5, 10):
            params = mapper.parse({"mine_count": 5, "reveals": reveals})
            self.assertAlmostEqual(mapper.theoretical_rtp(params), 0.97)


# ============================================================
# Plinko
# ============================================================

class TestPlinko(unittest.TestCase):

    def test_path_direction(self):
        self.assertEqual(plinko_path([0.9, 0.1, 0.5]), [1, -1, -1])
        self.assertEqual(plinko_bucket(plinko_path([0.9] * 8)), 8)
        self.assertEqual(plinko_bucket(plinko_path([0.1] * 8)), 0)

    def test_tables_symmetric_and_sized(self):
        for rows in range(8, 17):
            for risk in ("low", "medium", "high"):
                table = plinko_table(rows, risk, 0.99)
                self.assertEqual(len(table), rows + 1)
                self.assertEqual(list(table), list(reversed(table)))

    def test_rtp_near_edge(self):
        mapper = get_mapper("plinko")
        for rows in (8, 10, 12, 14, 16):
            for risk in ("low", "medium", "high"):
                params = PlinkoParams(rows=rows, risk=risk)
                self.assertAlmostEqual(mapper.theoretical_rtp(params), 0.99, delta=0.01)

    def test_resolve_uses_one_draw_per_row(self):
        out = get_mapper("plinko").resolve_floats({"rows": 12}, [0.9] * 12)
        self.assertEqual(out.result["bucket"], 12)
        self.assertEqual(out.draws_used, 12)
        self.assertEqual(out.multiplier, plinko_table(12, "medium", 0.99)[12])


# ============================================================
# Keno
# ============================================================

class TestKeno(unittest.TestCase):

    def test_unique_in_range(self):
        for nonce in range(200):
            drawn = unique_draw(DrawStream(SECRET, PUBLIC, nonce))
            self.assertEqual(len(drawn), 10)
            self.assertEqual(len(set(drawn)), 10)
            self.assertTrue(all(1 <= n <= 40 for n in drawn))

    def test_duplicates_use_fresh_draws(self):
        floats = [(k + 0.5) / 40 for k in range(10)]
        floats.insert(1, floats[0])
        stream = SequenceStream(floats)
        self.assertEqual(unique_draw(stream), list(range(1, 11)))
        self.assertEqual(stream.used, 11)

    def test_exhaustion_raises(self):
        with self.assertRaises(ExhaustedSampleSpace) as ctx:
            unique_draw(SequenceStream(source=lambda: 0.1), max_draws=50)
        self.assertEqual(ctx.exception.draws, 50)
        self.assertEqual(ctx.exception.collected, 1)

    def test_hits_and_payout(self):
        floats = [(k + 0.5) / 40 for k in range(10)]     # draws 1..10
        out = get_mapper("keno").resolve_floats({"picks": [1, 2, 30], "risk": "classic"}, floats)
        self.assertEqual(out.result["hits"], [1, 2])
        self.assertEqual(out.multiplier, KENO_PAYTABLES["classic"][3][2])

    def test_picks_validation(self):
        with self.assertRaises(ValidationError):
            KenoParams(picks=[1, 1])
        with self.assertRaises(ValidationError):
            KenoParams(picks=[41])
        with self.assertRaises(ValidationError):
            KenoParams(picks=list(range(1, 12)))

    def test_single_pick_rtp(self):
        mapper = get_mapper("keno")
        self.assertAlmostEqual(mapper.theoretical_rtp(KenoParams(picks=[7])), 0.99)
        high2 = mapper.theoretical_rtp(KenoParams(picks=[1, 2], risk="high"))
        self.assertAlmostEqual(high2, 0.99, delta=0.01)


# ============================================================
# Weighted draws: wheel & slots
# ============================================================

class TestWeighted(unittest.TestCase):

    def test_cumulative_search(self):
        w = [1, 1, 2]
        self.assertEqual(weighted_pick(0.0, w), 0)
        self.assertEqual(weighted_pick(0.25, w), 1)     # exact boundary belongs to the next segment
        self.assertEqual(weighted_pick(0.3, w), 1)
        self.assertEqual(weighted_pick(0.6, w), 2)
        self.assertEqual(weighted_pick(0.9999, w), 2)


class TestWheelSlots(unittest.TestCase):

    def test_wheel_rtp(self):
        mapper = get_mapper("wheel")
        for risk in ("low", "medium", "high"):
            self.assertAlmostEqual(mapper.theoretical_rtp(mapper.parse({"risk": risk})),
                                   FairPlayConfig.EDGE_WHEEL, delta=0.01)

    def test_wheel_high_zero_segment(self):
        out = get_mapper("wheel").resolve_floats({"risk": "high"}, [0.0])
        self.assertEqual(out.multiplier, 0.0)

    def test_slots_rtp(self):
        mapper = get_mapper("slots")
        self.assertAlmostEqual(mapper.theoretical_rtp(mapper.parse({})),
                               FairPlayConfig.EDGE_SLOTS, delta=0.001)

    def test_slots_cherries(self):
        mapper = get_mapper("slots")
        triple = mapper.resolve_floats({}, [0.0, 0.0, 0.0])
        self.assertEqual(triple.result["reels"], ["CHERRY"] * 3)
        pair = mapper.resolve_floats({}, [0.0, 0.0, 0.99])
        self.assertEqual(pair.result["reels"], ["CHERRY", "CHERRY", "SEVEN"])
        self.assertGreater(triple.multiplier, pair.multiplier)
        self.assertGreater(pair.multiplier, 0)
        miss = mapper.resolve_floats({}, [0.0, 0.5, 0.99])
        self.assertEqual(miss.multiplier, 0.0)


# ============================================================
# Cards & Hi-Lo
# ============================================================

class TestCards(unittest.TestCase):

    def test_card_mapping(self):
        self.assertEqual(str(card_from_float(0.0)), "2♠")
        self.assertEqual(str(card_from_float(0.999)), "A♦")
        self.assertEqual(card_from_float(0.999).value, 14)

    def test_fresh_deck(self):
        deck = fresh_deck()
        self.assertEqual(len({c.index for c in deck}), 52)

    def test_shuffled_deal(self):
        out = CardDrawMapper().resolve(
            CardDrawMapper().parse({"count": 5}),
            SequenceStream(source=random.Random(3).random),
        )
        self.assertEqual(sorted(out.result["deck"]), list(range(52)))
        self.assertEqual(len(out.result["cards"]), 5)
        self.assertEqual(out.draws_used, 51)


class TestHiLo(unittest.TestCase):

    def test_higher_wins(self):
        live = HiLoRound(SequenceStream([0.0, 0.1]), 0.99)
        self.assertEqual(live.current.value, 2)
        self.assertTrue(live.guess("higher"))
        self.assertEqual(live.current.value, 7)
        self.assertAlmostEqual(live.multiplier, 0.99 * 13 / 12)
        self.assertAlmostEqual(live.cashout(), 0.99 * 13 / 12)

    def test_lower_on_deuce_always_loses(self):
        live = HiLoRound(SequenceStream([0.0, 0.0]), 0.99)
        self.assertEqual(live.odds()["lower"]["probability"], 0.0)
        self.assertFalse(live.guess("lower"))
        self.assertTrue(live.busted)
        with self.assertRaises(RoundStateError):
            live.guess("higher")

    def test_same_rank_pays(self):
        live = HiLoRound(SequenceStream([0.0, 0.5]), 0.99)   # 2♠ then 2♣
        self.assertTrue(live.guess("same"))
        self.assertAlmostEqual(live.multiplier, 0.99 * 13)

    def test_guess_before_cashout(self):
        live = HiLoRound(SequenceStream([0.0]), 0.99)
        with self.assertRaises(RoundStateError):
            live.cashout()

    def test_auto_chain(self):
        out = get_mapper("hilo").resolve_floats({"guesses": ["higher", "higher"]},
                                                [0.0, 0.1, 0.2])
        self.assertAlmostEqual(out.multiplier, (0.99 * 13 / 12) * (0.99 * 13 / 7))
        self.assertEqual(out.draws_used, 3)


def _deck(*cards):
    """'10♥' -> Card('10', '♥'); dealt in the order given."""
    return [Card(c[:-1], c[-1]) for c in cards]


class TestBlackjack(unittest.TestCase):

    def test_hand_score(self):
        self.assertEqual(hand_score(_deck("A♠", "K♠")), 21)
        self.assertEqual(hand_score(_deck("A♠", "A♥", "9♣")), 21)
        self.assertEqual(hand_score(_deck("A♠", "5♠", "K♦")), 16)
        self.assertEqual(hand_score(_deck("Q♠", "J♥", "2♣")), 22)

    def test_natural_pays_on_deal(self):
        live = BlackjackRound(_deck("A♠", "K♠", "9♥", "7♥"))
        self.assertTrue(live.finished)
        self.assertEqual(live.result, "blackjack")
        self.assertEqual(live.multiplier, 2.5)

    def test_natural_against_natural_pushes(self):
        live = BlackjackRound(_deck("A♠", "K♠", "A♥", "Q♥"))
        self.assertEqual(live.result, "push")
        self.assertEqual(live.multiplier, 1.0)

    def test_hit_bust(self):
        live = BlackjackRound(_deck("10♠", "6♠", "10♥", "7♥", "9♦"))
        self.assertEqual(live.hit(), 25)
        self.assertEqual(live.result, "bust")
        self.assertEqual(live.multiplier, 0.0)
        with self.assertRaises(RoundStateError):
            live.stand()

    def test_soft_ace_survives_hit(self):
        live = BlackjackRound(_deck("A♠", "5♠", "10♥", "7♥", "K♦"))
        self.assertEqual(live.hit(), 16)
        self.assertFalse(live.finished)

    def test_dealer_draws_to_seventeen(self):
        live = BlackjackRound(_deck("10♠", "9♠", "10♥", "6♥", "10♦"))
        self.assertEqual(live.stand(), "win")
        self.assertEqual(len(live.dealer), 3)
        self.assertEqual(live.multiplier, 2.0)

    def test_stand_push_and_lose(self):
        self.assertEqual(BlackjackRound(_deck("10♠", "8♠", "10♥", "8♥")).stand(), "push")
        lose = BlackjackRound(_deck("10♠", "7♠", "10♥", "9♥"))
        self.assertEqual(lose.stand(), "lose")
        self.assertEqual(lose.multiplier, 0.0)

    def test_double_draws_one_card(self):
        live = BlackjackRound(_deck("5♠", "6♠", "10♥", "7♥", "10♦", "9♣"))
        self.assertTrue(live.can_double)
        self.assertEqual(live.double(), "win")
        self.assertTrue(live.doubled)
        self.assertEqual(len(live.player), 3)
        self.assertEqual(live.multiplier, 2.0)

    def test_double_only_on_two_cards(self):
        live = BlackjackRound(_deck("2♠", "3♠", "10♥", "7♥", "4♦", "9♣"))
        live.hit()
        self.assertFalse(live.can_double)
        with self.assertRaises(RoundStateError):
            live.double()
        with self.assertRaises(RoundStateError):
            live.cashout()

    def test_hole_card_hidden_until_settled(self):
        live = BlackjackRound(_deck("10♠", "8♠", "10♥", "8♥"))
        self.assertEqual(live.state()["dealer"], ["10♥"])
        self.assertIsNone(live.state()["dealer_score"])
        live.stand()
        self.assertEqual(live.state()["dealer"], ["10♥", "8♥"])

    def test_auto_play_stands_on_threshold(self):
        mapper = get_mapper("blackjack")
        rng = random.Random(7)
        for _ in range(50):
            out = mapper.resolve(mapper.parse({"stand_on": 15}), SequenceStream(source=rng.random))
            self.assertEqual(out.draws_used, 51)
            if out.result["result"] != "bust":
                self.assertGreaterEqual(out.result["player_score"], 15)

    def test_push_outcome_is_won(self):
        mapper = get_mapper("blackjack")
        rng = random.Random(11)
        outcomes = [mapper.resolve(mapper.parse({}), SequenceStream(source=rng.random))
                    for _ in range(300)]
        push = next(o for o in outcomes if o.result["result"] == "push")
        self.assertTrue(push.won)
        self.assertFalse(next(o for o in outcomes if o.result["result"] == "lose").won)

    def test_estimated_rtp(self):
        rtp = estimated_rtp(17)
        self.assertGreater(rtp, 0.9)
        self.assertLess(rtp, 1.0)
        self.assertEqual(estimated_rtp(17), rtp)


# ============================================================
# Rock-paper-scissors & roulette
# ============================================================

class TestRPS(unittest.TestCase):

    def test_results(self):
        mapper = get_mapper("rps")
        self.assertEqual(mapper.resolve_floats({"move": 0}, [0.1]).multiplier, 1.0)
        self.assertTrue(mapper.resolve_floats({"move": 0}, [0.1]).won)     # push
        self.assertEqual(mapper.resolve_floats({"move": 0}, [0.5]).multiplier, 0.0)
        win = mapper.resolve_floats({"move": 0}, [0.9])
        self.assertEqual(win.result["result"], "win")
        self.assertAlmostEqual(win.multiplier, 1.97)

    def test_rtp(self):
        mapper = get_mapper("rps")
        self.assertAlmostEqual(mapper.theoretical_rtp(mapper.parse({})), 0.99)


class TestRoulette(unittest.TestCase):

    def test_pockets(self):
        mapper = get_mapper("roulette")
        zero = mapper.resolve_floats({"bet": "red"}, [0.0])
        self.assertEqual(zero.result["color"], "green")
        self.assertEqual(zero.multiplier, 0.0)
        self.assertEqual(mapper.resolve_floats({"bet": "red"}, [1.5 / 37]).multiplier, 2)
        self.assertEqual(mapper.resolve_floats({"bet": "17"}, [17.5 / 37]).multiplier, 36)

    def test_rtp(self):
        mapper = get_mapper("roulette")
        self.assertAlmostEqual(mapper.theoretical_rtp(mapper.parse({"bet": "red"})), 36 / 37)
        self.assertAlmostEqual(mapper.theoretical_rtp(mapper.parse({"bet": "0"})), 36 / 37)

    def test_unknown_bet(self):
        with self.assertRaises(ValueError):
            get_mapper("roulette").resolve_floats({"bet": "purple"}, [0.0])


# ============================================================
# Registry
# ============================================================

class TestRegistry(unittest.TestCase):

    def test_unknown_game(self):
        with self.assertRaises(UnknownGame):
            get_mapper("poker")
        with self.assertRaises(ValueError):
            get_mapper("poker")

    def test_every_game_resolves_within_its_draw_budget(self):
        for nonce, game in enumerate(GAME_TYPES):
            mapper = get_mapper(game)
            params = mapper.parse({})
            out = mapper.resolve(params, DrawStream(SECRET, PUBLIC, nonce))
            self.assertGreaterEqual(out.multiplier, 0.0, game)
            self.assertLessEqual(out.draws_used, mapper.max_draws(params), game)
            self.assertEqual(mapper.get_metadata()["game_type"], game)

    def test_house_keeps_an_edge(self):
        for game in GAME_TYPES:
            if game in ("keno", "cards"):
                continue
            mapper = get_mapper(game)
            rtp = mapper.theoretical_rtp(mapper.parse({}))
            self.assertLess(rtp, 1.0, game)
            self.assertGreater(rtp, 0.9, game)

    def test_params_for(self):
        self.assertEqual(params_for("mines", mine_count=5).mine_count, 5)
        self.assertEqual(FairPlayConfig.edge_for("limbo"), FairPlayConfig.EDGE_CRASH)


# ============================================================
# Monte-Carlo
# ============================================================

class TestSimulation(unittest.TestCase):

    def test_dice_matches_theory(self):
        res = simulate("dice", {"target": 50}, rounds=20_000, seed=1)
        self.assertAlmostEqual(res.rtp_theoretical, 0.99)
        self.assertAlmostEqual(res.rtp_measured, 0.99, delta=0.05)
        lo, hi = res.confidence_95
        self.assertLess(lo, hi)

    def test_wheel_low_matches_theory(self):
        res = simulate("wheel", {"risk": "low"}, rounds=20_000, seed=2)
        self.assertAlmostEqual(res.rtp_measured, res.rtp_theoretical, delta=0.03)

    def test_report_shape(self):
        d = simulate("crash", {"cashout": 2.0}, rounds=1000).to_dict()
        for key in ("rtp_theoretical", "rtp_measured", "hit_rate", "distribution"):
            self.assertIn(key, d)
        self.assertTrue(math.isclose(sum(d["distribution"].values()), 1.0, abs_tol=0.01))


if __name__ == "__main__":
    unittest.main()
