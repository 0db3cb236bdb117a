"""
FairPlay Engine - Payout & House-Edge Math

Shared probability helpers used by the game mappers and by the RTP
reports. Edges are RTP factors: a fair multiplier for an outcome of
probability p is 1/p, the house pays e/p.

Three families:
  1. FORMULA (dice, crash, mines, hi-lo, rps): multiplier = e / P(win).
  2. TABLE (plinko, keno, wheel, slots): RTP = Σ P(outcome) × mult(outcome).
  3. FIXED (roulette): payouts are the classic table, the edge comes from 0.
"""

from __future__ import annotations

import math


def fair_multiplier(probability: float, edge: float = 1.0) -> float:
    """Multiplier paying `edge` in expectation on an outcome of `probability`."""
    if probability <= 0:
        return 0.0
    return edge / probability


def expected_return(outcomes) -> float:
    """Σ p × multiplier over (probability, multiplier) pairs."""
    return sum(p * m for p, m in outcomes)


def house_edge(rtp: float) -> float:
    return max(0.0, 1.0 - rtp)


# ── Dice ──────────────────────────────────────────────────────

def dice_win_probability(target: float, roll_over: bool = True) -> float:
    return (100.0 - target) / 100.0 if roll_over else target / 100.0


def dice_multiplier(target: float, roll_over: bool = True) -> float:
    """99 / (100 - target) for roll-over, 99 / target for roll-under."""
    return 99.0 / (100.0 - target) if roll_over else 99.0 / target


# ── Mines ─────────────────────────────────────────────────────

def mines_survival_probability(total: int, mines: int, reveals: int) -> float:
    """P(first `reveals` picks are all safe) = Π (safe-j)/(total-j)."""
    safe = total - mines
    if reveals > safe:
        return 0.0
    prob = 1.0
    for j in range(reveals):
        prob *= (safe - j) / (total - j)
    return prob


def mines_multiplier(total: int, mines: int, reveals: int, edge: float) -> float:
    """Cash-out multiplier after `reveals` safe picks. 1.0 before any pick."""
    if reveals <= 0:
        return 1.0
    return fair_multiplier(mines_survival_probability(total, mines, reveals), edge)


# ── Plinko ────────────────────────────────────────────────────

def binomial_probabilities(rows: int) -> list[float]:
    """P(bucket k) for k right-bounces out of `rows` fair coin flips."""
    return [math.comb(rows, k) / (2 ** rows) for k in range(rows + 1)]


def scale_table(multipliers: list[float], probabilities: list[float],
                target_rtp: float, ndigits: int = 2) -> list[float]:
    """Rescale a payout shape so Σ p × m lands on `target_rtp`."""
    rtp = expected_return(zip(probabilities, multipliers))
    if rtp <= 0:
        return list(multipliers)
    scale = target_rtp / rtp
    return [round(m * scale, ndigits) for m in multipliers]


# ── Keno ──────────────────────────────────────────────────────

def keno_hit_probability(picks: int, hits: int, pool: int = 40, drawn: int = 10) -> float:
    """Hypergeometric P(exactly `hits` of `picks` among `drawn` of `pool`)."""
    if hits > picks or hits > drawn:
        return 0.0
    return (math.comb(drawn, hits) * math.comb(pool - drawn, picks - hits)
            / math.comb(pool, picks))


# ── Cards ─────────────────────────────────────────────────────

HILO_RANKS = 13
ACE_HIGH = 14


def hilo_probabilities(value: int) -> dict:
    """P(next rank higher/lower/same) for a rank value 2..14 (Ace high)."""
    return {
        "higher": (ACE_HIGH - value) / HILO_RANKS,
        "lower": (value - 2) / HILO_RANKS,
        "same": 1 / HILO_RANKS,
    }


def hilo_multipliers(value: int, edge: float) -> dict:
    return {k: fair_multiplier(p, edge) for k, p in hilo_probabilities(value).items()}


# ── Rock-paper-scissors ───────────────────────────────────────

def rps_win_multiplier(edge: float) -> float:
    """Win pays 3e - 1 so that (push 1× + win) / 3 returns e."""
    return 3.0 * edge - 1.0
