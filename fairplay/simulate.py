"""
FairPlay Engine - Monte-Carlo RTP check

Runs the real mappers on a seeded PRNG stream and compares the measured
return with the theoretical one.

Usage:
    from fairplay.simulate import simulate
    res = simulate("plinko", {"rows": 16, "risk": "high"}, rounds=100_000)
    print(res.to_dict())
"""

from __future__ import annotations

import math
import random
from dataclasses import dataclass, field

from fairplay.games import get_mapper
from fairplay.rng import SequenceStream


@dataclass
class SimResult:
    """Simulation results for one game configuration."""
    game_type: str
    rounds: int
    rtp_theoretical: float
    rtp_measured: float
    hit_rate: float           # share of rounds returning more than the stake
    max_multiplier_hit: float
    total_wagered: float
    total_returned: float
    confidence_95: tuple = (0.0, 0.0)
    distribution: dict = field(default_factory=dict)

    @property
    def house_edge_measured(self) -> float:
        return 1.0 - self.rtp_measured

    def to_dict(self) -> dict:
        return {
            "game_type": self.game_type,
            "rounds": self.rounds,
            "rtp_theoretical": round(self.rtp_theoretical, 6),
            "rtp_measured": round(self.rtp_measured, 6),
            "house_edge_measured": round(self.house_edge_measured, 6),
            "hit_rate": round(self.hit_rate, 4),
            "max_multiplier_hit": round(self.max_multiplier_hit, 2),
            "total_wagered": round(self.total_wagered, 2),
            "total_returned": round(self.total_returned, 2),
            "confidence_95": [round(x, 6) for x in self.confidence_95],
            "distribution": self.distribution,
        }


def _bucket(mult: float) -> str:
    if mult == 0:
        return "0x"
    if mult < 1:
        return "<1x"
    if mult < 2:
        return "1-2x"
    if mult < 5:
        return "2-5x"
    if mult < 10:
        return "5-10x"
    if mult < 100:
        return "10-100x"
    return "100x+"


def simulate(game_type: str, params=None, rounds: int = 100_000, seed: int = 42) -> SimResult:
    """Monte-Carlo simulation of `rounds` unit stakes."""
    mapper = get_mapper(game_type)
    params = mapper.parse(params)
    rng = random.Random(seed)

    total = 0.0
    total_sq = 0.0
    wins = 0
    max_mult = 0.0
    buckets: dict[str, int] = {}

    for _ in range(rounds):
        mult = mapper.resolve(params, SequenceStream(source=rng.random)).multiplier
        total += mult
        total_sq += mult * mult
        if mult > 1.0:
            wins += 1
        max_mult = max(max_mult, mult)
        b = _bucket(mult)
        buckets[b] = buckets.get(b, 0) + 1

    mean = total / rounds if rounds else 0.0
    variance = max(0.0, total_sq / rounds - mean * mean) if rounds else 0.0
    std_err = math.sqrt(variance / rounds) if rounds else 0.0

    return SimResult(
        game_type=mapper.game_type,
        rounds=rounds,
        rtp_theoretical=mapper.theoretical_rtp(params),
        rtp_measured=mean,
        hit_rate=wins / rounds if rounds else 0.0,
        max_multiplier_hit=max_mult,
        total_wagered=float(rounds),
        total_returned=total,
        confidence_95=(mean - 1.96 * std_err, mean + 1.96 * std_err),
        distribution={k: round(v / rounds, 4) for k, v in sorted(buckets.items())},
    )
