"""
FairPlay Engine - Base Outcome Mapper

Every game variant implements the same capability:
  max_draws(params)        size of the index space one round may consume
  resolve(params, stream)  floats → game result + payout multiplier
  theoretical_rtp(params)  exact expected return for the parameters
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from dataclasses import dataclass, field

from pydantic import BaseModel

from fairplay.rng import DrawStream, SequenceStream


@dataclass(frozen=True)
class Outcome:
    """Result of mapping one round's draws."""
    game_type: str
    result: dict
    multiplier: float
    draws_used: int = 0
    floats: tuple = field(default_factory=tuple)

    @property
    def won(self) -> bool:
        """A round is won when it returns at least the stake; a push counts."""
        return self.multiplier >= 1.0

    def to_dict(self) -> dict:
        return {
            "game_type": self.game_type,
            "result": self.result,
            "multiplier": round(self.multiplier, 8),
            "won": self.won,
            "draws_used": self.draws_used,
        }


class BaseGameMapper(ABC):
    """Abstract base for all outcome mappers."""

    game_type: str = "base"
    display_name: str = "Base Game"
    params_model: type[BaseModel] = BaseModel
    stakeable: bool = True

    def parse(self, params=None) -> BaseModel:
        """Accept a params model, a dict, or None (defaults)."""
        if isinstance(params, self.params_model):
            return params
        return self.params_model(**(params or {}))

    @abstractmethod
    def max_draws(self, params) -> int:
        ...

    @abstractmethod
    def resolve(self, params, stream) -> Outcome:
        ...

    @abstractmethod
    def theoretical_rtp(self, params) -> float:
        ...

    def resolve_seeded(self, params, secret_seed: str, public_seed: str,
                       nonce: int) -> Outcome:
        """Resolve straight from a seed pair and nonce."""
        return self.resolve(self.parse(params), DrawStream(secret_seed, public_seed, nonce))

    def resolve_floats(self, params, floats) -> Outcome:
        """Resolve from pre-drawn floats (verification, tests)."""
        return self.resolve(self.parse(params), SequenceStream(floats))

    def _outcome(self, stream, result: dict, multiplier: float) -> Outcome:
        return Outcome(
            game_type=self.game_type,
            result=result,
            multiplier=multiplier,
            draws_used=stream.used,
            floats=tuple(stream.drawn),
        )

    def get_metadata(self) -> dict:
        return {
            "game_type": self.game_type,
            "display_name": self.display_name,
            "params": self.params_model.model_json_schema(),
        }
