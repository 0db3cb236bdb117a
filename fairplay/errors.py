"""Error taxonomy for the outcome engine."""


class FairPlayError(Exception):
    """Base class for all engine errors."""


class InsufficientBalance(FairPlayError):
    """Stake exceeds available funds. Raised before any draw happens."""

    def __init__(self, stake: float, available: float):
        self.stake = stake
        self.available = available
        super().__init__(f"Insufficient balance: {available:.2f} < {stake:.2f}")


class InvalidSeedInput(FairPlayError):
    """Public seed is empty or otherwise unusable."""


class ExhaustedSampleSpace(FairPlayError):
    """Unique-draw rejection sampling hit its draw-count ceiling."""

    def __init__(self, draws: int, collected: int, wanted: int):
        self.draws = draws
        self.collected = collected
        self.wanted = wanted
        super().__init__(
            f"Rejection sampling gave up after {draws} draws "
            f"({collected}/{wanted} unique values)"
        )


class UnknownGame(FairPlayError, ValueError):
    """Game type is not part of the supported variant set."""


class RoundStateError(FairPlayError):
    """Action attempted on a multi-step round that is already settled."""
