"""In-memory wallet: debit the stake, credit the payout. Nothing more."""
import logging

from fairplay.errors import InsufficientBalance

logger = logging.getLogger("fairplay.wallet")


class Wallet:

    def __init__(self, balance: float = 0.0):
        self._balance = float(balance)

    @property
    def balance(self) -> float:
        return self._balance

    def can_afford(self, amount: float) -> bool:
        return amount <= self._balance

    def debit(self, amount: float) -> float:
        if amount <= 0:
            raise ValueError("Stake must be positive")
        if amount > self._balance:
            logger.warning("Debit of %.2f rejected (balance %.2f)", amount, self._balance)
            raise InsufficientBalance(amount, self._balance)
        self._balance -= amount
        return self._balance

    def credit(self, amount: float) -> float:
        if amount < 0:
            raise ValueError("Payout cannot be negative")
        self._balance += amount
        return self._balance
