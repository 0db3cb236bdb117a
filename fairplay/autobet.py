"""
FairPlay Engine - Autobet Controller

Drives repeated rounds with stake progression and stop conditions:

    IDLE ──start()──▶ RUNNING ──▶ STOPPED_BY_LIMIT
                              ──▶ STOPPED_BY_USER
                              ──▶ STOPPED_BY_BALANCE

At most one round is in flight. The caller asks for the next stake with
`begin_round()`, plays the round, and reports `(won, payout)` back with
`report_round()`; the controller never starts round N+1 on its own.
`stop()` takes effect at the round boundary: a round already in flight
is still counted when it reports.

Usage:
    ctl = AutobetController()
    ctl.start(AutobetSettings(stake_base=10, on_loss_pct=100, rounds_target=20))
    while ctl.running:
        stake = ctl.begin_round(wallet.balance)
        if stake is None:
            break
        record = table.play("dice", {"target": 50}, stake)
        ctl.report_round(record.won, record.payout)
"""

from __future__ import annotations

import logging
from enum import Enum
from typing import Callable, Optional, Union

from config.game_schema import AutobetSettings, AutobetSnapshot
from fairplay.errors import InsufficientBalance

logger = logging.getLogger("fairplay.autobet")


class AutobetState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    STOPPED_BY_LIMIT = "stopped_by_limit"
    STOPPED_BY_USER = "stopped_by_user"
    STOPPED_BY_BALANCE = "stopped_by_balance"


def adjust_stake(stake: float, pct: float) -> float:
    """Apply a percentage delta multiplicatively (100 doubles, -50 halves)."""
    if pct == 0:
        return stake
    return stake * (1.0 + pct / 100.0)


class AutobetController:
    """Single writer of the autobet session; readers use `snapshot()`."""

    def __init__(self):
        self.state = AutobetState.IDLE
        self.settings: Optional[AutobetSettings] = None
        self.stake_current = 0.0
        self.rounds_done = 0
        self.cumulative_profit = 0.0
        self.stop_reason: Optional[str] = None
        self._in_flight: Optional[float] = None

    # ── Lifecycle ─────────────────────────────────────────────

    @property
    def running(self) -> bool:
        return self.state == AutobetState.RUNNING

    def start(self, settings: Union[AutobetSettings, dict]) -> AutobetSnapshot:
        if self.running:
            raise RuntimeError("Autobet already running")
        if not isinstance(settings, AutobetSettings):
            settings = AutobetSettings(**settings)
        self.settings = settings
        self.stake_current = settings.stake_base
        self.rounds_done = 0
        self.cumulative_profit = 0.0
        self.stop_reason = None
        self._in_flight = None
        self.state = AutobetState.RUNNING
        logger.info("Autobet started: stake=%.2f win%%=%+.1f loss%%=%+.1f rounds=%d",
                    settings.stake_base, settings.on_win_pct, settings.on_loss_pct,
                    settings.rounds_target)
        return self.snapshot()

    def stop(self) -> AutobetSnapshot:
        """User stop. Honored at the next round boundary."""
        if self.running:
            self._halt(AutobetState.STOPPED_BY_USER, "stopped by user")
        return self.snapshot()

    def _halt(self, state: AutobetState, reason: str):
        self.state = state
        self.stop_reason = reason
        logger.info("Autobet %s after %d rounds (profit %.2f): %s",
                    state.value, self.rounds_done, self.cumulative_profit, reason)

    # ── Round protocol ────────────────────────────────────────

    def begin_round(self, available_balance: float) -> Optional[float]:
        """Stake for the next round, or None when the session is over.

        A stake above the available balance stops the session
        (STOPPED_BY_BALANCE) before any round is played, as does a stake
        reduced to nothing by repeated negative adjustments.
        """
        if not self.running:
            return None
        if self._in_flight is not None:
            raise RuntimeError("Previous round has not reported yet")
        if self.stake_current <= 0:
            self._halt(AutobetState.STOPPED_BY_BALANCE, "stake reduced to zero")
            return None
        if self.stake_current > available_balance:
            self._halt(AutobetState.STOPPED_BY_BALANCE,
                       f"stake {self.stake_current:.2f} exceeds balance {available_balance:.2f}")
            return None
        self._in_flight = self.stake_current
        return self.stake_current

    def report_round(self, won: bool, payout: float) -> bool:
        """Record a finished round. Returns True when another round should start."""
        stake = self._in_flight if self._in_flight is not None else self.stake_current
        if self._in_flight is None and not self.running:
            return False
        self._in_flight = None

        self.rounds_done += 1
        self.cumulative_profit += payout - stake
        logger.debug("round %d: won=%s stake=%.2f payout=%.2f profit=%.2f",
                     self.rounds_done, won, stake, payout, self.cumulative_profit)

        if not self.running:
            return False

        s = self.settings
        if s.rounds_target > 0 and self.rounds_done >= s.rounds_target:
            self._halt(AutobetState.STOPPED_BY_LIMIT, f"{self.rounds_done} rounds played")
            return False
        if s.profit_target > 0 and self.cumulative_profit >= s.profit_target:
            self._halt(AutobetState.STOPPED_BY_LIMIT, "profit target reached")
            return False
        if s.loss_limit > 0 and self.cumulative_profit <= -s.loss_limit:
            self._halt(AutobetState.STOPPED_BY_LIMIT, "loss limit reached")
            return False

        self.stake_current = adjust_stake(stake, s.on_win_pct if won else s.on_loss_pct)
        return True

    # ── Driver ────────────────────────────────────────────────

    def run(self, play_round: Callable[[float], tuple],
            available_balance: Callable[[], float],
            max_rounds: Optional[int] = None,
            on_round: Optional[Callable[[AutobetSnapshot], None]] = None) -> AutobetSnapshot:
        """Loop rounds synchronously until a stop condition fires.

        `play_round(stake)` plays one full round and returns `(won, payout)`.
        InsufficientBalance from the round ends the session as
        STOPPED_BY_BALANCE. `max_rounds` bounds this call only.
        """
        played = 0
        while self.running:
            if max_rounds is not None and played >= max_rounds:
                break
            stake = self.begin_round(available_balance())
            if stake is None:
                break
            try:
                won, payout = play_round(stake)
            except InsufficientBalance as exc:
                self._in_flight = None
                self._halt(AutobetState.STOPPED_BY_BALANCE, str(exc))
                break
            played += 1
            self.report_round(won, payout)
            if on_round is not None:
                on_round(self.snapshot())
        return self.snapshot()

    def snapshot(self) -> AutobetSnapshot:
        s = self.settings
        return AutobetSnapshot(
            state=self.state.value,
            stake_base=s.stake_base if s else 0.0,
            stake_current=self.stake_current,
            on_win_pct=s.on_win_pct if s else 0.0,
            on_loss_pct=s.on_loss_pct if s else 0.0,
            rounds_target=s.rounds_target if s else 0,
            rounds_done=self.rounds_done,
            profit_target=s.profit_target if s else 0.0,
            loss_limit=s.loss_limit if s else 0.0,
            cumulative_profit=self.cumulative_profit,
            running=self.running,
            stop_reason=self.stop_reason,
        )
