"""
Quota ledger: how many stories this device may still generate.

The ledger is a small persisted record {"count": int, "resetTime": int|null}.
remaining = limit - count. count goes up by one per generated story and down
by one per redeemed promo code, so it can be negative (banked extra credit).

The reset timer starts on the first *normal* use in a cycle (the use that
makes count positive). Promo credits never start or move the timer, and the
promo flag survives quota resets.

The pure functions below take and return LedgerSnapshot values; QuotaLedger
wires them to an injected KeyValueStore and clock.
"""

import json
import logging
import time
from dataclasses import dataclass, replace
from enum import Enum
from typing import Callable, Optional

from masal.config import (
    QUOTA_CONSTANTS,
    PROMO_CODES,
    QUOTA_STORAGE_KEY,
    PROMO_STORAGE_KEY,
    USER_MESSAGES,
)
from masal.logging import story_logger
from .storage import KeyValueStore

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class LedgerSnapshot:
    count: int = 0
    reset_time: Optional[int] = None  # epoch ms

    def to_json(self) -> str:
        return json.dumps({"count": self.count, "resetTime": self.reset_time})

    @classmethod
    def from_json(cls, raw: Optional[str]) -> "LedgerSnapshot":
        """Parse a persisted record. Missing or unreadable means first-time defaults."""
        if raw is None:
            return cls()
        try:
            data = json.loads(raw)
            count = int(data.get("count", 0))
            reset_time = data.get("resetTime")
            return cls(count=count, reset_time=int(reset_time) if reset_time is not None else None)
        except (ValueError, TypeError, AttributeError) as e:
            logger.warning(f"Ignoring unreadable quota record {raw!r}: {e}")
            return cls()


@dataclass(frozen=True)
class QuotaStatus:
    remaining: int
    reset_time: Optional[int] = None

    @property
    def exhausted(self) -> bool:
        return self.remaining <= 0


class PromoOutcome(str, Enum):
    APPLIED = "applied"
    INVALID_CODE = "invalid_code"
    ALREADY_REDEEMED = "already_redeemed"


@dataclass(frozen=True)
class PromoResult:
    outcome: PromoOutcome
    message: str
    remaining: int

    @property
    def success(self) -> bool:
        return self.outcome == PromoOutcome.APPLIED


PROMO_MESSAGES = {
    PromoOutcome.APPLIED: USER_MESSAGES["promo_applied"],
    PromoOutcome.INVALID_CODE: USER_MESSAGES["promo_invalid"],
    PromoOutcome.ALREADY_REDEEMED: USER_MESSAGES["promo_already_redeemed"],
}


# =============================================================================
# Pure ledger transitions
# =============================================================================


def remaining_quota(snapshot: LedgerSnapshot, limit: int) -> int:
    return limit - snapshot.count


def expire(snapshot: LedgerSnapshot, now_ms: int) -> LedgerSnapshot:
    """Roll the cycle over once its reset time has been reached."""
    if snapshot.reset_time is not None and snapshot.reset_time <= now_ms:
        return LedgerSnapshot(count=0, reset_time=None)
    return snapshot


def consume(snapshot: LedgerSnapshot, now_ms: int, reset_period_ms: int) -> LedgerSnapshot:
    """Use one credit; start the cycle timer on the first normal use."""
    new_count = snapshot.count + 1
    reset_time = snapshot.reset_time
    if reset_time is None and new_count > 0:
        reset_time = now_ms + reset_period_ms
    return LedgerSnapshot(count=new_count, reset_time=reset_time)


def grant_credit(snapshot: LedgerSnapshot) -> LedgerSnapshot:
    """Bank one extra credit. Leaves the timer alone."""
    return replace(snapshot, count=snapshot.count - 1)


def normalize_promo_code(code: str) -> str:
    return code.strip().upper()


# =============================================================================
# Persisted ledger
# =============================================================================


class QuotaLedger:
    """
    Reads and writes the quota record and promo flag through a KeyValueStore.

    Args:
        store: Where the ledger lives (JsonFileStore on a device, MemoryStore in tests)
        clock: Returns the current time in epoch seconds
        limit: Stories per cycle
        reset_period_ms: Length of a cycle, starting at the first normal use
        promo_codes: Accepted promo codes (upper case)
    """

    def __init__(
        self,
        store: KeyValueStore,
        clock: Callable[[], float] = time.time,
        limit: int = QUOTA_CONSTANTS["limit"],
        reset_period_ms: int = QUOTA_CONSTANTS["reset_period_ms"],
        promo_codes: frozenset[str] = PROMO_CODES,
    ):
        self.store = store
        self.clock = clock
        self.limit = limit
        self.reset_period_ms = reset_period_ms
        self.promo_codes = frozenset(normalize_promo_code(c) for c in promo_codes)

    def _now_ms(self) -> int:
        return int(self.clock() * 1000)

    def _read(self) -> Optional[LedgerSnapshot]:
        raw = self.store.get(QUOTA_STORAGE_KEY)
        if raw is None:
            return None
        return LedgerSnapshot.from_json(raw)

    def _write(self, snapshot: LedgerSnapshot) -> None:
        self.store.set(QUOTA_STORAGE_KEY, snapshot.to_json())

    def _status(self, snapshot: LedgerSnapshot) -> QuotaStatus:
        return QuotaStatus(
            remaining=remaining_quota(snapshot, self.limit),
            reset_time=snapshot.reset_time,
        )

    def _current(self) -> LedgerSnapshot:
        """Current snapshot with an elapsed cycle rolled over and persisted."""
        stored = self._read()
        if stored is None:
            return LedgerSnapshot()
        current = expire(stored, self._now_ms())
        if current != stored:
            self._write(current)
            logger.info("Quota cycle elapsed, ledger reset")
        return current

    def _peek(self) -> LedgerSnapshot:
        """Like _current, but never writes."""
        return expire(self._read() or LedgerSnapshot(), self._now_ms())

    def check_quota(self) -> QuotaStatus:
        """Report remaining credits. Only writes when a cycle has elapsed."""
        return self._status(self._current())

    def decrement_quota(self) -> QuotaStatus:
        """Consume one credit for a generated story."""
        updated = consume(self._current(), self._now_ms(), self.reset_period_ms)
        self._write(updated)
        status = self._status(updated)
        story_logger.quota_changed("consumed", status.remaining, status.reset_time)
        return status

    def promo_redeemed(self) -> bool:
        return self.store.get(PROMO_STORAGE_KEY) is not None

    def apply_promo(self, code: str) -> PromoResult:
        """Redeem a promo code for one extra credit. Rejections change nothing."""
        normalized = normalize_promo_code(code)

        if normalized not in self.promo_codes:
            return self._promo_result(PromoOutcome.INVALID_CODE, self._status(self._peek()).remaining)

        if self.promo_redeemed():
            return self._promo_result(PromoOutcome.ALREADY_REDEEMED, self._status(self._peek()).remaining)

        updated = grant_credit(self._current())
        self._write(updated)
        self.store.set(PROMO_STORAGE_KEY, "true")

        remaining = remaining_quota(updated, self.limit)
        story_logger.quota_changed("promo applied", remaining, updated.reset_time)
        return self._promo_result(PromoOutcome.APPLIED, remaining)

    @staticmethod
    def _promo_result(outcome: PromoOutcome, remaining: int) -> PromoResult:
        return PromoResult(outcome=outcome, message=PROMO_MESSAGES[outcome], remaining=remaining)
