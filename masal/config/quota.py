"""
Quota, promo and cooldown settings.

A device gets QUOTA_LIMIT stories per cycle. The cycle timer starts on the
first normal use and runs for the reset period. Promo codes grant one extra
credit, once per device.
"""

import os

from dotenv import load_dotenv

load_dotenv()

QUOTA_CONSTANTS = {
    "limit": int(os.getenv("MASAL_QUOTA_LIMIT", "1")),
    "reset_period_ms": int(float(os.getenv("MASAL_RESET_PERIOD_HOURS", "6")) * 60 * 60 * 1000),
    "cooldown_seconds": float(os.getenv("MASAL_COOLDOWN_SECONDS", "60")),
    "cooldown_tick_seconds": 1.0,
}

# Persisted keys
QUOTA_STORAGE_KEY = "masal_quota"
PROMO_STORAGE_KEY = "masal_promo_used"

PROMO_CODES = frozenset({
    "ANKARA",
    "K7L2M9",
    "X4P8R3",
    "T9Y5W1",
    "B2H6S8",
    "V3N7C4",
    "J8D5F2",
    "M6G9Z1",
    "R4K3L7",
    "S5T8P2",
    "Y1W9Q6",
})
