"""Filesystem locations.

Single source of truth for paths used by the storage layer and the exporter.
"""

import os
from pathlib import Path

# Base directories
CONFIG_DIR = Path(__file__).parent
PACKAGE_DIR = CONFIG_DIR.parent
PROJECT_DIR = PACKAGE_DIR.parent
DATA_DIR = Path(os.getenv("MASAL_DATA_DIR", PROJECT_DIR / "data"))

# Device-local key-value storage (quota ledger, promo flag)
STORAGE_PATH = DATA_DIR / "local_storage.json"

# Exported stories
OUTPUT_DIR = DATA_DIR / "stories"
