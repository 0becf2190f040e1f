# palette_grid/constants.py
"""
Tunables shared across the project.

- Grid size bounds and presets
- Transparency threshold
- Tier filters
"""
from __future__ import annotations

from typing import Tuple

# ==========
# Grid sizes
# ==========
MIN_TARGET_SIZE: int = 1
MAX_TARGET_SIZE: int = 2048
PRESET_SIZES: Tuple[int, ...] = (32, 64, 128, 256, 512)
DEFAULT_TARGET_SIZE: int = 128

# ============
# Transparency
# ============
# Cells with alpha <= this value are transparent; everything else is opaque.
ALPHA_TRANSPARENT_MAX: int = 0

# =====
# Tiers
# =====
TIER_FREE = "free"
TIER_PREMIUM = "premium"
TIERS: Tuple[str, ...] = (TIER_FREE, TIER_PREMIUM)

FILTER_FREE = "free"
FILTER_ALL = "all"
TIER_FILTERS: Tuple[str, ...] = (FILTER_FREE, FILTER_ALL)

# Rows per chunk for vectorised nearest-colour search.
NEAREST_CHUNK_ROWS: int = 65_536

__all__ = [
    "MIN_TARGET_SIZE",
    "MAX_TARGET_SIZE",
    "PRESET_SIZES",
    "DEFAULT_TARGET_SIZE",
    "ALPHA_TRANSPARENT_MAX",
    "TIER_FREE",
    "TIER_PREMIUM",
    "TIERS",
    "FILTER_FREE",
    "FILTER_ALL",
    "TIER_FILTERS",
    "NEAREST_CHUNK_ROWS",
]
