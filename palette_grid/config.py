from __future__ import annotations

"""
Pipeline configuration.

Exports:
  GridConfig
  resolve_colour_limit(limit, distinct) -> int
  parse_target_size(text) -> int    # argparse type
"""

import argparse
from dataclasses import dataclass
from typing import Optional

from .constants import (
    ALPHA_TRANSPARENT_MAX,
    DEFAULT_TARGET_SIZE,
    FILTER_ALL,
    MAX_TARGET_SIZE,
    MIN_TARGET_SIZE,
)
from .core_types import TierFilter


@dataclass(frozen=True)
class GridConfig:
    """Everything a conversion depends on besides the source image."""

    target_size: int = DEFAULT_TARGET_SIZE
    tier_filter: TierFilter = FILTER_ALL  # type: ignore[assignment]
    colour_limit: Optional[int] = None
    alpha_threshold: int = ALPHA_TRANSPARENT_MAX


def resolve_colour_limit(limit: Optional[int], distinct: int) -> int:
    """
    Effective colour limit for a run with `distinct` used colours.

    Unset, non-positive or too-large limits fall back to `distinct`, which
    means no reduction.
    """
    if limit is None or limit <= 0 or limit >= distinct:
        return distinct
    return int(limit)


def parse_target_size(text: str) -> int:
    """argparse type for --size: an integer in [MIN_TARGET_SIZE, MAX_TARGET_SIZE]."""
    try:
        value = int(text)
    except ValueError:
        raise argparse.ArgumentTypeError(f"size must be an integer: {text!r}") from None
    if not MIN_TARGET_SIZE <= value <= MAX_TARGET_SIZE:
        raise argparse.ArgumentTypeError(
            f"size must be in {MIN_TARGET_SIZE}..{MAX_TARGET_SIZE}, got {value}"
        )
    return value


__all__ = ["GridConfig", "resolve_colour_limit", "parse_target_size"]
