# palette_grid/palette_data.py
from __future__ import annotations

"""
Palette definitions and builders.

Exports:
  PALETTE: list[tuple[str, str, str]]  # [(hex, name, tier), ...]
  validate_palette(entries) -> tuple[PaletteColor, ...]
  get_palette() -> tuple[PaletteColor, ...]
"""

from typing import List, Sequence, Set, Tuple

from .constants import TIERS
from .core_types import InvalidFormat, PaletteColor, normalise_hex


PALETTE: List[Tuple[str, str, str]] = [
    # Free
    ("#000000", "Black", "free"),
    ("#3c3c3c", "Dark Gray", "free"),
    ("#787878", "Gray", "free"),
    ("#d2d2d2", "Light Gray", "free"),
    ("#ffffff", "White", "free"),
    ("#600018", "Deep Red", "free"),
    ("#ed1c24", "Red", "free"),
    ("#ff7f27", "Orange", "free"),
    ("#f6aa09", "Gold", "free"),
    ("#f9dd3b", "Yellow", "free"),
    ("#fffabc", "Light Yellow", "free"),
    ("#0eb968", "Dark Green", "free"),
    ("#13e67b", "Green", "free"),
    ("#87ff5e", "Light Green", "free"),
    ("#0c816e", "Dark Teal", "free"),
    ("#10aea6", "Teal", "free"),
    ("#13e1bc", "Light Teal", "free"),
    ("#60f7f2", "Cyan", "free"),
    ("#28509e", "Dark Blue", "free"),
    ("#4093e4", "Blue", "free"),
    ("#6b50f6", "Indigo", "free"),
    ("#99b1fb", "Light Indigo", "free"),
    ("#780c99", "Dark Purple", "free"),
    ("#aa38b9", "Purple", "free"),
    ("#e09ff9", "Light Purple", "free"),
    ("#cb007a", "Dark Pink", "free"),
    ("#ec1f80", "Pink", "free"),
    ("#f38da9", "Light Pink", "free"),
    ("#684634", "Dark Brown", "free"),
    ("#95682a", "Brown", "free"),
    ("#f8b277", "Beige", "free"),
    # Premium
    ("#aaaaaa", "Medium Gray", "premium"),
    ("#a50e1e", "Dark Red", "premium"),
    ("#fa8072", "Light Red", "premium"),
    ("#e45c1a", "Dark Orange", "premium"),
    ("#9c8431", "Dark Goldenrod", "premium"),
    ("#c5ad31", "Goldenrod", "premium"),
    ("#e8d45f", "Light Goldenrod", "premium"),
    ("#4a6b3a", "Dark Olive", "premium"),
    ("#5a944a", "Olive", "premium"),
    ("#84c573", "Light Olive", "premium"),
    ("#0f799f", "Dark Cyan", "premium"),
    ("#bbfaf2", "Light Cyan", "premium"),
    ("#7dc7ff", "Light Blue", "premium"),
    ("#4d31b8", "Dark Indigo", "premium"),
    ("#4a4284", "Dark Slate Blue", "premium"),
    ("#7a71c4", "Slate Blue", "premium"),
    ("#b5aef1", "Light Slate Blue", "premium"),
    ("#9b5249", "Dark Peach", "premium"),
    ("#d18078", "Peach", "premium"),
    ("#fab6a4", "Light Peach", "premium"),
    ("#dba463", "Light Brown", "premium"),
    ("#7b6352", "Dark Tan", "premium"),
    ("#9c846b", "Tan", "premium"),
    ("#d6b594", "Light Tan", "premium"),
    ("#d18051", "Dark Beige", "premium"),
    ("#ffc5a5", "Light Beige", "premium"),
    ("#6d643f", "Dark Stone", "premium"),
    ("#948c6b", "Stone", "premium"),
    ("#cdc59e", "Light Stone", "premium"),
    ("#333941", "Dark Slate", "premium"),
    ("#6d758d", "Slate", "premium"),
    ("#b3b9d1", "Light Slate", "premium"),
]


def validate_palette(
    entries: Sequence[Tuple[str, str, str]],
) -> Tuple[PaletteColor, ...]:
    """
    Convert (hex, name, tier) rows into PaletteColor entries.

    Raises InvalidFormat on a malformed hex, an unknown tier or a duplicate hex,
    so palette data fails at load time rather than mid-run.
    """
    out: List[PaletteColor] = []
    seen: Set[str] = set()
    for hx, name, tier in entries:
        canon = normalise_hex(hx)
        if tier not in TIERS:
            raise InvalidFormat(f"unknown tier {tier!r} for {name!r}")
        if canon in seen:
            raise InvalidFormat(f"duplicate palette hex {canon}")
        seen.add(canon)
        out.append(PaletteColor(name=name, hex=canon, tier=tier))  # type: ignore[arg-type]
    return tuple(out)


_REGISTRY: Tuple[PaletteColor, ...] = validate_palette(PALETTE)


def get_palette() -> Tuple[PaletteColor, ...]:
    """The full registry in shipping order."""
    return _REGISTRY


__all__ = ["PALETTE", "validate_palette", "get_palette"]
