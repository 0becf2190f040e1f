from __future__ import annotations

"""
Palette selection helpers.

Exports:
  ActivePalette: ordered colours eligible for matching plus an RGB matrix view
  select_active(tier_filter, palette=None, debug=False) -> ActivePalette
  palette_from_used(used_colours) -> ActivePalette
"""

from dataclasses import dataclass, field
from typing import Iterator, Optional, Sequence, Tuple

import numpy as np

from .constants import FILTER_FREE, TIER_FILTERS, TIER_FREE
from .core_types import PaletteColor, RGBTuple, TierFilter, U8Rgb, UsedColor
from .palette_data import get_palette
from .utils import debug_log, key_value_pairs_to_string


@dataclass(frozen=True)
class ActivePalette:
    """
    Ordered palette subset used for nearest-colour search.

    Order matters: on equal distance the earlier entry wins.
    """

    colours: Tuple[PaletteColor, ...]
    rgb: U8Rgb = field(repr=False, compare=False)  # uint8 [P,3], same order

    @classmethod
    def from_colours(cls, colours: Sequence[PaletteColor]) -> "ActivePalette":
        rows = [c.rgb for c in colours]
        rgb = np.array(rows, dtype=np.uint8).reshape(-1, 3)
        rgb.setflags(write=False)
        return cls(colours=tuple(colours), rgb=rgb)

    def __len__(self) -> int:
        return len(self.colours)

    def __iter__(self) -> Iterator[Tuple[PaletteColor, RGBTuple]]:
        for c in self.colours:
            yield c, c.rgb


def select_active(
    tier_filter: TierFilter,
    palette: Optional[Sequence[PaletteColor]] = None,
    debug: bool = False,
) -> ActivePalette:
    """
    Derive the usable colour set from the registry.

    tier_filter:
      - "free": only entries tagged free
      - "all":  every entry
    Registry order is preserved in both cases.
    """
    if tier_filter not in TIER_FILTERS:
        raise ValueError(f"unknown tier filter {tier_filter!r}")
    source = tuple(palette) if palette is not None else get_palette()

    if tier_filter == FILTER_FREE:
        chosen = [c for c in source if c.tier == TIER_FREE]
    else:
        chosen = list(source)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Tier filter", tier_filter),
                    ("Registry", len(source)),
                    ("Active", len(chosen)),
                ]
            )
        )
    return ActivePalette.from_colours(chosen)


def palette_from_used(used_colours: Sequence[UsedColor]) -> ActivePalette:
    """Active palette made of the given used colours, in the given order."""
    return ActivePalette.from_colours(
        [PaletteColor(name=u.name, hex=u.hex, tier=u.tier) for u in used_colours]
    )


__all__ = ["ActivePalette", "select_active", "palette_from_used"]
