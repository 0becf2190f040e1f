from __future__ import annotations

"""
Result assembly.

Exports:
  GridResult
  build_result(...)      -> GridResult
  empty_result(config)   -> GridResult
  recount_used_colours(grid, active) -> list[UsedColor]
  result_manifest(result) -> dict   # JSON-ready summary
"""

from dataclasses import dataclass
from typing import Any, Dict, List, Tuple

import numpy as np

from .colour_select import ActivePalette
from .config import GridConfig
from .core_types import TierFilter, U8Grid, UsedColor, assert_u8_grid_rgba
from .quantize import nearest_palette_indices, tally_used_colours


@dataclass(frozen=True)
class GridResult:
    """
    Immutable snapshot of one conversion.

    `grid` is the final (possibly reduced) grid; `quantized` is the grid
    before reduction. Both arrays are read-only. `used_colours` reflects the
    pre-reduction distribution.
    """

    grid: U8Grid
    quantized: U8Grid
    used_colours: Tuple[UsedColor, ...]
    transparent_pixels: int
    paintable_pixels: int
    target_size: int
    tier_filter: TierFilter
    colour_limit: int
    distinct_colours: int
    reduced: bool

    @property
    def total_pixels(self) -> int:
        return self.target_size * self.target_size if self.target_size > 0 else 0


def _freeze(arr: U8Grid) -> U8Grid:
    view = arr.view()
    view.setflags(write=False)
    return view


def build_result(
    grid: U8Grid,
    quantized: U8Grid,
    used_colours: List[UsedColor],
    transparent_pixels: int,
    config: GridConfig,
    colour_limit: int,
) -> GridResult:
    """Bundle pipeline outputs. Pure assembly; no algorithmic content."""
    n = int(config.target_size)
    return GridResult(
        grid=_freeze(grid),
        quantized=_freeze(quantized),
        used_colours=tuple(used_colours),
        transparent_pixels=int(transparent_pixels),
        paintable_pixels=max(0, n * n - int(transparent_pixels)),
        target_size=n,
        tier_filter=config.tier_filter,
        colour_limit=int(colour_limit),
        distinct_colours=len(used_colours),
        reduced=grid is not quantized,
    )


def empty_result(config: GridConfig) -> GridResult:
    """Result for a non-positive target size: empty grid, nothing counted."""
    empty = np.zeros((0, 0, 4), dtype=np.uint8)
    empty.setflags(write=False)
    return GridResult(
        grid=empty,
        quantized=empty,
        used_colours=(),
        transparent_pixels=0,
        paintable_pixels=0,
        target_size=max(0, int(config.target_size)),
        tier_filter=config.tier_filter,
        colour_limit=0,
        distinct_colours=0,
        reduced=False,
    )


def recount_used_colours(grid: U8Grid, active: ActivePalette) -> List[UsedColor]:
    """
    Recount colours on any grid, e.g. after reduction.

    Visible cells are matched to `active` by nearest colour, so cells already
    on the palette count as themselves.
    """
    g = assert_u8_grid_rgba(grid)
    visible = g[g[..., 3] > 0]
    return tally_used_colours(nearest_palette_indices(visible, active.rgb), active)


def result_manifest(result: GridResult) -> Dict[str, Any]:
    """JSON-ready summary of a result."""
    return {
        "size": result.target_size,
        "tier_filter": result.tier_filter,
        "colour_limit": result.colour_limit,
        "distinct_colours": result.distinct_colours,
        "reduced": result.reduced,
        "transparent_pixels": result.transparent_pixels,
        "paintable_pixels": result.paintable_pixels,
        "colours": [
            {"hex": u.hex, "name": u.name, "tier": u.tier, "count": u.count}
            for u in result.used_colours
        ],
    }


__all__ = [
    "GridResult",
    "build_result",
    "empty_result",
    "recount_used_colours",
    "result_manifest",
]
