from __future__ import annotations

"""
Palette lock checks.

Functions:
  palette_set(colours) -> set of RGB tuples
  is_palette_only(grid, colours) -> bool
  count_off_palette_pixels(grid, colours) -> int

Use cases:
  - verify that every painted cell of a result is a paintable palette colour
  - report how many cells would need repainting against another palette
"""

from typing import Iterable, Set

import numpy as np

from .core_types import PaletteColor, RGBTuple, U8Grid, assert_u8_grid_rgba


def palette_set(colours: Iterable[PaletteColor]) -> Set[RGBTuple]:
    """Return a set of all RGB tuples present in the palette."""
    return {c.rgb for c in colours}


def _off_palette_mask(grid: U8Grid, pal: Set[RGBTuple]) -> np.ndarray:
    """Boolean mask over visible cells whose RGB is not in `pal`."""
    g = assert_u8_grid_rgba(grid)
    visible = g[g[..., 3] > 0][:, :3]
    if visible.shape[0] == 0:
        return np.zeros((0,), dtype=bool)
    uniq, inverse = np.unique(visible, axis=0, return_inverse=True)
    off_uniq = np.array(
        [(int(r), int(g_), int(b)) not in pal for r, g_, b in uniq.tolist()],
        dtype=bool,
    )
    return off_uniq[inverse.reshape(-1)]


def is_palette_only(grid: U8Grid, colours: Iterable[PaletteColor]) -> bool:
    """True if every visible cell already uses a palette colour."""
    return not bool(np.any(_off_palette_mask(grid, palette_set(colours))))


def count_off_palette_pixels(grid: U8Grid, colours: Iterable[PaletteColor]) -> int:
    """Number of visible cells whose colour is not in the palette."""
    return int(np.count_nonzero(_off_palette_mask(grid, palette_set(colours))))


__all__ = [
    "palette_set",
    "is_palette_only",
    "count_off_palette_pixels",
]
