from __future__ import annotations

"""
Top-K palette reduction.

Exports:
  reduce_palette(quantized_grid, used_colours, k, debug=False) -> U8Grid

A second nearest-colour pass restricted to the K most used colours. The most
used colour (entry 0) is the natural fallback: cells whose colour fell out
of the top K converge to whichever kept colour is nearest.
"""

from typing import Optional, Sequence

import numpy as np

from .colour_select import palette_from_used
from .core_types import U8Grid, UsedColor, assert_u8_grid_rgba
from .quantize import nearest_palette_indices
from .utils import debug_log, key_value_pairs_to_string


def reduce_palette(
    quantized_grid: U8Grid,
    used_colours: Sequence[UsedColor],
    k: Optional[int],
    debug: bool = False,
) -> U8Grid:
    """
    Remap opaque cells onto the top-k used colours.

    No-op (input returned as is) when k is None, k <= 0 or k >= the number of
    distinct colours. Otherwise returns a new grid; the input is not touched.
    Transparent cells (alpha 0) are left alone. Counts are not recomputed.
    """
    grid = assert_u8_grid_rgba(quantized_grid)
    distinct = len(used_colours)
    if k is None or k <= 0 or k >= distinct:
        return grid

    kept = palette_from_used(used_colours[:k])
    out = grid.copy()
    mask = grid[..., 3] > 0
    indices = nearest_palette_indices(grid[mask], kept.rgb)
    if indices.size:
        out[mask, :3] = kept.rgb[indices]

    if debug:
        fallback = used_colours[0]
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Reduced", f"{distinct} -> {k}"),
                    ("Fallback", f"{fallback.hex} {fallback.name}"),
                    ("Cells", int(np.count_nonzero(mask))),
                ]
            )
        )
    return out


__all__ = ["reduce_palette"]
