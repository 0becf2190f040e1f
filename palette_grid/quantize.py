from __future__ import annotations

"""
Nearest-colour quantisation of an RGBA grid against an active palette.

Exports:
  Quantized
  nearest_palette_indices(pixels, pal_rgb) -> np.ndarray
  opaque_mask(grid, alpha_threshold) -> np.ndarray
  tally_used_colours(indices, active) -> list[UsedColor]
  quantize(grid, active, alpha_threshold=ALPHA_TRANSPARENT_MAX, debug=False) -> Quantized

Distance is squared Euclidean in RGB. On exact ties the earlier palette entry
wins, which is what argmin's first-minimum rule gives for free.
"""

from dataclasses import dataclass
from typing import List

import numpy as np

from .colour_select import ActivePalette
from .constants import ALPHA_TRANSPARENT_MAX, NEAREST_CHUNK_ROWS
from .core_types import U8Grid, U8Rgb, UsedColor, assert_u8_grid_rgba
from .utils import debug_log, key_value_pairs_to_string


@dataclass(frozen=True)
class Quantized:
    grid: U8Grid
    used_colours: List[UsedColor]
    transparent_count: int


def nearest_palette_indices(
    pixels: U8Rgb, pal_rgb: U8Rgb, chunk: int = NEAREST_CHUNK_ROWS
) -> np.ndarray:
    """
    For each RGB row pick the nearest palette row by squared distance.

    Works in int32 chunks so large grids stay within memory.
    """
    n = int(pixels.shape[0])
    out = np.empty((n,), dtype=np.int64)
    if n == 0:
        return out
    if pal_rgb.shape[0] == 0:
        raise ValueError("cannot match against an empty palette")

    pal = pal_rgb.astype(np.int32)
    for start in range(0, n, chunk):
        pts = pixels[start : start + chunk, :3].astype(np.int32)
        diff = pts[:, None, :] - pal[None, :, :]
        dist2 = np.sum(diff * diff, axis=2)
        out[start : start + chunk] = np.argmin(dist2, axis=1)
    return out


def opaque_mask(grid: U8Grid, alpha_threshold: int = ALPHA_TRANSPARENT_MAX) -> np.ndarray:
    """Boolean (H,W) mask of cells that get painted."""
    return grid[..., 3] > alpha_threshold


def tally_used_colours(indices: np.ndarray, active: ActivePalette) -> List[UsedColor]:
    """
    Count palette indices taken in raster order.

    Sorted by descending count; equal counts keep the order in which each
    colour was first met.
    """
    if indices.size == 0:
        return []
    uniq, first_seen, counts = np.unique(indices, return_index=True, return_counts=True)
    by_first = np.argsort(first_seen, kind="stable")
    uniq, counts = uniq[by_first], counts[by_first]
    order = np.argsort(-counts, kind="stable")

    used: List[UsedColor] = []
    for k in order.tolist():
        colour = active.colours[int(uniq[k])]
        used.append(
            UsedColor(
                hex=colour.hex,
                name=colour.name,
                tier=colour.tier,
                count=int(counts[k]),
                rgb=colour.rgb,
            )
        )
    return used


def quantize(
    grid: U8Grid,
    active: ActivePalette,
    alpha_threshold: int = ALPHA_TRANSPARENT_MAX,
    debug: bool = False,
) -> Quantized:
    """
    Map every opaque cell to its nearest active colour.

    Transparent cells (alpha <= alpha_threshold) get alpha 0 and keep their
    RGB. Opaque cells take the palette RGB and alpha 255. The input grid is
    not modified.
    """
    src = assert_u8_grid_rgba(grid)
    out = src.copy()
    mask = opaque_mask(src, alpha_threshold)

    indices = nearest_palette_indices(src[mask], active.rgb)
    if indices.size:
        out[mask, :3] = active.rgb[indices]
    out[mask, 3] = 255
    out[~mask, 3] = 0

    transparent = int(mask.size - np.count_nonzero(mask))
    used = tally_used_colours(indices, active)

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Quantized", f"{src.shape[1]}x{src.shape[0]}"),
                    ("Palette", len(active)),
                    ("Opaque", int(indices.size)),
                    ("Transparent", transparent),
                    ("Distinct", len(used)),
                ]
            )
        )
    return Quantized(grid=out, used_colours=used, transparent_count=transparent)


__all__ = [
    "Quantized",
    "nearest_palette_indices",
    "opaque_mask",
    "tally_used_colours",
    "quantize",
]
