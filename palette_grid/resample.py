from __future__ import annotations

"""
Fit-inside nearest-neighbour resampling onto a square grid.

Exports:
  FitGeometry
  fit_inside(src_w, src_h, target_size) -> FitGeometry
  resample(source_rgba, target_size) -> U8Grid

The source is scaled uniformly so it fits entirely inside the N x N canvas,
centred, and sampled nearest-neighbour at cell centres. Cells outside the
drawn rectangle stay fully transparent.

A cell is only painted when its centre falls inside the drawn span, so a
source that scales to less than one cell on an axis can miss every centre
and produce an all-transparent grid (e.g. 1000x10 at N=32 draws 0.32 cells
tall, between the centres at 15.5 and 16.5).
"""

from dataclasses import dataclass
from typing import Tuple

import numpy as np

from .core_types import InvalidSize, U8Grid, assert_u8_grid_rgba


@dataclass(frozen=True)
class FitGeometry:
    """Placement of the scaled source inside the target canvas."""

    scale: float
    draw_width: float
    draw_height: float
    offset_x: float
    offset_y: float


def fit_inside(src_w: int, src_h: int, target_size: int) -> FitGeometry:
    """Uniform min-ratio scale and centring offsets for an N x N canvas."""
    if target_size <= 0:
        raise InvalidSize(f"target size must be positive, got {target_size}")
    if src_w <= 0 or src_h <= 0:
        return FitGeometry(0.0, 0.0, 0.0, target_size / 2.0, target_size / 2.0)
    n = float(target_size)
    scale = min(n / src_w, n / src_h)
    draw_w = src_w * scale
    draw_h = src_h * scale
    return FitGeometry(
        scale=scale,
        draw_width=draw_w,
        draw_height=draw_h,
        offset_x=(n - draw_w) / 2.0,
        offset_y=(n - draw_h) / 2.0,
    )


def _sample_axis(
    target_size: int, offset: float, extent: float, scale: float, src_len: int
) -> Tuple[np.ndarray, np.ndarray]:
    """
    For one axis, return (target indices inside the drawn span, source indices).

    A target cell is covered when its centre lies in [offset, offset + extent).
    """
    centres = np.arange(target_size, dtype=np.float64) + 0.5
    inside = (centres >= offset) & (centres < offset + extent)
    dst = np.nonzero(inside)[0]
    src = np.floor((centres[dst] - offset) / scale).astype(np.int64)
    np.clip(src, 0, src_len - 1, out=src)
    return dst, src


def resample(source_rgba: U8Grid, target_size: int) -> U8Grid:
    """
    Scale an RGBA source onto a new N x N grid.

    Raises InvalidSize for N <= 0. A source with no pixels, or one thinner
    than a cell after scaling that covers no cell centre, yields an
    all-transparent grid.
    """
    src = assert_u8_grid_rgba(source_rgba)
    geo = fit_inside(src.shape[1], src.shape[0], target_size)
    out = np.zeros((target_size, target_size, 4), dtype=np.uint8)
    if geo.scale <= 0.0:
        return out

    dst_x, src_x = _sample_axis(
        target_size, geo.offset_x, geo.draw_width, geo.scale, src.shape[1]
    )
    dst_y, src_y = _sample_axis(
        target_size, geo.offset_y, geo.draw_height, geo.scale, src.shape[0]
    )
    if dst_x.size == 0 or dst_y.size == 0:
        return out

    out[np.ix_(dst_y, dst_x)] = src[np.ix_(src_y, src_x)]
    return out


__all__ = ["FitGeometry", "fit_inside", "resample"]
