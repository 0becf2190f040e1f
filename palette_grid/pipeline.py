from __future__ import annotations

"""
Image to palette-grid pipeline.

decode -> resample -> quantize -> (optional) reduce -> aggregate, as one
synchronous pass. Each call is a pure function of (source, config) and
returns a fresh immutable GridResult.
"""

import time
from typing import Optional, Sequence

from .colour_select import select_active
from .config import GridConfig, resolve_colour_limit
from .constants import MAX_TARGET_SIZE
from .core_types import InvalidSize, PaletteColor
from .image_io import SourceImage, as_rgba_array
from .quantize import quantize
from .reduce import reduce_palette
from .resample import resample
from .result import GridResult, build_result, empty_result
from .utils import debug_log, format_seconds_compact, key_value_pairs_to_string


def convert_image(
    source: SourceImage,
    config: GridConfig,
    *,
    palette: Optional[Sequence[PaletteColor]] = None,
    debug: bool = False,
) -> GridResult:
    """
    Convert a decoded image into a palette grid.

    Args:
      source : PIL image or uint8 (H,W,3|4) array
      config : target size, tier filter, colour limit, alpha threshold
      palette: registry override; defaults to the shipped palette
      debug  : print per-stage details

    A target size <= 0 yields an empty result rather than an error. Sizes
    above MAX_TARGET_SIZE raise InvalidSize.
    """
    n = int(config.target_size)
    if n <= 0:
        if debug:
            debug_log(f"target size {n} <= 0; empty result")
        return empty_result(config)
    if n > MAX_TARGET_SIZE:
        raise InvalidSize(f"target size {n} exceeds {MAX_TARGET_SIZE}")

    t0 = time.perf_counter()
    src = as_rgba_array(source)
    active = select_active(config.tier_filter, palette, debug=debug)

    raw = resample(src, n)
    t_resample = time.perf_counter()

    q = quantize(raw, active, alpha_threshold=config.alpha_threshold, debug=debug)
    t_quantize = time.perf_counter()

    distinct = len(q.used_colours)
    limit = resolve_colour_limit(config.colour_limit, distinct)
    final = reduce_palette(q.grid, q.used_colours, limit, debug=debug)
    t_reduce = time.perf_counter()

    if debug:
        debug_log(
            key_value_pairs_to_string(
                [
                    ("Source", f"{src.shape[1]}x{src.shape[0]}"),
                    ("Grid", f"{n}x{n}"),
                    ("Limit", limit),
                    ("Resample", format_seconds_compact(t_resample - t0)),
                    ("Quantize", format_seconds_compact(t_quantize - t_resample)),
                    ("Reduce", format_seconds_compact(t_reduce - t_quantize)),
                ]
            )
        )

    return build_result(
        final,
        q.grid,
        q.used_colours,
        q.transparent_count,
        config,
        colour_limit=limit,
    )


__all__ = ["convert_image"]
