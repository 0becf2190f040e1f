# palette_grid/__init__.py
"""
palette_grid package.

Purpose:
  Turn any image into an N x N pixel-art grid painted only with wplace
  palette colours. See wplace_grid.py for the CLI.

Public API:
  convert_image : full pipeline (resample -> quantize -> reduce -> aggregate).
  GridConfig    : target size, tier filter, colour limit, alpha threshold.
  GridResult    : immutable result snapshot.
  get_palette   : the tiered colour registry.
  select_active : tier-filtered palette view.
  hex_to_rgb / rgb_to_hex : hex helpers.

Quick start:
  from palette_grid import GridConfig, convert_image
  result = convert_image(img, GridConfig(target_size=64, tier_filter="free"))
"""

__version__ = "0.1.0"

from . import constants
from . import core_types
from . import palette_data
from . import colour_select
from . import utils

from .colour_select import ActivePalette, select_active  # noqa: E402
from .config import GridConfig, resolve_colour_limit  # noqa: E402
from .core_types import (  # noqa: E402
    InvalidFormat,
    InvalidSize,
    PaletteColor,
    UsedColor,
    hex_to_rgb,
    rgb_to_hex,
)
from .palette_data import get_palette  # noqa: E402
from .pipeline import convert_image  # noqa: E402
from .quantize import quantize  # noqa: E402
from .reduce import reduce_palette  # noqa: E402
from .resample import resample  # noqa: E402
from .result import GridResult, recount_used_colours  # noqa: E402

__all__ = [
    "__version__",
    "constants",
    "core_types",
    "palette_data",
    "colour_select",
    "utils",
    "ActivePalette",
    "select_active",
    "GridConfig",
    "resolve_colour_limit",
    "InvalidFormat",
    "InvalidSize",
    "PaletteColor",
    "UsedColor",
    "hex_to_rgb",
    "rgb_to_hex",
    "get_palette",
    "convert_image",
    "quantize",
    "reduce_palette",
    "resample",
    "GridResult",
    "recount_used_colours",
]
