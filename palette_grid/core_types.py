# palette_grid/core_types.py
from __future__ import annotations

"""
Core type aliases, small value objects, errors and hex helpers.
"""

import re
from dataclasses import dataclass
from typing import Literal, Sequence, Tuple, Union

import numpy as np
from numpy.typing import NDArray

# Basic aliases

RGBTuple = Tuple[int, int, int]
HexStr = str

U8Grid = NDArray[np.uint8]  # (H, W, 4) RGBA
U8Rgb = NDArray[np.uint8]  # (N, 3) rows of RGB

Tier = Literal["free", "premium"]
TierFilter = Literal["free", "all"]

_HEX_RE = re.compile(r"#?[0-9a-fA-F]{6}")


# Errors


class InvalidFormat(ValueError):
    """Malformed colour string or palette entry."""


class InvalidSize(ValueError):
    """Target grid size outside the supported range."""


# Value objects


@dataclass(frozen=True)
class PaletteColor:
    """Named palette entry tagged with its tier."""

    name: str
    hex: HexStr  # "#rrggbb", lowercase
    tier: Tier

    @property
    def rgb(self) -> RGBTuple:
        return hex_to_rgb(self.hex)


@dataclass(frozen=True)
class UsedColor:
    """Aggregated usage of one output colour."""

    hex: HexStr
    name: str
    tier: Tier
    count: int
    rgb: RGBTuple


# Hex helpers


def hex_to_rgb(hex_str: str) -> RGBTuple:
    """Parse 'rrggbb' or '#rrggbb' (case-insensitive) into an RGB tuple."""
    if not isinstance(hex_str, str):
        raise InvalidFormat(f"hex must be a string, got {type(hex_str).__name__}")
    s = hex_str.strip()
    if not _HEX_RE.fullmatch(s):
        raise InvalidFormat(f"hex must be '#rrggbb' or 'rrggbb': {hex_str!r}")
    s = s.lstrip("#")
    return (int(s[0:2], 16), int(s[2:4], 16), int(s[4:6], 16))


def rgb_to_hex(rgb: Union[Sequence[int], NDArray[np.generic]]) -> HexStr:
    """RGB triple to lowercase hex string '#rrggbb'."""
    r, g, b = coerce_to_rgb_tuple(rgb)
    for v in (r, g, b):
        if not 0 <= v <= 255:
            raise InvalidFormat(f"channel out of range 0..255: {v}")
    return f"#{r:02x}{g:02x}{b:02x}"


def normalise_hex(hex_str: str) -> HexStr:
    """Canonical '#rrggbb' form of any accepted hex spelling."""
    return rgb_to_hex(hex_to_rgb(hex_str))


def coerce_to_rgb_tuple(value: Union[Sequence[int], NDArray[np.generic]]) -> RGBTuple:
    """
    Coerce a 3-length sequence or array to an (int, int, int) RGB tuple.
    Helpful when extracting values from NumPy rows.
    """
    if isinstance(value, np.ndarray):
        if value.size < 3:
            raise ValueError("array too small for RGB")
        flat = value.reshape(-1)
        return (int(flat[0]), int(flat[1]), int(flat[2]))
    if len(value) < 3:
        raise ValueError("sequence too small for RGB")
    return (int(value[0]), int(value[1]), int(value[2]))


def assert_u8_grid_rgba(grid: np.ndarray) -> U8Grid:
    """Validate a uint8 (H,W,4) grid and return it typed as U8Grid."""
    if grid.dtype != np.uint8 or grid.ndim != 3 or grid.shape[-1] != 4:
        raise TypeError("expected uint8 (H,W,4) grid")
    return grid  # type: ignore[return-value]


__all__ = [
    # aliases / types
    "RGBTuple",
    "HexStr",
    "U8Grid",
    "U8Rgb",
    "Tier",
    "TierFilter",
    # errors
    "InvalidFormat",
    "InvalidSize",
    # value objects
    "PaletteColor",
    "UsedColor",
    # helpers
    "hex_to_rgb",
    "rgb_to_hex",
    "normalise_hex",
    "coerce_to_rgb_tuple",
    "assert_u8_grid_rgba",
]
