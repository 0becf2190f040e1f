# palette_grid/image_io.py
from __future__ import annotations

import io
from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image, ImageOps, UnidentifiedImageError

from .core_types import U8Grid, assert_u8_grid_rgba

"""
Image I/O helpers (RGBA in sRGB) and source normalisation.
"""

try:
    from PIL import ImageCms  # ICC conversion if profile present
except ImportError:  # pragma: no cover
    ImageCms = None  # type: ignore[assignment]

SourceImage = Union[Image.Image, np.ndarray]


def _convert_to_srgb_rgba(im: Image.Image) -> Image.Image:
    im = ImageOps.exif_transpose(im)
    icc_bytes = im.info.get("icc_profile")

    if icc_bytes and ImageCms is not None:
        try:
            src_prof = ImageCms.ImageCmsProfile(io.BytesIO(icc_bytes))
            dst_prof = ImageCms.createProfile("sRGB")
            im2 = ImageCms.profileToProfile(
                im,
                src_prof,
                dst_prof,
                renderingIntent=ImageCms.Intent.PERCEPTUAL,
                outputMode="RGBA",
            )
            if im2 is None:
                return im.convert("RGBA")
            return im2
        except (ImageCms.PyCMSError, OSError, ValueError):
            return im.convert("RGBA")

    return im.convert("RGBA")


def as_rgba_array(source: SourceImage) -> U8Grid:
    """
    Normalise a decoded source to a uint8 (H,W,4) array.

    Accepts a PIL image (any mode) or a uint8 (H,W,3|4) array. RGB input is
    treated as fully opaque.
    """
    if isinstance(source, Image.Image):
        return np.array(source.convert("RGBA"), dtype=np.uint8)

    arr = np.asarray(source)
    if arr.dtype != np.uint8 or arr.ndim != 3 or arr.shape[-1] not in (3, 4):
        raise TypeError("expected PIL image or uint8 (H,W,3/4) array")
    if arr.shape[-1] == 3:
        out = np.empty(arr.shape[:2] + (4,), dtype=np.uint8)
        out[..., :3] = arr
        out[..., 3] = 255
        return out
    return arr


def load_image_rgba(path: Path) -> U8Grid:
    """Load an image with Pillow, honour EXIF orientation and ICC, return RGBA."""
    with Image.open(path) as im0:
        im = _convert_to_srgb_rgba(im0)
    return np.array(im, dtype=np.uint8)


def save_png_rgba(path: Path, grid: U8Grid) -> Path:
    """Save an RGBA grid as PNG. Forces the .png suffix."""
    if path.suffix.lower() != ".png":
        path = path.with_suffix(".png")
    out = assert_u8_grid_rgba(np.ascontiguousarray(grid))
    Image.fromarray(out).save(path)
    return path


def is_image_file(path: Path) -> bool:
    try:
        with Image.open(path) as im:
            im.seek(0)
            im.load()
        return True
    except (UnidentifiedImageError, OSError):
        return False


__all__ = [
    "SourceImage",
    "as_rgba_array",
    "load_image_rgba",
    "save_png_rgba",
    "is_image_file",
]
