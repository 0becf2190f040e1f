"""
Fit-inside nearest-neighbour resampling.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

import numpy as np

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from palette_grid.core_types import InvalidSize  # noqa: E402
from palette_grid.resample import fit_inside, resample  # noqa: E402


def _labelled(h, w):
    """Opaque RGBA image whose red channel encodes the row and green the column."""
    img = np.zeros((h, w, 4), dtype=np.uint8)
    img[..., 0] = np.arange(h, dtype=np.uint8)[:, None]
    img[..., 1] = np.arange(w, dtype=np.uint8)[None, :]
    img[..., 3] = 255
    return img


class TestFitInside(unittest.TestCase):
    def test_wide_source(self):
        geo = fit_inside(200, 100, 64)
        self.assertAlmostEqual(geo.scale, 0.32)
        self.assertAlmostEqual(geo.draw_width, 64.0)
        self.assertAlmostEqual(geo.draw_height, 32.0)
        self.assertAlmostEqual(geo.offset_x, 0.0)
        self.assertAlmostEqual(geo.offset_y, 16.0)

    def test_tall_source(self):
        geo = fit_inside(10, 40, 20)
        self.assertAlmostEqual(geo.scale, 0.5)
        self.assertAlmostEqual(geo.offset_x, 7.5)
        self.assertAlmostEqual(geo.offset_y, 0.0)

    def test_non_positive_size_raises(self):
        with self.assertRaises(InvalidSize):
            fit_inside(10, 10, 0)
        with self.assertRaises(InvalidSize):
            fit_inside(10, 10, -3)


class TestResample(unittest.TestCase):
    def test_identity_when_sizes_match(self):
        src = _labelled(2, 2)
        np.testing.assert_array_equal(resample(src, 2), src)

    def test_upscale_repeats_pixels(self):
        out = resample(_labelled(2, 2), 4)
        self.assertEqual(out.shape, (4, 4, 4))
        np.testing.assert_array_equal(out[..., 0], [[0, 0, 0, 0], [0, 0, 0, 0], [1, 1, 1, 1], [1, 1, 1, 1]])
        np.testing.assert_array_equal(out[..., 1], [[0, 0, 1, 1]] * 4)
        self.assertTrue(np.all(out[..., 3] == 255))

    def test_downscale_samples_cell_centres(self):
        out = resample(_labelled(8, 8), 4)
        np.testing.assert_array_equal(out[0, :, 1], [1, 3, 5, 7])
        np.testing.assert_array_equal(out[:, 0, 0], [1, 3, 5, 7])

    def test_letterbox_is_transparent_and_centred(self):
        out = resample(_labelled(2, 4), 4)
        np.testing.assert_array_equal(out[[0, 3], :, 3], 0)
        np.testing.assert_array_equal(out[1:3, :, 3], 255)
        np.testing.assert_array_equal(out[1:3, :, 0], [[0, 0, 0, 0], [1, 1, 1, 1]])
        np.testing.assert_array_equal(out[1, :, 1], [0, 1, 2, 3])

    def test_pillarbox_for_tall_source(self):
        out = resample(_labelled(4, 2), 4)
        np.testing.assert_array_equal(out[:, [0, 3], 3], 0)
        np.testing.assert_array_equal(out[:, 1:3, 3], 255)

    def test_output_only_holds_source_colours(self):
        rng = np.random.default_rng(7)
        src = rng.integers(0, 256, size=(13, 29, 4), dtype=np.uint8)
        out = resample(src, 17)
        src_rows = {tuple(p) for p in src.reshape(-1, 4).tolist()}
        for p in out[out[..., 3] > 0].tolist():
            self.assertIn(tuple(p), src_rows)

    def test_source_not_modified(self):
        src = _labelled(5, 3)
        before = src.copy()
        resample(src, 9)
        np.testing.assert_array_equal(src, before)

    def test_empty_source_gives_transparent_grid(self):
        out = resample(np.zeros((0, 5, 4), dtype=np.uint8), 3)
        self.assertEqual(out.shape, (3, 3, 4))
        self.assertFalse(np.any(out))

    def test_sub_cell_thin_source_misses_every_centre(self):
        # 1000x10 at N=32 is drawn 0.32 cells tall over [15.84, 16.16)
        src = np.full((10, 1000, 4), 255, dtype=np.uint8)
        out = resample(src, 32)
        self.assertEqual(out.shape, (32, 32, 4))
        self.assertFalse(np.any(out[..., 3]))

    def test_thin_source_covering_centres_keeps_those_rows(self):
        # 1000x40 at N=32 is drawn 1.28 cells tall over [15.36, 16.64)
        src = np.full((40, 1000, 4), 255, dtype=np.uint8)
        out = resample(src, 32)
        opaque_rows = np.nonzero(out[..., 3].any(axis=1))[0].tolist()
        self.assertEqual(opaque_rows, [15, 16])
        self.assertTrue(np.all(out[15:17, :, 3] == 255))

    def test_non_positive_size_raises(self):
        with self.assertRaises(InvalidSize):
            resample(_labelled(2, 2), 0)

    def test_rejects_non_rgba(self):
        with self.assertRaises(TypeError):
            resample(np.zeros((2, 2, 3), dtype=np.uint8), 2)


if __name__ == "__main__":
    unittest.main()
