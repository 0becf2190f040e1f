"""
End-to-end conversion: scenarios, conservation, reduction and degenerate sizes.
Run from project root: python -m pytest tests/ -v
"""
import sys
import unittest
from pathlib import Path

import numpy as np
from PIL import Image

ROOT = Path(__file__).resolve().parent.parent
if str(ROOT) not in sys.path:
    sys.path.insert(0, str(ROOT))

from palette_grid import GridConfig, InvalidSize, convert_image, select_active  # noqa: E402
from palette_grid.constants import MAX_TARGET_SIZE  # noqa: E402
from palette_grid.core_types import rgb_to_hex  # noqa: E402
from palette_grid.palette_lock import is_palette_only  # noqa: E402


def _brute_nearest_hex(rgb, colours):
    best, best_d = None, None
    for c in colours:
        d = sum((a - b) ** 2 for a, b in zip(rgb, c.rgb))
        if best_d is None or d < best_d:
            best, best_d = c, d
    return best.hex


def _random_source(seed, h, w):
    rng = np.random.default_rng(seed)
    img = rng.integers(0, 256, size=(h, w, 4), dtype=np.uint8)
    img[..., 3] = np.where(rng.random((h, w)) < 0.3, 0, 255).astype(np.uint8)
    return img


SCENARIO_A = np.array(
    [[(255, 0, 0, 255), (0, 255, 0, 255)], [(0, 0, 255, 255), (255, 255, 0, 255)]],
    dtype=np.uint8,
)


class TestScenarios(unittest.TestCase):
    def test_scenario_a_primaries(self):
        result = convert_image(SCENARIO_A, GridConfig(target_size=2, tier_filter="all"))
        hexes = [[rgb_to_hex(result.grid[y, x, :3]) for x in range(2)] for y in range(2)]
        # nearest by squared RGB distance over the full palette
        self.assertEqual(hexes, [["#ed1c24", "#0eb968"], ["#4d31b8", "#f9dd3b"]])
        active = select_active("all").colours
        for y in range(2):
            for x in range(2):
                self.assertEqual(hexes[y][x], _brute_nearest_hex(SCENARIO_A[y, x, :3].tolist(), active))
        self.assertEqual(result.transparent_pixels, 0)
        self.assertEqual(result.paintable_pixels, 4)
        self.assertEqual(len(result.used_colours), 4)
        self.assertTrue(all(u.count == 1 for u in result.used_colours))
        self.assertEqual([u.hex for u in result.used_colours], ["#ed1c24", "#0eb968", "#4d31b8", "#f9dd3b"])

    def test_scenario_a_free_only(self):
        result = convert_image(SCENARIO_A, GridConfig(target_size=2, tier_filter="free"))
        for u in result.used_colours:
            self.assertEqual(u.tier, "free")

    def test_scenario_b_fully_transparent(self):
        src = np.zeros((7, 3, 4), dtype=np.uint8)
        for n in (1, 5, 16):
            result = convert_image(src, GridConfig(target_size=n))
            self.assertEqual(result.grid.shape, (n, n, 4))
            self.assertTrue(np.all(result.grid[..., 3] == 0))
            self.assertEqual(result.transparent_pixels, n * n)
            self.assertEqual(result.used_colours, ())
            self.assertEqual(result.paintable_pixels, 0)


class TestInvariants(unittest.TestCase):
    def test_conservation(self):
        for seed, n in ((0, 16), (1, 9), (2, 31)):
            src = _random_source(seed, 10, 7)
            result = convert_image(src, GridConfig(target_size=n, tier_filter="all"))
            total = result.transparent_pixels + sum(u.count for u in result.used_colours)
            self.assertEqual(total, n * n)
            self.assertEqual(result.paintable_pixels, n * n - result.transparent_pixels)

    def test_palette_membership(self):
        src = _random_source(4, 20, 20)
        for tier_filter in ("free", "all"):
            result = convert_image(src, GridConfig(target_size=20, tier_filter=tier_filter))
            self.assertTrue(is_palette_only(result.grid, select_active(tier_filter).colours))

    def test_free_result_has_no_premium(self):
        src = _random_source(5, 12, 12)
        result = convert_image(src, GridConfig(target_size=12, tier_filter="free"))
        self.assertTrue(all(u.tier == "free" for u in result.used_colours))

    def test_deterministic(self):
        src = _random_source(6, 11, 13)
        cfg = GridConfig(target_size=15, colour_limit=3)
        a = convert_image(src, cfg)
        b = convert_image(src, cfg)
        np.testing.assert_array_equal(a.grid, b.grid)
        self.assertEqual(a.used_colours, b.used_colours)


class TestReduction(unittest.TestCase):
    def setUp(self):
        self.src = _random_source(8, 24, 24)

    def test_no_op_when_limit_covers_distinct(self):
        base = convert_image(self.src, GridConfig(target_size=24))
        for limit in (None, 0, -1, base.distinct_colours, base.distinct_colours + 5):
            result = convert_image(self.src, GridConfig(target_size=24, colour_limit=limit))
            np.testing.assert_array_equal(result.grid, result.quantized)
            self.assertFalse(result.reduced)
            self.assertEqual(result.colour_limit, base.distinct_colours)

    def test_shrinkage(self):
        base = convert_image(self.src, GridConfig(target_size=24))
        self.assertGreater(base.distinct_colours, 3)
        result = convert_image(self.src, GridConfig(target_size=24, colour_limit=3))
        opaque = result.grid[result.grid[..., 3] > 0][:, :3]
        self.assertLessEqual(len({tuple(p) for p in opaque.tolist()}), 3)
        self.assertTrue(result.reduced)
        self.assertEqual(result.colour_limit, 3)

    def test_counts_stay_pre_reduction(self):
        base = convert_image(self.src, GridConfig(target_size=24))
        result = convert_image(self.src, GridConfig(target_size=24, colour_limit=2))
        self.assertEqual(result.used_colours, base.used_colours)
        np.testing.assert_array_equal(result.quantized, base.grid)

    def test_reduction_keeps_transparency(self):
        result = convert_image(self.src, GridConfig(target_size=24, colour_limit=2))
        np.testing.assert_array_equal(result.grid[..., 3], result.quantized[..., 3])


class TestDegenerateAndBounds(unittest.TestCase):
    def test_non_positive_size_is_empty_result(self):
        for n in (0, -1, -50):
            result = convert_image(SCENARIO_A, GridConfig(target_size=n))
            self.assertEqual(result.grid.size, 0)
            self.assertEqual(result.transparent_pixels, 0)
            self.assertEqual(result.paintable_pixels, 0)
            self.assertEqual(result.used_colours, ())

    def test_oversize_raises(self):
        with self.assertRaises(InvalidSize):
            convert_image(SCENARIO_A, GridConfig(target_size=MAX_TARGET_SIZE + 1))


class TestInputsAndSnapshot(unittest.TestCase):
    def test_rgb_array_is_opaque(self):
        src = np.full((4, 4, 3), 120, dtype=np.uint8)
        result = convert_image(src, GridConfig(target_size=4, tier_filter="free"))
        self.assertEqual(result.transparent_pixels, 0)
        self.assertEqual(result.used_colours[0].hex, "#787878")

    def test_pil_image_input(self):
        img = Image.new("RGBA", (6, 3), (237, 28, 36, 255))
        result = convert_image(img, GridConfig(target_size=6))
        self.assertEqual(result.used_colours[0].count, 18)
        self.assertEqual(result.transparent_pixels, 18)

    def test_bad_source_raises(self):
        with self.assertRaises(TypeError):
            convert_image(np.zeros((4, 4), dtype=np.uint8), GridConfig(target_size=4))

    def test_result_arrays_are_read_only(self):
        result = convert_image(SCENARIO_A, GridConfig(target_size=2))
        with self.assertRaises(ValueError):
            result.grid[0, 0, 0] = 1
        with self.assertRaises(ValueError):
            result.quantized[0, 0, 0] = 1

    def test_source_not_modified(self):
        src = _random_source(9, 5, 5)
        before = src.copy()
        convert_image(src, GridConfig(target_size=5, colour_limit=2))
        np.testing.assert_array_equal(src, before)


if __name__ == "__main__":
    unittest.main()
