"""Tests for luminance and Otsu mask extraction."""

import numpy as np
import pytest

from rasterstitch.core.threshold import (
    DEFAULT_THRESHOLD,
    compute_mask,
    compute_mask_with_threshold,
    luminance,
    otsu_threshold,
    resolve_mask,
)
from rasterstitch.domain import Mask, PixelBuffer
from rasterstitch.exceptions import MaskDimensionError


def rgba(array: np.ndarray) -> PixelBuffer:
    """Build an opaque buffer from an (H, W, 3) RGB array."""
    alpha = np.full(array.shape[:2] + (1,), 255, dtype=np.uint8)
    return PixelBuffer.from_array(np.concatenate([array.astype(np.uint8), alpha], axis=2))


def gray_image(values: list[list[int]]) -> PixelBuffer:
    """Build a gray image from rows of levels."""
    levels = np.array(values, dtype=np.uint8)
    return rgba(np.repeat(levels[:, :, None], 3, axis=2))


class TestLuminance:
    """Tests for Rec. 709 luminance."""

    def test_primaries(self) -> None:
        """Test pure primaries map to their rounded coefficients."""
        image = rgba(np.array([[[255, 0, 0], [0, 255, 0], [0, 0, 255]]]))
        assert luminance(image).tolist() == [[54, 182, 18]]

    def test_gray_is_identity(self) -> None:
        """Test that gray pixels keep their level."""
        image = gray_image([[0, 1, 127, 128, 254, 255]])
        assert luminance(image).tolist() == [[0, 1, 127, 128, 254, 255]]

    def test_rounds_to_nearest(self) -> None:
        """Test luminance is rounded, not truncated."""
        # 0.0722 * 7 = 0.5054 -> 1 while 0.0722 * 6 = 0.4332 -> 0
        image = rgba(np.array([[[0, 0, 7], [0, 0, 6]]]))
        assert luminance(image).tolist() == [[1, 0]]

    def test_alpha_ignored(self) -> None:
        """Test that transparent pixels still have luminance."""
        array = np.zeros((1, 1, 4), dtype=np.uint8)
        array[0, 0] = (255, 255, 255, 0)
        assert luminance(PixelBuffer.from_array(array)).tolist() == [[255]]


class TestOtsuThreshold:
    """Tests for Otsu threshold selection."""

    def test_uniform_image_defaults(self) -> None:
        """Test that a single-level histogram yields the default."""
        assert otsu_threshold(np.full((4, 4), 200, dtype=np.uint8)) == DEFAULT_THRESHOLD
        assert otsu_threshold(np.zeros((4, 4), dtype=np.uint8)) == DEFAULT_THRESHOLD

    def test_two_levels(self) -> None:
        """Test a bimodal image splits just above the dark level."""
        gray = np.array([[10, 10, 200, 200]], dtype=np.uint8)
        # Every t in [10, 199] separates the classes equally; the first wins
        assert otsu_threshold(gray) == 10

    def test_three_levels(self) -> None:
        """Test threshold between clusters of unequal size."""
        gray = np.array([[0] * 6 + [100] * 2 + [255] * 8], dtype=np.uint8)
        assert otsu_threshold(gray) == 100

    def test_matches_brute_force(self) -> None:
        """Test against a direct between-class variance search."""
        rng = np.random.default_rng(7)
        gray = rng.integers(0, 256, size=(20, 20), dtype=np.uint8)

        flat = gray.ravel().astype(np.float64)
        best_t, best_var = DEFAULT_THRESHOLD, 0.0
        for t in range(256):
            below = flat[flat <= t]
            above = flat[flat > t]
            if below.size == 0:
                continue
            if above.size == 0:
                break
            var = below.size * above.size * (below.mean() - above.mean()) ** 2
            if var > best_var:
                best_var, best_t = var, t
        assert otsu_threshold(gray) == best_t


class TestComputeMask:
    """Tests for automatic mask derivation."""

    def test_dark_on_light(self) -> None:
        """Test dark pixels become foreground."""
        image = gray_image([[255, 255, 255], [255, 0, 255], [255, 255, 255]])
        mask, threshold = compute_mask_with_threshold(image)
        assert threshold == 0
        # The dark level sits at the threshold and foreground is strictly below it
        assert mask.count() == 0

    def test_dark_region_selected(self) -> None:
        """Test a dark square on white is selected exactly."""
        levels = np.full((8, 8), 240, dtype=np.uint8)
        levels[1:5, 1:6] = 20
        # Anti-aliased edge pixels
        levels[6, 0:4] = 128
        mask, threshold = compute_mask_with_threshold(gray_image(levels.tolist()))
        assert threshold == 128
        assert np.array_equal(mask.data, levels == 20)

    def test_dimensions_match(self) -> None:
        """Test mask dimensions equal the image dimensions."""
        image = gray_image([[0, 255, 0, 255, 0]] * 3)
        mask = compute_mask(image)
        assert mask.size == image.size

    def test_deterministic(self) -> None:
        """Test thresholding twice yields the same mask."""
        rng = np.random.default_rng(3)
        image = rgba(rng.integers(0, 256, size=(16, 12, 3)))
        assert compute_mask(image) == compute_mask(image)

    def test_uniform_image(self) -> None:
        """Test a uniform image uses the default threshold."""
        dark = gray_image([[50] * 4] * 4)
        light = gray_image([[200] * 4] * 4)
        assert compute_mask(dark).count() == 16
        assert compute_mask(light).count() == 0


class TestResolveMask:
    """Tests for manual mask override."""

    def test_no_override(self) -> None:
        """Test automatic mask when no override is given."""
        image = gray_image([[0, 0, 255, 255]])
        mask, threshold = resolve_mask(image)
        assert threshold is not None
        assert mask == compute_mask(image)

    def test_transparent_override_ignored(self) -> None:
        """Test a fully transparent override falls back to thresholding."""
        image = gray_image([[0, 0, 255, 255]])
        override = PixelBuffer(width=4, height=1, data=bytes(16))
        mask, threshold = resolve_mask(image, override)
        assert threshold is not None
        assert mask == compute_mask(image)

    def test_painted_override_used(self) -> None:
        """Test a painted override replaces the automatic mask."""
        image = gray_image([[0, 0, 255, 255]])
        painted = np.zeros((1, 4, 4), dtype=np.uint8)
        painted[0, 3, 3] = 255
        mask, threshold = resolve_mask(image, PixelBuffer.from_array(painted))
        assert threshold is None
        assert mask == Mask(width=4, height=1, data=np.array([[False, False, False, True]]))

    def test_override_size_mismatch(self) -> None:
        """Test an override of a different size is rejected."""
        image = gray_image([[0, 0, 255, 255]])
        override = PixelBuffer(width=2, height=1, data=bytes(8))
        with pytest.raises(MaskDimensionError):
            resolve_mask(image, override)
