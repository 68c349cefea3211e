"""Foreground mask extraction by automatic thresholding.

Pixels are reduced to Rec. 709 luminance and split with Otsu's method.
Darker pixels become foreground, so a dark motif on a light background is
what gets stitched.
"""

import numpy as np

from rasterstitch.domain import Mask, PixelBuffer
from rasterstitch.exceptions import MaskDimensionError

# Rec. 709 luma coefficients
LUMA_R = 0.2126
LUMA_G = 0.7152
LUMA_B = 0.0722

DEFAULT_THRESHOLD = 127


def luminance(pixels: PixelBuffer) -> np.ndarray:
    """Compute 8-bit luminance for every pixel.

    Values are rounded half-up and clamped to [0, 255]. Alpha is ignored.

    Args:
        pixels: Source RGBA buffer

    Returns:
        uint8 array of shape (height, width)
    """
    rgb = pixels.as_array()[:, :, :3].astype(np.float64)
    luma = rgb[:, :, 0] * LUMA_R + rgb[:, :, 1] * LUMA_G + rgb[:, :, 2] * LUMA_B
    return np.clip(np.floor(luma + 0.5), 0, 255).astype(np.uint8)


def otsu_threshold(gray: np.ndarray) -> int:
    """Select the threshold maximizing between-class variance.

    The first candidate with strictly greater variance wins, so ties keep
    the lowest threshold. A histogram with a single occupied bin never
    improves on the start value and yields DEFAULT_THRESHOLD.

    Args:
        gray: uint8 luminance values of any shape

    Returns:
        Threshold in [0, 255]
    """
    hist = np.bincount(np.asarray(gray, dtype=np.uint8).ravel(), minlength=256)
    total = int(hist.sum())
    weighted_sum = float(np.dot(np.arange(256), hist))

    sum_b = 0.0
    weight_b = 0
    best_variance = 0.0
    threshold = DEFAULT_THRESHOLD

    for t in range(256):
        count = int(hist[t])
        weight_b += count
        if weight_b == 0:
            continue
        weight_f = total - weight_b
        if weight_f == 0:
            break
        sum_b += t * count
        mean_b = sum_b / weight_b
        mean_f = (weighted_sum - sum_b) / weight_f
        between = weight_b * weight_f * (mean_b - mean_f) * (mean_b - mean_f)
        if between > best_variance:
            best_variance = between
            threshold = t

    return threshold


def compute_mask_with_threshold(pixels: PixelBuffer) -> tuple[Mask, int]:
    """Compute the automatic mask and report the threshold used.

    Args:
        pixels: Source RGBA buffer

    Returns:
        Tuple of (mask, threshold)
    """
    gray = luminance(pixels)
    threshold = otsu_threshold(gray)
    return Mask(width=pixels.width, height=pixels.height, data=gray < threshold), threshold


def compute_mask(pixels: PixelBuffer) -> Mask:
    """Derive the foreground mask of an image.

    Args:
        pixels: Source RGBA buffer

    Returns:
        Mask with the same dimensions; True where luminance < threshold
    """
    mask, _ = compute_mask_with_threshold(pixels)
    return mask


def resolve_mask(
    pixels: PixelBuffer,
    override: PixelBuffer | None = None,
) -> tuple[Mask, int | None]:
    """Pick the manual mask when one was painted, else threshold the image.

    A manual mask counts as present when any of its alpha bytes is non-zero.

    Args:
        pixels: Source RGBA buffer
        override: Optional painted mask buffer of the same size

    Returns:
        Tuple of (mask, threshold); threshold is None for a manual mask

    Raises:
        MaskDimensionError: If the override size differs from the image
    """
    if override is not None:
        if override.size != pixels.size:
            raise MaskDimensionError(expected=pixels.size, actual=override.size)
        if override.has_opacity():
            return Mask.from_alpha(override), None
    return compute_mask_with_threshold(pixels)
