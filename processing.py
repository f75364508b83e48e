import logging
import math

import cv2
import numpy as np

from geometry import DegenerateGeometryError, check_quadrilateral, distance, to_quad
from homography import estimate_homography, rectangle_corners

logger = logging.getLogger(__name__)

WHITE = (255, 255, 255, 255)


def _round_half_up(value):
    return int(math.floor(value + 0.5))


# Output size: the longer of each pair of opposing edges
def output_size(corners):
    tl, tr, br, bl = to_quad(corners)
    width_top = distance(tl, tr)
    width_bottom = distance(bl, br)
    height_left = distance(tl, bl)
    height_right = distance(tr, br)
    max_width = _round_half_up(max(width_top, width_bottom))
    max_height = _round_half_up(max(height_left, height_right))
    return max_width, max_height


def _blank_like(source, width, height, fill):
    shape = (height, width) + source.shape[2:]
    out = np.empty(shape, dtype=source.dtype)
    if source.ndim == 2:
        out[...] = fill[0]
    else:
        out[...] = np.asarray(fill[:source.shape[2]], dtype=source.dtype)
    return out


def rectify(source, corners, strict=True, fill=WHITE):
    """ Flatten the quadrilateral `corners` (TL, TR, BR, BL) of `source` into an upright raster.

    Every destination pixel is mapped back into the source with the inverse
    homography and takes the nearest source pixel; pixels that land outside
    the source keep `fill`.

    strict=True rejects collinear corners and singular systems with
    DegenerateGeometryError. strict=False keeps the lenient behaviour where a
    singular system degrades into an all-fill raster. A zero-sized output is
    rejected in both modes.
    """
    source = np.asarray(source)
    if source.ndim not in (2, 3):
        raise ValueError(f"Expected an (H, W[, C]) raster, got shape {source.shape}")
    quad = to_quad(corners)

    max_width, max_height = output_size(quad)
    logger.debug("Rectifying %s into %dx%d", quad, max_width, max_height)
    if max_width <= 0 or max_height <= 0:
        logger.warning("Selection %s collapses to %dx%d", quad, max_width, max_height)
        raise DegenerateGeometryError(f"Selection has no area ({max_width}x{max_height})")

    if strict:
        check_quadrilateral(quad)
    h = estimate_homography(quad, rectangle_corners(max_width, max_height),
                            pivot_tolerance=1e-12 if strict else None)
    if strict and not np.all(np.isfinite(h)):
        raise DegenerateGeometryError("Homography has non-finite coefficients")

    warped = _blank_like(source, max_width, max_height, fill)
    src_h, src_w = source.shape[:2]

    # Inverse mapping over the whole destination grid at once
    ys, xs = np.mgrid[0:max_height, 0:max_width].astype(np.float64)
    with np.errstate(divide="ignore", invalid="ignore", over="ignore"):
        denom = h[6] * xs + h[7] * ys + 1.0
        u = np.floor((h[0] * xs + h[1] * ys + h[2]) / denom + 0.5)
        v = np.floor((h[3] * xs + h[4] * ys + h[5]) / denom + 0.5)
        inside = (u >= 0) & (u < src_w) & (v >= 0) & (v < src_h)

    src_x = u[inside].astype(np.intp)
    src_y = v[inside].astype(np.intp)
    warped[inside] = source[src_y, src_x]

    if not inside.all():
        logger.debug("%d of %d pixels fell outside the source", inside.size - int(inside.sum()), inside.size)
    return warped


# Uniform bilinear resample to an exact size, no aspect ratio enforcement
def resize(source, width, height):
    width, height = int(width), int(height)
    if width <= 0 or height <= 0:
        raise ValueError(f"Invalid target size {width}x{height}")
    source = np.asarray(source)
    if source.shape[1] == width and source.shape[0] == height:
        return source.copy()
    return cv2.resize(source, (width, height), interpolation=cv2.INTER_LINEAR)
