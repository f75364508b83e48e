import logging

import numpy as np

from geometry import Point, to_quad
from solver import solve_linear_system

logger = logging.getLogger(__name__)


def rectangle_corners(width, height):
    """ Corners of the upright output rectangle, ordered TL, TR, BR, BL. """
    return (
        Point(0.0, 0.0),
        Point(float(width), 0.0),
        Point(float(width), float(height)),
        Point(0.0, float(height)),
    )


# Two rows per correspondence; the source point is the right-hand side so the
# solution maps destination -> source
def build_system(src, dst):
    A = []
    B = []
    for (sx, sy), (dx, dy) in zip(to_quad(src), to_quad(dst)):
        A.append([dx, dy, 1.0, 0.0, 0.0, 0.0, -dx * sx, -dy * sx])
        A.append([0.0, 0.0, 0.0, dx, dy, 1.0, -dx * sy, -dy * sy])
        B.append(sx)
        B.append(sy)
    return np.array(A, dtype=np.float64), np.array(B, dtype=np.float64)


def estimate_homography(src, dst, pivot_tolerance=1e-12):
    """ Coefficients h0..h7 (h8 = 1) of the map from dst coordinates to src coordinates. """
    A, B = build_system(src, dst)
    h = solve_linear_system(A, B, pivot_tolerance=pivot_tolerance)
    logger.debug("Homography coefficients: %s", h)
    return h


def to_matrix(h):
    return np.append(np.asarray(h, dtype=np.float64), 1.0).reshape(3, 3)


def map_point(h, point):
    x, y = float(point[0]), float(point[1])
    with np.errstate(divide="ignore", invalid="ignore"):
        denom = np.float64(h[6] * x + h[7] * y + 1.0)
        u = (h[0] * x + h[1] * y + h[2]) / denom
        v = (h[3] * x + h[4] * y + h[5]) / denom
    return Point(float(u), float(v))
