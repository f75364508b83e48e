import logging
import math
from typing import NamedTuple

import numpy as np

logger = logging.getLogger(__name__)


class DegenerateGeometryError(ValueError):
    pass


class Point(NamedTuple):
    x: float
    y: float


def to_point(p):
    return Point(float(p[0]), float(p[1]))


def to_quad(points):
    """ Convert four point-likes into a (TL, TR, BR, BL) tuple of Points. """
    quad = tuple(to_point(p) for p in points)
    if len(quad) != 4:
        raise DegenerateGeometryError(f"Expected 4 corner points, got {len(quad)}")
    return quad


# Euclidean distance between two points
def distance(p1, p2):
    return math.hypot(p2[0] - p1[0], p2[1] - p1[1])


# Initial crop handles, inset from every side of the image
def default_corners(width, height, inset=0.2):
    pad_x = width * inset
    pad_y = height * inset
    return (
        Point(pad_x, pad_y),                    # TL
        Point(width - pad_x, pad_y),            # TR
        Point(width - pad_x, height - pad_y),   # BR
        Point(pad_x, height - pad_y),           # BL
    )


# Orders the four corner points in a consistent order: top-left, top-right, bottom-right, bottom-left
def order_points(points):
    pts = np.array([to_point(p) for p in points], dtype=np.float64)
    if pts.shape != (4, 2):
        raise DegenerateGeometryError(f"Expected 4 corner points, got {len(pts)}")
    s = pts.sum(axis=1)
    diff = np.diff(pts, axis=1).ravel()
    rect = (
        pts[np.argmin(s)],     # Top-left
        pts[np.argmin(diff)],  # Top-right
        pts[np.argmax(s)],     # Bottom-right
        pts[np.argmax(diff)],  # Bottom-left
    )
    return tuple(Point(float(x), float(y)) for x, y in rect)


def check_quadrilateral(quad, tolerance=1e-6):
    """ Reject quadrilaterals with a collapsed edge or three collinear corners.

    Collinearity is measured as |sin| of the angle at the shared corner, so
    the tolerance does not depend on the image scale.
    """
    quad = to_quad(quad)

    for i in range(4):
        a, b = quad[i], quad[(i + 1) % 4]
        if distance(a, b) <= tolerance:
            logger.warning("Zero-length edge between corners %d and %d", i, (i + 1) % 4)
            raise DegenerateGeometryError(f"Corners {i} and {(i + 1) % 4} coincide")

    # Each triple is the quad with one corner left out
    for skip in range(4):
        apex, p, q = [quad[i] for i in range(4) if i != skip]
        ux, uy = p.x - apex.x, p.y - apex.y
        vx, vy = q.x - apex.x, q.y - apex.y
        norm = math.hypot(ux, uy) * math.hypot(vx, vy)
        if norm <= tolerance:
            raise DegenerateGeometryError("Corner points coincide")
        if abs(ux * vy - uy * vx) / norm <= tolerance:
            logger.warning("Collinear corners in selection %s", quad)
            raise DegenerateGeometryError("Three of the corner points are collinear")

    return quad
