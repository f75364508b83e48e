"""UI-side policies for the crop handles and the export size inputs."""

import math

from geometry import Point


def clamp_point(point, width, height):
    """ Keep a dragged handle inside [0, width] x [0, height]. """
    x = min(max(float(point[0]), 0.0), float(width))
    y = min(max(float(point[1]), 0.0), float(height))
    return Point(x, y)


def locked_dimensions(value, edited, aspect_ratio):
    """ Width and height after editing one of them with the aspect ratio locked.

    `edited` is "w" or "h"; aspect_ratio is width / height.
    """
    value = int(value)
    if value < 1:
        raise ValueError(f"Dimension must be at least 1, got {value}")
    if aspect_ratio <= 0:
        raise ValueError(f"Invalid aspect ratio {aspect_ratio}")

    if edited == "w":
        return value, max(1, int(math.floor(value / aspect_ratio + 0.5)))
    if edited == "h":
        return max(1, int(math.floor(value * aspect_ratio + 0.5))), value
    raise ValueError(f"Unknown dimension {edited!r}")
