"""
Point type and small planar geometry helpers.
"""

from typing import NamedTuple

import numpy as np


# sin(angle) below which three points count as collinear
COLLINEAR_TOLERANCE = 1e-9


class Point2D(NamedTuple):
    """Immutable 2D point in pixel or world coordinates"""
    x: float
    y: float

    @classmethod
    def of(cls, point):
        """Build a Point2D from any (x, y) pair"""
        if isinstance(point, cls):
            return point
        x, y = point
        return cls(float(x), float(y))


def pixel_distance(a, b):
    """Euclidean distance between two points"""
    return float(np.sqrt((b[0] - a[0])**2 + (b[1] - a[1])**2))


def rectangle_world_points(width, height):
    """
    World corners of a width x height rectangle.

    Returns:
        list of 4 Point2D ordered as top-left, top-right, bottom-right,
        bottom-left, matching the calibration tap order.
    """
    return [
        Point2D(0.0, 0.0),
        Point2D(float(width), 0.0),
        Point2D(float(width), float(height)),
        Point2D(0.0, float(height)),
    ]


def is_collinear(a, b, c, tolerance=COLLINEAR_TOLERANCE):
    """
    Check whether three points lie on one line.

    Coincident points are treated as collinear.
    """
    abx, aby = b[0] - a[0], b[1] - a[1]
    acx, acy = c[0] - a[0], c[1] - a[1]
    cross = abx * acy - aby * acx
    scale = np.sqrt(abx**2 + aby**2) * np.sqrt(acx**2 + acy**2)
    return abs(cross) <= tolerance * scale


def has_collinear_triple(points):
    """True if any three of the given points are collinear"""
    n = len(points)
    for i in range(n):
        for j in range(i + 1, n):
            for k in range(j + 1, n):
                if is_collinear(points[i], points[j], points[k]):
                    return True
    return False
