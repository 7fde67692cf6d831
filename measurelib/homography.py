"""
Planar homography estimation from four correspondences and point mapping.
"""

import numpy as np

from .errors import DegenerateProjectionError, EstimationError, SingularSystemError
from .geometry import Point2D, has_collinear_triple
from .linear_solver import solve


# Denominator magnitude below which a projection is undefined
PROJECTION_EPSILON = 1e-12

CORRESPONDENCE_COUNT = 4


def build_system(image_points, world_points):
    """
    Build the 8x8 system whose solution is h11..h32 (h33 fixed to 1).

    Each correspondence (x, y) -> (X, Y) contributes two rows:
        [x, y, 1, 0, 0, 0, -x*X, -y*X] . h = X
        [0, 0, 0, x, y, 1, -x*Y, -y*Y] . h = Y

    Returns:
        tuple: (a, b) numpy arrays of shape (8, 8) and (8,)
    """
    a = np.zeros((2 * CORRESPONDENCE_COUNT, 8))
    b = np.zeros(2 * CORRESPONDENCE_COUNT)

    for i, ((x, y), (X, Y)) in enumerate(zip(image_points, world_points)):
        a[2 * i] = [x, y, 1.0, 0.0, 0.0, 0.0, -x * X, -y * X]
        b[2 * i] = X
        a[2 * i + 1] = [0.0, 0.0, 0.0, x, y, 1.0, -x * Y, -y * Y]
        b[2 * i + 1] = Y

    return a, b


def estimate_homography(image_points, world_points):
    """
    Estimate the homography mapping image points onto world points.

    Point order is not checked beyond pairing: image_points[i] must
    correspond to world_points[i].

    Args:
        image_points: 4 (x, y) points in image pixel space
        world_points: 4 (X, Y) points in world space (meters)

    Returns:
        3x3 numpy array with entry [2, 2] equal to 1

    Raises:
        EstimationError: If either side does not have exactly 4 points, if
            three points on either side are collinear, or if the linear
            system is singular
    """
    image_points = [Point2D.of(p) for p in image_points]
    world_points = [Point2D.of(p) for p in world_points]

    if len(image_points) != CORRESPONDENCE_COUNT or len(world_points) != CORRESPONDENCE_COUNT:
        raise EstimationError(
            f"Need exactly {CORRESPONDENCE_COUNT} correspondences, got "
            f"{len(image_points)} image and {len(world_points)} world points")

    if has_collinear_triple(image_points):
        raise EstimationError("Homography estimation failed: image points are degenerate")
    if has_collinear_triple(world_points):
        raise EstimationError("Homography estimation failed: world points are degenerate")

    a, b = build_system(image_points, world_points)
    try:
        h = solve(a, b)
    except SingularSystemError as e:
        raise EstimationError("Homography estimation failed: singular system") from e

    return np.append(h, 1.0).reshape(3, 3)


def apply_homography(matrix, point):
    """
    Map a point through a 3x3 projective matrix, including the perspective divide.

    Raises:
        DegenerateProjectionError: If the homogeneous denominator is (near) zero
    """
    h = np.asarray(matrix, dtype=float)
    x, y = point[0], point[1]

    w = h[2, 0] * x + h[2, 1] * y + h[2, 2]
    if abs(w) < PROJECTION_EPSILON:
        raise DegenerateProjectionError(f"Degenerate projection at ({x:.2f}, {y:.2f})")

    return Point2D(
        float((h[0, 0] * x + h[0, 1] * y + h[0, 2]) / w),
        float((h[1, 0] * x + h[1, 1] * y + h[1, 2]) / w),
    )
