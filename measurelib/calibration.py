"""
Calibration value objects and the active planar calibration slot.
"""

import logging
import threading
from typing import NamedTuple, Optional

import numpy as np

from .geometry import Point2D, pixel_distance, rectangle_world_points
from .homography import apply_homography, estimate_homography


class ReferenceCalibration(NamedTuple):
    """
    One reference segment of known real length.

    Usable only when both points are set, the length is finite and strictly
    positive, and the two points are distinct.
    """
    point_a: Optional[Point2D] = None
    point_b: Optional[Point2D] = None
    real_distance: float = 0.0

    def is_valid(self):
        if self.point_a is None or self.point_b is None:
            return False
        if not (np.isfinite(self.real_distance) and self.real_distance > 0):
            return False
        return pixel_distance(self.point_a, self.point_b) > 0

    def meters_per_pixel(self):
        """Scale ratio in meters per pixel, or None if the calibration is invalid"""
        if not self.is_valid():
            return None
        return self.real_distance / pixel_distance(self.point_a, self.point_b)


class PlanarCalibration:
    """
    Image-to-world homography.

    The matrix is copied, normalized so that entry [2, 2] is 1, and made
    read-only, so instances can be shared between threads.
    """

    def __init__(self, matrix):
        m = np.array(matrix, dtype=float)
        if m.shape != (3, 3):
            raise ValueError(f"Homography must be 3x3, got shape {m.shape}")
        if m[2, 2] == 0:
            raise ValueError("Homography entry [2, 2] must be non-zero")

        m = m / m[2, 2]
        m.setflags(write=False)
        self._matrix = m

    @classmethod
    def from_rectangle(cls, image_points, width, height):
        """
        Estimate a calibration from 4 tapped corners of a known rectangle.

        Args:
            image_points: corners in tap order (top-left, top-right,
                bottom-right, bottom-left)
            width: rectangle width in meters
            height: rectangle height in meters

        Raises:
            ValueError: If width or height is not positive
            EstimationError: If the homography cannot be estimated
        """
        if not (width > 0 and height > 0):
            raise ValueError("Rectangle width and height must be positive")
        world = rectangle_world_points(width, height)
        return cls(estimate_homography(image_points, world))

    @property
    def matrix(self):
        return self._matrix

    def apply(self, point):
        """Map an image point to world meters"""
        return apply_homography(self._matrix, point)

    def __repr__(self):
        return f"PlanarCalibration({self._matrix.tolist()!r})"


class CalibrationStore:
    """
    Holds the single active PlanarCalibration.

    Absent at start, replaced by each successful install and emptied by
    clear(). Readers always see a complete calibration or none.
    """

    def __init__(self):
        self._lock = threading.Lock()
        self._planar = None

    def snapshot(self):
        """Return the active PlanarCalibration, or None"""
        with self._lock:
            return self._planar

    def is_calibrated(self):
        return self.snapshot() is not None

    def install(self, planar):
        """Make planar the active calibration, replacing any previous one"""
        if not isinstance(planar, PlanarCalibration):
            raise TypeError("Expected a PlanarCalibration")
        with self._lock:
            self._planar = planar
        logging.info("Planar calibration installed")

    def calibrate(self, image_points, width, height):
        """
        Estimate from a rectangle and install on success.

        On failure the exception propagates and the previous calibration
        stays active.
        """
        try:
            planar = PlanarCalibration.from_rectangle(image_points, width, height)
        except ValueError as e:
            logging.warning(f"Calibration rejected: {e}")
            raise
        self.install(planar)
        return planar

    def clear(self):
        with self._lock:
            had_calibration = self._planar is not None
            self._planar = None
        if had_calibration:
            logging.info("Planar calibration cleared")
