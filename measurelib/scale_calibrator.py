"""
ScaleCalibrator - Collects the reference segment used for pixel-to-meter scaling.
"""

import logging

import numpy as np

from .calibration import ReferenceCalibration
from .geometry import Point2D


class ScaleCalibrator:
    """
    Handles the reference-segment workflow.

    The user taps two points on an object of known length (a tape, a mat
    edge) and enters that length in meters. The first tap sets point A,
    the second sets point B, and any further tap moves B.
    """

    def __init__(self, length=1.0):
        """
        Initialize the scale calibrator.

        Args:
            length: Real-world length of the reference segment in meters
        """
        self.points = []
        self.length = length

    def get_points(self):
        """Get the reference points placed so far"""
        return list(self.points)

    def get_point_count(self):
        return len(self.points)

    def add_point(self, x, y):
        """
        Add a reference point, replacing point B once both are set.

        Returns:
            bool: True if both reference points are now set
        """
        point = Point2D(float(x), float(y))
        if len(self.points) < 2:
            self.points.append(point)
        else:
            self.points[1] = point
        return len(self.points) == 2

    def calculate_pixel_distance(self):
        """
        Calculate the pixel distance between the two reference points.

        Returns:
            float: Euclidean distance in pixels, or None if not enough points
        """
        if len(self.points) != 2:
            return None

        pt1, pt2 = self.points
        distance = np.sqrt((pt2[0] - pt1[0])**2 + (pt2[1] - pt1[1])**2)
        return float(distance)

    def set_real_world_length(self, length):
        """
        Set the real-world length of the segment.

        Non-positive, non-finite or non-numeric values are stored as 0.0,
        which leaves the reference unusable until a valid length is entered.

        Returns:
            bool: True if the stored length is usable
        """
        try:
            length = float(length)
        except (TypeError, ValueError):
            logging.warning(f"Ignoring non-numeric reference length: {length!r}")
            length = 0.0

        if not (np.isfinite(length) and length > 0):
            length = 0.0
        self.length = length
        return self.length > 0

    def to_calibration(self):
        """Snapshot the current state as a ReferenceCalibration"""
        point_a = self.points[0] if len(self.points) > 0 else None
        point_b = self.points[1] if len(self.points) > 1 else None
        return ReferenceCalibration(point_a, point_b, self.length)

    def is_calibrated(self):
        return self.to_calibration().is_valid()

    def reset(self):
        """Forget both reference points (the length is kept)"""
        self.points = []

    def get_point_near(self, x, y, threshold=10):
        """
        Find if there's a reference point near the given coordinates.

        Returns:
            int: Index of point (0 or 1), or None if no point nearby
        """
        for i, (px, py) in enumerate(self.points):
            distance = np.sqrt((x - px)**2 + (y - py)**2)
            if distance <= threshold:
                return i
        return None

    def update_point(self, index, x, y):
        """
        Move a reference point.

        Returns:
            bool: True if update successful, False otherwise
        """
        if 0 <= index < len(self.points):
            self.points[index] = Point2D(float(x), float(y))
            return True
        return False

    def get_status_message(self):
        """Human-readable description of the reference state"""
        point_count = len(self.points)
        if point_count == 0:
            return "Reference: tap the first end of a known length"
        elif point_count == 1:
            return "Reference: tap the second end"

        pixels = self.calculate_pixel_distance()
        if self.length <= 0:
            return f"Reference: {pixels:.1f} px, enter a positive length"
        return f"Reference: {pixels:.1f} px = {self.length:.2f} m"
