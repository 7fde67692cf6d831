"""
MeasurementSession - tap-mode state for the measuring screen.

Tracks which point the next tap sets (tee, jack, reference or calibration
corner), owns the reference segment and the calibration slot, and runs
measurements through the distance engine.
"""

import logging

from .calibration import CalibrationStore
from .distance import DistanceEngine, MeasurementRequest
from .errors import EstimationError
from .geometry import Point2D
from .scale_calibrator import ScaleCalibrator


DEFAULT_REFERENCE_LENGTH = 1.0  # meters
DEFAULT_CALIB_WIDTH = 1.0       # meters
DEFAULT_CALIB_HEIGHT = 0.1      # meters

MODES = ("tee", "jack", "reference", "calibrate", "none")

CORNER_LABELS = ["top-left", "top-right", "bottom-right", "bottom-left"]


class MeasurementSession:
    """
    State behind the measuring screen.

    Everything except the planar calibration is plain per-session state;
    the planar calibration lives in a CalibrationStore so it may be shared
    with other threads.
    """

    def __init__(self, store=None, engine=None,
                 reference_length=DEFAULT_REFERENCE_LENGTH,
                 calib_width=DEFAULT_CALIB_WIDTH,
                 calib_height=DEFAULT_CALIB_HEIGHT):
        self.store = store if store is not None else CalibrationStore()
        self.engine = engine if engine is not None else DistanceEngine()
        self.scale = ScaleCalibrator(length=reference_length)

        self.mode = "tee"
        self.tee = None
        self.jack = None
        self.calib_points = []
        self.calib_width = calib_width
        self.calib_height = calib_height

    def set_mode(self, mode):
        if mode not in MODES:
            raise ValueError(f"Mode must be one of {', '.join(MODES)}")
        self.mode = mode

    def on_tap(self, x, y):
        """
        Apply a tap at image pixel (x, y) according to the current mode.

        Returns:
            MeasurementResult when a jack tap completes a measurement
            (tee already set), otherwise None
        """
        p = Point2D(float(x), float(y))

        if self.mode == "tee":
            self.tee = p
        elif self.mode == "jack":
            self.jack = p
            if self.tee is not None:
                return self.measure()
        elif self.mode == "reference":
            self.scale.add_point(p.x, p.y)
        elif self.mode == "calibrate":
            # A fifth tap starts a new set of corners
            if len(self.calib_points) >= 4:
                self.calib_points = [p]
            else:
                self.calib_points.append(p)
        return None

    @property
    def reference(self):
        return self.scale.to_calibration()

    def set_reference_length(self, length):
        return self.scale.set_real_world_length(length)

    def set_calibration_size(self, width, height):
        """
        Set the known rectangle size in meters.

        Raises:
            ValueError: If either value is not a positive number
        """
        width = float(width)
        height = float(height)
        if not (width > 0 and height > 0):
            raise ValueError("Enter valid calibration width and height in meters")
        self.calib_width = width
        self.calib_height = height

    def next_corner_label(self):
        """Corner the next calibration tap is expected to mark, or None when all 4 are set"""
        if len(self.calib_points) >= 4:
            return None
        return CORNER_LABELS[len(self.calib_points)]

    def apply_calibration(self):
        """
        Estimate a homography from the 4 calibration taps and make it active.

        Raises:
            EstimationError: If fewer than 4 corners are set or the corners
                are degenerate; the previous calibration stays active
            ValueError: If the rectangle size is not positive
        """
        if len(self.calib_points) < 4:
            raise EstimationError("Tap 4 corners in order of the rectangular object")
        return self.store.calibrate(self.calib_points, self.calib_width, self.calib_height)

    def is_calibrated(self):
        return self.store.is_calibrated()

    def clear_calibration(self):
        """Drop the homography and the calibration taps"""
        self.calib_points = []
        self.store.clear()

    def clear(self):
        """Drop every point and the homography"""
        self.tee = None
        self.jack = None
        self.scale.reset()
        self.clear_calibration()
        logging.info("Session cleared")

    def measure(self, point_one=None, point_two=None):
        """
        Measure between two points (tee and jack by default).

        Returns:
            MeasurementResult, or None if either point is missing
        """
        point_one = point_one if point_one is not None else self.tee
        point_two = point_two if point_two is not None else self.jack
        if point_one is None or point_two is None:
            return None

        request = MeasurementRequest(Point2D.of(point_one), Point2D.of(point_two))
        return self.engine.measure(request, self.store.snapshot(), self.reference)
