"""
Measurement library - calibration, homography and metric distance.

GUI and capture helpers (image_canvas, frame_source, overlay) are imported
from their modules directly.
"""

from .errors import (
    CalibrationError,
    DegenerateProjectionError,
    EstimationError,
    SingularSystemError,
)
from .geometry import Point2D, pixel_distance, rectangle_world_points
from .linear_solver import solve
from .homography import apply_homography, estimate_homography
from .calibration import CalibrationStore, PlanarCalibration, ReferenceCalibration
from .distance import DistanceEngine, MeasurementRequest, MeasurementResult, measure
from .scale_calibrator import ScaleCalibrator
from .session import MeasurementSession
from .unit_converter import UnitConverter

__all__ = [
    'CalibrationError',
    'DegenerateProjectionError',
    'EstimationError',
    'SingularSystemError',
    'Point2D',
    'pixel_distance',
    'rectangle_world_points',
    'solve',
    'apply_homography',
    'estimate_homography',
    'CalibrationStore',
    'PlanarCalibration',
    'ReferenceCalibration',
    'DistanceEngine',
    'MeasurementRequest',
    'MeasurementResult',
    'measure',
    'ScaleCalibrator',
    'MeasurementSession',
    'UnitConverter',
]
