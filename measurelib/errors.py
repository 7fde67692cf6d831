"""
Exception types raised by the calibration and measurement code.
"""


class CalibrationError(ValueError):
    """Base class for recoverable calibration and projection failures"""


class SingularSystemError(CalibrationError):
    """The linear system has no usable pivot (singular or near-singular)"""


class EstimationError(CalibrationError):
    """
    A homography could not be estimated from the given correspondences.

    Raised for a wrong number of points, a degenerate (collinear or
    coincident) configuration, or a singular underlying linear system.
    """


class DegenerateProjectionError(CalibrationError):
    """The projective denominator vanished at the requested point"""
