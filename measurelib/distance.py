"""
Metric distance between two image points.

Strategies are tried in a fixed order. The first one that applies decides
the result, including a failed result; later strategies are not consulted.

    1. HomographyStrategy      - active planar calibration
    2. ReferenceScaleStrategy  - valid reference segment
    otherwise                  - no calibration
"""

from typing import NamedTuple, Optional

from .errors import DegenerateProjectionError
from .geometry import Point2D, pixel_distance


# Result status values
MEASURED = "measured"
NO_CALIBRATION = "no_calibration"
INVALID_REFERENCE = "invalid_reference"
DEGENERATE_PROJECTION = "degenerate_projection"


class MeasurementRequest(NamedTuple):
    """The two image points whose distance is wanted"""
    point_one: Point2D
    point_two: Point2D


class MeasurementResult(NamedTuple):
    """
    Outcome of a measurement.

    meters is set only when status is MEASURED; every other status means
    the distance is unavailable and says why.
    """
    status: str
    meters: Optional[float] = None
    strategy: Optional[str] = None

    @property
    def available(self):
        return self.status == MEASURED

    @classmethod
    def measured(cls, meters, strategy):
        return cls(MEASURED, float(meters), strategy)

    @classmethod
    def unavailable(cls, status, strategy=None):
        return cls(status, None, strategy)


class HomographyStrategy:
    """Map both points into world meters and measure there"""

    name = "homography"

    def measure(self, request, planar, reference):
        """
        Returns:
            MeasurementResult, or None when no planar calibration is active
        """
        if planar is None:
            return None

        try:
            world_one = planar.apply(request.point_one)
            world_two = planar.apply(request.point_two)
        except DegenerateProjectionError:
            return MeasurementResult.unavailable(DEGENERATE_PROJECTION, self.name)

        return MeasurementResult.measured(pixel_distance(world_one, world_two), self.name)


class ReferenceScaleStrategy:
    """Scale the pixel distance by the reference segment's meters per pixel"""

    name = "reference"

    def measure(self, request, planar, reference):
        if reference is None or not reference.is_valid():
            return None

        meters_per_pixel = reference.meters_per_pixel()
        pixels = pixel_distance(request.point_one, request.point_two)
        return MeasurementResult.measured(pixels * meters_per_pixel, self.name)


DEFAULT_STRATEGIES = (HomographyStrategy(), ReferenceScaleStrategy())


class DistanceEngine:
    """Runs the strategy chain for each measurement request"""

    def __init__(self, strategies=DEFAULT_STRATEGIES):
        self.strategies = tuple(strategies)

    def measure(self, request, planar=None, reference=None):
        """
        Measure the metric distance for a request.

        Args:
            request: MeasurementRequest with two image points
            planar: active PlanarCalibration, or None
            reference: ReferenceCalibration, or None

        Returns:
            MeasurementResult (never raises for missing or invalid calibration)
        """
        for strategy in self.strategies:
            result = strategy.measure(request, planar, reference)
            if result is not None:
                return result

        # A reference that was supplied but unusable is reported separately
        if reference is not None and (reference.point_a is not None or reference.point_b is not None):
            return MeasurementResult.unavailable(INVALID_REFERENCE)
        return MeasurementResult.unavailable(NO_CALIBRATION)


def measure(request, planar=None, reference=None):
    """Measure with the default strategy order"""
    return DistanceEngine().measure(request, planar, reference)
