"""
Presentation of metric distances: meters and feet.

Measurement code works in meters only; conversion happens here, at display time.
"""

from .distance import DEGENERATE_PROJECTION, INVALID_REFERENCE, NO_CALIBRATION


class UnitConverter:
    """
    Formats distances for display.

    Supports two display systems:
    - metric: meters first, feet in parentheses
    - imperial: feet first, meters in parentheses
    """

    FEET_PER_METER = 3.28084

    UNAVAILABLE_TEXT = "—"

    def __init__(self, units="metric", decimals=2):
        """
        Initialize the unit converter.

        Args:
            units: Primary display system ("metric" or "imperial")
            decimals: Digits after the decimal point
        """
        if units not in ("metric", "imperial"):
            raise ValueError("Units must be 'metric' or 'imperial'")
        self.units = units
        self.decimals = decimals

    def set_units(self, units):
        if units not in ("metric", "imperial"):
            raise ValueError("Units must be 'metric' or 'imperial'")
        self.units = units

    def meters_to_feet(self, meters):
        return meters * self.FEET_PER_METER

    def format_meters(self, meters):
        """
        Format a distance in meters, e.g. "1.00 m (3.28 ft)".

        Returns the unavailable placeholder for None.
        """
        if meters is None:
            return self.UNAVAILABLE_TEXT

        d = self.decimals
        feet = self.meters_to_feet(meters)
        if self.units == "imperial":
            return f"{feet:.{d}f} ft ({meters:.{d}f} m)"
        return f"{meters:.{d}f} m ({feet:.{d}f} ft)"

    def format_result(self, result):
        """Format a MeasurementResult (or None) for the distance readout"""
        if result is None or not result.available:
            return self.UNAVAILABLE_TEXT
        return self.format_meters(result.meters)

    def describe_unavailable(self, result):
        """
        Explain why a measurement has no value.

        Returns:
            str message, or None if the result is available
        """
        if result is None:
            return "Mark both points to measure a distance."
        if result.available:
            return None
        if result.status == DEGENERATE_PROJECTION:
            return "Calibration cannot map one of the points. Re-tap the points or recalibrate."
        if result.status == INVALID_REFERENCE:
            return "Reference is incomplete. Set both reference points and a positive length in meters."
        if result.status == NO_CALIBRATION:
            return "Unable to compute distance – ensure a reference is set or perform calibration."
        return f"Distance unavailable ({result.status})"

    @staticmethod
    def calibration_label(calibrated):
        """Status label for the planar calibration"""
        return "Calibrated" if calibrated else "Uncalibrated"
