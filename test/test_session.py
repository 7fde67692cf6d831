"""
Tests for the tap-mode measuring session
"""

import pytest

from measurelib.calibration import CalibrationStore
from measurelib.distance import INVALID_REFERENCE, MEASURED, NO_CALIBRATION
from measurelib.errors import EstimationError
from measurelib.geometry import Point2D
from measurelib.session import (
    DEFAULT_CALIB_HEIGHT,
    DEFAULT_CALIB_WIDTH,
    DEFAULT_REFERENCE_LENGTH,
    MeasurementSession,
)


def tap_all(session, points):
    for x, y in points:
        session.on_tap(x, y)


@pytest.fixture
def session():
    return MeasurementSession()


def test_defaults(session):
    assert session.mode == "tee"
    assert session.scale.length == DEFAULT_REFERENCE_LENGTH
    assert session.calib_width == DEFAULT_CALIB_WIDTH
    assert session.calib_height == DEFAULT_CALIB_HEIGHT
    assert not session.is_calibrated()
    assert session.measure() is None


def test_unknown_mode_rejected(session):
    with pytest.raises(ValueError):
        session.set_mode("ruler")


def test_none_mode_ignores_taps(session):
    session.set_mode("none")
    assert session.on_tap(5, 5) is None
    assert session.tee is None
    assert session.jack is None


def test_jack_without_tee_does_not_measure(session):
    session.set_mode("jack")
    assert session.on_tap(10, 0) is None
    assert session.jack == Point2D(10.0, 0.0)


def test_jack_after_tee_measures_uncalibrated(session):
    session.on_tap(0, 0)
    session.set_mode("jack")
    result = session.on_tap(50, 0)
    assert result is not None
    assert result.status == NO_CALIBRATION


def test_reference_measurement(session):
    session.set_mode("reference")
    tap_all(session, [(0, 0), (100, 0)])
    session.set_reference_length(2.0)

    session.set_mode("tee")
    session.on_tap(0, 0)
    session.set_mode("jack")
    result = session.on_tap(50, 0)

    assert result.status == MEASURED
    assert result.meters == pytest.approx(1.0)


def test_invalid_reference_length(session):
    session.set_mode("reference")
    tap_all(session, [(0, 0), (100, 0)])
    session.set_reference_length("0")
    tap_tee_jack = [(0, 0), (50, 0)]
    session.set_mode("tee")
    session.on_tap(*tap_tee_jack[0])
    session.set_mode("jack")
    result = session.on_tap(*tap_tee_jack[1])
    assert result.status == INVALID_REFERENCE


def test_fifth_calibration_tap_restarts(session):
    session.set_mode("calibrate")
    tap_all(session, [(0, 0), (100, 0), (100, 100), (0, 100)])
    assert len(session.calib_points) == 4
    assert session.next_corner_label() is None

    session.on_tap(7, 8)
    assert session.calib_points == [Point2D(7.0, 8.0)]
    assert session.next_corner_label() == "top-right"


def test_apply_calibration_needs_four_corners(session):
    session.set_mode("calibrate")
    tap_all(session, [(0, 0), (100, 0), (100, 100)])
    with pytest.raises(EstimationError):
        session.apply_calibration()
    assert not session.is_calibrated()


def test_calibrated_measurement_prefers_homography(session):
    session.set_mode("reference")
    tap_all(session, [(0, 0), (100, 0)])
    session.set_reference_length(2.0)

    session.set_mode("calibrate")
    tap_all(session, [(0, 0), (100, 0), (100, 100), (0, 100)])
    session.set_calibration_size(1.0, 1.0)
    session.apply_calibration()
    assert session.is_calibrated()

    result = session.measure((0, 0), (50, 0))
    assert result.strategy == "homography"
    assert result.meters == pytest.approx(0.5)


def test_failed_calibration_keeps_previous(session):
    session.set_mode("calibrate")
    tap_all(session, [(0, 0), (100, 0), (100, 100), (0, 100)])
    session.set_calibration_size(1.0, 1.0)
    previous = session.apply_calibration()

    tap_all(session, [(0, 0), (1, 1), (2, 2), (3, 3)])
    with pytest.raises(EstimationError):
        session.apply_calibration()
    assert session.store.snapshot() is previous


@pytest.mark.parametrize("width,height", [(0, 1), (1, -1), ("x", 1)])
def test_invalid_calibration_size(session, width, height):
    with pytest.raises(ValueError):
        session.set_calibration_size(width, height)


def test_clear_calibration_keeps_other_points(session):
    session.on_tap(1, 2)
    session.set_mode("calibrate")
    tap_all(session, [(0, 0), (100, 0), (100, 100), (0, 100)])
    session.apply_calibration()

    session.clear_calibration()

    assert not session.is_calibrated()
    assert session.calib_points == []
    assert session.tee == Point2D(1.0, 2.0)


def test_clear_drops_everything(session):
    session.on_tap(1, 2)
    session.set_mode("jack")
    session.on_tap(3, 4)
    session.set_mode("reference")
    tap_all(session, [(0, 0), (10, 0)])
    session.set_mode("calibrate")
    tap_all(session, [(0, 0), (100, 0), (100, 100), (0, 100)])
    session.apply_calibration()

    session.clear()

    assert session.tee is None
    assert session.jack is None
    assert session.scale.get_point_count() == 0
    assert session.calib_points == []
    assert not session.is_calibrated()


def test_shared_store():
    store = CalibrationStore()
    first = MeasurementSession(store=store)
    second = MeasurementSession(store=store)

    first.set_mode("calibrate")
    tap_all(first, [(0, 0), (100, 0), (100, 100), (0, 100)])
    first.apply_calibration()

    assert second.is_calibrated()


@pytest.mark.parametrize("length", ["inf", "1e400", "-inf"])
def test_non_finite_reference_length_is_unavailable(session, length):
    session.set_mode("reference")
    tap_all(session, [(0, 0), (100, 0)])
    assert session.set_reference_length(length) is False

    result = session.measure((0, 0), (50, 0))
    assert result.status == INVALID_REFERENCE
    assert result.meters is None
