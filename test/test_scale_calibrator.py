"""
Tests for the reference segment workflow
"""

import pytest

from measurelib.geometry import Point2D
from measurelib.scale_calibrator import ScaleCalibrator


def test_two_taps_set_both_points():
    cal = ScaleCalibrator(length=2.0)
    assert cal.add_point(0, 0) is False
    assert cal.add_point(100, 0) is True
    assert cal.get_points() == [Point2D(0.0, 0.0), Point2D(100.0, 0.0)]
    assert cal.calculate_pixel_distance() == pytest.approx(100.0)
    assert cal.is_calibrated()


def test_third_tap_replaces_second_point():
    cal = ScaleCalibrator()
    cal.add_point(0, 0)
    cal.add_point(100, 0)
    cal.add_point(0, 40)
    assert cal.get_points() == [Point2D(0.0, 0.0), Point2D(0.0, 40.0)]


def test_pixel_distance_needs_two_points():
    cal = ScaleCalibrator()
    assert cal.calculate_pixel_distance() is None
    cal.add_point(1, 1)
    assert cal.calculate_pixel_distance() is None


@pytest.mark.parametrize("value", [0, -3, "abc", "", None, "inf", "1e400", "nan"])
def test_invalid_length_disables_reference(value):
    cal = ScaleCalibrator(length=1.0)
    cal.add_point(0, 0)
    cal.add_point(10, 0)
    assert cal.set_real_world_length(value) is False
    assert cal.length == 0.0
    assert not cal.is_calibrated()


def test_length_from_text():
    cal = ScaleCalibrator()
    assert cal.set_real_world_length("2.5") is True
    assert cal.length == 2.5


def test_to_calibration_partial():
    cal = ScaleCalibrator(length=1.5)
    cal.add_point(3, 4)
    ref = cal.to_calibration()
    assert ref.point_a == Point2D(3.0, 4.0)
    assert ref.point_b is None
    assert ref.real_distance == 1.5


def test_reset_keeps_length():
    cal = ScaleCalibrator(length=3.0)
    cal.add_point(0, 0)
    cal.add_point(1, 0)
    cal.reset()
    assert cal.get_point_count() == 0
    assert cal.length == 3.0


def test_point_near_and_update():
    cal = ScaleCalibrator()
    cal.add_point(10, 10)
    cal.add_point(50, 50)
    assert cal.get_point_near(12, 11) == 0
    assert cal.get_point_near(48, 53) == 1
    assert cal.get_point_near(30, 30) is None

    assert cal.update_point(1, 60, 70) is True
    assert cal.get_points()[1] == Point2D(60.0, 70.0)
    assert cal.update_point(2, 0, 0) is False


def test_status_messages():
    cal = ScaleCalibrator(length=1.0)
    assert "first" in cal.get_status_message()
    cal.add_point(0, 0)
    assert "second" in cal.get_status_message()
    cal.add_point(100, 0)
    assert cal.get_status_message() == "Reference: 100.0 px = 1.00 m"
    cal.set_real_world_length(0)
    assert "positive" in cal.get_status_message()
