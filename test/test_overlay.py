"""
Tests for overlay drawing
"""

import numpy as np

from measurelib.overlay import draw_caption, draw_overlay
from measurelib.session import MeasurementSession


def blank(width=200, height=150):
    return np.zeros((height, width, 3), dtype=np.uint8)


def test_empty_session_draws_nothing():
    image = blank()
    draw_overlay(image, MeasurementSession())
    assert not image.any()


def test_markers_are_drawn_in_place():
    session = MeasurementSession()
    session.on_tap(40, 50)
    session.set_mode("jack")
    session.on_tap(160, 50)

    image = blank()
    out = draw_overlay(image, session)

    assert out is image
    assert image[50, 40].any()
    assert image[50, 160].any()
    # Segment between the two markers
    assert image[50, 100].any()


def test_canvas_mapping_is_applied():
    session = MeasurementSession()
    session.on_tap(10, 10)

    image = blank()
    draw_overlay(image, session, to_canvas=lambda x, y: (x * 2 + 30, y * 2 + 30))

    assert image[50, 50].any()
    assert not image[10, 10].any()


def test_calibration_quad():
    session = MeasurementSession()
    session.set_mode("calibrate")
    for x, y in [(20, 20), (180, 20), (180, 130), (20, 130)]:
        session.on_tap(x, y)

    image = blank()
    draw_overlay(image, session)
    # Closing edge from corner 4 back to corner 1
    assert image[75, 20].any()


def test_caption():
    image = blank()
    draw_caption(image, "1.00 m (3.28 ft)")
    assert image.any()
