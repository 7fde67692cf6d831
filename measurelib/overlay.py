"""
Overlay drawing - marks session points and segments onto an RGB frame.
"""

import cv2  # For text rendering
import cv3  # For line and circle drawing

# Colors (RGB, cv3 works in RGB)
TEE_COLOR = (0, 255, 0)
JACK_COLOR = (255, 0, 0)
REFERENCE_COLOR = (255, 255, 0)
CALIBRATION_COLOR = (0, 255, 255)
OUTLINE_COLOR = (255, 255, 255)
LABEL_COLOR = (255, 255, 255)


def _identity(x, y):
    return x, y


def _marker(image, x, y, radius, color):
    # Filled dot with a thin outline
    cv3.circle(image, x, y, radius, color=color, fill=True)
    cv3.circle(image, x, y, radius + 1, color=OUTLINE_COLOR, t=1)


def draw_overlay(image, session, to_canvas=None):
    """
    Draw the session's points onto image in place.

    Args:
        image: numpy array (H, W, 3) in RGB format
        session: MeasurementSession whose points are drawn
        to_canvas: optional function(x, y) -> (x, y) mapping frame pixel
                   coordinates to image coordinates (e.g. a zoomed canvas)

    Returns:
        The same image, for chaining
    """
    if to_canvas is None:
        to_canvas = _identity

    def pt(p):
        x, y = to_canvas(p[0], p[1])
        return int(round(x)), int(round(y))

    # Segments first so the markers stay on top
    if session.tee is not None and session.jack is not None:
        (x1, y1), (x2, y2) = pt(session.tee), pt(session.jack)
        cv3.line(image, x1, y1, x2, y2, color=TEE_COLOR, t=3)

    ref_points = session.scale.get_points()
    if len(ref_points) == 2:
        (x1, y1), (x2, y2) = pt(ref_points[0]), pt(ref_points[1])
        cv3.line(image, x1, y1, x2, y2, color=REFERENCE_COLOR, t=3)

    calib = [pt(p) for p in session.calib_points]
    for i in range(len(calib) - 1):
        cv3.line(image, calib[i][0], calib[i][1], calib[i + 1][0], calib[i + 1][1],
                 color=CALIBRATION_COLOR, t=1)
    if len(calib) == 4:
        cv3.line(image, calib[3][0], calib[3][1], calib[0][0], calib[0][1],
                 color=CALIBRATION_COLOR, t=1)

    for x, y in (pt(p) for p in ref_points):
        _marker(image, x, y, 6, REFERENCE_COLOR)

    for i, (x, y) in enumerate(calib):
        _marker(image, x, y, 6, CALIBRATION_COLOR)
        cv2.putText(image, str(i + 1), (x + 10, y + 5),
                    cv2.FONT_HERSHEY_SIMPLEX, 0.5, LABEL_COLOR, 1)

    if session.tee is not None:
        x, y = pt(session.tee)
        _marker(image, x, y, 8, TEE_COLOR)
    if session.jack is not None:
        x, y = pt(session.jack)
        _marker(image, x, y, 8, JACK_COLOR)

    return image


def draw_caption(image, text, origin=(10, 25)):
    """Write a caption (e.g. the measured distance) with a dark backing box"""
    (w, h), baseline = cv2.getTextSize(text, cv2.FONT_HERSHEY_SIMPLEX, 0.7, 2)
    x, y = origin
    cv2.rectangle(image, (x - 5, y - h - 5), (x + w + 5, y + baseline + 5), (0, 0, 0), -1)
    cv2.putText(image, text, (x, y), cv2.FONT_HERSHEY_SIMPLEX, 0.7, LABEL_COLOR, 2)
    return image
