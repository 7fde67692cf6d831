"""
Generate a test scene for tapmeasure
Creates a top-down ground plane (1 px = 1 mm) with:
- A 1.0 x 0.5 m calibration mat
- A 0.5 m reference bar
- Tee and jack markers 2.4 m apart
- Pre-warped with a perspective transform, as if photographed at an angle
Ground truth corners and marker positions are written alongside.
"""

import json
import os

import cv2
import numpy as np

# Configuration
PX_PER_M = 1000

# Ground plane dimensions
WIDTH_M = 3.0
HEIGHT_M = 2.0
WIDTH_PX = int(WIDTH_M * PX_PER_M)
HEIGHT_PX = int(HEIGHT_M * PX_PER_M)

# Calibration mat (top-left corner and size, meters)
MAT_ORIGIN_M = (0.3, 0.3)
MAT_WIDTH_M = 1.0
MAT_HEIGHT_M = 0.5

# Reference bar endpoints (meters)
REF_A_M = (0.3, 1.6)
REF_B_M = (0.8, 1.6)

# Markers (meters)
TEE_M = (0.4, 1.2)
JACK_M = (2.8, 1.2)

# Colors (BGR format for OpenCV)
GRASS = (60, 140, 60)
MAT = (220, 220, 220)
REFERENCE = (0, 200, 255)
TEE = (0, 255, 0)
JACK = (0, 0, 255)
DARK_GREY_BG = (60, 60, 60)


def to_px(point_m):
    return int(round(point_m[0] * PX_PER_M)), int(round(point_m[1] * PX_PER_M))


print("Generating test scene:")
print(f"  Ground plane: {WIDTH_M}x{HEIGHT_M} m ({WIDTH_PX}x{HEIGHT_PX} px)")

image = np.full((HEIGHT_PX, WIDTH_PX, 3), GRASS, dtype=np.uint8)

mat_tl = MAT_ORIGIN_M
mat_br = (MAT_ORIGIN_M[0] + MAT_WIDTH_M, MAT_ORIGIN_M[1] + MAT_HEIGHT_M)
cv2.rectangle(image, to_px(mat_tl), to_px(mat_br), MAT, -1)
cv2.rectangle(image, to_px(mat_tl), to_px(mat_br), (0, 0, 0), 4)
print(f"  [OK] Drew calibration mat: {MAT_WIDTH_M}x{MAT_HEIGHT_M} m")

cv2.line(image, to_px(REF_A_M), to_px(REF_B_M), REFERENCE, 12)
print(f"  [OK] Drew reference bar: {REF_B_M[0] - REF_A_M[0]:.2f} m")

cv2.circle(image, to_px(TEE_M), 25, TEE, -1)
cv2.circle(image, to_px(JACK_M), 25, JACK, -1)
true_distance = float(np.hypot(JACK_M[0] - TEE_M[0], JACK_M[1] - TEE_M[1]))
print(f"  [OK] Drew tee and jack: {true_distance:.3f} m apart")

# Perspective warp: far edge (top) narrower than near edge
src_points = np.array([
    [0, 0],
    [WIDTH_PX - 1, 0],
    [WIDTH_PX - 1, HEIGHT_PX - 1],
    [0, HEIGHT_PX - 1]
], dtype=np.float32)

dst_points = np.array([
    [WIDTH_PX * 0.25, HEIGHT_PX * 0.10],
    [WIDTH_PX * 0.75, HEIGHT_PX * 0.10],
    [WIDTH_PX - 1, HEIGHT_PX - 1],
    [0, HEIGHT_PX - 1]
], dtype=np.float32)

transform_matrix = cv2.getPerspectiveTransform(src_points, dst_points)
warped_image = cv2.warpPerspective(image, transform_matrix, (WIDTH_PX, HEIGHT_PX),
                                   borderMode=cv2.BORDER_CONSTANT,
                                   borderValue=DARK_GREY_BG)


def warp_point(point_m):
    pts = np.array([[to_px(point_m)]], dtype=np.float32)
    return cv2.perspectiveTransform(pts, transform_matrix)[0, 0].tolist()


mat_corners_m = [
    mat_tl,
    (mat_br[0], mat_tl[1]),
    mat_br,
    (mat_tl[0], mat_br[1]),
]

test_dir = os.path.join(os.path.dirname(__file__), "..", "test")
os.makedirs(test_dir, exist_ok=True)

warped_path = os.path.join(test_dir, "test_scene.png")
cv2.imwrite(warped_path, warped_image)
print(f"\n[OK] Saved warped scene: {warped_path}")

metadata = {
    "description": "Test scene for tapmeasure",
    "image_size_px": [WIDTH_PX, HEIGHT_PX],
    "calibration": {
        "width_m": MAT_WIDTH_M,
        "height_m": MAT_HEIGHT_M,
        "image_corners_px": [warp_point(p) for p in mat_corners_m],
    },
    "reference": {
        "length_m": REF_B_M[0] - REF_A_M[0],
        "image_points_px": [warp_point(REF_A_M), warp_point(REF_B_M)],
    },
    "markers": {
        "tee_px": warp_point(TEE_M),
        "jack_px": warp_point(JACK_M),
        "true_distance_m": true_distance,
    },
    "transform": {
        "matrix": transform_matrix.tolist(),
    },
}

metadata_path = os.path.join(test_dir, "test_scene_metadata.json")
with open(metadata_path, 'w') as f:
    json.dump(metadata, f, indent=2)
print(f"[OK] Saved ground truth: {metadata_path}")

print("\n" + "="*60)
print("Test scene generation complete!")
print("="*60)
print(f"\nTo try it:")
print(f"  python tapmeasure.py test/test_scene.png")
print(f"\nCalibrate on the mat corners (top-left first), then tap tee and jack.")
print(f"Expected distance: {true_distance:.2f} m. The reference bar alone gives a")
print(f"different answer because the scene is not fronto-parallel.")
