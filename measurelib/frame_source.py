"""
Frame sources - live camera capture and still images, both yielding RGB numpy arrays.
"""

import logging

import cv2  # For camera capture and color conversion
import cv3  # For image file I/O
import numpy as np
from PIL import Image
from pillow_heif import register_heif_opener  # For HEIC file support

# Register HEIF opener with Pillow to enable HEIC support
register_heif_opener()


class CameraSource:
    """
    Live frames from an OpenCV capture device.

    read() returns the latest frame in RGB order, or None when the device
    delivers nothing.
    """

    def __init__(self, index=0, width=1280, height=720):
        self.index = index
        self.width = width
        self.height = height
        self.cap = None

    def open(self):
        """
        Open the capture device.

        Raises:
            RuntimeError: If the device cannot be opened
        """
        cap = cv2.VideoCapture(self.index)
        if cap is None or not cap.isOpened():
            if cap is not None:
                cap.release()
            logging.error(f"Could not open camera {self.index}")
            raise RuntimeError(f"No access to camera {self.index}")

        # Resolution is a hint; the driver may pick another
        cap.set(cv2.CAP_PROP_FRAME_WIDTH, self.width)
        cap.set(cv2.CAP_PROP_FRAME_HEIGHT, self.height)
        actual_w = int(cap.get(cv2.CAP_PROP_FRAME_WIDTH))
        actual_h = int(cap.get(cv2.CAP_PROP_FRAME_HEIGHT))
        if actual_w > 0 and actual_h > 0:
            self.width, self.height = actual_w, actual_h

        self.cap = cap
        logging.info(f"Camera {self.index} opened at {self.width}x{self.height}")

    def read(self):
        if self.cap is None:
            return None
        ok, frame = self.cap.read()
        if not ok or frame is None:
            return None
        # OpenCV delivers BGR
        return cv2.cvtColor(frame, cv2.COLOR_BGR2RGB)

    def close(self):
        if self.cap is not None:
            try:
                self.cap.release()
            finally:
                self.cap = None

    @property
    def is_open(self):
        return self.cap is not None and self.cap.isOpened()


class StillImageSource:
    """
    A single image file served as a frozen frame.

    Useful for measuring on a saved photo and for trying the tool without a camera.
    """

    def __init__(self, path):
        self.path = path
        self.frame = None

    def open(self):
        """
        Load the image.

        Raises:
            RuntimeError: If the file cannot be read as an image
        """
        self.frame = load_image(self.path)
        if self.frame is None:
            raise RuntimeError(f"Could not load image {self.path}")
        logging.info(f"Loaded image {self.path} ({self.frame.shape[1]}x{self.frame.shape[0]})")

    def read(self):
        if self.frame is None:
            return None
        return self.frame.copy()

    def close(self):
        self.frame = None

    @property
    def is_open(self):
        return self.frame is not None


def load_image(file_path):
    """
    Load an image file as an RGB numpy array.

    Returns:
        numpy array (H, W, 3) uint8, or None if the file cannot be read
    """
    is_heic = file_path.lower().endswith(('.heic', '.heif'))

    if is_heic:
        # Load HEIC with PIL/pillow-heif, then convert to numpy array
        try:
            with Image.open(file_path) as pil_image:
                return np.array(pil_image.convert('RGB'))
        except (OSError, ValueError) as e:
            logging.error(f"Could not load HEIC image {file_path}: {e}")
            return None

    # cv3 loads images in RGB by default
    try:
        return cv3.imread(file_path)
    except (OSError, ValueError) as e:
        logging.error(f"Could not load image {file_path}: {e}")
        return None


def save_image(frame, file_path):
    """Save an RGB frame through Pillow (format from the file extension)"""
    pil_image = Image.fromarray(frame)
    if file_path.lower().endswith(('.jpg', '.jpeg')):
        pil_image = pil_image.convert('RGB')
    pil_image.save(file_path)
    logging.info(f"Snapshot saved to {file_path}")
