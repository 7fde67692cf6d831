"""
ImageCanvas - Fits frames into a Tk canvas and maps taps back to frame pixels.
"""

import tkinter as tk

import cv3
import numpy as np
from PIL import Image, ImageTk


class ImageCanvas:
    """
    Shows frames scaled to fit a canvas, centered, with a uniform scale.

    Taps arrive in canvas coordinates; measurement needs frame pixel
    coordinates, so every conversion goes through the current fit.
    """

    BACKGROUND = 64

    def __init__(self, canvas, canvas_width, canvas_height):
        self.canvas = canvas
        self.canvas_width = canvas_width
        self.canvas_height = canvas_height

        self.scale = 1.0
        self.offset = (0, 0)

        # PhotoImage reference (must keep reference to prevent garbage collection)
        self.photo = None

    def update_canvas_size(self, width, height):
        self.canvas_width = width
        self.canvas_height = height

    def fit(self, frame_width, frame_height):
        """Recompute scale and offset so the frame fits the canvas, centered"""
        scale_w = self.canvas_width / frame_width
        scale_h = self.canvas_height / frame_height
        self.scale = min(scale_w, scale_h)
        # Whole pixels, so the pasted frame and the coordinate mapping agree
        self.offset = (int(round((self.canvas_width - frame_width * self.scale) / 2.0)),
                       int(round((self.canvas_height - frame_height * self.scale) / 2.0)))

    def canvas_to_image_coords(self, canvas_x, canvas_y):
        """Convert canvas coordinates to frame pixel coordinates"""
        img_x = (canvas_x - self.offset[0]) / self.scale
        img_y = (canvas_y - self.offset[1]) / self.scale
        return img_x, img_y

    def image_to_canvas_coords(self, img_x, img_y):
        """Convert frame pixel coordinates to canvas coordinates"""
        canvas_x = img_x * self.scale + self.offset[0]
        canvas_y = img_y * self.scale + self.offset[1]
        return canvas_x, canvas_y

    def compose(self, image_rgb, overlay_callback=None):
        """
        Build the canvas-sized RGB image for a frame.

        Args:
            image_rgb: numpy array in RGB format
            overlay_callback: optional function(canvas_image, to_canvas) that
                draws on the composed image; to_canvas maps frame pixel
                coordinates to canvas coordinates

        Returns:
            numpy array (canvas_height, canvas_width, 3)
        """
        height, width = image_rgb.shape[:2]
        self.fit(width, height)

        new_width = max(1, int(width * self.scale))
        new_height = max(1, int(height * self.scale))
        display_image = cv3.resize(image_rgb, new_width, new_height)

        canvas_image = np.full((self.canvas_height, self.canvas_width, 3),
                               self.BACKGROUND, dtype=np.uint8)

        x_offset, y_offset = self.offset
        h = min(new_height, self.canvas_height - y_offset)
        w = min(new_width, self.canvas_width - x_offset)
        canvas_image[y_offset:y_offset + h, x_offset:x_offset + w] = display_image[:h, :w]

        if overlay_callback:
            overlay_callback(canvas_image, self.image_to_canvas_coords)

        return canvas_image

    def display_image(self, image_rgb, overlay_callback=None):
        """Compose a frame and show it on the Tk canvas"""
        if image_rgb is None:
            return

        canvas_image = self.compose(image_rgb, overlay_callback)

        img_pil = Image.fromarray(canvas_image)
        self.photo = ImageTk.PhotoImage(image=img_pil)

        self.canvas.delete("all")
        self.canvas.create_image(0, 0, anchor=tk.NW, image=self.photo)
