"""
TapMeasure - Measure real-world distances by tapping points on a camera feed
Mark a tee and a jack point; distance comes from a 4-corner rectangle
calibration (homography) or, failing that, a reference segment of known length.
"""

import argparse
import logging
import tkinter as tk
from tkinter import filedialog, messagebox, ttk  # Convenience imports for dialogs and themed widgets

from measurelib import CalibrationError, MeasurementSession, UnitConverter
from measurelib.frame_source import CameraSource, StillImageSource, save_image
from measurelib.image_canvas import ImageCanvas
from measurelib.overlay import draw_caption, draw_overlay
from measurelib.session import DEFAULT_CALIB_HEIGHT, DEFAULT_CALIB_WIDTH, DEFAULT_REFERENCE_LENGTH

FRAME_INTERVAL_MS = 33

HELP_TEXT = """\
Modes
  Tee / Jack: tap the two points to measure. Tapping the jack after the tee shows the distance.
  Set Ref: tap both ends of an object of known length and enter that length in meters.
  Calibrate: tap the four corners of a flat rectangle of known size.

Calibration
  1. Switch to Calibrate mode.
  2. Tap the corners in order: top-left, top-right, bottom-right, bottom-left.
  3. Enter the rectangle's width and height in meters.
  4. Press Compute Calib. The status shows Calibrated when it succeeds.

Tips
  - Keep the rectangle flat and in the same plane as the points you measure.
  - Tapping corners out of order gives a wrong calibration, not an error.
  - Without calibration, distances use the reference segment's scale.
"""


def ignores_shortcuts(widget):
    """True for text-entry widgets, where key presses are input rather than commands"""
    return isinstance(widget, tk.Entry)

class MeasureGUI:
    def __init__(self, root, source, reference_length=DEFAULT_REFERENCE_LENGTH,
                 calib_width=DEFAULT_CALIB_WIDTH, calib_height=DEFAULT_CALIB_HEIGHT,
                 units="metric"):
        self.root = root
        self.root.title("TapMeasure")

        self.source = source
        self.session = MeasurementSession(reference_length=reference_length,
                                          calib_width=calib_width,
                                          calib_height=calib_height)
        self.converter = UnitConverter(units=units)

        # Latest frame from the source (RGB numpy array)
        self.frame = None
        self.frozen = False

        # Index of reference point being dragged
        self.dragging_ref_point = None

        self.canvas_width = 960
        self.canvas_height = 540

        self.mode_var = tk.StringVar(value=self.session.mode)
        self.mode_var.trace_add('write', self.on_mode_changed)
        self.ref_length_var = tk.StringVar(value=str(reference_length))
        self.ref_length_var.trace_add('write', self.on_ref_length_changed)
        self.calib_width_var = tk.StringVar(value=str(calib_width))
        self.calib_height_var = tk.StringVar(value=str(calib_height))
        self.units_var = tk.StringVar(value=units)

        self.setup_ui()
        self.root.protocol("WM_DELETE_WINDOW", self.on_close)
        self.update_frame()

    def setup_ui(self):
        # Menu Bar
        menubar = tk.Menu(self.root)
        self.root.config(menu=menubar)

        file_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="File", menu=file_menu)
        file_menu.add_command(label="Save Snapshot...", command=self.save_snapshot, accelerator="Ctrl+S")
        file_menu.add_separator()
        file_menu.add_command(label="Exit", command=self.on_close)

        view_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="View", menu=view_menu)
        view_menu.add_radiobutton(label="Metric (m)", value="metric", variable=self.units_var,
                                  command=self.on_units_changed)
        view_menu.add_radiobutton(label="Imperial (ft)", value="imperial", variable=self.units_var,
                                  command=self.on_units_changed)

        help_menu = tk.Menu(menubar, tearoff=0)
        menubar.add_cascade(label="Help", menu=help_menu)
        help_menu.add_command(label="Calibration Help", command=self.show_help)

        self.root.bind('<Control-s>', lambda e: self.save_snapshot())
        self.root.bind('<space>', self.on_space)

        # Frame canvas
        self.canvas = tk.Canvas(self.root, bg='gray', cursor="cross",
                                width=self.canvas_width, height=self.canvas_height,
                                highlightthickness=0)
        self.canvas.grid(row=0, column=0, sticky=(tk.W, tk.E, tk.N, tk.S))
        self.frame_canvas = ImageCanvas(self.canvas, self.canvas_width, self.canvas_height)

        self.canvas.bind("<Button-1>", self.on_canvas_click)
        self.canvas.bind("<B1-Motion>", self.on_canvas_drag)
        self.canvas.bind("<ButtonRelease-1>", self.on_canvas_release)
        self.canvas.bind("<Configure>", self.on_canvas_resize)

        # Mode buttons
        controls = ttk.Frame(self.root, padding="5")
        controls.grid(row=1, column=0, sticky=(tk.W, tk.E))

        for label, mode in [("Tee", "tee"), ("Jack", "jack"), ("Set Ref", "reference"),
                            ("Calibrate", "calibrate"), ("None", "none")]:
            ttk.Radiobutton(controls, text=label, value=mode, variable=self.mode_var).pack(side=tk.LEFT, padx=3)

        ttk.Separator(controls, orient=tk.VERTICAL).pack(side=tk.LEFT, fill=tk.Y, padx=6)
        ttk.Button(controls, text="Clear", command=self.clear, width=8).pack(side=tk.LEFT, padx=1)
        self.freeze_btn = ttk.Button(controls, text="Freeze", command=self.toggle_freeze, width=8)
        self.freeze_btn.pack(side=tk.LEFT, padx=1)

        # Calibration inputs
        inputs = ttk.Frame(self.root, padding="5")
        inputs.grid(row=2, column=0, sticky=(tk.W, tk.E))

        ttk.Label(inputs, text="Ref (m):").pack(side=tk.LEFT)
        ttk.Entry(inputs, textvariable=self.ref_length_var, width=8).pack(side=tk.LEFT, padx=(3, 10))
        ttk.Label(inputs, text="Calib w (m):").pack(side=tk.LEFT)
        ttk.Entry(inputs, textvariable=self.calib_width_var, width=8).pack(side=tk.LEFT, padx=(3, 10))
        ttk.Label(inputs, text="Calib h (m):").pack(side=tk.LEFT)
        ttk.Entry(inputs, textvariable=self.calib_height_var, width=8).pack(side=tk.LEFT, padx=(3, 10))
        ttk.Button(inputs, text="Compute Calib", command=self.compute_calibration).pack(side=tk.LEFT, padx=1)
        ttk.Button(inputs, text="Clear Calib", command=self.clear_calibration).pack(side=tk.LEFT, padx=1)

        # Status Bar at bottom
        status_frame = ttk.Frame(self.root, relief=tk.SUNKEN, padding="2")
        status_frame.grid(row=3, column=0, sticky=(tk.W, tk.E))

        self.status_label = ttk.Label(status_frame, text="Tap to place the tee", anchor=tk.W)
        self.status_label.pack(side=tk.LEFT, fill=tk.X, expand=True)

        self.calibration_label = tk.Label(status_frame, text="Uncalibrated", fg="#b0a000")
        self.calibration_label.pack(side=tk.RIGHT, padx=10)

        self.distance_label = ttk.Label(status_frame, text="Distance: —", anchor=tk.E)
        self.distance_label.pack(side=tk.RIGHT, padx=10)

        self.root.columnconfigure(0, weight=1)
        self.root.rowconfigure(0, weight=1)

    def update_frame(self):
        """Pull the next frame unless frozen, redraw, and reschedule"""
        if not self.frozen:
            frame = self.source.read()
            if frame is not None:
                self.frame = frame
        self.display_on_canvas()
        self.root.after(FRAME_INTERVAL_MS, self.update_frame)

    def display_on_canvas(self):
        if self.frame is None:
            return

        def draw_points_overlay(canvas_image, to_canvas):
            draw_overlay(canvas_image, self.session, to_canvas)

        self.frame_canvas.display_image(self.frame, overlay_callback=draw_points_overlay)

    def refresh_status(self):
        result = self.session.measure()
        self.distance_label.config(text=f"Distance: {self.converter.format_result(result)}")

        calibrated = self.session.is_calibrated()
        self.calibration_label.config(text=self.converter.calibration_label(calibrated),
                                      fg="#00a000" if calibrated else "#b0a000")

    def on_units_changed(self):
        self.converter.set_units(self.units_var.get())
        self.refresh_status()

    def on_canvas_resize(self, event):
        self.canvas_width = event.width
        self.canvas_height = event.height
        self.frame_canvas.update_canvas_size(event.width, event.height)

    def on_mode_changed(self, *args):
        self.session.set_mode(self.mode_var.get())
        mode = self.session.mode
        if mode == "calibrate":
            label = self.session.next_corner_label() or "top-left"
            self.status_label.config(text=f"Calibrate: tap the {label} corner")
        elif mode == "reference":
            self.status_label.config(text=self.session.scale.get_status_message())
        elif mode == "none":
            self.status_label.config(text="Taps are ignored")
        else:
            self.status_label.config(text=f"Tap to place the {mode}")

    def on_ref_length_changed(self, *args):
        if not self.session.set_reference_length(self.ref_length_var.get()):
            self.status_label.config(text="Reference length must be a positive number of meters")
        self.refresh_status()

    def on_canvas_click(self, event):
        if self.frame is None:
            return

        x, y = self.frame_canvas.canvas_to_image_coords(event.x, event.y)

        # Grab an existing reference point to drag it
        if self.session.mode == "reference":
            threshold = 10 / self.frame_canvas.scale
            idx = self.session.scale.get_point_near(x, y, threshold=threshold)
            if idx is not None:
                self.dragging_ref_point = idx
                self.canvas.config(cursor="hand2")
                return

        result = self.session.on_tap(x, y)

        if self.session.mode == "calibrate":
            count = len(self.session.calib_points)
            label = self.session.next_corner_label()
            if label is None:
                self.status_label.config(text="4 corners set. Enter the size and press Compute Calib.")
            else:
                self.status_label.config(text=f"Corner {count}/4 set. Next: {label}")
        elif self.session.mode == "reference":
            self.status_label.config(text=self.session.scale.get_status_message())

        self.display_on_canvas()
        self.refresh_status()

        if result is not None:
            if result.available:
                messagebox.showinfo("Distance", self.converter.format_result(result), parent=self.root)
            else:
                messagebox.showwarning("Distance", self.converter.describe_unavailable(result), parent=self.root)

    def on_canvas_drag(self, event):
        if self.dragging_ref_point is None:
            return
        x, y = self.frame_canvas.canvas_to_image_coords(event.x, event.y)
        self.session.scale.update_point(self.dragging_ref_point, x, y)
        self.display_on_canvas()

    def on_canvas_release(self, event):
        if self.dragging_ref_point is not None:
            self.dragging_ref_point = None
            self.canvas.config(cursor="cross")
            self.status_label.config(text=self.session.scale.get_status_message())
            self.refresh_status()

    def compute_calibration(self):
        try:
            self.session.set_calibration_size(self.calib_width_var.get(), self.calib_height_var.get())
        except ValueError:
            messagebox.showerror("Calibrate", "Enter valid calibration width and height in meters",
                                 parent=self.root)
            return

        try:
            self.session.apply_calibration()
        except CalibrationError as e:
            messagebox.showerror("Calibrate", f"Failed to compute homography: {e}", parent=self.root)
            return

        self.status_label.config(text="Calibration applied")
        self.refresh_status()
        messagebox.showinfo("Calibrate", "Calibration applied", parent=self.root)

    def clear_calibration(self):
        self.session.clear_calibration()
        self.status_label.config(text="Calibration cleared")
        self.display_on_canvas()
        self.refresh_status()

    def clear(self):
        self.session.clear()
        self.status_label.config(text="All points cleared")
        self.display_on_canvas()
        self.refresh_status()

    def on_space(self, event):
        # Space typed into a length field must not freeze the feed
        if ignores_shortcuts(event.widget):
            return
        self.toggle_freeze()

    def toggle_freeze(self):
        self.frozen = not self.frozen
        self.freeze_btn.config(text="Live" if self.frozen else "Freeze")

    def save_snapshot(self):
        if self.frame is None:
            return

        file_path = filedialog.asksaveasfilename(
            defaultextension=".png",
            initialfile="measurement.png",
            filetypes=[("PNG", "*.png"), ("JPEG", "*.jpg"), ("All files", "*.*")]
        )
        if not file_path:
            return

        # Draw at full frame resolution rather than canvas resolution
        snapshot = draw_overlay(self.frame.copy(), self.session)
        result = self.session.measure()
        distance_text = self.converter.format_result(result)
        if result is not None and result.available:
            draw_caption(snapshot, distance_text)

        try:
            save_image(snapshot, file_path)
        except (OSError, ValueError) as e:
            logging.error(f"Snapshot failed: {e}")
            self.status_label.config(text=f"Error: could not save snapshot - {e}")
            return
        self.status_label.config(text=f"Snapshot saved ({distance_text}) to {file_path}")

    def show_help(self):
        messagebox.showinfo("Calibration Help", HELP_TEXT, parent=self.root)

    def on_close(self):
        self.source.close()
        self.root.destroy()


def main():
    parser = argparse.ArgumentParser(description='TapMeasure - Measure distances by tapping points on a camera feed')
    parser.add_argument('image', nargs='?', help='Image file to measure on instead of the live camera')
    parser.add_argument('--camera', type=int, default=0, help='Camera device index (default: 0)')
    parser.add_argument('--reference-length', type=float, default=DEFAULT_REFERENCE_LENGTH,
                        help=f'Reference segment length in meters (default: {DEFAULT_REFERENCE_LENGTH})')
    parser.add_argument('--calib-width', type=float, default=DEFAULT_CALIB_WIDTH,
                        help=f'Calibration rectangle width in meters (default: {DEFAULT_CALIB_WIDTH})')
    parser.add_argument('--calib-height', type=float, default=DEFAULT_CALIB_HEIGHT,
                        help=f'Calibration rectangle height in meters (default: {DEFAULT_CALIB_HEIGHT})')
    parser.add_argument('--units', choices=['metric', 'imperial'], default='metric',
                        help='Primary display units (default: metric)')
    parser.add_argument('--log-level', choices=['DEBUG', 'INFO', 'WARNING', 'ERROR'], default='WARNING',
                        help='Logging verbosity (default: WARNING)')
    args = parser.parse_args()

    logging.basicConfig(level=getattr(logging, args.log_level),
                        format='%(asctime)s %(levelname)s %(message)s')

    source = StillImageSource(args.image) if args.image else CameraSource(index=args.camera)
    try:
        source.open()
    except RuntimeError as e:
        parser.error(str(e))

    root = tk.Tk()
    MeasureGUI(root, source,
               reference_length=args.reference_length,
               calib_width=args.calib_width,
               calib_height=args.calib_height,
               units=args.units)
    root.mainloop()


if __name__ == "__main__":
    main()
