"""2D camera mapping the simulation scene onto the window."""

import numpy as np
from OpenGL.GL import *


class RatioView:
    """
    Aspect-preserving orthographic view.

    The shorter canvas side spans ``scene_size`` units and the longer side
    extends proportionally, so the visible scene (``scene_relative_size``)
    changes shape with the window while scale stays uniform. Scene and pixel
    coordinates both have their origin at the top-left with y pointing down.
    """

    def __init__(self, canvas_size, scene_size: float):
        self.scene_size = float(scene_size)
        self.update_canvas_size(canvas_size)

    def update_canvas_size(self, canvas_size):
        width, height = canvas_size
        self.canvas_size = np.array([max(1.0, float(width)), max(1.0, float(height))])
        self.units_per_pixel = self.scene_size / self.canvas_size.min()
        self.scene_relative_size = self.canvas_size * self.units_per_pixel

    def map_pixel_coords_to_game_coords(self, pixel_pos) -> np.ndarray:
        """Convert a window pixel position to scene coordinates."""
        return np.asarray(pixel_pos, dtype=np.float64) * self.units_per_pixel

    def apply(self):
        """Load the orthographic projection for the current canvas."""
        width, height = self.canvas_size
        scene_w, scene_h = self.scene_relative_size

        glViewport(0, 0, int(width), int(height))
        glMatrixMode(GL_PROJECTION)
        glLoadIdentity()
        glOrtho(0.0, scene_w, scene_h, 0.0, -1.0, 1.0)
        glMatrixMode(GL_MODELVIEW)
        glLoadIdentity()
