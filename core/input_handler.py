"""Input handling: quit requests and pointer tracking."""

import pygame
from pygame.locals import *

from .camera import RatioView


class InputHandler:
    """Tracks the pointer over the window and reports quit requests."""

    def __init__(self, camera: RatioView):
        self.camera = camera
        self.mouse_pos = (0, 0)
        self.mouse_inside = False

    def handle_event(self, event: pygame.event.Event) -> bool:
        """
        Handle a single pygame event.
        Returns False if the application should quit, True otherwise.
        """
        if event.type == QUIT:
            return False
        elif event.type == KEYDOWN:
            if event.key == K_ESCAPE:
                return False
        elif event.type == MOUSEMOTION:
            self.mouse_pos = event.pos
            self.mouse_inside = True
        elif event.type == WINDOWENTER:
            self.mouse_inside = True
        elif event.type == WINDOWLEAVE:
            self.mouse_inside = False

        return True

    def pointer_position(self):
        """Pointer in scene coordinates, or None while it is outside the window."""
        if not self.mouse_inside:
            return None
        return self.camera.map_pixel_coords_to_game_coords(self.mouse_pos)
