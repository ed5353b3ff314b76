"""HUD text drawn with pygame fonts onto the GL framebuffer."""

import pygame
from OpenGL.GL import *

from config import boids as config


class TextRenderer:
    """Renders text overlays; rasterized lines are cached by content."""

    def __init__(self, font_name: str = "monospace", font_size: int = 18, max_cached: int = 32):
        pygame.font.init()
        self.font = pygame.font.SysFont(font_name, font_size)
        self.color = tuple(int(c * 255) for c in config.COLORS["text"])
        self.max_cached = max_cached
        self._cache = {}

    def _rasterize(self, text: str):
        cached = self._cache.get(text)
        if cached is None:
            surface = self.font.render(text, True, self.color)
            cached = (pygame.image.tostring(surface, "RGBA", True), surface.get_size())
            if len(self._cache) >= self.max_cached:
                self._cache.clear()
            self._cache[text] = cached
        return cached

    def draw_text(self, text: str, x: int, y: int, screen_size: tuple):
        """
        Draw text with its top-left corner at (x, y) pixels from the top-left.
        """
        data, (w, h) = self._rasterize(text)

        glMatrixMode(GL_PROJECTION)
        glPushMatrix()
        glLoadIdentity()
        glOrtho(0, screen_size[0], 0, screen_size[1], -1, 1)
        glMatrixMode(GL_MODELVIEW)
        glPushMatrix()
        glLoadIdentity()

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        glRasterPos2f(x, screen_size[1] - y - h)
        glDrawPixels(w, h, GL_RGBA, GL_UNSIGNED_BYTE, data)
        glDisable(GL_BLEND)

        glPopMatrix()
        glMatrixMode(GL_PROJECTION)
        glPopMatrix()
        glMatrixMode(GL_MODELVIEW)
