"""Main application class that ties everything together."""

import math

import pygame
from pygame.locals import *
from OpenGL.GL import *

from config import boids as config
from .camera import RatioView
from .input_handler import InputHandler
from rendering import PrimitiveType, border_vertices, outline_vertices
from rendering.batch import GeometryRenderer, RenderContext
from rendering.text import TextRenderer
from boids import Flock
from boids.flock import warmup


class Application:
    """Main application managing the frame loop and rendering."""

    def __init__(self, seed: int = None):
        pygame.init()
        self.screen_size = (config.WINDOW["width"], config.WINDOW["height"])
        pygame.display.set_mode(self.screen_size, DOUBLEBUF | OPENGL | RESIZABLE)
        pygame.display.set_caption(config.WINDOW["title"])

        # Core components
        self.camera = RatioView(self.screen_size, config.ARENA["display_size"])
        self.input_handler = InputHandler(self.camera)

        # Rendering components
        self.context = RenderContext()
        self.batch_renderer = GeometryRenderer(capacity=400)
        self.text_renderer = TextRenderer()

        # Simulation
        print("[App] Initializing flock...")
        warmup()
        self.seed = seed
        self.flock = self._new_flock()

        # State
        self.clock = pygame.time.Clock()
        self.running = True
        self.fps = 0
        self.paused = False
        self.show_help = True

        self._setup_gl()
        print("[App] Ready!")

    def _new_flock(self) -> Flock:
        return Flock(
            config.FLOCK["count"],
            self.camera.scene_relative_size,
            seed=self.seed
        )

    def _setup_gl(self):
        """Initialize OpenGL settings."""
        glClearColor(*config.COLORS["background"])
        glDisable(GL_DEPTH_TEST)

    def _resize(self, size):
        self.screen_size = size
        pygame.display.set_mode(size, DOUBLEBUF | OPENGL | RESIZABLE)
        self.camera.update_canvas_size(size)
        self._setup_gl()

    def _handle_events(self):
        """Process all pending pygame events."""
        for event in pygame.event.get():
            if event.type == KEYDOWN and event.key == K_SPACE:
                self.paused = not self.paused
                print(f"[App] {'Paused' if self.paused else 'Running'}")
            elif event.type == KEYDOWN and event.key == K_h:
                self.show_help = not self.show_help
            elif event.type == KEYDOWN and event.key == K_r:
                print("[App] Resetting flock...")
                self.flock = self._new_flock()
            elif event.type == VIDEORESIZE:
                self._resize(event.size)
            elif not self.input_handler.handle_event(event):
                self.running = False

    def _update(self, dt: float):
        """Update simulation state."""
        dt = min(dt, config.TIMING["max_dt"])

        if not self.paused:
            self.flock.update(
                dt,
                self.camera.scene_relative_size,
                config.ARENA["border_thickness"],
                self.input_handler.pointer_position()
            )

    def _render(self):
        """Render the scene."""
        glClear(GL_COLOR_BUFFER_BIT)

        # Flock pulses, the border stays opaque
        now_ms = pygame.time.get_ticks()
        self.context.alpha = math.sin(now_ms / config.TIMING["alpha_period_ms"]) / 2.0 + 0.5
        self.flock.draw(self.context, self.batch_renderer, self.camera)

        self.context.alpha = 1.0
        size = self.camera.scene_relative_size
        thickness = config.ARENA["border_thickness"]
        vertices, colors = border_vertices(size, thickness)
        self.batch_renderer.draw(self.context, vertices, colors, PrimitiveType.TRIANGLES, self.camera)
        vertices, colors = outline_vertices(size, thickness)
        self.batch_renderer.draw(self.context, vertices, colors, PrimitiveType.LINE_LOOP, self.camera)

        # Draw HUD
        status = "PAUSED" if self.paused else "RUNNING"
        self.text_renderer.draw_text(
            f"Boids: {self.flock.num_boids}  |  FPS: {self.fps:.0f}  |  {status}",
            10, 10, self.screen_size
        )
        if self.show_help:
            self.text_renderer.draw_text(
                "Mouse: scare boids | SPACE: Pause | R: Reset | H: Toggle help | ESC: Quit",
                10, 35, self.screen_size
            )

        pygame.display.flip()

    def run(self):
        """Main application loop."""
        print("[App] Starting main loop...")

        while self.running:
            dt = self.clock.tick() / 1000.0  # Uncapped FPS
            self.fps = self.clock.get_fps()

            self._handle_events()
            self._update(dt)
            self._render()

        pygame.quit()
        print("[App] Shutdown complete")
