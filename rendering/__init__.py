"""Rendering components for the boids arena.

GL-backed renderers live in ``rendering.batch`` and ``rendering.text`` and
are imported directly by the application.
"""

from .arena import border_vertices, outline_vertices
from .primitives import PrimitiveType

__all__ = ["PrimitiveType", "border_vertices", "outline_vertices"]
