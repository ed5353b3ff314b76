"""Arena border geometry."""

import numpy as np

from config import boids as config


def color_from_hex(value: int) -> tuple:
    """Convert 0xRRGGBBAA to an RGBA tuple in the 0-1 range."""
    return tuple(((value >> shift) & 0xff) / 255.0 for shift in (24, 16, 8, 0))


def _quad(x0: float, y0: float, x1: float, y1: float) -> list:
    """Two triangles covering the axis-aligned rectangle."""
    return [
        (x0, y0), (x1, y0), (x0, y1),
        (x0, y1), (x1, y1), (x1, y0),
    ]


def border_vertices(size, thickness: float, color: int = None):
    """
    Triangles for the four border strips along the arena edges.

    Args:
        size: Arena (width, height)
        thickness: Strip width
        color: 0xRRGGBBAA, defaults to the configured border color

    Returns:
        (vertices, colors) as float32 arrays of 24 rows
    """
    width, height = size
    t = thickness
    points = (
        _quad(0.0, 0.0, t, height)                 # left
        + _quad(width - t, 0.0, width, height)     # right
        + _quad(0.0, 0.0, width, t)                # top
        + _quad(0.0, height - t, width, height)    # bottom
    )
    rgba = color_from_hex(config.ARENA["border_color"] if color is None else color)
    vertices = np.array(points, dtype=np.float32)
    colors = np.tile(np.array(rgba, dtype=np.float32), (len(vertices), 1))
    return vertices, colors


def outline_vertices(size, thickness: float, color: int = None):
    """Corners of the playable region, for a line loop."""
    width, height = size
    t = thickness
    rgba = color_from_hex(config.ARENA["outline_color"] if color is None else color)
    vertices = np.array(
        [(t, t), (width - t, t), (width - t, height - t), (t, height - t)],
        dtype=np.float32
    )
    colors = np.tile(np.array(rgba, dtype=np.float32), (len(vertices), 1))
    return vertices, colors
