"""Batch renderer for colored 2D vertices, backed by VBOs."""

from dataclasses import dataclass

import numpy as np
from OpenGL.GL import *
from OpenGL.arrays import vbo

from .primitives import PrimitiveType

GL_MODES = {
    PrimitiveType.TRIANGLES: GL_TRIANGLES,
    PrimitiveType.LINE_LOOP: GL_LINE_LOOP,
}


@dataclass
class RenderContext:
    """Per-frame drawing state; ``alpha`` scales the alpha of every vertex."""
    alpha: float = 1.0


class GeometryRenderer:
    """
    Uploads colored 2D vertices and draws them with the camera's projection.

    Colors may be RGB or RGBA rows. Buffers grow on demand from the initial
    capacity.
    """

    def __init__(self, capacity: int = 400):
        self.capacity = capacity
        self._vertices = np.zeros((capacity, 2), dtype=np.float32)
        self._colors = np.zeros((capacity, 4), dtype=np.float32)

        self._vbo_vertices = None
        self._vbo_colors = None
        self._vbos_initialized = False

    def _init_vbos(self):
        """Initialize VBOs for fast GPU rendering."""
        if self._vbos_initialized:
            return

        try:
            self._vbo_vertices = vbo.VBO(self._vertices, usage=GL_DYNAMIC_DRAW)
            self._vbo_colors = vbo.VBO(self._colors, usage=GL_DYNAMIC_DRAW)
            self._vbos_initialized = True
        except Exception as exc:
            # Fallback to client-side arrays
            print(f"[Renderer] VBOs unavailable ({exc}), using client arrays")
            self._vbos_initialized = False

    def _ensure_capacity(self, count: int):
        if count <= self.capacity:
            return
        while self.capacity < count:
            self.capacity *= 2
        self._vertices = np.zeros((self.capacity, 2), dtype=np.float32)
        self._colors = np.zeros((self.capacity, 4), dtype=np.float32)

    def draw(self, context: RenderContext, vertices, colors, primitive: PrimitiveType, camera):
        """Draw ``vertices`` as ``primitive`` in scene coordinates."""
        count = len(vertices)
        if count == 0:
            return

        if not self._vbos_initialized:
            self._init_vbos()

        self._ensure_capacity(count)
        self._vertices[:count] = vertices
        colors = np.asarray(colors, dtype=np.float32)
        self._colors[:count, :colors.shape[1]] = colors
        if colors.shape[1] == 3:
            self._colors[:count, 3] = 1.0
        self._colors[:count, 3] *= context.alpha

        camera.apply()

        glEnable(GL_BLEND)
        glBlendFunc(GL_SRC_ALPHA, GL_ONE_MINUS_SRC_ALPHA)
        mode = GL_MODES[primitive]

        if self._vbos_initialized:
            self._vbo_vertices.set_array(self._vertices[:count])
            self._vbo_colors.set_array(self._colors[:count])

            self._vbo_vertices.bind()
            glEnableClientState(GL_VERTEX_ARRAY)
            glVertexPointer(2, GL_FLOAT, 0, None)

            self._vbo_colors.bind()
            glEnableClientState(GL_COLOR_ARRAY)
            glColorPointer(4, GL_FLOAT, 0, None)

            glDrawArrays(mode, 0, count)

            self._vbo_vertices.unbind()
            self._vbo_colors.unbind()
            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)
        else:
            glEnableClientState(GL_VERTEX_ARRAY)
            glEnableClientState(GL_COLOR_ARRAY)

            glVertexPointer(2, GL_FLOAT, 0, self._vertices[:count])
            glColorPointer(4, GL_FLOAT, 0, self._colors[:count])
            glDrawArrays(mode, 0, count)

            glDisableClientState(GL_VERTEX_ARRAY)
            glDisableClientState(GL_COLOR_ARRAY)

        glDisable(GL_BLEND)
