"""Primitive topologies understood by the batch renderer."""

from enum import Enum


class PrimitiveType(Enum):
    TRIANGLES = "triangles"
    LINE_LOOP = "line_loop"
