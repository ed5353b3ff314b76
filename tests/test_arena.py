import numpy as np
import pytest

from rendering.arena import border_vertices, color_from_hex, outline_vertices
from rendering.primitives import PrimitiveType


def test_color_from_hex():
    assert color_from_hex(0xffffffff) == (1.0, 1.0, 1.0, 1.0)
    r, g, b, a = color_from_hex(0xff000080)
    assert (r, g, b) == (1.0, 0.0, 0.0)
    assert a == pytest.approx(128 / 255)


def test_border_is_four_strips_of_two_triangles():
    vertices, colors = border_vertices((1000.0, 800.0), 50.0)

    assert vertices.shape == (24, 2)
    assert colors.shape == (24, 4)
    assert vertices[:, 0].min() == 0.0 and vertices[:, 0].max() == 1000.0
    assert vertices[:, 1].min() == 0.0 and vertices[:, 1].max() == 800.0
    np.testing.assert_allclose(colors[0], color_from_hex(0x222222ff))


def test_border_strips_have_the_given_thickness():
    vertices, _ = border_vertices((1000.0, 1000.0), 50.0)
    left = vertices[0:6]
    bottom = vertices[18:24]

    assert left[:, 0].max() - left[:, 0].min() == pytest.approx(50.0)
    assert bottom[:, 1].max() - bottom[:, 1].min() == pytest.approx(50.0)


def test_outline_traces_the_playable_region():
    vertices, colors = outline_vertices((1000.0, 1000.0), 50.0, color=0x00ff00ff)

    np.testing.assert_allclose(vertices, [[50, 50], [950, 50], [950, 950], [50, 950]])
    np.testing.assert_allclose(colors, np.tile([0.0, 1.0, 0.0, 1.0], (4, 1)))


def test_primitive_types_are_the_ones_drawn():
    assert {p.name for p in PrimitiveType} == {"TRIANGLES", "LINE_LOOP"}
