"""Shared fixtures for the tracer tests.

The default world is the usual two-sphere test scene: an outer unit sphere
with a greenish matte material and an inner sphere scaled by half, lit by a
white point light up and to the left of the camera.
"""

import pytest

from tracer.geometry import Sphere
from tracer.lights import PointLight
from tracer.material import Material
from tracer.math import Color, WHITE, point
from tracer.matrix import scaling
from tracer.scene import World


@pytest.fixture
def default_world():
    """Two concentric spheres and one point light."""
    outer = Sphere(material=Material(color=Color(0.8, 1.0, 0.6), diffuse=0.7, specular=0.2))
    inner = Sphere(transform=scaling(0.5, 0.5, 0.5))
    light = PointLight(point(-10, 10, -10), WHITE)
    return World([outer, inner], [light])


@pytest.fixture
def default_material():
    return Material()
