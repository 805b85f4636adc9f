"""Light sources.

Every light answers ``intensity_at(point, world)``: the fraction (0..1) of
its intensity that reaches ``point`` once shadows and the light's own shape
are accounted for. Lights hold no mutable state, so a world can be shaded
from several threads at once.
"""

import numpy as np

from tracer.errors import ConfigurationError
from tracer.math import Color, Tuple, vector


class PointLight:
    def __init__(self, position: Tuple, intensity: Color):
        self.position = position
        self.intensity = intensity

    def intensity_at(self, point: Tuple, world) -> float:
        return 0.0 if world.is_shadowed(self.position, point) else 1.0

    def __eq__(self, other):
        if type(self) is not type(other):
            return NotImplemented
        return self.position == other.position and self.intensity == other.intensity

    __hash__ = None

    def __repr__(self):
        return f"{type(self).__name__}({self.position!r}, {self.intensity!r})"


class SpotLight(PointLight):
    """A point light restricted to a cone around `direction`.

    width: half-angle of the cone in radians
    fade: fraction of the cone, from the edge inward, over which the light
        falls off linearly to zero
    """

    def __init__(self, position: Tuple, intensity: Color, direction: Tuple,
                 width: float, fade: float = 0.0):
        super().__init__(position, intensity)
        if width <= 0:
            raise ConfigurationError(f"spot light width must be positive, got {width}")
        if not 0.0 <= fade <= 1.0:
            raise ConfigurationError(f"spot light fade must be within [0, 1], got {fade}")
        self.direction = direction.normalize()
        self.width = width
        self.fade = fade
        self.narrow_width = width * (1.0 - fade)

    def intensity_at(self, point, world):
        angle = self.direction.angle(point - self.position)
        if angle > self.width:
            return 0.0
        if world.is_shadowed(self.position, point):
            return 0.0
        if angle > self.narrow_width:
            return 1.0 - (angle - self.narrow_width) / (self.width - self.narrow_width)
        return 1.0


class AreaLight(PointLight):
    """Soft-shadowing light spread over a cube or a sphere around `position`.

    The sample positions are drawn once, at construction, from a seeded
    generator; shading the same scene twice gives the same image.
    """

    SHAPES = ("cube", "sphere")

    def __init__(self, position: Tuple, intensity: Color, size: float,
                 samples: int = 16, shape: str = "cube", seed: int = 0):
        super().__init__(position, intensity)
        if samples < 1:
            raise ConfigurationError(f"area light needs at least one sample, got {samples}")
        if size < 0:
            raise ConfigurationError(f"area light size must be non-negative, got {size}")
        if shape not in self.SHAPES:
            raise ConfigurationError(f"area light shape must be one of {self.SHAPES}, got {shape!r}")
        self.size = size
        self.shape = shape

        rng = np.random.default_rng(seed)
        if shape == "cube":
            offsets = rng.uniform(-size, size, size=(samples, 3))
        else:
            offsets = rng.normal(size=(samples, 3))
            lengths = np.linalg.norm(offsets, axis=1, keepdims=True)
            lengths[lengths == 0.0] = 1.0
            offsets = offsets / lengths * size
        self.sample_positions = tuple(position + vector(*offset) for offset in offsets.tolist())

    def intensity_at(self, point, world):
        lit = sum(1 for sample in self.sample_positions
                  if not world.is_shadowed(sample, point))
        return lit / len(self.sample_positions)
