import numpy as np
from PIL import Image

from tracer.math import Color


class Canvas:
    """Linear RGB pixel buffer, rows top to bottom."""

    def __init__(self, width: int, height: int):
        self.width = width
        self.height = height
        self.pixels = np.zeros((height, width, 3), dtype=np.float64)

    def write_pixel(self, x: int, y: int, color: Color):
        self.pixels[y, x] = (color.red, color.green, color.blue)

    def write_row(self, y: int, colors):
        self.pixels[y] = [(c.red, c.green, c.blue) for c in colors]

    def pixel_at(self, x: int, y: int) -> Color:
        r, g, b = self.pixels[y, x]
        return Color(r, g, b)

    def to_image(self) -> Image.Image:
        data = np.clip(self.pixels, 0.0, 1.0) * 255.0
        # (H, W, 3) uint8 maps to an RGB image
        return Image.fromarray(np.rint(data).astype(np.uint8))
