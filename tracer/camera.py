import math
from tracer.math import Tuple, point
from tracer.matrix import Matrix, identity, view_transform
from tracer.ray import Ray


class Camera:
    def __init__(self,
                 hsize: int,                 # 가로 픽셀 수
                 vsize: int,                 # 세로 픽셀 수
                 field_of_view: float,       # 화각(rad), 긴 쪽 기준
                 transform: Matrix = None):  # 월드 -> 카메라 변환
        if hsize < 1 or vsize < 1:
            raise ValueError(f"camera needs a positive canvas size, got {hsize}x{vsize}")
        self.hsize = hsize
        self.vsize = vsize
        self.field_of_view = field_of_view

        half_view = math.tan(field_of_view / 2)
        aspect = hsize / vsize
        if aspect >= 1:
            self.half_width = half_view
            self.half_height = half_view / aspect
        else:
            self.half_width = half_view * aspect
            self.half_height = half_view
        self.pixel_size = self.half_width * 2 / hsize

        self.transform = transform if transform is not None else identity()
        self.inverse = self.transform.inverse()
        self.origin = self.inverse * point(0, 0, 0)

    @classmethod
    def look_at(cls, hsize, vsize, field_of_view,
                lookfrom: Tuple, lookat: Tuple, vup: Tuple) -> "Camera":
        return cls(hsize, vsize, field_of_view, view_transform(lookfrom, lookat, vup))

    def ray_for_pixel(self, px: int, py: int) -> Ray:
        # offset to the pixel centre; the canvas sits at z = -1
        xoffset = (px + 0.5) * self.pixel_size
        yoffset = (py + 0.5) * self.pixel_size
        world_x = self.half_width - xoffset
        world_y = self.half_height - yoffset
        pixel = self.inverse * point(world_x, world_y, -1)
        direction = (pixel - self.origin).normalize()
        return Ray(self.origin, direction)
