import logging
from typing import List

from tracer.camera import Camera
from tracer.canvas import Canvas
from tracer.scene import RenderSettings, World
from renderers.base_renderer import BaseRenderer, RendererFactory

logger = logging.getLogger(__name__)


class CPURenderer(BaseRenderer):
    """CPU 기반 레이트레이싱 렌더러 (단일 스레드, 행 단위)"""

    PROGRESS_EVERY = 50

    def __init__(self):
        super().__init__("cpu_raytracer")

    def get_capabilities(self) -> List[str]:
        return [
            "ray_tracing",
            "shadows",
            "reflection",
            "refraction",
            "area_lights",
            "spot_lights",
            "csg",
            "bvh_acceleration",
        ]

    def _render_rows(self, world: World, camera: Camera, settings: RenderSettings, canvas: Canvas):
        for y in range(camera.vsize):
            canvas.write_row(y, self.render_row(world, camera, y, settings.max_depth))
            if y % self.PROGRESS_EVERY == 0:
                logger.info("CPU is working for you...: %d rows left", camera.vsize - y)


# 렌더러 등록
RendererFactory.register("cpu_raytracer", CPURenderer)
