import logging
from concurrent.futures import ThreadPoolExecutor, as_completed
from typing import List

from tracer.camera import Camera
from tracer.canvas import Canvas
from tracer.scene import RenderSettings, World
from renderers.base_renderer import BaseRenderer, RendererFactory

logger = logging.getLogger(__name__)


class ThreadedRenderer(BaseRenderer):
    """행들을 스레드 풀에 나눠서 렌더링

    렌더링 중에는 world를 읽기만 하므로 워커들이 락 없이 공유한다.
    완성된 행은 작업을 제출한 스레드가 canvas에 기록한다.
    """

    def __init__(self):
        super().__init__("threaded_raytracer")

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
            "multithreading",
        ]

    def _render_rows(self, world: World, camera: Camera, settings: RenderSettings, canvas: Canvas):
        logger.info("%s: %d worker threads", self.name, settings.workers)
        done = 0
        with ThreadPoolExecutor(max_workers=settings.workers) as pool:
            futures = {
                pool.submit(self.render_row, world, camera, y, settings.max_depth): y
                for y in range(camera.vsize)
            }
            for future in as_completed(futures):
                canvas.write_row(futures[future], future.result())
                done += 1
                if done % 50 == 0:
                    logger.info("%d/%d rows done", done, camera.vsize)


# 렌더러 등록
RendererFactory.register("threaded_raytracer", ThreadedRenderer)
