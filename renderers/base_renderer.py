import logging
import time
from abc import ABC, abstractmethod
from typing import Dict, List, Type

from tracer.camera import Camera
from tracer.canvas import Canvas
from tracer.scene import RenderSettings, World
from tracer.shading import color_at

logger = logging.getLogger(__name__)


class BaseRenderer(ABC):
    """모든 렌더러가 구현해야 하는 베이스 클래스"""

    def __init__(self, name: str):
        self.name = name

    def render(self, world: World, camera: Camera, settings: RenderSettings) -> Canvas:
        """장면을 렌더링하여 Canvas를 반환"""
        if settings.bvh_threshold > 0:
            world.divide(settings.bvh_threshold)

        logger.info("%s: rendering %dx%d, depth %d",
                    self.name, camera.hsize, camera.vsize, settings.max_depth)
        start_time = time.perf_counter()

        canvas = Canvas(camera.hsize, camera.vsize)
        self._render_rows(world, camera, settings, canvas)

        elapsed = time.perf_counter() - start_time
        minutes = int(elapsed // 60)
        seconds = elapsed % 60
        logger.info("%s: finished in %dm %.2fs", self.name, minutes, seconds)
        return canvas

    @abstractmethod
    def _render_rows(self, world: World, camera: Camera, settings: RenderSettings, canvas: Canvas):
        """canvas의 모든 행을 채운다"""

    @abstractmethod
    def get_capabilities(self) -> List[str]:
        """이 렌더러가 지원하는 기능들을 반환"""

    def get_name(self) -> str:
        return self.name

    def supports(self, feature: str) -> bool:
        """특정 기능을 지원하는지 확인"""
        return feature in self.get_capabilities()

    @staticmethod
    def render_row(world: World, camera: Camera, y: int, max_depth: int):
        """한 행의 픽셀 색상을 계산"""
        return [color_at(world, camera.ray_for_pixel(x, y), max_depth)
                for x in range(camera.hsize)]


class RendererFactory:
    """이름으로 렌더러 클래스를 찾아 생성하는 레지스트리"""

    _renderers: Dict[str, Type[BaseRenderer]] = {}

    @classmethod
    def register(cls, name: str, renderer_class: Type[BaseRenderer]):
        if not (isinstance(renderer_class, type) and issubclass(renderer_class, BaseRenderer)):
            raise TypeError(f"{renderer_class!r} is not a BaseRenderer subclass")
        if cls._renderers.get(name, renderer_class) is not renderer_class:
            raise ValueError(f"renderer name already taken: {name}")
        cls._renderers[name] = renderer_class

    @classmethod
    def create(cls, name: str, **kwargs) -> BaseRenderer:
        try:
            renderer_class = cls._renderers[name]
        except KeyError:
            available = ", ".join(sorted(cls._renderers)) or "none"
            raise ValueError(f"unknown renderer {name!r} (available: {available})") from None
        return renderer_class(**kwargs)

    @classmethod
    def list_available(cls) -> List[str]:
        """등록 순서대로 렌더러 이름 반환"""
        return list(cls._renderers)
