import argparse
import logging
import math
import time

from tracer.scene import RenderSettings
from scene_builders.demo_scene_builder import DemoSceneBuilder
from renderers.base_renderer import RendererFactory

# 렌더러 모듈들 import (등록을 위해)
import renderers.cpu_renderer
import renderers.threaded_renderer

logger = logging.getLogger("main")


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(description='Whitted-style Ray Tracer')
    parser.add_argument('--renderer', '-r',
                        choices=RendererFactory.list_available(),
                        default='cpu_raytracer',
                        help='렌더러 선택')
    parser.add_argument('--width', '-w', type=int, default=400,
                        help='이미지 가로 크기')
    parser.add_argument('--height', type=int, default=200,
                        help='이미지 세로 크기')
    parser.add_argument('--depth', '-d', type=int, default=5,
                        help='최대 반사/굴절 깊이')
    parser.add_argument('--fov', type=float, default=60.0,
                        help='시야각 (도)')
    parser.add_argument('--workers', type=int, default=4,
                        help='threaded_raytracer 스레드 수')
    parser.add_argument('--bvh-threshold', type=int, default=0,
                        help='그룹 분할 기준 자식 수 (0이면 분할 안 함)')
    parser.add_argument('--soft-shadows', action='store_true',
                        help='점 조명 대신 영역 조명 사용')
    parser.add_argument('--output', '-o', default='output.png',
                        help='출력 파일명')
    parser.add_argument('--verbose', '-v', action='store_true',
                        help='디버그 로그 출력')
    return parser


def main(argv=None):
    args = build_parser().parse_args(argv)

    logging.basicConfig(
        level=logging.DEBUG if args.verbose else logging.INFO,
        format='%(asctime)s %(levelname)s %(name)s: %(message)s',
    )

    # 렌더링 설정
    settings = RenderSettings(
        width=args.width,
        height=args.height,
        field_of_view=math.radians(args.fov),
        max_depth=args.depth,
        workers=args.workers,
        bvh_threshold=args.bvh_threshold,
    )

    # 씬 생성
    scene_builder = DemoSceneBuilder(soft_shadows=args.soft_shadows)
    world = scene_builder.build_world()
    camera = scene_builder.create_camera(settings)

    # 렌더러 생성
    renderer = RendererFactory.create(args.renderer)
    logger.info("renderer: %s (%s)", renderer.get_name(), ', '.join(renderer.get_capabilities()))
    if settings.workers > 1 and not renderer.supports("multithreading"):
        # 단일 스레드 렌더러는 --workers를 무시한다
        logger.warning("%s renders on one thread; --workers %d is ignored",
                       renderer.get_name(), settings.workers)

    start_time = time.perf_counter()
    canvas = renderer.render(world, camera, settings)
    elapsed = time.perf_counter() - start_time

    # 결과 저장
    canvas.to_image().save(args.output)
    logger.info("saved %s", args.output)

    minutes = int(elapsed // 60)
    seconds = elapsed % 60
    logger.info("total: %dm %.2fs", minutes, seconds)


if __name__ == "__main__":
    main()
