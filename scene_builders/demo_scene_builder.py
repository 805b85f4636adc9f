import logging
import math

from tracer.acceleration import Group
from tracer.camera import Camera
from tracer.csg import CSG
from tracer.geometry import Cone, Cube, Cylinder, Plane, Sphere, Triangle, glass_sphere
from tracer.lights import AreaLight, PointLight, SpotLight
from tracer.material import Material
from tracer.math import Color, point, vector
from tracer.matrix import rotation_x, rotation_y, rotation_z, scaling, translation
from tracer.patterns import CheckerPattern, GradientPattern, RingPattern, StripePattern
from tracer.scene import RenderSettings, World

logger = logging.getLogger(__name__)


class DemoSceneBuilder:
    """체커 바닥 위에 유리, 거울, CSG, 육각형 그룹을 배치하는 빌더"""

    def __init__(self, soft_shadows: bool = False, light_samples: int = 16):
        self.soft_shadows = soft_shadows
        self.light_samples = light_samples

        # 육각형 크기
        self.hexagon_scale = 0.6
        self.edge_radius = 0.25

        # 피라미드 한 변 길이
        self.pyramid_size = 0.8

    def build_world(self) -> World:
        """완전한 데모 장면 생성"""
        world = World()
        materials = self._create_materials()

        self._create_room(world, materials)
        self._create_spheres(world, materials)
        self._create_csg(world, materials)
        self._create_hexagon(world, materials)
        self._create_pyramid(world, materials)
        self._create_lighting(world)

        logger.debug("demo world: %d objects, %d lights",
                     len(world.objects), len(world.lights))
        return world

    def create_camera(self, settings: RenderSettings) -> Camera:
        """장면 전체가 보이는 위치에서 바라보는 카메라"""
        lookfrom = point(0, 1.5, -5)
        lookat = point(0, 1, 0)
        vup = vector(0, 1, 0)
        return Camera.look_at(settings.width, settings.height, settings.field_of_view,
                              lookfrom, lookat, vup)

    def _create_materials(self) -> dict:
        """모든 재질 생성"""
        checker = CheckerPattern(Color(0.35, 0.35, 0.35), Color(0.65, 0.65, 0.65),
                                 transform=scaling(0.5, 0.5, 0.5))
        wallpaper = StripePattern(Color(0.45, 0.45, 0.55), Color(0.55, 0.55, 0.65),
                                  transform=rotation_y(math.pi / 2) * scaling(0.25, 0.25, 0.25))
        sunset = GradientPattern(Color(1.0, 0.4, 0.1), Color(0.9, 0.8, 0.2),
                                 transform=translation(-1, 0, 0) * scaling(2, 1, 1))
        rings = RingPattern(Color(0.2, 0.6, 0.3), Color(0.1, 0.3, 0.15),
                            transform=rotation_x(math.pi / 2) * scaling(0.1, 0.1, 0.1))

        return {
            'floor': Material(pattern=checker, specular=0.0, reflective=0.2),
            'wall': Material(pattern=wallpaper, specular=0.0),
            'glass': Material(
                color=Color(0.05, 0.05, 0.05),
                diffuse=0.1,
                specular=1.0,
                shininess=300,
                reflective=0.9,
                transparency=0.9,
                refractive_index=1.5,
            ),
            'mirror': Material(
                color=Color(0.1, 0.1, 0.1),
                diffuse=0.1,
                specular=0.95,
                reflective=0.9,
            ),
            'sunset': Material(pattern=sunset, diffuse=0.7, specular=0.3),
            'rings': Material(pattern=rings, diffuse=0.8, specular=0.1),
            'red': Material(color=Color(0.8, 0.1, 0.1), diffuse=0.7, specular=0.3),
            'hexagon': Material(color=Color(0.9, 0.7, 0.2), diffuse=0.7, specular=0.6,
                                shininess=100, reflective=0.1),
        }

    def _create_room(self, world: World, materials: dict):
        """바닥과 뒷벽"""
        world.add_object(Plane(material=materials['floor']))

        back_wall = Plane(
            transform=translation(0, 0, 8) * rotation_x(math.pi / 2),
            material=materials['wall'],
        )
        world.add_object(back_wall)

    def _create_spheres(self, world: World, materials: dict):
        """유리 구체 (안에 공기 방울), 거울 구체, 패턴 구체"""
        glass = glass_sphere(transform=translation(-0.6, 1, 0.6))
        glass.material = materials['glass']
        # 유리 안의 공기 방울
        bubble = glass_sphere(transform=translation(-0.6, 1, 0.6) * scaling(0.5, 0.5, 0.5),
                              casts_shadow=False)
        bubble.material = Material(
            color=Color(0.05, 0.05, 0.05), diffuse=0.0, specular=1.0, shininess=300,
            reflective=0.9, transparency=0.9, refractive_index=1.0000034,
        )
        world.add_object(glass)
        world.add_object(bubble)

        mirror = Sphere(transform=translation(1.6, 0.7, 1.8) * scaling(0.7, 0.7, 0.7),
                        material=materials['mirror'])
        world.add_object(mirror)

        small = Sphere(transform=translation(-1.8, 0.4, -0.8) * scaling(0.4, 0.4, 0.4),
                       material=materials['sunset'])
        world.add_object(small)

        cone = Cone(minimum=-1, maximum=0, closed=True,
                    transform=translation(2.2, 1, -0.2) * scaling(0.4, 1, 0.4),
                    material=materials['rings'])
        world.add_object(cone)

    def _create_csg(self, world: World, materials: dict):
        """구멍 뚫린 주사위: 큐브 - 구"""
        cube = Cube(material=materials['red'])
        hollow = Sphere(transform=scaling(1.3, 1.3, 1.3), material=materials['red'])
        die = CSG("difference", cube, hollow,
                  transform=translation(0.7, 0.4, -1.2) * rotation_y(math.pi / 5)
                  * scaling(0.4, 0.4, 0.4))
        world.add_object(die)

    def _create_hexagon(self, world: World, materials: dict):
        """모서리는 구, 변은 원기둥으로 만든 육각형"""
        hexagon = Group(transform=translation(-2.6, 0.6, 2.5) * rotation_x(-math.pi / 6)
                        * scaling(self.hexagon_scale, self.hexagon_scale, self.hexagon_scale))
        for n in range(6):
            side = self._hexagon_side(materials['hexagon'])
            side.transform = rotation_y(n * math.pi / 3)
            hexagon.add_child(side)
        world.add_object(hexagon)

    def _hexagon_side(self, material: Material) -> Group:
        r = self.edge_radius
        corner = Sphere(transform=translation(0, 0, -1) * scaling(r, r, r), material=material)
        edge = Cylinder(minimum=0, maximum=1, material=material,
                        transform=translation(0, 0, -1) * rotation_y(-math.pi / 6)
                        * rotation_z(-math.pi / 2) * scaling(r, 1, r))
        return Group([corner, edge])

    def _create_pyramid(self, world: World, materials: dict):
        """삼각형 네 개로 만든 사면체"""
        s = self.pyramid_size
        base = (-0.2, 0.0, 3.2)
        apex = point(base[0], base[1] + s * 1.2, base[2])
        corners = [
            point(base[0] + s * math.cos(a), base[1], base[2] + s * math.sin(a))
            for a in (0.0, 2 * math.pi / 3, 4 * math.pi / 3)
        ]
        faces = [
            Triangle(corners[0], corners[1], apex, material=materials['sunset']),
            Triangle(corners[1], corners[2], apex, material=materials['sunset']),
            Triangle(corners[2], corners[0], apex, material=materials['sunset']),
            Triangle(corners[0], corners[2], corners[1], material=materials['sunset']),
        ]
        world.add_object(Group(faces))

    def _create_lighting(self, world: World):
        """주 조명과 스포트라이트"""
        position = point(-6, 8, -8)
        intensity = Color(0.9, 0.9, 0.9)
        if self.soft_shadows:
            world.add_light(AreaLight(position, intensity, size=0.8,
                                      samples=self.light_samples, shape="sphere"))
        else:
            world.add_light(PointLight(position, intensity))

        spot = SpotLight(point(3, 6, -3), Color(0.4, 0.35, 0.3),
                         direction=point(0.7, 0.4, -1.2) - point(3, 6, -3),
                         width=math.pi / 10, fade=0.5)
        world.add_light(spot)
