from tracer.errors import InvalidMaterialError
from tracer.math import BLACK, WHITE, Color, Tuple
from tracer.patterns import Pattern


class Material:
    def __init__(self,
                 color: Color = WHITE,
                 ambient=0.1,
                 diffuse=0.9,
                 specular=0.9,
                 shininess=200.0,
                 reflective=0.0,
                 transparency=0.0,
                 refractive_index=1.0,
                 pattern: Pattern = None):
        """
        color: 패턴이 없을 때 사용될 고정 색
        ambient, diffuse, specular: Phong 계수
        shininess: 스페큘러 지수
        reflective: 반사 강도 (0 무광, 1 완전 거울)
        transparency: 투명도 (0 불투명, 1 완전 투명)
        refractive_index: 굴절률 (1.0 진공, 1.5 유리, 2.417 다이아몬드)
        pattern: 있으면 color 대신 패턴에서 색을 샘플링
        """
        for name, value in (("ambient", ambient), ("diffuse", diffuse),
                            ("specular", specular), ("shininess", shininess),
                            ("reflective", reflective), ("transparency", transparency)):
            if value < 0:
                raise InvalidMaterialError(f"{name} must be non-negative, got {value}")
        if refractive_index <= 0:
            raise InvalidMaterialError(
                f"refractive_index must be positive, got {refractive_index}")

        self.color = color
        self.ambient = float(ambient)
        self.diffuse = float(diffuse)
        self.specular = float(specular)
        self.shininess = float(shininess)
        self.reflective = float(reflective)
        self.transparency = float(transparency)
        self.refractive_index = float(refractive_index)
        self.pattern = pattern

    def __eq__(self, other):
        if not isinstance(other, Material):
            return NotImplemented
        return (self.color == other.color
                and self.ambient == other.ambient
                and self.diffuse == other.diffuse
                and self.specular == other.specular
                and self.shininess == other.shininess
                and self.reflective == other.reflective
                and self.transparency == other.transparency
                and self.refractive_index == other.refractive_index
                and self.pattern is other.pattern)

    __hash__ = None

    def __repr__(self):
        return (f"Material(color={self.color!r}, ambient={self.ambient}, "
                f"diffuse={self.diffuse}, specular={self.specular}, "
                f"shininess={self.shininess}, reflective={self.reflective}, "
                f"transparency={self.transparency}, "
                f"refractive_index={self.refractive_index})")


def lighting(material: Material, shape, light, point: Tuple,
             eyev: Tuple, normalv: Tuple, intensity: float = 1.0) -> Color:
    """Phong reflection at `point` for one light.

    `intensity` is the fraction of the light that reaches the point: 0.0 when
    fully shadowed, which leaves only the ambient term.
    """
    if material.pattern is not None:
        color = material.pattern.color_at_shape(shape, point)
    else:
        color = material.color

    effective_color = color * light.intensity
    ambient = effective_color * material.ambient
    if intensity <= 0.0:
        return ambient

    lightv = (light.position - point).normalize()
    light_dot_normal = lightv.dot(normalv)
    if light_dot_normal < 0:
        # light on the other side of the surface
        return ambient

    diffuse = effective_color * material.diffuse * light_dot_normal
    reflectv = (-lightv).reflect(normalv)
    reflect_dot_eye = reflectv.dot(eyev)
    if reflect_dot_eye <= 0:
        specular = BLACK
    else:
        factor = reflect_dot_eye ** material.shininess
        specular = light.intensity * material.specular * factor
    return ambient + (diffuse + specular) * intensity
