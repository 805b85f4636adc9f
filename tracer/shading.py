"""Recursive Whitted-style shading.

The bounce budget is passed down explicitly; each reflected or refracted ray
spends one unit and a budget of zero contributes black, which bounds the
recursion even between two facing mirrors.
"""

import math

from tracer.intersection import Computations, hit, prepare_computations
from tracer.material import lighting
from tracer.math import BLACK, Color
from tracer.ray import Ray

MAX_DEPTH = 5


def color_at(world, ray: Ray, remaining: int = MAX_DEPTH) -> Color:
    xs = world.intersect(ray)
    nearest = hit(xs)
    if nearest is None:
        return world.background
    comps = prepare_computations(nearest, ray, xs)
    return shade_hit(world, comps, remaining)


def shade_hit(world, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    material = comps.shape.material
    surface = BLACK
    for light in world.lights:
        intensity = light.intensity_at(comps.over_point, world)
        surface = surface + lighting(material, comps.shape, light, comps.over_point,
                                     comps.eyev, comps.normalv, intensity)

    reflected = reflected_color(world, comps, remaining)
    refracted = refracted_color(world, comps, remaining)

    if material.reflective > 0 and material.transparency > 0:
        reflectance = comps.schlick()
        return surface + reflected * reflectance + refracted * (1 - reflectance)
    return surface + reflected + refracted


def reflected_color(world, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    reflective = comps.shape.material.reflective
    if remaining <= 0 or reflective == 0:
        return BLACK
    reflect_ray = Ray(comps.over_point, comps.reflectv)
    return color_at(world, reflect_ray, remaining - 1) * reflective


def refracted_color(world, comps: Computations, remaining: int = MAX_DEPTH) -> Color:
    transparency = comps.shape.material.transparency
    if remaining <= 0 or transparency == 0:
        return BLACK

    # Snell's law
    n_ratio = comps.n1 / comps.n2
    cos_i = comps.eyev.dot(comps.normalv)
    sin2_t = n_ratio * n_ratio * (1 - cos_i * cos_i)
    if sin2_t > 1:
        # total internal reflection
        return BLACK

    cos_t = math.sqrt(1.0 - sin2_t)
    direction = comps.normalv * (n_ratio * cos_i - cos_t) - comps.eyev * n_ratio
    refract_ray = Ray(comps.under_point, direction)
    return color_at(world, refract_ray, remaining - 1) * transparency
