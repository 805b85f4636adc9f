"""Tests for the renderer registry, the renderers and the command line."""

import logging
import math

import numpy as np
import pytest

from renderers.base_renderer import BaseRenderer, RendererFactory
from renderers.cpu_renderer import CPURenderer
from renderers.threaded_renderer import ThreadedRenderer
from scene_builders.demo_scene_builder import DemoSceneBuilder
from tracer.acceleration import Group
from tracer.camera import Camera
from tracer.canvas import Canvas
from tracer.geometry import Sphere
from tracer.math import Color, point, vector
from tracer.matrix import translation
from tracer.scene import RenderSettings, World
from tracer.shading import color_at

import main


@pytest.fixture
def small_camera():
    return Camera.look_at(11, 11, math.pi / 2, point(0, 0, -5), point(0, 0, 0), vector(0, 1, 0))


class TestRenderSettings:
    """Tests for render configuration validation."""

    def test_defaults(self):
        s = RenderSettings()
        assert (s.width, s.height) == (400, 200)
        assert s.max_depth == 5
        assert s.workers == 1
        assert s.bvh_threshold == 0

    @pytest.mark.parametrize("kwargs", [
        {"width": 0},
        {"height": -1},
        {"field_of_view": 0},
        {"field_of_view": math.pi},
        {"max_depth": -1},
        {"workers": 0},
        {"bvh_threshold": -2},
    ])
    def test_invalid(self, kwargs):
        with pytest.raises(ValueError):
            RenderSettings(**kwargs)


class TestFactory:
    """Tests for the renderer registry."""

    def test_registered_renderers(self):
        available = RendererFactory.list_available()
        assert "cpu_raytracer" in available
        assert "threaded_raytracer" in available

    def test_create(self):
        assert isinstance(RendererFactory.create("cpu_raytracer"), CPURenderer)
        assert isinstance(RendererFactory.create("threaded_raytracer"), ThreadedRenderer)

    def test_unknown_renderer(self):
        with pytest.raises(ValueError, match="cpu_raytracer"):
            RendererFactory.create("cuda_raytracer")

    def test_register_rejects_non_renderers(self, monkeypatch):
        monkeypatch.setattr(RendererFactory, "_renderers", dict(RendererFactory._renderers))
        with pytest.raises(TypeError):
            RendererFactory.register("bogus", object)
        with pytest.raises(TypeError):
            RendererFactory.register("bogus", CPURenderer())
        assert "bogus" not in RendererFactory.list_available()

    def test_register_name_clash(self, monkeypatch):
        monkeypatch.setattr(RendererFactory, "_renderers", dict(RendererFactory._renderers))
        RendererFactory.register("cpu_raytracer", CPURenderer)
        with pytest.raises(ValueError):
            RendererFactory.register("cpu_raytracer", ThreadedRenderer)
        assert isinstance(RendererFactory.create("cpu_raytracer"), CPURenderer)

    def test_capabilities(self):
        renderer = RendererFactory.create("threaded_raytracer")
        assert isinstance(renderer, BaseRenderer)
        assert renderer.get_name() == "threaded_raytracer"
        assert renderer.supports("multithreading")
        assert not RendererFactory.create("cpu_raytracer").supports("multithreading")


class TestRender:
    """Tests for rendering a world onto a canvas."""

    def test_cpu_render_default_world(self, default_world, small_camera):
        settings = RenderSettings(width=11, height=11)
        canvas = CPURenderer().render(default_world, small_camera, settings)
        assert isinstance(canvas, Canvas)
        assert canvas.pixel_at(5, 5) == Color(0.38066, 0.47583, 0.2855)

    def test_threaded_matches_cpu(self, default_world, small_camera):
        """Splitting rows across threads does not change the image."""
        serial = CPURenderer().render(default_world, small_camera,
                                      RenderSettings(width=11, height=11))
        parallel = ThreadedRenderer().render(default_world, small_camera,
                                             RenderSettings(width=11, height=11, workers=4))
        np.testing.assert_array_equal(serial.pixels, parallel.pixels)

    def test_every_pixel_is_color_at(self, default_world, small_camera):
        canvas = CPURenderer().render(default_world, small_camera,
                                      RenderSettings(width=11, height=11, max_depth=2))
        for y in (0, 3, 10):
            for x in (0, 5, 9):
                expected = color_at(default_world, small_camera.ray_for_pixel(x, y), 2)
                assert canvas.pixel_at(x, y) == expected

    def test_bvh_threshold_divides_groups(self, small_camera):
        shapes = [Sphere(transform=translation(x, 0, 0)) for x in (-3, -1, 1, 3)]
        g = Group(shapes)
        world = World([g])
        CPURenderer().render(world, small_camera,
                             RenderSettings(width=11, height=11, bvh_threshold=2))
        assert len(g) == 2

    def test_render_logs_progress(self, default_world, small_camera, caplog):
        with caplog.at_level(logging.INFO):
            CPURenderer().render(default_world, small_camera, RenderSettings(width=11, height=11))
        assert any("finished" in message for message in caplog.messages)


class TestDemoScene:
    """Tests for the demo scene and the command line entry point."""

    def test_build_world(self):
        world = DemoSceneBuilder().build_world()
        assert len(world.objects) >= 8
        assert len(world.lights) == 2

    def test_camera_matches_settings(self):
        settings = RenderSettings(width=32, height=16)
        camera = DemoSceneBuilder().create_camera(settings)
        assert (camera.hsize, camera.vsize) == (32, 16)

    def test_soft_shadows_use_area_light(self):
        from tracer.lights import AreaLight

        world = DemoSceneBuilder(soft_shadows=True, light_samples=4).build_world()
        assert isinstance(world.lights[0], AreaLight)

    def test_main_writes_image(self, tmp_path):
        output = tmp_path / "out.png"
        main.main(["--width", "8", "--height", "6", "--depth", "1",
                   "--renderer", "threaded_raytracer", "--workers", "2",
                   "--bvh-threshold", "2", "--output", str(output)])
        assert output.exists()
        from PIL import Image

        with Image.open(output) as image:
            assert image.size == (8, 6)

    def test_main_warns_when_workers_are_ignored(self, tmp_path, caplog):
        output = tmp_path / "out.png"
        with caplog.at_level(logging.WARNING):
            main.main(["--width", "4", "--height", "3", "--depth", "1",
                       "--renderer", "cpu_raytracer", "--workers", "3",
                       "--output", str(output)])
        assert any("ignored" in message for message in caplog.messages)
        assert output.exists()
