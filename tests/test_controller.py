"""Tests for RenderController: background rendering, restart and cancel,
failure reporting and export."""

import time
from random import Random

import pytest
from PIL import Image

from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.controller import RenderController
from pathtracer.renderer.state import RenderState


class SlowWorld(Hittable):
    """Empty scene that takes a while to miss."""

    def hit(self, ray, ray_t):
        time.sleep(0.005)
        return None


class BrokenWorld(Hittable):
    def hit(self, ray, ray_t):
        raise RuntimeError("scene exploded")


class TestRenderLifecycle:
    def test_initial_state(self, small_camera, simple_world):
        controller = RenderController(small_camera, simple_world)
        assert controller.state is RenderState.IDLE
        assert not controller.is_rendering
        assert controller.copy_buffer() is None
        assert controller.elapsed == 0.0

    def test_completes_in_background(self, small_camera, simple_world):
        controller = RenderController(small_camera, simple_world)
        controller.start(seed=3)
        assert controller.wait(timeout=30)

        assert controller.state is RenderState.COMPLETED
        assert not controller.is_rendering
        assert controller.progress == 1.0
        assert controller.consume_update()
        assert not controller.consume_update()

        expected = bytearray()
        small_camera.render_to_buffer(simple_world, expected, rng=Random(3))
        pixels, width, height = controller.copy_buffer()
        assert (width, height) == (20, 11)
        assert pixels == bytes(expected)

    def test_seed_defaults_to_camera_seed(self, small_camera, simple_world):
        small_camera.configure(seed=11)
        controller = RenderController(small_camera, simple_world)
        controller.start()
        controller.wait(timeout=30)

        expected = bytearray()
        small_camera.render_to_buffer(simple_world, expected, rng=Random(11))
        assert controller.copy_buffer()[0] == bytes(expected)

    def test_timing(self, small_camera, simple_world):
        controller = RenderController(small_camera, simple_world)
        controller.start()
        controller.wait(timeout=30)
        elapsed = controller.elapsed
        assert elapsed > 0.0
        assert controller.elapsed == elapsed
        assert controller.estimated_remaining is None


class TestCancelAndRestart:
    def test_stop_cancels(self, small_camera):
        controller = RenderController(small_camera, SlowWorld())
        controller.start()
        assert controller.is_rendering
        assert controller.stop() is RenderState.CANCELLED
        assert not controller.is_rendering
        assert controller.progress < 1.0

    def test_cancel_does_not_block(self, small_camera):
        controller = RenderController(small_camera, SlowWorld())
        controller.start()
        controller.cancel()
        assert controller.wait(timeout=30)
        assert controller.state is RenderState.CANCELLED

    def test_restart_joins_previous_worker(self, small_camera):
        controller = RenderController(small_camera, SlowWorld())
        controller.start()
        first = controller._thread
        controller.start()
        assert not first.is_alive()
        assert controller._thread is not first
        assert controller.is_rendering
        controller.stop()

    def test_configuration_changes_apply_to_next_render(self, small_camera):
        controller = RenderController(small_camera, SlowWorld())
        controller.start()
        small_camera.configure(image_width=10)
        assert controller.image_size == (20, 11)
        controller.stop()

        controller.start()
        assert controller.image_size == (10, 5)
        controller.stop()


class TestFailures:
    def test_worker_error_sets_failed(self, small_camera, simple_world):
        controller = RenderController(small_camera, BrokenWorld())
        controller.start()
        controller.wait(timeout=30)
        assert controller.state is RenderState.FAILED
        assert isinstance(controller.error, RuntimeError)
        assert not controller.is_rendering

        # The controller stays usable.
        controller.world = simple_world
        controller.start()
        controller.wait(timeout=30)
        assert controller.state is RenderState.COMPLETED
        assert controller.error is None

    def test_invalid_camera_rejected_before_start(self, small_camera, simple_world):
        small_camera.image_width = 0
        controller = RenderController(small_camera, simple_world)
        with pytest.raises(ValueError):
            controller.start()
        assert controller.state is RenderState.IDLE
        assert not controller.is_rendering


class TestExport:
    def test_export_without_image(self, small_camera, simple_world, tmp_path):
        controller = RenderController(small_camera, simple_world)
        with pytest.raises(ValueError, match="No image"):
            controller.export_ppm(tmp_path / "out.ppm")
        with pytest.raises(ValueError, match="No image"):
            controller.export_png(tmp_path / "out.png")

    def test_export_after_render(self, small_camera, simple_world, tmp_path):
        controller = RenderController(small_camera, simple_world)
        controller.start(seed=1)
        controller.wait(timeout=30)

        ppm = tmp_path / "out.ppm"
        controller.export_ppm(ppm)
        lines = ppm.read_text().splitlines()
        assert lines[:3] == ["P3", "20 11", "255"]
        assert len(lines) == 3 + 220

        png = tmp_path / "out.png"
        controller.export_png(png)
        with Image.open(png) as image:
            assert image.size == (20, 11)
            assert image.mode == "RGB"
