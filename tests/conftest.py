"""Pytest configuration for the path tracer tests.

Provides seeded random generators, a scripted generator for forcing
specific samples, and small scenes and cameras that render quickly.
"""

from random import Random

import pytest

from pathtracer.camera.camera import Camera, RenderOptions
from pathtracer.scenes import create_simple_world


class ScriptedRandom:
    """Stand-in for random.Random that replays fixed values.

    uniform() pops from `uniforms`, random() pops from `randoms`.
    """

    def __init__(self, uniforms=(), randoms=()):
        self.uniforms = list(uniforms)
        self.randoms = list(randoms)

    def uniform(self, a, b):
        return self.uniforms.pop(0)

    def random(self):
        return self.randoms.pop(0)


@pytest.fixture
def rng():
    """A seeded generator so sampled tests are reproducible."""
    return Random(42)


@pytest.fixture
def scripted_rng():
    """Factory for ScriptedRandom instances."""
    return ScriptedRandom


@pytest.fixture
def simple_world():
    """Ground sphere plus one diffuse sphere."""
    return create_simple_world()


@pytest.fixture
def small_camera():
    """20x11 pinhole camera, one sample, one bounce, no antialiasing."""
    return Camera(
        aspect_ratio=16.0 / 9.0,
        image_width=20,
        samples_per_pixel=1,
        max_depth=1,
        vfov=90.0,
        lookfrom=(0, 0, 0),
        lookat=(0, 0, -1),
        vup=(0, 1, 0),
        defocus_angle=0.0,
        focus_dist=1.0,
        options=RenderOptions(enable_antialiasing=False),
        verbose=False,
    )
