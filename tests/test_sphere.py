"""Unit tests for ray-sphere intersection.

Tests cover:
- Ray hitting sphere from outside (front face)
- Ray missing sphere
- Ray starting inside sphere (back face)
- Ray tangent to sphere
- Interval limits selecting the near or far root
- Normal orientation for random rays
"""

import math
from random import Random

import pytest

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import random_unit_vector
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.sphere import Sphere
from pathtracer.materials.lambertian import Lambertian

FORWARD = Interval(0.001, math.inf)


@pytest.fixture
def unit_sphere():
    return Sphere(Point3(0, 0, 0), 1.0, Lambertian(Color(0.5, 0.5, 0.5)))


class TestSphereBasics:
    """Construction checks."""

    def test_rejects_non_positive_radius(self):
        with pytest.raises(ValueError):
            Sphere(Point3(0, 0, 0), 0.0, None)
        with pytest.raises(ValueError):
            Sphere(Point3(0, 0, 0), -1.0, None)

    def test_keeps_material_reference(self, unit_sphere):
        rec = unit_sphere.hit(Ray(Point3(0, 0, 5), Vector3(0, 0, -1)), FORWARD)
        assert rec.material is unit_sphere.material


class TestSphereIntersection:
    """Tests for Sphere.hit."""

    def test_direct_hit_from_outside(self, unit_sphere):
        rec = unit_sphere.hit(Ray(Point3(0, 0, 5), Vector3(0, 0, -1)), FORWARD)
        assert rec is not None
        assert rec.t == pytest.approx(4.0)
        assert rec.p == Point3(0, 0, 1)
        assert rec.normal == Vector3(0, 0, 1)
        assert rec.front_face

    def test_miss(self, unit_sphere):
        assert unit_sphere.hit(Ray(Point3(5, 0, 0), Vector3(0, 0, -1)), FORWARD) is None

    def test_hit_from_inside_flips_normal(self, unit_sphere):
        rec = unit_sphere.hit(Ray(Point3(0, 0, 0), Vector3(0, 0, 1)), FORWARD)
        assert rec is not None
        assert rec.t == pytest.approx(1.0)
        assert not rec.front_face
        assert rec.normal == Vector3(0, 0, -1)

    def test_tangent_ray(self, unit_sphere):
        rec = unit_sphere.hit(Ray(Point3(1, 0, 5), Vector3(0, 0, -1)), FORWARD)
        assert rec is not None
        assert rec.t == pytest.approx(5.0)

    def test_interval_excludes_both_roots(self, unit_sphere):
        ray = Ray(Point3(0, 0, 5), Vector3(0, 0, -1))
        assert unit_sphere.hit(ray, Interval(0.001, 3.0)) is None

    def test_far_root_when_near_root_out_of_range(self, unit_sphere):
        ray = Ray(Point3(0, 0, 5), Vector3(0, 0, -1))
        rec = unit_sphere.hit(ray, Interval(4.5, math.inf))
        assert rec.t == pytest.approx(6.0)
        assert not rec.front_face
        assert rec.normal == Vector3(0, 0, 1)

    def test_unnormalized_direction(self, unit_sphere):
        rec = unit_sphere.hit(Ray(Point3(0, 0, 5), Vector3(0, 0, -2)), FORWARD)
        assert rec.t == pytest.approx(2.0)
        assert rec.p.z == pytest.approx(1.0)


class TestNormalOrientation:
    """The stored normal always opposes the incoming ray."""

    def test_random_rays_from_outside(self):
        rng = Random(7)
        sphere = Sphere(Point3(0.5, -0.25, 2.0), 1.5, None)
        hits = 0
        for _ in range(300):
            origin = sphere.center + random_unit_vector(rng) * 4.0
            target = sphere.center + random_unit_vector(rng) * 1.2
            ray = Ray(origin, target - origin)
            rec = sphere.hit(ray, FORWARD)
            if rec is not None:
                hits += 1
                assert rec.front_face
                assert ray.direction.dot(rec.normal) <= 0
                assert rec.normal.length() == pytest.approx(1.0)
        assert hits > 0
