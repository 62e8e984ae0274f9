"""Unit tests for gamma correction and 8-bit quantization."""

import pytest

from pathtracer.core.vector import Color
from pathtracer.renderer.tone_mapping import color_to_bytes, linear_to_gamma


class TestLinearToGamma:
    def test_endpoints(self):
        assert linear_to_gamma(0.0) == 0.0
        assert linear_to_gamma(1.0) == pytest.approx(1.0)

    def test_negative_maps_to_zero(self):
        assert linear_to_gamma(-0.5) == 0.0

    def test_monotonic_on_unit_interval(self):
        values = [linear_to_gamma(i / 100) for i in range(101)]
        assert all(a < b for a, b in zip(values, values[1:]))

    def test_square_root(self):
        assert linear_to_gamma(0.25) == pytest.approx(0.5)


class TestColorToBytes:
    def test_black_and_white(self):
        assert color_to_bytes(Color(0, 0, 0)) == (0, 0, 0)
        assert color_to_bytes(Color(1, 1, 1)) == (255, 255, 255)

    def test_clamps_out_of_range(self):
        assert color_to_bytes(Color(4.0, -1.0, 0.25)) == (255, 0, 128)
