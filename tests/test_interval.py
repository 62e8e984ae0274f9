"""Unit tests for Interval."""

import math

from pathtracer.core.interval import Interval


class TestInterval:
    """Containment, clamping and the predefined intervals."""

    def test_contains_is_closed(self):
        i = Interval(0, 1)
        assert i.contains(0)
        assert i.contains(1)
        assert not i.contains(1.5)

    def test_surrounds_is_open(self):
        i = Interval(0, 1)
        assert not i.surrounds(0)
        assert not i.surrounds(1)
        assert i.surrounds(0.5)

    def test_clamp(self):
        i = Interval(0.0, 0.999)
        assert i.clamp(-1) == 0.0
        assert i.clamp(0.5) == 0.5
        assert i.clamp(2) == 0.999

    def test_size_and_expand(self):
        i = Interval(1, 3)
        assert i.size() == 2
        wider = i.expand(2)
        assert (wider.min, wider.max) == (0, 4)

    def test_default_is_empty(self):
        i = Interval()
        assert i.min == math.inf
        assert i.max == -math.inf
        assert not i.contains(0)

    def test_empty_and_universe(self):
        assert not Interval.EMPTY.contains(0)
        assert Interval.EMPTY.size() < 0
        assert Interval.UNIVERSE.surrounds(1e300)
        assert Interval.UNIVERSE.surrounds(-1e300)
