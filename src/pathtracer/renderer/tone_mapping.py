# renderer/tone_mapping.py
import math
from typing import Tuple

from pathtracer.core.interval import Interval
from pathtracer.core.vector import Color

# Upper bound stays below 1 so that 256 * value never reaches 256.
INTENSITY = Interval(0.000, 0.999)


def linear_to_gamma(linear_component: float) -> float:
    """
    Gamma 2 transform: the square root of a linear channel value.
    Non-positive input maps to 0.
    """
    if linear_component > 0:
        return math.sqrt(linear_component)
    return 0.0


def color_to_bytes(pixel_color: Color) -> Tuple[int, int, int]:
    """
    Convert an averaged linear color to gamma corrected 8-bit RGB.
    """
    r = linear_to_gamma(pixel_color.x)
    g = linear_to_gamma(pixel_color.y)
    b = linear_to_gamma(pixel_color.z)

    return (
        int(256 * INTENSITY.clamp(r)),
        int(256 * INTENSITY.clamp(g)),
        int(256 * INTENSITY.clamp(b)),
    )
