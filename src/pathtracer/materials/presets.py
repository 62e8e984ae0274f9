# materials/presets.py
from pathtracer.core.vector import Color
from pathtracer.materials.dielectric import Dielectric
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.metal import Metal


class MetalPresets:
    """Predefined metal materials."""

    @staticmethod
    def gold() -> Metal:
        return Metal(Color(0.8, 0.6, 0.2), fuzz=0.0)

    @staticmethod
    def silver() -> Metal:
        return Metal(Color(0.8, 0.8, 0.9), fuzz=0.1)

    @staticmethod
    def copper() -> Metal:
        return Metal(Color(0.7, 0.4, 0.3), fuzz=0.2)

    @staticmethod
    def chrome() -> Metal:
        return Metal(Color(0.9, 0.9, 0.9), fuzz=0.0)

    @staticmethod
    def brushed_steel() -> Metal:
        return Metal(Color(0.5, 0.5, 0.7), fuzz=0.3)


class DielectricPresets:
    """Predefined dielectric materials with their refractive indices."""

    @staticmethod
    def glass() -> Dielectric:
        return Dielectric(1.5)

    @staticmethod
    def light_glass() -> Dielectric:
        return Dielectric(1.3)

    @staticmethod
    def dense_glass() -> Dielectric:
        return Dielectric(1.8)

    @staticmethod
    def diamond() -> Dielectric:
        return Dielectric(2.42)


class ColorPresets:
    """Common albedo colors for diffuse materials."""

    RED = Color(0.7, 0.2, 0.2)
    GREEN = Color(0.2, 0.7, 0.2)
    BLUE = Color(0.2, 0.2, 0.7)
    YELLOW = Color(0.7, 0.7, 0.2)
    PURPLE = Color(0.6, 0.2, 0.6)
    ORANGE = Color(0.8, 0.4, 0.1)
    CYAN = Color(0.2, 0.6, 0.6)
    PINK = Color(0.8, 0.4, 0.6)
    SAGE = Color(0.4, 0.6, 0.4)

    WHITE = Color(0.9, 0.9, 0.9)
    GRAY = Color(0.5, 0.5, 0.5)
    BLACK = Color(0.1, 0.1, 0.1)

    @staticmethod
    def matte(color: Color) -> Lambertian:
        """Create a matte material with the given color."""
        return Lambertian(color)
