# scenes.py
from pathtracer.core.vector import Color, Point3
from pathtracer.geometry.sphere import Sphere
from pathtracer.geometry.world import HittableList
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.presets import ColorPresets, DielectricPresets, MetalPresets


def create_world(verbose: bool = False) -> HittableList:
    """
    Showcase scene: a glass sphere on a large ground sphere, ringed by diffuse,
    metal and glass spheres at several distances.
    """
    world = HittableList()

    # Ground sphere
    world.add(Sphere(Point3(0, -1000, 0), 1000, ColorPresets.matte(ColorPresets.GRAY)))

    # Central large glass sphere
    world.add(Sphere(Point3(0, 1, 0), 1.0, DielectricPresets.glass()))

    # Diffuse spheres in a ring
    world.add(Sphere(Point3(-5, 1, 0), 1.0, ColorPresets.matte(ColorPresets.RED)))
    world.add(Sphere(Point3(5, 1, 0), 1.0, ColorPresets.matte(ColorPresets.BLUE)))
    world.add(Sphere(Point3(0, 1, -5), 1.0, ColorPresets.matte(ColorPresets.GREEN)))
    world.add(Sphere(Point3(0, 1, 5), 1.0, ColorPresets.matte(ColorPresets.YELLOW)))

    # Metal spheres on the diagonals
    world.add(Sphere(Point3(-3.5, 1, -3.5), 1.0, MetalPresets.gold()))
    world.add(Sphere(Point3(3.5, 1, 3.5), 1.0, MetalPresets.silver()))
    world.add(Sphere(Point3(-3.5, 1, 3.5), 1.0, MetalPresets.copper()))
    world.add(Sphere(Point3(3.5, 1, -3.5), 1.0, MetalPresets.chrome()))

    # Smaller spheres closer in
    world.add(Sphere(Point3(-2, 0.5, -2), 0.5, ColorPresets.matte(ColorPresets.PURPLE)))
    world.add(Sphere(Point3(2, 0.5, 2), 0.5, ColorPresets.matte(ColorPresets.ORANGE)))
    world.add(Sphere(Point3(-2, 0.5, 2), 0.5, ColorPresets.matte(ColorPresets.CYAN)))
    world.add(Sphere(Point3(2, 0.5, -2), 0.5, ColorPresets.matte(ColorPresets.PINK)))

    # Elevated spheres
    world.add(Sphere(Point3(-1, 2, -1), 0.3, ColorPresets.matte(ColorPresets.WHITE)))
    world.add(Sphere(Point3(1, 2, 1), 0.3, ColorPresets.matte(ColorPresets.BLACK)))

    # Glass spheres with other indices
    world.add(Sphere(Point3(-6, 0.7, -2), 0.7, DielectricPresets.light_glass()))
    world.add(Sphere(Point3(6, 0.7, 2), 0.7, DielectricPresets.dense_glass()))

    # Far background
    world.add(Sphere(Point3(-10, 1.5, -8), 1.5, MetalPresets.brushed_steel()))
    world.add(Sphere(Point3(8, 1.2, -10), 1.2, ColorPresets.matte(ColorPresets.SAGE)))

    if verbose:
        print(f"Created world with {len(world)} spheres")
    return world


def create_simple_world() -> HittableList:
    """Ground sphere plus one colored diffuse sphere in front of the default camera."""
    world = HittableList()
    world.add(Sphere(Point3(0, -100.5, -1), 100, Lambertian(Color(0.8, 0.8, 0.0))))
    world.add(Sphere(Point3(0, 0, -1.2), 0.5, Lambertian(Color(0.1, 0.2, 0.5))))
    return world
