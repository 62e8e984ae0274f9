from pathtracer.materials.dielectric import Dielectric, reflectance
from pathtracer.materials.lambertian import Lambertian
from pathtracer.materials.material import Material
from pathtracer.materials.metal import Metal

__all__ = ["Dielectric", "Lambertian", "Material", "Metal", "reflectance"]
