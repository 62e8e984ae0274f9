"""
CPU path tracer with a cancellable, progress-reporting background render
and a pygame display.

Subpackages:
    core: vectors, intervals, rays and sampling helpers
    geometry: hit records, spheres and the scene list
    materials: Lambertian, metal and dielectric scattering
    camera: viewport setup, ray generation and the render loop
    renderer: render state, tone mapping, export and the background controller
"""

__version__ = "0.1.0"
