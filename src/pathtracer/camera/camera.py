# camera/camera.py
import math
import threading
import time
from dataclasses import dataclass
from random import Random
from typing import Callable, Optional

from pathtracer.core.interval import Interval
from pathtracer.core.ray import Ray
from pathtracer.core.utils import degrees_to_radians, random_in_unit_disk
from pathtracer.core.vector import Color, Point3, Vector3
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.state import RenderState
from pathtracer.renderer.tone_mapping import color_to_bytes

# Minimum spacing between two update-pending signals, in seconds.
UPDATE_INTERVAL = 0.1

# Fixed light used by the non-recursive shading fallback.
SIMPLE_LIGHT_DIR = Vector3(1, 1, 1).normalize()

# Configuration names accepted by Camera.configure().
CONFIG_FIELDS = (
    "aspect_ratio",
    "image_width",
    "samples_per_pixel",
    "max_depth",
    "vfov",
    "lookfrom",
    "lookat",
    "vup",
    "defocus_angle",
    "focus_dist",
    "options",
    "seed",
    "verbose",
)

_VECTOR_FIELDS = ("lookfrom", "lookat", "vup")


def _to_vector(name: str, value) -> Vector3:
    try:
        components = [float(c) for c in value]
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be a sequence of 3 numbers, got {value!r}") from None
    if len(components) != 3:
        raise ValueError(f"{name} must have 3 components, got {len(components)}")
    return Vector3(*components)


@dataclass
class RenderOptions:
    """
    Quality/performance toggles for the render loop.

    antialiasing: jitter rays inside each pixel and take samples_per_pixel samples
    shadows: run material scattering at all (off shades every hit black)
    reflections, refractions: when both are off, hits use a fixed-light local
        shading term instead of recursive path tracing
    """
    enable_antialiasing: bool = True
    enable_shadows: bool = True
    enable_reflections: bool = True
    enable_refractions: bool = True


class Camera:
    """
    Look-at camera with thin-lens defocus blur, plus the render loop that
    fills an 8-bit RGB buffer from a scene.
    """
    def __init__(self, **config):
        self.aspect_ratio = 1.0        # Ratio of image width over height
        self.image_width = 100         # Rendered image width in pixels
        self.samples_per_pixel = 10    # Random samples for each pixel
        self.max_depth = 10            # Maximum number of ray bounces
        self.vfov = 90.0               # Vertical view angle in degrees
        self.lookfrom = Point3(0, 0, 0)
        self.lookat = Point3(0, 0, -1)
        self.vup = Vector3(0, 1, 0)
        self.defocus_angle = 0.0       # Variation angle of rays through each pixel
        self.focus_dist = 10.0         # Distance from lookfrom to the plane of perfect focus
        self.options = RenderOptions()
        self.seed: Optional[int] = None
        self.verbose = True

        if config:
            self.configure(**config)
        else:
            self.initialize()

    def configure(self, **config):
        """
        Update configuration and recompute the viewport geometry.

        Vector settings accept any 3-sequence of numbers. On a degenerate
        configuration ValueError is raised and no setting is changed.
        """
        unknown = set(config) - set(CONFIG_FIELDS)
        if unknown:
            raise ValueError(f"Unknown camera setting(s): {', '.join(sorted(unknown))}")

        updates = {}
        for name, value in config.items():
            if name in _VECTOR_FIELDS and not isinstance(value, Vector3):
                value = _to_vector(name, value)
            updates[name] = value

        previous = {name: getattr(self, name) for name in updates}
        try:
            for name, value in updates.items():
                setattr(self, name, value)
            self.initialize()
        except Exception:
            for name, value in previous.items():
                setattr(self, name, value)
            self.initialize()
            raise

    def initialize(self):
        """
        Validate the configuration and derive image height, camera basis,
        pixel deltas and defocus disk vectors.
        """
        if int(self.image_width) <= 0:
            raise ValueError(f"image_width must be positive, got {self.image_width}")
        if self.aspect_ratio <= 0:
            raise ValueError(f"aspect_ratio must be positive, got {self.aspect_ratio}")
        if int(self.samples_per_pixel) <= 0:
            raise ValueError(f"samples_per_pixel must be positive, got {self.samples_per_pixel}")
        if int(self.max_depth) <= 0:
            raise ValueError(f"max_depth must be positive, got {self.max_depth}")
        if not 0 < self.vfov < 180:
            raise ValueError(f"vfov must be in (0, 180) degrees, got {self.vfov}")
        if self.focus_dist <= 0:
            raise ValueError(f"focus_dist must be positive, got {self.focus_dist}")

        self.image_width = int(self.image_width)
        self.samples_per_pixel = int(self.samples_per_pixel)
        self.max_depth = int(self.max_depth)

        self.image_height = max(1, int(self.image_width / self.aspect_ratio))

        self.center = self.lookfrom

        # Determine viewport dimensions.
        theta = degrees_to_radians(self.vfov)
        h = math.tan(theta / 2)
        viewport_height = 2 * h * self.focus_dist
        viewport_width = viewport_height * (self.image_width / self.image_height)

        # Calculate the u,v,w unit basis vectors for the camera coordinate frame.
        w = self.lookfrom - self.lookat
        if w.near_zero():
            raise ValueError("lookfrom and lookat must be different points")
        self.w = w.normalize()
        u = self.vup.cross(self.w)
        if u.near_zero():
            raise ValueError("vup must not be parallel to the view direction")
        self.u = u.normalize()
        self.v = self.w.cross(self.u)

        # Vectors across the horizontal and down the vertical viewport edges.
        viewport_u = self.u * viewport_width
        viewport_v = -self.v * viewport_height

        self.pixel_delta_u = viewport_u / self.image_width
        self.pixel_delta_v = viewport_v / self.image_height

        # Location of the upper left pixel.
        viewport_upper_left = (self.center - self.w * self.focus_dist
                               - viewport_u / 2 - viewport_v / 2)
        self.pixel00_loc = viewport_upper_left + (self.pixel_delta_u + self.pixel_delta_v) * 0.5

        # Camera defocus disk basis vectors.
        defocus_radius = self.focus_dist * math.tan(degrees_to_radians(self.defocus_angle / 2))
        self.defocus_disk_u = self.u * defocus_radius
        self.defocus_disk_v = self.v * defocus_radius

    def get_ray(self, i: int, j: int, rng: Random) -> Ray:
        """
        Camera ray for pixel (i, j), jittered inside the pixel when antialiasing
        is enabled and starting on the defocus disk when lens blur is on.
        """
        if self.options.enable_antialiasing:
            offset = self.sample_square(rng)
        else:
            offset = Vector3(0, 0, 0)
        pixel_sample = (self.pixel00_loc
                        + self.pixel_delta_u * (i + offset.x)
                        + self.pixel_delta_v * (j + offset.y))

        ray_origin = self.center if self.defocus_angle <= 0 else self.defocus_disk_sample(rng)
        ray_direction = pixel_sample - ray_origin

        return Ray(ray_origin, ray_direction)

    @staticmethod
    def sample_square(rng: Random) -> Vector3:
        """Random point in the [-.5,-.5]-[+.5,+.5] unit square."""
        return Vector3(rng.random() - 0.5, rng.random() - 0.5, 0)

    def defocus_disk_sample(self, rng: Random) -> Point3:
        p = random_in_unit_disk(rng)
        return self.center + self.defocus_disk_u * p.x + self.defocus_disk_v * p.y

    def ray_color(self, ray: Ray, depth: int, world: Hittable, rng: Random) -> Color:
        """
        Returns the color seen along the ray, following scattered rays up to
        depth bounces.
        """
        if depth <= 0:
            return Color(0, 0, 0)

        rec = world.hit(ray, Interval(0.001, math.inf))
        if rec is not None:
            if not self.options.enable_shadows:
                return Color(0, 0, 0)

            scatter_result = rec.material.scatter(ray, rec, rng)
            if scatter_result is None:
                return Color(0, 0, 0)

            attenuation, scattered = scatter_result
            if self.options.enable_reflections or self.options.enable_refractions:
                return attenuation * self.ray_color(scattered, depth - 1, world, rng)

            # Local shading only: ambient plus one directional light.
            light_intensity = max(0.0, rec.normal.dot(SIMPLE_LIGHT_DIR))
            return attenuation * (0.3 + 0.7 * light_intensity)

        # Background gradient (sky).
        unit_direction = ray.direction.normalize()
        a = 0.5 * (unit_direction.y + 1.0)
        return Color(1.0, 1.0, 1.0) * (1.0 - a) + Color(0.5, 0.7, 1.0) * a

    def render_to_buffer_with_progress(self, world: Hittable, buffer: bytearray,
                                       buffer_lock: threading.Lock,
                                       progress: Callable[[float], None],
                                       should_stop: threading.Event,
                                       needs_update: threading.Event,
                                       rng: Optional[Random] = None) -> RenderState:
        """
        Render world into buffer, row by row, top to bottom.

        buffer is resized to 3 * image_width * image_height bytes and cleared
        under buffer_lock, then every pixel is written under the same lock.
        progress receives completed / total after each pixel. needs_update is
        raised at most every UPDATE_INTERVAL seconds or every 1% of the pixels,
        and after the last one. should_stop is polled before each row, pixel
        and sample; a pixel interrupted mid-sampling is not written.

        The caller must not run two renders into the same buffer at once.

        Returns:
            RenderState.COMPLETED or RenderState.CANCELLED
        """
        self.initialize()
        if rng is None:
            rng = Random(self.seed)

        width = self.image_width
        height = self.image_height

        with buffer_lock:
            buffer[:] = bytes(width * height * 3)

        total_pixels = width * height
        completed_pixels = 0
        pixels_since_update = 0
        update_frequency = max(1, total_pixels // 100)
        last_update_time = time.monotonic()
        next_report_percent = 10

        sample_count = self.samples_per_pixel if self.options.enable_antialiasing else 1
        scale = 1.0 / sample_count

        self._log(f"Rendering {width}x{height} with {sample_count} samples per pixel...")

        for j in range(height):
            if should_stop.is_set():
                break
            for i in range(width):
                if should_stop.is_set():
                    break

                pixel_color = Color(0, 0, 0)
                for _ in range(sample_count):
                    if should_stop.is_set():
                        break
                    r = self.get_ray(i, j, rng)
                    pixel_color = pixel_color + self.ray_color(r, self.max_depth, world, rng)

                if should_stop.is_set():
                    break

                rgb = color_to_bytes(pixel_color * scale)
                idx = (j * width + i) * 3
                with buffer_lock:
                    buffer[idx:idx + 3] = bytes(rgb)

                completed_pixels += 1
                pixels_since_update += 1
                current_progress = completed_pixels / total_pixels
                progress(current_progress)

                now = time.monotonic()
                time_for_update = now - last_update_time >= UPDATE_INTERVAL
                enough_pixels = pixels_since_update >= update_frequency

                if time_for_update or enough_pixels or completed_pixels == total_pixels:
                    needs_update.set()
                    pixels_since_update = 0
                    last_update_time = now

                    current_percent = int(current_progress * 100)
                    if current_percent >= next_report_percent:
                        self._log(f"Progress: {current_percent}%")
                        next_report_percent = current_percent - current_percent % 10 + 10

        if completed_pixels == total_pixels:
            self._log(f"Render completed: {completed_pixels} pixels")
            return RenderState.COMPLETED

        self._log(f"Render stopped at {completed_pixels}/{total_pixels} pixels")
        return RenderState.CANCELLED

    def render_to_buffer(self, world: Hittable, buffer: bytearray,
                         rng: Optional[Random] = None) -> RenderState:
        """Synchronous render with private, unobserved signals."""
        return self.render_to_buffer_with_progress(
            world, buffer, threading.Lock(), lambda _: None,
            threading.Event(), threading.Event(), rng=rng,
        )

    def _log(self, message: str):
        if self.verbose:
            print(message)
