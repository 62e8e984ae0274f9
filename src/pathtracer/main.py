# main.py
import argparse
import sys
from typing import List, Optional

import pygame

from pathtracer.camera.camera import Camera, RenderOptions
from pathtracer.core.vector import Point3, Vector3
from pathtracer.renderer.controller import RenderController
from pathtracer.renderer.export import buffer_to_array, save_image
from pathtracer.renderer.state import RenderState
from pathtracer.scenes import create_simple_world, create_world

WINDOW_WIDTH = 1280
WINDOW_HEIGHT = 800
MAX_DISPLAY_WIDTH = 800
MAX_DISPLAY_HEIGHT = 600

QUALITY_LEVELS = {
    "interactive": {"samples": 1, "depth": 4, "width": 200},
    "balanced": {"samples": 10, "depth": 10, "width": 400},
    "high_quality": {"samples": 50, "depth": 20, "width": 800},
}

# Camera the showcase scene was composed for.
DEFAULT_CAMERA = {
    "aspect_ratio": 16.0 / 9.0,
    "image_width": 400,
    "samples_per_pixel": 10,
    "max_depth": 10,
    "vfov": 20.0,
    "lookfrom": Point3(13, 2, 3),
    "lookat": Point3(0, 0, 0),
    "vup": Vector3(0, 1, 0),
    "defocus_angle": 0.6,
    "focus_dist": 10.0,
}

TEXT_COLOR = (230, 230, 230)
DIM_TEXT_COLOR = (150, 150, 150)
BACKGROUND_COLOR = (25, 25, 25)


class Application:
    """
    pygame front end: shows the in-progress render and exposes the camera
    settings and render toggles on the keyboard.
    """
    def __init__(self, camera: Camera, world, seed: Optional[int] = None):
        pygame.init()
        self.screen = pygame.display.set_mode((WINDOW_WIDTH, WINDOW_HEIGHT))
        pygame.display.set_caption("Ray Tracer - Real-time")
        self.clock = pygame.time.Clock()
        self.font = pygame.font.Font(None, 24)

        self.camera = camera
        self.world = world
        self.seed = seed
        self.controller = RenderController(camera, world)
        self.image_surface = None
        self.status_message = "Press Enter to start rendering"

        self.key_actions = {
            pygame.K_RETURN: self.start_render,
            pygame.K_r: self.start_render,
            pygame.K_ESCAPE: self.stop_render,
            pygame.K_a: lambda: self.toggle("enable_antialiasing"),
            pygame.K_s: lambda: self.toggle("enable_shadows"),
            pygame.K_l: lambda: self.toggle("enable_reflections"),
            pygame.K_t: lambda: self.toggle("enable_refractions"),
            pygame.K_EQUALS: lambda: self.adjust("samples_per_pixel", 1, 1, 500),
            pygame.K_PLUS: lambda: self.adjust("samples_per_pixel", 1, 1, 500),
            pygame.K_MINUS: lambda: self.adjust("samples_per_pixel", -1, 1, 500),
            pygame.K_RIGHTBRACKET: lambda: self.adjust("max_depth", 1, 1, 50),
            pygame.K_LEFTBRACKET: lambda: self.adjust("max_depth", -1, 1, 50),
            pygame.K_PERIOD: lambda: self.adjust("image_width", 50, 100, 1600),
            pygame.K_COMMA: lambda: self.adjust("image_width", -50, 100, 1600),
            pygame.K_1: lambda: self.apply_quality("interactive"),
            pygame.K_2: lambda: self.apply_quality("balanced"),
            pygame.K_3: lambda: self.apply_quality("high_quality"),
            pygame.K_e: lambda: self.export("output.ppm"),
            pygame.K_p: lambda: self.export("output.png"),
        }

    def start_render(self):
        try:
            self.controller.start(seed=self.seed)
            self.status_message = "Rendering..."
        except ValueError as e:
            self.status_message = f"Invalid settings: {e}"

    def stop_render(self):
        if self.controller.is_rendering:
            self.controller.cancel()
            self.status_message = "Stopping..."

    def toggle(self, name: str):
        options = self.camera.options
        setattr(options, name, not getattr(options, name))

    def adjust(self, name: str, step: int, low: int, high: int):
        value = min(high, max(low, getattr(self.camera, name) + step))
        self.camera.configure(**{name: value})

    def apply_quality(self, level: str):
        quality = QUALITY_LEVELS[level]
        self.camera.configure(
            samples_per_pixel=quality["samples"],
            max_depth=quality["depth"],
            image_width=quality["width"],
        )
        self.status_message = f"Quality: {level}"
        print(f"Quality changed to: {level}")

    def export(self, path: str):
        try:
            if path.endswith(".ppm"):
                self.controller.export_ppm(path)
            else:
                self.controller.export_png(path)
            self.status_message = f"Exported {path}"
        except (ValueError, OSError) as e:
            self.status_message = f"Export failed: {e}"
            print(f"Export failed: {e}")

    def update_texture(self):
        """Refresh the displayed image when the worker has flagged new pixels."""
        if not self.controller.consume_update():
            return
        snapshot = self.controller.copy_buffer()
        if snapshot is None:
            return
        pixels, width, height = snapshot
        image = buffer_to_array(pixels, width, height)
        # surfarray is indexed [x, y]
        self.image_surface = pygame.surfarray.make_surface(image.swapaxes(0, 1))

    def display_size(self, width: int, height: int):
        aspect_ratio = width / height
        display_width = min(MAX_DISPLAY_WIDTH, width)
        display_height = display_width / aspect_ratio
        if display_height > MAX_DISPLAY_HEIGHT:
            display_height = MAX_DISPLAY_HEIGHT
            display_width = display_height * aspect_ratio
        return int(display_width), int(display_height)

    def draw(self):
        self.screen.fill(BACKGROUND_COLOR)

        if self.image_surface is not None:
            size = self.display_size(*self.image_surface.get_size())
            self.screen.blit(pygame.transform.smoothscale(self.image_surface, size), (20, 20))
        else:
            self.blit_lines(["No image rendered yet.",
                             "Press Enter to generate an image."], (20, 20), DIM_TEXT_COLOR)

        self.blit_lines(self.status_lines(), (MAX_DISPLAY_WIDTH + 50, 20), TEXT_COLOR)
        self.blit_lines(self.help_lines(), (MAX_DISPLAY_WIDTH + 50, 420), DIM_TEXT_COLOR)

    def status_lines(self) -> List[str]:
        controller = self.controller
        camera = self.camera
        options = camera.options
        width, height = controller.image_size

        lines = [f"State: {controller.state.value}"]
        if controller.is_rendering:
            lines.append(f"Rendering... {controller.progress * 100:.1f}% ({controller.elapsed:.1f}s)")
            remaining = controller.estimated_remaining
            if remaining is not None:
                lines.append(f"Estimated remaining: {remaining:.1f}s")
        elif controller.state is RenderState.COMPLETED:
            lines.append(f"Render complete! Time: {controller.elapsed:.1f}s")
        elif controller.state is RenderState.FAILED:
            lines.append(f"Render failed: {controller.error}")

        lines += [
            f"Image: {width}x{height}",
            "",
            f"Next render: {camera.image_width}x{camera.image_height}",
            f"Samples per pixel: {camera.samples_per_pixel}",
            f"Max depth: {camera.max_depth}",
            f"Anti-aliasing: {'on' if options.enable_antialiasing else 'off'}",
            f"Shadows: {'on' if options.enable_shadows else 'off'}",
            f"Reflections: {'on' if options.enable_reflections else 'off'}",
            f"Refractions: {'on' if options.enable_refractions else 'off'}",
            f"Update pending: {'yes' if controller.needs_update.is_set() else 'no'}",
            f"FPS: {self.clock.get_fps():.1f}",
            "",
            self.status_message,
        ]
        return lines

    @staticmethod
    def help_lines() -> List[str]:
        return [
            "Enter/R start   Esc stop   Q quit",
            "A/S/L/T toggle AA/shadows/reflect/refract",
            "+/- samples   [ ] depth   , . width",
            "1/2/3 quality presets",
            "E export PPM   P export PNG",
        ]

    def blit_lines(self, lines: List[str], pos, color):
        x, y = pos
        for line in lines:
            if line:
                self.screen.blit(self.font.render(line, True, color), (x, y))
            y += 26

    def run(self):
        running = True
        try:
            while running:
                self.clock.tick(60)
                for event in pygame.event.get():
                    if event.type == pygame.QUIT:
                        running = False
                    elif event.type == pygame.KEYDOWN:
                        if event.key == pygame.K_q:
                            running = False
                        elif event.key in self.key_actions:
                            self.key_actions[event.key]()

                self.update_texture()
                self.draw()
                pygame.display.flip()
        finally:
            print("Cleaning up...")
            self.controller.shutdown()
            pygame.quit()


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="pathtracer",
        description="Interactive CPU path tracer.",
    )
    parser.add_argument("--width", type=int, default=None,
                        help="Image width in pixels (default: 400)")
    parser.add_argument("--samples", type=int, default=None,
                        help="Samples per pixel (default: 10)")
    parser.add_argument("--depth", type=int, default=None,
                        help="Maximum ray bounces (default: 10)")
    parser.add_argument("--quality", choices=sorted(QUALITY_LEVELS), default=None,
                        help="Preset for samples, depth and width")
    parser.add_argument("--seed", type=int, default=None,
                        help="Random seed for a reproducible image")
    parser.add_argument("--scene", choices=("showcase", "simple"), default="showcase",
                        help="Scene to render (default: showcase)")
    parser.add_argument("--headless", action="store_true",
                        help="Render without a window and write --output")
    parser.add_argument("--output", default="output.ppm",
                        help="Output file for --headless; .ppm or any Pillow format")
    parser.add_argument("--no-antialiasing", action="store_true")
    parser.add_argument("--no-shadows", action="store_true")
    parser.add_argument("--no-reflections", action="store_true")
    parser.add_argument("--no-refractions", action="store_true")
    parser.add_argument("--quiet", action="store_true",
                        help="Suppress render progress output")
    return parser


def camera_from_args(args: argparse.Namespace) -> Camera:
    config = dict(DEFAULT_CAMERA)
    if args.scene == "simple":
        config.update(vfov=90.0, lookfrom=Point3(0, 0, 0), lookat=Point3(0, 0, -1),
                      defocus_angle=0.0, focus_dist=1.0)
    if args.quality is not None:
        quality = QUALITY_LEVELS[args.quality]
        config.update(samples_per_pixel=quality["samples"],
                      max_depth=quality["depth"],
                      image_width=quality["width"])
    if args.width is not None:
        config["image_width"] = args.width
    if args.samples is not None:
        config["samples_per_pixel"] = args.samples
    if args.depth is not None:
        config["max_depth"] = args.depth

    config["options"] = RenderOptions(
        enable_antialiasing=not args.no_antialiasing,
        enable_shadows=not args.no_shadows,
        enable_reflections=not args.no_reflections,
        enable_refractions=not args.no_refractions,
    )
    config["seed"] = args.seed
    config["verbose"] = not args.quiet
    return Camera(**config)


def render_headless(camera: Camera, world, output: str, seed: Optional[int] = None) -> int:
    controller = RenderController(camera, world)
    controller.start(seed=seed)
    try:
        controller.wait()
    except KeyboardInterrupt:
        print("Interrupted, stopping render...")
        controller.stop()

    if controller.state is RenderState.FAILED:
        return 1

    snapshot = controller.copy_buffer()
    save_image(output, *snapshot)
    print(f"Image exported to {output} ({controller.elapsed:.1f}s)")
    return 0 if controller.state is RenderState.COMPLETED else 1


def main(argv: Optional[List[str]] = None) -> int:
    parser = build_parser()
    args = parser.parse_args(argv)

    try:
        camera = camera_from_args(args)
    except ValueError as e:
        parser.error(str(e))

    world = create_simple_world() if args.scene == "simple" else create_world(verbose=not args.quiet)

    if args.headless:
        return render_headless(camera, world, args.output, seed=args.seed)

    app = Application(camera, world, seed=args.seed)
    app.run()
    return 0


if __name__ == "__main__":
    sys.exit(main())
