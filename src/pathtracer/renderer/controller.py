# renderer/controller.py
import copy
import dataclasses
import threading
import time
import traceback
from random import Random
from typing import Optional, Tuple

from pathtracer.camera.camera import Camera
from pathtracer.geometry.hittable import Hittable
from pathtracer.renderer.export import save_png, write_ppm
from pathtracer.renderer.state import RenderState


class RenderController:
    """
    Runs one camera render at a time on a background thread and owns the
    state shared with the display loop.

    Shared state:
        buffer: interleaved 8-bit RGB bytes, guarded by buffer_lock
        progress: fraction of pixels done, plain float written by the worker
        should_stop: cancel flag, set here and polled by the worker
        needs_update: raised by the worker, cleared by consume_update()
    """
    def __init__(self, camera: Camera, world: Hittable):
        self.camera = camera
        self.world = world

        self.buffer = bytearray()
        self.buffer_lock = threading.Lock()
        self.should_stop = threading.Event()
        self.needs_update = threading.Event()
        self.progress = 0.0

        self.state = RenderState.IDLE
        self.error: Optional[BaseException] = None

        self._rendering = False
        self._thread: Optional[threading.Thread] = None
        self._image_size = (camera.image_width, camera.image_height)
        self._start_time: Optional[float] = None
        self._end_time: Optional[float] = None

    @property
    def is_rendering(self) -> bool:
        return self._rendering

    @property
    def image_size(self) -> Tuple[int, int]:
        """(width, height) of the image currently held in the buffer."""
        return self._image_size

    def start(self, seed: Optional[int] = None):
        """
        Start a new render. An active render is cancelled and joined first,
        so at most one worker ever writes into the buffer.

        The camera is snapshotted here: configuration changes made while the
        render runs apply to the next one.

        Raises:
            ValueError: If the camera configuration is degenerate
        """
        self.stop()

        camera = copy.copy(self.camera)
        camera.options = dataclasses.replace(self.camera.options)
        camera.initialize()

        width, height = camera.image_width, camera.image_height
        with self.buffer_lock:
            self.buffer[:] = bytes(width * height * 3)
            self._image_size = (width, height)

        self.should_stop.clear()
        self.needs_update.clear()
        self.progress = 0.0
        self.error = None
        self.state = RenderState.RUNNING
        self._rendering = True
        self._start_time = time.monotonic()
        self._end_time = None

        rng = Random(seed if seed is not None else camera.seed)
        self._thread = threading.Thread(
            target=self._run, args=(camera, rng), name="render-worker", daemon=True
        )
        self._thread.start()

    def _run(self, camera: Camera, rng: Random):
        try:
            self._log(f"Starting render: {camera.image_width}x{camera.image_height} with "
                      f"{camera.samples_per_pixel} samples")

            state = camera.render_to_buffer_with_progress(
                self.world, self.buffer, self.buffer_lock, self._set_progress,
                self.should_stop, self.needs_update, rng=rng,
            )

            if state is RenderState.COMPLETED:
                self.progress = 1.0
                self.needs_update.set()
                self._log("Render completed!")
            else:
                self._log("Render stopped by user")
            self.state = state
        except Exception as e:
            self.error = e
            self.state = RenderState.FAILED
            # Show whatever was written before the failure.
            self.needs_update.set()
            print(f"Render error: {e}")
            traceback.print_exc()
        finally:
            self._end_time = time.monotonic()
            self._rendering = False

    def _set_progress(self, value: float):
        self.progress = value

    def cancel(self):
        """Ask the worker to stop at its next checkpoint without waiting."""
        if self._rendering:
            self.should_stop.set()

    def stop(self) -> RenderState:
        """Cancel the active render, if any, and wait for the worker to exit."""
        if self._thread is not None and self._thread.is_alive():
            self.should_stop.set()
            self._thread.join()
        return self.state

    def wait(self, timeout: Optional[float] = None) -> bool:
        """
        Block until the worker finishes. Returns False if it is still
        running after timeout seconds.
        """
        if self._thread is None:
            return True
        self._thread.join(timeout)
        return not self._thread.is_alive()

    def consume_update(self) -> bool:
        """
        Returns True once per raised update-pending flag, clearing it.
        Call this before copying the buffer for display.
        """
        if self.needs_update.is_set():
            self.needs_update.clear()
            return True
        return False

    def copy_buffer(self) -> Optional[Tuple[bytes, int, int]]:
        """
        Snapshot of (pixels, width, height) taken under the buffer lock, or
        None while the buffer does not hold a full image.
        """
        with self.buffer_lock:
            width, height = self._image_size
            if len(self.buffer) == 0 or len(self.buffer) < width * height * 3:
                return None
            return bytes(self.buffer), width, height

    @property
    def elapsed(self) -> float:
        """Seconds spent in the current or last render."""
        if self._start_time is None:
            return 0.0
        end = self._end_time if self._end_time is not None else time.monotonic()
        return end - self._start_time

    @property
    def estimated_remaining(self) -> Optional[float]:
        """Linear extrapolation of the remaining time, once past 1%."""
        progress = self.progress
        if not self._rendering or progress <= 0.01:
            return None
        elapsed = self.elapsed
        return elapsed / progress - elapsed

    def export_ppm(self, path: str = "output.ppm"):
        """
        Raises:
            ValueError: If nothing has been rendered yet
        """
        snapshot = self.copy_buffer()
        if snapshot is None:
            raise ValueError("No image to export!")
        write_ppm(path, *snapshot)
        self._log(f"Image exported to {path}")

    def export_png(self, path: str = "output.png"):
        snapshot = self.copy_buffer()
        if snapshot is None:
            raise ValueError("No image to export!")
        save_png(path, *snapshot)
        self._log(f"Image exported to {path}")

    def shutdown(self):
        self.stop()

    def _log(self, message: str):
        if self.camera.verbose:
            print(message)

    def __repr__(self) -> str:
        width, height = self._image_size
        return (f"RenderController({width}x{height}, state={self.state.value}, "
                f"progress={self.progress:.2f})")
