# renderer/export.py
"""
Serialization of the 8-bit RGB render buffer.

The buffer is interleaved RGB, row-major, top-to-bottom, 3 * width * height bytes.
"""
import os
from typing import Union

import numpy as np
from PIL import Image

PathLike = Union[str, "os.PathLike[str]"]


def buffer_to_array(buffer, width: int, height: int) -> np.ndarray:
    """
    View a render buffer as a (height, width, 3) uint8 array.

    Raises:
        ValueError: If the buffer is empty or smaller than width * height pixels
    """
    expected = width * height * 3
    if width <= 0 or height <= 0 or len(buffer) == 0:
        raise ValueError("No image to export: the render buffer is empty")
    if len(buffer) < expected:
        raise ValueError(
            f"Render buffer holds {len(buffer)} bytes, expected {expected} "
            f"for a {width}x{height} image"
        )
    data = np.frombuffer(bytes(buffer[:expected]), dtype=np.uint8)
    return data.reshape(height, width, 3)


def write_ppm(path: PathLike, buffer, width: int, height: int):
    """
    Write the buffer as a plain-text (P3) PPM image, one pixel per line.
    """
    image = buffer_to_array(buffer, width, height)
    with open(path, "w") as f:
        f.write(f"P3\n{width} {height}\n255\n")
        for r, g, b in image.reshape(-1, 3):
            f.write(f"{r} {g} {b}\n")


def save_png(path: PathLike, buffer, width: int, height: int):
    """
    Save the buffer as an 8-bit PNG using Pillow.
    """
    image = buffer_to_array(buffer, width, height)
    Image.fromarray(image).save(path)


def save_image(path: PathLike, buffer, width: int, height: int):
    """
    Pick the writer from the file suffix: .ppm is written as text, anything
    else goes through Pillow.
    """
    if os.fspath(path).lower().endswith(".ppm"):
        write_ppm(path, buffer, width, height)
    else:
        save_png(path, buffer, width, height)
