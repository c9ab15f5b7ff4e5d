"""
Image I/O for the rendering layer.

Background images are opened with Pillow and handed to the visualizer as
BGR uint8 arrays (the channel order supervision colours are drawn in).
"""

from pathlib import Path
from typing import Union

import numpy as np
from PIL import Image


def read_image(path: Union[str, Path]) -> np.ndarray:
    """
    Open an image file as a BGR array of shape (H, W, 3).

    Raises:
        OSError: If the file is missing or not a readable image
    """
    try:
        with Image.open(path) as pil_image:
            rgb = np.array(pil_image.convert("RGB"))
    except OSError as e:
        raise OSError(f"Could not read image: {path} ({e})") from e
    return np.ascontiguousarray(rgb[:, :, ::-1])


def write_image(frame: np.ndarray, path: Union[str, Path]) -> Path:
    """Save a BGR frame as an image file (format from the extension)."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    Image.fromarray(np.ascontiguousarray(frame[:, :, ::-1])).save(path)
    return path
