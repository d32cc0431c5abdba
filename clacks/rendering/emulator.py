"""Frame output helpers for the shutter tower emulator."""

from __future__ import annotations

from pathlib import Path
from typing import Iterable

from PIL import Image


def save_frame(image: Image.Image, path: str = "emulator_output/frame.png") -> Path:
    """Save a frame to disk as a PNG image, replacing any previous one."""
    output_path = Path(path)
    output_path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = output_path.with_name(output_path.name + ".tmp")
    image.save(tmp_path, format="PNG")
    tmp_path.replace(output_path)
    return output_path


def save_sequence(images: Iterable[Image.Image], directory: str, prefix: str = "frame") -> list[Path]:
    """Save numbered frames (``frame_000.png``...) into a directory."""
    output_dir = Path(directory)
    output_dir.mkdir(parents=True, exist_ok=True)
    paths = []
    for index, image in enumerate(images):
        path = output_dir / f"{prefix}_{index:03d}.png"
        image.save(path, format="PNG")
        paths.append(path)
    return paths


__all__ = ["save_frame", "save_sequence"]
