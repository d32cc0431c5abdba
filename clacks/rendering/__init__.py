"""Rendering utilities for the shutter tower emulator."""

from clacks.rendering.composer import compose_frame
from clacks.rendering.emulator import save_frame, save_sequence
from clacks.rendering.frame_data import FrameData

__all__ = ["FrameData", "compose_frame", "save_frame", "save_sequence"]
