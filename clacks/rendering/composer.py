"""Frame composer for the shutter tower emulator."""

from __future__ import annotations

from PIL import Image, ImageDraw, ImageFont

from clacks.encoding.shutters import ShutterLocation, ShutterSide
from clacks.rendering.frame_data import FrameData

DISPLAY_WIDTH = 96
DISPLAY_HEIGHT = 128

MARGIN = 6
COLUMN_GAP = 4
ROW_GAP = 4
SHUTTER_WIDTH = (DISPLAY_WIDTH - 2 * MARGIN - COLUMN_GAP) // 2
SHUTTER_HEIGHT = 30

LABEL_TOP = MARGIN + 3 * SHUTTER_HEIGHT + 2 * ROW_GAP + 4
LABEL_HEIGHT = DISPLAY_HEIGHT - LABEL_TOP

COLOR_BACKGROUND = (0, 0, 0)
COLOR_FRAME = (42, 42, 42)
COLOR_OPEN = (255, 255, 255)
COLOR_OPEN_END = (220, 180, 0)
COLOR_CLOSED = (24, 24, 24)
COLOR_LABEL = (136, 136, 136)

FONT_LABEL = ImageFont.load_default()


def shutter_box(location: ShutterLocation) -> tuple[int, int, int, int]:
    """Return the (left, top, right, bottom) pixel box of a shutter."""
    col = 0 if location.side == ShutterSide.LEFT else 1
    left = MARGIN + col * (SHUTTER_WIDTH + COLUMN_GAP)
    top = MARGIN + location.row * (SHUTTER_HEIGHT + ROW_GAP)
    return (left, top, left + SHUTTER_WIDTH - 1, top + SHUTTER_HEIGHT - 1)


def shutter_center(location: ShutterLocation) -> tuple[int, int]:
    left, top, right, bottom = shutter_box(location)
    return ((left + right) // 2, (top + bottom) // 2)


def compose_frame(data: FrameData, scale: int = 1) -> Image.Image:
    """Compose an RGB image of the tower showing one frame."""
    if scale < 1:
        raise ValueError(f"Scale must be a positive integer, got {scale}.")

    image = Image.new("RGB", (DISPLAY_WIDTH, DISPLAY_HEIGHT), COLOR_BACKGROUND)
    draw = ImageDraw.Draw(image)

    open_color = COLOR_OPEN_END if data.is_end else COLOR_OPEN
    for location in ShutterLocation:
        left, top, right, bottom = shutter_box(location)
        fill = open_color if location in data.open_shutters else COLOR_CLOSED
        draw.rectangle((left, top, right, bottom), fill=fill, outline=COLOR_FRAME)

    if data.label:
        bbox = draw.textbbox((0, 0), data.label, font=FONT_LABEL)
        text_width = bbox[2] - bbox[0]
        text_height = bbox[3] - bbox[1]
        text_x = (DISPLAY_WIDTH - text_width) // 2
        text_y = LABEL_TOP + (LABEL_HEIGHT - text_height) // 2
        draw.text((text_x, text_y), data.label, font=FONT_LABEL, fill=COLOR_LABEL)

    if scale > 1:
        image = image.resize((DISPLAY_WIDTH * scale, DISPLAY_HEIGHT * scale), Image.Resampling.NEAREST)
    return image


__all__ = ["compose_frame", "shutter_box", "shutter_center"]
