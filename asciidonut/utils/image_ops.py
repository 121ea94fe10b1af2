from __future__ import annotations

import math
from pathlib import Path
from typing import Sequence, Tuple

import numpy as np
from PIL import Image, ImageDraw, ImageFont

from ..core.framebuffer import FrameBuffer

DEFAULT_STOPS: Tuple[Tuple[int, int, int], ...] = (
    (40, 40, 60),
    (90, 110, 160),
    (170, 180, 200),
    (230, 220, 190),
    (255, 255, 255),
)


def glyph_color(t: float, color_stops: Sequence[Tuple[int, int, int]]) -> Tuple[int, int, int]:
    """Interpolate linearly across ``color_stops`` for t in [0, 1]."""
    if len(color_stops) == 1:
        return tuple(color_stops[0])
    segments = len(color_stops) - 1
    t = min(1.0, max(0.0, t))
    seg = int(min(segments - 1, math.floor(t * segments)))
    local_t = t * segments - seg
    c1 = color_stops[seg]
    c2 = color_stops[seg + 1]
    return (
        int(c1[0] + (c2[0] - c1[0]) * local_t),
        int(c1[1] + (c2[1] - c1[1]) * local_t),
        int(c1[2] + (c2[2] - c1[2]) * local_t),
    )


def build_ascii_image(
    chars: np.ndarray,
    ramp: str,
    font_pil: ImageFont.ImageFont,
    cell_w: int,
    cell_h: int,
    color_stops: Sequence[Tuple[int, int, int]] = DEFAULT_STOPS,
    bg_color: Tuple[int, int, int] = (0, 0, 0),
) -> Image.Image:
    """Rasterise a character grid; brighter ramp glyphs get brighter colours."""
    rows, cols = chars.shape
    img = Image.new("RGB", (max(1, cols * cell_w), max(1, rows * cell_h)), color=bg_color)
    n = max(1, len(ramp) - 1)
    glyph_cache: dict = {}

    for y in range(rows):
        for x in range(cols):
            ch = str(chars[y, x])
            if ch == " ":
                continue
            if ch not in glyph_cache:
                idx = ramp.find(ch)
                color = glyph_color(idx / n if idx >= 0 else 1.0, color_stops)
                glyph_img = Image.new("RGBA", (cell_w, cell_h), (0, 0, 0, 0))
                ImageDraw.Draw(glyph_img).text((0, 0), ch, fill=color, font=font_pil)
                glyph_cache[ch] = glyph_img
            glyph = glyph_cache[ch]
            img.paste(glyph, (x * cell_w, y * cell_h), glyph)
    return img


def save_snapshot(
    buffer: FrameBuffer,
    path: str | Path,
    ramp: str,
    cell_w: int = 8,
    cell_h: int = 12,
) -> Path:
    path = Path(path)
    font = ImageFont.load_default()
    img = build_ascii_image(buffer.chars, ramp, font, cell_w, cell_h)
    img.save(path)
    return path
