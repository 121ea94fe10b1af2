from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .framebuffer import FrameBuffer
from .params import DonutParams

FULL_TURN = 2 * math.pi


@dataclass
class SurfaceSamples:
    cols: np.ndarray
    rows: np.ndarray
    ooz: np.ndarray
    luminance: np.ndarray

    def __len__(self) -> int:
        return len(self.ooz)


def ramp_indices(luminance: np.ndarray, ramp_len: int) -> np.ndarray:
    idx = np.floor(luminance * 8).astype(np.int64)
    return np.clip(idx, 0, ramp_len - 1)


def screen_indices(coord: np.ndarray, size: int) -> np.ndarray:
    # truncate toward zero, then pin to the grid
    return np.clip(np.trunc(coord).astype(np.int64), 0, size - 1)


def sample_surface(a: float, b: float, params: DonutParams) -> SurfaceSamples:
    """Sample the torus, rotate it by (a, b) and project it onto the viewport."""
    cos_a, sin_a = math.cos(a), math.sin(a)
    cos_b, sin_b = math.cos(b), math.sin(b)

    theta = np.arange(0.0, FULL_TURN, params.theta_spacing)
    phi = np.arange(0.0, FULL_TURN, params.phi_spacing)
    theta, phi = np.meshgrid(theta, phi, indexing="ij")
    cos_t, sin_t = np.cos(theta).ravel(), np.sin(theta).ravel()
    cos_p, sin_p = np.cos(phi).ravel(), np.sin(phi).ravel()

    circle_x = params.donut_radius + params.donut_thickness * cos_t
    circle_y = params.donut_thickness * sin_t

    x = circle_x * (cos_b * cos_p + sin_a * sin_b * sin_p) - circle_y * cos_a * sin_b
    y = circle_x * (sin_b * cos_p - sin_a * cos_b * sin_p) + circle_y * cos_a * cos_b
    z = params.distance_to_donut + cos_a * circle_x * sin_p + circle_y * sin_a
    ooz = 1.0 / z

    half = params.viewport / 2
    k = params.projection
    cols = screen_indices(half + k * ooz * x, params.viewport)
    rows = screen_indices(half - k * ooz * y, params.viewport)

    luminance = (
        cos_p * cos_t * sin_b
        - cos_a * cos_t * sin_p
        - sin_a * sin_t
        + cos_b * (cos_a * sin_t - cos_t * sin_a * sin_p)
    )
    return SurfaceSamples(cols, rows, ooz, luminance)


def render_frame(a: float, b: float, params: DonutParams, buffer: FrameBuffer | None = None) -> FrameBuffer:
    """Produce one fully resolved frame for rotation angles (a, b).

    ``buffer`` is reset and reused when given, otherwise a new one is made.
    """
    if buffer is None or buffer.size != params.viewport:
        buffer = FrameBuffer(params.viewport)
    else:
        buffer.reset()

    s = sample_surface(a, b, params)
    lit = s.luminance > 0
    glyphs = np.array(list(params.ramp), dtype="<U1")
    chars = glyphs[ramp_indices(s.luminance[lit], len(glyphs))]
    buffer.plot_many(s.cols[lit], s.rows[lit], s.ooz[lit], chars)
    return buffer
