"""
Procedural pattern renderers: params + rng → pixels. Our algorithms only — no external model.
Each renderer paints into an (H, W, 4) uint8 RGBA buffer in place, on top of the base fill
(colors[0]). Drawing that falls outside the canvas is skipped, never wrapped or clamped.
"""
from typing import Callable

import numpy as np

from .params import Pattern, TextureParams

Renderer = Callable[[np.ndarray, TextureParams, int, int, np.random.Generator], None]

NOISE_AMPLITUDE = 50.0


def _palette(params: TextureParams) -> np.ndarray:
    return np.array(params.colors, dtype=np.int16).reshape(-1, 3)


def _pixel_grid(width: int, height: int) -> tuple[np.ndarray, np.ndarray]:
    """Integer pixel coordinates (xx, yy), each shaped (H, W)."""
    return np.meshgrid(np.arange(width), np.arange(height))


def fill_base(buffer: np.ndarray, params: TextureParams) -> None:
    """Fill every pixel with colors[0], fully opaque."""
    buffer[..., :3] = params.colors[0]
    buffer[..., 3] = 255


def render_noise(buffer: np.ndarray, params: TextureParams, width: int, height: int, rng: np.random.Generator) -> None:
    """
    With probability roughness per pixel: random palette color, shifted by one offset in
    [-25, 25) applied to R, G and B alike, each channel clamped to 0-255.
    """
    palette = _palette(params)
    hit = rng.random((height, width)) < params.roughness
    count = int(hit.sum())
    if count == 0:
        return
    picks = palette[rng.integers(0, len(palette), size=count)].astype(np.float64)
    offsets = (rng.random(count) - 0.5) * NOISE_AMPLITUDE
    noisy = np.clip(picks + offsets[:, None], 0, 255)
    buffer[hit, :3] = noisy.astype(np.uint8)


def render_grid(buffer: np.ndarray, params: TextureParams, width: int, height: int, rng: np.random.Generator) -> None:
    """Flat tiles of size max(2, min(w, h) // 8); tile (col, row) gets colors[(col + row) % n]."""
    del rng  # deterministic
    palette = _palette(params)
    tile = max(2, min(width, height) // 8)
    xx, yy = _pixel_grid(width, height)
    index = (xx // tile + yy // tile) % len(palette)
    buffer[..., :3] = palette[index].astype(np.uint8)


def render_organic(buffer: np.ndarray, params: TextureParams, width: int, height: int, rng: np.random.Generator) -> None:
    """
    colors * 3 soft blobs. Centers anywhere in the canvas; radius in [m/8, 3m/8) with
    m = min(w, h). A pixel inside a blob is painted flat with probability
    (1 - distance / radius) * roughness; later blobs overwrite earlier ones.
    """
    palette = _palette(params)
    m = min(width, height)
    xx, yy = _pixel_grid(width, height)
    for _ in range(len(palette) * 3):
        cx = rng.random() * width
        cy = rng.random() * height
        radius = rng.random() * m / 4 + m / 8
        color = palette[rng.integers(0, len(palette))]
        if radius <= 0:
            continue
        distance = np.sqrt((xx - cx) ** 2 + (yy - cy) ** 2)
        inside = distance < radius
        alpha = np.clip(1 - distance / radius, 0, 1)
        paint = inside & (rng.random((height, width)) < alpha * params.roughness)
        buffer[paint, :3] = color.astype(np.uint8)


def render_geometric(buffer: np.ndarray, params: TextureParams, width: int, height: int, rng: np.random.Generator) -> None:
    """
    min(w, h) // 4 opaque shapes, color cycling through the palette by shape index.
    Fair coin per shape: rectangle (origin in the first 70% of each axis, size 10-40%)
    or disk (center anywhere, radius 5-25% of min(w, h)).
    """
    palette = _palette(params)
    m = min(width, height)
    xx, yy = _pixel_grid(width, height)
    for i in range(m // 4):
        color = palette[i % len(palette)].astype(np.uint8)
        if rng.random() > 0.5:
            x = int(rng.random() * width * 0.7)
            y = int(rng.random() * height * 0.7)
            w = int(rng.random() * width * 0.3 + width * 0.1)
            h = int(rng.random() * height * 0.3 + height * 0.1)
            # Slicing past the edge is truncated by numpy
            buffer[y:y + h, x:x + w, :3] = color
        else:
            cx = rng.random() * width
            cy = rng.random() * height
            radius = rng.random() * m * 0.2 + m * 0.05
            inside = (xx - cx) ** 2 + (yy - cy) ** 2 < radius * radius
            buffer[inside, :3] = color


def render_random(buffer: np.ndarray, params: TextureParams, width: int, height: int, rng: np.random.Generator) -> None:
    """floor(w * h * roughness) uniform picks with replacement, each a random palette color."""
    palette = _palette(params)
    count = max(0, int(np.floor(width * height * params.roughness)))
    if count == 0 or width <= 0 or height <= 0:
        return
    xs = rng.integers(0, width, size=count)
    ys = rng.integers(0, height, size=count)
    picks = palette[rng.integers(0, len(palette), size=count)]
    buffer[ys, xs, :3] = picks.astype(np.uint8)


RENDERERS: dict[Pattern, Renderer] = {
    Pattern.NOISE: render_noise,
    Pattern.GRID: render_grid,
    Pattern.ORGANIC: render_organic,
    Pattern.GEOMETRIC: render_geometric,
    Pattern.RANDOM: render_random,
}


def render_pattern(
    buffer: np.ndarray,
    params: TextureParams,
    width: int,
    height: int,
    rng: np.random.Generator,
) -> Pattern:
    """Dispatch on params.pattern (unknown → random). Returns the pattern actually drawn."""
    kind = params.pattern_kind
    RENDERERS[kind](buffer, params, width, height, rng)
    return kind
