"""
Texture synthesis engine: prompt → params → buffer → pattern → contrast → RGBA pixels.
synthesize() is total: any fault inside the pipeline yields the checkerboard fallback buffer.
"""
from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor

import numpy as np

from ..advisory.null import NullAdvisoryService
from ..advisory.requester import ParameterRequester
from .data import CHECKER_DARK, CHECKER_LIGHT
from .postprocess import apply_contrast
from .renderer import fill_base, render_pattern

logger = logging.getLogger(__name__)

SOURCE_CHECKERBOARD = "checkerboard"


def fallback_buffer(width: int, height: int) -> np.ndarray:
    """
    Opaque checkerboard, 8 tiles across the shorter side. Even (col + row) tiles are
    #666666, odd tiles #333333. Uses no params and no randomness.
    """
    width = max(0, int(width))
    height = max(0, int(height))
    tile = max(1, min(width, height) // 8)
    xx, yy = np.meshgrid(np.arange(width), np.arange(height))
    odd = ((xx // tile + yy // tile) % 2).astype(bool)
    buffer = np.empty((height, width, 4), dtype=np.uint8)
    buffer[..., :3] = CHECKER_LIGHT
    buffer[odd, :3] = CHECKER_DARK
    buffer[..., 3] = 255
    return buffer


class TextureSynthesizer:
    """
    Generates textures from a prompt using the parameter requester and our renderers.
    Stateless between calls: each call owns its buffer and its own random generator.
    """

    def __init__(self, requester: ParameterRequester | None = None):
        self.requester = requester or ParameterRequester(NullAdvisoryService(), probe=True)

    def synthesize(self, prompt: str, width: int, height: int, *, seed: int | None = None) -> np.ndarray:
        """Return an (height, width, 4) uint8 RGBA texture. Never raises."""
        buffer, _ = self.synthesize_with_source(prompt, width, height, seed=seed)
        return buffer

    def synthesize_with_source(
        self,
        prompt: str,
        width: int,
        height: int,
        *,
        seed: int | None = None,
    ) -> tuple[np.ndarray, str]:
        """Same as synthesize, plus "advisory", "fallback" or "checkerboard" for diagnostics."""
        try:
            params, source = self.requester.derive_with_source(prompt)
            rng = np.random.default_rng(seed)
            buffer = np.zeros((height, width, 4), dtype=np.uint8)
            fill_base(buffer, params)
            kind = render_pattern(buffer, params, width, height, rng)
            apply_contrast(buffer, params.contrast)
            logger.debug("Rendered %dx%d %s texture (%s params)", width, height, kind.value, source)
            return buffer, source
        except Exception as e:
            logger.warning("Error generating texture, using checkerboard fallback: %s", e)
            return fallback_buffer(width, height), SOURCE_CHECKERBOARD

    def synthesize_batch(
        self,
        prompt: str,
        width: int,
        height: int,
        count: int,
        *,
        max_workers: int = 1,
    ) -> list[tuple[np.ndarray, str]]:
        """
        count independent textures for one prompt, in index order.
        max_workers > 1 renders on a thread pool; ordering still follows the index.
        """
        if count <= 0:
            return []
        if max_workers <= 1:
            return [self.synthesize_with_source(prompt, width, height) for _ in range(count)]
        with ThreadPoolExecutor(max_workers=max_workers) as pool:
            return list(pool.map(lambda _: self.synthesize_with_source(prompt, width, height), range(count)))
