"""
Post-processing applied to a rendered buffer: contrast curve around mid-gray.
"""
import numpy as np

NEUTRAL_CONTRAST = 0.5


def contrast_factor(contrast: float) -> float:
    """Photographic contrast factor: 259(255c + 255) / (255(259 - 255c))."""
    c = contrast * 255
    return (259 * (c + 255)) / (255 * (259 - c))


def apply_contrast(buffer: np.ndarray, contrast: float) -> None:
    """
    Remap RGB in place: clamp(factor * (v - 128) + 128), computed in float, clamped, then truncated.
    Alpha untouched. Exactly 0.5 leaves the buffer as-is.
    """
    if contrast == NEUTRAL_CONTRAST:
        return
    factor = contrast_factor(contrast)
    rgb = buffer[..., :3].astype(np.float64)
    adjusted = np.clip(factor * (rgb - 128.0) + 128.0, 0, 255)
    buffer[..., :3] = adjusted.astype(np.uint8)
