"""
PNG encoding and on-disk housekeeping for generated textures (imageio + Pillow plugin).
"""
import logging
import time
from pathlib import Path

import imageio.v3 as iio
import numpy as np

logger = logging.getLogger(__name__)

DEFAULT_MAX_AGE_SECONDS = 60 * 60


def encode_png(buffer: np.ndarray) -> bytes:
    """Encode an (H, W, 4) uint8 RGBA buffer as PNG bytes."""
    return iio.imwrite("<bytes>", buffer, extension=".png")


def write_png(buffer: np.ndarray, path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_bytes(encode_png(buffer))
    return path


def cleanup_stale(directory: Path, max_age_seconds: float = DEFAULT_MAX_AGE_SECONDS, *, now: float | None = None) -> list[Path]:
    """Delete PNGs in directory whose mtime is older than max_age_seconds. Returns what was removed."""
    directory = Path(directory)
    if not directory.is_dir():
        return []
    cutoff = (now if now is not None else time.time()) - max_age_seconds
    removed: list[Path] = []
    for path in sorted(directory.glob("*.png")):
        try:
            if path.stat().st_mtime < cutoff:
                path.unlink()
                removed.append(path)
                logger.info("Cleaned up old texture: %s", path.name)
        except OSError as e:
            logger.warning("Cleanup failed for %s: %s", path, e)
    return removed
