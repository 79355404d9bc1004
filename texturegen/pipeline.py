"""
Pipeline: one prompt → a set of texture files. Each variation is synthesized independently,
encoded to PNG and written to the output dir; records come back in index order.
"""
import logging
import time
from pathlib import Path
from typing import Any

from .advisory import NullAdvisoryService, OllamaAdvisoryService, ParameterRequester
from .advisory.base import AdvisoryService
from .config import get_output_dir, load_config
from .export import write_png
from .procedural.generator import TextureSynthesizer

logger = logging.getLogger(__name__)


def build_advisory_service(config: dict[str, Any]) -> AdvisoryService:
    adv = config.get("advisory", {})
    if not adv.get("enabled", True):
        return NullAdvisoryService()
    return OllamaAdvisoryService(
        url=adv.get("url", "http://localhost:11434"),
        model=adv.get("model", "llama3.2"),
        probe_timeout=float(adv.get("probe_timeout", 5)),
        generate_timeout=float(adv.get("generate_timeout", 30)),
    )


def build_synthesizer(config: dict[str, Any]) -> TextureSynthesizer:
    """Synthesizer wired to the advisory service described by config."""
    service = build_advisory_service(config)
    probe = bool(config.get("advisory", {}).get("probe", True))
    return TextureSynthesizer(ParameterRequester(service, probe=probe))


def _positive_int(value: Any, default: int, name: str) -> int:
    if value is None:
        return default
    try:
        number = int(value)
    except (TypeError, ValueError):
        raise ValueError(f"{name} must be an integer, got {value!r}") from None
    if number <= 0:
        raise ValueError(f"{name} must be positive, got {number}")
    return number


def generate_texture_set(
    prompt: str,
    width: int | None = None,
    height: int | None = None,
    count: int | None = None,
    *,
    synthesizer: TextureSynthesizer | None = None,
    config: dict[str, Any] | None = None,
    output_dir: Path | None = None,
    max_workers: int = 1,
) -> list[dict[str, Any]]:
    """
    Generate count textures for one prompt and write them as PNGs.
    Returns [{"id", "filename", "path", "source"}] ordered by id (1-based).
    Raises ValueError for an empty prompt or a non-positive size/count.
    """
    if not prompt or not prompt.strip():
        raise ValueError("Prompt is required")
    if config is None:
        config = load_config()
    out = config.get("output", {})
    width = _positive_int(width, int(out.get("width", 32)), "width")
    height = _positive_int(height, int(out.get("height", 32)), "height")
    count = _positive_int(count, int(out.get("count", 4)), "count")
    if synthesizer is None:
        synthesizer = build_synthesizer(config)
    out_dir = Path(output_dir) if output_dir is not None else get_output_dir(config)
    prefix = out.get("filename_prefix", "texture")

    logger.info('Generating textures for prompt: "%s", size: %dx%d', prompt, width, height)
    results = synthesizer.synthesize_batch(prompt, width, height, count, max_workers=max_workers)
    stamp = int(time.time() * 1000)
    records: list[dict[str, Any]] = []
    for i, (buffer, source) in enumerate(results, start=1):
        filename = f"{prefix}_{i}_{stamp}.png"
        path = write_png(buffer, out_dir / filename)
        records.append({"id": i, "filename": filename, "path": path, "source": source})
    return records
