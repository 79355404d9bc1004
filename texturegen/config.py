"""
Load and expose app config (YAML). Used by the CLI and pipeline to get the advisory
endpoint, timeouts, output dir and default texture size.
"""
from pathlib import Path
from typing import Any

import yaml


def _project_root() -> Path:
    return Path(__file__).resolve().parent.parent


def load_config(config_path: Path | None = None) -> dict[str, Any]:
    """Load config from YAML. Path is optional; defaults to config/default.yaml."""
    if config_path is None:
        config_path = _project_root() / "config" / "default.yaml"
    path = Path(config_path)
    if not path.exists():
        return _defaults()
    with open(path, encoding="utf-8") as f:
        data = yaml.safe_load(f) or {}
    if not isinstance(data, dict):
        return _defaults()
    merged = _defaults()
    for section, values in data.items():
        if isinstance(merged.get(section), dict):
            # An empty or scalar section keeps the defaults
            if isinstance(values, dict):
                merged[section] = {**merged[section], **values}
        else:
            merged[section] = values
    return merged


def _defaults() -> dict[str, Any]:
    return {
        "advisory": {
            "enabled": True,
            "url": "http://localhost:11434",
            "model": "llama3.2",
            "probe": True,
            "probe_timeout": 5,
            "generate_timeout": 30,
        },
        "output": {
            "dir": "output",
            "filename_prefix": "texture",
            "width": 32,
            "height": 32,
            "count": 4,
            "max_age_seconds": 3600,
        },
    }


def get_output_dir(config: dict[str, Any]) -> Path:
    """Resolve output directory (relative to project root if needed)."""
    out = config.get("output", {})
    d = out.get("dir", "output")
    p = Path(d)
    if not p.is_absolute():
        p = _project_root() / p
    return p
