#!/usr/bin/env python3
"""
CLI: Generate a set of textures from one prompt. One PNG per variation.
Usage:
  python scripts/generate.py "rough stone wall"
  python scripts/generate.py "wooden planks" --width 64 --height 64 --count 8
  python scripts/generate.py "metal plate" --no-advisory --output-dir /tmp/textures
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import logging
import os

from texturegen.config import get_output_dir, load_config
from texturegen.export import cleanup_stale
from texturegen.pipeline import generate_texture_set


def main() -> None:
    parser = argparse.ArgumentParser(
        description="Generate tileable textures from a text prompt (Ollama if available, else keyword presets)."
    )
    parser.add_argument(
        "prompt",
        type=str,
        help="Text describing the texture (e.g. 'rough stone wall').",
    )
    parser.add_argument("--width", type=int, default=None, help="Texture width in pixels (default: config, 32).")
    parser.add_argument("--height", type=int, default=None, help="Texture height in pixels (default: config, 32).")
    parser.add_argument("--count", "-n", type=int, default=None, help="Number of variations (default: config, 4).")
    parser.add_argument(
        "--output-dir",
        "-o",
        type=Path,
        default=None,
        help="Directory for PNGs (default: config output.dir).",
    )
    parser.add_argument(
        "--config",
        type=Path,
        default=None,
        help="Path to config YAML (default: config/default.yaml).",
    )
    parser.add_argument(
        "--advisory-url",
        type=str,
        default=os.environ.get("OLLAMA_URL"),
        help="Ollama base URL (default: $OLLAMA_URL or config advisory.url).",
    )
    parser.add_argument(
        "--no-advisory",
        action="store_true",
        help="Skip the model server and use keyword presets only.",
    )
    parser.add_argument("--workers", type=int, default=1, help="Render variations on N threads.")
    parser.add_argument(
        "--cleanup",
        action="store_true",
        help="Delete PNGs older than output.max_age_seconds from the output dir first.",
    )
    parser.add_argument("--verbose", "-v", action="store_true", help="Debug logging.")
    args = parser.parse_args()

    logging.basicConfig(level=logging.DEBUG if args.verbose else logging.INFO, format="%(levelname)s: %(message)s")

    config = load_config(args.config)
    if args.advisory_url:
        config["advisory"]["url"] = args.advisory_url
    if args.no_advisory:
        config["advisory"]["enabled"] = False
    out_dir = args.output_dir or get_output_dir(config)

    if args.cleanup:
        cleanup_stale(out_dir, float(config["output"].get("max_age_seconds", 3600)))

    try:
        records = generate_texture_set(
            args.prompt,
            args.width,
            args.height,
            args.count,
            config=config,
            output_dir=out_dir,
            max_workers=args.workers,
        )
    except ValueError as e:
        print(f"Error: {e}", file=sys.stderr)
        sys.exit(2)

    for rec in records:
        print(rec["path"])


if __name__ == "__main__":
    main()
