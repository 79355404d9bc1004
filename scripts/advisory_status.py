#!/usr/bin/env python3
"""
CLI: Check whether the Ollama advisory server is reachable and which models it has.
Usage:
  python scripts/advisory_status.py
  OLLAMA_URL=http://gpu-box:11434 python scripts/advisory_status.py
"""
import sys
from pathlib import Path

PROJECT_ROOT = Path(__file__).resolve().parent.parent
sys.path.insert(0, str(PROJECT_ROOT))

import argparse
import json
import os

from texturegen.advisory import advisory_status
from texturegen.config import load_config
from texturegen.pipeline import build_advisory_service


def main() -> None:
    parser = argparse.ArgumentParser(description="Report advisory (Ollama) server status as JSON.")
    parser.add_argument("--config", type=Path, default=None, help="Path to config YAML.")
    parser.add_argument("--advisory-url", type=str, default=os.environ.get("OLLAMA_URL"), help="Ollama base URL.")
    args = parser.parse_args()

    config = load_config(args.config)
    if args.advisory_url:
        config["advisory"]["url"] = args.advisory_url
    status = advisory_status(build_advisory_service(config))
    print(json.dumps(status, indent=2))
    sys.exit(0 if status["status"] == "connected" else 1)


if __name__ == "__main__":
    main()
