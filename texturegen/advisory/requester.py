"""
Prompt → texture parameters, advisory model first, keyword classifier second.
derive() never raises: unavailable and malformed advisory replies both collapse to classify().
"""
from __future__ import annotations

import json
import logging
from typing import Any

from ..procedural.classifier import classify
from ..procedural.params import TextureParams
from .base import AdvisoryError, AdvisoryService

logger = logging.getLogger(__name__)

SOURCE_ADVISORY = "advisory"
SOURCE_FALLBACK = "fallback"

INSTRUCTION_TEMPLATE = """Analyze this texture description and provide texture generation parameters in JSON format.
Description: "{prompt}"

Respond with JSON containing:
- colors: array of hex colors (3-5 colors)
- pattern: "random", "grid", "organic", "geometric", "noise"
- roughness: number 0-1 (0=smooth, 1=rough)
- contrast: number 0-1
- type: "stone", "wood", "metal", "fabric", "abstract", "nature"

Example: {{"colors":["#8B4513","#D2691E","#F4A460"],"pattern":"organic","roughness":0.7,"contrast":0.6,"type":"wood"}}"""


def build_instruction(prompt: str) -> str:
    return INSTRUCTION_TEMPLATE.format(prompt=prompt)


def extract_json_object(text: str) -> dict[str, Any] | None:
    """
    First brace-delimited JSON object embedded in free text (models often wrap JSON in prose).
    Returns None when no parseable object is found.
    """
    if not text:
        return None
    decoder = json.JSONDecoder()
    start = text.find("{")
    while start != -1:
        try:
            obj, _ = decoder.raw_decode(text, start)
        except json.JSONDecodeError:
            start = text.find("{", start + 1)
            continue
        if isinstance(obj, dict):
            return obj
        start = text.find("{", start + 1)
    return None


class ParameterRequester:
    """
    Two-tier parameter derivation: ask the advisory service, fall back to classify().
    probe=True runs list_capabilities() first and skips generation when no model is available.
    """

    def __init__(self, service: AdvisoryService, *, probe: bool = True):
        self.service = service
        self.probe = probe

    def derive(self, prompt: str) -> TextureParams:
        params, _ = self.derive_with_source(prompt)
        return params

    def derive_with_source(self, prompt: str) -> tuple[TextureParams, str]:
        """Same as derive, plus which path produced the params ("advisory" or "fallback")."""
        params = self._ask_advisory(prompt)
        if params is not None:
            return params, SOURCE_ADVISORY
        logger.info("Using default texture parameters")
        return classify(prompt), SOURCE_FALLBACK

    def _ask_advisory(self, prompt: str) -> TextureParams | None:
        try:
            if self.probe:
                caps = self.service.list_capabilities()
                if not caps.available:
                    logger.info("Advisory service reports no available models")
                    return None
            text = self.service.generate(build_instruction(prompt))
        except AdvisoryError as e:
            logger.info("Advisory unavailable (%s): %s", e.note or "error", e)
            return None
        data = extract_json_object(text)
        if data is None:
            logger.info("Advisory response has no JSON object")
            logger.debug("Advisory response text: %.500s", text)
            return None
        try:
            params = TextureParams.from_dict(data)
        except ValueError as e:
            logger.info("Advisory response unusable: %s", e)
            return None
        logger.debug("Advisory parameters: %s", params.to_dict())
        return params
