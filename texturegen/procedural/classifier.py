"""
Prompt → texture parameters using only our keyword groups and presets. No network, no model.
"""
from .data import DEFAULT_PRESET, KEYWORD_GROUPS, PRESETS
from .params import TextureParams


def classify(prompt: str) -> TextureParams:
    """
    Pick a built-in preset by substring match against the ordered keyword groups.
    First matching group wins; no match → abstract preset. Pure and total.
    """
    lowered = (prompt or "").lower()
    preset = DEFAULT_PRESET
    for keywords, name in KEYWORD_GROUPS:
        if any(k in lowered for k in keywords):
            preset = name
            break
    return TextureParams.from_dict(PRESETS[preset])
