from .keywords import KEYWORD_GROUPS, DEFAULT_PRESET
from .palettes import PRESETS, CHECKER_LIGHT, CHECKER_DARK

__all__ = ["KEYWORD_GROUPS", "DEFAULT_PRESET", "PRESETS", "CHECKER_LIGHT", "CHECKER_DARK"]
