# Procedural texture engine: our keyword data, renderers and post-processing
# (the synthesizer lives in .generator, which also depends on ..advisory)

from .classifier import classify
from .params import Pattern, TextureParams
from .renderer import RENDERERS, render_pattern

__all__ = ["classify", "Pattern", "TextureParams", "RENDERERS", "render_pattern"]
