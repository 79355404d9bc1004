"""
Our data: keyword groups → material preset. Used by the fallback classifier.
Groups are tested in order; the first group with any substring hit wins.
"""
# (keywords, preset name). Order matters: "wood" shadows "stone" when both appear.
KEYWORD_GROUPS: tuple[tuple[tuple[str, ...], str], ...] = (
    (("wood", "bark"), "wood"),
    (("stone", "rock", "wall"), "stone"),
    (("metal", "steel"), "metal"),
    (("grass", "leaf"), "nature"),
)

DEFAULT_PRESET = "abstract"
