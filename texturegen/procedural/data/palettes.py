"""
Our data: the built-in texture presets used when the advisory model is unavailable.
Same shape as an advisory response: hex colors, pattern, roughness, contrast, type.
"""
PRESETS: dict[str, dict] = {
    "wood": {
        "colors": ["#8B4513", "#D2691E", "#F4A460", "#654321"],
        "pattern": "organic",
        "roughness": 0.7,
        "contrast": 0.6,
        "type": "wood",
    },
    "stone": {
        "colors": ["#696969", "#A9A9A9", "#808080", "#D3D3D3"],
        "pattern": "noise",
        "roughness": 0.8,
        "contrast": 0.7,
        "type": "stone",
    },
    "metal": {
        "colors": ["#C0C0C0", "#808080", "#A9A9A9", "#DCDCDC"],
        "pattern": "grid",
        "roughness": 0.3,
        "contrast": 0.8,
        "type": "metal",
    },
    "nature": {
        "colors": ["#228B22", "#32CD32", "#90EE90", "#006400"],
        "pattern": "organic",
        "roughness": 0.6,
        "contrast": 0.5,
        "type": "nature",
    },
    "abstract": {
        "colors": ["#FF6B6B", "#4ECDC4", "#45B7D1", "#96CEB4"],
        "pattern": "random",
        "roughness": 0.5,
        "contrast": 0.6,
        "type": "abstract",
    },
}

# Fallback checkerboard colors (RGB): even tiles, odd tiles
CHECKER_LIGHT = (0x66, 0x66, 0x66)
CHECKER_DARK = (0x33, 0x33, 0x33)
