# texturegen: prompt → tileable procedural textures, advisory model first, keyword presets second

__version__ = "0.1.0"
