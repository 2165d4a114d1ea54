"""A small 2D entity-component game runtime: registry, hierarchy, YAML levels, input, combat, scripts and sprite projection."""

__version__ = "0.1.0"