"""Scene graph, render states, tessellated shapes, input commands and raster algorithms."""

__version__ = "0.1.0"

__all__ = ["events", "nodes", "objects", "raster", "renderstate", "scene", "shapes"]