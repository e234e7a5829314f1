"""A scene: a main camera and a root group of the instance tree."""

from __future__ import annotations

import numpy as np

from .nodes import Camera, Group, Node, Primitive, Transform, _submit
from .objects import SceneObject
from .renderstate import GraphicsState

_AXIS_EXTENT = 100.0


class Scene(SceneObject):
    """Holds the main camera and the root node, and renders them."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self.main_camera: Camera = Camera()
        self._root: Node = Transform()

    @property
    def scene_data(self) -> Node:
        return self._root

    def set_scene_data(self, root: Node | None) -> bool:
        """Use ``root`` as the scene root; only groups are accepted."""
        if not isinstance(root, Group):
            return False
        self._root = root
        return True

    def render(self, ctx: GraphicsState | None, camera: Camera | None) -> bool:
        """Render the scene tree, then the world coordinate axes."""
        if ctx is None or camera is None:
            return False
        self._root.render(ctx, camera)
        lines = self.axis_lines()
        vertices = np.array([point for start, end, _ in lines for point in (start, end)])
        colors = np.array([color for _, _, color in lines for _ in range(2)], dtype=float)
        _submit(ctx, Primitive.LINES, {"vertex": vertices, "color": colors})
        return True

    def axis_lines(self) -> list[tuple[np.ndarray, np.ndarray, tuple[float, float, float]]]:
        """The X (red), Y (green) and Z (blue) axes as (start, end, colour)."""
        axes = []
        for i, color in enumerate([(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]):
            start = np.zeros(3)
            end = np.zeros(3)
            start[i] = -_AXIS_EXTENT
            end[i] = _AXIS_EXTENT
            axes.append((start, end, color))
        return axes