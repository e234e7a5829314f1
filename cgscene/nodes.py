"""Scene-graph nodes: groups, instance leaves, renderables, transforms and cameras.

A render context is a :class:`~cgscene.renderstate.GraphicsState`. If the
context also has a ``draw(primitive, attributes, matrix)`` method, every
executed display list batch is handed to it together with the model matrix
accumulated from the enclosing transforms.
"""

from __future__ import annotations

import math
from collections.abc import Iterator
from contextlib import contextmanager
from contextvars import ContextVar
from enum import Enum
from typing import Any

import numpy as np

from .objects import Callback, SceneObject
from .renderstate import GraphicsState, RenderStateSet


class Primitive(Enum):
    """Kinds of primitive a display list batch is drawn as."""

    POINTS = "points"
    LINES = "lines"
    LINE_STRIP = "line_strip"
    LINE_LOOP = "line_loop"
    TRIANGLES = "triangles"
    TRIANGLE_STRIP = "triangle_strip"
    TRIANGLE_FAN = "triangle_fan"
    QUADS = "quads"
    QUAD_STRIP = "quad_strip"
    POLYGON = "polygon"


DisplayList = list[tuple[Primitive, dict[str, np.ndarray]]]

_model_matrix: ContextVar[np.ndarray] = ContextVar("model_matrix", default=np.eye(4))


def _submit(ctx: Any, primitive: Primitive, attributes: dict[str, np.ndarray]) -> None:
    draw = getattr(ctx, "draw", None)
    if draw is not None:
        draw(primitive, attributes, _model_matrix.get().copy())


def _as_matrix(m: Any) -> np.ndarray:
    arr = np.array(m, dtype=float)
    if arr.shape != (4, 4):
        raise ValueError(f"expected a 4x4 matrix, got shape {arr.shape}")
    return arr


def _translation(tx: float, ty: float, tz: float) -> np.ndarray:
    m = np.eye(4)
    m[:3, 3] = (tx, ty, tz)
    return m


def _scaling(sx: float, sy: float, sz: float) -> np.ndarray:
    return np.diag([float(sx), float(sy), float(sz), 1.0])


def _rotation(radians: float, x: float, y: float, z: float) -> np.ndarray:
    axis = np.array([x, y, z], dtype=float)
    length = np.linalg.norm(axis)
    if length == 0.0:
        raise ValueError("rotation axis must not be the zero vector")
    ax, ay, az = axis / length
    c, s = math.cos(radians), math.sin(radians)
    t = 1.0 - c
    m = np.eye(4)
    m[:3, :3] = [
        [t * ax * ax + c, t * ax * ay - s * az, t * ax * az + s * ay],
        [t * ax * ay + s * az, t * ay * ay + c, t * ay * az - s * ax],
        [t * ax * az - s * ay, t * ay * az + s * ax, t * az * az + c],
    ]
    return m


def _ortho(left: float, right: float, bottom: float, top: float,
           near: float, far: float) -> np.ndarray:
    if right == left or top == bottom or far == near:
        raise ValueError("orthographic volume must have non-zero extent")
    m = np.eye(4)
    m[0, 0] = 2.0 / (right - left)
    m[1, 1] = 2.0 / (top - bottom)
    m[2, 2] = -2.0 / (far - near)
    m[0, 3] = -(right + left) / (right - left)
    m[1, 3] = -(top + bottom) / (top - bottom)
    m[2, 3] = -(far + near) / (far - near)
    return m


def _perspective(fov_y_degrees: float, aspect: float, near: float, far: float) -> np.ndarray:
    if aspect <= 0 or near <= 0 or far == near:
        raise ValueError("invalid perspective parameters")
    f = 1.0 / math.tan(math.radians(fov_y_degrees) / 2.0)
    m = np.zeros((4, 4))
    m[0, 0] = f / aspect
    m[1, 1] = f
    m[2, 2] = (far + near) / (near - far)
    m[2, 3] = 2.0 * far * near / (near - far)
    m[3, 2] = -1.0
    return m


class Node(SceneObject):
    """Base scene-graph node; a node may be shared by several parent groups."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self._parents: list[Group] = []
        self.update_callback: Callback | None = None
        self.bound_dirty = True
        self.render_state_set: RenderStateSet | None = None

    @property
    def parents(self) -> tuple[Group, ...]:
        return tuple(self._parents)

    @property
    def num_parents(self) -> int:
        return len(self._parents)

    def get_parent(self, i: int) -> Group | None:
        """Return the ``i``-th parent, or None when there is none."""
        if 0 <= i < len(self._parents):
            return self._parents[i]
        return None

    def _add_parent(self, parent: Group) -> None:
        self._parents.append(parent)

    def render(self, ctx: GraphicsState | None, camera: Camera | None) -> bool:
        return ctx is not None and camera is not None

    def dirty_bound(self) -> None:
        """Mark the bounds for recomputation, propagating to the parents."""
        if not self.bound_dirty:
            self.bound_dirty = True
            for parent in self._parents:
                parent.dirty_bound()

    def world_matrix(self) -> np.ndarray:
        """Matrix to the scene root, taken through the first parent."""
        mat = np.eye(4)
        parent = self.get_parent(0)
        if isinstance(parent, Transform):
            mat = parent.world_matrix() @ mat
        return mat

    def get_or_create_render_state_set(self) -> RenderStateSet:
        if self.render_state_set is None:
            self.render_state_set = RenderStateSet()
        return self.render_state_set

    @contextmanager
    def _render_states(self, ctx: GraphicsState, camera: Camera) -> Iterator[None]:
        states = self.render_state_set
        if states is None:
            yield
            return
        ctx.push_attrib()
        try:
            states.apply(camera, ctx)
            yield
        finally:
            ctx.pop_attrib()


class Group(Node):
    """A node with an ordered list of children."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self._children: list[Node] = []

    @property
    def children(self) -> tuple[Node, ...]:
        return tuple(self._children)

    @property
    def num_children(self) -> int:
        return len(self._children)

    def _render_children(self, ctx: GraphicsState, camera: Camera) -> None:
        with self._render_states(ctx, camera):
            for child in self._children:
                child.render(ctx, camera)

    def render(self, ctx: GraphicsState | None, camera: Camera | None) -> bool:
        if ctx is None or camera is None:
            return False
        self._render_children(ctx, camera)
        return True

    def add_child(self, child: Node | None) -> bool:
        """Append ``child``; this bypasses any subclass restriction on children."""
        return Group.insert_child(self, len(self._children), child)

    def insert_child(self, index: int, child: Node | None) -> bool:
        """Insert ``child`` before ``index``; indices past the end append."""
        if child is None:
            return False
        if index < 0 or index >= len(self._children):
            self._children.append(child)
        else:
            self._children.insert(index, child)
        child._add_parent(self)
        return True

    def get_child(self, i: int) -> Node | None:
        if 0 <= i < len(self._children):
            return self._children[i]
        return None

    def contains_node(self, node: Node | None) -> bool:
        return any(child is node for child in self._children)

    def child_index(self, node: Node | None) -> int:
        """Index of ``node`` among the children, or the child count if absent."""
        return next(
            (i for i, child in enumerate(self._children) if child is node),
            len(self._children),
        )


class Geode(Group):
    """An instance leaf whose children are renderable models."""

    @property
    def num_renderables(self) -> int:
        return self.num_children

    def insert_child(self, index: int, child: Node | None) -> bool:
        if not isinstance(child, Renderable):
            return False
        return super().insert_child(index, child)

    def get_renderable(self, i: int) -> Renderable | None:
        child = self._children[i]
        return child if isinstance(child, Renderable) else None

    def renderable_index(self, renderable: Renderable | None) -> int:
        return self.child_index(renderable)

    def contains_renderable(self, renderable: Renderable | None) -> bool:
        return self.contains_node(renderable)


class Renderable(Node):
    """A drawable model; subclasses fill :meth:`build_display_list`."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self.display_list_enabled = False
        self.display_list_dirty = True
        self.display_list: DisplayList | None = None

    def build_display_list(self) -> DisplayList:
        """Return the batches that draw this model."""
        return []

    def delete_display_list(self) -> None:
        self.display_list = None

    def render(self, ctx: GraphicsState | None, camera: Camera | None) -> bool:
        if ctx is None or camera is None:
            return False
        with self._render_states(ctx, camera):
            if self.display_list_enabled:
                if self.display_list_dirty or self.display_list is None:
                    self.display_list = self.build_display_list()
                    self.display_list_dirty = False
                for primitive, attributes in self.display_list:
                    _submit(ctx, primitive, attributes)
        return True


class Geometry(Renderable):
    """A geometric model drawn by derived classes."""

    def render(self, ctx: GraphicsState | None, camera: Camera | None) -> bool:
        return ctx is not None and camera is not None


class Transform(Group):
    """A group placed in its parent by a local 4x4 matrix."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self._local = np.eye(4)
        self.world_matrix_dirty = True

    @property
    def local_matrix(self) -> np.ndarray:
        return self._local.copy()

    @local_matrix.setter
    def local_matrix(self, m: Any) -> None:
        self.set_local_matrix(m)

    def _dirty_world_matrix(self) -> None:
        self.world_matrix_dirty = True
        for child in self._children:
            if isinstance(child, Transform):
                child._dirty_world_matrix()
        self.dirty_bound()

    def render(self, ctx: GraphicsState | None, camera: Camera | None) -> bool:
        if ctx is None or camera is None:
            return False
        token = _model_matrix.set(_model_matrix.get() @ self._local)
        try:
            self._render_children(ctx, camera)
        finally:
            _model_matrix.reset(token)
        return True

    def set_local_matrix(self, m: Any) -> None:
        self._local = _as_matrix(m)
        self._dirty_world_matrix()

    def translate(self, tx: float, ty: float, tz: float) -> None:
        self._local = self._local @ _translation(tx, ty, tz)
        self._dirty_world_matrix()

    def scale(self, sx: float, sy: float, sz: float) -> None:
        self._local = self._local @ _scaling(sx, sy, sz)
        self._dirty_world_matrix()

    def rotate(self, degrees: float, x: float, y: float, z: float) -> None:
        self._local = self._local @ _rotation(math.radians(degrees), x, y, z)
        self._dirty_world_matrix()

    def pre_multiply(self, m: Any) -> None:
        """Left-multiply the local matrix by ``m``."""
        self._local = _as_matrix(m) @ self._local
        self._dirty_world_matrix()

    def post_multiply(self, m: Any) -> None:
        """Right-multiply the local matrix by ``m``."""
        self._local = self._local @ _as_matrix(m)
        self._dirty_world_matrix()


class Camera(Transform):
    """A camera node with a viewport and three projection modes.

    Mode 0 is a 3D orthographic projection, mode 1 a perspective
    projection, and mode 2 (or any other value) a 2D orthographic one.
    """

    def __init__(
        self,
        width: float = 800.0,
        height: float = 600.0,
        near: float = 0.1,
        far: float = 1000.0,
        fov_y: float = 45.0,
        name: str | None = None,
    ) -> None:
        super().__init__(name)
        self.width = width
        self.height = height
        self.near = near
        self.far = far
        self.fov_y = fov_y
        self._projection_mode = 0

    @property
    def projection_mode(self) -> int:
        return self._projection_mode

    @projection_mode.setter
    def projection_mode(self, mode: int) -> None:
        if 0 <= mode <= 2:
            self._projection_mode = mode

    def projection(self, mode: int) -> np.ndarray:
        """Return the projection matrix for ``mode``."""
        w, h = float(self.width), float(self.height)
        if mode == 0:
            return _ortho(-w / 2, w / 2, -h / 2, h / 2, self.near, self.far)
        if mode == 1:
            if h == 0:
                raise ValueError("viewport height must not be zero")
            return _perspective(self.fov_y, w / h, self.near, self.far)
        return _ortho(0.0, w, 0.0, h, -1.0, 1.0)