"""Built-in renderable shapes: a sphere and an axis-aligned cube."""

from __future__ import annotations

import math
from dataclasses import dataclass

import numpy as np

from .nodes import DisplayList, Primitive, Renderable

_DEFAULT_SLICES = 40
_DEFAULT_STACKS = 20

_CUBE_TEXCOORDS = ((0.0, 1.0), (0.0, 0.0), (1.0, 0.0), (1.0, 1.0))

# Each face: outward normal and four corners as sign triples, counter-clockwise
# seen from outside the cube.
_CUBE_BODY = (
    ((0, -1, 0), ((-1, -1, 1), (-1, -1, -1), (1, -1, -1), (1, -1, 1))),
    ((0, 1, 0), ((1, 1, 1), (1, 1, -1), (-1, 1, -1), (-1, 1, 1))),
    ((1, 0, 0), ((1, -1, 1), (1, -1, -1), (1, 1, -1), (1, 1, 1))),
    ((-1, 0, 0), ((-1, 1, 1), (-1, 1, -1), (-1, -1, -1), (-1, -1, 1))),
)
_CUBE_TOP = ((0, 0, 1), ((-1, 1, 1), (-1, -1, 1), (1, -1, 1), (1, 1, 1)))
_CUBE_BOTTOM = ((0, 0, -1), ((1, 1, -1), (1, -1, -1), (-1, -1, -1), (-1, 1, -1)))


@dataclass
class TessellationHints:
    """How finely a shape is subdivided and which parts of it are generated."""

    detail_ratio: float = 1.0
    target_slices: int = _DEFAULT_SLICES
    target_stacks: int = _DEFAULT_STACKS
    create_front_face: bool = True
    create_back_face: bool = False
    create_normals: bool = True
    create_texture_coords: bool = True
    create_top: bool = True
    create_body: bool = True
    create_bottom: bool = True


class Sphere(Renderable):
    """A sphere centred on the origin, tessellated into quad strips."""

    def __init__(self, radius: float = 1.0, name: str | None = None) -> None:
        super().__init__(name)
        self._radius = float(radius)
        self._hints: TessellationHints | None = None

    @property
    def radius(self) -> float:
        return self._radius

    @radius.setter
    def radius(self, radius: float) -> None:
        self.set_radius(radius)

    @property
    def tessellation_hints(self) -> TessellationHints | None:
        return self._hints

    def set_radius(self, radius: float) -> None:
        """Change the radius; the display list is rebuilt only if it changed."""
        radius = float(radius)
        if radius != self._radius:
            self._radius = radius
            self.display_list_dirty = True

    def set_tessellation_hints(self, hints: TessellationHints | None) -> None:
        """Use ``hints``; setting a different object marks the display list dirty."""
        if hints is not self._hints:
            self._hints = hints
            self.display_list_dirty = True

    def build_display_list(self) -> DisplayList:
        """One quad strip per slice from pole to pole."""
        hints = self._hints
        create_normals = hints.create_normals if hints else True
        create_texcoords = hints.create_texture_coords if hints else True
        slices = hints.target_slices if hints else _DEFAULT_SLICES
        stacks = hints.target_stacks if hints else _DEFAULT_STACKS
        if slices > 0 and stacks <= 0:
            raise ValueError("a sphere needs at least one stack")

        batches: DisplayList = []
        if slices <= 0:
            return batches
        phi = np.arange(stacks + 1) * math.pi / stacks
        sin_phi, cos_phi = np.sin(phi), np.cos(phi)
        t = np.arange(stacks + 1) / stacks
        r = self._radius

        def ring(theta: float) -> np.ndarray:
            return np.column_stack(
                (r * math.cos(theta) * sin_phi, r * math.sin(theta) * sin_phi, r * cos_phi)
            )

        for slice_ in range(slices):
            theta1 = slice_ * 2.0 * math.pi / slices
            theta2 = (slice_ + 1) * 2.0 * math.pi / slices
            pos1, pos2 = ring(theta1), ring(theta2)
            vertices = np.empty((2 * (stacks + 1), 3))
            vertices[0::2] = pos1
            vertices[1::2] = pos2
            attributes = {"vertex": vertices}
            if create_normals:
                with np.errstate(invalid="ignore", divide="ignore"):
                    normal1 = pos1 / np.linalg.norm(pos1, axis=1, keepdims=True)
                attributes["normal"] = np.repeat(normal1, 2, axis=0)
            if create_texcoords:
                texcoords = np.empty((2 * (stacks + 1), 2))
                texcoords[0::2, 0] = slice_ / slices
                texcoords[1::2, 0] = (slice_ + 1) / slices
                texcoords[0::2, 1] = t
                texcoords[1::2, 1] = t
                attributes["texcoord"] = texcoords
            batches.append((Primitive.QUAD_STRIP, attributes))
        return batches


class Cube(Renderable):
    """An axis-aligned box centred on the origin.

    ``Cube()`` is a unit cube, ``Cube(w)`` a cube of edge ``w`` and
    ``Cube(x, y, z)`` a box with the given edge lengths.
    """

    def __init__(
        self,
        length_x: float = 1.0,
        length_y: float | None = None,
        length_z: float | None = None,
        name: str | None = None,
    ) -> None:
        super().__init__(name)
        if (length_y is None) != (length_z is None):
            raise TypeError("give one edge length or all three")
        if length_y is None:
            length_y = length_z = length_x
        self._half = np.array([length_x, length_y, length_z], dtype=float) * 0.5
        self._hints: TessellationHints | None = None

    @property
    def half_lengths(self) -> tuple[float, float, float]:
        return tuple(float(v) for v in self._half)  # type: ignore[return-value]

    @half_lengths.setter
    def half_lengths(self, value: tuple[float, float, float]) -> None:
        half = np.array(value, dtype=float)
        if half.shape != (3,):
            raise ValueError("half lengths need exactly three components")
        self._half = half

    @property
    def tessellation_hints(self) -> TessellationHints | None:
        return self._hints

    def set_tessellation_hints(self, hints: TessellationHints | None) -> None:
        """Use ``hints``; setting a different object marks the display list dirty."""
        if hints is not self._hints:
            self._hints = hints
            self.display_list_dirty = True

    def build_display_list(self) -> DisplayList:
        """A single quad batch with the side, top and bottom faces as requested."""
        hints = self._hints
        faces = []
        if hints.create_body if hints else True:
            faces.extend(_CUBE_BODY)
        if hints.create_top if hints else True:
            faces.append(_CUBE_TOP)
        if hints.create_bottom if hints else True:
            faces.append(_CUBE_BOTTOM)

        vertices = [np.array(corner, dtype=float) * self._half
                    for _, corners in faces for corner in corners]
        normals = [normal for normal, corners in faces for _ in corners]
        texcoords = [uv for _ in faces for uv in _CUBE_TEXCOORDS]
        attributes = {
            "vertex": np.array(vertices, dtype=float).reshape(-1, 3),
            "normal": np.array(normals, dtype=float).reshape(-1, 3),
            "texcoord": np.array(texcoords, dtype=float).reshape(-1, 2),
        }
        return [(Primitive.QUADS, attributes)]


@dataclass
class SphereParams:
    """Sphere parameters as entered by the user."""

    radius: float = 0.0
    slices: int = 0
    stacks: int = 0

    def validate(self) -> SphereParams:
        """Check the accepted ranges and return self; raises ValueError otherwise."""
        if not 1.0 <= self.radius <= 500.0:
            raise ValueError(f"radius must be between 1 and 500, got {self.radius}")
        if not 8 <= self.slices <= 64:
            raise ValueError(f"slices must be between 8 and 64, got {self.slices}")
        if not 8 <= self.stacks <= 64:
            raise ValueError(f"stacks must be between 8 and 64, got {self.stacks}")
        return self