"""Render modes and render attributes attached to scene nodes.

The graphics pipeline is treated as a state machine with switches
(capabilities) and attributes (colour, line width, ...). Render states
apply themselves to a :class:`GraphicsState`, which records the result.
"""

from __future__ import annotations

from abc import ABC, abstractmethod
from collections.abc import Iterator
from contextlib import contextmanager
from dataclasses import dataclass, field
from enum import IntEnum
from typing import Any

from .objects import SceneObject


def _render_state_members() -> list[tuple[str, int]]:
    members: list[tuple[str, int]] = []

    def block(base: str, start: int, count: int) -> None:
        members.append((base, start))
        members.extend((f"{base}{i}", start + i) for i in range(count))

    block("VERTEX_ATTRIB", 0, 8)
    singles = [
        "ALPHA_FUNC", "BLEND_COLOR", "BLEND_EQUATION", "BLEND_FUNC", "COLOR",
        "COLOR_MASK", "CULL_FACE", "DEPTH_FUNC", "DEPTH_MASK", "DEPTH_RANGE",
        "FOG", "FRONT_FACE", "POLYGON_MODE", "HINT", "LIGHT_MODEL",
        "LINE_STIPPLE", "LINE_WIDTH", "LOGIC_OP", "MATERIAL", "NORMAL",
        "PIXEL_TRANSFER", "POINT_PARAMETER", "POINT_SIZE", "POLYGON_OFFSET",
        "POLYGON_STIPPLE", "SAMPLE_COVERAGE", "SECONDARY_COLOR", "SHADE_MODEL",
        "STENCIL_FUNC", "STENCIL_MASK", "STENCIL_OP", "GLSL_PROGRAM",
    ]
    members.extend((name, 8 + offset) for offset, name in enumerate(singles))
    light = 8 + len(singles)
    block("LIGHT", light, 8)
    clip_plane = light + 8
    block("CLIP_PLANE", clip_plane, 6)
    texture_unit = clip_plane + 6
    block("TEXTURE_IMAGE_UNIT", texture_unit, 16)
    tex_gen = texture_unit + 32
    block("TEX_GEN", tex_gen, 16)
    tex_env = tex_gen + 8
    block("TEX_ENV", tex_env, 16)
    texture_matrix = tex_env + 8
    block("TEXTURE_MATRIX", texture_matrix, 16)
    count = texture_matrix + 8
    members.append(("RENDER_STATE_COUNT", count))
    members.append(("NONE", count + 1))
    return members


RenderStateType = IntEnum(  # type: ignore[misc]
    "RenderStateType", _render_state_members(), module=__name__
)
RenderStateType.__doc__ = "Kinds of render attribute; indexed kinds are numbered blocks."


class Capability(IntEnum):
    """Switchable pipeline capabilities."""

    BLEND = 0x0BE2
    CULL_FACE = 0x0B44
    DEPTH_TEST = 0x0B71
    STENCIL_TEST = 0x0B90
    DITHER = 0x0BD0
    POLYGON_OFFSET_FILL = 0x8037
    POLYGON_OFFSET_LINE = 0x2A02
    POLYGON_OFFSET_POINT = 0x2A01
    COLOR_LOGIC_OP = 0x0BF2
    MULTISAMPLE = 0x809D
    POINT_SMOOTH = 0x0B10
    LINE_SMOOTH = 0x0B20
    POLYGON_SMOOTH = 0x0B41
    LINE_STIPPLE = 0x0B24
    POLYGON_STIPPLE = 0x0B42
    POINT_SPRITE = 0x8861
    PROGRAM_POINT_SIZE = 0x8642
    ALPHA_TEST = 0x0BC0
    LIGHTING = 0x0B50
    COLOR_SUM = 0x8458
    FOG = 0x0B60
    NORMALIZE = 0x0BA1
    RESCALE_NORMAL = 0x803A
    VERTEX_PROGRAM_TWO_SIDE = 0x8643
    TEXTURE_CUBE_MAP_SEAMLESS = 0x884F
    CLIP_DISTANCE0 = 0x3000
    CLIP_DISTANCE1 = 0x3001
    CLIP_DISTANCE2 = 0x3002
    CLIP_DISTANCE3 = 0x3003
    CLIP_DISTANCE4 = 0x3004
    CLIP_DISTANCE5 = 0x3005
    CLIP_DISTANCE6 = 0x3006
    CLIP_DISTANCE7 = 0x3007
    SAMPLE_ALPHA_TO_COVERAGE = 0x809E
    SAMPLE_ALPHA_TO_ONE = 0x809F
    SAMPLE_COVERAGE = 0x80A0
    ENABLE_COUNT = 0x80A1
    UNKNOWN_ENABLE = 0x80A2


class PolygonFace(IntEnum):
    FRONT = 0x0404
    BACK = 0x0405
    FRONT_AND_BACK = 0x0408


class ColorMaterial(IntEnum):
    EMISSION = 0x1600
    AMBIENT = 0x1200
    DIFFUSE = 0x1201
    SPECULAR = 0x1202
    AMBIENT_AND_DIFFUSE = 0x1602


class PolygonFillMode(IntEnum):
    POINT = 0x1B00
    LINE = 0x1B01
    FILL = 0x1B02


class ShadeModel(IntEnum):
    FLAT = 0x1D00
    SMOOTH = 0x1D01


class FrontFace(IntEnum):
    CW = 0x0900
    CCW = 0x0901


Color = tuple[float, float, float, float]


def _default_polygon_mode() -> dict[PolygonFace, PolygonFillMode]:
    return {PolygonFace.FRONT: PolygonFillMode.FILL, PolygonFace.BACK: PolygonFillMode.FILL}


def _default_enabled() -> set[Capability]:
    return {Capability.DITHER, Capability.MULTISAMPLE}


@dataclass
class GraphicsState:
    """The current pipeline state that render states are applied to."""

    color: Color = (1.0, 1.0, 1.0, 1.0)
    point_size: float = 1.0
    line_width: float = 1.0
    line_stipple: tuple[int, int] = (1, 0xFFFF)
    polygon_mode: dict[PolygonFace, PolygonFillMode] = field(default_factory=_default_polygon_mode)
    enabled: set[Capability] = field(default_factory=_default_enabled)
    _saved: list[tuple[Any, ...]] = field(default_factory=list, init=False, repr=False)

    def enable(self, capability: Capability) -> None:
        self.enabled.add(Capability(capability))

    def disable(self, capability: Capability) -> None:
        self.enabled.discard(Capability(capability))

    def is_enabled(self, capability: Capability) -> bool:
        return capability in self.enabled

    def set_polygon_mode(self, face: PolygonFace, mode: PolygonFillMode) -> None:
        """Set the fill mode of one face, or of both with FRONT_AND_BACK."""
        mode = PolygonFillMode(mode)
        if face == PolygonFace.FRONT_AND_BACK:
            self.polygon_mode[PolygonFace.FRONT] = mode
            self.polygon_mode[PolygonFace.BACK] = mode
        else:
            self.polygon_mode[PolygonFace(face)] = mode

    @property
    def attrib_depth(self) -> int:
        """Number of saved attribute snapshots."""
        return len(self._saved)

    def push_attrib(self) -> None:
        """Save every attribute so that :meth:`pop_attrib` can restore it."""
        self._saved.append((
            self.color,
            self.point_size,
            self.line_width,
            self.line_stipple,
            dict(self.polygon_mode),
            set(self.enabled),
        ))

    def pop_attrib(self) -> None:
        """Restore the attributes saved by the last :meth:`push_attrib`."""
        if not self._saved:
            raise RuntimeError("attribute stack underflow")
        (
            self.color,
            self.point_size,
            self.line_width,
            self.line_stipple,
            self.polygon_mode,
            self.enabled,
        ) = self._saved.pop()

    @contextmanager
    def saved_attribs(self) -> Iterator[GraphicsState]:
        """Context manager that pushes attributes on entry and pops them on exit."""
        self.push_attrib()
        try:
            yield self
        finally:
            self.pop_attrib()


class RenderState(SceneObject, ABC):
    """A render attribute; ``index`` selects one of several (e.g. lights)."""

    @property
    def type(self) -> RenderStateType:
        return RenderStateType.NONE

    @abstractmethod
    def apply(self, camera: Any, ctx: GraphicsState, index: int = 0) -> None:
        """Apply this attribute to ``ctx``."""


class ColorState(RenderState):
    """Current drawing colour (RGBA)."""

    def __init__(self, color: Color = (1.0, 1.0, 1.0, 1.0), name: str | None = None) -> None:
        super().__init__(name)
        self.value = color

    @property
    def type(self) -> RenderStateType:
        return RenderStateType.COLOR

    @property
    def value(self) -> Color:
        return self._value

    @value.setter
    def value(self, color: Color) -> None:
        components = tuple(float(c) for c in color)
        if len(components) != 4:
            raise ValueError("a colour needs exactly four components (r, g, b, a)")
        self._value: Color = components  # type: ignore[assignment]

    def apply(self, camera: Any, ctx: GraphicsState, index: int = 0) -> None:
        ctx.color = self.value


class PointSizeState(RenderState):
    """Rasterised point diameter."""

    def __init__(self, point_size: float = 1.0, name: str | None = None) -> None:
        super().__init__(name)
        self.point_size = point_size

    @property
    def type(self) -> RenderStateType:
        return RenderStateType.POINT_SIZE

    def apply(self, camera: Any, ctx: GraphicsState, index: int = 0) -> None:
        ctx.point_size = self.point_size


class LineWidthState(RenderState):
    """Rasterised line width."""

    def __init__(self, line_width: float = 1.0, name: str | None = None) -> None:
        super().__init__(name)
        self.line_width = line_width

    @property
    def type(self) -> RenderStateType:
        return RenderStateType.LINE_WIDTH

    def apply(self, camera: Any, ctx: GraphicsState, index: int = 0) -> None:
        ctx.line_width = self.line_width


class LineStippleState(RenderState):
    """Line stipple repeat factor and 16-bit pattern."""

    def __init__(self, factor: int = 1, pattern: int = 0xFFFF, name: str | None = None) -> None:
        super().__init__(name)
        self.factor = factor
        self.pattern = pattern

    @property
    def type(self) -> RenderStateType:
        return RenderStateType.LINE_STIPPLE

    @property
    def pattern(self) -> int:
        return self._pattern

    @pattern.setter
    def pattern(self, pattern: int) -> None:
        self._pattern = int(pattern) & 0xFFFF

    def apply(self, camera: Any, ctx: GraphicsState, index: int = 0) -> None:
        ctx.line_stipple = (self.factor, self.pattern)


class PolygonModeState(RenderState):
    """Fill mode of front and back polygon faces."""

    def __init__(
        self,
        front_face: PolygonFillMode = PolygonFillMode.FILL,
        back_face: PolygonFillMode = PolygonFillMode.FILL,
        name: str | None = None,
    ) -> None:
        super().__init__(name)
        self.front_face = front_face
        self.back_face = back_face

    @property
    def type(self) -> RenderStateType:
        return RenderStateType.POLYGON_MODE

    def apply(self, camera: Any, ctx: GraphicsState, index: int = 0) -> None:
        if self.front_face == self.back_face:
            ctx.set_polygon_mode(PolygonFace.FRONT_AND_BACK, self.front_face)
        else:
            ctx.set_polygon_mode(PolygonFace.FRONT, self.front_face)
            ctx.set_polygon_mode(PolygonFace.BACK, self.back_face)


class EnableSet(SceneObject):
    """A set of capability switches."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self._enables: list[Capability] = [Capability.DITHER, Capability.MULTISAMPLE]
        self._modes: dict[Capability, bool] = {}

    @property
    def enables(self) -> tuple[Capability, ...]:
        return tuple(self._enables)

    def enable(self, capability: Capability) -> None:
        self._modes[capability] = True

    def disable(self, capability: Capability) -> None:
        self._modes[capability] = False

    def is_enabled(self, capability: Capability) -> bool:
        return self._modes.get(capability, False)

    def disable_all(self) -> None:
        self._modes.clear()
        self._enables.clear()


@dataclass
class RenderStateSlot:
    """A render state bound to an index (light number, texture unit, ...)."""

    render_state: RenderState
    index: int = -1

    @property
    def type(self) -> RenderStateType | int:
        base = self.render_state.type
        if self.index <= 0:
            return base
        value = int(base) + self.index
        try:
            return RenderStateType(value)
        except ValueError:
            return value

    def apply(self, camera: Any, ctx: GraphicsState) -> None:
        self.render_state.apply(camera, ctx, self.index)


class RenderStateSet(SceneObject):
    """Render states and capability modes applied together to a node."""

    def __init__(self, name: str | None = None) -> None:
        super().__init__(name)
        self._slots: list[RenderStateSlot] = []
        self._modes: dict[Capability, bool] = {}

    def __len__(self) -> int:
        return len(self._slots)

    @property
    def render_states(self) -> tuple[RenderStateSlot, ...]:
        return tuple(self._slots)

    @property
    def modes(self) -> dict[Capability, bool]:
        return dict(self._modes)

    def _find(self, type: RenderStateType, index: int) -> RenderStateSlot | None:
        return next(
            (s for s in self._slots if s.render_state.type == type and s.index == index),
            None,
        )

    def set_render_state(self, renderstate: RenderState | None, index: int = 0) -> None:
        """Add a state, replacing one of the same type and index; None is ignored."""
        if renderstate is None:
            return
        slot = self._find(renderstate.type, index)
        if slot is not None:
            slot.render_state = renderstate
        else:
            self._slots.append(RenderStateSlot(renderstate, index))

    def render_state(self, type: RenderStateType, index: int = -1) -> RenderState | None:
        slot = self._find(type, index)
        return slot.render_state if slot is not None else None

    def erase_render_state(self, type: RenderStateType, index: int) -> None:
        """Remove the state of ``type`` at ``index``; index -1 removes all of that type."""
        if index == -1:
            self._slots = [s for s in self._slots if s.render_state.type != type]
            return
        slot = self._find(type, index)
        if slot is not None:
            self._slots.remove(slot)

    def erase_all_render_states(self) -> None:
        self._slots.clear()
        self._modes.clear()

    def enable(self, capability: Capability) -> None:
        self._modes[capability] = True

    def disable(self, capability: Capability) -> None:
        self._modes[capability] = False

    def apply(self, camera: Any, ctx: GraphicsState) -> None:
        """Apply the modes in capability order, then the states in insertion order."""
        for capability, on in sorted(self._modes.items()):
            if on:
                ctx.enable(capability)
            else:
                ctx.disable(capability)
        for slot in self._slots:
            slot.apply(camera, ctx)