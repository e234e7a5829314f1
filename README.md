# cgscene

A compact scene-graph toolkit for teaching and experimenting with computer
graphics. It models a tree of nodes with transforms and render states,
builds vertex data for spheres and cubes, routes input events to an active
command, and implements classic raster algorithms (lines, circles, arcs,
polygon and seed fills) on an in-memory canvas. The only dependency is numpy.

## Installation

```
pip install .
```

To run the tests:

```
pip install ".[test]"
pytest
```

## Modules

- `cgscene.objects`: `SceneObject`, the named base of every scene item
  (unnamed objects are called `SceneObject<n>`; `to_dict` / `load_dict`
  save and restore the name), and `Callback`, a hook that `run` reports as
  enabled or disabled.
- `cgscene.renderstate`: the enums `RenderStateType`, `Capability`,
  `PolygonFace`, `ColorMaterial`, `PolygonFillMode`, `ShadeModel` and
  `FrontFace`; the attributes `ColorState`, `PointSizeState`,
  `LineWidthState`, `LineStippleState` and `PolygonModeState`;
  `RenderStateSlot`, `RenderStateSet` and `EnableSet`; and
  `GraphicsState`, which records the effect of applying states and has an
  attribute stack (`push_attrib`, `pop_attrib`, `saved_attribs()`).
- `cgscene.nodes`: `Node`, `Group`, `Geode` (accepts only `Renderable`
  children through `insert_child`), `Renderable`, `Geometry`, `Transform`
  (local 4x4 matrix with `translate`, `scale`, `rotate`, `pre_multiply`,
  `post_multiply`) and `Camera`, whose `projection(mode)` returns a 3D
  orthographic (0), perspective (1) or 2D orthographic (other) matrix.
  `Primitive` names the kinds of drawing batch.
- `cgscene.scene`: `Scene`, holding `main_camera` and a root group
  (`scene_data`, `set_scene_data`), with `render` and `axis_lines`.
- `cgscene.shapes`: `TessellationHints`, `Sphere`, `Cube`, and
  `SphereParams`, whose `validate` checks radius 1–500 and slices/stacks
  8–64.
- `cgscene.events`: `EventType`, `KeyAction`, `UIEventHandler` and
  `CommandDispatcher`, which forwards window events to the current command
  and cancels and drops it on Escape.
- `cgscene.raster`: `Canvas`, `dda_line`, `midpoint_line`,
  `bresenham_line`, `midpoint_circle`, `bresenham_circle`, `arc`,
  `scanline_fill`, `boundary_fill`, `flood_fill`, `star_triangles` and
  `demo_primitives`.

## Rendering

A render context is a `GraphicsState`. If it also has a
`draw(primitive, attributes, matrix)` method, each display-list batch of a
renderable with `display_list_enabled` set is passed to it, with the model
matrix built up from the enclosing transforms. `Scene.render` draws the
tree and then the three coordinate axes as one `Primitive.LINES` batch.

```python
from cgscene.nodes import Geode, Transform
from cgscene.renderstate import GraphicsState
from cgscene.scene import Scene
from cgscene.shapes import Sphere

batches = []

class Recorder(GraphicsState):
    def draw(self, primitive, attributes, matrix):
        batches.append((primitive, attributes["vertex"].shape, matrix))

scene = Scene()
moved = Transform()
moved.translate(10.0, 0.0, 0.0)
geode = Geode()
sphere = Sphere(5.0)
sphere.display_list_enabled = True
geode.add_child(sphere)
moved.add_child(geode)
scene.scene_data.add_child(moved)

scene.render(Recorder(), scene.main_camera)
print(len(batches))        # 40 sphere strips + 1 axis batch
print(batches[0][2][:3, 3])  # [10. 0. 0.]
```

## Raster algorithms

Scan-conversion functions return the pixels they produce, in order:

```python
from cgscene.raster import BLACK, Canvas, bresenham_line, flood_fill, scanline_fill

points = bresenham_line(0, 0, 5, 3)
area = scanline_fill([(100, 100), (100, 200), (200, 200), (150, 150), (200, 100)])

canvas = Canvas(64, 64)
canvas.plot(points, BLACK)
painted = flood_fill(canvas, 30, 30, (1.0, 0.0, 0.0), (1.0, 1.0, 1.0))
```

## What it does not do

cgscene opens no window and draws to no screen or GPU: rendering only
updates a `GraphicsState` and hands vertex batches to a `draw` method you
supply. `Scene.render` does not apply the camera's projection. The event
classes provide the dispatcher and a base command only; there are no
ready-made interactive drawing commands. Scenes are not saved to or loaded
from files.