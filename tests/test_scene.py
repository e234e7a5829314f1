from dataclasses import dataclass, field

import numpy as np

from cgscene.nodes import Camera, Group, Primitive, Renderable, Transform
from cgscene.renderstate import GraphicsState
from cgscene.scene import Scene


@dataclass
class RecordingContext(GraphicsState):
    calls: list = field(default_factory=list)

    def draw(self, primitive, attributes, matrix):
        self.calls.append((primitive, attributes, matrix))


class Dot(Renderable):
    def build_display_list(self):
        return [(Primitive.POINTS, {"vertex": np.ones((1, 3))})]


def test_defaults():
    scene = Scene()
    assert isinstance(scene.scene_data, Transform)
    assert isinstance(scene.main_camera, Camera)
    assert scene.scene_data.num_children == 0
    assert scene.scene_data.get_parent(0) is None
    assert np.allclose(scene.scene_data.local_matrix, np.eye(4))
    assert scene.main_camera.projection_mode == 0


def test_non_group_root_is_ignored():
    scene = Scene()
    root = scene.scene_data
    assert scene.set_scene_data(Renderable()) is False
    assert scene.set_scene_data(None) is False
    assert scene.scene_data is root


def test_group_root_is_accepted():
    scene = Scene()
    g = Group()
    assert scene.set_scene_data(g) is True
    assert scene.scene_data is g


def test_render_requires_context_and_camera():
    scene = Scene()
    assert scene.render(None, scene.main_camera) is False
    assert scene.render(RecordingContext(), None) is False


def test_axis_lines_match_world_axes():
    lines = Scene().axis_lines()
    assert [c for _, _, c in lines] == [(1.0, 0.0, 0.0), (0.0, 1.0, 0.0), (0.0, 0.0, 1.0)]
    for i, (start, end, _) in enumerate(lines):
        assert start[i] == -100.0 and end[i] == 100.0
        assert np.allclose(np.delete(start, i), 0) and np.allclose(np.delete(end, i), 0)


def test_render_draws_tree_then_axes():
    scene = Scene()
    dot = Dot()
    dot.display_list_enabled = True
    scene.scene_data.add_child(dot)
    ctx = RecordingContext()
    assert scene.render(ctx, scene.main_camera) is True
    assert [c[0] for c in ctx.calls] == [Primitive.POINTS, Primitive.LINES]
    axes = ctx.calls[-1][1]
    assert axes["vertex"].shape == (6, 3)
    assert axes["color"].shape == (6, 3)
    assert np.allclose(ctx.calls[-1][2], np.eye(4))