import copy

import pytest

from cgscene.objects import Callback, SceneObject


def _serial(obj):
    return int(obj.name.removeprefix("SceneObject"))


def test_default_names_are_sequential():
    a = SceneObject()
    b = SceneObject()
    assert a.name.startswith("SceneObject")
    assert _serial(b) == _serial(a) + 1


def test_explicit_name_is_kept_and_advances_counter():
    a = SceneObject()
    named = SceneObject("axis")
    b = SceneObject()
    assert named.name == "axis"
    assert _serial(b) == _serial(a) + 2


def test_copy_keeps_name_without_advancing_counter():
    a = SceneObject()
    dup = copy.copy(a)
    b = SceneObject()
    assert dup.name == a.name
    assert _serial(b) == _serial(a) + 1


def test_dict_round_trip():
    original = SceneObject("teapot")
    restored = SceneObject()
    restored.load_dict(original.to_dict())
    assert restored.name == "teapot"
    assert restored.to_dict() == original.to_dict()


def test_load_dict_missing_name():
    with pytest.raises(KeyError):
        SceneObject().load_dict({})


def test_load_dict_rejects_non_string():
    obj = SceneObject("keep")
    with pytest.raises(TypeError):
        obj.load_dict({"name": 42})
    assert obj.name == "keep"


def test_callback_runs_when_enabled():
    cb = Callback()
    assert cb.enabled is True
    assert cb.run(SceneObject(), None) is True


def test_callback_disabled_returns_false():
    cb = Callback()
    cb.enabled = False
    assert cb.run(None, {"x": 1}) is False


def test_callback_is_named_object():
    cb = Callback(name="tick")
    assert cb.to_dict() == {"name": "tick"}