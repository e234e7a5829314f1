"""Named base objects and callbacks shared by the scene graph."""

from __future__ import annotations

import itertools
from collections.abc import Mapping
from typing import Any, ClassVar


class SceneObject:
    """Base class of every named scene-graph object.

    Objects created without a name get ``SceneObject<n>``, where ``n`` comes
    from a counter shared by all instances. The counter only helps naming
    and does not identify objects uniquely. Copies made with :mod:`copy`
    keep the name and do not advance the counter.
    """

    _serials: ClassVar[itertools.count] = itertools.count(1)

    def __init__(self, name: str | None = None) -> None:
        serial = next(SceneObject._serials)
        self.name: str = name if name is not None else f"SceneObject{serial}"

    def __repr__(self) -> str:
        return f"{type(self).__name__}(name={self.name!r})"

    def to_dict(self) -> dict[str, Any]:
        """Return the persistent data of this object."""
        return {"name": self.name}

    def load_dict(self, data: Mapping[str, Any]) -> None:
        """Restore the persistent data written by :meth:`to_dict`."""
        name = data["name"]
        if not isinstance(name, str):
            raise TypeError(f"object name must be a string, not {type(name).__name__}")
        self.name = name


class Callback(SceneObject):
    """A callback that can be switched off; subclasses override :meth:`run`."""

    def __init__(self, enabled: bool = True, name: str | None = None) -> None:
        super().__init__(name)
        self.enabled = enabled

    def run(self, obj: SceneObject | None, data: Any = None) -> bool:
        """Run the callback on ``obj``; returns False when disabled."""
        return self.enabled