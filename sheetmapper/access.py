"""Generic read/write of object fields by name.

Objects may be plain instances (attributes), dataclasses, or mappings. Reads
accept dotted paths (``"owner.name"``) to reach nested values; a missing
link anywhere on the path reads as ``None``.
"""

from __future__ import annotations

from typing import Any, Mapping, MutableMapping


def get_value(obj: Any, name: str) -> Any:
    target = obj
    for part in name.split("."):
        if target is None:
            return None
        if isinstance(target, Mapping):
            target = target.get(part)
        else:
            target = getattr(target, part, None)
    return target


def set_value(obj: Any, name: str, value: Any) -> None:
    """Assign ``value`` to ``name`` on ``obj``.

    Raises:
        AttributeError: When the object refuses the attribute (e.g. slots or frozen).
    """

    if isinstance(obj, MutableMapping):
        obj[name] = value
        return
    setattr(obj, name, value)
