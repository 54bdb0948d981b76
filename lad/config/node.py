"""
Read-only configuration tree.

``ConfigNode`` is the shape the rest of the application sees once the
pipeline has finished: a mapping that refuses writes, whose nested
mappings are ``ConfigNode`` instances too and whose lists have become
tuples. Any other value, collaborator handles included, is stored by
reference so its identity survives freezing.
"""

from collections.abc import Mapping
from typing import Any, Iterator, Sequence, Tuple, Union

Path = Union[str, Sequence[str]]


def split_path(path: Path) -> Tuple[str, ...]:
    """Normalise ``"a.b.c"`` or ``("a", "b", "c")`` to a tuple of keys."""
    if isinstance(path, str):
        return tuple(part for part in path.split(".") if part)
    return tuple(path)


class ConfigNode(Mapping):
    """Immutable mapping from string keys to values or nested nodes."""

    __slots__ = ("_data",)

    def __init__(self, data: Mapping[str, Any] = ()) -> None:
        object.__setattr__(self, "_data", dict(data))

    def __getitem__(self, key: str) -> Any:
        return self._data[key]

    def __iter__(self) -> Iterator[str]:
        return iter(self._data)

    def __len__(self) -> int:
        return len(self._data)

    def __setattr__(self, name: str, value: Any) -> None:
        raise AttributeError("ConfigNode is read-only")

    def __delattr__(self, name: str) -> None:
        raise AttributeError("ConfigNode is read-only")

    def __repr__(self) -> str:
        return f"ConfigNode({self._data!r})"

    def __eq__(self, other: object) -> bool:
        if isinstance(other, Mapping):
            return dict(self.items()) == dict(other.items())
        return NotImplemented

    __hash__ = None  # type: ignore[assignment]

    def thaw(self) -> dict:
        """Return a mutable deep copy (handles are shared, not copied)."""
        return thaw(self)


def freeze(value: Any) -> Any:
    """Recursively convert dicts to ``ConfigNode`` and lists to tuples."""
    if isinstance(value, ConfigNode):
        return value
    if isinstance(value, Mapping):
        return ConfigNode({key: freeze(item) for key, item in value.items()})
    if isinstance(value, (list, tuple)):
        return tuple(freeze(item) for item in value)
    return value


def thaw(value: Any) -> Any:
    """Inverse of ``freeze``: nested mappings become plain dicts."""
    if isinstance(value, Mapping):
        return {key: thaw(item) for key, item in value.items()}
    if isinstance(value, tuple):
        return [thaw(item) for item in value]
    return value


def get_path(tree: Mapping[str, Any], path: Path) -> Any:
    """
    Read a value by dotted path.

    Raises:
        KeyError: If any segment of the path is missing, or a segment
            points into a value that is not a mapping.
    """
    current: Any = tree
    for key in split_path(path):
        if not isinstance(current, Mapping) or key not in current:
            raise KeyError(".".join(split_path(path)))
        current = current[key]
    return current


def set_path(tree: dict, path: Path, value: Any) -> None:
    """Write ``value`` at ``path`` in a mutable tree, creating parents."""
    keys = split_path(path)
    current = tree
    for key in keys[:-1]:
        current = current.setdefault(key, {})
    current[keys[-1]] = value
