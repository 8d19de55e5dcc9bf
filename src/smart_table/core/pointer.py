"""Dotted-path accessor for records and table state.

A pointer addresses a nested field such as ``"address.city"``. Sort, filter
and search criteria use pointers to reach record fields; the engine uses them
to address sub-trees of the table state.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping, MutableMapping
from dataclasses import dataclass
from typing import Any

from smart_table.core.functional import curry


@dataclass(frozen=True, slots=True)
class Pointer:
    """Getter/setter pair bound to one dotted path.

    Attributes:
        path: The dotted path, e.g. ``"user.profile.name"``
    """

    path: str

    @property
    def parts(self) -> tuple[str, ...]:
        return tuple(self.path.split("."))

    def get(self, target: Any) -> Any:
        """Read the value at the path, or ``None`` when any segment is absent.

        Mappings are walked by key, any other object by attribute, so plain
        dicts and dataclass records both work. Never raises on a missing
        segment.

        Examples:
            >>> pointer("user.name").get({"user": {"name": "Alice"}})
            'Alice'
            >>> pointer("user.email").get({"user": {}}) is None
            True
        """
        current = target
        for part in self.parts:
            if current is None:
                return None
            if isinstance(current, Mapping):
                current = current.get(part)
            else:
                current = getattr(current, part, None)
        return current

    def set(self, target: MutableMapping[str, Any], new_tree: Mapping[str, Any]) -> MutableMapping[str, Any]:
        """Merge ``new_tree`` into the mapping at the path and return ``target``.

        Missing intermediate levels are created as dicts. The leaf is merged,
        not replaced: keys of the existing leaf that ``new_tree`` does not
        mention are kept.

        Example:
            >>> state = {"filter": {"age": [...]}}
            >>> pointer("filter").set(state, {"name": []})["filter"].keys()
            dict_keys(['age', 'name'])
        """
        *intermediate, leaf = self.parts
        current: MutableMapping[str, Any] = target
        for key in intermediate:
            if current.get(key) is None:
                current[key] = {}
            current = current[key]
        merged = current.get(leaf) or {}
        merged.update(new_tree)
        current[leaf] = merged
        return target


def pointer(path: str) -> Pointer:
    """Build a :class:`Pointer` for ``path``."""
    return Pointer(path)


@dataclass(frozen=True, slots=True)
class CurriedPointer:
    """A pointer whose ``set`` can be partially applied to its target."""

    get: Callable[[Any], Any]
    set: Callable[..., Any]


def curried_pointer(path: str) -> CurriedPointer:
    """Pointer variant whose ``set`` is curried.

    ``curried_pointer("sort").set(state)`` returns an updater that merges its
    argument into ``state["sort"]`` and returns ``state``.
    """
    p = pointer(path)
    return CurriedPointer(get=p.get, set=curry(p.set, 2))
