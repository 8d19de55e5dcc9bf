"""Search stage factory: one regular expression across several fields."""

from __future__ import annotations

import re
from collections.abc import Callable, Mapping
from typing import Any

from smart_table.contracts.errors import InvalidSearchFlagsError
from smart_table.core.pointer import pointer

Stage = Callable[[list[Any]], list[Any]]

_FLAGS: dict[str, re.RegexFlag] = {
    "i": re.IGNORECASE,
    "m": re.MULTILINE,
    "s": re.DOTALL,
}
# Accepted for compatibility with browser-side criteria; they change nothing for a test-only match
_IGNORED_FLAGS = frozenset("guy")


def compile_flags(flags: str) -> re.RegexFlag:
    """Translate a flag string such as ``"gi"`` to ``re`` flags.

    Raises:
        InvalidSearchFlagsError: If a letter has no meaning here
    """
    unsupported = "".join(f for f in flags if f not in _FLAGS and f not in _IGNORED_FLAGS)
    if unsupported:
        raise InvalidSearchFlagsError(flags, unsupported)
    result = re.RegexFlag(0)
    for f in flags:
        result |= _FLAGS.get(f, re.RegexFlag(0))
    return result


def regexp_search_factory(criteria: Mapping[str, Any] | None = None) -> Stage:
    """Turn ``search`` criteria into a stage keeping records matching in any scoped field.

    An empty scope or a falsy value leaves the list untouched. With
    ``escape`` the value is matched as literal text. Missing fields never
    match.
    """
    criteria = criteria or {}
    value = criteria.get("value")
    scope = criteria.get("scope") or []
    if not scope or not value:
        return lambda array: array

    getters = [pointer(field).get for field in scope]
    source = re.escape(value) if criteria.get("escape") is True else value
    regex = re.compile(source, compile_flags(criteria.get("flags") or ""))

    def matches(item: Any) -> bool:
        for get in getters:
            field_value = get(item)
            if field_value is not None and regex.search(str(field_value)):
                return True
        return False

    return lambda array: [item for item in array if matches(item)]
