"""Core infrastructure: combinators, pointers, events, settings and logging."""

from smart_table.core.config import TableSettings, load_settings
from smart_table.core.debounce import Debouncer
from smart_table.core.events import Emitter, ListenerProxy, proxy_listener
from smart_table.core.pointer import Pointer, curried_pointer, pointer

__all__ = [
    "Debouncer",
    "Emitter",
    "ListenerProxy",
    "Pointer",
    "TableSettings",
    "curried_pointer",
    "load_settings",
    "pointer",
    "proxy_listener",
]
