"""Event bus for table change notifications.

Provides a minimal synchronous emitter and a factory for restricted
subscription facades over it. The table itself is an emitter; each directive
only sees the events relevant to it through a facade built by
:func:`proxy_listener`.
"""

from __future__ import annotations

from collections.abc import Callable, Mapping
from typing import Any, Self

from smart_table.contracts.enums import TableEvent

Listener = Callable[..., Any]


class Emitter:
    """Simple synchronous publish/subscribe primitive.

    Listeners are called synchronously in subscription order. Listener
    exceptions propagate to the caller of :meth:`dispatch` - the engine wraps
    its own dispatch-triggering logic where a failure must not escape.

    Example:
        emitter = Emitter()
        emitter.on(TableEvent.EXEC_CHANGED, lambda state: print(state["working"]))
        emitter.dispatch(TableEvent.EXEC_CHANGED, {"working": True})
    """

    def __init__(self) -> None:
        self._listeners: dict[TableEvent, list[Listener]] = {}

    def on(self, event: TableEvent, *listeners: Listener) -> Self:
        """Subscribe listeners to an event; the same listener may be added twice."""
        self._listeners[event] = [*self._listeners.get(event, []), *listeners]
        return self

    def dispatch(self, event: TableEvent, *args: Any) -> Self:
        """Call every current listener of ``event`` with ``args``.

        Events with no listeners are silently ignored. The listener list is
        copied first, so a listener that subscribes or unsubscribes during
        dispatch affects the next dispatch only.
        """
        for listener in list(self._listeners.get(event, [])):
            listener(*args)
        return self

    def off(self, event: TableEvent | None = None, *listeners: Listener) -> Self:
        """Unsubscribe listeners.

        - ``off()`` removes every listener of every event
        - ``off(event)`` removes every listener of ``event``
        - ``off(event, fn, ...)`` removes only the given listeners
        """
        if event is None:
            self._listeners.clear()
        elif listeners:
            self._listeners[event] = [fn for fn in self._listeners.get(event, []) if fn not in listeners]
        else:
            self._listeners[event] = []
        return self

    def listener_count(self, event: TableEvent) -> int:
        return len(self._listeners.get(event, []))


class ListenerProxy:
    """Restricted facade over an :class:`Emitter`.

    Subclasses created by :func:`proxy_listener` carry one subscription method
    per mapped event. The facade remembers what it subscribed so :meth:`off`
    never removes listeners registered by someone else.
    """

    event_map: Mapping[TableEvent, str] = {}

    def __init__(self, emitter: Emitter) -> None:
        self._emitter = emitter
        self._event_listeners: dict[TableEvent, list[Listener]] = {ev: [] for ev in self.event_map}

    def _subscribe(self, event: TableEvent, *listeners: Listener) -> Self:
        self._event_listeners[event].extend(listeners)
        self._emitter.on(event, *listeners)
        return self

    def off(self, event: TableEvent | None = None) -> Self:
        """Remove the listeners this facade registered, for one event or all."""
        if event is None:
            for name in self._event_listeners:
                self.off(name)
            return self
        registered = self._event_listeners.get(event)
        if registered:
            self._emitter.off(event, *registered)
            self._event_listeners[event] = []
        return self


def _subscription_method(event: TableEvent) -> Callable[..., Any]:
    def subscribe(self: ListenerProxy, *listeners: Listener) -> ListenerProxy:
        return self._subscribe(event, *listeners)

    subscribe.__doc__ = f"Subscribe listeners to {event.name}."
    return subscribe


def proxy_listener(event_map: Mapping[TableEvent, str]) -> type[ListenerProxy]:
    """Build a facade class exposing one named subscription method per event.

    Instantiating the returned class with an emitter yields the facade, so
    the class doubles as the directive builder. Directives subclass it to
    add their own operations.

    Example:
        SortListener = proxy_listener({TableEvent.TOGGLE_SORT: "on_sort_toggle"})
        facade = SortListener(table)
        facade.on_sort_toggle(lambda sort: print(sort["direction"]))
    """
    namespace: dict[str, Any] = {"event_map": dict(event_map)}
    for event, method_name in event_map.items():
        namespace[method_name] = _subscription_method(event)
    name = "".join(part.title() for part in "_".join(event_map.values()).split("_")) + "Proxy"
    return type(name, (ListenerProxy,), namespace)
