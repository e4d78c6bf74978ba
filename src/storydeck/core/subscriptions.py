"""Explicit subscription handles for global listeners and state observers.

Global listeners (the Escape key, clicks outside the widget) must only be
live while the widget is open. Rather than hooking the environment
implicitly, each listener is bound through a factory that returns its unbind
function, and the resulting ``Subscription`` is held by a ``ListenerScope``.
The scope is acquired when the widget leaves idle and released on every path
back to idle and on teardown.
"""

from typing import Callable, Dict, List

import structlog

logger = structlog.get_logger()

# A factory binds a listener that invokes the callback and returns its unbind function
ListenerFactory = Callable[[Callable[[], None]], Callable[[], None]]


class Subscription:
    """Handle for one bound listener or observer.

    ``release()`` runs the unbind function exactly once; later calls are
    no-ops. Usable as a context manager for scoped acquisition.
    """

    def __init__(self, name: str, unbind: Callable[[], None]):
        self.name = name
        self._unbind = unbind
        self._active = True

    @property
    def active(self) -> bool:
        """True until release() has been called."""
        return self._active

    def release(self) -> None:
        """Unbind the listener if it is still bound."""
        if not self._active:
            return
        self._active = False
        self._unbind()

    def __enter__(self) -> "Subscription":
        return self

    def __exit__(self, exc_type, exc, tb) -> None:
        self.release()

    def __repr__(self) -> str:
        state = "active" if self._active else "released"
        return f"<Subscription {self.name} {state}>"


class ListenerScope:
    """Group of listener factories bound together while the scope is held.

    Factories registered while the scope is held are bound immediately, so a
    rendering layer that mounts after the widget opened still gets its
    listeners.
    """

    def __init__(self, callback: Callable[[], None]):
        """Initialize ListenerScope.

        Args:
            callback: Function every bound listener invokes when triggered
        """
        self._callback = callback
        self._factories: Dict[str, ListenerFactory] = {}
        self._subscriptions: Dict[str, Subscription] = {}
        self._held = False

    @property
    def held(self) -> bool:
        """Whether listeners are currently bound."""
        return self._held

    @property
    def bound_names(self) -> List[str]:
        """Names of the currently bound listeners, in binding order."""
        return [name for name, sub in self._subscriptions.items() if sub.active]

    def register(self, name: str, factory: ListenerFactory) -> None:
        """Add a listener factory, binding it now if the scope is held.

        Re-registering a name replaces (and unbinds) the previous factory.
        """
        self.unregister(name)
        self._factories[name] = factory
        if self._held:
            self._bind(name, factory)

    def unregister(self, name: str) -> None:
        """Remove a listener factory, unbinding it if bound."""
        self._factories.pop(name, None)
        subscription = self._subscriptions.pop(name, None)
        if subscription is not None:
            subscription.release()

    def acquire(self) -> None:
        """Bind every registered listener. No-op if already held."""
        if self._held:
            return
        self._held = True
        for name, factory in self._factories.items():
            self._bind(name, factory)

    def release(self) -> None:
        """Unbind every bound listener in reverse binding order. No-op if not held."""
        if not self._held:
            return
        self._held = False
        for name in reversed(list(self._subscriptions)):
            self._subscriptions.pop(name).release()
            logger.debug("listener_unbound", listener=name)

    def _bind(self, name: str, factory: ListenerFactory) -> None:
        unbind = factory(self._callback)
        self._subscriptions[name] = Subscription(name, unbind)
        logger.debug("listener_bound", listener=name)
