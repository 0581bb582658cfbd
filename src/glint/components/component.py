"""Stateful, template-rendered components.

A ``Component`` owns a name, a mutable state map, an immutable kida
template and an optional update callback. Every state read, write and
render on one instance is serialized by a single re-entrant lock, so a
render never sees a half-applied update. Separate components never
contend with each other.

Usage::

    def increment(component: Component, ctx: Context) -> None:
        component.set_state("count", component.get("count", 0) + 1)

    counter = Component(
        "counter",
        '<div id="counter">Count: {{ count }}</div>',
        {"count": 0},
        increment,
    )
    counter.render()  # '<div id="counter">Count: 0</div>'

Thread safety:
    The lock is a ``threading.RLock`` rather than an asyncio lock: state
    is touched from sync accessors, from request tasks on one loop, and
    (under free-threading) from worker threads on other loops. It is
    re-entrant so synchronous update callbacks, which run with the lock
    held, can still call the public accessors.
"""

import copy
import inspect
import logging
import threading
from collections.abc import Awaitable, Iterator, Mapping
from contextlib import contextmanager
from typing import TYPE_CHECKING, Any, Protocol

from kida import Environment

from glint.errors import ConfigurationError, RenderError, ReservedKeyError
from glint.templating.integration import default_environment

if TYPE_CHECKING:
    from glint.context import Context

logger = logging.getLogger("glint.components")

NAME_KEY = "name"
"""State key under which the component name is exposed to readers and templates."""

type StateValue = (
    None | bool | int | float | str | list[StateValue] | dict[str, StateValue]
)


class OnUpdate(Protocol):
    """Something that can update a component given a request context.

    Plain functions and ``async def`` functions both satisfy it.
    """

    def __call__(self, component: Component, ctx: Context, /) -> Awaitable[None] | None: ...


class Component:
    """A named, stateful unit of UI with an optional update hook.

    The name lives outside the mutable state map and cannot be changed;
    it is mirrored into ``state()`` snapshots and render contexts under
    ``NAME_KEY``. Writing that key through the accessors raises
    ``ReservedKeyError``.
    """

    __slots__ = ("_compiled", "_env", "_lock", "_name", "_on_update", "_state", "_template")

    def __init__(
        self,
        name: str,
        template: str,
        state: Mapping[str, StateValue] | None = None,
        on_update: OnUpdate | None = None,
        *,
        env: Environment | None = None,
    ) -> None:
        if not isinstance(name, str) or not name:
            msg = f"Component name must be a non-empty string, got {name!r}"
            raise ConfigurationError(msg)

        initial = dict(state or {})
        if NAME_KEY in initial:
            if initial[NAME_KEY] != name:
                raise ReservedKeyError(NAME_KEY)
            del initial[NAME_KEY]

        self._name = name
        self._template = template
        self._state: dict[str, StateValue] = copy.deepcopy(initial)
        self._on_update = on_update
        self._env = env
        self._compiled: Any = None
        self._lock = threading.RLock()

    def __repr__(self) -> str:
        return f"Component({self._name!r})"

    @property
    def name(self) -> str:
        return self._name

    @property
    def template(self) -> str:
        return self._template

    # -- Rendering --

    def render(self) -> str:
        """Render the template against the current state.

        The lock is held for the whole evaluation. Raises ``RenderError``
        on any compile or evaluation failure; no partial output is
        returned.
        """
        with self._lock:
            template = self._compile()
            context: dict[str, Any] = dict(self._state)
            context[NAME_KEY] = self._name
            try:
                return template.render(context)
            except Exception as exc:
                raise RenderError(self._name, f"{type(exc).__name__}: {exc}") from exc

    def _compile(self) -> Any:
        if self._compiled is None:
            env = self._env or default_environment()
            try:
                self._compiled = env.from_string(self._template)
            except Exception as exc:
                raise RenderError(
                    self._name, f"invalid template: {type(exc).__name__}: {exc}"
                ) from exc
        return self._compiled

    # -- Update hook --

    async def update(self, ctx: Context) -> None:
        """Run the bound update callback. No-op when none is bound.

        A synchronous callback runs with the component lock held, so a
        read-modify-write inside it is atomic. An async callback is
        awaited without the lock; it must go through the accessors and
        cannot assume exclusive access across calls.
        """
        callback = self._on_update
        if callback is None:
            return
        logger.debug("Updating component %r", self._name)
        with self._lock:
            result = callback(self, ctx)
        if inspect.isawaitable(result):
            await result

    # -- State access --

    def state(self) -> dict[str, StateValue]:
        """Return a deep-copied snapshot of the state, name included."""
        with self._lock:
            snapshot = copy.deepcopy(self._state)
        snapshot[NAME_KEY] = self._name
        return snapshot

    def get(self, key: str, default: StateValue = None) -> StateValue:
        """Return a copy of one state value."""
        if key == NAME_KEY:
            return self._name
        with self._lock:
            if key not in self._state:
                return default
            return copy.deepcopy(self._state[key])

    def set_state(self, key: str, value: StateValue) -> None:
        """Insert or replace one key. No type coercion is performed."""
        if key == NAME_KEY:
            raise ReservedKeyError(key)
        value = copy.deepcopy(value)
        with self._lock:
            self._state[key] = value

    def update_state(
        self,
        changes: Mapping[str, StateValue] | None = None,
        /,
        **kwargs: StateValue,
    ) -> None:
        """Apply several keys at once; readers see all of them or none."""
        merged = {**(changes or {}), **kwargs}
        if NAME_KEY in merged:
            raise ReservedKeyError(NAME_KEY)
        merged = copy.deepcopy(merged)
        with self._lock:
            self._state.update(merged)

    def delete_state(self, key: str) -> None:
        """Remove a key. Missing keys are ignored."""
        if key == NAME_KEY:
            raise ReservedKeyError(key)
        with self._lock:
            self._state.pop(key, None)

    @contextmanager
    def locked(self) -> Iterator[dict[str, StateValue]]:
        """Hold the component lock and yield the live state map.

        For multi-step changes that must be atomic::

            with todo.locked() as state:
                state["items"].append({"id": state["next_id"], "text": text})
                state["next_id"] += 1

        The yielded dict must not escape the ``with`` block. The name is
        not part of it.
        """
        with self._lock:
            yield self._state
