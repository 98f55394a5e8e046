from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from typing import Any

EventKey = str
EventHandler = Callable[..., Awaitable[None]]


class EventBus:
    """In-process async pub/sub keyed by event name.

    Contract:
      - persistent handlers (`on`) run before one-shot handlers (`once`), each in
        registration order, awaited one at a time.
      - `on`/`once`/`remove_listener` called while an emission is in progress are
        queued and applied once no emission is in flight, so the handler
        list being iterated never changes underneath `emit`.
      - handler exceptions propagate out of `emit`; the rest of that pass is skipped.

    Single event loop only; there is no locking.
    """

    def __init__(self) -> None:
        self._on_handlers: dict[EventKey, list[EventHandler]] = {}
        self._once_handlers: dict[EventKey, list[EventHandler]] = {}
        self._to_register_on: list[tuple[EventKey, EventHandler]] = []
        self._to_register_once: list[tuple[EventKey, EventHandler]] = []
        self._to_remove: list[EventHandler] = []
        # Count of in-flight emits, nested or from overlapping tasks.
        self._emit_depth = 0

    @property
    def is_emitting(self) -> bool:
        return self._emit_depth > 0

    async def emit(self, event: EventKey, *args: Any) -> None:
        """Call every handler registered for `event` with `args`.

        Nested emits from inside a handler are allowed; deferred registrations and
        removals are flushed when the last in-flight emit returns or raises.
        """

        self._emit_depth += 1
        try:
            for handler in tuple(self._on_handlers.get(event, ())):
                await handler(*args)

            # Detach before running so a nested emit of the same key can't call these twice.
            once = self._once_handlers.pop(event, [])
            for idx, handler in enumerate(once):
                try:
                    await handler(*args)
                except BaseException:
                    remaining = once[idx + 1 :]
                    if remaining:
                        self._once_handlers[event] = remaining + self._once_handlers.get(event, [])
                    raise
        finally:
            self._emit_depth -= 1
            if self._emit_depth == 0:
                self._flush_pending()

    def on(self, event: EventKey, handler: EventHandler) -> None:
        """Register a persistent handler. The same handler may be registered more than once."""

        if self.is_emitting:
            self._to_register_on.append((event, handler))
            return
        self._on_handlers.setdefault(event, []).append(handler)

    def once(self, event: EventKey, handler: EventHandler) -> None:
        """Register a handler that is dropped after its first invocation."""

        if self.is_emitting:
            self._to_register_once.append((event, handler))
            return
        self._once_handlers.setdefault(event, []).append(handler)

    async def wait_for(self, event: EventKey) -> tuple[Any, ...]:
        """Wait for the next emit of `event` and return its arguments."""

        future: asyncio.Future[tuple[Any, ...]] = asyncio.get_running_loop().create_future()

        async def _resolve(*args: Any) -> None:
            if not future.done():
                future.set_result(args)

        self.once(event, _resolve)
        try:
            return await future
        except asyncio.CancelledError:
            self.remove_listener(_resolve)
            raise

    def remove_listener(self, handler: EventHandler) -> None:
        """Remove `handler` from every event, persistent and one-shot. Unknown handlers are ignored."""

        if self.is_emitting:
            self._to_remove.append(handler)
            return

        for registry in (self._on_handlers, self._once_handlers):
            for event, handlers in list(registry.items()):
                kept = [h for h in handlers if h is not handler]
                if kept:
                    registry[event] = kept
                else:
                    registry.pop(event, None)

    def listeners(self, event: EventKey) -> tuple[EventHandler, ...]:
        """Snapshot of the handlers registered for `event`, persistent ones first."""

        return tuple(self._on_handlers.get(event, ())) + tuple(self._once_handlers.get(event, ()))

    def _flush_pending(self) -> None:
        to_register_on, self._to_register_on = self._to_register_on, []
        to_register_once, self._to_register_once = self._to_register_once, []
        to_remove, self._to_remove = self._to_remove, []

        for event, handler in to_register_on:
            self.on(event, handler)
        for event, handler in to_register_once:
            self.once(event, handler)
        for handler in to_remove:
            self.remove_listener(handler)
