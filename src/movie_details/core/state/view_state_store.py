"""Observable holder for the detail page view state."""

import asyncio
from typing import AsyncIterator, Callable, List, Optional

from ...infrastructure.logging import LoggerMixin
from ..models import ViewState

Merge = Callable[[ViewState], ViewState]
Listener = Callable[[ViewState], None]


class ViewStateStore(LoggerMixin):
    """Copy-on-write container for ``ViewState`` snapshots.

    Writers hand in a merge function; the store applies it to the current
    snapshot and swaps in the result in one step, so readers only ever see
    complete snapshots. After ``close()`` every update is dropped.
    """

    def __init__(self, initial: Optional[ViewState] = None) -> None:
        """Initialize store.

        Args:
            initial: Initial snapshot. Defaults to an empty view state.
        """
        self._state = initial if initial is not None else ViewState()
        self._listeners: List[Listener] = []
        self._queues: List["asyncio.Queue[Optional[ViewState]]"] = []
        self._closed = False

    @property
    def state(self) -> ViewState:
        """Current snapshot."""
        return self._state

    @property
    def closed(self) -> bool:
        """Whether the store has been closed."""
        return self._closed

    def update(self, merge: Merge) -> ViewState:
        """Replace the current snapshot with ``merge(current)``.

        Args:
            merge: Pure function producing the next snapshot.

        Returns:
            The snapshot held after the update.
        """
        if self._closed:
            self.logger.debug("Dropping update on closed view state store")
            return self._state

        new_state = merge(self._state)
        if new_state is self._state:
            return new_state

        self._state = new_state
        self._publish(new_state)
        return new_state

    def subscribe(self, listener: Listener) -> Callable[[], None]:
        """Register a listener called with every new snapshot.

        The listener is called immediately with the current snapshot.

        Args:
            listener: Callback receiving snapshots.

        Returns:
            Callable that removes the listener.
        """
        self._listeners.append(listener)
        listener(self._state)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    async def updates(self) -> AsyncIterator[ViewState]:
        """Iterate over snapshots, starting with the current one.

        Ends when the store is closed.
        """
        queue: "asyncio.Queue[Optional[ViewState]]" = asyncio.Queue()
        queue.put_nowait(self._state)
        if self._closed:
            queue.put_nowait(None)
        else:
            self._queues.append(queue)

        try:
            while True:
                state = await queue.get()
                if state is None:
                    return
                yield state
        finally:
            if queue in self._queues:
                self._queues.remove(queue)

    def close(self) -> None:
        """Close the store; later updates become no-ops."""
        if self._closed:
            return
        self._closed = True
        self._listeners.clear()
        for queue in self._queues:
            queue.put_nowait(None)
        self._queues.clear()

    def _publish(self, state: ViewState) -> None:
        for listener in list(self._listeners):
            try:
                listener(state)
            except Exception as e:
                self.logger.error(f"View state listener failed: {e}")
        for queue in self._queues:
            queue.put_nowait(state)
