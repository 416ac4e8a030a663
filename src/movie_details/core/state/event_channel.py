"""One-shot event delivery for UI signals."""

from typing import Callable, Generic, Optional, TypeVar

T = TypeVar("T")


class Event(Generic[T]):
    """A value wrapped with a "has been consumed" flag."""

    def __init__(self, content: T) -> None:
        self._content = content
        self._handled = False

    @property
    def handled(self) -> bool:
        """Whether the content has been consumed."""
        return self._handled

    def get_content_if_not_handled(self) -> Optional[T]:
        """Return the content the first time only."""
        if self._handled:
            return None
        self._handled = True
        return self._content

    def peek_content(self) -> T:
        """Return the content without consuming it."""
        return self._content


class EventChannel(Generic[T]):
    """Single-writer, single-subscriber slot for one-shot signals.

    ``emit`` overwrites any undelivered event; ``consume`` returns the
    value at most once, so re-observing after a re-subscription does not
    replay it.
    """

    def __init__(self, name: str = "") -> None:
        self.name = name
        self._event: Optional[Event[T]] = None
        self._listener: Optional[Callable[["EventChannel[T]"], None]] = None

    def emit(self, value: T) -> None:
        """Publish a value, replacing any pending one."""
        self._event = Event(value)
        if self._listener is not None:
            self._listener(self)

    def consume(self) -> Optional[T]:
        """Take the pending value, or None if there is none."""
        if self._event is None:
            return None
        return self._event.get_content_if_not_handled()

    def peek(self) -> Optional[T]:
        """Look at the pending value without consuming it."""
        if self._event is None or self._event.handled:
            return None
        return self._event.peek_content()

    @property
    def pending(self) -> bool:
        """Whether an unconsumed value is waiting."""
        return self._event is not None and not self._event.handled

    def observe(self, listener: Optional[Callable[["EventChannel[T]"], None]]) -> None:
        """Attach the single observer, notified on every emit.

        A pending value is delivered to the new observer right away.
        Passing None detaches the observer.
        """
        self._listener = listener
        if listener is not None and self.pending:
            listener(self)
