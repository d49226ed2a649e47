"""Test lifecycle events, payloads, and a synchronous dispatcher."""

import logging
import uuid
from collections import defaultdict
from collections.abc import Callable
from dataclasses import dataclass, field

logger = logging.getLogger(__name__)

TEST_BEFORE = "test.before"
STEP_STARTED = "step.started"
STEP_FINISHED = "step.finished"
TEST_AFTER = "test.after"

EVENT_NAMES = (TEST_BEFORE, STEP_STARTED, STEP_FINISHED, TEST_AFTER)

Handler = Callable[[object], None]


@dataclass
class Test:
    """A running test and the artifacts it has produced so far."""

    __test__ = False

    title: str = ""
    artifacts: dict[str, str] = field(default_factory=dict)


@dataclass(frozen=True)
class Step:
    """One step executed by an actor.

    ``key`` identifies this step occurrence for the event source; the same
    object (or an equal key) is sent with both the started and finished
    events.
    """

    actor: str
    name: str
    args: tuple = ()
    key: str = field(default_factory=lambda: uuid.uuid4().hex)


class EventDispatcher:
    """Calls registered handlers in order, one event at a time.

    Handler exceptions are not caught and propagate out of ``emit``.
    """

    def __init__(self):
        self._handlers: dict[str, list[Handler]] = defaultdict(list)

    def on(self, name: str, handler: Handler) -> None:
        if name not in EVENT_NAMES:
            raise ValueError(f"Unknown event '{name}'. Expected one of: {', '.join(EVENT_NAMES)}")
        self._handlers[name].append(handler)

    def off(self, name: str, handler: Handler) -> None:
        handlers = self._handlers.get(name, [])
        if handler in handlers:
            handlers.remove(handler)

    def emit(self, name: str, payload: object = None) -> None:
        handlers = list(self._handlers.get(name, []))
        logger.debug("Dispatching %s to %d handler(s)", name, len(handlers))
        for handler in handlers:
            handler(payload)
