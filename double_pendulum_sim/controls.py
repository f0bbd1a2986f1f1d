import enum
import logging

logger = logging.getLogger(__name__)


class Event(enum.Enum):
    SELECT_DEFAULT = "select-default"
    SELECT_CHAOS = "select-chaos"
    TOGGLE_PRECISION = "toggle-precision"


KEY_BINDINGS = {
    "d": Event.SELECT_DEFAULT,
    "c": Event.SELECT_CHAOS,
    "p": Event.TOGGLE_PRECISION,
}


class InputQueue:
    """Edge-triggered input events held until the next tick boundary.

    Back-to-back presses of one key within a tick count once; the last
    population selected wins.
    """

    def __init__(self):
        self._pending = []

    def push(self, event):
        if not self._pending or self._pending[-1] is not event:
            self._pending.append(event)

    def push_key(self, key):
        event = KEY_BINDINGS.get(key)
        if event is not None:
            self.push(event)
        return event

    def apply(self, simulation, scheduler):
        """Apply and clear pending events in arrival order."""
        events, self._pending = self._pending, []
        for event in events:
            logger.debug("input event: %s", event.value)
            if event is Event.SELECT_DEFAULT:
                simulation.set_default()
            elif event is Event.SELECT_CHAOS:
                simulation.set_chaos()
            elif event is Event.TOGGLE_PRECISION:
                scheduler.toggle()
        return events

    def __len__(self):
        return len(self._pending)
