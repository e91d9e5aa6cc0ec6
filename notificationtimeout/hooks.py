"""Hook table for the overridable notification operations.

The host keeps one HookTable and routes each overridable operation through
HookTable.call(). A hook receives the host object, a ``forward`` callable
running the original behavior, and the operation's arguments:

    hook(target, forward, *args)

Installing returns an OverrideHandle; releasing it puts the previous
contents of every slot back.
"""

from .errors import HookConflictError, HandleReleasedError, HookError
from .log import get_logger

_log = get_logger("hooks")

DESTROY = "destroy"
CLOSE_NOTIFICATION = "close_notification"
ADD_NOTIFICATION = "add_notification"
UPDATE_NOTIFICATION_TIMEOUT = "update_notification_timeout"
UPDATE_STATE = "update_state"
SET_URGENCY = "set_urgency"

SLOTS = (
    DESTROY,
    CLOSE_NOTIFICATION,
    ADD_NOTIFICATION,
    UPDATE_NOTIFICATION_TIMEOUT,
    UPDATE_STATE,
    SET_URGENCY,
)


class HookTable:

    def __init__(self):
        self._slots = dict.fromkeys(SLOTS)

    def get(self, slot):
        self._check_slot(slot)
        return self._slots[slot]

    def snapshot(self):
        return dict(self._slots)

    def call(self, slot, target, original, *args):
        hook = self.get(slot)
        if hook is None:
            return original(*args)
        return hook(target, original, *args)

    def install(self, overrides):
        """Put ``overrides`` (slot name -> hook) in place, return the handle."""
        for slot in overrides:
            self._check_slot(slot)
        handle = OverrideHandle(self, overrides, self.snapshot())
        for slot, hook in overrides.items():
            self._slots[slot] = hook
        _log.debug("installed hooks: %s", ", ".join(overrides))
        return handle

    def _check_slot(self, slot):
        if slot not in self._slots:
            raise HookError("unknown hook slot {!r}".format(slot))

    def _restore(self, handle):
        for slot, hook in handle.overrides.items():
            if self._slots[slot] is not hook:
                raise HookConflictError(
                    "slot {!r} was overridden by another hook that is still installed".format(slot))
        for slot in handle.overrides:
            self._slots[slot] = handle.saved[slot]
        _log.debug("restored hooks: %s", ", ".join(handle.overrides))


class OverrideHandle:
    """Installed overrides; release() restores the previous slots exactly once."""

    def __init__(self, table, overrides, saved):
        self.table = table
        self.overrides = dict(overrides)
        self.saved = {slot: saved[slot] for slot in overrides}
        self.released = False

    def release(self):
        if self.released:
            raise HandleReleasedError("override handle already released")
        self.table._restore(self)
        self.released = True
        self.saved = {}

    def __enter__(self):
        return self

    def __exit__(self, exc_type, exc, tb):
        if not self.released:
            self.release()
        return False
