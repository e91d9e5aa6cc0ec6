"""Message tray model.

The tray shows one notification at a time, expires it once its timeout has
passed and then shows the next queued one. Six operations go through the
tray's HookTable so a policy can change them without touching the classes:
Notification.destroy, Notification.set_urgency, AppSource.add_notification,
AppSource.close_notification, MessageTray.update_notification_timeout and
MessageTray.update_state.
"""

import time
from enum import IntEnum

from .cfg_timeout import IDLE_THRESHOLD
from .hooks import (HookTable, DESTROY, SET_URGENCY, ADD_NOTIFICATION,
                    CLOSE_NOTIFICATION, UPDATE_NOTIFICATION_TIMEOUT, UPDATE_STATE)
from .log import get_logger

_log = get_logger("tray")


# same values as the "urgency" hint
class Urgency(IntEnum):
    LOW = 0
    NORMAL = 1
    CRITICAL = 2


class DestroyReason(IntEnum):
    EXPIRED = 1
    DISMISSED = 2
    SOURCE_CLOSED = 3
    REPLACED = 4


def _monotonic_ms():
    return int(time.monotonic() * 1000)


class Notification:

    def __init__(self, source, notification_id, summary="", body="",
                 actions=None, hints=None, timeout=0, urgency=Urgency.NORMAL):
        self.source = source
        self.id = notification_id
        self.summary = summary
        self.body = body
        # [key1, label1, key2, label2, ...]
        self.actions = list(actions or [])
        self.hints = dict(hints or {})
        # ms, 0 never expires
        self.timeout = timeout
        self.urgency = Urgency(urgency)
        self.destroyed = False
        # callables: cb(notification, reason)
        self.on_destroyed = []

    @property
    def tray(self):
        return self.source.tray

    def set_urgency(self, urgency):
        self.tray.hooks.call(SET_URGENCY, self, self._set_urgency, urgency)

    def _set_urgency(self, urgency):
        self.urgency = Urgency(urgency)

    def destroy(self, reason=DestroyReason.DISMISSED):
        self.tray.hooks.call(DESTROY, self, self._destroy, reason)

    def _destroy(self, reason):
        if self.destroyed:
            return
        self.destroyed = True
        self.source._remove(self)
        self.tray._remove(self)
        _log.debug("notification %s destroyed: %s", self.id, DestroyReason(reason).name)
        for cb in self.on_destroyed[:]:
            cb(self, DestroyReason(reason))

    def __repr__(self):
        return "<Notification {} {!r} {}>".format(self.id, self.summary, self.urgency.name)


class AppSource:
    """The notifications of one application."""

    def __init__(self, tray, app_name):
        self.tray = tray
        self.app_name = app_name
        # id -> Notification
        self.notifications = {}

    def add_notification(self, notification):
        self.tray.hooks.call(ADD_NOTIFICATION, self, self._add_notification, notification)

    def _add_notification(self, notification):
        old = self.notifications.get(notification.id)
        if old is not None and old is not notification:
            # the replacement takes the place of the old one
            if old is self.tray.notification:
                self.tray.queue.insert(0, notification)
            elif old in self.tray.queue:
                self.tray.queue.insert(self.tray.queue.index(old), notification)
            old.destroy(DestroyReason.REPLACED)
        self.notifications[notification.id] = notification
        self.tray.push(notification)

    def close_notification(self, notification):
        self.tray.hooks.call(CLOSE_NOTIFICATION, self, self._close_notification, notification)

    def _close_notification(self, notification):
        notification.destroy(DestroyReason.SOURCE_CLOSED)

    def destroy(self):
        for notification in list(self.notifications.values()):
            notification.destroy(DestroyReason.SOURCE_CLOSED)

    def _remove(self, notification):
        if self.notifications.get(notification.id) is notification:
            del self.notifications[notification.id]


class MessageTray:

    def __init__(self, clock=None, idle_time=None, idle_threshold=IDLE_THRESHOLD):
        self.hooks = HookTable()
        # ms
        self.clock = clock or _monotonic_ms
        # ms since the last user input
        self.idle_time = idle_time or (lambda: 0)
        self.idle_threshold = idle_threshold
        self.queue = []
        # the notification on screen
        self.notification = None
        self.notification_timeout = 0
        self.expire_at = None
        self.user_active_while_notification_shown = False
        # callables: cb(notification)
        self.on_shown = []

    def user_is_idle(self):
        return self.idle_time() >= self.idle_threshold

    def push(self, notification):
        if notification is self.notification:
            return
        if notification not in self.queue:
            self.queue.append(notification)
        self.update_state()

    def update_notification_timeout(self, timeout):
        self.hooks.call(UPDATE_NOTIFICATION_TIMEOUT, self,
                        self._update_notification_timeout, timeout)

    def _update_notification_timeout(self, timeout):
        self.notification_timeout = timeout
        if timeout > 0:
            self.expire_at = self.clock() + timeout
        else:
            self.expire_at = None

    def update_state(self):
        self.hooks.call(UPDATE_STATE, self, self._update_state)

    def _update_state(self):
        if not self.user_is_idle():
            self.user_active_while_notification_shown = True
        if self.notification is not None and self._expired():
            self.notification.destroy(DestroyReason.EXPIRED)
        if self.notification is None and self.queue:
            self._show(self.queue.pop(0))

    def _expired(self):
        # critical notifications stay until dismissed
        if self.notification.urgency == Urgency.CRITICAL:
            return False
        if self.expire_at is None or self.clock() < self.expire_at:
            return False
        # an idle user has not seen it yet
        return self.user_active_while_notification_shown

    def _show(self, notification):
        self.notification = notification
        self.user_active_while_notification_shown = not self.user_is_idle()
        self.update_notification_timeout(notification.timeout)
        _log.debug("showing %r for %s ms", notification, self.notification_timeout)
        for cb in self.on_shown[:]:
            cb(notification)

    def _remove(self, notification):
        if notification in self.queue:
            self.queue.remove(notification)
        if notification is self.notification:
            self.notification = None
            self.expire_at = None
