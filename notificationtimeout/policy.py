from .config import PolicyConfig
from .hooks import (DESTROY, CLOSE_NOTIFICATION, ADD_NOTIFICATION,
                    UPDATE_NOTIFICATION_TIMEOUT, UPDATE_STATE, SET_URGENCY)
from .log import get_logger
from .tray import Urgency, DestroyReason

_log = get_logger("policy")


class NotificationPolicy:
    """Same timeout, urgency and idle handling for all notifications.

    The decide_* / should_* methods hold the rules; overrides() wraps them
    as hooks for the tray's HookTable.
    """

    def __init__(self, config=None):
        self.config = config or PolicyConfig()

    def set_config(self, config):
        self.config = config
        _log.debug("config: %s", config)

    def decide_timeout(self, requested):
        # 0 never expires and stays untouched
        if requested > 0:
            return self.config.timeout
        return requested

    def decide_urgency(self, requested):
        # a zero timeout is carried out as critical, which never expires
        if self.config.timeout == 0:
            return Urgency.CRITICAL
        if self.config.always_normal:
            return Urgency.NORMAL
        return requested

    def should_suppress_destroy(self, reason):
        return reason == DestroyReason.SOURCE_CLOSED

    def should_suppress_close(self, notification):
        return True

    def on_state_update(self, tray):
        if self.config.ignore_idle:
            _log.debug("ignoring idle")
            tray.user_active_while_notification_shown = True

    # hooks

    def destroy(self, notification, forward, reason=DestroyReason.DISMISSED):
        if self.should_suppress_destroy(reason):
            _log.info("ignoring destroy of notification %s: source closed", notification.id)
            return
        forward(reason)

    def close_notification(self, source, forward, notification):
        if self.should_suppress_close(notification):
            _log.info("ignoring close request for notification %s from %s",
                      notification.id, source.app_name)
            return
        forward(notification)

    def add_notification(self, source, forward, notification):
        forward(notification)

    def update_notification_timeout(self, tray, forward, timeout):
        new_timeout = self.decide_timeout(timeout)
        if new_timeout != timeout:
            _log.debug("timeout %s set to %s", timeout, new_timeout)
        forward(new_timeout)

    def update_state(self, tray, forward):
        self.on_state_update(tray)
        forward()

    def set_urgency(self, notification, forward, urgency):
        new_urgency = self.decide_urgency(urgency)
        _log.debug("urgency of notification %s set to %s", notification.id, Urgency(new_urgency).name)
        forward(new_urgency)

    def overrides(self):
        return {
            DESTROY: self.destroy,
            CLOSE_NOTIFICATION: self.close_notification,
            ADD_NOTIFICATION: self.add_notification,
            UPDATE_NOTIFICATION_TIMEOUT: self.update_notification_timeout,
            UPDATE_STATE: self.update_state,
            SET_URGENCY: self.set_urgency,
        }
