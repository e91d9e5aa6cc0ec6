from .config import PolicyConfig
from .errors import AlreadyEnabledError, NotEnabledError, ConfigError
from .log import get_logger
from .policy import NotificationPolicy

_log = get_logger("extension")


class NotificationTimeoutExtension:
    """Turns the notification policy on and off for a message tray.

    settings_factory returns a settings store: get_boolean(key), get_int(key)
    and a "changed" signal through connect()/disconnect(). A store with a
    close() method is closed on disable.
    """

    def __init__(self, tray, settings_factory):
        self.tray = tray
        self.settings_factory = settings_factory
        self.policy = None
        self._settings = None
        self._settings_connect_id = None
        self._handle = None

    @property
    def enabled(self):
        return self._handle is not None

    def read_settings(self):
        self.policy.set_config(PolicyConfig.from_settings(self._settings))

    def _on_settings_changed(self, *args):
        try:
            self.read_settings()
        except ConfigError as E:
            # the last good snapshot stays in use
            _log.error("settings not applied: %s", E)

    def enable(self):
        if self.enabled:
            raise AlreadyEnabledError("notification timeout is already enabled")
        settings = self.settings_factory()
        # fails before anything is connected or installed
        try:
            policy = NotificationPolicy(PolicyConfig.from_settings(settings))
        except ConfigError:
            self._close_settings(settings)
            raise
        self._settings = settings
        self.policy = policy
        self._settings_connect_id = settings.connect("changed", self._on_settings_changed)
        self._handle = self.tray.hooks.install(policy.overrides())
        _log.info("enabled: timeout %s ms, always normal %s, ignore idle %s",
                  policy.config.timeout, policy.config.always_normal, policy.config.ignore_idle)

    def disable(self):
        if not self.enabled:
            raise NotEnabledError("notification timeout is not enabled")
        # a conflicting hook leaves everything as it was
        self._handle.release()
        self._handle = None
        self._settings.disconnect(self._settings_connect_id)
        self._settings_connect_id = None
        self._close_settings(self._settings)
        self._settings = None
        self.policy = None
        _log.info("disabled")

    def _close_settings(self, settings):
        close = getattr(settings, "close", None)
        if close is not None:
            close()
