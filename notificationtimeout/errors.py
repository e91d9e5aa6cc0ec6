class NotificationTimeoutError(Exception):
    pass


class ConfigError(NotificationTimeoutError):
    """A settings key is missing, mistyped or out of range."""


class LifecycleError(NotificationTimeoutError):
    pass


class AlreadyEnabledError(LifecycleError):
    pass


class NotEnabledError(LifecycleError):
    pass


class HookError(NotificationTimeoutError):
    pass


class HookConflictError(HookError):
    """The slot no longer holds the hook being released."""


class HandleReleasedError(HookError):
    pass
