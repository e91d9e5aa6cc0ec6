from dataclasses import dataclass

from .cfg_timeout import TIMEOUT, ALWAYS_NORMAL, IGNORE_IDLE
from .errors import ConfigError

KEY_IGNORE_IDLE = "ignore-idle"
KEY_ALWAYS_NORMAL = "always-normal"
KEY_TIMEOUT = "timeout"


@dataclass(frozen=True)
class PolicyConfig:
    """One snapshot of the three policy settings.

    timeout: ms applied to every notification asking for a timeout > 0
    always_normal: force urgency to normal
    ignore_idle: treat the user as active while a notification is shown
    """
    timeout: int = TIMEOUT
    always_normal: bool = bool(ALWAYS_NORMAL)
    ignore_idle: bool = bool(IGNORE_IDLE)

    def __post_init__(self):
        if isinstance(self.timeout, bool) or not isinstance(self.timeout, int):
            raise ConfigError("timeout must be an integer, got {!r}".format(self.timeout))
        if self.timeout < 0:
            raise ConfigError("timeout must not be negative, got {}".format(self.timeout))
        if not isinstance(self.always_normal, bool):
            raise ConfigError("always-normal must be a boolean, got {!r}".format(self.always_normal))
        if not isinstance(self.ignore_idle, bool):
            raise ConfigError("ignore-idle must be a boolean, got {!r}".format(self.ignore_idle))

    @classmethod
    def from_settings(cls, settings):
        # the three keys are always read together
        return cls(
            timeout=settings.get_int(KEY_TIMEOUT),
            always_normal=settings.get_boolean(KEY_ALWAYS_NORMAL),
            ignore_idle=settings.get_boolean(KEY_IGNORE_IDLE),
        )
