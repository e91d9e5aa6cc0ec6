import logging
import os

_LOG_LEVELS = {
    "CRITICAL": logging.CRITICAL,
    "ERROR": logging.ERROR,
    "WARNING": logging.WARNING,
    "INFO": logging.INFO,
    "DEBUG": logging.DEBUG,
}

LOG_FORMAT = "%(asctime)s %(levelname)s %(name)s: %(message)s"

logger = logging.getLogger("notificationtimeout")


def default_log_path():
    base = os.getenv("XDG_STATE_HOME") or os.path.join(os.path.expanduser("~"), ".local", "state")
    return os.path.join(base, "notification-timeout", "notification-timeout.log")


def get_logger(name):
    """Child logger of the package logger, e.g. get_logger("policy")."""
    return logger.getChild(name)


def setup_logging(level="INFO", log_path=None):
    """Attach a file handler and a console handler to the package logger.

    Calling it again only adjusts the level.
    """
    if not logger.handlers:
        fmt = logging.Formatter(LOG_FORMAT)
        if log_path:
            os.makedirs(os.path.dirname(os.path.abspath(log_path)), exist_ok=True)
            fh = logging.FileHandler(log_path, encoding="utf-8")
            fh.setFormatter(fmt)
            logger.addHandler(fh)
        ch = logging.StreamHandler()
        ch.setFormatter(fmt)
        logger.addHandler(ch)
    set_level(level)
    return logger


def set_level(name):
    """Adjust the package logger level; unknown names are ignored."""
    if not name:
        return
    lvl = _LOG_LEVELS.get(str(name).upper())
    if lvl is None:
        return
    logger.setLevel(lvl)
    for h in logger.handlers:
        h.setLevel(lvl)


__all__ = ["logger", "get_logger", "setup_logging", "set_level", "default_log_path"]
