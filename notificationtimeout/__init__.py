# notification-timeout: one timeout, urgency and idle policy for all notifications

__version__ = "1.0.0"
