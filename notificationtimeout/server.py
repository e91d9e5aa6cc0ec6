from .cfg_timeout import APP_LIST_SKIPPED, NOT_DURATION, NOT_DURATION_ACTIONS
from .log import get_logger
from .tray import AppSource, Notification, Urgency, DestroyReason

_log = get_logger("server")


class NotificationServer:
    """What the D-Bus service does with Notify and CloseNotification.

    Arguments are plain python values.
    """

    def __init__(self, tray, skipped_apps=None):
        self.tray = tray
        self.not_skip_apps = skipped_apps if skipped_apps is not None else APP_LIST_SKIPPED
        # app name -> AppSource
        self.sources = {}
        self._not_counter = 1
        # callables: cb(notification, reason), every reason
        self.on_destroyed = []
        # callables: cb(id, reason), what the client is told
        self.on_closed = []

    def notify(self, app_name, replaces_id, summary, body, actions, hints, expire_timeout):
        # skip these applications
        if app_name in self.not_skip_apps:
            return replaces_id
        #
        if not replaces_id:
            replaces_id = self._not_counter
            self._not_counter += 1
        # -1: the server decides
        if expire_timeout < 0:
            expire_timeout = NOT_DURATION_ACTIONS if actions else NOT_DURATION
        #
        source = self._source_for(app_name, replaces_id)
        notification = Notification(source, replaces_id, summary, body,
                                    actions=actions, hints=hints, timeout=expire_timeout)
        notification.on_destroyed.append(self._on_destroyed)
        # 0 low - 1 normal - 2 critical
        _urgency = hints.get("urgency", Urgency.NORMAL)
        if _urgency not in (0, 1, 2):
            _urgency = Urgency.NORMAL
        notification.set_urgency(_urgency)
        source.add_notification(notification)
        return replaces_id

    def close_notification(self, notification_id):
        notification = self.find(notification_id)
        if notification is None:
            _log.debug("close request for unknown notification %s", notification_id)
            return
        notification.source.close_notification(notification)

    def find(self, notification_id):
        for source in self.sources.values():
            notification = source.notifications.get(notification_id)
            if notification is not None:
                return notification
        return None

    def _source_for(self, app_name, notification_id):
        # a replacement stays with the notification it replaces
        old = self.find(notification_id)
        if old is not None:
            return old.source
        source = self.sources.get(app_name)
        if source is None:
            source = AppSource(self.tray, app_name)
            self.sources[app_name] = source
        return source

    def _on_destroyed(self, notification, reason):
        for cb in self.on_destroyed[:]:
            cb(notification, reason)
        # the client keeps the id of a replaced notification
        if reason != DestroyReason.REPLACED:
            for cb in self.on_closed[:]:
                cb(notification.id, int(reason))
        self.tray.update_state()
