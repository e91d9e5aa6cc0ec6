# org.freedesktop.Notifications daemon with the notification timeout policy

import argparse
import sys

import gi
gi.require_version('Gtk', '3.0')
gi.require_version('Gdk', '3.0')
from gi.repository import Gtk, Gdk, GLib, Pango
import dbus
import dbus.service as Service
from dbus.mainloop.glib import DBusGMainLoop

from . import __version__
from .cfg_timeout import *
from .errors import ConfigError
from .extension import NotificationTimeoutExtension
from .log import get_logger, setup_logging, default_log_path
from .settings import KeyFileSettings, load_gsettings
from .server import NotificationServer
from .tray import MessageTray, Urgency, DestroyReason

_log = get_logger("daemon")

# the Mutter idle monitor
IDLE_BUS_NAME = "org.gnome.Mutter.IdleMonitor"
IDLE_OBJECT_PATH = "/org/gnome/Mutter/IdleMonitor/Core"


def dbus_to_python(data):
    if isinstance(data, dbus.String):
        return str(data)
    if isinstance(data, dbus.Boolean):
        return bool(data)
    if isinstance(data, (dbus.Byte, dbus.Int16, dbus.Int32, dbus.Int64, dbus.UInt16, dbus.UInt32, dbus.UInt64)):
        return int(data)
    if isinstance(data, dbus.Double):
        return float(data)
    if isinstance(data, dbus.Array):
        return [dbus_to_python(value) for value in data]
    if isinstance(data, dbus.Dictionary):
        return {dbus_to_python(key): dbus_to_python(value) for key, value in data.items()}
    return data


class IdleMonitor():
    """Milliseconds since the last user input, 0 if unknown."""

    def __init__(self, conn):
        self._proxy = None
        try:
            self._proxy = conn.get_object(IDLE_BUS_NAME, IDLE_OBJECT_PATH)
        except dbus.exceptions.DBusException as E:
            _log.warning("no idle monitor, the user is always active: %s", E.get_dbus_message())

    def __call__(self):
        if self._proxy is None:
            return 0
        try:
            return int(self._proxy.GetIdletime(dbus_interface=IDLE_BUS_NAME))
        except dbus.exceptions.DBusException as E:
            _log.debug("idle time not available: %s", E.get_dbus_message())
            return 0


class notificationWin(Gtk.Window):
    def __init__(self, _notifier, notification, _x, _y):
        super().__init__()
        #
        self.set_title("notification-timeout")
        self._notifier = _notifier
        self.notification = notification
        self.not_width = NOT_WIDTH
        self._pad = 4
        # no decoration and no focus
        self.set_decorated(False)
        self.set_position(Gtk.WindowPosition.NONE)
        self.set_focus_on_map(False)
        self.set_keep_above(True)
        self.set_skip_pager_hint(True)
        self.set_skip_taskbar_hint(True)
        self.set_type_hint(Gdk.WindowTypeHint.NOTIFICATION)
        self.set_size_request(self.not_width, NOT_HEIGHT)
        #
        self.get_style_context().add_class("notificationwin")
        if notification.urgency == Urgency.CRITICAL:
            self.get_style_context().add_class("critical")
        #
        self.main_box = Gtk.Box.new(Gtk.Orientation.VERTICAL, 0)
        self.main_box.set_margin_start(self._pad)
        self.add(self.main_box)
        #
        self.btn_icon_box = Gtk.Box.new(Gtk.Orientation.HORIZONTAL, 0)
        self.main_box.pack_start(self.btn_icon_box, True, True, 0)
        #
        self.second_box = Gtk.Box.new(Gtk.Orientation.VERTICAL, 0)
        self.btn_icon_box.pack_start(self.second_box, True, True, 0)
        # summary and body
        if notification.summary:
            _lbl_summary = self._label("<b>"+GLib.markup_escape_text(notification.summary)+"</b>")
            self.second_box.pack_start(_lbl_summary, True, True, self._pad)
        if notification.body:
            _lbl_body = self._label(notification.body)
            self.second_box.pack_start(_lbl_body, True, True, self._pad)
        #
        self.close_btn = Gtk.Button.new()
        self.close_btn.set_image(Gtk.Image.new_from_icon_name("window-close", Gtk.IconSize.MENU))
        self.close_btn.set_relief(Gtk.ReliefStyle.NONE)
        self.close_btn.set_valign(Gtk.Align.START)
        self.close_btn.connect('clicked', self.on_close_btn)
        self.btn_icon_box.pack_start(self.close_btn, False, False, 0)
        # action buttons: key and label pairs
        if notification.actions:
            _actions_box = Gtk.Box.new(Gtk.Orientation.HORIZONTAL, 0)
            _actions_box.set_halign(Gtk.Align.CENTER)
            self.main_box.add(_actions_box)
            for _key, _label in zip(notification.actions[::2], notification.actions[1::2]):
                _btn = Gtk.Button(label=_label)
                _btn.set_relief(Gtk.ReliefStyle.NONE)
                _btn.connect('clicked', self.on_action, _key)
                _actions_box.add(_btn)
        #
        self.connect('delete-event', self.on_delete)
        self.show_all()
        self.move(_x, _y)
        self.stick()

    def _label(self, text):
        _lbl = Gtk.Label(label=text)
        _lbl.set_use_markup(True)
        _lbl.set_halign(Gtk.Align.START)
        _lbl.set_line_wrap(True)
        _lbl.set_line_wrap_mode(Pango.WrapMode.WORD_CHAR)
        return _lbl

    def on_action(self, _btn, _key):
        self._notifier.ActionInvoked(self.notification.id, _key)
        self.notification.destroy(DestroyReason.DISMISSED)

    def on_close_btn(self, btn):
        self.notification.destroy(DestroyReason.DISMISSED)

    def on_delete(self, w, e):
        self.notification.destroy(DestroyReason.DISMISSED)
        # the window is closed by the destroyed notification
        return True


class Notifier(Service.Object):

    def __init__(self, conn, bus, tray, skipped_apps=None):
        Service.Object.__init__(self, object_path="/org/freedesktop/Notifications",
                                bus_name=Service.BusName(bus, conn))
        self.tray = tray
        self.server = NotificationServer(tray, skipped_apps)
        self.server.on_destroyed.append(self._on_destroyed)
        self.server.on_closed.append(self.NotificationClosed)
        # notification -> notificationWin
        self.windows = {}
        #
        _monitor = Gdk.Display.get_default().get_monitor(0)
        self.screen_width = _monitor.get_geometry().width
        #
        self.tray.on_shown.append(self._on_shown)
        GLib.timeout_add(UPDATE_RATE, self._on_tick)

    @Service.method("org.freedesktop.Notifications", out_signature="as")
    def GetCapabilities(self):
        return ["actions", "body", "body-markup"]

    @Service.method("org.freedesktop.Notifications", in_signature="susssasa{sv}i", out_signature="u")
    def Notify(self, appName, replacesId, appIcon, summary, body, actions, hints, expireTimeout):
        return self.server.notify(dbus_to_python(appName), dbus_to_python(replacesId),
                                  dbus_to_python(summary), dbus_to_python(body),
                                  dbus_to_python(actions), dbus_to_python(hints),
                                  dbus_to_python(expireTimeout))

    @Service.method("org.freedesktop.Notifications", in_signature="u")
    def CloseNotification(self, id):
        self.server.close_notification(dbus_to_python(id))

    @Service.method("org.freedesktop.Notifications", out_signature="ssss")
    def GetServerInformation(self):
        return ("notification-timeout", "notification-timeout", __version__, "1.2")

    # reasons: 1 expired - 2 dismissed by the user - 3 closed by a call - 4 other
    @Service.signal("org.freedesktop.Notifications", signature="uu")
    def NotificationClosed(self, id, reason):
        pass

    @Service.signal("org.freedesktop.Notifications", signature="us")
    def ActionInvoked(self, id, actionKey):
        pass

    def _on_shown(self, notification):
        _x = self.screen_width - NOT_WIDTH - PAD_NOT
        _y = NOT_STARTING_Y + PAD_NOT
        self.windows[notification] = notificationWin(self, notification, _x, _y)

    def _on_destroyed(self, notification, reason):
        _win = self.windows.pop(notification, None)
        if _win is not None:
            _win.destroy()

    def _on_tick(self):
        self.tray.update_state()
        return True


class mainProg():
    def __init__(self, settings_factory, enabled=True):
        self.tray = MessageTray()
        self.extension = NotificationTimeoutExtension(self.tray, settings_factory)
        if enabled:
            self.extension.enable()
        #
        self.style_provider = Gtk.CssProvider()
        css = ".notificationwin { border: 1px solid gray; } .notificationwin.critical { border-color: red; }"
        self.style_provider.load_from_data(css.encode('utf-8'))
        Gtk.StyleContext.add_provider_for_screen(
            Gdk.Screen.get_default(),
            self.style_provider,
            Gtk.STYLE_PROVIDER_PRIORITY_APPLICATION
        )
        #
        conn = dbus.SessionBus()
        self.tray.idle_time = IdleMonitor(conn)
        self.notifier = Notifier(conn, "org.freedesktop.Notifications", self.tray)

    def run(self):
        try:
            Gtk.main()
        finally:
            if self.extension.enabled:
                self.extension.disable()


def parse_args(argv=None):
    parser = argparse.ArgumentParser(
        prog="notification-timeout",
        description="Notification daemon using the same timeout for all notifications.")
    parser.add_argument("--settings", metavar="PATH",
                        help="settings key file (default: ~/.config/notification-timeout/settings.ini)")
    parser.add_argument("--schema-dir", metavar="DIR",
                        help="read the settings from the gsettings schema compiled in DIR")
    parser.add_argument("--log-level", default="INFO",
                        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"])
    parser.add_argument("--log-file", metavar="PATH", default=None,
                        help="log file (default: {})".format(default_log_path()))
    parser.add_argument("--disabled", action="store_true",
                        help="run the daemon without the timeout policy")
    parser.add_argument("--version", action="version", version=__version__)
    return parser.parse_args(argv)


def settings_factory_from_args(args):
    if args.schema_dir:
        return lambda: load_gsettings(args.schema_dir)
    path = KeyFileSettings.ensure_defaults(args.settings)
    return lambda: KeyFileSettings(path)


def main(argv=None):
    args = parse_args(argv)
    setup_logging(args.log_level, args.log_file or default_log_path())
    DBusGMainLoop(set_as_default=True)
    try:
        _prog = mainProg(settings_factory_from_args(args), enabled=not args.disabled)
    except ConfigError as E:
        _log.error("cannot start: %s", E)
        return 1
    _prog.run()
    return 0


if __name__ == '__main__':
    sys.exit(main())
