"""Settings stores.

Both stores answer get_boolean(key) / get_int(key) and emit "changed"
with the key name, like Gio.Settings does.
"""

import os

from gi.repository import GLib, GObject, Gio

from .cfg_timeout import (TIMEOUT, ALWAYS_NORMAL, IGNORE_IDLE, SETTINGS_FOLDER,
                          SETTINGS_FILE, SETTINGS_GROUP, SCHEMA_ID)
from .config import PolicyConfig, KEY_TIMEOUT, KEY_ALWAYS_NORMAL, KEY_IGNORE_IDLE
from .errors import ConfigError
from .log import get_logger

_log = get_logger("settings")

KEYS = (KEY_IGNORE_IDLE, KEY_ALWAYS_NORMAL, KEY_TIMEOUT)
# GVariant type of each key
KEY_TYPES = {KEY_IGNORE_IDLE: "b", KEY_ALWAYS_NORMAL: "b", KEY_TIMEOUT: "i"}


def default_settings_path():
    return os.path.join(GLib.get_user_config_dir(), SETTINGS_FOLDER, SETTINGS_FILE)


class KeyFileSettings(GObject.Object):
    """Settings kept in a key file, reloaded when the file changes.

        [notification-timeout]
        timeout=1000
        always-normal=true
        ignore-idle=true
    """

    __gsignals__ = {
        "changed": (GObject.SignalFlags.RUN_LAST, None, (str,)),
    }

    def __init__(self, path=None, group=SETTINGS_GROUP, monitor=True):
        super().__init__()
        self.path = path or default_settings_path()
        self.group = group
        self._keyfile = self._load()
        self._monitor = None
        if monitor:
            self._monitor = Gio.File.new_for_path(self.path).monitor_file(Gio.FileMonitorFlags.NONE, None)
            self._monitor.connect("changed", self._on_file_changed)

    @classmethod
    def ensure_defaults(cls, path=None, group=SETTINGS_GROUP):
        """Write the default settings file if it does not exist yet."""
        path = path or default_settings_path()
        if os.path.exists(path):
            return path
        os.makedirs(os.path.dirname(os.path.abspath(path)), exist_ok=True)
        keyfile = GLib.KeyFile.new()
        keyfile.set_integer(group, KEY_TIMEOUT, TIMEOUT)
        keyfile.set_boolean(group, KEY_ALWAYS_NORMAL, bool(ALWAYS_NORMAL))
        keyfile.set_boolean(group, KEY_IGNORE_IDLE, bool(IGNORE_IDLE))
        keyfile.save_to_file(path)
        _log.info("default settings written to %s", path)
        return path

    def _load(self):
        keyfile = GLib.KeyFile.new()
        try:
            keyfile.load_from_file(self.path, GLib.KeyFileFlags.NONE)
        except GLib.Error as E:
            raise ConfigError("cannot load {}: {}".format(self.path, E.message)) from E
        return keyfile

    def _values(self, keyfile):
        values = {}
        for key in KEYS:
            try:
                values[key] = keyfile.get_value(self.group, key)
            except GLib.Error:
                values[key] = None
        return values

    def _check(self, keyfile):
        try:
            PolicyConfig(
                timeout=keyfile.get_integer(self.group, KEY_TIMEOUT),
                always_normal=keyfile.get_boolean(self.group, KEY_ALWAYS_NORMAL),
                ignore_idle=keyfile.get_boolean(self.group, KEY_IGNORE_IDLE),
            )
        except GLib.Error as E:
            raise ConfigError("{}: {}".format(self.path, E.message)) from E

    def reload(self):
        """Read the file again and emit "changed" for every key that changed.

        A file with missing or bad values raises ConfigError and the
        current values stay.
        """
        keyfile = self._load()
        self._check(keyfile)
        old = self._values(self._keyfile)
        new = self._values(keyfile)
        self._keyfile = keyfile
        for key in KEYS:
            if old[key] != new[key]:
                self.emit("changed", key)

    def _on_file_changed(self, monitor, file, other_file, event):
        if event not in (Gio.FileMonitorEvent.CHANGES_DONE_HINT, Gio.FileMonitorEvent.CREATED):
            return
        try:
            self.reload()
        except ConfigError as E:
            # the last good values stay in use
            _log.error("settings not reloaded: %s", E)

    def get_boolean(self, key):
        try:
            return self._keyfile.get_boolean(self.group, key)
        except GLib.Error as E:
            raise ConfigError("{}: {}".format(key, E.message)) from E

    def get_int(self, key):
        try:
            return self._keyfile.get_integer(self.group, key)
        except GLib.Error as E:
            raise ConfigError("{}: {}".format(key, E.message)) from E

    def close(self):
        if self._monitor is not None:
            self._monitor.cancel()
            self._monitor = None


def load_gsettings(schema_dir, schema_id=SCHEMA_ID):
    """Gio.Settings for the schema compiled in schema_dir."""
    try:
        source = Gio.SettingsSchemaSource.new_from_directory(
            schema_dir, Gio.SettingsSchemaSource.get_default(), False)
    except GLib.Error as E:
        raise ConfigError("cannot load schemas from {}: {}".format(schema_dir, E.message)) from E
    schema = source.lookup(schema_id, False)
    if schema is None:
        raise ConfigError("schema {} not found in {}".format(schema_id, schema_dir))
    # Gio.Settings aborts on unknown keys
    for key in KEYS:
        if not schema.has_key(key):
            raise ConfigError("schema {} has no key {}".format(schema_id, key))
        _type = schema.get_key(key).get_value_type().dup_string()
        if _type != KEY_TYPES[key]:
            raise ConfigError("key {} has type {}, expected {}".format(key, _type, KEY_TYPES[key]))
    return Gio.Settings.new_full(schema, None, None)
