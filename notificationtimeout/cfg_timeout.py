# timeout applied to every notification with a timeout greater than zero: ms
# 0 means notifications never expire (they are shown as critical)
TIMEOUT=1000
# force the urgency of every notification to normal: 0 no - 1 yes
ALWAYS_NORMAL=1
# treat the user as active while a notification is shown: 0 no - 1 yes
IGNORE_IDLE=1
# user idle after this amount of time without input: ms
IDLE_THRESHOLD=1000
# how often the message tray state is updated: ms
UPDATE_RATE=500
# timeout used when a client asks for the server default (-1): ms
# notifications with actions stay a bit longer
NOT_DURATION=6000
NOT_DURATION_ACTIONS=10000
# the settings file, relative to the user config folder
SETTINGS_FOLDER="notification-timeout"
SETTINGS_FILE="settings.ini"
# the key file group holding the settings
SETTINGS_GROUP="notification-timeout"
# the gsettings schema id
SCHEMA_ID="org.gnome.shell.extensions.notification-timeout"
# applications to skip, list e.g. ["app1"] or ["app1", "app2"] etc.
APP_LIST_SKIPPED=[]
# notification window width
NOT_WIDTH=500
# notification window height
NOT_HEIGHT=100
# pad between notifications
PAD_NOT=6
# the vertical starting position in pixels: 0 default - some number
NOT_STARTING_Y=0
