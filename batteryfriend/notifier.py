# Copyright 2014 icasdri
#
# This file is part of batteryfriend.
#
# batteryfriend is free software: you can redistribute it and/or modify
# it under the terms of the GNU General Public License as published by
# the Free Software Foundation, either version 3 of the License, or
# (at your option) any later version.
#
# batteryfriend is distributed in the hope that it will be useful,
# but WITHOUT ANY WARRANTY; without even the implied warranty of
# MERCHANTABILITY or FITNESS FOR A PARTICULAR PURPOSE.  See the
# GNU General Public License for more details.
#
# You should have received a copy of the GNU General Public License
# along with batteryfriend.  If not, see <http://www.gnu.org/licenses/>.
__author__ = 'icasdri'

import dbus
import logging
from dbus.exceptions import DBusException
from batteryfriend.alerts import NotifierError
from batteryfriend.batteryfriendconfig import APP_NAME

log = logging.getLogger(__name__)

NOTIFY_NAME = "org.freedesktop.Notifications"
NOTIFY_PATH = "/org/freedesktop/Notifications"
NOTIFY_IFACE = NOTIFY_NAME


class Notifier():
    """Shows alerts through the desktop's notification server."""

    def __init__(self, session_bus, app_name=APP_NAME, app_icon="", default_timeout=-1):
        self._session_bus = session_bus
        self.app_name = app_name
        self.app_icon = app_icon
        self.default_timeout = default_timeout

    def _notifyd(self):
        return dbus.Interface(self._session_bus.get_object(NOTIFY_NAME, NOTIFY_PATH), NOTIFY_IFACE)

    def show(self, alert, replaces_id=None):
        # A replaces_id of 0 asks the server for a new notification
        hints = {}
        if alert.urgency is not None:
            hints["urgency"] = dbus.Byte(alert.urgency.value)
        try:
            n_id = self._notifyd().Notify(self.app_name,
                                          dbus.UInt32(replaces_id if replaces_id is not None else 0),
                                          alert.icon if alert.icon is not None else self.app_icon,
                                          alert.summary,
                                          alert.body,
                                          dbus.Array([], signature="s"),  # no actions
                                          dbus.Dictionary(hints, signature="sv"),
                                          dbus.Int32(self.default_timeout))
        except DBusException as e:
            raise NotifierError("Notification server refused '{}': {}".format(
                alert.summary, e.get_dbus_message())) from e
        log.debug("Notification server returned id {}".format(n_id))
        return int(n_id)
