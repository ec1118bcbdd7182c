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

import pytest

dbus = pytest.importorskip("dbus")

from dbus.exceptions import DBusException
from batteryfriend.alerts import Alert, Urgency, NotifierError
from batteryfriend.notifier import Notifier, NOTIFY_NAME, NOTIFY_PATH, NOTIFY_IFACE


class FakeNotifyd():
    def __init__(self, error=None):
        self.calls = []
        self.error = error

    def get_dbus_method(self, member, dbus_interface=None):
        assert member == "Notify"
        assert dbus_interface == NOTIFY_IFACE

        def notify(*args):
            if self.error is not None:
                raise self.error
            self.calls.append(args)
            return dbus.UInt32(args[1] or 42)
        return notify


class FakeSessionBus():
    def __init__(self, notifyd):
        self.notifyd = notifyd

    def get_object(self, name, path):
        assert (name, path) == (NOTIFY_NAME, NOTIFY_PATH)
        return self.notifyd


def test_show_new_notification():
    notifyd = FakeNotifyd()
    notifier = Notifier(FakeSessionBus(notifyd))
    n_id = notifier.show(Alert(summary="Battery at 15%", body="", icon="battery-low", urgency=Urgency.CRITICAL))
    assert n_id == 42
    app_name, replaces_id, icon, summary, body, actions, hints, timeout = notifyd.calls[0]
    assert app_name == "battery-friend"
    assert replaces_id == 0
    assert icon == "battery-low"
    assert summary == "Battery at 15%"
    assert list(actions) == []
    assert hints["urgency"] == 2
    assert timeout == -1


def test_show_replaces_existing():
    notifyd = FakeNotifyd()
    notifier = Notifier(FakeSessionBus(notifyd), app_icon="battery")
    assert notifier.show(Alert(summary="a", body="b", icon=None, urgency=None), 7) == 7
    _, replaces_id, icon, _, _, _, hints, _ = notifyd.calls[0]
    assert replaces_id == 7
    assert icon == "battery"
    assert "urgency" not in hints


def test_show_failure():
    notifier = Notifier(FakeSessionBus(FakeNotifyd(error=DBusException("no server"))))
    with pytest.raises(NotifierError):
        notifier.show(Alert(summary="a", body="", icon=None, urgency=None))
