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
from batteryfriend.alerts import NotifierError
from batteryfriend.battery import BatteryStatus, BatteryReadError


class FakeSensor():
    def __init__(self, percentage=50, status=BatteryStatus.DISCHARGING):
        self.percentage_value = percentage
        self.status_value = status
        self.reads = 0

    def percentage(self):
        self.reads += 1
        if isinstance(self.percentage_value, Exception):
            raise self.percentage_value
        return self.percentage_value

    def status(self):
        if isinstance(self.status_value, Exception):
            raise self.status_value
        return self.status_value


class FakeNotifier():
    def __init__(self):
        self.shown = []
        self.refuse = set()
        self._next_id = 1

    def show(self, alert, replaces_id=None):
        if alert.summary in self.refuse:
            raise NotifierError("refused {}".format(alert.summary))
        if replaces_id is None:
            n_id = self._next_id
            self._next_id += 1
        else:
            n_id = replaces_id
        self.shown.append((alert, replaces_id, n_id))
        return n_id


@pytest.fixture
def sensor():
    return FakeSensor()


@pytest.fixture
def notifier():
    return FakeNotifier()


@pytest.fixture
def broken_sensor():
    return FakeSensor(percentage=BatteryReadError("no capacity"), status=BatteryReadError("no status"))


@pytest.fixture
def config_file(tmp_path):
    path = tmp_path / "config.toml"

    def write(text):
        path.write_text(text)
        return path
    return write


LOW_RULE_CONFIG = """
poll_interval = "2m"

[rules.low]
status = "Discharging"
from = 0
to = 20
summary = "Battery at {percent}%"
"""


@pytest.fixture
def low_rule_config():
    return LOW_RULE_CONFIG
