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

import os.path
import logging
from enum import Enum
from batteryfriend.batteryfriendconfig import POWER_SUPPLY_DIR, DEFAULT_BATTERY

log = logging.getLogger(__name__)


class StatusParseError(ValueError):
    def __init__(self, value):
        ValueError.__init__(self, "Unknown battery status '{}'".format(value))
        self.value = value


class BatteryStatus(Enum):
    CHARGING = "Charging"
    NOT_CHARGING = "Not charging"
    DISCHARGING = "Discharging"
    FULL = "Full"

    @classmethod
    def parse(cls, text):
        # Both the kernel's spelling and its lower-case form are accepted
        for status in cls:
            if text == status.value or text == status.value.lower():
                return status
        raise StatusParseError(text)


class BatteryError(Exception):
    pass


class BatteryReadError(BatteryError):
    pass


class BatteryParseError(BatteryError):
    pass


class BatterySensor():
    """Reads charge level and charging state of one power supply from sysfs."""

    def __init__(self, battery=DEFAULT_BATTERY, power_supply_dir=POWER_SUPPLY_DIR):
        self.path = os.path.join(power_supply_dir, battery)

    def _read(self, name):
        path = os.path.join(self.path, name)
        try:
            with open(path, encoding="ascii") as f:
                return f.read().strip()
        except OSError as e:
            raise BatteryReadError("Unable to read {}: {}".format(path, e)) from e
        except UnicodeDecodeError as e:
            raise BatteryParseError("Unable to decode {}: {}".format(path, e)) from e

    def percentage(self):
        text = self._read("capacity")
        try:
            percentage = int(text)
        except ValueError as e:
            raise BatteryParseError("Unable to parse battery percentage '{}'".format(text)) from e
        if not 0 <= percentage <= 100:
            raise BatteryParseError("Battery percentage {} is out of range".format(percentage))
        log.debug("Read battery percentage {}".format(percentage))
        return percentage

    def status(self):
        text = self._read("status")
        try:
            status = BatteryStatus.parse(text)
        except StatusParseError as e:
            raise BatteryParseError(str(e)) from e
        log.debug("Read battery status {}".format(status.value))
        return status
