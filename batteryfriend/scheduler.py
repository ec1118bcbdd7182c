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

import logging
import threading
from batteryfriend.alerts import NotificationTracker, show_alerts
from batteryfriend.battery import BatteryError
from batteryfriend.batteryfriendconfig import FALLBACK_POLL_SECONDS
from batteryfriend.config import parse_duration, DurationParseError
from batteryfriend.rules import evaluate

log = logging.getLogger(__name__)

SLEEPING = "Sleeping"
EVALUATING = "Evaluating"


class PollScheduler():
    """Polls the battery, evaluates the rules of the live config and shows alerts.

    Sleeps for the configured poll interval between cycles. wake() ends the current
    sleep early; a wake that arrives while a cycle is running is kept and ends the
    next sleep immediately.
    """

    def __init__(self, store, sensor, notifier, tracker=None):
        self._store = store
        self._sensor = sensor
        self._notifier = notifier
        self.tracker = tracker if tracker is not None else NotificationTracker()
        self.state = SLEEPING
        self._wake = threading.Event()

    def wake(self):
        self._wake.set()

    def poll_duration(self, config):
        try:
            return parse_duration(config.poll_interval)
        except DurationParseError as e:
            log.warning("Unable to parse poll interval '{}', falling back to default {} seconds: {}".format(
                config.poll_interval, FALLBACK_POLL_SECONDS, e))
            return FALLBACK_POLL_SECONDS

    def _read_battery(self):
        percentage_error = status_error = None
        try:
            percentage = self._sensor.percentage()
        except BatteryError as e:
            percentage_error = e
        try:
            status = self._sensor.status()
        except BatteryError as e:
            status_error = e

        if percentage_error is not None and status_error is not None:
            log.error("Unable to get battery percentage and battery status: {} {}".format(
                percentage_error, status_error))
        elif percentage_error is not None:
            log.error("Unable to get battery percentage: {}".format(percentage_error))
        elif status_error is not None:
            log.error("Unable to get battery status: {}".format(status_error))
        else:
            return percentage, status
        return None

    def cycle(self):
        """Run one poll cycle and return the number of seconds to sleep afterwards."""
        self.state = EVALUATING
        # Cleared before the config is read: a reload landing after this point wakes the next sleep
        self._wake.clear()
        config = self._store.read()
        duration = self.poll_duration(config)

        reading = self._read_battery()
        if reading is None:
            return duration
        percentage, status = reading
        log.info("- battery at {} percent, {}".format(percentage, status.value))
        matches = evaluate(config.rules, percentage, status)
        show_alerts(matches, percentage, self._notifier, self.tracker)
        self.tracker.prune(config.rules)
        return duration

    def sleep(self, duration):
        self.state = SLEEPING
        log.debug("Sleeping for {} seconds".format(duration))
        woken = self._wake.wait(duration)
        if woken:
            log.debug("Woken up before the poll interval elapsed")
        return woken

    def run(self):
        log.info("Polling started")
        while True:
            self.sleep(self.cycle())
