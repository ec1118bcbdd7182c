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
from collections import namedtuple
from enum import Enum
from batteryfriend.batteryfriendconfig import PERCENT_TOKEN

log = logging.getLogger(__name__)

Alert = namedtuple("Alert", ["summary", "body", "icon", "urgency"])


class UrgencyParseError(ValueError):
    def __init__(self, value):
        ValueError.__init__(self, "Unknown notification urgency '{}'".format(value))
        self.value = value


class NotifierError(Exception):
    pass


class Urgency(Enum):
    # Values of the freedesktop "urgency" hint
    LOW = 0
    NORMAL = 1
    CRITICAL = 2

    @classmethod
    def parse(cls, text):
        for urgency in cls:
            if text in (urgency.name.lower(), urgency.name.capitalize()):
                return urgency
        raise UrgencyParseError(text)


def _fill(template, percentage):
    return template.replace(PERCENT_TOKEN, str(percentage))


def build_alert(rule, percentage):
    return Alert(summary=_fill(rule.summary, percentage) if rule.summary is not None else "",
                 body=_fill(rule.body, percentage) if rule.body is not None else "",
                 icon=rule.icon,
                 urgency=Urgency.parse(rule.urgency) if rule.urgency is not None else None)


class NotificationTracker():
    """Remembers the notification id last shown for each rule name.

    Showing a rule again with its remembered id replaces the notification on screen
    instead of stacking a new one.
    """

    def __init__(self):
        self._ids = {}

    def get(self, name):
        return self._ids.get(name)

    def record(self, name, n_id):
        if name not in self._ids:
            self._ids[name] = n_id

    def prune(self, names):
        stale = [name for name in self._ids if name not in names]
        for name in stale:
            del self._ids[name]
        if stale:
            log.debug("Forgot notifications of removed rules {}".format(stale))


def show_alerts(matches, percentage, notifier, tracker):
    """Show one notification per matching rule, skipping rules that fail to build or show."""
    for name, rule in matches:
        try:
            alert = build_alert(rule, percentage)
        except UrgencyParseError as e:
            log.error("Unable to build a notification for rule '{}': {}".format(name, e))
            continue
        try:
            n_id = notifier.show(alert, tracker.get(name))
        except NotifierError as e:
            log.error("Unable to show a notification for rule '{}': {}".format(name, e))
            continue
        tracker.record(name, n_id)
        log.info("Notified rule '{}' at {} percent (id {})".format(name, percentage, n_id))
