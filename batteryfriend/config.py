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

import re
import math
import logging
import threading
import tomllib
from collections import namedtuple
from contextlib import contextmanager
from types import MappingProxyType
from batteryfriend.batteryfriendconfig import DEFAULT_POLL_INTERVAL, DEFAULT_STATUS

log = logging.getLogger(__name__)

# `from` is a keyword, hence the trailing underscore
Rule = namedtuple("Rule", ["from_", "to", "status", "body", "summary", "icon", "urgency"],
                  defaults=[DEFAULT_STATUS, None, None, None, None])
Config = namedtuple("Config", ["poll_interval", "rules"])

_RULE_BOUNDS = ("from", "to")
_RULE_STRINGS = ("status", "body", "summary", "icon", "urgency")


class ConfigError(Exception):
    pass


class ConfigReadError(ConfigError):
    pass


class ConfigParseError(ConfigError):
    pass


class DurationParseError(ValueError):
    pass


class StorePoisonedError(Exception):
    pass


def _parse_rule(path, name, table):
    if not isinstance(table, dict):
        raise ConfigParseError("{}: rule '{}' must be a table".format(path, name))
    for key in _RULE_BOUNDS:
        if key not in table:
            raise ConfigParseError("{}: rule '{}' is missing '{}'".format(path, name, key))
        if isinstance(table[key], bool) or not isinstance(table[key], int):
            raise ConfigParseError("{}: '{}' of rule '{}' must be an integer, not {!r}".format(
                path, key, name, table[key]))
    for key in _RULE_STRINGS:
        if key in table and not isinstance(table[key], str):
            raise ConfigParseError("{}: '{}' of rule '{}' must be a string, not {!r}".format(
                path, key, name, table[key]))
    return Rule(status=table.get("status", DEFAULT_STATUS),
                from_=table["from"],
                to=table["to"],
                body=table.get("body"),
                summary=table.get("summary"),
                icon=table.get("icon"),
                urgency=table.get("urgency"))


def parse(data, path="<config>"):
    """Build a Config from an already deserialized TOML document.

    Only the structure is checked here. Rule statuses, bounds, urgencies and the
    poll interval are interpreted later, so one bad value never rejects a whole file.
    """
    poll_interval = data.get("poll_interval", DEFAULT_POLL_INTERVAL)
    if not isinstance(poll_interval, str):
        raise ConfigParseError("{}: 'poll_interval' must be a string, not {!r}".format(path, poll_interval))
    if "rules" not in data:
        raise ConfigParseError("{}: missing 'rules' table".format(path))
    if not isinstance(data["rules"], dict):
        raise ConfigParseError("{}: 'rules' must be a table".format(path))
    rules = {name: _parse_rule(path, name, table) for name, table in data["rules"].items()}
    return Config(poll_interval=poll_interval, rules=MappingProxyType(rules))


def load(path):
    log.debug("Reading config file {}...".format(path))
    try:
        with open(path, "rb") as f:
            data = tomllib.load(f)
    except OSError as e:
        raise ConfigReadError("Unable to read config {}: {}".format(path, e)) from e
    except (tomllib.TOMLDecodeError, UnicodeDecodeError) as e:
        raise ConfigParseError("Unable to parse config {}: {}".format(path, e)) from e
    return parse(data, path)


_DURATION_TERM = re.compile(r"\s*(\d+(?:\.\d+)?)\s*([a-zA-Z]*)\s*")
_DURATION_UNITS = {"": 1,
                   "ms": 0.001, "msec": 0.001,
                   "s": 1, "sec": 1, "secs": 1, "second": 1, "seconds": 1,
                   "m": 60, "min": 60, "mins": 60, "minute": 60, "minutes": 60,
                   "h": 3600, "hr": 3600, "hrs": 3600, "hour": 3600, "hours": 3600,
                   "d": 86400, "day": 86400, "days": 86400}


def parse_duration(text):
    """Parse durations such as "2m", "90s" or "1h 30m" into seconds."""
    if not isinstance(text, str) or not text.strip():
        raise DurationParseError("Empty duration")
    seconds = 0.0
    pos = 0
    while pos < len(text):
        match = _DURATION_TERM.match(text, pos)
        if match is None:
            raise DurationParseError("Unable to parse duration '{}' at '{}'".format(text, text[pos:]))
        number, unit = match.groups()
        if unit.lower() not in _DURATION_UNITS:
            raise DurationParseError("Unknown unit '{}' in duration '{}'".format(unit, text))
        seconds += float(number) * _DURATION_UNITS[unit.lower()]
        pos = match.end()
    if seconds <= 0:
        raise DurationParseError("Duration '{}' must be positive".format(text))
    # Event.wait refuses timeouts beyond TIMEOUT_MAX
    if not math.isfinite(seconds) or seconds > threading.TIMEOUT_MAX:
        raise DurationParseError("Duration '{}' is too long".format(text))
    return seconds


class ReadWriteLock():
    """Any number of readers or a single writer. Waiting writers hold off new readers."""

    def __init__(self):
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    def acquire_read(self):
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1

    def release_read(self):
        with self._cond:
            self._readers -= 1
            if self._readers == 0:
                self._cond.notify_all()

    def acquire_write(self):
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True

    def release_write(self):
        with self._cond:
            self._writer = False
            self._cond.notify_all()


class ConfigStore():
    """Holds the live Config for the lifetime of the daemon.

    Configs are immutable, so a snapshot returned by read() stays consistent after
    the lock is released; replacing swaps the whole Config at once. If an update
    fails while holding the write lock the store is poisoned and every later
    access raises StorePoisonedError.
    """

    def __init__(self, config):
        self._config = config
        self._lock = ReadWriteLock()
        self._poisoned = False

    def _check_poisoned(self):
        if self._poisoned:
            raise StorePoisonedError("Config store is poisoned by a failed update")

    @contextmanager
    def reading(self):
        self._lock.acquire_read()
        try:
            self._check_poisoned()
            yield self._config
        finally:
            self._lock.release_read()

    def read(self):
        with self.reading() as config:
            return config

    def update(self, func):
        """Install func(current_config) as the new config under the write lock."""
        self._lock.acquire_write()
        try:
            self._check_poisoned()
            try:
                self._config = func(self._config)
            except BaseException:
                self._poisoned = True
                log.critical("Config store poisoned while updating")
                raise
        finally:
            self._lock.release_write()

    def replace(self, config):
        self.update(lambda old: config)
