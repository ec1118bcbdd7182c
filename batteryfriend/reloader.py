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
import time
import logging
from batteryfriend.batteryfriendconfig import RELOAD_ATTEMPTS, RELOAD_BACKOFF
from batteryfriend.config import load, ConfigError, StorePoisonedError

log = logging.getLogger(__name__)


class ReloadCoordinator():
    """Reloads the config file into a ConfigStore whenever the file's data changes.

    Editors often truncate a file before writing it, so a reload that fails to read
    or parse the file is retried a few times before it is given up. The previous
    config then stays active.
    """

    def __init__(self, path, store, on_reload=None, on_fatal=None,
                 attempts=RELOAD_ATTEMPTS, backoff=RELOAD_BACKOFF):
        self.path = os.path.abspath(path)
        self.attempts = attempts
        self.backoff = backoff
        self._store = store
        self._on_reload = on_reload
        self._on_fatal = on_fatal
        self._monitor = None

    def start(self):
        # Raises GLib.Error when the directory cannot be watched
        from gi.repository import Gio
        directory = Gio.File.new_for_path(os.path.dirname(self.path))
        self._monitor = directory.monitor_directory(Gio.FileMonitorFlags.NONE, None)
        self._monitor.connect("changed", self._handle_monitor_event)
        log.info("Config autoreload started for {}".format(self.path))

    def _handle_monitor_event(self, monitor, changed_file, other_file, event_type):
        from gi.repository import Gio
        if changed_file.get_path() is None:
            return
        self.on_change(changed_file.get_path(), event_type == Gio.FileMonitorEvent.CHANGED)

    def on_change(self, path, data_changed):
        """Handle a change in the watched directory. Returns True if the config was reloaded."""
        if not data_changed or os.path.abspath(path) != self.path:
            return False
        try:
            return self.reload()
        except StorePoisonedError as e:
            log.critical("Unable to reload config: {}".format(e))
            if self._on_fatal is None:
                raise
            self._on_fatal(e)
            return False

    def reload(self):
        error = None
        for attempt in range(1, self.attempts + 1):
            try:
                config = load(self.path)
            except ConfigError as e:
                error = e
                log.debug("Reload attempt {} of {} failed: {}".format(attempt, self.attempts, e))
                if attempt < self.attempts:
                    time.sleep(self.backoff)
                continue
            self._store.replace(config)
            log.info("Config reloaded")
            if self._on_reload is not None:
                self._on_reload()
            return True
        log.warning("Unable to reload config after {} attempts, keeping the previous one: {}".format(
            self.attempts, error))
        return False
