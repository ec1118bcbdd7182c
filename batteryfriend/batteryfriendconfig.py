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

VERSION = 0.3
APP_NAME = "battery-friend"
TERSE_DESCRIPTION = "Daemon for notifying about battery levels using configurable rules."
DESCRIPTION = "A small user daemon for GNU/Linux that checks battery levels against " \
              "hot-reloadable threshold rules and notifies users"

CONFIG_DIRNAME = "battery-friend"
CONFIG_FILENAME = "config.toml"

DEFAULT_POLL_INTERVAL = "2m"
FALLBACK_POLL_SECONDS = 2 * 60
DEFAULT_STATUS = "Discharging"
PERCENT_TOKEN = "{percent}"

# Editors may truncate and then write, so a reload is retried a few times
RELOAD_ATTEMPTS = 10
RELOAD_BACKOFF = 0.01

POWER_SUPPLY_DIR = "/sys/class/power_supply"
DEFAULT_BATTERY = "BAT0"
