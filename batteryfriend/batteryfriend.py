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

import sys
import signal
import logging
import threading
from batteryfriend.battery import BatterySensor
from batteryfriend.batteryfriendconfig import VERSION, TERSE_DESCRIPTION, CONFIG_DIRNAME, CONFIG_FILENAME, \
    DEFAULT_BATTERY, POWER_SUPPLY_DIR
from batteryfriend.config import load, ConfigStore, ConfigError, StorePoisonedError
from batteryfriend.reloader import ReloadCoordinator
from batteryfriend.scheduler import PollScheduler

log = logging.getLogger(__name__)

# Handlers are attached here so that every module of the package is covered
package_log = logging.getLogger("batteryfriend")


def default_config_path():
    import os.path
    from gi.repository import GLib
    return os.path.join(GLib.get_user_config_dir(), CONFIG_DIRNAME, CONFIG_FILENAME)


def _parse_args(options=None):
    # Command-line arguments
    import argparse
    a_parser = argparse.ArgumentParser(prog="batteryfriend",
                                       description=TERSE_DESCRIPTION)
    a_parser.add_argument("-c", "--config", metavar="CONFIG_FILE", type=str,
                          help="configuration file to use (default: ~/.config/{}/{})".format(
                              CONFIG_DIRNAME, CONFIG_FILENAME))
    a_parser.add_argument("-b", "--battery", metavar="NAME", type=str, default=DEFAULT_BATTERY,
                          help="power supply under {} to watch (default: {})".format(
                              POWER_SUPPLY_DIR, DEFAULT_BATTERY))
    a_parser.add_argument("--disable-autoreload", action='store_true',
                          help="do not reload the configuration file when it changes")
    a_parser.add_argument("--version", action='version', version="%(prog)s v{}".format(VERSION))
    a_parser.add_argument("-v", "--verbose", action='store_true')
    a_parser.add_argument("--debug", action='store_true')

    # Parse the arguments
    if options is None:
        args = a_parser.parse_args()
    else:
        args = a_parser.parse_args(options)

    # Adjust log to match verbosity level given and attach an appropriate handler
    if args.debug or args.verbose:
        package_log.setLevel(logging.DEBUG if args.debug else logging.INFO)
        handler = logging.StreamHandler(sys.stdout)
        package_log.addHandler(handler)
    else:
        package_log.setLevel(logging.WARNING)
        error_handler = logging.StreamHandler(sys.stderr)
        package_log.addHandler(error_handler)

    log.debug("Recieved command-line arguments: {}".format(vars(args)))

    if args.config is None:
        args.config = default_config_path()
    return args


def entry_point(options=None):
    """Parse the command line and load the initial config. Exits when the config is unusable."""
    args = _parse_args(options)
    try:
        store = ConfigStore(load(args.config))
    except ConfigError as e:
        log.error(str(e))
        sys.exit(1)
    log.info("Config loaded from {}".format(args.config))
    return args, store


def _new_scheduler(args, store):
    import dbus
    from dbus.exceptions import DBusException
    from batteryfriend.notifier import Notifier
    try:
        session_bus = dbus.SessionBus()
    except DBusException as e:
        log.error("Unable to connect to the session bus: {}".format(e))
        sys.exit(1)
    return PollScheduler(store, BatterySensor(args.battery), Notifier(session_bus))


def run(scheduler):
    try:
        scheduler.run()
    except KeyboardInterrupt:
        log.info("Stopping")
    except StorePoisonedError as e:
        log.critical("Unable to read config: {}".format(e))
        sys.exit(1)


def poll(scheduler, on_fatal):
    """Run the scheduler until it fails, then hand the error to on_fatal."""
    try:
        scheduler.run()
    except StorePoisonedError as e:
        log.critical("Unable to read config: {}".format(e))
        on_fatal(e)
    except Exception as e:
        log.exception("Polling stopped unexpectedly")
        on_fatal(e)


def run_with_autoreload(config_path, store, scheduler):
    from gi.repository import GLib
    loop = GLib.MainLoop()
    failures = []

    def fatal(error):
        failures.append(error)
        loop.quit()
        return GLib.SOURCE_REMOVE

    def stop():
        log.info("Stopping")
        loop.quit()
        return GLib.SOURCE_REMOVE

    coordinator = ReloadCoordinator(config_path, store, on_reload=scheduler.wake, on_fatal=fatal)
    try:
        coordinator.start()
    except GLib.Error as e:
        log.error("Unable to start config autoreload: {}".format(e.message))
        sys.exit(1)

    for signum in (signal.SIGINT, signal.SIGTERM):
        GLib.unix_signal_add(GLib.PRIORITY_DEFAULT, signum, stop)
    threading.Thread(target=poll, name="poll-scheduler", daemon=True,
                     args=(scheduler, lambda e: GLib.idle_add(fatal, e))).start()
    loop.run()
    if failures:
        sys.exit(1)


def main(options=None):
    args, store = entry_point(options)
    scheduler = _new_scheduler(args, store)
    if args.disable_autoreload:
        run(scheduler)
    else:
        run_with_autoreload(args.config, store, scheduler)


if __name__ == "__main__":
    main()
