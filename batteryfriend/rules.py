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
from batteryfriend.battery import BatteryStatus, StatusParseError

log = logging.getLogger(__name__)


def evaluate(rules, percentage, status):
    """Return the (name, rule) pairs of `rules` that match a battery reading.

    A rule matches when its status equals `status` and `from <= percentage <= to`.
    Rules with an unknown status or with `from` greater than `to` are skipped with
    a warning; the remaining rules are still evaluated.
    """
    matches = []
    for name, rule in rules.items():
        try:
            rule_status = BatteryStatus.parse(rule.status)
        except StatusParseError as e:
            log.warning("Wrong status '{}' in rule '{}': {}".format(rule.status, name, e))
            continue
        if rule_status != status:
            continue
        if rule.from_ > rule.to:
            log.warning("'from' ({}) cannot be greater than 'to' ({}) in rule '{}'".format(
                rule.from_, rule.to, name))
            continue
        if rule.from_ <= percentage <= rule.to:
            matches.append((name, rule))
    log.debug("Rules matching {}% {}: {}".format(percentage, status.value, [name for name, _ in matches]))
    return matches
