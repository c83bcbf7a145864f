# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Ping/pong responder for checking that the bus is alive.

"""

import logging

from personabus.busmod import BusModule


logger = logging.getLogger(__name__)

DEFAULT_PING_ADDRESS = "ping-address"

PONG = "pong!"


class PingModule(BusModule):
    """Replies "pong!" to every message it receives."""

    DEFAULT_ADDRESS = DEFAULT_PING_ADDRESS

    def start(self):
        super(PingModule, self).start()
        logger.info("PingModule started")

    def handle(self, message):
        message.reply(PONG)
        logger.info("Sent back pong")
