# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Base class for modules that live on the event bus.

"""

import logging

from personabus.config import freeze_config
from personabus.errors import ConfigurationError


logger = logging.getLogger(__name__)


class BusModule(object):
    """Abstract base class for event bus modules.

    A bus module listens on a single address, taken from the "address"
    config key or DEFAULT_ADDRESS, and replies to each message using the
    standard envelope: a dict with "status" set to "ok" or "error", plus
    a "message" string for errors.
    """

    DEFAULT_ADDRESS = None

    def __init__(self, bus, config=None):
        self.bus = bus
        self.config = freeze_config(config)
        self.address = self.get_optional_config("address",
                                                self.DEFAULT_ADDRESS)
        self._started = False

    def start(self):
        """Register this module's handler on the bus."""
        if self.address is None:
            raise ConfigurationError("%s has no address to listen on"
                                     % (type(self).__name__,))
        if not self._started:
            self.bus.register_handler(self.address, self.handle)
            self._started = True

    def stop(self):
        """Unregister this module's handler from the bus."""
        if self._started:
            self.bus.unregister_handler(self.address, self.handle)
            self._started = False

    def handle(self, message):
        """Process a single message received on this module's address."""
        raise NotImplementedError

    def get_optional_config(self, name, default=None):
        """Get a config value, falling back to the default when null."""
        value = self.config.get(name)
        if value is None:
            return default
        return value

    def get_mandatory_config(self, name):
        try:
            return self.config[name]
        except KeyError:
            raise ConfigurationError("%s must be specified in config" % name)

    def get_mandatory_string(self, name, message):
        """Get a string field from the message body.

        If the field is missing or not a string, an error is sent back to
        the caller and None is returned.
        """
        body = message.body
        value = body.get(name) if isinstance(body, dict) else None
        if not isinstance(value, str):
            self.send_error(message, "%s must be specified" % name)
            return None
        return value

    def send_ok(self, message, extra=None):
        self.send_status("ok", message, extra)

    def send_error(self, message, text, exc=None):
        if exc is not None:
            logger.error("%s: %s", text, exc)
        self.send_status("error", message, {"message": text})

    def send_status(self, status, message, extra=None):
        reply = {}
        if extra:
            reply.update(extra)
        reply["status"] = status
        message.reply(reply)
