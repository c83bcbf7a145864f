# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Loading of module configuration.

Configuration is a flat JSON object, read once at startup and never
modified afterwards.  Modules look up the keys they understand and
ignore the rest.

"""

import json
import types
from collections.abc import Mapping

from personabus.errors import ConfigurationError


def freeze_config(config=None):
    """Return a read-only copy of the given configuration dict."""
    if config is None:
        config = {}
    if not isinstance(config, Mapping):
        raise ConfigurationError("Configuration must be a JSON object")
    return types.MappingProxyType(dict(config))


def load_config(path):
    """Load configuration from the JSON file at the given path."""
    try:
        with open(path, "rb") as f:
            config = json.loads(f.read().decode("utf8"))
    except (IOError, ValueError) as e:
        raise ConfigurationError("Failed to load config %r: %s" % (path, e))
    return freeze_config(config)
