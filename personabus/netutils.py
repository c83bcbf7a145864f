# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Network-related utility functions for PyPersonaBus.

"""

import socket
import logging
from urllib.parse import urlsplit

import requests
from requests.exceptions import RequestException

from personabus.errors import ConnectionError, InsecureConnectionError


logger = logging.getLogger(__name__)


def check_secure(url, verify=True):
    """Refuse to talk to the given URL unless TLS is fully verified.

    Raises InsecureConnectionError if the URL is not https or if host
    verification has been turned off.
    """
    parts = urlsplit(url)
    hostname = parts.hostname
    if parts.scheme != "https":
        raise InsecureConnectionError("Refusing non-https URL for %s"
                                      % (hostname,))
    if not verify:
        raise InsecureConnectionError("Host verification turned off for %s"
                                      % (hostname,))
    return hostname


def post(url, data=None, headers=None, timeout=None, session=None):
    """Fetch the specified URL with a POST request."""
    return request("POST", url, data=data, headers=headers,
                   timeout=timeout, session=session)


def request(method, url, session=None, **kwds):
    """Make a verified HTTP request to the given URL."""
    if session is None:
        session = requests
    logger.debug("%s %s", method, url)
    try:
        return session.request(method, url, verify=True, **kwds)
    except (RequestException, socket.error) as e:
        msg = "Failed to %s %s. Reason: %s" % (method, url, str(e))
        raise ConnectionError(msg)
