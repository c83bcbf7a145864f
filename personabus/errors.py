# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Error classes for PyPersonaBus.

"""


class Error(Exception):
    """Base error class for all PyPersonaBus exceptions."""
    description = 'Unknown error.'


class ValidationError(Error):
    """Error raised when an incoming message is missing required data."""
    description = 'Invalid request.'


class EncodingError(Error):
    """Error raised when request data cannot be form-encoded."""
    description = 'Assertion encoding error.'


class ConnectionError(Error):
    """Error raised when PyPersonaBus fails to talk to a remote server."""
    description = 'Failed to connect to remote server.'


class InsecureConnectionError(ConnectionError):
    """Error raised when TLS host verification has been switched off."""
    description = 'Host verification is disabled.'


class ProtocolError(Error):
    """Error raised when the remote server sends an unparseable response."""
    description = 'Invalid response from remote server.'


class VerificationFailure(Error):
    """Error raised when the remote verifier rejects an assertion."""
    description = 'Assertion is not valid.'


class AudienceMismatchError(VerificationFailure):
    """Error raised when the verified audience does not match ours."""
    description = 'Audience does not match server.'


class ConfigurationError(Error):
    """Error raised when a mandatory configuration value is missing."""
    description = 'Invalid configuration.'


class NoHandlerError(Error):
    """Error raised when a message is sent to an address nobody listens on."""
    description = 'No handler registered for address.'


class ReplyTimeoutError(Error):
    """Error raised when no reply arrives before the requested timeout."""
    description = 'Timed out waiting for reply.'
