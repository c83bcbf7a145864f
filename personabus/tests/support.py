# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.

import json
import time
import unittest  # NOQA

from mock import Mock

from personabus.eventbus import Message


# An opaque stand-in for a bundled Persona assertion.  The remote verifier
# is always mocked out, so its contents don't matter.
DUMMY_ASSERTION = (
    "eyJhbGciOiJSUzI1NiJ9.eyJpc3MiOiJsb2dpbi5wZXJzb25hLm9yZyJ9.c2ln"
    "~eyJhbGciOiJEUzEyOCJ9.eyJhdWQiOiJodHRwOi8vbG9jYWxob3N0OjgwODAifQ.c2ln"
)

TEST_AUDIENCE = "http://localhost:8080"


def make_response(data=None, text=None, status_code=200):
    """Build a fake requests.Response with the given JSON data or text."""
    response = Mock()
    if text is None:
        text = json.dumps(data)
    response.text = text
    response.status_code = status_code
    return response


def okay_response(email="test@example.com", audience=TEST_AUDIENCE,
                  issuer="login.persona.org", expires=None):
    """Build a fake response as sent by the verifier for a valid assertion."""
    if expires is None:
        expires = int((time.time() + 60) * 1000)
    return make_response({"status": "okay", "email": email,
                          "audience": audience, "expires": expires,
                          "issuer": issuer})


def failure_response(reason="assertion has expired"):
    """Build a fake response as sent by the verifier for a bad assertion."""
    return make_response({"status": "failure", "reason": reason})


class ReplyCollector(object):
    """Callable that records every reply it is given."""

    def __init__(self):
        self.replies = []

    def __call__(self, body):
        self.replies.append(body)

    def make_message(self, body, address="test.address"):
        return Message(address, body, self)
