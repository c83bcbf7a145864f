# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Utility functions for PyPersonaBus.

"""

import json
from urllib.parse import quote_plus

from personabus.errors import EncodingError


FORM_CONTENT_TYPE = "application/x-www-form-urlencoded"


def encode_form(fields):
    """Encode a sequence of (name, value) pairs as a form-urlencoded string.

    Values are encoded as UTF-8 before quoting, which is what the Persona
    verifier expects.  Field order is preserved.  If a value can't be
    encoded then EncodingError will be raised.
    """
    if isinstance(fields, dict):
        fields = fields.items()
    parts = []
    for name, value in fields:
        try:
            encoded = quote_plus(value.encode("utf8"))
        except (AttributeError, UnicodeError) as e:
            raise EncodingError("Failed to encode %r: %s" % (name, e))
        parts.append("%s=%s" % (quote_plus(name), encoded))
    return "&".join(parts)


def decode_json_object(value):
    """Decode a JSON object from a response body.

    The body may be given as text or as UTF-8 bytes.  If it does not
    contain valid JSON, or the JSON is not an object, then ValueError is
    raised.
    """
    if isinstance(value, bytes):
        value = value.decode("utf8")
    obj = json.loads(value)
    if not isinstance(obj, dict):
        raise ValueError("JSON did not contain an object")
    return obj
