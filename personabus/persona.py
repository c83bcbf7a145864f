# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Bus module for verifying Persona assertions against the remote verifier.

This module only handles the communication with the verifier service.  It
does no caching and issues no session ids, so it can be used as one part
of a larger authentication system.

"""

import logging

from personabus import netutils
from personabus.busmod import BusModule
from personabus.utils import encode_form, decode_json_object, FORM_CONTENT_TYPE
from personabus.errors import (ValidationError,
                               EncodingError,
                               ConnectionError,
                               InsecureConnectionError,
                               ProtocolError,
                               VerificationFailure,
                               AudienceMismatchError)


logger = logging.getLogger(__name__)

PERSONA_VERIFIER_URL = "https://verifier.login.persona.org/verify"

DEFAULT_VERIFY_ADDRESS = "persona.verify"

DEFAULT_AUDIENCE = "http://localhost:8080"

DEFAULT_TIMEOUT = 30


class PersonaVerifier(BusModule):
    """Bus module for remote verification of Persona identity assertions.

    Send it a message like {"assertion": "<assertion>"} and it will POST
    the assertion, along with the configured audience, to the Persona
    verifier service.  Valid assertions get a reply like:

        {"status": "ok", "email": "...", "audience": "...", "expires": ...}

    and anything else gets {"status": "error", "message": "<reason>"}.

    Recognised config keys are "address", "audience", "verifier_url",
    "verify_host" and "timeout".  A timeout of None waits forever.
    """

    DEFAULT_ADDRESS = DEFAULT_VERIFY_ADDRESS

    def __init__(self, bus, config=None, session=None):
        super(PersonaVerifier, self).__init__(bus, config)
        self.audience = self.get_optional_config("audience", DEFAULT_AUDIENCE)
        self.verifier_url = self.get_optional_config("verifier_url",
                                                     PERSONA_VERIFIER_URL)
        self.verify_host = self.get_optional_config("verify_host", True)
        # An explicit null timeout means wait forever.
        if "timeout" in self.config:
            self.timeout = self.config["timeout"]
        else:
            self.timeout = DEFAULT_TIMEOUT
        self.session = session

    def start(self):
        super(PersonaVerifier, self).start()
        logger.info("Verifying Persona assertions on %r for audience %r",
                    self.address, self.audience)

    def handle(self, message):
        self.verify(message)

    def verify(self, message):
        """Verify the assertion in the given message and reply with the result.

        Every failure, expected or not, is reported to the sender as an error
        reply; nothing escapes this method and nothing is retried.
        """
        assertion = self.get_mandatory_string("assertion", message)
        if assertion is None:
            return
        try:
            data = self.verify_assertion(assertion)
        except ValidationError as e:
            self.send_error(message, str(e))
        except EncodingError as e:
            self.send_error(message, "Assertion encoding error: %s" % e, e)
        except InsecureConnectionError as e:
            logger.warning("Refusing to verify assertion: %s", e)
            self.send_error(message, str(e))
        except ConnectionError as e:
            self.send_error(message, "Error communicating with the Persona "
                                     "server: %s" % e, e)
        except ProtocolError as e:
            self.send_error(message, "Received an invalid response from the "
                                     "Persona server", e)
        except VerificationFailure as e:
            logger.debug("Assertion rejected: %s", e)
            self.send_error(message, str(e))
        except Exception as e:
            logger.exception("Unexpected error verifying assertion")
            self.send_error(message, "Error communicating with the Persona "
                                     "server: %s" % e)
        else:
            self.send_ok(message, data)

    def verify_assertion(self, assertion):
        """Verify the given assertion with the remote verifier service.

        If the assertion is valid for our audience, the dict of data
        returned by the verifier is returned with its "status" field
        removed.  Otherwise an error is raised.
        """
        if not isinstance(assertion, str):
            raise ValidationError("assertion must be specified")
        body = encode_form([("assertion", assertion),
                            ("audience", self.audience)])
        # Never send anything unless the server's identity can be checked.
        netutils.check_secure(self.verifier_url, self.verify_host)
        response = netutils.post(self.verifier_url, data=body,
                                 headers={"Content-Type": FORM_CONTENT_TYPE},
                                 timeout=self.timeout, session=self.session)
        try:
            data = decode_json_object(response.text)
        except ValueError:
            raise ProtocolError("server returned invalid response")
        status = data.pop("status", None)
        if status != "okay":
            reason = data.get("reason") or VerificationFailure.description
            raise VerificationFailure(reason)
        if data.get("audience") != self.audience:
            raise AudienceMismatchError("Audience mismatch: got %r, wanted %r"
                                        % (data.get("audience"),
                                           self.audience))
        return data
