# This Source Code Form is subject to the terms of the Mozilla Public
# License, v. 2.0. If a copy of the MPL was not distributed with this file,
# You can obtain one at http://mozilla.org/MPL/2.0/.
"""

Event bus modules for verifying Mozilla Persona identity assertions.

"""

__ver_major__ = 0
__ver_minor__ = 1
__ver_patch__ = 0
__ver_sub__ = ""
__ver_tuple__ = (__ver_major__, __ver_minor__, __ver_patch__, __ver_sub__)
__version__ = "%d.%d.%d%s" % __ver_tuple__


from personabus.errors import (Error,  # NOQA
                               ValidationError,  # NOQA
                               EncodingError,  # NOQA
                               ConnectionError,  # NOQA
                               ProtocolError,  # NOQA
                               VerificationFailure)  # NOQA

from personabus.eventbus import EventBus, Message  # NOQA
from personabus.config import load_config, freeze_config  # NOQA
from personabus.persona import PersonaVerifier  # NOQA
from personabus.ping import PingModule  # NOQA


_DEFAULT_VERIFIER = None


def verify(assertion):
    """Verify the given Persona assertion outside of any event bus.

    This posts the assertion to the Persona verifier service using the
    default configuration, returning the dict of verified data or raising
    an error.  Build your own PersonaVerifier for any other audience.
    """
    global _DEFAULT_VERIFIER
    if _DEFAULT_VERIFIER is None:
        _DEFAULT_VERIFIER = PersonaVerifier(None)
    return _DEFAULT_VERIFIER.verify_assertion(assertion)
