"""
Client for the OpenTok video conferencing REST API.

:class:`.OpenTok` holds the project credential and HTTP configuration.
Connection tokens are generated with :meth:`.OpenTok.generate_token`; the
REST resources (sessions, archives, broadcasts, streams, signals, SIP,
moderation and projects) are wrapped by the modules in
:mod:`opentok_rest.services`.
"""

from .client import OpenTok
from .version import SDK_VERSION as __version__
