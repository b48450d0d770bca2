"""
Token issuance for the OpenTok REST API.

Two independent mechanisms live here:

- :mod:`.tokens` issues the short-lived service JWT that authenticates every
  server-to-server REST call (the ``X-OPENTOK-AUTH`` header).
- :mod:`.access` generates the connection tokens that client applications
  present when they join a session.

Both are pure functions of a :class:`.Credential`, the clock and a random
source, and are safe to call concurrently.
"""

from . import access, scopes, tokens

AUTH_HEADER = 'X-OPENTOK-AUTH'
"""Header that carries the service JWT."""
