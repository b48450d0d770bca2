"""Client configuration, read from the environment."""

import os

API_HOST = os.environ.get('OPENTOK_API_HOST', 'https://api.opentok.com')
"""Base URL of the OpenTok REST API."""

TIMEOUT = float(os.environ.get('OPENTOK_TIMEOUT', '30'))
"""Timeout for a single HTTP round trip, in seconds."""

DEBUG = os.environ.get('OPENTOK_DEBUG', '0') == '1'
"""If set, request and response traces are logged at DEBUG level."""

JWT_LIFETIME = 300
"""
Lifetime of the service JWT, in seconds.

The API rejects any token whose ``exp`` is more than five minutes after its
``iat``.
"""

TOKEN_LIFETIME = 24 * 60 * 60
"""Default lifetime of a connection token, in seconds."""

MAX_DATA_LENGTH = 1024
"""Maximum length of connection data and of the joined layout class list."""
