"""SDK name and version, as reported to the API in the User-Agent header."""

import platform

SDK_NAME = 'opentok-rest'
"""Name of this client library."""

SDK_VERSION = '2.3.0'
"""Semantic version of this client library."""


def user_agent() -> str:
    """Get the User-Agent string sent with every API request."""
    return (f'{SDK_NAME}/{SDK_VERSION} '
            f'python/{platform.python_version()} '
            f'({platform.machine()}-{platform.system().lower()})')
