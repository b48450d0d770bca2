"""
Issuer scopes of the service JWT.

The API distinguishes two kinds of server-to-server calls: those acting on a
single project (sessions, archives, broadcasts, and so on), and those
managing the projects of an account. The ``ist`` claim of the service JWT
tells the API which of the two a token was issued for. Rather than refer to
scopes by writing new str objects, these constants should be imported and
used.
"""

PROJECT = 'project'
"""For REST calls on the resources of a single project."""

ACCOUNT = 'account'
"""For account management calls (creating, listing, suspending projects)."""

ALL = (PROJECT, ACCOUNT)
