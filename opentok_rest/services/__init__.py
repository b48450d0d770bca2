"""
Request builders for the resources of the OpenTok REST API.

Each module wraps one family of endpoints. Functions take an
:class:`opentok_rest.OpenTok` client as their first argument, validate their
input, send a request authenticated with a fresh service JWT, and map the
response onto :mod:`opentok_rest.domain` types.
"""
