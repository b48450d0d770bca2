"""
Connection tokens that clients present when joining a session.

A connection token binds a participant to a session, with a role and an
expiration. It is not a JWT: the token fields are URL-encoded, signed with
HMAC-SHA1 under the project secret, and the result is base64-encoded behind
the ``T1==`` sentinel. The signed query string is reproduced exactly by the
API to check the signature, so its encoding must not change.

Before signing, the session ID is decoded to check that it was created with
the same API key; a project can only grant access to its own sessions.
"""

import hashlib
import hmac
import logging
import random
from base64 import b64decode, b64encode
from datetime import datetime
from typing import Optional
from urllib.parse import urlencode

from .. import config, util
from ..domain import AccessTokenFields, Credential, Role, SessionIdentity, \
    TokenOptions
from ..exceptions import InvalidArgument, SessionIDDecodeError, \
    SigningFailure, Unauthorized

logger = logging.getLogger(__name__)

TOKEN_SENTINEL = 'T1=='
"""Prefix of every connection token."""

SESSION_ID_SENTINEL_LENGTH = 2
"""Length of the prefix of a session ID, which is not part of the payload."""


def decode_session_id(session_id: str) -> SessionIdentity:
    """
    Decode a session ID into the metadata that it contains.

    Parameters
    ----------
    session_id : str
        An opaque session ID, as returned when the session was created.

    Returns
    -------
    :class:`.SessionIdentity`

    Raises
    ------
    :class:`SessionIDDecodeError`
        Raised if the ID is not valid base64, has fewer than four ``~``
        delimited fields, or its creation time is not a valid timestamp.

    """
    payload = session_id[SESSION_ID_SENTINEL_LENGTH:]
    payload = payload.replace('-', '+').replace('_', '/')
    payload += '=' * (-len(payload) % 4)
    try:
        decoded = b64decode(payload, validate=True).decode('utf-8')
    except ValueError as e:     # Includes binascii and unicode errors.
        raise SessionIDDecodeError('Session ID is not valid base64') from e

    # [0] is a version marker; only the next three fields are interpreted.
    fields = decoded.split('~')
    if len(fields) < 4:
        raise SessionIDDecodeError(f'Expected at least 4 fields in session'
                                   f' ID, found {len(fields)}')
    try:
        create_time = util.from_epoch_millis(int(fields[3]))
    except (OverflowError, OSError, ValueError) as e:
        raise SessionIDDecodeError('Session creation time is malformed') \
            from e
    return SessionIdentity(
        api_key=fields[1],
        location=fields[2],
        create_time=create_time
    )


def encode(fields: AccessTokenFields, credential: Credential) -> str:
    """
    Sign the token fields and pack them into a connection token.

    The fields must already be validated (see :func:`generate`).

    Parameters
    ----------
    fields : :class:`.AccessTokenFields`
    credential : :class:`.Credential`

    Returns
    -------
    str
        The connection token.

    Raises
    ------
    :class:`SigningFailure`
        Raised if the fields cannot be signed.

    """
    data_string = urlencode(sorted(fields._asdict().items()))
    try:
        signature = hmac.new(credential.api_secret.encode('utf-8'),
                             data_string.encode('utf-8'),
                             hashlib.sha1).hexdigest()
    except (TypeError, ValueError) as e:
        raise SigningFailure(f'Could not sign connection token: {e}') from e
    decoded = f'partner_id={credential.api_key}&sig={signature}:{data_string}'
    return TOKEN_SENTINEL + b64encode(decoded.encode('utf-8')).decode('ascii')


def generate(credential: Credential, session_id: str,
             options: Optional[TokenOptions] = None,
             now: Optional[int] = None,
             rng: Optional[random.Random] = None) -> str:
    """
    Generate a connection token for a participant of a session.

    Parameters
    ----------
    credential : :class:`.Credential`
        Must be the credential of the project that created the session.
    session_id : str
    options : :class:`.TokenOptions`
        Role, connection data, expiration and initial layout classes.
    now : int
        Creation time, in seconds since epoch. Defaults to the current time.
    rng : :class:`random.Random`
        Source of the nonce. A new generator is used if not given.

    Returns
    -------
    str

    Raises
    ------
    :class:`InvalidArgument`
        Raised if the session ID is empty, or an option is invalid.
    :class:`Unauthorized`
        Raised if the session does not belong to the credential's API key.

    """
    if not session_id:
        raise InvalidArgument('Token cannot be generated without a session ID')

    try:
        identity = decode_session_id(session_id)
    except SessionIDDecodeError as e:
        logger.debug('Could not decode session ID %s: %s', session_id, e)
        identity = None
    if identity is None or identity.api_key != credential.api_key:
        raise Unauthorized('Token cannot be generated unless the session'
                           ' belongs to the API key')

    if options is None:
        options = TokenOptions()
    if rng is None:
        rng = random.Random()
    create_time = util.now() if now is None else now
    expire_time = create_time + config.TOKEN_LIFETIME
    if isinstance(options.expire_time, datetime):
        expire_time = util.epoch(options.expire_time)
    elif options.expire_time is not None and options.expire_time > 0:
        expire_time = options.expire_time
    role = options.role or Role.PUBLISHER
    if isinstance(options.initial_layout_class_list, str):
        raise InvalidArgument('Initial layout class list must be a list of'
                              ' class names, not a string')
    layout_classes = ','.join(options.initial_layout_class_list)

    if role not in Role.ALL:
        raise InvalidArgument(f'Invalid role for token generation: {role}')
    if expire_time < create_time:
        raise InvalidArgument(f'Invalid expire time for token generation,'
                              f' time cannot be in the past: {expire_time}'
                              f' < {create_time}')
    if len(options.data) > config.MAX_DATA_LENGTH:
        raise InvalidArgument('Invalid data for token generation, must be a'
                              ' string with maximum length 1024')
    if len(layout_classes) > config.MAX_DATA_LENGTH:
        raise InvalidArgument('Invalid initial layout class list for token'
                              ' generation, must have concatenated length of'
                              ' at most 1024')

    fields = AccessTokenFields(
        session_id=session_id,
        create_time=str(create_time),
        expire_time=str(expire_time),
        nonce=repr(rng.random()),
        role=role,
        connection_data=options.data,
        initial_layout_class_list=layout_classes
    )
    return encode(fields, credential)
