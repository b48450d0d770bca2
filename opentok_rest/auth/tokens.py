"""Functions for working with the service JWT sent on every REST call."""

import logging
import uuid
from typing import Optional

import jwt

from . import scopes
from .. import config, util
from ..domain import Credential
from ..exceptions import InvalidArgument, SigningFailure

logger = logging.getLogger(__name__)

ALGORITHM = 'HS256'


def issue(credential: Credential, scope: str,
          now: Optional[int] = None) -> str:
    """
    Issue a signed, short-lived service JWT.

    A fresh token is issued for every request; tokens are never cached.

    Parameters
    ----------
    credential : :class:`.Credential`
        The token is issued by ``api_key`` and signed with ``api_secret``.
    scope : str
        One of :data:`.scopes.ALL`.
    now : int
        Issue time, in seconds since epoch. Defaults to the current time.

    Returns
    -------
    str
        Compact JWT serialization.

    Raises
    ------
    :class:`InvalidArgument`
        Raised if ``scope`` is not a known issuer scope.
    :class:`SigningFailure`
        Raised if the token cannot be signed.

    """
    if scope not in scopes.ALL:
        raise InvalidArgument(f'Invalid issuer scope: {scope}')
    issued_at = util.now() if now is None else now
    claims = {
        'iss': credential.api_key,
        'iat': issued_at,
        'exp': issued_at + config.JWT_LIFETIME,
        'jti': str(uuid.uuid4()),
        'ist': scope,
    }
    try:
        token: str = jwt.encode(claims, credential.api_secret,
                                algorithm=ALGORITHM)
    except jwt.exceptions.PyJWTError as e:
        raise SigningFailure(f'Could not sign service token: {e}') from e
    logger.debug('Issued %s token %s for %s', scope, claims['jti'],
                 credential.api_key)
    return token


def decode(token: str, secret: str, verify_exp: bool = True) -> dict:
    """
    Verify a service JWT and get its claims.

    Raises
    ------
    :class:`SigningFailure`
        Raised if the token is malformed, expired, or its signature does not
        match ``secret``.

    """
    try:
        claims: dict = jwt.decode(token, secret, algorithms=[ALGORITHM],
                                  options={'verify_exp': verify_exp})
    except jwt.exceptions.PyJWTError as e:
        raise SigningFailure('Not a valid service token') from e
    return claims
