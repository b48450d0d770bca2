"""Connecting SIP endpoints to sessions, and sending DTMF tones."""

import logging
import re

from . import transport
from .validation import require
from ..client import OpenTok
from ..domain import DialOptions, SIPCall, TokenOptions, to_dict
from ..exceptions import InvalidArgument

logger = logging.getLogger(__name__)

DTMF_DIGITS = re.compile(r'^[\d#*p]+$')
"""Digits 0-9, ``*``, ``#``, and ``p`` for a 500 ms pause."""


def dial(client: OpenTok, session_id: str, options: DialOptions) -> SIPCall:
    """
    Connect a SIP endpoint to a session.

    The audio of the SIP call joins the session as an audio-only stream. The
    SIP participant is given a publisher token carrying
    :attr:`.DialOptions.token_data` as its connection data.

    Raises
    ------
    :class:`InvalidArgument`
        Raised if the session ID or the SIP URI is empty.
    :class:`Unauthorized`
        Raised if the session does not belong to this project.

    """
    require(session_id, 'SIP call cannot be initiated without a session ID')
    require(options.sip.uri, 'SIP call cannot be initiated without a SIP URI')
    token = client.generate_token(session_id,
                                  TokenOptions(data=options.token_data))
    body = {
        'sessionId': session_id,
        'token': token,
        'sip': to_dict(options.sip),
    }
    response = client.request('POST', client.project_path('dial'), json=body)
    call: SIPCall = transport.load(SIPCall, response)
    logger.debug('Dialed %s into session %s as connection %s',
                 options.sip.uri, session_id, call.connection_id)
    return call


def _check_digits(digits: str) -> None:
    require(digits, 'The DTMF digits cannot be empty')
    if not DTMF_DIGITS.match(digits):
        raise InvalidArgument(f'Invalid DTMF digits: {digits}')


def send_dtmf(client: OpenTok, session_id: str, digits: str) -> None:
    """Play DTMF tones to every client of a session."""
    require(session_id, 'DTMF digits cannot be sent without a session ID')
    _check_digits(digits)
    client.request('POST',
                   client.project_path('session', session_id, 'play-dtmf'),
                   json={'digits': digits})


def send_dtmf_to_connection(client: OpenTok, session_id: str,
                            connection_id: str, digits: str) -> None:
    """Play DTMF tones to one client of a session."""
    require(session_id, 'DTMF digits cannot be sent without a session ID')
    require(connection_id, 'DTMF digits cannot be sent without a connection'
                           ' ID')
    _check_digits(digits)
    client.request(
        'POST',
        client.project_path('session', session_id, 'connection',
                            connection_id, 'play-dtmf'),
        json={'digits': digits}
    )
