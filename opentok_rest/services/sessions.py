"""Creating sessions, and generating tokens for them."""

import logging
from typing import Optional

from . import transport
from ..client import OpenTok
from ..domain import Session, SessionOptions, TokenOptions, from_dict
from ..exceptions import RequestFailed

logger = logging.getLogger(__name__)

SESSION_CREATE_URL = '/session/create'


def create(client: OpenTok, options: Optional[SessionOptions] = None) \
        -> Session:
    """
    Create a new session.

    Parameters
    ----------
    client : :class:`.OpenTok`
    options : :class:`.SessionOptions`
        Archive mode, location hint and media mode. Any option left as
        ``None`` takes the API's default.

    Returns
    -------
    :class:`.Session`

    Raises
    ------
    :class:`RequestFailed`
        Raised if the request fails, or the API returns no session.

    """
    if options is None:
        options = SessionOptions()
    params = {}
    if options.archive_mode:
        params['archiveMode'] = options.archive_mode
    if options.location:
        params['location'] = options.location
    if options.media_mode:
        params['p2p.preference'] = options.media_mode

    response = client.request('POST', SESSION_CREATE_URL, data=params)
    sessions = transport.decode_json(response)
    if not isinstance(sessions, list) or not sessions:
        raise RequestFailed('OpenTok did not return a session')
    try:
        session: Session = from_dict(Session, sessions[0])
    except TypeError as e:
        raise RequestFailed(f'Unexpected Session response: {e}') from e
    logger.debug('Created session %s', session.session_id)
    return session


def generate_token(client: OpenTok, session: Session,
                   options: Optional[TokenOptions] = None) -> str:
    """Generate a connection token for a participant of ``session``."""
    return client.generate_token(session.session_id, options)
