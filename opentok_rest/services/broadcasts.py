"""Live streaming broadcasts of sessions, to HLS and RTMP."""

import logging
from typing import Optional

from . import transport
from .validation import check_layout, check_resolution, require
from ..client import OpenTok
from ..domain import Broadcast, BroadcastList, BroadcastListOptions, \
    BroadcastOptions, Layout, to_dict

logger = logging.getLogger(__name__)


def start(client: OpenTok, session_id: str,
          options: BroadcastOptions) -> Broadcast:
    """
    Start broadcasting a session.

    Parameters
    ----------
    client : :class:`.OpenTok`
    session_id : str
    options : :class:`.BroadcastOptions`
        Must define at least one HLS or RTMP output.

    Returns
    -------
    :class:`.Broadcast`

    """
    require(session_id, 'Broadcast cannot be started without a session ID')
    if options.layout is not None:
        check_layout(options.layout)
    check_resolution(options.resolution)

    body = dict(sessionId=session_id, **to_dict(options))
    response = client.request('POST', client.project_path('broadcast'),
                              json=body)
    broadcast: Broadcast = transport.load(Broadcast, response)
    logger.debug('Started broadcast %s of session %s', broadcast.id,
                 session_id)
    return broadcast


def stop(client: OpenTok, broadcast_id: str) -> Broadcast:
    """Stop a broadcast."""
    require(broadcast_id, 'Broadcast cannot be stopped without a broadcast'
                          ' ID')
    response = client.request(
        'POST', client.project_path('broadcast', broadcast_id, 'stop')
    )
    return transport.load(Broadcast, response)


def list_broadcasts(client: OpenTok,
                    options: Optional[BroadcastListOptions] = None) \
        -> BroadcastList:
    """List broadcasts in progress, newest first."""
    if options is None:
        options = BroadcastListOptions()
    params = {}
    if options.offset:
        params['offset'] = options.offset
    if options.count:
        params['count'] = options.count
    if options.session_id:
        params['sessionId'] = options.session_id
    response = client.request('GET', client.project_path('broadcast'),
                              params=params)
    return transport.load(BroadcastList, response)


def get(client: OpenTok, broadcast_id: str) -> Broadcast:
    """Get a broadcast."""
    require(broadcast_id, 'Cannot get broadcast information without a'
                          ' broadcast ID')
    response = client.request('GET',
                              client.project_path('broadcast', broadcast_id))
    return transport.load(Broadcast, response)


def set_layout(client: OpenTok, broadcast_id: str,
               layout: Layout) -> Broadcast:
    """Change the layout of a broadcast while it is live."""
    require(broadcast_id, 'Cannot change the layout of a broadcast without'
                          ' a broadcast ID')
    check_layout(layout)
    response = client.request(
        'PUT', client.project_path('broadcast', broadcast_id, 'layout'),
        json=to_dict(layout)
    )
    return transport.load(Broadcast, response)
