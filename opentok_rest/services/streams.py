"""Streams published in a session, and their layout classes."""

from typing import List

from . import transport
from .validation import require
from ..client import OpenTok
from ..domain import Stream, StreamClass, StreamList, to_dict


def list_streams(client: OpenTok, session_id: str) -> StreamList:
    """List the streams of a session."""
    require(session_id, 'Cannot get streams without a session ID')
    response = client.request(
        'GET', client.project_path('session', session_id, 'stream')
    )
    return transport.load(StreamList, response)


def get(client: OpenTok, session_id: str, stream_id: str) -> Stream:
    """Get a stream of a session."""
    require(session_id, 'Cannot get stream information without a session ID')
    require(stream_id, 'Cannot get stream information without a stream ID')
    response = client.request(
        'GET', client.project_path('session', session_id, 'stream', stream_id)
    )
    return transport.load(Stream, response)


def set_class_lists(client: OpenTok, session_id: str,
                    classes: List[StreamClass]) -> StreamList:
    """
    Change the layout classes of streams in composed archives and broadcasts.

    Parameters
    ----------
    client : :class:`.OpenTok`
    session_id : str
    classes : list
        One :class:`.StreamClass` per stream to change.

    Returns
    -------
    :class:`.StreamList`
        The streams of the session, with their updated layout classes.

    """
    require(session_id, 'Cannot change stream layout classes without a'
                        ' session ID')
    response = client.request(
        'PUT', client.project_path('session', session_id, 'stream'),
        json={'items': [to_dict(item) for item in classes]}
    )
    return transport.load(StreamList, response)
