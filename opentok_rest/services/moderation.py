"""Server-side moderation of session participants."""

from .validation import require
from ..client import OpenTok


def force_disconnect(client: OpenTok, session_id: str,
                     connection_id: str) -> None:
    """Disconnect a client from a session."""
    require(session_id, 'Connection cannot be disconnected without a session'
                        ' ID')
    require(connection_id, 'Connection cannot be disconnected without a'
                           ' connection ID')
    client.request(
        'DELETE',
        client.project_path('session', session_id, 'connection',
                            connection_id),
        expected=(204,)
    )
