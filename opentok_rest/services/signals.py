"""Sending signals to the clients of a session."""

from .validation import require
from ..client import OpenTok
from ..domain import SignalData, to_dict


def send_to_session(client: OpenTok, session_id: str,
                    signal: SignalData) -> None:
    """Send a signal to every client connected to a session."""
    require(session_id, 'Signal cannot be sent without a session ID')
    client.request('POST',
                   client.project_path('session', session_id, 'signal'),
                   expected=(204,), json=to_dict(signal))


def send_to_connection(client: OpenTok, session_id: str, connection_id: str,
                       signal: SignalData) -> None:
    """Send a signal to one client of a session."""
    require(session_id, 'Signal cannot be sent without a session ID')
    require(connection_id, 'Signal cannot be sent without a connection ID')
    client.request(
        'POST',
        client.project_path('session', session_id, 'connection',
                            connection_id, 'signal'),
        expected=(204,), json=to_dict(signal)
    )
