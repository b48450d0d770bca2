"""The OpenTok client: a credential plus the configuration of its transport."""

import logging
from typing import Any, Iterable, Optional

import requests

from . import config
from .auth import access, scopes, tokens
from .domain import Credential, TokenOptions
from .exceptions import InvalidArgument
from .services.transport import Transport

logger = logging.getLogger(__name__)

PROJECT_URL = '/v2/project'


class OpenTok(object):
    """
    Holds the API key and secret of a project, for making API calls.

    Construct one per project and share it; the credential cannot be changed
    after construction. The service modules in :mod:`opentok_rest.services`
    take an instance as their first argument, for example:

    .. code-block:: python

       from opentok_rest import OpenTok
       from opentok_rest.services import sessions

       ot = OpenTok('<api key>', '<api secret>')
       session = sessions.create(ot)
       token = ot.generate_token(session.session_id)

    """

    def __init__(self, api_key: str, api_secret: str,
                 api_host: str = config.API_HOST,
                 timeout: float = config.TIMEOUT,
                 session: Optional[requests.Session] = None,
                 debug: bool = config.DEBUG) -> None:
        """
        Initialize with the project credential.

        Parameters
        ----------
        api_key : str
        api_secret : str
        api_host : str
            Base URL of the API.
        timeout : float
            Timeout of each HTTP round trip, in seconds.
        session : :class:`requests.Session`
            HTTP session to send requests with. A new one is created if not
            given.
        debug : bool
            Log request and response traces at DEBUG level.

        """
        if not api_key or not api_secret:
            raise InvalidArgument('API key and secret are required')
        self._credential = Credential(str(api_key), api_secret)
        self.transport = Transport(api_host, timeout, session=session,
                                   debug=debug)

    @property
    def credential(self) -> Credential:
        """The credential used to sign tokens."""
        return self._credential

    @property
    def api_key(self) -> str:
        """The project API key."""
        return self._credential.api_key

    @property
    def api_host(self) -> str:
        """Base URL of the API."""
        return self.transport.api_host

    def set_api_host(self, url: str) -> None:
        """Send requests to another API host."""
        if not url:
            raise InvalidArgument('OpenTok API host cannot be empty')
        self.transport.api_host = url

    def set_http_session(self, session: Optional[requests.Session]) -> None:
        """Send requests with another HTTP session. ``None`` is ignored."""
        if session is not None:
            self.transport.session = session

    def set_debug(self, debug: bool = True) -> None:
        """Turn request and response traces on or off."""
        self.transport.debug = debug

    def project_jwt(self) -> str:
        """Issue a service JWT for project-level calls."""
        return tokens.issue(self._credential, scopes.PROJECT)

    def account_jwt(self) -> str:
        """Issue a service JWT for account management calls."""
        return tokens.issue(self._credential, scopes.ACCOUNT)

    def generate_token(self, session_id: str,
                       options: Optional[TokenOptions] = None) -> str:
        """
        Generate a connection token for a participant of a session.

        See :func:`opentok_rest.auth.access.generate`.
        """
        return access.generate(self._credential, session_id, options)

    def project_path(self, *parts: str) -> str:
        """Build the path of a resource of this project."""
        return '/'.join((PROJECT_URL, self.api_key) + parts)

    def request(self, method: str, path: str, scope: str = scopes.PROJECT,
                expected: Iterable[int] = (200,), **kwargs: Any) \
            -> requests.Response:
        """
        Send a request, authenticated with a fresh service JWT.

        Keyword arguments are passed to :meth:`.Transport.request`.
        """
        auth_token = tokens.issue(self._credential, scope)
        return self.transport.request(method, path, auth_token,
                                      expected=expected, **kwargs)
