"""HTTP transport for the OpenTok REST API."""

import logging
from typing import Any, Iterable, Optional

import requests

from .. import domain
from ..auth import AUTH_HEADER
from ..exceptions import RequestFailed, ResponseError
from ..version import user_agent

logger = logging.getLogger(__name__)


class Transport(object):
    """
    Sends signed requests to the API.

    Holds the base URL, the timeout and the HTTP session. The session is
    thread safe for our purposes and may be shared with the caller; pass one
    in to control connection pooling, proxies, or retries.
    """

    def __init__(self, api_host: str, timeout: float,
                 session: Optional[requests.Session] = None,
                 debug: bool = False) -> None:
        """Create a new HTTP session, unless one is provided."""
        self.api_host = api_host
        self.timeout = timeout
        self.debug = debug
        if session is None:
            session = requests.Session()
            adapter = requests.adapters.HTTPAdapter()
            session.mount('https://', adapter)
            session.mount('http://', adapter)
        self._session = session
        logger.debug('New Transport for %s', api_host)

    @property
    def session(self) -> requests.Session:
        """The HTTP session used to send requests."""
        return self._session

    @session.setter
    def session(self, session: requests.Session) -> None:
        self._session = session

    def request(self, method: str, path: str, auth_token: str,
                expected: Iterable[int] = (200,), json: Any = None,
                data: Any = None, params: Optional[dict] = None) \
            -> requests.Response:
        """
        Send a request to the API.

        Parameters
        ----------
        method : str
            HTTP method.
        path : str
            Path relative to :attr:`api_host`.
        auth_token : str
            Service JWT for the ``X-OPENTOK-AUTH`` header.
        expected : iterable
            Status codes that indicate success.
        json : object
            JSON body.
        data : dict or bytes
            Form-encoded body.
        params : dict
            Query parameters.

        Returns
        -------
        :class:`requests.Response`

        Raises
        ------
        :class:`RequestFailed`
            Raised if the request could not be sent or no response arrived.
        :class:`ResponseError`
            Raised if the API responded with an unexpected status code.

        """
        url = self.api_host.rstrip('/') + path
        headers = {
            AUTH_HEADER: auth_token,
            'User-Agent': user_agent(),
            'Accept': 'application/json',
        }
        if self.debug:
            logger.debug('Request: %s %s params=%s json=%s data=%s',
                         method, url, params, json, data)
        try:
            response = self._session.request(method, url, headers=headers,
                                             json=json, data=data,
                                             params=params,
                                             timeout=self.timeout)
        except requests.exceptions.RequestException as e:
            raise RequestFailed(f'{method} {url} failed: {e}') from e
        if self.debug:
            logger.debug('Response: %s %s', response.status_code,
                         response.text)
        if response.status_code not in tuple(expected):
            logger.debug('API responded to %s %s with status %i',
                         method, url, response.status_code)
            raise parse_error_response(response)
        return response


def parse_error_response(response: requests.Response) -> ResponseError:
    """Build a :class:`ResponseError` from an error response."""
    try:
        message = response.json().get('message')
    except (ValueError, AttributeError):
        message = response.text
    return ResponseError(response.status_code, message)


def decode_json(response: requests.Response) -> Any:
    """
    Get the JSON body of a response.

    Raises
    ------
    :class:`RequestFailed`
        Raised if the body is not JSON.

    """
    try:
        return response.json()
    except ValueError as e:
        logger.debug('Response could not be decoded: %s', response.text)
        raise RequestFailed('Could not decode response from OpenTok') from e


def load(cls: type, response: requests.Response) -> Any:
    """
    Load the JSON body of a response into a domain object.

    Raises
    ------
    :class:`RequestFailed`
        Raised if the body is not JSON, or lacks required fields.

    """
    data = decode_json(response)
    try:
        return domain.from_dict(cls, data)
    except (TypeError, AttributeError) as e:
        raise RequestFailed(f'Unexpected {cls.__name__} response: {e}') from e
