"""
CouchDB Transport
Single request/response exchange against the document store using requests.
Every call opens its own connection and closes it before returning.
"""

from typing import Dict, Optional, Union

import requests

from couchsession.exceptions import StoreConnectionError, StoreTimeoutError
from couchsession.logging import getLogger

logger = getLogger(__name__)


class TransportResponse:
    """Raw response of one HTTP exchange"""

    def __init__(self, status_code: int, reason: str, headers: Dict[str, str], raw_body: str):
        self.status_code = status_code
        self.reason = reason
        self.headers = headers
        self.raw_body = raw_body

    @property
    def status_line(self) -> str:
        return f"{self.status_code} {self.reason}".strip()

    def __repr__(self) -> str:
        return f"<TransportResponse {self.status_line} body={len(self.raw_body)} chars>"


class CouchTransport:
    """
    Stateless HTTP transport to a CouchDB server

    Usage:
        transport = CouchTransport('127.0.0.1', 5984, timeout=5)
        response = transport.execute('GET', '/magento_session/abc123')
    """

    def __init__(self, hostname: str, port: int, timeout: Optional[float] = None):
        """
        Initialize transport

        Args:
            hostname: CouchDB host
            port: CouchDB port
            timeout: Connect/read timeout in seconds
        """
        from couchsession.defaults import DEFAULT_HTTP_TIMEOUT
        self.hostname = hostname
        self.port = port
        self.timeout = timeout if timeout is not None else DEFAULT_HTTP_TIMEOUT

    @property
    def base_url(self) -> str:
        return f"http://{self.hostname}:{self.port}"

    @staticmethod
    def _get_default_headers() -> Dict[str, str]:
        from couchsession.defaults import DEFAULT_HTTP_USER_AGENT
        return {
            'User-Agent': DEFAULT_HTTP_USER_AGENT,
            'Accept': 'application/json',
            'Connection': 'close',
        }

    def execute(
        self,
        method: str,
        path: str,
        body: Optional[Union[str, bytes]] = None,
        headers: Optional[Dict[str, str]] = None
    ) -> TransportResponse:
        """
        Perform one HTTP request

        Args:
            method: HTTP method (GET, PUT, DELETE, POST)
            path: Absolute request path including query string
            body: Already encoded JSON body
            headers: Extra request headers (e.g. Authorization)

        Returns:
            TransportResponse

        Raises:
            StoreConnectionError: The server could not be reached
            StoreTimeoutError: The server did not answer in time
        """
        request_headers = self._get_default_headers()
        if headers:
            request_headers.update(headers)

        if body is not None:
            if isinstance(body, str):
                body = body.encode('utf-8')
            request_headers['Content-Type'] = 'application/json'
            request_headers['Content-Length'] = str(len(body))

        url = self.base_url + path
        session = requests.Session()

        try:
            response = session.request(
                method,
                url,
                data=body,
                headers=request_headers,
                timeout=self.timeout,
                allow_redirects=False,
            )
            result = TransportResponse(
                status_code=response.status_code,
                reason=response.reason or '',
                headers=dict(response.headers),
                raw_body=response.text,
            )
        except requests.exceptions.Timeout as e:
            raise StoreTimeoutError(
                f"Timed out talking to CouchDB at {self.hostname}:{self.port} ({e})"
            ) from e
        except requests.exceptions.RequestException as e:
            raise StoreConnectionError(
                f"Could not open CouchDB connection to {self.hostname}:{self.port} ({e})"
            ) from e
        finally:
            session.close()

        logger.debug(f"{method} {path} -> {result.status_line}")
        return result
