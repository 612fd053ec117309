"""
Document Store Gateway
Database-scoped JSON requests against CouchDB with lazy bootstrap
"""
import json
from typing import Any, Dict, Optional, Union
from urllib.parse import quote

from couchsession.exceptions import (
    DatabaseMissingException,
    StoreError,
    exception_for_payload,
)
from couchsession.http.design import design_document
from couchsession.http.transport import CouchTransport, TransportResponse
from couchsession.logging import getLogger
from couchsession.support import ConnectionConfig, Crypto

logger = getLogger(__name__)

# Reasons CouchDB gives when the database itself is absent (1.x and 2.x+)
DATABASE_MISSING_REASONS = ('no_db_file', 'Database does not exist.')


class CouchResponse:
    """Transport response with its decoded JSON body"""

    def __init__(self, raw: TransportResponse, body: Any):
        self.raw = raw
        self.body = body

    @property
    def status_code(self) -> int:
        return self.raw.status_code

    @property
    def headers(self) -> Dict[str, str]:
        return self.raw.headers

    @property
    def raw_body(self) -> str:
        return self.raw.raw_body

    @property
    def error(self) -> Optional[str]:
        if isinstance(self.body, dict):
            return self.body.get('error')
        return None

    @property
    def reason(self) -> Optional[str]:
        if isinstance(self.body, dict):
            return self.body.get('reason')
        return None

    @property
    def is_error(self) -> bool:
        return self.error is not None or self.status_code >= 400

    @property
    def is_not_found(self) -> bool:
        return self.error == 'not_found'

    @property
    def is_conflict(self) -> bool:
        return self.error == 'conflict'

    @property
    def is_database_missing(self) -> bool:
        return self.is_not_found and self.reason in DATABASE_MISSING_REASONS

    def get(self, key: str, default: Any = None) -> Any:
        """Read a field of a JSON object body"""
        if isinstance(self.body, dict):
            return self.body.get(key, default)
        return default

    def raise_for_error(self) -> 'CouchResponse':
        """
        Raise the matching StoreError if the store reported an error

        Returns:
            self, to allow chaining
        """
        if not self.is_error:
            return self

        payload = self.body if isinstance(self.body, dict) and self.error else {
            'error': 'http_error',
            'reason': self.raw.status_line,
        }
        raise exception_for_payload(payload, self.status_code)

    def __repr__(self) -> str:
        return f"<CouchResponse {self.status_code} error={self.error!r}>"


def document_path(document_id: str) -> str:
    """
    Build the database-relative path of a document

    Args:
        document_id: Document id (design document ids keep their slash)

    Returns:
        '/<quoted id>'
    """
    if document_id.startswith('_design/'):
        return '/_design/' + quote(document_id[len('_design/'):], safe='')
    return '/' + quote(document_id, safe='')


class DocumentStoreGateway:
    """
    Gateway to one CouchDB database

    Prefixes every path with the database name, adds Basic authentication
    when credentials are configured and creates the database plus its
    design document the first time CouchDB reports it missing.

    Usage:
        gateway = DocumentStoreGateway(ConnectionConfig.from_config())
        response = gateway.request('/abc123')
        response = gateway.request('/abc123', 'PUT', {'session_data': '{}'})
    """

    def __init__(self, config: ConnectionConfig, transport: Optional[CouchTransport] = None):
        """
        Initialize gateway

        Args:
            config: Connection configuration
            transport: Transport to use (built from config when omitted)
        """
        self.config = config
        self.transport = transport or CouchTransport(
            config.hostname,
            config.port,
            timeout=config.timeout,
        )

    @property
    def database_path(self) -> str:
        return '/' + quote(self.config.database_name, safe='')

    def _headers(self) -> Dict[str, str]:
        if not self.config.has_credentials:
            return {}
        return {'Authorization': Crypto.basic_auth(self.config.username, self.config.password)}

    @staticmethod
    def _encode(data: Optional[Union[Dict[str, Any], list, str]]) -> Optional[str]:
        if data is None:
            return None
        if isinstance(data, (dict, list)):
            return json.dumps(data)
        # Assume strings are already JSON encoded
        return data

    @staticmethod
    def _decode(raw_body: str) -> Any:
        if not raw_body:
            return None
        try:
            return json.loads(raw_body)
        except ValueError:
            return None

    def _execute(self, relative_path: str, method: str, body: Optional[str]) -> CouchResponse:
        raw = self.transport.execute(
            method,
            self.database_path + relative_path,
            body=body,
            headers=self._headers(),
        )
        return CouchResponse(raw, self._decode(raw.raw_body))

    def request(
        self,
        relative_path: str = '',
        method: str = 'GET',
        data: Optional[Union[Dict[str, Any], list, str]] = None
    ) -> CouchResponse:
        """
        Send a request scoped to the session database

        Args:
            relative_path: Path below the database ('' for the database itself)
            method: HTTP method
            data: Structured value (JSON encoded here) or an encoded string

        Returns:
            CouchResponse

        Raises:
            StoreConnectionError: CouchDB is unreachable
            StoreError: Bootstrap failed
            DatabaseMissingException: Database still missing after bootstrap
        """
        body = self._encode(data)
        response = self._execute(relative_path, method, body)

        if not response.is_database_missing:
            return response

        logger.info(f"Database {self.config.database_name} missing, bootstrapping")
        self.initialize()

        response = self._execute(relative_path, method, body)
        if response.is_database_missing:
            raise DatabaseMissingException(
                f"Database {self.config.database_name} still missing after bootstrap",
                error=response.error,
                reason=response.reason,
            )
        return response

    def initialize(self) -> bool:
        """
        Create the database and install the design document

        Safe to run against an existing database: 'file_exists' and a
        conflicting design document are both accepted.

        Returns:
            True once the database and design document are in place

        Raises:
            StoreError: CouchDB rejected the bootstrap
        """
        response = self._execute('', 'PUT', None)
        if response.is_error and response.error != 'file_exists':
            raise self._bootstrap_error('create database', response)

        document = design_document()
        response = self._execute(document_path(document['_id']), 'PUT', self._encode(document))
        if response.is_error and not response.is_conflict:
            raise self._bootstrap_error('install design document', response)

        logger.info(f"Database {self.config.database_name} ready")
        return True

    def _bootstrap_error(self, step: str, response: CouchResponse) -> StoreError:
        return StoreError(
            f"Could not {step} for {self.config.database_name}: {response.error} ({response.reason})",
            status_code=response.status_code,
            error=response.error,
            reason=response.reason,
        )
