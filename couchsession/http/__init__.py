"""
HTTP Package
Transport and database gateway for the CouchDB session store
"""
from couchsession.http.transport import CouchTransport, TransportResponse
from couchsession.http.gateway import CouchResponse, DocumentStoreGateway, document_path

__all__ = [
    'CouchTransport',
    'TransportResponse',
    'CouchResponse',
    'DocumentStoreGateway',
    'document_path',
]
