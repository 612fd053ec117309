"""
Design Document
View and show function installed in the session database during bootstrap.
The JavaScript sources run inside CouchDB and are shipped as opaque strings.
"""
from typing import Any, Dict

from couchsession.defaults import DESIGN_DOCUMENT_ID, GC_VIEW_NAME, VALIDITY_SHOW_NAME

# Emits session_expiry -> _rev for every session document
GC_VIEW_MAP = """
function(doc) {
    if ('session_expiry' in doc) {
        emit(doc.session_expiry, doc._rev);
    }
}
"""

# Lets a reverse proxy ask "is this session still valid?" without fetching the document
IS_SESSION_VALID_SHOW = """
function(doc, req) {
    if (!doc) {
        return false;
    }
    var now = Math.round(new Date().getTime() / 1000);
    var expiry = doc['session_expiry'];
    return {
        'code': 200,
        'headers': { 'content-type': 'text/plain' },
        'body': '' + (expiry > now)
    };
}
"""


def design_document() -> Dict[str, Any]:
    """Build the design document body"""
    return {
        '_id': DESIGN_DOCUMENT_ID,
        'language': 'javascript',
        'shows': {
            VALIDITY_SHOW_NAME: IS_SESSION_VALID_SHOW,
        },
        'views': {
            GC_VIEW_NAME: {'map': GC_VIEW_MAP},
        },
    }


def view_path(endkey: int) -> str:
    """Path of the expiry view, relative to the database"""
    return f"/{DESIGN_DOCUMENT_ID}/_view/{GC_VIEW_NAME}?endkey={endkey}"


def show_path(session_path: str) -> str:
    """Path of the validity show function for an already quoted document path"""
    return f"/{DESIGN_DOCUMENT_ID}/_show/{VALIDITY_SHOW_NAME}{session_path}"
