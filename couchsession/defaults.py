"""
Package Default Values
All hardcoded values should be defined here and accessed via Config.get()
These defaults can be overridden in the host config or .env file
"""

# ============================================================================
# COUCHDB CONNECTION DEFAULTS
# ============================================================================

DEFAULT_COUCHDB_HOSTNAME = '127.0.0.1'
DEFAULT_COUCHDB_PORT = 5984
DEFAULT_COUCHDB_DATABASE = 'magento_session'

# ============================================================================
# HTTP CLIENT DEFAULTS
# ============================================================================

DEFAULT_HTTP_USER_AGENT = 'CouchSession/1.0'
DEFAULT_HTTP_TIMEOUT = 30  # seconds

# ============================================================================
# SESSION DEFAULTS
# ============================================================================

DEFAULT_SESSION_LIFETIME = 7200  # seconds (2 hours)
DEFAULT_SESSION_ID_LENGTH = 40
DEFAULT_WRITE_MAX_ATTEMPTS = 10  # PUT attempts before a conflicting write gives up

# ============================================================================
# DESIGN DOCUMENT
# ============================================================================

DESIGN_DOCUMENT_ID = '_design/misc'
GC_VIEW_NAME = 'gc'
VALIDITY_SHOW_NAME = 'is_session_valid'

# ============================================================================
# LOGGING DEFAULTS
# ============================================================================

DEFAULT_LOG_MAX_BYTES = 10 * 1024 * 1024  # 10MB
DEFAULT_LOG_BACKUP_COUNT = 5
