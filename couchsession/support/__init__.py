"""
Support Classes
"""

from couchsession.support.env_helper import EnvHelper
from couchsession.support.config import Config
from couchsession.support.crypto import Crypto
from couchsession.support.connection_config import ConnectionConfig

__all__ = [
    'EnvHelper',
    'Config',
    'Crypto',
    'ConnectionConfig',
]
