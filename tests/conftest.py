"""Shared fixtures for the couchsession test suite."""

import pytest

from couchsession.http import DocumentStoreGateway
from couchsession.session import handler
from couchsession.session.stores import CouchDBSessionStore
from couchsession.support import Config, ConnectionConfig
from tests.fakes.fake_couchdb import FakeClock, FakeCouchDB

DATABASE = 'magento_session'


@pytest.fixture(autouse=True)
def isolate_globals():
    """Reset runtime config and the save handler registry between tests."""
    Config.clear_runtime_overrides()
    handler.reset()
    yield
    Config.clear_runtime_overrides()
    handler.reset()


@pytest.fixture
def clock() -> FakeClock:
    return FakeClock()


@pytest.fixture
def couch(clock) -> FakeCouchDB:
    return FakeCouchDB(clock=clock)


@pytest.fixture
def config() -> ConnectionConfig:
    return ConnectionConfig(database_name=DATABASE, max_lifetime=3600)


@pytest.fixture
def gateway(config, couch) -> DocumentStoreGateway:
    return DocumentStoreGateway(config, transport=couch)


@pytest.fixture
def store(config, gateway, clock) -> CouchDBSessionStore:
    return CouchDBSessionStore(config, gateway=gateway, clock=clock)
