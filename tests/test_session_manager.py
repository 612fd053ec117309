"""Tests for the host-side session facade and the save handler registry."""

from unittest.mock import patch

import pytest

from couchsession.session import (
    ArraySessionStore,
    SessionManager,
    get_save_handler,
    has_save_handler,
    session_write_close,
    set_save_handler,
)
from tests.conftest import DATABASE


@pytest.fixture
def memory_store(clock) -> ArraySessionStore:
    return ArraySessionStore(lifetime=60, clock=clock)


class TestSessionManager:

    def test_start_loads_existing_data(self, memory_store):
        memory_store.write('abc', {'user': 42})

        session = SessionManager('abc', store=memory_store).start()

        assert session['user'] == 42
        assert 'user' in session

    def test_save_only_when_dirty(self, memory_store):
        session = SessionManager('abc', store=memory_store).start()

        with patch.object(memory_store, 'write') as write:
            assert session.save() is True
            write.assert_not_called()

    def test_put_and_save(self, memory_store):
        session = SessionManager('abc', store=memory_store).start()
        session.put('cart', [1, 2])

        assert session.is_dirty
        assert session.save() is True
        assert not session.is_dirty
        assert memory_store.read('abc') == {'cart': [1, 2]}

    def test_pull_and_forget(self, memory_store):
        session = SessionManager('abc', store=memory_store).start()
        session.put('a', 1)
        session.put('b', 2)

        assert session.pull('a') == 1
        del session['b']
        assert session.all() == {}

    def test_invalidate_destroys_old_session(self, memory_store):
        memory_store.write('old-id', {'user': 42})
        session = SessionManager('old-id', store=memory_store).start()

        new_id = session.invalidate()
        session.save()

        assert new_id != 'old-id'
        assert not memory_store.exists('old-id')
        assert memory_store.exists(new_id)
        assert memory_store.read(new_id) == {}

    def test_generated_id_when_none_given(self, memory_store):
        session = SessionManager(store=memory_store)

        assert len(session.get_id()) >= 40

    def test_uses_registered_save_handler(self, memory_store):
        set_save_handler(memory_store)

        session = SessionManager('abc')

        assert session.store is memory_store

    def test_works_against_couchdb_store(self, store, couch):
        session = SessionManager('sess1', store=store).start()
        session['user'] = 42

        assert session.close() is True
        assert store.read('sess1') == {'user': 42}


class TestSaveHandler:

    def test_no_handler_raises(self):
        assert not has_save_handler()
        with pytest.raises(RuntimeError):
            get_save_handler()

    def test_shutdown_hook_registered_once(self, memory_store):
        with patch('couchsession.session.handler.atexit.register') as register, \
                patch('couchsession.session.handler._shutdown_registered', False):
            set_save_handler(memory_store)
            set_save_handler(memory_store)

        register.assert_called_once_with(session_write_close)

    def test_couchdb_store_registers_itself(self, store):
        assert store.set_save_handler() is store
        assert get_save_handler() is store

    def test_session_write_close_flushes_pending_writes(self, store, couch):
        store.set_save_handler()
        session = SessionManager('sess1').start()
        session['user'] = 42

        assert session_write_close() == 1

        assert couch.document(DATABASE, 'sess1') is not None
        assert store.read('sess1') == {'user': 42}
        # Closed sessions are no longer tracked
        assert session_write_close() == 0


class TestArraySessionStore:

    def test_gc_removes_expired(self, memory_store, clock):
        memory_store.write('a', {'x': 1})
        clock.advance(61)
        memory_store.write('b', {'x': 2})

        assert memory_store.gc() == 1
        assert not memory_store.exists('a')
        assert memory_store.exists('b')

    def test_destroy_missing_returns_false(self, memory_store):
        assert memory_store.destroy('nope') is False
