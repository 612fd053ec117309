"""Tests for expired-session removal and tombstone purging."""

from unittest.mock import MagicMock

from couchsession.exceptions import StoreConnectionError
from couchsession.session.garbage_collector import SessionGarbageCollector
from tests.conftest import DATABASE


class TestExpiredSessions:

    def test_expired_session_is_removed(self, store, couch, clock):
        store.write('sess1', {'user': 42})
        assert couch.document(DATABASE, 'sess1')['session_expiry'] == int(clock()) + 3600

        clock.advance(3601)
        result = store.collect_garbage()

        assert result.expired == ['sess1']
        assert store.read('sess1') == {}

    def test_only_sessions_past_expiry_are_removed(self, store, couch, clock):
        store.write('old', {'n': 1})
        clock.advance(1800)
        store.write('young', {'n': 2})
        clock.advance(1800)  # 'old' expires exactly now, 'young' in 1800s
        store.write('edge', {'n': 3})

        clock.advance(1)
        result = store.collect_garbage()

        assert result.expired == ['old']
        assert store.read('young') == {'n': 2}
        assert store.read('edge') == {'n': 3}

    def test_view_queried_with_endkey_one_second_ago(self, store, couch, clock):
        store.write('sess1', {})

        store.collect_garbage()

        view_requests = couch.requests_for('GET', f'/{DATABASE}/_design/misc/_view/gc')
        assert view_requests[-1].path.endswith(f'?endkey={int(clock()) - 1}')

    def test_rows_rechecked_against_clock(self, clock):
        gateway_mock = MagicMock()
        gateway_mock.request.return_value.raise_for_error.return_value.get.side_effect = [
            [{'id': 'future', 'key': int(clock()) + 10, 'value': '1-a'},
             {'id': 'past', 'key': int(clock()) - 10, 'value': '1-b'}],
            [],
        ]
        destroy = MagicMock(return_value=True)
        collector = SessionGarbageCollector(gateway_mock, destroy, clock=clock)

        result = collector.collect()

        destroy.assert_called_once_with('past', '1-b')
        assert result.expired == ['past']


class TestPurge:

    def test_deleted_sessions_are_purged(self, store, couch):
        store.write('sess1', {'a': 1})
        store.write('sess2', {'b': 2})
        store.destroy('sess1')
        tombstone = couch.databases[DATABASE]['sess1'].rev

        result = store.collect_garbage()

        assert result.purged == {'sess1': [tombstone]}
        assert 'sess1' not in couch.databases[DATABASE]
        purge = couch.requests_for('POST', f'/{DATABASE}/_purge')[-1]
        assert purge.body == {'sess1': [tombstone]}
        assert store.read('sess2') == {'b': 2}

    def test_no_purge_request_when_nothing_deleted(self, store, couch):
        store.write('sess1', {'a': 1})

        store.collect_garbage()

        assert couch.requests_for('POST') == []

    def test_changes_read_with_all_leaf_revisions(self, store, couch):
        store.write('sess1', {})

        store.collect_garbage()

        assert couch.requests_for('GET', f'/{DATABASE}/_changes')[-1].path == f'/{DATABASE}/_changes?style=all_docs'

    def test_collect_tombstones_merges_revisions_per_id(self):
        changes = [
            {'id': 'a', 'deleted': True, 'changes': [{'rev': '2-x'}, {'rev': '3-y'}]},
            {'id': 'b', 'changes': [{'rev': '1-z'}]},
            {'id': 'a', 'deleted': True, 'changes': [{'rev': '3-y'}, {'rev': '4-w'}]},
        ]

        assert SessionGarbageCollector.collect_tombstones(changes) == {'a': ['2-x', '3-y', '4-w']}


class TestIdempotence:

    def test_second_run_is_a_noop(self, store, couch, clock):
        store.write('sess1', {'user': 42})
        store.write('sess2', {'user': 43})
        clock.advance(3601)

        first = store.collect_garbage()
        deletes = len(couch.requests_for('DELETE'))
        purges = len(couch.requests_for('POST'))

        second = store.collect_garbage()

        assert sorted(first.expired) == ['sess1', 'sess2']
        assert second.expired == []
        assert second.purged == {}
        assert len(couch.requests_for('DELETE')) == deletes
        assert len(couch.requests_for('POST')) == purges


class TestFailures:

    def test_view_failure_does_not_stop_purge(self, store, couch):
        store.write('sess1', {'a': 1})
        store.destroy('sess1')
        couch.databases[DATABASE].pop('_design/misc')

        result = store.collect_garbage()

        assert result.expired == []
        assert 'sess1' in result.purged

    def test_connection_failure_is_logged_not_raised(self, store, couch, caplog):
        store.write('sess1', {'a': 1})
        couch.execute = MagicMock(side_effect=StoreConnectionError('down'))

        result = store.collect_garbage()

        assert result.expired_count == 0
        assert result.purged_count == 0
        assert 'Session gc' in caplog.text
