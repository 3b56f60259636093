import logging
import os
import random
import sys
import pytest

# Ensure the backend root (containing the `bingo` package) is on sys.path
CURRENT_DIR = os.path.dirname(__file__)
BACKEND_ROOT = os.path.abspath(os.path.join(CURRENT_DIR, '..'))
if BACKEND_ROOT not in sys.path:
    sys.path.insert(0, BACKEND_ROOT)

from bingo import create_app, db, socketio
from bingo.services.game.store import GameStateStore

MEMBERS = ['Alice', 'Bob', 'Cara']
TERMS = [f'Term {i}' for i in range(1, 31)]
GROUPS = [f'Group {i}' for i in range(1, 21)]


class FakeRepository:
    """In-memory stand-in for the snapshot table."""

    def __init__(self, saved=None, fail=False):
        self.saved = saved or {}
        self.fail = fail
        self.saves = []

    def load(self):
        return dict(self.saved)

    def save(self, states):
        if self.fail:
            raise RuntimeError('disk full')
        self.saves.append({
            m: {'board': list(s.board), 'selectedIndices': sorted(s.selected_indices), 'prediction': s.prediction}
            for m, s in states.items()
        })


class FakeLineupRecord:
    def __init__(self, lineup=None, fail=False):
        self.lineup = list(lineup or [])
        self.fail = fail
        self.writes = 0

    def load(self):
        return list(self.lineup)

    def save(self, lineup):
        if self.fail:
            raise OSError('read-only file system')
        self.lineup = list(lineup)
        self.writes += 1


class RecordingPublisher:
    def __init__(self):
        self.events = []

    def publish(self, events):
        self.events.extend(events)


@pytest.fixture()
def repository():
    return FakeRepository()


@pytest.fixture()
def lineup_record():
    return FakeLineupRecord()


@pytest.fixture()
def make_store(repository, lineup_record):
    def _make(members=MEMBERS, terms=TERMS, groups=GROUPS, repo=None, lineup=None):
        store = GameStateStore(
            members,
            groups,
            terms,
            repository=repo or repository,
            lineup_record=lineup or lineup_record,
            logger=logging.getLogger('bingo.tests'),
            rng=random.Random(7),
        )
        store.bootstrap()
        return store
    return _make


@pytest.fixture()
def store(make_store):
    return make_store()


@pytest.fixture()
def publisher():
    return RecordingPublisher()


@pytest.fixture()
def data_dir(tmp_path):
    (tmp_path / 'members.txt').write_text('\n'.join(MEMBERS) + '\n', encoding='utf-8')
    (tmp_path / 'bingo_terms.txt').write_text('\n'.join(TERMS) + '\n', encoding='utf-8')
    (tmp_path / 'groups.txt').write_text('\n'.join(GROUPS) + '\n', encoding='utf-8')
    return tmp_path


def make_test_config(data_dir):
    class TestConfig:
        TESTING = True
        SECRET_KEY = os.environ.get('SECRET_KEY', 'test-secret')
        SQLALCHEMY_DATABASE_URI = 'sqlite://'
        SQLALCHEMY_TRACK_MODIFICATIONS = False
        MEMBERS_FILE = str(data_dir / 'members.txt')
        TERMS_FILE = str(data_dir / 'bingo_terms.txt')
        GROUPS_FILE = str(data_dir / 'groups.txt')
        LINEUP_FILE = str(data_dir / 'final_lineup.txt')
        AUTO_CREATE_TABLES = True
        SOCKETIO_NAMESPACE = '/'
    return TestConfig


@pytest.fixture()
def flask_app(data_dir):
    application = create_app(make_test_config(data_dir))
    with application.app_context():
        yield application
        db.session.remove()
        db.drop_all()


@pytest.fixture()
def game_store(flask_app):
    return flask_app.extensions['bingo_store']


@pytest.fixture()
def client(flask_app):
    return flask_app.test_client()


def _connect(flask_app):
    test_client = socketio.test_client(flask_app, flask_test_client=flask_app.test_client())
    # Drop the anonymous init sent on connect
    test_client.get_received()
    return test_client


@pytest.fixture()
def sio_client(flask_app):
    test_client = _connect(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


@pytest.fixture()
def second_sio_client(flask_app):
    test_client = _connect(flask_app)
    yield test_client
    if test_client.is_connected():
        test_client.disconnect()


def events_named(received, name):
    return [pkt['args'][0] for pkt in received if pkt['name'] == name]

