from flask import Flask
from flask_sqlalchemy import SQLAlchemy
from flask_cors import CORS
from flask_migrate import Migrate
from flask_socketio import SocketIO
import sqlalchemy as sa
import click
from config import Config

db = SQLAlchemy()
migrate = Migrate()
allowed_origins = [
    "http://localhost:3000",
    "http://127.0.0.1:3000",
    "http://localhost:5173",
    "http://127.0.0.1:5173",
]
socketio = SocketIO(cors_allowed_origins=allowed_origins, async_mode=None)


def create_app(config_class=Config):
    flask_app = Flask(__name__)
    flask_app.config.from_object(config_class)

    db.init_app(flask_app)
    migrate.init_app(flask_app, db)
    CORS(flask_app, origins=allowed_origins)

    # Initialize Socket.IO after app is created
    socketio.init_app(flask_app, cors_allowed_origins=allowed_origins)

    from bingo.main import main
    flask_app.register_blueprint(main)

    from bingo.api.game import game
    flask_app.register_blueprint(game, url_prefix='/api/game')

    # Build the game store explicitly; nothing is loaded at import time
    from bingo.models import BoardRecord  # noqa: F401  (registers the table)
    from bingo.services.game.identity import TrustOnClaimVerifier
    from bingo.services.game.loader import load_lines
    from bingo.services.game.persistence import LineupRecord, SnapshotRepository
    from bingo.services.game.reveal import RevealCoordinator
    from bingo.services.game.store import GameStateStore
    from bingo.socketio_events import SessionGateway, SocketIOPublisher, register_socketio_handlers

    members = load_lines(flask_app.config['MEMBERS_FILE'])
    terms = load_lines(flask_app.config['TERMS_FILE'])
    groups = load_lines(flask_app.config['GROUPS_FILE'])
    flask_app.logger.info(f"[startup] loaded members={len(members)} terms={len(terms)} groups={len(groups)}")
    if len(terms) < 24:
        flask_app.logger.warning("[startup] fewer than 24 terms loaded; boards will be incomplete")

    store = GameStateStore(
        members,
        groups,
        terms,
        repository=SnapshotRepository(),
        lineup_record=LineupRecord(flask_app.config['LINEUP_FILE']),
        logger=flask_app.logger,
    )
    with flask_app.app_context():
        if flask_app.config.get('AUTO_CREATE_TABLES', True):
            db.create_all()
        if sa.inspect(db.engine).has_table(BoardRecord.__tablename__):
            store.bootstrap()
        else:
            # Lets `flask db upgrade` build the app before the table exists
            flask_app.logger.warning(
                f"[startup] table {BoardRecord.__tablename__} missing; run `flask db upgrade` and restart"
            )
    flask_app.extensions['bingo_store'] = store

    namespace = flask_app.config.get('SOCKETIO_NAMESPACE', '/')
    publisher = SocketIOPublisher(socketio, namespace=namespace)
    gateway = SessionGateway(
        store,
        TrustOnClaimVerifier(store),
        RevealCoordinator(store, publisher),
        publisher,
        logger=flask_app.logger,
    )
    flask_app.extensions['bingo_gateway'] = gateway
    register_socketio_handlers(socketio, gateway, namespace=namespace)

    @click.command('reset-state')
    def reset_state_command():
        """Deletes every saved board and the revealed lineup."""
        with flask_app.app_context():
            deleted = SnapshotRepository().clear()
            lineup_removed = LineupRecord(flask_app.config['LINEUP_FILE']).clear()
        print(f'Removed {deleted} saved boards' + (' and the final lineup' if lineup_removed else '') + '.')
        print('Restart the server to deal fresh boards.')

    flask_app.cli.add_command(reset_state_command)

    return flask_app
