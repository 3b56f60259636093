from flask import request
from flask_socketio import emit
from typing import Any, Dict, List, Optional, Tuple
import logging

from bingo.services.game.visibility import init_payload

Event = Tuple[str, Dict[str, Any]]


def _get_sid() -> str:
    # request.sid exists in Socket.IO context
    return request.sid  # type: ignore


class SocketIOPublisher:
    """Fan-out step: emits each event to every connection on the namespace."""

    def __init__(self, socketio, namespace: str = '/'):
        self.socketio = socketio
        self.namespace = namespace

    def publish(self, events: List[Event]) -> None:
        for name, payload in events:
            self.socketio.emit(name, payload, namespace=self.namespace)


class SessionGateway:
    """Socket event routing between connections and the game store.

    Each connection starts anonymous and becomes identified after a
    ``join``. Malformed or rejected events produce no reply and no
    broadcast.
    """

    def __init__(self, store, verifier, coordinator, publisher, logger=None):
        self.store = store
        self.verifier = verifier
        self.coordinator = coordinator
        self.publisher = publisher
        self.logger = logger or logging.getLogger(__name__)
        self.sessions: Dict[str, Optional[str]] = {}

    def handle_connect(self, auth=None):
        self.sessions[_get_sid()] = None
        # Lets the client render a fully masked board before it identifies
        emit('init', init_payload(self.store))

    def handle_disconnect(self, reason=None):
        member = self.sessions.pop(_get_sid(), None)
        self.logger.info(f"[disconnect] member={member}")

    def handle_join(self, data):
        data = data if isinstance(data, dict) else {}
        member = self.verifier.verify(data.get('name'), data)
        self.sessions[_get_sid()] = member
        self.logger.info(f"[join] claimed={data.get('name')!r} member={member}")
        emit('init', init_payload(self.store, member))

    def handle_toggle_cell(self, data):
        if not isinstance(data, dict):
            return
        with self.store.lock:
            result = self.store.toggle_cell(data.get('memberName'), data.get('index'))
            if result is None:
                return
            events: List[Event] = [('updateState', {
                'memberName': result.member,
                'selectedIndices': result.selected_indices,
                'bingoCount': result.new_bingo_count,
            })]
            if result.is_new_bingo:
                events.append(('bingoAnnouncement', {
                    'memberName': result.member,
                    'count': result.new_bingo_count,
                }))
            self.publisher.publish(events)

    def handle_submit_prediction(self, data):
        if not isinstance(data, dict):
            return
        member = data.get('memberName')
        with self.store.lock:
            if not self.store.submit_prediction(member, data.get('prediction')):
                return
            # Content stays masked until the reveal
            self.publisher.publish([('predictionUpdate', {'memberName': member, 'hasPredicted': True})])

    def handle_submit_final_lineup(self, data):
        if not isinstance(data, dict):
            return
        self.coordinator.reveal(data.get('lineup'))


def register_socketio_handlers(socketio, gateway: SessionGateway, namespace: str = '/') -> None:
    """Bind the gateway's handlers to the Socket.IO server."""
    socketio.on_event('connect', gateway.handle_connect, namespace=namespace)
    socketio.on_event('disconnect', gateway.handle_disconnect, namespace=namespace)
    socketio.on_event('join', gateway.handle_join, namespace=namespace)
    socketio.on_event('toggleCell', gateway.handle_toggle_cell, namespace=namespace)
    socketio.on_event('submitPrediction', gateway.handle_submit_prediction, namespace=namespace)
    socketio.on_event('submitFinalLineup', gateway.handle_submit_final_lineup, namespace=namespace)
