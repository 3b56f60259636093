from flask import Blueprint, current_app, jsonify, request

from bingo.services.game.visibility import init_payload, leaderboard

game = Blueprint('game', __name__)


def _store():
    return current_app.extensions['bingo_store']


@game.route('/state', methods=['GET'])
def get_game_state():
    """
    Returns the same bootstrap view a socket client receives on join,
    masked for the optional ``viewer`` query parameter.
    """
    store = _store()
    viewer = request.args.get('viewer')
    if viewer is not None and not store.is_member(viewer):
        viewer = None
    return jsonify(init_payload(store, viewer))


@game.route('/leaderboard', methods=['GET'])
def get_leaderboard():
    store = _store()
    if not store.revealed:
        return jsonify({'error': 'Final lineup has not been revealed yet'}), 400
    return jsonify({
        'finalLineup': list(store.final_lineup),
        'leaderboard': leaderboard(store),
    })
