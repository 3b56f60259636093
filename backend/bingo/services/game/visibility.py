"""Client-facing views of the store.

Board progress is public. Prediction contents are masked per viewer
until the final lineup is revealed:

1. revealed: everyone sees every prediction plus its score;
2. otherwise the viewer sees their own prediction;
3. otherwise only ``hasPredicted``.
"""

from typing import Iterable, List, Optional


def score_prediction(prediction: Optional[Iterable[str]], final_lineup: Iterable[str]) -> int:
    """Number of distinct predicted groups that appear in the lineup."""
    if not prediction:
        return 0
    return len(set(prediction) & set(final_lineup))


def present_prediction(state, member: str, viewer: Optional[str], final_lineup: List[str]) -> dict:
    if final_lineup:
        return {
            'hasPredicted': state.has_predicted,
            'prediction': list(state.prediction or []),
            'score': score_prediction(state.prediction, final_lineup),
        }
    if member == viewer and state.has_predicted:
        return {'hasPredicted': True, 'prediction': list(state.prediction)}
    return {'hasPredicted': state.has_predicted}


def present(store, viewer: Optional[str] = None) -> dict:
    """Per-member view of the game for ``viewer`` (None = anonymous)."""
    with store.lock:
        view = {}
        for member in store.members:
            state = store.board_states.get(member)
            if state is None:
                continue
            view[member] = {
                'board': list(state.board),
                'selectedIndices': sorted(state.selected_indices),
                'bingoCount': state.bingo_count,
                'prediction': present_prediction(state, member, viewer, store.final_lineup),
            }
        return view


def leaderboard(store) -> List[dict]:
    """Scored ranking; empty until the lineup is revealed."""
    with store.lock:
        if not store.revealed:
            return []
        rows = []
        for position, member in enumerate(store.members):
            state = store.board_states.get(member)
            if state is None:
                continue
            rows.append((position, {
                'memberName': member,
                'score': score_prediction(state.prediction, store.final_lineup),
                'bingoCount': state.bingo_count,
                'hasPredicted': state.has_predicted,
            }))
        rows.sort(key=lambda row: (-row[1]['score'], -row[1]['bingoCount'], row[0]))
        return [entry for _, entry in rows]


def init_payload(store, viewer: Optional[str] = None) -> dict:
    with store.lock:
        return {
            'members': list(store.members),
            'groups': list(store.groups),
            'gameState': present(store, viewer),
            'finalLineup': list(store.final_lineup),
        }


def game_over_payload(store) -> dict:
    with store.lock:
        return {
            'finalLineup': list(store.final_lineup),
            'gameState': present(store),
            'leaderboard': leaderboard(store),
        }
