from bingo import db
import json
import time


class BoardRecord(db.Model):
    """Durable copy of one member's board, selection and prediction."""
    __tablename__ = 'board_state'
    member = db.Column(db.String(128), primary_key=True)
    board = db.Column(db.Text, nullable=False)  # JSON-encoded list of terms
    selected_indices = db.Column(db.Text, nullable=False, default='[]')  # JSON-encoded sorted list
    prediction = db.Column(db.Text, nullable=True)  # JSON-encoded list, NULL until submitted
    updated_at = db.Column(db.Float, nullable=True)

    @classmethod
    def from_state(cls, member, state):
        return cls(
            member=member,
            board=json.dumps(state.board),
            selected_indices=json.dumps(sorted(state.selected_indices)),
            prediction=json.dumps(state.prediction) if state.prediction is not None else None,
            updated_at=time.time(),
        )

    def to_dict(self):
        return {
            'board': json.loads(self.board),
            'selectedIndices': json.loads(self.selected_indices or '[]'),
            'prediction': json.loads(self.prediction) if self.prediction else None,
        }
