"""Authoritative in-memory game state.

``GameStateStore`` is the only object that mutates member boards,
selections, predictions and the final lineup. Every successful mutation
is written through to the snapshot repository before the call returns,
so whatever the caller broadcasts afterwards is already durable (or the
write failure has been logged).

Validation failures are silent: the operation returns ``None``/``False``
and nothing changes.
"""

import logging
import threading
from dataclasses import dataclass, field
from typing import Dict, List, NamedTuple, Optional, Set

from .board import generate_board
from .lines import count_completed_lines

PREDICTION_SIZE = 12


def _is_index(value) -> bool:
    return isinstance(value, int) and not isinstance(value, bool) and value >= 0


def _is_name_list(value) -> bool:
    return isinstance(value, (list, tuple)) and all(isinstance(item, str) for item in value)


@dataclass
class BoardState:
    board: List[str]
    selected_indices: Set[int] = field(default_factory=set)
    prediction: Optional[List[str]] = None

    @property
    def has_predicted(self) -> bool:
        return bool(self.prediction)

    @property
    def bingo_count(self) -> int:
        return count_completed_lines(self.selected_indices)

    @classmethod
    def from_dict(cls, data: dict) -> 'BoardState':
        """Rebuild a state from its stored form, dropping invalid indices."""
        raw_board = data.get('board')
        raw_selected = data.get('selectedIndices')
        board = [str(term) for term in raw_board] if isinstance(raw_board, list) else []
        if not isinstance(raw_selected, list):
            raw_selected = []
        selected = {i for i in raw_selected if _is_index(i) and i < len(board)}
        prediction = data.get('prediction')
        if not _is_name_list(prediction) or not prediction:
            prediction = None
        return cls(board=board, selected_indices=selected, prediction=list(prediction) if prediction else None)


class ToggleResult(NamedTuple):
    member: str
    selected_indices: List[int]
    old_bingo_count: int
    new_bingo_count: int

    @property
    def is_new_bingo(self) -> bool:
        return self.new_bingo_count > self.old_bingo_count


class GameStateStore:
    def __init__(self, members, groups, terms, repository, lineup_record, logger=None, rng=None):
        self.members: List[str] = list(dict.fromkeys(members))
        self.groups: List[str] = list(groups)
        self.terms: List[str] = list(terms)
        self.final_lineup: List[str] = []
        self.board_states: Dict[str, BoardState] = {}
        # Held across mutate -> persist -> publish by the socket gateway
        self.lock = threading.RLock()
        self._repository = repository
        self._lineup_record = lineup_record
        self._logger = logger or logging.getLogger(__name__)
        self._rng = rng

    def bootstrap(self) -> None:
        """Load the saved snapshot and merge it with the current roster.

        Roster members with a saved state keep it; new members get a fresh
        board. Saved states for members no longer on the roster are left
        in storage but never loaded. The merged state is persisted once.
        """
        with self.lock:
            saved = self._repository.load()
            created = 0
            for member in self.members:
                if member in saved:
                    self.board_states[member] = BoardState.from_dict(saved[member])
                else:
                    self.board_states[member] = BoardState(board=generate_board(self.terms, self._rng))
                    created += 1
            try:
                self.final_lineup = self._lineup_record.load()
            except (OSError, UnicodeDecodeError) as exc:
                self._logger.warning(f"[startup] final lineup unreadable, starting unrevealed: {exc}")
                self.final_lineup = []
            self._logger.info(
                f"[startup] members={len(self.members)} new_boards={created} "
                f"stale={len(set(saved) - set(self.members))} revealed={self.revealed}"
            )
            self._persist()

    @property
    def revealed(self) -> bool:
        return bool(self.final_lineup)

    def state_for(self, member) -> Optional[BoardState]:
        if not isinstance(member, str):
            return None
        return self.board_states.get(member)

    def is_member(self, member) -> bool:
        return self.state_for(member) is not None

    def toggle_cell(self, member, index) -> Optional[ToggleResult]:
        """Flip one cell; returns the bingo counts around the flip, or None."""
        with self.lock:
            state = self.state_for(member)
            if state is None or not _is_index(index) or index >= len(state.board):
                self._logger.debug(f"[toggle-reject] member={member!r} index={index!r}")
                return None
            old_count = state.bingo_count
            if index in state.selected_indices:
                state.selected_indices.discard(index)
            else:
                state.selected_indices.add(index)
            new_count = state.bingo_count
            self._persist()
            self._logger.info(f"[toggle] member={member} index={index} bingo={old_count}->{new_count}")
            return ToggleResult(member, sorted(state.selected_indices), old_count, new_count)

    def submit_prediction(self, member, picks) -> bool:
        """Lock in a member's prediction. Only the first valid call counts."""
        with self.lock:
            state = self.state_for(member)
            if state is None or state.prediction or self.revealed:
                self._logger.debug(f"[prediction-reject] member={member!r} locked or unknown")
                return False
            if not _is_name_list(picks) or len(picks) != PREDICTION_SIZE:
                self._logger.debug(f"[prediction-reject] member={member!r} malformed picks")
                return False
            state.prediction = list(picks)
            self._persist()
            self._logger.info(f"[prediction] member={member} locked")
            return True

    def reveal_final_lineup(self, lineup) -> bool:
        """Fix the final lineup. Single-shot: later calls change nothing."""
        with self.lock:
            if self.revealed or not _is_name_list(lineup):
                self._logger.debug("[reveal-reject] already revealed or malformed lineup")
                return False
            # Stored one entry per line: split embedded breaks and drop blanks
            # so the in-memory lineup equals what the record reads back
            cleaned = [part.strip() for name in lineup for part in name.splitlines() if part.strip()]
            if not cleaned:
                return False
            self.final_lineup = cleaned
            try:
                self._lineup_record.save(cleaned)
            except OSError as exc:
                self._logger.error(f"[persist-error] final lineup write failed: {exc}")
            self._logger.info(f"[reveal] lineup_size={len(cleaned)}")
            return True

    def _persist(self) -> None:
        roster_states = {m: self.board_states[m] for m in self.members if m in self.board_states}
        try:
            self._repository.save(roster_states)
        except Exception as exc:
            self._logger.error(f"[persist-error] snapshot write failed: {exc}")
