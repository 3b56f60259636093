"""Durable storage for the game state.

Two independent records are kept:

- the snapshot table (one ``BoardRecord`` row per member), rewritten for
  the whole roster after every mutation;
- the final lineup file, written once at reveal time and read back on
  startup.
"""

import logging
import os
from pathlib import Path
from typing import Dict, List

from bingo import db
from bingo.models import BoardRecord

logger = logging.getLogger(__name__)


class SnapshotRepository:
    """Reads and writes board states through Flask-SQLAlchemy.

    Must be used inside an application context.
    """

    def load(self) -> Dict[str, dict]:
        states: Dict[str, dict] = {}
        for record in BoardRecord.query.all():
            try:
                states[record.member] = record.to_dict()
            except ValueError as exc:
                logger.warning(f"[snapshot-skip] member={record.member} undecodable row: {exc}")
        return states

    def save(self, states) -> None:
        try:
            for member, state in states.items():
                db.session.merge(BoardRecord.from_state(member, state))
            db.session.commit()
        except Exception:
            db.session.rollback()
            raise

    def clear(self) -> int:
        deleted = BoardRecord.query.delete()
        db.session.commit()
        return deleted


class LineupRecord:
    """Line-oriented text file holding the revealed final lineup."""

    def __init__(self, path):
        self.path = Path(path)

    def load(self) -> List[str]:
        if not self.path.exists():
            return []
        lines = self.path.read_text(encoding='utf-8').splitlines()
        return [line.strip() for line in lines if line.strip()]

    def save(self, lineup: List[str]) -> None:
        # Swap a fully written temp file in so a crash never leaves a partial lineup
        tmp_path = self.path.with_name(self.path.name + '.tmp')
        tmp_path.write_text('\n'.join(lineup), encoding='utf-8')
        os.replace(tmp_path, self.path)

    def clear(self) -> bool:
        if not self.path.exists():
            return False
        self.path.unlink()
        return True
