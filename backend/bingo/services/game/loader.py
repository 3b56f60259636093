import logging
from pathlib import Path
from typing import List

logger = logging.getLogger(__name__)


def load_lines(path) -> List[str]:
    """Read a list file: one entry per line, blanks dropped, order kept.

    A missing or unreadable file yields an empty list so the server can
    still start.
    """
    try:
        content = Path(path).read_text(encoding='utf-8')
    except (OSError, UnicodeDecodeError) as exc:
        logger.warning(f"[startup] could not read {path}: {exc}")
        return []
    return [line.strip() for line in content.splitlines() if line.strip()]
