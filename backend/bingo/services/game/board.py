import random
from typing import List, Optional, Sequence

from .lines import FREE_SPACE_INDEX

FREE_SPACE = 'FREE SPACE'
TERMS_PER_BOARD = 24


def generate_board(terms: Sequence[str], rng: Optional[random.Random] = None) -> List[str]:
    """Draw a board of up to 24 terms with the free space at index 12.

    Pools smaller than 24 terms produce a short board using every term.
    When fewer than 12 terms are drawn the free space is appended instead.
    """
    rng = rng or random
    # Duplicate lines in the pool would put the same term on a board twice
    pool = list(dict.fromkeys(terms))
    board = rng.sample(pool, min(TERMS_PER_BOARD, len(pool)))
    if len(board) >= FREE_SPACE_INDEX:
        board.insert(FREE_SPACE_INDEX, FREE_SPACE)
    else:
        board.append(FREE_SPACE)
    return board
