from typing import FrozenSet, Iterable, Tuple

GRID_SIZE = 5
FREE_SPACE_INDEX = 12


def _build_lines() -> Tuple[FrozenSet[int], ...]:
    rows = [frozenset(r * GRID_SIZE + c for c in range(GRID_SIZE)) for r in range(GRID_SIZE)]
    cols = [frozenset(r * GRID_SIZE + c for r in range(GRID_SIZE)) for c in range(GRID_SIZE)]
    diagonals = [
        frozenset(i * (GRID_SIZE + 1) for i in range(GRID_SIZE)),  # 0, 6, 12, 18, 24
        frozenset((i + 1) * (GRID_SIZE - 1) for i in range(GRID_SIZE)),  # 4, 8, 12, 16, 20
    ]
    return tuple(rows + cols + diagonals)


WINNING_LINES = _build_lines()


def count_completed_lines(selected_indices: Iterable[int]) -> int:
    """Return how many rows, columns and diagonals are fully selected.

    The free space is always treated as selected, whether or not it is
    present in ``selected_indices``.
    """
    effective = set(selected_indices)
    effective.add(FREE_SPACE_INDEX)
    return sum(1 for line in WINNING_LINES if line <= effective)
