"""
Board engine for the 2048 game: row collapsing, direction normalisation, tile spawning and terminal checks.
"""

from __future__ import annotations

from typing import Callable, NamedTuple

from numpy import all as np_all
from numpy import any as np_any
from numpy import argwhere, array, fliplr, int64, ndarray, rot90, zeros
from numpy.random import PCG64DXSM, Generator, default_rng

from miniapp2048.core.gamemove import Direction

# ##: Tile spawn probabilities for 2048 game (90% for 2, 10% for 4).
TILE_SPAWN_PROBS: dict[int, float] = {2: 0.9, 4: 0.1}

# ##: Tile that wins the game.
WIN_TILE = 2048

# ##: Module-level generator for performance (avoids repeated initialization).
_GENERATOR = default_rng(PCG64DXSM())

Transform = Callable[[ndarray], ndarray]


class MoveResult(NamedTuple):
    """
    Outcome of a move.

    Attributes
    ----------
    board : ndarray
        The board after sliding and merging (no tile spawned yet).
    score : int
        Sum of the merged values.
    moved : bool
        Whether any tile moved or merged.
    """

    board: ndarray
    score: int
    moved: bool


def _identity(board: ndarray) -> ndarray:
    return board.copy()


def _reverse_rows(board: ndarray) -> ndarray:
    return fliplr(board).copy()


def _transpose(board: ndarray) -> ndarray:
    return board.T.copy()


def _rotate_clockwise(board: ndarray) -> ndarray:
    return rot90(board, k=-1).copy()


def _rotate_counter_clockwise(board: ndarray) -> ndarray:
    return rot90(board, k=1).copy()


# ##: Each direction maps onto "slide towards the start of each row" and back.
ORIENTATIONS: dict[Direction, tuple[Transform, Transform]] = {
    Direction.LEFT: (_identity, _identity),
    Direction.RIGHT: (_reverse_rows, _reverse_rows),
    Direction.UP: (_transpose, _transpose),
    Direction.DOWN: (_rotate_clockwise, _rotate_counter_clockwise),
}


def orient(direction: Direction, board: ndarray) -> ndarray:
    """
    Re-orient the board so that a move in ``direction`` becomes a left slide of every row.

    Parameters
    ----------
    direction : Direction
        The move direction.
    board : ndarray
        The game board in screen coordinates.

    Returns
    -------
    ndarray
        A new, re-oriented board.
    """
    forward, _ = ORIENTATIONS[direction]
    return forward(board)


def deorient(direction: Direction, board: ndarray) -> ndarray:
    """
    Restore screen coordinates on a board produced by ``orient``.

    Parameters
    ----------
    direction : Direction
        The move direction used for ``orient``.
    board : ndarray
        A re-oriented board.

    Returns
    -------
    ndarray
        A new board such that ``deorient(d, orient(d, b))`` equals ``b``.
    """
    _, backward = ORIENTATIONS[direction]
    return backward(board)


def collapse_row(row: ndarray) -> tuple[ndarray, int]:
    """
    Slide a row towards its start and merge adjacent equal values.

    Parameters
    ----------
    row : ndarray
        A 1D array representing one row of the oriented board.

    Returns
    -------
    new_row : ndarray
        The collapsed row, right-padded with zeros to the original length.
    score : int
        The total value of the merges.

    Notes
    -----
    - Zeros (empty cells) are dropped before merging.
    - Merging is a single left-to-right pass: a merged cell is never merged again in the same move,
      so ``[2, 2, 2, 2]`` becomes ``[4, 4, 0, 0]``.
    - The sum of the values is preserved.
    """
    non_zero = row[row != 0]
    result = zeros(len(row), dtype=row.dtype)
    score = 0

    # ##: Iterate over the tiles and merge pairs.
    i, j = 0, 0
    while i < len(non_zero):
        if i + 1 < len(non_zero) and non_zero[i] == non_zero[i + 1]:
            merged = non_zero[i] * 2
            result[j] = merged
            score += int(merged)
            i += 2
        else:
            result[j] = non_zero[i]
            i += 1
        j += 1

    return result, score


def apply_move(board: ndarray, direction: Direction | str) -> MoveResult:
    """
    Slide and merge the whole board in a direction.

    Parameters
    ----------
    board : ndarray
        The current state of the game board. Not modified.
    direction : Direction | str
        The move direction.

    Returns
    -------
    MoveResult
        The new board, the score gained and whether anything moved.

    Notes
    -----
    - No tile is spawned here; the caller spawns one only when ``moved`` is True.
    - An unknown direction leaves the board unchanged.
    - When nothing moves, the returned board equals the input and the score is 0.
    """
    parsed = Direction.parse(direction)
    if parsed is None:
        return MoveResult(board.copy(), 0, False)

    oriented = orient(parsed, board)
    collapsed = zeros_like_board(oriented)
    score, moved = 0, False

    for i, row in enumerate(oriented):
        new_row, row_score = collapse_row(row)
        moved = moved or not (new_row == row).all()
        collapsed[i] = new_row
        score += row_score

    if not moved:
        return MoveResult(board.copy(), 0, False)
    return MoveResult(deorient(parsed, collapsed), score, True)


def _can_slide_left(oriented: ndarray) -> bool:
    # ##>: A row moves when an empty cell precedes a tile or two equal tiles touch.
    head, tail = oriented[:, :-1], oriented[:, 1:]
    gap_before_tile = (head == 0) & (tail != 0)
    pair = (head != 0) & (head == tail)
    return bool(np_any(gap_before_tile | pair))


def legal_directions(board: ndarray) -> list[Direction]:
    """
    Directions in which a move would change the board, in (left, up, right, down) order.

    Each direction is tested through its ``orient`` transform, so the answer always agrees with ``apply_move``.
    """
    return [direction for direction in Direction if _can_slide_left(orient(direction, board))]


def zeros_like_board(board: ndarray) -> ndarray:
    """Empty board with the shape of ``board``, always stored as int64."""
    return zeros(board.shape, dtype=int64)


def _as_generator(rng: Generator | int | None) -> Generator:
    if rng is None:
        return _GENERATOR
    if isinstance(rng, Generator):
        return rng
    return default_rng(rng)


def spawn_tile(
    board: ndarray, rng: Generator | int | None = None, probs: dict[int, float] | None = None
) -> bool:
    """
    Put a new tile on a random empty cell.

    Parameters
    ----------
    board : ndarray
        The current state of the game board. **Modified in-place.**
    rng : Generator | int, optional
        Random generator or seed; the module-level generator is used by default.
    probs : dict[int, float], optional
        Probability of each tile value (default is ``TILE_SPAWN_PROBS``).

    Returns
    -------
    bool
        True if a tile was placed, False if the board is full.

    Notes
    -----
    - The cell is chosen uniformly among the empty cells.
    - The value is drawn independently of the cell: 2 with probability 0.9, 4 with probability 0.1.
    - A full board is not an error; it is the terminal signal also reported by ``check_game_over``.
    """
    probs = probs or TILE_SPAWN_PROBS
    available_cells = argwhere(board == 0)
    if len(available_cells) == 0:
        return False

    generator = _as_generator(rng)
    cell = available_cells[generator.integers(len(available_cells))]
    value = generator.choice(list(probs), p=list(probs.values()))
    board[tuple(cell)] = value
    return True


def new_board(
    size: int = 4, initial_tiles: int = 2, rng: Generator | int | None = None, probs: dict[int, float] | None = None
) -> ndarray:
    """
    Create an empty board and spawn the opening tiles.

    Parameters
    ----------
    size : int, optional
        The size of the square grid (default is 4).
    initial_tiles : int, optional
        Number of tiles to spawn (default is 2).
    rng : Generator | int, optional
        Random generator or seed.
    probs : dict[int, float], optional
        Probability of each tile value.

    Returns
    -------
    ndarray
        The new game board.
    """
    generator = _as_generator(rng)
    board = zeros((size, size), dtype=int64)
    for _ in range(initial_tiles):
        spawn_tile(board, rng=generator, probs=probs)
    return board


def check_win(board: ndarray, already_won: bool, win_tile: int = WIN_TILE) -> bool:
    """
    Edge-triggered win check.

    Parameters
    ----------
    board : ndarray
        The current state of the game board.
    already_won : bool
        Whether the win was already reported in this game.
    win_tile : int, optional
        The winning tile value (default is 2048).

    Returns
    -------
    bool
        True only the first time a cell holds the win tile.
    """
    if already_won:
        return False
    return bool(np_any(board == win_tile))


def check_game_over(board: ndarray) -> bool:
    """
    Check if no move is possible anymore.

    Parameters
    ----------
    board : ndarray
        The current state of the game board.

    Returns
    -------
    bool
        True if the game is over (no moves possible), False otherwise.

    Notes
    -----
    The game is over when there are no empty cells AND no horizontally or vertically adjacent cells have the
    same value. Diagonals do not count.
    """
    return bool(
        np_all(board != 0) and not np_any(board[:-1] == board[1:]) and not np_any(board[:, :-1] == board[:, 1:])
    )


def highest_tile(board: ndarray) -> int:
    """Value of the highest tile, 0 on an empty board."""
    return int(board.max()) if board.size else 0


def as_board(values) -> ndarray:
    """
    Convert nested sequences into a square int64 board.

    Raises
    ------
    ValueError
        If the values do not form a square grid.
    """
    board = array(values, dtype=int64)
    if board.ndim != 2 or board.shape[0] != board.shape[1]:
        raise ValueError(f'board must be square, got shape {board.shape}')
    return board
