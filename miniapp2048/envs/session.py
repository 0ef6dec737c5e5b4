"""Game session: owns the state of one player's game and talks to the host."""

from __future__ import annotations

import logging
import threading
import time
from dataclasses import dataclass, field
from enum import Enum
from typing import Callable

from numpy import int64, ndarray, zeros
from numpy.random import Generator, default_rng

from miniapp2048.core.gameboard import (
    apply_move,
    check_game_over,
    check_win,
    highest_tile,
    legal_directions,
    new_board,
    spawn_tile,
)
from miniapp2048.core.gamemove import Direction
from miniapp2048.host.integration import HostIntegration, NullHostIntegration, ShareResult

from .config import GameConfig

# ##>: Module logger.
_logger = logging.getLogger(__name__)

SHARE_TEMPLATE = 'I scored {score} points in 2048! My highest tile was {tile}. Can you beat me? Play at {url}'


class StatusState(str, Enum):
    """State of the share status line."""

    IDLE = 'idle'
    PENDING = 'pending'
    SUCCESS = 'success'
    ERROR = 'error'


@dataclass(frozen=True)
class ShareStatus:
    """
    User-visible status of the last share request.

    Attributes
    ----------
    state : StatusState
        Current state of the request.
    message : str
        Text to display, empty when idle.
    posted_at : float
        ``time.monotonic()`` when the status was set.
    """

    state: StatusState = StatusState.IDLE
    message: str = ''
    posted_at: float = 0.0


@dataclass
class GameState:
    """
    Mutable state of one game.

    Attributes
    ----------
    board : ndarray
        The game board.
    score : int
        Score of the current game.
    best_score : int
        Best score across games.
    is_over : bool
        Latched once no move is possible.
    has_won : bool
        Latched the first time the win tile appears.
    """

    board: ndarray
    score: int = 0
    best_score: int = 0
    is_over: bool = False
    has_won: bool = False


@dataclass(frozen=True)
class GameSnapshot:
    """
    Everything a renderer needs to redraw the game.

    ``just_won`` is True only for the move that first reached the win tile.
    """

    board: ndarray
    score: int
    best_score: int
    is_over: bool
    has_won: bool
    highest_tile: int
    just_won: bool = False
    legal_directions: tuple[Direction, ...] = field(default_factory=tuple)
    status: ShareStatus = field(default_factory=ShareStatus)


Listener = Callable[[GameSnapshot], None]


class GameSession:
    """
    Session controller for the 2048 game.

    The session receives one call per discrete user action (arrow key, swipe, "new game", "share"), runs the
    board engine and hands a complete ``GameSnapshot`` to its listeners after every state change. Host
    services (best score persistence, sharing, ready signal) are best effort: their failures are logged and
    never reach the player as crashes.

    Parameters
    ----------
    host : HostIntegration, optional
        Services of the hosting environment (default is a ``NullHostIntegration``).
    config : GameConfig, optional
        Session configuration.
    seed : int, optional
        Seed of the tile spawning generator, for reproducible games.
    """

    def __init__(self, host: HostIntegration | None = None, config: GameConfig | None = None, seed: int | None = None):
        self.host = host if host is not None else NullHostIntegration()
        self.config = config if config is not None else GameConfig()
        self._rng: Generator = default_rng(seed)
        self._listeners: list[Listener] = []
        self._move_lock = threading.Lock()
        self._ready_signalled = False
        self._status = ShareStatus()

        self.state = GameState(board=zeros((self.config.size, self.config.size), dtype=int64))
        self.state.best_score = self._load_best_score()
        self.new_game()

    @property
    def status(self) -> ShareStatus:
        """Current share status."""
        return self._status

    @property
    def is_busy(self) -> bool:
        """True while a move is being processed."""
        return self._move_lock.locked()

    def add_listener(self, listener: Listener) -> None:
        """Register a callback receiving a snapshot after every state change."""
        self._listeners.append(listener)

    def remove_listener(self, listener: Listener) -> None:
        if listener in self._listeners:
            self._listeners.remove(listener)

    def snapshot(self, just_won: bool = False) -> GameSnapshot:
        """
        Build a snapshot of the current state.

        Parameters
        ----------
        just_won : bool, optional
            Whether the last move triggered the win.

        Returns
        -------
        GameSnapshot
            A copy of the board plus the score, flags and share status.
        """
        board = self.state.board
        return GameSnapshot(
            board=board.copy(),
            score=self.state.score,
            best_score=self.state.best_score,
            is_over=self.state.is_over,
            has_won=self.state.has_won,
            highest_tile=highest_tile(board),
            just_won=just_won,
            legal_directions=tuple(legal_directions(board)) if not self.state.is_over else (),
            status=self._status,
        )

    def new_game(self, seed: int | None = None) -> GameSnapshot:
        """
        Start a new game: clear the board, spawn the opening tiles and zero the score.

        The best score survives.
        """
        if seed is not None:
            self._rng = default_rng(seed)

        self.state = GameState(
            board=new_board(
                self.config.size,
                initial_tiles=self.config.initial_tiles,
                rng=self._rng,
                probs=self.config.tile_spawn_probs,
            ),
            best_score=self.state.best_score,
        )
        self._status = ShareStatus()
        _logger.info('New game started (best score %d)', self.state.best_score)

        snapshot = self.snapshot()
        self._notify(snapshot)
        return snapshot

    def handle_move(self, direction: Direction | str) -> GameSnapshot | None:
        """
        Apply one move.

        Parameters
        ----------
        direction : Direction | str
            The move direction.

        Returns
        -------
        GameSnapshot | None
            The new state, or None when the move was ignored.

        Notes
        -----
        - Unknown directions, moves after game over, moves while another move is in flight and moves that
          change nothing are ignored silently.
        - The new tile is spawned before returning, so no second move can interleave with it.
        """
        parsed = Direction.parse(direction)
        if parsed is None:
            _logger.debug('Ignoring unknown direction %r', direction)
            return None
        if self.state.is_over:
            _logger.debug('Ignoring move %s: game is over', parsed.value)
            return None
        if not self._move_lock.acquire(blocking=False):
            _logger.debug('Ignoring move %s: another move is in progress', parsed.value)
            return None

        try:
            result = apply_move(self.state.board, parsed)
            if not result.moved:
                return None

            # ##: Spawn the next tile on the moved copy, then commit both at once.
            spawn_tile(result.board, rng=self._rng, probs=self.config.tile_spawn_probs)
            self.state.board = result.board
            self.state.score += result.score
            self._update_best_score()

            # ##: Terminal conditions, independent of each other.
            just_won = check_win(self.state.board, self.state.has_won, self.config.win_tile)
            if just_won:
                self.state.has_won = True
                _logger.info('Reached %d with a score of %d', self.config.win_tile, self.state.score)
            if check_game_over(self.state.board):
                self.state.is_over = True
                _logger.info('Game over with a score of %d', self.state.score)
        finally:
            self._move_lock.release()

        snapshot = self.snapshot(just_won=just_won)
        self._notify(snapshot)
        return snapshot

    def share_text(self) -> str:
        """Human-readable result of the current game."""
        return SHARE_TEMPLATE.format(
            score=self.state.score, tile=highest_tile(self.state.board), url=self.config.share_url
        )

    async def share_result(self) -> ShareResult:
        """
        Share the current result through the host.

        Returns
        -------
        ShareResult
            The host answer. Failures are reported through the status line and never retried.
        """
        self._set_status(StatusState.PENDING, 'Sharing...')
        text = self.share_text()

        try:
            result = await self.host.share(text)
        except Exception as error:
            _logger.warning('Share failed: %s', error)
            result = ShareResult.failure(str(error))

        if result.ok:
            _logger.info('Result shared')
            self._set_status(StatusState.SUCCESS, 'Score shared!')
        else:
            _logger.warning('Host rejected share: %s', result.error)
            self._set_status(StatusState.ERROR, 'Share failed. Please try again.')
        return result

    def signal_ready(self) -> None:
        """Tell the host the interface is ready. Only the first call reaches the host."""
        if self._ready_signalled:
            return
        self._ready_signalled = True

        try:
            self.host.signal_ready()
        except Exception as error:
            _logger.warning('Host does not support the ready signal: %s', error)

    def clear_status(self) -> None:
        """Hide the share status."""
        self._status = ShareStatus()

    def _set_status(self, state: StatusState, message: str) -> None:
        # ##>: Not pushed to listeners: a share may finish on another thread, renderers poll ``status``.
        self._status = ShareStatus(state=state, message=message, posted_at=time.monotonic())

    def _notify(self, snapshot: GameSnapshot) -> None:
        for listener in list(self._listeners):
            listener(snapshot)

    def _load_best_score(self) -> int:
        try:
            return max(int(self.host.load_best_score()), 0)
        except Exception as error:
            _logger.warning('Best score unavailable, starting from 0: %s', error)
            return 0

    def _update_best_score(self) -> None:
        if self.state.score <= self.state.best_score:
            return

        self.state.best_score = self.state.score
        try:
            self.host.save_best_score(self.state.best_score)
        except Exception as error:
            _logger.warning('Failed to save best score: %s', error)
