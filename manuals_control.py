# -*- coding: utf-8 -*-
"""
Play 2048 in a desktop window.

Arrow keys or mouse swipes move the tiles, ``n`` starts a new game, ``x`` shares the result and ``escape``
closes the window.
"""
import asyncio
import logging
import threading
from argparse import ArgumentParser
from typing import Optional

from miniapp2048.core import direction_from_key, direction_from_swipe
from miniapp2048.envs import GameConfig, GameSession, GameSnapshot
from miniapp2048.host import LocalHostIntegration
from miniapp2048.utils import WindowBoard

_logger = logging.getLogger(__name__)


def redraw(window: WindowBoard, snapshot: GameSnapshot):
    """
    Redraw the game board.

    Parameters
    ----------
    window: WindowBoard
        Class to draw the game board

    snapshot: GameSnapshot
        State to draw
    """
    window.show_snapshot(snapshot)


def share(session: GameSession) -> threading.Thread:
    """
    Share the result in the background so that moves keep flowing while the host answers.

    Parameters
    ----------
    session: GameSession
        The game session
    """
    worker = threading.Thread(target=asyncio.run, args=(session.share_result(),), daemon=True)
    worker.start()
    return worker


def key_handler(session: GameSession, window: WindowBoard, key: Optional[str]):
    """
    Handle the keyboard.

    Parameters
    ----------
    session: GameSession
        The game session

    window: WindowBoard
        Class to draw the game board

    key: str
        Name of the pressed key
    """
    _logger.debug("pressed %s", key)

    if key == "escape":
        window.close()
        return None

    if key == "n":
        session.new_game()
        return None

    if key == "x":
        share(session)
        return None

    direction = direction_from_key(key)
    if direction is not None:
        session.handle_move(direction)
    return None


def swipe_handler(session: GameSession, dx: float, dy: float):
    """Turn a mouse drag into a move."""
    direction = direction_from_swipe(dx, dy, min_distance=session.config.swipe_min_distance)
    if direction is not None:
        session.handle_move(direction)


if __name__ == "__main__":
    parser = ArgumentParser()
    parser.add_argument("--size", type=int, default=4)
    parser.add_argument("--seed", type=int, default=None)
    parser.add_argument("--best-score-path", type=str, default=None)
    parser.add_argument("--log-level", type=str, default="INFO")
    args = parser.parse_args()

    logging.basicConfig(level=args.log_level.upper(), format="%(asctime)s - %(name)s - %(levelname)s - %(message)s")

    options = {"size": args.size}
    if args.best_score_path:
        options["best_score_path"] = args.best_score_path
    config = GameConfig(**options)

    window_board = WindowBoard(title="2048", size=config.size)
    game = GameSession(host=LocalHostIntegration(config.best_score_path), config=config, seed=args.seed)

    game.add_listener(lambda snapshot: redraw(window_board, snapshot))
    window_board.register_key_handler(lambda key: key_handler(game, window_board, key))
    window_board.register_swipe_handler(lambda dx, dy: swipe_handler(game, dx, dy))
    window_board.watch_status(lambda: game.status, timeout=config.status_timeout, on_expire=game.clear_status)

    redraw(window_board, game.snapshot())
    game.signal_ready()

    # Blocking event loop
    window_board.show(block=True)
