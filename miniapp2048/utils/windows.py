# -*- coding: utf-8 -*-
"""
Graphical User Interface for the 2048 mini app.

This module provides a Matplotlib window standing in for the host frame: it draws game snapshots (tiles,
score, best score, win / game over banner and share status) and captures the player's input, arrow keys as
well as mouse drags treated as swipe gestures.
"""
import time
from typing import Callable, Optional

from matplotlib import pyplot as plt
from matplotlib.backend_bases import Event, KeyEvent, MouseEvent

from miniapp2048.core.gamemove import Direction
from miniapp2048.envs.session import GameSnapshot, ShareStatus, StatusState


class WindowBoard:
    """
    A class for rendering the 2048 mini app with Matplotlib.

    Methods
    -------
    show_snapshot(snapshot: GameSnapshot)
        Redraw the whole game from a snapshot.
    show_status(status: ShareStatus)
        Update the share status line.
    register_key_handler(key_handler: Callable)
        Register a function receiving the name of each pressed key.
    register_swipe_handler(swipe_handler: Callable)
        Register a function receiving the (dx, dy) travel of each mouse drag, in screen coordinates.
    watch_status(poll: Callable, timeout: float, on_expire: Callable)
        Poll the share status on a canvas timer.
    show(block: bool = True)
        Display the game window.
    close()
        Close the game window.
    """

    # ##: Colors mapping for different tile values.
    COLORS = {
        0: "#CCC0B3",
        2: "#EEE4DA",
        4: "#ECE0C8",
        8: "#ECB280",
        16: "#EC8D53",
        32: "#F57C5F",
        64: "#E95937",
        128: "#F3D96B",
        256: "#F2D04A",
        512: "#E5BF2E",
        1024: "#E2B814",
        2048: "#EBC502",
        4096: "#00A2D8",
        8192: "#9ED682",
    }

    # ##: Arrow shown in the header for each available move.
    ARROWS = {
        Direction.LEFT: "\u2190",
        Direction.UP: "\u2191",
        Direction.RIGHT: "\u2192",
        Direction.DOWN: "\u2193",
    }

    # ##: Colors of the share status line.
    STATUS_COLORS = {
        StatusState.IDLE: "#776E65",
        StatusState.PENDING: "#776E65",
        StatusState.SUCCESS: "#3C8D2F",
        StatusState.ERROR: "#C0392B",
    }

    def __init__(self, title: str, size: int):
        """
        Initialize the game window.

        Parameters
        ----------
        title : str
            The title of the window.
        size : int
            The size of the game board (e.g., 4 for a 4x4 board).
        """
        self.fig = plt.figure(facecolor="#FAF8EF")
        self.fig.canvas.manager.set_window_title(title)
        self._setup_axes(size)
        self._setup_texts()
        self.closed = False
        self._press: Optional[tuple[float, float]] = None
        self._status = ShareStatus()
        self._timer = None
        self.fig.canvas.mpl_connect("close_event", self._close_handler)

    def _setup_axes(self, size: int):
        """
        Create one axe per tile.

        Parameters
        ----------
        size : int
            The size of the game board.
        """
        self.fig.subplots_adjust(left=0.02, bottom=0.1, right=0.98, top=0.86, wspace=0.05, hspace=0.05)

        self.texts = []
        self.axes = [self.fig.add_subplot(size, size, r * size + c + 1) for r in range(size) for c in range(size)]
        for ax in self.axes:
            text = ax.text(0.5, 0.5, "", ha="center", va="center", fontsize="x-large", fontweight="demibold")
            self.texts.append(text)
            ax.set_xticks([])
            ax.set_yticks([])

    def _setup_texts(self):
        """Create the score header, the banner and the status line."""
        self.header = self.fig.text(0.5, 0.93, "", ha="center", va="center", fontsize="large", color="#776E65")
        self.banner = self.fig.text(
            0.5, 0.48, "", ha="center", va="center", fontsize="xx-large", fontweight="bold", color="#776E65"
        )
        self.banner.set_zorder(10)
        self.status_text = self.fig.text(0.5, 0.04, "", ha="center", va="center", fontsize="medium")

    def _close_handler(self, event: Optional[Event] = None):
        """Set the closed flag when the window is closed."""
        self.closed = True
        if self._timer is not None:
            self._timer.stop()

    def show_snapshot(self, snapshot: GameSnapshot):
        """
        Redraw the game.

        Parameters
        ----------
        snapshot : GameSnapshot
            The complete state to display.

        Notes
        -----
        - The "You win!" banner only shows on the move that reached the win tile; "Game over!" stays until a
          new game starts.
        """
        for ax, text, value in zip(self.axes, self.texts, snapshot.board.flat):
            value = int(value)
            text.set_text(str(value) if value != 0 else "")
            ax.set_facecolor(self.COLORS.get(value, "#3C3A32"))
            text.set_color("#776E65" if value in (2, 4) else "#F9F6F2")

        moves = " ".join(self.ARROWS[direction] for direction in snapshot.legal_directions)
        self.header.set_text(f"Score: {snapshot.score}    Best: {snapshot.best_score}\nMoves: {moves or 'none'}")
        if snapshot.is_over:
            self.banner.set_text(f"Game over!\nHighest tile: {snapshot.highest_tile}")
        elif snapshot.just_won:
            self.banner.set_text(f"You win!\nScore: {snapshot.score}")
        else:
            self.banner.set_text("")

        self.show_status(snapshot.status)

    def show_status(self, status: ShareStatus):
        """Update the share status line."""
        self._status = status
        self.status_text.set_text(status.message)
        self.status_text.set_color(self.STATUS_COLORS[status.state])
        self._redraw()

    def _redraw(self):
        self.fig.canvas.draw_idle()
        self.fig.canvas.flush_events()

    def register_key_handler(self, key_handler: Callable[[str], None]):
        """
        Register a keyboard event handler.

        Parameters
        ----------
        key_handler : Callable
            A function receiving the Matplotlib name of the pressed key.
        """

        def _on_key(event: KeyEvent):
            key_handler(event.key)

        self.fig.canvas.mpl_connect("key_press_event", _on_key)

    def register_swipe_handler(self, swipe_handler: Callable[[float, float], None]):
        """
        Register a swipe handler fed by mouse drags.

        Parameters
        ----------
        swipe_handler : Callable
            A function receiving the horizontal and vertical travel of the drag, in pixels, with the vertical
            axis pointing down as on a touch screen.
        """

        def _on_press(event: MouseEvent):
            self._press = (event.x, event.y)

        def _on_release(event: MouseEvent):
            if self._press is None:
                return
            start_x, start_y = self._press
            self._press = None
            # ##>: Matplotlib pixels grow upwards, touch screens grow downwards.
            swipe_handler(event.x - start_x, start_y - event.y)

        self.fig.canvas.mpl_connect("button_press_event", _on_press)
        self.fig.canvas.mpl_connect("button_release_event", _on_release)

    def watch_status(
        self, poll: Callable[[], ShareStatus], timeout: float, on_expire: Callable[[], None], interval: int = 200
    ):
        """
        Poll the share status on the GUI thread.

        A share runs in the background; polling keeps every drawing call on the Matplotlib thread.

        Parameters
        ----------
        poll : Callable
            Returns the current status.
        timeout : float
            Seconds after which a finished status is hidden.
        on_expire : Callable
            Called when a finished status expires.
        interval : int, optional
            Polling interval in milliseconds (default is 200).
        """

        def _tick():
            status = poll()
            if status != self._status:
                self.show_status(status)
            finished = status.state in (StatusState.SUCCESS, StatusState.ERROR)
            if finished and time.monotonic() - status.posted_at > timeout:
                on_expire()

        self._timer = self.fig.canvas.new_timer(interval=interval)
        self._timer.add_callback(_tick)
        self._timer.start()

    def show(self, block: bool = True):
        """
        Show the window and start the Matplotlib event loop.

        Parameters
        ----------
        block : bool, optional
            If True, the event loop is blocking; otherwise, it's non-blocking (default is True).
        """
        if not block:
            plt.ion()
        plt.show()

    def close(self):
        """Close the window."""
        plt.close(self.fig)
        self._close_handler()
