"""
Tests for the Matplotlib window, drawn on the non-interactive Agg backend.
"""

import inspect
from unittest import TestCase, main
from unittest.mock import patch

import matplotlib

matplotlib.use("Agg")

from matplotlib import pyplot as plt  # noqa: E402

from miniapp2048.core.gameboard import as_board  # noqa: E402
from miniapp2048.envs import GameConfig, GameSession  # noqa: E402
from miniapp2048.utils import WindowBoard  # noqa: E402


class TestWindowBoard(TestCase):
    def setUp(self):
        self.window = WindowBoard("2048", 2)
        self.session = GameSession(config=GameConfig(size=2, tile_spawn_probs={2: 1.0}), seed=0)

    def tearDown(self):
        plt.close("all")

    def test_header_lists_available_moves(self):
        self.session.state.board = as_board([[2, 0], [0, 0]])

        self.window.show_snapshot(self.session.snapshot())

        header = self.window.header.get_text()
        self.assertIn("Score: 0", header)
        # ##>: Only right and down move a tile sitting in the top-left corner.
        self.assertTrue(header.endswith("Moves: → ↓"))

    def test_header_without_moves(self):
        self.session.state.board = as_board([[2, 4], [4, 2]])
        self.session.state.is_over = True

        self.window.show_snapshot(self.session.snapshot())

        self.assertTrue(self.window.header.get_text().endswith("Moves: none"))
        self.assertIn("Game over!", self.window.banner.get_text())

    def test_tiles_are_drawn(self):
        self.session.state.board = as_board([[2, 0], [0, 2048]])

        self.window.show_snapshot(self.session.snapshot())

        self.assertEqual([text.get_text() for text in self.window.texts], ["2", "", "", "2048"])

    def test_show_is_bound_to_the_window(self):
        self.assertNotIsInstance(inspect.getattr_static(WindowBoard, "show"), classmethod)

        with patch("miniapp2048.utils.windows.plt.show") as show:
            self.window.show(block=True)

        show.assert_called_once_with()

    def test_close_sets_flag(self):
        self.window.close()

        self.assertTrue(self.window.closed)


if __name__ == "__main__":
    main()
