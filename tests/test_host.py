"""
Tests for the local host integration: best score file and shared messages.
"""

import asyncio
import io

import pytest

from miniapp2048.core.gameboard import as_board
from miniapp2048.core.gamemove import Direction
from miniapp2048.envs import GameSession
from miniapp2048.host import LocalHostIntegration


class FailingStream(io.StringIO):
    def write(self, text):
        raise OSError('clipboard unavailable')


@pytest.fixture
def score_path(tmp_path):
    """Location of the best score file inside a nested directory."""
    return tmp_path / 'profile' / 'best_score.json'


def test_missing_file_loads_zero(score_path):
    host = LocalHostIntegration(score_path)

    assert host.load_best_score() == 0


def test_save_then_load(score_path):
    host = LocalHostIntegration(score_path)

    host.save_best_score(2048)

    # ##>: Parent directories are created on demand.
    assert score_path.exists()
    assert LocalHostIntegration(score_path).load_best_score() == 2048


@pytest.mark.parametrize('content', ['not json', '[1, 2]', '{"best_score": "many"}', '{"best_score": -5}'])
def test_unreadable_file_loads_zero(score_path, content):
    score_path.parent.mkdir(parents=True)
    score_path.write_text(content, encoding='utf-8')

    assert LocalHostIntegration(score_path).load_best_score() == 0


def test_share_writes_message(score_path):
    stream = io.StringIO()
    host = LocalHostIntegration(score_path, stream=stream)

    result = asyncio.run(host.share('I scored 4 points'))

    assert result.ok
    assert stream.getvalue() == 'I scored 4 points\n'


def test_share_failure(score_path):
    host = LocalHostIntegration(score_path, stream=FailingStream())

    result = asyncio.run(host.share('I scored 4 points'))

    assert not result.ok
    assert 'clipboard unavailable' in result.error


def test_signal_ready_is_idempotent(score_path):
    host = LocalHostIntegration(score_path)

    host.signal_ready()
    host.signal_ready()


def test_best_score_survives_sessions(score_path):
    """A best score reached in one session is loaded by the next one."""
    host = LocalHostIntegration(score_path, stream=io.StringIO())
    session = GameSession(host=host, seed=0)
    session.state.board = as_board([[8, 8, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0], [0, 0, 0, 0]])
    session.handle_move(Direction.LEFT)

    next_session = GameSession(host=LocalHostIntegration(score_path), seed=1)

    assert next_session.state.best_score == 16
    assert next_session.state.score == 0
