"""
Boundary between the game session and the environment hosting it.

The session only ever talks to a ``HostIntegration``: it signals readiness, shares a result text and loads or
saves the best score. Hosts decide how (frame messages, a clipboard, a file on disk, nothing at all).
"""

from __future__ import annotations

import json
import logging
import sys
from abc import ABC, abstractmethod
from dataclasses import dataclass
from pathlib import Path
from typing import TextIO

# ##>: Module logger.
_logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class ShareResult:
    """
    Outcome of a share request.

    Attributes
    ----------
    ok : bool
        Whether the host accepted the message.
    error : str | None
        Reason of the failure, None on success.
    """

    ok: bool
    error: str | None = None

    @classmethod
    def success(cls) -> ShareResult:
        return cls(ok=True)

    @classmethod
    def failure(cls, error: str) -> ShareResult:
        return cls(ok=False, error=error)


class HostIntegration(ABC):
    """
    Services a host environment provides to the game.
    """

    @abstractmethod
    def signal_ready(self) -> None:
        """Tell the host that the interface finished initialising."""

    @abstractmethod
    async def share(self, text: str) -> ShareResult:
        """
        Publish a human-readable result.

        Parameters
        ----------
        text : str
            The message to share.

        Returns
        -------
        ShareResult
            Whether the host accepted the message.
        """

    @abstractmethod
    def load_best_score(self) -> int:
        """Return the persisted best score, 0 when there is none."""

    @abstractmethod
    def save_best_score(self, score: int) -> None:
        """Persist a new best score."""


class NullHostIntegration(HostIntegration):
    """
    Host that provides nothing: no persistence, no sharing.
    """

    def signal_ready(self) -> None:
        pass

    async def share(self, text: str) -> ShareResult:
        return ShareResult.failure('sharing is not available in this host')

    def load_best_score(self) -> int:
        return 0

    def save_best_score(self, score: int) -> None:
        pass


class LocalHostIntegration(HostIntegration):
    """
    Host backed by the local machine.

    The best score lives in a small JSON file and shared messages are written to a text stream, the way a
    browser falls back to the clipboard when no social client is around.

    Parameters
    ----------
    path : Path | str
        Location of the best score file.
    stream : TextIO, optional
        Where shared messages are written (default is ``sys.stdout``).
    """

    def __init__(self, path: Path | str, stream: TextIO | None = None):
        self.path = Path(path)
        self.stream = stream if stream is not None else sys.stdout
        self._ready = False

    def signal_ready(self) -> None:
        if self._ready:
            return
        self._ready = True
        _logger.info('Host ready: best score stored in %s', self.path)

    async def share(self, text: str) -> ShareResult:
        try:
            self.stream.write(text + '\n')
            self.stream.flush()
        except OSError as error:
            _logger.warning('Failed to share result: %s', error)
            return ShareResult.failure(str(error))
        return ShareResult.success()

    def load_best_score(self) -> int:
        if not self.path.exists():
            return 0

        try:
            payload = json.loads(self.path.read_text(encoding='utf-8'))
            return max(int(payload.get('best_score', 0)), 0)
        except (OSError, ValueError, TypeError, AttributeError) as error:
            _logger.warning('Ignoring unreadable best score file %s: %s', self.path, error)
            return 0

    def save_best_score(self, score: int) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        self.path.write_text(json.dumps({'best_score': int(score)}), encoding='utf-8')
