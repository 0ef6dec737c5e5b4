# -*- coding: utf-8 -*-
"""
Game session of the 2048 mini app.

This module provides the `GameSession` class, which owns the state of a game, runs the board engine for each
user action and reports every state change to its listeners.
"""

from .config import GameConfig
from .session import GameSession, GameSnapshot, GameState, ShareStatus, StatusState

__all__ = ["GameConfig", "GameSession", "GameSnapshot", "GameState", "ShareStatus", "StatusState"]
