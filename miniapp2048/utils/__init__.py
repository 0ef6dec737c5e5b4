# -*- coding: utf-8 -*-
"""
This module provides the Matplotlib window used to play the game on a desktop.
"""

from .windows import WindowBoard

__all__ = ["WindowBoard"]
