# -*- coding: utf-8 -*-
"""
2048 sliding-tile puzzle, packaged as an embeddable mini app.
"""

__version__ = "0.1.0"
