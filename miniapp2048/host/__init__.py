# -*- coding: utf-8 -*-
"""
Host integrations: ready signal, result sharing and best score persistence.
"""

from .integration import HostIntegration, LocalHostIntegration, NullHostIntegration, ShareResult

__all__ = ["HostIntegration", "LocalHostIntegration", "NullHostIntegration", "ShareResult"]
