# Exp_Anim/developer/__init__.py
"""
Developer Tools Module

Diagnostics buffer and frequency gating for the animation engine.
"""

from .dev_debug_gate import DebugGate
from .dev_logger import DevLogger

__all__ = [
    'DebugGate',
    'DevLogger',
]
