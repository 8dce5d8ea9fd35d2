# Exp_Anim/developer/dev_debug_gate.py
"""
Debug output frequency gating system.

Prevents log spam by limiting diagnostics to a master frequency (1-30 Hz).

IMPORTANT: Gating is per MESSAGE KEY, not per category. This ensures that
different log types within the same category (e.g., PATH_MISS vs PATH_STALE)
don't block each other.
"""

import time
from typing import Dict, Iterable, Optional

from ..engine.engine_config import DEBUG_CATEGORIES, DEBUG_MASTER_HZ


class DebugGate:
    """
    Per-key frequency gate.

    Args:
        enabled: Debug property names that may log (e.g. "anim_paths")
        master_hz: Maximum entries per second per message key (30 = no gating)
    """

    def __init__(
        self,
        enabled: Optional[Iterable[str]] = None,
        master_hz: int = DEBUG_MASTER_HZ
    ):
        self.enabled = set(DEBUG_CATEGORIES if enabled is None else enabled)
        self.master_hz = master_hz

        # Track last print time for each unique message key
        # Key format: "category" for plain calls, "category:prefix" for log_game calls
        self._last_print_times: Dict[str, float] = {}

    def enable(self, category: str) -> None:
        self.enabled.add(category)

    def disable(self, category: str) -> None:
        self.enabled.discard(category)

    def should_print_debug(self, category: str, message_key: Optional[str] = None) -> bool:
        """
        Check if debug output should be recorded based on the master frequency gate.

        Args:
            category: Debug property name (e.g., "animations", "anim_paths")
            message_key: Optional unique key for this message type. If provided, gating is
                         per message_key instead of per category.

        Returns:
            True if enough time has passed since the last entry, False otherwise
        """
        if category not in self.enabled:
            return False

        # Special case: 30Hz = every frame (no gating)
        if self.master_hz >= 30:
            return True

        time_threshold = 1.0 / max(self.master_hz, 1)
        gate_key = message_key if message_key else category

        current_time = time.perf_counter()
        last_time = self._last_print_times.get(gate_key)

        if last_time is None or (current_time - last_time) >= time_threshold:
            self._last_print_times[gate_key] = current_time
            return True

        return False

    def reset_debug_timers(self) -> None:
        """Reset all debug timers (called on session start)."""
        self._last_print_times.clear()
