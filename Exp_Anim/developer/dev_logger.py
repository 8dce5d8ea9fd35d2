# Exp_Anim/developer/dev_logger.py
"""
Developer Logger - Fast Memory Buffer Logging System

Every diagnostic raised while animating (missing path, ancestor conflict,
missing clip) lands here. Nothing is printed during a frame; the buffer is
exported in one batch when the session ends.

Performance: ~1μs per log call (list append + dict creation)

The logger is an instance owned by the caller, never a module global, so
several scenes (or tests) can log side by side.

Usage:
    from Exp_Anim.developer.dev_logger import DevLogger

    logger = DevLogger()
    logger.start_session()

    # During a frame (fast - just appends to buffer)
    logger.log_game("ANIM-PATH", "PATH_MISS root=3 path='Armature/Hips' part='Hips'")

    # Worker jobs return their logs; merge them on the calling thread
    logger.log_worker_messages([("ANIM-GUARD", "ANCESTOR_CONFLICT player=7 ancestor=2")])

    # When the session stops
    logger.export_game_log("anim_diagnostics.txt")
    logger.clear_log()
"""

import sys
import time
from typing import Dict, Iterable, List, Optional, Tuple

from .dev_debug_gate import DebugGate

# ══════════════════════════════════════════════════════════════════════════════
# CATEGORY MAPPING (log category -> debug property name)
# ══════════════════════════════════════════════════════════════════════════════

_CATEGORY_MAP = {
    'ANIMATIONS': 'animations',     # Frame summaries, session events
    'ANIM-PATH': 'anim_paths',      # Entity path resolution misses
    'ANIM-GUARD': 'anim_guard',     # Nested player (aliasing) conflicts
    'ANIM-CACHE': 'anim_cache',     # Clip handle lookups that failed
}


def _extract_message_key(category: str, message: str) -> str:
    """
    Extract a unique key for frequency gating from a log message.

    The key is "property:PREFIX" where PREFIX is the first word of the message,
    so PATH_MISS and CLIP_MISSING never share a gate.

    Examples:
        ("ANIM-PATH", "PATH_MISS root=1") -> "anim_paths:PATH_MISS"
        ("ANIM-GUARD", "ANCESTOR_CONFLICT player=7") -> "anim_guard:ANCESTOR_CONFLICT"
    """
    first_space = message.find(' ')
    if first_space > 0:
        prefix = message[:first_space]
    else:
        prefix = message[:20] if len(message) > 20 else message

    debug_property = _CATEGORY_MAP.get(category, category.lower())
    return f"{debug_property}:{prefix}"


class DevLogger:
    """
    In-memory diagnostics buffer with per-message-type frequency gating.
    """

    def __init__(self, gate: Optional[DebugGate] = None):
        self.gate = gate if gate is not None else DebugGate()

        self._log_buffer: List[Dict] = []

        # Session tracking
        self._session_start_time: Optional[float] = None
        self._current_frame: int = 0

        # Performance stats
        self._total_logs: int = 0
        self._logs_per_category: Dict[str, int] = {}

    def start_session(self) -> None:
        """Call when playback starts - resets session tracking."""
        self._session_start_time = time.perf_counter()
        self._current_frame = 0
        self._total_logs = 0
        self._logs_per_category.clear()
        self._log_buffer.clear()
        self.gate.reset_debug_timers()

        print("[DevLogger] Session started - fast logging active")

    def increment_frame(self) -> None:
        """Call once per frame to track frame numbers."""
        self._current_frame += 1

    @property
    def current_frame(self) -> int:
        return self._current_frame

    @property
    def entries(self) -> List[Dict]:
        return list(self._log_buffer)

    def _passes_gate(self, category: str, message: str) -> bool:
        debug_property = _CATEGORY_MAP.get(category)
        if not debug_property:
            return True
        message_key = _extract_message_key(category, message)
        return self.gate.should_print_debug(debug_property, message_key)

    def _append(self, category: str, message: str) -> None:
        self._log_buffer.append({
            'frame': self._current_frame,
            'time': time.perf_counter(),
            'category': category,
            'message': message
        })
        self._total_logs += 1
        self._logs_per_category[category] = self._logs_per_category.get(category, 0) + 1

    def log_game(self, category: str, message: str) -> None:
        """
        Fast in-memory logging with frequency gating. Zero I/O during a frame.

        Args:
            category: Log category (e.g., "ANIM-PATH", "ANIM-GUARD")
            message: The log message; its first word is the gating key
        """
        if not self._passes_gate(category, message):
            return
        self._append(category, message)

    def log_worker_messages(self, worker_logs: Iterable[Tuple[str, str]]) -> None:
        """
        Log messages collected by per-player jobs.

        Jobs never touch the buffer directly; they return (category, message)
        tuples and the calling thread merges them here in a fixed order.
        """
        for category, message in worker_logs:
            if not self._passes_gate(category, message):
                continue
            self._append(category, message)

    def _export_lines(self) -> List[str]:
        """Buffer as text: a summary block, then the entries grouped by frame."""
        start_time = self._session_start_time if self._session_start_time else self._log_buffer[0]['time']
        span = self._log_buffer[-1]['time'] - start_time

        lines = [
            "Exp_Anim diagnostics",
            f"frames {self._current_frame} | entries {self._total_logs} | span {span:.3f}s",
        ]
        width = max(len(cat) for cat in self._logs_per_category)
        for cat, count in sorted(self._logs_per_category.items()):
            lines.append(f"  {cat:<{width}}  {count}")

        frame = None
        for entry in self._log_buffer:
            if entry['frame'] != frame:
                frame = entry['frame']
                lines.append("")
                lines.append(f"frame {frame:04d}")
            lines.append(f"  +{entry['time'] - start_time:.3f}s {entry['category']:<{width}}  {entry['message']}")

        return lines

    def export_game_log(self, filepath: str) -> bool:
        """
        Write entire buffer to file. Call when the session stops.

        Returns:
            True if successful, False if the buffer is empty or the write failed
        """
        if not self._log_buffer:
            print("[DevLogger] No logs to export (buffer empty)")
            return False

        try:
            with open(filepath, 'w', encoding='utf-8') as f:
                f.write("\n".join(self._export_lines()) + "\n")
        except OSError as e:
            print(f"[DevLogger] ERROR exporting log: {e}")
            return False

        print(f"[DevLogger] Exported {self._total_logs} logs to: {filepath}")
        return True

    def clear_log(self) -> None:
        """Clear the buffer. Call after export to prepare for the next session."""
        self._log_buffer.clear()

    def get_buffer_size(self) -> int:
        """Get current number of entries in buffer."""
        return len(self._log_buffer)

    def get_memory_usage_mb(self) -> float:
        """Estimate memory usage of buffer in MB."""
        return sys.getsizeof(self._log_buffer) / (1024 * 1024)

    def get_stats(self) -> Dict:
        """Get current session statistics."""
        return {
            'total_logs': self._total_logs,
            'buffer_size': len(self._log_buffer),
            'current_frame': self._current_frame,
            'categories': dict(self._logs_per_category),
            'memory_mb': self.get_memory_usage_mb()
        }
