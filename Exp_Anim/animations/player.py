# Exp_Anim/animations/player.py
"""
AnimationPlayer - per-node playback state.

One active PlayingAnimation plus a stack of AnimationTransitions fading out
behind it. The player only records intent: nothing here samples curves or
touches the scene. The frame pass (apply.py) advances time, counts
completions and writes poses.

Usage:
    player = AnimationPlayer()
    player.play("Walk").repeat()

    # Later: cross-fade to Run over 0.25s (Walk keeps playing while it fades)
    player.play_with_transition("Run", 0.25)
"""

from dataclasses import dataclass, field
from enum import Enum
from typing import List, Optional, Tuple

from ..engine.engine_config import TRANSITION_WEIGHT_EPSILON


class RepeatMode(Enum):
    NEVER = "never"        # finish after one pass
    FOREVER = "forever"    # never finish
    COUNT = "count"        # finish after n passes


@dataclass(frozen=True)
class RepeatAnimation:
    """
    Repetition behavior of an animation.

    Build with RepeatAnimation.never(), .forever() or .count(n).
    """
    mode: RepeatMode = RepeatMode.NEVER
    n: int = 1

    @classmethod
    def never(cls) -> "RepeatAnimation":
        return cls(RepeatMode.NEVER)

    @classmethod
    def forever(cls) -> "RepeatAnimation":
        return cls(RepeatMode.FOREVER)

    @classmethod
    def count(cls, n: int) -> "RepeatAnimation":
        if n < 0:
            raise ValueError(f"Repeat count must be >= 0, got {n}")
        return cls(RepeatMode.COUNT, n)

    def is_finished(self, completions: int) -> bool:
        if self.mode is RepeatMode.FOREVER:
            return False
        if self.mode is RepeatMode.NEVER:
            return completions >= 1
        return completions >= self.n


@dataclass
class PlayingAnimation:
    """
    A single animation instance playing on a player.

    elapsed is signed: reverse playback (speed < 0) walks it down through 0,
    where the frame pass wraps it back to the clip's end.

    path_cache holds, per bone id, the node resolved at each path depth on a
    previous frame. The frame pass resizes it to the clip's path count and
    never clears it.
    """
    animation_clip: Optional[str] = None
    repeat: RepeatAnimation = field(default_factory=RepeatAnimation.never)
    speed: float = 1.0
    elapsed: float = 0.0
    completions: int = 0
    path_cache: List[List[Optional[int]]] = field(default_factory=list)

    def is_finished(self) -> bool:
        """Whether the repeat policy is exhausted (Forever never finishes)."""
        return self.repeat.is_finished(self.completions)


@dataclass
class AnimationTransition:
    """An animation fading out as part of a cross-fade."""
    animation: PlayingAnimation
    weight_decline_per_sec: float
    # Starts at 1.0 and goes down to 0.0 during the fade-out
    current_weight: float = 1.0


class AnimationPlayer:
    """
    Animation controls for one node.

    Every public mutator marks the player as changed. A paused player is
    still evaluated on a frame where it changed, so seeking with
    set_elapsed() while paused shows up immediately.
    """

    __slots__ = ('_paused', '_animation', '_transitions', '_changed')

    def __init__(self):
        self._paused = False
        self._animation = PlayingAnimation()

        # Previous animations we are transitioning away from, oldest first.
        # Usually empty; one entry during a cross-fade; more when a new
        # transition starts before the previous one finished.
        self._transitions: List[AnimationTransition] = []

        # New players count as changed for their first frame
        self._changed = True

    # =========================================================================
    # STARTING CLIPS
    # =========================================================================

    def start(self, handle: str) -> "AnimationPlayer":
        """Start playing a clip, resetting the player and dropping all transitions."""
        self._animation = PlayingAnimation(animation_clip=handle)
        self._transitions.clear()
        self._changed = True
        return self

    def start_with_transition(self, handle: str, transition_duration: float) -> "AnimationPlayer":
        """
        Start playing a clip, cross-fading from the current one.

        The replaced animation keeps playing as a transition whose weight goes
        from 1.0 to 0.0 over transition_duration seconds. Ongoing transitions
        are kept, so fades stack.
        """
        if transition_duration < 0:
            raise ValueError(f"transition_duration must be >= 0, got {transition_duration}")

        previous = self._animation
        self._animation = PlayingAnimation(animation_clip=handle)

        # Zero duration: the old animation drops out on the next pass
        decline = 1.0 / transition_duration if transition_duration > 0 else float('inf')
        self._transitions.append(AnimationTransition(
            animation=previous,
            weight_decline_per_sec=decline,
        ))
        self._changed = True
        return self

    def play(self, handle: str) -> "AnimationPlayer":
        """Like start(), unless this clip is already playing (and not paused)."""
        if not self.is_playing_clip(handle) or self._paused:
            self.start(handle)
        return self

    def play_with_transition(self, handle: str, transition_duration: float) -> "AnimationPlayer":
        """Like start_with_transition(), unless this clip is already playing (and not paused)."""
        if not self.is_playing_clip(handle) or self._paused:
            self.start_with_transition(handle, transition_duration)
        return self

    # =========================================================================
    # QUERIES
    # =========================================================================

    @property
    def animation_clip(self) -> Optional[str]:
        """Handle of the active clip, or None when idle."""
        return self._animation.animation_clip

    @property
    def animation(self) -> PlayingAnimation:
        return self._animation

    @property
    def transitions(self) -> Tuple[AnimationTransition, ...]:
        return tuple(self._transitions)

    def is_playing_clip(self, handle: str) -> bool:
        return self._animation.animation_clip is not None and self._animation.animation_clip == handle

    def is_finished(self) -> bool:
        return self._animation.is_finished()

    @property
    def completions(self) -> int:
        return self._animation.completions

    # =========================================================================
    # REPEAT
    # =========================================================================

    @property
    def repeat_mode(self) -> RepeatAnimation:
        return self._animation.repeat

    @repeat_mode.setter
    def repeat_mode(self, repeat: RepeatAnimation) -> None:
        self.set_repeat(repeat)

    def set_repeat(self, repeat: RepeatAnimation) -> "AnimationPlayer":
        self._animation.repeat = repeat
        self._changed = True
        return self

    def repeat(self) -> "AnimationPlayer":
        """Repeat forever."""
        return self.set_repeat(RepeatAnimation.forever())

    def stop_repeating(self) -> "AnimationPlayer":
        """Finish after the current pass."""
        return self.set_repeat(RepeatAnimation.never())

    # =========================================================================
    # PAUSE / SPEED / SEEK
    # =========================================================================

    def pause(self) -> None:
        self._paused = True
        self._changed = True

    def resume(self) -> None:
        self._paused = False
        self._changed = True

    def is_paused(self) -> bool:
        return self._paused

    @property
    def speed(self) -> float:
        return self._animation.speed

    @speed.setter
    def speed(self, speed: float) -> None:
        self.set_speed(speed)

    def set_speed(self, speed: float) -> "AnimationPlayer":
        """Playback speed multiplier; negative plays in reverse."""
        self._animation.speed = speed
        self._changed = True
        return self

    def is_playback_reversed(self) -> bool:
        return self._animation.speed < 0.0

    @property
    def elapsed(self) -> float:
        return self._animation.elapsed

    @elapsed.setter
    def elapsed(self, elapsed: float) -> None:
        self.set_elapsed(elapsed)

    def set_elapsed(self, elapsed: float) -> "AnimationPlayer":
        """Seek to a time in the active clip (seconds)."""
        self._animation.elapsed = elapsed
        self._changed = True
        return self

    # =========================================================================
    # FRAME PASS HOOKS
    # =========================================================================

    @property
    def is_changed(self) -> bool:
        """Whether a public mutator ran since the last frame pass."""
        return self._changed

    def reset_changed(self) -> None:
        """Called by the frame pass once this player has been evaluated."""
        self._changed = False

    def update_transitions(self, delta_seconds: float) -> None:
        """
        Fade every transition by its decline rate; drop the ones that reached 0.

        "Reached 0" means a weight at or below TRANSITION_WEIGHT_EPSILON
        (1e-6), so float drift in the linear fade cannot leave a transition
        alive at a weight like 5.5e-17.
        """
        kept = []
        for transition in self._transitions:
            transition.current_weight -= transition.weight_decline_per_sec * delta_seconds
            # NaN (inf * 0) also fails this test and is dropped
            if transition.current_weight > TRANSITION_WEIGHT_EPSILON:
                kept.append(transition)
        self._transitions[:] = kept

    def __repr__(self) -> str:
        state = "paused" if self._paused else "playing"
        return (f"AnimationPlayer({self._animation.animation_clip!r}, {state}, "
                f"elapsed={self._animation.elapsed:.3f}, transitions={len(self._transitions)})")
