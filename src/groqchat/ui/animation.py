"""Typewriter animation for the welcome banner.

Hides the timing of the banner animation. The sequence is pure state:
the widget asks for the next frame and schedules the one after it, so it
can be stopped or restarted at any point and never touches chat state.
"""

from dataclasses import dataclass

from .config import (
    TYPEWRITER_DELETE_DELAY,
    TYPEWRITER_HOLD_DELAY,
    TYPEWRITER_PAUSE_DELAY,
    TYPEWRITER_TEXT,
    TYPEWRITER_TYPE_DELAY,
)


@dataclass(frozen=True)
class Frame:
    """Text to display and how long to keep it."""

    text: str
    delay: float


class TypewriterSequence:
    """Endless type-then-delete cycle over a word.

    One cycle for "hi" yields: "h", "hi" (held), "h", "" (paused).
    """

    def __init__(
        self,
        text: str = TYPEWRITER_TEXT,
        type_delay: float = TYPEWRITER_TYPE_DELAY,
        delete_delay: float = TYPEWRITER_DELETE_DELAY,
        hold_delay: float = TYPEWRITER_HOLD_DELAY,
        pause_delay: float = TYPEWRITER_PAUSE_DELAY,
    ) -> None:
        if not text:
            raise ValueError("Typewriter text must not be empty")
        self._text = text
        self._cycle = self._build_cycle(type_delay, delete_delay, hold_delay, pause_delay)
        self._position = 0

    def _build_cycle(
        self,
        type_delay: float,
        delete_delay: float,
        hold_delay: float,
        pause_delay: float,
    ) -> list[Frame]:
        length = len(self._text)
        typing = [
            Frame(self._text[:i], hold_delay if i == length else type_delay)
            for i in range(1, length + 1)
        ]
        deleting = [
            Frame(self._text[:i], pause_delay if i == 0 else delete_delay)
            for i in range(length - 1, -1, -1)
        ]
        return typing + deleting

    @property
    def cycle_length(self) -> int:
        return len(self._cycle)

    def next_frame(self) -> Frame:
        """Advance the animation by one frame."""
        frame = self._cycle[self._position]
        self._position = (self._position + 1) % len(self._cycle)
        return frame

    def reset(self) -> None:
        """Restart from an empty banner."""
        self._position = 0
