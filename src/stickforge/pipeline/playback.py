"""Map wall-clock playback time onto timeline time."""

from __future__ import annotations

import time
from collections.abc import Callable
from typing import NamedTuple

from stickforge.models.enums import PlaybackMode

# Stand-in for a zero-length timeline so the modulo maths stays defined.
MIN_TOTAL_DURATION = 1e-3


class PlaybackPosition(NamedTuple):
    time: float
    finished: bool = False


def map_time(
    elapsed: float,
    total_duration: float,
    mode: PlaybackMode | str = PlaybackMode.LOOP,
) -> PlaybackPosition:
    """Convert *elapsed* wall seconds into effective timeline time.

    ``loop`` wraps, ``reverse`` runs backwards from the end, ``pingpong``
    rises then falls over a ``2 * total`` cycle and ``once`` clamps at the end
    and reports ``finished``.
    """
    mode = PlaybackMode(mode)
    total = total_duration if total_duration > 0 else MIN_TOTAL_DURATION
    elapsed = max(elapsed, 0.0)

    if mode is PlaybackMode.ONCE:
        if elapsed >= total:
            return PlaybackPosition(total, finished=True)
        return PlaybackPosition(elapsed)
    if mode is PlaybackMode.REVERSE:
        return PlaybackPosition(total - (elapsed % total))
    if mode is PlaybackMode.PINGPONG:
        cycle = elapsed % (2 * total)
        return PlaybackPosition(cycle if cycle <= total else 2 * total - cycle)
    return PlaybackPosition(elapsed % total)


class PlaybackClock:
    """Wall-clock anchor for live preview.

    ``start`` resets the anchor; ``stop`` simply stops answering ticks, since
    nothing is queued there is nothing to drain.
    """

    def __init__(
        self,
        mode: PlaybackMode | str = PlaybackMode.LOOP,
        *,
        clock: Callable[[], float] = time.perf_counter,
    ) -> None:
        self.mode = PlaybackMode(mode)
        self._clock = clock
        self._anchor: float | None = None

    @property
    def running(self) -> bool:
        return self._anchor is not None

    def start(self, now: float | None = None) -> None:
        self._anchor = self._clock() if now is None else now

    def stop(self) -> None:
        self._anchor = None

    def elapsed(self, now: float | None = None) -> float:
        if self._anchor is None:
            return 0.0
        current = self._clock() if now is None else now
        return current - self._anchor

    def tick(self, total_duration: float, now: float | None = None) -> PlaybackPosition | None:
        """Timeline position for this display refresh, or ``None`` when stopped."""
        if self._anchor is None:
            return None
        return map_time(self.elapsed(now), total_duration, self.mode)
