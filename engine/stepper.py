"""
stepper.py — Step-by-Step Playback Engine
==========================================
Algorithms only produce Snapshots; they never sleep.  Pacing belongs to
whoever consumes them, and this module holds the three consumers:

  • paced()   – blocking: re-yield each Snapshot, then sleep its delay
  • apaced()  – the same for asyncio code (await asyncio.sleep)
  • Stepper   – a UI-facing state machine with rewind, play/pause and a
                tick() that advances once the current Snapshot's delay
                has elapsed

Stepper state machine:
    IDLE  →  start()  →  PAUSED
    PAUSED  →  play()   →  PLAYING
    PLAYING →  pause()  →  PAUSED
    PLAYING →  (producer exhausted) → FINISHED
    any     →  reset()  →  IDLE

Cancelling a run is just dropping it: producers keep all their state in
locals, so an abandoned generator leaves nothing behind.

Thread safety:
  This class is NOT thread-safe.  Call next_step() / play() / tick() from a
  single thread (or from one asyncio task).
"""

import asyncio
import time
from enum import Enum
from typing import AsyncIterator, Callable, Iterator, List, Optional

from config import DEFAULT_SPEED, SPEED_PRESETS
from algorithms.snapshot import Snapshot, SnapshotStream


# ---------------------------------------------------------------------------
# Schedulers
# ---------------------------------------------------------------------------
def paced(
    producer: SnapshotStream,
    speed: float = 1.0,
    sleep: Callable[[float], None] = time.sleep,
) -> Iterator[Snapshot]:
    """Yield every Snapshot, pausing `delay_ms * speed` after each one."""
    for snapshot in producer:
        yield snapshot
        if speed > 0:
            sleep(snapshot.delay_ms * speed / 1000.0)


async def apaced(producer: SnapshotStream, speed: float = 1.0) -> AsyncIterator[Snapshot]:
    """paced() for event loops: awaits instead of blocking."""
    for snapshot in producer:
        yield snapshot
        await asyncio.sleep(snapshot.delay_ms * speed / 1000.0 if speed > 0 else 0)


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        state       : Current StepperState.
        steps       : Every Snapshot pulled so far (buffer for rewind).
        current_idx : Index into `steps` that is currently displayed.
        speed       : Multiplier applied to each Snapshot's own delay.
        final       : The producer's return value, once it is exhausted.
        on_step     : Optional callback(Snapshot) fired every time the current
                      snapshot changes.  A renderer hooks its redraw here.
    """

    def __init__(
        self,
        on_step: Optional[Callable[[Snapshot], None]] = None,
        clock: Callable[[], float] = time.monotonic,
    ):
        self._generator:  Optional[SnapshotStream] = None
        self.steps:       List[Snapshot]     = []
        self.current_idx: int                = -1
        self.state:       StepperState       = StepperState.IDLE
        self.speed:       float              = SPEED_PRESETS[DEFAULT_SPEED]
        self.final:       Optional[Snapshot] = None
        self.on_step:     Optional[Callable[[Snapshot], None]] = on_step

        # for auto-play timing
        self._clock = clock
        self._last_tick: float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, generator: SnapshotStream) -> None:
        """Attach a fresh producer, closing any previous one.  Nothing is pulled until asked for."""
        self._clear(StepperState.PAUSED)
        self._generator = generator

    def reset(self) -> None:
        """Back to IDLE; caller must call start() again."""
        self._clear(StepperState.IDLE)

    def _clear(self, state: StepperState) -> None:
        if self._generator is not None:
            self._generator.close()
        self._generator  = None
        self.steps       = []
        self.current_idx = -1
        self.final       = None
        self.state       = state

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Show the following snapshot.  False (and FINISHED) once the run is over."""
        if not self._buffered(self.current_idx + 1):
            self.state = StepperState.FINISHED
            return False
        self._goto(self.current_idx + 1)
        return True

    def prev_step(self) -> bool:
        """Show the previous snapshot.  False when already on the first one."""
        if self.current_idx < 1:
            return False
        self._goto(self.current_idx - 1)
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to snapshot `idx`, pulling from the producer as far as needed."""
        if idx < 0 or not self._buffered(idx):
            return False
        self._goto(idx)
        return True

    def rewind(self) -> None:
        if self.steps:
            self._goto(0)

    def jump_to_end(self) -> None:
        """Drain the producer and show its last snapshot."""
        while self._fetch_next():
            pass
        if self.steps:
            self._goto(len(self.steps) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = self._clock()

    def pause(self) -> None:
        if self.state == StepperState.PLAYING:
            self.state = StepperState.PAUSED

    def toggle_play(self) -> None:
        if self.state == StepperState.PLAYING:
            self.pause()
        else:
            self.play()

    # ------------------------------------------------------------------
    # Tick  (call this from your event loop / timer)
    # ------------------------------------------------------------------
    def tick(self) -> bool:
        """
        Call periodically (e.g. every 10 ms).  If playing and the current
        snapshot's delay has elapsed, advances one step.  Returns True if
        a step was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = self._clock()
        if now - self._last_tick >= self.pending_delay():
            self._last_tick = now
            return self.next_step()
        return False

    def pending_delay(self) -> float:
        """Seconds to wait after the current snapshot before the next one."""
        current = self.current_step
        if current is None:
            return 0.0
        return current.delay_ms * self.speed / 1000.0

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS[DEFAULT_SPEED])

    def set_speed_value(self, multiplier: float) -> None:
        self.speed = max(0.0, multiplier)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_step(self) -> Optional[Snapshot]:
        if 0 <= self.current_idx < len(self.steps):
            return self.steps[self.current_idx]
        return None

    @property
    def total_steps_fetched(self) -> int:
        return len(self.steps)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _buffered(self, idx: int) -> bool:
        """Pull until `steps[idx]` exists.  False if the producer runs out first."""
        while idx >= len(self.steps):
            if not self._fetch_next():
                return False
        return True

    def _fetch_next(self) -> bool:
        """Pull one Snapshot from the producer into the buffer."""
        if self._generator is None:
            return False
        try:
            snapshot = next(self._generator)
        except StopIteration as stop:
            self.final = stop.value if stop.value is not None else Snapshot()
            self._generator = None
            return False
        self.steps.append(snapshot)
        return True

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify(self.steps[idx] if 0 <= idx < len(self.steps) else None)

    def _notify(self, snapshot: Optional[Snapshot]) -> None:
        if self.on_step and snapshot is not None:
            self.on_step(snapshot)
