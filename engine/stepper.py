"""
stepper.py — Step-by-Step Playback Driver
==========================================
The Stepper is the external "tick" source for a Solver.  It forwards
discrete advance events (a Next click, or a timer while playing) into
the solver and buffers every SolverSnapshot it has shown, so the UI can
rewind the *display* without ever running the solver backwards.

State machine:
    IDLE     →  start()  →  PAUSED
    PAUSED   →  play()   →  PLAYING
    PLAYING  →  pause()  →  PAUSED
    PLAYING  →  (solver terminated) → FINISHED
    any      →  reset()  →  PAUSED (solver reset, buffer cleared)

Thread safety:
  This class is NOT thread-safe.  The UI must call next_step() / tick()
  from a single thread.  Auto-advance timing lives here, never in the
  solver.
"""

import time
from enum import Enum
from typing import Callable, List, Optional

from solver import Solver, SolverSnapshot


# ---------------------------------------------------------------------------
# States
# ---------------------------------------------------------------------------
class StepperState(Enum):
    IDLE     = "idle"
    PAUSED   = "paused"
    PLAYING  = "playing"
    FINISHED = "finished"


# ---------------------------------------------------------------------------
# Speed presets (seconds per tick)
# ---------------------------------------------------------------------------
SPEED_PRESETS = {
    "slow":   1.0,    # teaching mode
    "medium": 0.4,
    "fast":   0.1,    # one tick every 100 ms
    "turbo":  0.02,
}


# ---------------------------------------------------------------------------
# Stepper
# ---------------------------------------------------------------------------
class Stepper:
    """
    Attributes:
        solver      : The Solver being driven (None until start()).
        state       : Current StepperState.
        snapshots   : Every snapshot shown so far (index 0 = before any tick).
        current_idx : Index into `snapshots` that is currently displayed.
        speed       : Seconds between auto-advance ticks.
        on_step     : Optional callback(SolverSnapshot) fired when the displayed
                      snapshot changes.  The UI hooks its re-render here.
    """

    def __init__(self, on_step: Optional[Callable[[SolverSnapshot], None]] = None):
        self.solver:      Optional[Solver]     = None
        self.snapshots:   List[SolverSnapshot] = []
        self.current_idx: int                  = -1
        self.state:       StepperState         = StepperState.IDLE
        self.speed:       float                = SPEED_PRESETS["medium"]
        self.on_step:     Optional[Callable[[SolverSnapshot], None]] = on_step

        self._last_tick:  float = 0.0

    # ------------------------------------------------------------------
    # Lifecycle
    # ------------------------------------------------------------------
    def start(self, solver: Solver) -> None:
        """Attach a solver and show its current (usually initial) snapshot."""
        self.solver      = solver
        self.snapshots   = [solver.snapshot()]
        self.current_idx = -1
        self.state       = StepperState.FINISHED if solver.is_terminated() else StepperState.PAUSED
        self._goto(0)

    def reset(self) -> None:
        """Reset the solver to Idle and drop the buffer."""
        if self.solver is None:
            self.state = StepperState.IDLE
            return
        self.solver.reset()
        self.start(self.solver)

    # ------------------------------------------------------------------
    # Navigation
    # ------------------------------------------------------------------
    def next_step(self) -> bool:
        """Show the next snapshot, ticking the solver if needed.  False at the end."""
        target = self.current_idx + 1
        if target >= len(self.snapshots):
            if not self._fetch_next():
                self.state = StepperState.FINISHED
                return False
        self._goto(target)
        if self.at_end and self.solver is not None and self.solver.is_terminated():
            self.state = StepperState.FINISHED
        return True

    def prev_step(self) -> bool:
        """Show the previous buffered snapshot.  False if already at start."""
        if self.current_idx <= 0:
            return False
        self._goto(self.current_idx - 1)
        if self.state == StepperState.FINISHED:
            self.state = StepperState.PAUSED
        return True

    def goto_step(self, idx: int) -> bool:
        """Jump to snapshot `idx`, ticking the solver forward if needed."""
        while idx >= len(self.snapshots):
            if not self._fetch_next():
                break
        if 0 <= idx < len(self.snapshots):
            self._goto(idx)
            return True
        return False

    def rewind(self) -> None:
        """Show snapshot 0 again (the solver itself is not rewound)."""
        if self.snapshots:
            self._goto(0)
            if self.state == StepperState.FINISHED:
                self.state = StepperState.PAUSED

    def jump_to_end(self) -> None:
        """Run the solver to termination and show the final snapshot."""
        while self._fetch_next():
            pass
        if self.snapshots:
            self._goto(len(self.snapshots) - 1)
        self.state = StepperState.FINISHED

    # ------------------------------------------------------------------
    # Play / Pause
    # ------------------------------------------------------------------
    def play(self) -> None:
        if self.state in (StepperState.FINISHED, StepperState.IDLE):
            return
        self.state      = StepperState.PLAYING
        self._last_tick = time.monotonic()

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
    def tick(self, now: Optional[float] = None) -> bool:
        """
        Call periodically (e.g. every 20 ms).  If playing and `speed`
        seconds have elapsed, advances one step.  Returns True if a step
        was taken.
        """
        if self.state != StepperState.PLAYING:
            return False
        now = time.monotonic() if now is None else now
        if now - self._last_tick < self.speed:
            return False
        self._last_tick = now
        return self.next_step()

    # ------------------------------------------------------------------
    # Speed
    # ------------------------------------------------------------------
    def set_speed(self, preset: str) -> None:
        self.speed = SPEED_PRESETS.get(preset, SPEED_PRESETS["medium"])

    def set_speed_value(self, seconds: float) -> None:
        self.speed = max(0.01, seconds)

    # ------------------------------------------------------------------
    # Read-only accessors
    # ------------------------------------------------------------------
    @property
    def current_snapshot(self) -> Optional[SolverSnapshot]:
        if 0 <= self.current_idx < len(self.snapshots):
            return self.snapshots[self.current_idx]
        return None

    @property
    def at_end(self) -> bool:
        return self.current_idx == len(self.snapshots) - 1

    @property
    def total_steps_fetched(self) -> int:
        return len(self.snapshots)

    @property
    def is_finished(self) -> bool:
        return self.state == StepperState.FINISHED

    @property
    def is_playing(self) -> bool:
        return self.state == StepperState.PLAYING

    # ------------------------------------------------------------------
    # Internal
    # ------------------------------------------------------------------
    def _fetch_next(self) -> bool:
        """Tick the solver once and buffer the resulting snapshot."""
        if self.solver is None or self.solver.is_terminated():
            return False
        self.solver.advance()
        self.snapshots.append(self.solver.snapshot())
        return True

    def _goto(self, idx: int) -> None:
        self.current_idx = idx
        self._notify(self.snapshots[idx] if 0 <= idx < len(self.snapshots) else None)

    def _notify(self, snapshot: Optional[SolverSnapshot]) -> None:
        if self.on_step and snapshot is not None:
            self.on_step(snapshot)
