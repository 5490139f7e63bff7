"""Focus timer state machine - pure, the caller drives tick()."""

from dataclasses import dataclass
from enum import Enum

from .tasks import Task


class TimerState(str, Enum):
    IDLE = "idle"
    RUNNING = "running"
    PAUSED = "paused"
    BREAK = "break"
    COMPLETED = "completed"


class SessionType(str, Enum):
    FOCUS = "focus"
    SHORT_BREAK = "short_break"
    LONG_BREAK = "long_break"


class TimerStateError(Exception):
    """Raised on a transition the current timer state does not allow."""

    pass


_COUNTING = (TimerState.RUNNING, TimerState.BREAK)


@dataclass
class FocusTimer:
    """
    A focus/break countdown.

    idle -> running (focus) or break -> paused <-> running/break -> completed.
    stop() and reset() return to idle from any state.
    """

    state: TimerState = TimerState.IDLE
    session_type: SessionType = SessionType.FOCUS
    time_remaining: int = 0
    initial_time: int = 0
    task: Task | None = None
    sessions_completed: int = 0

    @property
    def is_active(self) -> bool:
        return self.state in _COUNTING or self.state == TimerState.PAUSED

    @property
    def progress(self) -> float:
        """Elapsed fraction of the current session, 0.0 to 1.0."""
        if not self.initial_time:
            return 0.0
        return (self.initial_time - self.time_remaining) / self.initial_time

    def start(self, task: Task | None, minutes: int) -> None:
        """Begin a focus session, replacing any session in progress."""
        self._begin(TimerState.RUNNING, SessionType.FOCUS, minutes)
        self.task = task

    def start_break(self, kind: SessionType, minutes: int) -> None:
        if kind == SessionType.FOCUS:
            raise ValueError("start_break needs a break session type")
        self._begin(TimerState.BREAK, kind, minutes)
        self.task = None

    def pause(self) -> None:
        if self.state not in _COUNTING:
            raise TimerStateError(f"Cannot pause a timer that is {self.state.value}")
        self.state = TimerState.PAUSED

    def resume(self) -> None:
        if self.state != TimerState.PAUSED:
            raise TimerStateError(f"Cannot resume a timer that is {self.state.value}")
        self.state = TimerState.RUNNING if self.session_type == SessionType.FOCUS else TimerState.BREAK

    def tick(self) -> None:
        """Advance one second. No-op unless counting down."""
        if self.state not in _COUNTING:
            return
        if self.time_remaining > 0:
            self.time_remaining -= 1
        if self.time_remaining == 0:
            self.complete()

    def complete(self) -> None:
        """Mark the session finished; finished focus sessions are counted."""
        if self.state == TimerState.IDLE:
            raise TimerStateError("No session to complete")
        if self.state == TimerState.COMPLETED:
            return
        self.state = TimerState.COMPLETED
        if self.session_type == SessionType.FOCUS:
            self.sessions_completed += 1

    def stop(self) -> None:
        self.state = TimerState.IDLE
        self.session_type = SessionType.FOCUS
        self.time_remaining = 0
        self.initial_time = 0
        self.task = None

    reset = stop

    def reset_sessions(self) -> None:
        self.sessions_completed = 0

    def _begin(self, state: TimerState, session_type: SessionType, minutes: int) -> None:
        if minutes <= 0:
            raise ValueError(f"Session length must be positive, got {minutes}")
        seconds = minutes * 60
        self.state = state
        self.session_type = session_type
        self.time_remaining = seconds
        self.initial_time = seconds
