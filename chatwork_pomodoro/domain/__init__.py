"""Domain layer — cycle state machine and cleanup, no framework dependencies."""

from chatwork_pomodoro.domain.models import INITIAL_STATE, CycleState, Transition
from chatwork_pomodoro.domain.schedule import (
    next_change_time,
    plan_transition,
    render_message,
    round_to_minute,
)
from chatwork_pomodoro.domain.cycle import CycleController
from chatwork_pomodoro.domain.shutdown import CleanupReport, ShutdownHandler

__all__ = [
    "INITIAL_STATE",
    "CycleState",
    "Transition",
    "next_change_time",
    "plan_transition",
    "render_message",
    "round_to_minute",
    "CycleController",
    "CleanupReport",
    "ShutdownHandler",
]
