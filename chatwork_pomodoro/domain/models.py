"""Domain models — cycle state and computed transitions."""

from dataclasses import dataclass
from datetime import datetime
from enum import Enum


class CycleState(Enum):
    WORKING = "working"
    RESTING = "resting"

    def flipped(self) -> "CycleState":
        return CycleState.RESTING if self is CycleState.WORKING else CycleState.WORKING


# Before the first flip the cycle is "not working", so the first interval is always WORKING.
INITIAL_STATE = CycleState.RESTING


@dataclass(frozen=True)
class Transition:
    """One computed iteration: the state entered, when it ends, and its broadcast text."""

    state: CycleState
    change_state_time: datetime
    message: str
