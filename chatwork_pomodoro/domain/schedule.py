"""Transition-time arithmetic and message rendering.

Pure functions, no I/O; every input (including "now") is passed in.
"""

from datetime import datetime, timedelta

from chatwork_pomodoro.domain.models import CycleState, Transition

TIME_PLACEHOLDER = "%time%"
TIME_FORMAT = "%H:%M"
# Chatwork's "notify all room members" tag.
TOALL_MARKER = "[toall]\n"


def round_to_minute(now: datetime) -> datetime:
    """Round to the nearest minute boundary, ties (>= 30s) rounding up."""
    floored = now.replace(second=0, microsecond=0)
    if now.second < 30:
        return floored
    return floored + timedelta(minutes=1)


def next_change_time(now: datetime, minutes: int) -> datetime:
    """Rounded ``now`` plus ``minutes``, with sub-second residue discarded.

    An aware result is re-expressed in the local zone, so a daylight-saving
    change inside the interval moves the wall-clock label with it.
    """
    result = (round_to_minute(now) + timedelta(minutes=minutes)).replace(microsecond=0)
    if result.tzinfo is not None:
        result = result.astimezone()
    return result


def render_message(template: str, change_state_time: datetime) -> str:
    """Prefix the broadcast marker and substitute every ``%time%`` with HH:MM."""
    stamp = change_state_time.strftime(TIME_FORMAT)
    return TOALL_MARKER + template.replace(TIME_PLACEHOLDER, stamp)


def plan_transition(
    state: CycleState,
    now: datetime,
    working_minutes: int,
    resting_minutes: int,
    working_message: str,
    resting_message: str,
) -> Transition:
    """Build the transition for entering ``state`` at ``now``."""
    if state is CycleState.WORKING:
        minutes, template = working_minutes, working_message
    else:
        minutes, template = resting_minutes, resting_message
    change_state_time = next_change_time(now, minutes)
    return Transition(
        state=state,
        change_state_time=change_state_time,
        message=render_message(template, change_state_time),
    )
