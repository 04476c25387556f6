"""Cycle controller — alternates working/resting and broadcasts each flip.

The state is an explicit value: ``step`` takes the current state and returns
the transition it entered, so one iteration can be driven from a test with a
fake clock and fake ports.
"""

import asyncio
from datetime import datetime
from typing import Callable, Optional

from chatwork_pomodoro.config import AppConfig
from chatwork_pomodoro.domain.models import INITIAL_STATE, CycleState, Transition
from chatwork_pomodoro.domain.schedule import plan_transition
from chatwork_pomodoro.errors import LogIOError, TransportError
from chatwork_pomodoro.log import get_logger, log_cycle_transition
from chatwork_pomodoro.ports.outbound import ChatTransport, MessageLogPort

logger = get_logger(__name__)


def local_now() -> datetime:
    """Timezone-aware wall clock in the local zone."""
    return datetime.now().astimezone()


class CycleController:
    """Runs the working/resting loop: send, record the id, sleep, repeat."""

    def __init__(
        self,
        config: AppConfig,
        transport: ChatTransport,
        message_log: MessageLogPort,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._config = config
        self._transport = transport
        self._message_log = message_log
        self._clock = clock or local_now

    def plan(self, state: CycleState) -> Transition:
        """Flip ``state`` and compute the transition entered at the current time."""
        cfg = self._config
        return plan_transition(
            state.flipped(),
            self._clock(),
            working_minutes=cfg.working_minutes,
            resting_minutes=cfg.resting_minutes,
            working_message=cfg.working_message,
            resting_message=cfg.resting_message,
        )

    async def step(self, state: CycleState) -> Transition:
        """One iteration without the sleep: flip, send, append the id.

        TransportError and LogIOError are logged and re-raised; a failed send
        or append ends the run.
        """
        transition = self.plan(state)
        logger.debug("Next state", next_state_at=transition.change_state_time.isoformat())

        try:
            message_id = await self._transport.send(transition.message)
        except TransportError as e:
            logger.error("Failed to send message", error=str(e), status=e.status)
            raise
        logger.info("Message sent", message_id=message_id)

        try:
            self._message_log.append(message_id)
        except LogIOError as e:
            logger.error("Failed to record message id", message_id=message_id, error=str(e))
            raise

        log_cycle_transition(
            logger,
            from_state=state.value,
            to_state=transition.state.value,
            next_state_at=transition.change_state_time,
        )
        return transition

    def seconds_until(self, moment: datetime) -> int:
        """Whole seconds from now until ``moment``, truncated, never negative."""
        remaining = int((moment - self._clock()).total_seconds())
        if remaining < 0:
            logger.warning("Transition time already passed", behind_seconds=-remaining)
            return 0
        return remaining

    async def run(self, stop: asyncio.Event, state: CycleState = INITIAL_STATE) -> CycleState:
        """Loop until ``stop`` is set; returns the last state entered.

        ``stop`` is only checked before a send and during the sleep, so an
        in-flight send and its append always complete.
        """
        while not stop.is_set():
            transition = await self.step(state)
            state = transition.state
            if await self._sleep_until(transition.change_state_time, stop):
                break
        logger.info("Cycle stopped", state=state.value)
        return state

    async def _sleep_until(self, moment: datetime, stop: asyncio.Event) -> bool:
        """Sleep until ``moment``. Returns True if ``stop`` fired first."""
        try:
            await asyncio.wait_for(stop.wait(), timeout=self.seconds_until(moment))
        except asyncio.TimeoutError:
            return False
        return True
