"""Shutdown handler — deletes every recorded message, then removes the log."""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional

from chatwork_pomodoro.errors import TransportError
from chatwork_pomodoro.log import get_logger
from chatwork_pomodoro.ports.outbound import ChatTransport, MessageLogPort

logger = get_logger(__name__)


@dataclass
class CleanupReport:
    deleted: List[str] = field(default_factory=list)
    failed: List[str] = field(default_factory=list)


class ShutdownHandler:
    """Waits for the stop signal and runs the cleanup sweep."""

    def __init__(self, transport: ChatTransport, message_log: MessageLogPort):
        self._transport = transport
        self._message_log = message_log

    async def wait_and_cleanup(
        self,
        stop: asyncio.Event,
        controller: Optional["asyncio.Task"] = None,
    ) -> CleanupReport:
        """Block until ``stop`` is set, let the controller settle, then clean up.

        The controller's own outcome (including a failure) is not raised here;
        the caller inspects the task.
        """
        await stop.wait()
        logger.info("Received shutdown signal")
        if controller is not None and not controller.done():
            await asyncio.wait({controller})
        return await self.cleanup()

    async def cleanup(self) -> CleanupReport:
        """Attempt a delete for every logged id in order, then remove the log.

        A failed delete is logged and skipped. LogIOError from reading or
        removing the log propagates.
        """
        report = CleanupReport()
        for message_id in self._message_log.read_all():
            try:
                await self._transport.delete(message_id)
            except TransportError as e:
                logger.error("Failed to delete message", message_id=message_id,
                             status=e.status, error=str(e))
                report.failed.append(message_id)
                continue
            logger.info("Deleted message", message_id=message_id)
            report.deleted.append(message_id)

        self._message_log.remove()
        logger.info("Cleanup finished", deleted=len(report.deleted), failed=len(report.failed))
        return report
