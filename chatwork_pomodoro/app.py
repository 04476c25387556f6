"""Entry point — config, logging, message log, and the two concurrent tasks.

This is the only module that turns errors into process exit codes.
"""

import asyncio
import os
import signal
import sys
from datetime import datetime
from typing import Callable, Optional

from chatwork_pomodoro.adapters.chatwork import ChatworkClient
from chatwork_pomodoro.adapters.storage import MessageLog
from chatwork_pomodoro.config import AppConfig, logging_format, logging_level
from chatwork_pomodoro.domain.cycle import CycleController
from chatwork_pomodoro.domain.shutdown import ShutdownHandler
from chatwork_pomodoro.errors import ConfigError, LogIOError, NotifierError
from chatwork_pomodoro.log import configure_logging, get_logger
from chatwork_pomodoro.ports.outbound import ChatTransport, MessageLogPort

logger = get_logger(__name__)

EXIT_OK = 0
EXIT_FAILURE = 1
EXIT_CONFIG = 2


def install_signal_handlers(stop: asyncio.Event) -> None:
    """Set ``stop`` on SIGINT or SIGTERM."""
    loop = asyncio.get_running_loop()
    for sig in (signal.SIGINT, signal.SIGTERM):
        try:
            loop.add_signal_handler(sig, stop.set)
        except (NotImplementedError, RuntimeError):
            # Event loops without Unix signal support (Windows)
            signal.signal(sig, lambda _signum, _frame: loop.call_soon_threadsafe(stop.set))


async def run(
    config: AppConfig,
    transport: Optional[ChatTransport] = None,
    message_log: Optional[MessageLogPort] = None,
    stop: Optional[asyncio.Event] = None,
    install_signals: bool = True,
    clock: Optional[Callable[[], datetime]] = None,
) -> int:
    """Run the controller and shutdown handler until one of them ends the process.

    Returns EXIT_OK after a completed cleanup sweep, EXIT_FAILURE when the
    log cannot be created, the controller fails before shutdown, or the
    sweep cannot read or remove the log.
    """
    if transport is None:
        transport = ChatworkClient(config.token, config.room_id, api_base=config.api_base)
    if message_log is None:
        message_log = MessageLog(config.message_log_path)
    if stop is None:
        stop = asyncio.Event()

    try:
        message_log.initialize()
    except LogIOError as e:
        logger.error("Failed to create message log", target=e.target, error=str(e))
        return EXIT_FAILURE

    if install_signals:
        install_signal_handlers(stop)

    controller = CycleController(config, transport, message_log, clock=clock)
    handler = ShutdownHandler(transport, message_log)
    controller_task = asyncio.create_task(controller.run(stop), name="cycle-controller")
    shutdown_task = asyncio.create_task(
        handler.wait_and_cleanup(stop, controller_task), name="shutdown-handler"
    )

    await asyncio.wait({controller_task, shutdown_task}, return_when=asyncio.FIRST_COMPLETED)

    if controller_task.done() and not stop.is_set():
        # The loop only returns after a stop, so this is a failed send or append.
        shutdown_task.cancel()
        await asyncio.gather(shutdown_task, return_exceptions=True)
        logger.error("Cycle controller failed", error=str(controller_task.exception()))
        return EXIT_FAILURE

    try:
        report = await shutdown_task
    except NotifierError as e:
        logger.error("Cleanup failed", error=str(e))
        return EXIT_FAILURE

    if not controller_task.cancelled() and controller_task.exception() is not None:
        logger.warning("Cycle controller ended with an error during shutdown",
                       error=str(controller_task.exception()))
    logger.info("Exiting...", deleted=len(report.deleted), failed=len(report.failed))
    return EXIT_OK


def main() -> None:
    """Console entry point: ``chatwork-pomodoro`` / ``python -m chatwork_pomodoro``."""
    configure_logging(
        level=logging_level(os.environ),
        format_json=logging_format(os.environ) == "json",
    )
    try:
        config = AppConfig.from_env()
    except ConfigError as e:
        logger.error("Invalid configuration", key=e.key, error=str(e))
        sys.exit(EXIT_CONFIG)

    logger.info(
        "Starting",
        room_id=config.room_id,
        working_minutes=config.working_minutes,
        resting_minutes=config.resting_minutes,
        message_log=config.message_log_path,
    )
    sys.exit(asyncio.run(run(config)))


if __name__ == "__main__":
    main()
