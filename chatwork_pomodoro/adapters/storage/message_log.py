"""Line-delimited message id log — implements MessageLogPort."""

import os
from pathlib import Path
from typing import List, Union

from chatwork_pomodoro.config import DEFAULT_MESSAGE_ID_LOG
from chatwork_pomodoro.errors import LogIOError


class MessageLog:
    """Append-only file of sent message ids, one per line, in send order.

    Created empty at startup, appended by the cycle controller, read back and
    removed by the shutdown handler.
    """

    def __init__(self, path: Union[str, Path] = DEFAULT_MESSAGE_ID_LOG):
        self._path = Path(path)

    @property
    def path(self) -> Path:
        return self._path

    def initialize(self) -> None:
        """Create the log, truncating anything left by a previous run."""
        try:
            self._path.parent.mkdir(parents=True, exist_ok=True)
            with open(self._path, "w", encoding="utf-8"):
                pass
        except OSError as e:
            raise LogIOError(f"Failed to create {self._path}: {e}",
                             operation="initialize", target=str(self._path)) from e

    def append(self, message_id: str) -> None:
        try:
            with open(self._path, "a", encoding="utf-8") as f:
                f.write(f"{message_id}\n")
                f.flush()
                os.fsync(f.fileno())
        except OSError as e:
            raise LogIOError(f"Failed to write {self._path}: {e}",
                             operation="append", target=str(self._path)) from e

    def read_all(self) -> List[str]:
        """Non-empty, whitespace-trimmed ids in file order."""
        try:
            with open(self._path, "r", encoding="utf-8") as f:
                return [line.strip() for line in f if line.strip()]
        except OSError as e:
            raise LogIOError(f"Failed to read {self._path}: {e}",
                             operation="read", target=str(self._path)) from e

    def remove(self) -> None:
        try:
            self._path.unlink()
        except OSError as e:
            raise LogIOError(f"Failed to remove {self._path}: {e}",
                             operation="remove", target=str(self._path)) from e
