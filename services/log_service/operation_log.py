"""
Append-only operation log.
Writes one fixed-width text row per completed gateway operation.
"""
import asyncio
from pathlib import Path
from typing import Union

from starlette.concurrency import run_in_threadpool

from services.log_service.models import OperationLogEntry
from core.utils.logger import setup_logger

logger = setup_logger(__name__)

TYPE_WIDTH = 30
FILENAME_WIDTH = 35
FILE_ID_WIDTH = 50

HEADER_ROW = (
    "Type".ljust(TYPE_WIDTH)
    + "Filename".ljust(FILENAME_WIDTH)
    + "File ID".ljust(FILE_ID_WIDTH)
    + "URL\n"
)


def format_row(entry: OperationLogEntry) -> str:
    """
    Render an entry as one fixed-width line.

    Columns are padded, never truncated, so an overlong value pushes the
    following columns to the right.
    """
    return (
        entry.operation_type.value.ljust(TYPE_WIDTH)
        + entry.filename.ljust(FILENAME_WIDTH)
        + entry.file_id.ljust(FILE_ID_WIDTH)
        + entry.url
        + "\n"
    )


class OperationLog:
    """
    Append-only log file shared by all request handlers.

    Appends are serialised through an asyncio.Lock and the blocking file
    writes run in the thread pool. The file is never read back, truncated
    or rewritten.
    """

    def __init__(self, path: Union[str, Path]):
        """
        Args:
            path: Location of the log file; created on first append
        """
        self.path = Path(path)
        self._lock = asyncio.Lock()

    def _append(self, row: str) -> None:
        self.path.parent.mkdir(parents=True, exist_ok=True)
        # "x" fails if another process created the file first
        if not self.path.exists():
            try:
                with open(self.path, "x", encoding="utf-8") as f:
                    f.write(HEADER_ROW)
            except FileExistsError:
                pass
        with open(self.path, "a", encoding="utf-8") as f:
            f.write(row)

    async def record(self, entry: OperationLogEntry) -> bool:
        """
        Append one entry, creating the file with its header row if needed.

        Never raises: a write failure is reported to the diagnostic log and
        the calling request carries on.

        Args:
            entry: Completed operation to record

        Returns:
            True if the row was written, False if writing failed
        """
        row = format_row(entry)
        try:
            async with self._lock:
                await run_in_threadpool(self._append, row)
        except Exception as e:
            logger.error(
                f"Operation log write failed ({entry.operation_type.value} {entry.file_id}): {str(e)}"
            )
            return False
        return True
