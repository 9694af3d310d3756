import asyncio

from video_tracker.database.repositories.video_records_repository import VideoRecordsRepository
from video_tracker.logging.logger import Log
from video_tracker.recording.exceptions import RecordingError
from video_tracker.workflow.models import MetadataRecord


class MetadataRecorder:
    """Catalogues a committed ledger transaction in the document store.

    Writes are at-least-once: recording the same transaction twice appends
    two rows. The ledger write is never touched from here.
    """

    def __init__(self, repository: VideoRecordsRepository, timeout_seconds: int) -> None:
        self._repository = repository
        self._timeout_seconds = timeout_seconds

    async def record(self, record: MetadataRecord) -> str:
        """Append the record and return its id.

        Raises:
            RecordingError: on any store failure, including timeout.
        """
        try:
            row_id = await asyncio.wait_for(
                self._repository.insert(record),
                timeout=self._timeout_seconds,
            )
        except asyncio.TimeoutError as exc:
            raise RecordingError(
                f"Document store did not answer within {self._timeout_seconds}s"
            ) from exc
        except Exception as exc:
            raise RecordingError(f"Document store write failed: {exc}") from exc

        Log.info(f"Recorded transaction {record.transaction_id} as video record {row_id}")
        return str(row_id)
