from psycopg.rows import dict_row

from video_tracker.database.connection import get_connection
from video_tracker.database.models import VideoRecordRow
from video_tracker.workflow.models import MetadataRecord


class VideoRecordsRepository:
    """Database operations for the append-only video_records table."""

    async def insert(self, record: MetadataRecord) -> int:
        """Append one metadata record and return its row id."""
        async with get_connection() as conn:
            async with conn.cursor() as cur:
                await cur.execute(
                    """
                    INSERT INTO video_records (
                        fingerprint, caption, tag, uploader_name, overview,
                        description, summary_text, transaction_id,
                        submitter_address, recorded_at
                    )
                    VALUES (%s, %s, %s, %s, %s, %s, %s, %s, %s, %s)
                    RETURNING id
                    """,
                    (
                        record.fingerprint,
                        record.caption,
                        record.tag,
                        record.uploader_name,
                        record.overview,
                        record.description,
                        record.summary_text,
                        record.transaction_id,
                        record.submitter_address,
                        record.timestamp,
                    ),
                )
                row = await cur.fetchone()
            await conn.commit()

        if row is None:
            raise RuntimeError("INSERT INTO video_records returned no id")
        return int(row[0])

    async def find_by_transaction_id(self, transaction_id: str) -> list[VideoRecordRow]:
        """Return every record written for a ledger transaction, oldest first."""
        async with get_connection() as conn:
            async with conn.cursor(row_factory=dict_row) as cur:
                await cur.execute(
                    """
                    SELECT id, fingerprint, caption, tag, uploader_name, overview,
                           description, summary_text, transaction_id,
                           submitter_address, recorded_at, created_at
                    FROM video_records
                    WHERE transaction_id = %s
                    ORDER BY id
                    """,
                    (transaction_id,),
                )
                rows = await cur.fetchall()
        return [VideoRecordRow(**row) for row in rows]
