from dataclasses import dataclass
from datetime import datetime


@dataclass
class VideoRecordRow:
    """Represents a row from the video_records table."""

    id: int
    fingerprint: str
    caption: str
    tag: str
    uploader_name: str
    overview: str
    description: str
    summary_text: str
    transaction_id: str
    submitter_address: str
    recorded_at: datetime
    created_at: datetime | None = None
