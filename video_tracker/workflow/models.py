from dataclasses import asdict, dataclass, field
from datetime import datetime, timezone
from enum import Enum


class Verdict(str, Enum):
    APPROVED = "approved"
    REJECTED = "rejected"


class WorkflowStage(str, Enum):
    IDLE = "idle"
    FILE_SELECTED = "file_selected"
    ANALYZING = "analyzing"
    ANALYSIS_FAILED = "analysis_failed"
    ANALYSIS_SUCCEEDED = "analysis_succeeded"
    LEDGER_PENDING = "ledger_pending"
    LEDGER_FAILED = "ledger_failed"
    LEDGER_SUCCEEDED = "ledger_succeeded"
    RECORDING_PENDING = "recording_pending"
    DONE = "done"


class ErrorKind(str, Enum):
    """Failure classes surfaced to the user, each with its own remediation."""

    INPUT = "input"
    ANALYSIS = "analysis"
    AUTHORIZATION = "authorization"
    LEDGER = "ledger"
    RECORDING = "recording"


@dataclass
class Submission:
    """The selected video and the metadata the user typed for it."""

    file: bytes
    fingerprint: str | None = None
    caption: str = ""
    tag: str = ""
    uploader_name: str = ""
    overview: str = ""

    def has_required_metadata(self) -> bool:
        return all((self.caption, self.tag, self.uploader_name, self.overview))


@dataclass(frozen=True)
class AnalysisOutcome:
    """A well-formed analyzer response."""

    verdict: Verdict
    description: str
    summary_text: str
    report_artifact: bytes = field(repr=False)


@dataclass(frozen=True)
class AnalysisFailure:
    """Rejected-shaped result for an attempt that produced no usable response."""

    message: str

    @property
    def verdict(self) -> Verdict:
        return Verdict.REJECTED

    @property
    def description(self) -> str:
        return "Error occurred during analysis."

    @property
    def summary_text(self) -> str:
        return self.message


AnalysisResult = AnalysisOutcome | AnalysisFailure


@dataclass(frozen=True)
class SignerIdentity:
    """Wallet account that signs ledger transactions."""

    address: str | None = None

    @property
    def is_connected(self) -> bool:
        return bool(self.address)


@dataclass(frozen=True)
class LedgerReceipt:
    transaction_id: str
    submitter_address: str


@dataclass(frozen=True)
class MetadataRecord:
    """Off-chain catalogue entry linking a submission to its ledger transaction."""

    fingerprint: str
    caption: str
    tag: str
    uploader_name: str
    overview: str
    description: str
    summary_text: str
    transaction_id: str
    submitter_address: str
    timestamp: datetime

    @classmethod
    def build(
        cls,
        submission: Submission,
        outcome: AnalysisOutcome,
        receipt: LedgerReceipt,
        timestamp: datetime | None = None,
    ) -> "MetadataRecord":
        if submission.fingerprint is None:
            raise ValueError("Submission.fingerprint must be set before recording")
        return cls(
            fingerprint=submission.fingerprint,
            caption=submission.caption,
            tag=submission.tag,
            uploader_name=submission.uploader_name,
            overview=submission.overview,
            description=outcome.description,
            summary_text=outcome.summary_text,
            transaction_id=receipt.transaction_id,
            submitter_address=receipt.submitter_address,
            timestamp=timestamp or datetime.now(timezone.utc),
        )

    def to_document(self) -> dict[str, object]:
        return asdict(self)


@dataclass(frozen=True)
class WorkflowSnapshot:
    """Observable state handed to the presentation layer."""

    stage: WorkflowStage
    generation: int
    fingerprint: str | None = None
    verdict: Verdict | None = None
    description: str = ""
    summary_text: str = ""
    status: str = ""
    error_kind: ErrorKind | None = None
    receipt: LedgerReceipt | None = None
    record_id: str | None = None
    recording_failed: bool = False
    fingerprint_ready: bool = False
    is_analyzing: bool = False
    can_analyze: bool = False
    can_submit_to_ledger: bool = False
    can_generate_report: bool = False

    def to_dict(self) -> dict[str, object]:
        data = asdict(self)
        data["stage"] = self.stage.value
        data["verdict"] = self.verdict.value if self.verdict else None
        data["error_kind"] = self.error_kind.value if self.error_kind else None
        return data
