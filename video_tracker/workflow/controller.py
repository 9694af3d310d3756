import asyncio
from collections.abc import Callable
from pathlib import Path

from video_tracker.analysis.base import BaseAnalysisClient
from video_tracker.analysis.factory import AnalysisClientFactory
from video_tracker.config.settings import Settings
from video_tracker.database.repositories.video_records_repository import VideoRecordsRepository
from video_tracker.ledger.exceptions import LedgerError, LedgerNotAuthorizedError
from video_tracker.ledger.factory import LedgerClientFactory
from video_tracker.ledger.submitter import LedgerSubmitter
from video_tracker.logging.logger import Log
from video_tracker.recording.recorder import MetadataRecorder
from video_tracker.report.exceptions import ReportGenerationError
from video_tracker.report.generator import ReportGenerator
from video_tracker.workflow.exceptions import FingerprintError
from video_tracker.workflow.fingerprinter import fingerprint
from video_tracker.workflow.models import (
    AnalysisFailure,
    AnalysisOutcome,
    AnalysisResult,
    ErrorKind,
    LedgerReceipt,
    MetadataRecord,
    SignerIdentity,
    Submission,
    Verdict,
    WorkflowSnapshot,
    WorkflowStage,
)

ANALYZABLE_STAGES = frozenset(
    {
        WorkflowStage.FILE_SELECTED,
        WorkflowStage.ANALYSIS_FAILED,
        WorkflowStage.ANALYSIS_SUCCEEDED,
    }
)
LEDGER_READY_STAGES = frozenset({WorkflowStage.ANALYSIS_SUCCEEDED, WorkflowStage.LEDGER_FAILED})
# A ledger write may already be on its way; the run cannot be abandoned here.
COMMITTING_STAGES = frozenset({WorkflowStage.LEDGER_PENDING, WorkflowStage.RECORDING_PENDING})

METADATA_FIELDS = ("caption", "tag", "uploader_name", "overview")


class WorkflowController:
    """State machine for one user's submit -> analyze -> ledger -> record run.

    Commands that are not allowed in the current stage are no-ops returning
    False. Every asynchronous command resolves to a named stage and never
    raises for component failures; the failure class is exposed as
    ErrorKind plus status text in the snapshot.

    Each file selection starts a new generation. An analysis started under
    an older generation is cancelled and its result, should it still
    arrive, is discarded.
    """

    def __init__(
        self,
        *,
        analysis_client: BaseAnalysisClient,
        ledger_submitter: LedgerSubmitter,
        recorder: MetadataRecorder,
        report_generator: ReportGenerator,
        fingerprinter: Callable[[bytes], str] = fingerprint,
    ) -> None:
        self._analysis_client = analysis_client
        self._ledger_submitter = ledger_submitter
        self._recorder = recorder
        self._report_generator = report_generator
        self._fingerprinter = fingerprinter

        self._stage = WorkflowStage.IDLE
        self._generation = 0
        self._metadata: dict[str, str] = dict.fromkeys(METADATA_FIELDS, "")
        self._submission: Submission | None = None
        self._analysis_task: asyncio.Task[AnalysisResult] | None = None
        self._reset_results()

    @property
    def stage(self) -> WorkflowStage:
        return self._stage

    @property
    def generation(self) -> int:
        return self._generation

    @property
    def receipt(self) -> LedgerReceipt | None:
        return self._receipt

    @property
    def can_analyze(self) -> bool:
        return (
            self._stage in ANALYZABLE_STAGES
            and self._submission is not None
            and self._submission.fingerprint is not None
            and self._submission.has_required_metadata()
        )

    @property
    def can_submit_to_ledger(self) -> bool:
        return (
            self._stage in LEDGER_READY_STAGES
            and isinstance(self._result, AnalysisOutcome)
            and self._result.verdict is Verdict.APPROVED
        )

    @property
    def can_generate_report(self) -> bool:
        return bool(self._description() and self._summary_text())

    def select_file(self, blob: bytes) -> bool:
        """Start a new generation for the given video bytes."""
        if self._stage in COMMITTING_STAGES:
            Log.warning(f"Ignoring file selection while {self._stage.value}")
            return False

        self._invalidate()
        self._reset_results()
        try:
            digest = self._fingerprinter(blob)
        except FingerprintError as exc:
            Log.error(f"Fingerprinting failed: {exc}")
            self._submission = None
            self._error_kind = ErrorKind.INPUT
            self._status = f"Could not fingerprint the video: {exc}"
            self._set_stage(WorkflowStage.IDLE)
            return False

        self._submission = Submission(file=bytes(blob), fingerprint=digest, **self._metadata)
        Log.info(f"Selected video of {len(blob)} bytes, fingerprint {digest}")
        self._set_stage(WorkflowStage.FILE_SELECTED)
        return True

    def update_metadata(
        self,
        *,
        caption: str | None = None,
        tag: str | None = None,
        uploader_name: str | None = None,
        overview: str | None = None,
    ) -> bool:
        if self._stage in COMMITTING_STAGES:
            Log.warning(f"Ignoring metadata change while {self._stage.value}")
            return False
        changes = {
            "caption": caption,
            "tag": tag,
            "uploader_name": uploader_name,
            "overview": overview,
        }
        for name, value in changes.items():
            if value is None:
                continue
            self._metadata[name] = value
            if self._submission is not None:
                setattr(self._submission, name, value)
        return True

    async def analyze(self) -> bool:
        """Run one analysis attempt for the current generation.

        Returns True when an outcome was applied, False when the command was
        not allowed or its result went stale.
        """
        if not self.can_analyze or self._submission is None:
            Log.warning(f"Analyze not available in stage {self._stage.value}")
            return False

        generation = self._generation
        self._reset_results()
        self._status = "Analysis in progress..."
        self._set_stage(WorkflowStage.ANALYZING)

        task = asyncio.create_task(self._analysis_client.analyze(self._submission.file))
        self._analysis_task = task
        try:
            result = await task
        except asyncio.CancelledError:
            if generation != self._generation:
                Log.warning(f"Analysis for generation {generation} cancelled by a newer selection")
                return False
            self._apply_analysis(AnalysisFailure(message="Analysis was cancelled."))
            raise
        except Exception as exc:
            Log.error(f"Analyzer raised unexpectedly: {exc}")
            result = AnalysisFailure(message=f"Unexpected analyzer error: {exc}")
        finally:
            if self._analysis_task is task:
                self._analysis_task = None

        if generation != self._generation:
            Log.warning(
                f"Discarding stale analysis result for generation {generation} "
                f"(current {self._generation})"
            )
            return False

        self._apply_analysis(result)
        return True

    async def connect_signer(self) -> SignerIdentity:
        """Ask the ledger provider for a signing account.

        Failures yield an unconnected identity; submitting with it reports
        the authorization error.
        """
        try:
            return await self._ledger_submitter.connect_signer()
        except LedgerError as exc:
            Log.error(f"Wallet connection failed: {exc}")
            self._status = f"Wallet connection failed: {exc}"
            return SignerIdentity()

    async def submit_to_ledger(self, signer: SignerIdentity) -> bool:
        """Write the approved video to the ledger, then catalogue it.

        Returns True when the ledger write succeeded, whether or not the
        metadata record could be stored afterwards.
        """
        if not self.can_submit_to_ledger or self._submission is None:
            Log.warning(f"Ledger submission not available in stage {self._stage.value}")
            return False
        if not isinstance(self._result, AnalysisOutcome) or self._submission.fingerprint is None:
            return False

        submission = self._submission
        outcome = self._result
        self._error_kind = None
        self._status = "Submitting to the blockchain..."
        self._set_stage(WorkflowStage.LEDGER_PENDING)

        try:
            receipt = await self._ledger_submitter.submit(
                submission.fingerprint,
                submission.caption,
                submission.tag,
                signer,
            )
        except LedgerNotAuthorizedError as exc:
            self._fail_ledger(ErrorKind.AUTHORIZATION, str(exc))
            return False
        except LedgerError as exc:
            self._fail_ledger(
                ErrorKind.LEDGER, f"Error uploading video to the blockchain: {exc}"
            )
            return False
        except asyncio.CancelledError:
            self._fail_ledger(
                ErrorKind.LEDGER,
                "Blockchain submission interrupted; check the wallet before resubmitting.",
            )
            raise
        except Exception as exc:
            self._fail_ledger(
                ErrorKind.LEDGER, f"Error uploading video to the blockchain: {exc}"
            )
            return False

        self._receipt = receipt
        self._status = f"Transaction successful! Tx Hash: {receipt.transaction_id}"
        self._set_stage(WorkflowStage.LEDGER_SUCCEEDED)
        await self._record(submission, outcome, receipt)
        return True

    def generate_report(
        self,
        description: str | None = None,
        summary: str | None = None,
    ) -> bytes | None:
        """Render the offline report from the analysis text or the given fallback."""
        description = description or self._description()
        summary = summary or self._summary_text()
        if not (description and summary):
            Log.warning("Report generation needs both description and summary text")
            return None
        return self._report_generator.generate_report(description, summary)

    def save_report(self, path: Path | None = None) -> Path | None:
        if not self.can_generate_report:
            Log.warning("Report generation needs both description and summary text")
            return None
        try:
            return self._report_generator.save_report(
                self._description(), self._summary_text(), path
            )
        except ReportGenerationError as exc:
            Log.error(str(exc))
            self._status = str(exc)
            return None

    def report_artifact(self) -> bytes | None:
        """Report PDF returned by the analyzer, if the last attempt produced one."""
        if isinstance(self._result, AnalysisOutcome):
            return self._result.report_artifact
        return None

    def abandon(self) -> bool:
        """Drop the current run and return to Idle."""
        if self._stage in COMMITTING_STAGES:
            Log.warning(f"Cannot abandon workflow while {self._stage.value}")
            return False
        self._invalidate()
        self._reset_results()
        self._submission = None
        self._set_stage(WorkflowStage.IDLE)
        return True

    def snapshot(self) -> WorkflowSnapshot:
        submission = self._submission
        return WorkflowSnapshot(
            stage=self._stage,
            generation=self._generation,
            fingerprint=submission.fingerprint if submission else None,
            verdict=self._result.verdict if self._result is not None else None,
            description=self._description(),
            summary_text=self._summary_text(),
            status=self._status,
            error_kind=self._error_kind,
            receipt=self._receipt,
            record_id=self._record_id,
            recording_failed=self._recording_failed,
            fingerprint_ready=bool(submission and submission.fingerprint),
            is_analyzing=self._stage is WorkflowStage.ANALYZING,
            can_analyze=self.can_analyze,
            can_submit_to_ledger=self.can_submit_to_ledger,
            can_generate_report=self.can_generate_report,
        )

    async def _record(
        self,
        submission: Submission,
        outcome: AnalysisOutcome,
        receipt: LedgerReceipt,
    ) -> None:
        self._set_stage(WorkflowStage.RECORDING_PENDING)
        self._recording_failed = True
        try:
            record = MetadataRecord.build(submission, outcome, receipt)
            self._record_id = await self._recorder.record(record)
            self._recording_failed = False
            self._status += " Video details stored."
        except Exception as exc:
            Log.error(f"Transaction {receipt.transaction_id} on-chain but not catalogued: {exc}")
            self._error_kind = ErrorKind.RECORDING
            self._status += f" Video is on-chain but not catalogued: {exc}"
        finally:
            self._set_stage(WorkflowStage.DONE)

    def _apply_analysis(self, result: AnalysisResult) -> None:
        self._result = result
        if isinstance(result, AnalysisFailure):
            self._error_kind = ErrorKind.ANALYSIS
            self._status = f"Video analysis failed: {result.message}"
            self._set_stage(WorkflowStage.ANALYSIS_FAILED)
            return
        if result.verdict is Verdict.APPROVED:
            self._status = "Video approved."
        else:
            self._status = "Video rejected."
        self._set_stage(WorkflowStage.ANALYSIS_SUCCEEDED)

    def _fail_ledger(self, kind: ErrorKind, message: str) -> None:
        Log.error(f"Ledger submission failed ({kind.value}): {message}")
        self._error_kind = kind
        self._status = message
        self._set_stage(WorkflowStage.LEDGER_FAILED)

    def _invalidate(self) -> None:
        self._generation += 1
        task = self._analysis_task
        self._analysis_task = None
        if task is not None and not task.done():
            task.cancel()

    def _reset_results(self) -> None:
        self._result: AnalysisResult | None = None
        self._receipt: LedgerReceipt | None = None
        self._record_id: str | None = None
        self._recording_failed = False
        self._error_kind: ErrorKind | None = None
        self._status = ""

    def _description(self) -> str:
        return self._result.description if self._result is not None else ""

    def _summary_text(self) -> str:
        return self._result.summary_text if self._result is not None else ""

    def _set_stage(self, stage: WorkflowStage) -> None:
        Log.transition(self._stage.value, stage.value, self._generation)
        self._stage = stage


def build_controller(settings: Settings) -> WorkflowController:
    """Build a WorkflowController with the adapters named in settings."""
    ledger_submitter = LedgerSubmitter(
        LedgerClientFactory.create(settings),
        timeout_seconds=settings.ledger_timeout_seconds,
    )
    recorder = MetadataRecorder(
        VideoRecordsRepository(),
        timeout_seconds=settings.recorder_timeout_seconds,
    )
    return WorkflowController(
        analysis_client=AnalysisClientFactory.create(settings),
        ledger_submitter=ledger_submitter,
        recorder=recorder,
        report_generator=ReportGenerator(output_dir=Path(settings.report_output_dir)),
    )
