import asyncio

import httpx

from video_tracker.analysis.base import BaseAnalysisClient
from video_tracker.analysis.exceptions import (
    AnalysisError,
    AnalysisNetworkError,
    AnalysisResponseError,
)
from video_tracker.logging.logger import Log
from video_tracker.pdf.base import BaseReportTextExtractor
from video_tracker.pdf.exceptions import PdfExtractionError
from video_tracker.workflow.models import (
    AnalysisFailure,
    AnalysisOutcome,
    AnalysisResult,
    Verdict,
)


class HttpAnalysisClient(BaseAnalysisClient):
    """Analyzer adapter that uploads the video as multipart form data.

    The analyzer answers with a rendered PDF report. The verdict travels in an
    optional response header; a successful response without it counts as
    approved.
    """

    VERDICT_HEADER = "X-Analysis-Verdict"
    DESCRIPTION = "Analysis complete. PDF downloaded."
    FALLBACK_SUMMARY = "Please check the downloaded PDF for detailed information."

    def __init__(
        self,
        *,
        url: str,
        timeout_seconds: int,
        text_extractor: BaseReportTextExtractor,
        upload_filename: str = "video.mp4",
        summary_max_chars: int = 2000,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._url = url
        self._timeout_seconds = timeout_seconds
        self._text_extractor = text_extractor
        self._upload_filename = upload_filename
        self._summary_max_chars = summary_max_chars
        self._transport = transport

    async def analyze(self, blob: bytes) -> AnalysisResult:
        Log.info(f"Uploading {len(blob)} bytes to analyzer {self._url}")
        try:
            response = await self._post(blob)
            outcome = await self._build_outcome(response)
        except AnalysisError as exc:
            Log.warning(f"Video analysis failed: {exc}")
            return AnalysisFailure(message=str(exc))
        Log.info(
            f"Analyzer returned verdict {outcome.verdict.value} "
            f"with {len(outcome.report_artifact)} byte report"
        )
        return outcome

    async def _post(self, blob: bytes) -> httpx.Response:
        files = {"file": (self._upload_filename, blob, "application/octet-stream")}
        try:
            async with httpx.AsyncClient(
                timeout=self._timeout_seconds,
                transport=self._transport,
            ) as client:
                response = await client.post(self._url, files=files)
        except httpx.TimeoutException as exc:
            raise AnalysisNetworkError(
                f"Analyzer did not answer within {self._timeout_seconds}s"
            ) from exc
        except httpx.HTTPError as exc:
            raise AnalysisNetworkError(f"Analyzer request failed: {exc}") from exc

        Log.debug(
            f"Analyzer answered HTTP {response.status_code} with {len(response.content)} bytes"
        )
        if not response.is_success:
            raise AnalysisNetworkError(
                f"Video analysis failed: analyzer returned HTTP {response.status_code}"
            )
        return response

    async def _build_outcome(self, response: httpx.Response) -> AnalysisOutcome:
        artifact = response.content
        if not artifact:
            raise AnalysisResponseError("Analyzer returned an empty report")

        verdict = self._parse_verdict(response.headers.get(self.VERDICT_HEADER))
        try:
            text = await asyncio.to_thread(self._text_extractor.extract, artifact)
        except PdfExtractionError as exc:
            raise AnalysisResponseError(f"Analyzer report is not a readable PDF: {exc}") from exc

        return AnalysisOutcome(
            verdict=verdict,
            description=self.DESCRIPTION,
            summary_text=text[: self._summary_max_chars] or self.FALLBACK_SUMMARY,
            report_artifact=artifact,
        )

    @classmethod
    def _parse_verdict(cls, raw: str | None) -> Verdict:
        if raw is None:
            return Verdict.APPROVED
        try:
            return Verdict(raw.strip().lower())
        except ValueError as exc:
            raise AnalysisResponseError(
                f"Unknown verdict '{raw}' in {cls.VERDICT_HEADER} header"
            ) from exc
