"""Offline two-section PDF summary of an analysis."""

import io
from pathlib import Path

from reportlab.lib.pagesizes import A4
from reportlab.lib.units import mm
from reportlab.lib.utils import simpleSplit
from reportlab.pdfbase.pdfmetrics import stringWidth
from reportlab.pdfgen import canvas

from video_tracker.logging.logger import Log
from video_tracker.report.exceptions import ReportGenerationError

DEFAULT_REPORT_NAME = "VideoAnalysisReport.pdf"


class ReportGenerator:
    """Renders description and summary text into a paginated PDF.

    Output depends only on the two input strings: reportlab runs in
    invariant mode so no timestamp or random document id is embedded.
    """

    TITLE = "Video Analysis Report"
    FONT = "Helvetica"
    TITLE_SIZE = 18
    LABEL_SIZE = 12
    BODY_SIZE = 10
    LEFT = 20 * mm
    TOP = 20 * mm
    BOTTOM = 20 * mm
    TEXT_WIDTH = 170 * mm
    LINE_GAP = 1.4

    def __init__(self, output_dir: Path | None = None) -> None:
        self._output_dir = output_dir if output_dir is not None else Path(".")

    def generate_report(self, description: str, summary: str) -> bytes:
        buf = io.BytesIO()
        pdf = canvas.Canvas(buf, pagesize=A4, invariant=1)
        pdf.setTitle(self.TITLE)
        _, page_height = A4
        y = page_height - self.TOP

        pdf.setFont(self.FONT, self.TITLE_SIZE)
        pdf.drawString(self.LEFT, y, self.TITLE)
        y -= self.TITLE_SIZE * 2

        for label, text in (("Description:", description), ("Summary:", summary)):
            y = self._draw_section(pdf, label, text, y)

        pdf.showPage()
        pdf.save()
        return buf.getvalue()

    def save_report(
        self,
        description: str,
        summary: str,
        path: Path | None = None,
    ) -> Path:
        """Write the report to disk, by default as VideoAnalysisReport.pdf."""
        target = path if path is not None else self._output_dir / DEFAULT_REPORT_NAME
        content = self.generate_report(description, summary)
        try:
            target.write_bytes(content)
        except OSError as exc:
            raise ReportGenerationError(f"Cannot write report to {target}: {exc}") from exc
        Log.info(f"Saved analysis report ({len(content)} bytes) to {target}")
        return target

    def _draw_section(self, pdf: canvas.Canvas, label: str, text: str, y: float) -> float:
        y = self._ensure_room(pdf, y, self.LABEL_SIZE * 2)
        pdf.setFont(self.FONT, self.LABEL_SIZE)
        pdf.drawString(self.LEFT, y, label)
        y -= self.LABEL_SIZE * self.LINE_GAP

        line_height = self.BODY_SIZE * self.LINE_GAP
        pdf.setFont(self.FONT, self.BODY_SIZE)
        for line in self._wrap(text):
            y = self._ensure_room(pdf, y, line_height)
            pdf.drawString(self.LEFT, y, line)
            y -= line_height
        return y - self.LABEL_SIZE

    def _wrap(self, text: str) -> list[str]:
        lines: list[str] = []
        for paragraph in text.splitlines() or [""]:
            for line in simpleSplit(paragraph, self.FONT, self.BODY_SIZE, self.TEXT_WIDTH) or [""]:
                lines.extend(self._break_long_line(line))
        return lines

    def _break_long_line(self, line: str) -> list[str]:
        # simpleSplit only breaks at spaces; URLs and hashes need hard breaks.
        if stringWidth(line, self.FONT, self.BODY_SIZE) <= self.TEXT_WIDTH:
            return [line]
        chunks: list[str] = []
        current = ""
        for char in line:
            if current and stringWidth(current + char, self.FONT, self.BODY_SIZE) > self.TEXT_WIDTH:
                chunks.append(current)
                current = char
            else:
                current += char
        chunks.append(current)
        return chunks

    def _ensure_room(self, pdf: canvas.Canvas, y: float, needed: float) -> float:
        if y - needed >= self.BOTTOM:
            return y
        pdf.showPage()
        pdf.setFont(self.FONT, self.BODY_SIZE)
        _, page_height = A4
        return page_height - self.TOP
