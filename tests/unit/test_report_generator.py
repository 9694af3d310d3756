import io
from pathlib import Path

import pdfplumber
import pytest

from video_tracker.report.exceptions import ReportGenerationError
from video_tracker.report.generator import DEFAULT_REPORT_NAME, ReportGenerator


def _pages_text(pdf_bytes: bytes) -> list[str]:
    with pdfplumber.open(io.BytesIO(pdf_bytes)) as pdf:
        return [page.extract_text() or "" for page in pdf.pages]


class TestGenerateReport:
    def test_has_title_and_both_labeled_sections(self) -> None:
        content = ReportGenerator().generate_report("Clip of a cat.", "Nothing harmful.")

        text = "\n".join(_pages_text(content))
        assert content.startswith(b"%PDF")
        assert "Video Analysis Report" in text
        assert "Description:" in text
        assert "Clip of a cat." in text
        assert "Summary:" in text
        assert "Nothing harmful." in text
        assert text.index("Description:") < text.index("Summary:")

    def test_renders_on_a4_pages(self) -> None:
        content = ReportGenerator().generate_report("desc", "summary")

        with pdfplumber.open(io.BytesIO(content)) as pdf:
            page = pdf.pages[0]
            assert (round(page.width, 2), round(page.height, 2)) == (595.28, 841.89)

    def test_same_input_gives_identical_bytes(self) -> None:
        generator = ReportGenerator()
        first = generator.generate_report("desc", "summary")
        second = ReportGenerator().generate_report("desc", "summary")
        assert first == second

    def test_different_input_gives_different_bytes(self) -> None:
        generator = ReportGenerator()
        assert generator.generate_report("a", "b") != generator.generate_report("a", "c")

    def test_long_text_is_wrapped_within_page_width(self) -> None:
        summary = " ".join(["verylongword"] * 200)
        content = ReportGenerator().generate_report("short", summary)

        limit = ReportGenerator.LEFT + ReportGenerator.TEXT_WIDTH + 1
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page in pdf.pages:
                assert all(char["x1"] <= limit for char in page.chars)

    def test_unbroken_token_is_split_within_page_width(self) -> None:
        token = "https://analyzer.example/report/" + "a" * 150
        content = ReportGenerator().generate_report("short", f"See {token} for details")

        limit = ReportGenerator.LEFT + ReportGenerator.TEXT_WIDTH + 1
        with pdfplumber.open(io.BytesIO(content)) as pdf:
            for page in pdf.pages:
                assert all(char["x1"] <= limit for char in page.chars)
        text = "".join(_pages_text(content)).replace("\n", "")
        assert token in text

    def test_long_text_spans_several_pages(self) -> None:
        summary = "\n".join(f"Finding number {i}" for i in range(200))
        content = ReportGenerator().generate_report("desc", summary)

        pages = _pages_text(content)
        assert len(pages) > 1
        assert "Finding number 199" in pages[-1]


class TestSaveReport:
    def test_writes_default_file_name(self, tmp_path: Path) -> None:
        generator = ReportGenerator(output_dir=tmp_path)

        path = generator.save_report("desc", "summary")

        assert path == tmp_path / DEFAULT_REPORT_NAME
        assert path.name == "VideoAnalysisReport.pdf"
        assert path.read_bytes() == generator.generate_report("desc", "summary")

    def test_writes_explicit_path(self, tmp_path: Path) -> None:
        target = tmp_path / "custom.pdf"

        path = ReportGenerator().save_report("desc", "summary", target)

        assert path == target
        assert target.exists()

    def test_raises_when_directory_missing(self, tmp_path: Path) -> None:
        generator = ReportGenerator(output_dir=tmp_path / "nope")
        with pytest.raises(ReportGenerationError, match="Cannot write report"):
            generator.save_report("desc", "summary")
