from pathlib import Path

from video_tracker.workflow.exceptions import FileReadError


class FileLoader:
    """Reads a local video file into memory for fingerprinting and upload."""

    def __init__(self, base_dir: Path | None = None) -> None:
        self._base_dir = base_dir

    def load(self, path: Path) -> bytes:
        """Read video bytes from disk.

        Raises:
            FileNotFoundError: if the file does not exist at resolved path.
            FileReadError: if the path exists but cannot be read as a file.
        """
        resolved = self._resolve_path(path)
        if not resolved.exists():
            raise FileNotFoundError(f"File not found: {resolved}")
        if not resolved.is_file():
            raise FileReadError(f"Not a regular file: {resolved}")
        try:
            return resolved.read_bytes()
        except OSError as exc:
            raise FileReadError(f"Cannot read {resolved}: {exc}") from exc

    def _resolve_path(self, path: Path) -> Path:
        if self._base_dir is None or path.is_absolute():
            return path
        return self._base_dir / path
