import hashlib
from pathlib import Path

from video_tracker.workflow.exceptions import FingerprintError

CHUNK_SIZE = 1024 * 1024


def fingerprint(data: bytes) -> str:
    """Return the SHA-256 hex digest of the given bytes.

    The digest becomes the on-chain identity of the video, so it is unsalted
    and depends on nothing but the content.

    Raises:
        FingerprintError: if data is not a bytes-like object.
    """
    if not isinstance(data, (bytes, bytearray, memoryview)):
        raise FingerprintError(
            f"Cannot fingerprint object of type {type(data).__name__}"
        )
    return hashlib.sha256(data).hexdigest()


def fingerprint_file(path: Path) -> str:
    """Stream a file from disk and return the same digest as fingerprint()."""
    digest = hashlib.sha256()
    try:
        with path.open("rb") as fh:
            for chunk in iter(lambda: fh.read(CHUNK_SIZE), b""):
                digest.update(chunk)
    except OSError as exc:
        raise FingerprintError(f"Cannot read {path}: {exc}") from exc
    return digest.hexdigest()
