import tomllib
from fnmatch import fnmatch
from pathlib import Path

ROOT = Path(__file__).resolve().parents[2]


def _pyproject() -> dict:
    with (ROOT / "pyproject.toml").open("rb") as f:
        return tomllib.load(f)


class TestPackageDiscovery:
    def test_finds_packages_without_init_files(self) -> None:
        find = _pyproject()["tool"]["setuptools"]["packages"]["find"]
        assert find["namespaces"] is True

    def test_every_source_directory_is_included(self) -> None:
        include = _pyproject()["tool"]["setuptools"]["packages"]["find"]["include"]
        source_dirs = {
            ".".join(path.parent.relative_to(ROOT).parts)
            for path in (ROOT / "video_tracker").rglob("*.py")
        }
        assert "video_tracker.workflow" in source_dirs
        for package in source_dirs:
            assert any(fnmatch(package, pattern) for pattern in include), package

    def test_console_script_points_at_cli(self) -> None:
        scripts = _pyproject()["project"]["scripts"]
        assert scripts["video-tracker"] == "video_tracker.main:run"
