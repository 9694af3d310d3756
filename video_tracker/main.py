import argparse
import asyncio
from pathlib import Path

from video_tracker.config.settings import Settings
from video_tracker.database.connection import close_pool, init_pool
from video_tracker.logging.logger import Log
from video_tracker.workflow.controller import WorkflowController, build_controller
from video_tracker.workflow.exceptions import FileReadError
from video_tracker.workflow.file_loader import FileLoader
from video_tracker.workflow.models import Verdict, WorkflowStage

ANALYZER_ARTIFACT_NAME = "video_summary.pdf"


def build_parser() -> argparse.ArgumentParser:
    parser = argparse.ArgumentParser(
        prog="video-tracker",
        description="Analyze a video and optionally register its fingerprint on-chain.",
    )
    parser.add_argument("video", type=Path, help="Path to the video file")
    parser.add_argument("--caption", required=True)
    parser.add_argument("--tag", required=True, help="Main tag")
    parser.add_argument("--uploader", required=True, help="Uploader name")
    parser.add_argument("--overview", required=True, help="Overview of the video")
    parser.add_argument(
        "--submit",
        action="store_true",
        help="Write the fingerprint to the ledger when the video is approved",
    )
    parser.add_argument(
        "--report",
        action="store_true",
        help="Save the offline analysis report PDF",
    )
    parser.add_argument(
        "--save-artifact",
        action="store_true",
        help=f"Save the analyzer's own report as {ANALYZER_ARTIFACT_NAME}",
    )
    return parser


async def run_workflow(args: argparse.Namespace, settings: Settings) -> int:
    """Drive one workflow run from the command line and return the exit code."""
    try:
        blob = FileLoader().load(args.video)
    except (FileNotFoundError, FileReadError) as exc:
        Log.error(str(exc))
        return 1

    controller = build_controller(settings)
    controller.update_metadata(
        caption=args.caption,
        tag=args.tag,
        uploader_name=args.uploader,
        overview=args.overview,
    )
    if not controller.select_file(blob):
        _print_status(controller)
        return 1

    await controller.analyze()
    output_dir = Path(settings.report_output_dir)
    if args.save_artifact:
        _save_artifact(controller, output_dir / ANALYZER_ARTIFACT_NAME)
    if args.report:
        controller.save_report()

    if args.submit and controller.can_submit_to_ledger:
        await _submit(controller, settings)

    _print_status(controller)
    snapshot = controller.snapshot()
    if snapshot.stage is WorkflowStage.DONE:
        return 0
    if snapshot.stage is WorkflowStage.ANALYSIS_SUCCEEDED and snapshot.verdict is Verdict.APPROVED:
        return 0
    return 1


async def _submit(controller: WorkflowController, settings: Settings) -> None:
    signer = await controller.connect_signer()
    try:
        await init_pool(settings)
    except Exception as exc:
        # Ledger write still goes ahead; the record step reports the gap.
        Log.warning(f"Document store unavailable: {exc}")
    try:
        await controller.submit_to_ledger(signer)
    finally:
        await close_pool()


def _save_artifact(controller: WorkflowController, path: Path) -> None:
    artifact = controller.report_artifact()
    if artifact is None:
        Log.warning("No analyzer report to save")
        return
    try:
        path.write_bytes(artifact)
    except OSError as exc:
        Log.error(f"Cannot write analyzer report to {path}: {exc}")
        return
    Log.info(f"Saved analyzer report to {path}")


def _print_status(controller: WorkflowController) -> None:
    snapshot = controller.snapshot()
    print(f"stage: {snapshot.stage.value}")
    if snapshot.fingerprint:
        print(f"fingerprint: {snapshot.fingerprint}")
    if snapshot.verdict is not None:
        print(f"verdict: {snapshot.verdict.value}")
    if snapshot.status:
        print(snapshot.status)


def main(argv: list[str] | None = None) -> int:
    """Entry point: parse args -> configure logging -> run the workflow."""
    args = build_parser().parse_args(argv)
    settings = Settings()
    Log.configure(settings.log_level)
    return asyncio.run(run_workflow(args, settings))


def run() -> None:
    raise SystemExit(main())


if __name__ == "__main__":
    run()
