"""CLI for grade curving."""

import logging
import os
import uuid
from pathlib import Path

import click
from dotenv import load_dotenv

from .boards.registry import (
    get_board,
    get_board_info,
    get_school_grading,
    list_boards,
    list_school_gradings,
    school_grading_for_board,
)
from .boards.validation import has_errors, validate_board, validate_school_grading
from .engine import CurvingPipeline
from .export import (
    default_export_name,
    load_board,
    load_school_grading,
    load_scores,
    save_results_json,
    write_csv,
)
from .logging import RunLogger
from .models import ExamBoard, SchoolGradingSystem, round1

# Load .env file if present
load_dotenv()


def _resolve_board(value: str) -> ExamBoard:
    """A board id from the registry, or a path to a board JSON file."""
    path = Path(value)
    if path.suffix.lower() == ".json" or path.is_file():
        if not path.is_file():
            raise click.UsageError(f"Board file not found: {value}")
        try:
            return load_board(path)
        except ValueError as e:
            raise click.UsageError(str(e))
    try:
        return get_board(value)
    except ValueError as e:
        raise click.UsageError(str(e))


def _resolve_grading(value: str, board: ExamBoard) -> SchoolGradingSystem:
    """``auto``, a preset name, or a path to a grading JSON file."""
    if value == "auto":
        return school_grading_for_board(board)
    if value in list_school_gradings():
        return get_school_grading(value)
    path = Path(value)
    if not path.is_file():
        available = ", ".join(["auto", *list_school_gradings()])
        raise click.UsageError(f"Unknown school grading: {value}. Available: {available}, or a JSON file")
    try:
        return load_school_grading(path)
    except ValueError as e:
        raise click.UsageError(str(e))


@click.group()
@click.version_option(package_name="gradecurve")
@click.option("--verbose", "-v", is_flag=True, help="Show debug logging")
def cli(verbose: bool):
    """Curve raw assessment scores onto exam-board and school grades."""
    logging.basicConfig(
        level=logging.DEBUG if verbose else logging.WARNING,
        format="%(levelname)s %(name)s: %(message)s",
    )


@cli.command("curve")
@click.argument("scores", type=click.Path(exists=True, dir_okay=False))
@click.option("--board", "-b", default="igcse-cs", envvar="GRADECURVE_BOARD", show_default=True,
              help="Board id or path to a board JSON file")
@click.option("--internal-max", "-m", default=100.0, type=float, envvar="GRADECURVE_INTERNAL_MAX",
              show_default=True, help="Maximum attainable raw score")
@click.option("--grading", "-g", default="auto", envvar="GRADECURVE_GRADING", show_default=True,
              help="School grading: auto, standard, ib, or a JSON file")
@click.option("--output", "-o", type=click.Path(), help="CSV output file or directory")
@click.option("--json", "json_path", type=click.Path(), help="Write results and summary as JSON")
@click.option("--log", "log_path", type=click.Path(), help="Append a JSONL run log")
@click.option("--workers", "-w", default=1, type=click.IntRange(min=1), show_default=True,
              help="Worker threads for large batches")
def curve(
    scores: str,
    board: str,
    internal_max: float,
    grading: str,
    output: str | None,
    json_path: str | None,
    log_path: str | None,
    workers: int,
):
    """Curve the raw scores in SCORES (.csv, .jsonl or .json)."""
    exam_board = _resolve_board(board)
    school_grading = _resolve_grading(grading, exam_board)

    try:
        score_list = load_scores(Path(scores))
    except ValueError as e:
        raise click.UsageError(str(e))

    run_logger = None
    if log_path:
        run_logger = RunLogger(output_path=Path(log_path), run_id=str(uuid.uuid4())[:8])

    pipeline = CurvingPipeline(
        exam_board,
        school_grading,
        internal_max=internal_max,
        logger=run_logger,
        max_workers=workers,
    )

    click.echo(f"Curving {len(score_list)} scores out of {internal_max:g} "
               f"onto {exam_board.name} ({exam_board.max_score:g}) / {school_grading.name}")

    try:
        results = pipeline.curve(score_list)
    finally:
        if run_logger:
            run_logger.close()

    if results:
        width = max(12, *(len(r.student_name) for r in results))
        click.echo(f"\n{'Student':<{width}}  {'Raw':>6}  {'Scaled':>6}  {'Board':>5}  {'School %':>8}  {'Grade':>5}")
        for r in results:
            click.echo(f"{r.student_name:<{width}}  {r.raw_score:>6g}  {r.scaled_score:>6g}  "
                       f"{r.board_grade:>5}  {r.school_percent:>8g}  {r.school_grade:>5}")

    summary = pipeline.summarize(results)
    click.echo(f"\nClass average: {summary.class_average:g}%")
    if summary.school_distribution:
        dist = ", ".join(f"{label}: {n}" for label, n in summary.school_distribution.items())
        click.echo(f"Distribution: {dist}")
    if summary.fallback_count:
        click.echo(f"Note: {summary.fallback_count} result(s) used the board-percentage fallback "
                   f"(board grade labels not found in {school_grading.name})")

    if output:
        out = Path(output)
        # A trailing separator or a bare name means a directory
        if output.endswith(("/", os.sep)) or out.is_dir() or not out.suffix:
            out = out / default_export_name()
        write_csv(results, out)
        click.echo(f"CSV: {out}")

    if json_path:
        click.echo(f"JSON: {save_results_json(results, Path(json_path))}")

    if log_path:
        click.echo(f"Log: {log_path}")


@cli.command("boards")
def boards():
    """List available exam boards."""
    click.echo("Available boards:\n")

    for board_id in list_boards():
        info = get_board_info(board_id)
        click.echo(f"  {board_id}")
        click.echo(f"    {info['name']} (max {info['max_score']:g})")
        if info.get("grades"):
            click.echo(f"    Grades: {' '.join(info['grades'])}")
        click.echo()


@cli.command("show")
@click.argument("board")
@click.option("--grading", "-g", default="auto", help="School grading: auto, standard, ib, or a JSON file")
def show(board: str, grading: str):
    """Show a board's boundaries and its paired school scale."""
    exam_board = _resolve_board(board)
    school_grading = _resolve_grading(grading, exam_board)

    click.echo(f"{exam_board.name} (max {exam_board.max_score:g})")
    for b in exam_board.boundaries:
        share = round1(b.min_score / exam_board.max_score * 100) if exam_board.max_score > 0 else 0.0
        click.echo(f"  {b.grade:>3}  min {b.min_score:>6g}  ({share:g}%)")

    click.echo(f"\n{school_grading.name}")
    for g in school_grading.grades:
        click.echo(f"  {g.label:>3}  {g.min_percent:g}-{g.max_percent:g}%")


@cli.command("validate")
@click.argument("board")
@click.option("--grading", "-g", default="auto", help="School grading: auto, standard, ib, or a JSON file")
def validate(board: str, grading: str):
    """Check a board (and its school scale) for configuration problems."""
    exam_board = _resolve_board(board)
    school_grading = _resolve_grading(grading, exam_board)

    issues = validate_board(exam_board)
    grading_issues = validate_school_grading(school_grading)

    for label, found in ((exam_board.name, issues), (school_grading.name, grading_issues)):
        if not found:
            click.echo(f"✓ {label}: no problems")
            continue
        click.echo(f"{label}:")
        for issue in found:
            click.echo(f"  {issue}")

    if has_errors(issues) or has_errors(grading_issues):
        raise SystemExit(1)


if __name__ == "__main__":
    cli()
