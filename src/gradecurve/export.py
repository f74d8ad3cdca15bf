"""Reading score/config files and exporting curved results.

CSV export format (one row per student, ``\\n`` line endings)::

    Student Name,Raw Score,Scaled Score,Board Grade,School %,School Grade
    "Smith, Jo",80,60,A,89.9,A

Fields containing a comma, quote or newline are quoted with inner quotes
doubled.  Whole numbers print without a trailing ``.0``.
"""

from __future__ import annotations

import csv
import io
import json
from datetime import date
from pathlib import Path
from typing import Any, Sequence

from .models import ExamBoard, SchoolGradingSystem, StudentCurvedGrade, StudentScore
from .stats import summarize

CSV_HEADERS = ["Student Name", "Raw Score", "Scaled Score", "Board Grade", "School %", "School Grade"]

_NAME_COLUMNS = ("student_name", "Student Name", "studentName", "name")
_SCORE_COLUMNS = ("raw_score", "Raw Score", "rawScore", "score")
_ID_COLUMNS = ("student_id", "Student ID", "studentId", "id")


# ============================================================================
# CSV export
# ============================================================================

def format_value(value: Any) -> str:
    """Render a cell: ``60.0`` -> ``"60"``, ``89.9`` -> ``"89.9"``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def to_csv(results: Sequence[StudentCurvedGrade]) -> str:
    """Render *results* as CSV text with the standard header row."""
    buf = io.StringIO()
    writer = csv.writer(buf, lineterminator="\n", quoting=csv.QUOTE_MINIMAL)
    writer.writerow(CSV_HEADERS)
    for r in results:
        writer.writerow([
            format_value(v)
            for v in (
                r.student_name,
                r.raw_score,
                r.scaled_score,
                r.board_grade,
                r.school_percent,
                r.school_grade,
            )
        ])
    return buf.getvalue()


def default_export_name(day: date | None = None) -> str:
    day = day or date.today()
    return f"curved_grades_{day.isoformat()}.csv"


def write_csv(results: Sequence[StudentCurvedGrade], path: Path) -> Path:
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(to_csv(results), encoding="utf-8", newline="")
    return path


def save_results_json(results: Sequence[StudentCurvedGrade], path: Path) -> Path:
    """Write results plus their summary as a single JSON document."""
    path = Path(path)
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(json.dumps({
        "summary": summarize(results).to_dict(),
        "results": [r.to_dict() for r in results],
    }, indent=2))
    return path


# ============================================================================
# Input files
# ============================================================================

def _first(row: dict, columns: tuple[str, ...]) -> Any:
    for col in columns:
        if col in row and row[col] not in (None, ""):
            return row[col]
    return None


def _to_score(value: Any) -> float:
    # Unparsable entries count as 0, like a blank manual entry
    try:
        return float(value)
    except (TypeError, ValueError):
        return 0.0


def _score_from_row(row: dict, index: int) -> StudentScore:
    name = _first(row, _NAME_COLUMNS)
    student_id = _first(row, _ID_COLUMNS)
    return StudentScore(
        student_id=str(student_id) if student_id is not None else f"manual-{index + 1}",
        student_name=str(name) if name is not None else "",
        raw_score=_to_score(_first(row, _SCORE_COLUMNS)),
    )


def load_scores(path: Path) -> list[StudentScore]:
    """Load student scores from ``.csv``, ``.jsonl`` or ``.json``.

    CSV files need a name column (``student_name`` or ``Student Name``) and a
    score column (``raw_score`` or ``Raw Score``); ``student_id`` is
    optional.  JSON files hold a list of objects with the same keys.

    Raises:
        ValueError: If the file has no recognisable name column, holds a
            row that is not an object, or has an unsupported extension.
    """
    path = Path(path)
    suffix = path.suffix.lower()

    if suffix == ".csv":
        with open(path, newline="", encoding="utf-8-sig") as f:
            reader = csv.DictReader(f)
            columns = reader.fieldnames or []
            if not any(c in columns for c in _NAME_COLUMNS):
                raise ValueError(f"{path}: no student name column (expected one of {', '.join(_NAME_COLUMNS)})")
            rows = list(reader)
    elif suffix == ".jsonl":
        rows = []
        with open(path, encoding="utf-8") as f:
            for line in f:
                line = line.strip()
                if line:
                    rows.append(json.loads(line))
    elif suffix == ".json":
        data = json.loads(path.read_text(encoding="utf-8"))
        rows = data.get("scores", []) if isinstance(data, dict) else data
        if not isinstance(rows, list):
            raise ValueError(f"{path}: expected a list of score objects")
    else:
        raise ValueError(f"Unsupported scores file type: {path.suffix or path.name}")

    for i, row in enumerate(rows):
        if not isinstance(row, dict):
            raise ValueError(f"{path}: row {i + 1} is not an object")
    return [_score_from_row(row, i) for i, row in enumerate(rows)]


def load_board(path: Path) -> ExamBoard:
    """Load an exam board from a JSON file in the stored format."""
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object describing a board")
    board = ExamBoard.from_dict(data)
    if not board.id:
        board = ExamBoard(id=path.stem, name=board.name or path.stem,
                          max_score=board.max_score, boundaries=board.boundaries)
    return board


def load_school_grading(path: Path) -> SchoolGradingSystem:
    """Load a school grading system from a JSON file."""
    path = Path(path)
    data = json.loads(path.read_text(encoding="utf-8"))
    if not isinstance(data, dict):
        raise ValueError(f"{path}: expected a JSON object describing a grading system")
    return SchoolGradingSystem.from_dict(data)
