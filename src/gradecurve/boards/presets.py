"""Preset examination boards and school grading systems.

Also holds the authoring helpers used when someone authors a custom board.
Those helpers are where configuration is checked; the engine accepts
whatever it is given.
"""

from __future__ import annotations

from typing import Iterable

from ..models import ExamBoard, GradeBoundary, SchoolGradeRange, SchoolGradingSystem


def _board(id: str, name: str, max_score: float, boundaries: list[tuple[str, float]]) -> ExamBoard:
    return ExamBoard(
        id=id,
        name=name,
        max_score=max_score,
        boundaries=tuple(GradeBoundary(grade, score) for grade, score in boundaries),
    )


def _grading(name: str, grades: list[tuple[str, float, float]]) -> SchoolGradingSystem:
    return SchoolGradingSystem(
        name=name,
        grades=tuple(SchoolGradeRange(label, lo, hi) for label, lo, hi in grades),
    )


# ============================================================================
# Examination boards
# ============================================================================

IGCSE_COMPUTER_SCIENCE = _board("igcse-cs", "IGCSE Computer Science", 75, [
    ("A*", 61), ("A", 49), ("B", 37), ("C", 25),
    ("D", 18), ("E", 11), ("F", 5), ("U", 0),
])

CAMBRIDGE_AS_LEVEL = _board("cambridge-as", "Cambridge AS Level", 100, [
    ("A", 65), ("B", 55), ("C", 45), ("D", 35), ("E", 25), ("U", 0),
])

CAMBRIDGE_A_LEVEL = _board("cambridge-a-level", "Cambridge A Level", 100, [
    ("A*", 80), ("A", 70), ("B", 60), ("C", 50), ("D", 40), ("E", 30), ("U", 0),
])

IB_DIPLOMA = _board("ib-diploma", "IB Diploma", 100, [
    ("7", 90), ("6", 77), ("5", 64), ("4", 51),
    ("3", 38), ("2", 25), ("1", 12), ("0", 0),
])

PRESET_BOARDS: tuple[ExamBoard, ...] = (
    IGCSE_COMPUTER_SCIENCE,
    CAMBRIDGE_AS_LEVEL,
    CAMBRIDGE_A_LEVEL,
    IB_DIPLOMA,
)


# ============================================================================
# School grading systems
# ============================================================================

DEFAULT_SCHOOL_GRADING = _grading("Standard A*-F", [
    ("A*", 90, 100),
    ("A", 80, 89.9),
    ("B", 70, 79.9),
    ("C", 60, 69.9),
    ("D", 50, 59.9),
    ("E", 40, 49.9),
    ("F", 0, 39.9),
    ("U", 0, 0),
])

IB_SCHOOL_GRADING = _grading("IB 7-1 Scale", [
    ("7", 90, 100),
    ("6", 77, 89.9),
    ("5", 64, 76.9),
    ("4", 51, 63.9),
    ("3", 38, 50.9),
    ("2", 25, 37.9),
    ("1", 12, 24.9),
    ("0", 0, 11.9),
])


# ============================================================================
# Authoring helpers
# ============================================================================

def get_preset_board_by_name(name: str) -> ExamBoard | None:
    return next((b for b in PRESET_BOARDS if b.name == name), None)


def create_custom_board(
    name: str,
    max_score: float,
    boundaries: Iterable[GradeBoundary | dict],
    *,
    id: str | None = None,
) -> ExamBoard:
    """Build a board with its boundaries sorted highest first.

    *boundaries* may be ``GradeBoundary`` objects or stored-format dicts; the
    caller's sequence is left untouched.

    Raises:
        ValueError: If *max_score* is not positive.
    """
    if not max_score > 0:
        raise ValueError(f"Max score must be greater than 0, got {max_score}")

    parsed = [b if isinstance(b, GradeBoundary) else GradeBoundary.from_dict(b) for b in boundaries]
    ordered = sorted(parsed, key=lambda b: b.min_score, reverse=True)
    return ExamBoard(
        id=id or f"custom-{_slug(name)}",
        name=name,
        max_score=max_score,
        boundaries=tuple(ordered),
    )


def create_custom_school_grading(
    name: str,
    grades: Iterable[SchoolGradeRange | dict],
) -> SchoolGradingSystem:
    """Build a grading system with ranges sorted by ``min_percent``, highest first."""
    parsed = [g if isinstance(g, SchoolGradeRange) else SchoolGradeRange.from_dict(g) for g in grades]
    return SchoolGradingSystem(
        name=name,
        grades=tuple(sorted(parsed, key=lambda g: g.min_percent, reverse=True)),
    )


def _slug(name: str) -> str:
    slug = "".join(c if c.isalnum() else "-" for c in name.lower())
    return "-".join(part for part in slug.split("-") if part) or "board"
