"""Curving engine: raw score -> board grade -> school percentage -> school grade.

Data only flows one way::

    scale_score -> find_board_grade -> find_school_range
                                    -> next_boundary_min -> interpolate_percent
                                    -> classify_percent

Every function here is pure and total.  Bad configuration (empty boundary
sets, label vocabularies that do not line up, zero-width intervals,
non-positive maxima) degrades to ``"N/A"`` labels and ``0`` percentages; no
input combination raises.
"""

from __future__ import annotations

import logging
import math
from typing import Iterable

from ..models import (
    NOT_APPLICABLE,
    CurvedGradeResult,
    ExamBoard,
    GradeBoundary,
    SchoolGradeRange,
    SchoolGradingSystem,
    StudentCurvedGrade,
    StudentScore,
    round1,
)

logger = logging.getLogger(__name__)


# ============================================================================
# Helpers
# ============================================================================

def clamp(value: float, lower: float, upper: float) -> float:
    return min(max(value, lower), upper)


def sort_boundaries(boundaries: Iterable[GradeBoundary]) -> list[GradeBoundary]:
    """Highest ``min_score`` first.  Ties keep their configured order."""
    return sorted(boundaries, key=lambda b: b.min_score, reverse=True)


def sort_ranges(grades: Iterable[SchoolGradeRange]) -> list[SchoolGradeRange]:
    """Highest ``min_percent`` first.  Ties keep their configured order."""
    return sorted(grades, key=lambda g: g.min_percent, reverse=True)


# ============================================================================
# Pipeline stages
# ============================================================================

def scale_score(raw_score: float, internal_max: float, board_max: float) -> float:
    """Rescale *raw_score* out of *internal_max* onto the board's maximum."""
    if not internal_max > 0:
        return 0.0
    return (raw_score / internal_max) * board_max


def find_board_grade(
    scaled_score: float,
    boundaries: Iterable[GradeBoundary],
) -> GradeBoundary | None:
    """Return the highest boundary whose ``min_score`` is <= *scaled_score*.

    A score below every boundary gets the lowest boundary.  ``None`` only for
    an empty boundary set.
    """
    ordered = sort_boundaries(boundaries)
    for boundary in ordered:
        if scaled_score >= boundary.min_score:
            return boundary
    return ordered[-1] if ordered else None


def next_boundary_min(
    boundary: GradeBoundary,
    boundaries: Iterable[GradeBoundary],
    board_max: float,
) -> float:
    """Exclusive upper bound of *boundary*'s interval.

    That is the ``min_score`` of the boundary directly above it, or
    ``board_max + 1`` for the top grade so the board maximum itself is
    inside the interval.
    """
    ordered = sort_boundaries(boundaries)
    try:
        index = ordered.index(boundary)
    except ValueError:
        index = 0
    if index == 0:
        return board_max + 1
    return ordered[index - 1].min_score


def find_school_range(
    board_grade: str,
    school_grading: SchoolGradingSystem,
) -> SchoolGradeRange | None:
    """Label-keyed join from a board grade to the school's range."""
    for grade_range in school_grading.grades:
        if grade_range.label == board_grade:
            return grade_range
    return None


def interpolate_percent(
    scaled_score: float,
    lower: float,
    upper: float,
    school_range: SchoolGradeRange,
) -> float:
    """Place *scaled_score* inside ``[lower, upper - 1]`` onto *school_range*.

    The result is clamped to the school range and rounded to one decimal.
    A zero-width (or inverted) board interval maps to ``min_percent``.
    """
    board_span = (upper - 1) - lower
    school_span = school_range.max_percent - school_range.min_percent

    if not board_span > 0:
        return round1(school_range.min_percent)

    position = scaled_score - lower
    percent = school_range.min_percent + position * (school_span / board_span)
    return round1(clamp(percent, school_range.min_percent, school_range.max_percent))


def classify_percent(percent: float, school_grading: SchoolGradingSystem) -> str:
    """Label of the range containing *percent* (inclusive at both ends).

    Ranges are checked highest first.  A percentage that falls in a gap gets
    the lowest range's label; an empty system gives ``"N/A"``.
    """
    ordered = sort_ranges(school_grading.grades)
    for grade_range in ordered:
        if grade_range.contains(percent):
            return grade_range.label
    if not ordered:
        return NOT_APPLICABLE
    logger.debug("%.1f%% is not covered by %r; using lowest grade", percent, school_grading.name)
    return ordered[-1].label


# ============================================================================
# Orchestration
# ============================================================================

def curve_grade(
    raw_score: float,
    internal_max: float,
    board: ExamBoard,
    school_grading: SchoolGradingSystem,
) -> CurvedGradeResult:
    """Curve a single raw score.

    Args:
        raw_score: Score on the internal assessment.  Clamped into
            ``[0, internal_max]``.
        internal_max: Maximum attainable internal score.
        board: Board whose scale and boundaries define the board grade.
        school_grading: School scale the board grade is mapped onto.

    Returns:
        ``CurvedGradeResult``.  ``method`` records which path produced it.
    """
    if math.isnan(raw_score):
        raw_score = 0.0
    raw_score = max(raw_score, 0.0)
    if raw_score > internal_max:
        raw_score = internal_max

    if not (math.isfinite(internal_max) and internal_max > 0):
        logger.debug("Internal maximum %r is not positive; result is N/A", internal_max)
        return CurvedGradeResult(
            raw_score=max(raw_score, 0.0) if math.isfinite(raw_score) else 0.0,
            scaled_score=0.0,
            board_grade=NOT_APPLICABLE,
            school_percent=0.0,
            school_grade=NOT_APPLICABLE,
            method="invalid_max",
        )

    scaled = scale_score(raw_score, internal_max, board.max_score)
    scaled_rounded = round1(scaled)

    boundary = find_board_grade(scaled, board.boundaries)
    if boundary is None:
        logger.debug("Board %r has no boundaries; board grade is N/A", board.name)
        return CurvedGradeResult(
            raw_score=raw_score,
            scaled_score=scaled_rounded,
            board_grade=NOT_APPLICABLE,
            school_percent=0.0,
            school_grade=NOT_APPLICABLE,
            method="no_boundary",
        )

    school_range = find_school_range(boundary.grade, school_grading)
    if school_range is None:
        # Label vocabularies differ: use the share of the board maximum
        if board.max_score > 0:
            fallback = round1(scaled / board.max_score * 100)
        else:
            fallback = 0.0
        logger.debug(
            "No school range labelled %r in %r; using %.1f%% of board maximum",
            boundary.grade, school_grading.name, fallback,
        )
        return CurvedGradeResult(
            raw_score=raw_score,
            scaled_score=scaled_rounded,
            board_grade=boundary.grade,
            school_percent=fallback,
            school_grade=classify_percent(fallback, school_grading),
            method="board_percent",
        )

    upper = next_boundary_min(boundary, board.boundaries, board.max_score)
    percent = interpolate_percent(scaled, boundary.min_score, upper, school_range)

    return CurvedGradeResult(
        raw_score=raw_score,
        scaled_score=scaled_rounded,
        board_grade=boundary.grade,
        school_percent=percent,
        school_grade=classify_percent(percent, school_grading),
    )


def curve_grades(
    scores: Iterable[StudentScore],
    internal_max: float,
    board: ExamBoard,
    school_grading: SchoolGradingSystem,
) -> list[StudentCurvedGrade]:
    """Curve every score independently, preserving input order."""
    return [
        StudentCurvedGrade.for_student(
            score,
            curve_grade(score.raw_score, internal_max, board, school_grading),
        )
        for score in scores
    ]
