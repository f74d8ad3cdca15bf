"""CurvingPipeline: one board and one school scale, applied to many scores.

The pipeline is a convenience wrapper around ``engine.core``: it binds the
configuration once and optionally records every result to a ``RunLogger``.

Usage::

    pipeline = CurvingPipeline(board, DEFAULT_SCHOOL_GRADING, internal_max=80)

    result = pipeline.curve_one(64)
    results = pipeline.curve(scores)
    summary = pipeline.summarize(results)
"""

from __future__ import annotations

from typing import Iterable

from ..logging import RunLogger
from ..models import (
    CurvedGradeResult,
    ExamBoard,
    SchoolGradingSystem,
    StudentCurvedGrade,
    StudentScore,
)
from ..stats import CurveSummary, summarize
from .core import curve_grade, curve_grades


class CurvingPipeline:
    """Curves scores against a fixed board and school grading system."""

    def __init__(
        self,
        board: ExamBoard,
        school_grading: SchoolGradingSystem,
        internal_max: float = 100,
        logger: RunLogger | None = None,
        max_workers: int = 1,
    ):
        """
        Args:
            board: Exam board to scale onto.
            school_grading: School scale board grades are mapped onto.
            internal_max: Maximum attainable internal score.
            logger: Optional run log; receives one ``record_curved`` event
                per result.
            max_workers: Threads used for large batches (1 = sequential).
        """
        self.board = board
        self.school_grading = school_grading
        self.internal_max = internal_max
        self.logger = logger
        self.max_workers = max_workers

    def curve_one(self, raw_score: float) -> CurvedGradeResult:
        return curve_grade(raw_score, self.internal_max, self.board, self.school_grading)

    def curve(self, scores: Iterable[StudentScore]) -> list[StudentCurvedGrade]:
        """Curve *scores*, returning results in input order."""
        scores = list(scores)
        if self.logger:
            self.logger.log(
                "curve_started",
                board=self.board.id or self.board.name,
                school_grading=self.school_grading.name,
                internal_max=self.internal_max,
                num_scores=len(scores),
            )

        if self.max_workers > 1:
            from ..parallel import ParallelCurver
            results = ParallelCurver(self.max_workers).curve_all(
                scores, self.internal_max, self.board, self.school_grading,
            )
        else:
            results = curve_grades(scores, self.internal_max, self.board, self.school_grading)

        if self.logger:
            for result in results:
                self.logger.log_result(result)
            self.logger.log("curve_finished", summary=summarize(results).to_dict())
        return results

    def summarize(self, results: list[StudentCurvedGrade]) -> CurveSummary:
        return summarize(results)
