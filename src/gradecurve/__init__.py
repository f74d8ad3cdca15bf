"""Grade curving - scale raw scores onto exam-board grades and school percentages."""

__version__ = "0.1.0"

from .models import (
    GradeBoundary,
    ExamBoard,
    SchoolGradeRange,
    SchoolGradingSystem,
    StudentScore,
    CurvedGradeResult,
    StudentCurvedGrade,
    NOT_APPLICABLE,
)
from .engine import CurvingPipeline, curve_grade, curve_grades
from .stats import CurveSummary, summarize
from .export import to_csv

__all__ = [
    "GradeBoundary", "ExamBoard", "SchoolGradeRange", "SchoolGradingSystem",
    "StudentScore", "CurvedGradeResult", "StudentCurvedGrade", "NOT_APPLICABLE",
    "CurvingPipeline", "curve_grade", "curve_grades",
    "CurveSummary", "summarize", "to_csv",
    "__version__",
]
