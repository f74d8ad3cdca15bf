"""Grade curving engine.

Pure stage functions live in ``core``; ``CurvingPipeline`` binds a board and
school grading system for repeated use.
"""

from .core import (
    scale_score,
    find_board_grade,
    next_boundary_min,
    find_school_range,
    interpolate_percent,
    classify_percent,
    curve_grade,
    curve_grades,
    round1,
)
from .pipeline import CurvingPipeline

__all__ = [
    "CurvingPipeline",
    "scale_score",
    "find_board_grade",
    "next_boundary_min",
    "find_school_range",
    "interpolate_percent",
    "classify_percent",
    "curve_grade",
    "curve_grades",
    "round1",
]
