"""Value objects for grade curving.

Boards and grading systems are configured (and persisted) elsewhere and
arrive here as plain dicts in the stored camelCase shape::

    {"name": "IGCSE Computer Science", "maxScore": 75,
     "boundaries": [{"grade": "A*", "minScore": 61}, ...]}

Every type is a frozen dataclass holding tuples, so a configuration cannot be
edited in place while a batch is being curved.
"""

from __future__ import annotations

import math
from dataclasses import dataclass
from typing import Any

# Label used wherever a grade cannot be determined.
NOT_APPLICABLE = "N/A"


def _pick(d: dict, *keys: str, default: Any = None) -> Any:
    """Return the first key present in *d* (camelCase or snake_case)."""
    for key in keys:
        if key in d and d[key] is not None:
            return d[key]
    return default


def _number(value: Any, default: float = 0.0) -> float:
    try:
        return float(value)
    except (TypeError, ValueError):
        return default


def round1(value: float) -> float:
    """Round half-up to one decimal place; non-finite values become 0."""
    if not math.isfinite(value):
        return 0.0
    return math.floor(value * 10 + 0.5) / 10


@dataclass(frozen=True)
class GradeBoundary:
    """Inclusive lower bound of one board grade on the board's own scale."""
    grade: str
    min_score: float

    @classmethod
    def from_dict(cls, d: dict) -> "GradeBoundary":
        return cls(
            grade=str(_pick(d, "grade", "label", default="")),
            min_score=_number(_pick(d, "minScore", "min_score")),
        )

    def to_dict(self) -> dict:
        return {"grade": self.grade, "minScore": self.min_score}


@dataclass(frozen=True)
class ExamBoard:
    """An examination board's scale and its grade boundaries.

    ``boundaries`` is kept in the order it was configured; the engine sorts a
    private copy whenever it needs descending order.
    """
    id: str
    name: str
    max_score: float
    boundaries: tuple[GradeBoundary, ...] = ()

    def __post_init__(self):
        # Accept any iterable but always store a tuple
        object.__setattr__(self, "boundaries", tuple(self.boundaries))

    @classmethod
    def from_dict(cls, d: dict) -> "ExamBoard":
        return cls(
            id=str(_pick(d, "id", default="")),
            name=str(_pick(d, "name", default="")),
            max_score=_number(_pick(d, "maxScore", "max_score")),
            boundaries=tuple(
                GradeBoundary.from_dict(b) for b in _pick(d, "boundaries", default=[])
            ),
        )

    def to_dict(self) -> dict:
        return {
            "id": self.id,
            "name": self.name,
            "maxScore": self.max_score,
            "boundaries": [b.to_dict() for b in self.boundaries],
        }


@dataclass(frozen=True)
class SchoolGradeRange:
    """One label of a school's percentage scale, inclusive at both ends."""
    label: str
    min_percent: float
    max_percent: float

    def contains(self, percent: float) -> bool:
        return self.min_percent <= percent <= self.max_percent

    @classmethod
    def from_dict(cls, d: dict) -> "SchoolGradeRange":
        return cls(
            label=str(_pick(d, "label", "grade", default="")),
            min_percent=_number(_pick(d, "minPercent", "min_percent")),
            max_percent=_number(_pick(d, "maxPercent", "max_percent")),
        )

    def to_dict(self) -> dict:
        return {
            "label": self.label,
            "minPercent": self.min_percent,
            "maxPercent": self.max_percent,
        }


@dataclass(frozen=True)
class SchoolGradingSystem:
    """An institution's percentage-to-grade mapping."""
    name: str
    grades: tuple[SchoolGradeRange, ...] = ()

    def __post_init__(self):
        object.__setattr__(self, "grades", tuple(self.grades))

    @classmethod
    def from_dict(cls, d: dict) -> "SchoolGradingSystem":
        return cls(
            name=str(_pick(d, "name", default="")),
            grades=tuple(
                SchoolGradeRange.from_dict(g) for g in _pick(d, "grades", default=[])
            ),
        )

    def to_dict(self) -> dict:
        return {"name": self.name, "grades": [g.to_dict() for g in self.grades]}


@dataclass(frozen=True)
class StudentScore:
    """A raw score for one student, supplied per curving run."""
    student_id: str
    student_name: str
    raw_score: float

    @classmethod
    def from_dict(cls, d: dict) -> "StudentScore":
        return cls(
            student_id=str(_pick(d, "studentId", "student_id", default="")),
            student_name=str(_pick(d, "studentName", "student_name", default="")),
            raw_score=_number(_pick(d, "rawScore", "raw_score")),
        )


@dataclass(frozen=True)
class CurvedGradeResult:
    """Outcome of curving a single raw score."""
    raw_score: float
    scaled_score: float
    board_grade: str
    school_percent: float
    school_grade: str
    method: str = "interpolated"  # interpolated, board_percent, no_boundary, invalid_max

    def to_dict(self) -> dict:
        return {
            "rawScore": self.raw_score,
            "scaledScore": self.scaled_score,
            "boardGrade": self.board_grade,
            "schoolPercent": self.school_percent,
            "schoolGrade": self.school_grade,
            "method": self.method,
        }


@dataclass(frozen=True)
class StudentCurvedGrade(CurvedGradeResult):
    """A ``CurvedGradeResult`` carrying the student's identity."""
    student_id: str = ""
    student_name: str = ""

    @classmethod
    def for_student(cls, score: StudentScore, result: CurvedGradeResult) -> "StudentCurvedGrade":
        return cls(
            raw_score=result.raw_score,
            scaled_score=result.scaled_score,
            board_grade=result.board_grade,
            school_percent=result.school_percent,
            school_grade=result.school_grade,
            method=result.method,
            student_id=score.student_id,
            student_name=score.student_name,
        )

    def to_dict(self) -> dict:
        return {
            "studentId": self.student_id,
            "studentName": self.student_name,
            **super().to_dict(),
        }
