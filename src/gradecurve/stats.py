"""Aggregate statistics over curved results.

The engine keeps no state between records, so anything class-wide (average,
distribution histogram) is computed here over the returned list.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from typing import Sequence

from .models import NOT_APPLICABLE, CurvedGradeResult, round1


@dataclass
class CurveSummary:
    """Class-level view of a curving run."""
    total: int = 0
    class_average: float = 0.0
    school_distribution: dict[str, int] = field(default_factory=dict)
    board_distribution: dict[str, int] = field(default_factory=dict)
    fallback_count: int = 0         # label-mismatch records
    not_applicable_count: int = 0   # records with no board grade

    def to_dict(self) -> dict:
        return {
            "total": self.total,
            "class_average": self.class_average,
            "school_distribution": dict(self.school_distribution),
            "board_distribution": dict(self.board_distribution),
            "fallback_count": self.fallback_count,
            "not_applicable_count": self.not_applicable_count,
        }


def class_average(results: Sequence[CurvedGradeResult]) -> float:
    """Mean school percentage rounded to one decimal (0 when empty)."""
    if not results:
        return 0.0
    return round1(sum(r.school_percent for r in results) / len(results))


def grade_distribution(
    results: Sequence[CurvedGradeResult],
    key: str = "school_grade",
) -> dict[str, int]:
    """Count results per label, in the order labels first appear.

    *key* is ``"school_grade"`` or ``"board_grade"``.
    """
    if key not in ("school_grade", "board_grade"):
        raise ValueError(f"Unknown distribution key: {key!r}")
    distribution: dict[str, int] = {}
    for r in results:
        label = getattr(r, key)
        distribution[label] = distribution.get(label, 0) + 1
    return distribution


def summarize(results: Sequence[CurvedGradeResult]) -> CurveSummary:
    return CurveSummary(
        total=len(results),
        class_average=class_average(results),
        school_distribution=grade_distribution(results, "school_grade"),
        board_distribution=grade_distribution(results, "board_grade"),
        fallback_count=sum(1 for r in results if r.method == "board_percent"),
        not_applicable_count=sum(1 for r in results if r.board_grade == NOT_APPLICABLE),
    )
