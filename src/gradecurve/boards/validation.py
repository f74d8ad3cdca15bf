"""Advisory checks for authored boards and grading systems.

The engine accepts any configuration and degrades gracefully, so nothing here
raises.  These checks are for whoever edits a configuration: they report the
problems an editor would want to see before saving (the board editor's
"Invalid Order!" warning, a non-positive maximum, and so on).
"""

from __future__ import annotations

from dataclasses import dataclass

from ..models import ExamBoard, SchoolGradingSystem

ERROR = "error"
WARNING = "warning"

# Largest gap between adjacent school ranges that is not reported.  Ranges
# are written to one decimal (80-89.9, 90-100).
_GAP_TOLERANCE = 0.1 + 1e-9


@dataclass(frozen=True)
class ConfigIssue:
    level: str  # "error" | "warning"
    message: str

    def __str__(self) -> str:
        return f"{self.level}: {self.message}"


def has_errors(issues: list[ConfigIssue]) -> bool:
    return any(i.level == ERROR for i in issues)


def validate_board(board: ExamBoard) -> list[ConfigIssue]:
    """Check *board* for problems; returns an empty list when it is clean."""
    issues: list[ConfigIssue] = []

    if not board.max_score > 0:
        issues.append(ConfigIssue(ERROR, f"max score must be greater than 0 (got {board.max_score})"))

    if not board.boundaries:
        issues.append(ConfigIssue(WARNING, "board has no grade boundaries; every score grades as N/A"))
        return issues

    seen: set[str] = set()
    for b in board.boundaries:
        if b.grade in seen:
            issues.append(ConfigIssue(ERROR, f"duplicate grade label {b.grade!r}"))
        seen.add(b.grade)

    for prev, cur in zip(board.boundaries, board.boundaries[1:]):
        if cur.min_score >= prev.min_score:
            issues.append(ConfigIssue(
                WARNING,
                f"invalid order: {cur.grade!r} ({cur.min_score:g}) is not below "
                f"{prev.grade!r} ({prev.min_score:g})",
            ))

    for b in board.boundaries:
        if b.min_score < 0 or (board.max_score > 0 and b.min_score > board.max_score):
            issues.append(ConfigIssue(
                WARNING,
                f"boundary {b.grade!r} ({b.min_score:g}) is outside 0-{board.max_score:g}",
            ))

    return issues


def validate_school_grading(system: SchoolGradingSystem) -> list[ConfigIssue]:
    """Check a school grading system for bad, overlapping or gapped ranges."""
    issues: list[ConfigIssue] = []

    if not system.grades:
        issues.append(ConfigIssue(WARNING, "grading system has no ranges; every grade is N/A"))
        return issues

    seen: set[str] = set()
    for g in system.grades:
        if g.label in seen:
            issues.append(ConfigIssue(ERROR, f"duplicate grade label {g.label!r}"))
        seen.add(g.label)
        if g.min_percent > g.max_percent:
            issues.append(ConfigIssue(
                ERROR,
                f"range {g.label!r} has min {g.min_percent:g} above max {g.max_percent:g}",
            ))
        if g.min_percent < 0 or g.max_percent > 100:
            issues.append(ConfigIssue(WARNING, f"range {g.label!r} extends outside 0-100"))

    ordered = sorted(
        (g for g in system.grades if g.min_percent <= g.max_percent),
        key=lambda g: (g.min_percent, g.max_percent),
    )
    for lower, upper in zip(ordered, ordered[1:]):
        if upper.min_percent <= lower.max_percent:
            issues.append(ConfigIssue(
                WARNING,
                f"ranges {lower.label!r} and {upper.label!r} overlap",
            ))
        elif upper.min_percent - lower.max_percent > _GAP_TOLERANCE:
            issues.append(ConfigIssue(
                WARNING,
                f"gap between {lower.label!r} (max {lower.max_percent:g}) and "
                f"{upper.label!r} (min {upper.min_percent:g})",
            ))

    return issues
