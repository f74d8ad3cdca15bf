"""Tests for class-level statistics."""

import pytest

from gradecurve.models import CurvedGradeResult
from gradecurve.stats import CurveSummary, class_average, grade_distribution, summarize


def _result(percent, school="A", board="A", method="interpolated"):
    return CurvedGradeResult(
        raw_score=0.0,
        scaled_score=0.0,
        board_grade=board,
        school_percent=percent,
        school_grade=school,
        method=method,
    )


class TestClassAverage:

    def test_empty(self):
        assert class_average([]) == 0.0

    def test_rounds_to_one_decimal(self):
        assert class_average([_result(80.0), _result(80.1), _result(80.1)]) == 80.1

    def test_mean(self):
        assert class_average([_result(60.0), _result(70.0), _result(95.0)]) == 75.0


class TestGradeDistribution:

    def test_first_appearance_order(self):
        results = [_result(90, "A*"), _result(85, "A"), _result(91, "A*")]
        dist = grade_distribution(results)
        assert dist == {"A*": 2, "A": 1}
        assert list(dist) == ["A*", "A"]

    def test_board_key(self):
        results = [_result(90, board="7"), _result(50, board="4")]
        assert grade_distribution(results, "board_grade") == {"7": 1, "4": 1}

    def test_unknown_key(self):
        with pytest.raises(ValueError, match="Unknown distribution key"):
            grade_distribution([], "student_name")


class TestSummarize:

    def test_empty(self):
        summary = summarize([])
        assert summary == CurveSummary()
        assert summary.to_dict()["total"] == 0

    def test_counts(self):
        results = [
            _result(89.9, "A", "A"),
            _result(95.0, "A*", "7", method="board_percent"),
            _result(0.0, "N/A", "N/A", method="no_boundary"),
        ]
        summary = summarize(results)
        assert summary.total == 3
        assert summary.fallback_count == 1
        assert summary.not_applicable_count == 1
        assert summary.board_distribution == {"A": 1, "7": 1, "N/A": 1}
        assert summary.class_average == 61.6

    def test_to_dict_copies(self):
        summary = summarize([_result(50, "D")])
        data = summary.to_dict()
        data["school_distribution"]["D"] = 99
        assert summary.school_distribution == {"D": 1}
