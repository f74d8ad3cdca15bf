"""Tests for CSV/JSON export and score/config file loading."""

import json
from datetime import date

import pytest

from gradecurve.boards.presets import DEFAULT_SCHOOL_GRADING, IGCSE_COMPUTER_SCIENCE
from gradecurve.engine import curve_grades
from gradecurve.export import (
    CSV_HEADERS,
    default_export_name,
    format_value,
    load_board,
    load_school_grading,
    load_scores,
    save_results_json,
    to_csv,
    write_csv,
)
from gradecurve.models import StudentScore


def _curve(*scores):
    return curve_grades(list(scores), 100, IGCSE_COMPUTER_SCIENCE, DEFAULT_SCHOOL_GRADING)


# ============================================================================
# CSV export
# ============================================================================

class TestFormatValue:

    def test_whole_float(self):
        assert format_value(60.0) == "60"

    def test_decimal(self):
        assert format_value(89.9) == "89.9"

    def test_text(self):
        assert format_value("A*") == "A*"


class TestToCsv:

    def test_header_only(self):
        assert to_csv([]) == ",".join(CSV_HEADERS) + "\n"

    def test_row_quoting(self):
        results = _curve(StudentScore("s1", "Smith, Jo", 80))
        lines = to_csv(results).split("\n")
        assert lines[0] == "Student Name,Raw Score,Scaled Score,Board Grade,School %,School Grade"
        assert lines[1] == '"Smith, Jo",80,60,A,89.9,A'
        assert lines[2] == ""

    def test_inner_quotes_doubled(self):
        results = _curve(StudentScore("s1", 'Jo "JJ" Smith', 100))
        row = to_csv(results).split("\n")[1]
        assert row == '"Jo ""JJ"" Smith",100,75,A*,100,A*'

    def test_plain_name_unquoted(self):
        row = to_csv(_curve(StudentScore("s1", "Ada", 0))).split("\n")[1]
        assert row == "Ada,0,0,U,0,F"

    def test_newline_quoted(self):
        results = _curve(StudentScore("s1", "Jo\nSmith", 80))
        body = to_csv(results).split("\n", 1)[1]
        assert body == '"Jo\nSmith",80,60,A,89.9,A\n'

    def test_one_row_per_result(self):
        results = _curve(*[StudentScore(f"s{i}", f"S{i}", i * 10) for i in range(5)])
        assert to_csv(results).count("\n") == 6


class TestWriteFiles:

    def test_default_export_name(self):
        assert default_export_name(date(2024, 3, 7)) == "curved_grades_2024-03-07.csv"

    def test_write_csv(self, tmp_path):
        results = _curve(StudentScore("s1", "Ada", 80))
        path = write_csv(results, tmp_path / "out" / "grades.csv")
        assert path.read_text(encoding="utf-8") == to_csv(results)

    def test_write_csv_keeps_lf_line_endings(self, tmp_path):
        results = _curve(StudentScore("s1", "Ada", 80), StudentScore("s2", "Ben", 40))
        data = write_csv(results, tmp_path / "grades.csv").read_bytes()
        assert b"\r\n" not in data
        assert data.count(b"\n") == 3

    def test_save_results_json(self, tmp_path):
        results = _curve(StudentScore("s1", "Ada", 80), StudentScore("s2", "Ben", 100))
        path = save_results_json(results, tmp_path / "results.json")
        data = json.loads(path.read_text())
        assert data["summary"]["total"] == 2
        assert data["results"][0]["studentName"] == "Ada"
        assert data["results"][0]["schoolPercent"] == 89.9
        assert data["results"][1]["boardGrade"] == "A*"


# ============================================================================
# Input files
# ============================================================================

class TestLoadScores:

    def test_csv(self, tmp_path):
        path = tmp_path / "scores.csv"
        path.write_text("student_id,student_name,raw_score\ns1,Ada,80\ns2,\"Smith, Jo\",55.5\n")
        scores = load_scores(path)
        assert scores == [
            StudentScore("s1", "Ada", 80.0),
            StudentScore("s2", "Smith, Jo", 55.5),
        ]

    def test_csv_display_headers_with_bom(self, tmp_path):
        path = tmp_path / "export.csv"
        path.write_text("Student Name,Raw Score\nAda,70\nBen,oops\n", encoding="utf-8-sig")
        scores = load_scores(path)
        assert [s.student_name for s in scores] == ["Ada", "Ben"]
        assert [s.student_id for s in scores] == ["manual-1", "manual-2"]
        assert scores[1].raw_score == 0.0

    def test_csv_without_name_column(self, tmp_path):
        path = tmp_path / "bad.csv"
        path.write_text("who,what\nAda,80\n")
        with pytest.raises(ValueError, match="no student name column"):
            load_scores(path)

    def test_jsonl(self, tmp_path):
        path = tmp_path / "scores.jsonl"
        path.write_text(
            json.dumps({"studentId": "s1", "studentName": "Ada", "rawScore": 80}) + "\n\n"
            + json.dumps({"student_name": "Ben", "raw_score": 60}) + "\n"
        )
        scores = load_scores(path)
        assert scores[0] == StudentScore("s1", "Ada", 80.0)
        assert scores[1] == StudentScore("manual-2", "Ben", 60.0)

    def test_json_list(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps([{"name": "Ada", "score": 42}]))
        assert load_scores(path) == [StudentScore("manual-1", "Ada", 42.0)]

    def test_json_object(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"scores": [{"id": "x", "name": "Ada", "score": "7"}]}))
        assert load_scores(path) == [StudentScore("x", "Ada", 7.0)]

    def test_jsonl_row_not_an_object(self, tmp_path):
        path = tmp_path / "scores.jsonl"
        path.write_text(json.dumps({"name": "Ada", "score": 80}) + "\n[1, 2]\n")
        with pytest.raises(ValueError, match="row 2 is not an object"):
            load_scores(path)

    def test_json_scores_not_a_list(self, tmp_path):
        path = tmp_path / "scores.json"
        path.write_text(json.dumps({"scores": 5}))
        with pytest.raises(ValueError, match="expected a list"):
            load_scores(path)

    def test_unsupported_extension(self, tmp_path):
        path = tmp_path / "scores.txt"
        path.write_text("Ada 80\n")
        with pytest.raises(ValueError, match="Unsupported"):
            load_scores(path)


class TestLoadConfig:

    def test_load_board_stored_format(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text(json.dumps({
            "id": "mock",
            "name": "Mock Exam",
            "maxScore": 60,
            "boundaries": [{"grade": "A", "minScore": 45}, {"grade": "U", "minScore": 0}],
        }))
        board = load_board(path)
        assert board.id == "mock"
        assert board.max_score == 60.0
        assert [b.grade for b in board.boundaries] == ["A", "U"]

    def test_load_board_id_from_filename(self, tmp_path):
        path = tmp_path / "year10.json"
        path.write_text(json.dumps({"maxScore": 50, "boundaries": []}))
        board = load_board(path)
        assert board.id == "year10"
        assert board.name == "year10"

    def test_load_board_rejects_non_object(self, tmp_path):
        path = tmp_path / "board.json"
        path.write_text("[]")
        with pytest.raises(ValueError, match="expected a JSON object"):
            load_board(path)

    def test_load_school_grading(self, tmp_path):
        path = tmp_path / "grading.json"
        path.write_text(json.dumps({
            "name": "Pass/Fail",
            "grades": [
                {"label": "Pass", "minPercent": 50, "maxPercent": 100},
                {"label": "Fail", "min_percent": 0, "max_percent": 49.9},
            ],
        }))
        grading = load_school_grading(path)
        assert grading.name == "Pass/Fail"
        assert grading.grades[1].max_percent == 49.9

    def test_load_school_grading_rejects_non_object(self, tmp_path):
        path = tmp_path / "grading.json"
        path.write_text('"standard"')
        with pytest.raises(ValueError):
            load_school_grading(path)
