"""JSONL run logging for curving runs.

Each curving run can be recorded to a JSONL file, one event per line::

    {"timestamp": ..., "run_id": "1a2b3c4d", "type": "curve_started", "board": "igcse-cs", ...}
    {"timestamp": ..., "run_id": "1a2b3c4d", "type": "record_curved", "student_id": "s1", ...}
    {"timestamp": ..., "run_id": "1a2b3c4d", "type": "curve_finished", "summary": {...}}

The engine itself never writes anything; ``CurvingPipeline`` and the CLI
emit events when they are handed a ``RunLogger``.
"""

import json
import time
from dataclasses import dataclass, field
from pathlib import Path
from typing import Any, TextIO

from .models import StudentCurvedGrade


@dataclass
class RunLogger:
    """Appends curving events to a JSONL file."""

    output_path: Path
    run_id: str
    _file: TextIO = field(init=False, repr=False)
    _closed: bool = field(init=False, default=False)

    def __post_init__(self):
        self.output_path = Path(self.output_path)
        self.output_path.parent.mkdir(parents=True, exist_ok=True)
        self._file = open(self.output_path, "a", encoding="utf-8")

    def log(self, event_type: str, **data: Any) -> None:
        """Log a single event."""
        self._write({
            "timestamp": time.time(),
            "run_id": self.run_id,
            "type": event_type,
            **data,
        })

    def log_result(self, result: StudentCurvedGrade) -> None:
        """Log one curved record."""
        self.log(
            "record_curved",
            student_id=result.student_id,
            student_name=result.student_name,
            raw_score=result.raw_score,
            scaled_score=result.scaled_score,
            board_grade=result.board_grade,
            school_percent=result.school_percent,
            school_grade=result.school_grade,
            method=result.method,
        )

    def _write(self, record: dict) -> None:
        if self._closed:
            return
        self._file.write(json.dumps(record) + "\n")
        self._file.flush()

    def close(self) -> None:
        if not self._closed:
            self._file.close()
            self._closed = True

    def __enter__(self) -> "RunLogger":
        return self

    def __exit__(self, *args) -> None:
        self.close()


def read_run_log(path: Path) -> list[dict]:
    """Load every event from a run log, skipping blank lines."""
    events = []
    with open(path, encoding="utf-8") as f:
        for line in f:
            line = line.strip()
            if line:
                events.append(json.loads(line))
    return events
