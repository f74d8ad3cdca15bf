"""Parallel batch curving.

Every record is curved independently, so a batch can be split into chunks and
curved on a thread pool.  Output order always matches input order and the
results are identical to ``curve_grades``.
"""

from __future__ import annotations

import logging
from concurrent.futures import ThreadPoolExecutor
from dataclasses import dataclass
from typing import Sequence

from .engine.core import curve_grades
from .models import ExamBoard, SchoolGradingSystem, StudentCurvedGrade, StudentScore

logger = logging.getLogger(__name__)


@dataclass
class ChunkConfig:
    """How a batch is split across workers."""
    chunk_size: int = 500
    min_parallel_batch: int = 1000  # smaller batches run inline


def partition(scores: Sequence[StudentScore], chunk_size: int) -> list[Sequence[StudentScore]]:
    """Split *scores* into consecutive chunks of at most *chunk_size*."""
    if chunk_size < 1:
        raise ValueError(f"chunk_size must be at least 1, got {chunk_size}")
    return [scores[i:i + chunk_size] for i in range(0, len(scores), chunk_size)]


class ParallelCurver:
    """Curves large batches across a thread pool."""

    def __init__(
        self,
        max_workers: int = 4,
        chunk_config: ChunkConfig | None = None,
    ):
        if max_workers < 1:
            raise ValueError(f"max_workers must be at least 1, got {max_workers}")
        self.max_workers = max_workers
        self.chunk_config = chunk_config or ChunkConfig()

    def curve_all(
        self,
        scores: Sequence[StudentScore],
        internal_max: float,
        board: ExamBoard,
        school_grading: SchoolGradingSystem,
    ) -> list[StudentCurvedGrade]:
        """Curve all scores, return results in input order."""
        scores = list(scores)
        cfg = self.chunk_config

        if self.max_workers == 1 or len(scores) < cfg.min_parallel_batch:
            return curve_grades(scores, internal_max, board, school_grading)

        chunks = partition(scores, cfg.chunk_size)
        logger.debug(
            "Curving %d scores in %d chunks on %d workers",
            len(scores), len(chunks), self.max_workers,
        )

        with ThreadPoolExecutor(max_workers=self.max_workers) as executor:
            # map() yields in submission order, which keeps results aligned
            chunk_results = executor.map(
                lambda chunk: curve_grades(chunk, internal_max, board, school_grading),
                chunks,
            )
            results: list[StudentCurvedGrade] = []
            for chunk_result in chunk_results:
                results.extend(chunk_result)
        return results
