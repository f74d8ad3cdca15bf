"""Board registry - look up exam boards and school grading systems by id."""

from typing import Any

from ..models import ExamBoard, SchoolGradingSystem
from .presets import DEFAULT_SCHOOL_GRADING, IB_SCHOOL_GRADING, PRESET_BOARDS

# Registry of available boards, keyed by board id
_BOARDS: dict[str, ExamBoard] = {}

_SCHOOL_GRADINGS: dict[str, SchoolGradingSystem] = {
    "standard": DEFAULT_SCHOOL_GRADING,
    "ib": IB_SCHOOL_GRADING,
}


def register_board(board: ExamBoard) -> ExamBoard:
    """Add *board* to the registry (replacing any board with the same id)."""
    _ensure_registered()
    if not board.id:
        raise ValueError("Board id cannot be empty")
    _BOARDS[board.id] = board
    return board


def get_board(board_id: str) -> ExamBoard:
    """
    Look up a board by id.

    Args:
        board_id: Board id (e.g., "igcse-cs", "ib-diploma")

    Returns:
        ExamBoard

    Raises:
        ValueError: If no board is registered under *board_id*
    """
    _ensure_registered()

    if board_id not in _BOARDS:
        available = ", ".join(sorted(_BOARDS.keys()))
        raise ValueError(f"Unknown board: {board_id}. Available: {available}")

    return _BOARDS[board_id]


def list_boards() -> list[str]:
    """Return list of registered board ids."""
    _ensure_registered()
    return sorted(_BOARDS.keys())


def get_board_info(board_id: str) -> dict[str, Any]:
    """Get display info about a board; empty dict if unknown."""
    _ensure_registered()

    board = _BOARDS.get(board_id)
    if board is None:
        return {}

    return {
        "id": board.id,
        "name": board.name,
        "max_score": board.max_score,
        "grades": [b.grade for b in board.boundaries],
    }


def get_school_grading(name: str) -> SchoolGradingSystem:
    """Look up a preset school grading system ("standard" or "ib")."""
    if name not in _SCHOOL_GRADINGS:
        available = ", ".join(sorted(_SCHOOL_GRADINGS.keys()))
        raise ValueError(f"Unknown school grading: {name}. Available: {available}")
    return _SCHOOL_GRADINGS[name]


def list_school_gradings() -> list[str]:
    return sorted(_SCHOOL_GRADINGS.keys())


def school_grading_for_board(
    board: ExamBoard,
    default: SchoolGradingSystem = DEFAULT_SCHOOL_GRADING,
) -> SchoolGradingSystem:
    """Pick the school scale whose labels match *board*.

    IB boards grade 7-1, so they pair with the IB scale; everything else uses
    *default*.
    """
    if "IB" in board.name:
        return IB_SCHOOL_GRADING
    return default


def _ensure_registered():
    """Ensure all preset boards are registered."""
    if _BOARDS:
        return

    for board in PRESET_BOARDS:
        _BOARDS[board.id] = board
