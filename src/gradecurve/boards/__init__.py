"""Exam boards, school grading systems, and their registry."""

from .presets import (
    IGCSE_COMPUTER_SCIENCE,
    CAMBRIDGE_AS_LEVEL,
    CAMBRIDGE_A_LEVEL,
    IB_DIPLOMA,
    PRESET_BOARDS,
    DEFAULT_SCHOOL_GRADING,
    IB_SCHOOL_GRADING,
    get_preset_board_by_name,
    create_custom_board,
    create_custom_school_grading,
)
from .registry import (
    register_board,
    get_board,
    list_boards,
    get_board_info,
    get_school_grading,
    list_school_gradings,
    school_grading_for_board,
)
from .validation import ConfigIssue, validate_board, validate_school_grading, has_errors

__all__ = [
    "IGCSE_COMPUTER_SCIENCE",
    "CAMBRIDGE_AS_LEVEL",
    "CAMBRIDGE_A_LEVEL",
    "IB_DIPLOMA",
    "PRESET_BOARDS",
    "DEFAULT_SCHOOL_GRADING",
    "IB_SCHOOL_GRADING",
    "get_preset_board_by_name",
    "create_custom_board",
    "create_custom_school_grading",
    "register_board",
    "get_board",
    "list_boards",
    "get_board_info",
    "get_school_grading",
    "list_school_gradings",
    "school_grading_for_board",
    "ConfigIssue",
    "validate_board",
    "validate_school_grading",
    "has_errors",
]
